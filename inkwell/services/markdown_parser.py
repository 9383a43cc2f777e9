import copy
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional
from xml.etree import ElementTree as etree

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

logger = logging.getLogger(__name__)

# Runs after the inline and unescape passes, so the captured tree holds final text
CAPTURE_PRIORITY = -10


@dataclass
class ParsedMarkdown:
    """Element tree of a markdown document plus the raw HTML its placeholders point at."""

    root: Optional[etree.Element]
    stash: List[str] = field(default_factory=list)
    block_level: FrozenSet[str] = frozenset()


class CaptureTreeprocessor(Treeprocessor):
    def run(self, root):
        self.md.captured_root = copy.deepcopy(root)


class CaptureTreeExtension(Extension):
    def extendMarkdown(self, md):
        md.treeprocessors.register(
            CaptureTreeprocessor(md), "capture_tree", CAPTURE_PRIORITY
        )


def build_markdown(math_enabled: bool = True) -> markdown.Markdown:
    extensions = ["fenced_code", CaptureTreeExtension()]
    extension_configs = {}
    if math_enabled:
        extensions.append("pymdownx.arithmatex")
        extension_configs["pymdownx.arithmatex"] = {"generic": True}
    return markdown.Markdown(
        extensions=extensions, extension_configs=extension_configs
    )


def parse_markdown(text: str, math_enabled: bool = True) -> ParsedMarkdown:
    # Markdown instances carry per-document state, so each call gets its own
    md = build_markdown(math_enabled)
    md.captured_root = None
    md.convert(text)
    stash = [
        block if isinstance(block, str) else etree.tostring(block, encoding="unicode")
        for block in md.htmlStash.rawHtmlBlocks
    ]
    logger.debug(f"Parsed markdown with {len(stash)} stashed blocks")
    return ParsedMarkdown(
        root=md.captured_root,
        stash=stash,
        block_level=frozenset(md.block_level_elements),
    )
