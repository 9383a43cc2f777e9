import logging
import re
from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

LANGUAGE_RE = re.compile(r"language-(\w+)", re.ASCII)
FALLBACK_STYLE = "default"


def extract_language(class_name: Optional[str]) -> Optional[str]:
    """Return ``cpp`` for a fence annotated ``language-cpp``, None when untagged."""
    match = LANGUAGE_RE.search(class_name or "")
    return match.group(1) if match else None


def trim_trailing_newline(code: str) -> str:
    return code[:-1] if code.endswith("\n") else code


class CodeHighlighter:
    def __init__(self, style: str = "material"):
        try:
            self.formatter = HtmlFormatter(style=style, cssclass="highlight")
            self.style = style
        except ClassNotFound:
            logger.warning(f"Unknown highlight style {style!r}, using {FALLBACK_STYLE}")
            self.formatter = HtmlFormatter(style=FALLBACK_STYLE, cssclass="highlight")
            self.style = FALLBACK_STYLE

    def highlight(self, code: str, language: str) -> Optional[str]:
        """Highlighted HTML for ``code``, or None when the language is not recognized."""
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            logger.debug(f"No lexer for language {language!r}, rendering plain")
            return None
        return highlight(code, lexer, self.formatter)

    def stylesheet(self) -> str:
        return self.formatter.get_style_defs(".highlight")
