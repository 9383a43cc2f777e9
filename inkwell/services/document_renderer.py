import html
import logging
import re
from typing import Callable, Dict, List, Optional
from xml.etree import ElementTree as etree

from markdown.util import HTML_PLACEHOLDER_RE

from inkwell.schemas.document import (
    DEFAULT_THEME,
    CodeBlock,
    Document,
    DocumentTheme,
    Element,
    Heading,
    Html,
    InlineCode,
    Link,
    ListItem,
    Math,
    Node,
    OrderedList,
    Paragraph,
    Text,
    UnorderedList,
)
from inkwell.services.code_highlighter import (
    CodeHighlighter,
    extract_language,
    trim_trailing_newline,
)
from inkwell.services.markdown_parser import ParsedMarkdown, parse_markdown

logger = logging.getLogger(__name__)

STASHED_CODE_RE = re.compile(
    r"^\s*<pre[^>]*><code(?P<attrs>[^>]*)>(?P<code>.*)</code></pre>\s*$", re.DOTALL
)
CLASS_ATTR_RE = re.compile(r'class="(?P<value>[^"]*)"')
MATH_DELIMITERS_RE = re.compile(r"^\\[(\[](?P<tex>.*)\\[)\]]$", re.DOTALL)
MATH_CLASS = "arithmatex"
STASHED_MATH_RE = re.compile(
    r'^\s*<(?P<tag>span|div) class="arithmatex">(?P<markup>.*)</(?P=tag)>\s*$', re.DOTALL
)
ENTITY_RE = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[a-zA-Z][a-zA-Z0-9]*);")
# Deeper subtrees collapse to their text so the tree stays serializable
MAX_DEPTH = 64


class DocumentRenderer:
    """
    Turns a post's markdown body into a typed document tree.

    Markdown is parsed with Python-Markdown, then each element is mapped to a
    node through a table keyed by tag. Tags without an entry pass through as
    generic ``element`` nodes, so rendering never fails on unfamiliar markup.
    """

    def __init__(
        self,
        theme: DocumentTheme = DEFAULT_THEME,
        math_enabled: bool = True,
        highlighter: Optional[CodeHighlighter] = None,
    ):
        self.theme = theme
        self.math_enabled = math_enabled
        self.highlighter = highlighter or CodeHighlighter(theme.code_block.theme)
        self.code_block_style = theme.code_block.model_copy(
            update={"theme": self.highlighter.style}
        )

    def render(self, content: str) -> Document:
        try:
            return self._render(content or "")
        except Exception as e:
            logger.warning(f"Markdown rendering failed, falling back to plain text: {e}")
            return Document(
                children=[
                    Paragraph(style=self.theme.paragraph, children=[Text(text=content or "")])
                ]
            )

    def _render(self, content: str) -> Document:
        parsed = parse_markdown(content, math_enabled=self.math_enabled)
        if parsed.root is None:
            return Document()
        # Per-document state lives in the builder so one renderer serves concurrent calls
        return _TreeBuilder(self, parsed).document()


class _TreeBuilder:
    def __init__(self, renderer: DocumentRenderer, parsed: ParsedMarkdown):
        self.renderer = renderer
        self.theme = renderer.theme
        self.parsed = parsed
        self.depth = 0
        self.transforms: Dict[str, Callable[[etree.Element], Node]] = {
            "h1": self._heading,
            "h2": self._heading,
            "h3": self._heading,
            "p": self._paragraph,
            "a": self._link,
            "ol": self._ordered_list,
            "ul": self._unordered_list,
            "li": self._list_item,
            "pre": self._preformatted,
            "code": self._inline_code,
        }

    def document(self) -> Document:
        return Document(children=self.children(self.parsed.root))

    # -- tree walking --

    def convert(self, el: etree.Element) -> Node:
        if self.depth >= MAX_DEPTH:
            return Text(text=self.plain_text(el))
        self.depth += 1
        try:
            return self._convert(el)
        finally:
            self.depth -= 1

    def _convert(self, el: etree.Element) -> Node:
        if MATH_CLASS in (el.get("class") or "").split():
            return self._math(el)
        transform = self.transforms.get(el.tag)
        if transform is None:
            return self._element(el)
        return transform(el)

    def children(self, el: etree.Element) -> List[Node]:
        nodes: List[Node] = []
        first_is_block = len(el) and self._is_block(el[0])
        if el.text and not (first_is_block and not el.text.strip()):
            nodes.extend(self.text_nodes(el.text))
        for child in el:
            nodes.append(self.convert(child))
            if child.tail and not (self._is_block(child) and not child.tail.strip()):
                nodes.extend(self.text_nodes(child.tail))
        return nodes

    def text_nodes(self, text: str) -> List[Node]:
        nodes: List[Node] = []
        parts = HTML_PLACEHOLDER_RE.split(text)
        # split() alternates plain text with captured stash indexes
        for i, part in enumerate(parts):
            node = self.stashed(int(part)) if i % 2 else Text(text=part)
            if isinstance(node, Text):
                if not node.text:
                    continue
                if nodes and isinstance(nodes[-1], Text):
                    nodes[-1] = Text(text=nodes[-1].text + node.text)
                    continue
            nodes.append(node)
        return nodes

    def stashed(self, index: int) -> Node:
        raw = self.parsed.stash[index] if index < len(self.parsed.stash) else ""
        match = STASHED_CODE_RE.match(raw)
        if match:
            return self.code_block(
                html.unescape(match.group("code")), _class_of(match.group("attrs"))
            )
        match = STASHED_MATH_RE.match(raw)
        if match:
            return self.math(html.unescape(match.group("markup")), match.group("tag"))
        if ENTITY_RE.fullmatch(raw):
            return Text(text=html.unescape(raw))
        return Html(html=raw)

    def plain_text(self, el: etree.Element) -> str:
        text = "".join(el.itertext())
        text = HTML_PLACEHOLDER_RE.sub(
            lambda m: self.parsed.stash[int(m.group(1))], text
        )
        return html.unescape(text)

    def _is_block(self, el: etree.Element) -> bool:
        return el.tag in self.parsed.block_level

    # -- transforms --

    def _heading(self, el: etree.Element) -> Node:
        level = int(el.tag[1])
        return Heading(
            level=level,
            style=self.theme.headings[level],
            children=self.children(el),
        )

    def _paragraph(self, el: etree.Element) -> Node:
        children = self.children(el)
        # Fenced code and raw HTML blocks reach the tree as a paragraph holding one placeholder
        if (
            len(el) == 0
            and len(children) == 1
            and isinstance(children[0], (CodeBlock, Html, Math))
            and HTML_PLACEHOLDER_RE.fullmatch((el.text or "").strip())
        ):
            return children[0]
        return Paragraph(style=self.theme.paragraph, children=children)

    def _link(self, el: etree.Element) -> Node:
        return Link(
            href=el.get("href", ""),
            title=el.get("title"),
            style=self.theme.link,
            children=self.children(el),
        )

    def _ordered_list(self, el: etree.Element) -> Node:
        start = el.get("start")
        return OrderedList(
            start=int(start) if start and start.isdigit() else None,
            style=self.theme.lists,
            children=self.children(el),
        )

    def _unordered_list(self, el: etree.Element) -> Node:
        return UnorderedList(style=self.theme.lists, children=self.children(el))

    def _list_item(self, el: etree.Element) -> Node:
        return ListItem(children=self.children(el))

    def _preformatted(self, el: etree.Element) -> Node:
        code = el.find("code")
        if code is None:
            return self._element(el)
        return self.code_block(html.unescape(code.text or ""), code.get("class"))

    def _inline_code(self, el: etree.Element) -> Node:
        return InlineCode(code=html.unescape(el.text or ""))

    def _math(self, el: etree.Element) -> Node:
        return self.math(self.plain_text(el), el.tag)

    def math(self, markup: str, tag: str) -> Math:
        markup = markup.strip()
        match = MATH_DELIMITERS_RE.match(markup)
        tex = match.group("tex").strip() if match else markup
        display = tag == "div" or markup.startswith("\\[")
        return Math(tex=tex, display=display, markup=markup)

    def _element(self, el: etree.Element) -> Node:
        return Element(
            tag=el.tag,
            attrs={key: str(value) for key, value in el.attrib.items()},
            children=self.children(el),
        )

    def code_block(self, code: str, class_name: Optional[str]) -> CodeBlock:
        language = extract_language(class_name)
        display = trim_trailing_newline(code)
        highlighted_html = (
            self.renderer.highlighter.highlight(display, language) if language else None
        )
        return CodeBlock(
            language=language,
            highlighted=highlighted_html is not None,
            code=display,
            copy_text=code,
            highlighted_html=highlighted_html,
            style=self.renderer.code_block_style,
        )


def _class_of(attrs: str) -> Optional[str]:
    match = CLASS_ATTR_RE.search(attrs or "")
    return html.unescape(match.group("value")) if match else None
