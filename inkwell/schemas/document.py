"""
Typed document tree produced by the markdown renderer.

Each node kind is its own model tagged by ``kind``; ``Node`` is the
discriminated union over all of them. Styled kinds carry an explicit style
struct instead of free-form attributes.
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class HeadingStyle(BaseModel):
    size: str
    margin_top: str


class BlockStyle(BaseModel):
    margin_y: str


class LinkStyle(BaseModel):
    color: str


class ListStyle(BaseModel):
    margin_y: str
    spacing: str
    margin_left: str


class CodeBlockStyle(BaseModel):
    theme: str
    border_radius: str
    margin: str


class DocumentTheme(BaseModel):
    headings: Dict[int, HeadingStyle]
    paragraph: BlockStyle
    link: LinkStyle
    lists: ListStyle
    code_block: CodeBlockStyle


DEFAULT_THEME = DocumentTheme(
    headings={
        1: HeadingStyle(size="xl", margin_top="40px"),
        2: HeadingStyle(size="lg", margin_top="32px"),
        3: HeadingStyle(size="md", margin_top="24px"),
    },
    paragraph=BlockStyle(margin_y="24px"),
    link=LinkStyle(color="blue.600"),
    lists=ListStyle(margin_y="24px", spacing="8px", margin_left="32px"),
    code_block=CodeBlockStyle(theme="material", border_radius="8px", margin="24px 0"),
)


class Text(BaseModel):
    kind: Literal["text"] = "text"
    text: str


class Html(BaseModel):
    """Raw HTML from the markdown source, kept verbatim."""

    kind: Literal["html"] = "html"
    html: str


class Heading(BaseModel):
    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=3)
    style: HeadingStyle
    children: List["Node"] = Field(default_factory=list)


class Paragraph(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    style: BlockStyle
    children: List["Node"] = Field(default_factory=list)


class Link(BaseModel):
    kind: Literal["link"] = "link"
    href: str
    title: Optional[str] = None
    style: LinkStyle
    children: List["Node"] = Field(default_factory=list)


class OrderedList(BaseModel):
    kind: Literal["ordered_list"] = "ordered_list"
    start: Optional[int] = None
    style: ListStyle
    children: List["Node"] = Field(default_factory=list)


class UnorderedList(BaseModel):
    kind: Literal["unordered_list"] = "unordered_list"
    style: ListStyle
    children: List["Node"] = Field(default_factory=list)


class ListItem(BaseModel):
    kind: Literal["list_item"] = "list_item"
    children: List["Node"] = Field(default_factory=list)


class CodeBlock(BaseModel):
    kind: Literal["code_block"] = "code_block"
    language: Optional[str] = None
    highlighted: bool = False
    code: str  # displayed text, trailing newline trimmed
    copy_text: str  # clipboard payload, the fence's original text
    highlighted_html: Optional[str] = None
    style: CodeBlockStyle


class InlineCode(BaseModel):
    kind: Literal["inline_code"] = "inline_code"
    code: str


class Math(BaseModel):
    kind: Literal["math"] = "math"
    tex: str
    display: bool = False
    markup: str  # delimited TeX for the client-side typesetting pass


class Element(BaseModel):
    """Any markdown element without a dedicated kind (emphasis, images, tables...)."""

    kind: Literal["element"] = "element"
    tag: str
    attrs: Dict[str, str] = Field(default_factory=dict)
    children: List["Node"] = Field(default_factory=list)


Node = Annotated[
    Union[
        Text,
        Html,
        Heading,
        Paragraph,
        Link,
        OrderedList,
        UnorderedList,
        ListItem,
        CodeBlock,
        InlineCode,
        Math,
        Element,
    ],
    Field(discriminator="kind"),
]


class Document(BaseModel):
    children: List[Node] = Field(default_factory=list)


for _model in (
    Heading,
    Paragraph,
    Link,
    OrderedList,
    UnorderedList,
    ListItem,
    Element,
    Document,
):
    _model.model_rebuild()
