import textwrap

import pytest

from inkwell.schemas.document import (
    DEFAULT_THEME,
    CodeBlock,
    Document,
    Element,
    Heading,
    Html,
    InlineCode,
    Link,
    Math,
    Paragraph,
    Text,
)
from inkwell.services import document_renderer
from inkwell.services.document_renderer import DocumentRenderer


def render(markdown_text: str, **kwargs) -> Document:
    return DocumentRenderer(**kwargs).render(textwrap.dedent(markdown_text).lstrip())


def test_headings_keep_level_and_get_sized_by_level():
    doc = render(
        """
        # One

        ## Two

        ### Three

        #### Four
        """
    )

    assert [node.kind for node in doc.children] == [
        "heading",
        "heading",
        "heading",
        "element",
    ]
    h1, h2, h3, h4 = doc.children
    assert (h1.level, h1.style.size, h1.style.margin_top) == (1, "xl", "40px")
    assert (h2.level, h2.style.size, h2.style.margin_top) == (2, "lg", "32px")
    assert (h3.level, h3.style.size, h3.style.margin_top) == (3, "md", "24px")
    assert h1.children == [Text(text="One")]
    assert isinstance(h4, Element) and h4.tag == "h4"


def test_paragraph_wraps_inline_children_in_order():
    doc = render("Hello **world**.")

    (paragraph,) = doc.children
    assert isinstance(paragraph, Paragraph)
    assert paragraph.style == DEFAULT_THEME.paragraph
    assert [node.kind for node in paragraph.children] == ["text", "element", "text"]
    assert paragraph.children[0] == Text(text="Hello ")
    assert paragraph.children[1].tag == "strong"
    assert paragraph.children[1].children == [Text(text="world")]
    assert paragraph.children[2] == Text(text=".")


def test_link_keeps_href_and_title_verbatim():
    doc = render('See [the docs](https://example.com/a?b=1&c=2 "Docs") now.')

    link = doc.children[0].children[1]
    assert isinstance(link, Link)
    assert link.href == "https://example.com/a?b=1&c=2"
    assert link.title == "Docs"
    assert link.style.color == "blue.600"
    assert link.children == [Text(text="the docs")]


def test_lists_preserve_nesting_and_order():
    doc = render(
        """
        - alpha
        - beta
            1. first
            2. second
        """
    )

    (bullets,) = doc.children
    assert bullets.kind == "unordered_list"
    assert bullets.style == DEFAULT_THEME.lists
    assert [item.kind for item in bullets.children] == ["list_item", "list_item"]
    assert bullets.children[0].children == [Text(text="alpha")]

    nested = [n for n in bullets.children[1].children if n.kind == "ordered_list"]
    assert len(nested) == 1
    assert [item.children for item in nested[0].children] == [
        [Text(text="first")],
        [Text(text="second")],
    ]


def test_fenced_code_with_language_is_highlighted():
    doc = render(
        """
        ```cpp
        int main() { return 0; }
        ```
        """
    )

    (block,) = doc.children
    assert isinstance(block, CodeBlock)
    assert block.language == "cpp"
    assert block.highlighted is True
    assert 'class="highlight"' in block.highlighted_html
    assert block.style.border_radius == "8px"


def test_fenced_code_display_drops_one_trailing_newline_copy_keeps_it():
    doc = render(
        """
        ```python
        print("hi")

        ```
        """
    )

    (block,) = doc.children
    assert block.copy_text == 'print("hi")\n\n'
    assert block.code == 'print("hi")\n'


def test_fenced_code_text_is_unescaped():
    doc = render(
        """
        ```html
        <p class="x">a & b</p>
        ```
        """
    )

    (block,) = doc.children
    assert block.code == '<p class="x">a & b</p>'
    assert block.copy_text == '<p class="x">a & b</p>\n'


def test_fenced_code_without_language_is_plain():
    doc = render(
        """
        ```
        just text
        ```
        """
    )

    (block,) = doc.children
    assert block.language is None
    assert block.highlighted is False
    assert block.highlighted_html is None
    assert block.code == "just text"


def test_fenced_code_with_unknown_language_is_plain():
    doc = render(
        """
        ```nosuchlanguage
        x = 1
        ```
        """
    )

    (block,) = doc.children
    assert block.language == "nosuchlanguage"
    assert block.highlighted is False
    assert block.highlighted_html is None


def test_indented_code_block_is_plain_code():
    doc = render("Intro\n\n    indented code\n")

    block = doc.children[1]
    assert isinstance(block, CodeBlock)
    assert block.language is None
    assert block.code == "indented code"
    assert block.copy_text == "indented code\n"


def test_inline_code_is_never_highlighted():
    doc = render("Use `language-cpp` and `a < b` inline.")

    codes = [n for n in doc.children[0].children if isinstance(n, InlineCode)]
    assert [c.code for c in codes] == ["language-cpp", "a < b"]


def test_inline_math_is_marked_for_typesetting():
    doc = render("Sum: $a + b$ done")

    maths = [n for n in doc.children[0].children if isinstance(n, Math)]
    assert len(maths) == 1
    assert maths[0].tex == "a + b"
    assert maths[0].display is False
    assert maths[0].markup.startswith("\\(")


def test_display_math_block():
    doc = render(
        """
        $$
        x^2
        $$
        """
    )

    maths = [n for n in doc.children if isinstance(n, Math)]
    assert len(maths) == 1
    assert maths[0].tex == "x^2"
    assert maths[0].display is True


def test_math_disabled_leaves_literal_markup():
    doc = render("Sum: $a + b$ done", math_enabled=False)

    assert doc.children[0].children == [Text(text="Sum: $a + b$ done")]


def test_unrecognized_elements_pass_through():
    doc = render(
        """
        Some *emphasis* and ![alt text](/a.png)

        > quoted

        ---
        """
    )

    paragraph, quote, rule = doc.children
    kinds = [(n.kind, getattr(n, "tag", None)) for n in paragraph.children]
    assert ("element", "em") in kinds
    image = next(n for n in paragraph.children if getattr(n, "tag", None) == "img")
    assert image.attrs == {"src": "/a.png", "alt": "alt text"}
    assert (quote.kind, quote.tag) == ("element", "blockquote")
    assert (rule.kind, rule.tag) == ("element", "hr")


def test_raw_html_block_is_kept_verbatim():
    doc = render('<div class="note">Heads up</div>\n\nAfter.')

    assert isinstance(doc.children[0], Html)
    assert doc.children[0].html.strip() == '<div class="note">Heads up</div>'
    assert isinstance(doc.children[1], Paragraph)


@pytest.mark.parametrize(
    "text",
    [
        "```\nunterminated fence",
        "[broken](link",
        "* * *\n<div>\n\n- [ ] ~~~",
        "$$ unbalanced",
        "\x00\x02\x03",
        "",
    ],
)
def test_render_is_total_over_malformed_input(text):
    doc = DocumentRenderer().render(text)

    assert isinstance(doc, Document)


def test_empty_input_renders_empty_document():
    assert DocumentRenderer().render("") == Document()


def test_render_falls_back_to_plain_paragraph_on_engine_failure(monkeypatch, caplog):
    def boom(text, math_enabled=True):
        raise RuntimeError("engine exploded")

    monkeypatch.setattr(document_renderer, "parse_markdown", boom)

    with caplog.at_level("WARNING"):
        doc = DocumentRenderer().render("# Title\n\nbody")

    assert doc.children == [
        Paragraph(style=DEFAULT_THEME.paragraph, children=[Text(text="# Title\n\nbody")])
    ]
    assert any("falling back" in rec.message for rec in caplog.records)


def test_document_round_trips_through_json():
    doc = render("# Title\n\n```cpp\nint x;\n```\n\nText with $x$ and `code`.")

    assert Document.model_validate_json(doc.model_dump_json()) == doc


def test_headings_use_custom_theme():
    theme = DEFAULT_THEME.model_copy(
        update={"headings": {**DEFAULT_THEME.headings, 1: DEFAULT_THEME.headings[3]}}
    )

    doc = DocumentRenderer(theme=theme).render("# Small")

    assert isinstance(doc.children[0], Heading)
    assert doc.children[0].style.size == "md"


def test_deeply_nested_markup_stays_serializable():
    doc = DocumentRenderer().render("> " * 500 + "x")

    payload = doc.model_dump_json()

    assert "x" in payload
    assert Document.model_validate_json(payload) == doc


def test_nesting_below_the_depth_limit_keeps_structure():
    doc = DocumentRenderer().render("> > > quoted")

    node = doc.children[0]
    for _ in range(3):
        assert (node.kind, node.tag) == ("element", "blockquote")
        node = node.children[0]
    assert isinstance(node, Paragraph)
    assert node.children == [Text(text="quoted")]


def test_character_entities_decode_to_text():
    doc = render("Copyright &copy; 2023 &amp; &#8212; onwards")

    assert doc.children[0].children == [Text(text="Copyright © 2023 & — onwards")]
