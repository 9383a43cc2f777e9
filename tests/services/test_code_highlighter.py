import pytest

from inkwell.services.code_highlighter import (
    CodeHighlighter,
    extract_language,
    trim_trailing_newline,
)


@pytest.mark.parametrize(
    ("class_name", "expected"),
    [
        ("language-cpp", "cpp"),
        ("language-cmake", "cmake"),
        ("foo language-python bar", "python"),
        ("language-c++", "c"),
        ("lang-cpp", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_language(class_name, expected):
    assert extract_language(class_name) == expected


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("x = 1\n", "x = 1"),
        ("x = 1\n\n", "x = 1\n"),
        ("x = 1", "x = 1"),
        ("", ""),
    ],
)
def test_trim_trailing_newline_removes_exactly_one(code, expected):
    assert trim_trailing_newline(code) == expected


def test_highlight_known_language_returns_html():
    result = CodeHighlighter().highlight("int main() {}", "cpp")

    assert result is not None
    assert 'class="highlight"' in result
    assert "main" in result


def test_highlight_unknown_language_returns_none():
    assert CodeHighlighter().highlight("x", "definitely-not-a-language") is None


def test_unknown_style_falls_back_to_default(caplog):
    with caplog.at_level("WARNING"):
        highlighter = CodeHighlighter(style="no-such-style")

    assert highlighter.style == "default"
    assert any("Unknown highlight style" in rec.message for rec in caplog.records)


def test_stylesheet_targets_highlight_class():
    assert ".highlight" in CodeHighlighter().stylesheet()
