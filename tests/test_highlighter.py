import html
import re

import pytest
from pygments.lexers import TextLexer

from pagesmith.adapters.html import PygmentsHtmlHighlighter, resolve_lexer
from pagesmith.adapters.html import pygments as pygments_module
from pagesmith.core.exceptions import ConfigError, HighlightError


_SPAN = re.compile(r"</?span[^>]*>")


def _destyle(fragment: str) -> str:
    return html.unescape(_SPAN.sub("", fragment))


@pytest.fixture
def highlighter() -> PygmentsHtmlHighlighter:
    return PygmentsHtmlHighlighter()


def test_resolves_lexer_alias() -> None:
    assert resolve_lexer("python").name == "Python"
    assert resolve_lexer(" rust ").name == "Rust"


def test_resolves_lexer_by_extension() -> None:
    assert resolve_lexer("pyw").name == "Python"


@pytest.mark.parametrize("hint", ["", "definitely-not-a-language", "   "])
def test_unknown_hint_falls_back_to_plain_text(hint: str) -> None:
    assert isinstance(resolve_lexer(hint), TextLexer)


def test_highlight_escapes_source(highlighter: PygmentsHtmlHighlighter) -> None:
    output = highlighter("x = 1 < 2\n", "python")

    assert "&lt;" in output
    assert "<" not in _SPAN.sub("", output)
    assert "<span style=" in output


def test_one_fragment_per_line_in_order(highlighter: PygmentsHtmlHighlighter) -> None:
    code = 'def greet(name):\n    return f"hi {name}"\n\nprint(greet("a & b"))\n'
    fragments = highlighter.highlight_lines(code, "python")

    assert len(fragments) == code.count("\n")
    assert [_destyle(fragment) for fragment in fragments] == code.splitlines(keepends=True)


@pytest.mark.parametrize("language", ["python", ""])
def test_empty_code_yields_no_fragments(
    highlighter: PygmentsHtmlHighlighter, language: str
) -> None:
    assert highlighter.highlight_lines("", language) == []
    assert highlighter("", language) == ""


def test_multiline_tokens_are_split_across_lines(
    highlighter: PygmentsHtmlHighlighter,
) -> None:
    code = 's = """first\nsecond"""\n'
    fragments = highlighter.highlight_lines(code, "python")

    assert len(fragments) == 2
    assert _destyle(fragments[0]) == 's = """first\n'
    assert _destyle(fragments[1]) == 'second"""\n'


def test_unknown_language_keeps_every_line(highlighter: PygmentsHtmlHighlighter) -> None:
    code = "alpha\n<beta>\ngamma\n"
    fragments = highlighter.highlight_lines(code, "no-such-lexer")

    assert len(fragments) == 3
    assert "&lt;beta&gt;" in fragments[1]
    assert _destyle(fragments[1]) == "<beta>\n"


def test_output_round_trips_to_source(highlighter: PygmentsHtmlHighlighter) -> None:
    code = "fn main() {\n    let s = \"<tag> & 'quote'\";\n}\n"
    assert _destyle(highlighter(code, "rust")) == code


def test_only_foreground_styles_are_emitted(highlighter: PygmentsHtmlHighlighter) -> None:
    output = highlighter("if True:\n    pass  # comment\n", "python")
    assert "background" not in output
    assert "font-style:italic" in output or "color:#" in output


def test_style_background_is_exposed() -> None:
    highlighter = PygmentsHtmlHighlighter(style="monokai")
    assert highlighter.background_color.lower() == "#272822"


def test_unknown_style_is_a_configuration_error() -> None:
    with pytest.raises(ConfigError):
        PygmentsHtmlHighlighter(style="no-such-style")


def test_tokenizer_failure_reports_line(
    monkeypatch: pytest.MonkeyPatch, highlighter: PygmentsHtmlHighlighter
) -> None:
    def broken_lines(tokens):
        yield [(next(iter(tokens))[0], "ok\n")]
        raise RuntimeError("tokenizer exploded")

    monkeypatch.setattr(pygments_module, "split_token_lines", broken_lines)

    with pytest.raises(HighlightError) as excinfo:
        highlighter.highlight_lines("a\nb\n", "python")

    assert "line 2" in str(excinfo.value)
    assert "python" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
