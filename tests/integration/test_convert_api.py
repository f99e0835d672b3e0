#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_convert_api.py
"""Integration tests for convert and convert_file.

Tests cover:
- End-to-end conversion in both dialects
- Option handling and renderer precedence
- File, path and stream inputs
- Error propagation from parsing and rendering

"""

import io
import logging

import pytest

from htmlmark import (
    BASIC_RENDERER,
    GFM_RENDERER,
    ConversionOptions,
    DepthLimitError,
    FileAccessError,
    FileNotFoundError,
    HtmlMarkError,
    ValidationError,
    convert,
    convert_file,
)


@pytest.mark.integration
class TestConvertScenarios:
    """Whole documents through the default GitHub Flavored Markdown pipeline."""

    @pytest.mark.parametrize(
        "markup,expected",
        [
            ("<h1>hello world</h1>", "# hello world"),
            ("<p>a</p><p>b</p>", "a\n\nb"),
            ("<p>a<br>b</p>", "a\nb"),
            ("<p>a<br><br><br>b</p>", "a\n\nb"),
            ("<del>strike</del>", "~~strike~~"),
            ("<ul><li>one</li><li>two</li></ul>", "* one\n* two"),
            ("<ul><li>a<ul><li>b</li></ul></li></ul>", "* a\n  * b"),
            ("<ol start='3'><li>a</li><li>b</li></ol>", "3. a\n4. b"),
            ("<a href='http://x.com' title='T'>site</a>", '[site](http://x.com "T")'),
            ("<p>use <code>x*y</code></p>", "use `x*y`"),
            (
                "<pre><code class='language-python'>print(1)\n</code></pre>",
                "```python\nprint(1)\n```",
            ),
            (
                "<table><tr><th>A</th><th align='right'>B</th></tr><tr><td>1</td><td>2</td></tr></table>",
                "| A | B |\n| --- | ---: |\n| 1 | 2 |",
            ),
            (
                "<ul><li><input type='checkbox' checked> done</li><li><input type='checkbox'> todo</li></ul>",
                "* [x] done\n* [ ] todo",
            ),
            ("<blockquote><p>quote</p></blockquote>", "> quote"),
            ("<p>2 * 3 = [six]</p>", "2 \\* 3 = \\[six\\]"),
            ("<p># not heading</p>", "\\# not heading"),
            ("<p>~tilde~</p>", "\\~tilde\\~"),
            ("<p>a<em> b </em>c</p>", "a *b* c"),
            ("<p>a<!-- hidden -->b</p>", "ab"),
            ("<p>a</p><script>alert(1)</script>", "a"),
            ("<p>a</p><hr><p>b</p>", "a\n\n---\n\nb"),
        ],
    )
    def test_gfm(self, markup: str, expected: str) -> None:
        assert convert(markup) == expected

    @pytest.mark.parametrize(
        "markup,expected",
        [
            ("<p><span>1. not a list</span></p>", "1\\. not a list"),
            ("<div><span># not heading</span></div>", "\\# not heading"),
            ("<p><span>- x</span></p>", "\\- x"),
            ("<p><b><span>&gt; no quote</span></b></p>", "**\\> no quote**"),
            ("<p>a<br><span>+ b</span></p>", "a\n\\+ b"),
            ("<p>a <span>1. b</span></p>", "a 1. b"),
        ],
    )
    def test_block_markers_inside_inline_wrappers_escaped(self, markup: str, expected: str) -> None:
        assert convert(markup) == expected

    def test_pipe_in_cell_code(self) -> None:
        markup = "<table><tr><th>h</th></tr><tr><td><code>a|b</code></td></tr></table>"
        assert convert(markup) == "| h |\n| --- |\n| `a\\|b` |"

    def test_header_row_is_first_row_with_cells(self) -> None:
        markup = "<table><tr></tr><tr><th>a</th><th>b</th></tr><tr><td>1</td><td>2</td></tr></table>"
        assert convert(markup) == "| a | b |\n| --- | --- |\n| 1 | 2 |"

    @pytest.mark.parametrize("extended_syntax", [True, False])
    @pytest.mark.parametrize(
        "markup,expected",
        [
            ("<br>a", "a"),
            ("<p>x</p><br>a<p>y</p>", "x\n\na\n\ny"),
            ("<p><span><br>a</span></p>", "a"),
            ("<p>x</p><br><br><br>y", "x\n\ny"),
        ],
    )
    def test_line_break_at_line_start(self, markup: str, expected: str, extended_syntax: bool) -> None:
        assert convert(markup, extended_syntax=extended_syntax) == expected

    @pytest.mark.parametrize(
        "markup,expected",
        [
            ("<del>strike</del>", "strike"),
            ("<p>a<br>b</p>", "a  \nb"),
            (
                "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>",
                "A B\n\n1 2",
            ),
            ("<p>~tilde~</p>", "~tilde~"),
        ],
    )
    def test_basic(self, markup: str, expected: str) -> None:
        assert convert(markup, extended_syntax=False) == expected

    @pytest.mark.parametrize("markup", [None, ""])
    def test_empty_input(self, markup) -> None:
        assert convert(markup) == ""

    def test_whitespace_only_document(self) -> None:
        assert convert("   \n  ") == ""


@pytest.mark.integration
class TestConvertOptions:
    """Options passed as objects and keyword overrides."""

    def test_options_object(self) -> None:
        assert convert("<del>x</del>", ConversionOptions(extended_syntax=False)) == "x"

    def test_keyword_overrides_options_object(self) -> None:
        options = ConversionOptions(extended_syntax=False)
        assert convert("<del>x</del>", options, extended_syntax=True) == "~~x~~"

    def test_explicit_renderer_wins_over_dialect(self) -> None:
        assert convert("<del>x</del>", renderer=BASIC_RENDERER) == "x"
        assert convert("<del>x</del>", extended_syntax=False, renderer=GFM_RENDERER) == "~~x~~"

    def test_unknown_keyword(self) -> None:
        with pytest.raises(ValidationError):
            convert("<p>x</p>", dialect="gfm")

    def test_custom_protocol_renderer(self) -> None:
        class TagNames:
            def convert(self, node, child_markdown):
                name = getattr(node, "name", None)
                if name and name != "[document]":
                    return f"<{name}>{child_markdown}"
                return child_markdown

        assert convert("<div><span>x</span></div>", renderer=TagNames()) == "<div><span>x"

    def test_extended_renderer(self) -> None:
        shout = GFM_RENDERER.extend({"STRONG, B": lambda node, content: content.upper()})
        assert convert("<p><b>loud</b> quiet</p>", renderer=shout) == "LOUD quiet"

    def test_depth_limit(self) -> None:
        deep = "<div>" * 50 + "x" + "</div>" * 50
        with pytest.raises(DepthLimitError):
            convert(deep, max_depth=10)
        assert convert(deep) == "x"

    def test_lxml_backend(self) -> None:
        pytest.importorskip("lxml")
        assert convert("<h2>t</h2>", parser="lxml") == "## t"

    def test_html5lib_backend(self) -> None:
        pytest.importorskip("html5lib")
        assert convert("<p>a<p>b", parser="html5lib") == "a\n\nb"

    def test_debug_timing_logged(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="htmlmark"):
            convert("<p>x</p>")
        messages = [record.getMessage() for record in caplog.records]
        assert any("Rendering completed in" in message for message in messages)


@pytest.mark.integration
class TestConvertFile:
    """File and stream inputs."""

    def test_path(self, tmp_path) -> None:
        source = tmp_path / "page.html"
        source.write_text("<h1>Title</h1>", encoding="utf-8")
        assert convert_file(source) == "# Title"
        assert convert_file(str(source)) == "# Title"

    def test_text_stream(self) -> None:
        assert convert_file(io.StringIO("<p><s>x</s></p>")) == "~~x~~"

    def test_binary_stream(self) -> None:
        stream = io.BytesIO("<p>café</p>".encode("utf-8"))
        assert convert_file(stream, extended_syntax=False) == "café"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError) as exc_info:
            convert_file(tmp_path / "absent.html")
        assert isinstance(exc_info.value, HtmlMarkError)

    def test_invalid_utf8(self, tmp_path) -> None:
        source = tmp_path / "latin.html"
        source.write_bytes(b"<p>caf\xe9</p>")
        with pytest.raises(FileAccessError, match="not valid UTF-8"):
            convert_file(source)

    def test_closed_stream(self) -> None:
        stream = io.StringIO("<p>x</p>")
        stream.close()
        with pytest.raises(FileAccessError):
            convert_file(stream)
