"""
Formatter stage tests

Tests each stage of the chain on hand-built token lists, then the order
of the composed chain.
"""

import pytest
from pygments.token import Keyword, Name, Text, String

from codetag.lib.formatters import (
    html_format,
    lineHighlight_wrap,
    chomp_wrap,
    table_wrap,
    figure_wrap,
    chain_build,
    markup_chomp,
    lines_count,
    tokenClass_get,
)
from codetag.models.tokens import lines_split


class TestTokenClasses:
    """Test Pygments short class names"""

    def test_standard_types(self):
        assert tokenClass_get(Keyword) == "k"
        assert tokenClass_get(Name.Function) == "nf"
        assert tokenClass_get(Text) == ""

    def test_unknown_subtype_uses_parent(self):
        """Subtypes without a short name extend the parent's"""
        assert tokenClass_get(Name.Function.Magic.Custom) == "fmCustom"


class TestLineSplit:
    """Test splitting token streams into lines"""

    def test_trailing_newline_adds_no_line(self):
        assert lines_split([(Text, "a\nb\n")]) == [[(Text, "a")], [(Text, "b")]]

    def test_no_trailing_newline(self):
        assert lines_split([(Text, "a\nb")]) == [[(Text, "a")], [(Text, "b")]]

    def test_internal_blank_line_kept(self):
        assert lines_split([(Text, "a\n\nb\n")]) == [[(Text, "a")], [], [(Text, "b")]]

    def test_multiline_token_split_per_line(self):
        """A token spanning lines keeps its type on each piece"""
        tokens = [(Keyword, "x"), (String, "'1\n2'"), (Text, "\n")]

        assert lines_split(tokens) == [
            [(Keyword, "x"), (String, "'1")],
            [(String, "2'")],
        ]

    def test_empty_stream(self):
        assert lines_split([]) == []

    def test_count_matches_split(self):
        """lines_count agrees with lines_split"""
        for tokens in (
            [(Text, "a\nb\n")],
            [(Text, "a\nb")],
            [(Text, "\n")],
            [(Text, "a"), (Text, "")],
            [],
        ):
            assert lines_count(tokens) == len(lines_split(tokens))


class TestBaseStage:
    """Test the span-per-token base formatter"""

    def test_spans_by_class(self):
        html = html_format()([(Keyword, "def"), (Text, " "), (Name.Function, "f")])

        assert html == '<span class="k">def</span> <span class="nf">f</span>'

    def test_escaping(self):
        html = html_format()([(Text, '<a href="x">&</a>')])

        assert "<a" not in html
        assert "&lt;a" in html
        assert "&amp;" in html

    def test_empty(self):
        assert html_format()([]) == ""

    def test_quotes_not_escaped_in_code(self):
        """Token text escapes only &, < and >"""
        assert html_format()([(Text, 'say "hi" & \'bye\'')]) == 'say "hi" &amp; \'bye\''


class TestLineHighlightStage:
    """Test per-line wrapping and emphasis"""

    def test_every_line_wrapped(self):
        formatter = lineHighlight_wrap(html_format())

        assert formatter([(Text, "a\nb\n")]) == (
            '<span class="line">a</span>\n<span class="line">b</span>\n'
        )

    def test_emphasized_lines(self):
        formatter = lineHighlight_wrap(html_format(), highlight_lines=[2])
        html = formatter([(Text, "a\nb\nc\n")])

        assert '<span class="line hll">b</span>' in html
        assert html.count("hll") == 1

    def test_out_of_range_lines_ignored(self):
        formatter = lineHighlight_wrap(html_format(), highlight_lines=[99])

        assert "hll" not in formatter([(Text, "a\n")])


class TestChompStage:
    """Test single trailing terminator removal"""

    @pytest.mark.parametrize("text,expected", [
        ("a\n", "a"),
        ("a\r\n", "a"),
        ("a\r", "a"),
        ("a\n\n", "a\n"),
        ("a", "a"),
        ("", ""),
    ])
    def test_markup_chomp(self, text, expected):
        assert markup_chomp(text) == expected

    def test_only_final_newline_removed(self):
        """Per-line newlines from the line stage survive"""
        formatter = chomp_wrap(lineHighlight_wrap(html_format()))
        html = formatter([(Text, "a\nb\n")])

        assert html == '<span class="line">a</span>\n<span class="line">b</span>'


class TestTableStage:
    """Test gutter/code table"""

    def test_gutter_numbers(self):
        html = table_wrap(html_format())([(Text, "a\nb\nc\n")])

        assert '<pre class="lineno">1\n2\n3\n</pre>' in html
        assert '<td class="gutter gl">' in html
        assert '<td class="code"><pre>' in html

    def test_accepts_generator(self):
        """The stream is consumed twice, so generators must work"""
        tokens = (t for t in [(Text, "a\nb\n")])
        html = table_wrap(lineHighlight_wrap(html_format()))(tokens)

        assert '<pre class="lineno">1\n2\n</pre>' in html
        assert '<span class="line">b</span>' in html


class TestFigureStage:
    """Test the outer container"""

    def test_caption(self):
        html = figure_wrap(html_format(), caption="demo")([(Text, "x")])

        assert html.startswith('<figure class="highlight not-prose"><figcaption>demo</figcaption>')
        assert html.endswith("</code></pre></figure>")

    def test_empty_caption_slot(self):
        html = figure_wrap(html_format())([(Text, "x")])

        assert "<figcaption></figcaption>" in html

    def test_caption_escaped(self):
        html = figure_wrap(html_format(), caption="<b>x</b>")([])

        assert "<figcaption>&lt;b&gt;x&lt;/b&gt;</figcaption>" in html

    def test_caption_quotes_escaped(self):
        html = figure_wrap(html_format(), caption='a "b"')([])

        assert "<figcaption>a &quot;b&quot;</figcaption>" in html


class TestChain:
    """Test the composed chain"""

    def test_full_output(self):
        formatter = chain_build(highlight_lines=[2], caption="c")
        html = formatter([(Text, "x\ny\n")])

        assert html == (
            '<figure class="highlight not-prose"><figcaption>c</figcaption><pre><code>'
            '<table class="code-table"><tbody><tr>'
            '<td class="gutter gl"><pre class="lineno">1\n2\n</pre></td>'
            '<td class="code"><pre>'
            '<span class="line">x</span>\n<span class="line hll">y</span>'
            '</pre></td>'
            '</tr></tbody></table>'
            '</code></pre></figure>'
        )

    def test_empty_stream(self):
        """No tokens still gives valid, empty-bodied markup"""
        html = chain_build()([])

        assert '<pre class="lineno"></pre>' in html
        assert '<td class="code"><pre></pre></td>' in html
