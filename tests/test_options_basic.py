"""
Basic option parser tests - simplest cases

Tests empty strings, the implicit language token, flags and scalar values.
"""

import pytest

from codetag.lib.options import OptionParser, options_parse


class TestEmptyAndSimple:
    """Test empty option strings and single tokens"""

    def test_empty_string(self):
        """Empty string parses to empty mapping, no implicit lang"""
        assert OptionParser("").parse() == {}

    def test_whitespace_only(self):
        """Only whitespace parses to empty mapping"""
        assert OptionParser("   \t ").parse() == {}

    def test_none_source(self):
        """None is treated like an empty string"""
        assert OptionParser(None).parse() == {}

    def test_single_language(self):
        """Single bare token becomes lang and nothing else"""
        assert options_parse("ruby") == {"lang": "ruby"}

    def test_language_with_surrounding_whitespace(self):
        """Surrounding whitespace does not end up in lang"""
        assert options_parse("  python  ") == {"lang": "python"}

    def test_language_with_punctuation(self):
        """Lexer aliases like c++ or shell-session survive as lang"""
        assert options_parse("c++")["lang"] == "c++"
        assert options_parse("shell-session")["lang"] == "shell-session"


class TestImplicitLanguage:
    """Test the first-token language rule"""

    def test_bare_tokens_become_flags(self):
        """Without '=', the first token is lang and the rest are flags"""
        options = options_parse("ruby linenos wrap compact")

        assert options == {
            "lang": "ruby",
            "linenos": True,
            "wrap": True,
            "compact": True,
        }

    def test_first_token_with_equals_is_not_lang(self):
        """A leading key=value is parsed as an option, no lang"""
        options = options_parse('caption="Hi there"')

        assert "lang" not in options
        assert options == {"caption": "Hi there"}

    def test_only_first_token_is_eligible(self):
        """A later bare token is a flag, not lang"""
        options = options_parse("caption=demo ruby")

        assert "lang" not in options
        assert options["ruby"] is True

    def test_explicit_lang_option(self):
        """lang=name works like the implicit form"""
        assert options_parse("lang=qwxyz123") == {"lang": "qwxyz123"}

    def test_language_alias_key(self):
        """language=name resolves to lang"""
        assert options_parse("language=go") == {"lang": "go"}

    def test_language_query_split_off(self):
        """Lexer options after '?' move to lexer_options, lang stays bare"""
        options = options_parse("lang=python?tabsize=4")

        assert options == {"lang": "python", "lexer_options": "tabsize=4"}
        assert "=" not in options["lang"]

    def test_lexer_options_key(self):
        options = options_parse('python lexer_options="tabsize=4 stripall=1"')

        assert options == {"lang": "python", "lexer_options": "tabsize=4 stripall=1"}

    def test_language_options_not_implicit(self):
        """A first token holding '=' is never the implicit lang"""
        assert "lang" not in options_parse("python?tabsize=4")

    def test_quoted_first_token_not_lang(self):
        """A leading quoted phrase is not a language"""
        options = options_parse('"foo bar" caption=x')

        assert "lang" not in options
        assert options["caption"] == "x"

    @pytest.mark.parametrize("source", [
        'lang="foo bar"',
        "lang=a\"b",
        "ruby lang",
    ])
    def test_invalid_explicit_lang_dropped(self, source):
        """lang never holds spaces, quotes or a flag value"""
        lang = options_parse(source).get("lang")

        assert lang in (None, "ruby")

    def test_invalid_lang_keeps_earlier_one(self):
        assert options_parse("ruby lang").get("lang") == "ruby"


class TestScalarValues:
    """Test quoted and bare values for scalar keys"""

    def test_quoted_caption_with_spaces(self):
        """Quoted value keeps its spaces, quotes stripped"""
        options = options_parse('ruby caption="Hello World"')

        assert options["caption"] == "Hello World"

    def test_bare_caption(self):
        """Bare value without spaces"""
        assert options_parse("ruby caption=demo")["caption"] == "demo"

    def test_quoted_empty_value(self):
        """Empty quotes give an empty string"""
        assert options_parse('ruby caption=""')["caption"] == ""

    def test_title_alias(self):
        """title= resolves to caption"""
        assert options_parse('ruby title="app.rb"') == {"lang": "ruby", "caption": "app.rb"}

    def test_bracket_value_for_scalar_key(self):
        """Bracket text for a scalar key is kept verbatim as a string"""
        assert options_parse("ruby caption=[draft]")["caption"] == "[draft]"

    def test_unknown_key_quoted(self):
        """Unknown keys with quoted values become strings"""
        assert options_parse('ruby note="a b c"')["note"] == "a b c"

    def test_unknown_key_bracket_list(self):
        """Unknown keys with bracket values are expanded to integers"""
        assert options_parse("ruby steps=[1,3-4]")["steps"] == [1, 3, 4]

    def test_bare_caption_flag(self):
        """caption without value is a flag"""
        assert options_parse("ruby caption")["caption"] is True


class TestRepeatedKeys:
    """Test last-write-wins for repeated keys"""

    def test_last_occurrence_wins(self):
        """The later caption overwrites the earlier one"""
        options = options_parse('ruby caption="first" caption="second"')

        assert options["caption"] == "second"

    def test_alias_and_canonical_collide(self):
        """lines and highlight share a key, last one wins"""
        options = options_parse("ruby lines=[1] highlight=[2]")

        assert options["highlight"] == [2]
        assert "lines" not in options

    def test_explicit_lang_overrides_implicit(self):
        """A later lang= replaces the implicit language"""
        assert options_parse("ruby lang=python")["lang"] == "python"


class TestMalformedInput:
    """Test that odd input never raises"""

    @pytest.mark.parametrize("source", [
        'ruby caption="unterminated',
        "ruby ===",
        "ruby highlight=[",
        'ruby "stray"',
        "ruby highlight=[1,,2] --flag",
        "= = =",
    ])
    def test_never_raises(self, source):
        """Best-effort parse for malformed strings"""
        options = options_parse(source)
        assert isinstance(options, dict)

    def test_unterminated_quote_kept_raw(self):
        """An unterminated quote is kept as a bare value"""
        assert options_parse('ruby caption="oops')["caption"] == '"oops'

    def test_dashed_flag_degrades_to_flag(self):
        """Punctuation around a key is skipped, the key becomes a flag"""
        assert options_parse("ruby --wrap")["wrap"] is True


class TestFragmentScan:
    """Test fragment scanning directly"""

    def test_fragment_shapes(self):
        """Quoted, bracket, bare and flag fragments in source order"""
        parser = OptionParser("")
        fragments = parser.fragments_scan('a="x y" b=[1, 2] c=d e')

        assert [f.key for f in fragments] == ["a", "b", "c", "e"]
        assert fragments[0].value == '"x y"'
        assert fragments[0].is_quoted
        assert fragments[1].value == "[1, 2]"
        assert fragments[1].is_bracketed
        assert fragments[2].value == "d"
        assert fragments[3].is_flag

    def test_lang_extract(self):
        """Language token is split off the front"""
        extracted = OptionParser("").lang_extract("ruby caption=x")

        assert extracted.lang == "ruby"
        assert extracted.remaining == "caption=x"
