"""
Parser for code tag option strings

Turns the text after the tag name into a ParsedOptions mapping.

    {% code ruby caption="Hello World" highlight=[1,3,5-7] %}
              └────────────── option string ─────────────┘

The parser operates in two phases:
1. Language extraction: the first whitespace-delimited token becomes
   'lang' when it holds no '=' and does not start with a quote
2. Fragment conversion: the rest is scanned for key="quoted",
   key=[list], key=value and bare key fragments

Parsing never raises. Fragments that cannot be understood are skipped or
kept as flags, and the problem is reported through LOG().

Example:
    >>> OptionParser('ruby caption="Hello World" highlight=[1,3,5-7]').parse()
    {'lang': 'ruby', 'caption': 'Hello World', 'highlight': [1, 3, 5, 6, 7]}
"""

import re
from typing import Dict, Iterable, List, Optional

from ..models.options import (
    OptionKind,
    OptionValue,
    ParsedOptions,
    OptionFragment,
    ExtractedLang,
    LANG_OPTION,
    LEXER_OPTIONS_OPTION,
)
from .registry import OptionRegistry
from .log import LOG


# Precedence: key="quoted", key=[bracket list], key=bare, key
FRAGMENT_PATTERN = re.compile(
    r'(?P<key>\w+)(?:=(?P<value>"[^"]*"|\[[^\]]*\]|\S+))?'
)

RANGE_PATTERN = re.compile(r'^(\d+)\s*-\s*(\d+)$')
NUMBER_PATTERN = re.compile(r'^\d+$')

# A lexer name: one token without '=' or quotes
LANG_NAME_PATTERN = re.compile(r'^[^\s="]+$')

LEXER_OPTION_SEPARATOR = re.compile(r'[&\s]+')


class OptionParser:
    """
    Parser for code tag option strings

    Handles:
    - Implicit language as first bare token
    - Quoted values with spaces
    - Bracket line lists with inclusive ranges ([1,3,5-7])
    - Bare flags (key -> True)
    - Aliased keys (lines -> highlight)
    """

    def __init__(self, source: str, registry: Optional[OptionRegistry] = None):
        """
        Initialize parser with an option string

        Args:
            source: Raw option string (may be empty)
            registry: Optional OptionRegistry describing known keys
        """
        self.source = source or ''
        if registry is None:
            registry = OptionRegistry()
        self.registry = registry

    def parse(self) -> ParsedOptions:
        """
        Parse the option string into a mapping

        Returns:
            ParsedOptions dict. Empty for an empty/whitespace-only string.
            Repeated keys: the last occurrence wins.

        Example:
            >>> OptionParser('python linenos').parse()
            {'lang': 'python', 'linenos': True}
        """
        options: ParsedOptions = {}
        if not self.source.strip():
            return options

        extracted = self.lang_extract(self.source)
        if extracted.lang is not None:
            LOG(f"Language token: {extracted.lang}", level=3)
            self.lang_store(options, extracted.lang)

        for fragment in self.fragments_scan(extracted.remaining):
            key = self.registry.key_resolve(fragment.key)
            value = self.value_convert(key, fragment)
            if key in options:
                LOG(f"Option '{key}' repeated; last value wins", level=2)
            if key == LANG_OPTION:
                self.lang_store(options, value)
            else:
                options[key] = value

        return options

    def lang_extract(self, source: str) -> ExtractedLang:
        """
        Pull the implicit language token off the front of the option string

        Only the first whitespace-delimited token is eligible, and only if
        it contains no '=' and does not start with a quote.

        Args:
            source: Option string

        Returns:
            ExtractedLang with the language (or None) and the remaining text

        Example:
            'ruby caption=x' -> ExtractedLang(lang='ruby', remaining='caption=x')
            'caption=x ruby' -> ExtractedLang(lang=None, remaining='caption=x ruby')
        """
        parts = source.strip().split(None, 1)
        if not parts or '=' in parts[0] or parts[0].startswith('"'):
            return ExtractedLang(lang=None, remaining=source.strip())

        remaining = parts[1] if len(parts) > 1 else ''
        return ExtractedLang(lang=parts[0], remaining=remaining)

    def lang_store(self, options: ParsedOptions, value: OptionValue) -> None:
        """
        Store a language value, keeping 'lang' a bare lexer name

        Names with a '?query' tail are split: the name goes to
        'lang' and the query to 'lexer_options'. Values that are not a
        single unquoted token without '=' (flags, quoted phrases) are
        dropped.

        Example:
            'python?tabsize=4' -> lang='python', lexer_options='tabsize=4'
        """
        if not isinstance(value, str):
            LOG("Option 'lang' without a value ignored", level=2)
            return

        name, _, query = value.partition('?')
        if not LANG_NAME_PATTERN.match(name):
            LOG(f"Invalid language name '{value}' ignored", level=2)
            return

        options[LANG_OPTION] = name
        if query:
            options[LEXER_OPTIONS_OPTION] = query

    def fragments_scan(self, text: str) -> List[OptionFragment]:
        """
        Split text into key[=value] fragments

        Characters that cannot start a key (stray quotes, punctuation) are
        skipped over.

        Args:
            text: Option string without the language token

        Returns:
            Fragments in source order
        """
        fragments = []
        for match in FRAGMENT_PATTERN.finditer(text):
            fragments.append(OptionFragment(
                key=match.group('key'),
                value=match.group('value'),
                position=match.start(),
            ))
        return fragments

    def value_convert(self, key: str, fragment: OptionFragment) -> OptionValue:
        """
        Convert a fragment's raw value according to the key's kind

        Rules:
            bare flag                 -> True
            LINES key                 -> expanded line list (any syntax)
            quoted value              -> string without quotes
            bracket value, SCALAR key -> bracket text verbatim
            bracket value, other key  -> expanded integer list
            anything else             -> the raw string

        Args:
            key: Canonical option key
            fragment: Scanned fragment

        Returns:
            Converted value
        """
        if fragment.value is None:
            return True

        kind = self.registry.kind_get(key)
        raw = fragment.value

        if kind == OptionKind.LINES:
            if fragment.is_quoted:
                return self.lines_expand(raw[1:-1].split())
            if fragment.is_bracketed:
                return self.lines_expand(raw[1:-1].split(','))
            return self.lines_expand([raw])

        if fragment.is_quoted:
            return raw[1:-1]

        if fragment.is_bracketed and kind != OptionKind.SCALAR:
            return self.lines_expand(raw[1:-1].split(','))

        return raw

    def lines_expand(self, elements: Iterable[str]) -> List[int]:
        """
        Expand list elements into line numbers

        Each element is either an integer ("4") or an inclusive range
        ("5-9"). First-appearance order is kept and duplicates are dropped.

        Skipped (and logged):
            - non-numeric elements ("x", "1-b")
            - inverted ranges ("9-5") expand to nothing
            - zero (lines are 1-based)

        Args:
            elements: Raw element strings

        Returns:
            Line numbers

        Example:
            ['1', '3', '5-7'] -> [1, 3, 5, 6, 7]
        """
        lines: List[int] = []

        for element in elements:
            element = element.strip()
            if not element:
                continue

            range_match = RANGE_PATTERN.match(element)
            if range_match:
                start, end = int(range_match.group(1)), int(range_match.group(2))
                if start > end:
                    LOG(f"Inverted line range '{element}' ignored", level=2)
                    continue
                candidates = range(start, end + 1)
            elif NUMBER_PATTERN.match(element):
                candidates = range(int(element), int(element) + 1)
            else:
                LOG(f"Malformed line element '{element}' ignored", level=2)
                continue

            for line in candidates:
                if line < 1:
                    LOG("Line number 0 ignored (lines are 1-based)", level=2)
                    continue
                if line not in lines:
                    lines.append(line)

        return lines


def options_parse(source: str, registry: Optional[OptionRegistry] = None) -> ParsedOptions:
    """
    Parse an option string (functional shortcut for OptionParser)

    Args:
        source: Raw option string
        registry: Optional OptionRegistry

    Returns:
        ParsedOptions mapping
    """
    return OptionParser(source, registry=registry).parse()


def lexerOptions_parse(query: str) -> Dict[str, str]:
    """
    Parse a lexer_options value into keyword options for the lexer

    Pairs are 'key=value', separated by '&' or whitespace. Pairs without
    '=' or with an empty key are dropped.

    Example:
        >>> lexerOptions_parse('tabsize=4&stripall=1 x')
        {'tabsize': '4', 'stripall': '1'}
    """
    lexer_options: Dict[str, str] = {}
    if not query:
        return lexer_options

    for pair in LEXER_OPTION_SEPARATOR.split(query.strip()):
        key, sep, value = pair.partition('=')
        if not sep or not key:
            LOG(f"Lexer option '{pair}' ignored", level=2)
            continue
        lexer_options[key] = value

    return lexer_options
