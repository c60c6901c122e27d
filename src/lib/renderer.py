"""
Render pipeline for the code tag

Transforms (ParsedOptions, code body) into the final HTML string:

    lang -> grammar -> tokens -> formatter chain -> markup

Rendering is a pure function of its inputs and the (read-only) lexer
registry. Unknown languages fall back to plain text; only errors raised
by the tokenizer itself propagate.
"""

import re
from typing import Any, Dict, List, Optional

from ..config import AppSettings, appsettings
from ..models.options import (
    ParsedOptions,
    LANG_OPTION,
    CAPTION_OPTION,
    HIGHLIGHT_OPTION,
    LEXER_OPTIONS_OPTION,
)
from ..models.tokens import Tokenizer
from .formatters import chain_build
from .options import options_parse, lexerOptions_parse
from .tokenizer import PygmentsTokenizer
from .log import LOG


LEADING_OR_TRAILING_LINE_TERMINATORS = re.compile(r'\A[\n\r]+|[\n\r]+\Z')


class CodeRenderer:
    """
    Renders one code tag invocation to HTML

    Responsibilities:
    - Select a grammar from options['lang'] and options['lexer_options']
      (fallback: plain text)
    - Trim leading/trailing line terminators from the code
    - Tokenize and run the formatter chain
    """

    def __init__(
        self,
        tokenizer: Optional[Tokenizer] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Args:
            tokenizer: Tokenizer implementation (default: PygmentsTokenizer)
            settings: Optional AppSettings (default: appsettings)
        """
        self.settings = settings or appsettings
        self.tokenizer = tokenizer or PygmentsTokenizer(self.settings.fallback_language)

    def render(self, options: ParsedOptions, code: str) -> str:
        """
        Render code with the given options

        Args:
            options: Parsed option mapping
            code: Raw tag body

        Returns:
            Complete <figure> markup

        Raises:
            Whatever the tokenizer raises while lexing
        """
        grammar = self.grammar_select(
            options.get(LANG_OPTION), self.lexerOptions_get(options)
        )
        tokens = self.tokenizer.tokenize(grammar, self.content_trim(code))

        formatter = chain_build(
            highlight_lines=self.highlightLines_get(options),
            caption=self.caption_get(options),
            settings=self.settings,
        )
        return formatter(tokens)

    def grammar_select(self, lang: Any, lexer_options: Optional[Dict[str, str]] = None) -> Any:
        """
        Resolve a language name to a grammar, never failing

        Non-string values (a bare 'lang' flag) and empty names count as
        missing.
        """
        grammar = None
        if isinstance(lang, str) and lang:
            grammar = self.tokenizer.find_grammar(lang, lexer_options or {})
            if grammar is None:
                LOG(f"Unknown language '{lang}', using plain text", level=2)
        if grammar is None:
            grammar = self.tokenizer.fallback_grammar()
        return grammar

    def content_trim(self, code: str) -> str:
        """
        Strip leading and trailing runs of line terminators

        Internal blank lines and other leading whitespace are kept.

        Example:
            '\\n\\n  a\\n\\nb\\n' -> '  a\\n\\nb'
        """
        return LEADING_OR_TRAILING_LINE_TERMINATORS.sub('', code or '')

    def highlightLines_get(self, options: ParsedOptions) -> List[int]:
        value = options.get(HIGHLIGHT_OPTION)
        if isinstance(value, list):
            return value
        return []

    def caption_get(self, options: ParsedOptions) -> Optional[str]:
        value = options.get(CAPTION_OPTION)
        if isinstance(value, str):
            return value
        return None

    def lexerOptions_get(self, options: ParsedOptions) -> Dict[str, str]:
        value = options.get(LEXER_OPTIONS_OPTION)
        if isinstance(value, str):
            return lexerOptions_parse(value)
        return {}


def code_render(options: ParsedOptions, code: str, tokenizer: Optional[Tokenizer] = None) -> str:
    """Render code with parsed options (functional shortcut for CodeRenderer)"""
    return CodeRenderer(tokenizer=tokenizer).render(options, code)


def tag_render(option_string: str, code: str, tokenizer: Optional[Tokenizer] = None) -> str:
    """
    Render a full tag invocation: option string plus body

    Example:
        >>> html = tag_render('text caption="demo"', 'a\\nb\\nc')
        >>> 'demo' in html
        True
    """
    return code_render(options_parse(option_string), code, tokenizer=tokenizer)
