"""
Pygments-backed tokenizer

Wraps pygments.lexers lookup and Lexer.get_tokens() behind the Tokenizer
interface used by the render pipeline. Lexer options (tabsize, stripall,
...) arrive as a dict already parsed from the 'lexer_options' tag option.
"""

from typing import Any, Dict, Iterable, Optional

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.util import ClassNotFound, OptionError

from ..config import appsettings
from ..models.tokens import Token
from .log import LOG


class PygmentsTokenizer:
    """
    Tokenizer using the Pygments lexer registry

    Lexers are created with stripnl=False: the renderer trims the code
    itself and internal blank lines must survive.
    """

    def __init__(self, fallback_language: Optional[str] = None) -> None:
        """
        Args:
            fallback_language: Lexer alias for unknown/missing languages
                               (default: appsettings.fallback_language)
        """
        self.fallback_language = fallback_language or appsettings.fallback_language

    def find_grammar(self, name: str, options: Optional[Dict[str, Any]] = None) -> Optional[Lexer]:
        """
        Look up a lexer by name or alias

        Args:
            name: Lexer name or alias
            options: Keyword options for the lexer

        Returns:
            Configured Lexer instance, or None if the name is unknown
        """
        if not name:
            return None

        lexer_options = dict(options or {})
        lexer_options['stripnl'] = False

        try:
            return get_lexer_by_name(name, **lexer_options)
        except ClassNotFound:
            LOG(f"No lexer found for '{name}'", level=2)
            return None
        except OptionError as e:
            LOG(f"Lexer options for '{name}' rejected: {e}", level=2)
            return get_lexer_by_name(name, stripnl=False)

    def fallback_grammar(self) -> Lexer:
        """Plain text lexer (or the configured fallback if it exists)"""
        lexer = self.find_grammar(self.fallback_language)
        if lexer is None:
            lexer = TextLexer(stripnl=False)
        return lexer

    def tokenize(self, grammar: Lexer, text: str) -> Iterable[Token]:
        """Tokenize text; lexer errors propagate to the caller"""
        return grammar.get_tokens(text)
