"""
Token stream and tokenizer interface models

The render pipeline never talks to Pygments directly. It goes through a
Tokenizer, so tests can swap in a stub with the same three methods.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple

from pygments import token as pygments_token


# Class of Pygments token types (Token.Keyword, Token.Name.Function, ...)
TokenType = type(pygments_token.Token)

# (token type, text) pair as produced by Lexer.get_tokens()
Token = Tuple[TokenType, str]

# One formatter stage: consumes tokens, produces markup
Formatter = Callable[[Iterable[Token]], str]


class Tokenizer(Protocol):
    """
    Lexer registry plus tokenizing capability

    Implementations:
        PygmentsTokenizer (lib.tokenizer) - backed by pygments.lexers
    """

    def find_grammar(self, name: str, options: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        """Look up a grammar by name or alias, configured with options; None if unknown"""
        ...

    def fallback_grammar(self) -> Any:
        """Grammar used when no usable name was given (plain text)"""
        ...

    def tokenize(self, grammar: Any, text: str) -> Iterable[Token]:
        """Produce a fresh token stream for text"""
        ...


def lines_split(tokens: Iterable[Token]) -> List[List[Token]]:
    """
    Split a token stream into per-line token lists

    Newlines are consumed: a token spanning several lines is cut into one
    piece per line with the same token type. A trailing newline does not
    open an extra empty line.

    Args:
        tokens: Token stream

    Returns:
        One list of tokens per source line

    Example:
        [(Name, "a\\n"), (Name, "b")] -> [[(Name, "a")], [(Name, "b")]]
        [(Text, "a\\n\\nb\\n")] -> [[(Text, "a")], [], [(Text, "b")]]
    """
    lines: List[List[Token]] = []
    current: List[Token] = []
    pending = False

    for ttype, value in tokens:
        parts = value.split('\n')
        for part in parts[:-1]:
            if part:
                current.append((ttype, part))
            lines.append(current)
            current = []
            pending = False
        if parts[-1]:
            current.append((ttype, parts[-1]))
            pending = True

    if pending:
        lines.append(current)

    return lines
