"""
Formatter stages for the code tag render pipeline

Each stage is a Formatter (tokens -> markup). Wrapping stages take the
previous Formatter and return a new one, so the chain is built by plain
function composition:

    formatter = html_format()
    formatter = lineHighlight_wrap(formatter, highlight_lines=[2])
    formatter = chomp_wrap(formatter)
    formatter = table_wrap(formatter)
    formatter = figure_wrap(formatter, caption="demo")

Order matters: the line stage adds a newline after every line, chomp
removes only the last one, the table counts lines from the raw tokens,
and the figure wraps everything.
"""

from html import escape
from typing import Iterable, List, Optional, Sequence

from pygments.token import STANDARD_TYPES

from ..config import AppSettings, appsettings
from ..models.tokens import Token, TokenType, Formatter, lines_split


FIGURE_TEMPLATE = (
    '<figure class="{figure_class}">'
    '<figcaption>{caption}</figcaption>'
    '<pre><code>{content}</code></pre>'
    '</figure>'
)

TABLE_TEMPLATE = (
    '<table class="{table_class}"><tbody><tr>'
    '<td class="{gutter_class} gl"><pre class="lineno">{line_numbers}</pre></td>'
    '<td class="{code_class}"><pre>{content}</pre></td>'
    '</tr></tbody></table>'
)


def tokenClass_get(ttype: TokenType) -> str:
    """
    Short CSS class for a token type, as Pygments' HTML formatter names it

    Subtypes without their own short name get the nearest ancestor's name
    plus the remaining type path (Token.Name.Foo -> 'nFoo').
    """
    fname = STANDARD_TYPES.get(ttype)
    if fname is not None:
        return fname
    aname = ''
    while fname is None:
        aname = ttype[-1] + aname
        ttype = ttype.parent
        fname = STANDARD_TYPES.get(ttype)
    return fname + aname


def html_format(settings: Optional[AppSettings] = None) -> Formatter:
    """
    Base stage: one <span> per token, classed by token type

    Plain text tokens (empty class) are emitted without a span. Text is
    HTML escaped. Newlines inside tokens pass through unchanged.
    """
    settings = settings or appsettings
    prefix = settings.css_class_prefix

    def format(tokens: Iterable[Token]) -> str:
        parts = []
        for ttype, value in tokens:
            text = escape(value, quote=False)
            css_class = tokenClass_get(ttype)
            if css_class:
                parts.append(f'<span class="{prefix}{css_class}">{text}</span>')
            else:
                parts.append(text)
        return ''.join(parts)

    return format


def lineHighlight_wrap(
    delegate: Formatter,
    highlight_lines: Optional[Sequence[int]] = None,
    settings: Optional[AppSettings] = None,
) -> Formatter:
    """
    Wrap every line in a span, marking the listed 1-based lines

    Output per line: '<span class="line">...</span>\\n', with the
    highlight class added for emphasized lines.
    """
    settings = settings or appsettings
    emphasized = set(highlight_lines or [])

    def format(tokens: Iterable[Token]) -> str:
        parts = []
        for lineno, line_tokens in enumerate(lines_split(tokens), start=1):
            classes = settings.lineClasses_make(lineno in emphasized)
            parts.append(f'<span class="{classes}">{delegate(line_tokens)}</span>\n')
        return ''.join(parts)

    return format


def chomp_wrap(delegate: Formatter) -> Formatter:
    """Remove exactly one trailing line terminator from the whole output"""

    def format(tokens: Iterable[Token]) -> str:
        return markup_chomp(delegate(tokens))

    return format


def markup_chomp(text: str) -> str:
    """
    Strip a single trailing '\\r\\n', '\\n' or '\\r'

    Example:
        >>> markup_chomp('a\\n\\n')
        'a\\n'
    """
    if text.endswith('\r\n'):
        return text[:-2]
    if text.endswith('\n') or text.endswith('\r'):
        return text[:-1]
    return text


def lines_count(tokens: Sequence[Token]) -> int:
    """Number of source lines in a token list (a trailing newline adds none)"""
    count = 0
    last_value = None
    for _, value in tokens:
        if not value:
            continue
        count += value.count('\n')
        last_value = value
    if last_value and not last_value.endswith('\n'):
        count += 1
    return count


def table_wrap(delegate: Formatter, settings: Optional[AppSettings] = None) -> Formatter:
    """
    Two-column table: line-number gutter and code

    The token stream is materialized here since it is needed twice (line
    count and delegate).
    """
    settings = settings or appsettings

    def format(tokens: Iterable[Token]) -> str:
        token_list: List[Token] = list(tokens)
        line_numbers = ''.join(f'{i}\n' for i in range(1, lines_count(token_list) + 1))
        return TABLE_TEMPLATE.format(
            table_class=settings.table_class,
            gutter_class=settings.gutter_class,
            code_class=settings.code_class,
            line_numbers=line_numbers,
            content=delegate(token_list),
        )

    return format


def figure_wrap(
    delegate: Formatter,
    caption: Optional[str] = None,
    settings: Optional[AppSettings] = None,
) -> Formatter:
    """Outer <figure> with a caption slot (empty when caption is None)"""
    settings = settings or appsettings
    caption_html = escape(caption) if caption else ''

    def format(tokens: Iterable[Token]) -> str:
        return FIGURE_TEMPLATE.format(
            figure_class=settings.figure_class,
            caption=caption_html,
            content=delegate(tokens),
        )

    return format


def chain_build(
    highlight_lines: Optional[Sequence[int]] = None,
    caption: Optional[str] = None,
    settings: Optional[AppSettings] = None,
) -> Formatter:
    """
    Compose the full formatter chain

    Args:
        highlight_lines: 1-based lines to emphasize
        caption: Caption text, or None
        settings: Optional AppSettings (default: appsettings)

    Returns:
        Formatter producing the final figure markup
    """
    formatter = html_format(settings)
    formatter = lineHighlight_wrap(formatter, highlight_lines, settings)
    formatter = chomp_wrap(formatter)
    formatter = table_wrap(formatter, settings)
    formatter = figure_wrap(formatter, caption, settings)
    return formatter
