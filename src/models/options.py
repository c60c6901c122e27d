"""
Option specification and parser data models

Defines the known option keys of the code tag, how their values are typed,
and the intermediate structures the option parser returns.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


# A parsed option value: bare flag, string, or expanded line list
OptionValue = Union[bool, str, List[int]]

# Mapping produced by OptionParser.parse()
ParsedOptions = Dict[str, OptionValue]


class OptionKind(Enum):
    """
    How an option's value is interpreted

    SCALAR options keep quoted and bracketed values as strings.
    LINES options expand their value into a list of 1-based line numbers.
    """
    SCALAR = "scalar"    # lang, caption
    LINES = "lines"      # highlight


@dataclass
class OptionSpec:
    """
    Specification for a code tag option

    Attributes:
        name: Canonical option key
        kind: How values for this key are converted
        description: Human-readable description
        aliases: Alternative keys accepted in the option string
        examples: Example option strings
    """
    name: str
    kind: OptionKind
    description: str
    aliases: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)


# Keys with special meaning to the render pipeline
LANG_OPTION = 'lang'
CAPTION_OPTION = 'caption'
HIGHLIGHT_OPTION = 'highlight'
LEXER_OPTIONS_OPTION = 'lexer_options'


@dataclass
class OptionFragment:
    """
    One key[=value] fragment found in an option string

    Attributes:
        key: Option key as written (before alias resolution)
        value: Raw value text including quotes/brackets, None for bare flags
        position: Character offset of the fragment in the scanned text

    Example:
        For 'caption="Hi there"':
        OptionFragment(key="caption", value='"Hi there"', position=0)
    """
    key: str
    value: Optional[str]
    position: int

    @property
    def is_flag(self) -> bool:
        return self.value is None

    @property
    def is_quoted(self) -> bool:
        return (
            self.value is not None
            and len(self.value) >= 2
            and self.value.startswith('"')
            and self.value.endswith('"')
        )

    @property
    def is_bracketed(self) -> bool:
        return (
            self.value is not None
            and len(self.value) >= 2
            and self.value.startswith('[')
            and self.value.endswith(']')
        )


@dataclass
class ExtractedLang:
    """
    Result of pulling the implicit language token off an option string

    Attributes:
        lang: The language token, or None if the first token held '='
        remaining: Option string with the language token removed
    """
    lang: Optional[str]
    remaining: str
