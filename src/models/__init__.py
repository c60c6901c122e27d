"""
Models package for codetag

Contains data structures and type definitions for option parsing and rendering.
"""

from .state import ProgramState, pipeline
from .options import (
    OptionKind,
    OptionSpec,
    OptionValue,
    ParsedOptions,
    OptionFragment,
    ExtractedLang,
)
from .tokens import Token, TokenType, Formatter, Tokenizer, lines_split
from .document import TagInvocation

__all__ = [
    "ProgramState",
    "pipeline",
    "OptionKind",
    "OptionSpec",
    "OptionValue",
    "ParsedOptions",
    "OptionFragment",
    "ExtractedLang",
    "Token",
    "TokenType",
    "Formatter",
    "Tokenizer",
    "lines_split",
    "TagInvocation",
]
