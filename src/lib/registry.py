"""
Option registry for the code tag

Maps option keys (and their aliases) to OptionSpec records so the option
parser knows which keys expect line lists and which keep scalar text.
"""

from typing import Dict, List, Optional

from ..models.options import (
    OptionSpec,
    OptionKind,
    LANG_OPTION,
    CAPTION_OPTION,
    HIGHLIGHT_OPTION,
    LEXER_OPTIONS_OPTION,
)


class OptionRegistry:
    """
    Registry of option specifications

    Keys not present in the registry are still accepted by the parser;
    they are simply typed generically.
    """

    def __init__(self) -> None:
        """Initialize the registry and register the built-in options"""
        self.specs: Dict[str, OptionSpec] = {}
        self.builtinOptions_register()

    def register(self, spec: OptionSpec) -> None:
        """Register an option specification under its name and aliases"""
        self.specs[spec.name] = spec
        for alias in spec.aliases:
            self.specs[alias] = spec

    def get(self, key: str) -> Optional[OptionSpec]:
        """Get the spec handling key, or None for unknown keys"""
        return self.specs.get(key)

    def key_resolve(self, key: str) -> str:
        """
        Map an alias to its canonical key

        Args:
            key: Key as written in the option string

        Returns:
            Canonical key, or key unchanged if unregistered

        Example:
            >>> OptionRegistry().key_resolve('lines')
            'highlight'
        """
        spec = self.get(key)
        return spec.name if spec else key

    def kind_get(self, key: str) -> Optional[OptionKind]:
        """Value kind for key, None for unregistered keys"""
        spec = self.get(key)
        return spec.kind if spec else None

    def options_list(self) -> List[OptionSpec]:
        """Distinct registered specs in registration order"""
        seen: List[OptionSpec] = []
        for spec in self.specs.values():
            if spec not in seen:
                seen.append(spec)
        return seen

    def builtinOptions_register(self) -> None:
        """Register lang, caption, highlight and lexer_options"""

        self.register(OptionSpec(
            name=LANG_OPTION,
            kind=OptionKind.SCALAR,
            description='Lexer name or alias; also taken from the first bare token',
            aliases=['language'],
            examples=['ruby', 'lang=python', 'language=go'],
        ))

        self.register(OptionSpec(
            name=CAPTION_OPTION,
            kind=OptionKind.SCALAR,
            description='Caption rendered above the code block',
            aliases=['title'],
            examples=['caption="config/app.rb"', 'caption=demo'],
        ))

        self.register(OptionSpec(
            name=HIGHLIGHT_OPTION,
            kind=OptionKind.LINES,
            description='1-based line numbers to emphasize',
            aliases=['lines', 'hl_lines'],
            examples=['highlight=[1,3,5-7]', 'lines="2 4"', 'highlight=3'],
        ))

        self.register(OptionSpec(
            name=LEXER_OPTIONS_OPTION,
            kind=OptionKind.SCALAR,
            description="Options passed to the lexer, 'key=value' pairs joined by '&' or spaces",
            examples=['lexer_options="tabsize=4 stripall=1"', 'lexer_options=tabsize=4&stripall=1'],
        ))
