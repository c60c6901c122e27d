"""
Block tag scanner for documents

Finds code tag invocations in a document and replaces each one with its
rendered markup:

    Some text
    {% code ruby caption="app.rb" highlight=[2] %}
    class App
      def call; end
    end
    {% endcode %}
    More text

Whitespace-control dashes ({%- ... -%}) are accepted. Text outside tags
is left untouched, as is an opening tag without a matching close.
"""

import re
from typing import List, Optional, Pattern

from ..config import AppSettings, appsettings
from ..models.document import TagInvocation
from .options import options_parse
from .renderer import CodeRenderer
from .log import LOG


def tagPattern_make(tag_name: str) -> Pattern[str]:
    """
    Build the block tag regex for a tag name

    The body may not contain another opening tag, so an unclosed tag
    cannot swallow the next invocation.

    Args:
        tag_name: Tag name (e.g. "code" for {% code %}...{% endcode %})

    Returns:
        Compiled pattern with 'options' and 'body' groups
    """
    name = re.escape(tag_name)
    opening = r'\{%-?\s*' + name + r'\b'
    return re.compile(
        opening + r'(?P<options>[^\n]*?)-?%\}'
        r'(?P<body>(?:(?!' + opening + r').)*?)'
        r'\{%-?\s*end' + name + r'\s*-?%\}',
        re.DOTALL,
    )


class Document:
    """
    A text document containing code tag invocations
    """

    def __init__(
        self,
        source: str,
        renderer: Optional[CodeRenderer] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Args:
            source: Document text
            renderer: CodeRenderer used for each tag (default: Pygments-backed)
            settings: Optional AppSettings (default: appsettings)
        """
        self.source = source
        self.settings = settings or appsettings
        self.renderer = renderer or CodeRenderer(settings=self.settings)
        self.pattern = tagPattern_make(self.settings.tag_name)
        self.tags_rendered = 0

    def invocations_find(self) -> List[TagInvocation]:
        """
        Locate every tag invocation in source order

        Returns:
            TagInvocation records with offsets and opening line numbers
        """
        invocations = []
        for match in self.pattern.finditer(self.source):
            invocations.append(TagInvocation(
                option_string=match.group('options').strip(),
                body=match.group('body'),
                start=match.start(),
                end=match.end(),
                line_number=self.source.count('\n', 0, match.start()) + 1,
            ))
        return invocations

    def render(self) -> str:
        """
        Replace every tag invocation with rendered markup

        The number of substituted tags is kept in tags_rendered.

        Returns:
            Document text with tags substituted

        Raises:
            Whatever the tokenizer raises while lexing a tag body
        """
        invocations = self.invocations_find()
        LOG(f"Found {len(invocations)} code tag(s)", level=2)
        self.tags_rendered = 0

        parts = []
        position = 0
        for invocation in invocations:
            LOG(
                f"Rendering tag at line {invocation.line_number}: '{invocation.option_string}'",
                level=3,
            )
            options = options_parse(invocation.option_string)
            parts.append(self.source[position:invocation.start])
            parts.append(self.renderer.render(options, invocation.body))
            self.tags_rendered += 1
            position = invocation.end

        parts.append(self.source[position:])
        return ''.join(parts)
