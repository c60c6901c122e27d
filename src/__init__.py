"""
codetag - Option parsing and highlighted markup for a blog's code tag

Renders {% code lang opts %}...{% endcode %} blocks to HTML with Pygments.
"""

__version__ = "1.0.0"

from .lib import (
    OptionParser,
    options_parse,
    CodeRenderer,
    code_render,
    tag_render,
    Document,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "OptionParser",
    "options_parse",
    "CodeRenderer",
    "code_render",
    "tag_render",
    "Document",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
