"""
codetag - Option parsing and highlighted markup for a blog's code tag

Renders {% code lang opts %}...{% endcode %} blocks to HTML with Pygments.
"""

__version__ = "1.0.0"

from .options import OptionParser, options_parse
from .registry import OptionRegistry
from .tokenizer import PygmentsTokenizer
from .renderer import CodeRenderer, code_render, tag_render
from .document import Document
from .log import LOG, state_connectToLogger

__all__ = [
    "OptionParser",
    "options_parse",
    "OptionRegistry",
    "PygmentsTokenizer",
    "CodeRenderer",
    "code_render",
    "tag_render",
    "Document",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
