"""
Document-scanning data models

Type-safe structures for tag invocations found in a document.
"""

from dataclasses import dataclass


@dataclass
class TagInvocation:
    """
    One {% code ... %}...{% endcode %} block found in a document

    Attributes:
        option_string: Raw text after the tag name on the opening tag
        body: Raw text between the opening and closing tags
        start: Character offset of the opening tag
        end: Character offset just past the closing tag
        line_number: 1-based source line of the opening tag (for logging)

    Example:
        For "{% code ruby %}\\nputs 1\\n{% endcode %}" at offset 0:
        TagInvocation(option_string="ruby", body="\\nputs 1\\n",
                      start=0, end=36, line_number=1)
    """
    option_string: str
    body: str
    start: int
    end: int
    line_number: int
