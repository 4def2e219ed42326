"""
Parser-specific data models

Type-safe structures for title and heading extraction results.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from markdown_it.token import Token


@dataclass
class Heading:
    """
    Descriptor of one heading found in the token stream

    Attributes:
        level: Heading level, 1 for <h1> through 6 for <h6>
        title: Heading rendered as plain text (inline markup dropped, its text
               kept)
        id: Value of the heading's id attribute (None if it has none)
        items: Nested descriptors of deeper headings that follow this one
               (always empty in flat mode)

    Example:
        For "## Install {#setup}" followed by "### Linux":
        Heading(level=2, title="Install", id="setup", items=[
            Heading(level=3, title="Linux", id="linux", items=[])
        ])
    """
    level: int
    title: str
    id: Optional[str] = None
    items: List['Heading'] = field(default_factory=list)

    @property
    def href(self) -> Optional[str]:
        """In-page link target, or None for headings without an id"""
        return f"#{self.id}" if self.id else None


@dataclass
class TitleExtraction:
    """
    Result of looking for the document title heading

    Returned by title_extract() after scanning a token sequence for the first
    top-level <h1>.

    Attributes:
        title: Bare inline text of the heading ("" when no heading was found)
        tokens: Token sequence with the heading's open/inline/close run removed
                (the input sequence unchanged when no heading was found)
        title_tokens: Inline child tokens of the heading, used to render the
                      title as HTML when it carries inline formatting

    Example:
        Input tokens for "# Hello **World**\\n\\nText":
        TitleExtraction(
            title="Hello **World**",
            tokens=[paragraph_open, inline, paragraph_close],
            title_tokens=[text, strong_open, text, strong_close]
        )
    """
    title: str
    tokens: List[Token]
    title_tokens: List[Token] = field(default_factory=list)
