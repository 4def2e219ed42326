"""
Heading collection

Walks a token sequence and turns every heading into a Heading descriptor,
either as a tree (deeper headings nested in the items of the closest
shallower heading before them) or as a flat list in document order.

A descriptor carries the heading as plain text. Inline markup is dropped and
only its text is kept, so "## Using *fast* `pip`" becomes "Using fast pip".
The markup itself stays in the token stream for the compiler.
"""

from typing import List

from markdown_it.token import Token

from ..models.parser import Heading


def headingText_get(inline: Token) -> str:
    """Plain text of a heading's inline token"""
    if not inline.children:
        return inline.content

    parts = []
    for child in inline.children:
        if child.type in ('text', 'code_inline', 'html_inline'):
            parts.append(child.content)
        elif child.type in ('softbreak', 'hardbreak'):
            parts.append(' ')
        elif child.type == 'image':
            parts.append(child.content)
    return ''.join(parts).strip()


def headings_collect(tokens: List[Token]) -> List[Heading]:
    """All headings of the sequence in document order, without nesting"""
    headings = []
    for index, token in enumerate(tokens):
        if token.type != 'heading_open':
            continue

        inline = tokens[index + 1] if index + 1 < len(tokens) else None
        title = headingText_get(inline) if inline is not None and inline.type == 'inline' else ''
        heading_id = token.attrGet('id')

        headings.append(Heading(
            level=int(token.tag[1:]),
            title=title,
            id=str(heading_id) if heading_id is not None else None,
        ))
    return headings


def headings_nest(headings: List[Heading]) -> List[Heading]:
    """
    Arrange a flat heading list into a tree

    Each heading becomes a child of the nearest preceding heading with a
    lower level; headings with no such predecessor are roots.

    Example:
        h2 A, h3 B, h3 C, h2 D  ->  [A(items=[B, C]), D]
    """
    roots: List[Heading] = []
    stack: List[Heading] = []

    for heading in headings:
        while stack and stack[-1].level >= heading.level:
            stack.pop()

        if stack:
            stack[-1].items.append(heading)
        else:
            roots.append(heading)
        stack.append(heading)

    return roots


def headings_get(tokens: List[Token], flat: bool = False) -> List[Heading]:
    """
    Heading descriptors for a token sequence

    Args:
        tokens: Block-level token sequence
        flat: Return one ordered list instead of a nested tree

    Returns:
        Heading descriptors, nested unless flat is set
    """
    headings = headings_collect(tokens)
    return headings if flat else headings_nest(headings)
