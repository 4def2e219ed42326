"""
Document title extraction

The title of a document is its first top-level <h1> heading. Extraction
removes the heading's token run (heading_open, inline, heading_close) from the
stream and keeps the inline children so the title can be rendered with its
inline formatting intact.
"""

from typing import List, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..models.parser import TitleExtraction
from ..models.environment import Environment


def titleHeading_find(tokens: List[Token]) -> Optional[int]:
    """
    Locate the first top-level <h1> opening token

    Args:
        tokens: Block-level token sequence

    Returns:
        Index of the heading_open token, or None if there is none
    """
    for index, token in enumerate(tokens):
        if token.type == 'heading_open' and token.tag == 'h1' and token.level == 0:
            return index
    return None


def title_extract(tokens: List[Token]) -> TitleExtraction:
    """
    Split the title heading off a token sequence

    Args:
        tokens: Block-level token sequence from the engine

    Returns:
        TitleExtraction with the bare title text, the remaining tokens and the
        heading's inline children. Without a title heading, the title is ""
        and tokens is the input sequence itself.
    """
    start = titleHeading_find(tokens)
    if start is None:
        return TitleExtraction(title="", tokens=tokens)

    # The run ends at the heading_close on the same nesting level
    end = start + 1
    while end < len(tokens) and not (
        tokens[end].type == 'heading_close' and tokens[end].level == tokens[start].level
    ):
        end += 1

    title = ""
    title_tokens: List[Token] = []
    for token in tokens[start + 1:end]:
        if token.type == 'inline':
            title = token.content
            title_tokens = list(token.children or [])
            break

    return TitleExtraction(
        title=title,
        tokens=tokens[:start] + tokens[end + 1:],
        title_tokens=title_tokens,
    )


def title_render(extraction: TitleExtraction, md: MarkdownIt, env: Environment) -> str:
    """
    Turn an extraction result into the title string

    A heading made of more than one inline token carries formatting (emphasis,
    code, links), so its title is the rendered HTML of those tokens. A single
    text token yields the bare inline text.
    """
    if len(extraction.title_tokens) > 1:
        return md.renderer.render(extraction.title_tokens, md.options, env)
    return extraction.title
