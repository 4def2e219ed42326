"""
Heading anchors

Gives every heading without an explicit {#id} a unique id slug derived from
its text, so heading descriptors always carry a stable identifier.
"""

from typing import Callable, Set

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore

from ...config import appsettings
from ...models.plugins import PluginOptions
from ..headings import headingText_get


def slug_unique(slug: str, used: Set[str]) -> str:
    """First of slug, slug-1, slug-2, ... not in used"""
    candidate = slug
    counter = 1
    while candidate in used:
        candidate = f"{slug}{appsettings.slug_separator}{counter}"
        counter += 1
    return candidate


def anchors_apply(md: MarkdownIt, options: PluginOptions) -> None:
    """Register the heading id core rule on the engine"""
    slug_make: Callable[[str], str] = options.get('slug_make', appsettings.slug_make)

    def anchors_rule(state: StateCore) -> None:
        tokens = state.tokens
        used = {
            str(token.attrGet('id'))
            for token in tokens
            if token.type == 'heading_open' and token.attrGet('id') is not None
        }

        for index, token in enumerate(tokens):
            if token.type != 'heading_open' or token.attrGet('id') is not None:
                continue
            if index + 1 >= len(tokens) or tokens[index + 1].type != 'inline':
                continue

            slug = slug_unique(slug_make(headingText_get(tokens[index + 1])) or 'section', used)
            token.attrSet('id', slug)
            used.add(slug)

    md.core.ruler.push('anchors', anchors_rule)
