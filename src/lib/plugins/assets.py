"""
Asset collection

Records local files referenced by the document (image sources and relative
link targets) into Environment.assets, in document order and without
duplicates.
"""

from typing import List
from urllib.parse import urlparse

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from ...models.plugins import PluginOptions


def reference_isLocal(url: str) -> bool:
    """True for file paths; False for URLs, in-page anchors and glossary term links"""
    if not url or url.startswith(('#', '*')):
        return False
    parsed = urlparse(url)
    return not parsed.scheme and not parsed.netloc


def assets_find(children: List[Token]) -> List[dict]:
    """Local asset references in a list of inline tokens"""
    found = []
    for child in children:
        if child.type == 'image':
            src = str(child.attrGet('src') or '')
            if reference_isLocal(src):
                found.append({'type': 'image', 'src': src})
        elif child.type == 'link_open':
            href = str(child.attrGet('href') or '')
            if reference_isLocal(href):
                found.append({'type': 'link', 'src': href})
    return found


def assets_apply(md: MarkdownIt, options: PluginOptions) -> None:
    """Register the asset collection rule on the engine"""

    def assets_rule(state: StateCore) -> None:
        assets = state.env.assets
        for token in state.tokens:
            if token.type != 'inline' or not token.children:
                continue
            for asset in assets_find(token.children):
                if asset not in assets:
                    assets.append(asset)

    md.core.ruler.push('assets', assets_rule)
