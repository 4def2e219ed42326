"""
Syntax extensions provided by mdit-py-plugins
"""

from markdown_it import MarkdownIt
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin

from ...models.plugins import PluginOptions


def deflist_apply(md: MarkdownIt, options: PluginOptions) -> None:
    """Definition lists (term line followed by ': definition')"""
    deflist_plugin(md)


def footnote_apply(md: MarkdownIt, options: PluginOptions) -> None:
    """Footnote references and definitions ([^1] / [^1]: text)"""
    footnote_plugin(md, inline=options.get('footnote_inline', True))
