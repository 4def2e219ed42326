"""
Document metadata from YAML front matter

    ---
    title: Guide
    tags: [intro]
    ---

The front matter block is parsed by mdit-py-plugins and its YAML body is
merged into Environment.meta. Malformed YAML is reported and ignored.
"""

from typing import Any, Dict

import yaml
from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from mdit_py_plugins.front_matter import front_matter_plugin

from ...models.plugins import PluginOptions
from ..log import WARN


def meta_load(content: str, meta: Dict[str, Any], options: PluginOptions) -> None:
    """Merge a YAML front matter body into meta"""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as error:
        WARN(f"Ignoring malformed front matter: {error}")
        return

    if isinstance(data, dict):
        meta.update(data)
        if options.log:
            options.log(f"Front matter keys: {', '.join(map(str, data))}", level=2)
    elif data is not None:
        WARN("Ignoring front matter that is not a mapping")


def meta_apply(md: MarkdownIt, options: PluginOptions) -> None:
    """Register front matter syntax and the metadata collection rule"""
    front_matter_plugin(md)

    def meta_rule(state: StateCore) -> None:
        for index, token in enumerate(state.tokens):
            if token.type != 'front_matter':
                continue

            # front matter never reaches the renderer
            del state.tokens[index]
            meta_load(token.content, state.env.meta, options)
            return

    md.core.ruler.push('meta', meta_rule)
