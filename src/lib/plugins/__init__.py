"""
Built-in plugins for mdtransform

DEFAULT_PLUGINS is the plugin order used when TransformOptions.plugins is not
set. The attribute plugin is not part of it: the pipeline always applies it
first, with the configured delimiters.
"""

from typing import Tuple

from ...models.plugins import PluginSpec
from .attrs import attrs_apply
from .anchors import anchors_apply
from .assets import assets_apply
from .extensions import deflist_apply, footnote_apply
from .meta import meta_apply
from .term import term_process


def attrsPlugin_make(left_delimiter: str, right_delimiter: str) -> PluginSpec:
    """Attribute plugin spec configured with a delimiter pair"""
    return PluginSpec(
        name='attrs',
        apply=attrs_apply,
        config={'left_delimiter': left_delimiter, 'right_delimiter': right_delimiter},
        description='{#id .class key=value} attributes on blocks and inline elements',
    )


metaPlugin = PluginSpec(
    name='meta',
    apply=meta_apply,
    description='YAML front matter collected into env.meta',
)

deflistPlugin = PluginSpec(
    name='deflist',
    apply=deflist_apply,
    description='Definition lists',
)

footnotePlugin = PluginSpec(
    name='footnote',
    apply=footnote_apply,
    description='Footnotes',
)

anchorsPlugin = PluginSpec(
    name='anchors',
    apply=anchors_apply,
    description='Unique id slugs for headings without an explicit id',
)

assetsPlugin = PluginSpec(
    name='assets',
    apply=assets_apply,
    description='Local images and link targets collected into env.assets',
)

termPlugin = PluginSpec(
    name='term',
    process=term_process,
    description='Glossary terms rendered after the document content',
)


DEFAULT_PLUGINS: Tuple[PluginSpec, ...] = (
    metaPlugin,
    deflistPlugin,
    footnotePlugin,
    anchorsPlugin,
    assetsPlugin,
    termPlugin,
)

__all__ = [
    "DEFAULT_PLUGINS",
    "attrsPlugin_make",
    "metaPlugin",
    "deflistPlugin",
    "footnotePlugin",
    "anchorsPlugin",
    "assetsPlugin",
    "termPlugin",
]
