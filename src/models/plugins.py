"""
Plugin specification and option models

Defines the descriptor of a pipeline plugin and the options object every
plugin receives when it is applied to the engine.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, TYPE_CHECKING

from markdown_it import MarkdownIt
from markdown_it.token import Token

if TYPE_CHECKING:
    from .environment import Environment


ProcessorFn = Callable[[List[Token], MarkdownIt, "Environment"], Awaitable[List[Token]]]
ApplyFn = Callable[[MarkdownIt, "PluginOptions"], None]


@dataclass
class PluginOptions:
    """
    Options composed for a plugin at registration time

    Attributes:
        conditions_in_code: Evaluate conditions inside fenced code blocks
        vars: Variable bindings for templating plugins
        path: Path of the source document, if known
        extract_title: Whether the pipeline extracts the document title
        title_extractor: Title extraction strategy used by the parser
        disable_liquid: Disable Liquid-style templating
        log: Logger callable (message, level=1)
        config: The plugin's own configuration (PluginSpec.config)
        custom: Every configuration key the pipeline does not consume itself
    """
    conditions_in_code: bool = False
    vars: Dict[str, Any] = field(default_factory=dict)
    path: Optional[str] = None
    extract_title: bool = False
    title_extractor: Optional[Callable[..., Any]] = None
    disable_liquid: bool = False
    log: Optional[Callable[..., None]] = None
    config: Dict[str, Any] = field(default_factory=dict)
    custom: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a plugin config value, then a custom option, by name"""
        if name in self.config:
            return self.config[name]
        return self.custom.get(name, default)


@dataclass
class PluginSpec:
    """
    Specification of a pipeline plugin

    A plugin may contribute parse-time syntax (apply), an asynchronous
    post-parse token transform (process), or both. Both capabilities share the
    plugin's position in the configured order.

    Attributes:
        name: Plugin name, used in logs
        apply: Registration function (md, options) -> None, run once when the
               pipeline is built
        process: Async transform (tokens, md, env) -> tokens, run once per
                 process() call
        config: Plugin-specific configuration, exposed as PluginOptions.config
        description: Human-readable description

    Example:
        >>> async def shout(tokens, md, env):
        ...     return tokens
        >>> spec = PluginSpec(name='shout', process=shout)
        >>> spec.has_processor
        True
    """
    name: str
    apply: Optional[ApplyFn] = None
    process: Optional[ProcessorFn] = None
    config: Dict[str, Any] = field(default_factory=dict)
    description: str = ""

    @property
    def has_processor(self) -> bool:
        return self.process is not None
