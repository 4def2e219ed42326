"""
Transform options model

Immutable description of one pipeline's configuration. Keys that are not
fields of TransformOptions are kept and forwarded to plugins as custom options.
"""

from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import appsettings
from .plugins import PluginSpec


class SanitizeOptions(BaseModel):
    """
    Allow-list configuration for HTML sanitization

    Attributes:
        tags: Tags kept in the output (None = markdown-oriented defaults)
        attributes: Per-tag allowed attributes, "*" applies to every tag
                    (None = defaults)
        protocols: URL schemes allowed in href/src (None = defaults)
        strip: Remove disallowed tags instead of escaping them
        strip_comments: Remove HTML comments
    """
    model_config = ConfigDict(frozen=True)

    tags: Optional[FrozenSet[str]] = None
    attributes: Optional[Dict[str, List[str]]] = None
    protocols: Optional[FrozenSet[str]] = None
    strip: bool = True
    strip_comments: bool = True


class TransformOptions(BaseModel):
    """
    Configuration of a transform pipeline (read once at construction)

    Attributes:
        allow_html: Pass raw HTML in the source through the parser
        linkify: Detect bare URLs and turn them into links
        linkify_tlds: Extra top-level domains for link detection
        breaks: Render soft line breaks as <br>
        highlight_langs: Fence language -> Pygments lexer class or alias
        extract_title: Remove the first top-level heading and use it as title
        need_title: Derive the title without removing the heading
        title_extractor: Title extraction strategy (None = built-in)
        need_flat_list_headings: Collect headings as a flat list
        plugins: Ordered plugins (None = built-in set)
        left_delimiter: Opening delimiter for {#id .class} attributes
        right_delimiter: Closing delimiter for attributes
        vars: Variable bindings forwarded to plugins
        path: Source document path forwarded to plugins
        conditions_in_code: Forwarded to plugins
        disable_liquid: Forwarded to plugins
        need_to_sanitize_html: Sanitize the compiled HTML
        sanitize_options: Sanitizer allow-list (None = defaults)
    """
    model_config = ConfigDict(frozen=True, extra="allow", arbitrary_types_allowed=True)

    allow_html: bool = False
    linkify: bool = False
    linkify_tlds: Optional[Tuple[str, ...]] = None
    breaks: bool = Field(default_factory=lambda: appsettings.breaks)
    highlight_langs: Dict[str, Any] = Field(default_factory=dict)
    extract_title: bool = False
    need_title: bool = False
    title_extractor: Optional[Callable[..., Any]] = None
    need_flat_list_headings: bool = False
    plugins: Optional[Tuple[Any, ...]] = None
    left_delimiter: str = Field(default_factory=lambda: appsettings.left_delimiter)
    right_delimiter: str = Field(default_factory=lambda: appsettings.right_delimiter)
    vars: Dict[str, Any] = Field(default_factory=dict)
    path: Optional[str] = None
    conditions_in_code: bool = False
    disable_liquid: bool = False
    need_to_sanitize_html: bool = False
    sanitize_options: Optional[SanitizeOptions] = None

    @field_validator("plugins")
    @classmethod
    def plugins_check(cls, value: Optional[Tuple[Any, ...]]) -> Optional[Tuple[Any, ...]]:
        if value is None:
            return value
        for plugin in value:
            if not isinstance(plugin, PluginSpec):
                raise ValueError(f"plugins must be PluginSpec instances, got {type(plugin).__name__}")
        return value

    @property
    def custom(self) -> Dict[str, Any]:
        """Options passed by the caller that are not TransformOptions fields"""
        return dict(self.model_extra or {})
