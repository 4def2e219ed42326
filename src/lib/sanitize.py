"""
HTML sanitization of compiled output

Wraps bleach with an allow-list suited to rendered markdown: structural and
inline formatting tags, tables, definition lists, footnotes and highlighted
code spans. Scripts, event handler attributes and unsafe URL schemes never
survive.
"""

from typing import Dict, List, Optional

import bleach

from ..models.options import SanitizeOptions


ALLOWED_TAGS = frozenset(bleach.sanitizer.ALLOWED_TAGS).union({
    # text
    "p", "br", "hr", "div", "span", "section", "mark", "ins", "del", "s",
    "sup", "sub", "dfn",
    # headings
    "h1", "h2", "h3", "h4", "h5", "h6",
    # lists
    "ul", "ol", "li", "dl", "dt", "dd",
    # code
    "pre", "code", "kbd", "samp", "var",
    # tables
    "table", "thead", "tbody", "tfoot", "tr", "th", "td", "caption",
    # media
    "img", "figure", "figcaption",
    # interactive
    "input",
})

ALLOWED_ATTRIBUTES: Dict[str, List[str]] = {
    "*": ["class", "id", "title"],
    "a": ["href", "title", "rel", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height", "loading"],
    "ol": ["start", "type"],
    "th": ["colspan", "rowspan", "scope"],
    "td": ["colspan", "rowspan"],
    "input": ["type", "checked", "disabled"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "tel"})


def html_sanitize(html: str, options: Optional[SanitizeOptions] = None) -> str:
    """
    Remove everything outside the allow-list from an HTML fragment

    Args:
        html: Rendered HTML
        options: Allow-list overrides; unset fields use the defaults above

    Returns:
        Sanitized HTML
    """
    options = options or SanitizeOptions()

    return bleach.clean(
        html,
        tags=options.tags if options.tags is not None else ALLOWED_TAGS,
        attributes=options.attributes if options.attributes is not None else ALLOWED_ATTRIBUTES,
        protocols=options.protocols if options.protocols is not None else ALLOWED_PROTOCOLS,
        strip=options.strip,
        strip_comments=options.strip_comments,
    )
