"""
Syntax highlighting for fenced code blocks

Builds the highlight callback the markdown engine calls for every fence. Code
is highlighted with Pygments; the engine wraps the returned markup in
<pre><code class="language-X">.
"""

from typing import Any, Callable, Dict, Optional

from pygments import highlight
from pygments.lexers import get_lexer_by_name
from pygments.lexer import Lexer
from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from ..config import appsettings
from .log import LOG


HighlightFn = Callable[[str, str, str], str]


def lexer_get(lang: str, langs: Dict[str, Any]) -> Optional[Lexer]:
    """
    Resolve a fence language to a Pygments lexer

    Args:
        lang: Language name from the fence info string
        langs: Custom mapping of language name to lexer class, lexer instance
               or Pygments alias

    Returns:
        Lexer instance, or None if the language is unknown
    """
    custom = langs.get(lang)
    if isinstance(custom, Lexer):
        return custom
    if isinstance(custom, type) and issubclass(custom, Lexer):
        return custom()

    try:
        return get_lexer_by_name(custom if isinstance(custom, str) else lang)
    except ClassNotFound:
        return None


def highlight_make(langs: Optional[Dict[str, Any]] = None) -> HighlightFn:
    """
    Create the engine highlight callback

    Args:
        langs: Custom language mapping, checked before Pygments' own registry

    Returns:
        Function (code, lang, attrs) -> html. An empty string tells the engine
        to fall back to escaped plain code.
    """
    langs = dict(langs or {})
    formatter = HtmlFormatter(
        nowrap=True,
        noclasses=appsettings.highlight_inline_styles,
        style=appsettings.highlight_style,
    )

    def code_highlight(code: str, lang: str, attrs: str) -> str:
        if not lang:
            return ''

        lexer = lexer_get(lang, langs)
        if lexer is None:
            LOG(f"No lexer for fence language '{lang}'", level=2)
            return ''

        return highlight(code, lexer, formatter)

    return code_highlight
