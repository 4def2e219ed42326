"""
Inline attribute syntax: {#id .class key=value}

Attaches attributes to tokens so that later rules (heading anchors, the
heading collector, renderer) can see them. Two placements are recognized:

    # Heading {#custom-id .wide}        -> heading_open
    Paragraph text {.lead}              -> paragraph_open
    `code`{.python}                     -> code_inline
    ![alt](img.png){width=200}          -> image
    [link](url){target=_blank}          -> link_open

The delimiters are configurable through the plugin config keys
left_delimiter and right_delimiter.
"""

import re
from typing import List, Optional, Tuple

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from ...models.plugins import PluginOptions


ATTR_PATTERN = re.compile(
    r"""\s*(?:
        (?P<marker>[#.])(?P<name>[^\s#.'"=]+)
      | (?P<key>[^\s#.'"=]+)(?:=(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s'"]+)))?
    )""",
    re.VERBOSE,
)

# Inline tokens an attribute block may directly follow
INLINE_TARGETS = ('code_inline', 'image', 'link_close', 'em_close', 'strong_close', 's_close')


def attrs_parse(body: str) -> Optional[List[Tuple[str, str]]]:
    """
    Parse the inside of an attribute block

    Args:
        body: Text between the delimiters, e.g. "#intro .lead data-x=1"

    Returns:
        List of (name, value) pairs, or None if body is not a valid
        attribute list (in which case the text is left alone)

    Example:
        >>> attrs_parse('#intro .lead data-x="a b"')
        [('id', 'intro'), ('class', 'lead'), ('data-x', 'a b')]
    """
    body = body.strip()
    if not body:
        return None

    attrs = []
    pos = 0
    while pos < len(body):
        match = ATTR_PATTERN.match(body, pos)
        if not match or match.end() == pos:
            return None

        if match.group('marker') == '#':
            attrs.append(('id', match.group('name')))
        elif match.group('marker') == '.':
            attrs.append(('class', match.group('name')))
        else:
            value = next(
                (v for v in (match.group('dq'), match.group('sq'), match.group('bare')) if v is not None),
                '',
            )
            attrs.append((match.group('key'), value))
        pos = match.end()

    return attrs


def attrs_assign(token: Token, attrs: List[Tuple[str, str]]) -> None:
    """Set attributes on a token; classes accumulate, other keys overwrite"""
    for name, value in attrs:
        if name == 'class':
            existing = token.attrGet('class')
            token.attrSet('class', f"{existing} {value}" if existing else value)
        else:
            token.attrSet(name, value)


def openingToken_find(children: List[Token], close_index: int) -> Optional[Token]:
    """Opening token matching the closing token at close_index"""
    open_type = children[close_index].type[:-len('_close')] + '_open'
    depth = 0
    for index in range(close_index - 1, -1, -1):
        child = children[index]
        if child.type == children[close_index].type:
            depth += 1
        elif child.type == open_type:
            if depth == 0:
                return child
            depth -= 1
    return None


def inlineAttrs_apply(children: List[Token], left: str, right: str) -> None:
    """Handle attribute blocks that directly follow an inline element"""
    for index in range(1, len(children)):
        child = children[index]
        previous = children[index - 1]
        if child.type != 'text' or not child.content.startswith(left):
            continue
        if previous.type not in INLINE_TARGETS:
            continue

        end = child.content.find(right, len(left))
        if end == -1:
            continue
        attrs = attrs_parse(child.content[len(left):end])
        if attrs is None:
            continue

        target = previous if previous.nesting == 0 else openingToken_find(children, index - 1)
        if target is None:
            continue
        child.content = child.content[end + len(right):]
        attrs_assign(target, attrs)


def blockAttrs_apply(tokens: List[Token], index: int, left: str, right: str) -> None:
    """Handle an attribute block closing the inline content of a block"""
    inline = tokens[index]
    if index == 0 or tokens[index - 1].nesting != 1:
        return

    last = inline.children[-1] if inline.children else None
    if last is None or last.type != 'text':
        return

    text = last.content.rstrip()
    if not text.endswith(right):
        return
    start = text.rfind(left, 0, len(text) - len(right))
    if start == -1:
        return
    body = text[start + len(left):len(text) - len(right)]
    if right in body:
        return

    attrs = attrs_parse(body)
    if attrs is None:
        return

    last.content = text[:start].rstrip()
    if not last.content:
        inline.children.pop()

    content = inline.content.rstrip()
    content_start = content.rfind(left)
    if content_start != -1:
        inline.content = content[:content_start].rstrip()

    attrs_assign(tokens[index - 1], attrs)


def attrs_apply(md: MarkdownIt, options: PluginOptions) -> None:
    """Register the attribute core rule on the engine"""
    left = options.get('left_delimiter', '{')
    right = options.get('right_delimiter', '}')

    def attrs_rule(state: StateCore) -> None:
        for index, token in enumerate(state.tokens):
            if token.type != 'inline' or not token.children:
                continue
            inlineAttrs_apply(token.children, left, right)
            blockAttrs_apply(state.tokens, index, left, right)

    md.core.ruler.push('attrs', attrs_rule)
