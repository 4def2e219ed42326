"""
Glossary terms

Definitions are written as paragraphs of one or more lines:

    *[API]: Application programming interface
    *[SDK]: Software development kit

and referenced with links whose target is the term key prefixed by '*':

    Call the [API](*API) directly.

The processor removes definition paragraphs from the main stream, points term
links at the definitions, and defers a <dl class="terms"> block into
Environment.term_tokens so the compiler renders it after all other content.
"""

import re
from typing import Dict, List

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ...config import appsettings
from ...models.environment import Environment


TERM_DEFINITION = re.compile(r'^\*\[([^\]\n]+)\]:[ \t]*(\S.*)$')


def termId_make(key: str) -> str:
    return f"term{appsettings.slug_separator}{appsettings.slug_make(key) or 'x'}"


def definitions_parse(content: str) -> Dict[str, str]:
    """Definitions of a paragraph whose every line is a term definition"""
    definitions = {}
    for line in content.splitlines():
        match = TERM_DEFINITION.match(line.strip())
        if not match:
            return {}
        definitions[match.group(1).strip()] = match.group(2).strip()
    return definitions


def termLinks_rewrite(children: List[Token], definitions: Dict[str, str]) -> None:
    for child in children:
        if child.type != 'link_open':
            continue
        href = str(child.attrGet('href') or '')
        if href.startswith('*') and href[1:] in definitions:
            child.attrSet('href', f"#{termId_make(href[1:])}")
            child.attrSet('class', 'term')


def termTokens_make(definitions: Dict[str, str], md: MarkdownIt) -> List[Token]:
    """
    Token run of a definition list holding every term

    Definitions go through the inline parser only, against a scratch env.
    Core rules never run twice on the pipeline Environment.
    """
    tokens = [Token('terms_open', 'dl', 1, attrs={'class': 'terms'}, block=True)]

    for key, definition in definitions.items():
        tokens.append(Token('term_open', 'dt', 1, attrs={'id': termId_make(key)}, block=True))
        tokens.append(Token('inline', '', 0, content=key, children=[Token('text', '', 0, content=key)]))
        tokens.append(Token('term_close', 'dt', -1, block=True))
        tokens.append(Token('term_definition_open', 'dd', 1, block=True))
        inline = Token('inline', '', 0, content=definition, children=[])
        md.inline.parse(definition, md, {}, inline.children)
        for child in inline.children:
            if child.type == 'text_special':
                child.type = 'text'
        tokens.append(inline)
        tokens.append(Token('term_definition_close', 'dd', -1, block=True))

    tokens.append(Token('terms_close', 'dl', -1, block=True))
    return tokens


async def term_process(tokens: List[Token], md: MarkdownIt, env: Environment) -> List[Token]:
    definitions: Dict[str, str] = {}
    kept: List[Token] = []

    index = 0
    while index < len(tokens):
        token = tokens[index]
        if (
            token.type == 'paragraph_open'
            and index + 2 < len(tokens)
            and tokens[index + 1].type == 'inline'
            and tokens[index + 2].type == 'paragraph_close'
        ):
            found = definitions_parse(tokens[index + 1].content)
            if found:
                definitions.update(found)
                index += 3
                continue
        kept.append(token)
        index += 1

    if not definitions:
        return tokens

    for token in kept:
        if token.type == 'inline' and token.children:
            termLinks_rewrite(token.children, definitions)

    env.termTokens_defer(termTokens_make(definitions, md))
    return kept
