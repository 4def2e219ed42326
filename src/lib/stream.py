"""
Structural checks for token streams handed between pipeline stages
"""

from typing import List

from markdown_it.token import Token

from ..config import appsettings
from .log import WARN


class TokenStreamError(ValueError):
    """Raised in strict mode when a stage leaves an unbalanced token stream"""
    pass


def nesting_check(tokens: List[Token]) -> bool:
    """
    Check that every opening token has a matching closing token

    Only the top-level sequence is walked; inline children are rendered
    leniently by the engine.

    Returns:
        True if the stream is balanced
    """
    stack: List[str] = []
    for token in tokens:
        if token.nesting == 1:
            stack.append(token.tag)
        elif token.nesting == -1:
            if not stack or stack[-1] != token.tag:
                return False
            stack.pop()
    return not stack


def stream_validate(tokens: List[Token], stage: str) -> None:
    """
    Report an unbalanced stream left by a stage

    Raises:
        TokenStreamError: in strict mode
    """
    if nesting_check(tokens):
        return

    message = f"Stage '{stage}' left an unbalanced token stream"
    if appsettings.strict_mode:
        raise TokenStreamError(message)
    WARN(message)
