"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current ProgramState's
verbosity level without requiring explicit state passing. When no state is
connected (library use), the verbosity setting from appsettings applies.

LOG is also the logger handed to every plugin through PluginOptions.log.

Usage:
    from mdtransform.lib.log import LOG, state_connectToLogger

    # At start of pipeline function:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("This message appears if verbosity >= 1", level=1)
    LOG("Debug details appear if verbosity >= 2", level=2)
    WARN("Always shown")
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

from ..config import appsettings

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Configure loguru with mdtransform-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Call this at the start of each pipeline function to make the state's
    verbosity setting available to LOG() calls throughout that context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, or the configured default"""
    state = _program_state.get()
    if state is not None and hasattr(state, 'verbosity'):
        return state.verbosity
    return appsettings.verbosity


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Parsed 42 tokens", level=2)
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)


def WARN(message: str, **kwargs: Any) -> None:
    """Log a warning regardless of verbosity"""
    logger.opt(depth=1).warning(message, **kwargs)
