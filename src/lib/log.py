"""
Verbosity-gated logging for the option parser and render pipeline

Recovered problems (a skipped range element, an unknown language, a
rejected lexer option) are reported through LOG() instead of raised. The
verbosity comes from the ProgramState of the running batch, which is
bound to the current context with state_connectToLogger(). Library
callers that never connect a state get no output at all.

    state_connectToLogger(state)        # once, in the CLI stage
    LOG("Wrote out/post.md", level=2)   # anywhere below it
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Bind a ProgramState to the current context

    Args:
        state: Object with a 'verbosity' attribute (normally ProgramState)
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when none is connected"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit message when the connected verbosity is at least level

    Levels: 1 progress, 2 recovered problems and per-file detail,
    3 per-tag trace. The record carries the caller's function and line.
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
