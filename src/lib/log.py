"""
Logging through Loguru, gated on the verbosity of the current run.

Library code calls LOG() without passing state around; the CLI connects
its ProgramState once per pipeline stage and LOG() checks that state's
verbosity. With no state connected (plain library use) nothing is logged.

Usage:
    from matchertext.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Parsed 12 nodes", level=2)
    LOG("element 'p' at offset 40", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>:<cyan>{function: <20}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Make state's verbosity govern LOG() calls in the current context.

    Args:
        state: Object with a verbosity attribute, normally a ProgramState.
               None disconnects.
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity is at least level.

    Verbosity levels:
        1 = stage progress (-v)
        2 = per-stage detail (-vv)
        3 = parser trace (-vvv)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        # depth=1 reports the caller, not this wrapper
        logger.opt(depth=1).debug(message, **kwargs)
