"""
Logging for the arena engine.

Every module logs through the `arena` logger with the `log_*` helpers below,
which append an optional context mapping as `key=value` pairs. Nothing is
printed until `setup_logging` installs the rich handler on the root logger.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "arena"


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Route every log record through a RichHandler.

    Calling it again replaces the previous configuration.

    Args:
        level (int | str): Level number or name ("DEBUG", "info", ...).
            Unknown names fall back to INFO.

    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    handler = RichHandler(
        console=Console(width=120, force_terminal=True, force_jupyter=False),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))

    logging.basicConfig(level=level, handlers=[handler], force=True)


def get_logger(name: str) -> logging.Logger:
    """Returns the logger called `name`, e.g. `arena.errors`."""
    return logging.getLogger(name)


logger = get_logger(LOGGER_NAME)


def _with_context(message: str, context: dict[str, Any] | None) -> str:
    if not context:
        return message
    pairs = " ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} [{pairs}]"


def log_error(message: str, context: dict[str, Any] | None = None) -> None:
    """
    Log `message` at ERROR level.

    Args:
        message (str): What went wrong.
        context (dict[str, Any] | None): Values appended as key=value pairs.

    """
    logger.error(_with_context(message, context))


def log_warning(message: str, context: dict[str, Any] | None = None) -> None:
    """Log `message` at WARNING level, with optional context."""
    logger.warning(_with_context(message, context))


def log_info(message: str, context: dict[str, Any] | None = None) -> None:
    """Log `message` at INFO level, with optional context."""
    logger.info(_with_context(message, context))


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    logger.debug(_with_context(message, context))
