"""
Error handling for the arena engine.

Three pieces live here:

- the exception hierarchy raised when a caller breaks the combat contract;
- the `ErrorHandler`, which records reported problems by severity and
  forwards them to the `arena.errors` logger;
- the argument checks used by constructors before they store a value.
"""

import logging
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ArenaError(Exception):
    """Root of every exception the engine raises on purpose."""


class CombatError(ArenaError):
    """The session was driven in a way its phase cycle does not allow."""


class InvalidPhaseError(CombatError):
    """
    A phase-gated call (`attack`, `use_item`, ...) arrived in the wrong phase.

    Only the call fails. The session is untouched and the same call succeeds
    once the session reaches `expected`.
    """

    def __init__(self, operation: str, expected: Any, actual: Any) -> None:
        self.operation = operation
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{operation}() needs phase {expected} but the session is in {actual}"
        )


class ReentrantTransitionError(CombatError):
    """A phase callback tried to drive the session it is observing."""

    def __init__(self, operation: str, phase: Any) -> None:
        self.operation = operation
        self.phase = phase
        super().__init__(
            f"{operation}() is not allowed from a callback of phase {phase}"
        )


class ErrorSeverity(Enum):
    """How bad a reported problem is, mapped to a logging level."""

    LOW = logging.INFO
    MEDIUM = logging.WARNING
    HIGH = logging.ERROR
    CRITICAL = logging.CRITICAL

    @property
    def label(self) -> str:
        return logging.getLevelName(self.value)


@dataclass
class ErrorRecord:
    """One problem reported to the handler."""

    message: str
    severity: ErrorSeverity
    context: dict[str, Any] = field(default_factory=dict)
    exception: Optional[Exception] = None


class ErrorHandler:
    """Keeps every reported problem and logs it at its severity."""

    def __init__(self, logger_name: str = "arena.errors") -> None:
        self.logger = logging.getLogger(logger_name)
        self.error_history: list[ErrorRecord] = []

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> ErrorRecord:
        """Record the problem, log it, and return the stored record."""
        record = ErrorRecord(message, severity, dict(context or {}), exception)
        self.error_history.append(record)

        # LogRecord reserves names such as "message" and "args".
        extra = {f"ctx_{key}": value for key, value in record.context.items()}
        self.logger.log(
            severity.value, f"{severity.label}: {message}", extra=extra
        )
        if exception is not None and severity is ErrorSeverity.CRITICAL:
            self.logger.critical("".join(traceback.format_exception(exception)))
        return record

    def clear(self) -> None:
        """Forget every recorded problem."""
        self.error_history.clear()


ERROR_HANDLER = ErrorHandler()


def report_error(
    message: str,
    context: Optional[dict[str, Any]] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Send an error-level problem to the shared handler."""
    ERROR_HANDLER.handle(message, ErrorSeverity.HIGH, context, exception)


# ==============================================================================
# ARGUMENT CHECKS
# ==============================================================================


def require_non_empty_string(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> str:
    """
    Returns `value` if it is a string with at least one character.

    Args:
        value (Any): The candidate value.
        param_name (str): Name used in the error message and the report.
        context (Optional[dict[str, Any]]): Extra details for the report.

    Raises:
        ValueError: If `value` is empty or not a string.

    """
    if isinstance(value, str) and value:
        return value
    report_error(
        f"{param_name} must be a non-empty string, got {value!r}",
        {**(context or {}), "param_name": param_name, "type": type(value).__name__},
    )
    raise ValueError(f"Invalid {param_name}: {value!r}")


def require_int(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> int:
    """Returns `value` if it is a real integer; booleans do not count."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    report_error(
        f"{param_name} must be an integer, got {value!r}",
        {**(context or {}), "param_name": param_name, "type": type(value).__name__},
    )
    raise ValueError(f"Invalid {param_name}: {value!r}")
