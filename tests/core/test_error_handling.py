"""
Tests for the exception hierarchy and the error handler.
"""

import logging

import pytest

from arena.core.constants import Phase
from arena.core.error_handling import (
    ArenaError,
    CombatError,
    ErrorHandler,
    ErrorSeverity,
    InvalidPhaseError,
    ReentrantTransitionError,
    require_int,
    require_non_empty_string,
)


def test_combat_errors_share_a_base():
    assert issubclass(CombatError, ArenaError)
    assert issubclass(InvalidPhaseError, CombatError)
    assert issubclass(ReentrantTransitionError, CombatError)


def test_invalid_phase_error_carries_details():
    error = InvalidPhaseError("attack", Phase.ACTION, Phase.PRE_ITEM)
    assert error.operation == "attack"
    assert error.expected is Phase.ACTION
    assert error.actual is Phase.PRE_ITEM
    assert "attack()" in str(error)


def test_reentrant_error_names_the_phase():
    error = ReentrantTransitionError("advance_phase", Phase.TURN_END)
    assert error.phase is Phase.TURN_END
    assert "advance_phase()" in str(error)


def test_handler_keeps_history_and_logs(caplog):
    handler = ErrorHandler()
    caplog.set_level(logging.INFO, logger="arena.errors")
    handler.handle("disk on fire", ErrorSeverity.HIGH, {"disk": "sda"})
    handler.handle("just saying", ErrorSeverity.LOW)
    assert [e.severity for e in handler.error_history] == [
        ErrorSeverity.HIGH,
        ErrorSeverity.LOW,
    ]
    assert "ERROR: disk on fire" in caplog.text
    assert "INFO: just saying" in caplog.text
    handler.clear()
    assert handler.error_history == []


def test_critical_errors_log_the_traceback(caplog):
    handler = ErrorHandler()
    caplog.set_level(logging.CRITICAL, logger="arena.errors")
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        handler.handle("it broke", ErrorSeverity.CRITICAL, exception=e)
    assert "CRITICAL: it broke" in caplog.text
    assert "RuntimeError: boom" in caplog.text


def test_require_non_empty_string():
    assert require_non_empty_string("Hero", "name") == "Hero"
    for bad in ("", None, 3):
        with pytest.raises(ValueError):
            require_non_empty_string(bad, "name")


def test_require_int_rejects_booleans_and_floats():
    assert require_int(-4, "hp") == -4
    for bad in (True, 1.5, "3"):
        with pytest.raises(ValueError):
            require_int(bad, "hp")
