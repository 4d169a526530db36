"""
Core system module for the arena engine.

This module contains the fundamental components shared by the rest of the
engine: constants, logging, error handling, settings, and console helpers.
The content repository lives in `arena.core.content` and is imported from
there, since it depends on the character and item packages.
"""

from .constants import (
    NEXT_PHASE,
    Attribute,
    Phase,
)
from .error_handling import (
    ArenaError,
    CombatError,
    ErrorHandler,
    ErrorSeverity,
    InvalidPhaseError,
    ReentrantTransitionError,
)
from .settings import (
    EngineSettings,
    load_settings,
)
from .utils import (
    Singleton,
    ccapture,
    cprint,
    crule,
    make_bar,
)

__all__ = [
    # Import from constants.py
    "NEXT_PHASE",
    "Attribute",
    "Phase",
    # Import from error_handling.py
    "ArenaError",
    "CombatError",
    "ErrorHandler",
    "ErrorSeverity",
    "InvalidPhaseError",
    "ReentrantTransitionError",
    # Import from settings.py
    "EngineSettings",
    "load_settings",
    # Import from utils.py
    "Singleton",
    "ccapture",
    "cprint",
    "crule",
    "make_bar",
]
