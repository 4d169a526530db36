"""
Engine settings for the arena engine.

Settings are read from an optional JSON file and may be overridden through
environment variables, then validated by pydantic.
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from arena.core.logging import log_debug

ENV_LOG_LEVEL = "ARENA_LOG_LEVEL"
ENV_MAX_ROUNDS = "ARENA_MAX_ROUNDS"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class EngineSettings(BaseModel):
    """Tunable knobs shared by the duel driver and the console front-end."""

    log_level: str = Field(
        default="INFO",
        description="Name of the logging level used by setup_logging.",
    )
    enforce_hp_floor: bool = Field(
        default=False,
        description=(
            "When True the HP-floor validator blocks damage that would take "
            "the defender below 0 hp; when False it only warns."
        ),
    )
    max_rounds: int | None = Field(
        default=100,
        description="Rounds after which an automatic duel is forcibly finished.",
    )
    data_dir: Path | None = Field(
        default=None,
        description="Directory holding combatants.json and items.json.",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @field_validator("max_rounds")
    @classmethod
    def _check_max_rounds(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            raise ValueError("max_rounds must be a positive integer or None.")
        return value


def load_settings(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> EngineSettings:
    """
    Load the engine settings.

    Args:
        path (Path | None):
            Optional JSON file with settings values.
        environ (dict[str, str] | None):
            Environment to read overrides from, defaults to os.environ.

    Returns:
        EngineSettings:
            The validated settings.

    """
    data: dict[str, Any] = {}
    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        log_debug("Loaded settings file", {"path": path})

    environ = os.environ if environ is None else environ
    if environ.get(ENV_LOG_LEVEL):
        data["log_level"] = environ[ENV_LOG_LEVEL]
    if environ.get(ENV_MAX_ROUNDS):
        data["max_rounds"] = int(environ[ENV_MAX_ROUNDS])

    return EngineSettings(**data)
