"""
Console and helper utilities for the arena engine.

All console output of the engine goes through a single rich console so that
the duel transcript and the interactive menus share width and styling.
"""

from __future__ import annotations

from typing import Any, Generic

from rich.console import Console
from rich.rule import Rule
from typing_extensions import TypeVar

_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)


def cprint(*args: Any, **kwargs: Any) -> None:
    """Print rich markup on the shared console."""
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """Print a horizontal rule; arguments go to `rich.rule.Rule`."""
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Render `content` with the shared console and return the text.

    Used to hand rich tables to prompt_toolkit, which only understands ANSI.

    Args:
        content (Any): Anything rich can print.

    Returns:
        str: The rendered output, escape codes included.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


_T = TypeVar("_T")


class Singleton(type, Generic[_T]):
    """
    Metaclass caching one instance per class.

    Constructor arguments only matter on the first call; `reset` drops the
    cached instance (tests rely on it to load different data).
    """

    _instances: dict[Singleton[_T], _T] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> _T:
        instance = cls._instances.get(cls)
        if instance is None:
            instance = super().__call__(*args, **kwargs)
            cls._instances[cls] = instance
        return instance

    def reset(cls) -> None:
        cls._instances.pop(cls, None)


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Build a rich-markup gauge of `current` over `maximum`.

    Args:
        current (int): The value shown; may be negative or above `maximum`.
        maximum (int): The value of a full gauge.
        length (int): Number of cells. Defaults to 10.
        color (str): Style of the filled cells. Defaults to "white".

    Returns:
        str: The gauge, as rich markup.

    """
    filled = 0
    if maximum > 0:
        filled = max(0, min(length, current * length // maximum))
    gauge = f"[{color}]{'▮' * filled}[/]"
    if filled < length:
        gauge += f"[dim white]{'▯' * (length - filled)}[/]"
    return gauge
