"""
Constants and enumerations for the arena engine.

Defines the combat phases, the well-known attribute names read by the
built-in rules, validators and effects, and the display helpers shared by
the console front-end.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").lower().capitalize()


class Phase(NiceEnum):
    """The phases of a combat session, in their logical order."""

    TURN_START = "TURN_START"  # The current attacker's turn begins
    PRE_ITEM = "PRE_ITEM"  # The attacker may use items
    ACTION = "ACTION"  # The attacker may attack
    POST_ACTION = "POST_ACTION"  # Post-attack hooks (UI refresh, triggers)
    TURN_END = "TURN_END"  # Turn closes; roles swap if the defender lives
    FINISHED = "FINISHED"  # Terminal

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this phase."""
        return {
            Phase.TURN_START: "⏱",
            Phase.PRE_ITEM: "🎒",
            Phase.ACTION: "⚔",
            Phase.POST_ACTION: "✨",
            Phase.TURN_END: "⏳",
            Phase.FINISHED: "🏁",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this phase."""
        return {
            Phase.TURN_START: "bold cyan",
            Phase.PRE_ITEM: "bold green",
            Phase.ACTION: "bold red",
            Phase.POST_ACTION: "bold magenta",
            Phase.TURN_END: "bold yellow",
            Phase.FINISHED: "bold white",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies phase color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class Attribute(str, Enum):
    """Attribute names with a meaning for the built-in rules and effects."""

    HP = "hp"
    MAX_HP = "max_hp"
    STRENGTH = "strength"
    DEFENSE = "defense"
    INTELLIGENCE = "intelligence"
    MAGIC_RESIST = "magic_resist"
    INVULNERABLE = "invulnerable"

    def __str__(self) -> str:
        return self.value


# Successor of each phase along the unconditional edges of the cycle.
# TURN_END and FINISHED are resolved by the session itself.
NEXT_PHASE: dict[Phase, Phase] = {
    Phase.TURN_START: Phase.PRE_ITEM,
    Phase.PRE_ITEM: Phase.ACTION,
    Phase.ACTION: Phase.POST_ACTION,
    Phase.POST_ACTION: Phase.TURN_END,
}
