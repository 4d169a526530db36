"""
Attribute effects module for the arena engine.

Concrete effects applied by items: attribute boosts, hp restoration,
invulnerability grants, and direct damage.
"""

from typing import Any, Literal

from pydantic import Field

from arena.core.constants import Attribute
from arena.core.logging import log_debug

from .base_effect import Effect


class AttributeBoostEffect(Effect):
    """Adds a fixed amount to one attribute of the target."""

    effect_type: Literal["AttributeBoostEffect"] = "AttributeBoostEffect"

    attribute: str = Field(
        description="The attribute to boost (e.g., 'strength').",
    )
    amount: int = Field(
        description="The amount added to the attribute, may be negative.",
    )

    @property
    def color(self) -> str:
        return "bold yellow" if self.amount >= 0 else "bold magenta"

    @property
    def emoji(self) -> str:
        return "🛡️" if self.amount >= 0 else "💀"

    def apply(self, target: Any) -> None:
        target.attributes.add(self.attribute, self.amount)
        log_debug(
            f"{target.name} {self.attribute} {self.amount:+d}",
            {"effect": self.display_name, "value": target.attributes.get(self.attribute)},
        )


class HealEffect(Effect):
    """Restores hit points to the target."""

    effect_type: Literal["HealEffect"] = "HealEffect"

    amount: int = Field(
        description="The number of hit points restored.",
    )

    @property
    def color(self) -> str:
        return "bold green"

    @property
    def emoji(self) -> str:
        return "💚"

    def apply(self, target: Any) -> None:
        # No upper bound: the store holds plain integers.
        target.attributes.add(Attribute.HP, self.amount)
        log_debug(f"{target.name} restores {self.amount} hp", {"hp": target.hp})


class InvulnerabilityEffect(Effect):
    """Makes the target invulnerable for a number of turns."""

    effect_type: Literal["InvulnerabilityEffect"] = "InvulnerabilityEffect"

    turns: int = Field(
        default=1,
        description="Number of turns granted; stacks with existing invulnerability.",
    )

    @property
    def color(self) -> str:
        return "bold cyan"

    @property
    def emoji(self) -> str:
        return "✨"

    def apply(self, target: Any) -> None:
        target.attributes.add(Attribute.INVULNERABLE, self.turns)
        log_debug(
            f"{target.name} becomes invulnerable",
            {"turns": target.attributes.get(Attribute.INVULNERABLE)},
        )


class DirectDamageEffect(Effect):
    """Deals damage to the target without going through any validator."""

    effect_type: Literal["DirectDamageEffect"] = "DirectDamageEffect"

    amount: int = Field(
        description="The amount of damage dealt.",
    )

    @property
    def color(self) -> str:
        return "bold red"

    @property
    def emoji(self) -> str:
        return "💥"

    def apply(self, target: Any) -> None:
        target.receive_damage(self.amount, None)
