"""
Base effect module for the arena engine.

Defines the base class for effects carried by items. Effects mutate the
attributes of their target unconditionally: they never go through the
action validators that gate rule-driven attacks.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Effect(BaseModel):
    """
    Base class for all effects that an item can apply to a combatant.

    Subclasses implement `apply`, which mutates the target in place. The
    session is responsible for noticing deaths caused by an effect.

    Effects are frozen, like the items that carry them.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        default="",
        description="The name of the effect.",
    )
    description: str = Field(
        default="",
        description="A brief description of the effect.",
    )

    @property
    def display_name(self) -> str:
        return (self.name or type(self).__name__).lower().capitalize()

    @property
    def color(self) -> str:
        """Returns the color string associated with this effect type."""
        return "dim white"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this effect type."""
        return "❔"

    @property
    def colored_name(self) -> str:
        """Returns the effect name with color formatting applied."""
        return f"[{self.color}]{self.display_name}[/]"

    def apply(self, target: Any) -> None:
        """
        Apply the effect to the target.

        Args:
            target (Combatant):
                The combatant receiving the effect.

        """
        raise NotImplementedError("Subclasses must implement apply.")


def deserialize_effect(data: dict[str, Any]) -> Effect | None:
    """
    Deserialize an effect from a dictionary.

    Args:
        data (dict[str, Any]):
            The dictionary containing effect data.

    Returns:
        Effect | None:
            The deserialized effect instance, or None if the type is unknown.

    """
    from .attribute_effects import (
        AttributeBoostEffect,
        DirectDamageEffect,
        HealEffect,
        InvulnerabilityEffect,
    )

    effect_type = data.get("effect_type")

    if effect_type == "AttributeBoostEffect":
        return AttributeBoostEffect(**data)
    if effect_type == "HealEffect":
        return HealEffect(**data)
    if effect_type == "InvulnerabilityEffect":
        return InvulnerabilityEffect(**data)
    if effect_type == "DirectDamageEffect":
        return DirectDamageEffect(**data)

    return None
