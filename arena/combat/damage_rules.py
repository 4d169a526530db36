"""
Damage rules module for the arena engine.

A damage rule computes the raw damage an attacker deals to a defender from
their current attributes. Rules are pure: they read attributes and never
mutate either combatant. Mutation only happens in the attack pipeline, after
the validators have approved the computed value.
"""

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from arena.core.constants import Attribute


class DamageRule(BaseModel):
    """
    Base class for all damage rules.

    The floor is a per-rule design choice: computed values below it are
    raised to it.
    """

    name: str = Field(
        default="",
        description="Optional display name of the rule.",
    )
    floor: int = Field(
        default=0,
        description="Minimum value returned by the rule.",
    )

    @property
    def display_name(self) -> str:
        return self.name or type(self).__name__

    def calculate(self, attacker: Any, defender: Any) -> int:
        """
        Compute the damage dealt by `attacker` to `defender`.

        Args:
            attacker (Combatant):
                The attacking combatant.
            defender (Combatant):
                The defending combatant.

        Returns:
            int:
                The raw damage value.

        """
        raise NotImplementedError("Subclasses must implement calculate.")

    def apply_floor(self, value: int) -> int:
        """Raise `value` to the rule's floor."""
        return max(self.floor, value)


class AttributeRule(DamageRule):
    """
    Damage is the attacker's offensive attribute minus the defender's
    defensive attribute, floored.
    """

    rule_type: Literal["AttributeRule"] = "AttributeRule"

    attack_attribute: str = Field(
        description="Attribute of the attacker that adds to the damage.",
    )
    defense_attribute: str = Field(
        description="Attribute of the defender that reduces the damage.",
    )

    def calculate(self, attacker: Any, defender: Any) -> int:
        raw = attacker.attributes.get(self.attack_attribute) - defender.attributes.get(
            self.defense_attribute
        )
        return self.apply_floor(raw)


class PhysicalRule(AttributeRule):
    """Physical damage: strength against defense."""

    rule_type: Literal["PhysicalRule"] = "PhysicalRule"  # type: ignore[assignment]

    attack_attribute: str = Attribute.STRENGTH.value
    defense_attribute: str = Attribute.DEFENSE.value


class MagicalRule(AttributeRule):
    """Magical damage: intelligence against magic resistance."""

    rule_type: Literal["MagicalRule"] = "MagicalRule"  # type: ignore[assignment]

    attack_attribute: str = Attribute.INTELLIGENCE.value
    defense_attribute: str = Attribute.MAGIC_RESIST.value


class FixedRule(DamageRule):
    """Always deals the same amount, regardless of attributes."""

    rule_type: Literal["FixedRule"] = "FixedRule"

    amount: int = Field(
        description="The damage dealt by the rule.",
    )

    def calculate(self, attacker: Any, defender: Any) -> int:
        return self.amount


class CustomRule(DamageRule):
    """Delegates the computation to a user-supplied function."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rule_type: Literal["CustomRule"] = "CustomRule"

    function: Callable[[Any, Any], int] = Field(
        description="Function (attacker, defender) -> damage.",
    )

    def calculate(self, attacker: Any, defender: Any) -> int:
        return self.apply_floor(int(self.function(attacker, defender)))


def deserialize_rule(data: dict[str, Any]) -> DamageRule | None:
    """
    Deserialize a damage rule from a dictionary.

    Custom rules wrap code and cannot be described by data, so they are not
    supported here.

    Args:
        data (dict[str, Any]):
            The dictionary containing rule data.

    Returns:
        DamageRule | None:
            The deserialized rule, or None if the type is unknown.

    """
    rule_type = data.get("rule_type")

    if rule_type == "PhysicalRule":
        return PhysicalRule(**data)
    if rule_type == "MagicalRule":
        return MagicalRule(**data)
    if rule_type == "FixedRule":
        return FixedRule(**data)
    if rule_type == "AttributeRule":
        return AttributeRule(**data)

    return None
