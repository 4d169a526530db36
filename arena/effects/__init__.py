"""
Effects system module for the arena engine.

This module contains the effects that items apply to combatants: attribute
boosts, hp restoration, invulnerability grants, and direct damage.
"""

from .attribute_effects import (
    AttributeBoostEffect,
    DirectDamageEffect,
    HealEffect,
    InvulnerabilityEffect,
)
from .base_effect import Effect, deserialize_effect

__all__ = [
    # Base classes
    "Effect",
    "deserialize_effect",
    # Attribute effects
    "AttributeBoostEffect",
    "DirectDamageEffect",
    "HealEffect",
    "InvulnerabilityEffect",
]
