"""
Action validators module for the arena engine.

A validator is a side-effect free predicate over a proposed damage
application (attacker, defender, value). A value is committed only when
every configured validator approves it.
"""

from collections.abc import Callable, Iterable
from typing import Any

from arena.core.constants import Attribute
from arena.core.logging import log_debug, log_warning


class ActionValidator:
    """Base class for all action validators."""

    def validate(self, attacker: Any, defender: Any, proposed_value: int) -> bool:
        """
        Check whether the proposed damage may be applied.

        Args:
            attacker (Combatant):
                The combatant performing the action.
            defender (Combatant):
                The combatant receiving the action.
            proposed_value (int):
                The damage computed by a rule, before any mutation.

        Returns:
            bool:
                True if the action is allowed, False if it must be blocked.

        """
        raise NotImplementedError("Subclasses must implement validate.")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class HpFloorValidator(ActionValidator):
    """
    Checks that the defender's hp would not drop below zero.

    In advisory mode (the default) the check only logs a warning and the
    damage still goes through unclamped. In enforcing mode the damage is
    blocked.
    """

    def __init__(self, enforce: bool = False) -> None:
        self.enforce = enforce

    def would_stay_non_negative(self, defender: Any, proposed_value: int) -> bool:
        return defender.hp - proposed_value >= 0

    def validate(self, attacker: Any, defender: Any, proposed_value: int) -> bool:
        if self.would_stay_non_negative(defender, proposed_value):
            return True
        if self.enforce:
            return False
        log_warning(
            f"{defender.name} would drop below 0 hp",
            {"hp": defender.hp, "damage": proposed_value},
        )
        return True

    def __repr__(self) -> str:
        return f"HpFloorValidator(enforce={self.enforce})"


class InvulnerabilityValidator(ActionValidator):
    """Blocks any damage while the defender is invulnerable."""

    def validate(self, attacker: Any, defender: Any, proposed_value: int) -> bool:
        return defender.attributes.get(Attribute.INVULNERABLE) <= 0


class BuffConflictValidator(ActionValidator):
    """
    Hook for checks between conflicting buffs and debuffs.

    Approves everything until a concrete conflict table exists.
    """

    def validate(self, attacker: Any, defender: Any, proposed_value: int) -> bool:
        return True


class ItemEffectValidator(ActionValidator):
    """Blocks attacks against a defender protected by an item effect."""

    def validate(self, attacker: Any, defender: Any, proposed_value: int) -> bool:
        turns = defender.attributes.get(Attribute.INVULNERABLE)
        if turns > 0:
            log_debug(
                f"{defender.name} is invulnerable due to an item, attack blocked",
                {"turns": turns},
            )
            return False
        return True


class CustomValidator(ActionValidator):
    """Delegates the decision to a user-supplied predicate."""

    def __init__(self, predicate: Callable[[Any, Any, int], bool]) -> None:
        self.predicate = predicate

    def validate(self, attacker: Any, defender: Any, proposed_value: int) -> bool:
        return bool(self.predicate(attacker, defender, proposed_value))


def validate_all(
    validators: Iterable[ActionValidator],
    attacker: Any,
    defender: Any,
    proposed_value: int,
) -> bool:
    """Returns True iff every validator approves the proposed value."""
    return all(v.validate(attacker, defender, proposed_value) for v in validators)


def default_validators(settings: Any = None) -> tuple[ActionValidator, ...]:
    """
    Builds the canonical validator chain.

    Args:
        settings (EngineSettings | None):
            Engine settings; `enforce_hp_floor` selects the HP-floor policy.

    Returns:
        tuple[ActionValidator, ...]:
            HP-floor, invulnerability, and buff-conflict validators.

    """
    enforce = bool(getattr(settings, "enforce_hp_floor", False))
    return (
        HpFloorValidator(enforce=enforce),
        InvulnerabilityValidator(),
        BuffConflictValidator(),
    )
