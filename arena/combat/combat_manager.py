"""
Duel driver for the arena engine.

Runs a CombatSession to completion by advancing its phases, asking an item
chooser what to do in PRE_ITEM and attacking in ACTION.
"""

from collections.abc import Callable

from pydantic import BaseModel, Field

from arena.character.main import Combatant
from arena.core.constants import Attribute, Phase
from arena.core.logging import log_debug, log_info, log_warning
from arena.items.item import Item

from .combat_session import CombatSession

# Given the session in PRE_ITEM, returns the item to use and its target
# (None for the attacker), or None to skip.
ItemChooser = Callable[[CombatSession], tuple[Item, Combatant | None] | None]


class CombatResult(BaseModel):
    """Summary of a finished duel."""

    winner: str | None = Field(
        default=None,
        description="Name of the winner, None for a draw or an aborted duel.",
    )
    rounds: int = Field(
        description="Number of rounds played.",
    )
    forced: bool = Field(
        default=False,
        description="True if the duel was stopped by the round limit.",
    )
    final_hp: dict[str, int] = Field(
        default_factory=dict,
        description="Hit points of each combatant at the end of the duel.",
    )


def heal_when_low(session: CombatSession) -> tuple[Item, Combatant | None] | None:
    """
    Item chooser that drinks the first healing item once below half hp.

    "Half" is measured against the `max_hp` attribute, or against the
    current hp when the attacker has none (which never triggers).
    """
    from arena.effects.attribute_effects import HealEffect

    attacker = session.current_attacker
    max_hp = attacker.attributes.get(Attribute.MAX_HP) or attacker.hp
    if attacker.hp * 2 >= max_hp:
        return None
    for item in session.available_items():
        if any(isinstance(effect, HealEffect) for effect in item.effects):
            return item, attacker
    return None


def expire_invulnerability(session: CombatSession) -> None:
    """
    TURN_END callback consuming one turn of the defender's invulnerability.

    The defender has just been through an opposing turn, so a shield raised
    in its own PRE_ITEM lasts for the next `turns` attacks against it.
    """
    defender = session.current_defender
    if defender.attributes.get(Attribute.INVULNERABLE) > 0:
        defender.attributes.add(Attribute.INVULNERABLE, -1)
        log_debug(
            f"{defender.name} invulnerability wears off by one turn",
            {"left": defender.attributes.get(Attribute.INVULNERABLE)},
        )


def run_duel(
    session: CombatSession,
    choose_item: ItemChooser | None = None,
    max_rounds: int | None = None,
) -> CombatResult:
    """
    Drive `session` until it finishes.

    Args:
        session (CombatSession):
            The session to run; it is started if needed.
        choose_item (ItemChooser | None):
            Decides which item, if any, the attacker uses in PRE_ITEM.
            Used items are removed from the attacker's inventory.
        max_rounds (int | None):
            Number of rounds after which the duel is forcibly finished.

    Returns:
        CombatResult:
            The outcome of the duel.

    """
    if not session.is_started():
        session.begin()

    while not session.is_finished():
        if session.phase is Phase.PRE_ITEM and choose_item is not None:
            choice = choose_item(session)
            if choice is not None:
                item, target = choice
                attacker = session.current_attacker
                if session.use_item(item, target):
                    attacker.inventory.remove_item(item)
                if session.is_finished():
                    break
        elif session.phase is Phase.ACTION:
            session.attack()
            if session.is_finished():
                break
        elif (
            session.phase is Phase.TURN_END
            and max_rounds is not None
            and session.round_number >= max_rounds
            and session.current_defender.is_alive()
        ):
            log_warning("Round limit reached", {"max_rounds": max_rounds})
            session.force_finish()
            break

        session.advance_phase()

    winner = session.winner()
    result = CombatResult(
        winner=winner.name if winner else None,
        rounds=session.round_number,
        forced=session.forced,
        final_hp={c.name: c.attributes.get(Attribute.HP) for c in session.combatants},
    )
    log_info(
        "Duel finished",
        {"winner": result.winner, "rounds": result.rounds, "forced": result.forced},
    )
    return result
