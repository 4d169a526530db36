"""
Tests for the combat session state machine.
"""

from typing import Any

import pytest

from arena.character.main import Combatant
from arena.combat.combat_session import CombatSession
from arena.combat.damage_rules import FixedRule
from arena.combat.validators import CustomValidator
from arena.core.constants import Phase
from arena.core.error_handling import InvalidPhaseError, ReentrantTransitionError
from arena.effects.attribute_effects import DirectDamageEffect, HealEffect
from arena.effects.base_effect import Effect
from arena.items.item import Item


def fighter(name: str, hp: int, rules: list | None = None) -> Combatant:
    return Combatant(name, {"hp": hp}, rules or [])


def to_phase(session: CombatSession, phase: Phase) -> None:
    """Advance a begun session until it reaches `phase`."""
    while session.phase is not phase:
        session.advance_phase()


class HpDelta(Effect):
    amount: int

    def apply(self, target: Any) -> None:
        target.receive_damage(-self.amount, None)


@pytest.fixture
def a():
    return fighter("A", 100)


@pytest.fixture
def b():
    return fighter("B", 100)


@pytest.fixture
def session(a, b):
    return CombatSession(a, b)


# ============================================================================
# LIFECYCLE
# ============================================================================


def test_session_is_not_started_before_begin(session):
    assert session.phase is None
    assert not session.is_started()
    assert not session.is_finished()


def test_advance_before_begin_raises(session):
    with pytest.raises(InvalidPhaseError):
        session.advance_phase()


def test_begin_starts_at_turn_start_if_both_alive(session):
    assert session.begin() is Phase.TURN_START
    assert session.phase is Phase.TURN_START
    assert session.round_number == 1


@pytest.mark.parametrize("hp_a, hp_b", [(0, 100), (100, 0), (-3, -3)])
def test_begin_finishes_immediately_if_one_is_dead(hp_a, hp_b):
    session = CombatSession(fighter("A", hp_a), fighter("B", hp_b))
    assert session.begin() is Phase.FINISHED
    assert session.is_finished()


def test_combatant_cannot_fight_itself(a):
    with pytest.raises(ValueError):
        CombatSession(a, a)


def test_advance_phase_follows_the_cycle(session):
    session.begin()
    assert session.advance_phase() is Phase.PRE_ITEM
    assert session.advance_phase() is Phase.ACTION
    assert session.advance_phase() is Phase.POST_ACTION
    assert session.advance_phase() is Phase.TURN_END
    assert session.advance_phase() is Phase.TURN_START


def test_cycle_repeats_until_someone_dies():
    a = fighter("A", 100, [FixedRule(amount=40)])
    b = fighter("B", 50, [FixedRule(amount=1)])
    session = CombatSession(a, b)
    visited = [session.begin()]
    while not session.is_finished():
        if session.phase is Phase.ACTION:
            session.attack()
            if session.is_finished():
                visited.append(session.phase)
                break
        visited.append(session.advance_phase())
    expected_turn = [
        Phase.TURN_START,
        Phase.PRE_ITEM,
        Phase.ACTION,
        Phase.POST_ACTION,
        Phase.TURN_END,
    ]
    # A hits (50 -> 10), B hits back, A hits again and kills during ACTION.
    assert visited == expected_turn * 2 + expected_turn[:3] + [Phase.FINISHED]
    assert session.winner() is a


def test_turn_end_finishes_when_defender_died_outside_attack(session, b):
    session.begin()
    to_phase(session, Phase.TURN_END)
    b.hp = 0
    assert session.advance_phase() is Phase.FINISHED


def test_finished_is_idempotent(session):
    session.begin()
    session.force_finish()
    for _ in range(3):
        assert session.advance_phase() is Phase.FINISHED


def test_roles_swap_after_a_full_cycle(session, a, b):
    session.begin()
    assert session.current_attacker is a
    assert session.current_defender is b
    for _ in range(5):
        session.advance_phase()
    assert session.current_attacker is b
    assert session.current_defender is a
    assert session.round_number == 2


def test_begin_resets_roles(session, a, b):
    session.begin()
    for _ in range(5):
        session.advance_phase()
    session.begin()
    assert session.current_attacker is a
    assert session.phase is Phase.TURN_START


def test_combatants_keep_their_original_order(session, a, b):
    session.begin()
    for _ in range(5):
        session.advance_phase()
    assert session.combatants == (a, b)


# ============================================================================
# CALLBACKS
# ============================================================================


def test_callbacks_fire_on_phase_change(session):
    called = []
    session.on(Phase.ACTION, lambda s: called.append(s.phase))
    session.begin()
    session.advance_phase()
    assert called == []
    session.advance_phase()
    assert called == [Phase.ACTION]


def test_callbacks_fire_in_registration_order(session):
    order = []
    session.on(Phase.TURN_START, lambda s: order.append("first"))
    session.on(Phase.TURN_START, lambda s: order.append("second"))
    session.begin()
    assert order == ["first", "second"]


def test_begin_fires_the_entered_phase(a):
    session = CombatSession(a, fighter("B", 0))
    finished = []
    session.on(Phase.FINISHED, lambda s: finished.append(s.is_finished()))
    session.begin()
    assert finished == [True]


def test_callbacks_fire_once_per_entry(session):
    entries = []
    session.on(Phase.TURN_START, lambda s: entries.append(s.round_number))
    session.begin()
    for _ in range(10):
        session.advance_phase()
    assert entries == [1, 2, 3]


def test_callback_sees_swapped_roles(session, b):
    attackers = []
    session.on(Phase.TURN_START, lambda s: attackers.append(s.current_attacker))
    session.begin()
    for _ in range(5):
        session.advance_phase()
    assert attackers[-1] is b


def test_callback_cannot_advance_the_session(session):
    session.on(Phase.PRE_ITEM, lambda s: s.advance_phase())
    session.begin()
    with pytest.raises(ReentrantTransitionError):
        session.advance_phase()
    assert session.phase is Phase.PRE_ITEM


def test_callback_cannot_force_finish(session):
    session.on(Phase.TURN_START, lambda s: s.force_finish())
    with pytest.raises(ReentrantTransitionError):
        session.begin()
    assert session.phase is Phase.TURN_START


def test_callback_cannot_attack(a, b):
    a.rules.append(FixedRule(amount=500))
    session = CombatSession(a, b)
    session.on(Phase.ACTION, lambda s: s.attack())
    session.begin()
    session.advance_phase()
    with pytest.raises(ReentrantTransitionError):
        session.advance_phase()
    assert b.hp == 100


def test_session_recovers_after_reentrancy_error(session):
    def bad(s):
        s.advance_phase()

    session.on(Phase.PRE_ITEM, bad)
    session.begin()
    with pytest.raises(ReentrantTransitionError):
        session.advance_phase()
    assert session.advance_phase() is Phase.ACTION


def test_callback_registered_while_firing_waits_for_next_entry(session):
    calls = []

    def register(s):
        s.on(Phase.TURN_START, lambda s2: calls.append("late"))

    session.on(Phase.TURN_START, register)
    session.begin()
    assert calls == []


# ============================================================================
# ITEMS
# ============================================================================


def test_available_items_returns_attacker_items(session, a, b):
    potion = Item(name="Potion", description="Heals")
    bomb = Item(name="Bomb", description="Boom")
    a.inventory.add_item(potion)
    b.inventory.add_item(bomb)
    session.begin()
    assert session.available_items() == (potion,)
    for _ in range(5):
        session.advance_phase()
    assert session.available_items() == (bomb,)


def test_use_item_only_allowed_in_pre_item(session, a):
    potion = Item(name="Potion", description="Heals")
    a.inventory.add_item(potion)
    session.begin()
    with pytest.raises(InvalidPhaseError) as excinfo:
        session.use_item(potion, a)
    assert excinfo.value.expected is Phase.PRE_ITEM
    assert excinfo.value.actual is Phase.TURN_START
    to_phase(session, Phase.ACTION)
    with pytest.raises(InvalidPhaseError):
        session.use_item(potion, a)


def test_use_item_before_begin_raises(session, a):
    with pytest.raises(InvalidPhaseError):
        session.use_item(Item(name="Potion"), a)


def test_use_item_applies_effect_in_pre_item():
    a = fighter("A", 50)
    b = fighter("B", 100)
    heal = Item(name="Potion", description="Heals 20", effects=(HpDelta(amount=20),))
    a.inventory.add_item(heal)
    session = CombatSession(a, b)
    session.begin()
    session.advance_phase()
    assert session.use_item(heal, a) is True
    assert a.hp == 70
    assert session.phase is Phase.PRE_ITEM


def test_use_item_targets_attacker_by_default(session, a):
    heal = Item(name="Potion", effects=(HealEffect(amount=15),))
    a.inventory.add_item(heal)
    session.begin()
    session.advance_phase()
    session.use_item(heal)
    assert a.hp == 115


def test_use_item_not_in_inventory_is_a_no_op(session, a, b):
    bomb = Item(name="Bomb", effects=(DirectDamageEffect(amount=50),))
    session.begin()
    session.advance_phase()
    assert session.use_item(bomb, b) is False
    assert b.hp == 100
    assert session.phase is Phase.PRE_ITEM


def test_use_item_can_end_battle_if_target_dies():
    a = fighter("A", 100)
    b = fighter("B", 10)
    kill = Item(name="Bomb", description="Deals 20", effects=(DirectDamageEffect(amount=20),))
    a.inventory.add_item(kill)
    session = CombatSession(a, b)
    finished = []
    session.on(Phase.FINISHED, lambda s: finished.append(True))
    session.begin()
    session.advance_phase()
    session.use_item(kill, b)
    assert session.is_finished()
    assert session.winner() is a
    assert finished == [True]


def test_item_that_kills_its_user_ends_the_battle():
    a = fighter("A", 10)
    b = fighter("B", 100)
    cursed = Item(name="Cursed Potion", effects=(DirectDamageEffect(amount=30),))
    a.inventory.add_item(cursed)
    session = CombatSession(a, b)
    session.begin()
    session.advance_phase()
    session.use_item(cursed)
    assert session.is_finished()
    assert session.winner() is b


def test_item_effects_bypass_validators():
    a = fighter("A", 100)
    b = fighter("B", 10)
    bomb = Item(name="Bomb", effects=(DirectDamageEffect(amount=20),))
    a.inventory.add_item(bomb)
    session = CombatSession(a, b, [CustomValidator(lambda *args: False)])
    session.begin()
    session.advance_phase()
    session.use_item(bomb, b)
    assert b.hp == -10


# ============================================================================
# ATTACKS
# ============================================================================


def test_attack_only_allowed_in_action(session):
    session.begin()
    with pytest.raises(InvalidPhaseError):
        session.attack()
    session.advance_phase()
    with pytest.raises(InvalidPhaseError):
        session.attack()


def test_attack_applies_damage_and_continues_if_defender_alive():
    a = fighter("A", 100, [FixedRule(amount=30)])
    b = fighter("B", 100)
    session = CombatSession(a, b)
    session.begin()
    to_phase(session, Phase.ACTION)
    report = session.attack()
    assert b.hp == 70
    assert report.total_damage == 30
    assert not session.is_finished()
    # The caller decides when to leave ACTION.
    assert session.phase is Phase.ACTION


def test_attack_finishes_battle_if_defender_dies():
    a = fighter("A", 100, [FixedRule(amount=200)])
    b = fighter("B", 100)
    session = CombatSession(a, b)
    session.begin()
    to_phase(session, Phase.ACTION)
    session.attack()
    assert session.is_finished()
    assert session.winner() is a
    assert b.hp == -100


def test_attack_uses_session_validators():
    a = fighter("A", 100, [FixedRule(amount=10), FixedRule(amount=15)])
    b = fighter("B", 50)
    session = CombatSession(a, b, [CustomValidator(lambda *args: False)])
    session.begin()
    to_phase(session, Phase.ACTION)
    session.attack()
    assert b.hp == 50


def test_second_attacker_hits_the_first():
    a = fighter("A", 100, [FixedRule(amount=5)])
    b = fighter("B", 100, [FixedRule(amount=7)])
    session = CombatSession(a, b)
    session.begin()
    for _ in range(5):
        session.advance_phase()
    to_phase(session, Phase.ACTION)
    session.attack()
    assert a.hp == 93
    assert b.hp == 100


# ============================================================================
# RESULTS
# ============================================================================


def test_winner_returns_correct_fighter(a):
    session = CombatSession(a, fighter("B", 0))
    session.begin()
    assert session.winner() is a


def test_winner_is_none_if_both_alive(session):
    session.begin()
    assert session.winner() is None


def test_winner_is_none_if_both_dead():
    session = CombatSession(fighter("A", 0), fighter("B", -1))
    session.begin()
    assert session.winner() is None


def test_force_finish_ends_battle_immediately(session):
    finished = []
    session.on(Phase.FINISHED, lambda s: finished.append(True))
    session.begin()
    session.advance_phase()
    session.force_finish()
    assert session.is_finished()
    assert session.forced
    assert session.winner() is None
    session.force_finish()
    assert finished == [True]
