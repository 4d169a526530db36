"""
Combat session module for the arena engine.

The CombatSession is a finite state machine driving a two-party turn-based
combat through a fixed phase cycle:

    TURN_START -> PRE_ITEM -> ACTION -> POST_ACTION -> TURN_END
    TURN_END -> TURN_START (defender alive, roles swap) | FINISHED

Progress is driven entirely by the caller. The session has no internal
loop, so the same machine serves tests, user interfaces, and stepped
simulations. All transitions and callbacks run synchronously; the session is
not safe for concurrent use without external locking.
"""

from collections.abc import Callable, Iterable

from arena.character.main import Combatant
from arena.combat.damage import AttackReport
from arena.combat.validators import ActionValidator
from arena.core.constants import NEXT_PHASE, Phase
from arena.core.error_handling import InvalidPhaseError, ReentrantTransitionError
from arena.core.logging import log_debug, log_info
from arena.items.item import Item

PhaseCallback = Callable[["CombatSession"], None]


class CombatSession:
    """
    Orchestrates a turn-based combat between two combatants.

    Invariants:
        - After any public call returns, `phase` reflects the last completed
          transition and every callback registered for it has fired once.
        - When `phase` is FINISHED, at least one combatant has hp <= 0,
          unless `force_finish` was called.
        - The first and second combatants never change; only the attacker
          and defender roles swap.

    Attributes:
        round_number (int):
            The current round, starting at 1 on `begin`, incremented every
            time the roles swap.
        forced (bool):
            True if the session was ended through `force_finish`.

    """

    def __init__(
        self,
        first: Combatant,
        second: Combatant,
        validators: Iterable[ActionValidator] = (),
    ) -> None:
        """
        Initialize the session; it stays unstarted until `begin` is called.

        Args:
            first (Combatant):
                The combatant attacking first.
            second (Combatant):
                The combatant defending first.
            validators (Iterable[ActionValidator]):
                Validators applied to every damage value of every attack.

        """
        if first is second:
            raise ValueError("A combatant cannot fight itself.")
        self._first: Combatant = first
        self._second: Combatant = second
        self._attacker: Combatant = first
        self._defender: Combatant = second
        self._validators: tuple[ActionValidator, ...] = tuple(validators)
        self._phase: Phase | None = None
        self._callbacks: dict[Phase, list[PhaseCallback]] = {p: [] for p in Phase}
        # Phase whose callbacks are currently running, None otherwise.
        self._firing: Phase | None = None
        self.round_number: int = 0
        self.forced: bool = False

    # ============================================================================
    # QUERIES
    # ============================================================================

    @property
    def phase(self) -> Phase | None:
        """The current phase, None until `begin` is called."""
        return self._phase

    @property
    def current_attacker(self) -> Combatant:
        return self._attacker

    @property
    def current_defender(self) -> Combatant:
        return self._defender

    @property
    def combatants(self) -> tuple[Combatant, Combatant]:
        """The two combatants, in their original order."""
        return self._first, self._second

    @property
    def validators(self) -> tuple[ActionValidator, ...]:
        return self._validators

    def available_items(self) -> tuple[Item, ...]:
        """Returns the items carried by the current attacker."""
        return self._attacker.inventory.get_items()

    def is_started(self) -> bool:
        return self._phase is not None

    def is_finished(self) -> bool:
        return self._phase is Phase.FINISHED

    def winner(self) -> Combatant | None:
        """
        Returns the only combatant still alive.

        Returns:
            Combatant | None:
                The winner, or None if both are alive or both are defeated.

        """
        first_alive = self._first.is_alive()
        second_alive = self._second.is_alive()
        if first_alive and not second_alive:
            return self._first
        if second_alive and not first_alive:
            return self._second
        return None

    # ============================================================================
    # CALLBACKS
    # ============================================================================

    def on(self, phase: Phase, callback: PhaseCallback) -> PhaseCallback:
        """
        Register a callback fired every time the session enters `phase`.

        Callbacks run synchronously, in registration order, and receive the
        session. They may inspect it but must not drive it: calling a
        transition or an action from a callback raises
        ReentrantTransitionError.

        Returns:
            PhaseCallback:
                The callback itself.

        """
        self._callbacks[phase].append(callback)
        return callback

    # ============================================================================
    # LIFECYCLE
    # ============================================================================

    def begin(self) -> Phase:
        """
        Start (or restart) the combat.

        Resets the roles to their original assignment and enters TURN_START,
        or FINISHED straight away if one of the combatants is already dead.

        Returns:
            Phase:
                The phase entered.

        """
        self._check_reentrancy("begin")
        self._attacker = self._first
        self._defender = self._second
        self.round_number = 1
        self.forced = False
        if self._first.is_alive() and self._second.is_alive():
            self._transition(Phase.TURN_START)
        else:
            self._transition(Phase.FINISHED)
        return self._phase  # type: ignore[return-value]

    def advance_phase(self) -> Phase:
        """
        Move to the next phase of the cycle.

        At TURN_END the combat finishes if the current defender is dead;
        otherwise the roles swap and a new turn starts. Once FINISHED, the
        call is a no-op.

        Returns:
            Phase:
                The phase after the transition.

        Raises:
            InvalidPhaseError:
                If the session was never started.

        """
        self._check_reentrancy("advance_phase")
        if self._phase is None:
            raise InvalidPhaseError("advance_phase", "any phase after begin()", None)
        if self._phase is Phase.FINISHED:
            return self._phase

        if self._phase is Phase.TURN_END:
            if not self._defender.is_alive():
                next_phase = Phase.FINISHED
            else:
                self._swap_roles()
                next_phase = Phase.TURN_START
        else:
            next_phase = NEXT_PHASE[self._phase]

        self._transition(next_phase)
        return self._phase

    def force_finish(self) -> None:
        """
        End the combat immediately, whatever the current phase.

        FINISHED callbacks fire unless the session had already finished.
        """
        self._check_reentrancy("force_finish")
        if self._phase is Phase.FINISHED:
            return
        self.forced = True
        log_info("Combat forcibly finished", {"phase": self._phase})
        self._transition(Phase.FINISHED)

    # ============================================================================
    # PHASE-GATED ACTIONS
    # ============================================================================

    def use_item(self, item: Item, target: Combatant | None = None) -> bool:
        """
        Have the current attacker use `item`. Only allowed in PRE_ITEM.

        If the item kills either combatant, the combat finishes at once.

        Args:
            item (Item):
                The item to use; using an item the attacker does not carry
                is a silent no-op.
            target (Combatant | None):
                The target of the item, the attacker itself by default.

        Returns:
            bool:
                True if the item was used.

        Raises:
            InvalidPhaseError:
                If the session is not in PRE_ITEM.

        """
        self._check_reentrancy("use_item")
        self._require_phase("use_item", Phase.PRE_ITEM)
        if target is None:
            target = self._attacker
        used = self._attacker.use_item(item, target)
        self._finish_if_someone_died()
        return used

    def attack(self) -> AttackReport:
        """
        Have the current attacker attack the current defender. Only allowed
        in ACTION.

        If the defender dies the combat finishes at once. Otherwise the
        session stays in ACTION until the caller advances it.

        Returns:
            AttackReport:
                The outcome of each damage rule.

        Raises:
            InvalidPhaseError:
                If the session is not in ACTION.

        """
        self._check_reentrancy("attack")
        self._require_phase("attack", Phase.ACTION)
        report = self._attacker.attack(self._defender, self._validators)
        if not self._defender.is_alive():
            self._transition(Phase.FINISHED)
        return report

    # ============================================================================
    # INTERNALS
    # ============================================================================

    def _require_phase(self, operation: str, expected: Phase) -> None:
        if self._phase is not expected:
            raise InvalidPhaseError(operation, expected, self._phase)

    def _check_reentrancy(self, operation: str) -> None:
        if self._firing is not None:
            raise ReentrantTransitionError(operation, self._firing)

    def _swap_roles(self) -> None:
        self._attacker, self._defender = self._defender, self._attacker
        self.round_number += 1

    def _finish_if_someone_died(self) -> None:
        if self._phase is Phase.FINISHED:
            return
        if not self._first.is_alive() or not self._second.is_alive():
            self._transition(Phase.FINISHED)

    def _transition(self, next_phase: Phase) -> None:
        """Single entry point for every phase change: set it, then fire."""
        log_debug(
            f"Phase {self._phase} -> {next_phase}",
            {"attacker": self._attacker.name, "round": self.round_number},
        )
        self._phase = next_phase
        self._fire(next_phase)

    def _fire(self, phase: Phase) -> None:
        self._firing = phase
        try:
            # Copy so callbacks registered while firing wait for the next entry.
            for callback in tuple(self._callbacks[phase]):
                callback(self)
        finally:
            self._firing = None
