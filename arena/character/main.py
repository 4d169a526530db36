"""
Combatant module for the arena engine.

Defines the Combatant class: a participant owning an attribute store, an
ordered list of damage rules and an inventory, exposing the attack pipeline
and item use.
"""

from collections.abc import Iterable, Sequence

from arena.combat.damage import AttackReport, RuleOutcome
from arena.combat.damage_rules import DamageRule
from arena.combat.validators import ActionValidator, validate_all
from arena.core.constants import Attribute
from arena.core.error_handling import require_non_empty_string
from arena.core.logging import log_debug, log_info, log_warning
from arena.core.utils import make_bar
from arena.items.item import Item

from .attributes import AttributeStore
from .character_inventory import CharacterInventory


class Combatant:
    """
    Represents a participant in a combat session.

    Hit points are not a dedicated field: they live in the `hp` attribute
    and may go negative. A combatant is alive iff hp > 0.

    Attributes:
        name (str):
            The name of the combatant, stable for the whole session.
        attributes (AttributeStore):
            The combatant's named integer attributes.
        rules (list[DamageRule]):
            Damage rules applied, in order, on every attack.
        inventory (CharacterInventory):
            The items carried by the combatant.

    """

    name: str
    attributes: AttributeStore
    rules: list[DamageRule]
    inventory: CharacterInventory

    def __init__(
        self,
        name: str,
        attributes: AttributeStore | dict[str, int] | None = None,
        rules: Sequence[DamageRule] | None = None,
    ) -> None:
        self.name = require_non_empty_string(name, "name")
        if isinstance(attributes, AttributeStore):
            self.attributes = attributes
            self.attributes.owner = self
        else:
            self.attributes = AttributeStore(attributes, owner=self)
        self.rules = list(rules or [])
        self.inventory = CharacterInventory(owner=self)

    # ============================================================================
    # HIT POINTS
    # ============================================================================

    @property
    def hp(self) -> int:
        """Returns the current hit points."""
        return self.attributes.get(Attribute.HP)

    @hp.setter
    def hp(self, value: int) -> None:
        self.attributes.set(Attribute.HP, value)

    def is_alive(self) -> bool:
        """Returns True if the combatant has more than 0 hp."""
        return self.hp > 0

    def is_dead(self) -> bool:
        """Returns True if the combatant has 0 hp or less."""
        return not self.is_alive()

    # ============================================================================
    # ATTACK PIPELINE
    # ============================================================================

    def attack(
        self,
        target: "Combatant",
        validators: Iterable[ActionValidator],
    ) -> AttackReport:
        """
        Attack `target` with every damage rule, in order.

        Each rule's value goes through the whole validator chain on its own,
        so some rules may land while others are blocked.

        Args:
            target (Combatant):
                The combatant receiving the attack.
            validators (Iterable[ActionValidator]):
                The validators that must all approve each value.

        Returns:
            AttackReport:
                What each rule computed and whether it was applied.

        """
        validators = tuple(validators)
        report = AttackReport(attacker=self.name, defender=target.name)
        for rule in self.rules:
            value = rule.calculate(self, target)
            applied = self.apply_damage_with_validation(target, value, validators)
            report.outcomes.append(
                RuleOutcome(rule=rule.display_name, value=value, applied=applied)
            )
        return report

    def apply_damage_with_validation(
        self,
        target: "Combatant",
        value: int,
        validators: Sequence[ActionValidator],
    ) -> bool:
        """
        Deal `value` damage to `target` if every validator approves.

        Returns:
            bool:
                True if the damage was applied.

        """
        if validate_all(validators, self, target, value):
            target.receive_damage(value, self)
            return True
        log_warning(
            f"Action blocked by validation ({self.name} attacking {target.name})",
            {"damage": value},
        )
        return False

    def receive_damage(self, amount: int, source: "Combatant | None") -> None:
        """
        Subtract `amount` from hp, without any floor.

        Args:
            amount (int):
                The damage received; negative values heal.
            source (Combatant | None):
                The combatant that caused the damage, None for item effects.

        """
        self.hp = self.hp - amount
        source_name = source.name if source is not None else "an effect"
        log_info(f"{self.name} got {amount} damage from {source_name} (HP: {self.hp})")

    # ============================================================================
    # ITEMS
    # ============================================================================

    def use_item(self, item: Item, target: "Combatant") -> bool:
        """
        Use an item from the inventory on `target` (possibly self).

        Using an item the combatant does not carry is a silent no-op.

        Returns:
            bool:
                True if the item was used.

        """
        if not self.inventory.contains(item):
            log_debug(f"{self.name} does not carry item '{item.name}'")
            return False
        item.use(target)
        return True

    # ============================================================================
    # DISPLAY
    # ============================================================================

    def get_status_line(self, max_hp: int | None = None, show_bars: bool = True) -> str:
        """
        Returns a one-line status summary for console output.

        Args:
            max_hp (int | None):
                Reference value for the health bar; without it no bar is drawn.
            show_bars (bool):
                Whether to draw the health bar.

        """
        status = f"[bold]{self.name:<12}[/] HP {self.hp:>4}"
        if show_bars and max_hp:
            color = "green" if self.hp * 2 > max_hp else "red"
            status += " " + make_bar(self.hp, max_hp, color=color)
        if self.attributes.get(Attribute.INVULNERABLE) > 0:
            status += " ✨"
        if self.is_dead():
            status += " [dim](defeated)[/]"
        return status

    def __repr__(self) -> str:
        return f"Combatant(name={self.name!r}, hp={self.hp})"
