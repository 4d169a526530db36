"""
User interface module for the arena engine.

Console interface used by the interactive duel: rich tables for the combat
status and the item menu, prompt_toolkit for the input.
"""

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from arena.character.main import Combatant
from arena.combat.combat_session import CombatSession
from arena.core.utils import ccapture
from arena.items.item import Item

# one session keeps history
session: PromptSession = PromptSession(erase_when_done=True)


class PlayerInterface:
    """
    Command-line interface for player interactions in a duel.

    Items are selected by number, the target by letter ('s' for self, 'o'
    for the opponent), and 'q' skips the item phase.
    """

    def status_table(self, combat: CombatSession) -> Table:
        """Builds a table with the hit points and roles of both combatants."""
        table = Table(title=f"Round {combat.round_number}", pad_edge=False)
        table.add_column("Name", style="bold")
        table.add_column("HP", justify="right")
        table.add_column("Role", style="magenta")
        for combatant in combat.combatants:
            role = "Attacker" if combatant is combat.current_attacker else "Defender"
            table.add_row(combatant.name, str(combatant.hp), role)
        return table

    def choose_item(self, combat: CombatSession) -> tuple[Item, Combatant | None] | None:
        """Ask the player which item to use, and on whom.

        Args:
            combat (CombatSession): The session, in PRE_ITEM.

        Returns:
            tuple[Item, Combatant | None] | None: The item and its target, or
            None to skip.

        """
        items = list(combat.available_items())
        if not items:
            return None
        table = Table(title=f"Items of {combat.current_attacker.name}", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("Description")
        table.add_column("Effects")
        for i, item in enumerate(items, 1):
            table.add_row(str(i), item.name, item.description, item.colored_effects)
        table.add_row()
        table.add_row("q", "Skip", "", "")
        prompt = (
            "\n" + ccapture(self.status_table(combat)) + "\n" + ccapture(table) + "\nItem > "
        )
        while True:
            answer = session.prompt(ANSI(prompt))
            if not answer:
                continue
            if answer.lower() == "q":
                return None
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(items):
                return items[index], self.choose_target(combat)

    def choose_target(self, combat: CombatSession) -> Combatant:
        """Ask whether the item targets the attacker or the defender."""
        while True:
            answer = session.prompt("Target ([s]elf / [o]pponent) > ")
            if answer.lower().startswith("s"):
                return combat.current_attacker
            if answer.lower().startswith("o"):
                return combat.current_defender

    def get_digit_choice(self, answer: str) -> int:
        """Returns the number typed by the user, -1 if it is not a number."""
        return int(answer) if answer.isdigit() else -1
