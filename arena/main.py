"""
Main entry point for the arena engine.

Loads combatant and item definitions, then runs a duel between two of them,
either automatically or interactively (the player picks the items used in
each PRE_ITEM phase).
"""

import argparse
import sys
from pathlib import Path

from arena.character.main import Combatant
from arena.combat.combat_manager import (
    CombatResult,
    expire_invulnerability,
    heal_when_low,
    run_duel,
)
from arena.combat.combat_session import CombatSession
from arena.combat.validators import default_validators
from arena.core.constants import Attribute, Phase
from arena.core.content import ContentRepository
from arena.core.logging import setup_logging
from arena.core.settings import EngineSettings, load_settings
from arena.core.utils import cprint, crule

# Bundled data folder.
DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"


def make_names_unique(combatants: list[Combatant]) -> None:
    """
    Append (1), (2), ... to combatants sharing a name, in place.

    Example:
        Input: ["Goblin", "Goblin"]
        Output: ["Goblin (1)", "Goblin (2)"]

    """
    names = [c.name for c in combatants]
    for index, combatant in enumerate(combatants, 1):
        if names.count(combatant.name) > 1:
            combatant.name = f"{combatant.name} ({index})"


def build_session(
    repo: ContentRepository,
    first: str,
    second: str,
    settings: EngineSettings,
) -> CombatSession:
    """Create a session between two combatants from the repository."""
    fighters: list[Combatant] = []
    for name in (first, second):
        combatant = repo.get_combatant(name)
        if combatant is None:
            raise SystemExit(f"Unknown combatant: {name}")
        fighters.append(combatant)
    make_names_unique(fighters)
    session = CombatSession(fighters[0], fighters[1], default_validators(settings))

    session.on(Phase.TURN_START, announce_phase)
    session.on(Phase.TURN_END, expire_invulnerability)
    session.on(Phase.TURN_END, print_status)
    session.on(Phase.FINISHED, announce_phase)
    return session


def announce_phase(session: CombatSession) -> None:
    """Print a rule with the emoji and color of the phase just entered."""
    phase = session.phase
    if phase is None:
        return
    title = f"{phase.emoji} {phase.colored_name}"
    if phase is Phase.TURN_START:
        title += f" of round {session.round_number}: {session.current_attacker.name}"
    crule(title, style=phase.color)


def print_status(session: CombatSession) -> None:
    for combatant in session.combatants:
        cprint(combatant.get_status_line(combatant.attributes.get(Attribute.MAX_HP)))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="arena", description="Run a turn-based duel.")
    parser.add_argument("--data-dir", type=Path, default=None)
    parser.add_argument("--settings", type=Path, default=None)
    parser.add_argument("--first", default="Warrior")
    parser.add_argument("--second", default="Mage")
    parser.add_argument("--interactive", action="store_true")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> CombatResult:
    """Parse the arguments, run the duel, and return its result."""
    args = parse_args(argv)
    settings = load_settings(args.settings)
    if args.log_level:
        settings = settings.model_copy(update={"log_level": args.log_level.upper()})
    setup_logging(settings.log_level)

    data_dir = args.data_dir or settings.data_dir or DEFAULT_DATA_DIR
    repo = ContentRepository(data_dir).ensure_loaded(data_dir)
    session = build_session(repo, args.first, args.second, settings)

    if args.interactive:
        from arena.ui.cli_interface import PlayerInterface

        choose_item = PlayerInterface().choose_item
    else:
        choose_item = heal_when_low

    crule(":crossed_swords:  Combat Started", style="bold green")
    try:
        result = run_duel(session, choose_item, settings.max_rounds)
    except KeyboardInterrupt:
        session.force_finish()
        crule(":crossed_swords:  Combat Interrupted", style="bold red")
        sys.exit(1)
    if result.winner:
        cprint(f"[bold green]{result.winner} wins after {result.rounds} rounds.[/]")
    else:
        cprint(f"[bold yellow]No winner after {result.rounds} rounds.[/]")
    return result


def main(argv: list[str] | None = None) -> int:
    run(argv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
