"""
Content repository for the arena engine.

Loads item and combatant definitions from JSON files and hands out fresh
Combatant instances by name.
"""

import json
from collections.abc import Callable
from copy import deepcopy
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import ValidationError

from arena.character.character_serialization import combatant_from_dict
from arena.character.main import Combatant
from arena.items.item import Item, deserialize_item

from .utils import Singleton


class ContentRepository(metaclass=Singleton):
    """
    One-stop registry for every asset that needs fast by-name access.

    Combatant definitions are kept as raw data: combatants are mutated by
    combat, so every lookup builds a new instance.
    """

    items: dict[str, Item]
    combatants: dict[str, dict[str, Any]]
    data_dir: Path

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Load the repository; only the first construction reaches this.

        Args:
            data_dir (Path | None):
                Folder holding `items.json` and `combatants.json`.

        """
        if not data_dir:
            raise ValueError("The first ContentRepository() call needs a data_dir.")
        self.reload(data_dir)

    def reload(self, root: Path) -> None:
        """
        (Re)load every definition from `root`.

        Items come first since combatants refer to them by name.

        Args:
            root (Path):
                Folder holding the JSON files.

        """
        self.data_dir = Path(root)
        self.items = _load_json_file(
            self.data_dir / "items.json",
            self._load_items,
            "items",
        )
        self.combatants = _load_json_file(
            self.data_dir / "combatants.json",
            self._load_combatants,
            "combatants",
        )

    def ensure_loaded(self, data_dir: Path) -> "ContentRepository":
        """
        Reload from `data_dir` unless it is the folder already loaded.

        The repository outlives a single run, so callers that may point at a
        different folder go through this instead of the constructor alone.
        """
        if Path(data_dir) != self.data_dir:
            self.reload(data_dir)
        return self

    def get_item(self, name: str) -> Item | None:
        item = self.items.get(name)
        if item is None:
            log_warning(
                f"Item '{name}' not found in ContentRepository.",
                {"item_name": name, "available": list(self.items)},
            )
        return item

    def get_combatant(self, name: str) -> Combatant | None:
        """
        Build a new combatant from its definition.

        Args:
            name (str):
                The name of the combatant definition.

        Returns:
            Combatant | None:
                A fresh combatant, or None if the definition is unknown.

        """
        data = self.combatants.get(name)
        if data is None:
            log_warning(
                f"Combatant '{name}' not found in ContentRepository.",
                {"combatant_name": name, "available": list(self.combatants)},
            )
            return None
        return combatant_from_dict(deepcopy(data), self.items)

    def _load_items(self, data: dict[str, Any]) -> dict[str, Item]:
        items: dict[str, Item] = {}
        for name, entry in data.items():
            try:
                items[name] = deserialize_item({"name": name, **entry})
            except (ValueError, ValidationError) as e:
                log_warning(
                    f"Skipping malformed item '{name}'",
                    {"item_name": name, "error": str(e)},
                )
        return items

    def _load_combatants(self, data: dict[str, Any]) -> dict[str, dict[str, Any]]:
        combatants: dict[str, dict[str, Any]] = {}
        for name, entry in data.items():
            definition = {"name": name, **entry}
            try:
                # Build once to reject malformed definitions early.
                combatant_from_dict(deepcopy(definition), self.items)
            except (KeyError, ValueError, ValidationError) as e:
                log_warning(
                    f"Skipping malformed combatant '{name}'",
                    {"combatant_name": name, "error": str(e)},
                )
                continue
            combatants[name] = definition
        return combatants


def _load_json_file(
    path: Path,
    loader: Callable[[dict[str, Any]], dict[str, Any]],
    description: str,
) -> dict[str, Any]:
    """
    Load a JSON file and hand its content to `loader`.

    A missing file yields an empty collection and a warning.
    """
    if not path.exists():
        log_warning(
            f"No {description} file found",
            {"path": str(path)},
        )
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return loader(data)
