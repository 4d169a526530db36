"""
Inventory module for the arena engine.

Keeps the items a combatant carries, in insertion order. Duplicates are
allowed and containment is checked by value.
"""

from typing import Any

from arena.core.logging import log_info
from arena.core.utils import cprint
from arena.items.item import Item


class CharacterInventory:
    """
    Manages the items carried by a combatant.

    Attributes:
        owner (Any):
            The Combatant instance this inventory belongs to.

    """

    owner: Any

    def __init__(self, owner: Any = None) -> None:
        """
        Initialize the inventory with the owning combatant.

        Args:
            owner (Any):
                The Combatant instance this inventory belongs to.

        """
        self.owner = owner
        self._items: list[Item] = []

    @property
    def _owner_name(self) -> str:
        return getattr(self.owner, "name", "?")

    def add_item(self, item: Item) -> None:
        """
        Add an item to the inventory.

        Args:
            item (Item):
                The item to add.

        """
        self._items.append(item)
        log_info(f"Item '{item.name}' added to the inventory of {self._owner_name}")

    def remove_item(self, item: Item) -> bool:
        """
        Remove the first occurrence of an item from the inventory.

        Args:
            item (Item):
                The item to remove.

        Returns:
            bool:
                True if the item was removed, False if it was not present.

        """
        if item not in self._items:
            return False
        self._items.remove(item)
        log_info(f"Item '{item.name}' removed from the inventory of {self._owner_name}")
        return True

    def get_items(self) -> tuple[Item, ...]:
        """Returns a read-only view of the items, in insertion order."""
        return tuple(self._items)

    def contains(self, item: Item) -> bool:
        """Returns True if the inventory holds an item equal to `item`."""
        return item in self._items

    def list_items(self) -> None:
        """Print every item with its description."""
        cprint(f"[bold]Inventory of {self._owner_name}:[/]")
        for item in self._items:
            cprint(f"  - {item} {item.colored_effects}")

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __len__(self) -> int:
        return len(self._items)
