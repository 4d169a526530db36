"""
Attribute store module for the arena engine.

Holds the named integer attributes of a combatant (hp, strength, defense,
...). The store never validates values: range and sign checks belong to the
action validators, and type checks to the code that loads definitions.
"""

from typing import Any, Iterator


class AttributeStore:
    """
    Named integer attributes owned by a single combatant.

    Attributes that were never written read as 0.

    Attributes:
        owner (Any):
            The Combatant instance that owns this store, if any.

    """

    def __init__(self, values: dict[str, int] | None = None, owner: Any = None) -> None:
        """
        Initializes the store with an optional set of starting values.

        Args:
            values (dict[str, int] | None):
                Initial attribute values; the mapping is copied.
            owner (Any):
                The Combatant instance that owns this store.

        """
        self.owner: Any = owner
        self._values: dict[str, int] = {str(k): v for k, v in (values or {}).items()}

    def get(self, name: str) -> int:
        """Returns the value of `name`, 0 if it was never set."""
        return self._values.get(str(name), 0)

    def set(self, name: str, value: int) -> None:
        """Sets `name` to `value`, creating the attribute if needed."""
        self._values[str(name)] = value

    def add(self, name: str, delta: int) -> None:
        """Adds `delta` to `name`, creating the attribute if needed."""
        self.set(name, self.get(name) + delta)

    def has(self, name: str) -> bool:
        """Returns True if `name` has been explicitly set."""
        return str(name) in self._values

    def as_dict(self) -> dict[str, int]:
        """Returns a copy of the current attribute map."""
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return str(name) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AttributeStore({self._values!r})"
