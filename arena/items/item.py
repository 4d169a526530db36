"""
Item module for the arena engine.

An item is a named, immutable bundle of effects applied atomically to a
target when used.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from arena.core.logging import log_info
from arena.effects.base_effect import Effect, deserialize_effect


class Item(BaseModel):
    """
    Represents a usable item.

    Using an item applies every effect in order to the target; each effect
    sees the mutations of the ones before it.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="The name of the item.",
    )
    description: str = Field(
        default="",
        description="A description of the item.",
    )
    effects: tuple[Effect, ...] = Field(
        default=(),
        description="The effects applied, in order, when the item is used.",
    )

    def use(self, target: Any) -> None:
        """
        Apply every effect of the item to the target.

        Args:
            target (Combatant):
                The combatant receiving the effects.

        """
        log_info(f"{target.name} receives item {self.name}")
        for effect in self.effects:
            effect.apply(target)

    @property
    def colored_effects(self) -> str:
        """Returns the effects as emoji plus colored names, for menus."""
        return ", ".join(f"{e.emoji} {e.colored_name}" for e in self.effects)

    def __str__(self) -> str:
        return f"{self.name}: {self.description}" if self.description else self.name


def deserialize_item(data: dict[str, Any]) -> Item:
    """
    Creates an Item from a dictionary.

    Args:
        data (dict[str, Any]):
            The item data, with `name`, `description` and a list of `effects`.

    Returns:
        Item:
            The created item.

    Raises:
        ValueError:
            If one of the effects cannot be deserialized.

    """
    effects: list[Effect] = []
    for effect_data in data.get("effects", []):
        effect = deserialize_effect(effect_data)
        if effect is None:
            raise ValueError(f"Failed to deserialize effect: {effect_data}")
        effects.append(effect)
    return Item(
        name=data["name"],
        description=data.get("description", ""),
        effects=tuple(effects),
    )
