"""
Combatant construction functions.

Builds Combatant instances from plain dictionaries, the shape used by the
content repository's JSON files.
"""

from typing import Any

from arena.combat.damage_rules import DamageRule, deserialize_rule
from arena.core.error_handling import require_int
from arena.core.logging import log_error
from arena.items.item import Item, deserialize_item

from .main import Combatant


def combatant_from_dict(
    data: dict[str, Any],
    items: dict[str, Item] | None = None,
) -> Combatant:
    """
    Creates a Combatant instance from a dictionary of data.

    Args:
        data (dict[str, Any]):
            The combatant data: `name`, `attributes`, `rules` and `items`.
            Each entry of `items` is either an inline item definition or the
            name of an item in `items`.
        items (dict[str, Item] | None):
            Known items, by name, used to resolve item references.

    Returns:
        Combatant:
            The created combatant.

    Raises:
        ValueError:
            If a rule or an item reference cannot be resolved.

    """
    rules: list[DamageRule] = []
    for rule_data in data.get("rules", []):
        rule = deserialize_rule(rule_data)
        if rule is None:
            log_error("Failed to deserialize rule", {"rule": rule_data})
            raise ValueError(f"Failed to deserialize rule: {rule_data}")
        rules.append(rule)

    combatant = Combatant(
        name=data["name"],
        attributes={
            k: require_int(v, f"attribute {k}", {"combatant": data["name"]})
            for k, v in data.get("attributes", {}).items()
        },
        rules=rules,
    )

    for entry in data.get("items", []):
        if isinstance(entry, str):
            if not items or entry not in items:
                raise ValueError(f"Item '{entry}' not found for {combatant.name}.")
            combatant.inventory.add_item(items[entry])
        else:
            combatant.inventory.add_item(deserialize_item(entry))

    return combatant
