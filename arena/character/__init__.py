"""
Character system module for the arena engine.

This module handles combatants: their attribute store, their inventory, and
their construction from plain data.
"""

from .attributes import AttributeStore
from .character_inventory import CharacterInventory
from .character_serialization import combatant_from_dict
from .main import Combatant

__all__ = [
    # Import from attributes.py
    "AttributeStore",
    # Import from character_inventory.py
    "CharacterInventory",
    # Import from character_serialization.py
    "combatant_from_dict",
    # Import from main.py
    "Combatant",
]
