"""
Items module for the arena engine.
"""

from .item import Item, deserialize_item

__all__ = [
    "Item",
    "deserialize_item",
]
