"""
Arena: a turn-based duel resolution engine.

This package contains the combat state machine, the damage-resolution
pipeline (damage rules and action validators), combatants with their
attributes and inventories, item effects, and a small console front-end.
"""
