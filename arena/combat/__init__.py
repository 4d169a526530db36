"""
Combat system module for the arena engine.

This module handles the damage-resolution pipeline pieces (damage rules and
action validators), the combat session state machine, and the automatic
duel driver.
"""
