"""
User interface module for the arena engine.
"""
