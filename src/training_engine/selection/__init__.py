"""Archetype selection."""

from training_engine.selection.archetype_selector import ArchetypeSelector

__all__ = ["ArchetypeSelector"]
