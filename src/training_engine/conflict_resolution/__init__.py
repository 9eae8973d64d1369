"""Conflict resolution between adaptation proposals."""

from training_engine.conflict_resolution.resolver import ConflictResolver
from training_engine.conflict_resolution.strategies import (
    HighestPriorityWins,
    ResolutionStrategy,
)

__all__ = ["ConflictResolver", "HighestPriorityWins", "ResolutionStrategy"]
