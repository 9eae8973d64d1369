"""Load prescription, progression advice and progression analytics."""

from training_engine.progression.overload import ProgressiveOverloadCalculator

__all__ = ["ProgressiveOverloadCalculator"]
