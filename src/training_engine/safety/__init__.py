"""Exercise safety screening."""

from training_engine.safety.filter import SafetyFilter

__all__ = ["SafetyFilter"]
