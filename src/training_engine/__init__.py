"""Adaptive training plan engine: workout generation and live adaptation."""

from training_engine.api import handle_request
from training_engine.engine import TrainingEngine

__all__ = ["TrainingEngine", "handle_request"]
