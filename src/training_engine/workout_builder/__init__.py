"""Workout builder — turns an archetype and a screened pool into workout blocks."""

from training_engine.workout_builder.builder import BlockBuilder, BuildContext
from training_engine.workout_builder.coaching_notes import (
    CoachingNotesStep,
    HttpCoachingNotesGenerator,
)
from training_engine.workout_builder.metrics import (
    WorkoutMetrics,
    calculate_workout_metrics,
    timing_breakdown,
)

__all__ = [
    "BlockBuilder",
    "BuildContext",
    "CoachingNotesStep",
    "HttpCoachingNotesGenerator",
    "WorkoutMetrics",
    "calculate_workout_metrics",
    "timing_breakdown",
]
