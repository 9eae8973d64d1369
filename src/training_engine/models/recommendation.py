"""Progressive overload outputs — load prescriptions and progression advice."""

from __future__ import annotations

from dataclasses import dataclass

from training_engine.models.enums import PerformanceTrend, RecommendationType
from training_engine.models.exercise import ProgressionStep


@dataclass(frozen=True)
class LoadPrescription:
    """Session parameters for one exercise, merged into an ExerciseInstance."""

    sets: int
    reps: int | None = None
    reps_min: int | None = None
    reps_max: int | None = None
    weight_kg: float | None = None
    rest_seconds: int | None = None
    rpe_target: float | None = None


@dataclass(frozen=True)
class ProgressionRecommendation:
    """What the overload calculator advises for the next block of sessions."""

    type: RecommendationType
    reasoning: str
    duration_weeks: int
    next_assessment: str
    target_load_kg: float | None = None
    target_step: ProgressionStep | None = None
    starting_level: int | None = None
    progression_rate: float | None = None
    trend: PerformanceTrend | None = None
