"""Exercise reference data and the session-parameterized ExerciseInstance."""

from __future__ import annotations

from dataclasses import dataclass, field

from training_engine.models.enums import (
    BODYWEIGHT_TAG,
    ExerciseType,
    FitnessLevel,
    IntensityLevel,
)


@dataclass(frozen=True)
class ProgressionStep:
    """One rung of an exercise's progression pathway."""

    name: str
    mastery_time_weeks: int | None = None


@dataclass(frozen=True)
class Exercise:
    """Immutable catalog entry. Owned by the catalog, read-only to the engine."""

    id: str
    name: str
    exercise_type: ExerciseType
    intensity: IntensityLevel
    primary_muscle: str
    secondary_muscles: tuple[str, ...] = field(default_factory=tuple)
    equipment_required: frozenset[str] = field(default_factory=frozenset)
    contraindications: frozenset[str] = field(default_factory=frozenset)
    difficulty: FitnessLevel = FitnessLevel.BEGINNER
    movement_patterns: frozenset[str] = field(default_factory=frozenset)
    description: str = ""
    progression_pathway: tuple[ProgressionStep, ...] = field(default_factory=tuple)

    @property
    def is_compound(self) -> bool:
        """Compound lifts recruit secondary muscle groups."""
        return len(self.secondary_muscles) > 0

    @property
    def is_dynamic_stretch(self) -> bool:
        return (
            self.exercise_type == ExerciseType.STRETCHING
            and "dynamic" in self.description.lower()
        )

    @property
    def is_static_stretch(self) -> bool:
        description = self.description.lower()
        return self.exercise_type == ExerciseType.STRETCHING and (
            "dynamic" not in description or "static" in description
        )

    def shares_pattern_with(self, other: Exercise) -> bool:
        return bool(self.movement_patterns & other.movement_patterns)

    def is_available_with(self, equipment: frozenset[str]) -> bool:
        """True when every required piece of equipment is available.

        Bodyweight is always available.
        """
        required = self.equipment_required - {BODYWEIGHT_TAG}
        return required <= equipment


@dataclass(frozen=True)
class ExerciseInstance:
    """An Exercise placed in a workout with its session parameters.

    Created by the BlockBuilder; replaced (never mutated) by the
    AdaptationEngine during a live session.
    """

    exercise: Exercise
    sets: int = 1
    reps: int | None = None
    reps_min: int | None = None
    reps_max: int | None = None
    weight_kg: float | None = None
    duration_seconds: int | None = None
    rest_seconds: int | None = None
    superset_group: int | None = None
    rpe_target: float | None = None
    notes: str = ""

    @property
    def exercise_id(self) -> str:
        return self.exercise.id

    @property
    def in_superset(self) -> bool:
        return self.superset_group is not None

    @property
    def superset_label(self) -> str | None:
        """Letter label for the superset group (1 → A, 2 → B, ...)."""
        if self.superset_group is None:
            return None
        return chr(ord("A") + self.superset_group - 1)
