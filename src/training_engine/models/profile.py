"""Frozen user profile — immutable snapshot of all inputs for a generate call."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from training_engine.models.enums import (
    DEFAULT_READINESS,
    FitnessLevel,
    Goal,
    InjuryStatus,
)
from training_engine.readiness import clamp_readiness


@dataclass(frozen=True)
class Injury:
    """One entry of the user's injury history."""

    injury_type: str
    status: InjuryStatus = InjuryStatus.ACTIVE
    affected_exercises: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return self.status == InjuryStatus.ACTIVE


@dataclass(frozen=True)
class MovementRestriction:
    """A user-declared restriction on specific exercises.

    ``restriction_type == "avoid"`` contraindicates the exercises; any other
    type (e.g. "limit_range", "reduce_load") requires a modification.
    """

    affected_exercises: tuple[str, ...]
    restriction_type: str
    details: str = ""


@dataclass(frozen=True)
class UserProfile:
    """Immutable snapshot of a user's fitness profile.

    This is the sole user-specific input to TrainingEngine.generate().
    The readiness score is supplied by an external scoring service and is
    clamped to [0, 100] on construction.
    """

    user_id: str
    primary_goal: Goal
    fitness_level: FitnessLevel
    available_equipment: frozenset[str] = field(default_factory=frozenset)

    # Health data
    injuries: tuple[Injury, ...] = field(default_factory=tuple)
    medical_conditions: frozenset[str] = field(default_factory=frozenset)
    movement_restrictions: tuple[MovementRestriction, ...] = field(default_factory=tuple)

    # Performance data
    one_rep_max_estimates: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    # Session preferences
    preferred_duration_min: float = 45.0
    readiness_score: float = DEFAULT_READINESS

    def __post_init__(self) -> None:
        object.__setattr__(self, "readiness_score", clamp_readiness(self.readiness_score))
        object.__setattr__(
            self,
            "one_rep_max_estimates",
            MappingProxyType(dict(self.one_rep_max_estimates)),
        )

    @property
    def active_injuries(self) -> tuple[Injury, ...]:
        return tuple(i for i in self.injuries if i.is_active)

    def one_rep_max(self, exercise_id: str) -> float | None:
        value = self.one_rep_max_estimates.get(exercise_id)
        return float(value) if value else None


def default_profile(user_id: str = "anonymous") -> UserProfile:
    """Profile used when a generate request carries none."""
    return UserProfile(
        user_id=user_id,
        primary_goal=Goal.BUILD_MUSCLE,
        fitness_level=FitnessLevel.INTERMEDIATE,
        available_equipment=frozenset({"bodyweight"}),
        preferred_duration_min=45.0,
        readiness_score=DEFAULT_READINESS,
    )
