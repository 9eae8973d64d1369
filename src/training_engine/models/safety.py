"""Safety assessment outputs and the medical-condition profile table entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from training_engine.models.enums import CompatibilityLevel, SafetyLevel
from training_engine.models.exercise import Exercise


@dataclass(frozen=True)
class RehabPhase:
    exercises: tuple[str, ...]
    duration_weeks: int


@dataclass(frozen=True)
class MedicalConditionProfile:
    """Exercise rules for one injury or condition type (e.g. ``knee_injury``).

    Attributes:
        avoid_completely: Exercise ids that must never be prescribed.
        modify_required: Exercise id → modification parameters.
        recommended_alternatives: Exercise ids suited to the condition.
        rehab_phases: Three-phase return-to-training protocol.
    """

    avoid_completely: frozenset[str] = field(default_factory=frozenset)
    modify_required: Mapping[str, Mapping[str, object]] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    recommended_alternatives: tuple[str, ...] = field(default_factory=tuple)
    rehab_phases: tuple[RehabPhase, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CompatibilityEntry:
    """One row of the (exercise id × medical condition) compatibility table."""

    exercise_id: str
    medical_condition: str
    compatibility_level: CompatibilityLevel
    required_modifications: Mapping[str, object] | None = field(default=None, hash=False)
    medical_reasoning: str = ""


@dataclass(frozen=True)
class SafetyAssessment:
    """Transient per-exercise result of a safety check."""

    exercise_id: str
    safety_level: SafetyLevel = SafetyLevel.SAFE
    risk_factors: tuple[str, ...] = field(default_factory=tuple)
    required_modifications: tuple[Mapping[str, object], ...] = field(
        default_factory=tuple, hash=False
    )
    reasoning: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_safe(self) -> bool:
        return self.safety_level == SafetyLevel.SAFE

    @property
    def is_contraindicated(self) -> bool:
        return self.safety_level == SafetyLevel.CONTRAINDICATED


@dataclass(frozen=True)
class ModifiedExercise:
    exercise: Exercise
    modifications: tuple[Mapping[str, object], ...] = field(
        default_factory=tuple, hash=False
    )


@dataclass(frozen=True)
class ScreeningResult:
    """Partition of a candidate pool into safe / modify / contraindicated.

    ``alternatives`` maps every contraindicated exercise id to up to three
    safe exercises sharing at least one movement pattern with it.
    """

    safe: tuple[Exercise, ...] = field(default_factory=tuple)
    modified: tuple[ModifiedExercise, ...] = field(default_factory=tuple)
    contraindicated: tuple[Exercise, ...] = field(default_factory=tuple)
    alternatives: Mapping[str, tuple[Exercise, ...]] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    assessments: Mapping[str, SafetyAssessment] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    @property
    def contraindicated_ids(self) -> frozenset[str]:
        return frozenset(ex.id for ex in self.contraindicated)

    def is_contraindicated(self, exercise_id: str) -> bool:
        return exercise_id in self.contraindicated_ids


@dataclass(frozen=True)
class RehabProtocol:
    """One phase of a return-to-training protocol for an injury type."""

    injury_type: str
    phase: int
    exercises: tuple[str, ...]
    duration_weeks: int
    criteria: str
    next_phase: int | None = None
