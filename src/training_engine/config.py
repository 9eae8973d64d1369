"""Read-only engine configuration injected into the selector and safety filter."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from training_engine.catalog.archetypes import DEFAULT_ARCHETYPES
from training_engine.catalog.medical import MEDICAL_PROFILES, REHAB_PHASE_CRITERIA
from training_engine.models.archetype import WorkoutArchetype
from training_engine.models.safety import MedicalConditionProfile


@dataclass(frozen=True)
class EngineConfig:
    """Reference tables the engine reads but never mutates.

    Attributes:
        archetypes: Archetype table in catalog order.
        medical_profiles: Injury type → medical-condition profile.
        rehab_phase_criteria: Phase number → criteria to leave that phase.
    """

    archetypes: tuple[WorkoutArchetype, ...] = DEFAULT_ARCHETYPES
    medical_profiles: Mapping[str, MedicalConditionProfile] = field(
        default_factory=lambda: MEDICAL_PROFILES, hash=False
    )
    rehab_phase_criteria: Mapping[int, str] = field(
        default_factory=lambda: REHAB_PHASE_CRITERIA, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "archetypes", tuple(self.archetypes))
        object.__setattr__(
            self, "medical_profiles", MappingProxyType(dict(self.medical_profiles))
        )

    def medical_profile(self, injury_type: str) -> MedicalConditionProfile | None:
        return self.medical_profiles.get(injury_type)


DEFAULT_CONFIG = EngineConfig()
