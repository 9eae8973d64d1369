"""Built-in reference data: exercises, archetypes and medical tables."""

from training_engine.catalog.archetypes import DEFAULT_ARCHETYPES
from training_engine.catalog.exercises import DEFAULT_EXERCISES, EXERCISES_BY_ID, get_exercise
from training_engine.catalog.medical import (
    DEFAULT_COMPATIBILITY,
    MEDICAL_PROFILES,
    REHAB_PHASE_CRITERIA,
)

__all__ = [
    "DEFAULT_ARCHETYPES",
    "DEFAULT_COMPATIBILITY",
    "DEFAULT_EXERCISES",
    "EXERCISES_BY_ID",
    "MEDICAL_PROFILES",
    "REHAB_PHASE_CRITERIA",
    "get_exercise",
]
