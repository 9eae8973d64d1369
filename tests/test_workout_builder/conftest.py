"""Fixtures for building blocks directly, without the engine."""

from __future__ import annotations

import random
from typing import Callable, Sequence

import pytest

from training_engine.catalog.exercises import DEFAULT_EXERCISES
from training_engine.models.exercise import Exercise
from training_engine.models.profile import UserProfile
from training_engine.safety.filter import SafetyFilter
from training_engine.selection.archetype_selector import ArchetypeSelector
from training_engine.workout_builder.builder import BuildContext


@pytest.fixture
def make_context() -> Callable[..., BuildContext]:
    """Factory for a BuildContext over the equipment-filtered built-in catalog."""

    def _make(
        profile: UserProfile,
        seed: int = 7,
        exercises: Sequence[Exercise] = DEFAULT_EXERCISES,
    ) -> BuildContext:
        pool = tuple(ex for ex in exercises if ex.is_available_with(profile.available_equipment))
        return BuildContext(
            archetype=ArchetypeSelector().select(profile),
            pool=pool,
            screening=SafetyFilter().screen(pool, profile),
            profile=profile,
            rng=random.Random(seed),
        )

    return _make
