"""Shared test fixtures: user profiles, catalogs, workouts and engines."""

from __future__ import annotations

from typing import Callable

import pytest

from training_engine.catalog.exercises import EXERCISES_BY_ID
from training_engine.collaborators import InMemoryExerciseCatalog, InMemoryGenerationLog
from training_engine.engine import TrainingEngine
from training_engine.models.enums import FitnessLevel, Goal, InjuryStatus
from training_engine.models.exercise import ExerciseInstance
from training_engine.models.profile import Injury, UserProfile
from training_engine.models.workout import GeneratedWorkout, WorkoutBlock


@pytest.fixture
def make_profile() -> Callable[..., UserProfile]:
    """Factory for profiles: beginner, muscle-building, bodyweight-only by default."""

    def _make(**overrides: object) -> UserProfile:
        fields: dict[str, object] = dict(
            user_id="user-1",
            primary_goal=Goal.BUILD_MUSCLE,
            fitness_level=FitnessLevel.BEGINNER,
            available_equipment=frozenset({"bodyweight"}),
            readiness_score=75.0,
            preferred_duration_min=45.0,
        )
        fields.update(overrides)
        return UserProfile(**fields)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def beginner_profile(make_profile: Callable[..., UserProfile]) -> UserProfile:
    """Healthy beginner, bodyweight only, readiness 75."""
    return make_profile()


@pytest.fixture
def knee_injury_profile(make_profile: Callable[..., UserProfile]) -> UserProfile:
    """Beginner with an active knee injury."""
    return make_profile(injuries=(Injury("knee_injury", InjuryStatus.ACTIVE),))


@pytest.fixture
def dumbbell_profile(make_profile: Callable[..., UserProfile]) -> UserProfile:
    """Intermediate lifter with dumbbells and a bench."""
    return make_profile(
        fitness_level=FitnessLevel.INTERMEDIATE,
        available_equipment=frozenset({"bodyweight", "dumbbells", "bench"}),
        one_rep_max_estimates={"goblet_squat": 50.0},
    )


@pytest.fixture
def generation_log() -> InMemoryGenerationLog:
    return InMemoryGenerationLog()


@pytest.fixture
def engine(generation_log: InMemoryGenerationLog) -> TrainingEngine:
    """Engine over the built-in catalog with no coaching-notes service."""
    return TrainingEngine(generation_log=generation_log)


@pytest.fixture
def knee_catalog() -> InMemoryExerciseCatalog:
    """Small bodyweight catalog: six superset-eligible moves, deep squats among them."""
    ids = (
        "jumping_jacks",
        "push_ups",
        "deep_squat",
        "plank",
        "side_plank",
        "tricep_dips",
        "bear_crawl",
        "wall_sit",
        "arm_circles",
        "leg_swings",
        "torso_twists",
        "child_pose",
        "hamstring_stretch",
        "quad_stretch",
        "pigeon_pose",
    )
    return InMemoryExerciseCatalog(EXERCISES_BY_ID[i] for i in ids)


@pytest.fixture
def make_instance() -> Callable[..., ExerciseInstance]:
    def _make(exercise_id: str, **params: object) -> ExerciseInstance:
        return ExerciseInstance(exercise=EXERCISES_BY_ID[exercise_id], **params)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def make_workout() -> Callable[..., GeneratedWorkout]:
    """Factory for a single-block workout around the given instances."""

    def _make(*instances: ExerciseInstance, coach_notes: str = "Go!") -> GeneratedWorkout:
        return GeneratedWorkout(
            id="workout-test",
            name="Test Workout",
            description="",
            archetype_id="hypertrophy_builder",
            blocks=(WorkoutBlock("Strength & Power", 1, tuple(instances)),),
            coach_notes=coach_notes,
        )

    return _make
