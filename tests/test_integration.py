"""End-to-end scenarios: generate a session, then adapt it mid-workout."""

from __future__ import annotations

from typing import Callable

from training_engine.collaborators import InMemoryExerciseCatalog, InMemoryGenerationLog
from training_engine.engine import TrainingEngine
from training_engine.models.enums import BlockType
from training_engine.models.feedback import SessionFeedback
from training_engine.models.profile import UserProfile
from training_engine.rules.safety.pain_substitution import PAIN_COACH_NOTE


class TestThirtyMinuteBeginnerSession:
    def test_full_layout(self, engine: TrainingEngine, beginner_profile: UserProfile) -> None:
        workout = engine.generate(beginner_profile, target_duration=30, seed=2024)

        assert workout.name == "Hypertrophy Builder"
        assert [b.block_type for b in workout.blocks] == [
            BlockType.WARMUP,
            BlockType.DYNAMIC_SUPERSET,
            BlockType.COOLDOWN,
        ]
        assert workout.estimated_duration_min == 25
        assert workout.difficulty_rating == 3
        assert (workout.metabolic_score, workout.strength_score) == (30, 80)

        timing = workout.timing_breakdown
        assert timing is not None
        assert [b.estimated_minutes for b in timing.blocks] == [7, 13, 5]
        assert timing.total_supersets == 2
        assert timing.total_exercises == len(list(workout.iter_instances()))


class TestKneeInjurySession:
    def test_deep_squat_swapped_and_squat_modified(
        self,
        knee_catalog: InMemoryExerciseCatalog,
        knee_injury_profile: UserProfile,
    ) -> None:
        engine = TrainingEngine(catalog=knee_catalog, generation_log=InMemoryGenerationLog())
        workout = engine.generate(knee_injury_profile, target_duration=30, seed=7)

        ids = workout.exercise_ids
        assert "deep_squat" not in ids
        assert "wall_sit" in ids
        assert workout.superset_count == 2

    def test_modification_note_in_full_catalog(
        self, engine: TrainingEngine, knee_injury_profile: UserProfile
    ) -> None:
        for seed in range(20):
            workout = engine.generate(knee_injury_profile, target_duration=60, seed=seed)
            squats = [i for i in workout.iter_instances() if i.exercise_id == "squat"]
            if squats:
                assert squats[0].notes.startswith("Modified: ")
                return
        raise AssertionError("squat never selected across 20 seeds")


class TestLiveSession:
    def test_hard_set_then_pain(
        self,
        make_profile: Callable[..., UserProfile],
    ) -> None:
        engine = TrainingEngine(generation_log=InMemoryGenerationLog())
        profile = make_profile(
            available_equipment=frozenset({"bodyweight", "dumbbells"}),
            one_rep_max_estimates={"goblet_squat": 40.0},
        )
        workout = engine.generate(profile, seed=11)
        strength = workout.blocks[1]
        primary = strength.exercises[0]

        hard = engine.adapt(workout, SessionFeedback(primary.exercise_id, rpe=9), profile)
        assert hard.changed
        assert hard.workout.version == 2
        backed_off = hard.workout.blocks[1].exercises[0]
        if primary.weight_kg:
            assert backed_off.weight_kg == round(primary.weight_kg * 0.9, 1)

        hurt = engine.adapt(
            hard.workout,
            SessionFeedback(primary.exercise_id, pain_signal="sharp"),
            profile,
            expected_version=2,
        )
        if hurt.changed:
            assert hurt.workout.version == 3
            assert hurt.workout.coach_notes.endswith(PAIN_COACH_NOTE)
            assert hurt.workout.blocks[1].exercises[0].exercise_id != primary.exercise_id
