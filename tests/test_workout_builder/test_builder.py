"""Tests for BlockBuilder in template and time-boxed modes."""

from __future__ import annotations

import dataclasses
from typing import Callable

from training_engine.catalog.exercises import EXERCISES_BY_ID
from training_engine.collaborators import InMemoryExerciseCatalog
from training_engine.models.enums import BlockType, ExerciseType, FitnessLevel, Goal
from training_engine.models.profile import UserProfile
from training_engine.workout_builder.builder import BlockBuilder, BuildContext
from training_engine.workout_builder.metrics import block_seconds


class TestTemplateMode:
    def setup_method(self) -> None:
        self.builder = BlockBuilder()

    def test_hypertrophy_layout(
        self, make_context: Callable[..., BuildContext], beginner_profile: UserProfile
    ) -> None:
        blocks = self.builder.build(make_context(beginner_profile))
        assert [b.block_type for b in blocks] == [
            BlockType.WARMUP,
            BlockType.STRENGTH,
            BlockType.ACCESSORY_WORK,
            BlockType.COOLDOWN,
        ]
        assert [b.order for b in blocks] == [1, 2, 3, 4]

    def test_warmup_block(
        self, make_context: Callable[..., BuildContext], beginner_profile: UserProfile
    ) -> None:
        warmup = self.builder.build(make_context(beginner_profile))[0]
        cardio, *stretches = warmup.exercises
        assert cardio.exercise_id == "jumping_jacks"
        assert cardio.duration_seconds == 300
        assert len(stretches) == 3
        assert all(s.exercise.is_dynamic_stretch for s in stretches)
        assert all((s.reps, s.rest_seconds) == (10, 15) for s in stretches)

    def test_straight_sets_strength_block(
        self, make_context: Callable[..., BuildContext], beginner_profile: UserProfile
    ) -> None:
        strength = self.builder.build(make_context(beginner_profile))[1]
        primary, *accessories = strength.exercises
        assert primary.exercise.is_compound
        assert primary.sets == 3 and primary.reps == 12
        assert len(accessories) == 2
        assert all(a.exercise_id != primary.exercise_id for a in accessories)
        assert not strength.superset_groups

    def test_supersetted_strength_and_circuit(
        self, make_context: Callable[..., BuildContext], make_profile: Callable[..., UserProfile]
    ) -> None:
        profile = make_profile(
            primary_goal=Goal.LOSE_WEIGHT,
            fitness_level=FitnessLevel.INTERMEDIATE,
            readiness_score=65,
        )
        ctx = make_context(profile)
        assert ctx.archetype.id == "metabolic_burn"
        warmup, strength, circuit, cooldown = self.builder.build(ctx)

        assert [e.superset_group for e in strength.exercises] == [1, 1, 2, 1]
        assert circuit.rounds == 3
        assert circuit.rest_between_rounds_seconds == 90
        assert 0 < len(circuit.exercises) <= 4
        assert all(e.duration_seconds == 45 for e in circuit.exercises)
        assert all(e.exercise.is_static_stretch for e in cooldown.exercises)

    def test_recovery_layout(
        self, make_context: Callable[..., BuildContext], make_profile: Callable[..., UserProfile]
    ) -> None:
        ctx = make_context(make_profile(readiness_score=30))
        blocks = self.builder.build(ctx)
        assert [b.block_type for b in blocks] == [
            BlockType.GENTLE_WARMUP,
            BlockType.MOBILITY_FLOW,
            BlockType.DEEP_STRETCH,
        ]
        mobility = blocks[1]
        assert len(mobility.exercises) == 5
        assert all((e.sets, e.duration_seconds) == (2, 45) for e in mobility.exercises)

    def test_same_seed_same_blocks(
        self, make_context: Callable[..., BuildContext], beginner_profile: UserProfile
    ) -> None:
        first = self.builder.build(make_context(beginner_profile, seed=11))
        second = self.builder.build(make_context(beginner_profile, seed=11))
        assert first == second


class TestDynamicMode:
    def setup_method(self) -> None:
        self.builder = BlockBuilder()

    def test_thirty_minute_layout(
        self, make_context: Callable[..., BuildContext], beginner_profile: UserProfile
    ) -> None:
        warmup, supersets, cooldown = self.builder.build(
            make_context(beginner_profile), target_duration_min=30
        )
        assert [b.block_type for b in (warmup, supersets, cooldown)] == [
            BlockType.WARMUP,
            BlockType.DYNAMIC_SUPERSET,
            BlockType.COOLDOWN,
        ]
        assert block_seconds(warmup) == 420
        assert warmup.exercises[0].duration_seconds == 330

        assert supersets.name == "Dynamic Superset Complex (2 supersets)"
        assert supersets.superset_groups == {1, 2}
        assert len(supersets.exercises) == 6
        assert block_seconds(supersets) == 780

        assert len(cooldown.exercises) == 4
        assert [e.duration_seconds for e in cooldown.exercises] == [75, 75, 75, 75]

    def test_superset_member_parameters(
        self, make_context: Callable[..., BuildContext], beginner_profile: UserProfile
    ) -> None:
        supersets = self.builder.build(
            make_context(beginner_profile), target_duration_min=30
        )[1]
        for i, member in enumerate(supersets.exercises):
            assert member.exercise.exercise_type == ExerciseType.STRENGTH
            assert member.exercise.difficulty == FitnessLevel.BEGINNER
            assert (member.sets, member.reps_min, member.reps_max) == (1, 10, 12)
            assert member.duration_seconds == 60
            assert member.rest_seconds == (150 if i % 3 == 2 else 30)
            assert member.rpe_target == 7
        assert [m.superset_label for m in supersets.exercises[:3]] == ["A", "A", "A"]

    def test_long_session_uses_four_member_supersets(
        self, make_context: Callable[..., BuildContext], dumbbell_profile: UserProfile
    ) -> None:
        supersets = self.builder.build(
            make_context(dumbbell_profile), target_duration_min=45
        )[1]
        count = len(supersets.superset_groups)
        assert 0 < count <= 5
        assert len(supersets.exercises) == count * 4

    def test_contraindicated_exercise_replaced_in_place(
        self,
        make_context: Callable[..., BuildContext],
        knee_injury_profile: UserProfile,
        knee_catalog: InMemoryExerciseCatalog,
    ) -> None:
        ctx = make_context(knee_injury_profile, exercises=knee_catalog.list_exercises())
        supersets = self.builder.build(ctx, target_duration_min=30)[1]
        ids = {e.exercise_id for e in supersets.exercises}
        assert "deep_squat" not in ids
        assert "wall_sit" in ids
        assert len(supersets.exercises) == 6

    def test_small_pool_repeats_supersets(
        self,
        make_context: Callable[..., BuildContext],
        beginner_profile: UserProfile,
        knee_catalog: InMemoryExerciseCatalog,
    ) -> None:
        ctx = make_context(beginner_profile, exercises=knee_catalog.list_exercises())
        supersets = self.builder.build(ctx, target_duration_min=60)[1]
        assert supersets.name == "Dynamic Superset Complex (1 supersets)"
        assert len(supersets.exercises) == 4
        assert {e.sets for e in supersets.exercises} == {6}
        assert block_seconds(supersets) == 2880

    def test_pool_smaller_than_one_superset(
        self, make_context: Callable[..., BuildContext], beginner_profile: UserProfile
    ) -> None:
        ids = ("jumping_jacks", "push_ups", "plank", "arm_circles", "child_pose")
        ctx = make_context(beginner_profile, exercises=[EXERCISES_BY_ID[i] for i in ids])
        supersets = self.builder.build(ctx, target_duration_min=30)[1]
        assert [e.exercise_id for e in supersets.exercises] in (
            ["push_ups", "plank"],
            ["plank", "push_ups"],
        )
        assert supersets.superset_groups == {1}
        assert [e.rest_seconds for e in supersets.exercises] == [30, 150]
        assert {e.sets for e in supersets.exercises} == {4}

    def test_modified_exercise_carries_note(
        self, make_context: Callable[..., BuildContext], knee_injury_profile: UserProfile
    ) -> None:
        ctx = make_context(knee_injury_profile)
        note = ctx.modification_note(EXERCISES_BY_ID["squat"])
        assert note.startswith("Modified: ")
        assert "depth_limit=90" in note

    def test_no_contraindicated_exercise_anywhere(
        self, make_context: Callable[..., BuildContext], knee_injury_profile: UserProfile
    ) -> None:
        ctx = make_context(knee_injury_profile)
        for duration in (None, 30, 60):
            for block in self.builder.build(ctx, target_duration_min=duration):
                for inst in block.exercises:
                    assert not ctx.screening.is_contraindicated(inst.exercise_id)


def test_superset_token_in_template(
    make_context: Callable[..., BuildContext], make_profile: Callable[..., UserProfile]
) -> None:
    ctx = make_context(make_profile(preferred_duration_min=30))
    archetype = dataclasses.replace(
        ctx.archetype, block_template=("warmup", "dynamic_superset", "cooldown")
    )
    blocks = BlockBuilder().build(dataclasses.replace(ctx, archetype=archetype))
    assert blocks[1].block_type == BlockType.DYNAMIC_SUPERSET
    assert blocks[1].name == "Dynamic Superset Complex (2 supersets)"
    # Template mode keeps the plain warm-up cardio length
    assert blocks[0].exercises[0].duration_seconds == 300
