"""BlockBuilder — turns an archetype into ordered, parameterized workout blocks.

Two modes:

* Template mode instantiates each block-type token of the archetype with
  fixed per-strategy rules.
* Dynamic mode ignores the template and time-boxes the session: a 7-minute
  warm-up, as many supersets as fit the remaining time, a 5-minute cool-down.

Every candidate pool is drawn from the equipment-filtered catalog after the
safety screen, so a contraindicated exercise can never reach a block.
"""

from __future__ import annotations

import dataclasses
import logging
import random
from dataclasses import dataclass
from typing import Callable, Sequence

from training_engine.models.archetype import WorkoutArchetype
from training_engine.models.enums import (
    ACCESSORY_BLOCK_MAX_ITEMS,
    COOLDOWN_HOLD_SECONDS,
    COOLDOWN_MAX_STRETCHES,
    DYNAMIC_COOLDOWN_MIN,
    METABOLIC_MAX_ITEMS,
    METABOLIC_ROUND_REST_SECONDS,
    MOBILITY_MAX_ITEMS,
    SUPERSET_EMPHASIS_THRESHOLD,
    SUPERSET_GROUP_REST_SECONDS,
    SUPERSET_INTRA_REST_SECONDS,
    SUPERSET_REPS_MAX,
    SUPERSET_REPS_MIN,
    SUPERSET_RPE_TARGET,
    SUPERSET_WORK_SECONDS,
    WARMUP_CARDIO_SECONDS,
    WARMUP_MAX_DYNAMIC_STRETCHES,
    WARMUP_STRETCH_REPS,
    WARMUP_STRETCH_REST_SECONDS,
    BlockType,
    ExerciseType,
    FitnessLevel,
    IntensityLevel,
)
from training_engine.models.exercise import Exercise, ExerciseInstance
from training_engine.models.profile import UserProfile
from training_engine.models.recommendation import LoadPrescription
from training_engine.models.safety import ScreeningResult
from training_engine.models.workout import WorkoutBlock
from training_engine.progression.overload import ProgressiveOverloadCalculator
from training_engine.workout_builder.metrics import instance_seconds
from training_engine.workout_builder.strategies import (
    BLOCK_NAMES,
    BlockStrategy,
    get_strategy,
)
from training_engine.workout_builder.timeboxing import (
    main_work_minutes,
    split_seconds,
    superset_count,
    superset_rounds,
    superset_size,
    supersets_by_time,
    warmup_cardio_seconds,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildContext:
    """Everything a single build call needs, bundled for the block methods.

    Attributes:
        archetype: Selected archetype.
        pool: Equipment-filtered catalog, in catalog order.
        screening: Safety screen of ``pool`` for this profile.
        profile: Frozen user profile.
        rng: Seeded random source; the only source of randomness in a build.
    """

    archetype: WorkoutArchetype
    pool: tuple[Exercise, ...]
    screening: ScreeningResult
    profile: UserProfile
    rng: random.Random

    def candidates(self, predicate: Callable[[Exercise], bool]) -> list[Exercise]:
        """Block pool for *predicate*, with contraindicated entries substituted.

        Catalog order is preserved. A contraindicated exercise is replaced in
        place by its first safe alternative that is not already part of the
        pool; with no such alternative it is dropped.
        """
        eligible = [ex for ex in self.pool if predicate(ex)]
        taken = {ex.id for ex in eligible}
        result: list[Exercise] = []
        for ex in eligible:
            if not self.screening.is_contraindicated(ex.id):
                result.append(ex)
                continue
            for alternative in self.screening.alternatives.get(ex.id, ()):
                if alternative.id not in taken:
                    taken.add(alternative.id)
                    result.append(alternative)
                    break
        return result

    def shuffled(self, exercises: Sequence[Exercise]) -> list[Exercise]:
        items = list(exercises)
        self.rng.shuffle(items)
        return items

    def modification_note(self, exercise: Exercise) -> str:
        assessment = self.screening.assessments.get(exercise.id)
        if assessment is None or not assessment.required_modifications:
            return ""
        parts = [
            f"{key}={value}"
            for mods in assessment.required_modifications
            for key, value in mods.items()
        ]
        return "Modified: " + ", ".join(parts)


def _instance(
    ctx: BuildContext, exercise: Exercise, **params: object
) -> ExerciseInstance:
    notes = ctx.modification_note(exercise)
    return ExerciseInstance(exercise=exercise, notes=notes, **params)  # type: ignore[arg-type]


def _prescribed(
    ctx: BuildContext,
    exercise: Exercise,
    prescription: LoadPrescription,
    superset_group: int | None = None,
) -> ExerciseInstance:
    return _instance(
        ctx,
        exercise,
        sets=prescription.sets,
        reps=prescription.reps,
        reps_min=prescription.reps_min,
        reps_max=prescription.reps_max,
        weight_kg=prescription.weight_kg,
        rest_seconds=prescription.rest_seconds,
        rpe_target=prescription.rpe_target,
        superset_group=superset_group,
    )


def _is_low_cardio(ex: Exercise) -> bool:
    return ex.exercise_type == ExerciseType.CARDIO and ex.intensity == IntensityLevel.LOW


class BlockBuilder:
    """Builds workout blocks for an archetype and a screened exercise pool.

    Usage::

        builder = BlockBuilder(overload)
        blocks = builder.build(ctx)                     # template mode
        blocks = builder.build(ctx, target_duration_min=30)  # dynamic mode
    """

    def __init__(self, overload: ProgressiveOverloadCalculator | None = None) -> None:
        self.overload = overload or ProgressiveOverloadCalculator()
        self._builders: dict[
            BlockStrategy, Callable[[BuildContext, int], WorkoutBlock]
        ] = {
            BlockStrategy.WARMUP: self._warmup_block,
            BlockStrategy.STRENGTH: self._strength_block,
            BlockStrategy.METABOLIC: self._metabolic_block,
            BlockStrategy.COOLDOWN: self._cooldown_block,
            BlockStrategy.MOBILITY: self._mobility_block,
            BlockStrategy.ACCESSORY: self._accessory_block,
            BlockStrategy.DYNAMIC_SUPERSET: self._template_superset_block,
        }

    def build(
        self, ctx: BuildContext, target_duration_min: float | None = None
    ) -> tuple[WorkoutBlock, ...]:
        """Build the blocks of one workout.

        Args:
            ctx: Build context for this generate call.
            target_duration_min: Requested length; switches on dynamic mode.

        Returns:
            Blocks in order, ``order`` numbered from 1.
        """
        if target_duration_min:
            return self._build_dynamic(ctx, target_duration_min)

        blocks = []
        for order, block_type in enumerate(ctx.archetype.block_types, start=1):
            strategy = get_strategy(block_type)
            block = self._builders[strategy](ctx, order)
            blocks.append(dataclasses.replace(block, block_type=block_type))
        return tuple(blocks)

    # ------------------------------------------------------------------
    # Template-mode blocks
    # ------------------------------------------------------------------

    def _warmup_block(self, ctx: BuildContext, order: int) -> WorkoutBlock:
        cardio = ctx.candidates(_is_low_cardio)
        stretches = ctx.shuffled(ctx.candidates(lambda ex: ex.is_dynamic_stretch))

        exercises: list[ExerciseInstance] = []
        if cardio:
            exercises.append(
                _instance(ctx, cardio[0], duration_seconds=WARMUP_CARDIO_SECONDS, sets=1)
            )
        for ex in stretches[:WARMUP_MAX_DYNAMIC_STRETCHES]:
            exercises.append(
                _instance(
                    ctx,
                    ex,
                    reps=WARMUP_STRETCH_REPS,
                    sets=1,
                    rest_seconds=WARMUP_STRETCH_REST_SECONDS,
                )
            )
        return WorkoutBlock(BLOCK_NAMES[BlockStrategy.WARMUP], order, tuple(exercises))

    def _strength_block(self, ctx: BuildContext, order: int) -> WorkoutBlock:
        strength = ctx.candidates(lambda ex: ex.exercise_type == ExerciseType.STRENGTH)
        compounds = [ex for ex in strength if ex.is_compound]
        isolation = [ex for ex in strength if not ex.is_compound]
        supersetted = ctx.archetype.metabolic_emphasis > SUPERSET_EMPHASIS_THRESHOLD

        exercises: list[ExerciseInstance] = []
        primary = ctx.rng.choice(compounds) if compounds else None
        if primary is not None:
            prescription = self.overload.prescribe_primary(primary, ctx.profile)
            exercises.append(
                _prescribed(ctx, primary, prescription, 1 if supersetted else None)
            )

        accessory_count = 3 if supersetted else 2
        accessories = ctx.shuffled(
            [ex for ex in compounds + isolation if primary is None or ex.id != primary.id]
        )
        accessory_params = self.overload.prescribe_accessory(ctx.profile)
        for i, ex in enumerate(accessories[:accessory_count]):
            group = (i % 2) + 1 if supersetted else None
            exercises.append(_prescribed(ctx, ex, accessory_params, group))

        return WorkoutBlock(BLOCK_NAMES[BlockStrategy.STRENGTH], order, tuple(exercises))

    def _metabolic_block(self, ctx: BuildContext, order: int) -> WorkoutBlock:
        pool = ctx.shuffled(
            ctx.candidates(
                lambda ex: ex.exercise_type in (ExerciseType.CARDIO, ExerciseType.PLYOMETRICS)
                or (
                    ex.exercise_type == ExerciseType.STRENGTH
                    and ex.intensity == IntensityLevel.HIGH
                )
            )
        )
        beginner = ctx.profile.fitness_level == FitnessLevel.BEGINNER
        exercises = tuple(
            _instance(
                ctx,
                ex,
                duration_seconds=30 if beginner else 45,
                rest_seconds=60 if beginner else 30,
                rpe_target=7 if beginner else 8,
            )
            for ex in pool[:METABOLIC_MAX_ITEMS]
        )
        return WorkoutBlock(
            BLOCK_NAMES[BlockStrategy.METABOLIC],
            order,
            exercises,
            rounds=2 if beginner else 3,
            rest_between_rounds_seconds=METABOLIC_ROUND_REST_SECONDS,
        )

    def _cooldown_block(self, ctx: BuildContext, order: int) -> WorkoutBlock:
        stretches = ctx.shuffled(ctx.candidates(lambda ex: ex.is_static_stretch))
        exercises = tuple(
            _instance(ctx, ex, duration_seconds=COOLDOWN_HOLD_SECONDS, sets=1)
            for ex in stretches[:COOLDOWN_MAX_STRETCHES]
        )
        return WorkoutBlock(BLOCK_NAMES[BlockStrategy.COOLDOWN], order, exercises)

    def _mobility_block(self, ctx: BuildContext, order: int) -> WorkoutBlock:
        pool = ctx.shuffled(
            ctx.candidates(
                lambda ex: ex.exercise_type == ExerciseType.STRETCHING
                or (
                    ex.exercise_type == ExerciseType.STRENGTH
                    and ex.intensity == IntensityLevel.LOW
                )
            )
        )
        exercises = tuple(
            _instance(ctx, ex, duration_seconds=45, sets=2, rest_seconds=30)
            for ex in pool[:MOBILITY_MAX_ITEMS]
        )
        return WorkoutBlock(BLOCK_NAMES[BlockStrategy.MOBILITY], order, exercises)

    def _accessory_block(self, ctx: BuildContext, order: int) -> WorkoutBlock:
        pool = ctx.shuffled(
            ctx.candidates(
                lambda ex: ex.exercise_type == ExerciseType.STRENGTH
                and ex.difficulty != FitnessLevel.ADVANCED
            )
        )
        params = self.overload.prescribe_accessory(ctx.profile)
        exercises = tuple(
            _prescribed(ctx, ex, params) for ex in pool[:ACCESSORY_BLOCK_MAX_ITEMS]
        )
        return WorkoutBlock(BLOCK_NAMES[BlockStrategy.ACCESSORY], order, exercises)

    def _template_superset_block(self, ctx: BuildContext, order: int) -> WorkoutBlock:
        return self._superset_block(ctx, order, ctx.profile.preferred_duration_min)

    # ------------------------------------------------------------------
    # Dynamic mode
    # ------------------------------------------------------------------

    def _build_dynamic(
        self, ctx: BuildContext, target_duration_min: float
    ) -> tuple[WorkoutBlock, ...]:
        warmup = self._timed_warmup_block(ctx, 1)
        supersets = self._superset_block(ctx, 2, target_duration_min)
        cooldown = self._timed_cooldown_block(ctx, 3)
        logger.debug(
            "Time-boxed %s min session: %d supersets in %.1f min of main work",
            target_duration_min,
            len(supersets.superset_groups),
            main_work_minutes(target_duration_min),
        )
        return (
            dataclasses.replace(warmup, block_type=BlockType.WARMUP),
            dataclasses.replace(supersets, block_type=BlockType.DYNAMIC_SUPERSET),
            dataclasses.replace(cooldown, block_type=BlockType.COOLDOWN),
        )

    def _timed_warmup_block(self, ctx: BuildContext, order: int) -> WorkoutBlock:
        block = self._warmup_block(ctx, order)
        cardio = [inst for inst in block.exercises if inst.duration_seconds]
        stretches = [inst for inst in block.exercises if not inst.duration_seconds]
        if cardio:
            stretch_seconds = sum(instance_seconds(inst) for inst in stretches)
            timed = ExerciseInstance(
                exercise=cardio[0].exercise,
                duration_seconds=warmup_cardio_seconds(stretch_seconds),
                sets=1,
                notes=cardio[0].notes,
            )
            block = WorkoutBlock(block.name, order, (timed, *stretches))
        return block

    def _timed_cooldown_block(self, ctx: BuildContext, order: int) -> WorkoutBlock:
        stretches = ctx.shuffled(ctx.candidates(lambda ex: ex.is_static_stretch))
        chosen = stretches[:COOLDOWN_MAX_STRETCHES]
        holds = split_seconds(int(DYNAMIC_COOLDOWN_MIN * 60), len(chosen))
        exercises = tuple(
            _instance(ctx, ex, duration_seconds=hold, sets=1)
            for ex, hold in zip(chosen, holds)
        )
        return WorkoutBlock(BLOCK_NAMES[BlockStrategy.COOLDOWN], order, exercises)

    def _superset_block(
        self, ctx: BuildContext, order: int, target_duration_min: float
    ) -> WorkoutBlock:
        level = ctx.profile.fitness_level
        pool = ctx.candidates(
            lambda ex: ex.exercise_type == ExerciseType.STRENGTH
            and ex.intensity != IntensityLevel.LOW
            and ex.difficulty <= level
        )
        size = superset_size(target_duration_min)
        count = superset_count(target_duration_min, len(pool))
        capped = count < supersets_by_time(target_duration_min)
        if count == 0 and capped and len(pool) >= 2:
            # Too few exercises for a full superset: run them as one short group
            size, count = len(pool), 1
        chosen = ctx.shuffled(pool)[: count * size]

        exercises: list[ExerciseInstance] = []
        for i, ex in enumerate(chosen):
            last_in_group = i % size == size - 1
            exercises.append(
                _instance(
                    ctx,
                    ex,
                    sets=1,
                    reps_min=SUPERSET_REPS_MIN,
                    reps_max=SUPERSET_REPS_MAX,
                    duration_seconds=SUPERSET_WORK_SECONDS,
                    rest_seconds=(
                        SUPERSET_GROUP_REST_SECONDS
                        if last_in_group
                        else SUPERSET_INTRA_REST_SECONDS
                    ),
                    superset_group=i // size + 1,
                    rpe_target=SUPERSET_RPE_TARGET,
                )
            )

        if capped and exercises:
            group_seconds = [0.0] * count
            for inst in exercises:
                group_seconds[inst.superset_group - 1] += instance_seconds(inst)
            rounds = superset_rounds(target_duration_min, group_seconds)
            exercises = [
                dataclasses.replace(inst, sets=rounds[inst.superset_group - 1])
                for inst in exercises
            ]

        name = BLOCK_NAMES[BlockStrategy.DYNAMIC_SUPERSET].format(count=count)
        return WorkoutBlock(name, order, tuple(exercises))
