"""Metrics calculator — estimated duration, difficulty and emphasis scores."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from training_engine.models.archetype import WorkoutArchetype
from training_engine.models.enums import (
    DEFAULT_REPS_FOR_TIMING,
    DIFFICULTY_BY_LEVEL,
    HIGH_RPE_DIFFICULTY_BONUS,
    HIGH_RPE_THRESHOLD,
    SECONDS_PER_REP,
    SUPERSET_DIFFICULTY_BONUS,
)
from training_engine.models.exercise import ExerciseInstance
from training_engine.models.workout import BlockTiming, TimingBreakdown, WorkoutBlock

SUPERSET_TIMING_STRATEGY = "2:1 work:rest ratio"
STANDARD_TIMING_STRATEGY = "Standard rest periods"


@dataclass(frozen=True)
class WorkoutMetrics:
    estimated_duration_min: int
    difficulty_rating: int
    metabolic_score: int
    strength_score: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def instance_seconds(instance: ExerciseInstance) -> float:
    """Estimated time for one exercise instance, rest included.

    Work is the timed duration, or reps × 3 s. Rest falls between sets,
    except for superset members: the group flows member to member, so each
    member's rest is taken after every pass.
    """
    sets = instance.sets or 1
    if instance.duration_seconds:
        work = instance.duration_seconds
    else:
        reps = instance.reps or instance.reps_max or DEFAULT_REPS_FOR_TIMING
        work = reps * SECONDS_PER_REP

    rest = instance.rest_seconds or 0
    rest_passes = sets if instance.in_superset else sets - 1
    return work * sets + rest * rest_passes


def block_seconds(block: WorkoutBlock) -> float:
    seconds = sum(instance_seconds(inst) for inst in block.exercises)
    rounds = block.rounds or 1
    if rounds > 1:
        seconds = seconds * rounds + (block.rest_between_rounds_seconds or 0) * (rounds - 1)
    return seconds


def estimated_duration_min(blocks: Sequence[WorkoutBlock]) -> int:
    return _round_half_up(sum(block_seconds(b) for b in blocks) / 60)


def difficulty_rating(blocks: Sequence[WorkoutBlock]) -> int:
    """Average per-instance difficulty on a 1-10 scale.

    Base 3/5/8 by exercise level, +2 for a target RPE of 8 or more, +1 for
    superset membership. An empty workout rates 1.
    """
    scores = []
    for block in blocks:
        for inst in block.exercises:
            score = DIFFICULTY_BY_LEVEL[inst.exercise.difficulty]
            if inst.rpe_target is not None and inst.rpe_target >= HIGH_RPE_THRESHOLD:
                score += HIGH_RPE_DIFFICULTY_BONUS
            if inst.in_superset:
                score += SUPERSET_DIFFICULTY_BONUS
            scores.append(score)

    if not scores:
        return 1
    return max(1, min(10, _round_half_up(sum(scores) / len(scores))))


def calculate_workout_metrics(
    blocks: Sequence[WorkoutBlock], archetype: WorkoutArchetype
) -> WorkoutMetrics:
    return WorkoutMetrics(
        estimated_duration_min=estimated_duration_min(blocks),
        difficulty_rating=difficulty_rating(blocks),
        metabolic_score=round(archetype.metabolic_emphasis * 100),
        strength_score=round(archetype.strength_emphasis * 100),
    )


def timing_breakdown(blocks: Sequence[WorkoutBlock]) -> TimingBreakdown:
    """Per-block exercise, superset and minute counts for time-boxed workouts."""
    entries = []
    for block in blocks:
        supersets = len(block.superset_groups)
        entries.append(
            BlockTiming(
                name=block.name,
                exercises=len(block.exercises),
                supersets=supersets,
                estimated_minutes=_round_half_up(block_seconds(block) / 60),
                timing_strategy=(
                    SUPERSET_TIMING_STRATEGY if supersets else STANDARD_TIMING_STRATEGY
                ),
            )
        )
    return TimingBreakdown(
        blocks=tuple(entries),
        total_exercises=sum(e.exercises for e in entries),
        total_supersets=sum(e.supersets for e in entries),
        total_estimated_minutes=estimated_duration_min(blocks),
    )
