"""Generated workout — the final output of the training engine."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Iterator

from training_engine.models.enums import BlockType
from training_engine.models.exercise import ExerciseInstance


@dataclass(frozen=True)
class WorkoutBlock:
    """An ordered group of exercise instances, optionally repeated in rounds."""

    name: str
    order: int
    exercises: tuple[ExerciseInstance, ...] = field(default_factory=tuple)
    block_type: BlockType | None = None
    rounds: int | None = None
    rest_between_rounds_seconds: int | None = None

    @property
    def superset_groups(self) -> frozenset[int]:
        return frozenset(
            ex.superset_group for ex in self.exercises if ex.superset_group is not None
        )


@dataclass(frozen=True)
class BlockTiming:
    name: str
    exercises: int
    supersets: int
    estimated_minutes: int
    timing_strategy: str


@dataclass(frozen=True)
class TimingBreakdown:
    """Per-block timing summary attached to time-boxed workouts."""

    blocks: tuple[BlockTiming, ...] = field(default_factory=tuple)
    total_exercises: int = 0
    total_supersets: int = 0
    total_estimated_minutes: int = 0


@dataclass(frozen=True)
class GeneratedWorkout:
    """Complete workout exchanged with the calling system.

    Lives for one session. Every adapt() call returns a new value with
    ``version`` incremented; the caller persists the latest one.
    """

    id: str
    name: str
    description: str
    archetype_id: str
    blocks: tuple[WorkoutBlock, ...]
    coach_notes: str = ""
    estimated_duration_min: int = 0
    difficulty_rating: int = 1
    metabolic_score: int = 50
    strength_score: int = 50
    target_duration_min: float | None = None
    superset_count: int | None = None
    timing_breakdown: TimingBreakdown | None = None
    seed: int | None = None
    version: int = 1

    def iter_instances(self) -> Iterator[ExerciseInstance]:
        for block in self.blocks:
            yield from block.exercises

    @property
    def exercise_ids(self) -> tuple[str, ...]:
        return tuple(inst.exercise_id for inst in self.iter_instances())

    def locate(self, exercise_id: str) -> tuple[int, int] | None:
        """Return (block index, exercise index) of the first matching instance."""
        for b_idx, block in enumerate(self.blocks):
            for e_idx, inst in enumerate(block.exercises):
                if inst.exercise_id == exercise_id:
                    return b_idx, e_idx
        return None

    def with_instance(
        self, position: tuple[int, int], instance: ExerciseInstance
    ) -> GeneratedWorkout:
        """Return a copy with the instance at *position* replaced."""
        b_idx, e_idx = position
        block = self.blocks[b_idx]
        exercises = list(block.exercises)
        exercises[e_idx] = instance
        blocks = list(self.blocks)
        blocks[b_idx] = dataclasses.replace(block, exercises=tuple(exercises))
        return dataclasses.replace(self, blocks=tuple(blocks))
