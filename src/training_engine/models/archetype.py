"""Workout archetype — a named template of ordered block types."""

from __future__ import annotations

from dataclasses import dataclass, field

from training_engine.models.enums import BlockType, FitnessLevel, Goal


@dataclass(frozen=True)
class WorkoutArchetype:
    """Template selected per generation call; never mutated.

    Attributes:
        goals: Goals this archetype serves.
        fitness_levels: Levels this archetype is eligible for.
        readiness_min: Lowest readiness score the archetype accepts.
        readiness_max: Highest readiness score the archetype accepts.
        block_template: Ordered block-type tokens.
        metabolic_emphasis: Weight in [0, 1]; above 0.5 strength work is supersetted.
        strength_emphasis: Weight in [0, 1].
    """

    id: str
    name: str
    description: str
    goals: frozenset[Goal]
    fitness_levels: frozenset[FitnessLevel]
    readiness_min: float = 0.0
    readiness_max: float = 100.0
    block_template: tuple[str, ...] = field(default_factory=tuple)
    metabolic_emphasis: float = 0.5
    strength_emphasis: float = 0.5

    def matches(self, goal: Goal, level: FitnessLevel) -> bool:
        return goal in self.goals and level in self.fitness_levels

    def accepts_readiness(self, score: float) -> bool:
        return self.readiness_min <= score <= self.readiness_max

    @property
    def block_types(self) -> tuple[BlockType, ...]:
        return tuple(BlockType.from_token(token) for token in self.block_template)


DEFAULT_ARCHETYPE = WorkoutArchetype(
    id="default",
    name="Full Body Fitness",
    description="A well-rounded workout to improve all aspects of fitness",
    goals=frozenset(Goal),
    fitness_levels=frozenset(FitnessLevel),
    block_template=("warmup", "strength", "cardio", "cooldown"),
    metabolic_emphasis=0.5,
    strength_emphasis=0.5,
)
