"""Built-in workout archetype table, in catalog order."""

from __future__ import annotations

from training_engine.models.archetype import WorkoutArchetype
from training_engine.models.enums import FitnessLevel, Goal

_ALL_LEVELS = frozenset(FitnessLevel)

DEFAULT_ARCHETYPES: tuple[WorkoutArchetype, ...] = (
    WorkoutArchetype(
        id="hypertrophy_builder",
        name="Hypertrophy Builder",
        description="Moderate-load volume work to build muscle",
        goals=frozenset({Goal.BUILD_MUSCLE}),
        fitness_levels=_ALL_LEVELS,
        readiness_min=50,
        readiness_max=100,
        block_template=("warmup", "strength", "accessory_work", "cooldown"),
        metabolic_emphasis=0.3,
        strength_emphasis=0.8,
    ),
    WorkoutArchetype(
        id="strength_foundation",
        name="Strength Foundation",
        description="Heavy compound lifts with accessory support",
        goals=frozenset({Goal.INCREASE_STRENGTH}),
        fitness_levels=_ALL_LEVELS,
        readiness_min=55,
        readiness_max=100,
        block_template=("warmup", "compound_strength", "accessory_work", "cooldown"),
        metabolic_emphasis=0.2,
        strength_emphasis=0.9,
    ),
    WorkoutArchetype(
        id="metabolic_burn",
        name="Metabolic Burn",
        description="Supersetted strength followed by a conditioning circuit",
        goals=frozenset({Goal.LOSE_WEIGHT, Goal.GENERAL_FITNESS}),
        fitness_levels=_ALL_LEVELS,
        readiness_min=60,
        readiness_max=100,
        block_template=("warmup", "strength_superset", "metabolic_circuit", "cooldown"),
        metabolic_emphasis=0.8,
        strength_emphasis=0.4,
    ),
    WorkoutArchetype(
        id="endurance_engine",
        name="Endurance Engine",
        description="Interval conditioning to build aerobic capacity",
        goals=frozenset({Goal.IMPROVE_ENDURANCE}),
        fitness_levels=_ALL_LEVELS,
        readiness_min=50,
        readiness_max=100,
        block_template=("warmup", "cardio_intervals", "metabolic_circuit", "cooldown"),
        metabolic_emphasis=0.9,
        strength_emphasis=0.3,
    ),
    WorkoutArchetype(
        id="hiit_express",
        name="HIIT Express",
        description="Short high-intensity intervals for trained users",
        goals=frozenset({Goal.LOSE_WEIGHT, Goal.IMPROVE_ENDURANCE}),
        fitness_levels=frozenset({FitnessLevel.INTERMEDIATE, FitnessLevel.ADVANCED}),
        readiness_min=70,
        readiness_max=100,
        block_template=("warmup", "hiit_intervals", "cooldown"),
        metabolic_emphasis=1.0,
        strength_emphasis=0.2,
    ),
    WorkoutArchetype(
        id="full_body_balance",
        name="Full Body Balance",
        description="Balanced strength and conditioning",
        goals=frozenset({Goal.GENERAL_FITNESS, Goal.BUILD_MUSCLE, Goal.LOSE_WEIGHT}),
        fitness_levels=_ALL_LEVELS,
        readiness_min=40,
        readiness_max=100,
        block_template=("warmup", "strength", "cardio", "cooldown"),
        metabolic_emphasis=0.5,
        strength_emphasis=0.5,
    ),
    WorkoutArchetype(
        id="active_recovery",
        name="Active Recovery & Mobility",
        description="Gentle movement and stretching for low-readiness days",
        goals=frozenset(Goal),
        fitness_levels=_ALL_LEVELS,
        readiness_min=0,
        readiness_max=49,
        block_template=("gentle_warmup", "mobility_flow", "deep_stretch"),
        metabolic_emphasis=0.2,
        strength_emphasis=0.2,
    ),
)
