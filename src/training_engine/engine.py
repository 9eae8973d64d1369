"""TrainingEngine — the main orchestrator that generates and adapts workouts."""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass
from typing import Sequence

from training_engine import settings
from training_engine.adaptation import AdaptationEngine
from training_engine.catalog.exercises import DEFAULT_EXERCISES
from training_engine.collaborators import (
    CoachingNotesGenerator,
    CompatibilityLookup,
    ExerciseCatalog,
    GenerationLog,
    InMemoryCompatibilityLookup,
    InMemoryExerciseCatalog,
    LoggingGenerationLog,
    PerformanceHistory,
)
from training_engine.config import DEFAULT_CONFIG, EngineConfig
from training_engine.exceptions import CatalogUnavailableError
from training_engine.models.archetype import WorkoutArchetype
from training_engine.models.exercise import Exercise
from training_engine.models.feedback import AdaptationResult, SessionFeedback
from training_engine.models.profile import UserProfile
from training_engine.models.workout import GeneratedWorkout, TimingBreakdown, WorkoutBlock
from training_engine.progression.overload import ProgressiveOverloadCalculator
from training_engine.registry import RuleRegistry
from training_engine.safety.filter import SafetyFilter
from training_engine.selection.archetype_selector import ArchetypeSelector
from training_engine.workout_builder.builder import BlockBuilder, BuildContext
from training_engine.workout_builder.coaching_notes import CoachingNotesStep
from training_engine.workout_builder.metrics import (
    WorkoutMetrics,
    calculate_workout_metrics,
    timing_breakdown,
)

logger = logging.getLogger(__name__)

_SEED_RANGE = 2**31


@dataclass(frozen=True)
class _Plan:
    """A built workout waiting for its coaching notes."""

    archetype: WorkoutArchetype
    blocks: tuple[WorkoutBlock, ...]
    metrics: WorkoutMetrics
    timing: TimingBreakdown | None
    target_duration: float | None
    seed: int


class TrainingEngine:
    """Generates time-boxed workouts and adapts them during a session.

    Stateless between calls: every call reads the catalog afresh and returns
    a fully materialized value.

    Usage:
        engine = TrainingEngine()
        workout = engine.generate(profile, target_duration=30, seed=7)
        workout = await engine.generate_async(profile, target_duration=30)  # async hosts
        result = engine.adapt(workout, SessionFeedback("push_ups", rpe=9))
    """

    def __init__(
        self,
        catalog: ExerciseCatalog | None = None,
        history: PerformanceHistory | None = None,
        compatibility_lookup: CompatibilityLookup | None = None,
        notes_generator: CoachingNotesGenerator | None = None,
        generation_log: GenerationLog | None = None,
        config: EngineConfig | None = None,
        notes_timeout_s: float | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.catalog = catalog or InMemoryExerciseCatalog()
        self.generation_log = generation_log or LoggingGenerationLog()
        self.selector = ArchetypeSelector(self.config)
        self.safety_filter = SafetyFilter(
            self.config, compatibility_lookup or InMemoryCompatibilityLookup()
        )
        self.builder = BlockBuilder(ProgressiveOverloadCalculator(history))
        self.notes = CoachingNotesStep(notes_generator, notes_timeout_s)
        self.registry = RuleRegistry()
        self.registry.discover_rules()

    def load_catalog(self) -> tuple[Exercise, ...]:
        """Read the catalog, falling back to the built-in exercises."""
        try:
            return tuple(self.catalog.list_exercises())
        except CatalogUnavailableError as e:
            logger.warning("Exercise catalog unavailable, using built-in catalog: %s", e)
            return DEFAULT_EXERCISES

    def generate(
        self,
        profile: UserProfile,
        target_duration: float | None = None,
        seed: int | None = None,
    ) -> GeneratedWorkout:
        """Generate one workout for *profile*.

        Args:
            profile: Frozen user profile.
            target_duration: Requested length in minutes; switches on the
                time-boxed superset layout.
            seed: Seed for every random choice; a fresh one is drawn (and
                stored on the workout) when omitted.

        Returns:
            The generated workout at version 1.
        """
        plan = self._plan(profile, target_duration, seed)
        coach_notes = self.notes.compose(
            plan.archetype, profile, plan.blocks, plan.metrics.estimated_duration_min
        )
        return self._assemble(profile, plan, coach_notes)

    async def generate_async(
        self,
        profile: UserProfile,
        target_duration: float | None = None,
        seed: int | None = None,
    ) -> GeneratedWorkout:
        """Same as ``generate``, awaiting the coaching notes on the caller's loop."""
        plan = self._plan(profile, target_duration, seed)
        coach_notes = await self.notes.compose_async(
            plan.archetype, profile, plan.blocks, plan.metrics.estimated_duration_min
        )
        return self._assemble(profile, plan, coach_notes)

    def _plan(
        self, profile: UserProfile, target_duration: float | None, seed: int | None
    ) -> _Plan:
        if seed is None:
            seed = settings.ENGINE_DEFAULT_SEED
        if seed is None:
            seed = random.randrange(_SEED_RANGE)
        rng = random.Random(seed)

        archetype = self.selector.select(profile)
        pool = self._equipment_pool(profile)
        screening = self.safety_filter.screen(pool, profile)
        logger.info(
            "Generating %s for %s (readiness %.0f, %d candidate exercises, %d contraindicated)",
            archetype.id,
            profile.user_id,
            profile.readiness_score,
            len(pool),
            len(screening.contraindicated),
        )

        ctx = BuildContext(
            archetype=archetype, pool=pool, screening=screening, profile=profile, rng=rng
        )
        blocks = self.builder.build(ctx, target_duration)
        return _Plan(
            archetype=archetype,
            blocks=blocks,
            metrics=calculate_workout_metrics(blocks, archetype),
            timing=timing_breakdown(blocks) if target_duration else None,
            target_duration=target_duration or None,
            seed=seed,
        )

    def _assemble(
        self, profile: UserProfile, plan: _Plan, coach_notes: str
    ) -> GeneratedWorkout:
        description = plan.archetype.description
        if plan.target_duration:
            description += f" - Dynamically scaled for {plan.target_duration:g} minutes"

        workout = GeneratedWorkout(
            id=f"workout_{uuid.uuid4().hex}",
            name=plan.archetype.name,
            description=description,
            archetype_id=plan.archetype.id,
            blocks=plan.blocks,
            coach_notes=coach_notes,
            estimated_duration_min=plan.metrics.estimated_duration_min,
            difficulty_rating=plan.metrics.difficulty_rating,
            metabolic_score=plan.metrics.metabolic_score,
            strength_score=plan.metrics.strength_score,
            target_duration_min=plan.target_duration,
            superset_count=plan.timing.total_supersets if plan.timing else None,
            timing_breakdown=plan.timing,
            seed=plan.seed,
        )
        self._log_generation(profile, workout)
        return workout

    def adapt(
        self,
        workout: GeneratedWorkout,
        feedback: SessionFeedback,
        profile: UserProfile | None = None,
        expected_version: int | None = None,
    ) -> AdaptationResult:
        """Adapt *workout* to live feedback; see AdaptationEngine.adapt."""
        adaptation = AdaptationEngine(
            catalog=self.load_catalog(),
            safety_filter=self.safety_filter,
            registry=self.registry,
        )
        return adaptation.adapt(workout, feedback, profile, expected_version)

    def _equipment_pool(self, profile: UserProfile) -> tuple[Exercise, ...]:
        return tuple(
            ex
            for ex in self.load_catalog()
            if ex.is_available_with(profile.available_equipment)
        )

    def _log_generation(self, profile: UserProfile, workout: GeneratedWorkout) -> None:
        event = {
            "archetype_id": workout.archetype_id,
            "readiness_score": profile.readiness_score,
            "fitness_level": profile.fitness_level.label,
            "primary_goal": profile.primary_goal.value,
            "available_equipment": sorted(profile.available_equipment),
            "estimated_duration_min": workout.estimated_duration_min,
            "seed": workout.seed,
        }
        try:
            self.generation_log.record(profile.user_id, workout.id, event)
        except Exception as e:
            logger.warning("Failed to log generation of %s: %s", workout.id, e)


def exercise_lookup(exercises: Sequence[Exercise]):
    """Return an id → Exercise lookup function over *exercises*."""
    by_id = {ex.id: ex for ex in exercises}
    return by_id.get
