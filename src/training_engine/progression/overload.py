"""Progressive overload calculator — load prescriptions and progression advice."""

from __future__ import annotations

import dataclasses
import logging
from typing import Sequence

from training_engine.collaborators import PerformanceHistory
from training_engine.exceptions import HistoryUnavailableError
from training_engine.models.enums import (
    ACCESSORY_REPS_MAX,
    ACCESSORY_REPS_MIN,
    ACCESSORY_REST_SECONDS,
    BEGINNER_1RM_FRACTION,
    DEFAULT_STEP_MASTERY_WEEKS,
    DELOAD_COMPLETION_THRESHOLD,
    DELOAD_LOAD_FRACTION,
    HISTORY_QUERY_LIMIT,
    PRIMARY_REST_SECONDS,
    PROGRESSION_MAX_AVG_RPE,
    PROGRESSION_MIN_COMPLETION,
    TRAINED_1RM_FRACTION,
    TREND_WINDOW_SESSIONS,
    FitnessLevel,
    RecommendationType,
)
from training_engine.models.exercise import Exercise, ProgressionStep
from training_engine.models.performance import PerformanceRecord
from training_engine.models.profile import UserProfile
from training_engine.models.recommendation import (
    LoadPrescription,
    ProgressionRecommendation,
)
from training_engine.progression.trend import analyze_trend, progression_rate

logger = logging.getLogger(__name__)


class ProgressiveOverloadCalculator:
    """Prescribes sets/reps/load and decides progress, maintain or deload.

    Usage:
        overload = ProgressiveOverloadCalculator(history=store)
        prescription = overload.prescribe_primary(exercise, profile)
    """

    def __init__(self, history: PerformanceHistory | None = None) -> None:
        self.history = history

    def history_for(
        self, profile: UserProfile, exercise: Exercise
    ) -> Sequence[PerformanceRecord]:
        """Most recent records for the user and exercise; empty when unavailable."""
        if self.history is None:
            return ()
        try:
            return tuple(self.history.recent(profile.user_id, exercise.id, HISTORY_QUERY_LIMIT))
        except HistoryUnavailableError as exc:
            logger.warning(
                "History unavailable for %s/%s, treating as empty: %s",
                profile.user_id,
                exercise.id,
                exc,
            )
            return ()

    def prescribe_primary(
        self,
        exercise: Exercise,
        profile: UserProfile,
        history: Sequence[PerformanceRecord] | None = None,
    ) -> LoadPrescription:
        """Prescribe the main compound lift of a strength block.

        With a 1RM estimate the load is a percentage of it (70% for
        beginners, 80% otherwise); without one the prescription is
        volume-based. When history exists and the recommendation carries a
        positive target load, that load wins.
        """
        beginner = profile.fitness_level == FitnessLevel.BEGINNER
        one_rep_max = profile.one_rep_max(exercise.id)

        if one_rep_max:
            fraction = BEGINNER_1RM_FRACTION if beginner else TRAINED_1RM_FRACTION
            prescription = LoadPrescription(
                sets=3 if beginner else 4,
                reps=10 if beginner else 8,
                weight_kg=round(one_rep_max * fraction, 1),
                rest_seconds=PRIMARY_REST_SECONDS,
                rpe_target=7,
            )
        else:
            prescription = LoadPrescription(
                sets=3,
                reps=12 if beginner else 10,
                rest_seconds=PRIMARY_REST_SECONDS,
                rpe_target=6,
            )

        if history is None:
            history = self.history_for(profile, exercise)
        if history:
            recommendation = self.recommend(exercise, profile, history)
            if recommendation.target_load_kg and recommendation.target_load_kg > 0:
                prescription = dataclasses.replace(
                    prescription, weight_kg=recommendation.target_load_kg
                )
        return prescription

    def prescribe_accessory(self, profile: UserProfile) -> LoadPrescription:
        beginner = profile.fitness_level == FitnessLevel.BEGINNER
        return LoadPrescription(
            sets=3,
            reps_min=ACCESSORY_REPS_MIN,
            reps_max=ACCESSORY_REPS_MAX,
            rest_seconds=ACCESSORY_REST_SECONDS,
            rpe_target=6 if beginner else 7,
        )

    def recommend(
        self,
        exercise: Exercise,
        profile: UserProfile,
        history: Sequence[PerformanceRecord] | None = None,
    ) -> ProgressionRecommendation:
        """Decide whether the next block should progress, maintain or deload.

        Args:
            exercise: Exercise being progressed.
            profile: Frozen user profile (level and readiness are used).
            history: Records most recent first; fetched from the history
                collaborator when omitted.

        Returns:
            A ProgressionRecommendation.
        """
        if history is None:
            history = self.history_for(profile, exercise)
        if not history:
            return self.starting_progression(exercise, profile)

        last = history[0]
        trend = analyze_trend(history, window=TREND_WINDOW_SESSIONS)
        rate = progression_rate(profile.readiness_score, trend)
        last_load = last.load_used_kg or 0.0

        if last.completion_rate < DELOAD_COMPLETION_THRESHOLD:
            return ProgressionRecommendation(
                type=RecommendationType.DELOAD,
                target_load_kg=last_load * DELOAD_LOAD_FRACTION,
                reasoning="Previous session completion rate below 80%",
                duration_weeks=1,
                next_assessment="after_successful_completion",
                progression_rate=rate,
                trend=trend,
            )

        if (
            last.average_rpe <= PROGRESSION_MAX_AVG_RPE
            and last.completion_rate >= PROGRESSION_MIN_COMPLETION
        ):
            next_step = self.next_step(exercise, last.progression_level or 1)
            if next_step is not None:
                return ProgressionRecommendation(
                    type=RecommendationType.PROGRESSION,
                    target_load_kg=round(last_load * (1 + rate), 1),
                    target_step=next_step,
                    reasoning="Performance indicates readiness for progression",
                    duration_weeks=next_step.mastery_time_weeks or DEFAULT_STEP_MASTERY_WEEKS,
                    next_assessment="weekly",
                    progression_rate=rate,
                    trend=trend,
                )

        return ProgressionRecommendation(
            type=RecommendationType.MAINTAIN,
            target_load_kg=last_load,
            reasoning="Consolidating current level",
            duration_weeks=2,
            next_assessment="bi_weekly",
            progression_rate=rate,
            trend=trend,
        )

    @staticmethod
    def starting_progression(
        exercise: Exercise, profile: UserProfile
    ) -> ProgressionRecommendation:
        """Entry point on the pathway for a user with no history."""
        level, weeks = 1, 2
        if (
            profile.fitness_level == FitnessLevel.INTERMEDIATE
            and exercise.difficulty == FitnessLevel.BEGINNER
        ):
            level, weeks = 2, 1
        elif (
            profile.fitness_level == FitnessLevel.ADVANCED
            and exercise.difficulty < FitnessLevel.ADVANCED
        ):
            level, weeks = 3, 1

        return ProgressionRecommendation(
            type=RecommendationType.PROGRESSION,
            reasoning=(
                f"Starting progression at level {level} based on "
                f"{profile.fitness_level.label} training level"
            ),
            duration_weeks=weeks,
            next_assessment="weekly",
            starting_level=level,
        )

    @staticmethod
    def next_step(exercise: Exercise, current_level: int) -> ProgressionStep | None:
        """Pathway step after *current_level* (1-based), or None at the end."""
        pathway = exercise.progression_pathway
        if 0 <= current_level < len(pathway):
            step = pathway[current_level]
            return ProgressionStep(
                step.name, step.mastery_time_weeks or DEFAULT_STEP_MASTERY_WEEKS
            )
        return None
