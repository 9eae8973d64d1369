"""AdaptationEngine — mutates a live workout in response to session feedback."""

from __future__ import annotations

import dataclasses
import logging
from typing import Sequence

from training_engine.conflict_resolution.resolver import ConflictResolver
from training_engine.exceptions import StaleWorkoutError
from training_engine.models.decision_trace import AdaptationTrace, RuleResult, RuleStatus
from training_engine.models.exercise import Exercise
from training_engine.models.feedback import AdaptationResult, SessionFeedback
from training_engine.models.profile import UserProfile, default_profile
from training_engine.models.proposal import AdaptationProposal
from training_engine.models.workout import GeneratedWorkout
from training_engine.registry import RuleRegistry
from training_engine.rules.base import AdaptationContext
from training_engine.safety.filter import SafetyFilter

logger = logging.getLogger(__name__)


class AdaptationEngine:
    """Evaluates adaptation rules against one piece of feedback.

    Usage:
        engine = AdaptationEngine(catalog=exercises)
        result = engine.adapt(workout, SessionFeedback("squat", rpe=9))
        result.workout.version  # workout.version + 1 when changed
    """

    def __init__(
        self,
        catalog: Sequence[Exercise] = (),
        safety_filter: SafetyFilter | None = None,
        registry: RuleRegistry | None = None,
        resolver: ConflictResolver | None = None,
    ) -> None:
        self.catalog = tuple(catalog)
        self.safety_filter = safety_filter or SafetyFilter()
        self.registry = registry or RuleRegistry()
        self.resolver = resolver or ConflictResolver()

        # Auto-discover rules if using default registry
        if registry is None:
            self.registry.discover_rules()

    def adapt(
        self,
        workout: GeneratedWorkout,
        feedback: SessionFeedback,
        profile: UserProfile | None = None,
        expected_version: int | None = None,
    ) -> AdaptationResult:
        """Apply the single highest-priority change the feedback calls for.

        Args:
            workout: Current workout; never mutated.
            feedback: Feedback for one exercise.
            profile: Profile used to vet substitutes; a bodyweight default
                when omitted.
            expected_version: If given, the version the caller believes is
                current.

        Returns:
            AdaptationResult carrying a new workout (or the same one when
            nothing changed), an explanation and the rule trace.

        Raises:
            StaleWorkoutError: If ``expected_version`` does not match.
        """
        if expected_version is not None and expected_version != workout.version:
            raise StaleWorkoutError(expected_version, workout.version)

        position = workout.locate(feedback.exercise_id)
        if position is None:
            logger.info("Adapt: exercise %s not in workout %s", feedback.exercise_id, workout.id)
            return AdaptationResult(
                workout=workout,
                changed=False,
                explanation=f"Exercise {feedback.exercise_id} is not part of this workout.",
                trace=AdaptationTrace(exercise_id=feedback.exercise_id),
            )

        b_idx, e_idx = position
        instance = workout.blocks[b_idx].exercises[e_idx]
        context = AdaptationContext(
            profile=profile or default_profile(),
            catalog=self.catalog,
            safety_filter=self.safety_filter,
            workout_exercise_ids=frozenset(workout.exercise_ids),
        )

        rule_results: list[RuleResult] = []
        proposals: list[AdaptationProposal] = []
        for rule in self.registry.get_all_rules():
            proposal = rule.evaluate(instance, feedback, context)
            if proposal is None:
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.SKIPPED,
                        explanation="Rule returned no proposal.",
                    )
                )
                continue
            proposals.append(proposal)
            rule_results.append(
                RuleResult(
                    rule_id=rule.rule_id,
                    status=RuleStatus.FIRED,
                    proposal=proposal,
                    explanation=proposal.explanation,
                )
            )

        winner, resolution_notes = self.resolver.resolve(proposals)
        if winner is not None:
            rule_results = [
                dataclasses.replace(r, status=RuleStatus.OUTRANKED)
                if r.proposal is not None and r.proposal is not winner
                else r
                for r in rule_results
            ]

        trace = AdaptationTrace(
            exercise_id=feedback.exercise_id,
            located=True,
            rule_results=tuple(rule_results),
            resolution_notes=resolution_notes,
        )

        if winner is None:
            return AdaptationResult(
                workout=workout,
                changed=False,
                explanation="Feedback recorded; no adjustment needed.",
                trace=trace,
            )

        if winner.replacement == instance and not winner.coach_note:
            return AdaptationResult(
                workout=workout, changed=False, explanation=winner.explanation, trace=trace
            )

        updated = workout.with_instance(position, winner.replacement)
        coach_notes = updated.coach_notes
        if winner.coach_note:
            coach_notes = f"{coach_notes}\n\n{winner.coach_note}" if coach_notes else winner.coach_note
        updated = dataclasses.replace(
            updated, coach_notes=coach_notes, version=workout.version + 1
        )

        logger.info(
            "Adapted workout %s v%d via %s: %s",
            workout.id,
            updated.version,
            winner.rule_id,
            winner.explanation,
        )
        return AdaptationResult(
            workout=updated, changed=True, explanation=winner.explanation, trace=trace
        )
