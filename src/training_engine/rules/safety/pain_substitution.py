"""SAFETY rule: substitute an exercise the athlete reports pain on.

A pain signal ends further adaptation for the exercise. The replacement
shares the primary muscle group, is not already part of the workout,
prefers beginner difficulty and must pass the safety filter for the
athlete's profile.
"""

from __future__ import annotations

import dataclasses

from training_engine.models.enums import Priority
from training_engine.models.exercise import ExerciseInstance
from training_engine.models.feedback import SessionFeedback
from training_engine.models.proposal import AdaptationProposal
from training_engine.rules.base import AdaptationContext, AdaptationRule

PAIN_COACH_NOTE = (
    "I noticed you felt some discomfort, so I've swapped that exercise for a "
    "safer alternative. Always listen to your body - you're making the right choice!"
)


class PainSubstitutionRule(AdaptationRule):
    """Swaps the exercise for a safe same-muscle alternative on any pain signal."""

    rule_id = "pain_substitution"
    version = "1.0.0"
    priority = Priority.SAFETY

    def evaluate(
        self,
        instance: ExerciseInstance,
        feedback: SessionFeedback,
        context: AdaptationContext,
    ) -> AdaptationProposal | None:
        if not feedback.pain_signal:
            return None

        pool = [
            ex
            for ex in context.catalog
            if ex.is_available_with(context.profile.available_equipment)
            and ex.id not in context.workout_exercise_ids
        ]
        substitute = context.safety_filter.find_substitute(
            instance.exercise, pool, context.profile
        )

        if substitute is None:
            # Keep the exercise; the pain signal still blocks lower-priority changes.
            return self.propose(
                instance,
                explanation=(
                    f"Pain reported on {instance.exercise.name} ({feedback.pain_signal}) "
                    "but no safe alternative for the same muscle group was found. "
                    "Exercise left unchanged; consider skipping it."
                ),
            )

        replacement = dataclasses.replace(
            instance,
            exercise=substitute,
            weight_kg=None,
            notes=f"Substituted for {instance.exercise.name}",
        )
        return self.propose(
            replacement,
            explanation=(
                f"Pain reported on {instance.exercise.name} ({feedback.pain_signal}). "
                f"Substituted {substitute.name}, keeping sets, reps and duration."
            ),
            coach_note=PAIN_COACH_NOTE,
        )
