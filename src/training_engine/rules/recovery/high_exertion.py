"""RECOVERY rule: back off when the athlete reports near-maximal exertion.

An RPE of 9 or more, or a "too hard" flag without an RPE, cuts the load
by 10% and trims two reps from sets of more than six.
"""

from __future__ import annotations

import dataclasses

from training_engine.models.enums import (
    EXERTION_LOAD_FACTOR,
    EXERTION_MIN_REPS,
    EXERTION_REP_REDUCTION,
    HIGH_EXERTION_RPE,
    DifficultyFeedback,
    Priority,
)
from training_engine.models.exercise import ExerciseInstance
from training_engine.models.feedback import SessionFeedback
from training_engine.models.proposal import AdaptationProposal
from training_engine.rules.base import AdaptationContext, AdaptationRule

EXERTION_COACH_NOTE = (
    "I've adjusted the intensity based on your feedback. Quality over quantity "
    "- you're doing great!"
)


class HighExertionRule(AdaptationRule):
    """Reduces load and reps after a very hard set."""

    rule_id = "high_exertion"
    version = "1.0.0"
    priority = Priority.RECOVERY

    def evaluate(
        self,
        instance: ExerciseInstance,
        feedback: SessionFeedback,
        context: AdaptationContext,
    ) -> AdaptationProposal | None:
        if feedback.rpe is not None:
            if feedback.rpe < HIGH_EXERTION_RPE:
                return None
            trigger = f"RPE {feedback.rpe:g}"
        elif feedback.difficulty_feedback == DifficultyFeedback.TOO_HARD:
            trigger = "reported too hard"
        else:
            return None

        changes: dict[str, object] = {}
        if instance.weight_kg:
            changes["weight_kg"] = round(instance.weight_kg * EXERTION_LOAD_FACTOR, 1)
        if instance.reps is not None and instance.reps > EXERTION_MIN_REPS:
            changes["reps"] = instance.reps - EXERTION_REP_REDUCTION

        detail = ", ".join(f"{k} -> {v}" for k, v in changes.items()) or "no load to reduce"
        return self.propose(
            dataclasses.replace(instance, **changes),  # type: ignore[arg-type]
            explanation=f"{instance.exercise.name}: {trigger}; {detail}.",
            coach_note=EXERTION_COACH_NOTE,
        )
