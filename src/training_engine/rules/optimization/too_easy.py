"""OPTIMIZATION rule: add load when the athlete flags a set as too easy."""

from __future__ import annotations

import dataclasses

from training_engine.models.enums import TOO_EASY_LOAD_FACTOR, DifficultyFeedback, Priority
from training_engine.models.exercise import ExerciseInstance
from training_engine.models.feedback import SessionFeedback
from training_engine.models.proposal import AdaptationProposal
from training_engine.rules.base import AdaptationContext, AdaptationRule


class TooEasyRule(AdaptationRule):
    """Raises the load by 10% on weighted exercises flagged too easy."""

    rule_id = "too_easy"
    version = "1.0.0"
    priority = Priority.OPTIMIZATION

    def evaluate(
        self,
        instance: ExerciseInstance,
        feedback: SessionFeedback,
        context: AdaptationContext,
    ) -> AdaptationProposal | None:
        if feedback.difficulty_feedback != DifficultyFeedback.TOO_EASY:
            return None
        if not instance.weight_kg:
            return None

        new_weight = round(instance.weight_kg * TOO_EASY_LOAD_FACTOR, 1)
        return self.propose(
            dataclasses.replace(instance, weight_kg=new_weight),
            explanation=(
                f"{instance.exercise.name} reported too easy; load "
                f"{instance.weight_kg:g} kg -> {new_weight:g} kg."
            ),
        )
