"""Abstract base class for all live-session adaptation rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from training_engine.models.enums import Priority
from training_engine.models.exercise import Exercise, ExerciseInstance
from training_engine.models.feedback import SessionFeedback
from training_engine.models.profile import UserProfile
from training_engine.models.proposal import AdaptationProposal
from training_engine.safety.filter import SafetyFilter


@dataclass(frozen=True)
class AdaptationContext:
    """Read-only inputs a rule may consult besides the instance and feedback.

    Attributes:
        profile: Profile used for safety checks of substitutes.
        catalog: Exercises available for substitution, in catalog order.
        safety_filter: Filter used to vet any substitute.
        workout_exercise_ids: Exercises already in the workout being adapted.
    """

    profile: UserProfile
    catalog: tuple[Exercise, ...] = field(default_factory=tuple)
    safety_filter: SafetyFilter = field(default_factory=SafetyFilter)
    workout_exercise_ids: frozenset[str] = field(default_factory=frozenset)


class AdaptationRule(ABC):
    """Base class for all adaptation rules.

    Each rule turns one kind of session feedback into a proposed
    replacement for the exercise instance the feedback is about. Rules are
    discovered automatically by the RuleRegistry and evaluated by the
    AdaptationEngine.

    Subclasses must define:
        rule_id: unique identifier (e.g. "pain_substitution")
        version: semantic version string
        priority: Priority tier (SAFETY, RECOVERY, OPTIMIZATION)
        evaluate(): the rule's decision logic
    """

    rule_id: str
    version: str
    priority: Priority

    @abstractmethod
    def evaluate(
        self,
        instance: ExerciseInstance,
        feedback: SessionFeedback,
        context: AdaptationContext,
    ) -> AdaptationProposal | None:
        """Evaluate this rule against one piece of session feedback.

        Returns an AdaptationProposal if the rule has something to say,
        or None if the feedback does not concern it.
        """
        ...

    def propose(
        self,
        replacement: ExerciseInstance,
        explanation: str,
        coach_note: str = "",
    ) -> AdaptationProposal:
        return AdaptationProposal(
            rule_id=self.rule_id,
            rule_version=self.version,
            priority=self.priority,
            replacement=replacement,
            coach_note=coach_note,
            explanation=explanation,
        )
