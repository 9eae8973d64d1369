"""Live-session feedback and the adaptation result returned to the caller."""

from __future__ import annotations

from dataclasses import dataclass

from training_engine.models.decision_trace import AdaptationTrace
from training_engine.models.enums import DifficultyFeedback
from training_engine.models.workout import GeneratedWorkout


@dataclass(frozen=True)
class SessionFeedback:
    """Feedback for one exercise during a live session.

    Only ``exercise_id`` is required; missing signals simply do not fire
    their rule.
    """

    exercise_id: str
    rpe: float | None = None
    pain_signal: str | None = None
    difficulty_feedback: DifficultyFeedback | None = None


@dataclass(frozen=True)
class AdaptationResult:
    """Full updated workout (not a diff) plus an explanation of what changed."""

    workout: GeneratedWorkout
    changed: bool
    explanation: str
    trace: AdaptationTrace
