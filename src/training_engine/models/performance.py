"""Historical performance records — read-only input to the overload calculator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PerformanceRecord:
    """Outcome of one logged session for one exercise.

    Produced by the session-logging collaborator, never by the engine.
    ``completion_rate`` is the fraction of prescribed work completed
    (1.0 = everything).
    """

    exercise_id: str
    completion_rate: float
    sets_completed: int = 0
    reps_completed: tuple[int, ...] = field(default_factory=tuple)
    load_used_kg: float | None = None
    rpe_scores: tuple[float, ...] = field(default_factory=tuple)
    form_score: float | None = None
    progression_level: int | None = None
    mastery_achieved: bool = False
    created_at: datetime | None = None

    @property
    def average_rpe(self) -> float:
        """Mean RPE across sets; 0.0 when no RPE was logged."""
        if not self.rpe_scores:
            return 0.0
        return sum(self.rpe_scores) / len(self.rpe_scores)
