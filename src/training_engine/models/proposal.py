"""Adaptation proposal — what a single adaptation rule suggests."""

from __future__ import annotations

from dataclasses import dataclass

from training_engine.models.enums import Priority
from training_engine.models.exercise import ExerciseInstance


@dataclass(frozen=True)
class AdaptationProposal:
    """A single rule's proposed replacement for the live exercise instance.

    Rules produce these; the ConflictResolver picks exactly one.
    """

    rule_id: str
    rule_version: str
    priority: Priority

    replacement: ExerciseInstance
    coach_note: str = ""
    explanation: str = ""
