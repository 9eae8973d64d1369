"""Adaptation trace — audit trail of how an adapt call reached its result."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import auto, IntEnum

from training_engine.models.proposal import AdaptationProposal


class RuleStatus(IntEnum):
    """Whether a rule fired, was outranked, or had nothing to say."""

    FIRED = auto()
    OUTRANKED = auto()
    SKIPPED = auto()


@dataclass(frozen=True)
class RuleResult:
    """Record of a single rule's evaluation during an adapt call."""

    rule_id: str
    status: RuleStatus
    proposal: AdaptationProposal | None = None
    explanation: str = ""


@dataclass(frozen=True)
class AdaptationTrace:
    """Complete audit trail for a single AdaptationEngine.adapt() call."""

    exercise_id: str
    located: bool = False
    rule_results: tuple[RuleResult, ...] = field(default_factory=tuple)
    resolution_notes: str = ""

    @property
    def fired_rule_id(self) -> str | None:
        for result in self.rule_results:
            if result.status == RuleStatus.FIRED:
                return result.rule_id
        return None
