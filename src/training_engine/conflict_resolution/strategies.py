"""Conflict resolution strategies for competing adaptation proposals."""

from __future__ import annotations

from abc import ABC, abstractmethod

from training_engine.models.proposal import AdaptationProposal


class ResolutionStrategy(ABC):
    """Base class for conflict resolution strategies."""

    @abstractmethod
    def resolve(
        self, proposals: list[AdaptationProposal]
    ) -> tuple[AdaptationProposal | None, str]:
        """Pick at most one winning proposal.

        Returns the winner (None when nothing was proposed) and a
        human-readable explanation for the adaptation trace.
        """
        ...


class HighestPriorityWins(ResolutionStrategy):
    """Resolution strategy: the highest-priority proposal wins outright.

    Proposals are never merged; exactly one change is applied per adapt
    call. Within a tier the first proposal in evaluation order wins.

    Priority hierarchy:
        0. SAFETY — pain substitution, overrides all
        1. RECOVERY — exertion back-off
        2. OPTIMIZATION — load increases
    """

    def resolve(
        self, proposals: list[AdaptationProposal]
    ) -> tuple[AdaptationProposal | None, str]:
        if not proposals:
            return None, "No rules proposed a change."

        best_priority = min(p.priority for p in proposals)
        winner = next(p for p in proposals if p.priority == best_priority)

        outranked = [p.rule_id for p in proposals if p is not winner]
        notes = f"Winner: {winner.rule_id} (priority={winner.priority.name})"
        if outranked:
            notes += f"; outranked: {', '.join(outranked)}"
        return winner, notes
