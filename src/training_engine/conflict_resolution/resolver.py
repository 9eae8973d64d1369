"""Conflict resolver — reduces the rules' proposals to a single change."""

from __future__ import annotations

import logging

from training_engine.conflict_resolution.strategies import (
    HighestPriorityWins,
    ResolutionStrategy,
)
from training_engine.models.proposal import AdaptationProposal

logger = logging.getLogger(__name__)


class ConflictResolver:
    """Picks the one proposal an adapt call applies.

    The strategy is pluggable; HighestPriorityWins is the default, so a
    pain substitution always beats an exertion back-off or a load increase.
    """

    def __init__(self, strategy: ResolutionStrategy | None = None) -> None:
        self.strategy = strategy or HighestPriorityWins()

    def resolve(
        self, proposals: list[AdaptationProposal]
    ) -> tuple[AdaptationProposal | None, str]:
        winner, notes = self.strategy.resolve(proposals)
        if len(proposals) > 1:
            logger.debug("Resolved %d competing proposals: %s", len(proposals), notes)
        return winner, notes
