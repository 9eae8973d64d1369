"""Archetype selection — picks the session template for a generate call."""

from __future__ import annotations

import logging

from training_engine.config import DEFAULT_CONFIG, EngineConfig
from training_engine.models.archetype import DEFAULT_ARCHETYPE, WorkoutArchetype
from training_engine.models.enums import LOW_READINESS_THRESHOLD, RECOVERY_ARCHETYPE_KEYWORDS
from training_engine.models.profile import UserProfile

logger = logging.getLogger(__name__)


class ArchetypeSelector:
    """Chooses one archetype by goal, level and readiness.

    Usage:
        selector = ArchetypeSelector(config)
        archetype = selector.select(profile)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def select(self, profile: UserProfile) -> WorkoutArchetype:
        """Select the archetype for *profile*.

        Goal and level must match. Readiness narrows the choice but never
        empties it: when no matching archetype accepts the score, the first
        match is used anyway. Below 50, recovery and mobility archetypes are
        preferred.

        Args:
            profile: Frozen user profile.

        Returns:
            The selected archetype, or the built-in full-body default when
            nothing matches goal and level.
        """
        candidates = [
            a
            for a in self.config.archetypes
            if a.matches(profile.primary_goal, profile.fitness_level)
        ]
        if not candidates:
            logger.info(
                "No archetype for goal=%s level=%s, using default",
                profile.primary_goal.value,
                profile.fitness_level.label,
            )
            return DEFAULT_ARCHETYPE

        readiness = profile.readiness_score
        eligible = [a for a in candidates if a.accepts_readiness(readiness)]
        if not eligible:
            return candidates[0]

        if readiness < LOW_READINESS_THRESHOLD:
            for archetype in eligible:
                if any(word in archetype.name for word in RECOVERY_ARCHETYPE_KEYWORDS):
                    return archetype
        return eligible[0]
