"""Safety filter — classifies exercises for a user and finds safe alternatives.

Checks run from the most to the least specific source of risk. A check may
only raise the safety level, never lower it: once an exercise is
contraindicated, nothing later can make it safe again.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from training_engine.collaborators import CompatibilityLookup
from training_engine.config import DEFAULT_CONFIG, EngineConfig
from training_engine.exceptions import CompatibilityLookupError
from training_engine.models.enums import (
    AVOID_RESTRICTION_TYPE,
    MAX_SAFE_ALTERNATIVES,
    CompatibilityLevel,
    FitnessLevel,
    SafetyLevel,
)
from training_engine.models.exercise import Exercise
from training_engine.models.profile import UserProfile
from training_engine.models.safety import (
    CompatibilityEntry,
    ModifiedExercise,
    RehabProtocol,
    SafetyAssessment,
    ScreeningResult,
)

logger = logging.getLogger(__name__)


class _Assessment:
    """Mutable accumulator used while a single assessment is being built."""

    def __init__(self, exercise_id: str) -> None:
        self.exercise_id = exercise_id
        self.level = SafetyLevel.SAFE
        self.risk_factors: list[str] = []
        self.modifications: list[Mapping[str, object]] = []
        self.reasoning: list[str] = []

    def escalate(self, level: SafetyLevel, reason: str) -> None:
        self.level = max(self.level, level)
        self.reasoning.append(reason)

    def freeze(self) -> SafetyAssessment:
        return SafetyAssessment(
            exercise_id=self.exercise_id,
            safety_level=self.level,
            risk_factors=tuple(self.risk_factors),
            required_modifications=tuple(self.modifications),
            reasoning=tuple(self.reasoning),
        )


class SafetyFilter:
    """Classifies exercises as safe, modify-required or contraindicated.

    Usage:
        safety = SafetyFilter()
        screening = safety.screen(candidate_pool, profile)
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        compatibility_lookup: CompatibilityLookup | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.compatibility_lookup = compatibility_lookup

    def assess(self, exercise: Exercise, profile: UserProfile) -> SafetyAssessment:
        """Assess one exercise against the user's injuries and conditions.

        Args:
            exercise: Catalog exercise to check.
            profile: Frozen user profile.

        Returns:
            A SafetyAssessment; contraindicated short-circuits the remaining checks.
        """
        result = _Assessment(exercise.id)
        active = profile.active_injuries

        # 1. Injury profiles that forbid the exercise outright
        for injury in active:
            medical = self.config.medical_profile(injury.injury_type)
            if (medical and exercise.id in medical.avoid_completely) or (
                exercise.id in injury.affected_exercises
            ):
                result.risk_factors.append(injury.injury_type)
                result.escalate(
                    SafetyLevel.CONTRAINDICATED,
                    f"Contraindicated due to {injury.injury_type}",
                )
                return result.freeze()

        # 2. Injury profiles that require a modification
        for injury in active:
            medical = self.config.medical_profile(injury.injury_type)
            if medical and exercise.id in medical.modify_required:
                result.risk_factors.append(injury.injury_type)
                result.modifications.append(
                    MappingProxyType(dict(medical.modify_required[exercise.id]))
                )
                result.escalate(
                    SafetyLevel.MODIFY, f"Requires modification for {injury.injury_type}"
                )

        # 3. Exercise contraindication tags
        conditions = set(profile.medical_conditions) | {i.injury_type for i in active}
        clashes = sorted(exercise.contraindications & conditions)
        if clashes:
            result.risk_factors.extend(clashes)
            result.escalate(
                SafetyLevel.CONTRAINDICATED,
                f"Contraindicated for {', '.join(clashes)}",
            )
            return result.freeze()

        # 4. User-declared movement restrictions
        for restriction in profile.movement_restrictions:
            if exercise.id not in restriction.affected_exercises:
                continue
            if restriction.restriction_type == AVOID_RESTRICTION_TYPE:
                result.escalate(SafetyLevel.CONTRAINDICATED, "Movement restriction: avoid")
                return result.freeze()
            result.modifications.append(
                MappingProxyType({restriction.restriction_type: restriction.details})
            )
            result.escalate(
                SafetyLevel.MODIFY,
                f"Movement restriction: {restriction.restriction_type}",
            )

        # 5. Medical compatibility table
        entry = self._highest_risk_entry(exercise.id, profile.medical_conditions)
        if entry is not None:
            level = entry.compatibility_level
            reason = entry.medical_reasoning or f"{level.name.lower()} for {entry.medical_condition}"
            if level == CompatibilityLevel.CONTRAINDICATED:
                result.risk_factors.append(entry.medical_condition)
                result.escalate(SafetyLevel.CONTRAINDICATED, reason)
                return result.freeze()
            if level == CompatibilityLevel.MODIFY_REQUIRED:
                result.risk_factors.append(entry.medical_condition)
                if entry.required_modifications:
                    result.modifications.append(
                        MappingProxyType(dict(entry.required_modifications))
                    )
                result.escalate(SafetyLevel.MODIFY, reason)
            elif level == CompatibilityLevel.CAUTION:
                result.risk_factors.append(entry.medical_condition)
                result.reasoning.append(reason)

        return result.freeze()

    def _highest_risk_entry(
        self, exercise_id: str, conditions: Iterable[str]
    ) -> CompatibilityEntry | None:
        conditions = tuple(conditions)
        if not conditions or self.compatibility_lookup is None:
            return None
        try:
            entries = self.compatibility_lookup.lookup(exercise_id, conditions)
        except CompatibilityLookupError as exc:
            logger.warning(
                "Compatibility lookup failed for %s, continuing without: %s",
                exercise_id,
                exc,
            )
            return None
        if not entries:
            return None
        return max(entries, key=lambda e: e.compatibility_level)

    def screen(
        self, exercises: Sequence[Exercise], profile: UserProfile
    ) -> ScreeningResult:
        """Partition *exercises* and find alternatives for contraindicated ones.

        Alternatives are searched across *exercises* itself: up to three
        exercises sharing a movement pattern with the contraindicated one and
        themselves assessed safe, in pool order.
        """
        assessments = {ex.id: self.assess(ex, profile) for ex in exercises}

        safe: list[Exercise] = []
        modified: list[ModifiedExercise] = []
        contraindicated: list[Exercise] = []
        for ex in exercises:
            assessment = assessments[ex.id]
            if assessment.is_contraindicated:
                contraindicated.append(ex)
            elif assessment.safety_level == SafetyLevel.MODIFY:
                modified.append(ModifiedExercise(ex, assessment.required_modifications))
            else:
                safe.append(ex)

        alternatives: dict[str, tuple[Exercise, ...]] = {}
        for ex in contraindicated:
            found = [
                candidate
                for candidate in exercises
                if candidate.id != ex.id
                and candidate.shares_pattern_with(ex)
                and assessments[candidate.id].is_safe
            ]
            alternatives[ex.id] = tuple(found[:MAX_SAFE_ALTERNATIVES])

        if contraindicated:
            logger.debug(
                "Screened %d exercises for %s: %d contraindicated",
                len(exercises),
                profile.user_id,
                len(contraindicated),
            )

        return ScreeningResult(
            safe=tuple(safe),
            modified=tuple(modified),
            contraindicated=tuple(contraindicated),
            alternatives=MappingProxyType(alternatives),
            assessments=MappingProxyType(assessments),
        )

    def find_substitute(
        self,
        exercise: Exercise,
        pool: Sequence[Exercise],
        profile: UserProfile,
        same_primary_muscle: bool = True,
        prefer_beginner: bool = True,
    ) -> Exercise | None:
        """Find a safe replacement for *exercise* in *pool*.

        Candidates of the same exercise type come first, then those the
        medical profiles of the user's active injuries recommend, then
        beginner difficulty if preferred; catalog order breaks ties.

        Args:
            exercise: Exercise being replaced.
            pool: Candidate exercises, in catalog order.
            profile: Frozen user profile.
            same_primary_muscle: Only consider exercises with the same primary muscle.
            prefer_beginner: Try beginner-difficulty candidates first.

        Returns:
            The first suitable safe exercise, or None.
        """
        recommended = self.recommended_alternatives(profile)
        candidates = [
            c
            for c in pool
            if c.id != exercise.id
            and (not same_primary_muscle or c.primary_muscle == exercise.primary_muscle)
        ]
        candidates.sort(
            key=lambda c: (
                c.exercise_type != exercise.exercise_type,
                c.id not in recommended,
                prefer_beginner and c.difficulty != FitnessLevel.BEGINNER,
            )
        )

        for candidate in candidates:
            if self.assess(candidate, profile).is_safe:
                return candidate
        return None

    def recommended_alternatives(self, profile: UserProfile) -> frozenset[str]:
        """Exercise ids recommended for any of the user's active injuries."""
        ids: set[str] = set()
        for injury in profile.active_injuries:
            medical = self.config.medical_profile(injury.injury_type)
            if medical is not None:
                ids.update(medical.recommended_alternatives)
        return frozenset(ids)

    def rehabilitation_progression(
        self, injury_type: str, phase: int
    ) -> RehabProtocol | None:
        """Return the rehab protocol for *phase* (1-based) of *injury_type*."""
        medical = self.config.medical_profile(injury_type)
        if medical is None or not 1 <= phase <= len(medical.rehab_phases):
            return None
        step = medical.rehab_phases[phase - 1]
        return RehabProtocol(
            injury_type=injury_type,
            phase=phase,
            exercises=step.exercises,
            duration_weeks=step.duration_weeks,
            criteria=self.config.rehab_phase_criteria.get(phase, ""),
            next_phase=phase + 1 if phase < len(medical.rehab_phases) else None,
        )
