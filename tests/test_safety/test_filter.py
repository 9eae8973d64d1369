"""Tests for SafetyFilter — assessment order, screening and substitution."""

from __future__ import annotations

from typing import Callable

from training_engine.catalog.exercises import DEFAULT_EXERCISES, EXERCISES_BY_ID
from training_engine.collaborators import InMemoryCompatibilityLookup
from training_engine.exceptions import CompatibilityLookupError
from training_engine.models.enums import FitnessLevel, InjuryStatus, SafetyLevel
from training_engine.models.profile import Injury, MovementRestriction, UserProfile
from training_engine.safety.filter import SafetyFilter


class _FailingLookup:
    def lookup(self, exercise_id, conditions):
        raise CompatibilityLookupError("table offline")


class TestAssess:
    def setup_method(self) -> None:
        self.safety = SafetyFilter(compatibility_lookup=InMemoryCompatibilityLookup())

    def test_healthy_profile_is_safe(self, beginner_profile: UserProfile) -> None:
        assessment = self.safety.assess(EXERCISES_BY_ID["deep_squat"], beginner_profile)
        assert assessment.safety_level == SafetyLevel.SAFE

    def test_active_injury_avoid_list(self, knee_injury_profile: UserProfile) -> None:
        assessment = self.safety.assess(EXERCISES_BY_ID["deep_squat"], knee_injury_profile)
        assert assessment.is_contraindicated
        assert "knee_injury" in assessment.risk_factors

    def test_resolved_injury_ignored(self, make_profile: Callable[..., UserProfile]) -> None:
        profile = make_profile(injuries=(Injury("knee_injury", InjuryStatus.RESOLVED),))
        assert self.safety.assess(EXERCISES_BY_ID["deep_squat"], profile).is_safe

    def test_injury_affected_exercises(self, make_profile: Callable[..., UserProfile]) -> None:
        profile = make_profile(injuries=(Injury("wrist", affected_exercises=("push_ups",)),))
        assert self.safety.assess(EXERCISES_BY_ID["push_ups"], profile).is_contraindicated

    def test_modify_required_carries_modifications(
        self, knee_injury_profile: UserProfile
    ) -> None:
        assessment = self.safety.assess(EXERCISES_BY_ID["squat"], knee_injury_profile)
        assert assessment.safety_level == SafetyLevel.MODIFY
        assert dict(assessment.required_modifications[0]) == {
            "depth_limit": 90,
            "load_reduction": 0.5,
        }

    def test_contraindication_tag_matches_condition(
        self, make_profile: Callable[..., UserProfile]
    ) -> None:
        profile = make_profile(medical_conditions=frozenset({"osteoporosis"}))
        assert self.safety.assess(EXERCISES_BY_ID["sit_ups"], profile).is_contraindicated

    def test_contraindication_tag_matches_injury_type(
        self, knee_injury_profile: UserProfile
    ) -> None:
        assert self.safety.assess(
            EXERCISES_BY_ID["jump_squat"], knee_injury_profile
        ).is_contraindicated

    def test_avoid_restriction(self, make_profile: Callable[..., UserProfile]) -> None:
        profile = make_profile(
            movement_restrictions=(MovementRestriction(("plank",), "avoid"),)
        )
        assert self.safety.assess(EXERCISES_BY_ID["plank"], profile).is_contraindicated

    def test_other_restriction_requires_modification(
        self, make_profile: Callable[..., UserProfile]
    ) -> None:
        profile = make_profile(
            movement_restrictions=(MovementRestriction(("plank",), "limit_range", "knees down"),)
        )
        assessment = self.safety.assess(EXERCISES_BY_ID["plank"], profile)
        assert assessment.safety_level == SafetyLevel.MODIFY
        assert dict(assessment.required_modifications[0]) == {"limit_range": "knees down"}

    def test_compatibility_contraindicated(
        self, make_profile: Callable[..., UserProfile]
    ) -> None:
        profile = make_profile(medical_conditions=frozenset({"osteoporosis"}))
        assert self.safety.assess(EXERCISES_BY_ID["box_jumps"], profile).is_contraindicated

    def test_contraindication_tag_outranks_caution(
        self, make_profile: Callable[..., UserProfile]
    ) -> None:
        # burpees: caution for hypertension, pregnancy tag contraindicates
        profile = make_profile(medical_conditions=frozenset({"hypertension", "pregnancy"}))
        assert self.safety.assess(EXERCISES_BY_ID["burpees"], profile).is_contraindicated

    def test_compatibility_caution_stays_safe(
        self, make_profile: Callable[..., UserProfile]
    ) -> None:
        profile = make_profile(medical_conditions=frozenset({"hypertension"}))
        assessment = self.safety.assess(EXERCISES_BY_ID["burpees"], profile)
        assert assessment.is_safe
        assert "hypertension" in assessment.risk_factors

    def test_compatibility_modify(self, make_profile: Callable[..., UserProfile]) -> None:
        profile = make_profile(medical_conditions=frozenset({"pregnancy"}))
        assessment = self.safety.assess(EXERCISES_BY_ID["plank"], profile)
        assert assessment.safety_level == SafetyLevel.MODIFY

    def test_modification_never_downgrades_contraindication(
        self, make_profile: Callable[..., UserProfile]
    ) -> None:
        # Knee profile modifies step_ups, the restriction then forbids it
        profile = make_profile(
            injuries=(Injury("knee_injury"),),
            movement_restrictions=(MovementRestriction(("step_ups",), "avoid"),),
        )
        assert self.safety.assess(EXERCISES_BY_ID["step_ups"], profile).is_contraindicated

    def test_lookup_failure_is_tolerated(
        self, make_profile: Callable[..., UserProfile]
    ) -> None:
        safety = SafetyFilter(compatibility_lookup=_FailingLookup())
        profile = make_profile(medical_conditions=frozenset({"hypertension"}))
        assert safety.assess(EXERCISES_BY_ID["burpees"], profile).is_safe


class TestScreen:
    def setup_method(self) -> None:
        self.safety = SafetyFilter()

    def test_partition_covers_pool(self, knee_injury_profile: UserProfile) -> None:
        result = self.safety.screen(DEFAULT_EXERCISES, knee_injury_profile)
        total = len(result.safe) + len(result.modified) + len(result.contraindicated)
        assert total == len(DEFAULT_EXERCISES)

    def test_contraindicated_never_in_safe(self, knee_injury_profile: UserProfile) -> None:
        result = self.safety.screen(DEFAULT_EXERCISES, knee_injury_profile)
        safe_ids = {ex.id for ex in result.safe}
        assert not safe_ids & result.contraindicated_ids
        assert {"deep_squat", "lunges", "jump_squat", "single_leg_squat"} <= result.contraindicated_ids

    def test_alternatives_share_pattern_and_are_safe(
        self, knee_injury_profile: UserProfile
    ) -> None:
        result = self.safety.screen(DEFAULT_EXERCISES, knee_injury_profile)
        deep_squat = EXERCISES_BY_ID["deep_squat"]
        alternatives = result.alternatives["deep_squat"]

        assert 0 < len(alternatives) <= 3
        for alt in alternatives:
            assert alt.shares_pattern_with(deep_squat)
            assert result.assessments[alt.id].is_safe

    def test_modified_listed_with_modifications(self, knee_injury_profile: UserProfile) -> None:
        result = self.safety.screen(DEFAULT_EXERCISES, knee_injury_profile)
        modified = {m.exercise.id: m for m in result.modified}
        assert "squat" in modified
        assert modified["squat"].modifications


class TestFindSubstitute:
    def setup_method(self) -> None:
        self.safety = SafetyFilter()

    def test_same_muscle_same_type_beginner_first(
        self, dumbbell_profile: UserProfile
    ) -> None:
        substitute = self.safety.find_substitute(
            EXERCISES_BY_ID["goblet_squat"], DEFAULT_EXERCISES, dumbbell_profile
        )
        assert substitute is not None
        assert substitute.id == "squat"

    def test_substitute_is_safe_for_profile(self, knee_injury_profile: UserProfile) -> None:
        substitute = self.safety.find_substitute(
            EXERCISES_BY_ID["deep_squat"], DEFAULT_EXERCISES, knee_injury_profile
        )
        assert substitute is not None
        assert substitute.primary_muscle == "legs"
        assert self.safety.assess(substitute, knee_injury_profile).is_safe
        assert substitute.difficulty == FitnessLevel.BEGINNER

    def test_injury_recommendation_preferred(self, knee_injury_profile: UserProfile) -> None:
        substitute = self.safety.find_substitute(
            EXERCISES_BY_ID["deep_squat"], DEFAULT_EXERCISES, knee_injury_profile
        )
        assert substitute is EXERCISES_BY_ID["wall_sit"]
        assert "wall_sit" in self.safety.recommended_alternatives(knee_injury_profile)

    def test_no_recommendations_without_injuries(self, beginner_profile: UserProfile) -> None:
        assert self.safety.recommended_alternatives(beginner_profile) == frozenset()

    def test_none_when_nothing_fits(self, beginner_profile: UserProfile) -> None:
        pool = [EXERCISES_BY_ID["push_ups"], EXERCISES_BY_ID["plank"]]
        assert (
            self.safety.find_substitute(EXERCISES_BY_ID["push_ups"], pool, beginner_profile)
            is None
        )


class TestRehabilitationProgression:
    def setup_method(self) -> None:
        self.safety = SafetyFilter()

    def test_first_phase(self) -> None:
        protocol = self.safety.rehabilitation_progression("knee_injury", 1)
        assert protocol is not None
        assert protocol.duration_weeks == 2
        assert protocol.criteria == "Pain-free daily activities"
        assert protocol.next_phase == 2

    def test_last_phase_has_no_next(self) -> None:
        protocol = self.safety.rehabilitation_progression("knee_injury", 3)
        assert protocol is not None
        assert protocol.next_phase is None

    def test_unknown_injury_or_phase(self) -> None:
        assert self.safety.rehabilitation_progression("elbow", 1) is None
        assert self.safety.rehabilitation_progression("knee_injury", 4) is None
