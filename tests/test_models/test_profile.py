"""Tests for UserProfile construction invariants and the default profile."""

from __future__ import annotations

from typing import Callable

import pytest

from training_engine.models.enums import FitnessLevel, Goal, InjuryStatus
from training_engine.models.profile import Injury, UserProfile, default_profile


class TestUserProfile:
    def test_readiness_clamped_high(self, make_profile: Callable[..., UserProfile]) -> None:
        assert make_profile(readiness_score=140).readiness_score == 100.0

    def test_readiness_clamped_low(self, make_profile: Callable[..., UserProfile]) -> None:
        assert make_profile(readiness_score=-5).readiness_score == 0.0

    def test_only_active_injuries_reported(
        self, make_profile: Callable[..., UserProfile]
    ) -> None:
        profile = make_profile(
            injuries=(
                Injury("knee_injury", InjuryStatus.ACTIVE),
                Injury("ankle_sprain", InjuryStatus.RESOLVED),
            )
        )
        assert [i.injury_type for i in profile.active_injuries] == ["knee_injury"]

    def test_one_rep_max_lookup(self, make_profile: Callable[..., UserProfile]) -> None:
        profile = make_profile(one_rep_max_estimates={"bench_press": 80})
        assert profile.one_rep_max("bench_press") == 80.0
        assert profile.one_rep_max("squat") is None

    def test_profile_is_frozen(self, beginner_profile: UserProfile) -> None:
        with pytest.raises(AttributeError):
            beginner_profile.readiness_score = 10  # type: ignore[misc]

    def test_one_rep_max_mapping_is_read_only(
        self, make_profile: Callable[..., UserProfile]
    ) -> None:
        profile = make_profile(one_rep_max_estimates={"bench_press": 80})
        with pytest.raises(TypeError):
            profile.one_rep_max_estimates["bench_press"] = 100  # type: ignore[index]


class TestDefaultProfile:
    def test_defaults(self) -> None:
        profile = default_profile("u-9")
        assert profile.user_id == "u-9"
        assert profile.primary_goal == Goal.BUILD_MUSCLE
        assert profile.fitness_level == FitnessLevel.INTERMEDIATE
        assert profile.available_equipment == frozenset({"bodyweight"})
        assert profile.readiness_score == 75.0
        assert profile.preferred_duration_min == 45.0
