"""Tests for the request handler."""

from __future__ import annotations

import pytest

from training_engine.api import handle_request
from training_engine.engine import TrainingEngine

PROFILE = {
    "primary_goal": "build_muscle",
    "fitness_level": "beginner",
    "available_equipment": ["bodyweight"],
    "readiness_score": 75,
}


@pytest.fixture
def generated(engine: TrainingEngine) -> dict:
    status, body = handle_request(
        {"action": "generate", "userId": "u-1", "userProfile": PROFILE, "targetDuration": 30, "seed": 3},
        engine,
    )
    assert status == 200
    return body


class TestGenerateAction:
    def test_generate(self, generated: dict) -> None:
        assert generated["archetype_id"] == "hypertrophy_builder"
        assert generated["target_duration_minutes"] == 30
        assert generated["superset_count"] == 2
        assert generated["seed"] == 3

    def test_defaults_without_profile(self, engine: TrainingEngine) -> None:
        status, body = handle_request({"action": "generate"}, engine)
        assert status == 200
        assert body["target_duration_minutes"] == 45

    def test_preferred_duration_used(self, engine: TrainingEngine) -> None:
        profile = dict(PROFILE, preferred_duration_min=20)
        status, body = handle_request({"action": "generate", "userProfile": profile}, engine)
        assert status == 200
        assert body["target_duration_minutes"] == 20

    @pytest.mark.parametrize("duration", ["soon", -5, "Infinity", "nan", 1000, [30]])
    def test_bad_duration(self, engine: TrainingEngine, duration: object) -> None:
        status, body = handle_request(
            {"action": "generate", "targetDuration": duration}, engine
        )
        assert status == 400
        assert body["error"].startswith("Invalid targetDuration")

    def test_bad_profile(self, engine: TrainingEngine) -> None:
        status, body = handle_request(
            {"action": "generate", "userProfile": {"primary_goal": "fly"}}, engine
        )
        assert status == 400
        assert body["error"] == "Invalid userProfile"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"fitness_level": 3},
            {"movement_restrictions": ["knee"]},
            {"injuries": [{"status": "active"}]},
            {"readiness_score": "tired"},
        ],
    )
    def test_malformed_profile_fields(self, engine: TrainingEngine, overrides: dict) -> None:
        status, body = handle_request(
            {"action": "generate", "userProfile": dict(PROFILE, **overrides)}, engine
        )
        assert status == 400
        assert body["error"] == "Invalid userProfile"

    def test_profile_must_be_object(self, engine: TrainingEngine) -> None:
        status, body = handle_request({"action": "generate", "userProfile": ["beginner"]}, engine)
        assert status == 400
        assert body["error"] == "Invalid userProfile"

    def test_infinite_seed(self, engine: TrainingEngine) -> None:
        status, body = handle_request(
            {"action": "generate", "targetDuration": 30, "seed": float("inf")}, engine
        )
        assert status == 400
        assert body["error"] == "Invalid targetDuration or seed"


class TestAdaptAction:
    def test_adapt(self, engine: TrainingEngine, generated: dict) -> None:
        exercise_id = generated["blocks"][1]["exercises"][0]["id"]
        status, body = handle_request(
            {
                "action": "adapt",
                "currentWorkout": generated,
                "feedback": {"exerciseId": exercise_id, "rpe": 9},
                "expectedVersion": 1,
            },
            engine,
        )
        assert status == 200
        assert body["version"] == 2
        assert body["adaptation"]["changed"] is True
        assert body["adaptation"]["rule_id"] == "high_exertion"
        assert body["id"] == generated["id"]

    def test_unmatched_feedback_returns_workout_as_sent(
        self, engine: TrainingEngine, generated: dict
    ) -> None:
        status, body = handle_request(
            {
                "action": "adapt",
                "currentWorkout": generated,
                "feedback": {"exerciseId": "not_in_this_workout", "rpe": 9},
            },
            engine,
        )
        assert status == 200
        adaptation = body.pop("adaptation")
        assert adaptation["changed"] is False
        assert body == generated

    def test_missing_feedback(self, engine: TrainingEngine, generated: dict) -> None:
        status, body = handle_request({"action": "adapt", "currentWorkout": generated}, engine)
        assert status == 400
        assert body["error"] == "Current workout and feedback required for adaptation"

    def test_stale_version(self, engine: TrainingEngine, generated: dict) -> None:
        status, body = handle_request(
            {
                "action": "adapt",
                "currentWorkout": dict(generated, version=2),
                "feedback": {"exerciseId": "push_ups", "rpe": 9},
                "expectedVersion": 1,
            },
            engine,
        )
        assert status == 409
        assert "version 2" in body["error"]


    @pytest.mark.parametrize(
        "overrides, error",
        [
            ({"expectedVersion": "abc"}, "Invalid expectedVersion"),
            ({"feedback": ["x"]}, "Invalid feedback"),
            ({"feedback": {"exerciseId": "push_ups", "rpe": "nan"}}, "Invalid feedback"),
            ({"currentWorkout": ["x"]}, "Invalid currentWorkout"),
            ({"currentWorkout": {"id": "w", "blocks": ["warmup"]}}, "Invalid currentWorkout"),
        ],
    )
    def test_malformed_adapt_payloads(
        self, engine: TrainingEngine, generated: dict, overrides: dict, error: str
    ) -> None:
        payload = {
            "action": "adapt",
            "currentWorkout": generated,
            "feedback": {"exerciseId": "push_ups", "rpe": 9},
            **overrides,
        }
        status, body = handle_request(payload, engine)
        assert status == 400
        assert body["error"] == error


class TestDispatch:
    @pytest.mark.parametrize("payload", [{"action": "delete"}, {}, {"action": 5}])
    def test_unknown_action(self, engine: TrainingEngine, payload: dict) -> None:
        status, body = handle_request(payload, engine)
        assert status == 400
        assert body == {
            "error": 'Invalid action. Use "generate" or "adapt"',
            "details": "Training engine encountered an error",
        }

    def test_non_object_body(self, engine: TrainingEngine) -> None:
        status, body = handle_request(["generate"], engine)
        assert status == 400
        assert body["error"] == "Malformed request"
