"""Request/response entry point: ``handle_request(payload) -> (status, body)``.

Two actions are supported:

* ``generate`` — ``userProfile`` (optional), ``targetDuration`` (optional),
  ``seed`` (optional).
* ``adapt`` — ``currentWorkout`` and ``feedback`` (both required),
  ``userProfile`` and ``expectedVersion`` (optional).

Contract violations return 400 with ``{"error", "details"}``; a stale
``expectedVersion`` returns 409.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from training_engine.engine import TrainingEngine, exercise_lookup
from training_engine.exceptions import InvalidRequestError, StaleWorkoutError
from training_engine.models.enums import MAX_TARGET_DURATION_MIN
from training_engine.models.profile import default_profile
from training_engine.serialization.json_codec import (
    adaptation_to_dict,
    feedback_from_dict,
    profile_from_dict,
    workout_from_dict,
    workout_to_dict,
)

logger = logging.getLogger(__name__)

ENGINE_ERROR_DETAILS = "Training engine encountered an error"


def _error(message: str, details: str = ENGINE_ERROR_DETAILS) -> dict:
    return {"error": message, "details": details}


def _generate(payload: Mapping[str, Any], engine: TrainingEngine) -> dict:
    user_id = payload.get("userId")
    raw_profile = payload.get("userProfile")
    if raw_profile:
        profile = profile_from_dict(raw_profile, user_id=user_id)
    else:
        profile = default_profile(user_id or "anonymous")

    target = payload.get("targetDuration") or profile.preferred_duration_min
    seed = payload.get("seed")
    try:
        target = float(target)
        seed = int(seed) if seed is not None else None
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidRequestError("Invalid targetDuration or seed", details=str(e)) from e
    if not math.isfinite(target) or not 0 < target <= MAX_TARGET_DURATION_MIN:
        raise InvalidRequestError(
            "Invalid targetDuration",
            details=f"must be a number of minutes in (0, {MAX_TARGET_DURATION_MIN}]",
        )

    workout = engine.generate(profile, target_duration=target, seed=seed)
    return workout_to_dict(workout)


def _adapt(payload: Mapping[str, Any], engine: TrainingEngine) -> dict:
    raw_workout = payload.get("currentWorkout")
    raw_feedback = payload.get("feedback")
    if not raw_workout or not raw_feedback:
        raise InvalidRequestError(
            "Current workout and feedback required for adaptation",
            details="currentWorkout and feedback must both be provided",
        )

    workout = workout_from_dict(raw_workout, exercise_lookup(engine.load_catalog()))
    feedback = feedback_from_dict(raw_feedback)
    raw_profile = payload.get("userProfile")
    profile = profile_from_dict(raw_profile) if raw_profile else None
    expected = payload.get("expectedVersion")
    if expected is not None:
        try:
            expected = int(expected)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidRequestError("Invalid expectedVersion", details=str(e)) from e

    result = engine.adapt(workout, feedback, profile=profile, expected_version=expected)
    return adaptation_to_dict(result)


_ACTIONS = {
    "generate": _generate,
    "adapt": _adapt,
}


def handle_request(
    payload: Any, engine: TrainingEngine | None = None
) -> tuple[int, dict]:
    """Dispatch one request payload.

    Args:
        payload: Decoded JSON request body.
        engine: Engine to use; a default in-memory engine when omitted.

    Returns:
        (HTTP-style status code, JSON-compatible response body).
    """
    if not isinstance(payload, Mapping):
        return 400, _error("Malformed request", "Request body must be a JSON object")

    action = payload.get("action")
    handler = _ACTIONS.get(action) if isinstance(action, str) else None
    if handler is None:
        return 400, _error('Invalid action. Use "generate" or "adapt"')

    engine = engine or TrainingEngine()
    logger.info("Training engine request: %s", action)
    try:
        return 200, handler(payload, engine)
    except InvalidRequestError as e:
        logger.warning("Rejected %s request: %s (%s)", action, e, e.details)
        return 400, _error(str(e), e.details or ENGINE_ERROR_DETAILS)
    except StaleWorkoutError as e:
        logger.warning("Stale %s request: %s", action, e)
        return 409, _error(str(e), "Reload the latest workout and retry")
