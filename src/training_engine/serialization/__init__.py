"""Serialization module — convert engine models to and from JSON payloads."""

from training_engine.serialization.json_codec import (
    adaptation_to_dict,
    feedback_from_dict,
    profile_from_dict,
    to_json_string,
    workout_from_dict,
    workout_to_dict,
)

__all__ = [
    "adaptation_to_dict",
    "feedback_from_dict",
    "profile_from_dict",
    "to_json_string",
    "workout_from_dict",
    "workout_to_dict",
]
