"""JSON-compatible (de)serialization for profiles, feedback and workouts.

Converts between the engine's frozen dataclasses and plain dicts that the
request handler reads and writes. Field names follow the wire format of the
calling application (snake_case fields, ``coachNotes`` and ``exerciseId``
camelCase where the callers send them).

All functions are pure (no I/O, no network calls).
"""

from __future__ import annotations

import json
import math
from typing import Any, Callable, Mapping

from training_engine.exceptions import InvalidRequestError
from training_engine.models.enums import (
    BlockType,
    DifficultyFeedback,
    ExerciseType,
    FitnessLevel,
    Goal,
    InjuryStatus,
    IntensityLevel,
)
from training_engine.models.exercise import Exercise, ExerciseInstance, ProgressionStep
from training_engine.models.feedback import AdaptationResult, SessionFeedback
from training_engine.models.profile import Injury, MovementRestriction, UserProfile
from training_engine.models.workout import (
    BlockTiming,
    GeneratedWorkout,
    TimingBreakdown,
    WorkoutBlock,
)

ExerciseLookup = Callable[[str], "Exercise | None"]

_INSTANCE_PARAMS = (
    "sets",
    "reps",
    "reps_min",
    "reps_max",
    "weight_kg",
    "duration_seconds",
    "rest_seconds",
    "superset_group",
    "rpe_target",
)


def _first(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidRequestError(f"Invalid {what}", details=f"{what} must be a JSON object")
    return data


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


def _injury_from_dict(data: Mapping[str, Any] | str) -> Injury:
    if isinstance(data, str):
        return Injury(injury_type=data)
    return Injury(
        injury_type=data["injury_type"],
        status=InjuryStatus(data.get("status", InjuryStatus.ACTIVE.value)),
        affected_exercises=tuple(data.get("affected_exercises", ())),
    )


def _restriction_from_dict(data: Mapping[str, Any]) -> MovementRestriction:
    return MovementRestriction(
        affected_exercises=tuple(data.get("affected_exercises", ())),
        restriction_type=data.get("restriction_type", "modify"),
        details=data.get("details", ""),
    )


def profile_from_dict(data: Mapping[str, Any], user_id: str | None = None) -> UserProfile:
    """Build a UserProfile from a request's ``userProfile`` object.

    Accepts ``injuries`` or ``injury_history_summary``, ``readiness_score`` or
    ``phoenix_score`` and ``preferred_duration_min`` or
    ``preferred_workout_duration``.

    Raises:
        InvalidRequestError: On missing required fields or unknown enum values.
    """
    _require_mapping(data, "userProfile")
    try:
        injuries = _first(data, "injuries", "injury_history_summary", default=())
        return UserProfile(
            user_id=user_id or data.get("user_id") or "anonymous",
            primary_goal=Goal(data["primary_goal"]),
            fitness_level=FitnessLevel.from_label(data["fitness_level"]),
            available_equipment=frozenset(data.get("available_equipment") or ("bodyweight",)),
            injuries=tuple(_injury_from_dict(i) for i in injuries),
            medical_conditions=frozenset(data.get("medical_conditions") or ()),
            movement_restrictions=tuple(
                _restriction_from_dict(r) for r in data.get("movement_restrictions") or ()
            ),
            one_rep_max_estimates=dict(data.get("one_rep_max_estimates") or {}),
            preferred_duration_min=float(
                _first(data, "preferred_duration_min", "preferred_workout_duration", default=45)
            ),
            readiness_score=_first(data, "readiness_score", "phoenix_score", default=75.0),
        )
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise InvalidRequestError("Invalid userProfile", details=str(e)) from e


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------


def feedback_from_dict(data: Mapping[str, Any]) -> SessionFeedback:
    """Build SessionFeedback; only the exercise id is required."""
    _require_mapping(data, "feedback")
    exercise_id = _first(data, "exerciseId", "exercise_id")
    if not exercise_id:
        raise InvalidRequestError("Invalid feedback", details="exerciseId is required")
    try:
        rpe = data.get("rpe")
        if rpe is not None:
            rpe = float(rpe)
            if not math.isfinite(rpe):
                raise ValueError(f"rpe must be finite, got {rpe}")
        difficulty = data.get("difficulty_feedback")
        return SessionFeedback(
            exercise_id=str(exercise_id),
            rpe=rpe,
            pain_signal=data.get("pain_signal") or None,
            difficulty_feedback=DifficultyFeedback(difficulty) if difficulty else None,
        )
    except (ValueError, TypeError) as e:
        raise InvalidRequestError("Invalid feedback", details=str(e)) from e


# ---------------------------------------------------------------------------
# Workout → dict
# ---------------------------------------------------------------------------


def exercise_to_dict(exercise: Exercise) -> dict:
    return {
        "id": exercise.id,
        "name": exercise.name,
        "exercise_type": exercise.exercise_type.value,
        "intensity": exercise.intensity.value,
        "primary_muscle": exercise.primary_muscle,
        "secondary_muscles": list(exercise.secondary_muscles),
        "equipment_required": sorted(exercise.equipment_required),
        "contraindications": sorted(exercise.contraindications),
        "difficulty": exercise.difficulty.label,
        "movement_patterns": sorted(exercise.movement_patterns),
        "description": exercise.description,
        "progression_pathway": [
            {"name": step.name, "mastery_time_weeks": step.mastery_time_weeks}
            for step in exercise.progression_pathway
        ],
    }


def instance_to_dict(instance: ExerciseInstance) -> dict:
    """Flatten an instance: exercise fields plus its session parameters."""
    data = exercise_to_dict(instance.exercise)
    for name in _INSTANCE_PARAMS:
        value = getattr(instance, name)
        if value is not None:
            data[name] = value
    if instance.superset_label:
        data["superset_label"] = instance.superset_label
    if instance.notes:
        data["notes"] = instance.notes
    return data


def block_to_dict(block: WorkoutBlock) -> dict:
    data: dict[str, Any] = {
        "name": block.name,
        "order": block.order,
        "exercises": [instance_to_dict(inst) for inst in block.exercises],
    }
    if block.block_type is not None:
        data["block_type"] = block.block_type.value
    if block.rounds is not None:
        data["rounds"] = block.rounds
    if block.rest_between_rounds_seconds is not None:
        data["rest_between_rounds"] = block.rest_between_rounds_seconds
    return data


def timing_to_dict(timing: TimingBreakdown) -> dict:
    return {
        "blocks": [
            {
                "name": b.name,
                "exercises": b.exercises,
                "supersets": b.supersets,
                "estimated_minutes": b.estimated_minutes,
                "timing_strategy": b.timing_strategy,
            }
            for b in timing.blocks
        ],
        "total_exercises": timing.total_exercises,
        "total_supersets": timing.total_supersets,
        "total_estimated_minutes": timing.total_estimated_minutes,
    }


def workout_to_dict(workout: GeneratedWorkout) -> dict:
    """Convert a GeneratedWorkout to a JSON-compatible dict."""
    data: dict[str, Any] = {
        "id": workout.id,
        "name": workout.name,
        "description": workout.description,
        "archetype_id": workout.archetype_id,
        "blocks": [block_to_dict(b) for b in workout.blocks],
        "coachNotes": workout.coach_notes,
        "estimated_duration_minutes": workout.estimated_duration_min,
        "difficulty_rating": workout.difficulty_rating,
        "metabolic_score": workout.metabolic_score,
        "strength_score": workout.strength_score,
        "version": workout.version,
    }
    if workout.target_duration_min is not None:
        data["target_duration_minutes"] = workout.target_duration_min
    if workout.superset_count is not None:
        data["superset_count"] = workout.superset_count
    if workout.timing_breakdown is not None:
        data["timing_breakdown"] = timing_to_dict(workout.timing_breakdown)
    if workout.seed is not None:
        data["seed"] = workout.seed
    return data


def adaptation_to_dict(result: AdaptationResult) -> dict:
    data = workout_to_dict(result.workout)
    data["adaptation"] = {
        "changed": result.changed,
        "explanation": result.explanation,
        "rule_id": result.trace.fired_rule_id,
        "resolution_notes": result.trace.resolution_notes,
    }
    return data


def to_json_string(data: Mapping[str, Any], indent: int = 2) -> str:
    return json.dumps(data, indent=indent)


# ---------------------------------------------------------------------------
# dict → Workout
# ---------------------------------------------------------------------------


def exercise_from_dict(data: Mapping[str, Any]) -> Exercise:
    return Exercise(
        id=data["id"],
        name=data.get("name", data["id"]),
        exercise_type=ExerciseType(data.get("exercise_type", ExerciseType.STRENGTH.value)),
        intensity=IntensityLevel(data.get("intensity", IntensityLevel.MODERATE.value)),
        primary_muscle=data.get("primary_muscle", ""),
        secondary_muscles=tuple(data.get("secondary_muscles", ())),
        equipment_required=frozenset(data.get("equipment_required", ())),
        contraindications=frozenset(data.get("contraindications", ())),
        difficulty=FitnessLevel.from_label(data.get("difficulty", "beginner")),
        movement_patterns=frozenset(data.get("movement_patterns", ())),
        description=data.get("description", ""),
        progression_pathway=tuple(
            ProgressionStep(s["name"], s.get("mastery_time_weeks"))
            for s in data.get("progression_pathway", ())
        ),
    )


def instance_from_dict(
    data: Mapping[str, Any], lookup: ExerciseLookup | None = None
) -> ExerciseInstance:
    """Rebuild an instance; catalog entries win over the wire copy when known."""
    exercise = lookup(data["id"]) if lookup is not None else None
    if exercise is None:
        exercise = exercise_from_dict(data)
    params = {name: data[name] for name in _INSTANCE_PARAMS if data.get(name) is not None}
    return ExerciseInstance(exercise=exercise, notes=data.get("notes", ""), **params)


def timing_from_dict(data: Mapping[str, Any]) -> TimingBreakdown:
    return TimingBreakdown(
        blocks=tuple(
            BlockTiming(
                name=b["name"],
                exercises=int(b["exercises"]),
                supersets=int(b["supersets"]),
                estimated_minutes=int(b["estimated_minutes"]),
                timing_strategy=b["timing_strategy"],
            )
            for b in data["blocks"]
        ),
        total_exercises=int(data["total_exercises"]),
        total_supersets=int(data["total_supersets"]),
        total_estimated_minutes=int(data["total_estimated_minutes"]),
    )


def workout_from_dict(
    data: Mapping[str, Any], lookup: ExerciseLookup | None = None
) -> GeneratedWorkout:
    """Rebuild a GeneratedWorkout sent back by the caller for adaptation.

    Raises:
        InvalidRequestError: If required fields are missing or malformed.
    """
    _require_mapping(data, "currentWorkout")
    try:
        blocks = tuple(
            WorkoutBlock(
                name=b["name"],
                order=int(b.get("order", i)),
                exercises=tuple(instance_from_dict(e, lookup) for e in b.get("exercises", ())),
                block_type=BlockType.from_token(b["block_type"]) if b.get("block_type") else None,
                rounds=b.get("rounds"),
                rest_between_rounds_seconds=b.get("rest_between_rounds"),
            )
            for i, b in enumerate(data["blocks"], start=1)
        )
        return GeneratedWorkout(
            id=str(data["id"]),
            name=data.get("name", ""),
            description=data.get("description", ""),
            archetype_id=data.get("archetype_id", ""),
            blocks=blocks,
            coach_notes=_first(data, "coachNotes", "coach_notes", default=""),
            estimated_duration_min=int(data.get("estimated_duration_minutes", 0)),
            difficulty_rating=int(data.get("difficulty_rating", 1)),
            metabolic_score=int(data.get("metabolic_score", 50)),
            strength_score=int(data.get("strength_score", 50)),
            target_duration_min=data.get("target_duration_minutes"),
            superset_count=data.get("superset_count"),
            timing_breakdown=(
                timing_from_dict(data["timing_breakdown"])
                if data.get("timing_breakdown")
                else None
            ),
            seed=data.get("seed"),
            version=int(data.get("version", 1)),
        )
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise InvalidRequestError("Invalid currentWorkout", details=str(e)) from e
