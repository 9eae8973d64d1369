"""Medical-condition profiles and the default compatibility table.

Keys of MEDICAL_PROFILES are injury types as recorded on a user's injury
history. Exercise ids refer to the built-in catalog; ids that the catalog
does not carry (e.g. ``leg_press``) are kept so that external catalogs
using them are still covered.
"""

from __future__ import annotations

from types import MappingProxyType

from training_engine.models.enums import CompatibilityLevel
from training_engine.models.safety import (
    CompatibilityEntry,
    MedicalConditionProfile,
    RehabPhase,
)


def _frozen(mapping: dict) -> MappingProxyType:
    return MappingProxyType({k: MappingProxyType(v) for k, v in mapping.items()})


MEDICAL_PROFILES: MappingProxyType = MappingProxyType({
    "knee_injury": MedicalConditionProfile(
        avoid_completely=frozenset({"deep_squat", "lunges", "jump_squat", "single_leg_squat"}),
        modify_required=_frozen({
            "squat": {"depth_limit": 90, "load_reduction": 0.5},
            "leg_press": {"range_limit": "pain_free", "load_reduction": 0.3},
            "step_ups": {"load_reduction": 0.4, "focus": "controlled_movement"},
        }),
        recommended_alternatives=("leg_extension", "hamstring_curl", "glute_bridge", "wall_sit"),
        rehab_phases=(
            RehabPhase(("isometric_holds", "pain_free_range"), 2),
            RehabPhase(("controlled_eccentrics", "partial_range"), 4),
            RehabPhase(("full_range", "progressive_loading"), 6),
        ),
    ),
    "lower_back_pain": MedicalConditionProfile(
        avoid_completely=frozenset({"spinal_flexion", "deadlift", "overhead_press", "sit_ups"}),
        modify_required=_frozen({
            "romanian_deadlift": {"range_limit": "mid_shin", "load_reduction": 0.5},
            "squat": {"depth_limit": 90, "focus": "neutral_spine"},
            "dumbbell_row": {"support": "chest_supported"},
        }),
        recommended_alternatives=("glute_bridge", "bird_dog", "dead_bug", "side_plank", "cat_cow"),
        rehab_phases=(
            RehabPhase(("pain_management", "gentle_movement"), 1),
            RehabPhase(("core_stabilization", "neutral_spine_training"), 3),
            RehabPhase(("functional_movement", "gradual_loading"), 8),
        ),
    ),
    "shoulder_impingement": MedicalConditionProfile(
        avoid_completely=frozenset({"overhead_press", "lateral_raises", "pull_ups"}),
        modify_required=_frozen({
            "bench_press": {"grip_width": "narrow", "range_limit": "pain_free"},
            "push_ups": {"hand_position": "elevated", "range_limit": "partial"},
            "dumbbell_row": {"elbow_position": "close_to_body"},
        }),
        recommended_alternatives=("face_pulls", "band_pull_aparts", "inverted_row"),
        rehab_phases=(
            RehabPhase(("pendulum_swings", "external_rotation_isometrics"), 2),
            RehabPhase(("band_external_rotation", "scapular_retraction"), 4),
            RehabPhase(("controlled_pressing", "overhead_progression"), 6),
        ),
    ),
    "hip_flexor_tightness": MedicalConditionProfile(
        avoid_completely=frozenset({"deep_hip_flexion", "high_knees_running"}),
        modify_required=_frozen({
            "squat": {"depth_limit": 90},
            "mountain_climbers": {"tempo": "slow", "range_limit": "partial"},
        }),
        recommended_alternatives=("hip_flexor_stretch", "glute_bridge", "pigeon_pose"),
        rehab_phases=(
            RehabPhase(("hip_flexor_stretching", "glute_activation"), 2),
            RehabPhase(("dynamic_hip_mobility", "core_strengthening"), 3),
            RehabPhase(("full_range_movement", "sport_specific"), 4),
        ),
    ),
    "ankle_sprain": MedicalConditionProfile(
        avoid_completely=frozenset({"jumping_jacks", "jump_rope", "skater_jumps", "box_jumps"}),
        modify_required=_frozen({
            "calf_raises": {"range_limit": "pain_free", "support": "wall"},
            "lunges": {"stance": "static"},
        }),
        recommended_alternatives=("glute_bridge", "wall_sit", "marching_in_place"),
        rehab_phases=(
            RehabPhase(("ankle_circles", "gentle_range_of_motion"), 1),
            RehabPhase(("balance_training", "resistance_band_exercises"), 2),
            RehabPhase(("plyometric_preparation", "sport_specific"), 3),
        ),
    ),
})

REHAB_PHASE_CRITERIA: MappingProxyType = MappingProxyType({
    1: "Pain-free daily activities",
    2: "Full pain-free range of motion",
    3: "Return to full training",
})

DEFAULT_COMPATIBILITY: tuple[CompatibilityEntry, ...] = (
    CompatibilityEntry(
        "burpees", "hypertension", CompatibilityLevel.CAUTION,
        medical_reasoning="Rapid position changes can spike blood pressure",
    ),
    CompatibilityEntry(
        "kettlebell_swing", "hypertension", CompatibilityLevel.MODIFY_REQUIRED,
        MappingProxyType({"load_reduction": 0.3, "breathing": "no_valsalva"}),
        "Heavy ballistic loading raises blood pressure",
    ),
    CompatibilityEntry(
        "deadlift", "hypertension", CompatibilityLevel.MODIFY_REQUIRED,
        MappingProxyType({"load_reduction": 0.4, "breathing": "no_valsalva"}),
        "Breath-holding under heavy load raises blood pressure",
    ),
    CompatibilityEntry(
        "box_jumps", "osteoporosis", CompatibilityLevel.CONTRAINDICATED,
        medical_reasoning="High-impact landings risk fracture",
    ),
    CompatibilityEntry(
        "jump_squat", "osteoporosis", CompatibilityLevel.CONTRAINDICATED,
        medical_reasoning="High-impact landings risk fracture",
    ),
    CompatibilityEntry(
        "plank", "pregnancy", CompatibilityLevel.MODIFY_REQUIRED,
        MappingProxyType({"position": "incline"}),
        "Reduce intra-abdominal pressure",
    ),
    CompatibilityEntry(
        "mountain_climbers", "asthma", CompatibilityLevel.CAUTION,
        medical_reasoning="Sustained high-intensity cardio can trigger symptoms",
    ),
)
