"""Built-in exercise catalog.

Served by InMemoryExerciseCatalog and used as the fallback pool when the
external catalog is unavailable or filters down to nothing. Entries are
listed in catalog order; block pools preserve that order.
"""

from __future__ import annotations

from training_engine.models.enums import (
    ExerciseType,
    FitnessLevel,
    IntensityLevel,
)
from training_engine.models.exercise import Exercise, ProgressionStep

_B = FitnessLevel.BEGINNER
_I = FitnessLevel.INTERMEDIATE
_A = FitnessLevel.ADVANCED


def _ex(
    id: str,
    name: str,
    exercise_type: ExerciseType,
    intensity: IntensityLevel,
    primary: str,
    secondary: tuple[str, ...] = (),
    equipment: tuple[str, ...] = (),
    contraindications: tuple[str, ...] = (),
    difficulty: FitnessLevel = _B,
    patterns: tuple[str, ...] = (),
    description: str = "",
    pathway: tuple[tuple[str, int | None], ...] = (),
) -> Exercise:
    return Exercise(
        id=id,
        name=name,
        exercise_type=exercise_type,
        intensity=intensity,
        primary_muscle=primary,
        secondary_muscles=secondary,
        equipment_required=frozenset(equipment),
        contraindications=frozenset(contraindications),
        difficulty=difficulty,
        movement_patterns=frozenset(patterns),
        description=description,
        progression_pathway=tuple(ProgressionStep(n, w) for n, w in pathway),
    )


_S = ExerciseType.STRENGTH
_C = ExerciseType.CARDIO
_ST = ExerciseType.STRETCHING
_P = ExerciseType.PLYOMETRICS
_LOW = IntensityLevel.LOW
_MOD = IntensityLevel.MODERATE
_HIGH = IntensityLevel.HIGH

DEFAULT_EXERCISES: tuple[Exercise, ...] = (
    # --- Cardio ---
    _ex("jumping_jacks", "Jumping Jacks", _C, _LOW, "full_body",
        patterns=("locomotion",), description="Cardio warm-up movement"),
    _ex("marching_in_place", "Marching in Place", _C, _LOW, "legs",
        patterns=("locomotion",), description="Gentle cardio warm-up"),
    _ex("high_knees_running", "High Knees", _C, _HIGH, "legs", ("core",),
        patterns=("locomotion", "hip_flexion"), difficulty=_I),
    _ex("mountain_climbers", "Mountain Climbers", _C, _HIGH, "core", ("shoulders",),
        patterns=("plank", "locomotion"), difficulty=_I),
    _ex("jump_rope", "Jump Rope", _C, _MOD, "calves", equipment=("jump_rope",),
        patterns=("jump", "locomotion")),

    # --- Plyometrics ---
    _ex("burpees", "Burpees", _P, _HIGH, "full_body", ("chest", "legs"),
        contraindications=("pregnancy",), difficulty=_I,
        patterns=("jump", "squat", "horizontal_push")),
    _ex("jump_squat", "Jump Squats", _P, _HIGH, "legs", ("glutes",),
        contraindications=("knee_injury",), difficulty=_I, patterns=("jump", "squat")),
    _ex("skater_jumps", "Skater Jumps", _P, _HIGH, "legs", ("glutes",),
        contraindications=("ankle_sprain",), difficulty=_I, patterns=("jump", "lateral")),
    _ex("box_jumps", "Box Jumps", _P, _HIGH, "legs", ("glutes",), equipment=("plyo_box",),
        difficulty=_A, patterns=("jump",)),

    # --- Bodyweight strength ---
    _ex("push_ups", "Push-ups", _S, _MOD, "chest", ("shoulders", "triceps"),
        patterns=("horizontal_push",), description="Classic bodyweight chest exercise",
        pathway=(("Incline Push-up", 2), ("Push-up", 3), ("Decline Push-up", 3),
                 ("Archer Push-up", 4))),
    _ex("squat", "Bodyweight Squats", _S, _MOD, "legs", ("glutes",),
        patterns=("squat",), description="Fundamental lower body movement",
        pathway=(("Box Squat", 2), ("Bodyweight Squat", 2), ("Tempo Squat", 3),
                 ("Pistol Squat Progression", 6))),
    _ex("deep_squat", "Deep Squats", _S, _MOD, "legs", ("glutes", "core"),
        patterns=("squat",), description="Full-depth squat below parallel"),
    _ex("lunges", "Walking Lunges", _S, _MOD, "legs", ("glutes",),
        patterns=("lunge", "single_leg")),
    _ex("plank", "Plank Hold", _S, _MOD, "core",
        patterns=("plank", "anti_extension"), description="Core stability exercise"),
    _ex("step_ups", "Step-ups", _S, _MOD, "legs", ("glutes",),
        patterns=("single_leg", "squat")),
    _ex("side_plank", "Side Plank", _S, _MOD, "core",
        patterns=("plank", "anti_lateral_flexion")),
    _ex("sit_ups", "Sit-ups", _S, _MOD, "core",
        contraindications=("osteoporosis",), patterns=("spinal_flexion",)),
    _ex("tricep_dips", "Chair Dips", _S, _MOD, "triceps", ("chest", "shoulders"),
        contraindications=("shoulder_impingement",), patterns=("vertical_push",)),
    _ex("reverse_lunge", "Reverse Lunges", _S, _MOD, "legs", ("glutes",),
        patterns=("lunge", "single_leg")),
    _ex("bear_crawl", "Bear Crawl", _S, _MOD, "full_body", ("shoulders", "core"),
        patterns=("locomotion", "plank")),
    _ex("glute_bridge", "Glute Bridge", _S, _LOW, "glutes", ("hamstrings",),
        patterns=("hip_hinge", "bridge")),
    _ex("wall_sit", "Wall Sit", _S, _LOW, "legs", patterns=("squat", "isometric")),
    _ex("superman", "Superman Hold", _S, _LOW, "back", patterns=("spinal_extension",)),
    _ex("bird_dog", "Bird Dog", _S, _LOW, "core", ("back",), patterns=("anti_rotation",)),
    _ex("dead_bug", "Dead Bug", _S, _LOW, "core", patterns=("anti_extension",)),
    _ex("calf_raises", "Calf Raises", _S, _LOW, "calves", patterns=("ankle_plantarflexion",)),
    _ex("pike_push_ups", "Pike Push-ups", _S, _MOD, "shoulders", ("triceps",),
        difficulty=_I, patterns=("vertical_push",)),
    _ex("diamond_push_ups", "Diamond Push-ups", _S, _HIGH, "triceps", ("chest",),
        difficulty=_I, patterns=("horizontal_push",)),
    _ex("single_leg_squat", "Single-leg Squat", _S, _HIGH, "legs", ("glutes", "core"),
        difficulty=_A, patterns=("squat", "single_leg")),

    # --- Equipment strength ---
    _ex("inverted_row", "Inverted Row", _S, _MOD, "back", ("biceps",),
        equipment=("pull_up_bar",), patterns=("horizontal_pull",)),
    _ex("pull_ups", "Pull-ups", _S, _HIGH, "back", ("biceps",), equipment=("pull_up_bar",),
        difficulty=_I, patterns=("vertical_pull",),
        pathway=(("Dead Hang", 2), ("Negative Pull-up", 3), ("Pull-up", 4),
                 ("Weighted Pull-up", 6))),
    _ex("goblet_squat", "Goblet Squat", _S, _MOD, "legs", ("glutes", "core"),
        equipment=("dumbbells",), patterns=("squat",)),
    _ex("dumbbell_bench_press", "Dumbbell Bench Press", _S, _MOD, "chest",
        ("shoulders", "triceps"), equipment=("dumbbells", "bench"),
        patterns=("horizontal_push",)),
    _ex("dumbbell_row", "Dumbbell Row", _S, _MOD, "back", ("biceps",),
        equipment=("dumbbells",), patterns=("horizontal_pull",)),
    _ex("overhead_press", "Dumbbell Overhead Press", _S, _MOD, "shoulders", ("triceps",),
        equipment=("dumbbells",), difficulty=_I, patterns=("vertical_push",)),
    _ex("romanian_deadlift", "Romanian Deadlift", _S, _MOD, "hamstrings",
        ("glutes", "back"), equipment=("dumbbells",), difficulty=_I,
        patterns=("hip_hinge",)),
    _ex("dumbbell_thruster", "Dumbbell Thruster", _S, _HIGH, "full_body",
        ("legs", "shoulders"), equipment=("dumbbells",), difficulty=_I,
        patterns=("squat", "vertical_push")),
    _ex("lateral_raises", "Lateral Raises", _S, _LOW, "shoulders",
        equipment=("dumbbells",), patterns=("shoulder_abduction",)),
    _ex("bicep_curls", "Bicep Curls", _S, _LOW, "biceps",
        equipment=("dumbbells",), patterns=("elbow_flexion",)),
    _ex("kettlebell_swing", "Kettlebell Swing", _S, _HIGH, "glutes",
        ("hamstrings", "core"), equipment=("kettlebell",), difficulty=_I,
        patterns=("hip_hinge",)),
    _ex("barbell_squat", "Barbell Back Squat", _S, _HIGH, "legs", ("glutes", "core"),
        equipment=("barbell",), difficulty=_I, patterns=("squat",),
        pathway=(("Empty Bar Squat", 2), ("Back Squat 5x5", 4), ("Back Squat 5x3", 4),
                 ("Paused Back Squat", 6))),
    _ex("bench_press", "Barbell Bench Press", _S, _HIGH, "chest", ("shoulders", "triceps"),
        equipment=("barbell", "bench"), difficulty=_I, patterns=("horizontal_push",),
        pathway=(("Empty Bar Press", 2), ("Bench Press 5x5", 4), ("Bench Press 5x3", 4))),
    _ex("deadlift", "Barbell Deadlift", _S, _HIGH, "back", ("hamstrings", "glutes"),
        equipment=("barbell",), contraindications=("osteoporosis",), difficulty=_I,
        patterns=("hip_hinge",)),
    _ex("band_pull_aparts", "Band Pull-aparts", _S, _LOW, "shoulders",
        equipment=("resistance_band",), patterns=("horizontal_pull",)),
    _ex("face_pulls", "Face Pulls", _S, _LOW, "shoulders", ("back",),
        equipment=("resistance_band",), patterns=("horizontal_pull",)),

    # --- Dynamic stretches ---
    _ex("arm_circles", "Arm Circles", _ST, _LOW, "shoulders",
        patterns=("mobility",), description="Dynamic shoulder warm-up"),
    _ex("leg_swings", "Leg Swings", _ST, _LOW, "hips",
        patterns=("mobility",), description="Dynamic hip mobility drill"),
    _ex("torso_twists", "Torso Twists", _ST, _LOW, "core",
        patterns=("mobility", "rotation"), description="Dynamic trunk rotation"),
    _ex("inchworms", "Inchworms", _ST, _LOW, "hamstrings", ("shoulders",),
        patterns=("mobility", "hip_hinge"), description="Dynamic posterior chain warm-up"),
    _ex("cat_cow", "Cat-Cow", _ST, _LOW, "back",
        patterns=("mobility", "spinal_flexion"), description="Dynamic spinal mobility"),

    # --- Static stretches ---
    _ex("child_pose", "Child's Pose", _ST, _LOW, "back",
        patterns=("mobility",), description="Relaxing stretch for recovery"),
    _ex("hamstring_stretch", "Seated Hamstring Stretch", _ST, _LOW, "hamstrings",
        patterns=("mobility",), description="Static hamstring stretch"),
    _ex("quad_stretch", "Standing Quad Stretch", _ST, _LOW, "legs",
        patterns=("mobility",), description="Static quadriceps stretch"),
    _ex("hip_flexor_stretch", "Kneeling Hip Flexor Stretch", _ST, _LOW, "hips",
        patterns=("mobility",), description="Static hip flexor stretch"),
    _ex("pigeon_pose", "Pigeon Pose", _ST, _LOW, "glutes",
        patterns=("mobility",), description="Static hip opener"),
    _ex("chest_stretch", "Doorway Chest Stretch", _ST, _LOW, "chest",
        patterns=("mobility",), description="Static chest and shoulder stretch"),
)

EXERCISES_BY_ID: dict[str, Exercise] = {ex.id: ex for ex in DEFAULT_EXERCISES}


def get_exercise(exercise_id: str) -> Exercise:
    """Look up a built-in exercise by id.

    Raises:
        KeyError: If no built-in exercise has that id.
    """
    return EXERCISES_BY_ID[exercise_id]
