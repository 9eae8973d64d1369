"""Enumerations and engine constants for the training engine.

Programming constants cite the coaching convention they follow where one
exists; the rest are house rules of the engine.
"""

from enum import Enum, IntEnum


class Priority(IntEnum):
    """Adaptation rule priority tiers — lower value = higher priority.

    SAFETY rules pre-empt every other rule for the same feedback.
    """

    SAFETY = 0
    RECOVERY = 1
    OPTIMIZATION = 2


class Goal(str, Enum):
    """Primary training goal declared by the user."""

    LOSE_WEIGHT = "lose_weight"
    BUILD_MUSCLE = "build_muscle"
    IMPROVE_ENDURANCE = "improve_endurance"
    INCREASE_STRENGTH = "increase_strength"
    GENERAL_FITNESS = "general_fitness"


class FitnessLevel(IntEnum):
    """Training level, ordered so that comparisons mean 'at most as hard'."""

    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "FitnessLevel":
        return cls[label.strip().upper()]


class ExerciseType(str, Enum):
    STRENGTH = "strength"
    CARDIO = "cardio"
    STRETCHING = "stretching"
    PLYOMETRICS = "plyometrics"


class IntensityLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class InjuryStatus(str, Enum):
    ACTIVE = "active"
    RECOVERING = "recovering"
    RESOLVED = "resolved"


class SafetyLevel(IntEnum):
    """Outcome of a per-exercise safety assessment, ordered by severity."""

    SAFE = 0
    MODIFY = 1
    CONTRAINDICATED = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class CompatibilityLevel(IntEnum):
    """Medical compatibility table entries, ordered by risk."""

    SAFE = 0
    CAUTION = 1
    MODIFY_REQUIRED = 2
    CONTRAINDICATED = 3

    @classmethod
    def from_label(cls, label: str) -> "CompatibilityLevel":
        try:
            return cls[label.strip().upper()]
        except KeyError:
            return cls.SAFE


class RecommendationType(str, Enum):
    PROGRESSION = "progression"
    MAINTAIN = "maintain"
    DELOAD = "deload"


class PerformanceTrend(str, Enum):
    IMPROVING = "improving"
    MAINTAINING = "maintaining"
    DECLINING = "declining"


class DifficultyFeedback(str, Enum):
    TOO_EASY = "too_easy"
    TOO_HARD = "too_hard"


class BlockType(str, Enum):
    """Block-type tokens accepted in an archetype template."""

    WARMUP = "warmup"
    GENTLE_WARMUP = "gentle_warmup"
    STRENGTH = "strength"
    STRENGTH_SUPERSET = "strength_superset"
    COMPOUND_STRENGTH = "compound_strength"
    CARDIO = "cardio"
    METABOLIC_CIRCUIT = "metabolic_circuit"
    HIIT_INTERVALS = "hiit_intervals"
    CARDIO_INTERVALS = "cardio_intervals"
    COOLDOWN = "cooldown"
    DEEP_STRETCH = "deep_stretch"
    MOBILITY_FLOW = "mobility_flow"
    ACCESSORY_WORK = "accessory_work"
    DYNAMIC_SUPERSET = "dynamic_superset"

    @classmethod
    def from_token(cls, token: str) -> "BlockType":
        """Parse a template token; unknown tokens build a strength block."""
        try:
            return cls(token.strip().lower())
        except ValueError:
            return cls.STRENGTH


# ---------------------------------------------------------------------------
# Readiness
# ---------------------------------------------------------------------------
DEFAULT_READINESS = 75.0
LOW_READINESS_THRESHOLD = 50.0  # Below this, steer towards recovery/mobility
RECOVERY_ARCHETYPE_KEYWORDS = ("Recovery", "Mobility")

# ---------------------------------------------------------------------------
# Progressive overload — percentage-of-1RM programming
# ---------------------------------------------------------------------------
BEGINNER_1RM_FRACTION = 0.70
TRAINED_1RM_FRACTION = 0.80
PRIMARY_REST_SECONDS = 90
ACCESSORY_REST_SECONDS = 60
ACCESSORY_REPS_MIN = 8
ACCESSORY_REPS_MAX = 12

BASE_PROGRESSION_RATE = 0.025        # 2.5% per successful block
MAX_PROGRESSION_RATE = 0.05          # Never more than 5%
HIGH_READINESS_RATE_FACTOR = 1.2     # readiness >= 80
LOW_READINESS_RATE_FACTOR = 0.8      # readiness < 60
IMPROVING_RATE_FACTOR = 1.1
DECLINING_RATE_FACTOR = 0.7
PROGRESSION_HIGH_READINESS = 80.0
PROGRESSION_LOW_READINESS = 60.0

DELOAD_COMPLETION_THRESHOLD = 0.80   # Latest session below this → deload
DELOAD_LOAD_FRACTION = 0.9
PROGRESSION_MAX_AVG_RPE = 6.0
PROGRESSION_MIN_COMPLETION = 1.0
TREND_WINDOW_SESSIONS = 3
DEFAULT_STEP_MASTERY_WEEKS = 2
HISTORY_QUERY_LIMIT = 10

# ---------------------------------------------------------------------------
# Block construction — template mode
# ---------------------------------------------------------------------------
WARMUP_CARDIO_SECONDS = 300
WARMUP_MAX_DYNAMIC_STRETCHES = 3
WARMUP_STRETCH_REPS = 10
WARMUP_STRETCH_REST_SECONDS = 15
COOLDOWN_MAX_STRETCHES = 4
COOLDOWN_HOLD_SECONDS = 60
METABOLIC_MAX_ITEMS = 4
METABOLIC_ROUND_REST_SECONDS = 90
MOBILITY_MAX_ITEMS = 5
ACCESSORY_BLOCK_MAX_ITEMS = 3
SUPERSET_EMPHASIS_THRESHOLD = 0.5    # metabolic emphasis above this → supersets

# ---------------------------------------------------------------------------
# Block construction — dynamic (time-boxed) mode
# ---------------------------------------------------------------------------
DYNAMIC_WARMUP_MIN = 7.0
DYNAMIC_COOLDOWN_MIN = 5.0
SUPERSET_COST_MIN = 6.5
MAX_TARGET_DURATION_MIN = 240       # Longest session a request may ask for
SUPERSET_WORK_SECONDS = 60
SUPERSET_INTRA_REST_SECONDS = 30
SUPERSET_GROUP_REST_SECONDS = 150
SHORT_SESSION_THRESHOLD_MIN = 35     # Below this, 3 exercises per superset
SHORT_SESSION_SUPERSET_SIZE = 3
LONG_SESSION_SUPERSET_SIZE = 4
SUPERSET_REPS_MIN = 10
SUPERSET_REPS_MAX = 12
SUPERSET_RPE_TARGET = 7

# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------
SECONDS_PER_REP = 3
DEFAULT_REPS_FOR_TIMING = 10
DIFFICULTY_BY_LEVEL = {
    FitnessLevel.BEGINNER: 3,
    FitnessLevel.INTERMEDIATE: 5,
    FitnessLevel.ADVANCED: 8,
}
HIGH_RPE_THRESHOLD = 8
HIGH_RPE_DIFFICULTY_BONUS = 2
SUPERSET_DIFFICULTY_BONUS = 1

# ---------------------------------------------------------------------------
# Adaptation
# ---------------------------------------------------------------------------
HIGH_EXERTION_RPE = 9
EXERTION_LOAD_FACTOR = 0.9
EXERTION_REP_REDUCTION = 2
EXERTION_MIN_REPS = 6                # Only reduce reps when above this
TOO_EASY_LOAD_FACTOR = 1.1

# ---------------------------------------------------------------------------
# Safety
# ---------------------------------------------------------------------------
MAX_SAFE_ALTERNATIVES = 3
AVOID_RESTRICTION_TYPE = "avoid"
BODYWEIGHT_TAG = "bodyweight"

# ---------------------------------------------------------------------------
# Coaching notes
# ---------------------------------------------------------------------------
COACH_NOTES_DEFAULT_TIMEOUT_S = 8.0
COACH_NOTES_KEY_EXERCISES = 3
