"""Data models for the training engine."""

from training_engine.models.archetype import DEFAULT_ARCHETYPE, WorkoutArchetype
from training_engine.models.decision_trace import AdaptationTrace, RuleResult, RuleStatus
from training_engine.models.enums import (
    BlockType,
    CompatibilityLevel,
    DifficultyFeedback,
    ExerciseType,
    FitnessLevel,
    Goal,
    IntensityLevel,
    InjuryStatus,
    PerformanceTrend,
    Priority,
    RecommendationType,
    SafetyLevel,
)
from training_engine.models.exercise import Exercise, ExerciseInstance, ProgressionStep
from training_engine.models.feedback import AdaptationResult, SessionFeedback
from training_engine.models.performance import PerformanceRecord
from training_engine.models.profile import (
    Injury,
    MovementRestriction,
    UserProfile,
    default_profile,
)
from training_engine.models.proposal import AdaptationProposal
from training_engine.models.recommendation import LoadPrescription, ProgressionRecommendation
from training_engine.models.safety import (
    CompatibilityEntry,
    MedicalConditionProfile,
    ModifiedExercise,
    RehabPhase,
    RehabProtocol,
    SafetyAssessment,
    ScreeningResult,
)
from training_engine.models.workout import (
    BlockTiming,
    GeneratedWorkout,
    TimingBreakdown,
    WorkoutBlock,
)

__all__ = [
    "AdaptationProposal",
    "AdaptationResult",
    "AdaptationTrace",
    "BlockTiming",
    "BlockType",
    "CompatibilityEntry",
    "CompatibilityLevel",
    "DEFAULT_ARCHETYPE",
    "DifficultyFeedback",
    "Exercise",
    "ExerciseInstance",
    "ExerciseType",
    "FitnessLevel",
    "GeneratedWorkout",
    "Goal",
    "Injury",
    "InjuryStatus",
    "IntensityLevel",
    "LoadPrescription",
    "MedicalConditionProfile",
    "ModifiedExercise",
    "MovementRestriction",
    "PerformanceRecord",
    "PerformanceTrend",
    "Priority",
    "ProgressionRecommendation",
    "ProgressionStep",
    "RecommendationType",
    "RehabPhase",
    "RehabProtocol",
    "RuleResult",
    "RuleStatus",
    "SafetyAssessment",
    "SafetyLevel",
    "ScreeningResult",
    "SessionFeedback",
    "TimingBreakdown",
    "UserProfile",
    "WorkoutArchetype",
    "WorkoutBlock",
    "default_profile",
]
