"""Progression analytics over a time window and multi-week progression plans."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Sequence

import numpy as np
import pandas as pd

from training_engine.models.enums import BASE_PROGRESSION_RATE, BODYWEIGHT_TAG, PerformanceTrend
from training_engine.models.exercise import Exercise
from training_engine.models.performance import PerformanceRecord
from training_engine.progression.trend import analyze_trend

TIMEFRAME_DAYS = {"week": 7, "month": 30, "quarter": 90}
TARGET_SESSIONS_PER_WEEK = 2
FORM_SAMPLE_SIZE = 5
RPE_SAMPLE_SIZE = 5
HIGH_AVG_RPE = 8.0
LOW_AVG_RPE = 6.0
WEIGHTED_BASE_LOAD_KG = 20.0
MAX_PLAN_SETS = 5

_TREND_ADVICE = {
    PerformanceTrend.DECLINING: (
        "Consider a deload week to allow for recovery",
        "Focus on form quality over load increases",
    ),
    PerformanceTrend.IMPROVING: (
        "Excellent progress! Consider progressing to the next level",
        "Maintain current training frequency",
    ),
    PerformanceTrend.MAINTAINING: (
        "Progress is steady - consider varying training stimulus",
        "Focus on technique refinement",
    ),
}

_PHASE_FOCUS = (
    "Technique mastery and movement quality",
    "Strength building and progressive overload",
    "Power development and advanced variations",
)

_ASSESSMENT_CRITERIA = (
    "Form score >= 8/10",
    "Completion rate >= 90%",
    "RPE <= 7 for prescribed sets",
)


@dataclass(frozen=True)
class ProgressionAnalytics:
    performance_trend: PerformanceTrend
    strength_gains: float
    consistency_score: float
    form_improvement: float
    recommendations: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WeeklyTarget:
    week: int
    target_load_kg: float
    target_sets: int
    target_reps: str
    focus: str
    progression_notes: str


@dataclass(frozen=True)
class Milestone:
    week: int
    milestone: str
    assessment_criteria: tuple[str, ...]


@dataclass(frozen=True)
class ProgressionPlan:
    exercise_id: str
    weekly_targets: tuple[WeeklyTarget, ...]
    milestones: tuple[Milestone, ...]


def _records_frame(records: Sequence[PerformanceRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "created_at": pd.to_datetime([r.created_at for r in records], utc=True),
            "load": pd.Series([r.load_used_kg for r in records], dtype=np.float64),
            "completion": pd.Series([r.completion_rate for r in records], dtype=np.float64),
            "form": pd.Series([r.form_score for r in records], dtype=np.float64),
            "avg_rpe": pd.Series([r.average_rpe for r in records], dtype=np.float64),
        }
    )


def progression_analytics(
    records: Sequence[PerformanceRecord],
    timeframe: str = "month",
    now: datetime | None = None,
) -> ProgressionAnalytics:
    """Summarize progress for one exercise over a week, month or quarter.

    Records without a timestamp cannot be placed in the window and are
    ignored.

    Args:
        records: Performance history for one user and exercise, any order.
        timeframe: "week", "month" or "quarter".
        now: End of the window; defaults to the current UTC time.

    Returns:
        ProgressionAnalytics for the window.

    Raises:
        ValueError: If *timeframe* is not one of the supported windows.
    """
    if timeframe not in TIMEFRAME_DAYS:
        raise ValueError(f"Unknown timeframe {timeframe!r}; expected one of {sorted(TIMEFRAME_DAYS)}")
    days = TIMEFRAME_DAYS[timeframe]

    end = pd.Timestamp(now or datetime.now(timezone.utc))
    if end.tzinfo is None:
        end = end.tz_localize("UTC")
    cutoff = end - pd.Timedelta(days=days)

    dated = [r for r in records if r.created_at is not None]
    frame = _records_frame(dated) if dated else pd.DataFrame()
    if not frame.empty:
        frame = frame[frame["created_at"] >= cutoff].sort_values(
            "created_at", ascending=False, kind="stable"
        )

    if frame.empty:
        return ProgressionAnalytics(
            performance_trend=PerformanceTrend.MAINTAINING,
            strength_gains=0.0,
            consistency_score=0.0,
            form_improvement=0.0,
            recommendations=("Insufficient data - perform more sessions to track progress",),
        )

    window = [dated[i] for i in frame.index]
    trend = analyze_trend(window)

    return ProgressionAnalytics(
        performance_trend=trend,
        strength_gains=_strength_gains(frame),
        consistency_score=_consistency_score(len(frame), days),
        form_improvement=_form_improvement(frame),
        recommendations=_recommendations(frame, trend),
    )


def _strength_gains(frame: pd.DataFrame) -> float:
    """Percent change of load × completion from the oldest to the latest session."""
    if len(frame) < 2:
        return 0.0
    strength = frame["load"].fillna(0.0) * frame["completion"].fillna(0.0)
    latest, oldest = float(strength.iloc[0]), float(strength.iloc[-1])
    if oldest == 0:
        return 0.0
    return (latest - oldest) / oldest * 100


def _consistency_score(sessions: int, days: int) -> float:
    sessions_per_week = sessions / days * 7
    return min(sessions_per_week / TARGET_SESSIONS_PER_WEEK * 100, 100.0)


def _form_improvement(frame: pd.DataFrame) -> float:
    if len(frame) < 2:
        return 0.0
    sample = min(FORM_SAMPLE_SIZE, len(frame))
    form = frame["form"].fillna(0.0)
    recent = form.head(sample)
    older = form.tail(sample)
    recent, older = recent[recent > 0], older[older > 0]
    if recent.empty or older.empty:
        return 0.0
    older_avg = float(older.mean())
    return (float(recent.mean()) - older_avg) / older_avg * 100


def _recommendations(frame: pd.DataFrame, trend: PerformanceTrend) -> tuple[str, ...]:
    advice = list(_TREND_ADVICE[trend])

    rpe = frame["avg_rpe"].head(RPE_SAMPLE_SIZE)
    rpe = rpe[rpe > 0]
    if not rpe.empty:
        avg_rpe = float(rpe.mean())
        if avg_rpe > HIGH_AVG_RPE:
            advice.append("RPE consistently high - consider reducing intensity")
        elif avg_rpe < LOW_AVG_RPE:
            advice.append("RPE low - ready for progression or increased intensity")
    return tuple(advice)


def _weekly_focus(week: int) -> str:
    phase = (week - 1) // 4
    return _PHASE_FOCUS[phase] if phase < len(_PHASE_FOCUS) else "Maintenance and refinement"


def _target_reps(week: int) -> str:
    if week <= 4:
        return "8-12"
    if week <= 8:
        return "10-15"
    return "12-20"


def progression_plan(
    exercise: Exercise, current_level: int = 1, weeks: int = 12
) -> ProgressionPlan:
    """Build a week-by-week plan with a milestone every four weeks.

    Load grows 2.5% per week from a base of 20 kg per level for weighted
    exercises; bodyweight exercises carry no load target.
    """
    bodyweight = not (exercise.equipment_required - {BODYWEIGHT_TAG})
    base_load = 0.0 if bodyweight else WEIGHTED_BASE_LOAD_KG

    targets: list[WeeklyTarget] = []
    milestones: list[Milestone] = []
    for week in range(1, weeks + 1):
        factor = 1 + (week - 1) * BASE_PROGRESSION_RATE
        focus = _weekly_focus(week)
        targets.append(
            WeeklyTarget(
                week=week,
                target_load_kg=round(base_load * current_level * factor, 2),
                target_sets=min(3 + week // 4, MAX_PLAN_SETS),
                target_reps=_target_reps(week),
                focus=focus,
                progression_notes=f"Week {week} focus: {focus}",
            )
        )
        if week % 4 == 0:
            milestones.append(
                Milestone(
                    week=week,
                    milestone=f"Level {math.floor(current_level + week / 4)} Achievement",
                    assessment_criteria=_ASSESSMENT_CRITERIA,
                )
            )

    return ProgressionPlan(
        exercise_id=exercise.id,
        weekly_targets=tuple(targets),
        milestones=tuple(milestones),
    )
