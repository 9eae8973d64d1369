"""Performance trend and progression-rate calculations.

Both functions are pure: history in, numbers out. History is always
ordered most recent first.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from training_engine.models.enums import (
    BASE_PROGRESSION_RATE,
    DECLINING_RATE_FACTOR,
    HIGH_READINESS_RATE_FACTOR,
    IMPROVING_RATE_FACTOR,
    LOW_READINESS_RATE_FACTOR,
    MAX_PROGRESSION_RATE,
    PROGRESSION_HIGH_READINESS,
    PROGRESSION_LOW_READINESS,
    PerformanceTrend,
)
from training_engine.models.performance import PerformanceRecord


def performance_scores(records: Sequence[PerformanceRecord]) -> np.ndarray:
    """Score each session as completion rate × load (1 for unloaded work)."""
    return np.array(
        [r.completion_rate * (r.load_used_kg or 1.0) for r in records],
        dtype=np.float64,
    )


def analyze_trend(
    records: Sequence[PerformanceRecord], window: int | None = None
) -> PerformanceTrend:
    """Classify recent history as improving, maintaining or declining.

    Each session is compared with the one before it; the trend is whichever
    direction the majority of those comparisons point. Ties and fewer than
    two sessions count as maintaining.

    Args:
        records: Performance history, most recent first.
        window: Only consider the most recent *window* sessions.

    Returns:
        The PerformanceTrend.
    """
    if window is not None:
        records = records[:window]
    if len(records) < 2:
        return PerformanceTrend.MAINTAINING

    scores = performance_scores(records)
    # scores[i] is newer than scores[i + 1]
    deltas = scores[:-1] - scores[1:]
    improving = int(np.count_nonzero(deltas > 0))
    declining = int(np.count_nonzero(deltas < 0))

    if improving > declining:
        return PerformanceTrend.IMPROVING
    if declining > improving:
        return PerformanceTrend.DECLINING
    return PerformanceTrend.MAINTAINING


def progression_rate(readiness: float, trend: PerformanceTrend) -> float:
    """Weekly load increase as a fraction (0.025 = 2.5%), capped at 5%.

    Args:
        readiness: Readiness score in [0, 100].
        trend: Recent performance trend.

    Returns:
        The progression rate.
    """
    rate = BASE_PROGRESSION_RATE
    if readiness >= PROGRESSION_HIGH_READINESS:
        rate *= HIGH_READINESS_RATE_FACTOR
    elif readiness < PROGRESSION_LOW_READINESS:
        rate *= LOW_READINESS_RATE_FACTOR

    if trend == PerformanceTrend.IMPROVING:
        rate *= IMPROVING_RATE_FACTOR
    elif trend == PerformanceTrend.DECLINING:
        rate *= DECLINING_RATE_FACTOR

    return min(rate, MAX_PROGRESSION_RATE)
