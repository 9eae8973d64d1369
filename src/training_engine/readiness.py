"""Readiness score boundary — clamping and suggested-intensity labels.

The score itself is computed by an external service (a weighted blend of
recovery, sleep, training load, nutrition, stress and HRV sub-scores). The
engine only consumes the 0-100 number.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

READINESS_MIN = 0.0
READINESS_MAX = 100.0
_HIGH_BAND = 80.0
_MODERATE_BAND = 60.0
_LIGHT_BAND = 40.0


@dataclass(frozen=True)
class ReadinessSummary:
    score: float
    suggested_intensity: str
    recommendation: str


def clamp_readiness(score: float | None, default: float = 75.0) -> float:
    """Clamp a readiness score to [0, 100]; None or NaN becomes *default*."""
    if score is None or math.isnan(float(score)):
        return default
    return max(READINESS_MIN, min(READINESS_MAX, float(score)))


def suggested_intensity(score: float) -> str:
    """Map a readiness score to a human-readable intensity label."""
    score = clamp_readiness(score)
    if score >= _HIGH_BAND:
        return "high"
    if score >= _MODERATE_BAND:
        return "moderate"
    if score >= _LIGHT_BAND:
        return "light"
    return "recovery"


_RECOMMENDATIONS = {
    "high": "Excellent readiness. You're primed for high-intensity training today.",
    "moderate": "Good readiness. Moderate to high intensity work will be productive.",
    "light": "Moderate readiness. Consider lighter training or focus on technique and mobility.",
    "recovery": "Low readiness. Prioritize recovery, sleep and light movement today.",
}


def summarize_readiness(score: float | None) -> ReadinessSummary:
    """Clamp *score* and attach its intensity label and recommendation."""
    clamped = clamp_readiness(score)
    label = suggested_intensity(clamped)
    return ReadinessSummary(
        score=clamped,
        suggested_intensity=label,
        recommendation=_RECOMMENDATIONS[label],
    )
