"""Time-boxing arithmetic for duration-targeted workouts.

Warm-up and cool-down take fixed slices of the session; whatever is left
goes to supersets costed at about 6.5 minutes each, repeated when there are
too few exercises to fill the slot with distinct groups.
"""

from __future__ import annotations

import math
from typing import Sequence

from training_engine.models.enums import (
    DYNAMIC_COOLDOWN_MIN,
    DYNAMIC_WARMUP_MIN,
    LONG_SESSION_SUPERSET_SIZE,
    SHORT_SESSION_SUPERSET_SIZE,
    SHORT_SESSION_THRESHOLD_MIN,
    SUPERSET_COST_MIN,
    WARMUP_CARDIO_SECONDS,
)


def superset_size(target_duration_min: float) -> int:
    """Exercises per superset: 3 for sessions under 35 minutes, else 4."""
    if target_duration_min < SHORT_SESSION_THRESHOLD_MIN:
        return SHORT_SESSION_SUPERSET_SIZE
    return LONG_SESSION_SUPERSET_SIZE


def main_work_minutes(target_duration_min: float) -> float:
    """Minutes left for supersets after the fixed warm-up and cool-down."""
    return max(0.0, target_duration_min - DYNAMIC_WARMUP_MIN - DYNAMIC_COOLDOWN_MIN)


def supersets_by_time(target_duration_min: float) -> int:
    """floor(remaining / 6.5): supersets the time alone allows."""
    return math.floor(main_work_minutes(target_duration_min) / SUPERSET_COST_MIN)


def superset_count(target_duration_min: float, pool_size: int) -> int:
    """Number of supersets that fit the remaining time and the exercise pool.

    Args:
        target_duration_min: Requested session length in minutes.
        pool_size: Number of superset-eligible exercises available.

    Returns:
        floor(remaining / 6.5), bounded by how many full supersets the pool can fill.
    """
    by_time = supersets_by_time(target_duration_min)
    by_pool = pool_size // superset_size(target_duration_min)
    return max(0, min(by_time, by_pool))


def superset_rounds(
    target_duration_min: float, group_seconds: Sequence[float]
) -> list[int]:
    """Passes per superset group that best fill the main-work slot.

    Used when the exercise pool caps the number of groups below what the
    time allows. Every group runs at least once; extra passes go to the
    groups in order, one at a time, while each brings the total closer to
    the slot.
    """
    rounds = [1] * len(group_seconds)
    if not group_seconds or min(group_seconds) <= 0:
        return rounds
    budget = main_work_minutes(target_duration_min) * 60
    total = sum(group_seconds)
    i = 0
    while total + group_seconds[i] / 2 < budget:
        rounds[i] += 1
        total += group_seconds[i]
        i = (i + 1) % len(group_seconds)
    return rounds


def warmup_cardio_seconds(stretch_seconds: float) -> int:
    """Cardio duration that fills the warm-up slot after the stretches."""
    remainder = DYNAMIC_WARMUP_MIN * 60 - stretch_seconds
    return int(max(WARMUP_CARDIO_SECONDS, remainder))


def split_seconds(total_seconds: int, parts: int) -> list[int]:
    """Split *total_seconds* into *parts* near-equal whole-second holds.

    The first holds absorb the remainder so the parts always sum to the total.
    """
    if parts <= 0:
        return []
    base, remainder = divmod(total_seconds, parts)
    return [base + (1 if i < remainder else 0) for i in range(parts)]
