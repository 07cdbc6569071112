"""Daily readiness score.

Combines the morning check-in signals into a single 0-100 score:

- HRV relative to the athlete's baseline (25 pts, capped)
- Sleep quality on a 1-5 scale (25 pts)
- Stress on a 1-10 scale, inverted (25 pts)
- Mood on a 1-5 scale (25 pts)
- Muscle soreness (DOMS) per body region on a 1-10 scale

The four wellness components carry 80% of the score, soreness 20%.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypedDict

WELLNESS_WEIGHT = 0.8
SORENESS_WEIGHT = 0.2

# Used when no soreness regions were reported
NEUTRAL_DOMS_SCORE = 50.0


class ReadinessComponents(TypedDict):
    hrv_score: float
    sleep_score: float
    stress_score: float
    mood_score: float
    doms_score: float
    readiness: int


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _doms_score(doms_values: Sequence[float]) -> float:
    if not doms_values:
        return NEUTRAL_DOMS_SCORE
    mean_doms = sum(doms_values) / len(doms_values)
    return max(0.0, (10.0 - mean_doms) / 10.0) * 100.0


def readiness_components(
    hrv: float,
    hrv_baseline: float,
    sleep_quality: float,
    stress: float,
    mood: float,
    doms_values: Sequence[float] = (),
) -> ReadinessComponents:
    """Compute every readiness component and the combined score.

    Args:
        hrv: Morning HRV (ms)
        hrv_baseline: Athlete's HRV baseline (ms), must be positive
        sleep_quality: Sleep quality, 1-5
        stress: Perceived stress, 1-10
        mood: Mood, 1-5
        doms_values: Soreness per body region, 1-10 each. Empty means unknown.

    Returns:
        Component scores plus the rounded readiness total

    Raises:
        ValueError: If hrv_baseline is not positive
    """
    if hrv_baseline <= 0:
        raise ValueError(f"hrv_baseline must be positive, got {hrv_baseline}")

    hrv_score = _clamp((hrv / hrv_baseline) * 25.0, 0.0, 100.0)
    sleep_score = (sleep_quality / 5.0) * 25.0
    stress_score = ((10.0 - stress) / 10.0) * 25.0
    mood_score = (mood / 5.0) * 25.0
    doms_score = _doms_score(doms_values)

    wellness = hrv_score + sleep_score + stress_score + mood_score
    # Half-up rounding; the weighted sum is never negative
    total = math.floor(WELLNESS_WEIGHT * wellness + SORENESS_WEIGHT * doms_score + 0.5)

    return {
        "hrv_score": hrv_score,
        "sleep_score": sleep_score,
        "stress_score": stress_score,
        "mood_score": mood_score,
        "doms_score": doms_score,
        "readiness": int(_clamp(total, 0, 100)),
    }


def calculate_readiness(
    hrv: float,
    hrv_baseline: float,
    sleep_quality: float,
    stress: float,
    mood: float,
    doms_values: Sequence[float] = (),
) -> int:
    """Compute the 0-100 readiness score.

    Example:
        >>> calculate_readiness(45, 45, 3, 5, 3, [5, 5])
        64
    """
    return readiness_components(hrv, hrv_baseline, sleep_quality, stress, mood, doms_values)["readiness"]
