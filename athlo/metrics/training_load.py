"""Training load metrics (CTL, ATL, TSB) and acute:chronic workload ratio.

Metrics:
- CTL (Chronic Training Load): 42-day exponentially weighted moving average of daily TSS
- ATL (Acute Training Load): 7-day exponentially weighted moving average of daily TSS
- TSB (Training Stress Balance): CTL - ATL
- ACWR (Acute:Chronic Workload Ratio): acute load / chronic load, banded into risk tiers

Properties:
- Deterministic: Same input always produces same output
- Missing days must be passed as 0.0, not omitted
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import StrEnum
from typing import NamedTuple

from athlo.schemas.athlete import PerformanceMetrics

CTL_DAYS = 42
ATL_DAYS = 7
ACUTE_WINDOW_DAYS = 7
CHRONIC_WINDOW_DAYS = 28


class AcwrRisk(StrEnum):
    UNDER_TRAINING = "under_training"
    OPTIMAL = "optimal"
    CAUTION = "caution"
    HIGH_RISK = "high_risk"


class AcwrBand(NamedTuple):
    lower: float
    upper: float
    risk: AcwrRisk
    label: str


# Lower bound inclusive, upper bound exclusive
ACWR_BANDS: tuple[AcwrBand, ...] = (
    AcwrBand(0.0, 0.8, AcwrRisk.UNDER_TRAINING, "Detraining Risk"),
    AcwrBand(0.8, 1.3, AcwrRisk.OPTIMAL, "Sweet Spot"),
    AcwrBand(1.3, 1.5, AcwrRisk.CAUTION, "Moderate Risk"),
    AcwrBand(1.5, math.inf, AcwrRisk.HIGH_RISK, "High Injury Risk"),
)


class AcwrRecommendation(NamedTuple):
    message: str
    action: str


ACWR_RECOMMENDATIONS: dict[AcwrRisk, AcwrRecommendation] = {
    AcwrRisk.UNDER_TRAINING: AcwrRecommendation(
        "Load may be too low for adaptation. Consider gradually increasing training volume.",
        "Increase load gradually",
    ),
    AcwrRisk.OPTIMAL: AcwrRecommendation(
        "Optimal training load for adaptation with low injury risk.",
        "Maintain current approach",
    ),
    AcwrRisk.CAUTION: AcwrRecommendation(
        "Moderate injury risk. Monitor closely and ensure adequate recovery.",
        "Monitor closely",
    ),
    AcwrRisk.HIGH_RISK: AcwrRecommendation(
        "High injury risk. Consider reducing acute load or adding recovery time.",
        "Reduce training load",
    ),
}


def calculate_acwr(acute_load: float, chronic_load: float) -> float:
    """Acute:chronic workload ratio.

    Raises:
        ValueError: If chronic_load is not positive (the ratio is undefined)
    """
    if chronic_load <= 0:
        raise ValueError(f"chronic_load must be positive to compute ACWR, got {chronic_load}")
    return acute_load / chronic_load


def classify_acwr(acwr: float) -> AcwrRisk:
    """Band an ACWR value into a risk tier.

    Bands are inclusive-lower, exclusive-upper: 0.8 is optimal, 1.3 and
    anything up to (not including) 1.5 is caution, 1.5 is high risk.
    """
    if acwr < 0:
        raise ValueError(f"ACWR cannot be negative, got {acwr}")
    for band in ACWR_BANDS:
        if band.lower <= acwr < band.upper:
            return band.risk
    return AcwrRisk.HIGH_RISK


def acwr_band(acwr: float) -> AcwrBand:
    risk = classify_acwr(acwr)
    return next(band for band in ACWR_BANDS if band.risk == risk)


def acwr_recommendation(acwr: float) -> AcwrRecommendation:
    return ACWR_RECOMMENDATIONS[classify_acwr(acwr)]


def acwr_from_daily_loads(daily_load: Sequence[float]) -> float | None:
    """ACWR from a chronological daily load series.

    Acute load is the mean of the last 7 days, chronic load the mean of the
    last 28 days. Returns None when there are fewer than 28 days or the
    chronic mean is zero.
    """
    if len(daily_load) < CHRONIC_WINDOW_DAYS:
        return None
    acute = sum(daily_load[-ACUTE_WINDOW_DAYS:]) / ACUTE_WINDOW_DAYS
    chronic = sum(daily_load[-CHRONIC_WINDOW_DAYS:]) / CHRONIC_WINDOW_DAYS
    if chronic <= 0:
        return None
    return round(calculate_acwr(acute, chronic), 2)


def _calculate_ewma(values: Sequence[float], tau_days: float) -> list[float]:
    """Calculate exponentially weighted moving average.

    Formula:
        alpha = 1 - exp(-1 / tau)
        ewma[i] = alpha * value[i] + (1 - alpha) * ewma[i-1]
        ewma[-1] = 0 (an athlete starts with no accumulated load)
    """
    alpha = 1 - math.exp(-1 / tau_days)

    result: list[float] = []
    prev = 0.0
    for value in values:
        prev = alpha * value + (1 - alpha) * prev
        result.append(prev)
    return result


def calculate_ctl_atl_tsb(daily_load: Sequence[float]) -> dict[str, list[float]]:
    """Calculate CTL, ATL, and TSB series from daily training load.

    Args:
        daily_load: Daily TSS, ordered chronologically, rest days as 0.0

    Returns:
        Dictionary with "ctl", "atl" and "tsb" lists, one value per day,
        rounded to 1 decimal

    Example:
        >>> result = calculate_ctl_atl_tsb([50.0, 60.0, 0.0])
        >>> len(result["ctl"])
        3
    """
    if not daily_load:
        return {"ctl": [], "atl": [], "tsb": []}

    ctl = _calculate_ewma(daily_load, tau_days=CTL_DAYS)
    atl = _calculate_ewma(daily_load, tau_days=ATL_DAYS)
    tsb = [c - a for c, a in zip(ctl, atl, strict=True)]

    return {
        "ctl": [round(v, 1) for v in ctl],
        "atl": [round(v, 1) for v in atl],
        "tsb": [round(v, 1) for v in tsb],
    }


def compute_performance_metrics(daily_load: Sequence[float], recent_prs: Sequence[str] = ()) -> PerformanceMetrics:
    """Build the current PerformanceMetrics record from a daily TSS series.

    Returns zeros when no data is available.
    """
    series = calculate_ctl_atl_tsb(daily_load)
    if not series["ctl"]:
        return PerformanceMetrics(ctl=0.0, atl=0.0, tsb=0.0, recent_prs=list(recent_prs))

    return PerformanceMetrics(
        ctl=series["ctl"][-1],
        atl=series["atl"][-1],
        tsb=series["tsb"][-1],
        recent_prs=list(recent_prs),
    )
