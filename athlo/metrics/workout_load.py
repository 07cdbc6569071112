"""Planned workout load: per-step TSS, repeat expansion and Intensity Factor.

Each leaf step contributes

    tss = (duration_s / 3600) * 100 * multiplier[zone]

where the multiplier comes from a fixed six-zone table per discipline. A
repeat block's duration and TSS are the totals of its children multiplied
by the repeat count, applied recursively so nested repeats compose
(a 3x block inside a 4x block counts 12 times).

The zone multipliers approximate IF^2 at each zone's midpoint, so
Intensity Factor falls out of the aggregate as sqrt(TSS / (hours * 100)).
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TypedDict

from loguru import logger

from athlo.schemas.workout import WorkoutStep

ZoneTable = tuple[float, float, float, float, float, float]

RUNNING_ZONES: ZoneTable = (0.42, 0.61, 0.79, 0.96, 1.21, 1.44)
CYCLING_ZONES: ZoneTable = (0.30, 0.56, 0.77, 0.98, 1.28, 1.69)
SWIMMING_ZONES: ZoneTable = (0.40, 0.58, 0.76, 0.94, 1.17, 1.39)

ZONE_MULTIPLIERS: Mapping[str, ZoneTable] = {
    "running": RUNNING_ZONES,
    "cycling": CYCLING_ZONES,
    "swimming": SWIMMING_ZONES,
}

_SPORT_ALIASES = {
    "run": "running",
    "bike": "cycling",
    "ride": "cycling",
    "swim": "swimming",
}


def zone_table(sport: str) -> ZoneTable:
    """Return the zone multiplier table for a sport.

    Unknown sports fall back to the running table.
    """
    key = sport.strip().lower()
    key = _SPORT_ALIASES.get(key, key)
    table = ZONE_MULTIPLIERS.get(key)
    if table is None:
        logger.debug(f"No zone table for sport '{sport}', using running multipliers")
        return RUNNING_ZONES
    return table


def step_tss(duration_s: float, zone: int, table: ZoneTable) -> float:
    """Training stress of one steady step.

    Args:
        duration_s: Step duration in seconds
        zone: Intensity zone, 1-6
        table: Zone multiplier table for the discipline

    Raises:
        ValueError: If zone is outside 1-6
    """
    if not 1 <= zone <= len(table):
        raise ValueError(f"zone must be between 1 and {len(table)}, got {zone}")
    return (duration_s / 3600.0) * 100.0 * table[zone - 1]


@dataclass(frozen=True)
class StepTotals:
    duration_s: float = 0.0
    tss: float = 0.0
    zone_seconds: dict[int, float] = field(default_factory=dict)

    def __add__(self, other: StepTotals) -> StepTotals:
        merged = dict(self.zone_seconds)
        for zone, seconds in other.zone_seconds.items():
            merged[zone] = merged.get(zone, 0.0) + seconds
        return StepTotals(self.duration_s + other.duration_s, self.tss + other.tss, merged)

    def scaled(self, count: int) -> StepTotals:
        return StepTotals(
            self.duration_s * count,
            self.tss * count,
            {zone: seconds * count for zone, seconds in self.zone_seconds.items()},
        )


def step_totals(step: WorkoutStep, table: ZoneTable) -> StepTotals:
    """Duration, TSS and zone time of a step, expanding repeats depth-first."""
    if step.repeat is not None:
        return aggregate_steps(step.repeat.steps, table).scaled(step.repeat.count)

    zone = step.target.zone
    return StepTotals(
        duration_s=step.duration_s,
        tss=step_tss(step.duration_s, zone, table),
        zone_seconds={zone: step.duration_s} if step.duration_s > 0 else {},
    )


def aggregate_steps(steps: Iterable[WorkoutStep], table: ZoneTable) -> StepTotals:
    totals = StepTotals()
    for step in steps:
        totals = totals + step_totals(step, table)
    return totals


def intensity_factor(total_tss: float, total_duration_s: float) -> float:
    """Estimate IF from aggregated TSS and duration, rounded to 2 decimals.

    Returns 0.0 when the total duration is 0.
    """
    hours = total_duration_s / 3600.0
    if hours <= 0:
        return 0.0
    return round(math.sqrt(total_tss / (hours * 100.0)), 2)


def zone_distribution(zone_seconds: Mapping[int, float]) -> dict[int, float]:
    """Percentage of total time spent in each zone.

    Args:
        zone_seconds: Seconds per zone index

    Returns:
        Zone index -> percentage rounded to 1 decimal, in zone order.
        Empty when no time was recorded.
    """
    total = sum(zone_seconds.values())
    if total <= 0:
        return {}
    return {zone: round(seconds / total * 100.0, 1) for zone, seconds in sorted(zone_seconds.items())}


class WorkoutLoadSummary(TypedDict):
    duration_s: float
    tss: float
    intensity_factor: float
    zone_distribution: dict[int, float]


def summarize_steps(steps: Iterable[WorkoutStep], sport: str) -> WorkoutLoadSummary:
    """Aggregate a step tree into duration, TSS, IF and zone distribution."""
    totals = aggregate_steps(steps, zone_table(sport))
    return {
        "duration_s": totals.duration_s,
        "tss": round(totals.tss, 1),
        "intensity_factor": intensity_factor(totals.tss, totals.duration_s),
        "zone_distribution": zone_distribution(totals.zone_seconds),
    }
