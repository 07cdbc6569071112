"""Pure training metric formulas: readiness, workout load and training load."""

from athlo.metrics.readiness import calculate_readiness, readiness_components
from athlo.metrics.training_load import (
    AcwrRisk,
    acwr_band,
    acwr_from_daily_loads,
    acwr_recommendation,
    calculate_acwr,
    calculate_ctl_atl_tsb,
    classify_acwr,
    compute_performance_metrics,
)
from athlo.metrics.workout_load import (
    aggregate_steps,
    intensity_factor,
    step_tss,
    summarize_steps,
    zone_distribution,
    zone_table,
)

__all__ = [
    "AcwrRisk",
    "acwr_band",
    "acwr_from_daily_loads",
    "acwr_recommendation",
    "aggregate_steps",
    "calculate_acwr",
    "calculate_ctl_atl_tsb",
    "calculate_readiness",
    "classify_acwr",
    "compute_performance_metrics",
    "intensity_factor",
    "readiness_components",
    "step_tss",
    "summarize_steps",
    "zone_distribution",
    "zone_table",
]
