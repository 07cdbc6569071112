"""Tests for planned workout load: step TSS, nested repeats and IF."""

import pytest

from athlo.metrics.workout_load import (
    CYCLING_ZONES,
    RUNNING_ZONES,
    SWIMMING_ZONES,
    aggregate_steps,
    intensity_factor,
    step_tss,
    summarize_steps,
    zone_distribution,
    zone_table,
)
from athlo.schemas.workout import RepeatBlock, StepKind, StepTarget, WorkoutStep


def _leaf(step_id: str, seconds: float, zone: int) -> WorkoutStep:
    return WorkoutStep(id=step_id, name=step_id, duration_s=seconds, target=StepTarget(type="hr", zone=zone))


def _repeat(step_id: str, count: int, steps: list[WorkoutStep]) -> WorkoutStep:
    return WorkoutStep(id=step_id, kind=StepKind.REPEAT, name=step_id, repeat=RepeatBlock(count=count, steps=steps))


def test_one_hour_at_threshold_running():
    assert step_tss(3600, 4, RUNNING_ZONES) == pytest.approx(96.0)


@pytest.mark.parametrize("zone", [0, 7])
def test_zone_out_of_range_raises(zone):
    with pytest.raises(ValueError, match="zone"):
        step_tss(600, zone, RUNNING_ZONES)


@pytest.mark.parametrize(
    ("sport", "expected"),
    [
        ("running", RUNNING_ZONES),
        ("Run", RUNNING_ZONES),
        ("cycling", CYCLING_ZONES),
        ("bike", CYCLING_ZONES),
        ("ride", CYCLING_ZONES),
        ("Swimming", SWIMMING_ZONES),
        ("rowing", RUNNING_ZONES),
    ],
)
def test_zone_table_lookup(sport, expected):
    assert zone_table(sport) == expected


def test_tables_increase_with_zone():
    for table in (RUNNING_ZONES, CYCLING_ZONES, SWIMMING_ZONES):
        assert list(table) == sorted(table)


def test_repeat_multiplies_children():
    interval = _repeat("5x", 5, [_leaf("on", 180, 5), _leaf("off", 60, 1)])

    totals = aggregate_steps([interval], RUNNING_ZONES)

    assert totals.duration_s == 5 * 240
    expected = 5 * (step_tss(180, 5, RUNNING_ZONES) + step_tss(60, 1, RUNNING_ZONES))
    assert totals.tss == pytest.approx(expected)


def test_nested_repeats_compose_multiplicatively():
    inner = _repeat("3x", 3, [_leaf("on", 60, 5), _leaf("off", 60, 1)])
    outer = _repeat("4x", 4, [inner])

    totals = aggregate_steps([outer], RUNNING_ZONES)

    assert totals.duration_s == 12 * 120
    assert totals.zone_seconds == {5: 720, 1: 720}
    expected = 12 * (step_tss(60, 5, RUNNING_ZONES) + step_tss(60, 1, RUNNING_ZONES))
    assert totals.tss == pytest.approx(expected)


def test_intensity_factor_of_threshold_hour():
    assert intensity_factor(96.0, 3600) == 0.98


def test_intensity_factor_zero_duration():
    assert intensity_factor(0.0, 0.0) == 0.0


def test_zone_distribution_percentages():
    assert zone_distribution({4: 1800, 1: 600}) == {1: 25.0, 4: 75.0}


def test_zone_distribution_empty():
    assert zone_distribution({}) == {}


def test_summarize_steps_whole_session():
    steps = [
        _leaf("warmup", 600, 1),
        _repeat("4x", 4, [_leaf("on", 240, 4), _leaf("off", 120, 1)]),
        _leaf("cooldown", 600, 1),
    ]

    summary = summarize_steps(steps, "cycling")

    assert summary["duration_s"] == 600 + 4 * 360 + 600
    assert summary["zone_distribution"] == {1: 63.6, 4: 36.4}
    assert 0 < summary["intensity_factor"] < 1
    expected_tss = (1680 / 3600) * 100 * CYCLING_ZONES[0] + (960 / 3600) * 100 * CYCLING_ZONES[3]
    assert summary["tss"] == round(expected_tss, 1)


def test_summarize_no_steps():
    summary = summarize_steps([], "running")

    assert summary == {"duration_s": 0.0, "tss": 0.0, "intensity_factor": 0.0, "zone_distribution": {}}
