"""Tests for athlete context assembly and token-budget degradation."""

from dataclasses import replace
from datetime import date, timedelta

import pytest

from athlo.coach.context_builder import ContextAssembler, filter_by_days
from athlo.coach.errors import ContextValidationError
from athlo.schemas.athlete import (
    AthleteProfile,
    CheckIn,
    ContextSnapshot,
    PerformanceMetrics,
    TrainingPlan,
    WorkoutRecord,
)
from athlo.schemas.context_window import (
    DEFAULT_CONTEXT_WINDOW,
    MINIMAL_CONTEXT_WINDOW,
    SHORT_CONTEXT_WINDOW,
    ContextWindow,
)

SECTION_HEADINGS = [
    "**Athlete Profile:**",
    "**Recent Workouts",
    "**Health & Recovery:**",
    "**Current Training Plan:**",
    "**Performance Trends:**",
]


def _workout(workout_id: str, day: date, **overrides) -> WorkoutRecord:
    values = {
        "id": workout_id,
        "date": day,
        "sport": "Running",
        "type": "Easy Run",
        "duration_min": 45,
        "tss": 35,
        "completed": True,
    }
    values.update(overrides)
    return WorkoutRecord(**values)


def _busy_snapshot(today: date, days: int = 14) -> ContextSnapshot:
    """One workout and one check-in on every day of the window."""
    return ContextSnapshot(
        profile=AthleteProfile(id="a1", name="Ana", sport="Cycling", goals=["Gran fondo"]),
        recent_workouts=[
            _workout(f"w{i}", today - timedelta(days=i), type="Endurance Ride", rpe=5, notes="Felt fine")
            for i in range(days + 1)
        ],
        recent_check_ins=[
            CheckIn(date=today - timedelta(days=i), hrv=50 + i, sleep_hours=7.0, readiness=7)
            for i in range(days + 1)
        ],
        training_plan=TrainingPlan(id="p1", name="Base", current_phase="Base 2", weekly_structure="5 rides"),
        metrics=PerformanceMetrics(ctl=60, atl=55, tsb=5),
    )


def _positions(text: str) -> list[int]:
    return [text.index(heading) for heading in SECTION_HEADINGS if heading in text]


def test_empty_snapshot_yields_empty_context(today):
    assembler = ContextAssembler(ContextSnapshot(), today=today)

    assert assembler.build_context() == ""
    assert assembler.build_summary() == ""
    assert assembler.estimate_tokens() == 0


def test_only_workouts_inside_window_are_listed(today):
    snapshot = ContextSnapshot(
        recent_workouts=[
            _workout("recent", today),
            _workout("old", today - timedelta(days=20), type="Long Run"),
        ]
    )

    text = ContextAssembler(snapshot, today=today).build_context(ContextWindow(days=14))

    workout_lines = [line for line in text.splitlines() if line.startswith(("✓", "✗"))]
    assert len(workout_lines) == 1
    assert "Easy Run Running - 45min (TSS: 35)" in workout_lines[0]
    assert "Long Run" not in text


def test_window_boundary_date_is_included(today):
    boundary = today - timedelta(days=7)
    records = [_workout("edge", boundary), _workout("outside", boundary - timedelta(days=1))]

    kept = filter_by_days(records, 7, today)

    assert [w.id for w in kept] == ["edge"]


def test_filtered_records_are_newest_first(today):
    records = [_workout("a", today - timedelta(days=3)), _workout("b", today), _workout("c", today - timedelta(days=1))]

    assert [w.id for w in filter_by_days(records, 14, today)] == ["b", "c", "a"]


def test_full_context_section_order(sample_snapshot, today):
    text = ContextAssembler(sample_snapshot, today=today).build_context()

    positions = _positions(text)
    assert len(positions) == 5
    assert positions == sorted(positions)


@pytest.mark.parametrize(
    "window",
    [
        ContextWindow(include_workouts=False),
        ContextWindow(include_profile=False, include_plan=False),
        ContextWindow(include_check_ins=False, include_metrics=False),
        SHORT_CONTEXT_WINDOW,
    ],
)
def test_section_order_preserved_when_sections_skipped(sample_snapshot, today, window):
    text = ContextAssembler(sample_snapshot, today=today).build_context(window)

    positions = _positions(text)
    assert positions == sorted(positions)
    assert ("**Athlete Profile:**" in text) == window.include_profile
    assert ("**Current Training Plan:**" in text) == window.include_plan


def test_minimal_window_has_profile_only(sample_snapshot, today):
    text = ContextAssembler(sample_snapshot, today=today).build_context(MINIMAL_CONTEXT_WINDOW)

    assert text.startswith("**Athlete Profile:**")
    assert "- Name: John Doe" in text
    assert "- Current Goals: Sub-3 marathon, Stay injury-free" in text
    assert "**Recent Workouts" not in text


def test_missing_profile_fields_render_defaults(today):
    snapshot = ContextSnapshot(profile=AthleteProfile(id="a1", name="Sam", sport="Swimming"))

    text = ContextAssembler(snapshot, today=today).build_context()

    assert "- Age: Not specified" in text
    assert "- Current Goals: Not specified" in text
    assert "{" not in text


def test_health_section_averages_and_issues(today):
    snapshot = ContextSnapshot(
        recent_check_ins=[
            CheckIn(date=today, hrv=40, sleep_hours=7.0, readiness=6),
            CheckIn(date=today - timedelta(days=1), hrv=50, sleep_hours=8.0, readiness=8, notes="Calf pain after hills"),
        ]
    )

    text = ContextAssembler(snapshot, today=today).build_context()

    assert "- HRV (14-day avg): 45" in text
    assert "- Sleep (14-day avg): 7.5 hours" in text
    assert "- Readiness Score: 7.0/10" in text
    assert "Calf pain after hills" in text


def test_health_section_without_issues(sample_snapshot, today):
    text = ContextAssembler(sample_snapshot, today=today).build_context()

    assert "- Recent Illness/Injury: None reported" in text


def test_summary_line(sample_snapshot, today):
    summary = ContextAssembler(sample_snapshot, today=today).build_summary()

    assert summary == (
        "Athlete: John Doe (Running) | "
        "Last 14 days: 2 workouts, 1.8h, avg TSS 55 | "
        "Recovery: Readiness 7.0/10, HRV 45"
    )


def test_summary_honours_window_flags(sample_snapshot, today):
    summary = ContextAssembler(sample_snapshot, today=today).build_summary(MINIMAL_CONTEXT_WINDOW)

    assert summary == "Athlete: John Doe (Running)"


def test_fluent_setters_return_new_assembler(today):
    base = ContextAssembler(today=today)
    profile = AthleteProfile(id="a1", name="Kim", sport="Triathlon")

    updated = base.with_profile(profile).with_workouts([_workout("w1", today)])

    assert base.build_context() == ""
    assert "- Name: Kim" in updated.build_context()
    assert updated.snapshot.recent_workouts[0].id == "w1"


@pytest.mark.parametrize("days", [0, -3])
def test_non_positive_days_rejected(days):
    with pytest.raises(ContextValidationError):
        ContextWindow(days=days)


def test_non_integer_days_rejected():
    with pytest.raises(ContextValidationError):
        ContextWindow(days=2.5)


def test_context_window_validation_error_is_value_error():
    with pytest.raises(ValueError):
        replace(DEFAULT_CONTEXT_WINDOW, days=0)


def test_estimate_is_ceil_of_quarter_length(sample_snapshot, today):
    assembler = ContextAssembler(sample_snapshot, today=today)
    text = assembler.build_context()

    assert assembler.estimate_tokens() == -(-len(text) // 4)


def test_within_budget_returns_full_context(sample_snapshot, today):
    assembler = ContextAssembler(sample_snapshot, today=today)

    assert assembler.optimize_for_token_limit(10_000) == assembler.build_context()


def test_degradation_is_monotonic_and_bounded(today):
    assembler = ContextAssembler(_busy_snapshot(today), today=today)
    window = ContextWindow(days=14)

    steps = assembler.degradation_steps(1, window)

    tokens = [t for _, t in steps]
    assert tokens == sorted(tokens, reverse=True)
    # steps includes the starting window
    assert len(steps) - 1 <= (window.days - 1) + 2
    final_window = steps[-1][0]
    assert final_window.days == 1
    assert not final_window.include_workouts
    assert not final_window.include_check_ins


def test_degradation_keeps_profile_plan_and_metrics(today):
    assembler = ContextAssembler(_busy_snapshot(today), today=today)

    text = assembler.optimize_for_token_limit(1)

    assert "**Athlete Profile:**" in text
    assert "**Current Training Plan:**" in text
    assert "**Performance Trends:**" in text
    assert "**Recent Workouts" not in text
    assert "**Health & Recovery:**" not in text


def test_degradation_stops_once_within_budget(today):
    assembler = ContextAssembler(_busy_snapshot(today), today=today)
    full = assembler.estimate_tokens()

    steps = assembler.degradation_steps(full - 1)

    assert steps[-1][1] <= full - 1
    assert steps[-1][0].include_workouts
