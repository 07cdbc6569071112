"""Demonstration athlete used by the CLI and in documentation."""

from datetime import date, timedelta

from athlo.schemas.athlete import (
    AthleteProfile,
    CheckIn,
    ContextSnapshot,
    NextRace,
    PerformanceMetrics,
    TrainingPlan,
    WorkoutRecord,
)


def create_sample_snapshot(today: date | None = None) -> ContextSnapshot:
    """Snapshot of a marathon runner in a build phase, dated relative to today."""
    today = today or date.today()
    return ContextSnapshot(
        profile=AthleteProfile(
            id="user_1",
            name="John Doe",
            age=32,
            sport="Running",
            experience="5 years",
            goals=["Sub-3 marathon", "Stay injury-free"],
            training_history="Consistent runner with 3 marathons completed",
        ),
        recent_workouts=[
            WorkoutRecord(
                id="w1",
                date=today,
                sport="Running",
                type="Easy Run",
                duration_min=45,
                intensity="easy",
                tss=35,
                rpe=6,
                completed=True,
            ),
            WorkoutRecord(
                id="w2",
                date=today - timedelta(days=1),
                sport="Running",
                type="Interval Training",
                duration_min=60,
                intensity="hard",
                tss=75,
                rpe=8,
                completed=True,
            ),
        ],
        recent_check_ins=[
            CheckIn(
                date=today,
                hrv=45,
                sleep_hours=7.5,
                sleep_quality=8,
                stress=4,
                motivation=8,
                mood=7,
                readiness=7,
            ),
        ],
        training_plan=TrainingPlan(
            id="plan_1",
            name="Marathon Training",
            current_phase="Build Phase",
            weekly_structure="6 days/week with long run on Sunday",
            key_sessions=["Long Run", "Tempo Run", "Intervals"],
            next_race=NextRace(name="City Marathon", date=today + timedelta(days=120), distance="42.2K"),
        ),
        metrics=PerformanceMetrics(ctl=65, atl=70, tsb=-5, recent_prs=["5K: 19:45", "10K: 41:30"]),
    )
