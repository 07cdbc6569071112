"""Athlete context assembly for coaching prompts.

This module turns a ContextSnapshot into the text block that is passed to
a coaching provider alongside the conversation:

- build_context: full multi-section context
- build_summary: one-line digest
- estimate_tokens: coarse token estimate of the full context
- optimize_for_token_limit: context degraded step by step to fit a budget

Core invariant: sections always appear in the order profile, workouts,
check-ins, plan, metrics. A section appears only when its window flag is
set and it has data. An empty snapshot yields an empty string.

No hidden state. The assembler never mutates its snapshot.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import date, timedelta
from typing import TypeVar

from loguru import logger

from athlo.coach.prompts.library import (
    HEALTH_CONTEXT,
    METRICS_CONTEXT,
    PLAN_CONTEXT,
    PROFILE_CONTEXT,
    WORKOUTS_CONTEXT,
)
from athlo.core.token_counting import estimate_tokens
from athlo.schemas.athlete import (
    AthleteProfile,
    CheckIn,
    ContextSnapshot,
    PerformanceMetrics,
    TrainingPlan,
    WorkoutRecord,
)
from athlo.schemas.context_window import DEFAULT_CONTEXT_WINDOW, ContextWindow

SECTION_SEPARATOR = "\n\n"
SUMMARY_DELIMITER = " | "
HEALTH_ISSUE_KEYWORDS = ("injury", "sick", "pain")

DatedRecord = TypeVar("DatedRecord", WorkoutRecord, CheckIn)


def _average(values: Iterable[float | None]) -> float | None:
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def _fmt(value: float | None, decimals: int) -> str | None:
    if value is None:
        return None
    return f"{value:.{decimals}f}"


def _num(value: float) -> str:
    return f"{value:g}"


def filter_by_days(records: Sequence[DatedRecord], days: int, today: date) -> list[DatedRecord]:
    """Keep records dated on or after today - days, newest first."""
    cutoff = today - timedelta(days=days)
    kept = [r for r in records if r.date >= cutoff]
    return sorted(kept, key=lambda r: r.date, reverse=True)


def _workout_line(workout: WorkoutRecord) -> str:
    status = "✓" if workout.completed else "✗"
    line = f"{status} {workout.date.isoformat()}: {workout.type} {workout.sport} - {_num(workout.duration_min)}min"
    if workout.rpe is not None:
        line += f" (RPE: {workout.rpe})"
    if workout.tss is not None:
        line += f" (TSS: {_num(workout.tss)})"
    return line


def _check_in_line(check_in: CheckIn) -> str:
    parts: list[str] = []
    if check_in.hrv is not None:
        parts.append(f"HRV {_num(check_in.hrv)}")
    if check_in.sleep_hours is not None:
        parts.append(f"sleep {_num(check_in.sleep_hours)}h")
    if check_in.readiness is not None:
        parts.append(f"readiness {_num(check_in.readiness)}/10")
    line = f"- {check_in.date.isoformat()}"
    return f"{line}: {', '.join(parts)}" if parts else line


def _is_health_issue(notes: str | None) -> bool:
    if not notes:
        return False
    lowered = notes.lower()
    return any(keyword in lowered for keyword in HEALTH_ISSUE_KEYWORDS)


def render_profile(profile: AthleteProfile) -> str:
    return PROFILE_CONTEXT.render(
        name=profile.name,
        age=profile.age,
        sport=profile.sport,
        experience=profile.experience,
        goals=profile.goals,
        training_history=profile.training_history,
    )


def render_workouts(workouts: Sequence[WorkoutRecord], days: int) -> str:
    return WORKOUTS_CONTEXT.render(
        days=days,
        recent_workouts="\n".join(_workout_line(w) for w in workouts),
    )


def render_check_ins(check_ins: Sequence[CheckIn], days: int) -> str:
    health_issues = [f"{c.date.isoformat()}: {c.notes}" for c in check_ins if _is_health_issue(c.notes)]
    section = HEALTH_CONTEXT.render(
        days=days,
        hrv=_fmt(_average(c.hrv for c in check_ins), 0),
        sleep=_fmt(_average(c.sleep_hours for c in check_ins), 1),
        readiness=_fmt(_average(c.readiness for c in check_ins), 1),
        health_issues=health_issues,
    )
    return section + "\n" + "\n".join(_check_in_line(c) for c in check_ins)


def render_plan(plan: TrainingPlan) -> str:
    next_race = None
    if plan.next_race is not None:
        race = plan.next_race
        next_race = f"{race.name} ({race.date.isoformat()}) - {race.distance}"
    return PLAN_CONTEXT.render(
        plan_name=plan.name,
        current_phase=plan.current_phase,
        weekly_structure=plan.weekly_structure,
        key_sessions=plan.key_sessions,
        next_race=next_race,
    )


def render_metrics(metrics: PerformanceMetrics) -> str:
    return METRICS_CONTEXT.render(
        ctl=_num(metrics.ctl),
        atl=_num(metrics.atl),
        tsb=_num(metrics.tsb),
        recent_prs=metrics.recent_prs,
    )


class ContextAssembler:
    """Builds coaching context text from an athlete snapshot.

    Args:
        snapshot: Athlete telemetry; defaults to an empty snapshot
        today: Reference date for day-window filtering; defaults to the
            current date at call time
    """

    def __init__(self, snapshot: ContextSnapshot | None = None, today: date | None = None) -> None:
        self.snapshot = snapshot if snapshot is not None else ContextSnapshot()
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _with(self, **update: object) -> ContextAssembler:
        return ContextAssembler(self.snapshot.model_copy(update=update), self._today)

    def with_profile(self, profile: AthleteProfile) -> ContextAssembler:
        return self._with(profile=profile)

    def with_workouts(self, workouts: Sequence[WorkoutRecord]) -> ContextAssembler:
        return self._with(recent_workouts=list(workouts))

    def with_check_ins(self, check_ins: Sequence[CheckIn]) -> ContextAssembler:
        return self._with(recent_check_ins=list(check_ins))

    def with_plan(self, plan: TrainingPlan) -> ContextAssembler:
        return self._with(training_plan=plan)

    def with_metrics(self, metrics: PerformanceMetrics) -> ContextAssembler:
        return self._with(metrics=metrics)

    def workouts_in_window(self, window: ContextWindow) -> list[WorkoutRecord]:
        return filter_by_days(self.snapshot.recent_workouts, window.days, self.today)

    def check_ins_in_window(self, window: ContextWindow) -> list[CheckIn]:
        return filter_by_days(self.snapshot.recent_check_ins, window.days, self.today)

    def build_context(self, window: ContextWindow = DEFAULT_CONTEXT_WINDOW) -> str:
        """Render every included, non-empty section in fixed order."""
        snapshot = self.snapshot
        parts: list[str] = []

        if window.include_profile and snapshot.profile is not None:
            parts.append(render_profile(snapshot.profile))

        if window.include_workouts:
            workouts = self.workouts_in_window(window)
            if workouts:
                parts.append(render_workouts(workouts, window.days))

        if window.include_check_ins:
            check_ins = self.check_ins_in_window(window)
            if check_ins:
                parts.append(render_check_ins(check_ins, window.days))

        if window.include_plan and snapshot.training_plan is not None:
            parts.append(render_plan(snapshot.training_plan))

        if window.include_metrics and snapshot.metrics is not None:
            parts.append(render_metrics(snapshot.metrics))

        return SECTION_SEPARATOR.join(parts)

    def build_summary(self, window: ContextWindow = DEFAULT_CONTEXT_WINDOW) -> str:
        """Condensed one-line digest of the window, clauses joined by ' | '."""
        clauses: list[str] = []
        profile = self.snapshot.profile

        if window.include_profile and profile is not None:
            clauses.append(f"Athlete: {profile.name} ({profile.sport})")

        if window.include_workouts:
            workouts = self.workouts_in_window(window)
            if workouts:
                hours = sum(w.duration_min for w in workouts) / 60.0
                avg_tss = _fmt(_average(w.tss for w in workouts), 0) or "N/A"
                clauses.append(f"Last {window.days} days: {len(workouts)} workouts, {hours:.1f}h, avg TSS {avg_tss}")

        if window.include_check_ins:
            check_ins = self.check_ins_in_window(window)
            if check_ins:
                avg_readiness = _fmt(_average(c.readiness for c in check_ins), 1) or "N/A"
                avg_hrv = _fmt(_average(c.hrv for c in check_ins), 0) or "N/A"
                clauses.append(f"Recovery: Readiness {avg_readiness}/10, HRV {avg_hrv}")

        return SUMMARY_DELIMITER.join(clauses)

    def estimate_tokens(self, window: ContextWindow = DEFAULT_CONTEXT_WINDOW) -> int:
        return estimate_tokens(self.build_context(window))

    def degradation_steps(
        self,
        max_tokens: int,
        window: ContextWindow = DEFAULT_CONTEXT_WINDOW,
    ) -> list[tuple[ContextWindow, int]]:
        """Walk the degradation order and return every window tried.

        Order: shrink the day window one day at a time down to 1, then drop
        workouts, then drop check-ins. Profile, plan and metrics are never
        dropped. Stops as soon as the estimate fits the budget.

        Returns:
            (window, estimated tokens) for the starting window and each step
        """
        current = window
        tokens = self.estimate_tokens(current)
        steps = [(current, tokens)]

        while tokens > max_tokens:
            if current.days > 1:
                current = replace(current, days=current.days - 1)
            elif current.include_workouts:
                current = replace(current, include_workouts=False)
            elif current.include_check_ins:
                current = replace(current, include_check_ins=False)
            else:
                logger.debug(f"Context still at {tokens} tokens after full degradation (budget {max_tokens})")
                break
            tokens = self.estimate_tokens(current)
            steps.append((current, tokens))
            logger.debug(f"Context degraded to days={current.days} workouts={current.include_workouts} check_ins={current.include_check_ins}: {tokens} tokens")

        return steps

    def optimize_for_token_limit(
        self,
        max_tokens: int,
        window: ContextWindow = DEFAULT_CONTEXT_WINDOW,
    ) -> str:
        """Best-effort context within max_tokens.

        Never raises; may still exceed the budget when profile, plan and
        metrics alone are larger than it.
        """
        final_window, tokens = self.degradation_steps(max_tokens, window)[-1]
        if tokens > max_tokens:
            logger.warning(f"Context exceeds token budget after degradation: {tokens} > {max_tokens}")
        return self.build_context(final_window)
