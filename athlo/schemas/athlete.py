"""Athlete telemetry records consumed by the context assembler.

These are read-only snapshots produced by the persistence layer. Every
1-10 scale is validated here, at construction, so consumers never clamp.
All fields except identity are optional: absence means "unknown".
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class AthleteProfile(BaseModel):
    """Who the athlete is. One immutable snapshot per request."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    sport: str
    age: int | None = Field(default=None, ge=0, le=120)
    experience: str | None = None
    goals: list[str] = Field(default_factory=list)
    training_history: str | None = None


class WorkoutRecord(BaseModel):
    """One historical or planned training session."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: date
    sport: str
    type: str
    duration_min: float = Field(..., ge=0, description="Duration in minutes")
    intensity: str | None = None
    tss: float | None = Field(default=None, ge=0, description="Training stress score")
    rpe: int | None = Field(default=None, ge=1, le=10, description="Perceived exertion")
    notes: str | None = None
    completed: bool = False


class CheckIn(BaseModel):
    """Daily wellness check-in. Conceptually unique per athlete per date."""

    model_config = ConfigDict(frozen=True)

    date: date
    hrv: float | None = Field(default=None, ge=0)
    sleep_hours: float | None = Field(default=None, ge=0, le=24)
    sleep_quality: int | None = Field(default=None, ge=1, le=10)
    stress: int | None = Field(default=None, ge=1, le=10)
    motivation: int | None = Field(default=None, ge=1, le=10)
    mood: int | None = Field(default=None, ge=1, le=10)
    readiness: float | None = Field(default=None, ge=1, le=10)
    notes: str | None = None


class NextRace(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    date: date
    distance: str


class TrainingPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    current_phase: str
    weekly_structure: str
    key_sessions: list[str] = Field(default_factory=list)
    next_race: NextRace | None = None


class PerformanceMetrics(BaseModel):
    """Longer-horizon load indicators."""

    model_config = ConfigDict(frozen=True)

    ctl: float  # Chronic Training Load (42-day EWMA)
    atl: float  # Acute Training Load (7-day EWMA)
    tsb: float  # Training Stress Balance (CTL - ATL)
    recent_prs: list[str] = Field(default_factory=list)


class ContextSnapshot(BaseModel):
    """Everything the coach may know about an athlete for one request.

    Any part may be missing; an entirely empty snapshot is valid.
    """

    model_config = ConfigDict(frozen=True)

    profile: AthleteProfile | None = None
    recent_workouts: list[WorkoutRecord] = Field(default_factory=list)
    recent_check_ins: list[CheckIn] = Field(default_factory=list)
    training_plan: TrainingPlan | None = None
    metrics: PerformanceMetrics | None = None
