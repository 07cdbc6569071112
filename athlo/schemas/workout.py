"""Structured workout and analysis shapes.

A workout is a tree of steps: a step is either a leaf (a duration at a
target zone) or a repeat block wrapping child steps. Repeat blocks may
nest.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


class StepKind(StrEnum):
    WARMUP = "warmup"
    ACTIVE = "active"
    RECOVERY = "recovery"
    REST = "rest"
    COOLDOWN = "cooldown"
    REPEAT = "repeat"


class StepTarget(BaseModel):
    type: Literal["hr", "power", "pace", "rpe", "open"] = "open"
    zone: int = Field(default=1, ge=1, le=6)
    value: float | None = Field(default=None, description="Absolute target (bpm, watts, s/km) when known")


class RepeatBlock(BaseModel):
    count: int = Field(..., ge=1)
    steps: list[WorkoutStep] = Field(default_factory=list)


class WorkoutStep(BaseModel):
    id: str
    kind: StepKind = StepKind.ACTIVE
    name: str
    duration_s: float = Field(default=0.0, ge=0, description="Leaf duration in seconds; ignored for repeat blocks")
    target: StepTarget = Field(default_factory=StepTarget)
    description: str | None = None
    repeat: RepeatBlock | None = None

    @model_validator(mode="after")
    def check_repeat_kind(self) -> WorkoutStep:
        if self.kind == StepKind.REPEAT and self.repeat is None:
            raise ValueError(f"Step {self.id!r} is a repeat step without a repeat block")
        if self.repeat is not None and self.kind != StepKind.REPEAT:
            raise ValueError(f"Step {self.id!r} has a repeat block but kind={self.kind}")
        return self


RepeatBlock.model_rebuild()


class WorkoutGenerationParams(BaseModel):
    sport: str
    type: Literal["endurance", "interval", "tempo", "recovery", "strength", "race"]
    duration_min: int = Field(..., gt=0)
    intensity: Literal["easy", "moderate", "hard", "recovery"]
    goals: list[str] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    location: Literal["indoor", "outdoor"] | None = None
    conditions: str | None = None


class GeneratedWorkout(BaseModel):
    name: str
    description: str
    duration_min: int = Field(..., ge=0)
    estimated_calories: int = Field(..., ge=0)
    difficulty: int = Field(..., ge=1, le=5)
    equipment: list[str] = Field(default_factory=list)
    warmup: list[WorkoutStep] = Field(default_factory=list)
    main: list[WorkoutStep] = Field(default_factory=list)
    cooldown: list[WorkoutStep] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class AnalysisResult(BaseModel):
    summary: str
    insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0)
    risk_factors: list[str] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
