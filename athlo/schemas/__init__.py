"""Typed records shared by the metrics engine, context assembler and providers."""

from athlo.schemas.athlete import (
    AthleteProfile,
    CheckIn,
    ContextSnapshot,
    NextRace,
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
from athlo.schemas.messages import ChatResponse, ConversationMessage, StreamChunk, TokenUsage
from athlo.schemas.workout import (
    AnalysisResult,
    GeneratedWorkout,
    RepeatBlock,
    StepKind,
    StepTarget,
    WorkoutGenerationParams,
    WorkoutStep,
)

__all__ = [
    "DEFAULT_CONTEXT_WINDOW",
    "MINIMAL_CONTEXT_WINDOW",
    "SHORT_CONTEXT_WINDOW",
    "AnalysisResult",
    "AthleteProfile",
    "ChatResponse",
    "CheckIn",
    "ContextSnapshot",
    "ContextWindow",
    "ConversationMessage",
    "GeneratedWorkout",
    "NextRace",
    "PerformanceMetrics",
    "RepeatBlock",
    "StepKind",
    "StepTarget",
    "StreamChunk",
    "TokenUsage",
    "TrainingPlan",
    "WorkoutGenerationParams",
    "WorkoutRecord",
    "WorkoutStep",
]
