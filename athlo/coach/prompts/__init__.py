"""Prompt texts and the placeholder formatter that renders them."""

from athlo.coach.prompts.library import (
    ANALYSIS_PROMPT,
    INJURY_RISK_PROMPT,
    INSIGHT_EXPLANATION_PROMPT,
    PROMPT_CHIPS,
    RACE_PREDICTION_PROMPT,
    SYSTEM_PROMPT,
    WEEK_ANALYSIS_PROMPT,
    WORKOUT_FEEDBACK_PROMPT,
    WORKOUT_GENERATION_PROMPT,
)
from athlo.coach.prompts.templates import PromptTemplate

__all__ = [
    "ANALYSIS_PROMPT",
    "INJURY_RISK_PROMPT",
    "INSIGHT_EXPLANATION_PROMPT",
    "PROMPT_CHIPS",
    "RACE_PREDICTION_PROMPT",
    "SYSTEM_PROMPT",
    "WEEK_ANALYSIS_PROMPT",
    "WORKOUT_FEEDBACK_PROMPT",
    "WORKOUT_GENERATION_PROMPT",
    "PromptTemplate",
]
