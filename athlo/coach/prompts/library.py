"""Prompt templates used by the context assembler and coaching providers."""

from athlo.coach.prompts.loader import load_prompt
from athlo.coach.prompts.templates import NOT_SPECIFIED, PromptTemplate

SYSTEM_PROMPT = load_prompt("persona.txt")

WORKOUT_GENERATION_PROMPT = PromptTemplate.from_file(
    "workout_generation.txt",
    {
        "sport": NOT_SPECIFIED,
        "type": NOT_SPECIFIED,
        "duration": NOT_SPECIFIED,
        "intensity": NOT_SPECIFIED,
        "goals": "general fitness",
        "equipment": "none specified",
        "location": "any",
        "conditions": "normal",
    },
)

ANALYSIS_PROMPT = PromptTemplate.from_file(
    "analysis.txt",
    {"analysis_type": "general training", "data": "No data provided"},
)

INSIGHT_EXPLANATION_PROMPT = PromptTemplate.from_file(
    "insight_explanation.txt",
    {"question": NOT_SPECIFIED, "data": "No data provided"},
)

WEEK_ANALYSIS_PROMPT = PromptTemplate.from_file(
    "week_analysis.txt",
    {
        "weekly_load": "N/A",
        "hours": "N/A",
        "workouts": "N/A",
        "compliance": "N/A",
        "daily_data": "No daily data",
        "hrv_data": "No HRV data",
        "subjective_feedback": "None reported",
    },
)

INJURY_RISK_PROMPT = PromptTemplate.from_file(
    "injury_risk.txt",
    {
        "current_load": "N/A",
        "average_load": "N/A",
        "acwr": "N/A",
        "acwr_label": "unknown",
        "hrv_trend": "N/A",
        "sleep_quality": "N/A",
        "readiness": "N/A",
        "high_intensity": "N/A",
        "moderate_intensity": "N/A",
        "low_intensity": "N/A",
        "recent_feedback": "None reported",
    },
)

RACE_PREDICTION_PROMPT = PromptTemplate.from_file(
    "race_prediction.txt",
    {
        "race_distance": NOT_SPECIFIED,
        "race_discipline": "",
        "race_date": NOT_SPECIFIED,
        "race_goal": NOT_SPECIFIED,
        "ctl": "N/A",
        "recent_performance": "None reported",
        "training_volume": "N/A",
        "historical_performance": "No historical data",
        "time_to_race": NOT_SPECIFIED,
        "taper_plan": NOT_SPECIFIED,
    },
)

WORKOUT_FEEDBACK_PROMPT = PromptTemplate.from_file(
    "workout_feedback.txt",
    {
        "planned_workout": NOT_SPECIFIED,
        "completed_workout": NOT_SPECIFIED,
        "rpe": "N/A",
        "feeling": NOT_SPECIFIED,
        "notes": "None",
    },
)

# Context sections, rendered in this order by the context assembler
PROFILE_CONTEXT = PromptTemplate.from_file(
    "context_profile.txt",
    {
        "name": NOT_SPECIFIED,
        "age": NOT_SPECIFIED,
        "sport": NOT_SPECIFIED,
        "experience": NOT_SPECIFIED,
        "goals": NOT_SPECIFIED,
        "training_history": NOT_SPECIFIED,
    },
)

WORKOUTS_CONTEXT = PromptTemplate.from_file(
    "context_workouts.txt",
    {"days": "14", "recent_workouts": "None recorded"},
)

HEALTH_CONTEXT = PromptTemplate.from_file(
    "context_health.txt",
    {"days": "14", "hrv": "N/A", "sleep": "N/A", "readiness": "N/A", "health_issues": "None reported"},
)

PLAN_CONTEXT = PromptTemplate.from_file(
    "context_plan.txt",
    {
        "plan_name": NOT_SPECIFIED,
        "current_phase": NOT_SPECIFIED,
        "weekly_structure": NOT_SPECIFIED,
        "key_sessions": NOT_SPECIFIED,
        "next_race": "None scheduled",
    },
)

METRICS_CONTEXT = PromptTemplate.from_file(
    "context_metrics.txt",
    {"ctl": "N/A", "atl": "N/A", "tsb": "N/A", "recent_prs": "None recent"},
)

PROMPT_CHIPS = (
    "How am I progressing?",
    "Am I training too hard?",
    "What should I focus on?",
    "Explain my HRV trend",
    "Generate tomorrow's workout",
    "How ready am I to race?",
    "What's my injury risk?",
    "Why am I feeling tired?",
    "Optimize my training plan",
    "Compare to last month",
)
