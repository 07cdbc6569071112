"""Deterministic fallbacks used when no live backend answers.

The synthesized workout is always duration-consistent: warmup, main and
cooldown add up to exactly the requested minutes. Interval sessions get a
repeat block so the structure matches what a live backend would return.
"""

from loguru import logger

from athlo.metrics.workout_load import summarize_steps
from athlo.schemas.workout import (
    AnalysisResult,
    GeneratedWorkout,
    RepeatBlock,
    StepKind,
    StepTarget,
    WorkoutGenerationParams,
    WorkoutStep,
)

WARMUP_FRACTION = 0.15
COOLDOWN_FRACTION = 0.15
CALORIES_PER_MINUTE = 8
FALLBACK_ANALYSIS_CONFIDENCE = 0.7

# Interval work/recovery pattern, minutes
INTERVAL_WORK_MIN = 3
INTERVAL_RECOVERY_MIN = 1

_INTENSITY_ZONE = {"recovery": 1, "easy": 2, "moderate": 3, "hard": 4}
_DIFFICULTY = {"hard": 4, "moderate": 3}

FALLBACK_TIPS = [
    "Stay hydrated throughout the workout",
    "Listen to your body and adjust intensity as needed",
    "Focus on proper form",
]


def split_duration(total_min: int) -> tuple[int, int, int]:
    """Split a session into (warmup, main, cooldown) minutes.

    Warmup and cooldown are each about 15% of the total; main takes the
    rest and is at least 1 minute. The three always sum to total_min.
    """
    warmup = round(total_min * WARMUP_FRACTION)
    cooldown = round(total_min * COOLDOWN_FRACTION)
    main = total_min - warmup - cooldown
    if main < 1:
        warmup, cooldown, main = 0, 0, total_min
    return warmup, main, cooldown


def _step(step_id: str, kind: StepKind, name: str, minutes: int, zone: int, description: str) -> WorkoutStep:
    return WorkoutStep(
        id=step_id,
        kind=kind,
        name=name,
        duration_s=minutes * 60,
        target=StepTarget(type="hr", zone=zone),
        description=description,
    )


def _main_set(params: WorkoutGenerationParams, minutes: int) -> list[WorkoutStep]:
    zone = _INTENSITY_ZONE[params.intensity]
    block = INTERVAL_WORK_MIN + INTERVAL_RECOVERY_MIN
    reps = minutes // block

    if params.type != "interval" or reps < 2:
        return [_step("main_1", StepKind.ACTIVE, "Main set", minutes, zone, f"{params.type} work at {params.intensity} intensity")]

    steps = [
        WorkoutStep(
            id="main_1",
            kind=StepKind.REPEAT,
            name=f"{reps} x {INTERVAL_WORK_MIN} min",
            repeat=RepeatBlock(
                count=reps,
                steps=[
                    _step("main_1_work", StepKind.ACTIVE, "Interval", INTERVAL_WORK_MIN, min(zone + 1, 6), "Hard, controlled effort"),
                    _step("main_1_recovery", StepKind.RECOVERY, "Recovery", INTERVAL_RECOVERY_MIN, 1, "Easy jog or spin"),
                ],
            ),
        )
    ]
    remainder = minutes - reps * block
    if remainder > 0:
        steps.append(_step("main_2", StepKind.ACTIVE, "Steady", remainder, 2, "Steady aerobic effort"))
    return steps


def synthesize_workout(params: WorkoutGenerationParams) -> GeneratedWorkout:
    """Build a plausible workout from the request alone."""
    warmup_min, main_min, cooldown_min = split_duration(params.duration_min)

    warmup = [_step("warmup_1", StepKind.WARMUP, "Easy warmup", warmup_min, 1, "Gradual warmup to prepare for main workout")] if warmup_min else []
    cooldown = [_step("cooldown_1", StepKind.COOLDOWN, "Cool down", cooldown_min, 1, "Easy pace to cool down")] if cooldown_min else []
    main = _main_set(params, main_min)

    load = summarize_steps([*warmup, *main, *cooldown], params.sport)
    logger.debug(f"Synthesized {params.duration_min} min {params.type} workout: TSS {load['tss']}, IF {load['intensity_factor']}")

    return GeneratedWorkout(
        name=f"{params.type.capitalize()} {params.sport} Workout",
        description=f"A {params.intensity} {params.type} workout for {params.sport}",
        duration_min=params.duration_min,
        estimated_calories=params.duration_min * CALORIES_PER_MINUTE,
        difficulty=_DIFFICULTY.get(params.intensity, 2),
        equipment=list(params.equipment),
        warmup=warmup,
        main=main,
        cooldown=cooldown,
        tips=list(FALLBACK_TIPS),
        metadata={
            "mock": True,
            "estimated_tss": load["tss"],
            "intensity_factor": load["intensity_factor"],
        },
    )


def fallback_analysis(analysis_type: str) -> AnalysisResult:
    return AnalysisResult(
        summary=f"Analysis of {analysis_type} shows positive trends with areas for improvement.",
        insights=[
            "Training load is within optimal range",
            "Recovery patterns are consistent",
            "Performance is trending upward",
        ],
        recommendations=[
            "Continue current training approach",
            "Add variation to prevent monotony",
            "Monitor recovery closely",
        ],
        confidence=FALLBACK_ANALYSIS_CONFIDENCE,
        metadata={"mock": True},
    )
