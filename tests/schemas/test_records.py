"""Validation tests for athlete records and workout steps."""

from datetime import date

import pytest
from pydantic import ValidationError

from athlo.schemas.athlete import AthleteProfile, CheckIn, ContextSnapshot, WorkoutRecord
from athlo.schemas.messages import ChatResponse, ConversationMessage
from athlo.schemas.workout import RepeatBlock, StepKind, WorkoutStep


@pytest.mark.parametrize("field", ["sleep_quality", "stress", "motivation", "mood"])
@pytest.mark.parametrize("value", [0, 11])
def test_check_in_scales_are_bounded(field, value):
    with pytest.raises(ValidationError):
        CheckIn(date=date(2025, 1, 1), **{field: value})


def test_check_in_allows_missing_values():
    check_in = CheckIn(date=date(2025, 1, 1))

    assert check_in.hrv is None
    assert check_in.readiness is None


def test_workout_rpe_bounds():
    with pytest.raises(ValidationError):
        WorkoutRecord(id="w", date=date(2025, 1, 1), sport="Running", type="Easy", duration_min=30, rpe=11)


def test_records_are_immutable():
    profile = AthleteProfile(id="a", name="Lee", sport="Running")

    with pytest.raises(ValidationError):
        profile.name = "Other"


def test_empty_snapshot_is_legal():
    snapshot = ContextSnapshot()

    assert snapshot.profile is None
    assert snapshot.recent_workouts == []


def test_repeat_kind_requires_block():
    with pytest.raises(ValidationError, match="without a repeat block"):
        WorkoutStep(id="r", kind=StepKind.REPEAT, name="Set")


def test_block_requires_repeat_kind():
    with pytest.raises(ValidationError, match="has a repeat block"):
        WorkoutStep(id="r", name="Set", repeat=RepeatBlock(count=2))


def test_repeat_count_must_be_positive():
    with pytest.raises(ValidationError):
        RepeatBlock(count=0)


def test_message_wire_shape():
    message = ConversationMessage(role="assistant", content="Rest today", metadata={"source": "coach"})

    assert message.to_wire() == {"role": "assistant", "content": "Rest today"}


def test_degraded_flag_reads_metadata():
    assert ChatResponse(content="x", metadata={"mock": True}).is_degraded
    assert not ChatResponse(content="x").is_degraded
