"""Tests for single-pass prompt template rendering."""

import pytest

from athlo.coach.prompts import library
from athlo.coach.prompts.loader import load_prompt
from athlo.coach.prompts.templates import PLACEHOLDER_PATTERN, PromptTemplate, render_value
from athlo.metrics.training_load import acwr_band


def _all_templates() -> list[PromptTemplate]:
    return [value for value in vars(library).values() if isinstance(value, PromptTemplate)]


def test_library_templates_declare_every_default():
    templates = _all_templates()

    assert len(templates) >= 12
    for template in templates:
        assert template.placeholders <= set(template.defaults)


@pytest.mark.parametrize("template", _all_templates(), ids=lambda t: t.name)
def test_rendering_with_no_values_leaves_no_placeholder(template):
    assert PLACEHOLDER_PATTERN.search(template.render()) is None


def test_missing_default_rejected_at_construction():
    with pytest.raises(ValueError, match="without defaults"):
        PromptTemplate(name="broken", text="Hello {name}, today is {day}", defaults={"name": "athlete"})


def test_values_are_substituted_once():
    template = PromptTemplate(name="t", text="{a} then {b}", defaults={"a": "A", "b": "B"})

    assert template.render(a="{b}") == "{b} then B"


def test_blank_and_none_values_fall_back_to_defaults():
    template = PromptTemplate(name="t", text="{a}|{b}|{c}", defaults={"a": "A", "b": "B", "c": "C"})

    assert template.render(a=None, b="   ", c=[]) == "A|B|C"


def test_mapping_and_keyword_values_merge():
    template = PromptTemplate(name="t", text="{a}/{b}", defaults={"a": "A", "b": "B"})

    assert template.render({"a": "x", "b": "y"}, b="z") == "x/z"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, "Yes"),
        (False, "No"),
        (7.50, "7.5"),
        (42, "42"),
        (["Long Run", None, "", "Tempo"], "Long Run, Tempo"),
        ("", None),
    ],
)
def test_render_value(value, expected):
    assert render_value(value) == expected


def test_workout_prompt_renders_request():
    text = library.WORKOUT_GENERATION_PROMPT.render(sport="cycling", type="interval", duration=60, intensity="hard")

    assert "**Sport:** cycling" in text
    assert "**Duration:** 60 minutes" in text
    assert "**Goals:** general fitness" in text


def test_load_prompt_unknown_file():
    with pytest.raises(FileNotFoundError):
        load_prompt("does_not_exist.txt")


def test_prompt_chips_are_questions_or_requests():
    assert len(library.PROMPT_CHIPS) == 10
    assert all(chip.strip() for chip in library.PROMPT_CHIPS)


def test_injury_risk_prompt_carries_acwr_band():
    band = acwr_band(1.42)

    text = library.INJURY_RISK_PROMPT.render(acwr=1.42, acwr_label=band.label, high_intensity=20)

    assert "Acute:chronic workload ratio: 1.42 (Moderate Risk)" in text
    assert "- High intensity: 20%" in text
    assert PLACEHOLDER_PATTERN.search(text) is None
