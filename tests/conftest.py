"""Root conftest for all tests.

Shared fixtures: a fixed reference date, the sample athlete snapshot and
settings objects that never read the developer's .env file.
"""

from collections.abc import Callable
from datetime import date

import pytest

from athlo.coach.sample import create_sample_snapshot
from athlo.config.settings import Settings
from athlo.schemas.athlete import ContextSnapshot


def _make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"AI_PROVIDER": "openai", "OPENAI_API_KEY": ""}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Factory for Settings built from explicit values (env names as keys)."""
    return _make_settings


@pytest.fixture
def today() -> date:
    return date(2025, 3, 14)


@pytest.fixture
def sample_snapshot(today: date) -> ContextSnapshot:
    return create_sample_snapshot(today)


@pytest.fixture
def offline_settings() -> Settings:
    return _make_settings(AI_PROVIDER="offline")


@pytest.fixture
def live_settings() -> Settings:
    return _make_settings(OPENAI_API_KEY="sk-test", OPENAI_BASE_URL="https://llm.test/v1", OPENAI_MODEL="gpt-test")
