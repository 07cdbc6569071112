"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from athlo.coach.providers.base import ProviderConfig


def test_defaults(make_settings):
    settings = make_settings()

    assert settings.ai_provider == "openai"
    assert settings.openai_model == "gpt-4"
    assert settings.ai_temperature == 0.7
    assert settings.context_max_tokens == 2000


def test_reads_environment(monkeypatch, make_settings):
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("AI_MAX_TOKENS", "512")

    settings = make_settings()

    assert settings.openai_model == "gpt-4o-mini"
    assert settings.ai_max_tokens == 512


def test_api_key_is_stripped(make_settings):
    assert make_settings(OPENAI_API_KEY="  sk-abc \n").openai_api_key == "sk-abc"


def test_invalid_log_level_falls_back_to_info(make_settings):
    assert make_settings(LOG_LEVEL="chatty").log_level == "INFO"
    assert make_settings(LOG_LEVEL="debug").log_level == "DEBUG"


@pytest.mark.parametrize("temperature", [-0.1, 2.5])
def test_temperature_out_of_range(make_settings, temperature):
    with pytest.raises(ValidationError):
        make_settings(AI_TEMPERATURE=temperature)


def test_token_limits_must_be_positive(make_settings):
    with pytest.raises(ValidationError):
        make_settings(CONTEXT_MAX_TOKENS=0)


def test_provider_config_from_settings(live_settings):
    config = ProviderConfig.from_settings(live_settings)

    assert config.api_key == "sk-test"
    assert config.model == "gpt-test"
    assert config.timeout == 60.0


def test_provider_config_strips_api_key():
    assert ProviderConfig(api_key="  sk-abc\n").api_key == "sk-abc"
    assert ProviderConfig(api_key="   ").api_key == ""


def test_log_file_and_json_flag(make_settings):
    settings = make_settings(LOG_FILE="/var/log/athlo.log", LOG_JSON="true")

    assert settings.log_file == "/var/log/athlo.log"
    assert settings.log_json is True
    assert make_settings().log_file is None
