from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ai_provider: str = Field(
        default="openai",
        validation_alias="AI_PROVIDER",
        description="Coaching backend key (openai, offline)",
    )
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        validation_alias="OPENAI_BASE_URL",
        description="Base URL of an OpenAI-compatible chat completions API",
    )
    openai_model: str = Field(default="gpt-4", validation_alias="OPENAI_MODEL")
    ai_temperature: float = Field(default=0.7, validation_alias="AI_TEMPERATURE")
    ai_max_tokens: int = Field(default=2000, validation_alias="AI_MAX_TOKENS")
    ai_timeout_seconds: float = Field(
        default=60.0,
        validation_alias="AI_TIMEOUT_SECONDS",
        description="Per-request timeout enforced by the HTTP backend",
    )
    context_max_tokens: int = Field(
        default=2000,
        validation_alias="CONTEXT_MAX_TOKENS",
        description="Token budget for the assembled athlete context",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_json: bool = Field(
        default=False,
        validation_alias="LOG_JSON",
        description="Write the log file as JSON lines instead of plain text",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("ai_temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        """Temperature must stay in the range accepted by chat completion APIs."""
        if not 0.0 <= value <= 2.0:
            raise ValueError(f"AI_TEMPERATURE must be between 0 and 2, got {value}")
        return value

    @field_validator("ai_max_tokens", "context_max_tokens")
    @classmethod
    def validate_positive_tokens(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"Token limits must be positive, got {value}")
        return value

    @field_validator("openai_api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        """Warn when no API key is configured.

        An empty key is legal: the coaching provider reports itself as
        unavailable and every operation returns its degraded response.
        """
        if not value:
            logger.info("OPENAI_API_KEY is not set. Coaching features will run in degraded (offline) mode.")
        return value.strip()


settings = Settings()
