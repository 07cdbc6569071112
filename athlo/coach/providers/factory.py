"""Backend selection.

The provider is chosen once from configuration. An unknown key is a
configuration error raised at construction, never a degraded response.
"""

from enum import StrEnum

import httpx
from loguru import logger

from athlo.coach.errors import ConfigurationError
from athlo.coach.providers.base import CoachProvider, ProviderConfig
from athlo.coach.providers.offline_provider import OfflineCoachProvider
from athlo.coach.providers.openai_provider import OpenAICoachProvider
from athlo.config.settings import Settings
from athlo.config.settings import settings as default_settings


class ProviderKind(StrEnum):
    OPENAI = "openai"
    OFFLINE = "offline"


# Older configurations used "mock" for the credential-free backend
_ALIASES = {"mock": ProviderKind.OFFLINE}


def parse_provider_kind(value: str) -> ProviderKind:
    """Resolve a configured backend key (case-insensitive).

    Raises:
        ConfigurationError: If the key names no known backend
    """
    key = value.strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return ProviderKind(key)
    except ValueError as e:
        supported = ", ".join(k.value for k in ProviderKind)
        raise ConfigurationError(value, f"Unsupported coaching provider: {value!r}. Supported: {supported}") from e


def get_coach_provider(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CoachProvider:
    """Build the coaching provider selected by configuration.

    Args:
        settings: Configuration to use; defaults to the process settings
        transport: Optional httpx transport handed to HTTP backends

    Returns:
        A ready provider. It may still be unavailable (e.g. no API key).

    Raises:
        ConfigurationError: If AI_PROVIDER names no known backend
    """
    settings = settings or default_settings
    kind = parse_provider_kind(settings.ai_provider)
    config = ProviderConfig.from_settings(settings)

    if kind is ProviderKind.OFFLINE:
        provider: CoachProvider = OfflineCoachProvider(config)
    else:
        provider = OpenAICoachProvider(config, transport=transport)

    logger.debug(f"Coaching provider: {provider.kind} (model={config.model}, available={provider.is_available()})")
    return provider


def is_ai_available(settings: Settings | None = None) -> bool:
    """Whether the configured backend can serve live responses."""
    try:
        return get_coach_provider(settings).is_available()
    except ConfigurationError as e:
        logger.warning(f"Coaching backend misconfigured: {e.message}")
        return False
