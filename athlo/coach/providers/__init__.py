from athlo.coach.providers.base import (
    DEGRADED_SUGGESTIONS,
    ERROR_MESSAGE,
    CoachProvider,
    ProviderConfig,
    extract_suggestions,
)
from athlo.coach.providers.factory import ProviderKind, get_coach_provider, is_ai_available, parse_provider_kind
from athlo.coach.providers.offline_provider import OfflineCoachProvider
from athlo.coach.providers.openai_provider import OpenAICoachProvider

__all__ = [
    "DEGRADED_SUGGESTIONS",
    "ERROR_MESSAGE",
    "CoachProvider",
    "OfflineCoachProvider",
    "OpenAICoachProvider",
    "ProviderConfig",
    "ProviderKind",
    "extract_suggestions",
    "get_coach_provider",
    "is_ai_available",
    "parse_provider_kind",
]
