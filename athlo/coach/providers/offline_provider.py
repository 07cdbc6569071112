"""Backend that never calls anything.

Selected with AI_PROVIDER=offline (or the legacy alias "mock"). Every
operation takes the degraded path, which keeps demos and tests working
without credentials.
"""

from collections.abc import AsyncIterator

from athlo.coach.errors import BackendError
from athlo.coach.providers.base import Completion, CoachProvider, WireMessage


class OfflineCoachProvider(CoachProvider):
    kind = "offline"
    unavailable_message = "Chat functionality is not available in offline mode. Configure an AI provider to chat with your coach."
    insight_unavailable_message = "Insight explanations are not available in offline mode."

    def is_available(self) -> bool:
        return False

    async def _complete(self, messages: list[WireMessage]) -> Completion:
        raise BackendError("Offline provider cannot complete requests")

    async def _stream(self, messages: list[WireMessage]) -> AsyncIterator[str]:
        raise BackendError("Offline provider cannot stream")
        yield ""  # unreachable; marks this as an async generator
