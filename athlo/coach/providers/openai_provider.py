"""OpenAI-compatible chat completions backend.

Talks to any server implementing POST {base_url}/chat/completions, either
blocking or with server-sent events (``stream: true``). Streamed frames
look like ``data: {json}`` and the stream ends with ``data: [DONE]``.
Malformed frames are skipped without aborting the stream.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any, Final

import httpx
from loguru import logger

from athlo.coach.errors import BackendError, TransportError
from athlo.coach.providers.base import Completion, CoachProvider, ProviderConfig, WireMessage
from athlo.schemas.messages import TokenUsage

CHAT_COMPLETIONS_PATH = "/chat/completions"
STREAM_DONE: Final = "[DONE]"


class _Done:
    """Marker returned by parse_stream_line for the end-of-stream sentinel."""


DONE = _Done()


def parse_stream_line(line: str) -> str | _Done | None:
    """Extract the text delta from one SSE line.

    Returns:
        The delta text, DONE for the sentinel frame, or None for lines that
        carry no text (keep-alives, role-only deltas, malformed JSON)
    """
    line = line.strip()
    if not line.startswith("data:"):
        return None
    data = line[len("data:") :].strip()
    if data == STREAM_DONE:
        return DONE
    try:
        parsed = json.loads(data)
        delta = parsed["choices"][0]["delta"].get("content")
    except (ValueError, KeyError, IndexError, TypeError, AttributeError):
        logger.debug(f"Skipping malformed stream frame: {data[:80]!r}")
        return None
    return delta if isinstance(delta, str) and delta else None


def _parse_usage(payload: dict[str, Any]) -> TokenUsage | None:
    usage = payload.get("usage")
    if not isinstance(usage, dict):
        return None
    try:
        return TokenUsage(
            prompt=int(usage.get("prompt_tokens") or 0),
            completion=int(usage.get("completion_tokens") or 0),
            total=int(usage.get("total_tokens") or 0),
        )
    except (TypeError, ValueError) as e:
        raise BackendError(f"OpenAI response has invalid usage: {e}") from e


class OpenAICoachProvider(CoachProvider):
    """Live backend over an OpenAI-compatible HTTP API.

    Args:
        config: Credentials and call parameters. No API key means unavailable.
        transport: Optional httpx transport (tests inject httpx.MockTransport)
    """

    kind = "openai"
    unavailable_message = "Chat functionality is not available. Please configure OpenAI API key."
    insight_unavailable_message = "I need access to OpenAI to explain insights. Please configure your API key."

    def __init__(self, config: ProviderConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        super().__init__(config)
        self._transport = transport

    def is_available(self) -> bool:
        return bool(self.config.api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout,
            transport=self._transport,
        )

    def _payload(self, messages: list[WireMessage], stream: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        if stream:
            payload["stream"] = True
        return payload

    async def _complete(self, messages: list[WireMessage]) -> Completion:
        try:
            async with self._client() as client:
                response = await client.post(CHAT_COMPLETIONS_PATH, json=self._payload(messages))
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise BackendError(
                f"OpenAI API error: {e.response.status_code} {e.response.reason_phrase}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"OpenAI request failed: {type(e).__name__}: {e}") from e
        except ValueError as e:
            raise BackendError(f"OpenAI returned invalid JSON: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise BackendError(f"OpenAI response missing message content: {e}") from e
        if not isinstance(content, str):
            raise BackendError("OpenAI response content is not text")

        usage = _parse_usage(data)
        logger.debug(f"OpenAI completion: {len(content)} chars, usage={usage}")
        return Completion(content=content, usage=usage)

    async def _stream(self, messages: list[WireMessage]) -> AsyncIterator[str]:
        try:
            async with self._client() as client, client.stream(
                "POST",
                CHAT_COMPLETIONS_PATH,
                json=self._payload(messages, stream=True),
            ) as response:
                if response.is_error:
                    await response.aread()
                    raise BackendError(
                        f"OpenAI API error: {response.status_code} {response.reason_phrase}",
                        status_code=response.status_code,
                    )
                async for line in response.aiter_lines():
                    delta = parse_stream_line(line)
                    if delta is DONE:
                        return
                    if delta:
                        yield delta
        except httpx.RequestError as e:
            raise TransportError(f"OpenAI stream failed: {type(e).__name__}: {e}") from e
