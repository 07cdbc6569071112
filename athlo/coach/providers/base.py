"""Coaching provider abstraction.

Every backend exposes the same six operations. The degrade-or-call flow
lives here so that all backends share it:

    UNCHECKED -> is_available()? -> DEGRADED | CALLING -> success? -> DELIVERED | DEGRADED

A backend only implements the two transport primitives: _complete (one
blocking completion) and _stream (an iterator of text deltas). Backends
raise BackendError / TransportError; this class converts them into
degraded-but-well-formed responses, so callers never see them.

There is no retry loop: a failed call degrades immediately.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import aclosing
from typing import Any, ClassVar

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import PydanticOutputParser
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from athlo.coach.errors import BackendError, TransportError
from athlo.coach.prompts.library import (
    ANALYSIS_PROMPT,
    INSIGHT_EXPLANATION_PROMPT,
    SYSTEM_PROMPT,
    WORKOUT_GENERATION_PROMPT,
)
from athlo.coach.providers.fallback import fallback_analysis, synthesize_workout
from athlo.config.settings import Settings
from athlo.schemas.messages import ChatResponse, ConversationMessage, StreamChunk, TokenUsage
from athlo.schemas.workout import AnalysisResult, GeneratedWorkout, WorkoutGenerationParams

ERROR_MESSAGE = "I apologize, but I encountered an error. Please try again later."
INSIGHT_ERROR_MESSAGE = "I apologize, but I cannot explain this insight right now. Please try again later."
DEGRADED_SUGGESTIONS = ("Try asking about training", "Check your workout plan", "Review your progress")

LIVE_ANALYSIS_CONFIDENCE = 0.8
MAX_SUGGESTIONS = 3

_LIST_ITEM_PATTERN = re.compile(r"^(?:[-•*]\s+|\d+[.)]\s*)")

WireMessage = dict[str, str]


class ProviderConfig(BaseModel):
    """Credentials and call parameters of one backend. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, gt=0)
    timeout: float = Field(default=60.0, gt=0)

    @field_validator("api_key")
    @classmethod
    def _strip_api_key(cls, value: str) -> str:
        return value.strip()

    @classmethod
    def from_settings(cls, settings: Settings) -> ProviderConfig:
        return cls(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=settings.openai_model,
            temperature=settings.ai_temperature,
            max_tokens=settings.ai_max_tokens,
            timeout=settings.ai_timeout_seconds,
        )


class Completion(BaseModel):
    content: str
    usage: TokenUsage | None = None


class _AnalysisReply(BaseModel):
    """Structured analysis requested from the backend."""

    summary: str = Field(..., description="Two to four sentence overview of the findings")
    insights: list[str] = Field(default_factory=list, description="Key findings and trends")
    recommendations: list[str] = Field(default_factory=list, description="Specific actionable advice")
    risk_factors: list[str] | None = Field(default=None, description="Concerns or red flags, if any")
    confidence: float | None = Field(default=None, ge=0.0, le=1.0, description="Confidence in this analysis")


def extract_suggestions(content: str, limit: int = MAX_SUGGESTIONS) -> list[str]:
    """Pick the first bullet or numbered lines of a reply as follow-up suggestions."""
    suggestions: list[str] = []
    for line in content.splitlines():
        trimmed = line.strip()
        if _LIST_ITEM_PATTERN.match(trimmed):
            item = _LIST_ITEM_PATTERN.sub("", trimmed, count=1).strip()
            if item:
                suggestions.append(item)
        if len(suggestions) >= limit:
            break
    return suggestions


def _is_heading(line: str) -> bool:
    return line.startswith("#") or "**" in line or line.endswith(":")


def _section_items(content: str, heading_keywords: Sequence[str]) -> list[str]:
    """List items under headings that mention one of the keywords."""
    items: list[str] = []
    in_section = False
    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue
        if _is_heading(trimmed):
            lowered = trimmed.lower()
            in_section = any(keyword in lowered for keyword in heading_keywords)
        elif in_section and _LIST_ITEM_PATTERN.match(trimmed):
            item = _LIST_ITEM_PATTERN.sub("", trimmed, count=1).strip()
            if item:
                items.append(item)
    return items


def degraded_response(message: str, **metadata: Any) -> ChatResponse:
    return ChatResponse(
        content=message,
        suggestions=list(DEGRADED_SUGGESTIONS),
        metadata={"mock": True, **metadata},
    )


def dump_data(data: Mapping[str, Any]) -> str:
    return json.dumps(data, indent=2, default=str)


class CoachProvider(ABC):
    """Uniform interface over coaching backends.

    Args:
        config: Backend configuration, fixed for the provider's lifetime
    """

    kind: ClassVar[str]
    unavailable_message: ClassVar[str] = "Chat functionality is not available. Please configure a coaching backend."
    insight_unavailable_message: ClassVar[str] = "I need access to a coaching backend to explain insights."

    def __init__(self, config: ProviderConfig) -> None:
        self.config = config

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the backend has what it needs to be called. Never performs I/O."""

    @abstractmethod
    async def _complete(self, messages: list[WireMessage]) -> Completion:
        """Run one blocking completion. Raises BackendError or TransportError."""

    @abstractmethod
    def _stream(self, messages: list[WireMessage]) -> AsyncIterator[str]:
        """Yield text deltas in backend order. Raises BackendError or TransportError."""

    def build_system_prompt(self, context: str | None = None) -> str:
        if context and context.strip():
            return f"{SYSTEM_PROMPT}\n\nContext: {context}"
        return SYSTEM_PROMPT

    def build_wire_messages(
        self,
        messages: Sequence[ConversationMessage],
        context: str | None = None,
    ) -> list[WireMessage]:
        """System persona (plus context) first, then the conversation in order."""
        system = ConversationMessage(role="system", content=self.build_system_prompt(context))
        return [system.to_wire(), *(m.to_wire() for m in messages)]

    def _metadata(self, thread_id: str | None = None) -> dict[str, Any]:
        return {"provider": self.kind, "model": self.config.model, "thread_id": thread_id}

    async def chat(
        self,
        messages: Sequence[ConversationMessage],
        context: str | None = None,
        thread_id: str | None = None,
    ) -> ChatResponse:
        if not self.is_available():
            logger.warning(f"Coaching provider '{self.kind}' unavailable, returning degraded chat response")
            return degraded_response(self.unavailable_message, thread_id=thread_id)

        try:
            completion = await self._complete(self.build_wire_messages(messages, context))
        except (BackendError, TransportError) as e:
            logger.error(f"Coach chat failed on '{self.kind}': {type(e).__name__}: {e}")
            return degraded_response(ERROR_MESSAGE, thread_id=thread_id, error=type(e).__name__)

        return ChatResponse(
            content=completion.content,
            suggestions=extract_suggestions(completion.content),
            token_usage=completion.usage,
            metadata=self._metadata(thread_id),
        )

    async def chat_stream(
        self,
        messages: Sequence[ConversationMessage],
        context: str | None = None,
        thread_id: str | None = None,
    ) -> AsyncIterator[StreamChunk]:
        """Stream a reply as cumulative chunks.

        Every chunk carries the full text so far; the last chunk has
        is_complete=True. If the backend fails after text was delivered,
        the apology is appended to that text so earlier chunks stay
        prefixes of the final one.
        """
        if not self.is_available():
            logger.warning(f"Coaching provider '{self.kind}' unavailable, returning degraded stream")
            yield StreamChunk(content=self.unavailable_message, is_complete=True, metadata={"mock": True})
            return

        wire = self.build_wire_messages(messages, context)
        content = ""
        try:
            async with aclosing(self._stream(wire)) as deltas:
                async for delta in deltas:
                    if not delta:
                        continue
                    content += delta
                    yield StreamChunk(content=content)
        except (BackendError, TransportError) as e:
            logger.error(f"Coach stream failed on '{self.kind}' after {len(content)} chars: {type(e).__name__}: {e}")
            final = f"{content}\n\n{ERROR_MESSAGE}" if content else ERROR_MESSAGE
            yield StreamChunk(content=final, is_complete=True, metadata={"mock": True, "error": type(e).__name__})
            return

        yield StreamChunk(
            content=content,
            is_complete=True,
            suggestions=extract_suggestions(content),
            metadata=self._metadata(thread_id),
        )

    async def generate_workout(
        self,
        params: WorkoutGenerationParams,
        context: str | None = None,
    ) -> GeneratedWorkout:
        if not self.is_available():
            logger.info(f"Coaching provider '{self.kind}' unavailable, synthesizing workout")
            return synthesize_workout(params)

        parser = PydanticOutputParser(pydantic_object=GeneratedWorkout)
        prompt = WORKOUT_GENERATION_PROMPT.render(
            sport=params.sport,
            type=params.type,
            duration=params.duration_min,
            intensity=params.intensity,
            goals=params.goals,
            equipment=params.equipment,
            location=params.location,
            conditions=params.conditions,
        )
        user = ConversationMessage(role="user", content=f"{prompt}\n\n{parser.get_format_instructions()}")

        try:
            completion = await self._complete(self.build_wire_messages([user], context))
            workout = parser.parse(completion.content)
        except (BackendError, TransportError) as e:
            logger.error(f"Workout generation failed on '{self.kind}': {type(e).__name__}: {e}")
            return synthesize_workout(params)
        except OutputParserException as e:
            logger.warning(f"Workout reply from '{self.kind}' was not a valid workout, synthesizing instead: {e}")
            return synthesize_workout(params)

        return workout.model_copy(update={"metadata": {**workout.metadata, **self._metadata()}})

    async def analyze_data(
        self,
        data: Mapping[str, Any],
        analysis_type: str,
        context: str | None = None,
    ) -> AnalysisResult:
        if not self.is_available():
            logger.info(f"Coaching provider '{self.kind}' unavailable, returning fallback analysis")
            return fallback_analysis(analysis_type)

        parser = PydanticOutputParser(pydantic_object=_AnalysisReply)
        prompt = ANALYSIS_PROMPT.render(analysis_type=analysis_type, data=dump_data(data))
        user = ConversationMessage(role="user", content=f"{prompt}\n\n{parser.get_format_instructions()}")

        try:
            completion = await self._complete(self.build_wire_messages([user], context))
        except (BackendError, TransportError) as e:
            logger.error(f"Analysis failed on '{self.kind}': {type(e).__name__}: {e}")
            return fallback_analysis(analysis_type)

        try:
            reply = parser.parse(completion.content)
        except OutputParserException:
            logger.debug(f"Analysis reply from '{self.kind}' is free text, extracting sections")
            return AnalysisResult(
                summary=completion.content,
                insights=_section_items(completion.content, ("finding", "insight", "trend")),
                recommendations=_section_items(completion.content, ("recommendation", "next step")),
                confidence=LIVE_ANALYSIS_CONFIDENCE,
                metadata=self._metadata(),
            )

        return AnalysisResult(
            summary=reply.summary,
            insights=reply.insights,
            recommendations=reply.recommendations,
            risk_factors=reply.risk_factors,
            confidence=reply.confidence if reply.confidence is not None else LIVE_ANALYSIS_CONFIDENCE,
            metadata=self._metadata(),
        )

    async def explain_insight(
        self,
        data: Mapping[str, Any],
        question: str,
        context: str | None = None,
    ) -> ChatResponse:
        if not self.is_available():
            return degraded_response(self.insight_unavailable_message)

        prompt = INSIGHT_EXPLANATION_PROMPT.render(question=question, data=dump_data(data))
        user = ConversationMessage(role="user", content=prompt)
        try:
            completion = await self._complete(self.build_wire_messages([user], context))
        except (BackendError, TransportError) as e:
            logger.error(f"Insight explanation failed on '{self.kind}': {type(e).__name__}: {e}")
            return degraded_response(INSIGHT_ERROR_MESSAGE, error=type(e).__name__)

        return ChatResponse(
            content=completion.content,
            suggestions=extract_suggestions(completion.content),
            token_usage=completion.usage,
            metadata=self._metadata(),
        )
