"""Conversation and response shapes exchanged with coaching providers."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class ConversationMessage(BaseModel):
    """One turn of a conversation.

    Conversations are ordered lists of these, append-only from the
    caller's side.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    timestamp: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, str]:
        """Return the {role, content} pair sent to chat completion APIs."""
        return {"role": self.role, "content": self.content}


class TokenUsage(BaseModel):
    prompt: int = 0
    completion: int = 0
    total: int = 0


class ChatResponse(BaseModel):
    """Blocking chat result.

    Degraded responses carry ``metadata["mock"] = True``.
    """

    content: str
    suggestions: list[str] = Field(default_factory=list)
    token_usage: TokenUsage | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_degraded(self) -> bool:
        return bool(self.metadata.get("mock"))


class StreamChunk(BaseModel):
    """One streamed update.

    ``content`` is always the full text accumulated so far, never a delta.
    """

    content: str
    is_complete: bool = False
    suggestions: list[str] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
