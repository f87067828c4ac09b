"""LLM service protocol and data types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol


class Role(str, Enum):
    """Message role in conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class Message:
    """A single chat message sent to the model."""

    role: Role
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class CompletionMetadata:
    """Metadata collected from one completion call."""

    model: str = ""
    latency_ms: float | None = None
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None
    finish_reason: str | None = None


class LanguageModel(Protocol):
    """Protocol for single-shot chat completion backends."""

    async def complete(
        self,
        system_prompt: str,
        user_text: str,
        *,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        """Complete one user message under a system instruction.

        Raises:
            LLMServiceError: When the backend fails
        """
        ...
