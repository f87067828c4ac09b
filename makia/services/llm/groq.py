"""Groq LLM service for single-shot tutor replies."""

from __future__ import annotations

import time
from typing import Any

import groq
from groq import AsyncGroq

from makia.config import Settings, get_settings
from makia.logging_config import get_logger
from makia.services.llm.exceptions import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMEmptyResponseError,
    LLMServiceError,
    LLMThrottledError,
)
from makia.services.llm.protocol import CompletionMetadata, Message, Role

logger: Any = get_logger(__name__)


class GroqService:
    """Groq chat completion client."""

    def __init__(
        self,
        settings: Settings | None = None,
        model: str | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._model = model or self._settings.llm_model
        self._client: AsyncGroq | None = None
        self.last_metadata: CompletionMetadata | None = None

    @property
    def client(self) -> AsyncGroq:
        """Lazy initialization of AsyncGroq client."""
        if self._client is None:
            self._client = AsyncGroq(
                api_key=self._settings.groq_api_key.get_secret_value(),
                timeout=30.0,
                max_retries=2,
            )
        return self._client

    async def complete(
        self,
        system_prompt: str,
        user_text: str,
        *,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        """Run one chat completion.

        Args:
            system_prompt: Tutor persona plus any per-turn guidance
            user_text: What the learner said or typed
            max_tokens: Upper bound on reply length
            temperature: Response creativity

        Returns:
            The reply text

        Raises:
            LLMThrottledError: When Groq answers 429
            LLMConnectionError: When API unreachable
            LLMAuthenticationError: When API key invalid
            LLMEmptyResponseError: When the reply has no content
            LLMServiceError: For other API errors
        """
        api_messages = self._format_messages(
            system_prompt,
            [Message(role=Role.USER, content=user_text)],
        )
        metadata = CompletionMetadata(model=self._model)
        start = time.perf_counter()

        try:
            response = await self.client.chat.completions.create(
                messages=api_messages,  # type: ignore[arg-type]
                model=self._model,
                temperature=temperature,
                max_tokens=max_tokens,
            )

        except groq.RateLimitError as e:
            logger.warning(f"Groq rate limit hit: {e}")
            raise LLMThrottledError(
                "Rate limit exceeded",
                retry_after=self._extract_retry_after(e),
            ) from e

        except groq.APIConnectionError as e:
            logger.error(f"Groq connection error: {e.__cause__}")
            raise LLMConnectionError("Failed to connect to Groq API") from e

        except groq.AuthenticationError as e:
            logger.error("Groq authentication failed")
            raise LLMAuthenticationError("Invalid Groq API key") from e

        except groq.APIStatusError as e:
            logger.error(f"Groq API error: {e.status_code} - {e.message}")
            raise LLMServiceError(f"Groq API error: {e.status_code}") from e

        except groq.APIError as e:
            logger.error(f"Groq response error: {e}")
            raise LLMServiceError(f"Groq API error: {e}") from e

        metadata.latency_ms = (time.perf_counter() - start) * 1000
        if response.usage:
            metadata.prompt_tokens = response.usage.prompt_tokens
            metadata.completion_tokens = response.usage.completion_tokens
            metadata.total_tokens = response.usage.total_tokens

        choice = response.choices[0] if response.choices else None
        content = choice.message.content if choice else None
        if choice:
            metadata.finish_reason = choice.finish_reason
        self.last_metadata = metadata

        if not content or not content.strip():
            raise LLMEmptyResponseError("Empty response from Groq")

        logger.debug(
            f"Groq reply in {metadata.latency_ms:.0f}ms "
            f"({metadata.completion_tokens} tokens, finish: {metadata.finish_reason})"
        )
        return content.strip()

    def _format_messages(self, system_prompt: str, messages: list[Message]) -> list[dict]:
        """Format messages for Groq API."""
        api_messages = [{"role": Role.SYSTEM.value, "content": system_prompt}]

        for msg in messages:
            api_messages.append({
                "role": msg.role.value,
                "content": msg.content,
            })

        return api_messages

    def _extract_retry_after(self, error: groq.RateLimitError) -> float:
        """Extract retry-after from rate limit error."""
        if hasattr(error, "response") and error.response:
            retry_after = error.response.headers.get("retry-after")
            if retry_after:
                try:
                    return float(retry_after)
                except ValueError:
                    pass
        return 60.0

    async def close(self) -> None:
        """Close the client connection."""
        if self._client:
            await self._client.close()
            self._client = None
