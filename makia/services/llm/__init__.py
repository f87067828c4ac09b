"""LLM services (Groq)."""

from makia.services.llm.exceptions import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMEmptyResponseError,
    LLMServiceError,
    LLMThrottledError,
)
from makia.services.llm.groq import GroqService
from makia.services.llm.protocol import (
    CompletionMetadata,
    LanguageModel,
    Message,
    Role,
)
from makia.services.llm.responder import Responder

__all__ = [
    # Protocol and types
    "LanguageModel",
    "Message",
    "Role",
    "CompletionMetadata",
    # Implementation
    "GroqService",
    "Responder",
    # Exceptions
    "LLMServiceError",
    "LLMThrottledError",
    "LLMConnectionError",
    "LLMAuthenticationError",
    "LLMEmptyResponseError",
]
