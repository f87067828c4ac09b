"""Custom exceptions for LLM services."""


class LLMServiceError(Exception):
    """Base exception for LLM service errors."""

    pass


class LLMConnectionError(LLMServiceError):
    """Raised when the completion API cannot be reached."""

    pass


class LLMAuthenticationError(LLMServiceError):
    """Raised when the API key is rejected."""

    pass


class LLMThrottledError(LLMServiceError):
    """Raised when the provider answers 429 for our key."""

    def __init__(self, message: str, retry_after: float = 60.0) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class LLMEmptyResponseError(LLMServiceError):
    """Raised when the model returns no content."""

    pass
