"""Custom exceptions for STT services."""


class STTServiceError(Exception):
    """Base exception for STT service errors."""

    pass


class STTConnectionError(STTServiceError):
    """Raised when unable to reach the STT API."""

    pass


class STTRejectedError(STTServiceError):
    """Raised when the STT API refuses the audio (bad format, bad key)."""

    pass
