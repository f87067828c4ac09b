"""Custom exceptions for TTS services."""


class TTSServiceError(Exception):
    """Base exception for TTS service errors."""

    pass


class TTSSynthesisError(TTSServiceError):
    """Raised when the engine produced no usable audio."""

    pass


class TTSConnectionError(TTSServiceError):
    """Raised when unable to connect to TTS service (Edge TTS)."""

    pass


class TTSUnsupportedEncodingError(TTSServiceError):
    """Raised when a voice asks for an output encoding the engine cannot produce."""

    def __init__(self, encoding: str) -> None:
        super().__init__(f"Unsupported audio encoding: {encoding}")
        self.encoding = encoding
