"""Turn-level error taxonomy.

Every error a turn can surface to the caller derives from ``TurnError`` and
carries the HTTP status and retry hint the API layer renders.
"""


class TurnError(Exception):
    """Base exception for a failed tutoring turn."""

    status_code: int = 500
    retryable: bool = False


# =============================================================================
# Client faults
# =============================================================================


class ValidationError(TurnError):
    """Bad or missing input. Not worth retrying unchanged."""

    status_code = 400


class EmptyAudioError(ValidationError):
    """Raised when a voice turn carries no audio payload."""

    def __init__(self, message: str = "No audio file received") -> None:
        super().__init__(message)


class EmptyMessageError(ValidationError):
    """Raised when a text turn message is empty after trimming."""

    def __init__(self, message: str = "Empty message") -> None:
        super().__init__(message)


class UnknownProfileError(ValidationError):
    """Raised when a turn names a tutor profile that does not exist."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(f"Unknown tutor profile: {profile_id}")
        self.profile_id = profile_id


class NoSpeechError(TurnError):
    """Transcription succeeded but heard nothing. The user should speak again."""

    status_code = 400

    def __init__(self, message: str = "No voice detected") -> None:
        super().__init__(message)


class UnsupportedMediaError(TurnError):
    """Raised at the boundary for audio of a media type we do not accept."""

    status_code = 415

    def __init__(self, media_type: str | None) -> None:
        super().__init__(f"Unsupported audio type: {media_type or 'unknown'}")
        self.media_type = media_type


class PayloadTooLargeError(TurnError):
    """Raised at the boundary for audio above the upload limit."""

    status_code = 413

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Audio payload of {size} bytes exceeds {limit} bytes")
        self.size = size
        self.limit = limit


# =============================================================================
# Server faults (external capabilities)
# =============================================================================


class CapabilityError(TurnError):
    """An external capability failed. Retrying the whole turn is safe."""

    status_code = 503
    retryable = True


class TranscriptionError(CapabilityError):
    """Speech recognition was unreachable or rejected the audio."""

    pass


class GenerationError(CapabilityError):
    """The language model failed. Recovered by the pipeline, never surfaced."""

    pass


class SynthesisError(CapabilityError):
    """Speech synthesis failed; a voice turn has no audio to return."""

    pass
