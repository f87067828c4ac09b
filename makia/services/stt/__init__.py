"""Speech-to-Text services (Deepgram)."""

from makia.services.stt.deepgram import DeepgramService
from makia.services.stt.exceptions import (
    STTConnectionError,
    STTRejectedError,
    STTServiceError,
)
from makia.services.stt.protocol import RecognitionConfig, SpeechToText
from makia.services.stt.transcriber import Transcriber

__all__ = [
    "DeepgramService",
    "RecognitionConfig",
    "SpeechToText",
    "Transcriber",
    "STTServiceError",
    "STTConnectionError",
    "STTRejectedError",
]
