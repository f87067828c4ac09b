"""Transcription adapter: audio bytes in, learner text out."""

from __future__ import annotations

from typing import Any

from makia.config import Settings
from makia.core.exceptions import TranscriptionError
from makia.logging_config import get_logger
from makia.services.stt.exceptions import STTServiceError
from makia.services.stt.protocol import RecognitionConfig, SpeechToText

logger: Any = get_logger(__name__)


class Transcriber:
    """Wraps a ``SpeechToText`` backend with the tutor's recognition settings."""

    def __init__(
        self,
        stt: SpeechToText,
        *,
        language: str = "en-US",
        alternative_languages: tuple[str, ...] = (),
        sample_rate: int = 48000,
    ) -> None:
        self._stt = stt
        self._language = language
        self._alternative_languages = alternative_languages
        self._sample_rate = sample_rate

    @classmethod
    def from_settings(cls, stt: SpeechToText, settings: Settings) -> Transcriber:
        return cls(
            stt,
            language=settings.stt_language,
            alternative_languages=tuple(settings.stt_alternative_languages),
            sample_rate=settings.stt_sample_rate,
        )

    async def transcribe(self, audio_bytes: bytes, encoding_hint: str | None = None) -> str:
        """Recognize a clip and join its segments with newlines.

        An empty string means nothing was heard; that is not an error here.

        Raises:
            TranscriptionError: When the STT backend fails
        """
        config = RecognitionConfig(
            encoding=encoding_hint or "audio/webm",
            sample_rate=self._sample_rate,
            language=self._language,
            alternative_languages=self._alternative_languages,
            punctuate=True,
        )

        try:
            segments = await self._stt.recognize(audio_bytes, config)
        except STTServiceError as e:
            raise TranscriptionError("Could not process audio") from e

        return "\n".join(segments)
