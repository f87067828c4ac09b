"""Deepgram STT service for prerecorded learner clips."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

import httpx

from makia.config import Settings, get_settings
from makia.logging_config import get_logger, preview
from makia.services.stt.exceptions import (
    STTConnectionError,
    STTRejectedError,
    STTServiceError,
)
from makia.services.stt.protocol import RecognitionConfig

if TYPE_CHECKING:
    from deepgram import DeepgramClient

logger: Any = get_logger(__name__)

DEEPGRAM_MODEL = "nova-2"


class DeepgramService:
    """Deepgram prerecorded transcription.

    Browser recordings (webm/opus, wav, mp3, mp4) are sent as-is; Deepgram
    detects the container from the mimetype.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        model: str | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._model = model or self._settings.stt_model or DEEPGRAM_MODEL
        self._client: DeepgramClient | None = None

    @property
    def client(self) -> DeepgramClient:
        """Lazy initialization of Deepgram client."""
        if self._client is None:
            from deepgram import DeepgramClient

            self._client = DeepgramClient(
                api_key=self._settings.deepgram_api_key.get_secret_value(),
            )
        return self._client

    def _build_options(self, config: RecognitionConfig) -> Any:
        from deepgram import PrerecordedOptions

        options = PrerecordedOptions(
            model=self._model,
            punctuate=config.punctuate,
            smart_format=config.punctuate,
            utterances=True,
        )
        languages = config.languages
        if len(languages) > 1:
            # Restrict automatic detection to the configured language set
            options.detect_language = languages
        else:
            options.language = config.language
        return options

    async def recognize(self, audio_bytes: bytes, config: RecognitionConfig) -> list[str]:
        """Transcribe a complete clip.

        Returns:
            Utterance transcripts in order; falls back to one segment per
            channel when the response carries no utterances.

        Raises:
            STTConnectionError: When Deepgram is unreachable
            STTRejectedError: When Deepgram refuses the request
            STTServiceError: For any other SDK failure
        """
        from deepgram import DeepgramApiError

        options = self._build_options(config)
        payload = {"buffer": audio_bytes, "mimetype": config.encoding}
        start = time.perf_counter()

        try:
            response = await asyncio.to_thread(
                self.client.listen.rest.v("1").transcribe_file,
                payload,
                options,
            )
        except DeepgramApiError as e:
            logger.error(f"Deepgram rejected audio: {e}")
            raise STTRejectedError(f"Deepgram API error: {e}") from e
        except httpx.TransportError as e:
            logger.error(f"Deepgram connection error: {e}")
            raise STTConnectionError("Failed to connect to Deepgram API") from e
        except Exception as e:
            logger.error(f"Deepgram transcription error: {e}")
            raise STTServiceError(f"Deepgram transcription failed: {e}") from e

        segments = self._extract_segments(response)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"Transcribed {len(audio_bytes)} bytes in {elapsed_ms:.0f}ms: "
            f"{preview(' '.join(segments))}"
        )
        return segments

    @staticmethod
    def _extract_segments(response: Any) -> list[str]:
        results = getattr(response, "results", None)
        if results is None:
            return []

        utterances = getattr(results, "utterances", None) or []
        segments = [u.transcript for u in utterances if getattr(u, "transcript", "")]
        if segments:
            return segments

        for channel in getattr(results, "channels", None) or []:
            alternatives = channel.alternatives or []
            if alternatives and alternatives[0].transcript:
                segments.append(alternatives[0].transcript)
        return segments
