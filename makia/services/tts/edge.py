"""Edge TTS service implementation using Microsoft's online neural voices."""

from __future__ import annotations

import io
import time
from typing import TYPE_CHECKING, Any

import edge_tts

from makia.logging_config import get_logger
from makia.services.tts.exceptions import (
    TTSConnectionError,
    TTSSynthesisError,
    TTSUnsupportedEncodingError,
)
from makia.services.tts.protocol import SynthesisMetadata

if TYPE_CHECKING:
    from makia.core.profiles import VoiceProfile

logger: Any = get_logger(__name__)

# Edge streams 24kHz mono MP3 by default
EDGE_OUTPUT_ENCODING = "MP3"


class EdgeTTSService:
    """Edge TTS service.

    Features:
    - Neural voices selected per tutor (e.g. en-US-GuyNeural)
    - MP3 output, served to the browser as-is
    - Requires internet connection
    """

    def __init__(self, rate: str = "+0%", pitch: str = "+0Hz") -> None:
        self._rate = rate
        self._pitch = pitch
        self.last_metadata: SynthesisMetadata | None = None

    async def synthesize(self, text: str, voice: VoiceProfile) -> bytes:
        """Synthesize text to a complete MP3 clip.

        Raises:
            TTSUnsupportedEncodingError: If the voice asks for a non-MP3 encoding
            TTSSynthesisError: If no audio came back
            TTSConnectionError: If the Edge service could not be reached
        """
        if voice.audio_encoding.upper() != EDGE_OUTPUT_ENCODING:
            raise TTSUnsupportedEncodingError(voice.audio_encoding)

        metadata = SynthesisMetadata(
            model="edge-tts",
            voice=voice.voice_name,
            input_chars=len(text),
        )
        start_time = time.perf_counter()
        buffer = io.BytesIO()

        try:
            communicate = edge_tts.Communicate(
                text,
                voice.voice_name,
                rate=self._rate,
                pitch=self._pitch,
            )
            async for message in communicate.stream():
                if message["type"] == "audio":
                    buffer.write(message["data"])

        except edge_tts.exceptions.NoAudioReceived as e:
            logger.error(f"Edge TTS no audio received: {e}")
            raise TTSSynthesisError("No audio received from Edge TTS") from e

        except Exception as e:
            logger.error(f"Edge TTS synthesis error: {e}")
            raise TTSConnectionError(f"Edge TTS connection failed: {e}") from e

        audio = buffer.getvalue()
        if not audio:
            raise TTSSynthesisError("No audio received from Edge TTS")

        metadata.output_bytes = len(audio)
        metadata.total_synthesis_ms = (time.perf_counter() - start_time) * 1000
        self.last_metadata = metadata

        logger.debug(
            f"Edge TTS synthesis complete: {metadata.input_chars} chars -> "
            f"{metadata.output_bytes} bytes in {metadata.total_synthesis_ms:.0f}ms"
        )
        return audio
