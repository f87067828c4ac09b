"""TTS (Text-to-Speech) service protocol and data types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from makia.core.profiles import VoiceProfile


@dataclass
class SynthesisMetadata:
    """Metadata collected during/after synthesis."""

    model: str = ""
    voice: str = ""
    input_chars: int = 0
    output_bytes: int = 0
    total_synthesis_ms: float | None = None


class TextToSpeech(Protocol):
    """Protocol for TTS (Text-to-Speech) service implementations."""

    async def synthesize(self, text: str, voice: VoiceProfile) -> bytes:
        """Synthesize text to a complete encoded audio clip.

        Args:
            text: Reply text to speak
            voice: Language, voice name, gender hint and output encoding

        Returns:
            Encoded audio bytes (MP3 unless the voice asks otherwise)

        Raises:
            TTSServiceError: When synthesis fails
        """
        ...
