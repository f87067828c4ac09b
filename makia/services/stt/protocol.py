"""STT (Speech-to-Text) service protocol and data types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RecognitionConfig:
    """How a recorded clip should be recognized."""

    encoding: str = "audio/webm"  # Media type of the upload
    sample_rate: int = 48000
    language: str = "en-US"  # Primary language
    alternative_languages: tuple[str, ...] = field(default_factory=tuple)
    punctuate: bool = True

    @property
    def languages(self) -> list[str]:
        """Primary language followed by the alternatives, without duplicates."""
        ordered = [self.language, *self.alternative_languages]
        return list(dict.fromkeys(ordered))


class SpeechToText(Protocol):
    """Protocol for prerecorded speech recognition backends."""

    async def recognize(self, audio_bytes: bytes, config: RecognitionConfig) -> list[str]:
        """Recognize a complete clip.

        Returns:
            Recognized segments in recognition order (possibly empty)

        Raises:
            STTServiceError: When the backend is unreachable or rejects the audio
        """
        ...
