"""Speech synthesis adapter: reply text in, playable audio URL out."""

from __future__ import annotations

import asyncio
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Any

from makia.config import Settings
from makia.core.exceptions import SynthesisError
from makia.logging_config import get_logger
from makia.services.tts.exceptions import TTSServiceError
from makia.services.tts.protocol import TextToSpeech

if TYPE_CHECKING:
    from makia.core.profiles import VoiceProfile

logger: Any = get_logger(__name__)

FILE_EXTENSIONS = {"MP3": "mp3", "OGG_OPUS": "ogg", "LINEAR16": "wav"}


class Synthesizer:
    """Synthesizes replies and stores each clip under a fresh UUID name.

    Clips are written to ``audio_dir`` (created on first use) and exposed
    to the client as ``{url_prefix}/{filename}``.
    """

    def __init__(
        self,
        tts: TextToSpeech,
        audio_dir: str | Path,
        url_prefix: str = "/audio",
    ) -> None:
        self._tts = tts
        self._audio_dir = Path(audio_dir)
        self._url_prefix = url_prefix.rstrip("/")

    @classmethod
    def from_settings(cls, tts: TextToSpeech, settings: Settings) -> Synthesizer:
        return cls(tts, settings.audio_dir, settings.audio_url_prefix)

    @property
    def audio_dir(self) -> Path:
        return self._audio_dir

    async def synthesize(self, text: str, voice: VoiceProfile) -> str:
        """Speak ``text`` with ``voice`` and return the clip's URL path.

        Nothing is written unless the engine returned audio.

        Raises:
            SynthesisError: When the engine fails or the clip cannot be stored
        """
        try:
            audio = await self._tts.synthesize(text, voice)
        except TTSServiceError as e:
            raise SynthesisError("Could not generate audio") from e

        if not audio:
            raise SynthesisError("Could not generate audio")

        extension = FILE_EXTENSIONS.get(voice.audio_encoding.upper(), "mp3")
        filename = f"response_{uuid.uuid4()}.{extension}"

        try:
            await asyncio.to_thread(self._write, filename, audio)
        except OSError as e:
            logger.error(f"Failed to store synthesized audio {filename}: {e}")
            raise SynthesisError("Could not store generated audio") from e

        logger.debug(f"Stored reply audio {filename} ({len(audio)} bytes)")
        return f"{self._url_prefix}/{filename}"

    def resolve(self, filename: str) -> Path | None:
        """Path of a stored clip, or None for unknown or non-plain names."""
        if not filename or Path(filename).name != filename or filename.startswith("."):
            return None
        path = self._audio_dir / filename
        return path if path.is_file() else None

    def _write(self, filename: str, audio: bytes) -> None:
        self._audio_dir.mkdir(parents=True, exist_ok=True)
        (self._audio_dir / filename).write_bytes(audio)
