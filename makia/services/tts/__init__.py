"""Text-to-Speech services (Edge TTS).

- EdgeTTSService: Microsoft Edge neural voices (MP3 output)
- Synthesizer: stores synthesized replies and hands back their URL
"""

from makia.services.tts.edge import EdgeTTSService
from makia.services.tts.exceptions import (
    TTSConnectionError,
    TTSServiceError,
    TTSSynthesisError,
    TTSUnsupportedEncodingError,
)
from makia.services.tts.protocol import SynthesisMetadata, TextToSpeech
from makia.services.tts.synthesizer import Synthesizer

__all__ = [
    # Services
    "EdgeTTSService",
    "Synthesizer",
    # Protocol
    "TextToSpeech",
    # Data types
    "SynthesisMetadata",
    # Exceptions
    "TTSServiceError",
    "TTSSynthesisError",
    "TTSConnectionError",
    "TTSUnsupportedEncodingError",
]
