"""Core tutoring components.

This module provides the core orchestration for tutoring turns:
- ProfileCatalog: Tutor personas and their voices
- SessionStore / SessionSweeper: In-memory sessions with idle expiry
- ConversationPipeline: Orchestrates STT -> sentiment -> LLM -> TTS
"""

from makia.core.pipeline import (
    ConversationPipeline,
    FallbackReply,
    GeneratedReply,
    TextTurnResult,
    TurnState,
    TurnTrace,
    VoiceTurnResult,
)
from makia.core.profiles import ProfileCatalog, TutorProfile, VoiceProfile
from makia.core.sentiment import Sentiment, classify
from makia.core.session import (
    ConversationTurn,
    SessionStore,
    SessionSweeper,
    TutorSession,
)

__all__ = [
    # Profiles
    "ProfileCatalog",
    "TutorProfile",
    "VoiceProfile",
    # Sentiment
    "Sentiment",
    "classify",
    # Sessions
    "ConversationTurn",
    "TutorSession",
    "SessionStore",
    "SessionSweeper",
    # Pipeline
    "ConversationPipeline",
    "TurnState",
    "TurnTrace",
    "GeneratedReply",
    "FallbackReply",
    "VoiceTurnResult",
    "TextTurnResult",
]
