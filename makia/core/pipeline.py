"""Tutor turn pipeline.

Orchestrates one learner turn:
- Voice: audio -> STT -> sentiment -> LLM -> TTS -> session update
- Text: message -> sentiment -> LLM -> session update

External calls run strictly in sequence. A failed LLM call degrades to a
fixed apology (``FallbackReply``); a failed STT or TTS call fails the turn
before anything is written to the session store.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from makia.core.exceptions import (
    EmptyAudioError,
    EmptyMessageError,
    GenerationError,
    NoSpeechError,
    TurnError,
)
from makia.core.profiles import ProfileCatalog, TutorProfile
from makia.core.sentiment import Sentiment, classify
from makia.core.session import ConversationTurn, SessionStore, utc_now
from makia.logging_config import get_logger, preview
from makia.observability.metrics import (
    record_generation_fallback,
    record_stage_latency,
    record_turn_metrics,
)
from makia.prompts.tutors import APOLOGY_REPLY

if TYPE_CHECKING:
    from makia.services.llm.responder import Responder
    from makia.services.stt.transcriber import Transcriber
    from makia.services.tts.synthesizer import Synthesizer

logger: Any = get_logger(__name__)

# Reward points
VOICE_BASE_POINTS = 50
CONFUSED_BONUS_POINTS = 25
TEXT_POINTS = 25


class TurnState(Enum):
    """Lifecycle of a single turn."""

    RECEIVED = auto()
    TRANSCRIBED = auto()  # Voice only
    CLASSIFIED = auto()
    GENERATED = auto()
    SYNTHESIZED = auto()  # Voice only
    RECORDED = auto()
    COMPLETED = auto()
    FAILED = auto()  # Terminal, reachable from any state


class TurnChannel(str, Enum):
    VOICE = "voice"
    TEXT = "text"


@dataclass
class TurnTrace:
    """States visited by one turn, and where it failed if it did."""

    channel: TurnChannel
    session_id: str | None = None
    states: list[TurnState] = field(default_factory=lambda: [TurnState.RECEIVED])
    failed_at: TurnState | None = None
    error: TurnError | None = None
    started_at: float = field(default_factory=time.perf_counter)

    @property
    def state(self) -> TurnState:
        return self.states[-1]

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started_at) * 1000

    def advance(self, state: TurnState) -> None:
        if self.state is TurnState.FAILED:
            raise RuntimeError("Turn already failed")
        logger.debug(f"{self.channel.value} turn {self.state.name} -> {state.name}")
        self.states.append(state)

    def fail(self, error: TurnError) -> None:
        self.failed_at = self.state
        self.error = error
        self.states.append(TurnState.FAILED)


# =============================================================================
# Stage outcomes
# =============================================================================


@dataclass(frozen=True, slots=True)
class GeneratedReply:
    """The model answered."""

    text: str

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class FallbackReply:
    """The model failed; the learner gets the apology instead."""

    error: GenerationError
    text: str = APOLOGY_REPLY

    @property
    def is_fallback(self) -> bool:
        return True


ReplyOutcome = GeneratedReply | FallbackReply


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class VoiceTurnResult:
    transcript: str
    reply_text: str
    audio_handle: str
    sentiment: Sentiment
    points_awarded: int
    profile_display_name: str


@dataclass(frozen=True, slots=True)
class TextTurnResult:
    reply_text: str
    sentiment: Sentiment
    points_awarded: int
    profile_display_name: str


def voice_points(sentiment: Sentiment) -> int:
    """Base points for speaking, plus a bonus for admitting confusion."""
    bonus = CONFUSED_BONUS_POINTS if sentiment is Sentiment.CONFUSED else 0
    return VOICE_BASE_POINTS + bonus


class ConversationPipeline:
    """Runs voice and text turns against injected services and session store."""

    def __init__(
        self,
        *,
        profiles: ProfileCatalog,
        transcriber: Transcriber,
        responder: Responder,
        synthesizer: Synthesizer,
        store: SessionStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._profiles = profiles
        self._transcriber = transcriber
        self._responder = responder
        self._synthesizer = synthesizer
        self._store = store
        self._clock = clock

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def profiles(self) -> ProfileCatalog:
        return self._profiles

    async def handle_voice_turn(
        self,
        audio_bytes: bytes | None,
        profile_id: str | None,
        session_id: str | None,
        encoding_hint: str | None = None,
        *,
        trace: TurnTrace | None = None,
    ) -> VoiceTurnResult:
        """Process a spoken turn end to end.

        Raises:
            EmptyAudioError: No audio payload
            UnknownProfileError: Profile id not in the catalog
            TranscriptionError: STT failed
            NoSpeechError: STT heard nothing
            SynthesisError: TTS failed (session left untouched)
        """
        trace = trace or TurnTrace(channel=TurnChannel.VOICE)
        trace.session_id = session_id

        with self._failure_guard(trace):
            if not audio_bytes:
                raise EmptyAudioError()
            profile = self._profiles.get(profile_id)
            logger.info(
                f"Processing audio: {len(audio_bytes)} bytes "
                f"(profile: {profile.id}, session: {session_id or '-'})"
            )

            with self._timed("transcription"):
                transcript = await self._transcriber.transcribe(audio_bytes, encoding_hint)
            if not transcript.strip():
                raise NoSpeechError()
            trace.advance(TurnState.TRANSCRIBED)

            sentiment = classify(transcript)
            trace.advance(TurnState.CLASSIFIED)

            reply = await self._reply(profile, transcript, sentiment)
            trace.advance(TurnState.GENERATED)

            with self._timed("synthesis"):
                audio_handle = await self._synthesizer.synthesize(reply.text, profile.voice)
            trace.advance(TurnState.SYNTHESIZED)

            points = voice_points(sentiment)
            await self._record(trace, profile, transcript, reply, sentiment, points)

        self._complete(trace, points)
        return VoiceTurnResult(
            transcript=transcript,
            reply_text=reply.text,
            audio_handle=audio_handle,
            sentiment=sentiment,
            points_awarded=points,
            profile_display_name=profile.display_name,
        )

    async def handle_text_turn(
        self,
        message: str | None,
        profile_id: str | None,
        session_id: str | None,
        *,
        trace: TurnTrace | None = None,
    ) -> TextTurnResult:
        """Process a typed turn (no speech synthesis).

        Raises:
            EmptyMessageError: Message blank after trimming
            UnknownProfileError: Profile id not in the catalog
        """
        trace = trace or TurnTrace(channel=TurnChannel.TEXT)
        trace.session_id = session_id

        with self._failure_guard(trace):
            if not message or not message.strip():
                raise EmptyMessageError()
            profile = self._profiles.get(profile_id)
            logger.info(
                f"Processing message: {preview(message)} "
                f"(profile: {profile.id}, session: {session_id or '-'})"
            )

            sentiment = classify(message)
            trace.advance(TurnState.CLASSIFIED)

            reply = await self._reply(profile, message, sentiment)
            trace.advance(TurnState.GENERATED)

            points = TEXT_POINTS
            await self._record(trace, profile, message, reply, sentiment, points)

        self._complete(trace, points)
        return TextTurnResult(
            reply_text=reply.text,
            sentiment=sentiment,
            points_awarded=points,
            profile_display_name=profile.display_name,
        )

    async def _reply(
        self,
        profile: TutorProfile,
        user_text: str,
        sentiment: Sentiment,
    ) -> ReplyOutcome:
        try:
            with self._timed("generation"):
                text = await self._responder.generate(profile, user_text, sentiment)
        except GenerationError as e:
            logger.warning(f"LLM unavailable, using fallback reply: {e}")
            record_generation_fallback()
            return FallbackReply(error=e)
        return GeneratedReply(text=text)

    async def _record(
        self,
        trace: TurnTrace,
        profile: TutorProfile,
        user_text: str,
        reply: ReplyOutcome,
        sentiment: Sentiment,
        points: int,
    ) -> None:
        turn = ConversationTurn(
            user_text=user_text,
            bot_text=reply.text,
            points_awarded=points,
            sentiment=sentiment,
            channel=trace.channel.value,
            created_at=self._clock(),
        )
        session = await self._store.record_turn(trace.session_id, profile.id, turn)
        if session is not None:
            logger.debug(
                f"Session {session.session_id}: {len(session.turns)} turns, "
                f"{session.total_points} points"
            )
        trace.advance(TurnState.RECORDED)

    def _complete(self, trace: TurnTrace, points: int) -> None:
        trace.advance(TurnState.COMPLETED)
        record_turn_metrics(trace.channel.value, "completed", points)
        logger.info(
            f"{trace.channel.value.capitalize()} turn completed in {trace.elapsed_ms:.0f}ms "
            f"(+{points} points)"
        )

    @contextmanager
    def _failure_guard(self, trace: TurnTrace) -> Iterator[None]:
        try:
            yield
        except TurnError as e:
            trace.fail(e)
            record_turn_metrics(trace.channel.value, type(e).__name__)
            log = logger.error if e.status_code >= 500 else logger.warning
            log(f"{trace.channel.value.capitalize()} turn failed at {trace.failed_at.name}: {e}")
            raise

    @contextmanager
    def _timed(self, stage: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            record_stage_latency(stage, (time.perf_counter() - start) * 1000)
