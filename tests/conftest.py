"""Shared pytest fixtures for MAKIA tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from makia.config import Settings
from makia.core.pipeline import ConversationPipeline
from makia.core.profiles import ProfileCatalog, VoiceProfile
from makia.core.session import SessionStore
from makia.services.llm.exceptions import LLMConnectionError
from makia.services.llm.responder import Responder
from makia.services.stt.protocol import RecognitionConfig
from makia.services.stt.transcriber import Transcriber
from makia.services.tts.exceptions import TTSSynthesisError
from makia.services.tts.synthesizer import Synthesizer


def build_settings(**overrides) -> Settings:
    """Create a Settings object with safe test defaults."""
    base = {
        "groq_api_key": "test-groq-key",
        "deepgram_api_key": "test-deepgram-key",
    }
    base.update(overrides)
    return Settings(**base)


@pytest.fixture
def settings_factory(tmp_path: Path) -> Callable[..., Settings]:
    """Return a factory to build Settings with overrides.

    Synthesized audio goes to a per-test temporary directory.
    """

    def factory(**overrides) -> Settings:
        overrides.setdefault("audio_dir", str(tmp_path / "audio"))
        return build_settings(**overrides)

    return factory


@pytest.fixture
def settings(settings_factory: Callable[..., Settings]) -> Settings:
    """Default Settings fixture."""
    return settings_factory()


# =============================================================================
# Fake Capabilities
# =============================================================================


class FakeSpeechToText:
    """Returns canned segments; records every call."""

    def __init__(self, segments: list[str] | None = None) -> None:
        self.segments = ["What is AI?"] if segments is None else segments
        self.error: Exception | None = None
        self.calls: list[tuple[bytes, RecognitionConfig]] = []

    async def recognize(self, audio_bytes: bytes, config: RecognitionConfig) -> list[str]:
        self.calls.append((audio_bytes, config))
        if self.error is not None:
            raise self.error
        return list(self.segments)


class FakeLanguageModel:
    """Returns a canned reply, or raises once ``fail()`` is called."""

    def __init__(self, reply: str = "AI is the study of machines that learn.") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[dict] = []

    def fail(self) -> None:
        self.error = LLMConnectionError("Failed to connect to Groq API")

    async def complete(
        self,
        system_prompt: str,
        user_text: str,
        *,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_text": user_text,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


class FakeTextToSpeech:
    """Returns fixed MP3-ish bytes, or raises once ``fail()`` is called."""

    def __init__(self, audio: bytes = b"ID3fake-mp3-audio") -> None:
        self.audio = audio
        self.error: Exception | None = None
        self.calls: list[tuple[str, VoiceProfile]] = []

    def fail(self) -> None:
        self.error = TTSSynthesisError("No audio was received")

    async def synthesize(self, text: str, voice: VoiceProfile) -> bytes:
        self.calls.append((text, voice))
        if self.error is not None:
            raise self.error
        return self.audio


@pytest.fixture
def fake_stt() -> FakeSpeechToText:
    return FakeSpeechToText()


@pytest.fixture
def fake_llm() -> FakeLanguageModel:
    return FakeLanguageModel()


@pytest.fixture
def fake_tts() -> FakeTextToSpeech:
    return FakeTextToSpeech()


# =============================================================================
# Pipeline Fixtures
# =============================================================================


@pytest.fixture
def profiles() -> ProfileCatalog:
    return ProfileCatalog.builtin("maki")


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def synthesizer(fake_tts: FakeTextToSpeech, settings: Settings) -> Synthesizer:
    return Synthesizer.from_settings(fake_tts, settings)


@pytest.fixture
def pipeline(
    profiles: ProfileCatalog,
    store: SessionStore,
    synthesizer: Synthesizer,
    fake_stt: FakeSpeechToText,
    fake_llm: FakeLanguageModel,
    settings: Settings,
) -> ConversationPipeline:
    """Pipeline wired to fake STT, LLM and TTS backends."""
    return ConversationPipeline(
        profiles=profiles,
        transcriber=Transcriber.from_settings(fake_stt, settings),
        responder=Responder.from_settings(fake_llm, settings),
        synthesizer=synthesizer,
        store=store,
    )


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================


@pytest.fixture
def client_factory(
    pipeline: ConversationPipeline,
    synthesizer: Synthesizer,
    settings_factory: Callable[..., Settings],
) -> Callable[..., Generator]:
    """Build TestClients whose app uses the fake-backed pipeline."""
    from contextlib import contextmanager

    from fastapi.testclient import TestClient

    from makia.main import create_app

    @contextmanager
    def factory(**overrides):
        app = create_app(settings_factory(**overrides))
        with TestClient(app) as client:
            # The lifespan built real services; swap in the fakes
            app.state.pipeline = pipeline
            app.state.synthesizer = synthesizer
            yield client

    return factory


@pytest.fixture
def test_client(client_factory) -> Generator:
    """FastAPI TestClient with test settings and fake backends."""
    with client_factory() as client:
        yield client
