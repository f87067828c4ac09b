"""Tests for settings and logging helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest
from loguru import logger
from pydantic import ValidationError

from makia.config import Settings
from makia.logging_config import get_logger, preview, setup_logging


class TestSettings:
    """Tests for Settings defaults and derived values."""

    def test_defaults(self, settings) -> None:
        assert settings.llm_model == "llama-3.3-70b-versatile"
        assert settings.stt_language == "en-US"
        assert settings.stt_alternative_languages == ["es-ES"]
        assert settings.default_profile_id == "maki"
        assert settings.max_upload_bytes == 10 * 1024 * 1024
        assert "audio/webm" in settings.allowed_audio_types
        assert not settings.is_production

    def test_session_timing(self, settings_factory) -> None:
        settings = settings_factory(session_ttl_seconds=600)

        assert settings.session_ttl == timedelta(minutes=10)
        assert settings.sweep_interval == timedelta(minutes=10)

        settings = settings_factory(session_ttl_seconds=600, session_sweep_interval_seconds=60)
        assert settings.sweep_interval == timedelta(minutes=1)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"session_ttl_seconds": 0},
            {"session_ttl_seconds": -60},
            {"session_sweep_interval_seconds": 0},
            {"session_sweep_interval_seconds": -1},
        ],
    )
    def test_session_timing_must_be_positive(self, settings_factory, overrides) -> None:
        with pytest.raises(ValidationError):
            settings_factory(**overrides)

    def test_api_keys_required(self, monkeypatch) -> None:
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        monkeypatch.delenv("DEEPGRAM_API_KEY", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("GROQ_API_KEY", "env-groq")
        monkeypatch.setenv("DEEPGRAM_API_KEY", "env-deepgram")
        monkeypatch.setenv("SESSION_TTL_SECONDS", "120")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.groq_api_key.get_secret_value() == "env-groq"
        assert settings.session_ttl_seconds == 120


class TestPreview:
    """Tests for log previews of learner text."""

    def test_short_text_unchanged(self) -> None:
        assert preview("What is AI?") == "What is AI?"

    def test_long_text_truncated(self) -> None:
        assert preview("x" * 80) == "x" * 50 + "..."

    def test_whitespace_collapsed(self) -> None:
        assert preview("line one\n\n  line two") == "line one line two"

    def test_empty(self) -> None:
        assert preview("") == "<empty>"
        assert preview(None) == "<empty>"


class TestSetupLogging:
    """Tests for settings-driven log sinks."""

    @pytest.fixture(autouse=True)
    def reset_loguru(self):
        yield
        logger.remove()

    def test_production_writes_log_files(self, settings_factory, tmp_path) -> None:
        log_dir = tmp_path / "logs"
        settings = settings_factory(environment="production", log_dir=str(log_dir))

        setup_logging(settings)
        get_logger("makia.tests").error("Synthesis failed")

        assert list(log_dir.glob("makia_*.log"))
        errors = list(log_dir.glob("errors_*.log"))
        assert errors
        assert "Synthesis failed" in errors[0].read_text(encoding="utf-8")

    def test_development_has_no_files(self, settings_factory, tmp_path) -> None:
        log_dir = tmp_path / "logs"
        settings = settings_factory(log_dir=str(log_dir))

        setup_logging(settings)
        get_logger("makia.tests").info("Hello")

        assert not log_dir.exists()
