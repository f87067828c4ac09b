"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables.
See .env.example for required variables.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # ==========================================================================
    # API Keys
    # ==========================================================================
    groq_api_key: SecretStr = Field(description="Groq API key for LLM")
    deepgram_api_key: SecretStr = Field(description="Deepgram API key for STT")

    # ==========================================================================
    # Application
    # ==========================================================================
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Deployment environment"
    )
    log_dir: str = Field(default="logs", description="Directory for rotated log files (production)")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API (the browser client)",
    )

    # ==========================================================================
    # LLM Configuration
    # ==========================================================================
    llm_model: str = Field(
        default="llama-3.3-70b-versatile",
        description="Groq chat model used for tutor replies",
    )
    llm_max_tokens: int = Field(default=500, description="Maximum reply tokens")
    llm_temperature: float = Field(default=0.7, description="Reply creativity")

    # ==========================================================================
    # STT Configuration
    # ==========================================================================
    stt_model: str = Field(default="nova-2", description="Deepgram model")
    stt_language: str = Field(default="en-US", description="Primary spoken language")
    stt_alternative_languages: list[str] = Field(
        default_factory=lambda: ["es-ES"],
        description="Extra languages considered by automatic language detection",
    )
    stt_sample_rate: int = Field(
        default=48000,
        description="Sample rate of browser recordings (webm/opus)",
    )

    # ==========================================================================
    # TTS / Audio Output
    # ==========================================================================
    audio_dir: str = Field(
        default="public/audio",
        description="Directory where synthesized replies are written",
    )
    audio_url_prefix: str = Field(
        default="/audio",
        description="Public URL prefix under which synthesized replies are served",
    )

    # ==========================================================================
    # Upload Limits
    # ==========================================================================
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum accepted audio upload size",
    )
    allowed_audio_types: list[str] = Field(
        default_factory=lambda: ["audio/wav", "audio/mpeg", "audio/mp4", "audio/webm"],
        description="Accepted audio media types for voice turns",
    )

    # ==========================================================================
    # Sessions
    # ==========================================================================
    session_ttl_seconds: int = Field(
        default=3600,
        gt=0,
        description="Inactivity before a session is dropped by the sweeper",
    )
    session_sweep_interval_seconds: int | None = Field(
        default=None,
        gt=0,
        description="Sweep interval; defaults to the session TTL",
    )

    # ==========================================================================
    # Tutor Profiles
    # ==========================================================================
    default_profile_id: str = Field(
        default="maki",
        description="Profile used when a turn does not name one",
    )
    profiles_path: str | None = Field(
        default=None,
        description="Optional YAML file replacing the built-in tutor profiles",
    )

    # ==========================================================================
    # Derived Properties
    # ==========================================================================
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(seconds=self.session_ttl_seconds)

    @property
    def sweep_interval(self) -> timedelta:
        seconds = self.session_sweep_interval_seconds
        if seconds is None:
            seconds = self.session_ttl_seconds
        return timedelta(seconds=seconds)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Use dependency injection in FastAPI:
        settings: Settings = Depends(get_settings)
    """
    return Settings()  # type: ignore[call-arg]  # loads from env
