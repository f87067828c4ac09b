"""Health check endpoints.

Provides:
- Basic health check (GET /health)
- Detailed health check with configuration status (GET /health/detailed)
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from makia.api.dependencies import get_app_settings, get_pipeline, get_synthesizer
from makia.config import Settings
from makia.core.pipeline import ConversationPipeline
from makia.services.tts.synthesizer import Synthesizer

router = APIRouter()


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check response."""

    status: str
    checks: dict[str, str]
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Simple status indicating the API is running.
    """
    return HealthResponse(status="healthy")


@router.get("/health/detailed", response_model=DetailedHealthResponse)
async def detailed_health_check(
    settings: Settings = Depends(get_app_settings),
    pipeline: ConversationPipeline = Depends(get_pipeline),
    synthesizer: Synthesizer = Depends(get_synthesizer),
) -> DetailedHealthResponse:
    """Detailed health check including configuration status.

    Checks:
    - External service configuration (API keys present; APIs are not called)
    - Audio output directory
    - Loaded profiles and live sessions

    Returns:
        Status with individual component checks.
    """
    checks = {}

    checks["groq"] = "configured" if settings.groq_api_key.get_secret_value() else "missing"
    checks["deepgram"] = (
        "configured" if settings.deepgram_api_key.get_secret_value() else "missing"
    )

    audio_dir = synthesizer.audio_dir
    if not audio_dir.exists():
        checks["audio_dir"] = "pending"  # Created on first synthesis
    elif audio_dir.is_dir():
        checks["audio_dir"] = "ok"
    else:
        checks["audio_dir"] = "error: not a directory"

    checks["profiles"] = str(len(pipeline.profiles))
    checks["sessions"] = str(len(pipeline.store))

    healthy = (
        checks["groq"] == "configured"
        and checks["deepgram"] == "configured"
        and not checks["audio_dir"].startswith("error")
    )

    return DetailedHealthResponse(
        status="healthy" if healthy else "degraded",
        checks=checks,
        version="0.1.0",
    )
