"""FastAPI application entry point.

MAKIA - voice and text tutoring assistant with reward points.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from makia.api.routes import audio, health, metrics, turns
from makia.config import Settings, get_settings
from makia.core.exceptions import TurnError
from makia.core.pipeline import ConversationPipeline
from makia.core.profiles import ProfileCatalog
from makia.core.session import SessionStore, SessionSweeper
from makia.logging_config import get_logger, setup_logging
from makia.services.llm.groq import GroqService
from makia.services.llm.responder import Responder
from makia.services.stt.deepgram import DeepgramService
from makia.services.stt.transcriber import Transcriber
from makia.services.tts.edge import EdgeTTSService
from makia.services.tts.synthesizer import Synthesizer

logger = get_logger(__name__)


def load_profiles(settings: Settings) -> ProfileCatalog:
    """Built-in tutors, or the YAML file named by ``profiles_path``."""
    if settings.profiles_path:
        return ProfileCatalog.from_yaml(settings.profiles_path, settings.default_profile_id)
    return ProfileCatalog.builtin(settings.default_profile_id)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Startup:
    - Initialize logging
    - Load tutor profiles, build services and the turn pipeline
    - Start the session sweeper

    Shutdown:
    - Stop the sweeper
    - Close the LLM client
    """
    settings: Settings = app.state.settings

    # Startup
    setup_logging(settings)

    profiles = load_profiles(settings)
    llm = GroqService(settings=settings)
    synthesizer = Synthesizer.from_settings(EdgeTTSService(), settings)
    store = SessionStore()

    app.state.synthesizer = synthesizer
    app.state.pipeline = ConversationPipeline(
        profiles=profiles,
        transcriber=Transcriber.from_settings(DeepgramService(settings=settings), settings),
        responder=Responder.from_settings(llm, settings),
        synthesizer=synthesizer,
        store=store,
    )

    sweeper = SessionSweeper(store, settings.session_ttl, settings.sweep_interval)
    sweeper.start()

    logger.info(
        f"MAKIA ready: {len(profiles)} tutors, in-memory sessions "
        f"expire after {settings.session_ttl_seconds}s idle"
    )

    yield

    # Shutdown
    await sweeper.stop()
    await llm.close()


async def turn_error_handler(request: Request, exc: TurnError) -> JSONResponse:
    """Render turn failures as ``{success, error, retryable}``."""
    return JSONResponse(
        {"success": False, "error": str(exc), "retryable": exc.retryable},
        status_code=exc.status_code,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="MAKIA API",
        description="Voice and text tutoring assistant",
        version="0.1.0",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TurnError, turn_error_handler)

    # Health check routes
    app.include_router(health.router, tags=["Health"])

    # Tutoring turns and tutor listing
    app.include_router(turns.router, prefix="/api", tags=["Turns"])

    # Synthesized reply audio
    app.include_router(audio.router, tags=["Audio"])

    # Metrics endpoint for Prometheus scraping
    app.include_router(metrics.router, tags=["Observability"])

    return app
