"""FastAPI dependencies resolving the objects built in the app lifespan."""

from fastapi import Request

from makia.config import Settings
from makia.core.pipeline import ConversationPipeline
from makia.core.profiles import ProfileCatalog
from makia.core.session import SessionStore
from makia.services.tts.synthesizer import Synthesizer


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with (see ``create_app``)."""
    return request.app.state.settings


def get_pipeline(request: Request) -> ConversationPipeline:
    return request.app.state.pipeline


def get_profiles(request: Request) -> ProfileCatalog:
    return get_pipeline(request).profiles


def get_store(request: Request) -> SessionStore:
    return get_pipeline(request).store


def get_synthesizer(request: Request) -> Synthesizer:
    return request.app.state.synthesizer
