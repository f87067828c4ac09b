"""Tutoring turn endpoints used by the browser client.

Field names follow the client's wire format (``sessionId``,
``pointsEarned``, ``audioUrl``); ``professor`` is the tutor profile id.
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel, ConfigDict, Field

from makia.api.dependencies import get_app_settings, get_pipeline, get_profiles
from makia.config import Settings
from makia.core.exceptions import PayloadTooLargeError, UnsupportedMediaError
from makia.core.pipeline import ConversationPipeline
from makia.core.profiles import ProfileCatalog
from makia.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


class TextTurnRequest(BaseModel):
    """Request body for a typed turn."""

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    professor: str | None = None
    session_id: str | None = Field(default=None, alias="sessionId")


class TextTurnResponse(BaseModel):
    """Response for a typed turn."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    response: str
    sentiment: str
    points_earned: int = Field(alias="pointsEarned")
    professor: str


class VoiceTurnResponse(TextTurnResponse):
    """Response for a spoken turn."""

    transcription: str
    audio_url: str = Field(alias="audioUrl")


class ProfessorSummary(BaseModel):
    id: str
    name: str
    personality: str


class ProfessorListResponse(BaseModel):
    professors: list[ProfessorSummary]


def normalize_media_type(content_type: str | None) -> str | None:
    """Strip parameters: ``audio/webm;codecs=opus`` -> ``audio/webm``."""
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower()


async def read_audio_upload(
    audio: UploadFile | None,
    settings: Settings,
) -> tuple[bytes | None, str | None]:
    """Apply the upload boundary checks and read the payload.

    Raises:
        UnsupportedMediaError: Media type not in ``allowed_audio_types``
        PayloadTooLargeError: Payload above ``max_upload_bytes``
    """
    if audio is None:
        return None, None

    media_type = normalize_media_type(audio.content_type)
    if media_type not in settings.allowed_audio_types:
        logger.warning(f"Rejected audio upload of type {audio.content_type}")
        raise UnsupportedMediaError(audio.content_type)

    data = await audio.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        logger.warning(f"Rejected audio upload above {settings.max_upload_bytes} bytes")
        raise PayloadTooLargeError(len(data), settings.max_upload_bytes)

    return data, media_type


@router.post("/voice", response_model=VoiceTurnResponse)
async def voice_turn(
    audio: UploadFile | None = File(None),
    professor: str | None = Form(None),
    session_id: str | None = Form(None, alias="sessionId"),
    pipeline: ConversationPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_app_settings),
) -> VoiceTurnResponse:
    """Transcribe a recorded question, answer it, and speak the answer."""
    try:
        audio_bytes, media_type = await read_audio_upload(audio, settings)
    finally:
        if audio is not None:
            await audio.close()

    result = await pipeline.handle_voice_turn(
        audio_bytes,
        professor,
        session_id,
        encoding_hint=media_type,
    )

    return VoiceTurnResponse(
        transcription=result.transcript,
        response=result.reply_text,
        audio_url=result.audio_handle,
        sentiment=result.sentiment.value,
        points_earned=result.points_awarded,
        professor=result.profile_display_name,
    )


@router.post("/text", response_model=TextTurnResponse)
async def text_turn(
    request: TextTurnRequest,
    pipeline: ConversationPipeline = Depends(get_pipeline),
) -> TextTurnResponse:
    """Answer a typed question."""
    result = await pipeline.handle_text_turn(
        request.message,
        request.professor,
        request.session_id,
    )

    return TextTurnResponse(
        response=result.reply_text,
        sentiment=result.sentiment.value,
        points_earned=result.points_awarded,
        professor=result.profile_display_name,
    )


@router.get("/professors", response_model=ProfessorListResponse)
async def list_professors(
    profiles: ProfileCatalog = Depends(get_profiles),
) -> ProfessorListResponse:
    """List the selectable tutor profiles."""
    return ProfessorListResponse(
        professors=[
            ProfessorSummary(id=p.id, name=p.display_name, personality=p.personality)
            for p in profiles.list()
        ]
    )
