"""Serves synthesized reply audio."""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, JSONResponse

from makia.api.dependencies import get_synthesizer
from makia.services.tts.synthesizer import Synthesizer

router = APIRouter()

MEDIA_TYPES = {".mp3": "audio/mpeg", ".ogg": "audio/ogg", ".wav": "audio/wav"}


@router.get("/audio/{filename}")
async def get_audio(
    filename: str,
    synthesizer: Synthesizer = Depends(get_synthesizer),
):
    """Serve a generated reply clip."""
    audio_path = synthesizer.resolve(filename)
    if audio_path is None:
        return JSONResponse({"error": "Audio not found"}, status_code=404)

    return FileResponse(
        audio_path,
        media_type=MEDIA_TYPES.get(audio_path.suffix, "application/octet-stream"),
        filename=filename,
    )
