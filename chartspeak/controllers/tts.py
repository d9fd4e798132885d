"""Text-to-speech controller backed by Amazon Polly."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from chartspeak.services import (
    EmptySpeechTextError,
    SpeechSynthesisError,
    SpeechSynthesisService,
    get_speech_synthesis_service,
)
from chartspeak.views import TextToSpeechRequest

router = APIRouter(prefix="/api/tts", tags=["tts"])

SpeechServiceDep = Annotated[SpeechSynthesisService, Depends(get_speech_synthesis_service)]


@router.post("", response_class=Response)
async def text_to_speech(request: TextToSpeechRequest, service: SpeechServiceDep) -> Response:
    """Narrate insights text (markdown stripped) and return MP3 bytes."""

    try:
        result = await service.synthesize(request.text, voice_id=request.voice_id)
    except EmptySpeechTextError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SpeechSynthesisError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return Response(
        content=result.audio_bytes,
        media_type=result.media_type,
        headers={"X-Voice-Id": result.voice_id},
    )
