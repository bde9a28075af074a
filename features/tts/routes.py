"""REST routes exposing story narration."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from core.exceptions import ServiceError, ValidationError
from core.http.errors import (
    GENERIC_ERROR_MESSAGE,
    client_error_body,
    format_error_context,
    public_message,
    status_code_for,
)
from features.tts.dependencies import get_tts_service
from features.tts.schemas.requests import NarrationRequest
from features.tts.schemas.responses import ErrorResponse, NarrationResponse, VoicesResponse
from features.tts.service import TTSService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["TTS"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.post(
    "/tts",
    summary="Narrate a story of any length",
    response_model=NarrationResponse,
    responses=_ERROR_RESPONSES,
)
async def narrate_story_endpoint(
    request: NarrationRequest,
    service: TTSService = Depends(get_tts_service),
) -> JSONResponse:
    """Chunk, synthesize, merge and store the story; return its public URL."""

    return await _narrate(service.synthesize_story, request)


@router.post(
    "/tts/single",
    summary="Narrate short text in a single synthesis call",
    response_model=NarrationResponse,
    responses=_ERROR_RESPONSES,
)
async def narrate_single_endpoint(
    request: NarrationRequest,
    service: TTSService = Depends(get_tts_service),
) -> JSONResponse:
    return await _narrate(service.synthesize_single, request)


@router.get("/voices", summary="List supported voices", response_model=VoicesResponse)
async def list_voices_endpoint(service: TTSService = Depends(get_tts_service)) -> VoicesResponse:
    return VoicesResponse(voices=service.voices)


async def _narrate(
    handler: Callable[[str, str, str | None], Awaitable[str]],
    request: NarrationRequest,
) -> JSONResponse:
    try:
        audio_url = await handler(request.text, request.voice, request.language)
    except ValidationError as exc:
        logger.warning("Narration request rejected: %s", format_error_context(exc))
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=client_error_body(str(exc)))
    except ServiceError as exc:
        logger.error("Narration failed: %s", format_error_context(exc))
        return JSONResponse(
            status_code=status_code_for(exc),
            content=client_error_body(public_message(exc)),
        )
    except Exception as exc:
        logger.exception("Unexpected narration error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=client_error_body(GENERIC_ERROR_MESSAGE),
        )

    payload = NarrationResponse(audio_url=audio_url)
    return JSONResponse(status_code=status.HTTP_200_OK, content=payload.model_dump(by_alias=True))


__all__ = ["router"]
