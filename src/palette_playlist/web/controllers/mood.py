"""
Mood analysis endpoints.

Maps an image or a hex palette to audio targets without touching Spotify.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from palette_playlist.application.commands.generate_playlist import AnalyzeMoodCommand
from palette_playlist.domain.value_objects.palette import InvalidColorError
from palette_playlist.infrastructure.service_factory import ServiceFactory, get_service_factory
from palette_playlist.infrastructure.services.image_palette_extractor import (
    ImageDecodeError,
    ImageDownloadError,
    ImageTooLargeError,
)
from palette_playlist.web.middleware.logging import get_request_logger


router = APIRouter(tags=["mood"])


class MoodAnalysisResponse(BaseModel):
    """Response model for mood analysis."""
    targets: Dict[str, float]
    analysis: Dict[str, Any]


@router.post("/analyze", response_model=MoodAnalysisResponse)
async def analyze_mood(
    command: AnalyzeMoodCommand,
    request: Request,
    factory: ServiceFactory = Depends(get_service_factory),
):
    """
    Derive audio targets from an image or a ranked hex palette.

    The image (URL or base64) is used when present; otherwise palette_hex.
    """
    logger = get_request_logger(request)

    if not command.has_mood_source():
        raise HTTPException(
            status_code=400,
            detail="Provide image_url, image_base64 or a non-empty palette_hex"
        )

    try:
        mapping = await factory.create_mood_analyzer().analyze(command)

    except (InvalidColorError, ImageDecodeError) as e:
        logger.warning("Invalid mood input", error=str(e))
        raise HTTPException(status_code=422, detail=str(e))
    except ImageTooLargeError as e:
        logger.warning("Image rejected", error=str(e))
        raise HTTPException(status_code=413, detail=str(e))
    except ImageDownloadError as e:
        logger.warning("Image download failed", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))

    return MoodAnalysisResponse(
        targets=mapping.targets.to_dict(),
        analysis=mapping.analysis.to_dict(),
    )
