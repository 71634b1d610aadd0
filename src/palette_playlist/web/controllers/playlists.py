"""
Playlist endpoints.

Generates Spotify playlists from image or palette moods.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from palette_playlist.application.commands.generate_playlist import GeneratePlaylistCommand
from palette_playlist.application.services.playlist_generator import PlaylistGenerationResult
from palette_playlist.domain.value_objects.palette import InvalidColorError
from palette_playlist.infrastructure.clients.spotify_client import SpotifyAPIError
from palette_playlist.infrastructure.service_factory import ServiceFactory, get_service_factory
from palette_playlist.infrastructure.services.image_palette_extractor import (
    ImageDecodeError,
    ImageDownloadError,
    ImageTooLargeError,
)
from palette_playlist.web.dependencies import get_access_token
from palette_playlist.web.middleware.logging import get_request_logger


router = APIRouter(tags=["playlists"])


def spotify_error_to_http(error: SpotifyAPIError) -> HTTPException:
    """Translate a Spotify API failure into an HTTP error for the caller."""
    if error.status == 401:
        return HTTPException(status_code=401, detail="Spotify access token rejected")
    return HTTPException(status_code=502, detail=f"Spotify API error: {error.status}")


@router.post("/generate", response_model=PlaylistGenerationResult)
async def generate_playlist(
    command: GeneratePlaylistCommand,
    request: Request,
    access_token: str = Depends(get_access_token),
    factory: ServiceFactory = Depends(get_service_factory),
):
    """
    Create a playlist whose tracks match the mood of an image or palette.

    This endpoint:
    1. Derives audio targets from the image (or palette_hex)
    2. Applies explicit target_* overrides from the request
    3. Requests recommendations and saves them to a new playlist
    """
    logger = get_request_logger(request)

    try:
        generator = factory.create_playlist_generator()
        spotify = factory.create_spotify_client(access_token)
        return await generator.generate(command, spotify)

    except (InvalidColorError, ImageDecodeError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ImageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ImageDownloadError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except SpotifyAPIError as e:
        raise spotify_error_to_http(e)
    except Exception as e:
        logger.error("Playlist generation failed", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to create playlist: {str(e)}"
        )
