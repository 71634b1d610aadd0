"""
Spotify Web API client.

Async wrapper around the recommendation, search, genre seed, profile and
playlist endpoints used to build mood playlists.
"""

from typing import Any, Dict, List, Optional

import aiohttp
import structlog
from pydantic import BaseModel, Field

from palette_playlist.infrastructure.config.settings import Settings, get_settings


MAX_SEEDS = 5
MAX_TRACKS_PER_REQUEST = 100


class Artist(BaseModel):
    """Track artist."""
    name: str


class Track(BaseModel):
    """Track summary returned by search and recommendations."""
    id: Optional[str] = None
    name: str
    artists: List[Artist] = Field(default_factory=list)
    external_urls: Dict[str, str] = Field(default_factory=dict)
    preview_url: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Track":
        """Build a track from a Spotify track object."""
        images = (payload.get("album") or {}).get("images") or []
        return cls(
            id=payload.get("id"),
            name=payload.get("name", ""),
            artists=[Artist(name=artist.get("name", "")) for artist in payload.get("artists") or []],
            external_urls=payload.get("external_urls") or {},
            preview_url=payload.get("preview_url"),
            image=images[0].get("url") if images else None,
        )

    @property
    def uri(self) -> Optional[str]:
        """Spotify track URI, None when the track has no id."""
        return f"spotify:track:{self.id}" if self.id else None


class RecommendationRequest(BaseModel):
    """Query parameters for the recommendations endpoint."""
    seed_genres: List[str] = Field(default_factory=list)
    seed_artists: List[str] = Field(default_factory=list)
    seed_tracks: List[str] = Field(default_factory=list)
    target_energy: Optional[float] = None
    target_valence: Optional[float] = None
    target_danceability: Optional[float] = None
    target_acousticness: Optional[float] = None
    target_instrumentalness: Optional[float] = None
    target_tempo: Optional[float] = None
    target_loudness: Optional[float] = None
    limit: Optional[int] = None

    def has_seeds(self) -> bool:
        """Check whether any artist, track or genre seed is set."""
        return bool(self.seed_genres or self.seed_artists or self.seed_tracks)

    def to_params(self) -> Dict[str, Any]:
        """Convert to query parameters, dropping unset values."""
        params: Dict[str, Any] = {}
        for name in ("seed_genres", "seed_artists", "seed_tracks"):
            seeds = getattr(self, name)[:MAX_SEEDS]
            if seeds:
                params[name] = ",".join(seeds)

        for name, value in self.model_dump(exclude={"seed_genres", "seed_artists", "seed_tracks"}).items():
            if value is not None:
                params[name] = value
        return params


class SpotifyClient:
    """
    Spotify Web API client bound to one user access token.

    Every call opens a short-lived aiohttp session; HTTP errors are raised
    as SpotifyAPIError.
    """

    def __init__(self, access_token: str, settings: Optional[Settings] = None):
        """
        Initialize Spotify client.

        Args:
            access_token: OAuth access token of the current user
            settings: Application settings (uses default if None)
        """
        self.settings = settings or get_settings()
        self.base_url = self.settings.spotify_api_base_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }
        self.logger = structlog.get_logger()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.settings.spotify_request_timeout_seconds)
        logger = self.logger.bind(method=method, url=url)

        try:
            async with aiohttp.ClientSession(headers=self.headers, timeout=timeout) as session:
                async with session.request(method, url, params=params, json=json) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        logger.error(
                            "Spotify API error",
                            status=response.status,
                            error=error_text[:500],
                        )
                        raise SpotifyAPIError(response.status, error_text)

                    if response.status == 204:
                        return {}
                    return await response.json(content_type=None) or {}

        except aiohttp.ClientError as e:
            logger.error("Spotify API request failed", error=str(e))
            raise SpotifyAPIError(503, f"Spotify API unreachable: {e}") from e

    async def search_tracks(self, query: str, limit: int = 10) -> List[Track]:
        """
        Search the catalog for tracks.

        Args:
            query: Free-text search query
            limit: Maximum number of tracks

        Returns:
            List[Track]: Matching tracks
        """
        data = await self._request(
            "GET", "/search", params={"q": query, "type": "track", "limit": limit}
        )
        items = (data.get("tracks") or {}).get("items") or []
        return [Track.from_api(item) for item in items]

    async def get_recommendations(self, request: RecommendationRequest) -> List[Track]:
        """
        Request track recommendations biased toward audio targets.

        The API requires at least one seed; the configured fallback genres
        are used when the request carries none.
        """
        if not request.has_seeds():
            self.logger.info(
                "No seeds provided, using fallback genres",
                fallback_seed_genres=self.settings.fallback_seed_genres,
            )
            request = request.model_copy(
                update={"seed_genres": list(self.settings.fallback_seed_genres)}
            )

        params = {"limit": self.settings.recommendation_limit, **request.to_params()}
        data = await self._request("GET", "/recommendations", params=params)
        tracks = [Track.from_api(item) for item in data.get("tracks") or []]

        self.logger.info("Recommendations received", track_count=len(tracks))
        return tracks

    async def get_genres(self) -> List[str]:
        """Get the genre seeds accepted by the recommendations endpoint."""
        data = await self._request("GET", "/recommendations/available-genre-seeds")
        return list(data.get("genres") or [])

    async def get_current_user(self) -> Dict[str, Any]:
        """Get the profile of the token owner."""
        return await self._request("GET", "/me")

    async def create_playlist(
        self,
        user_id: str,
        name: str,
        description: str,
        public: bool = False,
    ) -> str:
        """
        Create an empty playlist for a user.

        Returns:
            str: Identifier of the new playlist
        """
        data = await self._request(
            "POST",
            f"/users/{user_id}/playlists",
            json={"name": name, "description": description, "public": public},
        )
        return data["id"]

    async def add_tracks_to_playlist(self, playlist_id: str, track_uris: List[str]) -> None:
        """Append tracks to a playlist, in batches the API accepts."""
        for start in range(0, len(track_uris), MAX_TRACKS_PER_REQUEST):
            batch = track_uris[start:start + MAX_TRACKS_PER_REQUEST]
            await self._request(
                "POST", f"/playlists/{playlist_id}/tracks", json={"uris": batch}
            )


class SpotifyAPIError(Exception):
    """Raised when the Spotify Web API returns an error or is unreachable."""

    def __init__(self, status: int, message: str):
        super().__init__(f"Spotify API error {status}: {message}")
        self.status = status
        self.message = message
