"""
Unit tests for the Spotify Web API client.

HTTP transport is replaced by a recording fake of SpotifyClient._request.
"""

import pytest

from palette_playlist.infrastructure.clients.spotify_client import (
    RecommendationRequest,
    SpotifyClient,
    Track,
)
from palette_playlist.infrastructure.config.settings import Settings


TRACK_PAYLOAD = {
    "id": "abc123",
    "name": "Golden Hour",
    "artists": [{"name": "JVKE", "id": "artist1"}],
    "external_urls": {"spotify": "https://open.spotify.com/track/abc123"},
    "preview_url": None,
    "album": {"images": [{"url": "https://i.scdn.co/large.jpg"}, {"url": "https://i.scdn.co/small.jpg"}]},
}


class RecordingTransport:
    """Records requests and replays canned responses."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    async def __call__(self, method, path, params=None, json=None):
        self.calls.append({"method": method, "path": path, "params": params, "json": json})
        return self.responses.pop(0) if self.responses else {}


@pytest.fixture
def client() -> SpotifyClient:
    return SpotifyClient("token-123", Settings(recommendation_limit=50))


class TestTrack:
    """Tests for track payload parsing."""

    def test_from_api(self):
        track = Track.from_api(TRACK_PAYLOAD)
        assert track.id == "abc123"
        assert track.artists[0].name == "JVKE"
        assert track.image == "https://i.scdn.co/large.jpg"
        assert track.uri == "spotify:track:abc123"

    def test_missing_album_and_id(self):
        track = Track.from_api({"name": "Local file", "artists": []})
        assert track.image is None
        assert track.uri is None


class TestRecommendationRequest:
    """Tests for recommendation query parameters."""

    def test_unset_targets_are_dropped_and_seeds_joined(self):
        request = RecommendationRequest(
            seed_genres=["ambient", "jazz", "pop", "rock", "folk", "soul"],
            target_energy=0.7,
            target_tempo=120.0,
        )
        assert request.to_params() == {
            "seed_genres": "ambient,jazz,pop,rock,folk",
            "target_energy": 0.7,
            "target_tempo": 120.0,
        }

    def test_has_seeds(self):
        assert not RecommendationRequest().has_seeds()
        assert RecommendationRequest(seed_artists=["a"]).has_seeds()


class TestSpotifyClient:
    """Tests for endpoint wiring."""

    def test_authorization_header(self, client):
        assert client.headers["Authorization"] == "Bearer token-123"

    @pytest.mark.asyncio
    async def test_recommendations_fall_back_to_default_genres(self, client, monkeypatch):
        transport = RecordingTransport([{"tracks": [TRACK_PAYLOAD]}])
        monkeypatch.setattr(client, "_request", transport)

        tracks = await client.get_recommendations(RecommendationRequest(target_valence=0.3))

        call = transport.calls[0]
        assert call["path"] == "/recommendations"
        assert call["params"]["seed_genres"] == "pop,rock,indie,electronic,hip-hop"
        assert call["params"]["target_valence"] == 0.3
        assert call["params"]["limit"] == 50
        assert [track.id for track in tracks] == ["abc123"]

    @pytest.mark.asyncio
    async def test_recommendations_keep_caller_seeds(self, client, monkeypatch):
        transport = RecordingTransport([{"tracks": []}])
        monkeypatch.setattr(client, "_request", transport)

        await client.get_recommendations(RecommendationRequest(seed_genres=["jazz"], limit=20))

        params = transport.calls[0]["params"]
        assert params["seed_genres"] == "jazz"
        assert params["limit"] == 20

    @pytest.mark.asyncio
    async def test_search_tracks(self, client, monkeypatch):
        transport = RecordingTransport([{"tracks": {"items": [TRACK_PAYLOAD]}}])
        monkeypatch.setattr(client, "_request", transport)

        tracks = await client.search_tracks("golden hour", limit=5)

        assert transport.calls[0]["params"] == {"q": "golden hour", "type": "track", "limit": 5}
        assert tracks[0].name == "Golden Hour"

    @pytest.mark.asyncio
    async def test_get_genres(self, client, monkeypatch):
        transport = RecordingTransport([{"genres": ["ambient", "jazz"]}])
        monkeypatch.setattr(client, "_request", transport)

        assert await client.get_genres() == ["ambient", "jazz"]
        assert transport.calls[0]["path"] == "/recommendations/available-genre-seeds"

    @pytest.mark.asyncio
    async def test_create_playlist(self, client, monkeypatch):
        transport = RecordingTransport([{"id": "pl1"}])
        monkeypatch.setattr(client, "_request", transport)

        playlist_id = await client.create_playlist("user-1", "Mood", "From a photo")

        assert playlist_id == "pl1"
        assert transport.calls[0]["method"] == "POST"
        assert transport.calls[0]["path"] == "/users/user-1/playlists"
        assert transport.calls[0]["json"] == {"name": "Mood", "description": "From a photo", "public": False}

    @pytest.mark.asyncio
    async def test_add_tracks_is_batched(self, client, monkeypatch):
        transport = RecordingTransport()
        monkeypatch.setattr(client, "_request", transport)

        uris = [f"spotify:track:{i}" for i in range(250)]
        await client.add_tracks_to_playlist("pl1", uris)

        assert [len(call["json"]["uris"]) for call in transport.calls] == [100, 100, 50]
        assert all(call["path"] == "/playlists/pl1/tracks" for call in transport.calls)
