"""
E2E tests for mood, playlist and catalog endpoints.

Spotify and image downloads are replaced through dependency overrides;
the mapping engine and request handling run for real.
"""

import base64

import pytest
from fastapi.testclient import TestClient

from conftest import FakePaletteExtractor, FakeSpotifyClient
from palette_playlist.domain.value_objects.palette import PaletteColor
from palette_playlist.infrastructure.clients.spotify_client import SpotifyAPIError
from palette_playlist.infrastructure.monitoring.metrics import MetricsCollector
from palette_playlist.infrastructure.service_factory import ServiceFactory, get_service_factory
from palette_playlist.infrastructure.services.image_palette_extractor import (
    ImageDownloadError,
    ImageTooLargeError,
)
from palette_playlist.main import create_app


AUTH = {"Authorization": "Bearer user-token"}


class FakeServiceFactory(ServiceFactory):
    """Service factory wiring in-memory fakes."""

    def __init__(self, extractor=None, spotify=None):
        super().__init__()
        self.metrics = MetricsCollector()
        self.extractor = extractor
        self.spotify = spotify or FakeSpotifyClient()
        self.tokens = []

    def create_palette_extractor(self):
        if self.extractor is None:
            return super().create_palette_extractor()
        return self.extractor

    def create_spotify_client(self, access_token):
        self.tokens.append(access_token)
        return self.spotify


@pytest.fixture
def factory():
    return FakeServiceFactory()


@pytest.fixture
def client(factory):
    app = create_app()
    app.dependency_overrides[get_service_factory] = lambda: factory
    return TestClient(app)


class TestMoodEndpoints:
    """Tests for POST /api/v1/mood/analyze."""

    def test_analyze_palette(self, client):
        response = client.post("/api/v1/mood/analyze", json={"palette_hex": ["#FF4500"]})

        assert response.status_code == 200
        data = response.json()
        assert data["targets"]["target_energy"] > 0.6
        assert data["targets"]["target_valence"] > 0.6
        assert data["analysis"]["palette"] == [{"hex": "#FF4500", "population": 5.0}]
        assert data["analysis"]["explanations"][0] == (
            "warm colors dominant, energy and valence skew higher"
        )

    def test_analyze_image(self, client, factory):
        factory.extractor = FakePaletteExtractor([PaletteColor("#1E3A5F", 10)])

        response = client.post("/api/v1/mood/analyze", json={"image_url": "https://example.com/a.jpg"})

        assert response.status_code == 200
        targets = response.json()["targets"]
        assert targets["target_acousticness"] > targets["target_energy"]

    def test_missing_source_is_rejected(self, client):
        response = client.post("/api/v1/mood/analyze", json={})
        assert response.status_code == 400

    def test_invalid_hex_is_rejected(self, client):
        response = client.post("/api/v1/mood/analyze", json={"palette_hex": ["#ZZZ"]})
        assert response.status_code == 422

    def test_undecodable_image_is_rejected(self, client):
        payload = base64.b64encode(b"plain text, not an image").decode()
        response = client.post("/api/v1/mood/analyze", json={"image_base64": payload})
        assert response.status_code == 422

    def test_oversized_image_is_rejected(self, client, factory):
        factory.extractor = FakePaletteExtractor(error=ImageTooLargeError("Image too large: 25.0MB > 20MB"))

        response = client.post("/api/v1/mood/analyze", json={"image_url": "https://example.com/huge.jpg"})

        assert response.status_code == 413

    def test_unreachable_image_maps_to_502(self, client, factory):
        factory.extractor = FakePaletteExtractor(error=ImageDownloadError("Failed to fetch image: HTTP 404"))

        response = client.post("/api/v1/mood/analyze", json={"image_url": "https://example.com/gone.jpg"})

        assert response.status_code == 502


class TestPlaylistEndpoints:
    """Tests for POST /api/v1/playlists/generate."""

    def test_requires_bearer_token(self, client):
        response = client.post("/api/v1/playlists/generate", json={"palette_hex": ["#FF4500"]})
        assert response.status_code == 401

    def test_generate_playlist(self, client, factory):
        response = client.post(
            "/api/v1/playlists/generate",
            headers=AUTH,
            json={
                "palette_hex": ["#FF4500", "#1E3A5F"],
                "seed_genres": ["pop"],
                "target_energy": 0.2,
                "playlist_name": "Sunset",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["playlist_id"] == "playlist-1"
        assert data["playlist_url"] == "https://open.spotify.com/playlist/playlist-1"
        assert data["track_count"] == 3
        assert data["derived_targets"]["target_energy"] != 0.2
        assert len(data["analysis"]["palette"]) == 2

        assert factory.tokens == ["user-token"]
        request = factory.spotify.recommendation_requests[0]
        assert request.target_energy == 0.2
        assert request.seed_genres == ["pop"]
        assert factory.spotify.created_playlists[0]["name"] == "Sunset"

    def test_out_of_range_override_is_rejected(self, client):
        response = client.post(
            "/api/v1/playlists/generate",
            headers=AUTH,
            json={"palette_hex": ["#FF4500"], "target_tempo": 240},
        )
        assert response.status_code == 422

    def test_rejected_spotify_token_maps_to_401(self, client, factory):
        factory.spotify = FakeSpotifyClient(error=SpotifyAPIError(401, "The access token expired"))

        response = client.post("/api/v1/playlists/generate", headers=AUTH, json={"palette_hex": ["#FFFFFF"]})

        assert response.status_code == 401

    def test_spotify_failure_maps_to_502(self, client, factory):
        factory.spotify = FakeSpotifyClient(error=SpotifyAPIError(503, "unavailable"))

        response = client.post("/api/v1/playlists/generate", headers=AUTH, json={"palette_hex": ["#FFFFFF"]})

        assert response.status_code == 502

    def test_unexpected_failure_maps_to_500(self, client, factory):
        factory.spotify = FakeSpotifyClient(error=RuntimeError("boom"))

        response = client.post("/api/v1/playlists/generate", headers=AUTH, json={"palette_hex": ["#FFFFFF"]})

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to create playlist: boom"


class TestCatalogEndpoints:
    """Tests for genre seeds and track search."""

    def test_list_genres(self, client):
        response = client.get("/api/v1/genres", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {"genres": ["ambient", "jazz", "pop"]}

    def test_list_genres_requires_token(self, client):
        assert client.get("/api/v1/genres").status_code == 401

    def test_search_tracks(self, client):
        response = client.get("/api/v1/tracks/search", params={"q": "sunrise", "limit": 2}, headers=AUTH)

        assert response.status_code == 200
        assert [track["name"] for track in response.json()["tracks"]] == ["Sunrise", "Local file"]

    def test_search_failure_maps_to_502(self, client, factory):
        factory.spotify = FakeSpotifyClient(error=SpotifyAPIError(500, "boom"))

        response = client.get("/api/v1/tracks/search", params={"q": "x"}, headers=AUTH)

        assert response.status_code == 502
        assert factory.metrics.get_system_summary()["error_breakdown"] == {"spotify_500": 1}

    def test_rejected_token_is_counted(self, client, factory):
        factory.spotify = FakeSpotifyClient(error=SpotifyAPIError(401, "expired"))

        response = client.get("/api/v1/genres", headers=AUTH)

        assert response.status_code == 401
        assert factory.metrics.get_system_summary()["error_breakdown"] == {"spotify_401": 1}
