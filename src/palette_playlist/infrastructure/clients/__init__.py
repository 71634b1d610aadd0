"""
External API clients.
"""

from .spotify_client import RecommendationRequest, SpotifyAPIError, SpotifyClient, Track

__all__ = [
    'RecommendationRequest',
    'SpotifyAPIError',
    'SpotifyClient',
    'Track',
]
