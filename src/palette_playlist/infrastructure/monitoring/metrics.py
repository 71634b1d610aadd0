"""
Metrics collection for the palette playlist service.

Tracks mood analyses, playlist generations and Spotify API failures.
"""

import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import structlog


@dataclass
class MoodMetrics:
    """Metrics for palette-to-mood mappings."""

    total_analyses: int = 0
    image_analyses: int = 0
    palette_analyses: int = 0
    empty_signal_results: int = 0
    analysis_times: deque = field(default_factory=lambda: deque(maxlen=1000))


@dataclass
class PlaylistMetrics:
    """Metrics for playlist generation."""

    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    tracks_added: int = 0
    generation_times: deque = field(default_factory=lambda: deque(maxlen=1000))


@dataclass
class SystemMetrics:
    """System-level metrics."""

    start_time: float = field(default_factory=time.time)
    error_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))


class MetricsCollector:
    """
    Central metrics collector.

    Thread-safe in-process counters and timing windows.
    """

    def __init__(self):
        """Initialize metrics collector."""
        self.mood_metrics = MoodMetrics()
        self.playlist_metrics = PlaylistMetrics()
        self.system_metrics = SystemMetrics()

        self._lock = threading.RLock()
        self.logger = structlog.get_logger()

    # Mood Metrics

    def record_mood_analysis(self, source: str, analysis_time_ms: float, has_signal: bool) -> None:
        """Record a completed mood analysis."""
        with self._lock:
            self.mood_metrics.total_analyses += 1
            if source == "image":
                self.mood_metrics.image_analyses += 1
            elif source == "palette":
                self.mood_metrics.palette_analyses += 1
            if not has_signal:
                self.mood_metrics.empty_signal_results += 1
            self.mood_metrics.analysis_times.append(analysis_time_ms)

    # Playlist Metrics

    def record_playlist_request(self) -> None:
        """Record a playlist generation request."""
        with self._lock:
            self.playlist_metrics.total_requests += 1

    def record_playlist_success(self, generation_time_ms: float, track_count: int) -> None:
        """Record a successful playlist generation."""
        with self._lock:
            self.playlist_metrics.successful_requests += 1
            self.playlist_metrics.tracks_added += track_count
            self.playlist_metrics.generation_times.append(generation_time_ms)

    def record_playlist_failure(self, error_type: str) -> None:
        """Record a failed playlist generation."""
        with self._lock:
            self.playlist_metrics.failed_requests += 1
            self.system_metrics.error_counts[f"playlist_{error_type}"] += 1

    # System Metrics

    def record_error(self, error_type: str) -> None:
        """Record an error by type."""
        with self._lock:
            self.system_metrics.error_counts[error_type] += 1

    # Metrics Retrieval and Aggregation

    def get_mood_summary(self) -> Dict[str, Any]:
        """Get mood analysis metrics summary."""
        with self._lock:
            times = list(self.mood_metrics.analysis_times)
            return {
                "total_analyses": self.mood_metrics.total_analyses,
                "image_analyses": self.mood_metrics.image_analyses,
                "palette_analyses": self.mood_metrics.palette_analyses,
                "empty_signal_results": self.mood_metrics.empty_signal_results,
                "avg_analysis_time_ms": sum(times) / len(times) if times else 0.0,
            }

    def get_playlist_summary(self) -> Dict[str, Any]:
        """Get playlist generation metrics summary."""
        with self._lock:
            times = list(self.playlist_metrics.generation_times)
            total = self.playlist_metrics.total_requests
            return {
                "total_requests": total,
                "successful_requests": self.playlist_metrics.successful_requests,
                "failed_requests": self.playlist_metrics.failed_requests,
                "success_rate": (
                    self.playlist_metrics.successful_requests / total if total > 0 else 0.0
                ),
                "tracks_added": self.playlist_metrics.tracks_added,
                "avg_generation_time_ms": sum(times) / len(times) if times else 0.0,
            }

    def get_system_summary(self) -> Dict[str, Any]:
        """Get system metrics summary."""
        with self._lock:
            return {
                "uptime_seconds": time.time() - self.system_metrics.start_time,
                "total_errors": sum(self.system_metrics.error_counts.values()),
                "error_breakdown": dict(self.system_metrics.error_counts),
            }

    def get_all_metrics(self) -> Dict[str, Any]:
        """Get all metrics in a single summary."""
        return {
            "mood": self.get_mood_summary(),
            "playlists": self.get_playlist_summary(),
            "system": self.get_system_summary(),
            "timestamp": time.time(),
        }

    def reset_metrics(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self.mood_metrics = MoodMetrics()
            self.playlist_metrics = PlaylistMetrics()
            self.system_metrics = SystemMetrics()


# Global metrics collector instance
_metrics_collector: Optional[MetricsCollector] = None


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance."""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector
