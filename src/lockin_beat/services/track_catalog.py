"""Catalog of background tracks that can accompany a focus session."""

from collections.abc import Callable
from dataclasses import dataclass

from lockin_beat.models.config_models import AppConfig


@dataclass(frozen=True)
class Track:
    """A selectable background track."""

    id: str
    title: str
    asset: str
    builtin: bool = False


DEFAULT_TRACKS: dict[str, dict[str, str]] = {
    "focus1": {"title": "Focus Track 1", "asset": "music/focus1.mp3"},
    "focus2": {"title": "Focus Track 2", "asset": "music/focus2.mp3"},
}


class TrackCatalog:
    """Resolve track IDs to audio assets (built-in + custom)."""

    def __init__(
        self,
        config: AppConfig | None = None,
        save_config: Callable[[], None] | None = None,
    ):
        """Initialize the catalog.

        Args:
            config: Application configuration holding custom tracks.
            save_config: Callable that persists the configuration.
        """
        self.config = config or AppConfig()
        self.save_config = save_config or (lambda: None)

    def _entries(self) -> dict[str, dict[str, str]]:
        custom_tracks = self.config.tracks or {}
        return {**DEFAULT_TRACKS, **custom_tracks}

    def list_tracks(self) -> list[Track]:
        """List all tracks, built-ins first."""
        return [
            Track(
                id=track_id,
                title=data.get("title", track_id),
                asset=data["asset"],
                builtin=track_id in DEFAULT_TRACKS,
            )
            for track_id, data in self._entries().items()
        ]

    def get_track(self, track_id: str) -> Track | None:
        for track in self.list_tracks():
            if track.id == track_id:
                return track
        return None

    def get_track_asset(self, track_id: str) -> str | None:
        """Return the asset for ``track_id`` or None when it is not in the catalog."""
        track = self.get_track(track_id)
        return track.asset if track else None

    def add_track(self, track_id: str, asset: str, title: str = "") -> Track:
        """Add a custom track (built-in IDs cannot be replaced)."""
        if track_id in DEFAULT_TRACKS:
            raise ValueError(f"Track '{track_id}' is built in and cannot be replaced")
        if not asset:
            raise ValueError("asset cannot be empty")

        if self.config.tracks is None:
            self.config.tracks = {}
        self.config.tracks[track_id] = {"title": title or track_id, "asset": asset}
        self.save_config()
        return self.get_track(track_id)

    def remove_track(self, track_id: str) -> bool:
        """Remove a custom track (can't remove built-ins)."""
        if track_id in DEFAULT_TRACKS:
            return False

        if self.config.tracks and track_id in self.config.tracks:
            del self.config.tracks[track_id]
            self.save_config()
            return True

        return False
