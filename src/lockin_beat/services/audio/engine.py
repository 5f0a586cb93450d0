"""Audio engine boundary for background session tracks.

Real playback is the host's business. The controller only needs to load a
looping track, stop it and release it; ``SilentAudioEngine`` implements that
contract without producing sound and is what the CLI uses.
"""

import asyncio
import itertools
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

from lockin_beat.models.session.errors import AudioLoadError
from lockin_beat.utils.logger import get_logger

HandleStatus = Literal["loading", "playing", "stopped", "unloaded"]

_handle_ids = itertools.count(1)


@dataclass
class AudioHandle:
    """A loaded (or loading) audio asset."""

    asset: str
    loop: bool = True
    status: HandleStatus = "loading"
    handle_id: int = 0

    def __post_init__(self):
        if not self.handle_id:
            self.handle_id = next(_handle_ids)

    @property
    def is_playing(self) -> bool:
        return self.status == "playing"


class AudioEngine(Protocol):
    """Asynchronous playback operations used by the session controller."""

    async def load(self, asset: str, loop: bool = True) -> AudioHandle: ...

    async def stop(self, handle: AudioHandle) -> None: ...

    async def unload(self, handle: AudioHandle) -> None: ...


class SilentAudioEngine:
    """Audio engine that tracks playback state without producing sound."""

    def __init__(self, asset_root: Path | None = None, latency: float = 0.0):
        """Initialize the engine.

        Args:
            asset_root: When set, assets must exist as files below this directory.
            latency: Seconds each operation suspends for, to mimic real I/O.
        """
        self.asset_root = Path(asset_root) if asset_root else None
        self.latency = latency
        self.handles: list[AudioHandle] = []

    async def load(self, asset: str, loop: bool = True) -> AudioHandle:
        await asyncio.sleep(self.latency)
        if self.asset_root is not None and not (self.asset_root / asset).is_file():
            raise AudioLoadError(asset, f"Audio file not found: {self.asset_root / asset}")

        handle = AudioHandle(asset=asset, loop=loop, status="playing")
        self.handles.append(handle)
        get_logger("audio").debug("audio loaded: %s (loop=%s)", asset, loop)
        return handle

    async def stop(self, handle: AudioHandle) -> None:
        await asyncio.sleep(self.latency)
        if handle.status in ("loading", "playing"):
            handle.status = "stopped"

    async def unload(self, handle: AudioHandle) -> None:
        await asyncio.sleep(self.latency)
        handle.status = "unloaded"
        if handle in self.handles:
            self.handles.remove(handle)
        get_logger("audio").debug("audio unloaded: %s", handle.asset)

    @property
    def active_handles(self) -> list[AudioHandle]:
        return [h for h in self.handles if h.status != "unloaded"]
