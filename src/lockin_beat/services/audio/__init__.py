"""Audio playback boundary for focus sessions."""

from .engine import AudioEngine, AudioHandle, SilentAudioEngine

__all__ = [
    "AudioEngine",
    "AudioHandle",
    "SilentAudioEngine",
]
