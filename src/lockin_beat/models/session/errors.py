"""Exceptions raised by the focus session core."""


class SessionError(Exception):
    """Base class for focus session errors."""


class InvalidSessionConfigError(SessionError, ValueError):
    """Raised when a session is started with an unusable configuration."""


class SessionAlreadyStartedError(SessionError):
    """Raised when begin_session is called twice on the same controller."""


class AudioLoadError(SessionError):
    """Raised by an audio engine when an asset cannot be loaded."""

    def __init__(self, asset: str, message: str | None = None):
        super().__init__(message or f"Unable to load audio asset: {asset}")
        self.asset = asset
