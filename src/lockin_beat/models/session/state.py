"""Session configuration, mutable state and its read-only projections."""

from dataclasses import asdict, dataclass
from typing import Literal

from .errors import InvalidSessionConfigError

SessionPhase = Literal["running", "grace_active", "completed", "failed", "skipped"]

ACTIVE_PHASES: frozenset[str] = frozenset({"running", "grace_active"})
TERMINAL_PHASES: frozenset[str] = frozenset({"completed", "failed", "skipped"})

GRACE_PERIOD_SECONDS = 10
DURATION_OPTIONS = (30, 60, 90, 120)  # minutes

REASON_DURATION_ELAPSED = "duration elapsed"
REASON_GRACE_EXPIRED = "grace period expired"
REASON_SKIPPED = "skipped"
REASON_TRACK_UNAVAILABLE = "track unavailable"
REASON_DISMISSED = "session dismissed"


@dataclass(frozen=True)
class SessionConfig:
    """Parameters chosen by the user when a session starts."""

    duration_seconds: int
    track_id: str
    is_premium: bool = False

    @classmethod
    def from_minutes(
        cls, duration_minutes: int, track_id: str, is_premium: bool = False
    ) -> "SessionConfig":
        """Create a config from a duration expressed in minutes."""
        return cls(
            duration_seconds=duration_minutes * 60,
            track_id=track_id,
            is_premium=is_premium,
        )

    def validate(self) -> None:
        """Raise InvalidSessionConfigError if the session cannot start."""
        if isinstance(self.duration_seconds, bool) or not isinstance(
            self.duration_seconds, int
        ):
            raise InvalidSessionConfigError(
                f"Duration must be a whole number of seconds, got {self.duration_seconds!r}"
            )
        if self.duration_seconds <= 0:
            raise InvalidSessionConfigError(
                f"Duration must be positive, got {self.duration_seconds}"
            )
        if not self.track_id or not str(self.track_id).strip():
            raise InvalidSessionConfigError("A track must be selected")


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session, suitable for re-rendering on every tick."""

    remaining_seconds: int
    phase: SessionPhase
    grace_remaining_seconds: int | None = None

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class SessionOutcome:
    """Terminal result of a session."""

    phase: SessionPhase
    success: bool
    reason: str
    remaining_seconds: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class SessionState:
    """Mutable state of the running session.

    Only SessionController writes to this object. ``grace_remaining_seconds`` is
    set exactly while ``phase`` is ``grace_active``.
    """

    remaining_seconds: int
    phase: SessionPhase = "running"
    grace_remaining_seconds: int | None = None

    @classmethod
    def for_config(cls, config: SessionConfig) -> "SessionState":
        return cls(remaining_seconds=config.duration_seconds)

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            remaining_seconds=self.remaining_seconds,
            phase=self.phase,
            grace_remaining_seconds=self.grace_remaining_seconds,
        )
