"""Focus session core: countdown, grace period and lifecycle controller."""

from .activity import (
    ActivityEventStream,
    ActivityPolicy,
    AppActivityMonitor,
    Subscription,
)
from .controller import SessionController
from .errors import (
    AudioLoadError,
    InvalidSessionConfigError,
    SessionAlreadyStartedError,
    SessionError,
)
from .state import (
    DURATION_OPTIONS,
    GRACE_PERIOD_SECONDS,
    SessionConfig,
    SessionOutcome,
    SessionSnapshot,
    SessionState,
)
from .ticker import IntervalTicker
from .timer import SessionTimer

__all__ = [
    "ActivityEventStream",
    "ActivityPolicy",
    "AppActivityMonitor",
    "AudioLoadError",
    "DURATION_OPTIONS",
    "GRACE_PERIOD_SECONDS",
    "IntervalTicker",
    "InvalidSessionConfigError",
    "SessionAlreadyStartedError",
    "SessionConfig",
    "SessionController",
    "SessionError",
    "SessionOutcome",
    "SessionSnapshot",
    "SessionState",
    "SessionTimer",
    "Subscription",
]
