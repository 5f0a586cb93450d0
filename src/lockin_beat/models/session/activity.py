"""Foreground/background tracking and the grace period countdown.

Free-tier users who leave the app must come back within the grace window or
their session fails. The monitor turns raw activity transitions into that
countdown; premium sessions are exempt and never arm it.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, get_args

from lockin_beat.utils.logger import get_logger

from .state import GRACE_PERIOD_SECONDS
from .ticker import IntervalTicker, Ticker, TickerFactory

AppActivity = Literal["foreground", "background", "inactive"]
MonitorState = Literal["idle", "grace_armed", "expired"]

APP_ACTIVITIES: tuple[str, ...] = get_args(AppActivity)

ActivityListener = Callable[[AppActivity], None]


@dataclass(frozen=True)
class ActivityPolicy:
    """Whether the current session is exempt from the grace period penalty."""

    exempt: bool = False


class Subscription:
    """Handle returned by ActivityEventStream.subscribe."""

    def __init__(self, stream: "ActivityEventStream", listener: ActivityListener):
        self._stream = stream
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def remove(self) -> None:
        """Stop receiving events. Calling twice is harmless."""
        if self._active:
            self._active = False
            self._stream._discard(self._listener)


class ActivityEventStream:
    """Source of app activity transitions.

    The host environment calls ``emit`` whenever the app moves between the
    foreground and the background; listeners run synchronously in order.
    """

    def __init__(self):
        self._listeners: list[ActivityListener] = []
        self.last_event: AppActivity | None = None

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: ActivityListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def emit(self, event: str) -> None:
        if event not in APP_ACTIVITIES:
            raise ValueError(
                f"Unknown activity '{event}'. Must be one of: {', '.join(APP_ACTIVITIES)}"
            )
        self.last_event = event
        for listener in list(self._listeners):
            listener(event)

    def _discard(self, listener: ActivityListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)


class AppActivityMonitor:
    """Runs the grace countdown while a non-exempt session is backgrounded.

    States:
        idle -> grace_armed (background, not exempt)
        grace_armed -> idle (foreground, cancelled)
        grace_armed -> expired (countdown reached zero)
    """

    def __init__(
        self,
        stream: ActivityEventStream | None = None,
        policy: Callable[[], ActivityPolicy] | None = None,
        is_active: Callable[[], bool] | None = None,
        on_grace_started: Callable[[int], None] | None = None,
        on_grace_tick: Callable[[int], None] | None = None,
        on_grace_expired: Callable[[], None] | None = None,
        on_grace_cancelled: Callable[[], None] | None = None,
        ticker_factory: TickerFactory = IntervalTicker,
        interval: float = 1.0,
        grace_period_seconds: int = GRACE_PERIOD_SECONDS,
    ):
        self._stream = stream
        self._policy = policy or ActivityPolicy
        self._is_active = is_active or (lambda: True)
        self.on_grace_started = on_grace_started
        self.on_grace_tick = on_grace_tick
        self.on_grace_expired = on_grace_expired
        self.on_grace_cancelled = on_grace_cancelled
        self._ticker_factory = ticker_factory
        self.interval = interval
        self.grace_period_seconds = grace_period_seconds

        self._subscription: Subscription | None = None
        self._ticker: Ticker | None = None
        self._armed = False
        self._grace_remaining: int | None = None
        self._state: MonitorState = "idle"

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def armed(self) -> bool:
        return self._armed

    @property
    def grace_remaining_seconds(self) -> int | None:
        return self._grace_remaining

    # ---------- Subscription ----------
    def attach(self) -> None:
        """Subscribe to the activity stream, if one was given."""
        if self._stream is not None and self._subscription is None:
            self._subscription = self._stream.subscribe(self.handle)

    def detach(self) -> None:
        """Release the stream subscription and disarm any grace countdown."""
        self.disarm()
        if self._subscription is not None:
            self._subscription.remove()
            self._subscription = None

    def handle(self, event: AppActivity) -> None:
        """Dispatch one activity transition."""
        if not self._is_active():
            return
        if event == "foreground":
            self.on_foreground_enter()
        elif event in ("background", "inactive"):
            # inactive is treated like background
            self.on_background_enter(self._policy())

    # ---------- Transitions ----------
    def on_background_enter(self, policy: ActivityPolicy) -> None:
        if policy.exempt:
            return

        self.disarm()
        self._armed = True
        self._state = "grace_armed"
        self._grace_remaining = self.grace_period_seconds
        get_logger("session").info(
            "app left foreground, grace period of %ss started", self._grace_remaining
        )
        self._invoke(self.on_grace_started, self._grace_remaining)

        self._ticker = self._ticker_factory(self.interval, self._tick)
        self._ticker.start()

    def on_foreground_enter(self) -> None:
        if not self._armed:
            return

        remaining = self._grace_remaining
        self.disarm()
        get_logger("session").info("app returned to foreground with %ss of grace left", remaining)
        self._invoke(self.on_grace_cancelled)

    def disarm(self) -> None:
        """Stop the grace countdown without notifying anyone."""
        self._armed = False
        self._grace_remaining = None
        if self._state == "grace_armed":
            self._state = "idle"
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    # ---------- Internals ----------
    def _tick(self) -> None:
        if not self._armed:
            return

        self._grace_remaining -= 1
        self._invoke(self.on_grace_tick, self._grace_remaining)

        if self._armed and self._grace_remaining <= 0:
            self.disarm()
            self._state = "expired"
            get_logger("session").info("grace period expired")
            self._invoke(self.on_grace_expired)

    def _invoke(self, callback: Callable | None, *args) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            get_logger("session").exception("activity monitor callback failed")
