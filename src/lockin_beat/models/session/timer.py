"""Main countdown timer for a focus session."""

from collections.abc import Callable

from lockin_beat.utils.logger import get_logger

from .ticker import IntervalTicker, Ticker, TickerFactory


class SessionTimer:
    """Counts a duration down to zero, one tick per interval.

    ``on_tick(remaining)`` runs after every decrement and ``on_complete()``
    runs exactly once when the countdown reaches zero. The timer disarms
    itself before calling ``on_complete``.
    """

    def __init__(
        self,
        on_tick: Callable[[int], None] | None = None,
        on_complete: Callable[[], None] | None = None,
        ticker_factory: TickerFactory = IntervalTicker,
        interval: float = 1.0,
    ):
        self.on_tick = on_tick
        self.on_complete = on_complete
        self._ticker_factory = ticker_factory
        self.interval = interval
        self._ticker: Ticker | None = None
        self._armed = False
        self._remaining = 0

    @property
    def armed(self) -> bool:
        return self._armed

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    def start(self, duration_seconds: int) -> None:
        """Arm the countdown from a fresh duration."""
        self.stop()
        self._remaining = max(0, duration_seconds)
        if self._remaining == 0:
            self._notify_complete()
            return

        self._armed = True
        self._ticker = self._ticker_factory(self.interval, self._tick)
        self._ticker.start()

    def stop(self) -> None:
        """Disarm the countdown. Safe to call at any time."""
        self._armed = False
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _tick(self) -> None:
        # A tick may already be queued when stop() runs
        if not self._armed:
            return

        self._remaining -= 1
        if self.on_tick:
            try:
                self.on_tick(self._remaining)
            except Exception:
                get_logger("session").exception("session timer tick callback failed")

        if self._armed and self._remaining <= 0:
            self._remaining = 0
            self.stop()
            self._notify_complete()

    def _notify_complete(self) -> None:
        if self.on_complete:
            try:
                self.on_complete()
            except Exception:
                get_logger("session").exception("session timer completion callback failed")
