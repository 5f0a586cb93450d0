"""Fixed-cadence interval tickers on the asyncio event loop."""

import asyncio
from collections.abc import Callable
from typing import Protocol


class Ticker(Protocol):
    """A repeating callback that can be armed once and cancelled."""

    @property
    def active(self) -> bool: ...

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TickerFactory = Callable[[float, Callable[[], None]], Ticker]


class IntervalTicker:
    """Invoke ``callback`` every ``interval`` seconds on the running loop.

    Deadlines are computed from the previous deadline, not from when the
    callback finished, so ticks stay ``interval`` apart. After ``cancel()``
    no further callback runs, including one already queued by the loop.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], None],
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._callback = callback
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._deadline: float | None = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        if self._active:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._active = True
        self._deadline = self._loop.time() + self.interval
        self._handle = self._loop.call_at(self._deadline, self._fire)

    def cancel(self) -> None:
        self._active = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        if not self._active:
            return
        self._deadline += self.interval
        self._handle = self._loop.call_at(self._deadline, self._fire)
        self._callback()
