"""Shared test fixtures and configuration.

Provides a deterministic clock for the session tickers and isolates tests
from the real log/config directories.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest


# ---------------------------------------------------------------------------
# Deterministic tickers
# ---------------------------------------------------------------------------


class FakeTicker:
    """Ticker driven by FakeClock.advance instead of the event loop."""

    def __init__(self, clock: "FakeClock", interval: float, callback):
        self.clock = clock
        self.interval = interval
        self.callback = callback
        self.active = False
        self.due: float | None = None
        self.seq = 0
        self.fired = 0

    def start(self) -> None:
        if self.active:
            return
        self.active = True
        self.due = self.clock.now + self.interval
        self.seq = self.clock.next_seq()
        self.clock.tickers.append(self)

    def cancel(self) -> None:
        self.active = False


class FakeClock:
    """Fires FakeTicker callbacks in deadline order (start order on ties)."""

    def __init__(self):
        self.now = 0.0
        self.tickers: list[FakeTicker] = []
        self._seq = 0

    def next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def ticker(self, interval: float, callback) -> FakeTicker:
        return FakeTicker(self, interval, callback)

    @property
    def active_tickers(self) -> list[FakeTicker]:
        return [t for t in self.tickers if t.active]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.tickers if t.active and t.due <= target + 1e-9]
            if not due:
                break
            ticker = min(due, key=lambda t: (t.due, t.seq))
            self.now = ticker.due
            ticker.due += ticker.interval
            ticker.fired += 1
            ticker.callback()
        self.now = target


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path):
    """Send application logs to tmp_path and reset the logger singleton."""
    import lockin_beat.utils.logger as logger_mod

    original = logger_mod._logger
    logger_mod._logger = None
    logging.getLogger("lockin_beat").handlers.clear()

    with patch("lockin_beat.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield

    for handler in logging.getLogger("lockin_beat").handlers:
        handler.close()
    logging.getLogger("lockin_beat").handlers.clear()
    logger_mod._logger = original


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide the cached ConfigService backed by a temporary directory.

    The lru_cache is cleared first, so every caller of get_config_service()
    during the test receives this tmp-backed instance.
    """
    from lockin_beat.services.config_service import get_config_service

    tmpdir = str(tmp_path / "config")
    get_config_service.cache_clear()
    with patch("lockin_beat.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("lockin_beat.services.config_service.user_data_dir", return_value=tmpdir):
            svc = get_config_service()
            yield svc
    get_config_service.cache_clear()
