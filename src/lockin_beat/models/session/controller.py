"""Session lifecycle controller.

SessionController owns the session phase. It starts the countdown and the
background track, asks the activity monitor to run the grace countdown for
free-tier sessions, and resolves every terminal outcome through a single
idempotent stop path: whichever caller reaches it first decides the outcome.

Teardown order on every exit path:
    stop timers -> stop audio -> unload audio -> release activity subscription
    -> emit outcome

Audio errors during teardown are logged and never change the decided outcome.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from lockin_beat.utils.logger import get_logger

from .activity import ActivityEventStream, ActivityPolicy, AppActivityMonitor
from .errors import SessionAlreadyStartedError
from .state import (
    REASON_DISMISSED,
    REASON_DURATION_ELAPSED,
    REASON_GRACE_EXPIRED,
    REASON_SKIPPED,
    REASON_TRACK_UNAVAILABLE,
    SessionConfig,
    SessionOutcome,
    SessionPhase,
    SessionSnapshot,
    SessionState,
)
from .ticker import IntervalTicker, TickerFactory
from .timer import SessionTimer

if TYPE_CHECKING:
    from lockin_beat.services.audio import AudioEngine, AudioHandle


class TrackResolver(Protocol):
    """Anything that maps a track ID to a loadable asset."""

    def get_track_asset(self, track_id: str) -> str | None: ...


class SessionController:
    """Runs exactly one focus session from start to its terminal outcome."""

    def __init__(
        self,
        catalog: TrackResolver,
        audio: AudioEngine,
        activity_stream: ActivityEventStream | None = None,
        on_update: Callable[[SessionSnapshot], None] | None = None,
        on_outcome: Callable[[SessionOutcome], None] | None = None,
        ticker_factory: TickerFactory = IntervalTicker,
        interval: float = 1.0,
    ):
        self._catalog = catalog
        self._audio = audio
        self.on_update = on_update
        self.on_outcome = on_outcome

        self._config: SessionConfig | None = None
        self._state: SessionState | None = None
        self._outcome: SessionOutcome | None = None
        self._audio_handle: AudioHandle | None = None
        self._teardown_task: asyncio.Task | None = None
        self._closed = asyncio.Event()

        self._timer = SessionTimer(
            on_tick=self._on_timer_tick,
            on_complete=self._on_timer_complete,
            ticker_factory=ticker_factory,
            interval=interval,
        )
        self._monitor = AppActivityMonitor(
            stream=activity_stream,
            policy=self._activity_policy,
            is_active=self._accepts_activity,
            on_grace_started=self._on_grace_started,
            on_grace_tick=self._on_grace_tick,
            on_grace_expired=self._on_grace_expired,
            on_grace_cancelled=self._on_grace_cancelled,
            ticker_factory=ticker_factory,
            interval=interval,
        )
        self._monitor.attach()

    # ---------- Read-only projection ----------
    @property
    def config(self) -> SessionConfig | None:
        return self._config

    @property
    def phase(self) -> SessionPhase | None:
        return self._state.phase if self._state else None

    @property
    def outcome(self) -> SessionOutcome | None:
        return self._outcome

    @property
    def timer(self) -> SessionTimer:
        return self._timer

    @property
    def monitor(self) -> AppActivityMonitor:
        return self._monitor

    def snapshot(self) -> SessionSnapshot | None:
        """Return the current session view, or None before begin_session."""
        return self._state.snapshot() if self._state else None

    # ---------- Lifecycle ----------
    async def begin_session(self, config: SessionConfig) -> None:
        """Start the session: load the looping track, then the countdown.

        Raises:
            InvalidSessionConfigError: If the duration or track ID is unusable.
            SessionAlreadyStartedError: If this controller already ran a session.
        """
        if self._config is not None:
            raise SessionAlreadyStartedError("This controller already started a session")
        config.validate()

        logger = get_logger("session")
        self._config = config
        self._state = SessionState.for_config(config)
        logger.info(
            "session started: %ss, track=%s, premium=%s",
            config.duration_seconds,
            config.track_id,
            config.is_premium,
        )
        self._publish()

        asset = self._catalog.get_track_asset(config.track_id)
        if asset is None:
            logger.warning("track not found: %s", config.track_id)
            self.stop_session(False, REASON_TRACK_UNAVAILABLE)
            await self.wait_closed()
            return

        try:
            handle = await self._audio.load(asset, loop=True)
        except Exception as e:
            logger.warning("failed to load track %s: %s", config.track_id, e)
            self.stop_session(False, REASON_TRACK_UNAVAILABLE)
            await self.wait_closed()
            return

        if self._state.is_terminal:
            # Session ended while the track was loading
            await self._release_audio(handle)
            return

        self._audio_handle = handle
        self._timer.start(config.duration_seconds)

    def request_skip(self) -> bool:
        """End the session early as a success. Premium sessions only.

        Returns False, without changing anything, for free-tier sessions or
        when the session is not running.
        """
        if self._config is None or not self._config.is_premium:
            return False
        if self._state.is_terminal:
            return False
        return self._finish("skipped", True, REASON_SKIPPED)

    def stop_session(self, success: bool, reason: str) -> bool:
        """Decide the terminal outcome and schedule teardown.

        Only the first call has an effect; returns False for later calls.
        Must be called from within the running event loop.
        """
        return self._finish("completed" if success else "failed", success, reason)

    async def wait_closed(self) -> SessionOutcome | None:
        """Wait until teardown finished and return the outcome.

        The outcome is None when the controller was closed without a session.
        """
        await self._closed.wait()
        return self._outcome

    async def close(self) -> None:
        """Dismiss the session, if still running, and wait for teardown."""
        if self._state is not None and not self._state.is_terminal:
            self._finish("failed", False, REASON_DISMISSED)
        if self._teardown_task is not None:
            await self._teardown_task
        else:
            # Never started: nothing to tear down beyond the subscription
            self._monitor.detach()
            self._closed.set()

    async def __aenter__(self) -> "SessionController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ---------- Terminal transition ----------
    def _finish(self, phase: SessionPhase, success: bool, reason: str) -> bool:
        if self._state is None or self._state.is_terminal:
            return False

        self._timer.stop()
        self._monitor.disarm()
        self._state.phase = phase
        self._state.grace_remaining_seconds = None
        self._outcome = SessionOutcome(
            phase=phase,
            success=success,
            reason=reason,
            remaining_seconds=self._state.remaining_seconds,
        )
        get_logger("session").info(
            "session %s: %s (%ss remaining)",
            phase,
            reason,
            self._state.remaining_seconds,
        )
        self._publish()
        self._teardown_task = asyncio.get_running_loop().create_task(self._teardown())
        return True

    async def _teardown(self) -> None:
        try:
            handle, self._audio_handle = self._audio_handle, None
            if handle is not None:
                await self._release_audio(handle)
            self._monitor.detach()
        finally:
            self._emit_outcome()
            self._closed.set()

    async def _release_audio(self, handle: AudioHandle) -> None:
        logger = get_logger("session")
        try:
            await self._audio.stop(handle)
        except Exception as e:
            logger.warning("failed to stop audio %s: %s", handle.asset, e)
        try:
            await self._audio.unload(handle)
        except Exception as e:
            logger.warning("failed to unload audio %s: %s", handle.asset, e)

    # ---------- Timer and monitor callbacks ----------
    def _on_timer_tick(self, remaining: int) -> None:
        if self._state.is_terminal:
            return
        self._state.remaining_seconds = remaining
        self._publish()

    def _on_timer_complete(self) -> None:
        self.stop_session(True, REASON_DURATION_ELAPSED)

    def _activity_policy(self) -> ActivityPolicy:
        return ActivityPolicy(exempt=self._config.is_premium)

    def _accepts_activity(self) -> bool:
        return self._state is not None and not self._state.is_terminal

    def _on_grace_started(self, seconds: int) -> None:
        if self._state.is_terminal:
            return
        self._state.phase = "grace_active"
        self._state.grace_remaining_seconds = seconds
        self._publish()

    def _on_grace_tick(self, remaining: int) -> None:
        if self._state.phase != "grace_active":
            return
        self._state.grace_remaining_seconds = remaining
        self._publish()

    def _on_grace_cancelled(self) -> None:
        if self._state.phase != "grace_active":
            return
        self._state.phase = "running"
        self._state.grace_remaining_seconds = None
        self._publish()

    def _on_grace_expired(self) -> None:
        self.stop_session(False, REASON_GRACE_EXPIRED)

    # ---------- Notifications ----------
    def _publish(self) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update(self._state.snapshot())
        except Exception:
            get_logger("session").exception("session update listener failed")

    def _emit_outcome(self) -> None:
        if self.on_outcome is None or self._outcome is None:
            return
        try:
            self.on_outcome(self._outcome)
        except Exception:
            get_logger("session").exception("session outcome listener failed")
