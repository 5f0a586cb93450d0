"""Unit tests for the key handling of the live session view."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from lockin_beat.commands.session import SessionKeys
from lockin_beat.models.session.state import SessionConfig
from lockin_beat.models.session.ui import (
    SKIP_CONFIRM_MESSAGE,
    SKIP_PREMIUM_ONLY_MESSAGE,
    SessionDisplay,
)


def _keys(is_premium: bool = True) -> SessionKeys:
    controller = MagicMock()
    controller.config = SessionConfig(duration_seconds=1800, track_id="focus1", is_premium=is_premium)
    controller.close = AsyncMock()
    return SessionKeys(controller, MagicMock(), SessionDisplay())


class TestSkip:
    @pytest.mark.asyncio
    async def test_first_press_asks_for_confirmation(self):
        keys = _keys()

        assert await keys.press("s") is True

        keys.controller.request_skip.assert_not_called()
        assert keys.skip_pending is True
        assert keys.display.notice == SKIP_CONFIRM_MESSAGE

    @pytest.mark.asyncio
    async def test_second_press_skips(self):
        keys = _keys()

        await keys.press("s")
        await keys.press("s")

        keys.controller.request_skip.assert_called_once_with()
        assert keys.skip_pending is False
        assert keys.display.notice is None

    @pytest.mark.asyncio
    async def test_other_key_cancels_confirmation(self):
        keys = _keys()

        await keys.press("s")
        await keys.press("f")
        await keys.press("s")

        keys.controller.request_skip.assert_not_called()
        keys.stream.emit.assert_called_once_with("foreground")
        assert keys.display.notice == SKIP_CONFIRM_MESSAGE

    @pytest.mark.asyncio
    async def test_no_key_keeps_confirmation_open(self):
        keys = _keys()

        await keys.press("s")
        await keys.press(None)
        await keys.press("s")

        keys.controller.request_skip.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_free_tier_shows_premium_notice(self):
        keys = _keys(is_premium=False)

        await keys.press("s")
        await keys.press("s")

        keys.controller.request_skip.assert_not_called()
        assert keys.skip_pending is False
        assert keys.display.notice == SKIP_PREMIUM_ONLY_MESSAGE


class TestOtherKeys:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("key,event", [("b", "background"), ("i", "inactive"), ("f", "foreground")])
    async def test_activity_keys_emit_events(self, key, event):
        keys = _keys()
        assert await keys.press(key) is True
        keys.stream.emit.assert_called_once_with(event)

    @pytest.mark.asyncio
    async def test_quit_closes_controller(self):
        keys = _keys()

        assert await keys.press("q") is False
        keys.controller.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_key_ignored(self):
        keys = _keys()
        assert await keys.press("x") is True
        keys.stream.emit.assert_not_called()
