"""Tests for the config commands against a temporary config directory."""

import json

from typer.testing import CliRunner

from lockin_beat.commands.config import app

runner = CliRunner()


class TestShow:
    def test_show_prints_json(self, tmp_config):
        result = runner.invoke(app, ["show"])
        assert result.exit_code == 0
        assert "default_duration_minutes" in result.output
        assert "is_premium" in result.output


class TestGet:
    def test_get_value(self, tmp_config):
        result = runner.invoke(app, ["get", "session.default_track_id"])
        assert result.exit_code == 0
        assert "focus1" in result.output

    def test_get_unknown_key(self, tmp_config):
        result = runner.invoke(app, ["get", "session.nope"])
        assert result.exit_code == 5
        assert "not found" in result.output

    def test_get_suggests_close_key(self, tmp_config):
        result = runner.invoke(app, ["get", "session.default_track"])
        assert result.exit_code == 5
        assert "session.default_track_id" in result.output


def test_keys_lists_dotted_keys(tmp_config):
    result = runner.invoke(app, ["keys"])
    assert result.exit_code == 0
    assert "session.tick_interval_seconds" in result.output
    assert "profile.is_premium" in result.output


class TestSet:
    def test_set_value(self, tmp_config):
        result = runner.invoke(app, ["set", "session.default_duration_minutes", "120"])

        assert result.exit_code == 0
        assert tmp_config.config.session.default_duration_minutes == 120
        data = json.loads(tmp_config.config_path.read_text())
        assert data["session"]["default_duration_minutes"] == 120

    def test_set_invalid_value(self, tmp_config):
        result = runner.invoke(app, ["set", "session.default_duration_minutes", "45"])
        assert result.exit_code == 2
        assert tmp_config.config.session.default_duration_minutes == 60

    def test_set_unknown_key(self, tmp_config):
        result = runner.invoke(app, ["set", "audio.volume", "3"])
        assert result.exit_code == 5


class TestReset:
    def test_reset_with_yes(self, tmp_config):
        tmp_config.set("profile.is_premium", True)

        result = runner.invoke(app, ["reset", "--yes"])

        assert result.exit_code == 0
        assert tmp_config.config.profile.is_premium is False

    def test_reset_declined(self, tmp_config):
        tmp_config.set("profile.is_premium", True)

        result = runner.invoke(app, ["reset"], input="n\n")

        assert result.exit_code == 0
        assert tmp_config.config.profile.is_premium is True
