"""Tests for exit code helpers."""

import pytest

from lockin_beat.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    SESSION_FAILED,
    SUCCESS,
    get_exit_code_description,
    get_exit_code_name,
)


@pytest.mark.parametrize(
    "code,name",
    [
        (SUCCESS, "SUCCESS"),
        (ERROR_GENERAL, "ERROR_GENERAL"),
        (ERROR_INVALID_ARGS, "ERROR_INVALID_ARGS"),
        (ERROR_NOT_FOUND, "ERROR_NOT_FOUND"),
        (SESSION_FAILED, "SESSION_FAILED"),
    ],
)
def test_names(code, name):
    assert get_exit_code_name(code) == name


def test_codes_are_distinct():
    codes = [SUCCESS, ERROR_GENERAL, ERROR_INVALID_ARGS, ERROR_NOT_FOUND, SESSION_FAILED]
    assert len(set(codes)) == len(codes)


def test_unknown_code():
    assert get_exit_code_name(42) == "UNKNOWN(42)"
    assert get_exit_code_description(42) == "Unknown error"


def test_session_failed_description():
    assert "session failed" in get_exit_code_description(SESSION_FAILED)
