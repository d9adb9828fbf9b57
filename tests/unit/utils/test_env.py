"""Tests for environment and tool filter helpers."""

import os
from unittest.mock import patch

import pytest

from mcp_zephyr.utils.env import (
    get_custom_headers,
    get_env_int,
    is_env_ssl_verify,
    is_env_truthy,
    is_read_only_mode,
    parse_extended_bool,
)
from mcp_zephyr.utils.tools import get_enabled_tools, should_include_tool


@pytest.mark.parametrize(
    "value,expected",
    [
        ("true", True),
        (" YES ", True),
        ("1", True),
        ("on", True),
        ("false", False),
        ("0", False),
        ("Off", False),
        ("maybe", None),
        (None, None),
        (True, True),
    ],
)
def test_parse_extended_bool(value, expected):
    assert parse_extended_bool(value) is expected


def test_is_env_truthy_uses_default_for_unknown_values():
    with patch.dict(os.environ, {"FLAG": "sometimes"}, clear=True):
        assert is_env_truthy("FLAG") is False
        assert is_env_truthy("FLAG", default=True) is True
        assert is_env_truthy("MISSING") is False


def test_ssl_verify_defaults_to_true():
    with patch.dict(os.environ, {}, clear=True):
        assert is_env_ssl_verify("ZEPHYR_SSL_VERIFY") is True
    with patch.dict(os.environ, {"ZEPHYR_SSL_VERIFY": "false"}, clear=True):
        assert is_env_ssl_verify("ZEPHYR_SSL_VERIFY") is False


@pytest.mark.parametrize(
    "raw,expected",
    [(None, 75), ("", 75), ("30", 30), ("abc", 75), ("0", 75), ("-5", 75)],
)
def test_get_env_int(raw, expected):
    env = {} if raw is None else {"ZEPHYR_TIMEOUT": raw}
    with patch.dict(os.environ, env, clear=True):
        assert get_env_int("ZEPHYR_TIMEOUT", 75) == expected


def test_get_custom_headers_parses_pairs_and_skips_malformed():
    with patch.dict(
        os.environ,
        {"ZEPHYR_CUSTOM_HEADERS": "X-Team=qa, X-Trace = a=b ,broken,,=novalue"},
        clear=True,
    ):
        assert get_custom_headers("ZEPHYR_CUSTOM_HEADERS") == {
            "X-Team": "qa",
            "X-Trace": "a=b",
        }


def test_get_custom_headers_empty():
    with patch.dict(os.environ, {"ZEPHYR_CUSTOM_HEADERS": "  "}, clear=True):
        assert get_custom_headers("ZEPHYR_CUSTOM_HEADERS") == {}


def test_is_read_only_mode():
    with patch.dict(os.environ, {"READ_ONLY_MODE": "true"}, clear=True):
        assert is_read_only_mode() is True
    with patch.dict(os.environ, {}, clear=True):
        assert is_read_only_mode() is False


def test_get_enabled_tools():
    with patch.dict(
        os.environ, {"ENABLED_TOOLS": "get_test_case, get_test_run ,"}, clear=True
    ):
        assert get_enabled_tools() == ["get_test_case", "get_test_run"]
    with patch.dict(os.environ, {"ENABLED_TOOLS": " , "}, clear=True):
        assert get_enabled_tools() is None
    with patch.dict(os.environ, {}, clear=True):
        assert get_enabled_tools() is None


def test_should_include_tool():
    assert should_include_tool("get_test_case", None) is True
    assert should_include_tool("get_test_case", ["get_test_case"]) is True
    assert should_include_tool("delete_test_case", ["get_test_case"]) is False
