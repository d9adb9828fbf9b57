"""Environment variable helpers for MCP Zephyr."""

from __future__ import annotations

import logging
import os
from typing import Final

logger = logging.getLogger("mcp-zephyr.utils.env")

TRUTHY_VALUES: Final[frozenset[str]] = frozenset({"true", "1", "yes", "y", "on"})
FALSY_VALUES: Final[frozenset[str]] = frozenset({"false", "0", "no", "n", "off"})


def parse_extended_bool(value: str | bool | None) -> bool | None:
    """Convert a flag string into a bool.

    Returns:
        True/False when the value is recognized, otherwise None.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return None

    normalized = value.strip().lower()
    if normalized in TRUTHY_VALUES:
        return True
    if normalized in FALSY_VALUES:
        return False
    return None


def is_env_truthy(env_var_name: str, default: bool = False) -> bool:
    """Check if an environment variable is set to a truthy value."""
    parsed = parse_extended_bool(os.getenv(env_var_name))
    return default if parsed is None else parsed


def is_env_ssl_verify(env_var_name: str, default: bool = True) -> bool:
    """SSL verification stays on unless explicitly disabled."""
    return is_env_truthy(env_var_name, default=default)


def get_env_int(env_var_name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    raw = os.getenv(env_var_name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring non-integer value for {env_var_name}: {raw!r}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive value for {env_var_name}: {value}")
        return default
    return value


def get_custom_headers(env_var_name: str) -> dict[str, str]:
    """Parse custom headers from an environment variable.

    The expected format is ``Header-Name=value,Other-Header=value``.
    Malformed pairs are skipped.

    Args:
        env_var_name: Name of the environment variable to read

    Returns:
        Dictionary of header names to values
    """
    header_string = os.getenv(env_var_name)
    if not header_string or not header_string.strip():
        return {}

    headers: dict[str, str] = {}
    for pair in header_string.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if "=" not in pair:
            logger.warning(f"Skipping malformed header in {env_var_name}: {pair!r}")
            continue
        name, value = pair.split("=", 1)
        name = name.strip()
        if name:
            headers[name] = value.strip()
    return headers


def is_read_only_mode() -> bool:
    """Check if the server runs in read-only mode (READ_ONLY_MODE)."""
    return is_env_truthy("READ_ONLY_MODE", default=False)
