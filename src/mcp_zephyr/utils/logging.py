"""Logging utilities for MCP Zephyr."""

import logging
import sys
from typing import TextIO


def setup_logging(
    level: int = logging.WARNING, stream: TextIO = sys.stderr
) -> logging.Logger:
    """
    Configure the logging system with specified level.

    Logs go to stderr by default so that they never interleave with the
    stdio transport on stdout.

    Args:
        level: The logging level to use
        stream: Output stream for logs

    Returns:
        The configured logger instance
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(handler)

    for name in ("mcp-zephyr", "mcp.server", "mcp.server.lowlevel.server"):
        logging.getLogger(name).setLevel(level)

    return logging.getLogger("mcp-zephyr")


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Masks sensitive strings for logging.

    Args:
        value: The string to mask
        keep_chars: Number of characters to keep visible at start and end

    Returns:
        Masked string
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    start = value[:keep_chars]
    end = value[-keep_chars:]
    middle = "*" * (len(value) - keep_chars * 2)
    return f"{start}{middle}{end}"


def get_masked_session_headers(headers: dict[str, str]) -> dict[str, str]:
    """Get session headers with sensitive values masked for safe logging."""
    masked = {}
    for key, value in headers.items():
        if key.lower() == "authorization":
            if value.startswith("Bearer "):
                masked[key] = f"Bearer {mask_sensitive(value[7:])}"
            else:
                masked[key] = mask_sensitive(value)
        elif key.lower() in ("cookie", "set-cookie"):
            masked[key] = mask_sensitive(value)
        else:
            masked[key] = str(value)
    return masked


def log_config_param(
    logger: logging.Logger,
    service: str,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Logs a configuration parameter, masking if sensitive."""
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.info(f"{service} {param}: {display_value}")
