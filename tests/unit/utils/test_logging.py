import io
import logging

from mcp_zephyr.utils.logging import (
    get_masked_session_headers,
    mask_sensitive,
    setup_logging,
)


def test_mask_sensitive():
    assert mask_sensitive(None) == "Not Provided"
    assert mask_sensitive("") == "Not Provided"
    assert mask_sensitive("short") == "*****"
    assert mask_sensitive("abcd1234efgh") == "abcd****efgh"


def test_get_masked_session_headers():
    masked = get_masked_session_headers(
        {
            "Authorization": "Bearer supersecrettoken",
            "Accept": "application/json",
            "Cookie": "session=abcdefghijkl",
        }
    )

    assert masked["Authorization"] == "Bearer supe********oken"
    assert masked["Accept"] == "application/json"
    assert "abcdefghijkl" not in masked["Cookie"]


def test_setup_logging_writes_to_given_stream():
    stream = io.StringIO()
    logger = setup_logging(logging.INFO, stream=stream)

    logger.info("hello from zephyr")

    assert logger.name == "mcp-zephyr"
    assert "hello from zephyr" in stream.getvalue()
    assert logging.getLogger("mcp.server").level == logging.INFO
