import inspect
import json
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

import requests
from fastmcp import Context
from requests.exceptions import HTTPError

from mcp_zephyr.exceptions import MCPZephyrAuthenticationError, ZephyrApiError
from mcp_zephyr.utils.env import is_read_only_mode

logger = logging.getLogger(__name__)


F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def check_write_access(func: F) -> F:
    """
    Decorator for FastMCP tools to check if the application is in read-only mode.
    If in read-only mode, it raises a ValueError.
    Assumes the decorated function is async and has `ctx: Context` as its first argument.
    """

    @wraps(func)
    async def wrapper(ctx: Context, *args: Any, **kwargs: Any) -> Any:
        req_context = getattr(ctx, "request_context", None)
        lifespan_ctx_dict = req_context.lifespan_context if req_context else {}  # type: ignore[attr-defined]
        app_lifespan_ctx = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )

        read_only = getattr(app_lifespan_ctx, "read_only", None)
        if read_only is None:
            read_only = is_read_only_mode()

        if read_only:
            tool_name = func.__name__
            action_description = tool_name.replace("_", " ")
            logger.warning(f"Attempted to call tool '{tool_name}' in read-only mode.")
            msg = f"Cannot {action_description} in read-only mode."
            raise ValueError(msg)

        return await func(ctx, *args, **kwargs)

    return wrapper  # type: ignore


def _describe_response(response: requests.Response) -> str:
    try:
        data = json.dumps(response.json())
    except ValueError:
        data = response.text
    return f"Status: {response.status_code}, Data: {data}"


def handle_zephyr_api_errors(action: str, not_found: str | None = None) -> Callable:
    """
    Decorator translating HTTP failures of Zephyr client methods.

    Args:
        action: Human readable action used in error messages
            (e.g., "get test case").
        not_found: Optional message template used for 404 responses. It is
            formatted with the decorated method's bound arguments, e.g.
            "Test case {test_case_key} not found".
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            try:
                return func(self, *args, **kwargs)
            except HTTPError as http_err:
                response = http_err.response
                status_code = response.status_code if response is not None else None
                if status_code in (401, 403):
                    error_msg = (
                        f"Authentication failed for Zephyr API ({status_code}). "
                        "Token may be expired or invalid. Please verify credentials."
                    )
                    logger.error(error_msg)
                    raise MCPZephyrAuthenticationError(error_msg) from http_err

                if status_code == 404 and not_found:
                    bound = signature.bind(self, *args, **kwargs)
                    bound.apply_defaults()
                    detail = not_found.format(**bound.arguments)
                elif response is not None:
                    detail = _describe_response(response)
                else:
                    detail = str(http_err)

                logger.error(f"HTTP error during {func.__name__}: {detail}")
                msg = f"Failed to {action}: {detail}"
                raise ZephyrApiError(msg, status_code=status_code) from http_err
            except requests.RequestException as e:
                logger.error(f"Network error during {func.__name__}: {e}")
                msg = f"Failed to {action}: {e}"
                raise ZephyrApiError(msg) from e

        return wrapper

    return decorator
