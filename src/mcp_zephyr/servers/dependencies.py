"""Dependency providers for the Zephyr tools."""

from __future__ import annotations

import logging

from fastmcp import Context

from mcp_zephyr.servers.context import MainAppContext
from mcp_zephyr.zephyr import ZephyrFetcher

logger = logging.getLogger("mcp-zephyr.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext | None:
    """Return the MainAppContext published by the server lifespan, if any."""
    lifespan_ctx_dict = ctx.request_context.lifespan_context  # type: ignore[attr-defined]
    app_lifespan_ctx = (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )
    return app_lifespan_ctx if isinstance(app_lifespan_ctx, MainAppContext) else None


async def get_zephyr_fetcher(ctx: Context) -> ZephyrFetcher:
    """Return the ZephyrFetcher built at startup.

    Args:
        ctx: The FastMCP context.

    Returns:
        The ZephyrFetcher instance shared by all tools.

    Raises:
        ValueError: If the Zephyr client is not configured or available.
    """
    app_ctx = get_app_context(ctx)
    if app_ctx is None or app_ctx.zephyr_fetcher is None:
        logger.error("Zephyr client is not available in the application context.")
        raise ValueError(
            "Zephyr client (fetcher) not available. Ensure ZEPHYR_BASE_URL and "
            "ZEPHYR_API_KEY are configured."
        )
    return app_ctx.zephyr_fetcher
