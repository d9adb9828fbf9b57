"""Main FastMCP server setup for the Zephyr Scale integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from fastmcp.tools import Tool as FastMCPTool
from mcp.types import Tool as MCPTool
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_zephyr.exceptions import ConfigurationError
from mcp_zephyr.utils.env import is_read_only_mode
from mcp_zephyr.utils.tools import get_enabled_tools, should_include_tool
from mcp_zephyr.zephyr import ZephyrConfig, ZephyrFetcher, build_profile

from .context import MainAppContext
from .zephyr import zephyr_mcp

logger = logging.getLogger("mcp-zephyr.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main Zephyr MCP server lifespan starting...")
    read_only = is_read_only_mode()
    enabled_tools = get_enabled_tools()

    config = ZephyrConfig.from_env()
    try:
        profile = build_profile(config)
    except ConfigurationError as e:
        logger.error(f"Zephyr configuration is incomplete: {e}")
        raise

    app_context = MainAppContext(
        profile=profile,
        zephyr_fetcher=ZephyrFetcher(config=config, profile=profile),
        read_only=read_only,
        enabled_tools=enabled_tools,
    )
    logger.info(
        f"Zephyr backend: {profile.deployment_type.value} at {profile.base_url}"
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")

    try:
        yield {"app_lifespan_context": app_context}
    except Exception as e:
        logger.error(f"Error during lifespan: {e}", exc_info=True)
        raise
    finally:
        logger.info("Main Zephyr MCP server lifespan shutdown complete.")


class ZephyrMCP(FastMCP[MainAppContext]):
    """FastMCP server class for Zephyr Scale with tool filtering."""

    async def _mcp_list_tools(self) -> list[MCPTool]:
        # Filter on enabled_tools and read-only mode from the lifespan context.
        req_context = self._mcp_server.request_context
        if req_context is None or req_context.lifespan_context is None:
            logger.warning("Lifespan context not available during tool listing.")
            return []

        lifespan_ctx_dict = req_context.lifespan_context
        app_lifespan_state: MainAppContext | None = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )
        read_only = app_lifespan_state.read_only if app_lifespan_state else False
        enabled_tools_filter = (
            app_lifespan_state.enabled_tools if app_lifespan_state else None
        )
        logger.debug(
            f"Listing tools: read_only={read_only}, enabled_tools_filter={enabled_tools_filter}"
        )

        all_tools: dict[str, FastMCPTool] = await self.get_tools()
        filtered_tools: list[MCPTool] = []
        for registered_name, tool_obj in all_tools.items():
            if not should_include_tool(registered_name, enabled_tools_filter):
                logger.debug(f"Excluding tool '{registered_name}' (not enabled)")
                continue
            if read_only and "write" in tool_obj.tags:
                logger.debug(
                    f"Excluding tool '{registered_name}' due to read-only mode and 'write' tag"
                )
                continue
            filtered_tools.append(tool_obj.to_mcp_tool(name=registered_name))

        logger.debug(f"Total tools after filtering: {len(filtered_tools)}")
        return filtered_tools


main_mcp = ZephyrMCP(name="Zephyr MCP", lifespan=main_lifespan)
main_mcp.mount(zephyr_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
