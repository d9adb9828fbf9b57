"""Tool-related utility functions for MCP Zephyr."""

import logging
import os

logger = logging.getLogger(__name__)


def get_enabled_tools() -> list[str] | None:
    """Get the list of enabled tools from the ENABLED_TOOLS environment variable.

    Returns:
        List of enabled tool names, or None if all tools should be enabled.
    """
    enabled_tools_str = os.getenv("ENABLED_TOOLS")
    if not enabled_tools_str:
        logger.debug("ENABLED_TOOLS environment variable not set or empty.")
        return None

    tools = [tool.strip() for tool in enabled_tools_str.split(",") if tool.strip()]
    logger.debug(f"Parsed enabled tools from environment: {tools}")
    return tools or None


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    """Check if a tool should be included based on the enabled tools list."""
    if enabled_tools is None:
        return True
    return tool_name in enabled_tools
