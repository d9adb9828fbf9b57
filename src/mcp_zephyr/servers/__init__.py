"""FastMCP server instances for MCP Zephyr."""

from .main import main_mcp

__all__ = ["main_mcp"]
