"""
Utility functions for the MCP Zephyr integration.
This package provides various utility functions used throughout the codebase.
"""

from .env import get_custom_headers, is_env_ssl_verify, is_read_only_mode
from .gherkin import convert_to_gherkin
from .logging import mask_sensitive, setup_logging
from .ssl import SSLIgnoreAdapter, configure_ssl_verification
from .urls import is_atlassian_cloud_url

__all__ = [
    "SSLIgnoreAdapter",
    "configure_ssl_verification",
    "convert_to_gherkin",
    "get_custom_headers",
    "is_atlassian_cloud_url",
    "is_env_ssl_verify",
    "is_read_only_mode",
    "mask_sensitive",
    "setup_logging",
]
