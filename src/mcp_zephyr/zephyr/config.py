"""Configuration module for Zephyr Scale API interactions."""

import os
from dataclasses import dataclass, field

from ..utils.env import get_custom_headers, get_env_int, is_env_ssl_verify
from .constants import DEFAULT_TIMEOUT_SECONDS


@dataclass
class ZephyrConfig:
    """Raw Zephyr Scale settings as supplied by the operator.

    Values are not validated here; ``build_profile`` decides whether they
    describe a usable backend.
    """

    url: str | None = None  # Jira base URL, also used to detect Cloud
    api_token: str | None = None  # Bearer token for the Zephyr Scale API
    deployment_type: str | None = None  # Optional "cloud" / "datacenter" override
    ssl_verify: bool = True  # Whether to verify SSL certificates
    timeout: int = DEFAULT_TIMEOUT_SECONDS  # Request timeout in seconds
    http_proxy: str | None = None  # HTTP proxy URL
    https_proxy: str | None = None  # HTTPS proxy URL
    no_proxy: str | None = None  # Comma-separated list of hosts to bypass proxy
    custom_headers: dict[str, str] = field(default_factory=dict)

    def is_auth_configured(self) -> bool:
        """Check if a bearer credential was supplied."""
        return bool(self.api_token)

    @classmethod
    def from_env(cls) -> "ZephyrConfig":
        """Create configuration from environment variables.

        Returns:
            ZephyrConfig with values from environment variables
        """
        return cls(
            url=os.getenv("ZEPHYR_BASE_URL") or None,
            api_token=os.getenv("ZEPHYR_API_KEY") or None,
            deployment_type=os.getenv("ZEPHYR_DEPLOYMENT_TYPE") or None,
            ssl_verify=is_env_ssl_verify("ZEPHYR_SSL_VERIFY"),
            timeout=get_env_int("ZEPHYR_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
            http_proxy=os.getenv("ZEPHYR_HTTP_PROXY", os.getenv("HTTP_PROXY")),
            https_proxy=os.getenv("ZEPHYR_HTTPS_PROXY", os.getenv("HTTPS_PROXY")),
            no_proxy=os.getenv("ZEPHYR_NO_PROXY", os.getenv("NO_PROXY")),
            custom_headers=get_custom_headers("ZEPHYR_CUSTOM_HEADERS"),
        )
