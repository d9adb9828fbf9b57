"""Base client module for Zephyr Scale API interactions."""

import logging
import os
from typing import Any

from atlassian.rest_client import AtlassianRestAPI
from requests import Session

from ..utils.logging import get_masked_session_headers, log_config_param
from ..utils.ssl import configure_ssl_verification
from .config import ZephyrConfig
from .profile import BackendProfile, build_profile

# Configure logging
logger = logging.getLogger("mcp-zephyr")


class ZephyrClient:
    """Base client for Zephyr Scale API interactions."""

    config: ZephyrConfig
    profile: BackendProfile

    def __init__(
        self,
        config: ZephyrConfig | None = None,
        profile: BackendProfile | None = None,
    ) -> None:
        """Initialize the Zephyr client.

        Args:
            config: Optional configuration object (will use env vars if not provided)
            profile: Optional pre-built backend profile; built from config otherwise

        Raises:
            ConfigurationError: If the base URL or credential is missing
        """
        self.config = config or ZephyrConfig.from_env()
        self.profile = profile or build_profile(self.config)

        session = Session()
        session.headers.update(self.profile.auth_headers)

        logger.debug(
            f"Initializing Zephyr client. URL: {self.profile.base_url}, "
            f"Deployment: {self.profile.deployment_type.value}"
        )
        self.zephyr = AtlassianRestAPI(
            url=self.profile.base_url,
            session=session,
            cloud=self.profile.is_cloud,
            timeout=self.config.timeout,
            verify_ssl=self.config.ssl_verify,
        )

        configure_ssl_verification(
            service_name="Zephyr",
            url=self.profile.base_url,
            session=self.zephyr._session,
            ssl_verify=self.config.ssl_verify,
        )

        proxies = {}
        if self.config.http_proxy:
            proxies["http"] = self.config.http_proxy
        if self.config.https_proxy:
            proxies["https"] = self.config.https_proxy
        if proxies:
            self.zephyr._session.proxies.update(proxies)
            for k, v in proxies.items():
                log_config_param(
                    logger, "Zephyr", f"{k.upper()}_PROXY", v, sensitive=True
                )
        if self.config.no_proxy:
            os.environ["NO_PROXY"] = self.config.no_proxy
            log_config_param(logger, "Zephyr", "NO_PROXY", self.config.no_proxy)

        if self.config.custom_headers:
            self.zephyr._session.headers.update(self.config.custom_headers)

        logger.debug(
            f"Zephyr session headers (Authorization masked): "
            f"{get_masked_session_headers(dict(self.zephyr._session.headers))}"
        )

    def _path(self, name: str, **params: Any) -> str:
        return self.profile.endpoint(name, **params)
