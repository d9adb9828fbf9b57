"""Resolution of the Zephyr Scale backend flavour, endpoints and auth headers."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from urllib.parse import quote

from ..exceptions import ConfigurationError
from ..utils.logging import mask_sensitive
from ..utils.urls import is_atlassian_cloud_url
from .config import ZephyrConfig
from .constants import CLOUD_API_BASE, CLOUD_ENDPOINTS, DATA_CENTER_ENDPOINTS

logger = logging.getLogger("mcp-zephyr.profile")


class DeploymentType(str, Enum):
    """Deployment flavour of the Zephyr Scale backend."""

    CLOUD = "cloud"
    DATA_CENTER = "datacenter"


@dataclass(frozen=True)
class BackendProfile:
    """Immutable description of how to talk to the Zephyr Scale backend."""

    deployment_type: DeploymentType
    base_url: str
    auth_headers: Mapping[str, str]
    endpoints: Mapping[str, str]

    @property
    def is_cloud(self) -> bool:
        return self.deployment_type is DeploymentType.CLOUD

    def endpoint(self, name: str, **params: str) -> str:
        """Render the path for a logical resource.

        Args:
            name: Logical resource name (e.g. "testcase_item")
            **params: Path parameters, URL-quoted before substitution

        Raises:
            KeyError: If the resource name is unknown.
        """
        template = self.endpoints[name]
        return template.format(
            **{key: quote(str(value), safe="") for key, value in params.items()}
        )


def detect_deployment_type(
    base_url: str | None, override: str | None = None
) -> DeploymentType:
    """Guess the deployment flavour from the base URL.

    An Atlassian Cloud URL always wins; otherwise a recognised override
    ("cloud" / "datacenter", any case) is honoured and Data Center is the
    default. No network call is made.
    """
    if is_atlassian_cloud_url(base_url):
        return DeploymentType.CLOUD

    if override:
        normalized = override.strip().lower()
        for deployment_type in DeploymentType:
            if deployment_type.value == normalized:
                return deployment_type
        logger.warning(
            f"Ignoring unrecognised deployment type override {override!r}; "
            "expected 'cloud' or 'datacenter'"
        )

    return DeploymentType.DATA_CENTER


def build_profile(config: ZephyrConfig) -> BackendProfile:
    """Build the backend profile once at startup.

    Args:
        config: Operator supplied configuration

    Returns:
        The immutable BackendProfile

    Raises:
        ConfigurationError: If the base URL or the credential is missing.
    """
    if not config.url:
        raise ConfigurationError(
            "Zephyr base URL required: set the ZEPHYR_BASE_URL environment variable"
        )
    if not config.is_auth_configured():
        raise ConfigurationError(
            "Zephyr credential required: set the ZEPHYR_API_KEY environment variable"
        )

    deployment_type = detect_deployment_type(config.url, config.deployment_type)
    if deployment_type is DeploymentType.CLOUD:
        base_url = CLOUD_API_BASE
        endpoints = CLOUD_ENDPOINTS
    else:
        base_url = config.url
        endpoints = DATA_CENTER_ENDPOINTS

    auth_headers = {
        "Authorization": f"Bearer {config.api_token}",
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    logger.info(
        f"Zephyr backend resolved: type={deployment_type.value}, "
        f"url={base_url}, token={mask_sensitive(config.api_token)}"
    )
    return BackendProfile(
        deployment_type=deployment_type,
        base_url=base_url,
        auth_headers=MappingProxyType(auth_headers),
        endpoints=MappingProxyType(dict(endpoints)),
    )
