"""SSL-related utility functions for MCP Zephyr."""

import logging
import ssl
from typing import Any
from urllib.parse import urlparse

from requests.adapters import HTTPAdapter
from requests.sessions import Session
from urllib3.poolmanager import PoolManager

logger = logging.getLogger("mcp-zephyr")


class SSLIgnoreAdapter(HTTPAdapter):
    """HTTP adapter that skips certificate and hostname verification.

    Only mounted for the Zephyr host when ZEPHYR_SSL_VERIFY is false.
    """

    def init_poolmanager(
        self, connections: int, maxsize: int, block: bool = False, **pool_kwargs: Any
    ) -> None:
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

        self.poolmanager = PoolManager(
            num_pools=connections,
            maxsize=maxsize,
            block=block,
            ssl_context=context,
            **pool_kwargs,
        )

    def cert_verify(self, conn: Any, url: str, verify: bool, cert: Any | None) -> None:
        super().cert_verify(conn, url, verify=False, cert=cert)


def configure_ssl_verification(
    service_name: str,
    url: str,
    session: Session,
    *,
    ssl_verify: bool = True,
) -> None:
    """Configure SSL verification of a session for one service host.

    Args:
        service_name: Name of the service for logging (e.g., "Zephyr")
        url: The base URL of the service
        session: The requests session to configure
        ssl_verify: When False, certificate validation is disabled for the
            service's domain on both http and https.
    """
    if ssl_verify:
        session.verify = True
        return

    logger.warning(
        f"{service_name} SSL verification disabled. "
        "This is insecure and should only be used in testing environments."
    )
    domain = urlparse(url).netloc
    adapter = SSLIgnoreAdapter()
    for scheme in ("https", "http"):
        mount_url = f"{scheme}://{domain}"
        session.mount(mount_url, adapter)
        logger.debug(f"Mounted SSL-ignore adapter for {mount_url}")
