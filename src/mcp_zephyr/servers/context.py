from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_zephyr.zephyr import BackendProfile, ZephyrFetcher


@dataclass(frozen=True)
class MainAppContext:
    """
    Context holding application-wide state built once at startup:
    the resolved backend profile and the Zephyr client using it.
    """

    profile: BackendProfile | None = None
    zephyr_fetcher: ZephyrFetcher | None = None
    read_only: bool = False
    enabled_tools: list[str] | None = None
