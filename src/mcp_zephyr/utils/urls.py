"""URL-related utility functions for MCP Zephyr."""

ATLASSIAN_CLOUD_DOMAIN = ".atlassian.net"


def is_atlassian_cloud_url(url: str | None) -> bool:
    """Determine if a URL belongs to an Atlassian Cloud site.

    Args:
        url: The base URL to check

    Returns:
        True if the URL contains the Atlassian Cloud domain
    """
    if not url:
        return False
    return ATLASSIAN_CLOUD_DOMAIN in url.lower()
