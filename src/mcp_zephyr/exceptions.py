class ConfigurationError(ValueError):
    """Raised when the Zephyr backend cannot be configured.

    This error is permanent: it is raised before any network activity and
    the server must be restarted with corrected configuration.
    """

    pass


class MCPZephyrAuthenticationError(Exception):
    """Raised when Zephyr API authentication fails (401/403)."""

    pass


class ZephyrApiError(Exception):
    """Raised when a Zephyr REST call fails for a non-authentication reason."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
