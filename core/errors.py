# =============================================================================
# core/errors.py  -  Exceptions raised by the BrowserStack collaborators
# =============================================================================
#
# Collaborators in core/ RAISE; adapters in tools/ CATCH.  Nothing here is
# ever shown to the MCP host as a traceback: the adapters turn every failure
# into an error envelope with a prefixed, human-readable message.
# =============================================================================

from typing import Any, Optional


class BrowserStackError(Exception):
    """Base class for every failure raised by this package."""


class ConfigurationError(BrowserStackError):
    """Credentials or endpoints are missing from the environment."""


class BrowserStackAPIError(BrowserStackError):
    """The BrowserStack API answered with an error status or ``success: false``."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
