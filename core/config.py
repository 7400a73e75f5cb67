# =============================================================================
# core/config.py  -  Settings read from the environment
# =============================================================================
#
# WHERE VALUES COME FROM:
#   main.py calls load_dotenv() before anything else, so a local .env file
#   and the real process environment both end up in os.environ.  This module
#   only READS os.environ - it never loads files itself.
#
# VARIABLES:
#   BROWSERSTACK_USERNAME / BROWSERSTACK_ACCESS_KEY   (required for API calls)
#   BROWSERSTACK_AUTOMATE_API_URL                     (Automate REST base)
#   BROWSERSTACK_TEST_MANAGEMENT_API_URL              (Test Management v2 base)
#   BROWSERSTACK_HTTP_TIMEOUT                         (seconds, default 30)
#   BROWSERSTACK_INSTRUMENTATION_URL                  (telemetry sink, optional)
#   BROWSERSTACK_LOG_LEVEL                            (default INFO)
# =============================================================================

from dataclasses import dataclass
import os
from typing import Optional

from core.errors import ConfigurationError

DEFAULT_AUTOMATE_API_URL = "https://api.browserstack.com/automate"
DEFAULT_TEST_MANAGEMENT_API_URL = "https://test-management.browserstack.com/api/v2"
DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the BrowserStack tool server."""

    username: Optional[str]
    access_key: Optional[str]
    automate_api_url: str = DEFAULT_AUTOMATE_API_URL
    test_management_api_url: str = DEFAULT_TEST_MANAGEMENT_API_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    instrumentation_url: Optional[str] = None
    log_level: str = "INFO"

    def credentials(self) -> tuple[str, str]:
        """Return (username, access_key) or raise if either is missing."""
        if not self.username or not self.access_key:
            raise ConfigurationError(
                "BrowserStack credentials are not configured. "
                "Set BROWSERSTACK_USERNAME and BROWSERSTACK_ACCESS_KEY."
            )
        return self.username, self.access_key


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def get_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        username=os.environ.get("BROWSERSTACK_USERNAME") or None,
        access_key=os.environ.get("BROWSERSTACK_ACCESS_KEY") or None,
        automate_api_url=os.environ.get(
            "BROWSERSTACK_AUTOMATE_API_URL", DEFAULT_AUTOMATE_API_URL
        ).rstrip("/"),
        test_management_api_url=os.environ.get(
            "BROWSERSTACK_TEST_MANAGEMENT_API_URL", DEFAULT_TEST_MANAGEMENT_API_URL
        ).rstrip("/"),
        http_timeout=_float_env("BROWSERSTACK_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        instrumentation_url=os.environ.get("BROWSERSTACK_INSTRUMENTATION_URL") or None,
        log_level=os.environ.get("BROWSERSTACK_LOG_LEVEL", "INFO").upper(),
    )
