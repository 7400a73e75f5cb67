# =============================================================================
# core/http.py  -  The one place that builds HTTP clients
# =============================================================================
#
# Every BrowserStack call goes through browserstack_client().  It returns a
# fresh httpx.AsyncClient configured with:
#   - HTTP basic auth from BROWSERSTACK_USERNAME / BROWSERSTACK_ACCESS_KEY
#   - the configured timeout (no retries, no caching at this layer)
#
# Callers use it as an async context manager, so each tool invocation owns
# its connection pool and nothing is shared between concurrent calls:
#
#     async with browserstack_client() as client:
#         response = await client.get(url)
#
# Tests replace this factory to plug in an httpx.MockTransport.
# =============================================================================

import json
import logging
from typing import Any, Optional

import httpx

from core.config import Settings, get_settings
from core.errors import BrowserStackAPIError

logger = logging.getLogger(__name__)

USER_AGENT = "browserstack-mcp-server/0.1.0"


def browserstack_client(settings: Optional[Settings] = None) -> httpx.AsyncClient:
    """Create an authenticated client for the BrowserStack REST APIs."""
    settings = settings or get_settings()
    username, access_key = settings.credentials()
    return httpx.AsyncClient(
        auth=httpx.BasicAuth(username, access_key),
        timeout=settings.http_timeout,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
    )


def read_json(response: httpx.Response, action: str) -> Any:
    """Decode a JSON body, raising BrowserStackAPIError on HTTP errors.

    ``action`` names the operation in debug logs, e.g.
    "create test case".
    """
    if response.is_error:
        detail = _error_detail(response)
        logger.debug(
            "BrowserStack %s failed with HTTP %s: %s",
            action, response.status_code, detail,
        )
        raise BrowserStackAPIError(
            f"HTTP {response.status_code} {detail}".rstrip(),
            status_code=response.status_code,
            payload=detail,
        )
    try:
        return response.json()
    except ValueError:
        raise BrowserStackAPIError(
            "response was not valid JSON",
            status_code=response.status_code,
        ) from None


def ensure_success(data: Any, action: str) -> dict[str, Any]:
    """Test Management wraps payloads in ``{"success": bool, ...}``."""
    if not isinstance(data, dict) or not data.get("success"):
        logger.debug("BrowserStack %s reported failure: %s", action, data)
        raise BrowserStackAPIError(json.dumps(data), payload=data)
    return data


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict):
        for key in ("message", "error", "errors"):
            if body.get(key):
                return str(body[key])
    return str(body)
