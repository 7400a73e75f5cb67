# =============================================================================
# core/automate.py  -  BrowserStack Automate: network failure lookup
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Fetches the HAR network log recorded for an Automate session and keeps
#   only the requests that failed.
#
# WHAT COUNTS AS A FAILURE:
#   A HAR entry is a failure when ANY of these holds:
#     - response.status == 0      (request never completed: DNS, CORS, abort)
#     - response.status >= 400    (client or server error)
#     - response._error is set    (browser-reported transport error)
#
# WHAT IS KEPT PER FAILURE:
#   HAR entries carry headers, cookies, timings, bodies...  The tool embeds
#   failures verbatim as JSON, so we project each one down to the fields
#   worth reading: when, what was requested, what came back, from where.
# =============================================================================

import logging
from typing import Any

from core.config import get_settings
from core.errors import BrowserStackAPIError
from core.http import browserstack_client
from core.models import NetworkFailureReport

logger = logging.getLogger(__name__)


def is_failure(entry: dict[str, Any]) -> bool:
    """True when a HAR entry describes a failed request."""
    response = entry.get("response") or {}
    status = response.get("status", 0) or 0
    return status == 0 or status >= 400 or response.get("_error") is not None


def summarize_failure(entry: dict[str, Any]) -> dict[str, Any]:
    """Project a HAR entry onto the fields reported back to the host."""
    request = entry.get("request") or {}
    response = entry.get("response") or {}
    summary: dict[str, Any] = {
        "startedDateTime": entry.get("startedDateTime"),
        "request": {
            "method": request.get("method"),
            "url": request.get("url"),
            "queryString": request.get("queryString", []),
        },
        "response": {
            "status": response.get("status"),
            "statusText": response.get("statusText"),
        },
        "serverIPAddress": entry.get("serverIPAddress"),
        "time": entry.get("time"),
    }
    if response.get("_error") is not None:
        summary["response"]["_error"] = response["_error"]
    return summary


def extract_failures(har: dict[str, Any]) -> NetworkFailureReport:
    """Filter a HAR document down to its failed requests, in log order."""
    entries = (har.get("log") or {}).get("entries") or []
    failures = [summarize_failure(entry) for entry in entries if is_failure(entry)]
    return NetworkFailureReport(total_failures=len(failures), failures=failures)


async def retrieve_network_failures(session_id: str) -> NetworkFailureReport:
    """Fetch the failed network requests of one Automate session.

    Args:
        session_id: The Automate session ID (hashed id from the dashboard).

    Returns:
        A NetworkFailureReport with the count and the trimmed entries.

    Raises:
        BrowserStackAPIError: empty/unknown session id or an API error.
        ConfigurationError: credentials are missing.
    """
    if not session_id:
        raise BrowserStackAPIError("Session ID is required")

    settings = get_settings()
    url = f"{settings.automate_api_url}/sessions/{session_id}/networklogs"

    async with browserstack_client(settings) as client:
        response = await client.get(url)

    if response.status_code == 404:
        raise BrowserStackAPIError("Invalid session ID", status_code=404)
    if response.is_error:
        raise BrowserStackAPIError(
            response.reason_phrase or f"HTTP {response.status_code}",
            status_code=response.status_code,
        )

    try:
        har = response.json()
    except ValueError:
        raise BrowserStackAPIError("response was not valid JSON") from None

    report = extract_failures(har if isinstance(har, dict) else {})
    logger.debug(
        "Session %s: %d failed request(s) in network log",
        session_id, report.total_failures,
    )
    return report
