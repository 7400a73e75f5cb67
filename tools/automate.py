# =============================================================================
# tools/automate.py  -  Adapter for BrowserStack Automate network logs
# =============================================================================
#
# getNetworkFailures answers one question for the agent: "which requests
# failed during this test session?"  It calls core/automate.py and renders
# the answer as a single text block:
#
#   failures found  →  "<N> network failure(s) found for session <id>:"
#                      followed by the failures as 2-space indented JSON
#   none found      →  "No network failures found for session <id>"
#   call failed     →  "Failed to fetch network logs: <message>"
#                      (flagged isError at block AND envelope level)
# =============================================================================

import logging

from core.automate import retrieve_network_failures
from core.models import ToolResult
from core.results import error_message, error_result, pretty_json, text_result

logger = logging.getLogger(__name__)

NETWORK_LOGS_ERROR_PREFIX = "Failed to fetch network logs: "
NETWORK_LOGS_FALLBACK = "An unknown error occurred"


async def get_network_failures(session_id: str) -> ToolResult:
    """Fetch failed network requests from a BrowserStack Automate session."""
    try:
        report = await retrieve_network_failures(session_id)
    except Exception as exc:
        message = error_message(exc, NETWORK_LOGS_FALLBACK)
        logger.error("Failed to fetch network logs: %s", message)
        return error_result(f"{NETWORK_LOGS_ERROR_PREFIX}{message}")

    logger.info("Successfully fetched failure network logs for session: %s", session_id)

    if report.total_failures > 0:
        return text_result(
            f"{report.total_failures} network failure(s) found for session {session_id}:"
            f"\n\n{pretty_json(report.failures)}"
        )
    return text_result(f"No network failures found for session {session_id}")
