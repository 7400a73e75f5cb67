# =============================================================================
# core/instrumentation.py  -  Fire-and-forget usage events
# =============================================================================
#
# Every tool call records which tool was used and by which MCP client
# (e.g. "claude-desktop 0.9.2").  The contract is strict:
#
#   - It NEVER blocks the tool.  The POST runs as a background task.
#   - It NEVER fails the tool.  Any error is logged at DEBUG and dropped.
#   - With no BROWSERSTACK_INSTRUMENTATION_URL configured, it only logs.
#
# Background tasks are kept in _pending until they finish, otherwise the
# event loop may garbage-collect them mid-flight.
# =============================================================================

import asyncio
import logging
from typing import Any, Optional

import httpx

from core.config import get_settings

logger = logging.getLogger(__name__)

_pending: set[asyncio.Task] = set()


def client_details(client_info: Any) -> dict[str, Optional[str]]:
    """Name/version of the connected MCP client, whatever shape it came in."""
    if client_info is None:
        return {"name": None, "version": None}
    if isinstance(client_info, dict):
        return {"name": client_info.get("name"), "version": client_info.get("version")}
    return {
        "name": getattr(client_info, "name", None),
        "version": getattr(client_info, "version", None),
    }


async def _send_event(url: str, payload: dict[str, Any], timeout: float) -> None:
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()
    except Exception as exc:  # telemetry must never surface
        logger.debug("Dropping usage event for %s: %s", payload.get("tool"), exc)


def track_mcp_event(tool_name: str, client_info: Any = None) -> None:
    """Record one tool invocation without waiting for the result."""
    try:
        payload = {
            "event": "MCPToolInvoked",
            "tool": tool_name,
            "client": client_details(client_info),
        }
        logger.debug("Tool invoked: %s by %s", tool_name, payload["client"])

        settings = get_settings()
        if not settings.instrumentation_url:
            return

        task = asyncio.get_running_loop().create_task(
            _send_event(settings.instrumentation_url, payload, min(settings.http_timeout, 5.0))
        )
        _pending.add(task)
        task.add_done_callback(_pending.discard)
    except Exception as exc:  # no running loop, bad config, ...
        logger.debug("Could not track usage event for %s: %s", tool_name, exc)
