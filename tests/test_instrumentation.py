"""Tests for fire-and-forget usage events."""

import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest

from core import instrumentation
from core.instrumentation import client_details, track_mcp_event


async def _drain():
    await asyncio.gather(*list(instrumentation._pending))


class TestTrackMcpEvent:

    def test_client_details_shapes(self):
        assert client_details(None) == {"name": None, "version": None}
        assert client_details({"name": "claude", "version": "1.0"}) == {
            "name": "claude", "version": "1.0"}
        assert client_details(SimpleNamespace(name="cursor", version="0.5")) == {
            "name": "cursor", "version": "0.5"}

    @pytest.mark.asyncio
    async def test_without_sink_only_logs(self):
        track_mcp_event("getNetworkFailures", {"name": "claude", "version": "1.0"})
        assert not instrumentation._pending

    @pytest.mark.asyncio
    async def test_posts_event_in_background(self, monkeypatch):
        monkeypatch.setenv("BROWSERSTACK_INSTRUMENTATION_URL", "https://events.test/track")
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(204)

        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            instrumentation.httpx, "AsyncClient",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )

        assert track_mcp_event("listTestCases", {"name": "claude", "version": "1.0"}) is None
        await _drain()

        assert seen == [{
            "event": "MCPToolInvoked",
            "tool": "listTestCases",
            "client": {"name": "claude", "version": "1.0"},
        }]
        assert not instrumentation._pending

    @pytest.mark.asyncio
    async def test_sink_failure_is_swallowed(self, monkeypatch):
        monkeypatch.setenv("BROWSERSTACK_INSTRUMENTATION_URL", "https://events.test/track")

        def handler(request):
            raise httpx.ConnectError("down", request=request)

        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            instrumentation.httpx, "AsyncClient",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )

        track_mcp_event("createTestRun")
        await _drain()

    def test_no_running_loop_does_not_raise(self, monkeypatch):
        monkeypatch.setenv("BROWSERSTACK_INSTRUMENTATION_URL", "https://events.test/track")

        track_mcp_event("createTestCase")

        assert not instrumentation._pending
