"""Shared fixtures: a clean BrowserStack environment and a mocked API."""

import httpx
import pytest

import core.automate
import core.testmanagement

AUTOMATE_URL = "https://automate.test/automate"
TEST_MANAGEMENT_URL = "https://tm.test/api/v2"


@pytest.fixture(autouse=True)
def browserstack_env(monkeypatch):
    """Fake credentials and test endpoints; no telemetry sink."""
    monkeypatch.setenv("BROWSERSTACK_USERNAME", "fake-user")
    monkeypatch.setenv("BROWSERSTACK_ACCESS_KEY", "fake-key")
    monkeypatch.setenv("BROWSERSTACK_AUTOMATE_API_URL", AUTOMATE_URL)
    monkeypatch.setenv("BROWSERSTACK_TEST_MANAGEMENT_API_URL", TEST_MANAGEMENT_URL)
    monkeypatch.delenv("BROWSERSTACK_HTTP_TIMEOUT", raising=False)
    monkeypatch.delenv("BROWSERSTACK_INSTRUMENTATION_URL", raising=False)
    monkeypatch.delenv("BROWSERSTACK_LOG_LEVEL", raising=False)


@pytest.fixture
def mock_api(monkeypatch):
    """Route every BrowserStack call to ``handler``; returns the seen requests.

    Usage::

        requests = mock_api(lambda request: httpx.Response(200, json={...}))
    """
    seen: list[httpx.Request] = []

    def install(handler):
        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        def factory(settings=None):
            return httpx.AsyncClient(
                transport=httpx.MockTransport(recording),
                auth=httpx.BasicAuth("fake-user", "fake-key"),
            )

        monkeypatch.setattr(core.automate, "browserstack_client", factory)
        monkeypatch.setattr(core.testmanagement, "browserstack_client", factory)
        return seen

    return install
