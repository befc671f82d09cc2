"""Shared test fixtures for all test modules."""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest

from commonstatus_exporter.adapters.fetch import HttpxStatusFetcher
from commonstatus_exporter.adapters.frameworks.fastapi import create_app
from commonstatus_exporter.adapters.storage.in_memory import InMemoryMetricSink
from commonstatus_exporter.core.lifetime import LifetimeCounters
from tests.status_page import STATUS_PAGE


@pytest.fixture
def metric_sink() -> InMemoryMetricSink:
    """Provide an empty per-probe sink."""
    return InMemoryMetricSink()


@pytest.fixture
def lifetime_counters() -> LifetimeCounters:
    """Provide fresh lifetime counters."""
    return LifetimeCounters()


@pytest.fixture
def status_transport() -> Callable[..., httpx.MockTransport]:
    """Factory fixture for a mock transport serving a status page.

    Usage:
        transport = status_transport(body="Uptime: 5", status_code=200)
        transport = status_transport(error=httpx.ConnectError("refused"))
    """

    def _transport(
        body: str = STATUS_PAGE,
        status_code: int = 200,
        error: Exception | None = None,
    ) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if error is not None:
                raise error
            return httpx.Response(status_code, text=body)

        return httpx.MockTransport(handler)

    return _transport


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            app = create_app(fetcher=fetcher)
            async with asgi_test_client(app) as client:
                response = await client.get("/endpoint")
    """

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client


@pytest.fixture
async def exporter_client(
    status_transport, lifetime_counters, asgi_test_client
) -> AsyncGenerator:
    """Client for an exporter whose targets always serve STATUS_PAGE.

    Yields a tuple of (client, lifetime_counters).
    """
    fetcher = HttpxStatusFetcher(transport=status_transport())
    app = create_app(fetcher=fetcher, counters=lifetime_counters)
    async with asgi_test_client(app) as client:
        yield client, lifetime_counters
