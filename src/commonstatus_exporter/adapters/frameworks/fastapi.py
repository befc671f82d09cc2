"""FastAPI adapter for the /probe and /metrics endpoints."""

import logging
import time

from fastapi import APIRouter, FastAPI, Request, Response

from commonstatus_exporter.adapters.fetch import HttpxStatusFetcher
from commonstatus_exporter.adapters.frameworks.query_params import (
    TIMEOUT_HEADER,
    BadProbeRequest,
    _parse_target_param,
    _parse_timeout_header,
)
from commonstatus_exporter.adapters.storage.in_memory import InMemoryMetricSink
from commonstatus_exporter.config import DEFAULT_CONNECTION_TIMEOUT
from commonstatus_exporter.core.encoding.prometheus import CONTENT_TYPE, encode_metrics
from commonstatus_exporter.core.lifetime import LifetimeCounters
from commonstatus_exporter.core.ports import StatusFetcherPort
from commonstatus_exporter.core.probe import run_probe

logger = logging.getLogger(__name__)


def _single_line(text: str) -> str:
    return text.replace("\r", " ").replace("\n", " ")


def create_exporter_router(
    fetcher: StatusFetcherPort,
    counters: LifetimeCounters,
    connection_timeout: float = DEFAULT_CONNECTION_TIMEOUT,
) -> APIRouter:
    """Create a FastAPI router with /probe and /metrics endpoints.

    Args:
        fetcher: Adapter implementing StatusFetcherPort.
        counters: Process-lifetime probe counters.
        connection_timeout: Fetch timeout used when the scrape timeout
            header is absent or invalid.

    Returns:
        APIRouter with /probe and /metrics endpoints configured.
    """
    router = APIRouter()

    @router.get("/probe")
    async def probe(request: Request) -> Response:
        """Probe a status page and return its metrics in Prometheus text format."""
        start = time.perf_counter()
        try:
            target = _parse_target_param(request.query_params.multi_items())
        except BadProbeRequest as exc:
            logger.warning(
                "bad probe request", extra={"url": str(request.url), "err": str(exc)}
            )
            counters.record_failure(time.perf_counter() - start)
            return Response(content=f"{exc}\n", status_code=400, media_type="text/plain")

        timeout = _parse_timeout_header(
            request.headers.get(TIMEOUT_HEADER), connection_timeout
        )
        sink = InMemoryMetricSink()
        outcome = await run_probe(target, fetcher, sink, timeout, counters)
        body = encode_metrics(sink.scrape())
        if not outcome.success:
            comment = _single_line(f"probe of {target} failed: {outcome.error or ''}")
            body = f"# {comment}\n{body}"
            return Response(content=body, status_code=502, media_type=CONTENT_TYPE)
        return Response(content=body, media_type=CONTENT_TYPE)

    @router.get("/metrics")
    async def metrics() -> Response:
        """Return the process-lifetime probe counters."""
        return Response(content=encode_metrics(counters.collect()), media_type=CONTENT_TYPE)

    return router


def create_app(
    connection_timeout: float = DEFAULT_CONNECTION_TIMEOUT,
    fetcher: StatusFetcherPort | None = None,
    counters: LifetimeCounters | None = None,
) -> FastAPI:
    """Create the exporter application.

    Args:
        connection_timeout: Default fetch timeout in seconds.
        fetcher: Status page fetcher (default: HttpxStatusFetcher).
        counters: Lifetime counters (default: a fresh instance).

    Returns:
        FastAPI application serving /probe and /metrics.
    """
    app = FastAPI(title="CommonStatus exporter")
    app.include_router(
        create_exporter_router(
            fetcher or HttpxStatusFetcher(),
            counters or LifetimeCounters(),
            connection_timeout,
        )
    )
    return app
