"""Port interfaces for the probe's collaborators.

The core depends only on these protocols, not on concrete adapters.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from commonstatus_exporter.core.models import MetricRecord


@runtime_checkable
class MetricSinkPort(Protocol):
    """Port for the per-probe output channel.

    A sink lives for exactly one probe and is discarded once the response
    has been served. Example: InMemoryMetricSink.
    """

    def write(self, record: MetricRecord) -> None:
        """Append a metric record."""
        ...

    def scrape(self) -> Iterable[MetricRecord]:
        """Return all records written so far, in write order."""
        ...


@runtime_checkable
class StatusFetcherPort(Protocol):
    """Port for retrieving the legacy status page.

    Example: HttpxStatusFetcher.
    """

    async def fetch(self, target: str, timeout: float) -> str:
        """Fetch the status page body.

        Args:
            target: URL of the status page.
            timeout: Timeout in seconds.

        Returns:
            The decoded response body.

        Raises:
            FetchError: On connection errors, timeouts or a non-200 status.
        """
        ...
