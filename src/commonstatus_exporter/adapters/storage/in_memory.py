"""In-memory metric sink."""

from collections.abc import Iterable

from commonstatus_exporter.core.models import MetricRecord


class InMemoryMetricSink:
    """In-memory implementation of MetricSinkPort.

    Stores metric records in a list. One instance is created per probe and
    dropped once its response has been served.
    """

    def __init__(self) -> None:
        self._records: list[MetricRecord] = []

    def write(self, record: MetricRecord) -> None:
        """Append a metric record."""
        self._records.append(record)

    def scrape(self) -> Iterable[MetricRecord]:
        """Return all records in write order."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
