"""Storage adapters implementing core ports."""

from commonstatus_exporter.adapters.storage.in_memory import InMemoryMetricSink

__all__ = [
    "InMemoryMetricSink",
]
