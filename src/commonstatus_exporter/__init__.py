"""Prometheus exporter for legacy CommonStatus pages.

Example:
    ```python
    from commonstatus_exporter import InMemoryMetricSink, convert

    sink = InMemoryMetricSink()
    convert("LoadAvg: 1.94 3.44 5.07", sink)
    ```
"""

from commonstatus_exporter.adapters.storage.in_memory import InMemoryMetricSink
from commonstatus_exporter.core.classifier import classify
from commonstatus_exporter.core.dispatcher import convert
from commonstatus_exporter.core.encoding.prometheus import encode_metrics
from commonstatus_exporter.core.errors import (
    ConfigError,
    ConversionError,
    ExporterError,
    FetchError,
    MalformedNumber,
    PatternMismatch,
    TimestampParseError,
)
from commonstatus_exporter.core.lifetime import LifetimeCounters
from commonstatus_exporter.core.metrics import counter, gauge, sanitize_name, untyped
from commonstatus_exporter.core.models import (
    MetricKind,
    MetricRecord,
    ProbeOutcome,
    ProbeState,
    Shape,
)
from commonstatus_exporter.core.numbers import normalize_number
from commonstatus_exporter.core.probe import run_probe

__all__ = [
    "ConfigError",
    "ConversionError",
    "ExporterError",
    "FetchError",
    "InMemoryMetricSink",
    "LifetimeCounters",
    "MalformedNumber",
    "MetricKind",
    "MetricRecord",
    "PatternMismatch",
    "ProbeOutcome",
    "ProbeState",
    "Shape",
    "TimestampParseError",
    "classify",
    "convert",
    "counter",
    "encode_metrics",
    "gauge",
    "normalize_number",
    "run_probe",
    "sanitize_name",
    "untyped",
]
