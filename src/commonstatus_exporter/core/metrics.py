"""Metric helper functions for creating MetricRecord objects."""

import re

from commonstatus_exporter.core.models import MetricKind, MetricRecord

_INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9:_]")


def sanitize_name(name: str) -> str:
    """Turn arbitrary legacy key text into a valid metric name.

    Every character outside ``[a-zA-Z0-9:_]`` is replaced with ``_``. Names
    may not start with a digit, so such names get a leading underscore.

    Args:
        name: Raw name (e.g., "GC-PS-MarkSweep")

    Returns:
        Name matching ``[a-zA-Z_:][a-zA-Z0-9_:]*`` (e.g., "GC_PS_MarkSweep")
    """
    sanitized = _INVALID_NAME_CHARS.sub("_", name)
    if not sanitized or sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    return sanitized


def counter(
    name: str,
    value: float,
    help: str = "",
    labels: dict[str, str] | None = None,
) -> MetricRecord:
    """Create a counter metric record.

    Args:
        name: Metric name (e.g., "app_uptime_seconds_total")
        value: Current counter value
        help: Optional help text
        labels: Optional dimension labels

    Returns:
        MetricRecord of kind COUNTER with a sanitized name
    """
    return MetricRecord(
        name=sanitize_name(name),
        value=float(value),
        kind=MetricKind.COUNTER,
        help=help,
        labels=labels or {},
    )


def gauge(
    name: str,
    value: float,
    help: str = "",
    labels: dict[str, str] | None = None,
) -> MetricRecord:
    """Create a gauge metric record.

    Args:
        name: Metric name (e.g., "load_average1")
        value: Current gauge value
        help: Optional help text
        labels: Optional dimension labels

    Returns:
        MetricRecord of kind GAUGE with a sanitized name
    """
    return MetricRecord(
        name=sanitize_name(name),
        value=float(value),
        kind=MetricKind.GAUGE,
        help=help,
        labels=labels or {},
    )


def untyped(
    name: str,
    value: float,
    labels: dict[str, str] | None = None,
) -> MetricRecord:
    """Create an untyped metric record, as used for plain status values."""
    return MetricRecord(
        name=sanitize_name(name),
        value=float(value),
        kind=MetricKind.UNTYPED,
        labels=labels or {},
    )
