"""Per-shape converters from legacy status lines to metric records.

Every converter takes one line and returns the records it produces, or
raises a ConversionError subclass. Converters never write anywhere; the
dispatcher forwards their output.
"""

import re
import time
from collections.abc import Callable

from commonstatus_exporter.core.classifier import (
    LOAD_AVERAGE_PATTERN,
    PLAIN_PATTERN,
    RELEASE_TAG_PATTERN,
    RUNNING_AVERAGE_PATTERN,
    STARTUP_TIME_PATTERN,
)
from commonstatus_exporter.core.errors import PatternMismatch
from commonstatus_exporter.core.metrics import counter, gauge, untyped
from commonstatus_exporter.core.models import MetricRecord, Shape
from commonstatus_exporter.core.numbers import normalize_number
from commonstatus_exporter.core.timestamps import parse_unix_date

Converter = Callable[[str], list[MetricRecord]]

INFO_METRIC_NAME = "commonstatus_info"
UPTIME_METRIC_NAME = "app_uptime_seconds_total"

_PLAIN_DECIMAL = re.compile(r"^\d+(\.\d+)?$")
_FIELD = re.compile(r"^(?P<key>[A-Za-z_][A-Za-z0-9_]*)=(?P<value>.*)$")

# Running-average values are reported in milliseconds.
_MS_PER_SECOND = 1000.0
_RUNNING_AVERAGE_FIELDS = ("count", "averageValue", "realMaxValue", "stdDeviation")


def _match(pattern: re.Pattern[str], line: str, what: str) -> re.Match[str]:
    match = pattern.match(line)
    if match is None:
        raise PatternMismatch(f"no {what} found in: {line!r}")
    return match


def convert_release_tag(line: str) -> list[MetricRecord]:
    """Turn ``ReleaseTag: <tag>`` into the ``commonstatus_info`` info metric."""
    match = _match(RELEASE_TAG_PATTERN, line, "ReleaseTag")
    return [
        gauge(
            INFO_METRIC_NAME,
            1,
            help="commonstatus information",
            labels={"release_tag": match.group("value")},
        )
    ]


def convert_load_average(line: str) -> list[MetricRecord]:
    """Turn ``LoadAvg: <1m> <5m> <15m>`` into three load average gauges.

    Only plain decimals are accepted here; a grouped or comma-decimal value
    means the line is not a load average triple.
    """
    match = _match(LOAD_AVERAGE_PATTERN, line, "LoadAvg")
    tokens = match.group("value").split()
    if len(tokens) != 3:
        raise PatternMismatch(f"LoadAvg needs exactly three values, got {len(tokens)}: {line!r}")
    for token in tokens:
        if not _PLAIN_DECIMAL.match(token):
            raise PatternMismatch(f"LoadAvg value {token!r} is not a plain decimal")
    return [
        gauge(f"load_average{period}", float(token), help=f"{period}m load average.")
        for period, token in zip((1, 5, 15), tokens, strict=True)
    ]


def convert_startup_time(line: str) -> list[MetricRecord]:
    """Turn ``StartupTime: <unix date>`` into an uptime counter."""
    match = _match(STARTUP_TIME_PATTERN, line, "StartupTime")
    started = parse_unix_date(match.group("value"))
    uptime = time.time() - started.timestamp()
    return [
        counter(
            UPTIME_METRIC_NAME,
            uptime,
            help="Time that an application is running",
        )
    ]


def convert_running_average(line: str) -> list[MetricRecord]:
    """Decompose a running-average record into counters and gauges.

    ``averageEventRate``, ``maxEventRate`` and ``maxValue`` are dropped: rates
    and maxima over time are derived from the counters downstream.
    """
    match = _match(RUNNING_AVERAGE_PATTERN, line, "running average record")
    name = match.group("name")
    fields: dict[str, str] = {}
    for token in match.group("value").split():
        field_match = _FIELD.match(token)
        if field_match is None:
            raise PatternMismatch(f"malformed field {token!r} in: {line!r}")
        fields[field_match.group("key")] = field_match.group("value")

    missing = [key for key in _RUNNING_AVERAGE_FIELDS if key not in fields]
    if missing:
        raise PatternMismatch(f"running average record lacks {', '.join(missing)}: {line!r}")

    count = normalize_number(fields["count"])
    average = normalize_number(fields["averageValue"])
    real_max = normalize_number(fields["realMaxValue"])
    std_deviation = normalize_number(fields["stdDeviation"])

    return [
        counter(f"{name}_total", count, help=f"Number of {name} events."),
        counter(
            f"{name}_seconds_total",
            count * average / _MS_PER_SECOND,
            help=f"Total time spent in {name} events.",
        ),
        gauge(
            f"{name}_max_seconds",
            real_max / _MS_PER_SECOND,
            help=f"Longest {name} event.",
        ),
        gauge(
            f"{name}_stddev_seconds",
            std_deviation / _MS_PER_SECOND,
            help=f"Standard deviation of {name} event durations.",
        ),
    ]


def convert_plain(line: str) -> list[MetricRecord]:
    """Turn ``<name>: <value>`` into one untyped metric."""
    match = _match(PLAIN_PATTERN, line, "metric with numeric value")
    value = normalize_number(match.group("value").strip())
    return [untyped(match.group("name"), value)]


def convert_unrecognized(line: str) -> list[MetricRecord]:
    """Reject a line that carries no ``key: value`` pair."""
    raise PatternMismatch(f"the line doesn't contain a valid metric: {line!r}")


CONVERTERS: dict[Shape, Converter] = {
    Shape.RELEASE_TAG: convert_release_tag,
    Shape.LOAD_AVERAGE: convert_load_average,
    Shape.STARTUP_TIME: convert_startup_time,
    Shape.RUNNING_AVERAGE: convert_running_average,
    Shape.PLAIN: convert_plain,
    Shape.UNRECOGNIZED: convert_unrecognized,
}
