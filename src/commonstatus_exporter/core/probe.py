"""Probe orchestration: fetch a status page and convert it line by line."""

import logging
import time

from commonstatus_exporter.core.classifier import classify
from commonstatus_exporter.core.dispatcher import convert
from commonstatus_exporter.core.encoding.prometheus import (
    is_exposition_line,
    parse_exposition_line,
)
from commonstatus_exporter.core.errors import ConversionError, FetchError
from commonstatus_exporter.core.lifetime import LifetimeCounters
from commonstatus_exporter.core.metrics import gauge
from commonstatus_exporter.core.models import (
    MetricRecord,
    ProbeOutcome,
    ProbeState,
    Shape,
)
from commonstatus_exporter.core.ports import MetricSinkPort, StatusFetcherPort

logger = logging.getLogger(__name__)

UP_HELP = "Was talking to the application successful"

# Lines with these shapes carry no special legacy key and may already be
# valid exposition text.
_PASSTHROUGH_SHAPES = frozenset({Shape.PLAIN, Shape.UNRECOGNIZED})

# Written by the probe itself; a status line may not produce them.
RESERVED_NAMES = frozenset(
    {"up", "converted_metrics", "failed_metrics", "probe_duration_seconds"}
)


def _is_skippable(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def _series_key(record: MetricRecord) -> tuple[str, tuple[tuple[str, str], ...]]:
    return record.name, tuple(sorted(record.labels.items()))


def _collisions(records: list[MetricRecord], outcome: ProbeOutcome) -> list[str]:
    """Return the names of records that would duplicate or shadow a series."""
    seen = set(outcome.series)
    taken = []
    for record in records:
        key = _series_key(record)
        if record.name in RESERVED_NAMES or key in seen:
            taken.append(record.name)
        seen.add(key)
    return taken


def scan_line(line: str, sink: MetricSinkPort, outcome: ProbeOutcome) -> None:
    """Convert one line into the sink and count it as converted or failed.

    A line is failed as a whole when any of its records repeats a series
    already written during this probe or uses one of RESERVED_NAMES.
    """
    logger.debug("received a new metric", extra={"metric": line, "target": outcome.target})
    if classify(line) in _PASSTHROUGH_SHAPES and is_exposition_line(line):
        records = parse_exposition_line(line)
    else:
        try:
            records = convert(line)
        except ConversionError as exc:
            outcome.failed += 1
            logger.debug("failed to convert metric", extra={"metric": line, "err": str(exc)})
            return

    taken = _collisions(records, outcome)
    if taken:
        outcome.failed += 1
        logger.debug(
            "metric collides with an existing series",
            extra={"metric": line, "name": ",".join(taken)},
        )
        return

    for record in records:
        outcome.series.add(_series_key(record))
        sink.write(record)
    outcome.converted += 1
    logger.debug("converted metric", extra={"metric": line})


def _fail(
    outcome: ProbeOutcome,
    sink: MetricSinkPort,
    counters: LifetimeCounters,
    started: float,
    error: FetchError,
) -> ProbeOutcome:
    outcome.state = ProbeState.FAILED
    outcome.error = str(error)
    outcome.duration = time.perf_counter() - started
    sink.write(gauge("up", 0, help=UP_HELP))
    counters.record_failure(outcome.duration)
    logger.info(
        "probe failed",
        extra={"target": outcome.target, "err": outcome.error},
    )
    return outcome


async def run_probe(
    target: str,
    fetcher: StatusFetcherPort,
    sink: MetricSinkPort,
    timeout: float,
    counters: LifetimeCounters,
) -> ProbeOutcome:
    """Run one probe against a status page.

    A failed fetch writes only ``up 0`` to the sink. Otherwise every line is
    converted independently, then ``converted_metrics``, ``failed_metrics``,
    ``probe_duration_seconds`` and ``up 1`` are written.

    Args:
        target: URL of the status page.
        fetcher: Retrieves the page body.
        sink: Fresh output channel for this probe only.
        timeout: Fetch timeout in seconds.
        counters: Process-lifetime counters to update.

    Returns:
        The finalized ProbeOutcome.
    """
    started = time.perf_counter()
    outcome = ProbeOutcome(target=target)

    outcome.state = ProbeState.FETCHING
    try:
        body = await fetcher.fetch(target, timeout)
    except FetchError as exc:
        return _fail(outcome, sink, counters, started, exc)

    outcome.state = ProbeState.SCANNING
    # Only "\n" ends a line; a trailing "\r" belongs to the line ending.
    for raw in body.split("\n"):
        line = raw.removesuffix("\r")
        if _is_skippable(line):
            continue
        scan_line(line, sink, outcome)

    outcome.duration = time.perf_counter() - started
    sink.write(
        gauge(
            "converted_metrics",
            outcome.converted,
            help="The number of CommonStatus metrics converted to prometheus metrics",
        )
    )
    sink.write(
        gauge(
            "failed_metrics",
            outcome.failed,
            help="The number of CommonStatus metrics failed to convert to prometheus metrics",
        )
    )
    sink.write(
        gauge(
            "probe_duration_seconds",
            outcome.duration,
            help="Duration of the probe in seconds",
        )
    )
    sink.write(gauge("up", 1, help=UP_HELP))

    outcome.state = ProbeState.COMPLETED
    outcome.success = True
    counters.record_success(outcome.duration)
    logger.info(
        "probe succeeded",
        extra={
            "target": target,
            "duration": f"{outcome.duration:.2f}s",
            "converted_metrics": outcome.converted,
            "failed_metrics": outcome.failed,
        },
    )
    return outcome
