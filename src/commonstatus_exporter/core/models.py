"""Core domain models for the status-line conversion engine."""

from dataclasses import dataclass, field
from enum import Enum


class MetricKind(Enum):
    """Exposition type of a metric record."""

    GAUGE = "gauge"
    COUNTER = "counter"
    UNTYPED = "untyped"


class Shape(Enum):
    """Legacy status-line encodings recognized by the classifier."""

    PLAIN = "plain"
    LOAD_AVERAGE = "load_average"
    STARTUP_TIME = "startup_time"
    RELEASE_TAG = "release_tag"
    RUNNING_AVERAGE = "running_average"
    UNRECOGNIZED = "unrecognized"


class ProbeState(Enum):
    """Lifecycle of a single probe."""

    STARTED = "started"
    FETCHING = "fetching"
    SCANNING = "scanning"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class MetricRecord:
    """A single metric ready for exposition.

    Attributes:
        name: Sanitized metric name (e.g., load_average1).
        value: The metric value.
        kind: Gauge, counter or untyped.
        help: Help text, may be empty.
        labels: Key-value pairs for metric dimensions, in insertion order.
    """

    name: str
    value: float
    kind: MetricKind = MetricKind.UNTYPED
    help: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class ProbeOutcome:
    """Aggregate result of one probe.

    Attributes:
        target: URL of the probed status page.
        state: Current lifecycle state.
        converted: Lines turned into at least one metric.
        failed: Lines no converter accepted.
        duration: Probe duration in seconds, set once the probe ends.
        success: True only when the probe reached COMPLETED.
        error: Human-readable reason of a failed fetch.
        series: Name and sorted labels of every record written so far.
    """

    target: str
    state: ProbeState = ProbeState.STARTED
    converted: int = 0
    failed: int = 0
    duration: float = 0.0
    success: bool = False
    error: str | None = None
    series: set[tuple[str, tuple[tuple[str, str], ...]]] = field(
        default_factory=set, repr=False
    )
