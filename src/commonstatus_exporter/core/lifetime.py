"""Process-lifetime probe counters shared by concurrent probes."""

import threading
from dataclasses import dataclass

from commonstatus_exporter.core.metrics import counter
from commonstatus_exporter.core.models import MetricRecord


@dataclass(frozen=True)
class LifetimeSnapshot:
    """Point-in-time copy of the lifetime counters."""

    successes: int
    failures: int
    seconds: float


class LifetimeCounters:
    """Monotonic counters of probe successes, failures and total duration.

    All updates happen under a lock because probe requests may be served
    concurrently.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._successes = 0
        self._failures = 0
        self._seconds = 0.0

    def record_success(self, duration: float) -> None:
        """Count a successful probe and add its duration."""
        with self._lock:
            self._successes += 1
            self._seconds += max(duration, 0.0)

    def record_failure(self, duration: float) -> None:
        """Count a failed probe and add its duration."""
        with self._lock:
            self._failures += 1
            self._seconds += max(duration, 0.0)

    def snapshot(self) -> LifetimeSnapshot:
        """Return a consistent copy of all counters."""
        with self._lock:
            return LifetimeSnapshot(self._successes, self._failures, self._seconds)

    def collect(self) -> list[MetricRecord]:
        """Return the counters as metric records for the /metrics endpoint."""
        snap = self.snapshot()
        return [
            counter(
                "probe_success_total",
                snap.successes,
                help="Displays count of successful probes",
            ),
            counter(
                "probe_failure_total",
                snap.failures,
                help="Displays count of failed probes",
            ),
            counter(
                "probe_seconds_total",
                snap.seconds,
                help="Displays total duration of all probes",
            ),
        ]
