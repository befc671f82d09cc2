"""Prometheus text format encoder and exposition-line validator."""

import math
import re
from collections.abc import Iterable

from prometheus_client.parser import text_string_to_metric_families

from commonstatus_exporter.core.metrics import untyped
from commonstatus_exporter.core.models import MetricRecord

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

_LEGACY_NAME = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")


def _escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _format_value(value: float) -> str:
    """Format a float the way Prometheus clients do."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return repr(float(value))


def _format_labels(labels: dict[str, str]) -> str:
    if not labels:
        return ""
    pairs = ",".join(
        f'{key}="{_escape_label_value(value)}"' for key, value in labels.items()
    )
    return "{" + pairs + "}"


def encode_metrics(records: Iterable[MetricRecord]) -> str:
    """Encode metric records to Prometheus text format.

    Records sharing a name are grouped under one HELP/TYPE header, in the
    order the name was first seen. The type and help of the first record
    of a name win.

    Args:
        records: An iterable of MetricRecord objects.

    Returns:
        Prometheus exposition text. Empty string if no records.
    """
    families: dict[str, list[MetricRecord]] = {}
    for record in records:
        families.setdefault(record.name, []).append(record)

    lines: list[str] = []
    for name, members in families.items():
        first = members[0]
        if first.help:
            lines.append(f"# HELP {name} {_escape_help(first.help)}")
        lines.append(f"# TYPE {name} {first.kind.value}")
        for record in members:
            lines.append(
                f"{name}{_format_labels(record.labels)} {_format_value(record.value)}"
            )

    if not lines:
        return ""

    return "\n".join(lines) + "\n"


def _parse(line: str) -> list[MetricRecord]:
    records = []
    for family in text_string_to_metric_families(line + "\n"):
        for sample in family.samples:
            if not _LEGACY_NAME.match(sample.name):
                raise ValueError(f"invalid metric name: {sample.name!r}")
            # "Key: 42" lints as a sample named "Key:"; the colon is the
            # legacy separator, not part of the name.
            name = sample.name.rstrip(":") or sample.name
            records.append(untyped(name, sample.value, labels=dict(sample.labels)))
    return records


def is_exposition_line(line: str) -> bool:
    """Return True if the line is already valid Prometheus text format."""
    try:
        _parse(line)
    except (ValueError, IndexError):
        return False
    return True


def parse_exposition_line(line: str) -> list[MetricRecord]:
    """Parse a valid exposition line into untyped records.

    Raises:
        ValueError: If the line is not valid exposition text.
    """
    try:
        return _parse(line)
    except IndexError as exc:
        raise ValueError(f"invalid exposition line: {line!r}") from exc
