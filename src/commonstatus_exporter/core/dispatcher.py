"""Routes a status line to the converter for its shape."""

from commonstatus_exporter.core.classifier import classify
from commonstatus_exporter.core.converters import CONVERTERS
from commonstatus_exporter.core.errors import ConversionError
from commonstatus_exporter.core.models import MetricRecord
from commonstatus_exporter.core.ports import MetricSinkPort


def convert(line: str, sink: MetricSinkPort | None = None) -> list[MetricRecord]:
    """Convert one legacy status line into metric records.

    The records of one line are forwarded to ``sink`` only after the
    converter succeeded, so a line never contributes a partial set.

    Args:
        line: One line of the status page.
        sink: Optional output channel for the produced records.

    Returns:
        The records produced for the line.

    Raises:
        ConversionError: The subclass raised by the converter, with a message
            naming the shape that rejected the line.
    """
    shape = classify(line)
    try:
        records = CONVERTERS[shape](line)
    except ConversionError as exc:
        raise type(exc)(f"{shape.value} converter rejected line: {exc}") from exc
    if sink is not None:
        for record in records:
            sink.write(record)
    return records
