"""logfmt output for Python's standard library logging module.

Structured fields are passed with ``extra=`` and rendered as ``key=value``
pairs after the message.
"""

import logging
import sys
from datetime import UTC, datetime

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def _quote(value: object) -> str:
    text = str(value)
    if text and not any(c in text for c in ' "=\\\n\t'):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def parse_level(name: str) -> int | None:
    """Map a level name (case-insensitive) to a logging level, or None."""
    return _LEVELS.get(name.strip().upper())


class LogfmtFormatter(logging.Formatter):
    """Formatter that renders log records as logfmt lines.

    Example:
        ```text
        ts=2019-01-28T13:24:03.123Z level=info logger=commonstatus_exporter.core.probe msg="probe succeeded" target=http://app:8080/status
        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a record as one logfmt line.

        Args:
            record: The log record to format.
        """
        ts = datetime.fromtimestamp(record.created, tz=UTC)
        fields: list[tuple[str, object]] = [
            ("ts", ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"),
            ("level", _LEVEL_NAMES.get(record.levelno, record.levelname.lower())),
            ("logger", record.name),
            ("msg", record.getMessage()),
        ]

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and not key.startswith("_"):
                fields.append((key, value))

        if record.exc_info and record.exc_info[0] is not None:
            fields.append(("exc_type", record.exc_info[0].__name__))
            fields.append(("exc_message", str(record.exc_info[1])))

        return " ".join(f"{key}={_quote(value)}" for key, value in fields)


def configure_logging(level: int = logging.INFO, stream=None) -> logging.Handler:
    """Install a logfmt handler on the package logger.

    Args:
        level: Minimum level to emit.
        stream: Output stream (default: stderr).

    Returns:
        The installed handler.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    package_logger = logging.getLogger("commonstatus_exporter")
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return handler
