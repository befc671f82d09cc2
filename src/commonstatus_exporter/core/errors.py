"""Exception hierarchy for the exporter."""


class ExporterError(Exception):
    """Base class for all exporter errors."""


class ConversionError(ExporterError):
    """A status line could not be turned into metrics."""


class MalformedNumber(ConversionError):
    """A numeric literal is unparseable after separator disambiguation."""


class PatternMismatch(ConversionError):
    """A line does not have the shape a converter expects."""


class TimestampParseError(ConversionError):
    """A startup time is not in the Unix date layout."""


class FetchError(ExporterError):
    """The status page could not be fetched."""


class ConfigError(ExporterError):
    """Invalid configuration supplied at startup."""
