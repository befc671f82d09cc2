"""Status-line classification.

Each legacy line is matched against a fixed, ordered list of patterns. The
first pattern that matches decides the shape, so a line that could satisfy
several patterns is never ambiguous.
"""

import re

from commonstatus_exporter.core.models import Shape

# A key is any run of non-whitespace up to the first ": ". Converters sanitize it.
KEY = r"(?P<name>\S+?)"

RELEASE_TAG_PATTERN = re.compile(r"^ReleaseTag: (?P<value>.*)$")
LOAD_AVERAGE_PATTERN = re.compile(r"^LoadAvg: (?P<value>.*)$")
STARTUP_TIME_PATTERN = re.compile(r"^StartupTime: (?P<value>.*)$")
RUNNING_AVERAGE_PATTERN = re.compile(rf"^{KEY}: (?P<value>count=\S*(?: +\S+)*) *$")
PLAIN_PATTERN = re.compile(rf"^{KEY}: (?P<value>.*)$")

_ORDERED_PATTERNS: tuple[tuple[Shape, re.Pattern[str]], ...] = (
    (Shape.RELEASE_TAG, RELEASE_TAG_PATTERN),
    (Shape.LOAD_AVERAGE, LOAD_AVERAGE_PATTERN),
    (Shape.STARTUP_TIME, STARTUP_TIME_PATTERN),
    (Shape.RUNNING_AVERAGE, RUNNING_AVERAGE_PATTERN),
    (Shape.PLAIN, PLAIN_PATTERN),
)

PATTERNS: dict[Shape, re.Pattern[str]] = dict(_ORDERED_PATTERNS)


def classify(line: str) -> Shape:
    """Return the shape of a legacy status line.

    Args:
        line: One line of the status page, without the trailing newline.

    Returns:
        The first matching shape, or Shape.UNRECOGNIZED when the line has
        no ``key: value`` form at all.
    """
    for shape, pattern in _ORDERED_PATTERNS:
        if pattern.match(line):
            return shape
    return Shape.UNRECOGNIZED
