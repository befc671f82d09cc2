"""Parsing of Unix ``date`` style timestamps (``Mon Jan 28 14:24:03 CET 2019``)."""

import re
from datetime import datetime, timedelta, timezone

from commonstatus_exporter.core.errors import TimestampParseError

_UNIX_DATE = re.compile(
    r"^(?P<weekday>[A-Z][a-z]{2}) +(?P<month>[A-Z][a-z]{2}) +(?P<day>\d{1,2}) "
    r"(?P<clock>\d{2}:\d{2}:\d{2}) (?P<zone>[A-Za-z]+|[+-]\d{4}) (?P<year>\d{4})$"
)

# Offsets in hours. Unknown abbreviations are read as UTC.
ZONE_OFFSETS: dict[str, float] = {
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "WET": 0,
    "WEST": 1,
    "CET": 1,
    "CEST": 2,
    "EET": 2,
    "EEST": 3,
    "MSK": 3,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}


def _zone(name: str) -> timezone:
    if name[0] in "+-":
        sign = -1 if name[0] == "-" else 1
        offset = timedelta(hours=int(name[1:3]), minutes=int(name[3:5]))
        return timezone(sign * offset)
    return timezone(timedelta(hours=ZONE_OFFSETS.get(name.upper(), 0)))


def parse_unix_date(text: str) -> datetime:
    """Parse a timestamp in the layout ``Mon Jan _2 15:04:05 MST 2006``.

    Args:
        text: The timestamp text.

    Returns:
        Timezone-aware datetime.

    Raises:
        TimestampParseError: If the text does not follow the layout.
    """
    match = _UNIX_DATE.match(text.strip())
    if match is None:
        raise TimestampParseError(f"not a Unix date timestamp: {text!r}")
    local = " ".join(
        match.group("weekday", "month", "day", "clock", "year")
    )
    try:
        naive = datetime.strptime(local, "%a %b %d %H:%M:%S %Y")
    except ValueError as exc:
        raise TimestampParseError(f"can't parse timestamp {text!r}: {exc}") from None
    return naive.replace(tzinfo=_zone(match.group("zone")))
