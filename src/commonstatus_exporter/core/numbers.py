"""Numeric literal normalization.

Legacy status pages print numbers with whatever grouping convention the
host locale happens to use, so ``9,220,838,392``, ``9.220.838.392,01`` and
``4,997.14`` all show up. There is no declared locale; the convention is
inferred from the shape of each literal.
"""

import re

from commonstatus_exporter.core.errors import MalformedNumber

_ALLOWED = re.compile(r"^[0-9,.]+$")

# Ordered: the first pattern that matches decides how separators are read.
_COMMA_GROUPED = re.compile(r"^[0-9]+(,[0-9]+)+$")
_DOT_GROUPED = re.compile(r"^[0-9]+(\.[0-9]+){2,}$")
_DOT_GROUPED_COMMA_DECIMAL = re.compile(r"^[0-9]+(\.[0-9]+)+,[0-9]+$")
_COMMA_GROUPED_DOT_DECIMAL = re.compile(r"^[0-9]+(,[0-9]+)+\.[0-9]+$")


def _disambiguate(literal: str) -> str:
    if _COMMA_GROUPED.match(literal):
        return literal.replace(",", "")
    if _DOT_GROUPED.match(literal):
        return literal.replace(".", "")
    if _DOT_GROUPED_COMMA_DECIMAL.match(literal):
        return literal.replace(".", "").replace(",", ".")
    if _COMMA_GROUPED_DOT_DECIMAL.match(literal):
        return literal.replace(",", "")
    return literal


def normalize_number(literal: str) -> float:
    """Parse a numeric literal that may use ``,`` and ``.`` as separators.

    A literal with a single ``.`` and no ``,`` is always read as a decimal
    point, never as grouping.

    Args:
        literal: Digits with optional ``,`` and ``.`` separators.

    Returns:
        The value as a float.

    Raises:
        MalformedNumber: If the literal is empty, contains anything other
            than digits and separators, or is still unparseable after the
            separators were resolved (e.g. ``1,2.3,4``).
    """
    if not _ALLOWED.match(literal):
        raise MalformedNumber(f"not a numeric literal: {literal!r}")
    candidate = _disambiguate(literal)
    try:
        return float(candidate)
    except ValueError:
        raise MalformedNumber(f"can't parse {literal!r} to float") from None
