"""Request parameter parsing for the /probe endpoint."""

import math
from collections.abc import Sequence

TIMEOUT_HEADER = "X-Prometheus-Scrape-Timeout-Seconds"


class BadProbeRequest(ValueError):
    """The /probe request parameters are invalid."""


def _parse_target_param(params: Sequence[tuple[str, str]]) -> str:
    """Extract the probe target from query parameters.

    Args:
        params: All query parameters as (name, value) pairs.

    Returns:
        The target URL. A repeated ``target`` yields its first value.

    Raises:
        BadProbeRequest: If there is any parameter name besides ``target``
            or the target is empty.
    """
    if len({name for name, _ in params}) > 1:
        raise BadProbeRequest(
            "Request should contain only one parameter: 'target'. "
            "Encode the URL if needed."
        )
    target = next((value for name, value in params if name == "target"), "")
    if not target:
        raise BadProbeRequest("Parameter 'target' is missing")
    return target


def _parse_timeout_header(value: str | None, default: float) -> float:
    """Parse the scrape timeout header.

    Returns:
        The header value in seconds, or ``default`` if the header is missing
        or not a positive finite number.
    """
    if value is None:
        return default
    try:
        timeout = float(value)
    except ValueError:
        return default
    if timeout <= 0 or math.isnan(timeout) or math.isinf(timeout):
        return default
    return timeout
