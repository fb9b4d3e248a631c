"""
Timestamp parsing for the server's ISO-8601 wire format.

The server emits timestamps both with and without fractional seconds, and
fractions may carry nanosecond precision (``2024-05-14T17:59:25.123456789Z``).
"""

from __future__ import annotations

import re
from datetime import datetime

_FRACTION_RE = re.compile(r"^(?P<head>[^.]+)\.(?P<fraction>[0-9]+)(?P<tail>.*)$")

_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


def parse_timestamp(value: str) -> datetime:
    """
    Parse a wire timestamp into an aware datetime.

    Args:
        value: Timestamp such as ``2023-01-01T12:34:56.789Z`` or
            ``2023-04-15T12:30:45-07:00``.

    Returns:
        Timezone-aware datetime.

    Raises:
        ValueError: ``Invalid date: <value>`` if neither form matches.
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid date: {value!r}")

    candidate = value
    match = _FRACTION_RE.match(value)
    if match:
        # datetime only keeps microseconds
        candidate = f"{match['head']}.{match['fraction'][:6]}{match['tail']}"

    for fmt in _FORMATS:
        try:
            return datetime.strptime(candidate, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid date: {value}")


__all__ = ["parse_timestamp"]
