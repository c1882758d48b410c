"""
Clock and duration helpers.

Durations follow the short notation used for token lifetimes:
``"90s"``, ``"30m"``, ``"1h"``, ``"7d"``, ``"2 weeks"``. A bare number
string is read as milliseconds; a plain ``int`` is read as seconds.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_DURATION_RE = re.compile(r"^(-?\d*\.?\d+)\s*([a-z]*)$", re.IGNORECASE)

_UNIT_SECONDS: dict[str, float] = {}
for _aliases, _seconds in (
    (("ms", "msec", "msecs", "millisecond", "milliseconds"), 0.001),
    (("s", "sec", "secs", "second", "seconds"), 1),
    (("m", "min", "mins", "minute", "minutes"), 60),
    (("h", "hr", "hrs", "hour", "hours"), 3600),
    (("d", "day", "days"), 86400),
    (("w", "week", "weeks"), 604800),
    (("y", "yr", "yrs", "year", "years"), 31557600),
):
    for _alias in _aliases:
        _UNIT_SECONDS[_alias] = _seconds


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_duration(value: str | int | timedelta) -> timedelta:
    """Convert a lifetime expressed as seconds, timedelta or string."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, int):
        return timedelta(seconds=value)

    match = _DURATION_RE.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    unit = unit.lower() or "ms"
    if unit not in _UNIT_SECONDS:
        raise ValueError(f"Unknown duration unit {unit!r} in {value!r}")
    return timedelta(seconds=float(amount) * _UNIT_SECONDS[unit])
