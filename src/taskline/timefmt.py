# src/taskline/timefmt.py

"""Human-relative ("time ago") rendering of timestamps."""

from __future__ import annotations

from datetime import datetime

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

# (upper bound in seconds, singular phrase, unit seconds for plural, unit name)
_THRESHOLDS: list[tuple[float, str, int, str]] = [
    (45, "a few seconds", 1, "second"),
    (90, "a minute", _MINUTE, "minute"),
    (45 * _MINUTE, "", _MINUTE, "minute"),
    (90 * _MINUTE, "an hour", _HOUR, "hour"),
    (22 * _HOUR, "", _HOUR, "hour"),
    (36 * _HOUR, "a day", _DAY, "day"),
    (26 * _DAY, "", _DAY, "day"),
    (46 * _DAY, "a month", 30 * _DAY, "month"),
    (320 * _DAY, "", 30 * _DAY, "month"),
    (548 * _DAY, "a year", 365 * _DAY, "year"),
]


def _phrase(seconds: float) -> str:
    for bound, singular, unit, name in _THRESHOLDS:
        if seconds < bound:
            if singular:
                return singular
            n = max(2, round(seconds / unit))
            return f"{n} {name}s"
    n = max(2, round(seconds / (365 * _DAY)))
    return f"{n} years"


def relative(ts: datetime, now: datetime | None = None) -> str:
    """
    Render `ts` relative to `now` (default: current time), e.g. "3 hours ago".

    Naive datetimes are treated as local time.
    """
    if now is None:
        now = datetime.now().astimezone()
    if ts.tzinfo is None:
        ts = ts.astimezone()
    if now.tzinfo is None:
        now = now.astimezone()

    delta = (now - ts).total_seconds()
    if delta >= 0:
        return f"{_phrase(delta)} ago"
    return f"in {_phrase(-delta)}"
