"""Formatting of dates, times and durations for task reports."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

# (threshold, unit, unit name, remainder unit, remainder name), largest first.
_UNITS = (
    (_YEAR, _YEAR, "y", _MONTH, "mo"),
    (3 * _MONTH, _MONTH, "mo", _WEEK, "w"),
    (2 * _WEEK, _WEEK, "w", _DAY, "d"),
    (_DAY, _DAY, "d", _HOUR, "h"),
    (_HOUR, _HOUR, "h", _MINUTE, "min"),
    (_MINUTE, _MINUTE, "min", 1, "s"),
)


def _as_local(dt: datetime) -> datetime:
    """Treat a naive datetime as local time; leave aware ones alone."""
    return dt.astimezone() if dt.tzinfo is None else dt


def _whole_seconds(delta: timedelta) -> int:
    """Seconds in ``delta``, truncated toward zero."""
    micros = (delta.days * _DAY + delta.seconds) * 1_000_000 + delta.microseconds
    whole = abs(micros) // 1_000_000
    return -whole if micros < 0 else whole


def format_date_time(dt: datetime) -> str:
    """Format a local datetime as ``YYYY-MM-DD HH:MM:SS``."""
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def format_date(dt: datetime) -> str:
    """Format a naive UTC datetime as the local ``YYYY-MM-DD`` date."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone().strftime("%Y-%m-%d")


def format_duration(seconds: int, with_remainder: bool) -> str:
    """Render a number of seconds as a compact duration such as ``2w`` or ``1h1min``."""
    sign = "-" if seconds < 0 else ""
    seconds = abs(seconds)
    for threshold, unit, name, sub_unit, sub_name in _UNITS:
        if seconds >= threshold:
            whole, rest = divmod(seconds, unit)
            if with_remainder:
                return f"{sign}{whole}{name}{rest // sub_unit}{sub_name}"
            return f"{sign}{whole}{name}"
    return f"{sign}{seconds}s"


def vague_format_date_time(from_dt: datetime, to_dt: datetime, with_remainder: bool) -> str:
    """Render the time from ``from_dt`` to ``to_dt`` as a compact duration."""
    seconds = _whole_seconds(_as_local(to_dt) - _as_local(from_dt))
    return format_duration(seconds, with_remainder)