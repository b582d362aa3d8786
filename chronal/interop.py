"""Conversions to and from the standard library's ``timedelta`` and ``datetime``.

The standard library types count microseconds, so every conversion goes
through ``microseconds``. Going out is exact when the source converts
losslessly and otherwise needs an explicit truncation policy, the same as any
other cast.
"""

from datetime import datetime, timedelta, timezone

from chronal.clock import SystemClock
from chronal.duration import Duration, duration_cast
from chronal.errors import IncompatibleClock
from chronal.rounding import Policy
from chronal.time_point import TimePoint
from chronal.util import microseconds

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_timedelta(value: Duration, policy: Policy | None = None) -> timedelta:
    """Convert a duration to a ``timedelta``.

    Args:
        value: Duration to convert
        policy: Truncation policy for durations finer than a microsecond or
            with a floating representation. Without one, such durations raise
            ``LossyConversion``.

    Raises:
        LossyConversion: If no policy is given and the conversion is lossy
        OverflowError: If the result exceeds the ``timedelta`` range
    """
    if not isinstance(value, Duration):
        raise TypeError(f"Expected a duration, got {type(value).__name__}: {value!r}")
    if policy is None:
        micros = microseconds(value)
    else:
        micros = duration_cast(microseconds, value, policy)
    return timedelta(microseconds=micros.count())


def from_timedelta(delta: timedelta) -> Duration:
    """Convert a ``timedelta`` to ``microseconds`` exactly."""
    total = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    return microseconds(total)


def to_datetime(point: TimePoint) -> datetime:
    """Convert a ``SystemClock`` time point to an aware UTC ``datetime``.

    Sub-microsecond ticks are dropped toward the past, so the result never
    lies after ``point``.
    """
    if not isinstance(point, TimePoint):
        raise TypeError(f"Expected a time point, got {type(point).__name__}: {point!r}")
    clock = type(point).clock
    if clock is not SystemClock:
        raise IncompatibleClock(clock, SystemClock, "convert to datetime")
    micros = duration_cast(microseconds, point.time_since_epoch(), "floor")
    return _UNIX_EPOCH + timedelta(microseconds=micros.count())


def from_datetime(moment: datetime) -> TimePoint:
    """Convert an aware ``datetime`` to a ``SystemClock`` time point in microseconds.

    Raises:
        TypeError: If ``moment`` is naive
    """
    if not isinstance(moment, datetime):
        raise TypeError(
            f"Expected a datetime, got {type(moment).__name__}: {moment!r}"
        )
    if moment.tzinfo is None:
        raise TypeError(
            f"from_datetime() requires a timezone-aware datetime.\n"
            f"Got naive datetime: {moment!r}\n"
            f"Hint: Add timezone info:\n"
            f"  dt = datetime(..., tzinfo=timezone.utc)"
        )
    return TimePoint[SystemClock, microseconds](from_timedelta(moment - _UNIX_EPOCH))
