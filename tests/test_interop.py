from datetime import datetime, timedelta, timezone

import pytest

from chronal import (
    IncompatibleClock,
    LossyConversion,
    SteadyClock,
    SystemClock,
    TimePoint,
    from_datetime,
    from_timedelta,
    fseconds,
    microseconds,
    milliseconds,
    nanoseconds,
    seconds,
    to_datetime,
    to_timedelta,
)


def test_to_timedelta_exact() -> None:
    assert to_timedelta(milliseconds(1500)) == timedelta(seconds=1.5)
    assert to_timedelta(seconds(-3)) == timedelta(seconds=-3)


def test_to_timedelta_needs_policy_when_lossy() -> None:
    with pytest.raises(LossyConversion):
        to_timedelta(nanoseconds(1500))
    assert to_timedelta(nanoseconds(1500), policy="half_even") == timedelta(microseconds=2)
    assert to_timedelta(nanoseconds(1500), policy="floor") == timedelta(microseconds=1)

    with pytest.raises(LossyConversion):
        to_timedelta(fseconds(1.5))
    assert to_timedelta(fseconds(1.5), policy="toward_zero") == timedelta(seconds=1.5)


def test_to_timedelta_rejects_non_durations() -> None:
    with pytest.raises(TypeError, match="Expected a duration"):
        to_timedelta(1.5)  # type: ignore[arg-type]


def test_from_timedelta() -> None:
    d = from_timedelta(timedelta(days=1, microseconds=5))
    assert type(d) is microseconds
    assert d.count() == 86_400_000_005
    assert from_timedelta(timedelta(microseconds=-1)).count() == -1


def test_to_datetime() -> None:
    tp = SystemClock.time_point(seconds(1_469_456_123))
    assert to_datetime(tp) == datetime(2016, 7, 25, 14, 15, 23, tzinfo=timezone.utc)


def test_to_datetime_truncates_toward_the_past() -> None:
    tp = SystemClock.time_point(nanoseconds(-1))
    assert to_datetime(tp) == datetime(
        1969, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc
    )


def test_to_datetime_requires_system_clock() -> None:
    with pytest.raises(IncompatibleClock):
        to_datetime(SteadyClock.time_point())


def test_from_datetime() -> None:
    tp = from_datetime(datetime(2016, 7, 25, 14, 15, 23, tzinfo=timezone.utc))
    assert type(tp) is TimePoint[SystemClock, microseconds]
    assert tp.count() == 1_469_456_123 * 10**6

    offset = timezone(timedelta(hours=2))
    assert from_datetime(datetime(2016, 7, 25, 16, 15, 23, tzinfo=offset)) == tp


def test_from_datetime_rejects_naive() -> None:
    with pytest.raises(TypeError, match="timezone-aware"):
        from_datetime(datetime(2016, 7, 25))


def test_datetime_round_trip() -> None:
    tp = TimePoint[SystemClock, microseconds](microseconds(1_700_000_000_123_456))
    assert from_datetime(to_datetime(tp)) == tp
