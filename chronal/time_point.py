"""Time points: instants measured as a duration since a clock's epoch.

``TimePoint[clock, duration_type]`` returns a specialized subclass tagged with
the clock and the duration type; ``TimePoint[clock]`` uses the clock's native
duration. Time points of different clocks never mix: comparing, subtracting
or converting across clocks raises ``IncompatibleClock`` before any value is
computed.
"""

import numbers
import operator as op
from collections.abc import Callable
from functools import cache
from typing import TYPE_CHECKING, Any, ClassVar

from typing_extensions import Self

from chronal import rounding
from chronal.duration import Duration, _require_duration_type, duration_cast
from chronal.errors import IncompatibleClock, UnitlessOperand
from chronal.ratio import Ratio
from chronal.rep import Rep

if TYPE_CHECKING:
    from chronal.clock import Clock


class TimePoint:
    __slots__ = ("_since_epoch",)

    clock: "ClassVar[type[Clock]]"
    duration: ClassVar[type[Duration]]

    def __class_getitem__(
        cls, params: "type[Clock] | tuple[type[Clock], type[Duration]]"
    ) -> "type[TimePoint]":
        if _is_specialized(cls):
            raise TypeError(
                f"{cls.__name__} is already specialized and takes no parameters"
            )
        if isinstance(params, tuple):
            if len(params) != 2:
                raise TypeError(
                    f"TimePoint takes a clock and an optional duration type, "
                    f"got {params!r}.\n"
                    f"Example: TimePoint[SystemClock, seconds]"
                )
            clock, duration = params
        else:
            clock, duration = params, None
        return _specialize(clock, duration)

    def __init__(self, since_epoch: "Duration | TimePoint | None" = None) -> None:
        """Build a time point from a duration since the clock's epoch.

        With no argument the time point is the epoch itself. Another time
        point of the same clock is accepted when its duration converts
        losslessly.
        """
        cls = type(self)
        if not _is_specialized(cls):
            raise TypeError(
                "TimePoint must be specialized with a clock before use.\n"
                "Hint: Use SystemClock.time_point(...) or TimePoint[SystemClock, seconds](...)"
            )
        if since_epoch is None:
            value = cls.duration.zero()
        elif isinstance(since_epoch, TimePoint):
            check_same_clock(cls, type(since_epoch), "convert")
            value = _as_type(since_epoch._since_epoch, cls.duration)
        elif isinstance(since_epoch, Duration):
            value = _as_type(since_epoch, cls.duration)
        elif isinstance(since_epoch, numbers.Number):
            raise UnitlessOperand("build a time point from", since_epoch)
        else:
            raise TypeError(
                f"TimePoint expects a duration since the epoch, got "
                f"{type(since_epoch).__name__}: {since_epoch!r}"
            )
        object.__setattr__(self, "_since_epoch", value)

    @classmethod
    def _from_since_epoch(cls, since_epoch: Duration) -> Self:
        self = object.__new__(cls)
        object.__setattr__(self, "_since_epoch", since_epoch)
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        # Specialized classes are not importable by name, so pickle their tags.
        cls = type(self)
        return (
            _restore,
            (cls.clock, cls.duration.rep, cls.duration.period, self._since_epoch),
        )

    def time_since_epoch(self) -> Duration:
        return self._since_epoch

    def count(self) -> int | float:
        """Raw tick count since the epoch."""
        return self._since_epoch.count()

    @classmethod
    def min(cls) -> Self:
        _require_time_point_type(cls)
        return cls._from_since_epoch(cls.duration.min())

    @classmethod
    def max(cls) -> Self:
        _require_time_point_type(cls)
        return cls._from_since_epoch(cls.duration.max())

    def __repr__(self) -> str:
        cls = type(self)
        return (
            f"TimePoint[{cls.clock.__name__}, {cls.duration.__name__}]"
            f"({self._since_epoch.count()!r})"
        )

    def __hash__(self) -> int:
        return hash((type(self).clock, self._since_epoch))

    # Comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimePoint):
            return NotImplemented
        check_same_clock(type(self), type(other), "compare")
        return self._since_epoch == other._since_epoch

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, TimePoint):
            return NotImplemented
        check_same_clock(type(self), type(other), "compare")
        return self._since_epoch != other._since_epoch

    def __lt__(self, other: object) -> bool:
        return self._order(other, op.lt)

    def __le__(self, other: object) -> bool:
        return self._order(other, op.le)

    def __gt__(self, other: object) -> bool:
        return self._order(other, op.gt)

    def __ge__(self, other: object) -> bool:
        return self._order(other, op.ge)

    def _order(self, other: object, compare: Callable[[Any, Any], bool]) -> bool:
        if not isinstance(other, TimePoint):
            if isinstance(other, numbers.Number):
                raise UnitlessOperand("compare a time point with", other)
            return NotImplemented
        check_same_clock(type(self), type(other), "compare")
        return compare(self._since_epoch, other._since_epoch)

    # Arithmetic

    def __add__(self, other: object) -> "TimePoint":
        if not isinstance(other, Duration):
            if isinstance(other, numbers.Number):
                raise UnitlessOperand("add to a time point", other)
            return NotImplemented
        return self._shifted(self._since_epoch + other)

    def __radd__(self, other: object) -> "TimePoint":
        return self.__add__(other)

    def __sub__(self, other: object) -> "TimePoint | Duration":
        if isinstance(other, TimePoint):
            check_same_clock(type(self), type(other), "subtract")
            return self._since_epoch - other._since_epoch
        if isinstance(other, Duration):
            return self._shifted(self._since_epoch - other)
        if isinstance(other, numbers.Number):
            raise UnitlessOperand("subtract from a time point", other)
        return NotImplemented

    def _shifted(self, since_epoch: Duration) -> "TimePoint":
        target = TimePoint[type(self).clock, type(since_epoch)]
        return target._from_since_epoch(since_epoch)

    # Explicit casts

    def cast(
        self,
        to: "type[Duration] | type[TimePoint]",
        policy: rounding.Policy = "toward_zero",
    ) -> "TimePoint":
        return time_point_cast(to, self, policy)

    def truncate(self, to: "type[Duration] | type[TimePoint]") -> "TimePoint":
        return time_point_cast(to, self, "toward_zero")

    def floor(self, to: "type[Duration] | type[TimePoint]") -> "TimePoint":
        return time_point_cast(to, self, "floor")

    def ceil(self, to: "type[Duration] | type[TimePoint]") -> "TimePoint":
        return time_point_cast(to, self, "ceil")

    def round(self, to: "type[Duration] | type[TimePoint]") -> "TimePoint":
        return time_point_cast(to, self, "half_even")


def _is_specialized(cls: type) -> bool:
    return hasattr(cls, "clock")


def _require_time_point_type(cls: object) -> None:
    if not (isinstance(cls, type) and issubclass(cls, TimePoint) and _is_specialized(cls)):
        raise TypeError(
            f"Expected a specialized time point type such as "
            f"TimePoint[SystemClock, seconds], got {cls!r}"
        )


def _as_type(value: Duration, target: type[Duration]) -> Duration:
    if type(value) is target:
        return value
    return target(value)


def _specialize(clock: "type[Clock]", duration: type[Duration] | None) -> type[TimePoint]:
    # Import at runtime to avoid circular dependency
    from chronal.clock import Clock

    if not (isinstance(clock, type) and issubclass(clock, Clock)):
        raise TypeError(
            f"TimePoint clock must be a Clock subclass such as SystemClock, "
            f"got {clock!r}"
        )
    if duration is None:
        duration = clock.duration
    _require_duration_type(duration)
    return _build(clock, duration)


@cache
def _build(clock: "type[Clock]", duration: type[Duration]) -> type[TimePoint]:
    name = f"TimePoint[{clock.__name__}, {duration.__name__}]"
    return type(
        name,
        (TimePoint,),
        {"__slots__": (), "__module__": __name__, "clock": clock, "duration": duration},
    )


def _restore(
    clock: "type[Clock]", rep: Rep, period: Ratio, since_epoch: Duration
) -> TimePoint:
    return TimePoint[clock, Duration[rep, period]]._from_since_epoch(since_epoch)


def check_same_clock(
    left: type[TimePoint], right: type[TimePoint], operation: str = "combine"
) -> None:
    """Raise ``IncompatibleClock`` unless both time point types share a clock.

    Decided from the types alone, so it can run before any value exists.
    """
    _require_time_point_type(left)
    _require_time_point_type(right)
    if left.clock is not right.clock:
        raise IncompatibleClock(left.clock, right.clock, operation)


def time_point_cast(
    to: "type[Duration] | type[TimePoint]",
    value: TimePoint,
    policy: rounding.Policy = "toward_zero",
) -> TimePoint:
    """Convert ``value`` to another duration type of the same clock.

    ``to`` is either a duration type or a time point type of the same clock.
    The truncation policy is applied to the duration since the epoch exactly
    as ``duration_cast`` applies it.
    """
    if isinstance(value, numbers.Number):
        raise UnitlessOperand("cast", value)
    if not isinstance(value, TimePoint):
        raise TypeError(
            f"time_point_cast() expects a time point, got {type(value).__name__}: {value!r}"
        )
    if isinstance(to, type) and issubclass(to, TimePoint):
        check_same_clock(type(value), to, "cast")
        target = to
    else:
        target = TimePoint[type(value).clock, to]
    return target._from_since_epoch(duration_cast(target.duration, value._since_epoch, policy))
