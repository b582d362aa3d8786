"""Clocks: the only producers of time points from nothing.

A clock is a type-level tag rather than an object. Subclasses declare a tick
``period`` (and optionally a ``rep``) and implement ``ticks()``, which reads
the raw tick count from an external time source. ``Clock`` derives the
clock's ``duration`` and ``time_point`` types from those declarations.

Clocks carry no mutable state, so ``now()`` is safe to call from any number
of threads without coordination.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from typing_extensions import override

from chronal.duration import Duration
from chronal.ratio import Ratio, nano
from chronal.rep import Rep, int64
from chronal.time_point import TimePoint

logger = logging.getLogger("chronal.clock")


class Clock(ABC):
    """Base class for clock tags.

    Example:
        >>> class TickerClock(Clock):
        ...     period = Ratio(1, 60)
        ...     is_steady = True
        ...
        ...     @classmethod
        ...     def ticks(cls) -> int:
        ...         return frame_counter()
        >>>
        >>> TickerClock.now()  # TimePoint[TickerClock, Duration[int64, 1/60]]
    """

    period: ClassVar[Ratio]
    rep: ClassVar[Rep] = int64
    is_steady: ClassVar[bool] = False

    duration: ClassVar[type[Duration]]
    time_point: ClassVar[type[TimePoint]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not hasattr(cls, "period"):
            # Intermediate base without a period of its own
            return
        cls.duration = Duration[cls.rep, cls.period]
        cls.time_point = TimePoint[cls, cls.duration]
        logger.debug(
            "Defined clock %s (period=%s, rep=%s, steady=%s)",
            cls.__name__,
            cls.period,
            cls.rep,
            cls.is_steady,
        )

    def __new__(cls, *args: Any, **kwargs: Any) -> "Clock":
        raise TypeError(
            f"{cls.__name__} is a clock tag and is never instantiated.\n"
            f"Hint: Call {cls.__name__}.now() on the class itself"
        )

    @classmethod
    @abstractmethod
    def ticks(cls) -> int | float:
        """Raw tick count since the clock's epoch, in units of ``period``."""
        pass

    @classmethod
    def now(cls) -> TimePoint:
        """Current time point of this clock."""
        if not hasattr(cls, "time_point"):
            raise TypeError(f"{cls.__name__} declares no period and cannot be read")
        return cls.time_point._from_since_epoch(cls.duration(cls.ticks()))


class SystemClock(Clock):
    """Wall clock counting from the Unix epoch.

    Suitable for relating instants to calendar time. It follows adjustments
    of the system time and may jump backwards, so it must not be used to
    measure elapsed intervals.
    """

    period = nano
    is_steady = False

    @classmethod
    @override
    def ticks(cls) -> int:
        return time.time_ns()


class SteadyClock(Clock):
    """Monotonic clock with an unspecified epoch.

    Never decreases between successive reads in one process. Only
    differences between its time points are meaningful.
    """

    period = nano
    is_steady = True

    @classmethod
    @override
    def ticks(cls) -> int:
        return time.monotonic_ns()


class HighResolutionClock(Clock):
    """Steady clock with the finest resolution the platform offers."""

    period = nano
    is_steady = True

    @classmethod
    @override
    def ticks(cls) -> int:
        return time.perf_counter_ns()
