import logging
from importlib.resources import files

from .clock import Clock, HighResolutionClock, SteadyClock, SystemClock
from .duration import (
    Duration,
    check_conversion,
    common_type,
    duration_cast,
    is_lossless,
)
from .errors import (
    ChronalError,
    DivisionByZero,
    IncompatibleClock,
    LossyConversion,
    Overflow,
    UnitlessOperand,
)
from .interop import from_datetime, from_timedelta, to_datetime, to_timedelta
from .ratio import Ratio, micro, milli, nano
from .rep import float64, int8, int16, int32, int64
from .time_point import TimePoint, check_same_clock, time_point_cast
from .util import (
    days,
    fmilliseconds,
    fseconds,
    hours,
    microseconds,
    milliseconds,
    minutes,
    months,
    nanoseconds,
    seconds,
    weeks,
    years,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "Ratio",
    "nano",
    "micro",
    "milli",
    "int8",
    "int16",
    "int32",
    "int64",
    "float64",
    "Duration",
    "TimePoint",
    "Clock",
    "SystemClock",
    "SteadyClock",
    "HighResolutionClock",
    "duration_cast",
    "time_point_cast",
    "common_type",
    "is_lossless",
    "check_conversion",
    "check_same_clock",
    "nanoseconds",
    "microseconds",
    "milliseconds",
    "seconds",
    "minutes",
    "hours",
    "days",
    "weeks",
    "months",
    "years",
    "fseconds",
    "fmilliseconds",
    "to_timedelta",
    "from_timedelta",
    "to_datetime",
    "from_datetime",
    "ChronalError",
    "LossyConversion",
    "IncompatibleClock",
    "UnitlessOperand",
    "Overflow",
    "DivisionByZero",
    "docs",
]
