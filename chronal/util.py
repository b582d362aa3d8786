"""Predefined duration types.

Each constant is a specialized ``Duration`` class; call it with a tick count
to build a value (``minutes(90)``). Days and longer use int32 ticks, which is
ample for their range. Months and years are the averaged Gregorian lengths.
"""

from chronal.duration import Duration, alias
from chronal.ratio import Ratio, micro, milli, nano, unit
from chronal.rep import float64, int32, int64

nanoseconds = alias(Duration[int64, nano], "nanoseconds")
microseconds = alias(Duration[int64, micro], "microseconds")
milliseconds = alias(Duration[int64, milli], "milliseconds")
seconds = alias(Duration[int64, unit], "seconds")
minutes = alias(Duration[int64, Ratio(60)], "minutes")
hours = alias(Duration[int64, Ratio(3600)], "hours")

# Calendar-length units (all values in seconds)
days = alias(Duration[int32, Ratio(86400)], "days")
weeks = alias(Duration[int32, Ratio(604800)], "weeks")
years = alias(Duration[int32, Ratio(31556952)], "years")
months = alias(Duration[int32, Ratio(31556952, 12)], "months")

fseconds = alias(Duration[float64, unit], "fseconds")
fmilliseconds = alias(Duration[float64, milli], "fmilliseconds")
