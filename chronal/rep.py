"""Tick count representations.

Python integers never overflow, so fixed-width integral representations are
modelled explicitly: ``IntRep`` carries a bit width and reports any result
outside its range as ``Overflow``. ``FloatRep`` follows IEEE double semantics
and lets overflow produce ``inf``/``nan`` without complaint.
"""

import math
import numbers
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass

from typing_extensions import override

from chronal.errors import Overflow


@dataclass(frozen=True)
class Rep(ABC):
    name: str

    def __str__(self) -> str:
        return self.name

    @property
    @abstractmethod
    def is_floating(self) -> bool:
        pass

    @property
    @abstractmethod
    def min_value(self) -> int | float:
        pass

    @property
    @abstractmethod
    def max_value(self) -> int | float:
        pass

    @abstractmethod
    def coerce(self, value: object) -> int | float:
        """Validate a caller-supplied tick count and return it in this representation."""
        pass

    @abstractmethod
    def check(self, value: int | float, context: str) -> int | float:
        """Validate an internally computed tick count."""
        pass


@dataclass(frozen=True)
class IntRep(Rep):
    bits: int

    @property
    @override
    def is_floating(self) -> bool:
        return False

    @property
    @override
    def min_value(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    @override
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1

    @override
    def coerce(self, value: object) -> int:
        if isinstance(value, bool):
            raise TypeError(f"Tick count must be a number, got bool: {value!r}")
        if isinstance(value, numbers.Integral):
            return self.check(int(value), "tick count")
        if isinstance(value, numbers.Real):
            raise TypeError(
                f"Representation {self.name} holds whole ticks, got "
                f"{type(value).__name__}: {value!r}.\n"
                f"Hint: Use a floating representation, or construct the floating "
                f"duration and convert it with an explicit cast."
            )
        raise TypeError(
            f"Tick count must be a number, got {type(value).__name__}: {value!r}"
        )

    @override
    def check(self, value: int | float, context: str) -> int:
        if not self.min_value <= value <= self.max_value:
            raise Overflow(value, self.name, context)
        return int(value)


@dataclass(frozen=True)
class FloatRep(Rep):

    @property
    @override
    def is_floating(self) -> bool:
        return True

    @property
    @override
    def min_value(self) -> float:
        return -sys.float_info.max

    @property
    @override
    def max_value(self) -> float:
        return sys.float_info.max

    @override
    def coerce(self, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(
                f"Tick count must be a number, got {type(value).__name__}: {value!r}"
            )
        return to_float(value)

    @override
    def check(self, value: int | float, context: str) -> float:
        return to_float(value)


def to_float(value: numbers.Real) -> float:
    """``float(value)``, saturating to infinity instead of raising ``OverflowError``."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


int8 = IntRep("int8", 8)
int16 = IntRep("int16", 16)
int32 = IntRep("int32", 32)
int64 = IntRep("int64", 64)
float64 = FloatRep("float64")


def treat_as_floating_point(rep: Rep) -> bool:
    return rep.is_floating


def common_rep(a: Rep, b: Rep) -> Rep:
    """Representation wide enough to hold values of both ``a`` and ``b``."""
    if a.is_floating:
        return a
    if b.is_floating:
        return b
    if not (isinstance(a, IntRep) and isinstance(b, IntRep)):
        raise TypeError(
            f"Cannot find a common representation for {a!r} and {b!r}: "
            f"integral representations must be IntRep instances.\n"
            f"Hint: Subclass IntRep for fixed-width integers, or FloatRep "
            f"(is_floating=True) for floating ones."
        )
    return a if a.bits >= b.bits else b
