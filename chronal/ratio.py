"""Rational tick periods.

A ``Ratio`` is the length of one tick expressed in seconds. Ratios are always
stored in lowest terms with a positive denominator, so equal ratios compare
and hash equal regardless of how they were written.
"""

import math
from dataclasses import dataclass
from fractions import Fraction
from functools import cache

from chronal.errors import DivisionByZero


@dataclass(frozen=True)
class Ratio:
    num: int
    den: int = 1

    def __post_init__(self) -> None:
        for name, value in (("num", self.num), ("den", self.den)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(
                    f"Ratio {name} must be an int, got {type(value).__name__}: {value!r}"
                )
        if self.den == 0:
            raise DivisionByZero(f"Ratio denominator must be nonzero: {self.num}/0")

        g = math.gcd(self.num, self.den)
        sign = -1 if self.den < 0 else 1
        object.__setattr__(self, "num", sign * self.num // g)
        object.__setattr__(self, "den", sign * self.den // g)

    def __str__(self) -> str:
        if self.den == 1:
            return str(self.num)
        return f"{self.num}/{self.den}"

    def as_fraction(self) -> Fraction:
        return Fraction(self.num, self.den)


def reduce(num: int, den: int) -> Ratio:
    """Return ``num/den`` in canonical form.

    Raises:
        DivisionByZero: If ``den`` is zero
    """
    return Ratio(num, den)


def combine(a: Ratio, b: Ratio) -> Ratio:
    """Multiply two ratios."""
    return reduce(a.num * b.num, a.den * b.den)


def invert(r: Ratio) -> Ratio:
    return reduce(r.den, r.num)


@cache
def conversion_factor(source: Ratio, target: Ratio) -> Ratio:
    """Factor turning ticks of period ``source`` into ticks of period ``target``."""
    return combine(source, invert(target))


@cache
def common_period(a: Ratio, b: Ratio) -> Ratio:
    """Coarsest period that both ``a`` and ``b`` are whole multiples of.

    This is ``gcd(a.num, b.num) / lcm(a.den, b.den)``; it is never coarser than
    the finer of the two inputs.
    """
    return reduce(math.gcd(a.num, b.num), math.lcm(a.den, b.den))


# SI prefixes
atto = Ratio(1, 10**18)
femto = Ratio(1, 10**15)
pico = Ratio(1, 10**12)
nano = Ratio(1, 10**9)
micro = Ratio(1, 10**6)
milli = Ratio(1, 1000)
centi = Ratio(1, 100)
deci = Ratio(1, 10)
unit = Ratio(1)
deca = Ratio(10)
hecto = Ratio(100)
kilo = Ratio(1000)
mega = Ratio(10**6)
giga = Ratio(10**9)
tera = Ratio(10**12)
peta = Ratio(10**15)
exa = Ratio(10**18)
