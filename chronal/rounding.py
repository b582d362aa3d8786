"""Truncation policies for explicit casts.

Each policy maps an exact rational conversion result to an integer tick count.
They are only ever selected by name at an explicit cast site.
"""

import math
from collections.abc import Callable
from fractions import Fraction
from typing import Literal, TypeAlias

Policy: TypeAlias = Literal["toward_zero", "floor", "ceil", "half_even"]


def toward_zero(x: Fraction) -> int:
    return math.trunc(x)


def floor(x: Fraction) -> int:
    return math.floor(x)


def ceil(x: Fraction) -> int:
    return math.ceil(x)


def half_even(x: Fraction) -> int:
    """Round to nearest; exact halves go to the even neighbour (2.5 -> 2, 3.5 -> 4)."""
    return round(x)


_POLICY_MAP: dict[str, Callable[[Fraction], int]] = {
    "toward_zero": toward_zero,
    "floor": floor,
    "ceil": ceil,
    "half_even": half_even,
}


def resolve(policy: Policy) -> Callable[[Fraction], int]:
    """Look up a truncation policy by name."""
    try:
        return _POLICY_MAP[policy]
    except KeyError:
        valid = ", ".join(_POLICY_MAP)
        raise ValueError(
            f"Invalid truncation policy: {policy!r}\nValid policies: {valid}"
        ) from None
