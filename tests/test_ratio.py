from dataclasses import FrozenInstanceError
from fractions import Fraction

import pytest

from chronal.errors import DivisionByZero
from chronal.ratio import (
    Ratio,
    combine,
    common_period,
    conversion_factor,
    invert,
    kilo,
    micro,
    milli,
    nano,
    reduce,
    unit,
)


def test_ratio_is_stored_in_lowest_terms() -> None:
    r = Ratio(2, 4)
    assert (r.num, r.den) == (1, 2)
    assert r == Ratio(1, 2)
    assert hash(r) == hash(Ratio(1, 2))
    assert len({Ratio(2, 4), Ratio(1, 2), Ratio(50, 100)}) == 1


def test_sign_moves_to_numerator() -> None:
    r = reduce(3, -6)
    assert (r.num, r.den) == (-1, 2)
    assert reduce(-3, -6) == Ratio(1, 2)


def test_zero_numerator_normalizes() -> None:
    r = Ratio(0, 5)
    assert (r.num, r.den) == (0, 1)


def test_zero_denominator_is_reported() -> None:
    with pytest.raises(DivisionByZero, match="nonzero"):
        reduce(1, 0)

    # Also catchable as the builtin error
    with pytest.raises(ZeroDivisionError):
        Ratio(5, 0)


def test_invert_zero_is_reported() -> None:
    with pytest.raises(DivisionByZero):
        invert(Ratio(0))


def test_non_integer_parts_are_rejected() -> None:
    with pytest.raises(TypeError, match="must be an int"):
        Ratio(1.5)  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="must be an int"):
        Ratio(1, True)


def test_ratio_is_frozen() -> None:
    with pytest.raises(FrozenInstanceError):
        milli.num = 2  # type: ignore[misc]


def test_combine_multiplies_and_reduces() -> None:
    assert combine(milli, Ratio(60)) == Ratio(3, 50)
    assert combine(kilo, milli) == unit
    assert combine(Ratio(2, 3), Ratio(3, 4)) == Ratio(1, 2)


def test_invert() -> None:
    assert invert(milli) == kilo
    assert invert(Ratio(-2, 3)) == Ratio(-3, 2)


def test_conversion_factor() -> None:
    # One second is a thousand milliseconds
    assert conversion_factor(unit, milli) == Ratio(1000)
    # One millisecond is a thousandth of a second
    assert conversion_factor(milli, unit) == Ratio(1, 1000)
    assert conversion_factor(Ratio(3600), Ratio(60)) == Ratio(60)


def test_common_period_is_the_finest_shared_grid() -> None:
    assert common_period(milli, unit) == milli
    assert common_period(Ratio(60), Ratio(3600)) == Ratio(60)
    assert common_period(Ratio(1, 3), Ratio(1, 2)) == Ratio(1, 6)
    assert common_period(Ratio(2, 3), Ratio(3, 4)) == Ratio(1, 12)
    assert common_period(nano, micro) == nano


def test_str_and_fraction() -> None:
    assert str(milli) == "1/1000"
    assert str(Ratio(60)) == "60"
    assert Ratio(6, 4).as_fraction() == Fraction(3, 2)
