"""Durations: tick counts tagged with a representation and a period.

``Duration`` is generic over two tags. ``Duration[int64, milli]`` returns a
specialized subclass whose class attributes ``rep`` and ``period`` are fixed;
equal tags always yield the same class object, so the type of a duration
identifies its unit.

Conversions between specializations follow one rule. An implicit conversion
(constructing one duration type from another, or combining two durations in
arithmetic) is accepted only when it cannot lose precision, and that decision
is made from the two types alone before any tick count is touched. Anything
else must go through ``duration_cast`` with a named truncation policy.

Integral representations report results that do not fit as ``Overflow``.
Floating representations follow IEEE semantics: overflow yields ``inf``,
division by zero yields a signed ``inf`` and invalid operations yield ``nan``,
silently. Division by zero in integral arithmetic still raises
``ZeroDivisionError``.

Durations compare by exact value. A floating count is taken as the exact
binary fraction it stores, so ``fseconds(0.1) != milliseconds(100)`` while
``fseconds(0.5) == milliseconds(500)``; hashing uses the same exact value.
"""

import logging
import math
import numbers
import operator as op
from collections.abc import Callable
from fractions import Fraction
from functools import cache, reduce
from typing import Any, ClassVar

from typing_extensions import Self

from chronal import rounding
from chronal.errors import LossyConversion, Overflow, UnitlessOperand
from chronal.ratio import Ratio, common_period, conversion_factor
from chronal.rep import Rep, common_rep, float64, to_float

logger = logging.getLogger("chronal.duration")


class Duration:
    """A count of ticks, each ``period`` seconds long, stored as ``rep``.

    Instances are immutable values. Construct them from an explicit tick count
    of a specialized type (``milliseconds(250)``) or from another duration
    when the conversion is lossless (``milliseconds(seconds(2))``).
    """

    __slots__ = ("_count",)

    rep: ClassVar[Rep]
    period: ClassVar[Ratio]

    def __class_getitem__(cls, params: tuple[Rep, Ratio]) -> "type[Duration]":
        if _is_specialized(cls):
            raise TypeError(
                f"{cls.__name__} is already specialized and takes no parameters"
            )
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError(
                f"Duration takes exactly two parameters, got {params!r}.\n"
                f"Example: Duration[int64, milli]"
            )
        return _specialize(*params)

    def __init__(self, count: "int | float | Duration") -> None:
        cls = type(self)
        if not _is_specialized(cls):
            raise TypeError(
                "Duration must be specialized before use: it has no unit.\n"
                "Hint: Use a predefined type such as milliseconds(250), or "
                "specialize one: Duration[int64, milli](250)"
            )
        if isinstance(count, Duration):
            value = _convert(count, cls)
        else:
            value = cls.rep.coerce(count)
        object.__setattr__(self, "_count", value)

    @classmethod
    def _from_count(cls, count: int | float) -> Self:
        # Skips validation; callers pass counts already checked against cls.rep.
        self = object.__new__(cls)
        object.__setattr__(self, "_count", count)
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
        cls = type(self)
        return (_restore, (cls.rep, cls.period, self._count))

    def count(self) -> int | float:
        """Raw tick count, for handing to logging or legacy numeric APIs."""
        return self._count

    @classmethod
    def zero(cls) -> Self:
        _require_duration_type(cls)
        return cls._from_count(cls.rep.coerce(0))

    @classmethod
    def min(cls) -> Self:
        _require_duration_type(cls)
        return cls._from_count(cls.rep.min_value)

    @classmethod
    def max(cls) -> Self:
        _require_duration_type(cls)
        return cls._from_count(cls.rep.max_value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._count!r})"

    def __bool__(self) -> bool:
        return bool(self._count)

    def __hash__(self) -> int:
        if not _is_finite(self._count):
            return hash(self._count)
        return hash(_exact_seconds(self))

    # Comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        left, right = _comparable(self, other)
        return left == right

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        left, right = _comparable(self, other)
        return left != right

    def __lt__(self, other: object) -> bool:
        return self._order(other, op.lt)

    def __le__(self, other: object) -> bool:
        return self._order(other, op.le)

    def __gt__(self, other: object) -> bool:
        return self._order(other, op.gt)

    def __ge__(self, other: object) -> bool:
        return self._order(other, op.ge)

    def _order(self, other: object, compare: Callable[[Any, Any], bool]) -> bool:
        if not isinstance(other, Duration):
            return _reject_operand("compare a duration with", other)
        left, right = _comparable(self, other)
        return compare(left, right)

    # Arithmetic

    def __add__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return _reject_operand("add to a duration", other)
        target, left, right = _in_common_type(self, other)
        return target._from_count(target.rep.check(left + right, "addition"))

    def __radd__(self, other: object) -> "Duration":
        return _reject_operand("add to a duration", other)

    def __sub__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return _reject_operand("subtract from a duration", other)
        target, left, right = _in_common_type(self, other)
        return target._from_count(target.rep.check(left - right, "subtraction"))

    def __rsub__(self, other: object) -> "Duration":
        return _reject_operand("subtract a duration from", other)

    def __neg__(self) -> Self:
        cls = type(self)
        return cls._from_count(cls.rep.check(-self._count, "negation"))

    def __pos__(self) -> Self:
        return self

    def __abs__(self) -> Self:
        cls = type(self)
        return cls._from_count(cls.rep.check(abs(self._count), "absolute value"))

    def __mul__(self, other: object) -> "Duration":
        if isinstance(other, Duration):
            raise TypeError(
                f"Cannot multiply two durations ({type(self).__name__} * "
                f"{type(other).__name__}): the result is not a duration.\n"
                f"Hint: Scale by a plain number instead: value * 3"
            )
        if isinstance(other, bool) or not isinstance(other, numbers.Real):
            return NotImplemented
        cls = type(self)
        if isinstance(other, numbers.Integral) and not cls.rep.is_floating:
            return cls._from_count(cls.rep.check(self._count * int(other), "multiplication"))
        target = Duration[common_rep(cls.rep, float64), cls.period]
        product = to_float(self._count) * to_float(other)
        return target._from_count(target.rep.check(product, "multiplication"))

    def __rmul__(self, other: object) -> "Duration":
        return self.__mul__(other)

    def __truediv__(self, other: object) -> "Duration | float":
        """Divide by a number (floating result) or by a duration (plain ratio)."""
        if isinstance(other, Duration):
            target, left, right = _in_common_type(self, other)
            if target.rep.is_floating:
                return _float_divide(left, right)
            return left / right
        if isinstance(other, bool) or not isinstance(other, numbers.Real):
            return NotImplemented
        cls = type(self)
        target = Duration[common_rep(cls.rep, float64), cls.period]
        quotient = _float_divide(self._count, other)
        return target._from_count(target.rep.check(quotient, "division"))

    def __floordiv__(self, other: object) -> "Duration | int | float":
        if isinstance(other, Duration):
            target, left, right = _in_common_type(self, other)
            if target.rep.is_floating:
                return _float_floordiv(left, right)
            return left // right
        if isinstance(other, bool) or not isinstance(other, numbers.Real):
            return NotImplemented
        cls = type(self)
        if isinstance(other, numbers.Integral) and not cls.rep.is_floating:
            return cls._from_count(cls.rep.check(self._count // int(other), "division"))
        target = Duration[common_rep(cls.rep, float64), cls.period]
        quotient = _float_floordiv(self._count, other)
        return target._from_count(target.rep.check(quotient, "division"))

    def __mod__(self, other: object) -> "Duration":
        if isinstance(other, Duration):
            target, left, right = _in_common_type(self, other)
            if target.rep.is_floating:
                return target._from_count(_float_mod(left, right))
            return target._from_count(target.rep.check(left % right, "modulo"))
        if isinstance(other, bool) or not isinstance(other, numbers.Integral):
            return NotImplemented
        cls = type(self)
        if cls.rep.is_floating:
            return cls._from_count(_float_mod(self._count, other))
        return cls._from_count(cls.rep.check(self._count % int(other), "modulo"))

    def __divmod__(self, other: object) -> "tuple[int | float, Duration]":
        if not isinstance(other, Duration):
            return NotImplemented
        target, left, right = _in_common_type(self, other)
        if target.rep.is_floating:
            quotient = _float_floordiv(left, right)
            return quotient, target._from_count(_float_mod(left, right))
        quotient, remainder = divmod(left, right)
        return quotient, target._from_count(target.rep.check(remainder, "modulo"))

    # Explicit casts

    def cast(
        self, to: "type[Duration]", policy: rounding.Policy = "toward_zero"
    ) -> "Duration":
        return duration_cast(to, self, policy)

    def truncate(self, to: "type[Duration]") -> "Duration":
        return duration_cast(to, self, "toward_zero")

    def floor(self, to: "type[Duration]") -> "Duration":
        return duration_cast(to, self, "floor")

    def ceil(self, to: "type[Duration]") -> "Duration":
        return duration_cast(to, self, "ceil")

    def round(self, to: "type[Duration]") -> "Duration":
        return duration_cast(to, self, "half_even")


def _is_specialized(cls: type) -> bool:
    return hasattr(cls, "period")


def _require_duration_type(cls: object) -> None:
    if not (isinstance(cls, type) and issubclass(cls, Duration) and _is_specialized(cls)):
        raise TypeError(
            f"Expected a specialized duration type such as Duration[int64, milli], "
            f"got {cls!r}"
        )


def _specialize(rep: Rep, period: Ratio) -> type[Duration]:
    if not isinstance(rep, Rep):
        raise TypeError(
            f"Duration representation must be a Rep such as int64 or float64, "
            f"got {type(rep).__name__}: {rep!r}"
        )
    if not isinstance(period, Ratio):
        raise TypeError(
            f"Duration period must be a Ratio, got {type(period).__name__}: {period!r}\n"
            f"Example: Duration[int64, Ratio(1, 1000)]"
        )
    if period.num <= 0:
        raise ValueError(f"Duration period must be positive, got {period}")
    return _build(rep, period)


@cache
def _build(rep: Rep, period: Ratio) -> type[Duration]:
    name = f"Duration[{rep}, {period}]"
    cls = type(
        name,
        (Duration,),
        {"__slots__": (), "__module__": __name__, "rep": rep, "period": period},
    )
    logger.debug("Specialized %s", name)
    return cls


def _restore(rep: Rep, period: Ratio, count: int | float) -> Duration:
    return Duration[rep, period]._from_count(count)


def alias(cls: type[Duration], name: str) -> type[Duration]:
    """Give a specialized duration type a readable name for ``repr``.

    Specializations are shared, so the name applies everywhere the type is
    used. A type can be aliased once; aliasing it again under the same name is
    a no-op.

    Raises:
        ValueError: If ``cls`` already carries a different alias
    """
    _require_duration_type(cls)
    if cls.__name__ not in (name, f"Duration[{cls.rep}, {cls.period}]"):
        raise ValueError(
            f"{cls.__name__} is already an alias of Duration[{cls.rep}, {cls.period}]; "
            f"cannot rename it to {name!r}.\n"
            f"Hint: Bind another variable to the existing type instead: {name} = {cls.__name__}"
        )
    cls.__name__ = name
    cls.__qualname__ = name
    return cls


def _float_divide(a: numbers.Real, b: numbers.Real) -> float:
    """IEEE division: a zero divisor yields a signed infinity, or nan for 0/0."""
    if b == 0:
        x = to_float(a)
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, to_float(b))
    if isinstance(a, float) or isinstance(b, float):
        return to_float(a) / to_float(b)
    return to_float(Fraction(a) / Fraction(b))


def _float_floordiv(a: numbers.Real, b: numbers.Real) -> float:
    if b == 0:
        return _float_divide(a, b)
    return to_float(a) // to_float(b)


def _float_mod(a: numbers.Real, b: numbers.Real) -> float:
    if b == 0:
        return math.nan
    return to_float(a) % to_float(b)


def _reject_operand(operation: str, other: object) -> Any:
    if isinstance(other, numbers.Number):
        raise UnitlessOperand(operation, other)
    return NotImplemented


# Conversion rules


def common_type(*types: type[Duration]) -> type[Duration]:
    """Duration type into which every one of ``types`` converts losslessly.

    Its period is the coarsest one that every input period is a whole multiple
    of, and its representation is floating if any input is floating, else the
    widest integral one.
    """
    if not types:
        raise ValueError("common_type() requires at least one duration type")
    for cls in types:
        _require_duration_type(cls)
    return reduce(_common_pair, types)


@cache
def _common_pair(a: type[Duration], b: type[Duration]) -> type[Duration]:
    return Duration[common_rep(a.rep, b.rep), common_period(a.period, b.period)]


def _lossy_reason(source: type[Duration], target: type[Duration]) -> str | None:
    if target.rep.is_floating:
        return None
    if source.rep.is_floating:
        return f"{source.rep} ticks may be fractional but {target.rep} holds whole ticks"
    factor = conversion_factor(source.period, target.period)
    if factor.den != 1:
        return (
            f"period {source.period}s is not a whole multiple of period "
            f"{target.period}s, so ticks would be truncated"
        )
    return None


def is_lossless(source: type[Duration], target: type[Duration]) -> bool:
    """Whether ``source`` converts implicitly to ``target``.

    Decided from the types alone. Range is not part of the decision: a
    lossless conversion can still raise ``Overflow`` for a particular value.
    """
    _require_duration_type(source)
    _require_duration_type(target)
    return _lossy_reason(source, target) is None


def check_conversion(source: type[Duration], target: type[Duration]) -> None:
    """Raise ``LossyConversion`` unless ``source`` converts implicitly to ``target``."""
    _require_duration_type(source)
    _require_duration_type(target)
    reason = _lossy_reason(source, target)
    if reason is not None:
        raise LossyConversion(source, target, reason)


def _rescale(
    count: int | float,
    source: type[Duration],
    target: type[Duration],
    round_to_int: Callable[[Fraction], int] = rounding.toward_zero,
) -> int | float:
    factor = conversion_factor(source.period, target.period)
    rep = target.rep
    context = f"converting {source.__name__} to {target.__name__}"

    if rep.is_floating:
        if isinstance(count, float):
            return count * factor.num / factor.den
        return rep.check(Fraction(count * factor.num, factor.den), context)

    if isinstance(count, float):
        if not math.isfinite(count):
            raise Overflow(count, rep.name, context)
        exact = Fraction(count) * factor.as_fraction()
    elif factor.den == 1:
        return rep.check(count * factor.num, context)
    else:
        exact = Fraction(count * factor.num, factor.den)
    return rep.check(round_to_int(exact), context)


def _convert(value: Duration, target: type[Duration]) -> int | float:
    source = type(value)
    check_conversion(source, target)
    return _rescale(value._count, source, target)


def _in_common_type(
    left: Duration, right: Duration
) -> tuple[type[Duration], int | float, int | float]:
    target = common_type(type(left), type(right))
    return target, _convert(left, target), _convert(right, target)


def _comparable(left: Duration, right: Duration) -> tuple[Any, Any]:
    a, b = type(left), type(right)
    x, y = left._count, right._count
    if not (a.rep.is_floating or b.rep.is_floating):
        # Cross-multiplying unbounded ints compares exactly and cannot overflow.
        return x * a.period.num * b.period.den, y * b.period.num * a.period.den
    if not (_is_finite(x) and _is_finite(y)):
        # Against an infinity or nan only the sign of a finite value matters.
        return (x if not _is_finite(x) else math.copysign(0.0, x),
                y if not _is_finite(y) else math.copysign(0.0, y))
    return _exact_seconds(left), _exact_seconds(right)


def _is_finite(count: int | float) -> bool:
    return not isinstance(count, float) or math.isfinite(count)


def _exact_seconds(value: Duration) -> Fraction:
    return Fraction(value._count) * type(value).period.as_fraction()


def duration_cast(
    to: type[Duration], value: Duration, policy: rounding.Policy = "toward_zero"
) -> Duration:
    """Convert ``value`` to the duration type ``to``, rounding by ``policy``.

    The policy applies when ``to`` has an integral representation: the exact
    rational result is rounded toward zero, toward negative infinity
    (``floor``), toward positive infinity (``ceil``), or to nearest with ties
    to even (``half_even``). A floating target receives the nearest float and
    ignores the policy.

    Raises:
        Overflow: If the rounded count does not fit an integral ``to``, or
            ``value`` is a non-finite float
        ValueError: If ``policy`` is not a known policy name
    """
    _require_duration_type(to)
    if isinstance(value, numbers.Number):
        raise UnitlessOperand("cast", value)
    if not isinstance(value, Duration):
        raise TypeError(
            f"duration_cast() expects a duration, got {type(value).__name__}: {value!r}"
        )
    round_to_int = rounding.resolve(policy)
    return to._from_count(_rescale(value._count, type(value), to, round_to_int))
