"""Exception types raised by chronal.

Two families exist. Type-level errors (``LossyConversion``,
``IncompatibleClock``, ``UnitlessOperand``) are decided from the period,
representation and clock tags alone and are raised before any tick count is
computed; they subclass ``TypeError``. Runtime errors (``Overflow``,
``DivisionByZero``) depend on actual values.
"""


class ChronalError(Exception):
    """Base class for every error raised by chronal."""


class LossyConversion(ChronalError, TypeError):
    """An implicit conversion could drop precision."""

    def __init__(self, source: type, target: type, reason: str) -> None:
        self.source = source
        self.target = target
        self.reason = reason
        super().__init__(
            f"Cannot implicitly convert {source.__name__} to {target.__name__}: "
            f"{reason}.\n"
            f"Hint: Use an explicit cast and pick a truncation policy:\n"
            f"  duration_cast({target.__name__}, value, policy='toward_zero')\n"
            f"  value.floor({target.__name__})  # or .ceil(), .round()"
        )


class IncompatibleClock(ChronalError, TypeError):
    """Two time points measured from different clocks were combined."""

    def __init__(self, left: type, right: type, operation: str) -> None:
        self.left = left
        self.right = right
        self.operation = operation
        super().__init__(
            f"Cannot {operation} time points of different clocks: "
            f"{left.__name__} and {right.__name__}.\n"
            f"Clocks do not share an epoch, so their time points are never "
            f"convertible into one another."
        )


class UnitlessOperand(ChronalError, TypeError):
    """A bare number was used where a quantity with a unit is required."""

    def __init__(self, operation: str, value: object) -> None:
        self.operation = operation
        self.value = value
        super().__init__(
            f"Cannot {operation} a bare number ({value!r}): its unit is unknown.\n"
            f"Hint: Name the unit explicitly:\n"
            f"  milliseconds({value!r})  # or seconds(...), minutes(...), ..."
        )


class Overflow(ChronalError, OverflowError):
    """An integral tick count does not fit its representation."""

    def __init__(self, value: object, rep_name: str, context: str) -> None:
        self.value = value
        self.rep_name = rep_name
        self.context = context
        super().__init__(
            f"{context}: {value!r} does not fit in representation {rep_name}"
        )


class DivisionByZero(ChronalError, ZeroDivisionError):
    """A ratio was given a zero denominator."""
