"""
errors.py — Error taxonomy for monetra

Every failure raised by the library derives from MonetraError. Where a builtin
exception category already describes the condition (TypeError for mixing
currencies, ValueError for bad input, ZeroDivisionError for a zero divisor),
the error inherits from it as well, so callers that catch the builtin keep
working.

All errors are local to a single call: nothing is retried and nothing has to
be rolled back, because every value is immutable.
"""

from __future__ import annotations
from fractions import Fraction
from typing import Any, Optional


class MonetraError(Exception):
    """Base class for all monetra errors."""


# ==============================================================================
# CURRENCY
# ==============================================================================

class CurrencyMismatchError(MonetraError, TypeError):
    """Two Money values with different currency codes were combined."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Currency mismatch: expected {expected}, received {actual}.\n"
            f"Hint: convert explicitly first, e.g. "
            f"Converter('{expected}', {{'{actual}': rate}}).convert(money, '{expected}')"
        )


class CurrencyNotFoundError(MonetraError, KeyError):
    """A currency code is not present in the registry."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(code)

    def __str__(self) -> str:
        return f"Unknown currency code: {self.code!r}"


class CurrencyConflictError(MonetraError, ValueError):
    """A currency code was registered twice with different metadata."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(
            f"Currency {code!r} is already registered with different metadata; "
            f"registrations are append-only"
        )


class ExchangeRateNotFoundError(MonetraError, KeyError):
    """A converter has no rate for the requested currency."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(code)

    def __str__(self) -> str:
        return f"No exchange rate for currency {self.code!r}"


# ==============================================================================
# ARITHMETIC
# ==============================================================================

class RoundingRequiredError(MonetraError, ArithmeticError):
    """
    The exact result of multiply/divide is not a whole number of minor units
    and no rounding mode was given. Silent rounding is never the default.
    """

    def __init__(
        self,
        operation: Optional[str] = None,
        approximate_result: Optional[Fraction] = None,
    ):
        self.operation = operation
        self.approximate_result = approximate_result
        if operation and approximate_result is not None:
            message = (
                f"Rounding required for {operation}: result "
                f"{approximate_result} is not an integer.\n"
                f"Hint: pass a rounding mode, e.g. "
                f"money.{operation}(value, rounding=RoundingMode.HALF_UP)"
            )
        else:
            message = "Rounding is required for this operation but was not provided."
        super().__init__(message)


class DivisionByZeroError(MonetraError, ZeroDivisionError):
    """Division by a value that is exactly zero."""

    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)


class UnsupportedRoundingModeError(MonetraError, ValueError):
    """A value that is not a RoundingMode reached the rounding engine."""

    def __init__(self, mode: Any):
        self.mode = mode
        super().__init__(f"Unsupported rounding mode: {mode!r}")


# ==============================================================================
# INPUT FORMAT
# ==============================================================================

class InvalidFormatError(MonetraError, ValueError):
    """A decimal literal is malformed (exponent, extra points, stray characters)."""

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid decimal literal {value!r}: {reason}")


class InvalidPrecisionError(MonetraError, ValueError):
    """An amount has more fractional digits than its currency allows."""


# ==============================================================================
# ALLOCATION
# ==============================================================================

class EmptyRatiosError(MonetraError, ValueError):
    def __init__(self):
        super().__init__("Cannot allocate over an empty list of ratios")


class ZeroTotalRatioError(MonetraError, ValueError):
    def __init__(self):
        super().__init__("Cannot allocate when the ratios sum to zero")


class NegativeRatioError(MonetraError, ValueError):
    def __init__(self, index: int, ratio: Any):
        self.index = index
        self.ratio = ratio
        super().__init__(f"Ratio at index {index} is negative: {ratio!r}")
