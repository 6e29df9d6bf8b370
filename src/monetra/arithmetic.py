"""
arithmetic.py — Minor-unit arithmetic primitives

Pure functions on int amounts. Money delegates here after checking
currencies; nothing in this module knows about currencies.
"""

from __future__ import annotations
from fractions import Fraction
from typing import Optional

from .errors import DivisionByZeroError, RoundingRequiredError
from .rational import DecimalLiteral, parse_rational
from .rounding import RoundingMode, divide_with_rounding


def add(a: int, b: int) -> int:
    return a + b


def subtract(a: int, b: int) -> int:
    return a - b


def _exact_or_rounded(
    product: int,
    denominator: int,
    rounding: Optional[RoundingMode],
    operation: str,
) -> int:
    if product % denominator == 0:
        return product // denominator
    if rounding is None:
        raise RoundingRequiredError(operation, Fraction(product, denominator))
    return divide_with_rounding(product, denominator, rounding)


def multiply(
    amount: int,
    multiplier: DecimalLiteral,
    rounding: Optional[RoundingMode] = None,
) -> int:
    """
    amount * multiplier, exact when possible.

    Raises:
        InvalidFormatError: multiplier is not a decimal literal
        RoundingRequiredError: the result is fractional and rounding is None
    """
    rational = parse_rational(multiplier)
    return _exact_or_rounded(
        amount * rational.numerator, rational.denominator, rounding, "multiply"
    )


def divide(
    amount: int,
    divisor: DecimalLiteral,
    rounding: Optional[RoundingMode] = None,
) -> int:
    """
    amount / divisor, computed as amount * (denominator / numerator).

    Raises:
        DivisionByZeroError: divisor is exactly zero
        InvalidFormatError: divisor is not a decimal literal
        RoundingRequiredError: the result is fractional and rounding is None
    """
    rational = parse_rational(divisor)
    if rational.is_zero():
        raise DivisionByZeroError(f"Cannot divide by {divisor!r}")
    return _exact_or_rounded(
        amount * rational.denominator, rational.numerator, rounding, "divide"
    )
