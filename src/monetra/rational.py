"""
rational.py — Exact decimal literals

Multipliers, divisors and allocation ratios enter the library as decimal
literals and are turned into an exact fraction numerator / 10**scale before
any arithmetic happens. No float is ever involved after this point.

Accepted format: -?[0-9]+(\\.[0-9]+)?

Scientific notation is rejected outright rather than normalized: "1e5" hides
how many significant digits the caller meant.

Floats are accepted for convenience, but they are exact only with respect to
their str() form (str(0.555) == "0.555"). Pass strings when bit-exactness
matters.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Union
import re

from .errors import InvalidFormatError

_LITERAL = re.compile(r"-?[0-9]+(\.[0-9]+)?")
_POWER_OF_TEN = re.compile(r"10*")


@dataclass(frozen=True)
class Rational:
    """
    numerator / denominator, with denominator a positive power of ten.

    Use Rational.parse() to build one from user input.
    """
    numerator: int
    denominator: int = 1

    def __post_init__(self):
        for part in (self.numerator, self.denominator):
            if isinstance(part, bool) or not isinstance(part, int):
                raise InvalidFormatError(self, f"{type(part).__name__} is not an int")
        if self.denominator <= 0 or not _POWER_OF_TEN.fullmatch(str(self.denominator)):
            raise InvalidFormatError(self, "denominator must be a positive power of ten")

    @classmethod
    def parse(cls, value: DecimalLiteral) -> Rational:
        return parse_rational(value)

    @property
    def scale(self) -> int:
        """Number of fractional digits of the literal."""
        return len(str(self.denominator)) - 1

    def is_zero(self) -> bool:
        return self.numerator == 0

    def is_negative(self) -> bool:
        return self.numerator < 0

    def rescale(self, scale: int) -> int:
        """Numerator expressed over 10**scale (scale >= self.scale)."""
        return self.numerator * 10 ** (scale - self.scale)

    def to_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def __str__(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        sign = "-" if self.numerator < 0 else ""
        whole, frac = divmod(abs(self.numerator), self.denominator)
        return f"{sign}{whole}.{frac:0{self.scale}d}"


DecimalLiteral = Union[int, float, str, Decimal, Rational]


def parse_rational(value: DecimalLiteral) -> Rational:
    """
    Parse a decimal literal into an exact Rational.

    Raises:
        InvalidFormatError: exponent marker, several decimal points, or any
            character other than digits, one leading '-' and one '.'
    """
    if isinstance(value, Rational):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise InvalidFormatError(value, f"unsupported type {type(value).__name__}")

    text = str(value)

    if "e" in text or "E" in text:
        raise InvalidFormatError(value, "scientific notation is not supported")
    if text.count(".") > 1:
        raise InvalidFormatError(value, "multiple decimal points")
    if not _LITERAL.fullmatch(text):
        raise InvalidFormatError(value, "expected digits, an optional leading '-' and one '.'")

    int_part, _, frac_part = text.partition(".")
    return Rational(
        numerator=int(int_part + frac_part),
        denominator=10 ** len(frac_part),
    )
