"""
money.py — The Money value type

================================================================================
DESIGN PRINCIPLES
================================================================================

1. INTERNAL REPRESENTATION
   An int amount of minor units (cents for USD, fils for KWD). Python ints are
   unbounded, so large sums never overflow. Never floating point.

2. TYPE SAFETY
   Combining different currencies raises CurrencyMismatchError (a TypeError).
   Only equality is lenient: 100 USD != 100 EUR, it does not raise.

3. IMMUTABILITY
   Frozen dataclass. Every operation returns a new instance, so values can
   be shared freely, including across threads.

4. EXPLICIT ROUNDING
   multiply/divide return exact results or raise RoundingRequiredError. The
   caller chooses the rounding mode; the library never picks one silently.

5. VERIFIABLE INVARIANTS
   sum(m.allocate(ratios)) == m for every m and every valid ratios list.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union
import re

from . import arithmetic
from .allocation import allocate as _allocate
from .currency import Currency, CurrencyRegistry, resolve_currency
from .errors import CurrencyMismatchError, InvalidFormatError, InvalidPrecisionError
from .rational import DecimalLiteral, Rational, parse_rational
from .rounding import DEFAULT_ROUNDING, RoundingMode, divide_with_rounding

CurrencyLike = Union[Currency, str]

_MINOR_AMOUNT = re.compile(r"-?[0-9]+")


@dataclass(frozen=True, slots=True)
class Money:
    """
    An amount of minor units bound to a currency.

    INVARIANTS:
    1. _minor is always an int (never float, never bool)
    2. _currency is always a Currency
    3. Operations across different currency codes raise CurrencyMismatchError

    SERIALIZATION:
        to_dict() -> {"amount": "1050", "currency": "USD", "precision": 2}
        Amounts travel as strings of minor units, never as floats.
    """
    _minor: int
    _currency: Currency

    def __post_init__(self):
        if isinstance(self._minor, bool) or not isinstance(self._minor, int):
            raise TypeError(
                f"Minor units must be an int, got {type(self._minor).__name__}. "
                f"Use Money.from_major() for decimal strings."
            )
        if not isinstance(self._currency, Currency):
            raise TypeError(f"Expected Currency, got {type(self._currency).__name__}")

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_minor(
        cls,
        minor: int,
        currency: CurrencyLike,
        registry: Optional[CurrencyRegistry] = None,
    ) -> Money:
        """
        Build from minor units (cents, pence, ...). No conversion at all.

            Money.from_minor(1050, USD)  # 10.50 USD
        """
        return cls(minor, resolve_currency(currency, registry))

    @classmethod
    def from_cents(
        cls,
        cents: int,
        currency: CurrencyLike,
        registry: Optional[CurrencyRegistry] = None,
    ) -> Money:
        """Alias of from_minor()."""
        return cls.from_minor(cents, currency, registry)

    @classmethod
    def from_major(
        cls,
        amount: DecimalLiteral,
        currency: CurrencyLike,
        registry: Optional[CurrencyRegistry] = None,
    ) -> Money:
        """
        Build from a decimal amount of major units, e.g. "10.50".

        Raises:
            InvalidFormatError: amount is not a plain decimal literal
            InvalidPrecisionError: more fractional digits than the currency has
        """
        resolved = resolve_currency(currency, registry)
        rational = parse_rational(amount)
        if rational.scale > resolved.decimals:
            raise InvalidPrecisionError(
                f"Precision {rational.scale} of {amount!r} exceeds "
                f"{resolved.code} decimals {resolved.decimals}"
            )
        return cls(rational.rescale(resolved.decimals), resolved)

    @classmethod
    def from_decimal(
        cls,
        amount: DecimalLiteral,
        currency: CurrencyLike,
        registry: Optional[CurrencyRegistry] = None,
    ) -> Money:
        """Alias of from_major()."""
        return cls.from_major(amount, currency, registry)

    @classmethod
    def from_float(
        cls,
        value: float,
        currency: CurrencyLike,
        rounding: RoundingMode = DEFAULT_ROUNDING,
        registry: Optional[CurrencyRegistry] = None,
    ) -> Money:
        """
        Build from a float of major units.

        WARNING: rounding happens HERE, once, on the shortest decimal form of
        the float (repr). From this point on everything is integer. Prefer
        from_major() with a string whenever you can.
        """
        resolved = resolve_currency(currency, registry)
        rational = parse_rational(format(Decimal(repr(value)), "f"))
        minor = divide_with_rounding(
            rational.numerator * resolved.multiplier, rational.denominator, rounding
        )
        return cls(minor, resolved)

    @classmethod
    def zero(
        cls,
        currency: CurrencyLike,
        registry: Optional[CurrencyRegistry] = None,
    ) -> Money:
        """Zero in the given currency. Handy as the start value of sum()."""
        return cls(0, resolve_currency(currency, registry))

    @classmethod
    def min(cls, *values: Money) -> Money:
        if not values:
            raise ValueError("Money.min() needs at least one value")
        smallest = values[0]
        for value in values[1:]:
            if value.less_than(smallest):
                smallest = value
        return smallest

    @classmethod
    def max(cls, *values: Money) -> Money:
        if not values:
            raise ValueError("Money.max() needs at least one value")
        largest = values[0]
        for value in values[1:]:
            if value.greater_than(largest):
                largest = value
        return largest

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def minor(self) -> int:
        """Amount in minor units. Use this for persistence and calculations."""
        return self._minor

    @property
    def currency(self) -> Currency:
        return self._currency

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _new(self, minor: int) -> Money:
        return Money(minor, self._currency)

    def _check_same_currency(self, other: Any) -> None:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operation not allowed between Money and {type(other).__name__}. "
                f"Use Money.from_minor() or Money.from_major() to convert."
            )
        if self._currency.code != other._currency.code:
            raise CurrencyMismatchError(self._currency.code, other._currency.code)

    def add(self, other: Money) -> Money:
        self._check_same_currency(other)
        return self._new(arithmetic.add(self._minor, other._minor))

    def subtract(self, other: Money) -> Money:
        self._check_same_currency(other)
        return self._new(arithmetic.subtract(self._minor, other._minor))

    def multiply(
        self,
        multiplier: DecimalLiteral,
        rounding: Optional[RoundingMode] = None,
    ) -> Money:
        """
        Multiply by a decimal literal.

            Money.from_minor(100, USD).multiply("0.555")                   # RoundingRequiredError
            Money.from_minor(100, USD).multiply("0.555", RoundingMode.HALF_UP)  # 56 minor

        Raises:
            InvalidFormatError: multiplier is not a decimal literal
            RoundingRequiredError: the result is fractional and rounding is None
        """
        return self._new(arithmetic.multiply(self._minor, multiplier, rounding))

    def divide(
        self,
        divisor: DecimalLiteral,
        rounding: Optional[RoundingMode] = None,
    ) -> Money:
        """
        Divide by a decimal literal.

        Raises:
            DivisionByZeroError: divisor is exactly zero
            InvalidFormatError: divisor is not a decimal literal
            RoundingRequiredError: the result is fractional and rounding is None
        """
        return self._new(arithmetic.divide(self._minor, divisor, rounding))

    def abs(self) -> Money:
        return self._new(abs(self._minor))

    def negate(self) -> Money:
        return self._new(-self._minor)

    def percentage(self, percent: DecimalLiteral, rounding: RoundingMode = DEFAULT_ROUNDING) -> Money:
        """percent% of this amount, e.g. percentage("15") for 15%."""
        rational = parse_rational(percent)
        return self.multiply(
            Rational(rational.numerator, rational.denominator * 100), rounding
        )

    def add_percent(self, percent: DecimalLiteral, rounding: RoundingMode = DEFAULT_ROUNDING) -> Money:
        return self.add(self.percentage(percent, rounding))

    def subtract_percent(self, percent: DecimalLiteral, rounding: RoundingMode = DEFAULT_ROUNDING) -> Money:
        return self.subtract(self.percentage(percent, rounding))

    def clamp(self, minimum: Money, maximum: Money) -> Money:
        """Limit this amount to [minimum, maximum]."""
        self._check_same_currency(minimum)
        self._check_same_currency(maximum)
        if minimum._minor > maximum._minor:
            raise ValueError(f"Clamp minimum {minimum} is greater than maximum {maximum}")
        if self._minor < minimum._minor:
            return minimum
        if self._minor > maximum._minor:
            return maximum
        return self

    def __add__(self, other: Money) -> Money:
        return self.add(other)

    def __sub__(self, other: Money) -> Money:
        return self.subtract(other)

    def __mul__(self, multiplier: DecimalLiteral) -> Money:
        return self.multiply(multiplier)

    def __rmul__(self, multiplier: DecimalLiteral) -> Money:
        return self.multiply(multiplier)

    def __truediv__(self, divisor: DecimalLiteral) -> Money:
        return self.divide(divisor)

    def __neg__(self) -> Money:
        return self.negate()

    def __abs__(self) -> Money:
        return self.abs()

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def allocate(self, ratios: Sequence[DecimalLiteral]) -> List[Money]:
        """
        Split proportionally to ratios; the parts always sum to self.

            Money.from_minor(25000, USD).allocate([1, 1, 1])
            # [83.34 USD, 83.33 USD, 83.33 USD]
        """
        return [self._new(share) for share in _allocate(self._minor, ratios)]

    def split(self, parts: int) -> List[Money]:
        """Split into `parts` near-equal amounts (earlier parts get the extra units)."""
        if isinstance(parts, bool) or not isinstance(parts, int) or parts <= 0:
            raise ValueError(f"parts must be a positive int, got {parts!r}")
        return self.allocate([1] * parts)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def equals(self, other: Money) -> bool:
        """Same currency code and same amount. Never raises on currency mismatch."""
        return (
            isinstance(other, Money)
            and self._currency.code == other._currency.code
            and self._minor == other._minor
        )

    def compare(self, other: Money) -> int:
        """-1, 0 or 1. Raises CurrencyMismatchError across currencies."""
        self._check_same_currency(other)
        return (self._minor > other._minor) - (self._minor < other._minor)

    def greater_than(self, other: Money) -> bool:
        return self.compare(other) > 0

    def greater_than_or_equal(self, other: Money) -> bool:
        return self.compare(other) >= 0

    def less_than(self, other: Money) -> bool:
        return self.compare(other) < 0

    def less_than_or_equal(self, other: Money) -> bool:
        return self.compare(other) <= 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Money):
            return self.equals(other)
        return NotImplemented

    def __lt__(self, other: Money) -> bool:
        return self.less_than(other)

    def __le__(self, other: Money) -> bool:
        return self.less_than_or_equal(other)

    def __gt__(self, other: Money) -> bool:
        return self.greater_than(other)

    def __ge__(self, other: Money) -> bool:
        return self.greater_than_or_equal(other)

    def __hash__(self) -> int:
        return hash((self._minor, self._currency.code))

    def is_zero(self) -> bool:
        return self._minor == 0

    def is_negative(self) -> bool:
        return self._minor < 0

    def is_positive(self) -> bool:
        return self._minor > 0

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def to_decimal_string(self) -> str:
        """Plain decimal in major units ("1234.56", "-5.25"), no locale rules."""
        return str(Rational(self._minor, self._currency.multiplier))

    def __str__(self) -> str:
        return f"{self.to_decimal_string()} {self._currency.code}"

    def __repr__(self) -> str:
        return f"Money(minor={self._minor}, currency={self._currency.code!r})"

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize for persistence/APIs.

        Format: {"amount": "<minor units>", "currency": "<code>", "precision": <decimals>}
        """
        return {
            "amount": str(self._minor),
            "currency": self._currency.code,
            "precision": self._currency.decimals,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], registry: CurrencyRegistry) -> Money:
        """
        Inverse of to_dict(). The currency must be registered in registry.

        Raises:
            CurrencyNotFoundError: unknown currency code
            InvalidPrecisionError: stored precision differs from the registered one
        """
        currency = registry.lookup(data["currency"])
        precision = data.get("precision")
        if precision is not None and precision != currency.decimals:
            raise InvalidPrecisionError(
                f"Serialized precision {precision} does not match "
                f"{currency.code} decimals {currency.decimals}"
            )
        amount = data["amount"]
        if isinstance(amount, str):
            if not _MINOR_AMOUNT.fullmatch(amount):
                raise InvalidFormatError(amount, "serialized amount must match -?[0-9]+")
            amount = int(amount)
        return cls(amount, currency)
