"""
monetra — Exact monetary arithmetic

Money as an integer number of minor units bound to a currency, with explicit
rounding and allocation that never loses a minor unit.

================================================================================
QUICK START
================================================================================

Basic usage:

    from monetra import Money, RoundingMode, USD

    price = Money.from_major("19.99", USD)
    total = price.multiply(3)                      # 59.97 USD, exact

    # Fractional results require an explicit rounding mode
    tax = price.multiply("0.0825", RoundingMode.HALF_EVEN)

    # Split so that the parts ALWAYS sum to the original
    parts = Money.from_minor(25000, USD).allocate([1, 1, 1])
    # [83.34 USD, 83.33 USD, 83.33 USD]

Currencies by code go through an explicit registry:

    from monetra import CurrencyRegistry, Converter

    registry = CurrencyRegistry.iso4217()
    eur = Money.from_major("10.00", "EUR", registry=registry)
    usd = Converter("USD", {"EUR": "0.85"}, registry).convert(eur, "USD")

================================================================================
"""

import logging

from .allocation import Allocation, allocate
from .bag import MoneyBag
from .converter import Converter
from .currency import (
    EUR,
    GBP,
    ISO_4217,
    JPY,
    KWD,
    USD,
    ZAR,
    Currency,
    CurrencyRegistry,
)
from .errors import (
    CurrencyConflictError,
    CurrencyMismatchError,
    CurrencyNotFoundError,
    DivisionByZeroError,
    EmptyRatiosError,
    ExchangeRateNotFoundError,
    InvalidFormatError,
    InvalidPrecisionError,
    MonetraError,
    NegativeRatioError,
    RoundingRequiredError,
    UnsupportedRoundingModeError,
    ZeroTotalRatioError,
)
from .money import Money
from .rational import Rational, parse_rational
from .rounding import DEFAULT_ROUNDING, RoundingMode, divide_with_rounding
from .tokens import Token, define_token

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Core
    "Money",
    "Currency",
    "CurrencyRegistry",
    "RoundingMode",
    "DEFAULT_ROUNDING",
    "Rational",
    "parse_rational",
    "divide_with_rounding",
    "allocate",
    "Allocation",
    # Currencies
    "USD",
    "EUR",
    "GBP",
    "JPY",
    "ZAR",
    "KWD",
    "ISO_4217",
    "Token",
    "define_token",
    # Multi-currency
    "Converter",
    "MoneyBag",
    # Errors
    "MonetraError",
    "CurrencyMismatchError",
    "CurrencyNotFoundError",
    "CurrencyConflictError",
    "ExchangeRateNotFoundError",
    "RoundingRequiredError",
    "DivisionByZeroError",
    "UnsupportedRoundingModeError",
    "InvalidFormatError",
    "InvalidPrecisionError",
    "EmptyRatiosError",
    "ZeroTotalRatioError",
    "NegativeRatioError",
]
