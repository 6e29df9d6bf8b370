"""
converter.py — Currency conversion with exact exchange rates

Rates are decimal literals relative to a base currency ("1 USD = 0.85 EUR"
is {"EUR": "0.85"} with base "USD"). A conversion is one exact rational
computation followed by a single rounding step:

    target_minor = source_minor * to_rate / from_rate * 10**(to_dec - from_dec)
"""

from __future__ import annotations
from typing import Dict, Mapping, Optional
import logging

from .currency import Currency, CurrencyRegistry, resolve_currency
from .errors import ExchangeRateNotFoundError
from .money import CurrencyLike, Money
from .rational import DecimalLiteral, Rational, parse_rational
from .rounding import DEFAULT_ROUNDING, RoundingMode, divide_with_rounding

logger = logging.getLogger(__name__)


class Converter:
    def __init__(
        self,
        base: str,
        rates: Mapping[str, DecimalLiteral],
        registry: Optional[CurrencyRegistry] = None,
    ):
        self.base = base
        self._registry = registry
        self._rates: Dict[str, Rational] = {
            code: parse_rational(rate) for code, rate in rates.items()
        }
        for code, rate in self._rates.items():
            if rate.numerator <= 0:
                raise ValueError(f"Exchange rate for {code} must be positive, got {rate}")
        base_rate = self._rates.setdefault(base, Rational(1))
        if base_rate.to_fraction() != 1:
            raise ValueError(f"Base currency {base} must have rate 1, got {base_rate}")

    def rate(self, code: str) -> Rational:
        try:
            return self._rates[code]
        except KeyError:
            raise ExchangeRateNotFoundError(code) from None

    def convert(
        self,
        money: Money,
        to_currency: CurrencyLike,
        rounding: RoundingMode = DEFAULT_ROUNDING,
    ) -> Money:
        """
        Convert money to to_currency, rounding once with rounding.

        Raises:
            ExchangeRateNotFoundError: no rate for either currency
        """
        target: Currency = resolve_currency(to_currency, self._registry)
        source = money.currency
        if source.code == target.code:
            return money

        from_rate = self.rate(source.code)
        to_rate = self.rate(target.code)

        numerator = (
            money.minor * to_rate.numerator * from_rate.denominator * target.multiplier
        )
        denominator = to_rate.denominator * from_rate.numerator * source.multiplier
        minor = divide_with_rounding(numerator, denominator, rounding)

        logger.debug(
            "Converted %s to %s at %s/%s (%s)",
            money, target.code, to_rate, from_rate, rounding.name,
        )
        return Money.from_minor(minor, target)
