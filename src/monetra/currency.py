"""
currency.py — Currency metadata and the currency registry

A Currency carries its ISO 4217 style code and the number of decimals of its
minor unit (EUR=2, JPY=0, KWD=3). The decimals define the scale of every Money
created against it and must never change for a given code.

Registries are explicit objects: build one, register what you need, and pass
it to the code paths that resolve currencies by code. There is no process-wide
registry.

    registry = CurrencyRegistry.iso4217()
    registry.register(Currency("CHF", 2, "CHF", "de-CH"))
    chf = registry.lookup("CHF")
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Union
import logging

from .errors import CurrencyConflictError, CurrencyNotFoundError

logger = logging.getLogger(__name__)


# ==============================================================================
# CURRENCY
# ==============================================================================

@dataclass(frozen=True)
class Currency:
    """
    Currency definition.

    INVARIANTS:
    1. code is a non-empty string
    2. decimals is a non-negative int, fixed for the lifetime of the code
    """
    code: str
    decimals: int
    symbol: str = ""
    locale: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.code, str) or not self.code.strip():
            raise ValueError(f"Currency code must be a non-empty string, got {self.code!r}")
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int) or self.decimals < 0:
            raise ValueError(
                f"Currency decimals must be a non-negative int, got {self.decimals!r}"
            )

    @property
    def multiplier(self) -> int:
        """Conversion factor major -> minor units."""
        return 10 ** self.decimals

    def __str__(self) -> str:
        return self.code


# ISO 4217 currencies shipped with the library
USD = Currency("USD", 2, "$", "en-US")
EUR = Currency("EUR", 2, "€", "de-DE")
GBP = Currency("GBP", 2, "£", "en-GB")
JPY = Currency("JPY", 0, "¥", "ja-JP")
ZAR = Currency("ZAR", 2, "R", "en-ZA")
KWD = Currency("KWD", 3, "KD", "ar-KW")

ISO_4217 = (USD, EUR, GBP, JPY, ZAR, KWD)


# ==============================================================================
# REGISTRY
# ==============================================================================

class CurrencyRegistry:
    """
    Code -> Currency lookup table.

    Append-only: registering the same Currency twice is a no-op, registering
    a different definition under an existing code raises CurrencyConflictError.
    Money values hold the Currency object itself, so a conflicting
    re-registration would silently change the scale of existing amounts.
    """

    def __init__(self, currencies: Iterable[Currency] = ()):
        self._currencies: Dict[str, Currency] = {}
        for currency in currencies:
            self.register(currency)

    @classmethod
    def iso4217(cls) -> CurrencyRegistry:
        """A fresh registry pre-loaded with the bundled ISO 4217 currencies."""
        return cls(ISO_4217)

    def register(self, currency: Currency) -> Currency:
        if not isinstance(currency, Currency):
            raise TypeError(f"Expected Currency, got {type(currency).__name__}")
        existing = self._currencies.get(currency.code)
        if existing is not None:
            if existing != currency:
                raise CurrencyConflictError(currency.code)
            return existing
        self._currencies[currency.code] = currency
        logger.debug("Registered currency %s (decimals=%d)", currency.code, currency.decimals)
        return currency

    def lookup(self, code: str) -> Currency:
        try:
            return self._currencies[code]
        except KeyError:
            logger.debug("Currency lookup failed for %r", code)
            raise CurrencyNotFoundError(code) from None

    def __contains__(self, code: object) -> bool:
        if isinstance(code, Currency):
            code = code.code
        return code in self._currencies

    def __iter__(self) -> Iterator[Currency]:
        return iter(self._currencies.values())

    def __len__(self) -> int:
        return len(self._currencies)

    def __repr__(self) -> str:
        return f"CurrencyRegistry({sorted(self._currencies)})"


def resolve_currency(
    currency: Union[Currency, str],
    registry: Optional[CurrencyRegistry] = None,
) -> Currency:
    """
    Resolve a Currency or a currency code.

    A code can only be resolved through an explicit registry.
    """
    if isinstance(currency, Currency):
        return currency
    if isinstance(currency, str):
        if registry is None:
            raise TypeError(
                f"Currency code {currency!r} given without a registry. "
                f"Pass a Currency object or registry=CurrencyRegistry.iso4217()."
            )
        return registry.lookup(currency)
    raise TypeError(f"Expected Currency or currency code, got {type(currency).__name__}")
