"""
tokens.py — Custom tokens (crypto, commodities, loyalty points)

A Token is a Currency with extra metadata. Anything Money accepts as a
currency it accepts as a token:

    registry = CurrencyRegistry.iso4217()
    SOL = define_token(registry, code="SOL", symbol="◎", decimals=9, token_type="crypto")
    balance = Money.from_major("1.5", "SOL", registry=registry)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging

from .currency import Currency, CurrencyRegistry

logger = logging.getLogger(__name__)

TOKEN_TYPES = ("fiat", "crypto", "commodity", "custom")


@dataclass(frozen=True)
class Token(Currency):
    token_type: str = "custom"
    chain_id: Optional[int] = None
    contract_address: Optional[str] = None
    standard: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        if self.token_type not in TOKEN_TYPES:
            raise ValueError(
                f"token_type must be one of {TOKEN_TYPES}, got {self.token_type!r}"
            )


def define_token(
    registry: CurrencyRegistry,
    code: str,
    symbol: str,
    decimals: int,
    token_type: str = "custom",
    locale: Optional[str] = None,
    chain_id: Optional[int] = None,
    contract_address: Optional[str] = None,
    standard: Optional[str] = None,
) -> Token:
    """Create a Token and register it so it can be resolved by code."""
    token = Token(
        code=code,
        decimals=decimals,
        symbol=symbol,
        locale=locale,
        token_type=token_type,
        chain_id=chain_id,
        contract_address=contract_address,
        standard=standard,
    )
    logger.debug("Defining %s token %s", token_type, code)
    return registry.register(token)


# Popular tokens, not registered anywhere until a caller does so
ETH = Token("ETH", 18, "Ξ", token_type="crypto", chain_id=1)
BTC = Token("BTC", 8, "₿", token_type="crypto")
USDC = Token("USDC", 6, "USDC", token_type="crypto", chain_id=1, standard="ERC-20")
USDT = Token("USDT", 6, "₮", token_type="crypto", chain_id=1, standard="ERC-20")
