"""
bag.py — A wallet holding amounts in several currencies

Unlike Money, a MoneyBag is mutable: add() and subtract() update it in
place. Each currency code holds a single running Money total.
"""

from __future__ import annotations
from typing import Any, Dict, Iterator, List, Optional

from .converter import Converter
from .currency import CurrencyRegistry, resolve_currency
from .money import CurrencyLike, Money


class MoneyBag:
    def __init__(self, registry: Optional[CurrencyRegistry] = None):
        self._registry = registry
        self._contents: Dict[str, Money] = {}

    def add(self, money: Money) -> MoneyBag:
        code = money.currency.code
        existing = self._contents.get(code)
        self._contents[code] = money if existing is None else existing.add(money)
        return self

    def subtract(self, money: Money) -> MoneyBag:
        code = money.currency.code
        existing = self._contents.get(code, Money.zero(money.currency))
        self._contents[code] = existing.subtract(money)
        return self

    def get(self, currency: CurrencyLike) -> Money:
        """Amount held in currency, zero when the bag holds none."""
        resolved = resolve_currency(currency, self._registry)
        return self._contents.get(resolved.code, Money.zero(resolved))

    def total(self, target: CurrencyLike, converter: Converter) -> Money:
        """Everything converted to target and summed."""
        resolved = resolve_currency(target, self._registry)
        total = Money.zero(resolved)
        for money in self._contents.values():
            total = total.add(converter.convert(money, resolved))
        return total

    def all(self) -> List[Money]:
        return list(self._contents.values())

    def to_list(self) -> List[Dict[str, Any]]:
        return [money.to_dict() for money in self._contents.values()]

    def __contains__(self, code: object) -> bool:
        return code in self._contents

    def __iter__(self) -> Iterator[Money]:
        return iter(list(self._contents.values()))

    def __len__(self) -> int:
        return len(self._contents)

    def __repr__(self) -> str:
        return f"MoneyBag({', '.join(str(m) for m in self._contents.values())})"
