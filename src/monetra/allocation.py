"""
allocation.py — Splitting amounts without losing a minor unit

================================================================================
LARGEST REMAINDER METHOD
================================================================================

allocate(amount, ratios) returns one integer per ratio, each close to
amount * ratio / sum(ratios), and ALWAYS summing exactly to amount.

1. Parse every ratio exactly and rescale all of them to the common
   denominator 10**max_scale: they become integer weights.
2. share[i] = amount * w[i] // total, remainder[i] = amount * w[i] % total
3. leftover = amount - sum(share)   (0 <= leftover < len(ratios))
4. Stable sort indices by remainder, descending. The first `leftover` indices
   get one extra minor unit. Ties keep input order, so with equal ratios the
   first parts receive the extra units:

       allocate(25000, [1, 1, 1]) == [8334, 8333, 8333]

Negative amounts are allocated as the mirror image of the positive amount:
allocate(-100, [1, 1, 1]) == [-34, -33, -33].

================================================================================
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, Sequence

from .errors import (
    CurrencyMismatchError,
    EmptyRatiosError,
    NegativeRatioError,
    ZeroTotalRatioError,
)
from .rational import DecimalLiteral, parse_rational

if TYPE_CHECKING:
    from .money import Money


def _weights(ratios: Sequence[DecimalLiteral]) -> List[int]:
    rationals = [parse_rational(r) for r in ratios]
    for index, rational in enumerate(rationals):
        if rational.is_negative():
            raise NegativeRatioError(index, ratios[index])
    scale = max(r.scale for r in rationals)
    return [r.rescale(scale) for r in rationals]


def allocate(amount: int, ratios: Sequence[DecimalLiteral]) -> List[int]:
    """
    Allocate an integer amount proportionally to ratios.

    Raises:
        EmptyRatiosError: ratios is empty
        InvalidFormatError: a ratio is not a decimal literal
        NegativeRatioError: a ratio is below zero
        ZeroTotalRatioError: all ratios are zero
    """
    if not ratios:
        raise EmptyRatiosError()

    weights = _weights(ratios)
    total = sum(weights)
    if total == 0:
        raise ZeroTotalRatioError()

    if amount < 0:
        return [-share for share in _allocate_non_negative(-amount, weights, total)]
    return _allocate_non_negative(amount, weights, total)


def _allocate_non_negative(amount: int, weights: List[int], total: int) -> List[int]:
    shares = []
    remainders = []
    for weight in weights:
        share, remainder = divmod(amount * weight, total)
        shares.append(share)
        remainders.append(remainder)

    leftover = amount - sum(shares)

    # sorted() is stable: equal remainders keep input order
    order = sorted(range(len(weights)), key=lambda i: remainders[i], reverse=True)
    for index in order[:leftover]:
        shares[index] += 1

    return shares


# ==============================================================================
# ALLOCATION BUILDER
# ==============================================================================

class Allocation:
    """
    Builder for allocations mixing fixed amounts and proportional splits.

        parts = (
            Allocation(Money.from_major("1000", EUR))
            .fixed(Money.from_major("300", EUR))
            .fixed(Money.from_major("200", EUR))
            .finalize(ratios=[1, 1])
        )
        # [300.00, 200.00, 250.00, 250.00]

    INVARIANT: sum(finalize()) == total (always)
    """

    def __init__(self, total: Money):
        self._total = total
        self._parts: List[Money] = []

    def fixed(self, amount: Money) -> Allocation:
        """Reserve a fixed amount."""
        if amount.currency.code != self._total.currency.code:
            raise CurrencyMismatchError(self._total.currency.code, amount.currency.code)
        self._parts.append(amount)
        return self

    def remainder(self) -> Money:
        """What is left after the fixed parts (may be negative)."""
        remaining = self._total
        for part in self._parts:
            remaining = remaining.subtract(part)
        return remaining

    def finalize(self, ratios: Optional[Sequence[DecimalLiteral]] = None) -> List[Money]:
        """
        Return the fixed parts followed by the remainder.

        With ratios, the remainder is split by allocate() and appended.
        Without, it is added to the last fixed part (or returned alone when
        nothing was fixed).
        """
        remainder = self.remainder()
        parts = list(self._parts)
        if ratios is not None:
            parts.extend(remainder.allocate(ratios))
        elif parts:
            parts[-1] = parts[-1].add(remainder)
        else:
            parts.append(remainder)
        return parts
