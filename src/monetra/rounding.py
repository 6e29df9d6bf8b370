"""
rounding.py — Rounding modes and exact integer division

divide_with_rounding(n, d, mode) returns the integer nearest to the exact
fraction n/d according to mode. Everything is integer arithmetic: there is no
intermediate float, so ties are detected exactly.
"""

from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, Union

from .errors import DivisionByZeroError, UnsupportedRoundingModeError


# ==============================================================================
# ROUNDING MODES
# ==============================================================================

class RoundingMode(Enum):
    """
    Rounding strategies.

    - FLOOR: towards negative infinity
    - CEIL: towards positive infinity
    - TRUNCATE: towards zero (discard the remainder)
    - HALF_UP: nearest, ties away from zero (commercial rounding)
    - HALF_DOWN: nearest, ties towards zero
    - HALF_EVEN: nearest, ties to the even neighbour (banker's rounding)

    Regulation often mandates one of these; the library never picks one for
    you unless an operation documents a default.
    """
    FLOOR = "floor"
    CEIL = "ceil"
    HALF_UP = "half_up"
    HALF_DOWN = "half_down"
    HALF_EVEN = "half_even"
    TRUNCATE = "truncate"

    @classmethod
    def parse(cls, value: Union[RoundingMode, str]) -> RoundingMode:
        """Accept a member, its name or its value ("HALF_UP", "half_up")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
        raise UnsupportedRoundingModeError(value)


# Used by operations that document a default rounding (percentages, conversion)
DEFAULT_ROUNDING = RoundingMode.HALF_EVEN


# ==============================================================================
# ENGINE
# ==============================================================================

# (quotient, sign, is_half, is_more_than_half) -> rounded quotient
_Strategy = Callable[[int, int, bool, bool], int]


def _floor(q: int, sign: int, is_half: bool, more: bool) -> int:
    return q if sign > 0 else q - 1


def _ceil(q: int, sign: int, is_half: bool, more: bool) -> int:
    return q + 1 if sign > 0 else q


def _truncate(q: int, sign: int, is_half: bool, more: bool) -> int:
    return q


def _half_up(q: int, sign: int, is_half: bool, more: bool) -> int:
    return q + sign if more or is_half else q


def _half_down(q: int, sign: int, is_half: bool, more: bool) -> int:
    return q + sign if more else q


def _half_even(q: int, sign: int, is_half: bool, more: bool) -> int:
    if more:
        return q + sign
    # q is the candidate closer to zero; the other one is q + sign
    if is_half and q % 2 != 0:
        return q + sign
    return q


_STRATEGIES: Dict[RoundingMode, _Strategy] = {
    RoundingMode.FLOOR: _floor,
    RoundingMode.CEIL: _ceil,
    RoundingMode.TRUNCATE: _truncate,
    RoundingMode.HALF_UP: _half_up,
    RoundingMode.HALF_DOWN: _half_down,
    RoundingMode.HALF_EVEN: _half_even,
}


def divide_with_rounding(numerator: int, denominator: int, mode: RoundingMode) -> int:
    """
    Divide two integers and round the exact quotient with mode.

    Raises:
        DivisionByZeroError: denominator == 0
        UnsupportedRoundingModeError: mode is not a RoundingMode
    """
    if denominator == 0:
        raise DivisionByZeroError()

    sign = (1 if numerator >= 0 else -1) * (1 if denominator >= 0 else -1)
    abs_denominator = abs(denominator)

    # Python's // floors; truncate towards zero instead
    quotient = sign * (abs(numerator) // abs_denominator)
    remainder = numerator - quotient * denominator

    if remainder == 0:
        return quotient

    strategy = _STRATEGIES.get(mode) if isinstance(mode, RoundingMode) else None
    if strategy is None:
        raise UnsupportedRoundingModeError(mode)

    abs_remainder = abs(remainder)
    is_half = abs_remainder * 2 == abs_denominator
    is_more_than_half = abs_remainder * 2 > abs_denominator

    return strategy(quotient, sign, is_half, is_more_than_half)
