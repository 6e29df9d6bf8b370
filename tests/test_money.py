"""
test_money.py — Test suite for the Money value type

================================================================================
TEST LAYOUT
================================================================================

1. UNIT TESTS
   Deterministic tests for specific cases and edge cases.

2. PROPERTY-BASED TESTS (Hypothesis)
   Properties that must hold for ANY input. Hypothesis generates thousands
   of random cases looking for a counterexample.

3. INVARIANT TESTS
   The invariants declared in the code (immutability, exact sums) actually
   hold.

================================================================================
"""

from dataclasses import FrozenInstanceError
from fractions import Fraction

import pytest
from hypothesis import given, settings, HealthCheck
from hypothesis import strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from monetra import (
    EUR,
    GBP,
    JPY,
    KWD,
    USD,
    CurrencyMismatchError,
    CurrencyNotFoundError,
    CurrencyRegistry,
    DivisionByZeroError,
    InvalidFormatError,
    InvalidPrecisionError,
    Money,
    RoundingMode,
    RoundingRequiredError,
)


# ==============================================================================
# TEST HELPERS
# ==============================================================================

@st.composite
def money_strategy(draw, currency=None, min_value=-10_000_00, max_value=10_000_00):
    """Random Money for property testing."""
    if currency is None:
        currency = draw(st.sampled_from([EUR, USD, GBP, JPY, KWD]))
    minor = draw(st.integers(min_value=min_value, max_value=max_value))
    return Money.from_minor(minor, currency)


@pytest.fixture
def registry():
    return CurrencyRegistry.iso4217()


# ==============================================================================
# UNIT TESTS: Constructors
# ==============================================================================

class TestConstructors:

    def test_from_minor(self):
        m = Money.from_minor(1050, USD)
        assert m.minor == 1050
        assert m.currency == USD

    def test_from_cents_alias(self):
        assert Money.from_cents(1050, USD) == Money.from_minor(1050, USD)

    def test_from_minor_with_code(self, registry):
        m = Money.from_minor(1050, "EUR", registry=registry)
        assert m.currency is EUR

    def test_code_without_registry_raises(self):
        with pytest.raises(TypeError, match="registry"):
            Money.from_minor(1050, "EUR")

    def test_unknown_code_raises(self, registry):
        with pytest.raises(CurrencyNotFoundError):
            Money.from_minor(1, "XYZ", registry=registry)

    @pytest.mark.parametrize("minor", [10.5, 10.0, "1050", True, None])
    def test_minor_must_be_int(self, minor):
        with pytest.raises(TypeError):
            Money.from_minor(minor, USD)

    @pytest.mark.parametrize("text, minor", [
        ("10.50", 1050),
        ("10.5", 1050),
        ("10", 1000),
        ("-0.01", -1),
        ("0", 0),
    ])
    def test_from_major(self, text, minor):
        assert Money.from_major(text, USD).minor == minor

    def test_from_decimal_alias(self):
        assert Money.from_decimal("10.50", USD) == Money.from_major("10.50", USD)

    def test_from_major_respects_currency_decimals(self):
        assert Money.from_major("1000", JPY).minor == 1000
        assert Money.from_major("1.5", KWD).minor == 1500

    def test_from_major_too_precise(self):
        with pytest.raises(InvalidPrecisionError):
            Money.from_major("10.505", USD)
        with pytest.raises(InvalidPrecisionError):
            Money.from_major("1.5", JPY)

    @pytest.mark.parametrize("text", ["1e3", "1,000.00", "10.5.5", "$10", "-", ""])
    def test_from_major_bad_format(self, text):
        with pytest.raises(InvalidFormatError):
            Money.from_major(text, USD)

    def test_from_float_half_up(self):
        assert Money.from_float(99.995, USD, RoundingMode.HALF_UP).minor == 10000

    def test_from_float_floor(self):
        assert Money.from_float(99.999, USD, RoundingMode.FLOOR).minor == 9999

    def test_from_float_default_rounding(self):
        assert Money.from_float(0.1 + 0.2, USD).minor == 30

    def test_from_float_tiny_value(self):
        assert Money.from_float(1e-05, USD).minor == 0

    def test_zero(self):
        m = Money.zero(EUR)
        assert m.minor == 0
        assert m.is_zero()

    def test_min_max(self):
        a, b, c = (Money.from_minor(v, USD) for v in (300, -5, 120))
        assert Money.min(a, b, c) == b
        assert Money.max(a, b, c) == a

    def test_min_mixed_currencies(self):
        with pytest.raises(CurrencyMismatchError):
            Money.min(Money.from_minor(1, USD), Money.from_minor(1, EUR))

    def test_min_requires_values(self):
        with pytest.raises(ValueError):
            Money.min()


# ==============================================================================
# UNIT TESTS: Arithmetic
# ==============================================================================

class TestAddSubtract:

    def test_add(self):
        assert Money.from_minor(100, USD).add(Money.from_minor(50, USD)).minor == 150

    def test_subtract(self):
        assert (Money.from_minor(100, USD) - Money.from_minor(30, USD)).minor == 70

    def test_add_different_currency_raises(self):
        with pytest.raises(CurrencyMismatchError) as excinfo:
            Money.from_minor(100, USD) + Money.from_minor(100, EUR)

        assert excinfo.value.expected == "USD"
        assert excinfo.value.actual == "EUR"

    def test_currency_mismatch_is_type_error(self):
        with pytest.raises(TypeError):
            Money.from_minor(100, USD).subtract(Money.from_minor(100, EUR))

    def test_add_non_money_raises(self):
        with pytest.raises(TypeError):
            Money.from_minor(100, USD) + 100

    def test_sum_with_zero_start(self):
        parts = [Money.from_minor(v, EUR) for v in (1, 2, 3)]
        assert sum(parts, Money.zero(EUR)) == Money.from_minor(6, EUR)


class TestMultiply:

    def test_inexact_without_rounding_raises(self):
        with pytest.raises(RoundingRequiredError) as excinfo:
            Money.from_minor(100, USD).multiply(0.555)

        assert excinfo.value.operation == "multiply"
        assert excinfo.value.approximate_result == Fraction(111, 2)

    def test_half_up(self):
        assert Money.from_minor(100, USD).multiply(0.555, RoundingMode.HALF_UP).minor == 56

    def test_floor(self):
        assert Money.from_minor(100, USD).multiply(0.555, rounding=RoundingMode.FLOOR).minor == 55

    def test_exact_result_needs_no_rounding(self):
        assert Money.from_minor(100, USD).multiply("1.5").minor == 150
        assert Money.from_minor(100, USD).multiply(-2).minor == -200

    def test_operator(self):
        assert (Money.from_minor(1000, EUR) * 5).minor == 5000
        assert (3 * Money.from_minor(1000, EUR)).minor == 3000

    def test_operator_inexact_raises(self):
        with pytest.raises(RoundingRequiredError):
            Money.from_minor(1, EUR) * "0.5"

    def test_scientific_notation_rejected(self):
        with pytest.raises(InvalidFormatError):
            Money.from_minor(100, USD).multiply("1e5")

    def test_inexact_beyond_float_range_raises_rounding_required(self):
        with pytest.raises(RoundingRequiredError) as excinfo:
            Money.from_minor(10 ** 400 + 1, USD).multiply("0.5")

        assert excinfo.value.operation == "multiply"
        assert excinfo.value.approximate_result == Fraction(10 ** 400 + 1, 2)
        assert str(10 ** 400 + 1)[:20] in str(excinfo.value)

    def test_original_is_untouched(self):
        m = Money.from_minor(100, USD)
        m.multiply(3)
        assert m.minor == 100


class TestDivide:

    def test_exact(self):
        assert Money.from_minor(100, USD).divide(4).minor == 25
        assert Money.from_minor(100, USD).divide("0.5").minor == 200
        assert Money.from_minor(100, USD).divide("-2").minor == -50

    def test_inexact_without_rounding_raises(self):
        with pytest.raises(RoundingRequiredError) as excinfo:
            Money.from_minor(100, USD).divide(3)
        assert excinfo.value.operation == "divide"

    def test_with_rounding(self):
        assert Money.from_minor(100, USD).divide(3, RoundingMode.HALF_UP).minor == 33
        assert Money.from_minor(100, USD).divide(3, RoundingMode.CEIL).minor == 34
        assert Money.from_minor(-100, USD).divide(3, RoundingMode.FLOOR).minor == -34

    @pytest.mark.parametrize("divisor", [0, "0", "0.00", "-0.0"])
    def test_division_by_zero(self, divisor):
        with pytest.raises(DivisionByZeroError):
            Money.from_minor(100, USD).divide(divisor, RoundingMode.HALF_UP)

    def test_operator(self):
        assert (Money.from_minor(100, USD) / 4).minor == 25


class TestSignAndPercent:

    def test_abs_and_negate(self):
        m = Money.from_minor(-500, EUR)
        assert m.abs().minor == 500
        assert abs(m).minor == 500
        assert m.negate().minor == 500
        assert (-m).minor == 500

    def test_sign_predicates(self):
        assert Money.from_minor(1, EUR).is_positive()
        assert Money.from_minor(-1, EUR).is_negative()
        assert not Money.zero(EUR).is_positive()
        assert not Money.zero(EUR).is_negative()

    def test_percentage(self):
        assert Money.from_minor(10000, EUR).percentage(22).minor == 2200

    def test_percentage_rounds_with_default_half_even(self):
        # 999 * 12.5% = 124.875
        assert Money.from_minor(999, EUR).percentage("12.5").minor == 125
        assert Money.from_minor(999, EUR).percentage("12.5", RoundingMode.FLOOR).minor == 124

    def test_add_and_subtract_percent(self):
        m = Money.from_minor(10000, EUR)
        assert m.add_percent(22).minor == 12200
        assert m.subtract_percent(10).minor == 9000

    def test_clamp(self):
        low, high = Money.from_minor(50, USD), Money.from_minor(100, USD)
        assert Money.from_minor(150, USD).clamp(low, high) == high
        assert Money.from_minor(10, USD).clamp(low, high) == low
        assert Money.from_minor(75, USD).clamp(low, high).minor == 75

    def test_clamp_inverted_bounds(self):
        with pytest.raises(ValueError):
            Money.from_minor(75, USD).clamp(Money.from_minor(100, USD), Money.from_minor(50, USD))


# ==============================================================================
# UNIT TESTS: Allocation
# ==============================================================================

class TestMoneyAllocate:

    def test_allocate(self):
        parts = Money.from_minor(25000, USD).allocate([1, 1, 1])
        assert [p.minor for p in parts] == [8334, 8333, 8333]
        assert all(p.currency is USD for p in parts)

    def test_split(self):
        parts = Money.from_major("2026", EUR).split(12)

        assert len(parts) == 12
        assert sum(parts, Money.zero(EUR)) == Money.from_major("2026", EUR)

    @pytest.mark.parametrize("parts", [0, -1, 1.5])
    def test_split_invalid(self, parts):
        with pytest.raises(ValueError):
            Money.from_minor(100, EUR).split(parts)


# ==============================================================================
# UNIT TESTS: Comparison
# ==============================================================================

class TestComparison:

    def test_equal(self):
        assert Money.from_minor(100, EUR) == Money.from_minor(100, EUR)
        assert Money.from_minor(100, EUR) != Money.from_minor(99, EUR)

    def test_equals_across_currencies_is_false_not_error(self):
        assert not Money.from_minor(100, EUR).equals(Money.from_minor(100, USD))
        assert Money.from_minor(100, EUR) != Money.from_minor(100, USD)

    def test_ordering(self):
        small, big = Money.from_minor(50, EUR), Money.from_minor(100, EUR)
        assert small < big
        assert big > small
        assert small <= small
        assert big >= small
        assert small.less_than(big)
        assert big.greater_than_or_equal(big)
        assert small.less_than_or_equal(big)

    def test_compare(self):
        a, b = Money.from_minor(1, EUR), Money.from_minor(2, EUR)
        assert a.compare(b) == -1
        assert b.compare(a) == 1
        assert a.compare(a) == 0

    def test_ordering_across_currencies_raises(self):
        with pytest.raises(CurrencyMismatchError):
            Money.from_minor(100, EUR) < Money.from_minor(100, USD)
        with pytest.raises(CurrencyMismatchError):
            Money.from_minor(100, EUR).compare(Money.from_minor(100, USD))

    def test_hash_consistent_with_eq(self):
        assert len({Money.from_minor(1, EUR), Money.from_minor(1, EUR), Money.from_minor(1, USD)}) == 2


# ==============================================================================
# UNIT TESTS: Output and serialization
# ==============================================================================

class TestOutput:

    @pytest.mark.parametrize("minor, currency, text", [
        (123456, USD, "1234.56"),
        (-525, USD, "-5.25"),
        (-5, USD, "-0.05"),
        (1000, JPY, "1000"),
        (1500, KWD, "1.500"),
    ])
    def test_to_decimal_string(self, minor, currency, text):
        assert Money.from_minor(minor, currency).to_decimal_string() == text

    def test_str_and_repr(self):
        m = Money.from_minor(1234, USD)
        assert str(m) == "12.34 USD"
        assert repr(m) == "Money(minor=1234, currency='USD')"


class TestSerialization:

    def test_to_dict(self):
        assert Money.from_minor(12345, EUR).to_dict() == {
            "amount": "12345",
            "currency": "EUR",
            "precision": 2,
        }

    def test_from_dict(self, registry):
        m = Money.from_dict({"amount": "12345", "currency": "EUR", "precision": 2}, registry)
        assert m == Money.from_minor(12345, EUR)

    def test_from_dict_precision_mismatch(self, registry):
        with pytest.raises(InvalidPrecisionError):
            Money.from_dict({"amount": "1", "currency": "JPY", "precision": 2}, registry)

    def test_from_dict_unknown_currency(self, registry):
        with pytest.raises(CurrencyNotFoundError):
            Money.from_dict({"amount": "1", "currency": "XYZ", "precision": 2}, registry)

    @pytest.mark.parametrize("amount", [" 12 ", "1_000", "+5", "12.0", "", "١٢"])
    def test_from_dict_rejects_non_canonical_amount(self, registry, amount):
        with pytest.raises(InvalidFormatError):
            Money.from_dict({"amount": amount, "currency": "EUR", "precision": 2}, registry)

    def test_from_dict_negative_amount(self, registry):
        m = Money.from_dict({"amount": "-250", "currency": "EUR", "precision": 2}, registry)
        assert m.minor == -250

    def test_large_amount_round_trip(self, registry):
        m = Money.from_minor(10 ** 30, USD)
        assert Money.from_dict(m.to_dict(), registry) == m


# ==============================================================================
# INVARIANT TESTS
# ==============================================================================

class TestImmutability:

    def test_cannot_reassign_amount(self):
        m = Money.from_minor(100, EUR)
        with pytest.raises(FrozenInstanceError):
            m._minor = 200

    def test_operations_return_new_instances(self):
        m = Money.from_minor(100, EUR)
        for result in (m.add(m), m.negate(), m.multiply(2), m.abs()):
            assert result is not m
        assert m.minor == 100


# ==============================================================================
# PROPERTY-BASED TESTS (Hypothesis)
# ==============================================================================

class TestArithmeticProperties:

    @given(a=money_strategy(currency=EUR), b=money_strategy(currency=EUR))
    @settings(max_examples=500)
    def test_additive_inverse(self, a: Money, b: Money):
        """a + b - b == a"""
        assert a.add(b).subtract(b).equals(a)

    @given(a=money_strategy(currency=EUR), b=money_strategy(currency=EUR))
    @settings(max_examples=500)
    def test_addition_commutative(self, a: Money, b: Money):
        assert a + b == b + a

    @given(a=money_strategy(currency=EUR))
    @settings(max_examples=200)
    def test_add_negative_equals_zero(self, a: Money):
        assert (a + (-a)).is_zero()

    @given(
        money=money_strategy(),
        multiplier=st.decimals(min_value=-1000, max_value=1000, places=4, allow_nan=False),
    )
    @settings(max_examples=500)
    def test_multiply_floor_ceil_bracket(self, money: Money, multiplier):
        floor = money.multiply(multiplier, RoundingMode.FLOOR)
        ceil = money.multiply(multiplier, RoundingMode.CEIL)
        exact = money.minor * Fraction(multiplier)

        assert floor.minor <= exact <= ceil.minor


class TestAllocateProperties:

    @given(
        money=money_strategy(min_value=-1_000_000_00, max_value=1_000_000_00),
        ratios=st.lists(st.integers(min_value=0, max_value=1000), min_size=1, max_size=20)
        .filter(lambda r: sum(r) > 0),
    )
    @settings(max_examples=500, suppress_health_check=[HealthCheck.too_slow])
    def test_parts_sum_to_original(self, money: Money, ratios: list):
        parts = money.allocate(ratios)
        assert sum(parts, Money.zero(money.currency)) == money


class TestSerializationProperties:

    @given(money=money_strategy())
    @settings(max_examples=500)
    def test_round_trip(self, money: Money):
        registry = CurrencyRegistry.iso4217()
        assert Money.from_dict(money.to_dict(), registry) == money


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
