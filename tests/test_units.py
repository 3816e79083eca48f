from decimal import Decimal

import pytest

from tokens.units import format_amount, from_base_units, to_base_units


class TestUnits:
    """Conversions between whole-token amounts and base units."""

    def test_to_base_units_scales_by_decimals(self):
        assert to_base_units(5, 18) == 5 * 10 ** 18
        assert to_base_units(5, 6) == 5_000_000
        assert to_base_units(5, 0) == 5

    def test_negative_decimals_rejected(self):
        with pytest.raises(ValueError):
            to_base_units(1, -1)

    def test_from_base_units_is_exact(self):
        """
        Large balances keep every digit.

        A float would round 123456789.123456789123456789 well before
        the last fractional digit.
        """
        value = 123456789_123456789123456789
        assert from_base_units(value, 18) == Decimal("123456789.123456789123456789")

    def test_from_base_units_smallest_unit(self):
        assert format_amount(from_base_units(1, 18)) == "0.000000000000000001"

    @pytest.mark.parametrize(
        "value,decimals,expected",
        [
            (1_500_000_000_000_000_000, 18, "1.5"),
            (1_000 * 10 ** 18, 18, "1000"),
            (0, 18, "0"),
            (42, 0, "42"),
            (1_230_000, 6, "1.23"),
        ]
    )
    def test_format_amount(self, value, decimals, expected):
        assert format_amount(from_base_units(value, decimals)) == expected

    def test_format_amount_never_uses_exponent(self):
        assert format_amount(Decimal("1E+3")) == "1000"

    @pytest.mark.parametrize("decimals", [0, 6, 18, 30])
    def test_round_trip(self, decimals):
        amount = 987654321987654321
        assert from_base_units(to_base_units(amount, decimals), decimals) == amount
