"""
Unit tests for safe_formatters module.

Tests defensive formatting for None, NaN, inf, and edge cases.
"""

from decimal import Decimal

import pytest

from fiscalmetrics.domain.services.safe_formatters import (
    format_basis_points,
    format_currency_value,
    format_percentage,
    format_ratio,
    format_shares_millions,
    is_valid_number,
    resolve_currency_symbol,
    to_finite_float,
)


class TestIsValidNumber:
    """Tests for is_valid_number function."""

    def test_valid_numbers(self):
        """Test ints, floats and Decimals are valid."""
        assert is_valid_number(1)
        assert is_valid_number(-2.5)
        assert is_valid_number(Decimal("3.1"))

    @pytest.mark.parametrize("value", [None, float("nan"), float("inf"), float("-inf"), True, "abc"])
    def test_invalid_values(self, value):
        """Test missing, non-finite, boolean and text values are invalid."""
        assert not is_valid_number(value)


class TestToFiniteFloat:
    """Tests for to_finite_float function."""

    def test_decimal(self):
        """Test Decimal converts to float."""
        assert to_finite_float(Decimal("1.5")) == 1.5

    def test_decimal_nan(self):
        """Test a Decimal NaN is rejected."""
        assert to_finite_float(Decimal("NaN")) is None

    def test_none(self):
        """Test None passes through as None."""
        assert to_finite_float(None) is None


class TestFormatCurrencyValue:
    """Tests for format_currency_value function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (1_500_000_000.0, "$1.50B"),
            (950_000.0, "$950.00K"),
            (2_340_000_000_000.0, "$2.34T"),
            (12_500_000.0, "$12.50M"),
            (999.5, "$999.50"),
            (0, "$0.00"),
        ],
    )
    def test_scaling(self, value, expected):
        """Test T/B/M/K suffix selection."""
        assert format_currency_value(value, "$") == expected

    def test_negative_value(self):
        """Test the sign stays on the scaled number after the symbol."""
        assert format_currency_value(-2_500_000.0, "$") == "$-2.50M"
        assert format_currency_value(-1_500_000_000.0, "€") == "€-1.50B"
        assert format_currency_value(-12.5, "$") == "$-12.50"

    def test_other_symbol(self):
        """Test a non-dollar symbol."""
        assert format_currency_value(1_500_000_000.0, "₹") == "₹1.50B"

    @pytest.mark.parametrize("value", [None, float("nan"), float("inf")])
    def test_missing(self, value):
        """Test missing values return the fallback."""
        assert format_currency_value(value) == "N/A"

    def test_custom_fallback(self):
        """Test custom fallback string."""
        assert format_currency_value(None, fallback="--") == "--"


class TestFormatPercentage:
    """Tests for format_percentage function."""

    def test_two_decimals(self):
        """Test the default precision."""
        assert format_percentage(40.0) == "40.00%"
        assert format_percentage(-3.456) == "-3.46%"

    def test_custom_decimals(self):
        """Test a custom precision."""
        assert format_percentage(12.345, decimals=1) == "12.3%"

    def test_nan(self):
        """Test NaN never renders as text."""
        assert format_percentage(float("nan")) == "N/A"


class TestOtherFormats:
    """Tests for ratio, basis point and share formats."""

    def test_ratio(self):
        """Test multiples render with an x suffix."""
        assert format_ratio(30.0) == "30.00x"
        assert format_ratio(None) == "N/A"

    def test_basis_points(self):
        """Test basis points render as integers."""
        assert format_basis_points(250.4) == "250 bps"
        assert format_basis_points(-75.0) == "-75 bps"
        assert format_basis_points(float("inf")) == "N/A"

    def test_shares_millions(self):
        """Test share counts render in millions."""
        assert format_shares_millions(15_550_000) == "15.55M"
        assert format_shares_millions(None) == "N/A"


class TestResolveCurrencySymbol:
    """Tests for resolve_currency_symbol function."""

    def test_known_codes(self):
        """Test known codes map to symbols, case-insensitively."""
        assert resolve_currency_symbol("USD") == "$"
        assert resolve_currency_symbol("eur") == "€"
        assert resolve_currency_symbol("INR") == "₹"

    def test_missing_defaults_to_dollar(self):
        """Test a missing currency defaults to USD."""
        assert resolve_currency_symbol(None) == "$"
        assert resolve_currency_symbol("  ") == "$"

    def test_unknown_code_passes_through(self):
        """Test unknown codes are shown as-is."""
        assert resolve_currency_symbol("CHF") == "CHF"

    def test_custom_table(self):
        """Test a caller-supplied symbol table."""
        assert resolve_currency_symbol("CHF", {"CHF": "Fr."}) == "Fr."
