"""Tests for input parsing and date helpers."""

from datetime import date

import pytest

from finance_calc.core.errors import InvalidInputError
from finance_calc.utils import add_months, parse_amount, parse_percent, parse_returns


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("500000", 500000.0),
            ("$1,250.50", 1250.5),
            ("500k", 500000.0),
            ("1.2M", 1200000.0),
            (" €300 ", 300.0),
            (42, 42.0),
        ],
    )
    def test_valid_amounts(self, raw: str, expected: float) -> None:
        """Test formatted and shorthand amounts."""
        assert parse_amount(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "$", "12..5", "inf"])
    def test_invalid_amounts(self, raw: str) -> None:
        """Test non-numeric input raises."""
        with pytest.raises(InvalidInputError):
            parse_amount(raw)


class TestParsePercent:
    """Tests for parse_percent and parse_returns."""

    def test_percent_sign_is_optional(self) -> None:
        """Test with and without a trailing percent sign."""
        assert parse_percent("6.5%") == pytest.approx(6.5)
        assert parse_percent("6.5") == pytest.approx(6.5)
        assert parse_percent(7) == pytest.approx(7.0)

    def test_invalid_percent(self) -> None:
        """Test non-numeric percentages raise."""
        with pytest.raises(InvalidInputError, match="Invalid percentage"):
            parse_percent("six")

    def test_parse_returns(self) -> None:
        """Test comma-separated returns."""
        assert parse_returns("10, 12.5, -3") == [10.0, 12.5, -3.0]
        assert parse_returns("") == []
        with pytest.raises(InvalidInputError):
            parse_returns("10, x, 3")


class TestAddMonths:
    """Tests for add_months."""

    def test_clamps_to_month_end(self) -> None:
        """Test day clamping in short months."""
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_year_boundaries(self) -> None:
        """Test rolling forward and backward across years."""
        assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 15)
        assert add_months(date(2024, 1, 15), -1) == date(2023, 12, 15)
        assert add_months(date(2024, 1, 15), 24) == date(2026, 1, 15)
