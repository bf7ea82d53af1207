"""Tests for per-share valuation models."""

import pytest

from finance_calc.core.errors import InvalidInputError, ValuationAssumptionError
from finance_calc.core.valuation import (
    ValuationEstimate,
    ValuationMethod,
    calculate_comparable_valuation,
    calculate_composite_fair_value,
    calculate_dcf,
    calculate_dividend_discount_model,
    calculate_multiple_valuation,
    calculate_pe_valuation,
)


class TestDCF:
    """Tests for the two-stage DCF."""

    def test_single_year_flat_growth(self) -> None:
        """Test a hand-computed one-year DCF."""
        result = calculate_dcf(1.0, 0.0, 10.0, 0.0, 1)
        # PV(CF1) = 1 / 1.1, TV = 1 / 0.1 = 10, PV(TV) = 10 / 1.1
        assert result.present_value_of_projections == pytest.approx(1 / 1.1)
        assert result.terminal_value == pytest.approx(10.0)
        assert result.total_value == pytest.approx(10.0)

    def test_projection_details(self) -> None:
        """Test projected cash flows grow and discount per year."""
        result = calculate_dcf(5.0, 10.0, 10.0, 2.5, 5)
        assert len(result.projections) == 5
        assert result.projections[0].cash_flow == pytest.approx(5.5)
        assert result.projections[-1].year == 5
        # Growth equals the discount rate, so every present value is 5.
        for projection in result.projections:
            assert projection.present_value == pytest.approx(5.0)
        assert result.total_value == pytest.approx(
            result.present_value_of_projections + result.present_value_of_terminal
        )

    @pytest.mark.parametrize("terminal_growth", [10.0, 12.0])
    def test_discount_must_exceed_terminal_growth(self, terminal_growth: float) -> None:
        """Test the r > g guard, including equality."""
        with pytest.raises(ValuationAssumptionError, match="must exceed"):
            calculate_dcf(5.0, 5.0, 10.0, terminal_growth, 5)

    def test_invalid_projection_years(self) -> None:
        """Test projection years must be positive."""
        with pytest.raises(InvalidInputError):
            calculate_dcf(5.0, 5.0, 10.0, 2.0, 0)


class TestOtherMethods:
    """Tests for DDM, multiples and comparables."""

    def test_gordon_growth(self) -> None:
        """Test D0 × (1 + g) / (r - g)."""
        assert calculate_dividend_discount_model(2.0, 5.0, 10.0) == pytest.approx(42.0)

    def test_ddm_guard(self) -> None:
        """Test DDM rejects growth at or above the discount rate."""
        with pytest.raises(ValueError):
            calculate_dividend_discount_model(2.0, 10.0, 10.0)

    def test_pe_valuation(self) -> None:
        """Test three-year forward EPS times target P/E."""
        assert calculate_pe_valuation(5.0, 10.0, 15) == pytest.approx(5 * 1.331 * 15)

    def test_multiple_valuation(self) -> None:
        """Test book or sales multiples."""
        assert calculate_multiple_valuation(20.0, 3.5) == pytest.approx(70.0)
        with pytest.raises(InvalidInputError):
            calculate_multiple_valuation(20.0, -1)

    def test_comparable_valuation(self) -> None:
        """Test mean comparable P/E applied to EPS."""
        assert calculate_comparable_valuation(2.0, [10, 20]) == pytest.approx(30.0)
        assert calculate_comparable_valuation(2.0, []) is None


class TestCompositeFairValue:
    """Tests for the composite fair value."""

    def test_ignores_inapplicable_methods(self) -> None:
        """Test None estimates are excluded, not averaged as zero."""
        estimates = [
            ValuationEstimate(ValuationMethod.DCF, 10.0),
            ValuationEstimate(ValuationMethod.DDM, None),
            ValuationEstimate(ValuationMethod.PE, 20.0),
        ]
        assert calculate_composite_fair_value(estimates) == pytest.approx(15.0)

    def test_no_applicable_method(self) -> None:
        """Test all-None estimates give None."""
        estimates = [ValuationEstimate(ValuationMethod.PB, None)]
        assert calculate_composite_fair_value(estimates) is None
        assert calculate_composite_fair_value([]) is None
