"""Tests for payment and annuity math."""

import pytest

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import (
    calculate_cagr,
    calculate_cap_rate,
    calculate_compound_interest,
    calculate_dti,
    calculate_effective_annual_rate,
    calculate_future_value,
    calculate_grm,
    calculate_ltv,
    calculate_monthly_payment,
    calculate_present_value,
)


class TestMonthlyPayment:
    """Tests for calculate_monthly_payment."""

    def test_standard_mortgage(self) -> None:
        """Test 300k at 6.5 % over 30 years."""
        payment = calculate_monthly_payment(300000, 6.5, 30)
        assert payment == pytest.approx(1896.20, abs=0.01)

    def test_zero_rate_is_straight_line(self) -> None:
        """Test zero interest divides principal evenly."""
        assert calculate_monthly_payment(120000, 0, 10) == 120000 / 120

    def test_tiny_rate_approaches_straight_line(self) -> None:
        """Test a rate too small to move 1 + r still yields P / n."""
        payment = calculate_monthly_payment(120000, 1e-14, 10)
        assert payment == pytest.approx(1000.0)

    def test_overflowing_growth_raises(self) -> None:
        """Test (1 + r)^n beyond float range raises a calculation error."""
        with pytest.raises(InvalidInputError, match="Unable to calculate payment"):
            calculate_monthly_payment(100000, 100, 1000)

    def test_non_finite_payment_raises(self) -> None:
        """Test a payment that overflows to infinity raises."""
        with pytest.raises(InvalidInputError, match="Calculated payment is invalid"):
            calculate_monthly_payment(1e308, 100, 30)

    def test_higher_rate_means_higher_payment(self) -> None:
        """Test payment increases with the rate."""
        low = calculate_monthly_payment(200000, 4.0, 30)
        high = calculate_monthly_payment(200000, 7.0, 30)
        assert high > low

    @pytest.mark.parametrize(
        "principal, rate, term",
        [(0, 5, 30), (-1000, 5, 30), (100000, 5, 0)],
    )
    def test_non_positive_principal_or_term_raises(
        self, principal: float, rate: float, term: float
    ) -> None:
        """Test invalid principal or term raises."""
        with pytest.raises(InvalidInputError, match="must be positive"):
            calculate_monthly_payment(principal, rate, term)

    @pytest.mark.parametrize("rate", [-0.5, 100.5])
    def test_rate_out_of_range_raises(self, rate: float) -> None:
        """Test rates outside [0, 100] raise."""
        with pytest.raises(ValueError, match="Interest rate must be between"):
            calculate_monthly_payment(100000, rate, 30)


class TestGrowthFormulas:
    """Tests for future value, present value, CAGR and effective rates."""

    def test_future_value_zero_rate(self) -> None:
        """Test zero rate sums the contributions."""
        assert calculate_future_value(1000, 100, 0, 12) == pytest.approx(2200.0)

    def test_future_value_with_growth(self) -> None:
        """Test lump sum plus annuity growth."""
        # 100 × (1.01² - 1) / 0.01 = 201
        assert calculate_future_value(0, 100, 1, 2) == pytest.approx(201.0)
        assert calculate_future_value(1000, 0, 10, 2) == pytest.approx(1210.0)

    def test_future_value_tiny_rate_keeps_contributions(self) -> None:
        """Test contributions survive a rate too small to move 1 + r."""
        assert calculate_future_value(0, 100, 1e-15, 12) == pytest.approx(1200.0)
        assert calculate_future_value(500, 100, 1e-15, 12) == pytest.approx(1700.0)

    def test_future_value_rate_at_minus_100_raises(self) -> None:
        """Test a total-loss periodic rate raises."""
        with pytest.raises(InvalidInputError, match="Periodic rate"):
            calculate_future_value(1000, 0, -100, 2)

    def test_future_value_negative_periods_raises(self) -> None:
        """Test negative period count raises."""
        with pytest.raises(InvalidInputError):
            calculate_future_value(1000, 0, 5, -1)

    def test_present_value(self) -> None:
        """Test discounting a single amount."""
        assert calculate_present_value(110, 10, 1) == pytest.approx(100.0)

    def test_cagr(self) -> None:
        """Test CAGR in percent."""
        assert calculate_cagr(100, 121, 2) == pytest.approx(10.0)
        assert calculate_cagr(100, 100, 5) == pytest.approx(0.0)

    def test_cagr_invalid_start_raises(self) -> None:
        """Test CAGR requires a positive start value."""
        with pytest.raises(InvalidInputError, match="start_value"):
            calculate_cagr(0, 100, 2)

    def test_effective_annual_rate(self) -> None:
        """Test monthly compounding of 12 % nominal."""
        assert calculate_effective_annual_rate(12, 12) == pytest.approx(12.6825, rel=1e-4)
        assert calculate_effective_annual_rate(10, 1) == pytest.approx(10.0)

    def test_compound_interest(self) -> None:
        """Test lump sum compounding."""
        assert calculate_compound_interest(1000, 10, 1, 2) == pytest.approx(1210.0)


class TestRatios:
    """Tests for percentage ratios."""

    def test_ratio_values(self) -> None:
        """Test cap rate, GRM, DTI and LTV."""
        assert calculate_cap_rate(10000, 100000) == pytest.approx(10.0)
        assert calculate_grm(120000, 1000) == pytest.approx(10.0)
        assert calculate_dti(1500, 5000) == pytest.approx(30.0)
        assert calculate_ltv(240000, 300000) == pytest.approx(80.0)

    def test_zero_denominator_raises(self) -> None:
        """Test ratios reject non-positive denominators."""
        with pytest.raises(InvalidInputError, match="property_value"):
            calculate_cap_rate(10000, 0)
        with pytest.raises(InvalidInputError, match="monthly_rent"):
            calculate_grm(100000, 0)
