"""Tests for regression and portfolio risk metrics."""

import numpy as np
import pytest

from finance_calc.core.errors import DegenerateInputError, InvalidInputError
from finance_calc.core.risk import (
    calculate_beta,
    calculate_capm_expected_return,
    calculate_correlation,
    calculate_portfolio_return,
    calculate_portfolio_volatility,
    calculate_r_squared,
    calculate_risk_metrics,
    calculate_sharpe_ratio,
    calculate_value_at_risk,
    generate_efficient_frontier,
    generate_security_market_line,
    normalize_weights,
)

ASSET = (10, 12, 8, 15, 9)
MARKET = (8, 10, 6, 12, 7)


class TestRegression:
    """Tests for beta, correlation and R²."""

    def test_self_beta_is_one(self) -> None:
        """Test a series regressed on itself."""
        assert calculate_beta(MARKET, MARKET) == pytest.approx(1.0)

    def test_scaled_series_beta(self) -> None:
        """Test beta of a levered copy of the market."""
        levered = [2 * r for r in MARKET]
        assert calculate_beta(levered, MARKET) == pytest.approx(2.0)

    def test_sample_series(self) -> None:
        """Test the sample asset is aggressive and highly correlated."""
        # Cov = 26.6 / 4, Var(market) = 23.2 / 4
        assert calculate_beta(ASSET, MARKET) == pytest.approx(26.6 / 23.2)
        assert calculate_beta(ASSET, MARKET) > 1
        assert calculate_correlation(ASSET, MARKET) > 0.8
        assert calculate_r_squared(ASSET, MARKET) == pytest.approx(
            calculate_correlation(ASSET, MARKET) ** 2
        )

    def test_inverse_correlation(self) -> None:
        """Test a mirrored series has correlation -1."""
        mirrored = [-r for r in MARKET]
        assert calculate_correlation(mirrored, MARKET) == pytest.approx(-1.0)

    def test_zero_market_variance(self) -> None:
        """Test a flat market yields beta and correlation 0."""
        assert calculate_beta(ASSET[:3], (5, 5, 5)) == 0.0
        assert calculate_correlation(ASSET[:3], (5, 5, 5)) == 0.0

    def test_length_mismatch_raises(self) -> None:
        """Test unequal series raise."""
        with pytest.raises(InvalidInputError, match="equal length"):
            calculate_beta(ASSET, MARKET[:4])

    def test_too_few_points_raises(self) -> None:
        """Test fewer than three points raise."""
        with pytest.raises(InvalidInputError, match="At least 3"):
            calculate_beta((1, 2), (3, 4))


class TestPortfolioRisk:
    """Tests for portfolio return, volatility and derived metrics."""

    def test_two_asset_volatility(self) -> None:
        """Test the closed-form two-asset volatility."""
        vol = calculate_portfolio_volatility((0.6, 0.4), (16, 5), 0.0)
        assert vol == pytest.approx(np.sqrt(9.6**2 + 2.0**2))

    def test_perfect_correlation_is_weighted_average(self) -> None:
        """Test ρ = 1 gives the weighted average volatility."""
        vol = calculate_portfolio_volatility((0.6, 0.4), (16, 5), 1.0)
        assert vol == pytest.approx(11.6)

    def test_matrix_matches_scalar(self) -> None:
        """Test the matrix form agrees with the two-asset formula."""
        scalar = calculate_portfolio_volatility((0.7, 0.3), (18, 6), 0.25)
        matrix = calculate_portfolio_volatility(
            (0.7, 0.3), (18, 6), [[1.0, 0.25], [0.25, 1.0]]
        )
        assert matrix == pytest.approx(scalar)

    def test_three_asset_volatility(self) -> None:
        """Test uncorrelated three-asset volatility."""
        vol = calculate_portfolio_volatility((0.5, 0.3, 0.2), (16, 5, 1), np.eye(3))
        assert vol == pytest.approx(np.sqrt(8.0**2 + 1.5**2 + 0.2**2))

    def test_weights_must_sum_to_one(self) -> None:
        """Test unnormalized weights raise."""
        with pytest.raises(InvalidInputError, match="sum to 1"):
            calculate_portfolio_return((0.6, 0.6), (10, 4))

    def test_scalar_correlation_requires_two_assets(self) -> None:
        """Test a scalar correlation with three assets raises."""
        with pytest.raises(InvalidInputError, match="two assets"):
            calculate_portfolio_volatility((0.5, 0.3, 0.2), (16, 5, 1), 0.2)

    def test_sharpe_ratio(self) -> None:
        """Test Sharpe ratio and its degenerate case."""
        assert calculate_sharpe_ratio(8, 10, 2) == pytest.approx(0.6)
        with pytest.raises(DegenerateInputError):
            calculate_sharpe_ratio(8, 0, 2)

    def test_value_at_risk(self) -> None:
        """Test 95 % parametric VaR uses z ≈ 1.645."""
        assert calculate_value_at_risk(8, 10) == pytest.approx(8 - 16.4485, abs=1e-3)

    def test_risk_metrics(self) -> None:
        """Test the combined metrics record."""
        metrics = calculate_risk_metrics((0.6, 0.4), (10, 4), (16, 5), 0.0)
        assert metrics.expected_return == pytest.approx(7.6)
        assert metrics.max_drawdown == pytest.approx(2.5 * metrics.volatility)
        assert metrics.sharpe_ratio == pytest.approx((7.6 - 2.0) / metrics.volatility)

    def test_normalize_weights(self) -> None:
        """Test raw allocations scale to fractions."""
        np.testing.assert_array_almost_equal(
            normalize_weights([60, 30, 10]), [0.6, 0.3, 0.1]
        )
        with pytest.raises(InvalidInputError, match="sum to zero"):
            normalize_weights([0, 0])


class TestFrontierAndSML:
    """Tests for the efficient frontier and security market line."""

    def test_frontier_points(self) -> None:
        """Test a 5 % step produces 21 ordered points."""
        frontier = generate_efficient_frontier(10, 4, 16, 5, 0.2)
        assert len(frontier) == 21
        assert frontier[0].weight_stock == 0.0
        assert frontier[-1].weight_stock == 1.0
        assert frontier[-1].weight_bond == 0.0
        returns = [p.expected_return for p in frontier]
        assert all(b > a for a, b in zip(returns, returns[1:]))
        assert frontier[0].risk == pytest.approx(5.0)
        assert frontier[-1].risk == pytest.approx(16.0)

    def test_frontier_uneven_step_includes_all_stock(self) -> None:
        """Test a step not dividing 100 still ends at 100 % stock."""
        frontier = generate_efficient_frontier(10, 4, 16, 5, 0.0, step_percent=30)
        assert [p.weight_stock for p in frontier] == pytest.approx([0, 0.3, 0.6, 0.9, 1.0])

    def test_capm_expected_return(self) -> None:
        """Test CAPM formula."""
        assert calculate_capm_expected_return(2, 1.5, 10) == pytest.approx(14.0)

    def test_security_market_line(self) -> None:
        """Test default beta range of the SML."""
        sml = generate_security_market_line(2, 10)
        assert len(sml) == 31
        assert sml[0].beta == pytest.approx(-0.5)
        assert sml[-1].beta == pytest.approx(2.5)
        assert sml[15].expected_return == pytest.approx(10.0)
