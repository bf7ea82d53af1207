"""Regression and portfolio risk metrics.

Returns and volatilities are percentages, weights are fractions. Sample
statistics (denominator n - 1) are used throughout.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy import stats

from finance_calc.core.errors import DegenerateInputError, InvalidInputError

MIN_REGRESSION_POINTS = 3
WEIGHT_TOLERANCE = 1e-6

# Rough drawdown estimate as a multiple of volatility.
DRAWDOWN_VOLATILITY_MULTIPLE = 2.5


@dataclass(frozen=True)
class RiskMetrics:
    """Risk and return summary of a portfolio, all in percent except ratios."""

    expected_return: float
    volatility: float
    sharpe_ratio: float
    value_at_risk: float
    max_drawdown: float
    risk_adjusted_return: float


@dataclass(frozen=True)
class FrontierPoint:
    """One stock/bond mix on the efficient frontier."""

    weight_stock: float
    risk: float
    expected_return: float

    @property
    def weight_bond(self) -> float:
        return 1.0 - self.weight_stock


@dataclass(frozen=True)
class SecurityMarketLinePoint:
    beta: float
    expected_return: float


def _paired_returns(
    asset_returns: Sequence[float],
    market_returns: Sequence[float],
) -> tuple[np.ndarray, np.ndarray]:
    asset = np.asarray(asset_returns, dtype=np.float64)
    market = np.asarray(market_returns, dtype=np.float64)

    if asset.shape != market.shape or asset.ndim != 1:
        raise InvalidInputError(
            f"Return series must have equal length, got {asset.size} and {market.size}"
        )
    if asset.size < MIN_REGRESSION_POINTS:
        raise InvalidInputError(
            f"At least {MIN_REGRESSION_POINTS} data points are required, "
            f"got {asset.size}"
        )
    return asset, market


def calculate_beta(
    asset_returns: Sequence[float],
    market_returns: Sequence[float],
) -> float:
    """
    Calculate beta = Cov(asset, market) / Var(market).

    Args:
        asset_returns: Periodic asset returns in percent.
        market_returns: Market returns for the same periods.

    Returns:
        Beta. Returns 0.0 when the market series has zero variance.

    Raises:
        InvalidInputError: If the series differ in length or have fewer than
            three points.
    """
    asset, market = _paired_returns(asset_returns, market_returns)
    covariance = np.cov(asset, market, ddof=1)
    market_variance = covariance[1, 1]
    if market_variance == 0:
        return 0.0
    return float(covariance[0, 1] / market_variance)


def calculate_correlation(
    asset_returns: Sequence[float],
    market_returns: Sequence[float],
) -> float:
    """
    Pearson correlation of two return series.

    Returns 0.0 when either series is constant.
    """
    asset, market = _paired_returns(asset_returns, market_returns)
    asset_std = np.std(asset, ddof=1)
    market_std = np.std(market, ddof=1)
    if asset_std == 0 or market_std == 0:
        return 0.0
    covariance = np.cov(asset, market, ddof=1)[0, 1]
    return float(covariance / (asset_std * market_std))


def calculate_r_squared(
    asset_returns: Sequence[float],
    market_returns: Sequence[float],
) -> float:
    """Coefficient of determination (correlation squared)."""
    return calculate_correlation(asset_returns, market_returns) ** 2


def normalize_weights(allocations: Sequence[float]) -> np.ndarray:
    """
    Scale raw allocations (e.g. percentages) into weights summing to 1.

    Raises:
        InvalidInputError: If any allocation is negative or all are zero.
    """
    values = np.asarray(allocations, dtype=np.float64)
    if np.any(values < 0):
        raise InvalidInputError("Allocations must be non-negative")
    total = values.sum()
    if total == 0:
        raise InvalidInputError("Allocations sum to zero")
    return values / total


def _check_weights(weights: Sequence[float], n_assets: int) -> np.ndarray:
    w = np.asarray(weights, dtype=np.float64)
    if w.shape != (n_assets,):
        raise InvalidInputError(
            f"Expected {n_assets} weights, got {w.size}"
        )
    if abs(w.sum() - 1.0) > WEIGHT_TOLERANCE:
        raise InvalidInputError(f"Weights must sum to 1, got {w.sum():.6f}")
    return w


def calculate_portfolio_return(
    weights: Sequence[float],
    returns: Sequence[float],
) -> float:
    """Weighted average of asset expected returns."""
    r = np.asarray(returns, dtype=np.float64)
    w = _check_weights(weights, r.size)
    return float(w @ r)


def calculate_portfolio_volatility(
    weights: Sequence[float],
    volatilities: Sequence[float],
    correlation: float | Sequence[Sequence[float]],
) -> float:
    """
    Calculate portfolio standard deviation.

    For two assets with a scalar correlation ρ:
    σp = sqrt((w1·σ1)² + (w2·σ2)² + 2·w1·w2·σ1·σ2·ρ)

    For N assets pass an N×N correlation matrix; the result is
    sqrt(wᵀ Σ w) with Σ = diag(σ) · ρ · diag(σ).

    Args:
        weights: Asset weights (fractions summing to 1).
        volatilities: Asset standard deviations in percent.
        correlation: Scalar (two assets only) or correlation matrix.

    Returns:
        Portfolio volatility in the same unit as ``volatilities``.
    """
    sigma = np.asarray(volatilities, dtype=np.float64)
    w = _check_weights(weights, sigma.size)
    if np.any(sigma < 0):
        raise InvalidInputError("Volatilities must be non-negative")

    if np.isscalar(correlation):
        if sigma.size != 2:
            raise InvalidInputError(
                "A scalar correlation is only defined for two assets"
            )
        rho = float(correlation)
        if not -1.0 <= rho <= 1.0:
            raise InvalidInputError(f"Correlation must be in [-1, 1], got {rho}")
        variance = (
            (w[0] * sigma[0]) ** 2
            + (w[1] * sigma[1]) ** 2
            + 2 * w[0] * w[1] * sigma[0] * sigma[1] * rho
        )
    else:
        rho_matrix = np.asarray(correlation, dtype=np.float64)
        if rho_matrix.shape != (sigma.size, sigma.size):
            raise InvalidInputError(
                f"Correlation matrix must be {sigma.size}x{sigma.size}, "
                f"got {rho_matrix.shape}"
            )
        covariance = np.outer(sigma, sigma) * rho_matrix
        variance = float(w @ covariance @ w)

    # Rounding can push a zero variance slightly negative.
    return float(np.sqrt(max(variance, 0.0)))


def calculate_sharpe_ratio(
    expected_return: float,
    volatility: float,
    risk_free_rate: float,
) -> float:
    """
    Sharpe ratio = (expected_return - risk_free_rate) / volatility.

    Raises:
        DegenerateInputError: If volatility is not positive.
    """
    if volatility <= 0:
        raise DegenerateInputError(
            f"Sharpe ratio is undefined for volatility {volatility}"
        )
    return (expected_return - risk_free_rate) / volatility


def calculate_value_at_risk(
    expected_return: float,
    volatility: float,
    confidence: float = 0.95,
) -> float:
    """
    Parametric (normal) value at risk over one period, in percent.

    VaR = μ - z·σ where z is the normal quantile at ``confidence``
    (1.645 at 95 %). A negative value is a loss.
    """
    if not 0 < confidence < 1:
        raise InvalidInputError(f"confidence must be in (0, 1), got {confidence}")
    z = stats.norm.ppf(confidence)
    return float(expected_return - z * volatility)


def calculate_risk_metrics(
    weights: Sequence[float],
    returns: Sequence[float],
    volatilities: Sequence[float],
    correlation: float | Sequence[Sequence[float]],
    risk_free_rate: float = 2.0,
    confidence: float = 0.95,
) -> RiskMetrics:
    """
    Expected return, volatility, Sharpe ratio and VaR of a portfolio.

    Args:
        weights: Asset weights summing to 1.
        returns: Expected asset returns in percent.
        volatilities: Asset volatilities in percent.
        correlation: Scalar (two assets) or correlation matrix.
        risk_free_rate: Risk-free rate in percent.
        confidence: VaR confidence level.

    Returns:
        RiskMetrics.
    """
    expected_return = calculate_portfolio_return(weights, returns)
    volatility = calculate_portfolio_volatility(weights, volatilities, correlation)
    return RiskMetrics(
        expected_return=expected_return,
        volatility=volatility,
        sharpe_ratio=calculate_sharpe_ratio(expected_return, volatility, risk_free_rate),
        value_at_risk=calculate_value_at_risk(expected_return, volatility, confidence),
        max_drawdown=volatility * DRAWDOWN_VOLATILITY_MULTIPLE,
        risk_adjusted_return=expected_return / volatility,
    )


def generate_efficient_frontier(
    stock_return: float,
    bond_return: float,
    stock_vol: float,
    bond_vol: float,
    correlation: float,
    step_percent: float = 5.0,
) -> list[FrontierPoint]:
    """
    Sweep the stock weight from 0 to 1 and compute risk/return at each step.

    Points are ordered by increasing stock weight. If ``step_percent`` does
    not divide 100 the final 100 % stock point is still included.

    Args:
        stock_return: Expected stock return in percent.
        bond_return: Expected bond return in percent.
        stock_vol: Stock volatility in percent.
        bond_vol: Bond volatility in percent.
        correlation: Stock/bond correlation.
        step_percent: Weight increment in percentage points.

    Returns:
        List of FrontierPoint.
    """
    if not 0 < step_percent <= 100:
        raise InvalidInputError(f"step_percent must be in (0, 100], got {step_percent}")

    # Integer step counts keep the weights free of accumulated drift.
    n_steps = int(np.floor(100 / step_percent + 1e-9))
    weights = [i * step_percent / 100 for i in range(n_steps + 1)]
    if weights[-1] < 1.0 - 1e-9:
        weights.append(1.0)
    else:
        weights[-1] = 1.0

    points = []
    for weight_stock in weights:
        mix = (weight_stock, 1.0 - weight_stock)
        points.append(
            FrontierPoint(
                weight_stock=weight_stock,
                risk=calculate_portfolio_volatility(mix, (stock_vol, bond_vol), correlation),
                expected_return=calculate_portfolio_return(mix, (stock_return, bond_return)),
            )
        )
    return points


def calculate_capm_expected_return(
    risk_free_rate: float,
    beta: float,
    market_return: float,
) -> float:
    """CAPM: E[R] = Rf + β (Rm - Rf), all in percent."""
    return risk_free_rate + beta * (market_return - risk_free_rate)


def generate_security_market_line(
    risk_free_rate: float,
    market_return: float,
    beta_min: float = -0.5,
    beta_max: float = 2.5,
    step: float = 0.1,
) -> list[SecurityMarketLinePoint]:
    """Expected return along the security market line for a range of betas."""
    if step <= 0 or beta_max < beta_min:
        raise InvalidInputError("Invalid beta range for the security market line")

    n_points = int(np.floor((beta_max - beta_min) / step + 1e-9)) + 1
    betas = beta_min + step * np.arange(n_points)
    return [
        SecurityMarketLinePoint(
            beta=float(beta),
            expected_return=calculate_capm_expected_return(
                risk_free_rate, float(beta), market_return
            ),
        )
        for beta in betas
    ]
