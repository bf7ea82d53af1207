"""Per-share valuation models and their composite.

Growth and discount rates are percentages.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

import numpy as np

from finance_calc.core.errors import InvalidInputError, ValuationAssumptionError


class ValuationMethod(str, Enum):
    DCF = "dcf"
    PE = "pe"
    DDM = "ddm"
    PB = "pb"
    PS = "ps"
    COMPARABLE = "comparable"


@dataclass(frozen=True)
class ValuationEstimate:
    """Fair value per share from one method. ``value`` is None if inapplicable."""

    method: ValuationMethod
    value: float | None


@dataclass(frozen=True)
class ProjectedCashFlow:
    year: int
    cash_flow: float
    present_value: float


@dataclass(frozen=True)
class DCFResult:
    """Discounted cash flow breakdown per share."""

    projections: tuple[ProjectedCashFlow, ...]
    present_value_of_projections: float
    terminal_value: float
    present_value_of_terminal: float
    total_value: float


def _require_spread(discount_rate_percent: float, growth_percent: float) -> None:
    if discount_rate_percent <= growth_percent:
        raise ValuationAssumptionError(
            f"Discount rate ({discount_rate_percent}%) must exceed the perpetual "
            f"growth rate ({growth_percent}%)"
        )


def calculate_dcf(
    current_cash_flow: float,
    growth_rate_percent: float,
    discount_rate_percent: float,
    terminal_growth_percent: float,
    projection_years: int,
) -> DCFResult:
    """
    Two-stage discounted cash flow valuation.

    Stage 1 grows the cash flow (EPS or FCF per share) at
    ``growth_rate_percent`` for ``projection_years`` and discounts each year
    at ``discount_rate_percent``. Stage 2 is a Gordon growth terminal value
    on the last projected cash flow:

    TV = CF_n × (1 + g_t) / (r - g_t), discounted back n years.

    Args:
        current_cash_flow: Current cash flow per share.
        growth_rate_percent: Growth during the projection period.
        discount_rate_percent: Required return.
        terminal_growth_percent: Perpetual growth after the projection.
        projection_years: Number of explicitly projected years.

    Returns:
        DCFResult.

    Raises:
        ValuationAssumptionError: If the discount rate does not exceed the
            terminal growth rate.
        InvalidInputError: If projection_years is not positive.
    """
    _require_spread(discount_rate_percent, terminal_growth_percent)
    if projection_years <= 0:
        raise InvalidInputError(
            f"projection_years must be positive, got {projection_years}"
        )

    r = discount_rate_percent / 100
    g = growth_rate_percent / 100
    g_terminal = terminal_growth_percent / 100

    years = np.arange(1, projection_years + 1)
    cash_flows = current_cash_flow * (1 + g) ** years
    discount_factors = 1 / (1 + r) ** years
    present_values = cash_flows * discount_factors

    terminal_value = float(cash_flows[-1] * (1 + g_terminal) / (r - g_terminal))
    present_value_of_terminal = float(terminal_value * discount_factors[-1])
    present_value_of_projections = float(np.sum(present_values))

    projections = tuple(
        ProjectedCashFlow(year=int(y), cash_flow=float(cf), present_value=float(pv))
        for y, cf, pv in zip(years, cash_flows, present_values)
    )
    return DCFResult(
        projections=projections,
        present_value_of_projections=present_value_of_projections,
        terminal_value=terminal_value,
        present_value_of_terminal=present_value_of_terminal,
        total_value=present_value_of_projections + present_value_of_terminal,
    )


def calculate_dividend_discount_model(
    current_dividend: float,
    growth_rate_percent: float,
    discount_rate_percent: float,
) -> float:
    """
    Gordon growth model: V = D0 × (1 + g) / (r - g).

    Raises:
        ValuationAssumptionError: If the discount rate does not exceed the
            dividend growth rate.
    """
    _require_spread(discount_rate_percent, growth_rate_percent)
    r = discount_rate_percent / 100
    g = growth_rate_percent / 100
    return current_dividend * (1 + g) / (r - g)


def calculate_pe_valuation(
    eps: float,
    growth_rate_percent: float,
    target_pe: float,
    projection_years: int = 3,
) -> float:
    """Apply a target P/E to EPS grown for ``projection_years`` years."""
    future_eps = eps * (1 + growth_rate_percent / 100) ** projection_years
    return future_eps * target_pe


def calculate_multiple_valuation(metric_per_share: float, multiple: float) -> float:
    """Value from a price multiple (P/B, P/S): metric × multiple."""
    if multiple < 0:
        raise InvalidInputError(f"multiple must be non-negative, got {multiple}")
    return metric_per_share * multiple


def calculate_comparable_valuation(
    target_metric: float,
    comparable_pe_ratios: Sequence[float],
) -> float | None:
    """
    Apply the mean P/E of comparable companies to the target's EPS.

    Returns:
        Value per share, or None when there are no comparables.
    """
    if len(comparable_pe_ratios) == 0:
        return None
    return target_metric * float(np.mean(comparable_pe_ratios))


def calculate_composite_fair_value(
    estimates: Iterable[ValuationEstimate],
) -> float | None:
    """
    Equal-weighted mean of the applicable valuation estimates.

    Estimates whose value is None are left out rather than counted as zero.

    Returns:
        Composite fair value, or None if no estimate applies.
    """
    values = [e.value for e in estimates if e.value is not None]
    if not values:
        return None
    return float(np.mean(values))
