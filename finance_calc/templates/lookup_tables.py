"""Reference tables injected into calculators.

None of these values are read implicitly by the core. Callers pass the
table (or the relevant entry) as an argument, so a new tax year or a
different sector view only requires a different dict.
"""

from typing import Any

# IRS elective deferral limits for 401(k) plans, by plan year.
CONTRIBUTION_LIMITS: dict[int, dict[str, float]] = {
    2025: {
        "employee": 23000.0,
        "catchup": 7500.0,
        "total": 69000.0,
        "catchup_age": 50,
    },
}

# Sector average price-to-book multiples.
SECTOR_PB_RATIOS: dict[str, float] = {
    "technology": 3.5,
    "healthcare": 2.8,
    "financials": 1.2,
    "consumer-discretionary": 2.1,
    "industrials": 2.3,
    "utilities": 1.8,
    "energy": 1.5,
    "materials": 1.9,
    "real-estate": 2.2,
    "telecommunications": 1.6,
    "consumer-staples": 2.4,
}

# Sector average price-to-sales multiples.
SECTOR_PS_RATIOS: dict[str, float] = {
    "technology": 8.0,
    "healthcare": 4.5,
    "financials": 2.0,
    "consumer-discretionary": 1.8,
    "industrials": 1.5,
    "utilities": 2.2,
    "energy": 1.0,
    "materials": 1.2,
    "real-estate": 5.0,
    "telecommunications": 1.8,
    "consumer-staples": 1.6,
}

DEFAULT_SECTOR_MULTIPLE = 2.0

COMPOUNDING_PERIODS: dict[str, int] = {
    "daily": 365,
    "monthly": 12,
    "quarterly": 4,
    "annually": 1,
}

CONTRIBUTION_PERIODS: dict[str, int] = {
    "monthly": 12,
    "quarterly": 4,
    "annually": 1,
    "none": 0,
}

# Payments per year for each dividend schedule. "special" is a one-off.
DIVIDEND_FREQUENCIES: dict[str, dict[str, Any]] = {
    "monthly": {"label": "Monthly", "payments_per_year": 12, "annualize": 12},
    "quarterly": {"label": "Quarterly", "payments_per_year": 4, "annualize": 4},
    "semi-annual": {"label": "Semi-Annual", "payments_per_year": 2, "annualize": 2},
    "annual": {"label": "Annual", "payments_per_year": 1, "annualize": 1},
    "special": {"label": "Special", "payments_per_year": 0, "annualize": 1},
}

# Additive stock-weight adjustments used by the allocation recommender.
ALLOCATION_ADJUSTMENTS: dict[str, dict[str, float]] = {
    "risk_tolerance": {
        "conservative": -0.2,
        "moderate": 0.0,
        "aggressive": 0.2,
        "very-aggressive": 0.3,
    },
    "time_horizon": {
        "short": -0.3,
        "medium": -0.1,
        "long": 0.1,
    },
    "goal": {
        "retirement": 0.0,
        "growth": 0.2,
        "income": -0.2,
        "preservation": -0.3,
        # education depends on the horizon, see PortfolioModel
    },
}

# Long-run annual standard deviation by asset class, in percent.
ASSET_CLASS_VOLATILITIES: dict[str, float] = {
    "stock": 16.0,
    "bond": 5.0,
    "cash": 1.0,
    "alternative": 20.0,
}

# Down payment percentages compared by the PMI calculator.
PMI_DOWN_PAYMENT_SCENARIOS: tuple[float, ...] = (3.0, 5.0, 10.0, 15.0, 20.0, 25.0)

# Mortgage insurance applies above this loan-to-value, in percent.
PMI_REQUIRED_LTV = 80.0

# Automatic termination point for mortgage insurance, in percent.
PMI_REMOVAL_LTV = 78.0

# Annual returns (percent) for investing the payment gap of a shorter term.
TERM_COMPARISON_INVESTMENT_RATES: tuple[float, ...] = (7.0, 8.0, 10.0)

# Risk questionnaire: (maximum age, points) bands, checked in order.
RISK_AGE_SCORES: tuple[tuple[int, int], ...] = (
    (30, 20),
    (40, 16),
    (50, 12),
    (60, 8),
)
RISK_AGE_DEFAULT_SCORE = 4

# Risk questionnaire points per answer, keyed by question.
RISK_FACTOR_SCORES: dict[str, dict[str, int]] = {
    "experience": {
        "beginner": 3,
        "novice": 6,
        "intermediate": 10,
        "experienced": 13,
        "expert": 15,
    },
    "timeline": {
        "short": 5,
        "medium": 10,
        "long": 16,
        "retirement": 20,
    },
    "risk_capacity": {
        "low": 3,
        "moderate": 7,
        "high": 12,
        "very-high": 15,
    },
    "volatility_comfort": {
        "very-low": 2,
        "low": 5,
        "moderate": 8,
        "high": 12,
        "very-high": 15,
    },
    "investment_goals": {
        "preservation": 3,
        "income": 6,
        "balanced": 9,
        "growth": 12,
        "aggressive": 15,
    },
}

# (maximum score percentage, profile) bands; above the last is "Very Aggressive".
RISK_PROFILE_LEVELS: tuple[tuple[float, str], ...] = (
    (20.0, "Very Conservative"),
    (40.0, "Conservative"),
    (60.0, "Moderate"),
    (80.0, "Aggressive"),
)

# Model portfolio per risk profile, in percent.
RECOMMENDED_ALLOCATIONS: dict[str, dict[str, float]] = {
    "Very Conservative": {"bond": 70.0, "cash": 20.0, "stock": 10.0},
    "Conservative": {"bond": 60.0, "stock": 30.0, "cash": 10.0},
    "Moderate": {"stock": 60.0, "bond": 35.0, "cash": 5.0},
    "Aggressive": {"stock": 75.0, "bond": 20.0, "alternative": 5.0},
    "Very Aggressive": {"stock": 85.0, "alternative": 10.0, "bond": 5.0},
}
