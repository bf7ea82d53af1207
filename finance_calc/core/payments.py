"""Payment and annuity math shared by every calculator.

Rates are percentages (``6.5`` for 6.5 %) throughout.
"""

import math

from finance_calc.core.errors import InvalidInputError

MAX_ANNUAL_RATE_PERCENT = 100.0


def _growth_minus_one(r: float, n: float) -> float:
    """(1+r)^n - 1 without cancellation for rates close to zero."""
    return math.expm1(n * math.log1p(r))


def calculate_monthly_payment(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
) -> float:
    """
    Calculate the level monthly payment of an amortizing loan.

    Uses the standard annuity formula:
    M = P × [r(1+r)^n] / [(1+r)^n - 1]

    with r = annual_rate_percent / 100 / 12 and n = term_years × 12.
    A zero rate degenerates to straight-line repayment, M = P / n.

    Args:
        principal: Loan principal amount.
        annual_rate_percent: Nominal annual rate in percent (e.g., 6.5).
        term_years: Loan term in years.

    Returns:
        Monthly payment amount.

    Raises:
        InvalidInputError: If principal or term is not positive, the rate is
            outside [0, 100], or the payment cannot be represented.

    Example:
        >>> round(calculate_monthly_payment(300000, 6.5, 30), 2)
        1896.2
    """
    if principal <= 0 or term_years <= 0:
        raise InvalidInputError(
            f"Principal and term must be positive, got principal={principal}, "
            f"term_years={term_years}"
        )
    if annual_rate_percent < 0 or annual_rate_percent > MAX_ANNUAL_RATE_PERCENT:
        raise InvalidInputError(
            f"Interest rate must be between 0 and {MAX_ANNUAL_RATE_PERCENT:g}, "
            f"got {annual_rate_percent}"
        )

    n = term_years * 12
    if annual_rate_percent == 0:
        return principal / n

    r = annual_rate_percent / 100 / 12
    try:
        growth_minus_one = _growth_minus_one(r, n)
    except OverflowError as exc:
        raise InvalidInputError(
            "Unable to calculate payment with provided parameters"
        ) from exc
    if growth_minus_one == 0:
        return principal / n

    payment = principal * (r * (growth_minus_one + 1)) / growth_minus_one
    if not math.isfinite(payment) or payment <= 0:
        raise InvalidInputError(f"Calculated payment is invalid: {payment}")
    return payment


def calculate_future_value(
    present_value: float,
    periodic_contribution: float,
    periodic_rate_percent: float,
    periods: float,
) -> float:
    """
    Future value of a lump sum plus a level annuity.

    FV = PV × (1+r)^n + PMT × [((1+r)^n - 1) / r], or PV + PMT × n when r = 0.

    The caller converts annual figures into per-period ones first (e.g. a
    7 % annual return with monthly deposits is ``7 / 12`` per period).

    Args:
        present_value: Starting balance.
        periodic_contribution: Deposit at the end of every period.
        periodic_rate_percent: Growth rate per period in percent.
        periods: Number of periods.

    Returns:
        Balance after ``periods`` periods.
    """
    if periods < 0:
        raise InvalidInputError(f"periods must be non-negative, got {periods}")

    if periodic_rate_percent <= -100:
        raise InvalidInputError(
            f"Periodic rate must exceed -100%, got {periodic_rate_percent}"
        )

    r = periodic_rate_percent / 100
    growth_minus_one = _growth_minus_one(r, periods) if r != 0 else 0.0
    if growth_minus_one == 0:
        return present_value + periodic_contribution * periods

    return (
        present_value * (growth_minus_one + 1)
        + periodic_contribution * (growth_minus_one / r)
    )


def calculate_present_value(
    future_value: float,
    annual_rate_percent: float,
    years: float,
) -> float:
    """Discount a single future amount back ``years`` years at an annual rate."""
    if annual_rate_percent <= -100:
        raise InvalidInputError(
            f"Discount rate must exceed -100%, got {annual_rate_percent}"
        )
    return future_value / (1 + annual_rate_percent / 100) ** years


def calculate_cagr(start_value: float, end_value: float, periods: float) -> float:
    """
    Compound annual growth rate between two values, in percent.

    CAGR = (end / start)^(1 / periods) - 1

    Raises:
        InvalidInputError: If start_value or periods is not positive, or
            end_value is negative (no real root).

    Example:
        >>> round(calculate_cagr(100, 121, 2), 6)
        10.0
    """
    if start_value <= 0:
        raise InvalidInputError(f"start_value must be positive, got {start_value}")
    if periods <= 0:
        raise InvalidInputError(f"periods must be positive, got {periods}")
    if end_value < 0:
        raise InvalidInputError(f"end_value must be non-negative, got {end_value}")

    return ((end_value / start_value) ** (1 / periods) - 1) * 100


def calculate_effective_annual_rate(
    nominal_rate_percent: float,
    compounding_periods_per_year: int,
) -> float:
    """
    Convert a nominal annual rate into the effective annual rate, in percent.

    EAR = (1 + nominal / n)^n - 1
    """
    if compounding_periods_per_year <= 0:
        raise InvalidInputError(
            "compounding_periods_per_year must be positive, "
            f"got {compounding_periods_per_year}"
        )
    n = compounding_periods_per_year
    return ((1 + nominal_rate_percent / 100 / n) ** n - 1) * 100


def calculate_compound_interest(
    principal: float,
    annual_rate_percent: float,
    compounding_periods_per_year: int,
    years: float,
) -> float:
    """Balance of a lump sum compounded ``compounding_periods_per_year`` times a year."""
    if compounding_periods_per_year <= 0:
        raise InvalidInputError(
            "compounding_periods_per_year must be positive, "
            f"got {compounding_periods_per_year}"
        )
    n = compounding_periods_per_year
    return principal * (1 + annual_rate_percent / 100 / n) ** (n * years)


def _ratio_percent(numerator: float, denominator: float, name: str) -> float:
    if denominator <= 0:
        raise InvalidInputError(f"{name} must be positive, got {denominator}")
    return numerator / denominator * 100


def calculate_cap_rate(net_operating_income: float, property_value: float) -> float:
    """Capitalization rate: annual NOI / property value, in percent."""
    return _ratio_percent(net_operating_income, property_value, "property_value")


def calculate_cash_on_cash_return(
    annual_cash_flow: float,
    total_cash_invested: float,
) -> float:
    """Annual pre-tax cash flow / total cash invested, in percent."""
    return _ratio_percent(annual_cash_flow, total_cash_invested, "total_cash_invested")


def calculate_grm(property_price: float, monthly_rent: float) -> float:
    """Gross rent multiplier: price / annual rent."""
    if monthly_rent <= 0:
        raise InvalidInputError(f"monthly_rent must be positive, got {monthly_rent}")
    return property_price / (monthly_rent * 12)


def calculate_dti(monthly_debt_payments: float, monthly_gross_income: float) -> float:
    """Debt-to-income ratio in percent."""
    return _ratio_percent(
        monthly_debt_payments, monthly_gross_income, "monthly_gross_income"
    )


def calculate_ltv(loan_amount: float, property_value: float) -> float:
    """Loan-to-value ratio in percent."""
    return _ratio_percent(loan_amount, property_value, "property_value")
