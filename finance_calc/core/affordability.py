"""Maximum affordable home price under a monthly housing budget."""

import logging
import math
from dataclasses import dataclass

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import calculate_monthly_payment

logger = logging.getLogger(__name__)

# Upper end of the price search. A pragmatic ceiling, not a market limit.
DEFAULT_PRICE_CEILING = 10_000_000


@dataclass(frozen=True)
class AffordabilityResult:
    """Monthly cost breakdown (PITI) of an affordable home price."""

    home_price: int
    loan_amount: float
    principal_interest_payment: float
    monthly_tax: float
    monthly_insurance: float
    total_monthly_payment: float


def calculate_housing_payment(
    home_price: float,
    down_payment: float,
    annual_rate_percent: float,
    term_years: float,
    property_tax_rate_percent: float,
    monthly_insurance: float,
) -> AffordabilityResult:
    """
    Calculate the total monthly housing cost of buying at ``home_price``.

    Total = principal & interest + property tax / 12 + insurance.

    Raises:
        InvalidInputError: If the price does not exceed the down payment.
    """
    loan_amount = home_price - down_payment
    if loan_amount <= 0:
        raise InvalidInputError(
            f"home_price ({home_price}) must exceed down_payment ({down_payment})"
        )

    principal_interest = calculate_monthly_payment(
        loan_amount, annual_rate_percent, term_years
    )
    monthly_tax = home_price * property_tax_rate_percent / 100 / 12

    return AffordabilityResult(
        home_price=home_price,
        loan_amount=loan_amount,
        principal_interest_payment=principal_interest,
        monthly_tax=monthly_tax,
        monthly_insurance=monthly_insurance,
        total_monthly_payment=principal_interest + monthly_tax + monthly_insurance,
    )


def find_max_affordable_price(
    max_monthly_housing_payment: float,
    down_payment: float,
    annual_rate_percent: float,
    term_years: float,
    property_tax_rate_percent: float,
    monthly_insurance: float,
    price_ceiling: int = DEFAULT_PRICE_CEILING,
) -> AffordabilityResult | None:
    """
    Find the highest whole-currency home price within a monthly budget.

    Binary search over prices in ``[floor(down_payment) + 1, price_ceiling]``.
    Total monthly cost rises with price, so the search converges on the
    largest price whose cost is within budget in O(log range) steps.

    Args:
        max_monthly_housing_payment: Budget for P&I, tax and insurance.
        down_payment: Cash paid up front.
        annual_rate_percent: Mortgage rate in percent.
        term_years: Mortgage term in years.
        property_tax_rate_percent: Annual property tax as percent of price.
        monthly_insurance: Homeowner's insurance per month.
        price_ceiling: Highest price considered.

    Returns:
        AffordabilityResult for the highest affordable price, or None if no
        price in the search range fits the budget.
    """
    if down_payment < 0:
        raise InvalidInputError(f"down_payment must be non-negative, got {down_payment}")
    if property_tax_rate_percent < 0 or monthly_insurance < 0:
        raise InvalidInputError("Property tax rate and insurance must be non-negative")

    low = math.floor(down_payment) + 1
    high = int(price_ceiling)
    best: AffordabilityResult | None = None
    iterations = 0

    while low <= high:
        iterations += 1
        mid = (low + high) // 2
        candidate = calculate_housing_payment(
            mid,
            down_payment,
            annual_rate_percent,
            term_years,
            property_tax_rate_percent,
            monthly_insurance,
        )
        if candidate.total_monthly_payment <= max_monthly_housing_payment:
            best = candidate
            low = mid + 1
        else:
            high = mid - 1

    logger.debug(
        "Affordability search finished after %d iterations: %s",
        iterations,
        best.home_price if best else "no affordable price",
    )
    return best
