"""Income-driven home affordability."""

from typing import Any

from finance_calc.core.affordability import (
    DEFAULT_PRICE_CEILING,
    find_max_affordable_price,
)
from finance_calc.core.errors import InvalidInputError


class AffordabilityModel:
    """
    Determines the most expensive home a household can carry.

    The housing budget is ``monthly income × dti_ratio``; the price search
    itself is delegated to ``find_max_affordable_price``.
    """

    def __init__(self, price_ceiling: int = DEFAULT_PRICE_CEILING) -> None:
        self.price_ceiling = price_ceiling

    def calculate(self, config: dict[str, Any]) -> dict[str, Any] | None:
        """
        Calculate the affordable price and resulting debt ratios.

        Args:
            config: Dictionary with keys
                annual_income, monthly_debt, down_payment, interest_rate,
                loan_term_years, property_tax_rate, annual_insurance,
                dti_ratio (all rates in percent).

        Returns:
            Dictionary with home price, PITI breakdown, front-end and
            back-end DTI and remaining monthly income, or None if no price
            fits the budget.

        Raises:
            InvalidInputError: If income is not positive or does not exceed
                existing monthly debt.
        """
        annual_income = config["annual_income"]
        monthly_debt = config.get("monthly_debt", 0.0)
        if annual_income <= 0:
            raise InvalidInputError(f"annual_income must be positive, got {annual_income}")

        monthly_income = annual_income / 12
        if monthly_income <= monthly_debt:
            raise InvalidInputError(
                "Monthly debt payments exceed monthly income"
            )

        max_housing_payment = monthly_income * config["dti_ratio"] / 100
        monthly_insurance = config.get("annual_insurance", 0.0) / 12

        result = find_max_affordable_price(
            max_monthly_housing_payment=max_housing_payment,
            down_payment=config.get("down_payment", 0.0),
            annual_rate_percent=config["interest_rate"],
            term_years=config["loan_term_years"],
            property_tax_rate_percent=config.get("property_tax_rate", 0.0),
            monthly_insurance=monthly_insurance,
            price_ceiling=self.price_ceiling,
        )
        if result is None:
            return None

        total = result.total_monthly_payment
        return {
            "max_home_price": result.home_price,
            "loan_amount": result.loan_amount,
            "principal_interest": result.principal_interest_payment,
            "monthly_property_tax": result.monthly_tax,
            "monthly_insurance": result.monthly_insurance,
            "total_piti": total,
            "max_housing_payment": max_housing_payment,
            "front_end_dti": total / monthly_income * 100,
            "back_end_dti": (total + monthly_debt) / monthly_income * 100,
            "remaining_income": monthly_income - total - monthly_debt,
        }
