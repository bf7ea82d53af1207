"""Rental property cash flow analysis."""

from typing import Any

import numpy as np

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import (
    calculate_cap_rate,
    calculate_cash_on_cash_return,
    calculate_grm,
    calculate_monthly_payment,
)

# Monthly operating expense keys summed into total expenses.
EXPENSE_KEYS = (
    "property_tax",
    "insurance",
    "maintenance",
    "vacancy",
    "property_management",
    "other_expenses",
)


class CashFlowModel:
    """
    Calculates the monthly cash flow and return ratios of a rental property.

    Args:
        sensitivity_steps: Rent changes in percent for the sensitivity table.
    """

    def __init__(self, sensitivity_steps: tuple[float, ...] | None = None) -> None:
        if sensitivity_steps is None:
            sensitivity_steps = tuple(range(-20, 25, 5))
        self.sensitivity_steps = sensitivity_steps

    def calculate(self, property_config: dict[str, Any]) -> dict[str, Any]:
        """
        Calculate cash flow, return metrics and rent sensitivity.

        Args:
            property_config: Dictionary with keys purchase_price, monthly_rent,
                down_payment, interest_rate, loan_term_years, closing_costs,
                rehab_costs, after_repair_value and the monthly expenses in
                EXPENSE_KEYS.

        Returns:
            Dictionary with NOI, cash flow, cap rate, cash-on-cash return,
            GRM, 1 % rule ratio, instant equity, break-even rent and a
            'sensitivity' dict of arrays.
        """
        purchase_price = property_config["purchase_price"]
        monthly_rent = property_config["monthly_rent"]
        down_payment = property_config.get("down_payment", 0.0)
        if purchase_price <= 0:
            raise InvalidInputError(f"purchase_price must be positive, got {purchase_price}")
        if down_payment >= purchase_price:
            raise InvalidInputError("down_payment must be less than purchase_price")

        loan_amount = purchase_price - down_payment
        mortgage_payment = calculate_monthly_payment(
            loan_amount,
            property_config["interest_rate"],
            property_config["loan_term_years"],
        )

        rehab_costs = property_config.get("rehab_costs", 0.0)
        total_cash_invested = (
            down_payment + property_config.get("closing_costs", 0.0) + rehab_costs
        )
        monthly_expenses = sum(property_config.get(key, 0.0) for key in EXPENSE_KEYS)

        monthly_noi = monthly_rent - monthly_expenses
        monthly_cash_flow = monthly_noi - mortgage_payment
        annual_cash_flow = monthly_cash_flow * 12

        # Cap rate is measured on the after-repair value when one is given.
        valuation_basis = property_config.get("after_repair_value") or purchase_price

        return {
            "loan_amount": loan_amount,
            "monthly_mortgage_payment": mortgage_payment,
            "total_monthly_expenses": monthly_expenses,
            "total_cash_invested": total_cash_invested,
            "monthly_noi": monthly_noi,
            "annual_noi": monthly_noi * 12,
            "monthly_cash_flow": monthly_cash_flow,
            "annual_cash_flow": annual_cash_flow,
            "cap_rate": calculate_cap_rate(monthly_noi * 12, valuation_basis),
            "cash_on_cash_return": (
                calculate_cash_on_cash_return(annual_cash_flow, total_cash_invested)
                if total_cash_invested > 0
                else 0.0
            ),
            "grm": calculate_grm(purchase_price, monthly_rent),
            "one_percent_rule": monthly_rent / purchase_price * 100,
            "instant_equity": max(0.0, valuation_basis - purchase_price - rehab_costs),
            "break_even_rent": monthly_expenses + mortgage_payment,
            "sensitivity": self.calculate_rent_sensitivity(
                monthly_rent, monthly_expenses, mortgage_payment
            ),
        }

    def calculate_rent_sensitivity(
        self,
        monthly_rent: float,
        monthly_expenses: float,
        mortgage_payment: float,
    ) -> dict[str, np.ndarray]:
        """Monthly cash flow with the rent shifted by each sensitivity step."""
        rent_change = np.asarray(self.sensitivity_steps, dtype=np.float64)
        adjusted_rent = monthly_rent * (1 + rent_change / 100)
        return {
            "rent_change": rent_change,
            "monthly_rent": adjusted_rent,
            "monthly_cash_flow": adjusted_rent - monthly_expenses - mortgage_payment,
        }
