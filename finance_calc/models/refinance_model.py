"""Refinance break-even and savings analysis."""

import math
from typing import Any

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import calculate_monthly_payment


class RefinanceModel:
    """
    Compares an existing mortgage with a replacement loan.

    The new loan pays off the current balance plus any cash taken out.
    Closing costs are recovered from the monthly payment reduction.
    """

    HIGHLY_RECOMMENDED_MONTHS = 24
    RECOMMENDED_MONTHS = 60

    def calculate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Calculate the refinance analysis.

        Args:
            config: Dictionary with keys current_balance, current_rate,
                remaining_years, new_rate, new_term_years, closing_costs and
                cash_out (rates in percent).

        Returns:
            Dictionary with both payments, monthly savings, break-even
            months (None when the new payment is not lower), interest and
            lifetime comparisons, and a recommendation.
        """
        current_balance = config["current_balance"]
        current_rate = config["current_rate"]
        remaining_years = config["remaining_years"]
        new_rate = config["new_rate"]
        new_term_years = config["new_term_years"]
        closing_costs = config.get("closing_costs", 0.0)
        cash_out = config.get("cash_out", 0.0)
        if closing_costs < 0 or cash_out < 0:
            raise InvalidInputError("closing_costs and cash_out must be non-negative")

        current_payment = calculate_monthly_payment(
            current_balance, current_rate, remaining_years
        )
        new_loan_amount = current_balance + cash_out
        new_payment = calculate_monthly_payment(new_loan_amount, new_rate, new_term_years)

        monthly_savings = current_payment - new_payment
        break_even_months = self.calculate_break_even_months(closing_costs, monthly_savings)

        remaining_months = remaining_years * 12
        new_months = new_term_years * 12
        current_total_interest = current_payment * remaining_months - current_balance
        new_total_interest = new_payment * new_months - new_loan_amount
        interest_saved = current_total_interest - new_total_interest
        net_savings = interest_saved - closing_costs

        lifetime_savings = current_payment * remaining_months - (
            new_payment * new_months + closing_costs
        )
        rate_reduction = current_rate - new_rate

        return {
            "current_monthly_payment": current_payment,
            "new_monthly_payment": new_payment,
            "new_loan_amount": new_loan_amount,
            "monthly_savings": monthly_savings,
            "break_even_months": break_even_months,
            "current_total_interest": current_total_interest,
            "new_total_interest": new_total_interest,
            "interest_saved": interest_saved,
            "net_savings": net_savings,
            "lifetime_savings": lifetime_savings,
            "rate_reduction": rate_reduction,
            "recommendation": self.recommend(
                rate_reduction, break_even_months, remaining_months, net_savings
            ),
        }

    @staticmethod
    def calculate_break_even_months(
        closing_costs: float,
        monthly_savings: float,
    ) -> int | None:
        """
        Months of savings needed to recover the closing costs.

        Returns:
            0 without closing costs, None if the payment does not drop.
        """
        if monthly_savings <= 0:
            return None
        if closing_costs == 0:
            return 0
        return math.ceil(closing_costs / monthly_savings)

    def recommend(
        self,
        rate_reduction: float,
        break_even_months: int | None,
        remaining_months: float,
        net_savings: float,
    ) -> str:
        if rate_reduction <= 0:
            return "Not Recommended"
        if break_even_months is None or break_even_months > remaining_months:
            return "Not Recommended"
        if net_savings <= 0:
            return "Not Recommended"
        if break_even_months <= self.HIGHLY_RECOMMENDED_MONTHS:
            return "Highly Recommended"
        if break_even_months <= self.RECOMMENDED_MONTHS:
            return "Recommended"
        return "Consider Carefully"
