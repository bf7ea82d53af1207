"""Rent versus buy net-worth comparison."""

from datetime import date
from typing import Any

import numpy as np

from finance_calc.core.amortization import generate_amortization_schedule
from finance_calc.core.errors import InvalidInputError
from finance_calc.utils.dates import ANCHOR_DATE


class RentVsBuyModel:
    """
    Compares the net worth of buying a home with renting and investing.

    The buyer's net worth is home equity less cumulative ownership costs
    (net of the mortgage interest deduction). The renter invests the down
    payment and closing costs instead and pays rent, which rises every year.
    Mortgage principal and interest per year come from the amortization
    schedule, so payments stop once the loan is repaid.
    """

    def calculate(
        self,
        config: dict[str, Any],
        start_date: date = ANCHOR_DATE,
    ) -> dict[str, Any]:
        """
        Calculate the year-by-year comparison.

        Args:
            config: Dictionary with keys home_price, down_payment,
                interest_rate, loan_term_years, closing_costs,
                annual_property_tax, annual_insurance, annual_maintenance,
                monthly_rent, rent_increase, security_deposit,
                annual_renters_insurance, moving_costs, years,
                home_appreciation, investment_return, tax_bracket
                (rates in percent).
            start_date: First mortgage payment date. Results only depend on
                payment order, so the fixed anchor date is the default.

        Returns:
            Dictionary with the verdict, break-even year and per-year arrays
            under 'yearly'.
        """
        home_price = config["home_price"]
        down_payment = config.get("down_payment", 0.0)
        n_years = int(config["years"])
        if down_payment >= home_price:
            raise InvalidInputError("down_payment must be less than home_price")
        if n_years <= 0:
            raise InvalidInputError(f"years must be positive, got {n_years}")

        loan_amount = home_price - down_payment
        schedule = generate_amortization_schedule(
            loan_amount,
            config["interest_rate"],
            config["loan_term_years"],
            start_date,
        )
        entries = schedule.entries

        closing_costs = config.get("closing_costs", 0.0)
        annual_ownership_cost = (
            config.get("annual_property_tax", 0.0)
            + config.get("annual_insurance", 0.0)
            + config.get("annual_maintenance", 0.0)
        )
        renters_insurance = config.get("annual_renters_insurance", 0.0)
        appreciation = config.get("home_appreciation", 0.0) / 100
        rent_increase = config.get("rent_increase", 0.0) / 100
        investment_return = config.get("investment_return", 0.0) / 100
        tax_bracket = config.get("tax_bracket", 0.0) / 100

        home_value = np.zeros(n_years)
        mortgage_balance = np.zeros(n_years)
        buying_cost = np.zeros(n_years)
        renting_cost = np.zeros(n_years)
        annual_rent = np.zeros(n_years)
        tax_savings = np.zeros(n_years)
        invested = np.zeros(n_years)

        value = home_price
        monthly_rent = config["monthly_rent"]
        cumulative_buying = down_payment + closing_costs
        cumulative_renting = config.get("security_deposit", 0.0) + config.get(
            "moving_costs", 0.0
        )
        cumulative_tax_savings = 0.0
        investment = down_payment + closing_costs

        for year in range(n_years):
            payments = entries[year * 12 : (year + 1) * 12]
            mortgage_paid = sum(e.total_paid for e in payments)
            interest_paid = sum(e.interest_portion for e in payments)

            value *= 1 + appreciation
            investment *= 1 + investment_return
            annual_rent[year] = monthly_rent * 12

            tax_savings[year] = interest_paid * tax_bracket
            cumulative_tax_savings += tax_savings[year]
            cumulative_buying += mortgage_paid + annual_ownership_cost
            cumulative_renting += annual_rent[year] + renters_insurance

            home_value[year] = value
            mortgage_balance[year] = payments[-1].remaining_balance if payments else 0.0
            buying_cost[year] = cumulative_buying - cumulative_tax_savings
            renting_cost[year] = cumulative_renting
            invested[year] = investment

            monthly_rent *= 1 + rent_increase

        home_equity = home_value - mortgage_balance
        buying_net_worth = home_equity - buying_cost
        renting_net_worth = invested - renting_cost
        difference = buying_net_worth - renting_net_worth

        ahead = np.where(difference > 0)[0]
        break_even_year = int(ahead[0]) + 1 if len(ahead) else None

        monthly_buying_cost = schedule.monthly_payment + annual_ownership_cost / 12
        monthly_renting_cost = config["monthly_rent"] + renters_insurance / 12

        return {
            "is_buying_better": bool(difference[-1] > 0),
            "net_worth_difference": float(abs(difference[-1])),
            "break_even_year": break_even_year,
            "monthly_buying_cost": monthly_buying_cost,
            "monthly_difference": monthly_buying_cost - monthly_renting_cost,
            "total_buying_cost": float(buying_cost[-1]),
            "total_renting_cost": float(renting_cost[-1]),
            "equity_built": float(home_equity[-1]),
            "total_tax_savings": float(tax_savings.sum()),
            "final_investment_value": float(invested[-1]),
            "yearly": {
                "year": np.arange(1, n_years + 1),
                "home_value": home_value,
                "mortgage_balance": mortgage_balance,
                "home_equity": home_equity,
                "cumulative_buying_cost": buying_cost,
                "cumulative_renting_cost": renting_cost,
                "buying_net_worth": buying_net_worth,
                "renting_net_worth": renting_net_worth,
                "net_worth_difference": difference,
                "annual_rent": annual_rent,
                "tax_savings": tax_savings,
                "invested_down_payment": invested,
            },
        }
