"""Year-by-year compound growth with recurring contributions."""

from typing import Any

import numpy as np

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import calculate_effective_annual_rate
from finance_calc.templates.lookup_tables import (
    COMPOUNDING_PERIODS,
    CONTRIBUTION_PERIODS,
)


class CompoundInterestModel:
    """
    Compounds a starting balance plus recurring deposits.

    Interest is credited every compounding period. The annual contribution is
    split into equal deposits spread evenly across the compounding periods of
    the year, so e.g. monthly deposits with quarterly compounding put three
    deposits into each quarter and a full year always receives every deposit.

    Args:
        compounding_periods: Frequency name -> compounding periods per year.
        contribution_periods: Frequency name -> deposits per year.
    """

    def __init__(
        self,
        compounding_periods: dict[str, int] | None = None,
        contribution_periods: dict[str, int] | None = None,
    ) -> None:
        if compounding_periods is None:
            compounding_periods = COMPOUNDING_PERIODS
        self.compounding_periods = compounding_periods
        if contribution_periods is None:
            contribution_periods = CONTRIBUTION_PERIODS
        self.contribution_periods = contribution_periods

    def calculate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Calculate the growth of an investment.

        Args:
            config: Dictionary with keys principal, interest_rate, years,
                annual_contribution, contribution_frequency,
                compounding_frequency, inflation_rate, contribution_growth
                (rates in percent).

        Returns:
            Dictionary with final balance, totals, effective rate and a
            'yearly' dict of per-year arrays.
        """
        principal = config["principal"]
        interest_rate = config["interest_rate"]
        n_years = int(config["years"])
        if principal < 0:
            raise InvalidInputError(f"principal must be non-negative, got {principal}")
        if interest_rate < 0:
            raise InvalidInputError(f"interest_rate must be non-negative, got {interest_rate}")
        if n_years <= 0:
            raise InvalidInputError(f"years must be positive, got {n_years}")

        compounding = self._lookup(
            self.compounding_periods, config.get("compounding_frequency", "monthly")
        )
        contributions_per_year = self._lookup(
            self.contribution_periods, config.get("contribution_frequency", "monthly")
        )
        inflation = config.get("inflation_rate", 0.0) / 100
        contribution_growth = config.get("contribution_growth", 0.0) / 100

        start_balance = np.zeros(n_years)
        contributions = np.zeros(n_years)
        interest = np.zeros(n_years)
        end_balance = np.zeros(n_years)

        balance = float(principal)
        annual_contribution = config.get("annual_contribution", 0.0)

        for year in range(n_years):
            start_balance[year] = balance
            balance, contributions[year], interest[year] = self.compound_year(
                balance,
                annual_contribution,
                interest_rate,
                compounding,
                contributions_per_year,
            )
            end_balance[year] = balance
            annual_contribution *= 1 + contribution_growth

        years = np.arange(1, n_years + 1)
        real_value = end_balance / (1 + inflation) ** years
        final_balance = float(end_balance[-1])

        return {
            "final_balance": final_balance,
            "final_real_value": float(real_value[-1]),
            "total_contributions": principal + float(contributions.sum()),
            "total_interest": float(interest.sum()),
            "effective_rate": calculate_effective_annual_rate(interest_rate, compounding),
            "real_return": interest_rate - inflation * 100 if inflation > 0 else None,
            "yearly": {
                "year": years,
                "start_balance": start_balance,
                "contribution": contributions,
                "interest_earned": interest,
                "end_balance": end_balance,
                "real_value": real_value,
                "cumulative_contributions": principal + np.cumsum(contributions),
                "cumulative_interest": np.cumsum(interest),
            },
        }

    @staticmethod
    def compound_year(
        balance: float,
        annual_contribution: float,
        annual_rate_percent: float,
        compounding_periods: int,
        contributions_per_year: int,
    ) -> tuple[float, float, float]:
        """
        Run one year of compounding.

        Deposits due in a period are added before that period's interest.

        Returns:
            Tuple of (end balance, contributions made, interest earned).
        """
        periodic_rate = annual_rate_percent / 100 / compounding_periods
        deposit = (
            annual_contribution / contributions_per_year if contributions_per_year else 0.0
        )

        contributed = 0.0
        interest_earned = 0.0
        for period in range(1, compounding_periods + 1):
            n_deposits = (
                period * contributions_per_year // compounding_periods
                - (period - 1) * contributions_per_year // compounding_periods
            )
            balance += n_deposits * deposit
            contributed += n_deposits * deposit

            period_interest = balance * periodic_rate
            balance += period_interest
            interest_earned += period_interest

        return balance, contributed, interest_earned

    @staticmethod
    def _lookup(table: dict[str, int], frequency: str) -> int:
        if frequency not in table:
            raise InvalidInputError(
                f"Unknown frequency '{frequency}'. Available: {list(table)}"
            )
        return table[frequency]
