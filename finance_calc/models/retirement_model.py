"""Retirement savings projections: 401(k) accumulation and retirement drawdown."""

from typing import Any

import numpy as np

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import calculate_future_value


class RetirementAccountModel:
    """
    Year-by-year 401(k) projection.

    Contributions are capped by the plan-year limit passed in at construction
    (see ``templates.lookup_tables.CONTRIBUTION_LIMITS``). Growth uses a
    mid-year convention: contributions earn half a year of return.

    Args:
        contribution_limits: One plan year's limits with keys 'employee',
            'catchup' and optionally 'catchup_age' (default 50).

    Example:
        >>> from finance_calc.templates.lookup_tables import CONTRIBUTION_LIMITS
        >>> model = RetirementAccountModel(CONTRIBUTION_LIMITS[2025])
        >>> results = model.calculate(plan)
        >>> results["final_balance"]
    """

    EARLY_RETIREMENT_AGE = 65
    EARLY_WITHDRAWAL_RATE = 0.035
    STANDARD_WITHDRAWAL_RATE = 0.04

    def __init__(self, contribution_limits: dict[str, float]) -> None:
        self.contribution_limits = contribution_limits

    def calculate(self, plan_config: dict[str, Any]) -> dict[str, Any]:
        """
        Project the account balance to retirement.

        Args:
            plan_config: Dictionary with keys current_age, retirement_age,
                current_balance, annual_salary, contribution_percent,
                employer_match, match_limit, return_rate, salary_growth,
                current_tax_rate, retirement_tax_rate, inflation_rate
                (percentages where applicable).

        Returns:
            Dictionary with per-year arrays under 'yearly' and totals.
        """
        current_age = plan_config["current_age"]
        retirement_age = plan_config["retirement_age"]
        n_years = int(retirement_age - current_age)
        if n_years <= 0:
            raise InvalidInputError("retirement_age must be greater than current_age")

        annual_salary = plan_config["annual_salary"]
        if annual_salary <= 0:
            raise InvalidInputError(f"annual_salary must be positive, got {annual_salary}")

        contribution_percent = plan_config.get("contribution_percent", 0.0)
        employer_match = plan_config.get("employer_match", 0.0)
        match_limit = plan_config.get("match_limit", 0.0)
        return_rate = plan_config.get("return_rate", 0.0) / 100
        salary_growth = plan_config.get("salary_growth", 0.0) / 100
        tax_rate = plan_config.get("current_tax_rate", 0.0) / 100

        ages = current_age + np.arange(n_years)
        salary = np.zeros(n_years)
        employee = np.zeros(n_years)
        match = np.zeros(n_years)
        start_balance = np.zeros(n_years)
        interest = np.zeros(n_years)
        end_balance = np.zeros(n_years)

        balance = plan_config.get("current_balance", 0.0)
        current_salary = annual_salary

        for year in range(n_years):
            salary[year] = current_salary
            employee[year] = self.calculate_employee_contribution(
                current_salary, contribution_percent, ages[year]
            )
            match[year] = self.calculate_employer_match(
                employee[year], current_salary, employer_match, match_limit
            )
            contributions = employee[year] + match[year]

            start_balance[year] = balance
            interest[year] = (balance + contributions / 2) * return_rate
            balance = balance + contributions + interest[year]
            end_balance[year] = balance

            current_salary *= 1 + salary_growth

        tax_savings = employee * tax_rate
        final_balance = float(end_balance[-1])

        inflation = plan_config.get("inflation_rate", 0.0) / 100
        final_real_value = (
            final_balance / (1 + inflation) ** n_years if inflation > 0 else final_balance
        )

        monthly_income = self.calculate_monthly_income(final_balance, retirement_age)
        retirement_tax = plan_config.get("retirement_tax_rate", 0.0) / 100

        return {
            "years_to_retirement": n_years,
            "final_balance": final_balance,
            "final_real_value": final_real_value,
            "total_employee_contributions": float(employee.sum()),
            "total_employer_match": float(match.sum()),
            "total_tax_savings": float(tax_savings.sum()),
            "total_interest_earned": float(interest.sum()),
            "monthly_income": monthly_income,
            "monthly_income_after_tax": monthly_income * (1 - retirement_tax),
            "contribution_limit": self.get_contribution_limit(current_age),
            "is_maxing_out": self.is_maxing_out(
                annual_salary, contribution_percent, current_age
            ),
            "yearly": {
                "age": ages,
                "salary": salary,
                "employee_contribution": employee,
                "employer_match": match,
                "tax_savings": tax_savings,
                "start_balance": start_balance,
                "interest_earned": interest,
                "end_balance": end_balance,
                "cumulative_contributions": np.cumsum(employee + match),
            },
        }

    def get_contribution_limit(self, age: float) -> float:
        """Employee deferral limit, including catch-up from the catch-up age."""
        limits = self.contribution_limits
        if age >= limits.get("catchup_age", 50):
            return limits["employee"] + limits["catchup"]
        return limits["employee"]

    def calculate_employee_contribution(
        self, salary: float, percent: float, age: float
    ) -> float:
        return min(salary * percent / 100, self.get_contribution_limit(age))

    @staticmethod
    def calculate_employer_match(
        employee_contribution: float,
        salary: float,
        match_percent: float,
        match_limit: float,
    ) -> float:
        """
        Employer match on the employee's deferral rate, up to ``match_limit``.

        E.g. a 50 % match on up to 6 % of salary with an employee deferring
        10 % yields 3 % of salary.
        """
        if match_percent == 0:
            return 0.0
        employee_percent = employee_contribution / salary * 100
        eligible_percent = min(employee_percent, match_limit)
        return salary * eligible_percent / 100 * match_percent / 100

    def is_maxing_out(self, salary: float, percent: float, age: float) -> bool:
        return salary * percent / 100 >= self.get_contribution_limit(age)

    def calculate_monthly_income(self, balance: float, retirement_age: float) -> float:
        """Sustainable monthly withdrawal: 4 % rule, 3.5 % before age 65."""
        rate = (
            self.EARLY_WITHDRAWAL_RATE
            if retirement_age < self.EARLY_RETIREMENT_AGE
            else self.STANDARD_WITHDRAWAL_RATE
        )
        return balance * rate / 12


class RetirementPlanModel:
    """
    Retirement readiness: savings at retirement and their drawdown.

    Savings grow with monthly contributions until retirement. In retirement
    the expense gap not covered by other income is withdrawn every year, with
    expenses, income and withdrawals rising with inflation.
    """

    SAFE_WITHDRAWAL_RATE = 4.0
    # Balance treated as exhausted when judging how long the money lasts.
    DEPLETION_THRESHOLD = 1000.0

    def calculate(self, plan_config: dict[str, Any]) -> dict[str, Any]:
        """
        Calculate the retirement projection.

        Args:
            plan_config: Dictionary with keys current_age, retirement_age,
                life_expectancy, current_savings, monthly_contribution,
                expected_return, inflation_rate, current_expenses,
                expense_ratio (percent of current expenses needed),
                healthcare_costs, leisure_travel and monthly income sources
                social_security, pension, part_time_income, other_income.

        Returns:
            Dictionary with savings at retirement, shortfall figures and a
            'retirement_years' dict of per-year arrays.
        """
        current_age = plan_config["current_age"]
        retirement_age = plan_config["retirement_age"]
        life_expectancy = plan_config["life_expectancy"]
        years_to_retirement = int(retirement_age - current_age)
        years_in_retirement = int(life_expectancy - retirement_age)
        if years_to_retirement < 0 or years_in_retirement <= 0:
            raise InvalidInputError(
                "Ages must satisfy current_age <= retirement_age < life_expectancy"
            )

        expected_return = plan_config.get("expected_return", 0.0)
        inflation_rate = plan_config.get("inflation_rate", 0.0)

        retirement_savings = calculate_future_value(
            plan_config.get("current_savings", 0.0),
            plan_config.get("monthly_contribution", 0.0),
            expected_return / 12,
            years_to_retirement * 12,
        )

        base_expenses = (
            plan_config.get("current_expenses", 0.0)
            * plan_config.get("expense_ratio", 80.0)
            / 100
        )
        monthly_expenses = (
            base_expenses
            + plan_config.get("healthcare_costs", 0.0)
            + plan_config.get("leisure_travel", 0.0)
        )
        monthly_other_income = sum(
            plan_config.get(key, 0.0)
            for key in ("social_security", "pension", "part_time_income", "other_income")
        )
        monthly_shortfall = max(0.0, monthly_expenses - monthly_other_income)
        annual_shortfall = monthly_shortfall * 12
        withdrawal_rate = (
            annual_shortfall / retirement_savings * 100 if retirement_savings > 0 else 0.0
        )

        retirement_years = self.project_retirement_years(
            starting_balance=retirement_savings,
            annual_withdrawal=annual_shortfall,
            other_income=monthly_other_income * 12,
            total_expenses=monthly_expenses * 12,
            return_rate=expected_return / 100,
            inflation_rate=inflation_rate / 100,
            n_years=years_in_retirement,
            start_age=retirement_age,
        )
        money_lasts_until = self.calculate_money_duration(
            retirement_years, life_expectancy
        )
        end_balances = retirement_years["end_balance"]

        real_savings = (
            retirement_savings / (1 + inflation_rate / 100) ** years_to_retirement
            if inflation_rate > 0
            else retirement_savings
        )

        return {
            "years_to_retirement": years_to_retirement,
            "years_in_retirement": years_in_retirement,
            "retirement_savings": retirement_savings,
            "real_retirement_savings": real_savings,
            "total_monthly_expenses": monthly_expenses,
            "total_other_income": monthly_other_income,
            "monthly_shortfall": monthly_shortfall,
            "annual_shortfall": annual_shortfall,
            "withdrawal_rate": withdrawal_rate,
            "safe_withdrawal_rate": self.SAFE_WITHDRAWAL_RATE,
            "money_lasts_until": money_lasts_until,
            "final_balance": float(end_balances[-1]) if len(end_balances) else 0.0,
            "is_on_track": (
                withdrawal_rate <= self.SAFE_WITHDRAWAL_RATE
                and money_lasts_until >= life_expectancy
            ),
            "shortfall_amount": max(
                0.0, annual_shortfall * years_in_retirement - retirement_savings
            ),
            "retirement_years": retirement_years,
        }

    @staticmethod
    def project_retirement_years(
        starting_balance: float,
        annual_withdrawal: float,
        other_income: float,
        total_expenses: float,
        return_rate: float,
        inflation_rate: float,
        n_years: int,
        start_age: float,
    ) -> dict[str, np.ndarray]:
        """
        Simulate the drawdown one year at a time.

        The balance earns ``return_rate`` on its opening value, then the
        withdrawal (capped at what is available) is taken. Withdrawal, other
        income and expenses rise with inflation each year. The projection
        stops early once the money runs out.

        Args:
            starting_balance: Savings at retirement.
            annual_withdrawal: First-year withdrawal need.
            other_income: First-year income from other sources.
            total_expenses: First-year expenses.
            return_rate: Annual return as a fraction.
            inflation_rate: Annual inflation as a fraction.
            n_years: Years in retirement.
            start_age: Age at retirement.

        Returns:
            Dictionary of equal-length arrays, one element per simulated year.
        """
        rows: dict[str, list[float]] = {
            key: []
            for key in (
                "age",
                "start_balance",
                "investment_return",
                "withdrawal",
                "other_income",
                "total_expenses",
                "net_cash_flow",
                "end_balance",
                "real_balance",
            )
        }
        balance = starting_balance
        withdrawal_need = annual_withdrawal

        for year in range(n_years):
            investment_return = balance * return_rate
            withdrawal = min(withdrawal_need, balance + investment_return)
            end_balance = max(0.0, balance + investment_return - withdrawal)
            deflator = (1 + inflation_rate) ** (year + 1)

            rows["age"].append(start_age + year)
            rows["start_balance"].append(balance)
            rows["investment_return"].append(investment_return)
            rows["withdrawal"].append(withdrawal)
            rows["other_income"].append(other_income)
            rows["total_expenses"].append(total_expenses)
            rows["net_cash_flow"].append(other_income + withdrawal - total_expenses)
            rows["end_balance"].append(end_balance)
            rows["real_balance"].append(end_balance / deflator)

            exhausted = end_balance <= 0 and withdrawal < withdrawal_need
            balance = end_balance
            withdrawal_need *= 1 + inflation_rate
            other_income *= 1 + inflation_rate
            total_expenses *= 1 + inflation_rate
            if exhausted:
                break

        return {key: np.array(values, dtype=np.float64) for key, values in rows.items()}

    def calculate_money_duration(
        self,
        retirement_years: dict[str, np.ndarray],
        life_expectancy: float,
    ) -> float:
        """
        Age at which savings are effectively exhausted.

        This is the age at the end of the first year whose closing balance
        is at or below the depletion threshold, or ``life_expectancy`` if the
        money never runs out.
        """
        depleted = np.where(retirement_years["end_balance"] <= self.DEPLETION_THRESHOLD)[0]
        if len(depleted) == 0:
            return float(life_expectancy)
        return float(retirement_years["age"][depleted[0]] + 1)
