"""Mortgage variants: extra payments, biweekly payments, PMI and term length."""

import logging
from datetime import date
from typing import Any

from finance_calc.core.amortization import (
    AmortizationSchedule,
    ExtraPaymentPlan,
    compare_schedules,
    find_pmi_removal_payment,
    generate_amortization_schedule,
    generate_biweekly_schedule,
    summarize_schedule,
)
from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import calculate_future_value
from finance_calc.templates.lookup_tables import (
    PMI_DOWN_PAYMENT_SCENARIOS,
    PMI_REMOVAL_LTV,
    PMI_REQUIRED_LTV,
    TERM_COMPARISON_INVESTMENT_RATES,
)
from finance_calc.utils.dates import ANCHOR_DATE

logger = logging.getLogger(__name__)


def _payoff_figures(schedule: AmortizationSchedule) -> dict[str, Any]:
    summary = summarize_schedule(schedule)
    return {
        "payment": summary.monthly_payment,
        "total_payments": summary.total_payments,
        "total_interest": summary.total_interest,
        "number_of_payments": summary.total_months,
        "payoff_date": schedule[-1].date,
    }


class ExtraPaymentModel:
    """Savings from paying extra principal monthly, yearly or once."""

    def calculate(
        self,
        config: dict[str, Any],
        start_date: date = ANCHOR_DATE,
    ) -> dict[str, Any]:
        """
        Compare the standard schedule with one carrying extra payments.

        Args:
            config: Dictionary with keys loan_amount, interest_rate,
                loan_term_years, extra_amount, optional extra_frequency
                ('monthly', 'yearly' or 'one_time') and optional
                extra_start_date.
            start_date: First payment date.

        Returns:
            Dictionary with the monthly payment, 'standard' and 'with_extra'
            payoff figures, interest saved, payments saved, years saved and
            total extra principal paid.
        """
        extra_amount = config.get("extra_amount", 0.0)
        if extra_amount < 0:
            raise InvalidInputError(f"extra_amount must be non-negative, got {extra_amount}")

        plan = ExtraPaymentPlan(
            amount=extra_amount,
            frequency=config.get("extra_frequency", "monthly"),
            start_date=config.get("extra_start_date"),
        )
        loan = (config["loan_amount"], config["interest_rate"], config["loan_term_years"])
        standard = generate_amortization_schedule(*loan, start_date)
        accelerated = generate_amortization_schedule(*loan, start_date, extra_payment=plan)
        comparison = compare_schedules(accelerated, standard)

        return {
            "monthly_payment": standard.monthly_payment,
            "standard": _payoff_figures(standard),
            "with_extra": _payoff_figures(accelerated),
            "interest_saved": comparison.interest_saved,
            "payments_saved": comparison.alternative.months_saved,
            "years_saved": comparison.years_saved,
            "total_extra_paid": sum(e.extra_principal for e in accelerated),
        }


class BiweeklyMortgageModel:
    """Savings from paying half the monthly payment every two weeks."""

    def calculate(
        self,
        config: dict[str, Any],
        start_date: date = ANCHOR_DATE,
    ) -> dict[str, Any]:
        """
        Compare monthly and biweekly repayment of the same loan.

        Args:
            config: Dictionary with keys loan_amount, interest_rate and
                loan_term_years.
            start_date: First payment date of both schedules.

        Returns:
            Dictionary with both payments, 'monthly' and 'biweekly' payoff
            figures, interest saved and years saved.
        """
        loan = (config["loan_amount"], config["interest_rate"], config["loan_term_years"])
        monthly = generate_amortization_schedule(*loan, start_date)
        biweekly = generate_biweekly_schedule(*loan, start_date)
        comparison = compare_schedules(biweekly, monthly)

        return {
            "monthly_payment": monthly.monthly_payment,
            "biweekly_payment": biweekly.monthly_payment,
            "monthly": _payoff_figures(monthly),
            "biweekly": _payoff_figures(biweekly),
            "interest_saved": comparison.interest_saved,
            "years_saved": comparison.years_saved,
        }


class PMIModel:
    """
    Private mortgage insurance cost and removal timing.

    Insurance is charged while the loan-to-value exceeds ``required_ltv``
    and dropped once the scheduled balance reaches ``removal_ltv`` of the
    original home price.

    Args:
        down_payment_scenarios: Down payment percentages to compare.
        required_ltv: LTV above which insurance is charged, in percent.
        removal_ltv: LTV at which insurance is removed, in percent.
    """

    def __init__(
        self,
        down_payment_scenarios: tuple[float, ...] | None = None,
        required_ltv: float = PMI_REQUIRED_LTV,
        removal_ltv: float = PMI_REMOVAL_LTV,
    ) -> None:
        if down_payment_scenarios is None:
            down_payment_scenarios = PMI_DOWN_PAYMENT_SCENARIOS
        self.down_payment_scenarios = down_payment_scenarios
        self.required_ltv = required_ltv
        self.removal_ltv = removal_ltv

    def calculate(
        self,
        config: dict[str, Any],
        start_date: date = ANCHOR_DATE,
    ) -> dict[str, Any]:
        """
        Calculate insurance cost for the chosen and the scenario down payments.

        Args:
            config: Dictionary with keys home_price, down_payment,
                interest_rate, loan_term_years and pmi_rate (annual percent
                of the loan amount).
            start_date: First payment date.

        Returns:
            Dictionary with the figures of the chosen down payment and a
            'scenarios' list with the same figures per scenario percentage.
        """
        home_price = config["home_price"]
        down_payment = config["down_payment"]
        if home_price <= 0:
            raise InvalidInputError(f"home_price must be positive, got {home_price}")
        if not 0 <= down_payment < home_price:
            raise InvalidInputError("down_payment must be non-negative and less than home_price")

        loan = (config["interest_rate"], config["loan_term_years"], config["pmi_rate"])
        results = self.evaluate(home_price, down_payment, *loan, start_date)
        results["scenarios"] = [
            self.evaluate(home_price, home_price * percent / 100, *loan, start_date)
            for percent in self.down_payment_scenarios
        ]
        return results

    def evaluate(
        self,
        home_price: float,
        down_payment: float,
        interest_rate: float,
        loan_term_years: float,
        pmi_rate: float,
        start_date: date = ANCHOR_DATE,
    ) -> dict[str, Any]:
        """Insurance figures for one down payment."""
        loan_amount = home_price - down_payment
        ltv = loan_amount / home_price * 100
        schedule = generate_amortization_schedule(
            loan_amount, interest_rate, loan_term_years, start_date
        )

        pmi_required = ltv > self.required_ltv
        monthly_pmi = loan_amount * pmi_rate / 100 / 12 if pmi_required else 0.0
        removal_payment = (
            find_pmi_removal_payment(schedule, home_price, self.removal_ltv)
            if pmi_required
            else 0
        )
        if removal_payment is None:
            logger.warning("PMI removal LTV %.1f%% never reached", self.removal_ltv)
            removal_payment = len(schedule)

        return {
            "down_payment": down_payment,
            "down_payment_percent": down_payment / home_price * 100,
            "loan_amount": loan_amount,
            "ltv": ltv,
            "pmi_required": pmi_required,
            "monthly_pi": schedule.monthly_payment,
            "monthly_pmi": monthly_pmi,
            "total_monthly": schedule.monthly_payment + monthly_pmi,
            "pmi_removal_payments": removal_payment,
            "pmi_removal_years": removal_payment / 12,
            "total_pmi_cost": monthly_pmi * removal_payment,
        }


class TermComparisonModel:
    """
    Compares a short mortgage term (15 years) with a long one (30 years).

    The payment gap is also projected as a monthly investment over the long
    term at each rate in ``investment_rates``.

    Args:
        investment_rates: Annual returns in percent.
    """

    def __init__(self, investment_rates: tuple[float, ...] | None = None) -> None:
        if investment_rates is None:
            investment_rates = TERM_COMPARISON_INVESTMENT_RATES
        self.investment_rates = investment_rates

    def calculate(
        self,
        config: dict[str, Any],
        start_date: date = ANCHOR_DATE,
    ) -> dict[str, Any]:
        """
        Calculate both terms and their differences.

        Args:
            config: Dictionary with keys loan_amount and interest_rate,
                optional short_rate and long_rate overriding it per term,
                optional short_term_years (15) and long_term_years (30).
            start_date: First payment date.

        Returns:
            Dictionary with 'short' and 'long' payoff figures, interest
            savings, the extra monthly payment of the short term, years
            saved and 'investment_values' keyed by rate.
        """
        loan_amount = config["loan_amount"]
        short_years = config.get("short_term_years", 15)
        long_years = config.get("long_term_years", 30)
        if short_years >= long_years:
            raise InvalidInputError("short_term_years must be less than long_term_years")

        rate = config.get("interest_rate")
        short_rate = config.get("short_rate", rate)
        long_rate = config.get("long_rate", rate)
        if short_rate is None or long_rate is None:
            raise InvalidInputError("interest_rate or both short_rate and long_rate required")

        short = _payoff_figures(
            generate_amortization_schedule(loan_amount, short_rate, short_years, start_date)
        )
        long = _payoff_figures(
            generate_amortization_schedule(loan_amount, long_rate, long_years, start_date)
        )
        extra_monthly_payment = short["payment"] - long["payment"]

        return {
            "short": short,
            "long": long,
            "interest_savings": long["total_interest"] - short["total_interest"],
            "extra_monthly_payment": extra_monthly_payment,
            "years_saved": long_years - short_years,
            "investment_values": {
                investment_rate: calculate_future_value(
                    0.0, extra_monthly_payment, investment_rate / 12, long_years * 12
                )
                for investment_rate in self.investment_rates
            },
        }
