"""Amortization engine: payment-by-payment loan schedules."""

import itertools
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import date, timedelta

import pandas as pd

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import calculate_monthly_payment
from finance_calc.utils.dates import add_months

logger = logging.getLogger(__name__)

# Guards against extra-payment configurations that never pay the loan off
# (e.g. a negative extra payment larger than the principal portion).
MAX_PAYMENTS_MULTIPLIER = 2

# Balances at or below this are treated as paid off.
BALANCE_EPSILON = 0.01

BIWEEKLY_PERIODS_PER_YEAR = 26
BIWEEKLY_DAYS = 14
DAYS_PER_YEAR = 365.25

EXTRA_PAYMENT_FREQUENCIES = ("monthly", "yearly", "one_time")


@dataclass(frozen=True)
class LoanTerms:
    """
    Validated loan parameters.

    Args:
        principal: Amount borrowed.
        annual_rate_percent: Nominal annual rate in percent.
        term_years: Term in years.
    """

    principal: float
    annual_rate_percent: float
    term_years: float

    def __post_init__(self) -> None:
        if self.principal <= 0:
            raise InvalidInputError(f"principal must be positive, got {self.principal}")
        if self.annual_rate_percent < 0:
            raise InvalidInputError(
                f"annual_rate_percent must be non-negative, got {self.annual_rate_percent}"
            )
        if self.term_years <= 0:
            raise InvalidInputError(f"term_years must be positive, got {self.term_years}")

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / 100 / 12

    @property
    def num_payments(self) -> int:
        return int(round(self.term_years * 12))


@dataclass(frozen=True)
class PaymentScheduleEntry:
    """One monthly payment of an amortization schedule."""

    payment_number: int
    date: date
    starting_balance: float
    scheduled_payment: float
    principal_portion: float
    interest_portion: float
    extra_principal: float
    remaining_balance: float

    @property
    def total_paid(self) -> float:
        """Cash paid this month (interest + principal + extra principal)."""
        return self.principal_portion + self.interest_portion + self.extra_principal


@dataclass(frozen=True)
class AmortizationSchedule:
    """
    Ordered sequence of payments for one loan.

    ``monthly_payment`` is the level scheduled payment per period, which is
    half the monthly payment for biweekly schedules. ``converged`` is False
    only when the iteration cap stopped the schedule before the balance
    reached zero.
    """

    entries: tuple[PaymentScheduleEntry, ...]
    principal: float
    monthly_payment: float
    payments_per_year: int = 12

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PaymentScheduleEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> PaymentScheduleEntry:
        return self.entries[index]

    @property
    def converged(self) -> bool:
        return bool(self.entries) and self.entries[-1].remaining_balance == 0.0

    @property
    def total_interest(self) -> float:
        return sum(e.interest_portion for e in self.entries)

    @property
    def total_principal(self) -> float:
        """Principal repaid, including extra principal."""
        return sum(e.principal_portion + e.extra_principal for e in self.entries)

    @property
    def total_paid(self) -> float:
        return sum(e.total_paid for e in self.entries)

    def to_dataframe(self) -> pd.DataFrame:
        """Return the schedule as a DataFrame indexed by payment number."""
        columns = [
            "payment_number",
            "date",
            "starting_balance",
            "scheduled_payment",
            "principal_portion",
            "interest_portion",
            "extra_principal",
            "remaining_balance",
        ]
        df = pd.DataFrame(
            [[getattr(e, c) for c in columns] for e in self.entries],
            columns=columns,
        )
        df["total_paid"] = (
            df["principal_portion"] + df["interest_portion"] + df["extra_principal"]
        )
        return df.set_index("payment_number")


@dataclass(frozen=True)
class YearlyAmortization:
    """Schedule entries of one calendar year, summed."""

    year: int
    payments_count: int
    total_payment: float
    total_principal: float
    total_interest: float
    ending_balance: float


@dataclass(frozen=True)
class ScheduleSummary:
    """Headline figures of a schedule, optionally compared to a baseline."""

    monthly_payment: float
    total_payments: float
    total_interest: float
    interest_percentage: float
    total_months: int
    interest_saved: float | None = None
    months_saved: int | None = None


@dataclass(frozen=True)
class ExtraPaymentPlan:
    """
    Extra principal paid on top of the scheduled monthly payment.

    Args:
        amount: Extra principal per qualifying payment.
        frequency: 'monthly' pays it every month, 'yearly' once a year in the
            start month, 'one_time' only in the start month.
        start_date: First month the plan applies. Defaults to the month of
            the first scheduled payment.
    """

    amount: float
    frequency: str = "monthly"
    start_date: date | None = None

    def __post_init__(self) -> None:
        if self.frequency not in EXTRA_PAYMENT_FREQUENCIES:
            raise InvalidInputError(
                f"Unknown extra payment frequency '{self.frequency}'. "
                f"Available: {list(EXTRA_PAYMENT_FREQUENCIES)}"
            )

    def amount_for(self, payment_date: date, first_payment_date: date) -> float:
        """Extra principal due with the payment on ``payment_date``."""
        start = self.start_date or first_payment_date
        payment_month = (payment_date.year, payment_date.month)
        start_month = (start.year, start.month)
        if payment_month < start_month:
            return 0.0
        if self.frequency == "monthly":
            return self.amount
        if self.frequency == "yearly":
            return self.amount if payment_date.month == start.month else 0.0
        return self.amount if payment_month == start_month else 0.0


def _amortize(
    principal: float,
    periodic_rate: float,
    payment: float,
    payment_date: Callable[[int], date],
    extra_for: Callable[[date], float],
    max_payments: int,
) -> list[PaymentScheduleEntry]:
    """Run the payment loop shared by the monthly and biweekly schedules."""
    entries: list[PaymentScheduleEntry] = []
    balance = float(principal)

    for payment_number in range(1, max_payments + 1):
        current_date = payment_date(payment_number)
        interest = balance * periodic_rate
        principal_portion = payment - interest
        extra = extra_for(current_date)
        is_final = principal_portion + extra >= balance - BALANCE_EPSILON

        if is_final:
            # Shorten the last payment to exactly what is owed.
            if principal_portion >= balance or extra <= 0:
                principal_portion = balance
                extra = 0.0
            else:
                extra = balance - principal_portion
            remaining = 0.0
        else:
            remaining = balance - principal_portion - extra

        entries.append(
            PaymentScheduleEntry(
                payment_number=payment_number,
                date=current_date,
                starting_balance=balance,
                scheduled_payment=payment,
                principal_portion=principal_portion,
                interest_portion=interest,
                extra_principal=extra,
                remaining_balance=remaining,
            )
        )
        balance = remaining
        if is_final:
            break
    else:
        logger.warning(
            "Amortization stopped at the %d-payment cap with %.2f outstanding",
            max_payments,
            balance,
        )

    return entries


def generate_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
    start_date: date,
    extra_payment: float | ExtraPaymentPlan = 0.0,
    max_payments_multiplier: int = MAX_PAYMENTS_MULTIPLIER,
) -> AmortizationSchedule:
    """
    Generate a monthly amortization schedule.

    Each month the interest is charged on the outstanding balance, the rest of
    the scheduled payment reduces principal, and the extra payment for that
    month is applied on top as extra principal. The payment that would take
    the balance to (or below) zero is shortened so the balance lands exactly
    on zero, and the schedule ends there.

    Args:
        principal: Amount borrowed.
        annual_rate_percent: Nominal annual rate in percent.
        term_years: Original term in years.
        start_date: Date of the first payment. Later payments fall on the same
            day of following months, clamped to month end.
        extra_payment: Additional principal paid every month, or an
            ExtraPaymentPlan for yearly and one-time extras or a later start.
        max_payments_multiplier: The schedule stops after
            ``max_payments_multiplier × term_years × 12`` payments even if the
            loan is not paid off.

    Returns:
        AmortizationSchedule. If the cap is reached the partial schedule is
        returned with ``converged`` False.

    Example:
        >>> schedule = generate_amortization_schedule(300000, 6.5, 30, date(2025, 1, 1))
        >>> len(schedule), round(schedule[0].interest_portion, 2)
        (360, 1625.0)
    """
    terms = LoanTerms(principal, annual_rate_percent, term_years)
    _check_multiplier(max_payments_multiplier)
    if not isinstance(extra_payment, ExtraPaymentPlan):
        extra_payment = ExtraPaymentPlan(float(extra_payment))

    monthly_payment = calculate_monthly_payment(principal, annual_rate_percent, term_years)
    entries = _amortize(
        principal,
        terms.monthly_rate,
        monthly_payment,
        lambda n: add_months(start_date, n - 1),
        lambda d: extra_payment.amount_for(d, start_date),
        max_payments_multiplier * terms.num_payments,
    )
    return AmortizationSchedule(
        entries=tuple(entries),
        principal=float(principal),
        monthly_payment=monthly_payment,
    )


def generate_biweekly_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
    start_date: date,
    max_payments_multiplier: int = MAX_PAYMENTS_MULTIPLIER,
) -> AmortizationSchedule:
    """
    Generate a biweekly schedule paying half the monthly payment every 14 days.

    Interest accrues at annual_rate / 26 per period. The 26 half payments a
    year add up to 13 monthly payments, so the loan is repaid early.

    Args:
        principal: Amount borrowed.
        annual_rate_percent: Nominal annual rate in percent.
        term_years: Term used to size the monthly payment.
        start_date: Date of the first payment.
        max_payments_multiplier: Cap as a multiple of ``term_years × 26``.

    Returns:
        AmortizationSchedule with ``payments_per_year`` 26.
    """
    LoanTerms(principal, annual_rate_percent, term_years)
    _check_multiplier(max_payments_multiplier)

    payment = calculate_monthly_payment(principal, annual_rate_percent, term_years) / 2
    entries = _amortize(
        principal,
        annual_rate_percent / 100 / BIWEEKLY_PERIODS_PER_YEAR,
        payment,
        lambda n: start_date + timedelta(days=BIWEEKLY_DAYS * (n - 1)),
        lambda d: 0.0,
        max_payments_multiplier * int(round(term_years * BIWEEKLY_PERIODS_PER_YEAR)),
    )
    return AmortizationSchedule(
        entries=tuple(entries),
        principal=float(principal),
        monthly_payment=payment,
        payments_per_year=BIWEEKLY_PERIODS_PER_YEAR,
    )


def _check_multiplier(max_payments_multiplier: int) -> None:
    if max_payments_multiplier < 1:
        raise InvalidInputError(
            f"max_payments_multiplier must be at least 1, got {max_payments_multiplier}"
        )


def aggregate_schedule_by_year(
    schedule: AmortizationSchedule,
) -> list[YearlyAmortization]:
    """
    Sum consecutive schedule entries that share a calendar year.

    Args:
        schedule: Schedule to aggregate.

    Returns:
        One YearlyAmortization per calendar year, in schedule order.
    """
    yearly = []
    for year, group in itertools.groupby(schedule.entries, key=lambda e: e.date.year):
        rows = list(group)
        yearly.append(
            YearlyAmortization(
                year=year,
                payments_count=len(rows),
                total_payment=sum(e.total_paid for e in rows),
                total_principal=sum(e.principal_portion + e.extra_principal for e in rows),
                total_interest=sum(e.interest_portion for e in rows),
                ending_balance=rows[-1].remaining_balance,
            )
        )
    return yearly


def summarize_schedule(
    schedule: AmortizationSchedule,
    baseline: AmortizationSchedule | None = None,
) -> ScheduleSummary:
    """
    Summarize a schedule.

    Args:
        schedule: Schedule to summarize.
        baseline: Optional schedule for the same loan without extra payments.
            When given, interest and months saved versus it are reported.

    Returns:
        ScheduleSummary.
    """
    total_payments = schedule.total_paid
    total_interest = schedule.total_interest
    interest_percentage = (
        total_interest / total_payments * 100 if total_payments > 0 else 0.0
    )

    interest_saved = None
    months_saved = None
    if baseline is not None:
        interest_saved = baseline.total_interest - total_interest
        months_saved = len(baseline) - len(schedule)

    return ScheduleSummary(
        monthly_payment=schedule.monthly_payment,
        total_payments=total_payments,
        total_interest=total_interest,
        interest_percentage=interest_percentage,
        total_months=len(schedule),
        interest_saved=interest_saved,
        months_saved=months_saved,
    )


@dataclass(frozen=True)
class ScheduleComparison:
    """An alternative repayment schedule measured against a baseline."""

    baseline: ScheduleSummary
    alternative: ScheduleSummary
    baseline_payoff_date: date
    alternative_payoff_date: date

    @property
    def interest_saved(self) -> float:
        return self.baseline.total_interest - self.alternative.total_interest

    @property
    def years_saved(self) -> float:
        """Payoff date difference in years; comparable across frequencies."""
        days = (self.baseline_payoff_date - self.alternative_payoff_date).days
        return days / DAYS_PER_YEAR


def compare_schedules(
    schedule: AmortizationSchedule,
    baseline: AmortizationSchedule,
) -> ScheduleComparison:
    """
    Compare an accelerated schedule (extra or biweekly payments) to a baseline.

    Args:
        schedule: Alternative schedule for the loan.
        baseline: Standard monthly schedule for the same loan.

    Returns:
        ScheduleComparison with both summaries and payoff dates.
    """
    return ScheduleComparison(
        baseline=summarize_schedule(baseline),
        alternative=summarize_schedule(schedule, baseline=baseline),
        baseline_payoff_date=baseline[-1].date,
        alternative_payoff_date=schedule[-1].date,
    )


def find_pmi_removal_payment(
    schedule: AmortizationSchedule,
    home_value: float,
    target_ltv_percent: float,
) -> int | None:
    """
    Number of payments until the balance falls to the target loan-to-value.

    Args:
        schedule: Schedule of the insured loan.
        home_value: Original home value the LTV is measured against.
        target_ltv_percent: LTV at which mortgage insurance is dropped (78 %
            for automatic termination).

    Returns:
        Payment number after which the balance is at or below the target,
        0 when the loan starts there, or None when the schedule never gets
        there (capped schedules only).
    """
    if home_value <= 0:
        raise InvalidInputError(f"home_value must be positive, got {home_value}")

    target_balance = home_value * target_ltv_percent / 100
    if schedule.principal <= target_balance:
        return 0
    for entry in schedule:
        if entry.remaining_balance <= target_balance:
            return entry.payment_number
    return None
