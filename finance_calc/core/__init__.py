"""Core financial math: payments, amortization, affordability, risk, valuation."""

from finance_calc.core.affordability import (
    AffordabilityResult,
    find_max_affordable_price,
)
from finance_calc.core.amortization import (
    AmortizationSchedule,
    ExtraPaymentPlan,
    LoanTerms,
    PaymentScheduleEntry,
    ScheduleComparison,
    aggregate_schedule_by_year,
    compare_schedules,
    find_pmi_removal_payment,
    generate_amortization_schedule,
    generate_biweekly_schedule,
    summarize_schedule,
)
from finance_calc.core.errors import (
    DegenerateInputError,
    FinancialCalculationError,
    InvalidInputError,
    ValuationAssumptionError,
)
from finance_calc.core.payments import (
    calculate_cagr,
    calculate_effective_annual_rate,
    calculate_future_value,
    calculate_monthly_payment,
    calculate_present_value,
)
from finance_calc.core.risk import (
    RiskMetrics,
    calculate_beta,
    calculate_correlation,
    calculate_portfolio_volatility,
    calculate_risk_metrics,
    calculate_sharpe_ratio,
    generate_efficient_frontier,
)
from finance_calc.core.valuation import (
    DCFResult,
    ValuationEstimate,
    ValuationMethod,
    calculate_composite_fair_value,
    calculate_dcf,
    calculate_dividend_discount_model,
)

__all__ = [
    "AffordabilityResult",
    "find_max_affordable_price",
    "AmortizationSchedule",
    "ExtraPaymentPlan",
    "LoanTerms",
    "PaymentScheduleEntry",
    "ScheduleComparison",
    "aggregate_schedule_by_year",
    "compare_schedules",
    "find_pmi_removal_payment",
    "generate_amortization_schedule",
    "generate_biweekly_schedule",
    "summarize_schedule",
    "DegenerateInputError",
    "FinancialCalculationError",
    "InvalidInputError",
    "ValuationAssumptionError",
    "calculate_cagr",
    "calculate_effective_annual_rate",
    "calculate_future_value",
    "calculate_monthly_payment",
    "calculate_present_value",
    "RiskMetrics",
    "calculate_beta",
    "calculate_correlation",
    "calculate_portfolio_volatility",
    "calculate_risk_metrics",
    "calculate_sharpe_ratio",
    "generate_efficient_frontier",
    "DCFResult",
    "ValuationEstimate",
    "ValuationMethod",
    "calculate_composite_fair_value",
    "calculate_dcf",
    "calculate_dividend_discount_model",
]
