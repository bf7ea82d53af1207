"""
Financial calculator math core.

Closed-form and iterative personal-finance and investment math:
- Loan payments and payment-by-payment amortization schedules
- Maximum affordable home price under a monthly budget
- Beta, correlation and portfolio risk metrics
- DCF, dividend discount and multiple-based stock valuation
- Calculator models (401k, retirement, refinance, rent vs. buy, ...)
"""

from finance_calc.core.amortization import generate_amortization_schedule
from finance_calc.core.affordability import find_max_affordable_price
from finance_calc.core.errors import FinancialCalculationError
from finance_calc.core.payments import calculate_monthly_payment

__version__ = "1.0.0"
__all__ = [
    "FinancialCalculationError",
    "calculate_monthly_payment",
    "find_max_affordable_price",
    "generate_amortization_schedule",
]
