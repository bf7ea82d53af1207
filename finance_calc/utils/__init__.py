"""Input parsing and date helpers."""

from finance_calc.utils.dates import ANCHOR_DATE, add_months
from finance_calc.utils.parsing import parse_amount, parse_percent, parse_returns

__all__ = [
    "ANCHOR_DATE",
    "add_months",
    "parse_amount",
    "parse_percent",
    "parse_returns",
]
