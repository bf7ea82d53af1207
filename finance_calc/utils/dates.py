"""Calendar-month arithmetic for payment schedules."""

import calendar
from datetime import date

# Fixed first-payment date for calculators whose results only depend on
# payment order, never on the calendar.
ANCHOR_DATE = date(2000, 1, 1)


def add_months(start: date, months: int) -> date:
    """
    Return the date ``months`` calendar months after ``start``.

    The day of month is kept where the target month has it and clamped to
    the last day otherwise (Jan 31 + 1 month -> Feb 28/29).

    Args:
        start: Reference date.
        months: Number of months to add (may be negative).

    Returns:
        Shifted date.

    Example:
        >>> add_months(date(2024, 1, 31), 1)
        datetime.date(2024, 2, 29)
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
