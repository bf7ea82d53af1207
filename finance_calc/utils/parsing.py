"""Strict conversion of user-entered strings into numeric values.

Calculators accept numbers only. Anything typed into a form (currency
symbols, thousands separators, ``k``/``m`` shorthand, trailing ``%``) is
converted here before it reaches the core.
"""

import math

from finance_calc.core.errors import InvalidInputError

_CURRENCY_SYMBOLS = "$€£¥"
_SUFFIX_FACTORS = {"k": 1_000.0, "m": 1_000_000.0}


def parse_amount(value: str | float | int) -> float:
    """
    Parse a monetary amount.

    Accepts plain numbers (``"500000"``), formatted values (``"$1,250.50"``)
    and shorthand suffixes (``"500k"``, ``"1.2m"``).

    Args:
        value: Raw input.

    Returns:
        Parsed amount as float.

    Raises:
        InvalidInputError: If the value is empty or not numeric.
    """
    if isinstance(value, (int, float)):
        return _require_finite(float(value), value)

    cleaned = value.strip().lower().replace(",", "")
    for symbol in _CURRENCY_SYMBOLS:
        cleaned = cleaned.replace(symbol, "")
    cleaned = cleaned.strip()
    if not cleaned:
        raise InvalidInputError(f"Invalid amount: {value!r}")

    factor = 1.0
    if cleaned[-1] in _SUFFIX_FACTORS:
        factor = _SUFFIX_FACTORS[cleaned[-1]]
        cleaned = cleaned[:-1]

    try:
        number = float(cleaned) * factor
    except ValueError as exc:
        raise InvalidInputError(f"Invalid amount: {value!r}") from exc
    return _require_finite(number, value)


def parse_percent(value: str | float | int) -> float:
    """
    Parse a percentage such as ``"6.5"`` or ``"6.5%"``.

    The result stays in percentage units (``6.5`` means 6.5 %).

    Raises:
        InvalidInputError: If the value is empty or not numeric.
    """
    if isinstance(value, (int, float)):
        return _require_finite(float(value), value)

    cleaned = value.strip().rstrip("%").strip()
    try:
        number = float(cleaned)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid percentage: {value!r}") from exc
    return _require_finite(number, value)


def parse_returns(value: str) -> list[float]:
    """
    Parse a comma-separated list of percentage returns.

    Empty input yields an empty list; any non-numeric item is an error.

    Example:
        >>> parse_returns("10, 12.5, -3")
        [10.0, 12.5, -3.0]
    """
    if not value or not value.strip():
        return []
    return [parse_percent(item) for item in value.split(",") if item.strip()]


def _require_finite(number: float, raw: object) -> float:
    if not math.isfinite(number):
        raise InvalidInputError(f"Value must be finite, got {raw!r}")
    return number
