"""Exception types raised by the calculation core."""


class FinancialCalculationError(ValueError):
    """Base exception for invalid financial calculations."""

    pass


class InvalidInputError(FinancialCalculationError):
    """Raised when an input is outside the domain of a calculation."""

    pass


class DegenerateInputError(FinancialCalculationError):
    """Raised when inputs are valid but the result is mathematically undefined."""

    pass


class ValuationAssumptionError(FinancialCalculationError):
    """Raised when valuation assumptions are economically inconsistent."""

    pass
