"""Dividend income, growth and reinvestment projections."""

from typing import Any, Sequence

import numpy as np

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import calculate_cagr
from finance_calc.templates.lookup_tables import DIVIDEND_FREQUENCIES


class DividendModel:
    """
    Calculates dividend yield and projects dividend income.

    With reinvestment enabled, each year's income buys additional shares at
    a price assumed to grow at the dividend growth rate.

    Args:
        frequencies: Dividend schedule name -> frequency template.

    Example:
        >>> model = DividendModel()
        >>> results = model.calculate({
        ...     "stock_price": 100, "shares": 100, "dividend_amount": 1.0,
        ...     "dividend_frequency": "quarterly",
        ... })
        >>> results["dividend_yield"]
        4.0
    """

    def __init__(self, frequencies: dict[str, dict[str, Any]] | None = None) -> None:
        if frequencies is None:
            frequencies = DIVIDEND_FREQUENCIES
        self.frequencies = frequencies

    def calculate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Calculate dividend metrics.

        Args:
            config: Dictionary with keys stock_price, shares, dividend_amount
                (per payment), dividend_frequency, dividend_growth_rate
                (percent), projection_years, reinvest_dividends and optional
                historical_dividends (oldest first).

        Returns:
            Dictionary with annual dividend, yield, income, historical growth,
            quality metrics, payment schedule and 'projections' arrays.
        """
        stock_price = config["stock_price"]
        shares = config["shares"]
        dividend_amount = config["dividend_amount"]
        if stock_price <= 0 or shares <= 0:
            raise InvalidInputError("stock_price and shares must be positive")
        if dividend_amount <= 0:
            raise InvalidInputError(f"dividend_amount must be positive, got {dividend_amount}")

        frequency_name = config.get("dividend_frequency", "quarterly")
        if frequency_name not in self.frequencies:
            raise InvalidInputError(
                f"Unknown dividend frequency '{frequency_name}'. "
                f"Available: {list(self.frequencies)}"
            )
        frequency = self.frequencies[frequency_name]

        annual_dividend = dividend_amount * frequency["annualize"]
        dividend_yield = annual_dividend / stock_price * 100
        growth_rate = config.get("dividend_growth_rate", 0.0)

        historical_growth, average_dividend = self.analyze_history(
            config.get("historical_dividends", ())
        )

        return {
            "annual_dividend": annual_dividend,
            "dividend_yield": dividend_yield,
            "annual_income": annual_dividend * shares,
            "total_investment": stock_price * shares,
            "historical_growth_rate": historical_growth,
            "average_historical_dividend": average_dividend,
            "payment_schedule": {
                "frequency": frequency["label"],
                "payments_per_year": frequency["payments_per_year"],
                "amount_per_payment": dividend_amount * shares,
            },
            "quality_metrics": self.calculate_quality_metrics(dividend_yield, growth_rate),
            "projections": self.project_income(
                stock_price=stock_price,
                shares=shares,
                annual_dividend=annual_dividend,
                growth_rate=growth_rate,
                n_years=int(config.get("projection_years", 10)),
                reinvest=config.get("reinvest_dividends", False),
            ),
        }

    @staticmethod
    def analyze_history(
        historical_dividends: Sequence[float],
    ) -> tuple[float | None, float | None]:
        """
        Growth and mean of a dividend history.

        Returns:
            Tuple of (CAGR in percent, average dividend), both None with
            fewer than two values.
        """
        if len(historical_dividends) < 2:
            return None, None
        history = np.asarray(historical_dividends, dtype=np.float64)
        growth = calculate_cagr(history[0], history[-1], len(history) - 1)
        return growth, float(history.mean())

    @staticmethod
    def project_income(
        stock_price: float,
        shares: float,
        annual_dividend: float,
        growth_rate: float,
        n_years: int,
        reinvest: bool,
    ) -> dict[str, np.ndarray]:
        """
        Project dividend income year by year.

        Args:
            stock_price: Current share price.
            shares: Shares held today.
            annual_dividend: Current annual dividend per share.
            growth_rate: Dividend (and price) growth in percent.
            n_years: Years to project.
            reinvest: Whether income buys additional shares.

        Returns:
            Dictionary of per-year arrays.
        """
        g = growth_rate / 100
        years = np.arange(1, n_years + 1)
        dividends = annual_dividend * (1 + g) ** years
        prices = stock_price * (1 + g) ** years

        shares_held = np.zeros(n_years)
        income = np.zeros(n_years)
        current_shares = shares
        for i in range(n_years):
            income[i] = dividends[i] * current_shares
            if reinvest:
                current_shares += income[i] / prices[i]
            shares_held[i] = current_shares

        return {
            "year": years,
            "dividend": dividends,
            "shares": shares_held,
            "annual_income": income,
            "cumulative_income": np.cumsum(income),
            "yield_on_cost": dividends / stock_price * 100,
            "total_value": shares_held * prices,
        }

    @staticmethod
    def calculate_quality_metrics(dividend_yield: float, growth_rate: float) -> dict[str, str]:
        """Classify yield level, growth, sustainability and their balance."""
        if dividend_yield >= 6:
            yield_category = "High"
        elif dividend_yield >= 3:
            yield_category = "Medium"
        else:
            yield_category = "Low"

        if growth_rate >= 10:
            growth_category = "High"
        elif growth_rate >= 5:
            growth_category = "Medium"
        else:
            growth_category = "Low"

        if dividend_yield < 2:
            sustainability = "Very Sustainable"
        elif dividend_yield < 4:
            sustainability = "Sustainable"
        elif dividend_yield < 6:
            sustainability = "Moderate Risk"
        elif dividend_yield < 8:
            sustainability = "Higher Risk"
        else:
            sustainability = "Potential Yield Trap"

        score = (int(2 <= dividend_yield <= 6) + int(3 <= growth_rate <= 8)) / 2
        if score >= 1:
            balance = "Excellent Balance"
        elif score >= 0.5:
            balance = "Good Balance"
        else:
            balance = "Unbalanced"

        return {
            "yield_category": yield_category,
            "growth_category": growth_category,
            "sustainability": sustainability,
            "balance": balance,
        }
