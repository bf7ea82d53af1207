"""Multi-method stock valuation with a buy/hold/sell rating."""

import logging
from typing import Any

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.valuation import (
    ValuationEstimate,
    ValuationMethod,
    calculate_comparable_valuation,
    calculate_composite_fair_value,
    calculate_dcf,
    calculate_dividend_discount_model,
    calculate_multiple_valuation,
    calculate_pe_valuation,
)
from finance_calc.templates.lookup_tables import (
    DEFAULT_SECTOR_MULTIPLE,
    SECTOR_PB_RATIOS,
    SECTOR_PS_RATIOS,
)

logger = logging.getLogger(__name__)


class StockValuationModel:
    """
    Values a stock per share by DCF, P/E, DDM, P/B, P/S and comparables.

    DDM applies only to dividend payers, P/B and P/S only when book value or
    revenue per share is positive, and comparables only when at least one
    comparable company has a positive price and EPS. The fair value is the
    mean of the applicable methods.

    Args:
        sector_pb_ratios: Sector -> price-to-book multiple.
        sector_ps_ratios: Sector -> price-to-sales multiple.
        default_multiple: Multiple used for sectors missing from a table.
    """

    def __init__(
        self,
        sector_pb_ratios: dict[str, float] | None = None,
        sector_ps_ratios: dict[str, float] | None = None,
        default_multiple: float = DEFAULT_SECTOR_MULTIPLE,
    ) -> None:
        if sector_pb_ratios is None:
            sector_pb_ratios = SECTOR_PB_RATIOS
        self.sector_pb_ratios = sector_pb_ratios
        if sector_ps_ratios is None:
            sector_ps_ratios = SECTOR_PS_RATIOS
        self.sector_ps_ratios = sector_ps_ratios
        self.default_multiple = default_multiple

    def calculate(self, stock_config: dict[str, Any]) -> dict[str, Any]:
        """
        Calculate the valuation.

        Args:
            stock_config: Dictionary with keys current_price, eps,
                earnings_growth, discount_rate, terminal_growth,
                projection_years, pe_ratio (target), dividend,
                dividend_growth, book_value, revenue (per share), sector,
                margin_of_safety (percent) and comparable_companies, a list
                of dicts with price and eps.

        Returns:
            Dictionary with each method's value (None when inapplicable),
            the DCF breakdown, fair value, target price, upside, rating and
            current market multiples.
        """
        current_price = stock_config["current_price"]
        eps = stock_config["eps"]
        if current_price <= 0:
            raise InvalidInputError(f"current_price must be positive, got {current_price}")
        if eps <= 0:
            raise InvalidInputError(f"eps must be positive, got {eps}")

        discount_rate = stock_config["discount_rate"]
        earnings_growth = stock_config.get("earnings_growth", 0.0)
        dividend = stock_config.get("dividend", 0.0)
        book_value = stock_config.get("book_value", 0.0)
        revenue = stock_config.get("revenue", 0.0)
        sector = stock_config.get("sector", "")

        dcf = calculate_dcf(
            eps,
            earnings_growth,
            discount_rate,
            stock_config.get("terminal_growth", 2.5),
            int(stock_config.get("projection_years", 5)),
        )
        comparable_pe_ratios = self.comparable_pe_ratios(
            stock_config.get("comparable_companies", [])
        )

        estimates = [
            ValuationEstimate(ValuationMethod.DCF, dcf.total_value),
            ValuationEstimate(
                ValuationMethod.PE,
                calculate_pe_valuation(eps, earnings_growth, stock_config["pe_ratio"]),
            ),
            ValuationEstimate(
                ValuationMethod.DDM,
                calculate_dividend_discount_model(
                    dividend, stock_config.get("dividend_growth", 0.0), discount_rate
                )
                if dividend > 0
                else None,
            ),
            ValuationEstimate(
                ValuationMethod.PB,
                calculate_multiple_valuation(
                    book_value, self.sector_pb_ratios.get(sector, self.default_multiple)
                )
                if book_value > 0
                else None,
            ),
            ValuationEstimate(
                ValuationMethod.PS,
                calculate_multiple_valuation(
                    revenue, self.sector_ps_ratios.get(sector, self.default_multiple)
                )
                if revenue > 0
                else None,
            ),
            ValuationEstimate(
                ValuationMethod.COMPARABLE,
                calculate_comparable_valuation(eps, comparable_pe_ratios),
            ),
        ]

        fair_value = calculate_composite_fair_value(estimates)
        target_price = None
        upside = None
        rating = None
        if fair_value is not None:
            target_price = fair_value * (1 - stock_config.get("margin_of_safety", 0.0) / 100)
            upside = (fair_value - current_price) / current_price * 100
            rating = self.rate(current_price, target_price, upside)
        else:
            logger.info("No valuation method applies; fair value is undefined")

        results = {f"{e.method.value}_value": e.value for e in estimates}
        results.update(
            {
                "dcf": dcf,
                "fair_value": fair_value,
                "target_price": target_price,
                "upside": upside,
                "rating": rating,
                "current_pe": current_price / eps,
                "current_pb": current_price / book_value if book_value > 0 else None,
                "current_ps": current_price / revenue if revenue > 0 else None,
                "dividend_yield": dividend / current_price * 100 if dividend > 0 else None,
            }
        )
        return results

    @staticmethod
    def comparable_pe_ratios(companies: list[dict[str, float]]) -> list[float]:
        """P/E ratios of comparables with a positive price and EPS."""
        return [
            company["price"] / company["eps"]
            for company in companies
            if company.get("price", 0) > 0 and company.get("eps", 0) > 0
        ]

    @staticmethod
    def rate(current_price: float, target_price: float, upside: float) -> str:
        """
        Rating from the price relative to target and fair value.

        Args:
            current_price: Market price.
            target_price: Fair value after the margin of safety.
            upside: Fair value over current price, in percent.
        """
        if current_price <= target_price:
            return "Strong Buy"
        if upside > 15:
            return "Buy"
        if upside > -10:
            return "Hold"
        return "Sell"
