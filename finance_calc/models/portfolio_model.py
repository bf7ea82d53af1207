"""Stock/bond allocation recommendation and portfolio risk."""

from typing import Any

import numpy as np

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.risk import (
    calculate_risk_metrics,
    generate_efficient_frontier,
    normalize_weights,
)
from finance_calc.templates.lookup_tables import (
    ALLOCATION_ADJUSTMENTS,
    ASSET_CLASS_VOLATILITIES,
)


class PortfolioModel:
    """
    Recommends a two-asset allocation and measures its risk.

    The recommended stock weight blends an age rule (100 - age, bounded to
    20-90 %) with a 60/40 baseline, then adds adjustments for risk tolerance,
    time horizon and goal. The result is bounded to 10-90 %.

    Args:
        adjustments: Adjustment tables keyed by 'risk_tolerance',
            'time_horizon' and 'goal'.
        asset_class_volatilities: Asset class -> volatility in percent, used
            by calculate_allocation_risk.
    """

    BASE_STOCK_WEIGHT = 0.6
    AGE_RULE_WEIGHT = 0.4
    MIN_STOCK_WEIGHT = 0.1
    MAX_STOCK_WEIGHT = 0.9
    DEFAULT_RISK_FREE_RATE = 2.0

    def __init__(
        self,
        adjustments: dict[str, dict[str, float]] | None = None,
        asset_class_volatilities: dict[str, float] | None = None,
    ) -> None:
        if adjustments is None:
            adjustments = ALLOCATION_ADJUSTMENTS
        self.adjustments = adjustments
        if asset_class_volatilities is None:
            asset_class_volatilities = ASSET_CLASS_VOLATILITIES
        self.asset_class_volatilities = asset_class_volatilities

    def calculate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Calculate allocation, risk metrics and the efficient frontier.

        Args:
            config: Dictionary with keys current_age, target_age,
                investment_amount, risk_tolerance, time_horizon,
                investment_goal, expected_stock_return, expected_bond_return,
                stock_volatility, bond_volatility, correlation, optional
                risk_free_rate and optional custom_stock_allocation (percent;
                overrides the recommendation).

        Returns:
            Dictionary with allocation, amounts, risk metrics, ratings and
            'efficient_frontier' arrays.
        """
        current_age = config["current_age"]
        target_age = config["target_age"]
        if current_age >= target_age:
            raise InvalidInputError("target_age must be greater than current_age")

        custom = config.get("custom_stock_allocation")
        if custom is not None:
            if not 0 <= custom <= 100:
                raise InvalidInputError(
                    f"custom_stock_allocation must be in [0, 100], got {custom}"
                )
            stock_weight = custom / 100
        else:
            stock_weight = self.recommend_stock_weight(
                current_age=current_age,
                target_age=target_age,
                risk_tolerance=config.get("risk_tolerance", "moderate"),
                time_horizon=config.get("time_horizon", "long"),
                goal=config.get("investment_goal", "retirement"),
            )
        weights = (stock_weight, 1.0 - stock_weight)

        returns = (config["expected_stock_return"], config["expected_bond_return"])
        volatilities = (config["stock_volatility"], config["bond_volatility"])
        correlation = config.get("correlation", 0.0)

        metrics = calculate_risk_metrics(
            weights,
            returns,
            volatilities,
            correlation,
            risk_free_rate=config.get("risk_free_rate", self.DEFAULT_RISK_FREE_RATE),
        )
        frontier = generate_efficient_frontier(
            returns[0], returns[1], volatilities[0], volatilities[1], correlation
        )
        investment_amount = config.get("investment_amount", 0.0)

        return {
            "stock_allocation": stock_weight,
            "bond_allocation": 1.0 - stock_weight,
            "is_custom": custom is not None,
            "stock_amount": stock_weight * investment_amount,
            "bond_amount": (1.0 - stock_weight) * investment_amount,
            "expected_return": metrics.expected_return,
            "volatility": metrics.volatility,
            "sharpe_ratio": metrics.sharpe_ratio,
            "value_at_risk": metrics.value_at_risk,
            "max_drawdown": metrics.max_drawdown,
            "risk_level": self.classify_risk_level(metrics.volatility),
            "quality_rating": self.rate_sharpe_ratio(metrics.sharpe_ratio),
            "efficient_frontier": {
                "weight_stock": np.array([p.weight_stock for p in frontier]),
                "risk": np.array([p.risk for p in frontier]),
                "expected_return": np.array([p.expected_return for p in frontier]),
            },
        }

    def recommend_stock_weight(
        self,
        current_age: float,
        target_age: float,
        risk_tolerance: str,
        time_horizon: str,
        goal: str,
    ) -> float:
        """
        Recommended stock weight as a fraction.

        Unknown category names contribute no adjustment. An education goal
        leans into stocks only when more than ten years remain.
        """
        age_rule = np.clip((100 - current_age) / 100, 0.2, 0.9)
        weight = self.AGE_RULE_WEIGHT * age_rule + (1 - self.AGE_RULE_WEIGHT) * self.BASE_STOCK_WEIGHT

        weight += self.adjustments["risk_tolerance"].get(risk_tolerance, 0.0)
        weight += self.adjustments["time_horizon"].get(time_horizon, 0.0)
        if goal == "education":
            weight += 0.1 if target_age - current_age > 10 else -0.2
        else:
            weight += self.adjustments["goal"].get(goal, 0.0)

        return float(np.clip(weight, self.MIN_STOCK_WEIGHT, self.MAX_STOCK_WEIGHT))

    def calculate_allocation_risk(self, allocations: dict[str, float]) -> float:
        """
        Rough volatility of a multi-asset allocation, in percent.

        Allocations (any scale, e.g. percent) are normalized and each asset
        class contributes its weighted long-run volatility.

        Raises:
            InvalidInputError: For an unknown asset class or zero total.
        """
        unknown = [name for name in allocations if name not in self.asset_class_volatilities]
        if unknown:
            raise InvalidInputError(
                f"Unknown asset classes {unknown}. "
                f"Available: {list(self.asset_class_volatilities)}"
            )
        names = list(allocations)
        weights = normalize_weights([allocations[name] for name in names])
        volatilities = np.array([self.asset_class_volatilities[name] for name in names])
        return float(weights @ volatilities)

    @staticmethod
    def classify_risk_level(volatility: float) -> str:
        if volatility < 8:
            return "Conservative"
        if volatility < 12:
            return "Moderate"
        if volatility < 16:
            return "Aggressive"
        return "Very Aggressive"

    @staticmethod
    def rate_sharpe_ratio(sharpe_ratio: float) -> str:
        if sharpe_ratio > 1.0:
            return "Excellent"
        if sharpe_ratio > 0.5:
            return "Good"
        if sharpe_ratio > 0.0:
            return "Fair"
        return "Poor"
