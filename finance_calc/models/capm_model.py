"""CAPM expected returns, alpha and risk classification."""

from typing import Any

import numpy as np

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.risk import (
    calculate_capm_expected_return,
    generate_security_market_line,
)
from finance_calc.models.return_series import ReturnSeries


class CAPMModel:
    """
    Prices a set of assets against the security market line.

    The primary asset's beta is either given directly or estimated from a
    ReturnSeries. Additional assets may carry an observed return, in which
    case alpha and an over/undervaluation verdict are reported.
    """

    def calculate(
        self,
        config: dict[str, Any],
        return_series: ReturnSeries | None = None,
    ) -> dict[str, Any]:
        """
        Calculate CAPM results.

        Args:
            config: Dictionary with keys risk_free_rate, market_return
                (percent), asset_name, asset_beta (ignored when
                ``return_series`` is given) and optional additional_assets,
                a list of dicts with name, beta and optional actual_return.
            return_series: Historical returns to estimate the beta from.

        Returns:
            Dictionary with the market risk premium, per-asset results,
            regression statistics (when estimated) and 'security_market_line'
            arrays.
        """
        risk_free_rate = config["risk_free_rate"]
        market_return = config["market_return"]
        if risk_free_rate >= market_return:
            raise InvalidInputError(
                "market_return must be greater than risk_free_rate"
            )

        regression = None
        if return_series is not None:
            beta = return_series.beta()
            correlation = return_series.correlation()
            regression = {
                "beta": beta,
                "correlation": correlation,
                "r_squared": correlation**2,
                "data_points": len(return_series),
            }
        else:
            beta = config["asset_beta"]

        main_asset = self.price_asset(
            config.get("asset_name", "Asset"), beta, risk_free_rate, market_return
        )
        additional_assets = [
            self.price_asset(
                asset["name"],
                asset["beta"],
                risk_free_rate,
                market_return,
                asset.get("actual_return"),
            )
            for asset in config.get("additional_assets", [])
        ]

        sml = generate_security_market_line(risk_free_rate, market_return)
        return {
            "market_risk_premium": market_return - risk_free_rate,
            "main_asset": main_asset,
            "additional_assets": additional_assets,
            "regression": regression,
            "security_market_line": {
                "beta": np.array([p.beta for p in sml]),
                "expected_return": np.array([p.expected_return for p in sml]),
            },
        }

    def price_asset(
        self,
        name: str,
        beta: float,
        risk_free_rate: float,
        market_return: float,
        actual_return: float | None = None,
    ) -> dict[str, Any]:
        """Expected return and risk figures for one asset."""
        expected_return = calculate_capm_expected_return(risk_free_rate, beta, market_return)
        result = {
            "name": name,
            "beta": beta,
            "expected_return": expected_return,
            "risk_premium": expected_return - risk_free_rate,
            "risk_class": self.classify_beta(beta),
            "actual_return": actual_return,
            "alpha": None,
            "valuation": None,
        }
        if actual_return is not None:
            result["alpha"] = actual_return - expected_return
            result["valuation"] = (
                "Undervalued" if actual_return > expected_return else "Overvalued"
            )
        return result

    @staticmethod
    def classify_beta(beta: float) -> str:
        if beta < 0:
            return "Defensive (Counter-cyclical)"
        if beta < 0.8:
            return "Low Risk (Defensive)"
        if beta < 1.2:
            return "Market Risk"
        if beta < 1.5:
            return "High Risk (Aggressive)"
        return "Very High Risk"
