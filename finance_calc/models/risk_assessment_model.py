"""Risk tolerance questionnaire and portfolio diversification review."""

from typing import Any

from finance_calc.core.errors import InvalidInputError
from finance_calc.models.portfolio_model import PortfolioModel
from finance_calc.templates.lookup_tables import (
    ASSET_CLASS_VOLATILITIES,
    RECOMMENDED_ALLOCATIONS,
    RISK_AGE_DEFAULT_SCORE,
    RISK_AGE_SCORES,
    RISK_FACTOR_SCORES,
    RISK_PROFILE_LEVELS,
)

ASSET_CLASSES = ("stock", "bond", "cash", "alternative")


class RiskAssessmentModel:
    """
    Scores an investor's risk tolerance and reviews their current portfolio.

    The questionnaire awards points for age and for each answer in
    ``factor_scores``; the total out of 100 maps to a profile through
    ``profile_levels``. Unanswered questions score zero.

    Args:
        factor_scores: Question -> answer -> points.
        age_scores: (maximum age, points) bands, checked in order.
        profile_levels: (maximum percentage, profile) bands.
        recommended_allocations: Profile -> asset class -> percent.
        asset_class_volatilities: Asset class -> volatility in percent.
    """

    MAX_SCORE = 100
    VERY_AGGRESSIVE = "Very Aggressive"
    FALLBACK_PROFILE = "Moderate"

    def __init__(
        self,
        factor_scores: dict[str, dict[str, int]] | None = None,
        age_scores: tuple[tuple[int, int], ...] | None = None,
        profile_levels: tuple[tuple[float, str], ...] | None = None,
        recommended_allocations: dict[str, dict[str, float]] | None = None,
        asset_class_volatilities: dict[str, float] | None = None,
    ) -> None:
        if factor_scores is None:
            factor_scores = RISK_FACTOR_SCORES
        if age_scores is None:
            age_scores = RISK_AGE_SCORES
        if profile_levels is None:
            profile_levels = RISK_PROFILE_LEVELS
        if recommended_allocations is None:
            recommended_allocations = RECOMMENDED_ALLOCATIONS
        if asset_class_volatilities is None:
            asset_class_volatilities = ASSET_CLASS_VOLATILITIES
        self.factor_scores = factor_scores
        self.age_scores = age_scores
        self.profile_levels = profile_levels
        self.recommended_allocations = recommended_allocations
        self.portfolio_model = PortfolioModel(asset_class_volatilities=asset_class_volatilities)

    def calculate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Score the questionnaire and analyze the portfolio.

        Args:
            config: Dictionary with key age, questionnaire answers keyed as in
                ``factor_scores`` (experience, timeline, risk_capacity,
                volatility_comfort, investment_goals), and optionally
                portfolio_value with stock_allocation, bond_allocation,
                cash_allocation, alternative_allocation, domestic_allocation
                and international_allocation (percent).

        Returns:
            Dictionary with 'profile', 'recommended_allocation' and
            'portfolio' (None without a portfolio value or allocation).
        """
        profile = self.score_risk_profile(config)
        return {
            "profile": profile,
            "recommended_allocation": self.get_recommended_allocation(profile["level"]),
            "portfolio": self.analyze_portfolio(config),
        }

    def score_risk_profile(self, answers: dict[str, Any]) -> dict[str, Any]:
        """
        Total questionnaire points and the resulting profile.

        Raises:
            InvalidInputError: For an answer missing from its score table.
        """
        factors = {"age": self.score_age(answers["age"])}
        for question, table in self.factor_scores.items():
            answer = answers.get(question)
            if answer is None:
                factors[question] = 0
            elif answer in table:
                factors[question] = table[answer]
            else:
                raise InvalidInputError(
                    f"Unknown {question} answer '{answer}'. Available: {list(table)}"
                )

        score = sum(factors.values())
        percentage = score / self.MAX_SCORE * 100
        return {
            "score": score,
            "max_score": self.MAX_SCORE,
            "percentage": percentage,
            "level": self.classify_profile(percentage),
            "factors": factors,
        }

    def score_age(self, age: float) -> int:
        for max_age, points in self.age_scores:
            if age <= max_age:
                return points
        return RISK_AGE_DEFAULT_SCORE

    def classify_profile(self, percentage: float) -> str:
        for max_percentage, level in self.profile_levels:
            if percentage <= max_percentage:
                return level
        return self.VERY_AGGRESSIVE

    def get_recommended_allocation(self, level: str) -> dict[str, float]:
        """Model portfolio for a profile; unknown profiles get the moderate mix."""
        if level in self.recommended_allocations:
            return self.recommended_allocations[level]
        return self.recommended_allocations[self.FALLBACK_PROFILE]

    def analyze_portfolio(self, config: dict[str, Any]) -> dict[str, Any] | None:
        """Risk, diversification and notes for the current portfolio."""
        if config.get("portfolio_value", 0.0) <= 0:
            return None
        allocations = {
            name: config.get(f"{name}_allocation", 0.0) for name in ASSET_CLASSES
        }
        total_allocation = sum(allocations.values())
        if total_allocation <= 0:
            return None

        domestic = config.get("domestic_allocation", 0.0)
        international = config.get("international_allocation", 0.0)
        portfolio_risk = self.portfolio_model.calculate_allocation_risk(allocations)
        diversification = self.calculate_diversification_score(
            allocations, domestic, international
        )

        return {
            "total_allocation": total_allocation,
            "geographic_total": domestic + international,
            "portfolio_risk": portfolio_risk,
            "diversification_score": diversification,
            "allocation_analysis": self.analyze_allocation(
                allocations, domestic, international
            ),
            "recommendations": self.portfolio_recommendations(
                portfolio_risk, diversification
            ),
        }

    @staticmethod
    def calculate_diversification_score(
        allocations: dict[str, float],
        domestic: float = 0.0,
        international: float = 0.0,
    ) -> int:
        """
        Diversification score out of 100.

        Up to 40 points for the number of asset classes held, 30 for the
        largest class staying at or below 70 % and 30 for a 20-50 %
        international share.
        """
        total = sum(allocations.values())
        if total <= 0:
            return 0

        held = sum(1 for value in allocations.values() if value > 0)
        if held >= 3:
            score = 40
        elif held == 2:
            score = 25
        else:
            score = 10

        largest = max(allocations.values()) / total * 100
        if largest <= 70:
            score += 30
        elif largest <= 80:
            score += 20
        elif largest <= 90:
            score += 10

        geographic_total = domestic + international
        if geographic_total > 0:
            international_share = international / geographic_total * 100
            if 20 <= international_share <= 50:
                score += 30
            elif international_share >= 10:
                score += 20
            elif international_share > 0:
                score += 10

        return min(score, 100)

    @staticmethod
    def analyze_allocation(
        allocations: dict[str, float],
        domestic: float = 0.0,
        international: float = 0.0,
    ) -> dict[str, list[str]]:
        """Strengths, weaknesses and suggestions for an allocation."""
        analysis: dict[str, list[str]] = {"strengths": [], "weaknesses": [], "suggestions": []}
        total = sum(allocations.values())
        if total <= 0:
            analysis["weaknesses"].append("No portfolio allocation specified")
            return analysis

        stock = allocations.get("stock", 0.0) / total * 100
        bond = allocations.get("bond", 0.0) / total * 100
        cash = allocations.get("cash", 0.0) / total * 100

        if stock >= 60:
            analysis["strengths"].append("Strong growth potential with significant stock allocation")
        elif stock <= 30:
            analysis["weaknesses"].append("Limited growth potential with low stock allocation")
            analysis["suggestions"].append("Consider increasing stock allocation for long-term growth")

        if 20 <= bond <= 50:
            analysis["strengths"].append("Good stability with appropriate bond allocation")
        elif bond > 60:
            analysis["weaknesses"].append("Overly conservative with excessive bond allocation")
            analysis["suggestions"].append("Consider reducing bonds for better growth potential")

        if cash > 20:
            analysis["weaknesses"].append("Excessive cash allocation may hurt long-term returns")
            analysis["suggestions"].append("Consider investing excess cash for better returns")
        elif cash >= 5:
            analysis["strengths"].append("Appropriate cash buffer for liquidity needs")

        geographic_total = domestic + international
        if geographic_total > 0:
            international_share = international / geographic_total * 100
            if international_share >= 20:
                analysis["strengths"].append("Good geographic diversification")
            elif international_share > 0:
                analysis["suggestions"].append(
                    "Consider increasing international exposure for better diversification"
                )
            else:
                analysis["weaknesses"].append("No international diversification")
                analysis["suggestions"].append(
                    "Add international investments to reduce geographic risk"
                )

        return analysis

    @staticmethod
    def portfolio_recommendations(
        portfolio_risk: float, diversification_score: int
    ) -> list[dict[str, str]]:
        recommendations = []
        if portfolio_risk > 15:
            recommendations.append(
                {"type": "warning", "title": "High Portfolio Risk",
                 "message": "Consider adding bonds or cash for stability."}
            )
        elif portfolio_risk < 5:
            recommendations.append(
                {"type": "info", "title": "Low Portfolio Risk",
                 "message": "Consider adding stocks for growth potential."}
            )

        if diversification_score < 50:
            recommendations.append(
                {"type": "warning", "title": "Poor Diversification",
                 "message": "Spread investments across more asset classes."}
            )
        elif diversification_score >= 80:
            recommendations.append(
                {"type": "success", "title": "Excellent Diversification",
                 "message": "Holdings are well spread across asset classes."}
            )
        return recommendations
