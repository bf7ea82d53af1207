"""Tests for the 401(k) and retirement plan models."""

import numpy as np
import pytest

from finance_calc.core.errors import InvalidInputError
from finance_calc.models.retirement_model import (
    RetirementAccountModel,
    RetirementPlanModel,
)
from finance_calc.templates.lookup_tables import CONTRIBUTION_LIMITS


class TestRetirementAccountModel:
    """Tests for RetirementAccountModel."""

    @pytest.fixture
    def model(self) -> RetirementAccountModel:
        """Model with the 2025 contribution limits."""
        return RetirementAccountModel(CONTRIBUTION_LIMITS[2025])

    @pytest.fixture
    def plan(self) -> dict:
        """Two-year plan without growth, for hand-checkable numbers."""
        return {
            "current_age": 30,
            "retirement_age": 32,
            "current_balance": 0,
            "annual_salary": 100000,
            "contribution_percent": 10,
            "employer_match": 50,
            "match_limit": 6,
            "return_rate": 0,
            "salary_growth": 0,
            "current_tax_rate": 24,
            "retirement_tax_rate": 20,
            "inflation_rate": 0,
        }

    def test_contributions_and_match(self, model: RetirementAccountModel, plan: dict) -> None:
        """Test employee deferral and matched percentage."""
        results = model.calculate(plan)

        np.testing.assert_array_almost_equal(
            results["yearly"]["employee_contribution"], [10000, 10000]
        )
        # 50 % match on the first 6 % of salary
        np.testing.assert_array_almost_equal(results["yearly"]["employer_match"], [3000, 3000])
        assert results["final_balance"] == pytest.approx(26000)
        assert results["total_tax_savings"] == pytest.approx(4800)
        np.testing.assert_array_equal(results["yearly"]["age"], [30, 31])

    def test_mid_year_growth(self, model: RetirementAccountModel, plan: dict) -> None:
        """Test contributions earn half a year of return."""
        plan["return_rate"] = 10
        results = model.calculate(plan)
        # (0 + 13000 / 2) × 10 %
        assert results["yearly"]["interest_earned"][0] == pytest.approx(650)
        assert results["yearly"]["end_balance"][0] == pytest.approx(13650)

    def test_withdrawal_income(self, model: RetirementAccountModel, plan: dict) -> None:
        """Test 3.5 % early and 4 % standard withdrawal income."""
        results = model.calculate(plan)
        assert results["monthly_income"] == pytest.approx(26000 * 0.035 / 12)
        assert results["monthly_income_after_tax"] == pytest.approx(
            results["monthly_income"] * 0.8
        )
        assert model.calculate_monthly_income(120000, 65) == pytest.approx(400)

    def test_catch_up_limit(self, model: RetirementAccountModel) -> None:
        """Test catch-up contributions from age 50."""
        assert model.get_contribution_limit(49) == pytest.approx(23000)
        assert model.get_contribution_limit(50) == pytest.approx(30500)
        assert model.calculate_employee_contribution(100000, 40, 55) == pytest.approx(30500)
        assert model.is_maxing_out(100000, 40, 55)
        assert not model.is_maxing_out(100000, 10, 55)

    def test_salary_growth_and_real_value(
        self, model: RetirementAccountModel, plan: dict
    ) -> None:
        """Test salary growth and inflation adjustment."""
        plan["salary_growth"] = 10
        plan["inflation_rate"] = 2
        results = model.calculate(plan)
        np.testing.assert_array_almost_equal(results["yearly"]["salary"], [100000, 110000])
        assert results["final_real_value"] == pytest.approx(
            results["final_balance"] / 1.02**2
        )

    def test_no_match(self, model: RetirementAccountModel) -> None:
        """Test zero match percentage."""
        assert model.calculate_employer_match(10000, 100000, 0, 6) == 0.0

    def test_invalid_ages_raise(self, model: RetirementAccountModel, plan: dict) -> None:
        """Test retirement age must follow current age."""
        plan["retirement_age"] = 30
        with pytest.raises(InvalidInputError, match="retirement_age"):
            model.calculate(plan)


class TestRetirementPlanModel:
    """Tests for RetirementPlanModel."""

    @pytest.fixture
    def plan(self) -> dict:
        """Retiree with zero returns and inflation."""
        return {
            "current_age": 60,
            "retirement_age": 65,
            "life_expectancy": 90,
            "current_savings": 1000000,
            "monthly_contribution": 0,
            "expected_return": 0,
            "inflation_rate": 0,
            "current_expenses": 5000,
            "expense_ratio": 80,
            "social_security": 2000,
        }

    def test_on_track_plan(self, plan: dict) -> None:
        """Test a well-funded plan lasts past life expectancy."""
        results = RetirementPlanModel().calculate(plan)

        assert results["retirement_savings"] == pytest.approx(1000000)
        assert results["monthly_shortfall"] == pytest.approx(2000)
        assert results["withdrawal_rate"] == pytest.approx(2.4)
        assert results["money_lasts_until"] == 90
        assert results["is_on_track"]
        assert results["shortfall_amount"] == 0.0
        assert results["final_balance"] == pytest.approx(1000000 - 25 * 24000)
        assert len(results["retirement_years"]["age"]) == 25

    def test_depleted_plan(self, plan: dict) -> None:
        """Test the projection stops once savings run out."""
        plan["current_savings"] = 100000
        results = RetirementPlanModel().calculate(plan)
        years = results["retirement_years"]

        np.testing.assert_array_almost_equal(
            years["end_balance"], [76000, 52000, 28000, 4000, 0]
        )
        assert years["withdrawal"][-1] == pytest.approx(4000)
        assert results["money_lasts_until"] == 70
        assert not results["is_on_track"]
        assert results["shortfall_amount"] == pytest.approx(24000 * 25 - 100000)

    def test_savings_growth(self, plan: dict) -> None:
        """Test contributions accumulate until retirement."""
        plan["current_savings"] = 0
        plan["monthly_contribution"] = 1000
        results = RetirementPlanModel().calculate(plan)
        assert results["retirement_savings"] == pytest.approx(60000)

    def test_inflation_raises_withdrawals(self, plan: dict) -> None:
        """Test withdrawals rise with inflation and real balances fall."""
        plan["inflation_rate"] = 3
        results = RetirementPlanModel().calculate(plan)
        withdrawals = results["retirement_years"]["withdrawal"]
        assert withdrawals[1] == pytest.approx(withdrawals[0] * 1.03)
        years = results["retirement_years"]
        assert years["real_balance"][0] == pytest.approx(years["end_balance"][0] / 1.03)

    def test_income_covers_expenses(self, plan: dict) -> None:
        """Test no withdrawals when other income covers expenses."""
        plan["pension"] = 3000
        results = RetirementPlanModel().calculate(plan)
        assert results["annual_shortfall"] == 0.0
        assert results["withdrawal_rate"] == 0.0
        assert results["is_on_track"]

    def test_invalid_ages_raise(self, plan: dict) -> None:
        """Test life expectancy must follow retirement."""
        plan["life_expectancy"] = 65
        with pytest.raises(InvalidInputError):
            RetirementPlanModel().calculate(plan)
