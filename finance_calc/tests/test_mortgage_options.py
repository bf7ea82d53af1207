"""Tests for extra payment, biweekly, PMI and term comparison models."""

from datetime import date

import pytest

from finance_calc.core.amortization import (
    find_pmi_removal_payment,
    generate_amortization_schedule,
)
from finance_calc.core.errors import InvalidInputError
from finance_calc.core.payments import calculate_future_value, calculate_monthly_payment
from finance_calc.models import (
    BiweeklyMortgageModel,
    ExtraPaymentModel,
    PMIModel,
    TermComparisonModel,
)
from finance_calc.utils.dates import ANCHOR_DATE


class TestExtraPaymentModel:
    """Tests for ExtraPaymentModel."""

    @pytest.fixture
    def loan(self) -> dict:
        """200k at 6 % over 30 years with 200 extra a month."""
        return {
            "loan_amount": 200000,
            "interest_rate": 6,
            "loan_term_years": 30,
            "extra_amount": 200,
        }

    def test_monthly_extra_savings(self, loan: dict) -> None:
        """Test monthly extras save interest and payments."""
        results = ExtraPaymentModel().calculate(loan)

        assert results["monthly_payment"] == pytest.approx(
            calculate_monthly_payment(200000, 6, 30)
        )
        assert results["standard"]["number_of_payments"] == 360
        assert results["with_extra"]["number_of_payments"] < 360
        assert results["interest_saved"] == pytest.approx(
            results["standard"]["total_interest"] - results["with_extra"]["total_interest"]
        )
        assert results["payments_saved"] == 360 - results["with_extra"]["number_of_payments"]
        assert results["years_saved"] == pytest.approx(results["payments_saved"] / 12, abs=0.1)

    def test_one_time_extra(self, loan: dict) -> None:
        """Test a single lump sum in the chosen month."""
        loan.update(
            {"extra_amount": 10000, "extra_frequency": "one_time", "extra_start_date": date(2000, 6, 1)}
        )
        results = ExtraPaymentModel().calculate(loan)
        assert results["total_extra_paid"] == pytest.approx(10000)
        assert results["interest_saved"] > 0

    def test_yearly_extra_total(self, loan: dict) -> None:
        """Test yearly extras are paid once per year until payoff."""
        loan.update({"extra_amount": 1000, "extra_frequency": "yearly"})
        results = ExtraPaymentModel().calculate(loan)
        payments = results["with_extra"]["number_of_payments"]
        assert results["total_extra_paid"] <= 1000 * (payments // 12 + 1)
        assert results["total_extra_paid"] >= 1000 * (payments // 12 - 1)

    def test_negative_extra_raises(self, loan: dict) -> None:
        """Test negative extra payments are rejected."""
        loan["extra_amount"] = -50
        with pytest.raises(InvalidInputError, match="extra_amount"):
            ExtraPaymentModel().calculate(loan)


class TestBiweeklyMortgageModel:
    """Tests for BiweeklyMortgageModel."""

    def test_biweekly_savings(self) -> None:
        """Test half payments every two weeks repay early."""
        results = BiweeklyMortgageModel().calculate(
            {"loan_amount": 300000, "interest_rate": 6.5, "loan_term_years": 30}
        )

        assert results["biweekly_payment"] == pytest.approx(results["monthly_payment"] / 2)
        assert results["interest_saved"] > 0
        assert results["years_saved"] > 0
        assert results["biweekly"]["payoff_date"] < results["monthly"]["payoff_date"]
        assert results["monthly"]["payoff_date"] == date(2029, 12, 1)


class TestPMIModel:
    """Tests for PMIModel."""

    @pytest.fixture
    def purchase(self) -> dict:
        """300k home with 5 % down and 0.5 % PMI."""
        return {
            "home_price": 300000,
            "down_payment": 15000,
            "interest_rate": 6,
            "loan_term_years": 30,
            "pmi_rate": 0.5,
        }

    def test_pmi_cost_and_removal(self, purchase: dict) -> None:
        """Test monthly PMI and its removal at 78 % LTV."""
        results = PMIModel().calculate(purchase)
        schedule = generate_amortization_schedule(285000, 6, 30, ANCHOR_DATE)
        removal = find_pmi_removal_payment(schedule, 300000, 78)

        assert results["ltv"] == pytest.approx(95)
        assert results["pmi_required"]
        assert results["monthly_pmi"] == pytest.approx(118.75)
        assert results["total_monthly"] == pytest.approx(schedule.monthly_payment + 118.75)
        assert results["pmi_removal_payments"] == removal
        assert results["total_pmi_cost"] == pytest.approx(118.75 * removal)

    def test_scenarios(self, purchase: dict) -> None:
        """Test 20 % down and above carries no PMI."""
        scenarios = PMIModel().calculate(purchase)["scenarios"]

        assert [s["down_payment_percent"] for s in scenarios] == pytest.approx(
            [3, 5, 10, 15, 20, 25]
        )
        for scenario in scenarios:
            assert scenario["pmi_required"] == (scenario["ltv"] > 80)
        assert scenarios[4]["monthly_pmi"] == 0.0
        assert scenarios[4]["pmi_removal_payments"] == 0
        assert scenarios[0]["total_pmi_cost"] > scenarios[1]["total_pmi_cost"]

    def test_custom_scenarios(self, purchase: dict) -> None:
        """Test injected scenario percentages."""
        results = PMIModel(down_payment_scenarios=(10.0,)).calculate(purchase)
        assert len(results["scenarios"]) == 1

    def test_down_payment_must_be_below_price(self, purchase: dict) -> None:
        """Test invalid down payment raises."""
        purchase["down_payment"] = 300000
        with pytest.raises(InvalidInputError, match="down_payment"):
            PMIModel().calculate(purchase)


class TestTermComparisonModel:
    """Tests for TermComparisonModel."""

    def test_same_rate_comparison(self) -> None:
        """Test 15 vs 30 years at one rate."""
        results = TermComparisonModel().calculate({"loan_amount": 300000, "interest_rate": 6})
        short_payment = calculate_monthly_payment(300000, 6, 15)
        long_payment = calculate_monthly_payment(300000, 6, 30)

        assert results["short"]["payment"] == pytest.approx(short_payment)
        assert results["long"]["payment"] == pytest.approx(long_payment)
        assert results["long"]["total_interest"] == pytest.approx(
            long_payment * 360 - 300000, abs=1
        )
        assert results["interest_savings"] > 0
        assert results["extra_monthly_payment"] == pytest.approx(short_payment - long_payment)
        assert results["years_saved"] == 15

    def test_investment_values(self) -> None:
        """Test the payment gap invested over the long term."""
        results = TermComparisonModel().calculate({"loan_amount": 300000, "interest_rate": 6})
        extra = results["extra_monthly_payment"]

        assert set(results["investment_values"]) == {7.0, 8.0, 10.0}
        assert results["investment_values"][7.0] == pytest.approx(
            calculate_future_value(0, extra, 7 / 12, 360)
        )

    def test_different_rates(self) -> None:
        """Test separate rates per term."""
        results = TermComparisonModel(investment_rates=()).calculate(
            {"loan_amount": 300000, "short_rate": 5.5, "long_rate": 6.5}
        )
        assert results["short"]["payment"] == pytest.approx(
            calculate_monthly_payment(300000, 5.5, 15)
        )
        assert results["investment_values"] == {}

    def test_invalid_terms_raise(self) -> None:
        """Test the short term must be shorter."""
        with pytest.raises(InvalidInputError, match="short_term_years"):
            TermComparisonModel().calculate(
                {"loan_amount": 300000, "interest_rate": 6, "short_term_years": 30}
            )
