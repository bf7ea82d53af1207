"""Calculator models built on the core math."""

from finance_calc.models.affordability_model import AffordabilityModel
from finance_calc.models.capm_model import CAPMModel
from finance_calc.models.cash_flow_model import CashFlowModel
from finance_calc.models.compound_interest_model import CompoundInterestModel
from finance_calc.models.dividend_model import DividendModel
from finance_calc.models.mortgage_options_model import (
    BiweeklyMortgageModel,
    ExtraPaymentModel,
    PMIModel,
    TermComparisonModel,
)
from finance_calc.models.portfolio_model import PortfolioModel
from finance_calc.models.refinance_model import RefinanceModel
from finance_calc.models.rent_vs_buy_model import RentVsBuyModel
from finance_calc.models.retirement_model import (
    RetirementAccountModel,
    RetirementPlanModel,
)
from finance_calc.models.return_series import ReturnSeries
from finance_calc.models.risk_assessment_model import RiskAssessmentModel
from finance_calc.models.stock_valuation_model import StockValuationModel

__all__ = [
    "AffordabilityModel",
    "BiweeklyMortgageModel",
    "CAPMModel",
    "CashFlowModel",
    "CompoundInterestModel",
    "DividendModel",
    "ExtraPaymentModel",
    "PMIModel",
    "PortfolioModel",
    "RefinanceModel",
    "RentVsBuyModel",
    "RetirementAccountModel",
    "RetirementPlanModel",
    "ReturnSeries",
    "RiskAssessmentModel",
    "StockValuationModel",
    "TermComparisonModel",
]
