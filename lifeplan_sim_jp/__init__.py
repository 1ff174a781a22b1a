"""Household Life-Plan Cash-Flow Simulation Package."""

from lifeplan_sim_jp.params import (
    HouseholdPlan,
    PersonConfig,
    LoanConfig,
    PropertyConfig,
    ChildConfig,
    EducationPath,
    InvestmentVehicle,
    ExpenseItem,
    LeaveConfig,
    JitanConfig,
    SideBusinessConfig,
    RetirementConfig,
    PensionConfig,
    DeathConfig,
    InsuranceConfig,
    HORIZON_YEARS,
    MAN,
    normalize_plan,
    get_block_rate,
)
from lifeplan_sim_jp.mortgage import calc_mortgage, build_mortgage_schedule
from lifeplan_sim_jp.property_tax import calc_fixed_asset_tax_schedule
from lifeplan_sim_jp.tax import (
    estimate_net_income,
    calc_loan_tax_deduction,
    calc_retirement_income_deduction,
    calc_retirement_income_tax,
)
from lifeplan_sim_jp.education import calc_education_costs, calc_child_allowance
from lifeplan_sim_jp.pension import (
    SurvivorPension,
    calc_survivor_pension,
    estimate_pension_monthly,
)
from lifeplan_sim_jp.income import (
    AnnualIncome,
    IncomeBreakdown,
    calc_adjusted_net_income,
    project_household_income,
)
from lifeplan_sim_jp.simulation import calc_assets, calc_investment_flow, simulate_plan
from lifeplan_sim_jp.advice import analyze_plan, build_advice_summary

__all__ = [
    "HouseholdPlan",
    "PersonConfig",
    "LoanConfig",
    "PropertyConfig",
    "ChildConfig",
    "EducationPath",
    "InvestmentVehicle",
    "ExpenseItem",
    "LeaveConfig",
    "JitanConfig",
    "SideBusinessConfig",
    "RetirementConfig",
    "PensionConfig",
    "DeathConfig",
    "InsuranceConfig",
    "HORIZON_YEARS",
    "MAN",
    "normalize_plan",
    "get_block_rate",
    "calc_mortgage",
    "build_mortgage_schedule",
    "calc_fixed_asset_tax_schedule",
    "estimate_net_income",
    "calc_loan_tax_deduction",
    "calc_retirement_income_deduction",
    "calc_retirement_income_tax",
    "calc_education_costs",
    "calc_child_allowance",
    "SurvivorPension",
    "calc_survivor_pension",
    "estimate_pension_monthly",
    "AnnualIncome",
    "IncomeBreakdown",
    "calc_adjusted_net_income",
    "project_household_income",
    "calc_assets",
    "calc_investment_flow",
    "simulate_plan",
    "analyze_plan",
    "build_advice_summary",
]
