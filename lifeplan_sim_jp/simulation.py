"""Core 35-year household cash-flow simulation."""

import math

from lifeplan_sim_jp.education import calc_child_allowance, calc_education_costs
from lifeplan_sim_jp.income import project_household_income
from lifeplan_sim_jp.mortgage import build_mortgage_schedule
from lifeplan_sim_jp.params import (
    HORIZON_YEARS,
    MAN,
    HouseholdPlan,
    InvestmentVehicle,
    base_monthly_living_cost,
    normalize_plan,
)
from lifeplan_sim_jp.property_tax import resolve_fixed_asset_tax
from lifeplan_sim_jp.tax import calc_loan_tax_deduction


def _contribution(inv: InvestmentVehicle, year_idx: int) -> float:
    duration = inv.duration or HORIZON_YEARS
    if year_idx >= duration:
        return 0.0
    return (inv.monthly or 0) * MAN * 12


def calc_investment_flow(investments: list[InvestmentVehicle]) -> list[int]:
    """Yearly total contributions (円) moved from cash into investments."""
    return [
        round(sum(_contribution(inv, i) for inv in investments))
        for i in range(HORIZON_YEARS)
    ]


def calc_assets(
    income: list[int],
    mortgage_payments: list[int],
    education: list[int],
    annual_living_cost: int,
    fixed_asset_tax: list[int],
    investment_flow: list[int],
    initial_savings_yen: int,
    investments: list[InvestmentVehicle],
    other_expenses: list[int] | None = None,
) -> dict:
    """Roll cash and investment balances forward year by year (円).

    cash_t = cash_{t-1} + income_t - expense_t - contribution_t. Each vehicle
    compounds independently: contributions stop after its duration but growth
    continues. Cash has no floor; a negative balance signals a shortfall.
    """
    if other_expenses is None:
        other_expenses = [0] * HORIZON_YEARS

    cash = initial_savings_yen
    values = [(inv.initial or 0) * MAN for inv in investments]

    cash_assets = []
    investment_assets = []
    total_assets = []
    fixed_asset_history = []

    for i in range(HORIZON_YEARS):
        expense = (
            mortgage_payments[i] + education[i] + annual_living_cost
            + fixed_asset_tax[i] + other_expenses[i]
        )
        for k, inv in enumerate(investments):
            rate = (inv.rate or 0) / 100
            values[k] = (values[k] + _contribution(inv, i)) * (1 + rate)

        cash = cash + income[i] - expense - investment_flow[i]
        invested = math.floor(sum(values))

        cash_assets.append(cash)
        investment_assets.append(invested)
        total_assets.append(cash + invested)
        fixed_asset_history.append(fixed_asset_tax[i])

    return {
        "cash_assets": cash_assets,
        "investment_assets": investment_assets,
        "total_assets": total_assets,
        "fixed_asset_history": fixed_asset_history,
    }


def calc_other_expenses(plan: HouseholdPlan) -> list[int]:
    """Private insurance premiums (円/年), charged while each insured person is alive."""
    schedule = []
    for i in range(HORIZON_YEARS):
        monthly = 0.0
        for person in (plan.main, plan.partner):
            if not person.is_dead_at(i):
                monthly += person.insurance.premium or 0
        schedule.append(round(monthly * 12))
    return schedule


def net_initial_savings(plan: HouseholdPlan) -> float:
    """Savings left after deposit, down payment and initial expenses (万円)."""
    initial_expenses = sum(e.amount or 0 for e in plan.initial_expenses)
    return (
        (plan.initial_savings or 0)
        - (plan.property.deposit or 0)
        - (plan.property.down_payment or 0)
        - initial_expenses
    )


def simulate_plan(plan: HouseholdPlan) -> dict:
    """Run the full 35-year projection for a household plan.

    The plan is normalized first; the caller's instance is not modified.
    Returns a dict of 35-length yearly series (円) plus a per-year log.
    """
    plan = normalize_plan(plan)

    mortgage = build_mortgage_schedule(plan)
    if plan.loan.has_deduction:
        tax_deduction = calc_loan_tax_deduction(mortgage, plan.property.building_type)
    else:
        tax_deduction = [0] * HORIZON_YEARS
    education = calc_education_costs(plan.children, plan.is_tokyo, plan.is_free_nursery)
    if plan.has_allowance:
        allowance = calc_child_allowance(plan.children)
    else:
        allowance = [0] * HORIZON_YEARS
    income = project_household_income(plan)
    fixed_asset_tax = resolve_fixed_asset_tax(plan.property)
    other_expenses = calc_other_expenses(plan)
    investment_flow = calc_investment_flow(plan.investments)
    annual_living_cost = round(base_monthly_living_cost(plan) * 12)
    initial_savings_yen = round(net_initial_savings(plan) * MAN)

    # 住宅ローン控除と児童手当は表示のみ（現金には加算しない）
    assets = calc_assets(
        [year.total for year in income],
        [year["annual_payment"] for year in mortgage],
        education,
        annual_living_cost,
        fixed_asset_tax,
        investment_flow,
        initial_savings_yen,
        plan.investments,
        other_expenses,
    )

    yearly_log = []
    for i in range(HORIZON_YEARS):
        breakdown = income[i].breakdown
        yearly_log.append({
            "year": i + 1,
            "main_age": plan.main.age_at(i),
            "partner_age": plan.partner.age_at(i),
            "income": income[i].total,
            "salary": breakdown.salary,
            "leave_benefit": breakdown.leave_benefit,
            "business": breakdown.business,
            "retirement": breakdown.retirement,
            "pension": breakdown.pension,
            "survivor": breakdown.survivor.total,
            "insurance": breakdown.insurance,
            "mortgage_payment": mortgage[i]["annual_payment"],
            "remaining_principal": mortgage[i]["remaining_principal"],
            "education": education[i],
            "allowance": allowance[i],
            "tax_deduction": tax_deduction[i],
            "fixed_asset_tax": fixed_asset_tax[i],
            "living": annual_living_cost,
            "other": other_expenses[i],
            "investment": investment_flow[i],
            "cash": assets["cash_assets"][i],
            "investment_balance": assets["investment_assets"][i],
            "total_assets": assets["total_assets"][i],
        })

    return {
        "plan": plan,
        "mortgage": mortgage,
        "tax_deduction": tax_deduction,
        "education": education,
        "allowance": allowance,
        "income": income,
        "fixed_asset_tax": fixed_asset_tax,
        "other_expenses": other_expenses,
        "investment_flow": investment_flow,
        "annual_living_cost": annual_living_cost,
        "initial_savings": initial_savings_yen,
        **assets,
        "yearly_log": yearly_log,
    }
