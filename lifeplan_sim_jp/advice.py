"""Plan summary for external advice and a heuristic plan analyzer."""

import dataclasses

from lifeplan_sim_jp.params import HORIZON_YEARS, MAN, HouseholdPlan, base_monthly_living_cost

# 判定しきい値（万円）
CASH_RESERVE_MIN = 100
RETIREMENT_TARGET = 2000  # 老後2000万円問題

SCORE_DANGER = 30
SCORE_WARNING = 60
SCORE_SAFE = 80
SCORE_RETIREMENT_CAP = 70
SCORE_RETIREMENT_BONUS = 10

INVESTMENT_RATIO_HIGH = 0.8
INVESTMENT_RATIO_LOW = 0.1


def build_advice_summary(result: dict, plan: HouseholdPlan | None = None) -> dict:
    """Derived summary handed to an external advice generator.

    Balances are in 円; config echoes keep their input units.
    """
    if plan is None:
        plan = result["plan"]
    total_assets = result["total_assets"]
    living_monthly = base_monthly_living_cost(plan)
    total_expense = (
        sum(y["annual_payment"] for y in result["mortgage"])
        + sum(result["education"])
        + round(living_monthly * 12 * HORIZON_YEARS)
    )
    return {
        "family": {"child_count": len(plan.children)},
        "mortgage": {
            "loan_amount": plan.loan.amount,
            "bonus_principal": plan.loan.bonus_principal,
            "pair_loan": plan.loan.pair_loan,
            "rates": list(plan.loan.rates),
        },
        "expenses": {
            "items": [dataclasses.asdict(e) for e in plan.expenses],
            "base_monthly": living_monthly,
        },
        "income": {
            "main": dataclasses.asdict(plan.main),
            "partner": dataclasses.asdict(plan.partner),
        },
        "assets": {
            "initial_savings": plan.initial_savings,
            "investments": [dataclasses.asdict(inv) for inv in plan.investments],
        },
        "analysis": {
            "has_negative_cash": any(c < 0 for c in result["cash_assets"]),
            "final_balance": total_assets[-1] if total_assets else 0,
            "peak_balance": max(total_assets, default=0),
            "min_balance": min(total_assets, default=0),
            "total_income": sum(year.total for year in result["income"]),
            "total_expense": total_expense,
        },
    }


def analyze_plan(result: dict) -> dict:
    """Score a simulation result (0-100) and list advice messages.

    Returns {"score", "status" (safe|warning|danger), "title", "messages"}
    where each message is {"type", "text"}.
    """
    analysis = {"score": 0, "status": "safe", "title": "", "messages": []}
    total_assets = result.get("total_assets")
    if not total_assets:
        return analysis

    cash_assets = result["cash_assets"]
    investment_assets = result["investment_assets"]
    final_asset = total_assets[-1] / MAN
    min_cash = min(cash_assets) / MAN
    messages = analysis["messages"]

    if min_cash < 0:
        danger_year = next(i for i, c in enumerate(cash_assets) if c < 0) + 1
        analysis.update(status="danger", score=SCORE_DANGER, title="資金ショートの危険性があります")
        messages.append({
            "type": "danger",
            "text": f"{danger_year}年目に現預金がマイナスになる予測です。支出の見直しや、積立額の調整が必要です。",
        })
    elif min_cash < CASH_RESERVE_MIN:
        analysis.update(status="warning", score=SCORE_WARNING, title="予備資金が少なくなります")
        messages.append({
            "type": "warning",
            "text": f"現預金が{CASH_RESERVE_MIN}万円を切る時期があります。突発的な出費に備え、もう少し手元資金を残す計画を推奨します。",
        })
    else:
        analysis.update(status="safe", score=SCORE_SAFE, title="安定した資金計画です")
        messages.append({
            "type": "success",
            "text": "シミュレーション期間を通じて、現預金が不足することはありません。",
        })

    if final_asset < RETIREMENT_TARGET:
        if analysis["status"] == "safe":
            analysis["status"] = "warning"
            analysis["score"] = min(analysis["score"], SCORE_RETIREMENT_CAP)
            analysis["title"] += " (老後資金要確認)"
        messages.append({
            "type": "warning",
            "text": (
                f"{HORIZON_YEARS}年後の総資産が{final_asset:.0f}万円です。"
                f"老後{RETIREMENT_TARGET}万円問題に対し、少し心許ない可能性があります。"
                "積立投資の増額や、長く働くことを検討してください。"
            ),
        })
    else:
        analysis["score"] += SCORE_RETIREMENT_BONUS
        messages.append({
            "type": "success",
            "text": f"{HORIZON_YEARS}年後には約{final_asset:.0f}万円の資産が形成される見込みです。老後の備えとしては順調です。",
        })

    if final_asset > 0:
        ratio = investment_assets[-1] / MAN / final_asset
        if ratio > INVESTMENT_RATIO_HIGH:
            messages.append({
                "type": "info",
                "text": "資産の大部分が投資に回っています。市場暴落時のリスク許容度を確認してください。",
            })
        elif ratio < INVESTMENT_RATIO_LOW and min_cash > 0:
            messages.append({
                "type": "info",
                "text": "現預金の比率が高いです。インフレリスクに備え、もう少し投資に回す余地があるかもしれません。",
            })

    analysis["score"] = min(100, max(0, analysis["score"]))
    return analysis
