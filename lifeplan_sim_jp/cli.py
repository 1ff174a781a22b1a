"""CLI entry point for a single household projection."""

import sys

from lifeplan_sim_jp.advice import analyze_plan, build_advice_summary
from lifeplan_sim_jp.config import parse_args, validate_plan
from lifeplan_sim_jp.params import HORIZON_YEARS, MAN, HouseholdPlan
from lifeplan_sim_jp.simulation import net_initial_savings, simulate_plan

STATUS_LABELS = {"safe": "安全", "warning": "注意", "danger": "危険"}


def _man(yen: float) -> float:
    return yen / MAN


def _print_header(plan: HouseholdPlan):
    main = plan.main
    partner = plan.partner
    loan = plan.loan
    print("=" * 80)
    print(f"ライフプラン・キャッシュフローシミュレーション（{HORIZON_YEARS}年間）")
    print(
        f"  本人: {main.age}歳 / 月給{main.salary:.1f}万 + 賞与{main.bonus:.0f}万"
        f"（昇給{main.salary_increase:.1f}%/年, {main.retirement_age}歳退職）"
    )
    if loan.pair_loan:
        print(
            f"  配偶者: {partner.age}歳 / 月給{partner.salary:.1f}万 + 賞与{partner.bonus:.0f}万"
            f"（昇給{partner.salary_increase:.1f}%/年, {partner.retirement_age}歳退職）"
        )
    else:
        print(f"  配偶者: {partner.age}歳（収入は計上しない）")
    rates = " → ".join(f"{r:.2f}%" for r in loan.rates)
    loan_kind = "ペアローン" if loan.pair_loan else "単独ローン"
    print(f"  住宅ローン: {loan.amount:.0f}万円（うちボーナス返済{loan.bonus_principal:.0f}万, {loan_kind}）")
    print(f"  金利（5年ごと）: {rates}")
    print(f"  初期貯蓄: {plan.initial_savings:.0f}万円（初期費用控除後 {net_initial_savings(plan):.0f}万円）")
    if plan.children:
        ages = ", ".join(f"{c.age}歳" for c in plan.children)
        print(f"  子ども: {len(plan.children)}人（{ages}）")
    else:
        print("  子ども: なし")
    for label, person in (("本人", main), ("配偶者", partner)):
        if person.death.enabled:
            print(f"  ⚠ {label}が{person.death.age}歳で死亡するケース（遺族年金・団信を反映）")
    print("=" * 80)
    print()


def _print_yearly_log(result: dict):
    log = result["yearly_log"]
    print("【年次キャッシュフロー（5年ごと）】")
    print("-" * 100)
    print(
        f"{'年':<4} {'年齢':<6} {'収入(万)':<10} {'ローン(万)':<11} {'教育費(万)':<11} "
        f"{'生活費(万)':<11} {'固定資産税(万)':<14} {'現預金(万)':<12} {'総資産(万)':<12}"
    )
    print("-" * 100)
    for i, entry in enumerate(log):
        if i % 5 == 0 or i == len(log) - 1:
            print(
                f"{entry['year']:<4} "
                f"{entry['main_age']:<6} "
                f"{_man(entry['income']):<10.1f} "
                f"{_man(entry['mortgage_payment']):<11.1f} "
                f"{_man(entry['education']):<11.1f} "
                f"{_man(entry['living'] + entry['other']):<11.1f} "
                f"{_man(entry['fixed_asset_tax']):<14.1f} "
                f"{_man(entry['cash']):<12.1f} "
                f"{_man(entry['total_assets']):<12.1f}"
            )
    print("-" * 100)


def _print_summary(result: dict):
    analysis = build_advice_summary(result)["analysis"]
    deduction_total = sum(result["tax_deduction"])
    allowance_total = sum(result["allowance"])
    print("\n【資産サマリー】")
    print(f"  最終資産:   {_man(analysis['final_balance']):>10.1f}万円")
    print(f"  資産ピーク: {_man(analysis['peak_balance']):>10.1f}万円")
    print(f"  資産最小:   {_man(analysis['min_balance']):>10.1f}万円")
    print(f"  生涯総収入: {_man(analysis['total_income']):>10.1f}万円")
    print(f"  生涯総支出: {_man(analysis['total_expense']):>10.1f}万円（ローン + 教育費 + 生活費）")
    if deduction_total:
        print(f"  住宅ローン控除（参考）: {_man(deduction_total):.1f}万円")
    if allowance_total:
        print(f"  児童手当（参考）: {_man(allowance_total):.1f}万円")
    if analysis["has_negative_cash"]:
        print("  ⚠ 期間中に現預金がマイナスになります")


def _print_advice(result: dict):
    advice = analyze_plan(result)
    status = STATUS_LABELS.get(advice["status"], advice["status"])
    print(f"\n【診断】{advice['title']}（スコア {advice['score']} / {status}）")
    for message in advice["messages"]:
        print(f"  - {message['text']}")


def main():
    """Execute a single household projection"""
    plan, _, _ = parse_args("ライフプラン・キャッシュフローシミュレーション")

    for warning in validate_plan(plan):
        print(f"警告: {warning}", file=sys.stderr)

    result = simulate_plan(plan)

    _print_header(result["plan"])
    _print_yearly_log(result)
    _print_summary(result)
    _print_advice(result)


if __name__ == "__main__":
    main()
