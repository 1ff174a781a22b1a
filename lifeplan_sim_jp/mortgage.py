"""Mortgage amortization with monthly and bonus repayment tracks."""

import math

from lifeplan_sim_jp.params import (
    HORIZON_YEARS,
    MAN,
    HouseholdPlan,
    calc_equal_payment,
    get_block_rate,
)

MONTHLY_PAYMENTS_PER_YEAR = 12
BONUS_PAYMENTS_PER_YEAR = 2  # ボーナス返済（年2回）

_ZERO_YEAR = {
    "annual_payment": 0,
    "monthly_payment": 0,
    "bonus_payment": 0,
    "interest_paid": 0,
    "principal_paid": 0,
    "remaining_principal": 0,
}


def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def calc_sub_loan(
    principal: float, rates: list[float], payments_per_year: int,
) -> list[dict]:
    """Amortize one repayment track over HORIZON_YEARS.

    The level payment is recomputed every year against the remaining periods,
    so a rate change at a 5-year boundary re-levels the schedule. The last
    period of the final year (or any overshooting period) pays off the
    remaining balance exactly.
    """
    current = float(principal)
    prev_rounded = round_half_up(current) if principal > 0 else 0
    yearly = []

    for year in range(1, HORIZON_YEARS + 1):
        annual_rate_pct = get_block_rate(rates, year)
        period_rate = annual_rate_pct / 100 / payments_per_year
        remaining_periods = (HORIZON_YEARS - (year - 1)) * payments_per_year

        if current <= 0:
            period_payment = 0.0
        else:
            period_payment = calc_equal_payment(current, period_rate, remaining_periods)

        year_payment = 0.0
        year_interest = 0.0
        for p in range(payments_per_year):
            interest = current * period_rate
            principal_part = period_payment - interest
            payment = period_payment
            is_final = year == HORIZON_YEARS and p == payments_per_year - 1
            if current - principal_part < 0 or is_final:
                principal_part = current
                payment = principal_part + interest
            current -= principal_part
            year_payment += payment
            year_interest += interest

        remaining = max(0, round_half_up(current))
        yearly.append({
            "year": year,
            "rate": annual_rate_pct,
            "annual_payment": round_half_up(year_payment),
            "interest_paid": round_half_up(year_interest),
            # Difference of rounded balances: sums to the principal exactly
            "principal_paid": prev_rounded - remaining,
            "remaining_principal": remaining,
        })
        prev_rounded = remaining

    return yearly


def calc_mortgage(total: float, bonus_principal: float, rates: list[float]) -> list[dict]:
    """Calculate the merged yearly schedule of a loan (円).

    bonus_principal: part of total repaid through semi-annual bonus installments.
    rates: annual rate (%) per 5-year block.
    """
    bonus_principal = min(max(0.0, bonus_principal), max(0.0, total))
    monthly_data = calc_sub_loan(total - bonus_principal, rates, MONTHLY_PAYMENTS_PER_YEAR)
    bonus_data = calc_sub_loan(bonus_principal, rates, BONUS_PAYMENTS_PER_YEAR)

    merged = []
    for m, b in zip(monthly_data, bonus_data):
        merged.append({
            "year": m["year"],
            "rate": m["rate"],
            "annual_payment": m["annual_payment"] + b["annual_payment"],
            "monthly_payment": round_half_up(m["annual_payment"] / MONTHLY_PAYMENTS_PER_YEAR),
            "bonus_payment": round_half_up(b["annual_payment"] / BONUS_PAYMENTS_PER_YEAR),
            "interest_paid": m["interest_paid"] + b["interest_paid"],
            "principal_paid": m["principal_paid"] + b["principal_paid"],
            "remaining_principal": m["remaining_principal"] + b["remaining_principal"],
        })
    return merged


def apply_credit_life(schedule: list[dict], dead_flags: list[bool]) -> list[dict]:
    """Clear a schedule from the debtor's death year on (団体信用生命保険)."""
    return [
        {**d, **_ZERO_YEAR} if dead else dict(d)
        for d, dead in zip(schedule, dead_flags)
    ]


def _sum_schedules(a: list[dict], b: list[dict]) -> list[dict]:
    keys = _ZERO_YEAR.keys()
    return [
        {"year": x["year"], "rate": x["rate"], **{k: x[k] + y[k] for k in keys}}
        for x, y in zip(a, b)
    ]


def build_mortgage_schedule(plan: HouseholdPlan) -> list[dict]:
    """Build the household's mortgage schedule with death clearing applied.

    Single loan: held by main, cleared only by main's death.
    Pair loan: each person's own loan is cleared by that person's death.
    """
    rates = plan.loan.rates
    main_dead = [plan.main.is_dead_at(i) for i in range(HORIZON_YEARS)]
    (main_amount, main_bonus), (partner_amount, partner_bonus) = plan.loan.split()

    main_schedule = apply_credit_life(
        calc_mortgage(main_amount * MAN, main_bonus * MAN, rates), main_dead,
    )
    if not plan.loan.pair_loan:
        return main_schedule

    partner_dead = [plan.partner.is_dead_at(i) for i in range(HORIZON_YEARS)]
    partner_schedule = apply_credit_life(
        calc_mortgage(partner_amount * MAN, partner_bonus * MAN, rates), partner_dead,
    )
    return _sum_schedules(main_schedule, partner_schedule)
