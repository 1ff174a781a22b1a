"""Net income approximation, retirement income tax and housing loan tax credit."""

import math

from lifeplan_sim_jp.params import MAN

# 額面年収 → 手取り率（税・社会保険料の簡易近似、累進ではなく一律）
# (上限額面年収・円, 手取り率)
_NET_INCOME_RATES: tuple[tuple[float, float], ...] = (
    (3_000_000, 0.80),
    (6_000_000, 0.78),
    (10_000_000, 0.75),
    (float("inf"), 0.70),
)

# 所得税累進税率テーブル（簡易版、最高税率は40%で打ち止め）
# (上限課税所得・円, 税率, 控除額・円)
_INCOME_TAX_BRACKETS: tuple[tuple[float, float, float], ...] = (
    (1_950_000, 0.05, 0),
    (3_300_000, 0.10, 97_500),
    (6_950_000, 0.20, 427_500),
    (9_000_000, 0.23, 636_000),
    (18_000_000, 0.33, 1_536_000),
    (float("inf"), 0.40, 2_796_000),
)

RESIDENT_TAX_RATE = 0.10        # 住民税率（一律10%）
RECONSTRUCTION_TAX_RATE = 0.021  # 復興特別所得税（所得税額の2.1%）


def estimate_net_income(annual_gross: float) -> float:
    """Estimate annual net income (円) from annual gross income (円)."""
    for upper, rate in _NET_INCOME_RATES:
        if annual_gross <= upper:
            return annual_gross * rate
    return annual_gross * _NET_INCOME_RATES[-1][1]  # pragma: no cover


def calc_income_tax(taxable_income: float) -> float:
    """Progressive income tax (円) for a taxable income (円)."""
    for upper, rate, deduction_amount in _INCOME_TAX_BRACKETS:
        if taxable_income <= upper:
            return taxable_income * rate - deduction_amount
    return 0.0  # pragma: no cover


# 退職所得控除
_RETIREMENT_DEDUCTION_SHORT_LIMIT = 20
_RETIREMENT_DEDUCTION_SHORT_PER_YEAR = 400_000  # 20年以下: 40万×年数
_RETIREMENT_DEDUCTION_LONG_PER_YEAR = 700_000   # 20年超: 70万×超過年数
_RETIREMENT_HALF_RATIO = 0.5  # 退職所得 = (収入 - 控除) × 1/2


def calc_retirement_income_deduction(years: int) -> float:
    """Calculate retirement income deduction (退職所得控除, 円).

    - 20年以下: 40万円 × 勤続年数
    - 20年超: 800万円 + 70万円 × (勤続年数 - 20)
    """
    if years <= _RETIREMENT_DEDUCTION_SHORT_LIMIT:
        return _RETIREMENT_DEDUCTION_SHORT_PER_YEAR * years
    base = _RETIREMENT_DEDUCTION_SHORT_PER_YEAR * _RETIREMENT_DEDUCTION_SHORT_LIMIT
    return base + _RETIREMENT_DEDUCTION_LONG_PER_YEAR * (years - _RETIREMENT_DEDUCTION_SHORT_LIMIT)


def calc_retirement_income_tax(gross_yen: float, years: int) -> float:
    """Calculate tax on a retirement lump sum (円).

    退職所得 = (退職金 - 退職所得控除) × 1/2
    所得税（累進）+ 復興特別所得税 2.1% + 住民税 10%
    """
    deduction = calc_retirement_income_deduction(years)
    taxable = max(0, (gross_yen - deduction) * _RETIREMENT_HALF_RATIO)
    if taxable <= 0:
        return 0.0

    income_tax = calc_income_tax(taxable)
    reconstruction_tax = income_tax * RECONSTRUCTION_TAX_RATE
    resident_tax = taxable * RESIDENT_TAX_RATE
    return income_tax + reconstruction_tax + resident_tax


def calc_retirement_net(gross_man: float, years_of_service: int = 38) -> int:
    """Net retirement allowance (円) from a gross amount in 万円."""
    if not gross_man or gross_man <= 0:
        return 0
    gross_yen = gross_man * MAN
    return math.floor(gross_yen - calc_retirement_income_tax(gross_yen, years_of_service))


# 住宅ローン控除（13年間・年末残高 × 0.7%）
LOAN_DEDUCTION_RATE = 0.007
LOAN_DEDUCTION_YEARS = 13
# 借入限度額: 長期優良・低炭素 / ZEH水準 / 一般
LOAN_DEDUCTION_LIMITS = {
    "longterm": 45_000_000,
    "zeh": 35_000_000,
    "general": 30_000_000,
}


def loan_deduction_limit(building_type: str | None) -> int:
    return LOAN_DEDUCTION_LIMITS.get(building_type or "general", LOAN_DEDUCTION_LIMITS["general"])


def calc_loan_tax_deduction(
    mortgage_schedule: list[dict], building_type: str | None = None,
) -> list[int]:
    """Yearly housing loan tax credit (円) from year-end remaining principal."""
    limit = loan_deduction_limit(building_type)
    credits = []
    for i, year in enumerate(mortgage_schedule):
        if i >= LOAN_DEDUCTION_YEARS:
            credits.append(0)
            continue
        balance = min(year["remaining_principal"], limit)
        credits.append(math.floor(balance * LOAN_DEDUCTION_RATE))
    return credits
