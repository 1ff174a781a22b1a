"""Old-age pension estimate and survivor pension (遺族年金)."""

import math
from dataclasses import dataclass

from lifeplan_sim_jp.params import MAN

# 公的年金計算定数（日本年金機構 簡易版）
KOKUMIN_MONTHLY = 6.6        # 老齢基礎年金 満額（万円/月, 2024年度）
KOSEI_RATE = 0.005481        # 厚生年金 報酬比例乗率（5.481/1000）
PENSION_NET_RATIO = 0.9      # 税・社会保険料控除後の手取り率

# 遺族基礎年金（年額, 円）
SURVIVOR_BASIC = 795_000
SURVIVOR_CHILD_FIRST_TWO = 228_700
SURVIVOR_CHILD_THIRD_PLUS = 76_200
SURVIVOR_CHILD_MAX_AGE = 18
# 遺族厚生年金: 報酬比例部分の3/4、加入期間は最低300月で計算
SURVIVOR_WELFARE_RATIO = 0.75
SURVIVOR_MIN_MONTHS = 300
# 中高齢寡婦加算
WIDOW_ADDITION = 596_000
WIDOW_MIN_AGE = 40
WIDOW_MAX_AGE = 65


def estimate_pension_monthly(
    annual_gross_man: float, service_start_age: int = 22, retirement_age: int = 65,
) -> float:
    """Estimate monthly net old-age pension (万円/月).

    基礎年金（定額）+ 厚生年金（平均標準報酬月額 × 5.481/1000 × 加入年数）, 手取り90%.
    Floored to 0.1万円.
    """
    if not annual_gross_man or annual_gross_man <= 0:
        return 0.0
    monthly_remuneration = annual_gross_man / 12
    years_coverage = max(0, retirement_age - service_start_age)
    kosei = monthly_remuneration * KOSEI_RATE * years_coverage
    net = (KOKUMIN_MONTHLY + kosei) * PENSION_NET_RATIO
    return math.floor(net * 10) / 10


@dataclass
class DeceasedProfile:
    annual_salary: float  # 額面年収（万円）
    service_start_age: int = 22
    death_age: int = 60


@dataclass
class SurvivorProfile:
    age: int
    is_wife: bool


@dataclass
class SurvivorPension:
    """Annual survivor pension (円) with its breakdown."""

    basic: int = 0
    welfare: int = 0
    widow: int = 0
    total: int = 0

    def __add__(self, other: "SurvivorPension") -> "SurvivorPension":
        return SurvivorPension(
            basic=self.basic + other.basic,
            welfare=self.welfare + other.welfare,
            widow=self.widow + other.widow,
            total=self.total + other.total,
        )


def calc_survivor_basic(child_ages: list[int]) -> float:
    """遺族基礎年金: paid only while a child aged 18 or under remains."""
    eligible = [a for a in child_ages if a <= SURVIVOR_CHILD_MAX_AGE]
    if not eligible:
        return 0.0
    amount = SURVIVOR_BASIC
    for idx, _ in enumerate(eligible):
        amount += SURVIVOR_CHILD_FIRST_TWO if idx < 2 else SURVIVOR_CHILD_THIRD_PLUS
    return amount


def calc_survivor_welfare(deceased: DeceasedProfile) -> float:
    """遺族厚生年金 = 報酬比例部分 × 3/4（300月みなし）"""
    monthly_remuneration_yen = (deceased.annual_salary or 0) / 12 * MAN
    working_months = max(0, deceased.death_age - deceased.service_start_age) * 12
    months = max(SURVIVOR_MIN_MONTHS, working_months)
    return monthly_remuneration_yen * KOSEI_RATE * months * SURVIVOR_WELFARE_RATIO


def calc_survivor_pension(
    deceased: DeceasedProfile, survivor: SurvivorProfile, child_ages: list[int],
) -> SurvivorPension:
    """Calculate the annual survivor pension paid after deceased's death.

    The widow addition applies to a wife aged 40-64 and is suspended while the
    basic pension is paid (no stacking). Only the current year's state is
    checked.
    """
    basic = calc_survivor_basic(child_ages)
    welfare = calc_survivor_welfare(deceased)
    widow = 0.0
    if survivor.is_wife and WIDOW_MIN_AGE <= survivor.age < WIDOW_MAX_AGE and basic == 0:
        widow = WIDOW_ADDITION
    return SurvivorPension(
        basic=math.floor(basic),
        welfare=math.floor(welfare),
        widow=math.floor(widow),
        total=math.floor(basic + welfare + widow),
    )
