"""Education cost and child allowance (児童手当) schedules."""

from lifeplan_sim_jp.params import HORIZON_YEARS, ChildConfig, EducationPath

# 年間教育費（円, 文部科学省「子供の学習費調査」等の概算）
EDUCATION_COSTS = {
    "nursery": 480_000,
    "kindergarten_public": 220_000,
    "kindergarten_private": 500_000,
    "elementary_public": 320_000,
    "elementary_private": 1_600_000,
    "junior_public": 490_000,
    "junior_private": 1_400_000,
    "high_public": 460_000,
    "high_private": 970_000,
    "uni_public": 820_000,
    "uni_private_arts": 1_200_000,
    "uni_private_science": 1_600_000,
}

# 無償化・就学支援金（東京都 2024 / 国）
SUBSIDIES = {
    "kindergarten_free": 308_000,  # 幼児教育・保育の無償化 上限（月2.57万）
    "hs_public": 120_000,
    "hs_private": 480_000,
    "uni_public": 540_000,
}

# (下限年齢, 上限年齢, stage)
_STAGES: tuple[tuple[int, int, str], ...] = (
    (0, 2, "nursery"),
    (3, 5, "kindergarten"),
    (6, 11, "elementary"),
    (12, 14, "junior_high"),
    (15, 17, "high_school"),
    (18, 21, "university"),
)

# 児童手当（2024年改正: 所得制限撤廃・18歳まで延長）
# (上限年齢, 月額) 年齢の若い順。3歳未満は開始時点の年齢が負の子も対象
CHILD_ALLOWANCE_SCHEDULE: tuple[tuple[int, int], ...] = (
    (2, 15_000),   # 3歳未満: 月1.5万円/人
    (18, 10_000),  # 3〜18歳: 月1.0万円/人
)


def education_stage(age: int) -> str | None:
    for lo, hi, stage in _STAGES:
        if lo <= age <= hi:
            return stage
    return None


def _annual_cost(age: int, edu: EducationPath, is_tokyo: bool, is_free_nursery: bool) -> int:
    stage = education_stage(age)
    if stage is None:
        return 0

    if stage == "nursery":
        return 0 if is_free_nursery else EDUCATION_COSTS["nursery"]

    if stage == "kindergarten":
        kind = "private" if edu.kindergarten == "private" else "public"
        base = EDUCATION_COSTS[f"kindergarten_{kind}"]
        if is_free_nursery:
            return max(0, base - SUBSIDIES["kindergarten_free"])
        return base

    if stage == "elementary":
        kind = "private" if edu.elementary == "private" else "public"
        return EDUCATION_COSTS[f"elementary_{kind}"]

    if stage == "junior_high":
        kind = "private" if edu.junior_high == "private" else "public"
        return EDUCATION_COSTS[f"junior_{kind}"]

    if stage == "high_school":
        kind = "private" if edu.high_school == "private" else "public"
        base = EDUCATION_COSTS[f"high_{kind}"]
        if is_tokyo:
            return max(0, base - SUBSIDIES[f"hs_{kind}"])
        return base

    # university
    if edu.university == "public":
        base = EDUCATION_COSTS["uni_public"]
        if is_tokyo:
            base = max(0, base - SUBSIDIES["uni_public"])
        return base
    if edu.university == "private_science":
        return EDUCATION_COSTS["uni_private_science"]
    return EDUCATION_COSTS["uni_private_arts"]


def calc_education_costs(
    children: list[ChildConfig],
    is_tokyo: bool = False,
    is_free_nursery: bool = False,
) -> list[int]:
    """Yearly education cost (円) summed over all children."""
    yearly = [0] * HORIZON_YEARS
    for child in children:
        edu = child.education or EducationPath()
        for i in range(HORIZON_YEARS):
            yearly[i] += _annual_cost(child.age + i, edu, is_tokyo, is_free_nursery)
    return yearly


def calc_child_allowance(children: list[ChildConfig]) -> list[int]:
    """Yearly child allowance (円) summed over all children.

    Fixed nominal amount (not inflation-adjusted) per statutory schedule.
    """
    yearly = [0] * HORIZON_YEARS
    for child in children:
        for i in range(HORIZON_YEARS):
            child_age = child.age + i
            for max_age, monthly in CHILD_ALLOWANCE_SCHEDULE:
                if child_age <= max_age:
                    yearly[i] += monthly * 12
                    break
    return yearly
