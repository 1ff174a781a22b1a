"""Fixed asset tax and city planning tax (固定資産税・都市計画税) schedule."""

import math

from lifeplan_sim_jp.params import HORIZON_YEARS, MAN, PropertyConfig

# 住宅用地の特例: 200㎡以下の小規模住宅用地とそれ以外
SMALL_LOT_AREA = 200
SMALL_LOT_FIXED_RATIO = 1 / 6
SMALL_LOT_CITY_RATIO = 1 / 3
GENERAL_LOT_FIXED_RATIO = 1 / 3
GENERAL_LOT_CITY_RATIO = 2 / 3

# 経年減点補正率の簡易モデル: 1.0 から構造別の年数で 0.2 まで直線的に下落
DEPRECIATION_FLOOR = 0.2
DECLINE_YEARS = {"wood": 20, "steel": 30, "rc": 45}

# 新築住宅の減額（固定資産税 1/2）
NEW_REDUCTION_MIN_AREA = 50
NEW_REDUCTION_RATIO = 0.5
# structure → (通常, 長期優良住宅)
NEW_REDUCTION_YEARS = {"wood": (3, 5), "steel": (3, 5), "rc": (5, 7)}


def _split_by_lot(base: float, area: float, small_ratio: float, large_ratio: float) -> float:
    if area <= SMALL_LOT_AREA:
        return base * small_ratio
    small = SMALL_LOT_AREA / area * base * small_ratio
    large = (area - SMALL_LOT_AREA) / area * base * large_ratio
    return small + large


def calc_land_tax(prop: PropertyConfig) -> float:
    """Annual land tax (円), constant over the horizon."""
    if not prop.land_area or prop.land_area <= 0:
        return 0.0
    base = prop.land_price * MAN * prop.land_ratio
    fixed_base = _split_by_lot(base, prop.land_area, SMALL_LOT_FIXED_RATIO, GENERAL_LOT_FIXED_RATIO)
    city_base = _split_by_lot(base, prop.land_area, SMALL_LOT_CITY_RATIO, GENERAL_LOT_CITY_RATIO)
    return fixed_base * prop.fixed_rate / 100 + city_base * prop.city_rate / 100


def depreciation_factor(structure: str, year_idx: int) -> float:
    decline_years = DECLINE_YEARS.get(structure, DECLINE_YEARS["wood"])
    slope = (1.0 - DEPRECIATION_FLOOR) / decline_years
    return max(DEPRECIATION_FLOOR, 1.0 - slope * year_idx)


def new_construction_reduction_years(prop: PropertyConfig) -> int:
    """Years of the new-construction 1/2 reduction (0 if not eligible)."""
    if not (prop.is_new and prop.building_area >= NEW_REDUCTION_MIN_AREA):
        return 0
    normal, long_term = NEW_REDUCTION_YEARS.get(prop.structure, NEW_REDUCTION_YEARS["rc"])
    return long_term if prop.is_long_term else normal


def calc_fixed_asset_tax_schedule(prop: PropertyConfig, years: int = HORIZON_YEARS) -> list[int]:
    """Calculate yearly fixed asset tax + city planning tax (円)."""
    if not prop.land_price and not prop.building_price:
        return [0] * years

    fixed_rate = prop.fixed_rate / 100
    city_rate = prop.city_rate / 100
    land_tax = calc_land_tax(prop)
    initial_building_base = prop.building_price * MAN * prop.building_ratio
    reduction_years = new_construction_reduction_years(prop)

    schedule = []
    for i in range(years):
        taxable = math.floor(initial_building_base * depreciation_factor(prop.structure, i))
        building_fixed = taxable * fixed_rate
        if i < reduction_years:
            building_fixed *= NEW_REDUCTION_RATIO
        building_city = taxable * city_rate
        schedule.append(math.floor(land_tax + building_fixed + building_city))
    return schedule


def resolve_fixed_asset_tax(prop: PropertyConfig, years: int = HORIZON_YEARS) -> list[int]:
    """Auto schedule, or a flat manual annual amount (万円) when tax_method == "manual"."""
    if prop.tax_method == "manual":
        return [round((prop.manual_tax or 0) * MAN)] * years
    return calc_fixed_asset_tax_schedule(prop, years)
