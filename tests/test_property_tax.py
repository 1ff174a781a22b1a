"""Tests for fixed asset tax scheduling."""

import pytest
from lifeplan_sim_jp.params import HORIZON_YEARS, PropertyConfig
from lifeplan_sim_jp.property_tax import (
    DEPRECIATION_FLOOR,
    calc_fixed_asset_tax_schedule,
    calc_land_tax,
    depreciation_factor,
    new_construction_reduction_years,
    resolve_fixed_asset_tax,
)


class TestDepreciationFactor:
    def test_new_building(self):
        assert depreciation_factor("wood", 0) == 1.0

    def test_linear_decline(self):
        """木造: 20年で0.2まで → 年0.04ずつ下落"""
        assert depreciation_factor("wood", 10) == pytest.approx(0.6)

    @pytest.mark.parametrize("structure", ["wood", "steel", "rc"])
    def test_floor(self, structure):
        assert depreciation_factor(structure, 100) == DEPRECIATION_FLOOR
        assert depreciation_factor(structure, 1000) == DEPRECIATION_FLOOR

    def test_rc_declines_slower(self):
        assert depreciation_factor("rc", 10) > depreciation_factor("wood", 10)

    def test_unknown_structure_uses_wood(self):
        assert depreciation_factor("log", 10) == depreciation_factor("wood", 10)


class TestNewConstructionReduction:
    def test_wood_normal(self):
        assert new_construction_reduction_years(PropertyConfig(structure="wood")) == 3

    def test_wood_long_term(self):
        assert new_construction_reduction_years(PropertyConfig(structure="wood", is_long_term=True)) == 5

    def test_rc(self):
        assert new_construction_reduction_years(PropertyConfig(structure="rc")) == 5
        assert new_construction_reduction_years(PropertyConfig(structure="rc", is_long_term=True)) == 7

    def test_small_building_not_eligible(self):
        assert new_construction_reduction_years(PropertyConfig(building_area=40)) == 0

    def test_used_building_not_eligible(self):
        assert new_construction_reduction_years(PropertyConfig(is_new=False)) == 0


class TestLandTax:
    def test_small_lot(self):
        """3000万×0.7=2100万: 固定1/6×1.4% + 都計1/3×0.3% = 4.9万 + 2.1万"""
        prop = PropertyConfig(land_price=3000, land_area=100)
        assert calc_land_tax(prop) == pytest.approx(70_000, abs=1)

    def test_large_lot_split(self):
        """400㎡: 200㎡分は小規模特例、残り200㎡は一般住宅用地"""
        prop = PropertyConfig(land_price=3000, land_area=400)
        assert calc_land_tax(prop) == pytest.approx(73_500 + 31_500, abs=1)

    def test_zero_area(self):
        assert calc_land_tax(PropertyConfig(land_area=0)) == 0


class TestFixedAssetTaxSchedule:
    def setup_method(self):
        # 建物のみ（2000万×0.6 = 1200万）
        self.prop = PropertyConfig(land_area=0, building_price=2000, structure="wood")
        self.schedule = calc_fixed_asset_tax_schedule(self.prop)

    def test_length(self):
        assert len(self.schedule) == HORIZON_YEARS

    def test_reduction_period(self):
        """新築3年間は固定資産税1/2: 8.4万 + 3.6万"""
        assert self.schedule[0] == pytest.approx(120_000, abs=1)

    def test_after_reduction(self):
        """4年目: 1200万×0.88 → 固定1.4% + 都計0.3%"""
        assert self.schedule[3] == pytest.approx(12_000_000 * 0.88 * 0.017, abs=1)

    def test_floor_reached(self):
        assert self.schedule[34] == pytest.approx(12_000_000 * 0.2 * 0.017, abs=1)
        assert self.schedule[25] == self.schedule[34]

    def test_whole_yen(self):
        assert all(isinstance(v, int) for v in self.schedule)

    def test_no_prices(self):
        prop = PropertyConfig(land_price=0, building_price=0)
        assert calc_fixed_asset_tax_schedule(prop) == [0] * HORIZON_YEARS


class TestResolveFixedAssetTax:
    def test_manual(self):
        prop = PropertyConfig(tax_method="manual", manual_tax=12.5)
        assert resolve_fixed_asset_tax(prop) == [125_000] * HORIZON_YEARS

    def test_auto(self):
        prop = PropertyConfig()
        assert resolve_fixed_asset_tax(prop) == calc_fixed_asset_tax_schedule(prop)
