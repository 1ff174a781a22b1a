"""Tests for old-age and survivor pension estimates."""

import pytest
from lifeplan_sim_jp.pension import (
    SURVIVOR_BASIC,
    SURVIVOR_CHILD_FIRST_TWO,
    SURVIVOR_CHILD_THIRD_PLUS,
    WIDOW_ADDITION,
    DeceasedProfile,
    SurvivorPension,
    SurvivorProfile,
    calc_survivor_basic,
    calc_survivor_pension,
    calc_survivor_welfare,
    estimate_pension_monthly,
)


class TestEstimatePensionMonthly:
    def test_typical(self):
        """年収600万・43年加入: (6.6 + 50×0.005481×43)×0.9 → 16.5万"""
        assert estimate_pension_monthly(600, 22, 65) == pytest.approx(16.5)

    def test_zero_income(self):
        assert estimate_pension_monthly(0) == 0

    def test_floored_to_tenth(self):
        value = estimate_pension_monthly(700)
        assert value == pytest.approx(round(value, 1))


class TestSurvivorBasic:
    def test_no_children(self):
        assert calc_survivor_basic([]) == 0

    def test_one_child(self):
        assert calc_survivor_basic([10]) == SURVIVOR_BASIC + SURVIVOR_CHILD_FIRST_TWO

    def test_three_children(self):
        expected = SURVIVOR_BASIC + SURVIVOR_CHILD_FIRST_TWO * 2 + SURVIVOR_CHILD_THIRD_PLUS
        assert calc_survivor_basic([5, 8, 10]) == expected

    def test_child_over_18_not_eligible(self):
        assert calc_survivor_basic([19]) == 0
        assert calc_survivor_basic([18]) > 0


class TestSurvivorWelfare:
    def test_minimum_300_months(self):
        """加入18年（216月）でも300月みなし: 50万×0.005481×300×0.75"""
        deceased = DeceasedProfile(annual_salary=600, service_start_age=22, death_age=40)
        assert calc_survivor_welfare(deceased) == pytest.approx(616_612.5, abs=0.01)

    def test_long_service(self):
        short = DeceasedProfile(annual_salary=600, service_start_age=22, death_age=40)
        long = DeceasedProfile(annual_salary=600, service_start_age=22, death_age=60)
        assert calc_survivor_welfare(long) > calc_survivor_welfare(short)


class TestSurvivorPension:
    def setup_method(self):
        self.deceased = DeceasedProfile(annual_salary=600, service_start_age=22, death_age=40)

    def test_widow_without_children(self):
        """45歳の妻・対象となる子なし → 基礎年金0、中高齢寡婦加算あり"""
        sp = calc_survivor_pension(self.deceased, SurvivorProfile(age=45, is_wife=True), [])
        assert sp.basic == 0
        assert sp.widow == WIDOW_ADDITION
        assert sp.welfare == 616_612
        assert sp.total == 616_612 + WIDOW_ADDITION

    def test_widow_with_child(self):
        """10歳の子がいる間は基礎年金を受給し、寡婦加算は停止"""
        sp = calc_survivor_pension(self.deceased, SurvivorProfile(age=45, is_wife=True), [10])
        assert sp.basic > 0
        assert sp.widow == 0

    def test_young_widow(self):
        sp = calc_survivor_pension(self.deceased, SurvivorProfile(age=35, is_wife=True), [])
        assert sp.widow == 0

    def test_widow_over_65(self):
        sp = calc_survivor_pension(self.deceased, SurvivorProfile(age=65, is_wife=True), [])
        assert sp.widow == 0

    def test_husband_no_widow_addition(self):
        sp = calc_survivor_pension(self.deceased, SurvivorProfile(age=50, is_wife=False), [])
        assert sp.widow == 0
        assert sp.total == sp.welfare

    def test_add(self):
        total = SurvivorPension(1, 2, 3, 6) + SurvivorPension(10, 20, 30, 60)
        assert total == SurvivorPension(11, 22, 33, 66)
