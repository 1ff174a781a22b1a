"""Tests for education costs and child allowance."""

from lifeplan_sim_jp.education import (
    EDUCATION_COSTS,
    calc_child_allowance,
    calc_education_costs,
    education_stage,
)
from lifeplan_sim_jp.params import HORIZON_YEARS, ChildConfig, EducationPath


class TestEducationStage:
    def test_stages(self):
        assert education_stage(0) == "nursery"
        assert education_stage(3) == "kindergarten"
        assert education_stage(6) == "elementary"
        assert education_stage(12) == "junior_high"
        assert education_stage(15) == "high_school"
        assert education_stage(18) == "university"

    def test_out_of_range(self):
        assert education_stage(-1) is None
        assert education_stage(22) is None


class TestEducationCosts:
    def test_length(self):
        assert len(calc_education_costs([ChildConfig(age=0)])) == HORIZON_YEARS

    def test_free_nursery(self):
        """保育無償化: 0〜2歳は教育費ゼロ"""
        costs = calc_education_costs([ChildConfig(age=0)], is_free_nursery=True)
        assert costs[:3] == [0, 0, 0]

    def test_paid_nursery(self):
        costs = calc_education_costs([ChildConfig(age=0)])
        assert costs[:3] == [EDUCATION_COSTS["nursery"]] * 3

    def test_kindergarten_subsidy(self):
        public = calc_education_costs([ChildConfig(age=3)], is_free_nursery=True)
        private = calc_education_costs(
            [ChildConfig(age=3, education=EducationPath(kindergarten="private"))], is_free_nursery=True,
        )
        assert public[0] == 0
        assert private[0] == 500_000 - 308_000

    def test_private_elementary(self):
        costs = calc_education_costs([ChildConfig(age=6, education=EducationPath(elementary="private"))])
        assert costs[0] == 1_600_000

    def test_tokyo_high_school_support(self):
        public = calc_education_costs([ChildConfig(age=15)], is_tokyo=True)
        private = calc_education_costs(
            [ChildConfig(age=15, education=EducationPath(high_school="private"))], is_tokyo=True,
        )
        assert public[0] == 460_000 - 120_000
        assert private[0] == 970_000 - 480_000

    def test_university_paths(self):
        arts = calc_education_costs([ChildConfig(age=18)])
        science = calc_education_costs([ChildConfig(age=18, education=EducationPath(university="private_science"))])
        public_tokyo = calc_education_costs(
            [ChildConfig(age=18, education=EducationPath(university="public"))], is_tokyo=True,
        )
        assert arts[0] == 1_200_000
        assert science[0] == 1_600_000
        assert public_tokyo[0] == 820_000 - 540_000

    def test_graduated_child(self):
        assert calc_education_costs([ChildConfig(age=22)]) == [0] * HORIZON_YEARS

    def test_unborn_child_starts_later(self):
        costs = calc_education_costs([ChildConfig(age=-2)])
        assert costs[:2] == [0, 0]
        assert costs[2] == EDUCATION_COSTS["nursery"]

    def test_children_summed(self):
        one = calc_education_costs([ChildConfig(age=6)])
        two = calc_education_costs([ChildConfig(age=6), ChildConfig(age=6)])
        assert two[0] == one[0] * 2


class TestChildAllowance:
    def test_under_3(self):
        assert calc_child_allowance([ChildConfig(age=0)])[0] == 180_000

    def test_3_to_18(self):
        allowance = calc_child_allowance([ChildConfig(age=3)])
        assert allowance[0] == 120_000
        assert allowance[15] == 120_000
        assert allowance[16] == 0

    def test_negative_start_age_paid_infant_rate(self):
        allowance = calc_child_allowance([ChildConfig(age=-1)])
        assert allowance[0] == 180_000
        assert allowance[3] == 180_000
        assert allowance[4] == 120_000
        assert allowance[20] == 0

    def test_no_children(self):
        assert calc_child_allowance([]) == [0] * HORIZON_YEARS
