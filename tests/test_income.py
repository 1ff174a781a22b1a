"""Tests for per-person income projection."""

import pytest
from lifeplan_sim_jp.income import (
    IncomeBreakdown,
    calc_adjusted_net_income,
    calc_jitan_subsidy,
    calc_leave_months,
    old_age_pension,
    project_household_income,
    project_person_year,
    retirement_gross_man,
    retirement_lump_sum,
    side_business_net,
    survivor_income,
    working_income,
)
from lifeplan_sim_jp.params import (
    HORIZON_YEARS,
    ChildConfig,
    DeathConfig,
    HouseholdPlan,
    InsuranceConfig,
    JitanConfig,
    LeaveConfig,
    LoanConfig,
    PensionConfig,
    PersonConfig,
    RetirementConfig,
    SideBusinessConfig,
)
from lifeplan_sim_jp.pension import WIDOW_ADDITION


def _plan(main: PersonConfig, partner: PersonConfig, pair_loan: bool = False, children=None) -> HouseholdPlan:
    return HouseholdPlan(
        main=main,
        partner=partner,
        loan=LoanConfig(pair_loan=pair_loan),
        children=children if children is not None else [],
    )


class TestLeaveMonths:
    def test_within_first_year(self):
        leave = LeaveConfig(enabled=True, start_year=1, duration_months=7)
        assert calc_leave_months(1, leave) == 7
        assert calc_leave_months(2, leave) == 0

    def test_spans_two_years(self):
        leave = LeaveConfig(enabled=True, start_year=1, duration_months=18)
        assert calc_leave_months(1, leave) == 12
        assert calc_leave_months(2, leave) == 6

    def test_later_start(self):
        leave = LeaveConfig(enabled=True, start_year=2, duration_months=6)
        assert calc_leave_months(1, leave) == 0
        assert calc_leave_months(2, leave) == 6

    def test_disabled(self):
        leave = LeaveConfig(enabled=False, start_year=1, duration_months=12)
        assert calc_leave_months(1, leave) == 0


class TestAdjustedNetIncome:
    """月給50万（年600万）・賞与なし"""

    def test_no_leave(self):
        total, worked, allowance = calc_adjusted_net_income(6_000_000, 0, 0)
        assert total == worked == 4_680_000
        assert allowance == 0

    def test_seven_month_benefit_tiering(self):
        """通算1ヶ月目80% + 2〜6ヶ月目67%×5 + 7ヶ月目50%"""
        total, worked, allowance = calc_adjusted_net_income(6_000_000, 0, 7, apply_benefit=True)
        assert allowance == pytest.approx(500_000 * (0.80 + 5 * 0.67 + 0.50), abs=1)
        assert worked == 2_000_000
        assert total == pytest.approx(worked + allowance, abs=1)

    def test_opt_out(self):
        total, worked, allowance = calc_adjusted_net_income(6_000_000, 0, 7, apply_benefit=False)
        assert allowance == 0
        assert worked == 2_000_000
        assert total == 2_000_000

    def test_prior_leave_continues_tier(self):
        _, _, allowance = calc_adjusted_net_income(6_000_000, 0, 5, True, previous_leave_months=7)
        assert allowance == pytest.approx(500_000 * 0.50 * 5, abs=1)

    def test_prior_leave_mid_tier(self):
        _, _, allowance = calc_adjusted_net_income(6_000_000, 0, 4, True, previous_leave_months=3)
        assert allowance == pytest.approx(500_000 * (0.67 * 3 + 0.50), abs=1)

    def test_full_year_leave(self):
        _, worked, _ = calc_adjusted_net_income(6_000_000, 1_200_000, 12, True)
        assert worked == 0


class TestJitan:
    def setup_method(self):
        self.jitan = JitanConfig(enabled=True, start_year=1, duration_years=2, ratio=50)

    def test_subsidy_with_infant(self):
        assert calc_jitan_subsidy(self.jitan, 1, 3_000_000, 0, 0, [0]) == pytest.approx(300_000)

    def test_no_subsidy_without_infant(self):
        assert calc_jitan_subsidy(self.jitan, 1, 3_000_000, 0, 0, [2]) == 0

    def test_inactive_year(self):
        assert calc_jitan_subsidy(self.jitan, 3, 3_000_000, 0, 0, [0]) == 0

    def test_subsidy_prorated_by_leave(self):
        assert calc_jitan_subsidy(self.jitan, 1, 3_000_000, 0, 6, [0]) == pytest.approx(150_000)

    def test_reduced_salary_plus_subsidy(self):
        """月給50万×50% = 年300万 → 手取り240万 + 時短給付30万"""
        person = PersonConfig(salary=50, bonus=0, jitan=self.jitan)
        salary, leave_benefit, cumulative = working_income(person, 0, 0, [0])
        assert salary == 2_700_000
        assert leave_benefit == 0
        assert cumulative == 0


class TestSideBusiness:
    def test_active(self):
        sb = SideBusinessConfig(enabled=True, annual=100, start_year=2, duration_years=3)
        assert side_business_net(sb, 1) == 0
        assert side_business_net(sb, 2) == 800_000
        assert side_business_net(sb, 5) == 0

    def test_disabled(self):
        assert side_business_net(SideBusinessConfig(enabled=False, annual=100), 1) == 0


class TestRetirement:
    def test_manual_paid_once(self):
        person = PersonConfig(age=64, retirement_age=65, retirement=RetirementConfig(method="manual", amount=1000))
        assert retirement_lump_sum(person, 0) == 0
        assert retirement_lump_sum(person, 1) == 10_000_000
        assert retirement_lump_sum(person, 2) == 0

    def test_auto_gross(self):
        """月給50万 × 勤続43年 × 1.0"""
        person = PersonConfig(
            age=64, retirement_age=65, salary=50,
            retirement=RetirementConfig(method="auto", service_start_age=22, multiplier=1.0),
        )
        assert retirement_gross_man(person) == pytest.approx(2150)
        assert retirement_lump_sum(person, 1) == 21_500_000

    def test_auto_uses_salary_at_retirement(self):
        person = PersonConfig(
            age=60, retirement_age=65, salary=50, salary_increase=2.0,
            retirement=RetirementConfig(method="auto", multiplier=1.0),
        )
        assert retirement_gross_man(person) == pytest.approx(50 * 1.02 ** 5 * 43)


class TestOldAgePension:
    def test_manual(self):
        person = PersonConfig(age=64, pension=PensionConfig(method="manual", monthly=15, start_age=65))
        assert old_age_pension(person, 0) == 0
        assert old_age_pension(person, 1) == 1_800_000
        assert old_age_pension(person, 10) == 1_800_000

    def test_auto(self):
        person = PersonConfig(
            age=64, retirement_age=65, salary=50, bonus=0,
            pension=PensionConfig(method="auto", start_age=65, service_start_age=22),
        )
        assert old_age_pension(person, 1) == 1_980_000


class TestSurvivorIncome:
    def setup_method(self):
        self.deceased = PersonConfig(
            age=30, salary=50, bonus=0,
            death=DeathConfig(enabled=True, age=40),
            insurance=InsuranceConfig(benefit_monthly=10, benefit_duration_years=18),
        )
        self.survivor = PersonConfig(role="partner", age=30, is_female=True)

    def test_insurance_while_youngest_child_covered(self):
        assert survivor_income(self.deceased, self.survivor, 10, [5]).insurance == 1_200_000

    def test_insurance_stops(self):
        assert survivor_income(self.deceased, self.survivor, 10, [19]).insurance == 0

    def test_no_insurance_without_children(self):
        assert survivor_income(self.deceased, self.survivor, 10, []).insurance == 0

    def test_widow_addition_at_40(self):
        breakdown = survivor_income(self.deceased, self.survivor, 10, [])
        assert breakdown.survivor.widow == WIDOW_ADDITION
        assert breakdown.salary == 0


class TestProjectPersonYear:
    def test_dead_person_gets_no_salary(self):
        person = PersonConfig(age=30, salary=50, death=DeathConfig(enabled=True, age=30))
        spouse = PersonConfig(role="partner", age=30, is_female=True)
        breakdown, cumulative = project_person_year(person, spouse, [], 0, 3)
        assert breakdown.salary == 0
        assert breakdown.survivor.total > 0
        assert cumulative == 3

    def test_excluded_partner(self):
        partner = PersonConfig(role="partner", salary=30, bonus=0)
        breakdown, _ = project_person_year(partner, PersonConfig(), [], 0, 0, include_living_income=False)
        assert breakdown == IncomeBreakdown()

    def test_no_salary_after_retirement(self):
        person = PersonConfig(age=65, retirement_age=65, salary=50)
        breakdown, _ = project_person_year(person, PersonConfig(role="partner"), [], 0, 0)
        assert breakdown.salary == 0


class TestProjectHouseholdIncome:
    def setup_method(self):
        self.main = PersonConfig(age=30, salary=50, bonus=0)
        self.partner = PersonConfig(role="partner", age=30, salary=30, bonus=0, is_female=True)

    def test_length(self):
        schedule = project_household_income(_plan(self.main, self.partner))
        assert len(schedule) == HORIZON_YEARS
        assert schedule[0].year == 1
        assert schedule[-1].year == HORIZON_YEARS

    def test_single_income_household(self):
        schedule = project_household_income(_plan(self.main, self.partner, pair_loan=False))
        assert schedule[0].total == 4_680_000

    def test_dual_income_household(self):
        schedule = project_household_income(_plan(self.main, self.partner, pair_loan=True))
        assert schedule[0].total == 4_680_000 + 2_808_000

    def test_total_matches_breakdown(self):
        schedule = project_household_income(_plan(self.main, self.partner, pair_loan=True))
        assert all(year.total == year.breakdown.total for year in schedule)

    def test_main_death_switches_to_survivor_pension(self):
        main = PersonConfig(age=30, salary=50, bonus=0, death=DeathConfig(enabled=True, age=40))
        schedule = project_household_income(_plan(main, self.partner))
        assert schedule[9].breakdown.salary == 4_680_000
        year = schedule[10]
        assert year.breakdown.salary == 0
        assert year.breakdown.survivor.widow == WIDOW_ADDITION
        assert year.total == year.breakdown.survivor.total

    def test_leave_months_threaded_across_years(self):
        partner = PersonConfig(
            role="partner", age=30, salary=30, bonus=0, is_female=True,
            leave=LeaveConfig(enabled=True, start_year=1, duration_months=18, apply_benefit=True),
        )
        schedule = project_household_income(
            _plan(self.main, partner, pair_loan=True, children=[ChildConfig(age=0)]),
        )
        assert schedule[0].breakdown.leave_benefit == pytest.approx(300_000 * (0.80 + 5 * 0.67 + 6 * 0.50), abs=1)
        assert schedule[1].breakdown.leave_benefit == pytest.approx(300_000 * 0.50 * 6, abs=1)
        assert schedule[2].breakdown.leave_benefit == 0
