"""Per-person yearly income projection (salary, leave, pension, survivor branch)."""

import dataclasses
import math
from dataclasses import dataclass, field

from lifeplan_sim_jp.params import (
    HORIZON_YEARS,
    MAN,
    HouseholdPlan,
    JitanConfig,
    LeaveConfig,
    PersonConfig,
    SideBusinessConfig,
)
from lifeplan_sim_jp.pension import (
    DeceasedProfile,
    SurvivorPension,
    SurvivorProfile,
    calc_survivor_pension,
    estimate_pension_monthly,
)
from lifeplan_sim_jp.tax import calc_retirement_net, estimate_net_income

# 育児休業給付金: 通算1ヶ月目80%（出生後休業支援給付金込み）, 2〜6ヶ月目67%, 以降50%
LEAVE_BENEFIT_FIRST_MONTH_RATE = 0.80
LEAVE_BENEFIT_EARLY_RATE = 0.67
LEAVE_BENEFIT_LATE_RATE = 0.50
LEAVE_BENEFIT_EARLY_MONTHS = 6

# 育児時短就業給付金: 2歳未満の子を養育中、時短後賃金の10%
JITAN_SUBSIDY_RATE = 0.10
JITAN_CHILD_AGE_LIMIT = 2

DEFAULT_PENSION_START_AGE = 65


@dataclass
class IncomeBreakdown:
    """Yearly income by category (円)."""

    salary: int = 0          # 就労手取り + 時短給付
    leave_benefit: int = 0   # 育児休業給付（非課税）
    business: int = 0
    retirement: int = 0
    pension: int = 0
    survivor: SurvivorPension = field(default_factory=SurvivorPension)
    insurance: int = 0

    @property
    def total(self) -> int:
        return (
            self.salary + self.leave_benefit + self.business + self.retirement
            + self.pension + self.survivor.total + self.insurance
        )

    def __add__(self, other: "IncomeBreakdown") -> "IncomeBreakdown":
        return IncomeBreakdown(
            salary=self.salary + other.salary,
            leave_benefit=self.leave_benefit + other.leave_benefit,
            business=self.business + other.business,
            retirement=self.retirement + other.retirement,
            pension=self.pension + other.pension,
            survivor=self.survivor + other.survivor,
            insurance=self.insurance + other.insurance,
        )

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass
class AnnualIncome:
    year: int
    total: int
    breakdown: IncomeBreakdown


def calc_leave_months(year: int, leave: LeaveConfig) -> int:
    """Months of parental leave falling within the given 1-based year."""
    if not leave.enabled or not leave.start_year or not leave.duration_months:
        return 0
    leave_start = (leave.start_year - 1) * 12
    leave_end = leave_start + leave.duration_months
    year_start = (year - 1) * 12
    year_end = year_start + 12
    overlap_start = max(leave_start, year_start)
    overlap_end = min(leave_end, year_end)
    return max(0, overlap_end - overlap_start)


def leave_benefit_rate(career_leave_month: int) -> float:
    """Benefit rate for the n-th (0-indexed) month of leave taken in a career."""
    if career_leave_month == 0:
        return LEAVE_BENEFIT_FIRST_MONTH_RATE
    if career_leave_month < LEAVE_BENEFIT_EARLY_MONTHS:
        return LEAVE_BENEFIT_EARLY_RATE
    return LEAVE_BENEFIT_LATE_RATE


def calc_adjusted_net_income(
    annual_salary: float,
    annual_bonus: float,
    leave_months: int,
    apply_benefit: bool = False,
    previous_leave_months: int = 0,
) -> tuple[int, int, int]:
    """Split a year's net income into taxed work income and tax-free leave benefit.

    Returns (total, worked_net, allowance) in 円.
    """
    if leave_months <= 0:
        net = math.floor(estimate_net_income(annual_salary + annual_bonus))
        return net, net, 0

    worked_months = max(0, 12 - leave_months)
    worked_gross = (annual_salary / 12 + annual_bonus / 12) * worked_months
    worked_net = estimate_net_income(worked_gross)

    allowance = 0.0
    if apply_benefit:
        monthly_gross = annual_salary / 12
        for m in range(leave_months):
            allowance += monthly_gross * leave_benefit_rate(previous_leave_months + m)

    return (
        math.floor(worked_net + allowance),
        math.floor(worked_net),
        math.floor(allowance),
    )


def calc_jitan_subsidy(
    jitan: JitanConfig,
    year: int,
    adj_salary: float,
    adj_bonus: float,
    leave_months: int,
    child_ages: list[int],
) -> float:
    """Reduced-hours subsidy: 10% of the worked part of the reduced gross."""
    if not jitan.is_active(year):
        return 0.0
    if not any(age < JITAN_CHILD_AGE_LIMIT for age in child_ages):
        return 0.0
    work_ratio = max(0, 12 - leave_months) / 12
    return (adj_salary + adj_bonus) * work_ratio * JITAN_SUBSIDY_RATE


def side_business_net(side_business: SideBusinessConfig, year: int) -> int:
    if not side_business.is_active(year):
        return 0
    return math.floor(estimate_net_income(side_business.annual * MAN))


def years_of_service(person: PersonConfig) -> int:
    return max(1, person.retirement_age - person.retirement.service_start_age)


def _retirement_year_idx(person: PersonConfig) -> int:
    return max(0, person.retirement_age - person.age)


def retirement_gross_man(person: PersonConfig) -> float:
    """Gross retirement allowance (万円).

    auto: monthly salary projected to the retirement year × service years × multiplier.
    """
    config = person.retirement
    if config.method != "auto":
        return config.amount or 0
    idx = _retirement_year_idx(person)
    projected_monthly = person.salary * (1 + person.growth_rate) ** idx
    return projected_monthly * years_of_service(person) * config.multiplier


def retirement_lump_sum(person: PersonConfig, year_idx: int) -> int:
    """Net retirement allowance (円), paid once in the year age == retirement_age."""
    if person.age_at(year_idx) != person.retirement_age:
        return 0
    return calc_retirement_net(retirement_gross_man(person), years_of_service(person))


def pension_monthly_man(person: PersonConfig) -> float:
    """Monthly net old-age pension (万円).

    auto: estimated from annual gross projected to the retirement year.
    """
    config = person.pension
    if config.method != "auto":
        return config.monthly or 0
    annual_gross = person.projected_annual_gross(_retirement_year_idx(person))
    return estimate_pension_monthly(annual_gross, config.service_start_age, person.retirement_age)


def old_age_pension(person: PersonConfig, year_idx: int) -> int:
    """Annual old-age pension (円), every year from the pension start age on."""
    start_age = person.pension.start_age or DEFAULT_PENSION_START_AGE
    if person.age_at(year_idx) < start_age:
        return 0
    return round(pension_monthly_man(person) * MAN * 12)


def working_income(
    person: PersonConfig,
    year_idx: int,
    previous_leave_months: int,
    child_ages: list[int],
) -> tuple[int, int, int]:
    """Salary/bonus income for a working year.

    Returns (salary_net_incl_jitan, leave_benefit, cumulative_leave_months).
    """
    year = year_idx + 1
    growth = (1 + person.growth_rate) ** year_idx
    salary = person.salary * MAN * 12 * growth
    bonus = (person.bonus or 0) * MAN * growth
    if person.jitan.is_active(year):
        ratio = max(0, person.jitan.ratio) / 100
        salary *= ratio
        bonus *= ratio

    leave_months = calc_leave_months(year, person.leave)
    _, worked_net, allowance = calc_adjusted_net_income(
        salary, bonus, leave_months, person.leave.apply_benefit, previous_leave_months,
    )
    jitan = calc_jitan_subsidy(person.jitan, year, salary, bonus, leave_months, child_ages)
    return (
        math.floor(worked_net + jitan),
        allowance,
        previous_leave_months + leave_months,
    )


def survivor_income(
    deceased: PersonConfig,
    survivor: PersonConfig,
    year_idx: int,
    child_ages: list[int],
) -> IncomeBreakdown:
    """Income paid to the household after deceased's death.

    Survivor pension plus the private income-protection annuity while the
    youngest child is within the insured duration.
    """
    death_year_idx = max(0, deceased.death.age - deceased.age)
    profile = DeceasedProfile(
        annual_salary=deceased.projected_annual_gross(death_year_idx),
        service_start_age=deceased.retirement.service_start_age,
        death_age=deceased.death.age,
    )
    pension = calc_survivor_pension(
        profile,
        SurvivorProfile(age=survivor.age_at(year_idx), is_wife=survivor.is_female),
        child_ages,
    )

    insurance = 0
    if child_ages and min(child_ages) <= deceased.insurance.benefit_duration_years:
        insurance = round(deceased.insurance.benefit_monthly * MAN * 12)

    return IncomeBreakdown(survivor=pension, insurance=insurance)


def project_person_year(
    person: PersonConfig,
    spouse: PersonConfig,
    child_ages: list[int],
    year_idx: int,
    previous_leave_months: int,
    include_living_income: bool = True,
) -> tuple[IncomeBreakdown, int]:
    """Project one person's income for one year.

    Returns (breakdown, cumulative_leave_months) so the leave count can be
    threaded into the next year's call.
    """
    if person.is_dead_at(year_idx):
        return survivor_income(person, spouse, year_idx, child_ages), previous_leave_months
    if not include_living_income:
        return IncomeBreakdown(), previous_leave_months

    year = year_idx + 1
    breakdown = IncomeBreakdown(
        business=side_business_net(person.side_business, year),
        retirement=retirement_lump_sum(person, year_idx),
        pension=old_age_pension(person, year_idx),
    )
    cumulative = previous_leave_months
    if person.age_at(year_idx) < person.retirement_age:
        salary, leave_benefit, cumulative = working_income(
            person, year_idx, previous_leave_months, child_ages,
        )
        breakdown.salary = salary
        breakdown.leave_benefit = leave_benefit
    return breakdown, cumulative


def project_household_income(plan: HouseholdPlan) -> list[AnnualIncome]:
    """Project the household's yearly income over HORIZON_YEARS.

    The partner's own earnings (salary, business, retirement, pension) are
    counted only for a pair-loan / dual-income household; a deceased partner's
    survivor benefits are always counted.
    """
    leave_so_far = {"main": 0, "partner": 0}
    schedule = []
    for i in range(HORIZON_YEARS):
        child_ages = [c.age + i for c in plan.children]
        year_total = IncomeBreakdown()
        for role in ("main", "partner"):
            include = role == "main" or plan.loan.pair_loan
            breakdown, leave_so_far[role] = project_person_year(
                plan.person(role), plan.spouse_of(role), child_ages, i,
                leave_so_far[role], include_living_income=include,
            )
            year_total = year_total + breakdown
        schedule.append(AnnualIncome(year=i + 1, total=year_total.total, breakdown=year_total))
    return schedule
