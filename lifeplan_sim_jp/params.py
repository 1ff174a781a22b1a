"""Household plan configuration and shared financial helpers."""

import dataclasses
from dataclasses import dataclass, field

HORIZON_YEARS = 35  # シミュレーション期間（年）
MAN = 10_000        # 1万円

RATE_BLOCK_YEARS = 5
RATE_BLOCKS = 7  # 35年 / 5年
DEFAULT_RATES = [0.4, 0.4, 0.8, 1.0, 1.2, 1.5, 1.8]  # 年利%（5年ごと）
FALLBACK_RATE = 0.5

RETIREMENT_METHODS = ("manual", "auto")
INSURANCE_EXPENSE_NAME = "民間保険"


@dataclass
class LeaveConfig:
    """育児休業"""

    enabled: bool = False
    start_year: int = 1          # 取得開始年（1始まり）
    duration_months: int = 0
    apply_benefit: bool = False  # 育児休業給付金を受給するか


@dataclass
class JitanConfig:
    """時短勤務"""

    enabled: bool = False
    start_year: int = 1
    duration_years: int = 0
    ratio: float = 100  # 給与支給率（%）

    def is_active(self, year: int) -> bool:
        return (
            self.enabled and self.duration_years > 0
            and self.start_year <= year < self.start_year + self.duration_years
        )


@dataclass
class SideBusinessConfig:
    """副業"""

    enabled: bool = False
    annual: float = 0  # 年間売上（万円, 額面）
    start_year: int = 1
    duration_years: int = HORIZON_YEARS

    def is_active(self, year: int) -> bool:
        if not (self.enabled and self.annual > 0):
            return False
        start = self.start_year or 1
        duration = self.duration_years or HORIZON_YEARS
        return start <= year < start + duration


@dataclass
class RetirementConfig:
    """退職金: manual=金額指定, auto=勤続年数×月給×支給倍率"""

    method: str = "manual"
    amount: float = 0            # 額面（万円, manual時）
    service_start_age: int = 22
    multiplier: float = 1.0


@dataclass
class PensionConfig:
    """老齢年金: manual=月額指定, auto=平均年収から推計"""

    method: str = "manual"
    monthly: float = 0  # 手取り月額（万円, manual時）
    start_age: int = 65
    service_start_age: int = 22


@dataclass
class DeathConfig:
    enabled: bool = False
    age: int = 60


@dataclass
class InsuranceConfig:
    """民間保険（収入保障型）"""

    premium: float = 0                # 保険料（円/月）
    benefit_monthly: float = 0        # 死亡時の給付（万円/月）
    benefit_duration_years: int = 18  # 末子がこの年齢になるまで給付


@dataclass
class PersonConfig:
    role: str = "main"  # "main" | "partner"
    age: int = 30
    retirement_age: int = 65
    salary: float = 45.0      # 月給（万円, 額面）
    bonus: float = 120.0      # 年間賞与（万円, 額面）
    salary_increase: float = 0.0  # 昇給率（%/年）
    is_female: bool = False
    leave: LeaveConfig = field(default_factory=LeaveConfig)
    jitan: JitanConfig = field(default_factory=JitanConfig)
    side_business: SideBusinessConfig = field(default_factory=SideBusinessConfig)
    retirement: RetirementConfig = field(default_factory=RetirementConfig)
    pension: PensionConfig = field(default_factory=PensionConfig)
    death: DeathConfig = field(default_factory=DeathConfig)
    insurance: InsuranceConfig = field(default_factory=InsuranceConfig)

    @property
    def annual_gross(self) -> float:
        """額面年収（万円）"""
        return self.salary * 12 + (self.bonus or 0)

    @property
    def growth_rate(self) -> float:
        return (self.salary_increase or 0) / 100

    def age_at(self, year_idx: int) -> int:
        return self.age + year_idx

    def is_dead_at(self, year_idx: int) -> bool:
        return self.death.enabled and self.age_at(year_idx) >= self.death.age

    def projected_annual_gross(self, year_idx: int) -> float:
        """Annual gross (万円) compounded by salary_increase for year_idx years."""
        return self.annual_gross * (1 + self.growth_rate) ** max(0, year_idx)


@dataclass
class EducationPath:
    kindergarten: str = "public"
    elementary: str = "public"
    junior_high: str = "public"
    high_school: str = "public"
    university: str = "private_arts"  # public | private_arts | private_science


@dataclass
class ChildConfig:
    age: int = 0  # シミュレーション開始時の年齢
    education: EducationPath = field(default_factory=EducationPath)


@dataclass
class PropertyConfig:
    price: float = 5000          # 物件価格（万円）
    deposit: float = 0           # 手付金（万円）
    down_payment: float = 0      # 頭金（万円）
    land_price: float = 3000     # 土地評価の基準となる時価（万円）
    land_area: float = 100       # ㎡
    building_price: float = 2000
    building_area: float = 90
    structure: str = "wood"      # wood | steel | rc
    building_type: str = "longterm"  # general | zeh | longterm（住宅ローン控除の借入限度額）
    is_new: bool = True
    is_long_term: bool = False   # 長期優良住宅（新築軽減の延長）
    # Advanced
    land_ratio: float = 0.7      # 時価 → 固定資産税評価額
    building_ratio: float = 0.6
    fixed_rate: float = 1.4      # 固定資産税率（%）
    city_rate: float = 0.3       # 都市計画税率（%）
    tax_method: str = "auto"     # auto | manual
    manual_tax: float = 15       # 年額（万円, manual時）


@dataclass
class LoanConfig:
    amount: float = 4000           # 借入総額（万円）
    bonus_principal: float = 1000  # うちボーナス返済分（万円）
    rates: list[float] = field(default_factory=lambda: list(DEFAULT_RATES))
    has_deduction: bool = True     # 住宅ローン控除
    pair_loan: bool = False        # ペアローン / 共働き
    main_amount: float = 2000      # ペアローン時の本人借入（万円）
    main_bonus: float = 500

    def get_rate(self, year: int) -> float:
        """Annual rate (%) for a 1-based loan year (5-year step schedule)"""
        return get_block_rate(self.rates, year)

    def split(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Return ((main_amount, main_bonus), (partner_amount, partner_bonus)) in 万円."""
        if not self.pair_loan:
            return (self.amount, self.bonus_principal), (0.0, 0.0)
        partner_amount = max(0.0, self.amount - self.main_amount)
        partner_bonus = max(0.0, self.bonus_principal - self.main_bonus)
        return (self.main_amount, self.main_bonus), (partner_amount, partner_bonus)


@dataclass
class InvestmentVehicle:
    name: str = "積立NISA"
    initial: float = 0     # 初期投資額（万円）
    monthly: float = 0     # 月額積立（万円）
    duration: int = HORIZON_YEARS  # 積立年数
    rate: float = 0        # 想定利回り（%/年）


@dataclass
class ExpenseItem:
    name: str
    amount: float  # 円/月（初期費用は万円）


def _default_expenses() -> list[ExpenseItem]:
    return [
        ExpenseItem("食費", 70000),
        ExpenseItem("電気・ガス・水道", 25000),
        ExpenseItem("通信費(スマホ・光)", 15000),
        ExpenseItem("日用品・消耗品", 10000),
        ExpenseItem("被服・美容", 20000),
        ExpenseItem("医療・保険(掛捨)", 10000),
        ExpenseItem("夫婦お小遣い", 60000),
        ExpenseItem("趣味・交際・レジャー", 40000),
        ExpenseItem("車維持費(ガソリン等)", 15000),
        ExpenseItem(INSURANCE_EXPENSE_NAME, 0),
        ExpenseItem("その他予備費", 10000),
    ]


def _default_initial_expenses() -> list[ExpenseItem]:
    return [
        ExpenseItem("仲介手数料", 0),
        ExpenseItem("登記・ローン関連諸費用", 100),
        ExpenseItem("引越し費用", 20),
        ExpenseItem("家具・家電・インテリア", 100),
        ExpenseItem("その他 (リフォーム等)", 0),
    ]


@dataclass
class HouseholdPlan:

    main: PersonConfig = field(default_factory=lambda: PersonConfig(role="main"))
    partner: PersonConfig = field(
        default_factory=lambda: PersonConfig(role="partner", salary=30.0, bonus=80.0, is_female=True)
    )
    loan: LoanConfig = field(default_factory=LoanConfig)
    property: PropertyConfig = field(default_factory=PropertyConfig)
    children: list[ChildConfig] = field(default_factory=lambda: [ChildConfig(age=2)])

    # Living cost parameters
    expenses: list[ExpenseItem] = field(default_factory=_default_expenses)  # 円/月
    initial_expenses: list[ExpenseItem] = field(default_factory=_default_initial_expenses)  # 万円

    # Assets
    initial_savings: float = 500  # 万円
    investments: list[InvestmentVehicle] = field(
        default_factory=lambda: [InvestmentVehicle(initial=0, monthly=5, duration=20, rate=5)]
    )

    # Family subsidies
    is_tokyo: bool = False
    has_allowance: bool = False
    is_free_nursery: bool = False

    def person(self, role: str) -> PersonConfig:
        return self.main if role == "main" else self.partner

    def spouse_of(self, role: str) -> PersonConfig:
        return self.partner if role == "main" else self.main


def get_block_rate(rates: list[float], year: int) -> float:
    """Annual rate (%) for a 1-based year. Years past the curve reuse the last entry."""
    if not rates:
        return FALLBACK_RATE
    idx = min(max(0, (year - 1) // RATE_BLOCK_YEARS), len(rates) - 1)
    return rates[idx]


def calc_equal_payment(principal: float, period_rate: float, periods: int) -> float:
    """Calculate level payment per period (元利均等返済)"""
    if principal <= 0 or periods <= 0:
        return 0.0
    if period_rate == 0:
        return principal / periods
    r = period_rate
    n = periods
    return principal * r * (1 + r) ** n / ((1 + r) ** n - 1)


def base_monthly_living_cost(plan: HouseholdPlan) -> float:
    """Sum of the monthly living-expense list (円/月).

    The 民間保険 line mirrors the insurance premiums, which are charged
    separately (and only while the insured person is alive).
    """
    return sum(
        item.amount or 0 for item in plan.expenses
        if item.name != INSURANCE_EXPENSE_NAME
    )


def _clamp_person(p: PersonConfig) -> PersonConfig:
    retirement = dataclasses.replace(
        p.retirement,
        method=p.retirement.method if p.retirement.method in RETIREMENT_METHODS else "manual",
        amount=max(0.0, p.retirement.amount or 0),
        multiplier=max(0.0, p.retirement.multiplier or 0),
    )
    pension = dataclasses.replace(
        p.pension,
        method=p.pension.method if p.pension.method in RETIREMENT_METHODS else "manual",
        monthly=max(0.0, p.pension.monthly or 0),
        start_age=p.pension.start_age or 65,
    )
    insurance = dataclasses.replace(
        p.insurance,
        premium=max(0.0, p.insurance.premium or 0),
        benefit_monthly=max(0.0, p.insurance.benefit_monthly or 0),
    )
    jitan = dataclasses.replace(p.jitan, ratio=max(0.0, p.jitan.ratio))
    leave = dataclasses.replace(p.leave, duration_months=max(0, p.leave.duration_months or 0))
    return dataclasses.replace(
        p,
        age=max(0, p.age),
        salary=max(0.0, p.salary or 0),
        bonus=max(0.0, p.bonus or 0),
        retirement=retirement,
        pension=pension,
        insurance=insurance,
        jitan=jitan,
        leave=leave,
    )


def normalize_plan(plan: HouseholdPlan) -> HouseholdPlan:
    """Return a normalized copy of plan. Call once before projection.

    - Negative amounts are clamped to 0; unknown methods fall back to manual.
    - The 民間保険 living-expense line is synced to the two insurance premiums.
    - Bonus principals are kept within their loan amounts (total and pair-loan main share).
    - The rate curve is padded (last value) or trimmed to one entry per 5-year block.
    """
    main = _clamp_person(dataclasses.replace(plan.main, role="main"))
    partner = _clamp_person(dataclasses.replace(plan.partner, role="partner"))

    rates = list(plan.loan.rates) or [FALLBACK_RATE]
    rates = (rates + [rates[-1]] * RATE_BLOCKS)[:RATE_BLOCKS]
    amount = max(0.0, plan.loan.amount or 0)
    main_amount = min(max(0.0, plan.loan.main_amount or 0), amount)
    loan = dataclasses.replace(
        plan.loan,
        amount=amount,
        bonus_principal=min(max(0.0, plan.loan.bonus_principal or 0), amount),
        rates=rates,
        main_amount=main_amount,
        main_bonus=min(max(0.0, plan.loan.main_bonus or 0), main_amount),
    )

    premium_total = main.insurance.premium + partner.insurance.premium
    expenses = [
        dataclasses.replace(e, amount=max(0.0, e.amount or 0))
        for e in plan.expenses if e.name != INSURANCE_EXPENSE_NAME
    ]
    expenses.append(ExpenseItem(INSURANCE_EXPENSE_NAME, premium_total))

    children = [dataclasses.replace(c) for c in plan.children]
    investments = [
        dataclasses.replace(
            inv,
            initial=max(0.0, inv.initial or 0),
            monthly=max(0.0, inv.monthly or 0),
            duration=inv.duration or HORIZON_YEARS,
        )
        for inv in plan.investments
    ]

    return dataclasses.replace(
        plan,
        main=main,
        partner=partner,
        loan=loan,
        children=children,
        expenses=expenses,
        investments=investments,
        initial_savings=plan.initial_savings or 0,
    )
