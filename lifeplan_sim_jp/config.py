"""TOML config loader with CLI > config > default resolution."""

import argparse
import dataclasses
import sys
import tomllib
from collections.abc import Callable
from pathlib import Path

from lifeplan_sim_jp.params import (
    RATE_BLOCKS,
    ChildConfig,
    DeathConfig,
    ExpenseItem,
    HouseholdPlan,
    InvestmentVehicle,
)
from lifeplan_sim_jp.simulation import net_initial_savings

DEFAULT_CONFIG_PATH = Path("config.toml")
LIVING_COST_ITEM_NAME = "生活費"

DEFAULTS = {
    "main_age": 30,
    "partner_age": 30,
    "main_salary": 45.0,
    "partner_salary": 30.0,
    "loan_amount": 4000.0,
    "bonus_principal": 1000.0,
    "savings": 500.0,
    "living_cost": None,
    "pair_loan": False,
    "main_death_age": None,
    "partner_death_age": None,
}

# flat key → (table, field) in the nested TOML layout
_NESTED_KEYS = {
    "main_age": ("main", "age"),
    "partner_age": ("partner", "age"),
    "main_salary": ("main", "salary"),
    "partner_salary": ("partner", "salary"),
    "loan_amount": ("loan", "amount"),
    "bonus_principal": ("loan", "bonus_principal"),
    "pair_loan": ("loan", "pair_loan"),
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"設定ファイルの読み込みに失敗: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # Lift nested values ([main] age = 30) to the flat keys the CLI overrides
    for key, (table, name) in _NESTED_KEYS.items():
        section = raw.get(table)
        if key not in raw and isinstance(section, dict) and name in section:
            raw[key] = section[name]
    for role in ("main", "partner"):
        section = raw.get(role)
        death = section.get("death") if isinstance(section, dict) else None
        if f"{role}_death_age" not in raw and isinstance(death, dict) and death.get("enabled"):
            raw[f"{role}_death_age"] = death.get("age", DeathConfig().age)
    if "initial_savings" in raw and "savings" not in raw:
        raw["savings"] = raw["initial_savings"]
    # Normalize children: [2, 5] → [{age = 2}, {age = 5}], false → []
    if "children" in raw:
        v = raw["children"]
        if v is False:
            raw["children"] = []
        elif isinstance(v, list):
            raw["children"] = [c if isinstance(c, dict) else {"age": int(c)} for c in v]
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared simulation flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="設定ファイルパス (default: config.toml)")
    parser.add_argument("--main-age", type=int, default=None, help=f"本人の開始年齢 (default: {d['main_age']})")
    parser.add_argument("--partner-age", type=int, default=None, help=f"配偶者の開始年齢 (default: {d['partner_age']})")
    parser.add_argument("--main-salary", type=float, default=None, help=f"本人の月給・額面万円 (default: {d['main_salary']})")
    parser.add_argument("--partner-salary", type=float, default=None, help=f"配偶者の月給・額面万円 (default: {d['partner_salary']})")
    parser.add_argument("--loan", dest="loan_amount", type=float, default=None, help=f"借入総額・万円 (default: {d['loan_amount']:.0f})")
    parser.add_argument("--bonus-principal", type=float, default=None, help=f"うちボーナス返済分・万円 (default: {d['bonus_principal']:.0f})")
    parser.add_argument("--savings", type=float, default=None, help=f"初期貯蓄・万円 (default: {d['savings']:.0f})")
    parser.add_argument("--living-cost", type=float, default=None, help="基本生活費・円/月（指定時は費目リストを置き換え）")
    parser.add_argument(
        "--pair-loan", action=argparse.BooleanOptionalAction, default=None,
        help="ペアローン / 共働き（配偶者の収入を計上）。--no-pair-loan で設定ファイルの指定を解除",
    )
    parser.add_argument("--main-death-age", type=int, default=None, help="本人の死亡年齢（指定時は遺族年金・団信をシミュレーション）")
    parser.add_argument("--partner-death-age", type=int, default=None, help="配偶者の死亡年齢")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def _merge(base, data):
    """Overlay a TOML table onto a config dataclass instance. Unknown keys are ignored."""
    if not isinstance(data, dict):
        return base
    changes = {}
    for f in dataclasses.fields(base):
        if f.name not in data:
            continue
        value = data[f.name]
        current = getattr(base, f.name)
        if dataclasses.is_dataclass(current) and isinstance(value, dict):
            value = _merge(current, value)
        changes[f.name] = value
    return dataclasses.replace(base, **changes)


def _expense_items(items: list) -> list[ExpenseItem]:
    return [ExpenseItem(str(e.get("name", "")), e.get("amount", 0)) for e in items if isinstance(e, dict)]


def plan_from_dict(raw: dict) -> HouseholdPlan:
    """Build a HouseholdPlan from nested TOML tables; missing keys keep defaults."""
    plan = HouseholdPlan()
    changes = {}
    for name in ("main", "partner", "loan", "property"):
        if name in raw:
            changes[name] = _merge(getattr(plan, name), raw[name])
    if "children" in raw:
        changes["children"] = [_merge(ChildConfig(), c) for c in raw["children"]]
    if "investments" in raw:
        changes["investments"] = [_merge(InvestmentVehicle(), inv) for inv in raw["investments"]]
    if "expenses" in raw:
        changes["expenses"] = _expense_items(raw["expenses"])
    if "initial_expenses" in raw:
        changes["initial_expenses"] = _expense_items(raw["initial_expenses"])
    for name in ("initial_savings", "is_tokyo", "has_allowance", "is_free_nursery"):
        if name in raw:
            changes[name] = raw[name]
    return dataclasses.replace(plan, **changes)


def _apply_death_age(person, age: int | None):
    if age is None:
        return person
    return dataclasses.replace(person, death=DeathConfig(enabled=True, age=age))


def build_plan(r: dict, raw: dict | None = None) -> HouseholdPlan:
    """Build HouseholdPlan from resolved values layered over the config tables."""
    plan = plan_from_dict(raw or {})
    main = dataclasses.replace(plan.main, age=r["main_age"], salary=r["main_salary"])
    partner = dataclasses.replace(plan.partner, age=r["partner_age"], salary=r["partner_salary"])
    loan = dataclasses.replace(
        plan.loan,
        amount=r["loan_amount"],
        bonus_principal=r["bonus_principal"],
        pair_loan=bool(r["pair_loan"]),
    )
    expenses = plan.expenses
    if r["living_cost"] is not None:
        expenses = [ExpenseItem(LIVING_COST_ITEM_NAME, r["living_cost"])]
    return dataclasses.replace(
        plan,
        main=_apply_death_age(main, r["main_death_age"]),
        partner=_apply_death_age(partner, r["partner_death_age"]),
        loan=loan,
        expenses=expenses,
        initial_savings=r["savings"],
    )


def validate_plan(plan: HouseholdPlan) -> list[str]:
    """Check a plan for inputs that will be clamped or look unintended. Returns list of warnings."""
    warnings = []
    for label, person in (("本人", plan.main), ("配偶者", plan.partner)):
        if person.age < 0:
            warnings.append(f"{label}の年齢{person.age}歳が負の値です（0歳として計算）")
        if person.retirement_age <= person.age:
            warnings.append(
                f"{label}の退職年齢{person.retirement_age}歳が現在の年齢{person.age}歳以下です"
                "（給与収入は計上されません）"
            )
        if person.death.enabled and person.death.age <= person.age:
            warnings.append(f"{label}の死亡年齢{person.death.age}歳が現在の年齢以下です（初年度から死亡として計算）")

    loan = plan.loan
    if loan.bonus_principal > loan.amount:
        warnings.append(
            f"ボーナス返済分{loan.bonus_principal:.0f}万円が借入総額{loan.amount:.0f}万円を超えています"
            "（借入総額に丸めます）"
        )
    if loan.pair_loan and loan.main_amount > loan.amount:
        warnings.append(
            f"ペアローンの本人借入{loan.main_amount:.0f}万円が借入総額{loan.amount:.0f}万円を超えています"
        )
    if loan.pair_loan and loan.main_bonus > min(loan.main_amount, loan.amount):
        warnings.append(
            f"ペアローンの本人ボーナス返済分{loan.main_bonus:.0f}万円が本人借入{loan.main_amount:.0f}万円を超えています"
            "（本人借入に丸めます）"
        )
    if len(loan.rates) != RATE_BLOCKS:
        warnings.append(f"金利は5年ごとに{RATE_BLOCKS}区間分を指定してください（{len(loan.rates)}区間: 不足分は最終値を使用）")

    remaining = net_initial_savings(plan)
    if remaining < 0:
        warnings.append(f"手付金・頭金・初期費用が初期貯蓄を{-remaining:.0f}万円超過しています")
    return warnings


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
) -> tuple[HouseholdPlan, dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (plan, resolved_dict, namespace).
    namespace: raw argparse.Namespace (for extra CLI args added via add_args_fn).
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    config = load_config(args.config)
    r = resolve(args, config)
    return build_plan(r, config), r, args
