"""Chart generation for household projection results."""

import platform
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from lifeplan_sim_jp.params import MAN

ASSET_COLORS = {
    "cash": "#1f77b4",        # blue
    "investment": "#2ca02c",  # green
    "total": "#ff7f0e",       # orange
}

EXPENSE_COLORS = {
    "mortgage": "#8da0cb",
    "education": "#fc8d62",
    "living": "#66c2a5",
    "fixed_asset_tax": "#e78ac3",
    "investment": "#a6d854",
}


def _setup_japanese_font():
    """Configure matplotlib to use a Japanese font."""
    system = platform.system()
    if system == "Darwin":
        font_family = "Hiragino Sans"
    elif system == "Linux":
        font_family = "Noto Sans CJK JP"
    else:
        font_family = "sans-serif"
    plt.rcParams["font.family"] = font_family
    plt.rcParams["axes.unicode_minus"] = False


def _format_man_axis(ax: plt.Axes):
    """Y axis in 万円 with 億円 labels on the right."""
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x:,.0f}")
    )
    ax_right = ax.secondary_yaxis("right")
    ax_right.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x / 10000:.1f}億" if x != 0 else "0")
    )
    ax_right.set_ylabel("")


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return filepath


def plot_asset_trajectory(result: dict, output_path: Path, name: str = "") -> Path:
    """Generate a line chart of cash, investment and total assets.

    Args:
        result: simulate_plan() return dict (with yearly_log).
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "a" → "assets-a.png").

    Returns:
        Path to the generated PNG file.
    """
    _setup_japanese_font()

    log = result["yearly_log"]
    ages = [entry["main_age"] for entry in log]

    fig, ax = plt.subplots(figsize=(14, 8))
    ax.plot(ages, [entry["cash"] / MAN for entry in log],
            label="現預金", color=ASSET_COLORS["cash"], linewidth=2)
    ax.plot(ages, [entry["investment_balance"] / MAN for entry in log],
            label="投資資産", color=ASSET_COLORS["investment"], linewidth=2)
    ax.plot(ages, [entry["total_assets"] / MAN for entry in log],
            label="総資産", color=ASSET_COLORS["total"], linewidth=2.5)
    ax.axhline(0, color="black", linewidth=1.5, zorder=5)

    # First year the cash balance goes negative
    shortfall = next((entry for entry in log if entry["cash"] < 0), None)
    if shortfall is not None:
        ax.axvline(shortfall["main_age"], color="#d62728", linewidth=2, linestyle=":")
        ax.annotate(
            f"{shortfall['main_age']}歳 資金ショート",
            xy=(shortfall["main_age"], ax.get_ylim()[1] * 0.85),
            fontsize=11, fontweight="bold", color="#d62728",
            ha="right",
            bbox=dict(boxstyle="round,pad=0.3", fc="white", ec="#d62728", alpha=0.9),
        )

    ax.set_xlabel("本人の年齢")
    ax.set_ylabel("資産残高（万円）")
    ax.set_title("資産推移（35年間）")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_man_axis(ax)

    return _save(fig, output_path, "assets", name)


def plot_cashflow_stack(result: dict, output_path: Path, name: str = "") -> Path:
    """Generate a stacked yearly expense chart with the income line on top."""
    _setup_japanese_font()

    log = result["yearly_log"]
    if not log:
        raise ValueError("No yearly log for cashflow chart")

    ages = [entry["main_age"] for entry in log]
    mortgage = [entry["mortgage_payment"] / MAN for entry in log]
    education = [entry["education"] / MAN for entry in log]
    living = [(entry["living"] + entry["other"]) / MAN for entry in log]
    fixed_asset_tax = [entry["fixed_asset_tax"] / MAN for entry in log]
    investment = [entry["investment"] / MAN for entry in log]
    income = [entry["income"] / MAN for entry in log]

    fig, ax = plt.subplots(figsize=(14, 8))
    ax.stackplot(
        ages,
        mortgage,
        education,
        living,
        fixed_asset_tax,
        investment,
        labels=["住宅ローン", "教育費", "生活費・保険料", "固定資産税", "積立投資"],
        colors=[
            EXPENSE_COLORS["mortgage"],
            EXPENSE_COLORS["education"],
            EXPENSE_COLORS["living"],
            EXPENSE_COLORS["fixed_asset_tax"],
            EXPENSE_COLORS["investment"],
        ],
        alpha=0.75,
    )
    ax.plot(ages, income, color="#1f77b4", linewidth=2, label="手取り収入")

    ax.set_xlabel("本人の年齢")
    ax.set_ylabel("年間キャッシュフロー（万円）")
    ax.set_title("キャッシュフロー積み上げ（年次）")
    ax.axhline(0, color="black", linewidth=2.0, linestyle="-", zorder=5)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left", fontsize=9)

    return _save(fig, output_path, "cashflow", name)
