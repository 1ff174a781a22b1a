"""CLI entry point for chart generation."""

import sys
from pathlib import Path

from lifeplan_sim_jp.charts import plot_asset_trajectory, plot_cashflow_stack
from lifeplan_sim_jp.config import create_parser, load_config, resolve, build_plan, validate_plan
from lifeplan_sim_jp.simulation import simulate_plan


def _build_parser():
    parser = create_parser("ライフプラン チャート生成")
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="出力ディレクトリ (default: reports/charts)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="出力ファイル名のサフィックス（例: a → assets-a.png）",
    )
    return parser


def main():
    parser = _build_parser()
    args = parser.parse_args()
    config_file = load_config(args.config)
    r = resolve(args, config_file)
    plan = build_plan(r, config_file)

    for warning in validate_plan(plan):
        print(f"警告: {warning}", file=sys.stderr)

    print("シミュレーション（35年間）...", file=sys.stderr)
    result = simulate_plan(plan)

    path = plot_asset_trajectory(result, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)

    path = plot_cashflow_stack(result, args.output, name=args.name)
    print(f"  → {path}", file=sys.stderr)

    print("完了", file=sys.stderr)


if __name__ == "__main__":
    main()
