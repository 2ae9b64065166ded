from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import pandas as pd

from ..timing import format_report
from .charts import render_matrix_charts
from .collector import BenchmarkResultCollector
from .config import BenchmarkPlan, PlanError, load_plan
from .workload import ToggleWorkload

LOGGER = logging.getLogger("togglebench.benchmark")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"value must be > 0, got {number}")
    return number


def _env_positive_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return _positive_int(raw)
    except argparse.ArgumentTypeError:
        print(f"invalid {name} value {raw!r}; ignoring", file=sys.stderr)
        return None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Toggle membership benchmark suite")
    parser.add_argument(
        "--output-dir",
        default=os.environ.get("BENCHMARK_OUTPUT_DIR", "benchmark-results"),
        help="Directory to store benchmark artefacts (charts and CSV files)",
    )
    parser.add_argument(
        "--plan-path",
        default=os.environ.get("BENCHMARK_PLAN_PATH"),
        help="Optional JSON file describing a custom benchmark plan",
    )
    parser.add_argument(
        "--count",
        type=_positive_int,
        default=_env_positive_int("BENCHMARK_COUNT"),
        help="Override the number of timed calls for every case",
    )
    parser.add_argument(
        "--runs",
        type=_positive_int,
        default=_env_positive_int("BENCHMARK_RUNS"),
        help="Override the number of runs for every case",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the planned benchmark cases without executing them",
    )
    parser.add_argument(
        "--no-charts",
        action="store_true",
        help="Skip chart rendering",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("BENCHMARK_LOG_LEVEL", "INFO"),
        help="Logging level",
    )
    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        plan = load_plan(args.plan_path)
    except (OSError, PlanError) as exc:
        print(f"failed to load benchmark plan: {exc}", file=sys.stderr)
        return 2
    plan = plan.with_overrides(count=args.count, num_runs=args.runs)

    if args.dry_run:
        _print_plan(plan)
        return 0

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    LOGGER.info("Benchmark output directory: %s", output_dir)

    suite_results = {}
    frames: list[pd.DataFrame] = []
    for matrix in plan:
        LOGGER.info("Executing benchmark matrix: %s", matrix.label)
        collector = BenchmarkResultCollector(matrix)
        for case in matrix.cases:
            LOGGER.info(
                "Running case %s (scenario=%s, size=%d, count=%d, mode=%s, runs=%d)",
                case.name,
                case.scenario.name,
                case.size,
                case.count,
                case.mode(),
                case.num_runs,
            )
            for run_num in range(1, case.num_runs + 1):
                try:
                    stats = ToggleWorkload(case).run()
                except Exception:
                    LOGGER.exception("Case %s failed on run %d", case.name, run_num)
                    raise
                collector.record(case, run_num, stats)
                LOGGER.info(
                    "  Run %d/%d for case %s: %.3f microseconds",
                    run_num,
                    case.num_runs,
                    case.name,
                    stats.average_us,
                )

            df = collector.build_dataframe(case.name)
            case_path = output_dir / f"{matrix.label}__{case.name}.csv"
            df.to_csv(case_path, index=False)
            LOGGER.info("Saved case results to %s (%d rows)", case_path, len(df))

        runs = collector.run_counts()
        LOGGER.info(
            "Matrix %s complete: %d case(s), %d run(s)",
            matrix.label,
            len(runs),
            sum(runs.values()),
        )
        summary = collector.summary()
        for case_name, average_us in summary.items():
            print(format_report(f"{matrix.label}/{case_name}", average_us))

        matrix_df = collector.build_dataframe()
        frames.append(matrix_df)

        chart_path = None
        if not args.no_charts:
            chart_path = render_matrix_charts(matrix, matrix_df, summary, output_dir)
        suite_results[matrix.label] = {
            "chart": str(chart_path) if chart_path else None,
            "cases": list(summary.items()),
        }

    if frames:
        results_path = output_dir / "results.csv"
        pd.concat(frames, ignore_index=True).to_csv(results_path, index=False)
        LOGGER.info("All results written to %s", results_path)

    suite_manifest_path = output_dir / "benchmark_manifest.json"
    with open(suite_manifest_path, "w", encoding="utf-8") as f:
        json.dump(suite_results, f, indent=2)
    LOGGER.info("Benchmark manifest written to %s", suite_manifest_path)
    return 0


def _print_plan(plan: BenchmarkPlan) -> None:
    for matrix in plan:
        print(f"Matrix: {matrix.label} ({matrix.description})")
        for case in matrix.cases:
            print(
                f"  - {case.name}: scenario={case.scenario.name}, size={case.size}, "
                f"key={case.key!r} present={case.key_present}, count={case.count}, "
                f"mode={case.mode()} warmup={case.warmup} runs={case.num_runs}"
            )


if __name__ == "__main__":
    sys.exit(main())
