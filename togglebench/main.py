from __future__ import annotations

import argparse
import logging
import os
import sys

from .timing import DEFAULT_COUNT, average_isolated_run, emit_report, report
from .toggles import (
    DEFAULT_KEY,
    DEFAULT_SIZE,
    ToggleScenario,
    UnknownScenarioError,
    build_scenarios,
    get_scenario,
)

LOGGER = logging.getLogger("togglebench")

TRUTHY = {"1", "true", "yes", "on"}


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare toggle membership across collections")
    parser.add_argument("--count", type=int, help="Timed calls per scenario")
    parser.add_argument("--size", type=int, help="Number of keys in each container")
    parser.add_argument("--key", help="Key to toggle")
    parser.add_argument(
        "--scenario",
        action="append",
        dest="scenarios",
        help="Scenario to run (repeatable, defaults to all)",
    )
    parser.add_argument(
        "--isolate",
        action="store_true",
        default=None,
        help="Rebuild the container before every timed call",
    )
    parser.add_argument("--log-level", help="Logging level")
    return parser.parse_args(argv)


def _int_from_env(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
        if value < minimum:
            raise ValueError(f"value below {minimum}")
    except ValueError:
        print(f"invalid {name} value {raw!r}; defaulting to {default}", file=sys.stderr)
        return default
    return value


def resolve_scenarios(names: list[str] | None) -> list[ToggleScenario]:
    if not names:
        return build_scenarios()
    return [get_scenario(name) for name in names]


def measure(scenario: ToggleScenario, count: int, size: int, key: str, isolate: bool) -> float:
    if isolate:
        duration = average_isolated_run(
            lambda: scenario.build(size, key=key),
            lambda container: scenario.toggle(container, key),
            count,
        )
        emit_report(scenario.name, duration, count)
        return duration
    container = scenario.build(size, key=key)
    return report(scenario.name, scenario.bind(container, key), count)


def run(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    env = os.environ

    log_level = args.log_level or env.get("TOGGLE_BENCH_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    count = args.count
    if count is None:
        count = _int_from_env("TOGGLE_BENCH_COUNT", DEFAULT_COUNT, minimum=1)
    elif count <= 0:
        print(f"--count must be > 0, got {count}", file=sys.stderr)
        return 2

    size = args.size
    if size is None:
        size = _int_from_env("TOGGLE_BENCH_SIZE", DEFAULT_SIZE, minimum=0)
    elif size < 0:
        print(f"--size must be >= 0, got {size}", file=sys.stderr)
        return 2

    key = args.key if args.key is not None else env.get("TOGGLE_BENCH_KEY", DEFAULT_KEY)

    isolate = args.isolate
    if isolate is None:
        isolate = env.get("TOGGLE_BENCH_ISOLATE", "").strip().lower() in TRUTHY

    names = args.scenarios
    if not names:
        env_names = env.get("TOGGLE_BENCH_SCENARIOS", "")
        names = [item.strip() for item in env_names.split(",") if item.strip()]

    try:
        scenarios = resolve_scenarios(names)
    except UnknownScenarioError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    LOGGER.info(
        "Timing %d scenario(s): count=%d size=%d key=%r isolate=%s",
        len(scenarios),
        count,
        size,
        key,
        isolate,
    )
    for scenario in scenarios:
        measure(scenario, count, size, key, isolate)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
