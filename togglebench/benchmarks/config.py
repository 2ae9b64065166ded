from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Sequence

from ..toggles import DEFAULT_KEY, ToggleScenario, UnknownScenarioError, build_scenarios, get_scenario

CHART_TYPES: tuple[str, ...] = ("bar", "line", "grouped")

SWEEP_SIZES: tuple[int, ...] = (10, 100, 1_000, 10_000)


class PlanError(ValueError):
    """Raised when a benchmark plan description is malformed."""


@dataclass(frozen=True)
class ToggleCase:
    """Single measurement of one toggle scenario on one container shape."""

    name: str
    scenario: ToggleScenario
    size: int = 100
    key: str = DEFAULT_KEY
    key_present: bool = False
    count: int = 100_000
    isolated: bool = False
    num_runs: int = 3
    warmup: int = 1_000

    def __post_init__(self) -> None:
        if self.count <= 0:
            raise PlanError(f"case {self.name!r}: count must be > 0")
        if self.num_runs <= 0:
            raise PlanError(f"case {self.name!r}: num_runs must be > 0")
        if self.size < 0:
            raise PlanError(f"case {self.name!r}: size must be >= 0")
        if self.warmup < 0:
            raise PlanError(f"case {self.name!r}: warmup must be >= 0")

    def mode(self) -> str:
        return "isolated" if self.isolated else "accumulating"


@dataclass(frozen=True)
class BenchmarkMatrix:
    """Group of cases rendered together as one chart."""

    label: str
    cases: Sequence[ToggleCase]
    chart_type: str
    chart_title: str
    chart_filename: str
    description: str | None = None


@dataclass
class BenchmarkPlan:
    """Complete set of benchmark matrices the harness will execute."""

    matrices: list[BenchmarkMatrix] = field(default_factory=list)

    def __iter__(self) -> Iterator[BenchmarkMatrix]:
        return iter(self.matrices)

    def with_overrides(self, count: int | None = None, num_runs: int | None = None) -> BenchmarkPlan:
        if count is None and num_runs is None:
            return self
        matrices = []
        for matrix in self.matrices:
            cases = [
                dataclasses.replace(
                    case,
                    count=count if count is not None else case.count,
                    num_runs=num_runs if num_runs is not None else case.num_runs,
                )
                for case in matrix.cases
            ]
            matrices.append(dataclasses.replace(matrix, cases=cases))
        return BenchmarkPlan(matrices=matrices)


def default_benchmark_plan() -> BenchmarkPlan:
    """Return the default suite of benchmark matrices."""

    scenarios = build_scenarios()

    matrices = [
        BenchmarkMatrix(
            label="collection-comparison",
            description="Toggle cost per collection strategy on 100 keys, key initially absent.",
            chart_type="bar",
            chart_title="Average Toggle Time by Collection Strategy",
            chart_filename="collection_comparison.png",
            cases=[
                ToggleCase(name=scenario.name, scenario=scenario, size=100)
                for scenario in scenarios
            ],
        ),
        BenchmarkMatrix(
            label="size-sweep",
            description="Isolated toggle cost while growing the container.",
            chart_type="line",
            chart_title="Average Toggle Time vs Container Size",
            chart_filename="size_sweep.png",
            cases=[
                ToggleCase(
                    name=f"{scenario.name}-{size}",
                    scenario=scenario,
                    size=size,
                    count=20_000,
                    isolated=True,
                    warmup=100,
                )
                for scenario in scenarios
                for size in SWEEP_SIZES
            ],
        ),
        BenchmarkMatrix(
            label="isolation-impact",
            description="Accumulating toggles against per-trial container resets.",
            chart_type="grouped",
            chart_title="Accumulating vs Isolated Toggle Timing",
            chart_filename="isolation_impact.png",
            cases=[
                ToggleCase(
                    name=f"{scenario.name}-{'isolated' if isolated else 'accumulating'}",
                    scenario=scenario,
                    size=1_000,
                    count=20_000,
                    isolated=isolated,
                    warmup=100,
                )
                for scenario in scenarios
                for isolated in (False, True)
            ],
        ),
    ]

    return BenchmarkPlan(matrices=list(matrices))


def load_plan(path: str | Path | None) -> BenchmarkPlan:
    if not path:
        return default_benchmark_plan()
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PlanError(f"plan file {path} is not valid JSON: {exc}") from exc
    return plan_from_dict(data)


def plan_from_dict(data: Any) -> BenchmarkPlan:
    if not isinstance(data, dict) or not isinstance(data.get("matrices"), list):
        raise PlanError("plan must be an object with a 'matrices' list")
    return BenchmarkPlan(
        matrices=[_matrix_from_dict(entry, idx) for idx, entry in enumerate(data["matrices"])]
    )


def _matrix_from_dict(entry: Any, idx: int) -> BenchmarkMatrix:
    where = f"matrices[{idx}]"
    if not isinstance(entry, dict):
        raise PlanError(f"{where} must be an object")
    label = _require(entry, "label", str, where)
    chart_type = entry.get("chart_type", "bar")
    if chart_type not in CHART_TYPES:
        raise PlanError(f"{where}.chart_type must be one of {', '.join(CHART_TYPES)}")
    cases = entry.get("cases")
    if not isinstance(cases, list) or not cases:
        raise PlanError(f"{where}.cases must be a non-empty list")

    parsed: list[ToggleCase] = []
    seen: set[str] = set()
    for pos, case in enumerate(cases):
        toggle_case = _case_from_dict(case, f"{where}.cases[{pos}]")
        if toggle_case.name in seen:
            raise PlanError(
                f"{where}.cases[{pos}].name {toggle_case.name!r} is already used in this matrix"
            )
        seen.add(toggle_case.name)
        parsed.append(toggle_case)

    return BenchmarkMatrix(
        label=label,
        cases=parsed,
        chart_type=chart_type,
        chart_title=_optional(entry, "chart_title", str, where, label),
        chart_filename=_optional(entry, "chart_filename", str, where, f"{label}.png"),
        description=_optional(entry, "description", str, where, None),
    )


def _case_from_dict(entry: Any, where: str) -> ToggleCase:
    if not isinstance(entry, dict):
        raise PlanError(f"{where} must be an object")
    scenario_name = _require(entry, "scenario", str, where)
    try:
        scenario = get_scenario(scenario_name)
    except UnknownScenarioError as exc:
        raise PlanError(f"{where}.scenario: {exc}") from exc

    options: dict[str, Any] = {}
    for name, kind in (
        ("size", int),
        ("key", str),
        ("key_present", bool),
        ("count", int),
        ("isolated", bool),
        ("num_runs", int),
        ("warmup", int),
    ):
        if name in entry:
            options[name] = _require(entry, name, kind, where)

    return ToggleCase(
        name=_optional(entry, "name", str, where, scenario_name),
        scenario=scenario,
        **options,
    )


def _require(entry: dict[str, Any], name: str, kind: type, where: str) -> Any:
    if name not in entry:
        raise PlanError(f"{where}.{name} is required")
    value = entry[name]
    # bool is an int subclass; reject it where a number is expected
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise PlanError(f"{where}.{name} must be of type {kind.__name__}")
    return value


def _optional(entry: dict[str, Any], name: str, kind: type, where: str, default: Any) -> Any:
    if name not in entry:
        return default
    return _require(entry, name, kind, where)
