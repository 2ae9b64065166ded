from pathlib import Path

import pandas as pd
import pytest

from togglebench.benchmarks.charts import render_matrix_charts
from togglebench.benchmarks.collector import RESULT_COLUMNS, BenchmarkResultCollector
from togglebench.benchmarks.config import BenchmarkMatrix, ToggleCase
from togglebench.benchmarks.workload import RunStatistics
from togglebench.toggles import get_scenario


def _collect(chart_type: str) -> tuple[BenchmarkMatrix, BenchmarkResultCollector]:
    cases = [
        ToggleCase(
            name=f"{name}-{size}-{isolated}",
            scenario=get_scenario(name),
            size=size,
            isolated=isolated,
        )
        for name in ("list", "set")
        for size in (10, 100)
        for isolated in (False, True)
    ]
    matrix = BenchmarkMatrix(
        label=chart_type,
        cases=cases,
        chart_type=chart_type,
        chart_title=f"{chart_type} chart",
        chart_filename=f"{chart_type}.png",
    )
    collector = BenchmarkResultCollector(matrix)
    for idx, case in enumerate(cases, start=1):
        stats = RunStatistics(count=10, average_us=0.1 * idx, started_at=0.0, finished_at=1.0)
        collector.record(case, 1, stats)
    return matrix, collector


@pytest.mark.parametrize("chart_type", ["bar", "line", "grouped"])
def test_renders_chart(tmp_path: Path, chart_type: str) -> None:
    matrix, collector = _collect(chart_type)
    path = render_matrix_charts(matrix, collector.build_dataframe(), collector.summary(), tmp_path)
    assert path == tmp_path / f"{chart_type}.png"
    assert path.exists()
    assert path.stat().st_size > 0


def test_unknown_chart_type(tmp_path: Path) -> None:
    matrix, collector = _collect("pie")
    with pytest.raises(ValueError, match="Unknown chart type"):
        render_matrix_charts(matrix, collector.build_dataframe(), collector.summary(), tmp_path)


def test_empty_results_skip_chart(tmp_path: Path) -> None:
    matrix, _ = _collect("bar")
    empty = pd.DataFrame(columns=RESULT_COLUMNS)
    assert render_matrix_charts(matrix, empty, {}, tmp_path) is None
    assert not list(tmp_path.iterdir())
