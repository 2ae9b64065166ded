import pytest

from togglebench.benchmarks.collector import RESULT_COLUMNS, BenchmarkResultCollector
from togglebench.benchmarks.config import BenchmarkMatrix, ToggleCase
from togglebench.benchmarks.workload import RunStatistics
from togglebench.toggles import get_scenario


def _matrix() -> BenchmarkMatrix:
    cases = [
        ToggleCase(name="set", scenario=get_scenario("set"), count=10),
        ToggleCase(name="list", scenario=get_scenario("list"), count=10, isolated=True),
    ]
    return BenchmarkMatrix(
        label="demo",
        cases=cases,
        chart_type="bar",
        chart_title="Demo",
        chart_filename="demo.png",
    )


def _stats(average_us: float) -> RunStatistics:
    return RunStatistics(count=10, average_us=average_us, started_at=1.0, finished_at=1.5)


class TestBenchmarkResultCollector:
    def test_empty_dataframe_has_columns(self) -> None:
        df = BenchmarkResultCollector(_matrix()).build_dataframe()
        assert df.empty
        assert list(df.columns) == RESULT_COLUMNS

    def test_record_row(self) -> None:
        matrix = _matrix()
        collector = BenchmarkResultCollector(matrix)
        row = collector.record(matrix.cases[1], 1, _stats(2.0))
        assert row["matrix"] == "demo"
        assert row["scenario"] == "list"
        assert row["collection"] == "list"
        assert row["isolated"] is True
        assert row["duration_s"] == pytest.approx(0.5)
        assert row["calls_per_second"] == pytest.approx(500_000.0)

    def test_dataframe_filters_by_case(self) -> None:
        matrix = _matrix()
        collector = BenchmarkResultCollector(matrix)
        collector.record(matrix.cases[0], 1, _stats(1.0))
        collector.record(matrix.cases[0], 2, _stats(3.0))
        collector.record(matrix.cases[1], 1, _stats(5.0))

        assert len(collector.build_dataframe()) == 3
        df = collector.build_dataframe("set")
        assert list(df["run"]) == [1, 2]
        assert list(df.columns) == RESULT_COLUMNS

    def test_summary_is_mean_per_case(self) -> None:
        matrix = _matrix()
        collector = BenchmarkResultCollector(matrix)
        collector.record(matrix.cases[0], 1, _stats(1.0))
        collector.record(matrix.cases[0], 2, _stats(3.0))
        collector.record(matrix.cases[1], 1, _stats(5.0))

        assert collector.summary() == {"set": pytest.approx(2.0), "list": pytest.approx(5.0)}
        assert collector.run_counts() == {"set": 2, "list": 1}
