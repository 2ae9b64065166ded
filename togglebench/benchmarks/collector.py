from __future__ import annotations

import collections
from typing import Any

import numpy as np
import pandas as pd

from .config import BenchmarkMatrix, ToggleCase
from .workload import RunStatistics

RESULT_COLUMNS = [
    "matrix",
    "case",
    "scenario",
    "collection",
    "size",
    "key",
    "key_present",
    "isolated",
    "run",
    "count",
    "average_us",
    "duration_s",
    "calls_per_second",
]


class BenchmarkResultCollector:
    """Accumulates per-run measurements and turns them into DataFrames."""

    def __init__(self, matrix: BenchmarkMatrix) -> None:
        self._matrix = matrix
        self._rows: list[dict[str, Any]] = []

    @property
    def matrix(self) -> BenchmarkMatrix:
        return self._matrix

    def record(self, case: ToggleCase, run_num: int, stats: RunStatistics) -> dict[str, Any]:
        row = {
            "matrix": self._matrix.label,
            "case": case.name,
            "scenario": case.scenario.name,
            "collection": case.scenario.collection,
            "size": case.size,
            "key": case.key,
            "key_present": case.key_present,
            "isolated": case.isolated,
            "run": run_num,
            "count": stats.count,
            "average_us": stats.average_us,
            "duration_s": stats.duration_s,
            "calls_per_second": stats.calls_per_second,
        }
        self._rows.append(row)
        return row

    def build_dataframe(self, case_name: str | None = None) -> pd.DataFrame:
        rows = list(self._rows)
        if case_name is not None:
            rows = [row for row in rows if row["case"] == case_name]

        if not rows:
            return pd.DataFrame(columns=RESULT_COLUMNS)

        return pd.DataFrame(rows, columns=RESULT_COLUMNS)

    def summary(self) -> dict[str, float]:
        """Mean ``average_us`` per case, in first-seen case order."""
        grouped: dict[str, list[float]] = collections.defaultdict(list)
        for row in self._rows:
            grouped[row["case"]].append(row["average_us"])
        return {case: float(np.mean(values)) for case, values in grouped.items()}

    def run_counts(self) -> dict[str, int]:
        return dict(collections.Counter(row["case"] for row in self._rows))
