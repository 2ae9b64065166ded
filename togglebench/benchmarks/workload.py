from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from ..timing import average_isolated_run, average_run
from .config import ToggleCase

LOGGER = logging.getLogger("togglebench.benchmark.workload")


@dataclass
class RunStatistics:
    count: int
    average_us: float
    started_at: float
    finished_at: float

    @property
    def duration_s(self) -> float:
        return max(self.finished_at - self.started_at, 0.0)

    @property
    def calls_per_second(self) -> float:
        if self.average_us <= 0:
            return 0.0
        return 1_000_000 / self.average_us


class ToggleWorkload:
    """Drives one toggle case through the timing runner."""

    def __init__(self, case: ToggleCase) -> None:
        self._case = case
        self._scenario = case.scenario

    def run(self) -> RunStatistics:
        case = self._case
        if case.warmup:
            self._warm_up(case.warmup)

        started_at = time.time()
        if case.isolated:
            average_us = average_isolated_run(self._fresh_container, self._toggle_once, case.count)
        else:
            container = self._fresh_container()
            average_us = average_run(self._scenario.bind(container, case.key), case.count)
            if case.count % 2:
                LOGGER.debug(
                    "case %s ended with key %r flipped (odd count %d)",
                    case.name,
                    case.key,
                    case.count,
                )
        finished_at = time.time()

        return RunStatistics(
            count=case.count,
            average_us=average_us,
            started_at=started_at,
            finished_at=finished_at,
        )

    def _warm_up(self, calls: int) -> None:
        toggle = self._scenario.bind(self._fresh_container(), self._case.key)
        for _ in range(calls):
            toggle()

    def _fresh_container(self) -> Any:
        case = self._case
        return self._scenario.build(case.size, key=case.key, present=case.key_present)

    def _toggle_once(self, container: Any) -> None:
        self._scenario.toggle(container, self._case.key)
