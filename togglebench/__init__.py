"""Micro-benchmarks for toggling membership in Python collections."""

from .timing import average_isolated_run, average_run, describe, format_report, report
from .toggles import ToggleScenario, UnknownScenarioError, build_scenarios, get_scenario

__all__ = [
    "ToggleScenario",
    "UnknownScenarioError",
    "average_isolated_run",
    "average_run",
    "build_scenarios",
    "describe",
    "format_report",
    "get_scenario",
    "report",
]
