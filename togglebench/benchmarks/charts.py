from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from .config import BenchmarkMatrix

LOGGER = logging.getLogger("togglebench.benchmark.charts")

sns.set_style("whitegrid")
plt.rcParams["figure.dpi"] = 100
plt.rcParams["savefig.dpi"] = 300
plt.rcParams["font.size"] = 10
plt.rcParams["axes.labelsize"] = 11
plt.rcParams["axes.titlesize"] = 13
plt.rcParams["xtick.labelsize"] = 10
plt.rcParams["ytick.labelsize"] = 10
plt.rcParams["legend.fontsize"] = 9
plt.rcParams["figure.titlesize"] = 14

COLLECTION_COLORS = {
    "list": "#C73E1D",  # Red
    "set": "#2E86AB",  # Blue
    "dict": "#6A994E",  # Green
}

MODE_COLORS = {
    "accumulating": "#F18F01",  # Orange
    "isolated": "#2E86AB",  # Blue
}


def render_matrix_charts(
    matrix: BenchmarkMatrix,
    results: pd.DataFrame,
    summary: dict[str, float],
    output_dir: Path,
) -> Path | None:
    """Render the chart for a benchmark matrix based on its chart_type."""
    chart_path = output_dir / matrix.chart_filename

    if results.empty:
        LOGGER.warning("No results for matrix %s; skipping chart", matrix.label)
        return None

    if matrix.chart_type == "bar":
        _render_bar_chart(matrix, results, summary, chart_path)
    elif matrix.chart_type == "line":
        _render_line_chart(matrix, results, chart_path)
    elif matrix.chart_type == "grouped":
        _render_grouped_chart(matrix, results, chart_path)
    else:
        raise ValueError(f"Unknown chart type: {matrix.chart_type}")

    LOGGER.info("Rendering chart %s", chart_path)
    return chart_path


def _render_bar_chart(
    matrix: BenchmarkMatrix,
    results: pd.DataFrame,
    summary: dict[str, float],
    chart_path: Path,
) -> None:
    """Render a bar chart of mean toggle time per case."""
    fig, ax = plt.subplots(figsize=(10, 6))

    collections_by_case = results.drop_duplicates("case").set_index("case")["collection"]
    labels = list(summary.keys())
    values = list(summary.values())
    colors = [COLLECTION_COLORS.get(collections_by_case.get(label), "#808080") for label in labels]

    bars = ax.bar(
        labels,
        values,
        color=colors,
        alpha=0.8,
        edgecolor="white",
        linewidth=2,
    )
    ax.set_ylabel("Average run (microseconds)", fontweight="semibold")
    ax.set_title(matrix.chart_title, fontweight="bold", pad=15)
    ax.grid(True, alpha=0.3, axis="y", linestyle="--")

    for bar in bars:
        height = bar.get_height()
        ax.text(
            bar.get_x() + bar.get_width() / 2.0,
            height,
            f"{height:.3f}",
            ha="center",
            va="bottom",
            fontweight="semibold",
        )

    plt.tight_layout()
    fig.savefig(chart_path, bbox_inches="tight", facecolor="white")
    plt.close(fig)


def _render_line_chart(
    matrix: BenchmarkMatrix,
    results: pd.DataFrame,
    chart_path: Path,
) -> None:
    """Render mean toggle time against container size, one line per scenario."""
    fig, ax = plt.subplots(figsize=(10, 6))

    means = results.groupby(["scenario", "size"])["average_us"].mean().reset_index()
    for scenario, group in means.groupby("scenario", sort=False):
        group = group.sort_values("size")
        ax.plot(
            group["size"],
            group["average_us"],
            marker="o",
            linewidth=2.5,
            markersize=8,
            label=scenario,
        )

    sizes = np.sort(means["size"].unique())
    if len(sizes) > 1 and sizes.min() > 0:
        ax.set_xscale("log")
    ax.set_xlabel("Container size", fontweight="semibold")
    ax.set_ylabel("Average run (microseconds)", fontweight="semibold")
    ax.set_title(matrix.chart_title, fontweight="bold", pad=15)
    ax.legend(loc="upper left", frameon=True, title="Scenario")
    ax.grid(True, alpha=0.3, linestyle="--")

    plt.tight_layout()
    fig.savefig(chart_path, bbox_inches="tight", facecolor="white")
    plt.close(fig)


def _render_grouped_chart(
    matrix: BenchmarkMatrix,
    results: pd.DataFrame,
    chart_path: Path,
) -> None:
    """Render accumulating vs isolated timings side by side per scenario."""
    fig, ax = plt.subplots(figsize=(12, 6))

    df = results.copy()
    df["mode"] = df["isolated"].map({True: "isolated", False: "accumulating"})
    mode_order = [mode for mode in MODE_COLORS if mode in set(df["mode"])]

    sns.barplot(
        data=df,
        x="scenario",
        y="average_us",
        hue="mode",
        hue_order=mode_order,
        palette=[MODE_COLORS[mode] for mode in mode_order],
        errorbar=None,
        ax=ax,
    )

    ax.set_xlabel("Scenario", fontweight="semibold", labelpad=12)
    ax.set_ylabel("Average run (microseconds)", fontweight="semibold", labelpad=12)
    ax.set_ylim(bottom=0)
    ax.set_title(matrix.chart_title, fontweight="bold", pad=15)
    ax.legend(
        loc="upper right",
        frameon=True,
        fancybox=True,
        shadow=True,
        title="Mode",
    )
    ax.grid(True, alpha=0.3, linestyle="--", linewidth=0.5, axis="y")
    ax.set_axisbelow(True)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)

    plt.tight_layout()
    fig.savefig(chart_path, bbox_inches="tight", facecolor="white")
    plt.close(fig)
