# stepsearch/plots/plotting.py
# Bar charts comparing algorithm runs: steps taken, solution cost, wall time and peak memory.
from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Union

import matplotlib.pyplot as plt

from ..core.metrics import RunSummary

Row = Union[RunSummary, Dict[str, object]]

PANELS = (
    ("steps", "Steps"),
    ("cost", "Path Cost"),
    ("time_s", "Time (s)"),
    ("peak_kb", "Peak Memory (KB)"),
)


def _get(r: Row, key: str):
    return r.get(key) if isinstance(r, dict) else getattr(r, key)


def _label(v) -> str:
    if v is None:
        return "n/a"
    if isinstance(v, float):
        return f"{v:.4f}" if v < 0.01 else f"{v:.3g}"
    return str(v)


def bar_compare(results: List[Row], title: str = "Search Comparison"):
    """2x2 grid, one panel per metric; missing values (e.g. no cost for MCTS) plot as 0."""
    names = [str(_get(r, "algo")) for r in results]
    fig, axs = plt.subplots(2, 2, figsize=(11, 8))
    for ax, (metric, heading) in zip(axs.ravel(), PANELS):
        raw = [_get(r, metric) for r in results]
        vals = [v or 0 for v in raw]
        x = list(range(len(names)))
        ax.bar(x, vals)
        ax.set_title(heading)
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=45, ha="right")
        top = max(vals, default=0) or 1
        for xi, v, shown in zip(x, vals, raw):
            ax.text(xi, v + 0.01 * top, _label(shown), ha="center", va="bottom", fontsize=8)
    fig.suptitle(title)
    fig.tight_layout(rect=[0, 0, 1, 0.95])
    return fig


def save_figure(fig, path: Union[str, Path], dpi: int = 160) -> Path:
    path = Path(path)
    fig.savefig(path, format="png", dpi=dpi)
    plt.close(fig)
    return path
