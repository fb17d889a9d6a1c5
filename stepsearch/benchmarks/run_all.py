# stepsearch/benchmarks/run_all.py
# Runs every applicable registered algorithm on one problem to completion and reports
# status, cost, steps, time and memory. Repeats are averaged with numpy; MCTS is re-seeded
# per repeat.
from __future__ import annotations

import argparse
import json
import logging
import os
import time
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from ..algorithms.registry import ALGORITHMS, applicable_algorithms, build_algorithm
from ..config import SearchSettings, setup_logging
from ..core.metrics import RunSummary
from ..problems.checks import parse_board_text
from ..problems.factory import PROBLEM_TYPES, build_problem
from ..runner import run_to_completion

logger = logging.getLogger(__name__)

# ---- Tunables (overridable via environment variables) -----------------------
REPEATS = int(os.getenv("BENCH_REPEATS", "3"))
MAX_STEPS = int(os.getenv("BENCH_MAX_STEPS", "200000"))
BENCH_PROBLEM = os.getenv("BENCH_PROBLEM", "8puzzle")


def _fmt_time(x):
    try:
        return f"{float(x):.4f}"
    except (TypeError, ValueError):
        return "n/a"


def benchmark(problem_type: str, algos: Optional[List[str]] = None,
              settings: Optional[SearchSettings] = None, board=None, tree=None,
              repeats: int = REPEATS, max_steps: int = MAX_STEPS) -> List[Dict[str, object]]:
    """One aggregated row per algorithm. Deterministic algorithms repeat only for timing."""
    settings = settings or SearchSettings.from_env()
    problem = build_problem(problem_type, settings, board=board, tree=tree)
    names = algos or applicable_algorithms(problem)
    rows = []
    for name in names:
        print(f"→ Running {name} ...")
        runs: List[RunSummary] = []
        for i in range(max(1, repeats)):
            run_settings = settings
            if name == "mcts" and settings.mcts_seed is not None:
                run_settings = settings.replace(mcts_seed=settings.mcts_seed + i)
            algo = build_algorithm(name, build_problem(problem_type, run_settings, board=board, tree=tree),
                                   run_settings)
            if algo is None:
                break
            runs.append(run_to_completion(algo, problem_type, max_steps=max_steps))
        if not runs:
            continue
        rows.append(_aggregate(name, runs))
        r = rows[-1]
        print(f"  {r['algo']}: {r['status']} cost={r['cost']} steps={r['steps']} "
              f"time={_fmt_time(r['time_s'])}s (±{_fmt_time(r['time_std'])})")
    return rows


def _aggregate(name: str, runs: List[RunSummary]) -> Dict[str, object]:
    times = np.array([r.time_s for r in runs], dtype=float)
    steps = np.array([r.steps for r in runs], dtype=float)
    row = runs[0].to_row()
    row["key"] = name
    row["repeats"] = len(runs)
    row["time_s"] = float(times.mean())
    row["time_std"] = float(times.std())
    row["steps_mean"] = float(steps.mean())
    row["success_rate"] = float(np.mean([r.success for r in runs]))
    row["peak_kb"] = int(max(r.peak_kb for r in runs))
    values = [r.attributes.get("root_value") for r in runs]
    if all(isinstance(v, (int, float)) for v in values):
        vals = np.array(values, dtype=float)
        row["root_value_mean"] = float(vals.mean())
        row["root_value_std"] = float(vals.std())
    return row


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="stepsearch-bench", description="Benchmark the steppable search algorithms.")
    ap.add_argument("--problem", default=BENCH_PROBLEM, choices=PROBLEM_TYPES)
    ap.add_argument("--board", help="comma/space separated initial board")
    ap.add_argument("--tree", help="interchange JSON file for the custom problem")
    ap.add_argument("--algos", nargs="*", choices=ALGORITHMS, help="defaults to every applicable algorithm")
    ap.add_argument("--repeats", type=int, default=REPEATS)
    ap.add_argument("--max-steps", type=int, default=MAX_STEPS)
    ap.add_argument("--out", type=Path, default=Path(__file__).with_name("results.json"))
    ap.add_argument("--plot", type=Path, help="also write a bar chart PNG here")
    ap.add_argument("--log-level", default="WARNING")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    tree = None
    if args.tree:
        tree = json.loads(Path(args.tree).read_text())
    rows = benchmark(args.problem, args.algos, board=parse_board_text(args.board), tree=tree,
                     repeats=args.repeats, max_steps=args.max_steps)
    if not rows:
        raise SystemExit("No algorithms ran.")

    out = {"problem": args.problem, "results": rows, "ts": time.time()}
    print(json.dumps(out, indent=2))
    try:
        args.out.write_text(json.dumps(out, indent=2))
    except OSError as e:
        logger.warning("Could not write %s: %s", args.out, e)

    if args.plot:
        from ..plots.plotting import bar_compare, save_figure
        save_figure(bar_compare(rows, title=f"{args.problem} comparison"), args.plot)
        print(f"Wrote {args.plot}")
    return rows


if __name__ == "__main__":
    main()
