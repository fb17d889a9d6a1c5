# stepsearch/runner.py
# Drives steppable algorithms in bursts: bounded fast-forward for interactive use and
# run-to-completion with timing/memory for benchmarks.
from __future__ import annotations
import logging
from typing import Optional

from .algorithms.ids import DeepeningSearch
from .algorithms.mcts import MonteCarloTreeSearch
from .config import SearchSettings
from .core.metrics import MeasuredRun, RunSummary
from .core.node import Node
from .core.status import SearchAlgorithm
from .core.utils import reconstruct_path

logger = logging.getLogger(__name__)


def is_iteration_heavy(algorithm: SearchAlgorithm) -> bool:
    return isinstance(algorithm, (MonteCarloTreeSearch, DeepeningSearch))


def fast_forward(algorithm: SearchAlgorithm, limit: Optional[int] = None,
                 settings: Optional[SearchSettings] = None) -> Optional[Node]:
    """
    Call step() until the algorithm is terminal or ``limit`` steps have run. Without an
    explicit limit the ceiling comes from the settings, lower for iteration-heavy algorithms.
    Returns the last node touched (None if nothing was stepped).
    """
    if limit is None:
        settings = settings or SearchSettings.from_env()
        limit = settings.fast_forward_heavy_limit if is_iteration_heavy(algorithm) else settings.fast_forward_limit
    last = None
    taken = 0
    while taken < limit and not algorithm.get_status().is_terminal:
        node = algorithm.step()
        taken += 1
        if node is not None:
            last = node
    logger.debug("%s: fast-forwarded %d steps, status %s", algorithm.name, taken, algorithm.get_status().value)
    return last


def run_to_completion(algorithm: SearchAlgorithm, problem_name: str = "",
                      max_steps: int = 1_000_000) -> RunSummary:
    """Step until terminal (or max_steps) under MeasuredRun and summarise the outcome."""
    steps = 0
    with MeasuredRun() as meter:
        while steps < max_steps and not algorithm.get_status().is_terminal:
            algorithm.step()
            steps += 1
    if not algorithm.get_status().is_terminal:
        logger.warning("%s: still %s after %d steps", algorithm.name, algorithm.get_status().value, steps)

    goal = getattr(algorithm, "goal", None)
    actions, cost, depth = [], None, None
    if goal is not None:
        raw, cost = reconstruct_path(goal)
        actions = [algorithm.problem.action_label(a) for a in raw]
        depth = goal.depth
    return RunSummary(
        algo=algorithm.name,
        problem=problem_name,
        status=algorithm.get_status().value,
        steps=steps,
        cost=cost,
        depth=depth,
        time_s=meter.elapsed,
        peak_kb=meter.peak_kb,
        actions=actions,
        attributes=algorithm.get_attributes(),
    )
