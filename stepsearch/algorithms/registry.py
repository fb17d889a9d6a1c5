# stepsearch/algorithms/registry.py
# Maps the algorithm names a configuration can select onto steppable instances.
from __future__ import annotations
import logging
from typing import Callable, Dict, Optional

from ..config import SearchSettings
from ..core.problem import Problem
from ..core.status import SearchAlgorithm
from .astar import a_star_search
from .bfs import breadth_first_search
from .dfs import depth_first_search
from .greedy import greedy_best_first_search
from .ida_star import IDAStar
from .ids import IterativeDeepeningSearch
from .mcts import MonteCarloTreeSearch
from .minimax import Minimax
from .ucs import uniform_cost_search

logger = logging.getLogger(__name__)

_BUILDERS: Dict[str, Callable[[Problem, SearchSettings], SearchAlgorithm]] = {
    "bfs": lambda p, s: breadth_first_search(p),
    "dfs": lambda p, s: depth_first_search(p),
    "ucs": lambda p, s: uniform_cost_search(p),
    "greedy": lambda p, s: greedy_best_first_search(p),
    "astar": lambda p, s: a_star_search(p),
    "ids": lambda p, s: IterativeDeepeningSearch(p, max_depth=s.ids_max_depth),
    "idastar": lambda p, s: IDAStar(p, max_expansions=s.ida_max_expansions),
    "minimax": lambda p, s: Minimax(p, max_depth=s.max_depth, use_alpha_beta=False),
    "alpha-beta": lambda p, s: Minimax(p, max_depth=s.max_depth, use_alpha_beta=True),
    "mcts": lambda p, s: MonteCarloTreeSearch(
        p, iterations=s.mcts_iterations, exploration=s.mcts_exploration,
        rollout_depth=s.mcts_rollout_depth, seed=s.mcts_seed,
    ),
}

ALGORITHMS = tuple(_BUILDERS)
ADVERSARIAL_ONLY = ("minimax", "alpha-beta")


def build_algorithm(name: str, problem: Problem,
                    settings: Optional[SearchSettings] = None) -> Optional[SearchAlgorithm]:
    """
    Build the named algorithm over ``problem``. An unknown name is not an error: it is
    logged and None is returned, so callers must cope with a missing instance.
    """
    builder = _BUILDERS.get(name)
    if builder is None:
        logger.warning("Unknown algorithm %r; expected one of %s", name, ", ".join(ALGORITHMS))
        return None
    return builder(problem, settings or SearchSettings.from_env())


def applicable_algorithms(problem: Problem):
    """Names that make sense for this problem (minimax needs a utility)."""
    return [n for n in ALGORITHMS if problem.is_adversarial or n not in ADVERSARIAL_ONLY]
