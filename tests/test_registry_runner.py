import logging

import pytest

from stepsearch.algorithms.frontier_search import FrontierSearch
from stepsearch.algorithms.ida_star import IDAStar
from stepsearch.algorithms.ids import IterativeDeepeningSearch
from stepsearch.algorithms.mcts import MonteCarloTreeSearch
from stepsearch.algorithms.minimax import Minimax
from stepsearch.algorithms.registry import ALGORITHMS, applicable_algorithms, build_algorithm
from stepsearch.config import SearchSettings
from stepsearch.core.status import SearchStatus
from stepsearch.errors import ConfigurationError
from stepsearch.problems.grid_game import GridGame
from stepsearch.problems.sliding_puzzle import SlidingPuzzle
from stepsearch.runner import fast_forward, is_iteration_heavy, run_to_completion

SCENARIO = [1, 2, 3, 4, 8, 0, 7, 6, 5]


def test_registry_names():
    assert set(ALGORITHMS) == {"bfs", "dfs", "ucs", "greedy", "astar", "ids", "idastar",
                               "minimax", "alpha-beta", "mcts"}
    heavy = {n for n in ALGORITHMS if is_iteration_heavy(build_algorithm(n, GridGame()))}
    assert heavy == {"mcts", "ids", "idastar"}


@pytest.mark.parametrize("name,cls", [
    ("bfs", FrontierSearch), ("astar", FrontierSearch), ("ids", IterativeDeepeningSearch),
    ("idastar", IDAStar), ("mcts", MonteCarloTreeSearch),
])
def test_build_for_puzzle(name, cls):
    algo = build_algorithm(name, SlidingPuzzle(SCENARIO))
    assert isinstance(algo, cls)
    assert algo.get_status() is SearchStatus.READY
    assert algo.get_tree() is not None
    assert isinstance(algo.get_attributes(), dict)


def test_build_uses_settings():
    settings = SearchSettings(max_depth=2, mcts_iterations=7, mcts_exploration=0.3)
    ab = build_algorithm("alpha-beta", GridGame(), settings)
    assert isinstance(ab, Minimax) and ab.use_alpha_beta and ab.max_depth == 2
    mcts = build_algorithm("mcts", GridGame(), settings)
    assert mcts.budget == 7 and mcts.exploration == 0.3


def test_unknown_algorithm_warns_and_returns_none(caplog):
    with caplog.at_level(logging.WARNING, logger="stepsearch.algorithms.registry"):
        assert build_algorithm("dijkstra", GridGame()) is None
    assert "dijkstra" in caplog.text


def test_minimax_on_puzzle_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        build_algorithm("minimax", SlidingPuzzle(SCENARIO))


def test_applicable_algorithms():
    assert "minimax" not in applicable_algorithms(SlidingPuzzle(SCENARIO))
    assert applicable_algorithms(GridGame()) == list(ALGORITHMS)


def test_fast_forward_uses_heavy_ceiling_for_mcts():
    settings = SearchSettings(mcts_iterations=1000)
    algo = build_algorithm("mcts", GridGame(), settings)
    assert is_iteration_heavy(algo)
    last = fast_forward(algo, settings=settings)
    assert algo.iterations == settings.fast_forward_heavy_limit
    assert algo.get_status() is SearchStatus.RUNNING
    assert last is not None


def test_fast_forward_stops_at_terminal():
    algo = build_algorithm("astar", SlidingPuzzle(SCENARIO))
    assert not is_iteration_heavy(algo)
    last = fast_forward(algo)
    assert algo.get_status() is SearchStatus.COMPLETED
    assert last is algo.goal
    assert fast_forward(algo) is None


def test_fast_forward_explicit_limit():
    algo = build_algorithm("bfs", SlidingPuzzle(SCENARIO))
    fast_forward(algo, limit=3)
    assert algo.steps == 3


def test_run_to_completion_summary():
    summary = run_to_completion(build_algorithm("astar", SlidingPuzzle(SCENARIO)), "8puzzle")
    assert summary.success
    assert summary.algo == "A*"
    assert summary.cost == 5 and summary.depth == 5
    assert len(summary.actions) == 5 and summary.actions[0].startswith("Move ")
    assert summary.time_s >= 0 and summary.peak_kb >= 0
    row = summary.to_row()
    assert "frontier" not in row["attributes"]
    assert row["success"] is True


def test_run_to_completion_for_games_has_no_path():
    summary = run_to_completion(build_algorithm("alpha-beta", GridGame(), SearchSettings(max_depth=2)))
    assert summary.status == "COMPLETED"
    assert summary.cost is None and summary.actions == []
    assert summary.attributes["root_value"] == 0
