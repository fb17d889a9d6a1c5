import math

import pytest

from stepsearch.algorithms.mcts import MonteCarloTreeSearch
from stepsearch.core.status import SearchStatus
from stepsearch.core.utils import walk
from stepsearch.errors import ConfigurationError
from stepsearch.problems.grid_game import GridGame
from stepsearch.problems.sliding_puzzle import SlidingPuzzle


def finish(algo):
    returned = []
    while not algo.get_status().is_terminal:
        returned.append(algo.step())
    return returned


def test_visit_accounting_after_budget():
    algo = MonteCarloTreeSearch(GridGame(), iterations=200, seed=0)
    returned = finish(algo)
    assert len(returned) == 200
    assert algo.get_status() is SearchStatus.COMPLETED
    root = algo.get_tree()
    assert root.visit_count == 200
    assert sum(c.visit_count for c in root.children) == 199
    assert algo.tree_size == len(list(walk(root)))
    assert algo.step() is None


def test_first_step_simulates_the_root():
    algo = MonteCarloTreeSearch(GridGame(), iterations=5)
    assert algo.step() is algo.get_tree()
    assert algo.get_tree().children == []
    second = algo.step()
    assert second.parent is algo.get_tree()
    assert second.action == 0  # untried actions in legal order
    assert second.id == "mcts-node-1"


def test_same_seed_same_tree():
    a = MonteCarloTreeSearch(GridGame(), iterations=150, seed=7)
    b = MonteCarloTreeSearch(GridGame(), iterations=150, seed=7)
    finish(a)
    finish(b)
    assert [(n.id, n.visit_count, n.value_sum) for n in walk(a.get_tree())] == \
        [(n.id, n.visit_count, n.value_sum) for n in walk(b.get_tree())]


def test_finds_immediate_win():
    board = ["X", "X", "", "O", "O", "", "", "", ""]
    algo = MonteCarloTreeSearch(GridGame(board), iterations=500, seed=0)
    finish(algo)
    assert algo.best_action() == "Place at 2"
    win = algo.best_child()
    # every visit to the winning move scores +1 for X
    assert win.mean_value == 1.0
    assert algo.get_attributes()["best_action"] == "Place at 2"


def test_single_agent_rewards_goal_reaching_rollouts():
    p = SlidingPuzzle([1, 2, 3, 4, 5, 6, 7, 0, 8])
    algo = MonteCarloTreeSearch(p, iterations=60, seed=1)
    finish(algo)
    root = algo.get_tree()
    assert root.visit_count == 60
    assert sum(c.visit_count for c in root.children) == 59
    assert 0.0 < algo.root_value <= 1.0
    assert all(0.0 <= n.mean_value <= 1.0 for n in walk(root))


def test_terminal_root_is_simulated_every_iteration():
    board = ["X", "X", "X", "O", "O", "", "", "", ""]
    algo = MonteCarloTreeSearch(GridGame(board), iterations=10)
    finish(algo)
    assert algo.get_tree().visit_count == 10
    assert algo.get_tree().children == []
    assert algo.root_value == 1.0


def test_ucb_prefers_unvisited_children():
    algo = MonteCarloTreeSearch(GridGame(), iterations=10)
    finish(algo)
    child = algo.get_tree().children[0]
    assert algo.ucb(child, algo.get_tree().visit_count) < math.inf
    child.visit_count = 0
    assert algo.ucb(child, algo.get_tree().visit_count) == math.inf


def test_attributes():
    algo = MonteCarloTreeSearch(GridGame(), iterations=20, exploration=0.5)
    finish(algo)
    attrs = algo.get_attributes()
    assert attrs["iterations"] == attrs["budget"] == attrs["root_visits"] == 20
    assert attrs["exploration"] == 0.5
    assert attrs["tree_size"] == algo.tree_size


@pytest.mark.parametrize("kwargs", [{"iterations": 0}, {"exploration": -1.0}])
def test_bad_parameters(kwargs):
    with pytest.raises(ConfigurationError):
        MonteCarloTreeSearch(GridGame(), **kwargs)
