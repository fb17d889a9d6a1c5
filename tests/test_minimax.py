import math

import pytest

from stepsearch.algorithms.minimax import Minimax
from stepsearch.core.status import SearchStatus
from stepsearch.core.utils import walk
from stepsearch.errors import ConfigurationError
from stepsearch.problems.grid_game import GridGame
from stepsearch.problems.sliding_puzzle import SlidingPuzzle


def finish(algo):
    steps, last = 0, None
    while not algo.get_status().is_terminal:
        node = algo.step()
        steps += 1
        if node is not None:
            last = node
    return steps, last


def test_textbook_tree_without_pruning(game_problem):
    algo = Minimax(game_problem, max_depth=5)
    steps, last = finish(algo)
    assert algo.get_status() is SearchStatus.COMPLETED
    assert last is algo.get_tree()
    assert algo.root_value == 3
    assert [c.value for c in algo.get_tree().children] == [3, 2, 2]
    # 13 visits + 4 internal nodes finished
    assert steps == 17
    assert algo.nodes_visited == 13
    assert algo.prune_count == 0
    assert all(n.alpha is None for n in walk(algo.get_tree()))


def test_textbook_tree_with_pruning(game_problem):
    algo = Minimax(game_problem, max_depth=5, use_alpha_beta=True)
    steps, _ = finish(algo)
    assert algo.root_value == 3
    assert algo.nodes_visited == 11
    assert algo.prune_count == 2
    assert steps == 16  # 11 visits, 4 finishes, 1 pruning decision
    c = algo.get_tree().children[1]
    assert c.value == 2
    trigger = c.children[0]
    assert [n.is_pruned for n in c.children] == [False, True, True]
    assert all(n.pruned_by == trigger.id for n in c.children[1:])
    assert c.alpha == 3 and c.beta == 2
    root = algo.get_tree()
    assert root.alpha == 3 and root.beta == math.inf


def test_each_step_does_one_thing(game_problem):
    algo = Minimax(game_problem, max_depth=5, use_alpha_beta=True)
    returned = [algo.step().id for _ in range(9)]
    # root, b, b1..b3, finish b, c, c1, then the pruning decision at c
    assert returned == ["n0", "n1", "n2", "n3", "n4", "n1", "n5", "n6", "n5"]
    assert algo.prune_count == 2
    assert algo.get_attributes()["stack_depth"] == 2


def test_pruning_does_not_change_root_value_midgame():
    board = ["X", "O", "X", "", "O", "", "", "", ""]
    plain = Minimax(GridGame(board), max_depth=9)
    pruned = Minimax(GridGame(board), max_depth=9, use_alpha_beta=True)
    finish(plain)
    finish(pruned)
    assert plain.root_value == pruned.root_value
    assert pruned.nodes_visited <= plain.nodes_visited


def test_empty_board_alpha_beta_is_a_draw():
    algo = Minimax(GridGame(max_player="X"), max_depth=9, use_alpha_beta=True)
    finish(algo)
    assert algo.get_status() is SearchStatus.COMPLETED
    assert algo.root_value == 0


def test_immediate_win_is_found():
    board = ["X", "X", "", "O", "O", "", "", "", ""]
    algo = Minimax(GridGame(board), max_depth=9, use_alpha_beta=True)
    finish(algo)
    assert algo.root_value == 1
    assert algo.get_attributes()["best_move"] == "Place at 2"

    as_o = Minimax(GridGame(board, max_player="O"), max_depth=9, use_alpha_beta=True)
    finish(as_o)
    assert as_o.root_value == -1


def test_depth_limit_marks_cutoffs():
    algo = Minimax(GridGame(), max_depth=1)
    finish(algo)
    children = algo.get_tree().children
    assert len(children) == 9
    assert all(c.is_cutoff_point and c.value == 0 for c in children)
    assert algo.cutoff_count == 9
    assert algo.root_value == 0


def test_depth_zero_evaluates_root_only():
    algo = Minimax(GridGame(), max_depth=0)
    assert algo.step() is algo.get_tree()
    assert algo.get_status() is SearchStatus.COMPLETED
    assert algo.get_tree().is_cutoff_point
    assert algo.step() is None


def test_requires_adversarial_problem():
    with pytest.raises(ConfigurationError):
        Minimax(SlidingPuzzle([1, 2, 3, 4, 0, 6, 7, 5, 8]))
    with pytest.raises(ConfigurationError):
        Minimax(GridGame(), max_depth=-1)


def test_attributes(game_problem):
    algo = Minimax(game_problem, use_alpha_beta=True)
    finish(algo)
    attrs = algo.get_attributes()
    assert attrs["alpha_beta"] is True
    assert attrs["root_value"] == 3
    assert attrs["stack_depth"] == 0
    assert attrs["best_move"] == "b"
    assert {"steps", "nodes_visited", "prune_count", "cutoff_count"} <= set(attrs)
