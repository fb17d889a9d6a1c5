from stepsearch.algorithms.ida_star import IDAStar
from stepsearch.algorithms.ids import IterativeDeepeningSearch
from stepsearch.core.status import SearchStatus
from stepsearch.core.utils import reconstruct_path, walk
from stepsearch.problems.custom_tree import CustomTreeProblem
from stepsearch.problems.sliding_puzzle import SlidingPuzzle

SCENARIO = [1, 2, 3, 4, 8, 0, 7, 6, 5]


def finish(algo):
    while not algo.get_status().is_terminal:
        algo.step()
    return algo


def test_ids_finds_shallowest_goal():
    p = SlidingPuzzle(SCENARIO)
    algo = finish(IterativeDeepeningSearch(p))
    assert algo.get_status() is SearchStatus.COMPLETED
    assert algo.goal.depth == 5 and algo.goal.g == 5
    assert algo.bound == 5
    assert algo.restarts == 5
    assert len(algo.history) == 5
    # nothing at a smaller bound was a goal
    for old_root in algo.history:
        assert not any(p.is_goal(n.state) for n in walk(old_root))
    actions, _ = reconstruct_path(algo.goal)
    assert len(actions) == 5


def test_ids_marks_cutoffs_and_restarts_with_fresh_nodes(small_tree):
    small_tree["children"][0]["children"][1]["isGoal"] = True  # E
    algo = IterativeDeepeningSearch(CustomTreeProblem.from_interchange(small_tree))
    first = algo.step()
    assert first is algo.get_tree() and first.is_cutoff_point
    second = algo.step()  # bound exhausted: restart and pop the new root
    assert second is algo.get_tree()
    assert second is not first and second.id != first.id
    assert algo.bound == 1 and algo.restarts == 1
    finish(algo)
    assert algo.get_status() is SearchStatus.COMPLETED
    assert algo.goal.state.id == "E"
    assert algo.bound == 2
    bound1 = algo.history[1]
    assert [c.is_cutoff_point for c in bound1.children] == [True, True]


def test_ids_fails_when_space_is_exhausted(small_tree):
    algo = finish(IterativeDeepeningSearch(CustomTreeProblem.from_interchange(small_tree)))
    assert algo.get_status() is SearchStatus.FAILED
    assert algo.bound == 2
    assert algo.steps == 1 + 3 + 7
    assert algo.step() is None


def test_ids_fails_at_depth_safety_limit(small_tree):
    algo = finish(IterativeDeepeningSearch(CustomTreeProblem.from_interchange(small_tree), max_depth=1))
    assert algo.get_status() is SearchStatus.FAILED
    assert algo.bound == 1
    assert algo.get_attributes()["max_bound"] == 1


def test_ids_skips_states_already_on_path():
    p = SlidingPuzzle(SCENARIO)
    algo = finish(IterativeDeepeningSearch(p))
    for node in walk(algo.get_tree()):
        seen = set()
        cur = node
        while cur is not None:
            seen.add(p.key(cur.state))
            cur = cur.parent
        assert len(seen) == node.depth + 1


def test_idastar_threshold_starts_at_root_heuristic():
    p = SlidingPuzzle(SCENARIO)
    algo = IDAStar(p)
    assert algo.threshold == p.heuristic(p.initial_state()) == 5
    finish(algo)
    assert algo.get_status() is SearchStatus.COMPLETED
    assert algo.goal.g == 5
    assert algo.restarts == 0


def test_idastar_raises_threshold_to_smallest_excess(small_tree):
    algo = IDAStar(CustomTreeProblem.from_interchange(small_tree))
    assert algo.threshold == 0
    algo.step()
    algo.step()
    assert algo.get_tree().children[0].is_cutoff_point
    assert algo.next_threshold == 1
    finish(algo)
    # thresholds 0, 1, 2 and then no finite next bound
    assert algo.get_status() is SearchStatus.FAILED
    assert algo.restarts == 2
    assert algo.threshold == 2


def test_idastar_expansion_ceiling():
    algo = finish(IDAStar(SlidingPuzzle([8, 6, 7, 2, 5, 4, 3, 0, 1]), max_expansions=3))
    assert algo.get_status() is SearchStatus.FAILED
    assert algo.expansions == 3
    attrs = algo.get_attributes()
    assert attrs["max_expansions"] == 3
    assert algo.step() is None
