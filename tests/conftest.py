import pytest

from stepsearch.core.problem import Problem
from stepsearch.problems.custom_tree import CustomTreeProblem


def leaf(node_id, value=None, cost=1, goal=False):
    out = {"id": node_id, "name": node_id, "costToParent": cost, "isGoal": goal, "children": []}
    if value is not None:
        out["value"] = value
    return out


def inner(node_id, children, value=None, cost=1):
    out = leaf(node_id, value, cost)
    out["children"] = children
    return out


@pytest.fixture
def game_tree():
    """Textbook two-ply tree: MAX root over three MIN nodes; minimax value 3."""
    return {
        "id": "root", "name": "Start", "children": [
            inner("b", [leaf("b1", 3), leaf("b2", 12), leaf("b3", 8)]),
            inner("c", [leaf("c1", 2), leaf("c2", 4), leaf("c3", 6)]),
            inner("d", [leaf("d1", 14), leaf("d2", 5), leaf("d3", 2)]),
        ],
    }


@pytest.fixture
def small_tree():
    """A(B(D,E), C(F,G)) with no goal."""
    return inner("A", [
        inner("B", [leaf("D"), leaf("E")]),
        inner("C", [leaf("F"), leaf("G")]),
    ])


@pytest.fixture
def game_problem(game_tree):
    return CustomTreeProblem.from_interchange(game_tree)


class WeightedGraph(Problem):
    """Explicit weighted digraph; heuristic values optional."""

    def __init__(self, edges, start, goal, h=None):
        self.edges = edges
        self.start = start
        self.goal = goal
        self.h = h or {}

    def initial_state(self):
        return self.start

    def is_goal(self, s):
        return s == self.goal

    def actions(self, s):
        return [dst for dst, _ in self.edges.get(s, [])]

    def result(self, s, a):
        return a

    def step_cost(self, s, a, s2):
        return dict(self.edges[s])[a]

    def heuristic(self, s):
        return self.h.get(s, 0.0)

    def key(self, s):
        return s


@pytest.fixture
def detour_graph():
    """S->B is direct but expensive; S->A->B is cheaper and found second."""
    return WeightedGraph(
        {"S": [("A", 1), ("B", 4)], "A": [("B", 1)], "B": [("G", 1)]},
        start="S", goal="G",
    )


@pytest.fixture
def weighted_graph():
    return WeightedGraph
