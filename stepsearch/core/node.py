# stepsearch/core/node.py
# Node class shared by every steppable algorithm: a state wrapper that also carries the
# bookkeeping a tree renderer needs (bounds, pruning, cutoffs, visit statistics).
from __future__ import annotations
from itertools import count
from typing import Any, Callable, Iterator, List, Optional

from .problem import Problem


class Node:
    def __init__(self, node_id: str, state, parent: Optional["Node"] = None, action=None,
                 path_cost: float = 0.0, heuristic: float = 0.0, depth: int = 0):
        self.id = node_id
        self.state = state
        self.parent = parent
        self.action = action
        self.g = float(path_cost)
        self.h = float(heuristic)
        self.depth = depth
        self.children: List[Node] = []

        # minimax / alpha-beta
        self.value: Optional[float] = None
        self.alpha: Optional[float] = None
        self.beta: Optional[float] = None
        self.is_pruned = False
        self.pruned_by: Optional[str] = None
        self.is_cutoff_point = False

        # graph search: id of the cheaper node that took this one's frontier slot
        self.superseded_by: Optional[str] = None

        # MCTS
        self.visit_count = 0
        self.value_sum = 0.0

    @property
    def f(self) -> float:
        return self.g + self.h

    @property
    def mean_value(self) -> float:
        return self.value_sum / self.visit_count if self.visit_count else 0.0

    def add_child(self, child: "Node") -> "Node":
        self.children.append(child)
        return child

    def expand(self, problem: Problem, make_id: Callable[[Any], str]) -> Iterator["Node"]:
        """Generate child Nodes by applying ACTIONS(s), using RESULT and step_cost.

        Children are not attached; the caller decides which ones join the tree.
        """
        s = self.state
        for a in problem.actions(s):
            s2 = problem.result(s, a)
            cost = problem.step_cost(s, a, s2)
            if cost is None:
                raise ValueError(
                    f"step_cost returned None for (s={s!r}, a={a!r}, s'={s2!r}). "
                    "Check your problem's ACTIONS/RESULT/cost mapping."
                )
            yield Node(
                make_id(s2),
                state=s2,
                parent=self,
                action=a,
                path_cost=self.g + float(cost),
                heuristic=problem.heuristic(s2),
                depth=self.depth + 1,
            )

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, g={self.g:g}, h={self.h:g}, depth={self.depth})"


class NodeIds:
    """Mints fresh instance ids (n0, n1, ...) for the tree-search family."""
    def __init__(self, prefix: str = "n"):
        self.prefix = prefix
        self._counter = count()

    def __call__(self, _state=None) -> str:
        return f"{self.prefix}{next(self._counter)}"
