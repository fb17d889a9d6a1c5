# stepsearch/problems/custom_tree.py
# Replays a user-authored tree instead of synthesizing a state space.
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from ..core.interchange import TreeSpec, tree_from_dict, tree_to_dict
from ..core.problem import Problem


class CustomTreeProblem(Problem):
    """
    States are the authored TreeSpec nodes themselves; ACTIONS(s) are child indices and
    RESULT(s, i) is ``s.children[i]``. Costs, values and goal flags are read from the tree,
    never computed. Identity is the authored id: there is no state hashing for these trees.
    MAX moves at even depths (the root maximizes).
    """
    is_adversarial = True

    def __init__(self, root: TreeSpec):
        self.root = root
        self._depth: Dict[str, int] = {}
        stack = [(root, 0)]
        while stack:
            spec, depth = stack.pop()
            self._depth[spec.id] = depth
            stack.extend((c, depth + 1) for c in spec.children)

    @classmethod
    def from_interchange(cls, data: Dict[str, Any]) -> "CustomTreeProblem":
        return cls(tree_from_dict(data))

    def to_interchange(self) -> Dict[str, Any]:
        return tree_to_dict(self.root)

    def initial_state(self) -> TreeSpec:
        return self.root

    def is_goal(self, s: TreeSpec) -> bool:
        return s.is_goal

    def actions(self, s: TreeSpec) -> Iterable[int]:
        return range(len(s.children))

    def result(self, s: TreeSpec, a: int) -> TreeSpec:
        return s.children[a]

    def step_cost(self, s: TreeSpec, a: int, s2: TreeSpec) -> float:
        return 1.0 if s2.cost_to_parent is None else float(s2.cost_to_parent)

    def heuristic(self, s: TreeSpec) -> float:
        return float(s.value or 0.0)

    def utility(self, s: TreeSpec) -> float:
        return float(s.value or 0.0)

    def is_maximizing_turn(self, s: TreeSpec) -> bool:
        return self._depth[s.id] % 2 == 0

    def key(self, s: TreeSpec) -> str:
        return s.id

    def action_label(self, a: int) -> str:
        return f"child {a}"

    def node_name(self, s: TreeSpec, a: int) -> str:
        return s.name

    def board_state(self, s: TreeSpec) -> Optional[List[Any]]:
        return s.board_state
