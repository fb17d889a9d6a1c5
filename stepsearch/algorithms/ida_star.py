# stepsearch/algorithms/ida_star.py
# IDA*: iterative deepening on f = g + h instead of depth. Memory stays linear in the path
# length while the heuristic still steers which subtrees get cut off.
from __future__ import annotations
import math
from typing import Dict

from ..core.node import Node
from ..core.problem import Problem
from .ids import DeepeningSearch


class IDAStar(DeepeningSearch):
    name = "IDA*"

    def __init__(self, problem: Problem, max_expansions: int = 5000):
        self.max_expansions = max_expansions
        self.next_threshold = math.inf
        super().__init__(problem)
        self.threshold = self.root.f

    def _cut_off(self, node: Node) -> bool:
        if node.f <= self.threshold:
            return False
        node.is_cutoff_point = True
        self.next_threshold = min(self.next_threshold, node.f)
        return True

    def _next_bound(self) -> bool:
        if math.isinf(self.next_threshold):
            return False
        self.threshold = self.next_threshold
        self.next_threshold = math.inf
        return True

    def _out_of_budget(self) -> bool:
        return self.expansions >= self.max_expansions

    def get_attributes(self) -> Dict[str, object]:
        return {
            "threshold": self.threshold,
            "next_threshold": self.next_threshold,
            "stack_size": len(self.stack),
            "steps": self.steps,
            "expansions": self.expansions,
            "max_expansions": self.max_expansions,
            "restarts": self.restarts,
        }


def ida_star_search(problem: Problem, max_expansions: int = 5000) -> IDAStar:
    return IDAStar(problem, max_expansions=max_expansions)
