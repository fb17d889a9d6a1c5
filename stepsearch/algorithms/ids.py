# stepsearch/algorithms/ids.py
# Iterative deepening as a steppable depth-limited DFS: one popped node per step(), restarting
# from a fresh root each time the current bound is exhausted.
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from ..core.node import Node, NodeIds
from ..core.problem import Problem
from ..core.status import SearchStatus
from ..core.utils import on_path

logger = logging.getLogger(__name__)


class DeepeningSearch:
    """
    Restart shell shared by IDS and IDA*. Each bound builds a brand-new tree with fresh ids;
    trees from earlier bounds stay in ``history``. Subclasses decide when a popped node is cut
    off and what the next bound is.
    """
    name = "Deepening"

    def __init__(self, problem: Problem):
        self.problem = problem
        self.status = SearchStatus.READY
        self.make_id = NodeIds()
        self.history: List[Node] = []
        self.steps = 0
        self.expansions = 0
        self.restarts = 0
        self.goal: Optional[Node] = None
        self._new_root()

    def _new_root(self) -> None:
        s0 = self.problem.initial_state()
        self.root = Node(self.make_id(s0), s0, heuristic=self.problem.heuristic(s0))
        self.stack: List[Node] = [self.root]

    def get_status(self) -> SearchStatus:
        return self.status

    def get_tree(self) -> Optional[Node]:
        return self.root

    # hooks
    def _cut_off(self, node: Node) -> bool:
        raise NotImplementedError

    def _next_bound(self) -> bool:
        """Advance the bound after an exhausted pass; False means the search has failed."""
        raise NotImplementedError

    def _out_of_budget(self) -> bool:
        return False

    def step(self) -> Optional[Node]:
        if self.status.is_terminal:
            return None
        if self.status is SearchStatus.READY:
            self.status = SearchStatus.RUNNING
        if self._out_of_budget():
            self.status = SearchStatus.FAILED
            logger.debug("%s: expansion budget spent after %d steps", self.name, self.steps)
            return None

        if not self.stack:
            self.history.append(self.root)
            if not self._next_bound():
                self.status = SearchStatus.FAILED
                logger.debug("%s: no deeper bound to try after %d restarts", self.name, self.restarts)
                return None
            self.restarts += 1
            self._new_root()

        node = self.stack.pop()
        self.steps += 1
        if self._cut_off(node):
            return node
        if self.problem.is_goal(node.state):
            self.goal = node
            self.status = SearchStatus.COMPLETED
            logger.debug("%s: goal %s at depth %d, cost %g", self.name, node.id, node.depth, node.g)
            return node

        self.expansions += 1
        for child in node.expand(self.problem, self.make_id):
            if on_path(node, self.problem.key(child.state), self.problem):
                continue
            node.add_child(child)
        self.stack.extend(reversed(node.children))
        return node


class IterativeDeepeningSearch(DeepeningSearch):
    name = "IDS"

    def __init__(self, problem: Problem, max_depth: int = 50):
        self.bound = 0
        self.max_bound = max_depth
        self.cutoff_hit = False
        super().__init__(problem)

    def _cut_off(self, node: Node) -> bool:
        if node.depth < self.bound or self.problem.is_goal(node.state):
            return False
        if any(True for _ in self.problem.actions(node.state)):
            node.is_cutoff_point = True
            self.cutoff_hit = True
        return True

    def _next_bound(self) -> bool:
        if not self.cutoff_hit or self.bound + 1 > self.max_bound:
            return False
        self.bound += 1
        self.cutoff_hit = False
        return True

    def get_attributes(self) -> Dict[str, object]:
        return {
            "bound": self.bound,
            "max_bound": self.max_bound,
            "stack_size": len(self.stack),
            "steps": self.steps,
            "expansions": self.expansions,
            "restarts": self.restarts,
        }


def iterative_deepening_search(problem: Problem, max_depth: int = 50) -> IterativeDeepeningSearch:
    return IterativeDeepeningSearch(problem, max_depth=max_depth)
