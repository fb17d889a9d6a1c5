# stepsearch/algorithms/frontier_search.py
# One steppable graph-search engine behind BFS, DFS, UCS, Greedy and A*.
from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional

from ..core.frontiers import FIFOQueue, LIFOStack, PriorityQueue
from ..core.node import Node, NodeIds
from ..core.problem import Problem
from ..core.status import SearchStatus
from ..core.utils import fmt_number

logger = logging.getLogger(__name__)

FIFO = "fifo"
LIFO = "lifo"


class FrontierSearch:
    """
    Graph search, one node per step().

    ``order`` is FIFO, LIFO or a key function over nodes (lower pops first). Nodes are
    identified by the problem's canonical state key, and the explored set and frontier index
    are keyed by it. With a key function, a cheaper route to a state still waiting in the
    frontier takes that node's frontier slot: the new node joins the tree under its own
    parent with id ``<key>#<n>``, and the old one stays where it was, marked
    ``superseded_by`` and never expanded.
    """

    def __init__(self, problem: Problem, order, name: str = "FrontierSearch",
                 suppress_duplicates: bool = True):
        self.problem = problem
        self.name = name
        self.suppress_duplicates = suppress_duplicates
        self.status = SearchStatus.READY
        self.steps = 0
        self.generated = 1
        self.max_depth = 0

        # without duplicate suppression this is plain tree search: fresh ids per node
        self.make_id = problem.key if suppress_duplicates else NodeIds()
        s0 = problem.initial_state()
        self.root = Node(self.make_id(s0), s0, heuristic=problem.heuristic(s0))
        self._lifo = order == LIFO
        if order == FIFO:
            self.frontier = FIFOQueue()
        elif order == LIFO:
            self.frontier = LIFOStack()
        elif callable(order):
            self.frontier = PriorityQueue(key=order)
        else:
            raise ValueError(f"order must be 'fifo', 'lifo' or a key function, got {order!r}")
        self.key_fn: Optional[Callable[[Node], float]] = order if callable(order) else None
        self.frontier.push(self.root)
        self.in_frontier: Dict[str, Node] = {self.root.id: self.root}
        self.explored: Dict[str, None] = {}  # insertion-ordered set
        self._reroutes: Dict[str, int] = {}
        self.goal: Optional[Node] = None

    def get_status(self) -> SearchStatus:
        return self.status

    def get_tree(self) -> Optional[Node]:
        return self.root

    def step(self) -> Optional[Node]:
        if self.status.is_terminal:
            return None
        if self.status is SearchStatus.READY:
            self.status = SearchStatus.RUNNING

        if not len(self.frontier):
            self.status = SearchStatus.FAILED
            logger.debug("%s: frontier exhausted after %d steps", self.name, self.steps)
            return None

        node = self.frontier.pop()
        key = self._key(node)
        self.in_frontier.pop(key, None)
        self.steps += 1
        self.max_depth = max(self.max_depth, node.depth)

        if self.problem.is_goal(node.state):
            self.goal = node
            self.status = SearchStatus.COMPLETED
            logger.debug("%s: goal %s at depth %d, cost %g", self.name, node.id, node.depth, node.g)
            return node

        self.explored[key] = None
        children = list(node.expand(self.problem, self.make_id))
        survivors: List[Node] = []
        for child in children:
            self.generated += 1
            if not self.suppress_duplicates:
                node.add_child(child)
                survivors.append(child)
                continue
            if child.id in self.explored:
                continue
            waiting = self.in_frontier.get(child.id)
            if waiting is None:
                node.add_child(child)
                survivors.append(child)
            elif self.key_fn is not None and self.key_fn(child) < self.key_fn(waiting):
                self._supersede(waiting, child)

        # LIFO: push in reverse so the first legal action is expanded first
        for child in (reversed(survivors) if self._lifo else survivors):
            self.frontier.push(child)
            self.in_frontier[self._key(child)] = child
        return node

    def _key(self, node: Node) -> str:
        return self.problem.key(node.state) if self.suppress_duplicates else node.id

    def _supersede(self, waiting: Node, better: Node) -> None:
        """Swap a cheaper route into the frontier; the waiting node stays in the tree."""
        key = better.id
        self._reroutes[key] = self._reroutes.get(key, 0) + 1
        better.id = f"{key}#{self._reroutes[key]}"
        waiting.superseded_by = better.id
        better.parent.add_child(better)
        self.frontier.replace(waiting, better)
        self.in_frontier[key] = better
        logger.debug("%s: %s superseded by %s (g %g -> %g)", self.name, waiting.id, better.id,
                     waiting.g, better.g)

    def get_attributes(self) -> Dict[str, object]:
        frontier = [f"{n.id} (f={fmt_number(n.f)})" for n in self.frontier]
        explored = [k if len(k) <= 15 else k[:12] + "..." for k in self.explored]
        return {
            "steps": self.steps,
            "frontier_size": len(self.frontier),
            "explored_count": len(self.explored),
            "nodes_generated": self.generated,
            "max_depth": self.max_depth,
            "frontier": frontier or ["(empty)"],
            "explored": explored or ["(empty)"],
        }


def frontier_search(problem: Problem, f: Callable[[Node], float], name: str = "BestFirst",
                    h: Optional[Callable[[Node], float]] = None) -> FrontierSearch:
    """Best-first search ordered by f(n) (+ h(n) when given)."""
    def fscore(n: Node) -> float:
        base = float(f(n))
        if h is None:
            return base
        return base + float(h(n))

    return FrontierSearch(problem, fscore, name=name)
