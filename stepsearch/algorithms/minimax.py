# stepsearch/algorithms/minimax.py
# Depth-bounded minimax (optionally alpha-beta) driven from an explicit stack, so that every
# step() makes exactly one move of the traversal: visit a node, finish a node, or prune.
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.node import Node, NodeIds
from ..core.problem import Problem
from ..core.status import SearchStatus
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """An internal node whose children are still being visited."""
    node: Node
    actions: List
    is_max: bool
    alpha: float
    beta: float
    value: float
    next: int = 0
    cut_by: Optional[str] = None  # set once beta <= alpha with siblings left


class Minimax:
    def __init__(self, problem: Problem, max_depth: int = 5, use_alpha_beta: bool = False):
        if not problem.is_adversarial:
            raise ConfigurationError(f"{type(problem).__name__} has no utility; minimax needs an adversarial problem")
        if max_depth < 0:
            raise ConfigurationError(f"max_depth must be >= 0, got {max_depth}")
        self.problem = problem
        self.max_depth = max_depth
        self.use_alpha_beta = use_alpha_beta
        self.name = "Alpha-Beta" if use_alpha_beta else "Minimax"
        self.status = SearchStatus.READY
        self.make_id = NodeIds()
        s0 = problem.initial_state()
        self.root = Node(self.make_id(s0), s0, heuristic=problem.heuristic(s0))
        self.stack: List[_Frame] = []
        self.steps = 0
        self.nodes_visited = 0
        self.prune_count = 0
        self.cutoff_count = 0

    def get_status(self) -> SearchStatus:
        return self.status

    def get_tree(self) -> Optional[Node]:
        return self.root

    @property
    def root_value(self) -> Optional[float]:
        return self.root.value

    def step(self) -> Optional[Node]:
        if self.status.is_terminal:
            return None
        self.steps += 1
        if self.status is SearchStatus.READY:
            self.status = SearchStatus.RUNNING
            return self._visit(self.root, -math.inf, math.inf)

        frame = self.stack[-1]
        if frame.cut_by is not None:
            self._prune_rest(frame)
            return frame.node
        if frame.next < len(frame.actions):
            a = frame.actions[frame.next]
            frame.next += 1
            parent = frame.node
            s2 = self.problem.result(parent.state, a)
            child = parent.add_child(Node(
                self.make_id(s2), s2, parent=parent, action=a,
                path_cost=parent.g + self.problem.step_cost(parent.state, a, s2),
                heuristic=self.problem.heuristic(s2), depth=parent.depth + 1,
            ))
            return self._visit(child, frame.alpha, frame.beta)
        return self._finish()

    def _visit(self, node: Node, alpha: float, beta: float) -> Node:
        self.nodes_visited += 1
        if self.use_alpha_beta:
            node.alpha, node.beta = alpha, beta
        s = node.state
        actions = [] if self.problem.is_goal(s) else list(self.problem.actions(s))
        if not actions:
            self._settle_leaf(node, self.problem.utility(s))
        elif node.depth >= self.max_depth:
            node.is_cutoff_point = True
            self.cutoff_count += 1
            self._settle_leaf(node, self.problem.heuristic(s))
        else:
            is_max = self.problem.is_maximizing_turn(s)
            self.stack.append(_Frame(node, actions, is_max, alpha, beta,
                                     -math.inf if is_max else math.inf))
        return node

    def _settle_leaf(self, node: Node, value: float) -> None:
        node.value = float(value)
        if self.use_alpha_beta:
            node.alpha = node.beta = node.value
        if self.stack:
            self._back_up(self.stack[-1], node)
        else:
            self._complete()

    def _back_up(self, frame: _Frame, child: Node) -> None:
        v = child.value
        node = frame.node
        if frame.is_max:
            if v > frame.value:
                frame.value = node.value = v
            if self.use_alpha_beta and frame.value > frame.alpha:
                frame.alpha = node.alpha = frame.value
        else:
            if v < frame.value:
                frame.value = node.value = v
            if self.use_alpha_beta and frame.value < frame.beta:
                frame.beta = node.beta = frame.value
        if self.use_alpha_beta and frame.beta <= frame.alpha and frame.next < len(frame.actions):
            frame.cut_by = child.id

    def _prune_rest(self, frame: _Frame) -> None:
        parent = frame.node
        for a in frame.actions[frame.next:]:
            s2 = self.problem.result(parent.state, a)
            pruned = parent.add_child(Node(
                self.make_id(s2), s2, parent=parent, action=a,
                path_cost=parent.g + self.problem.step_cost(parent.state, a, s2),
                heuristic=self.problem.heuristic(s2), depth=parent.depth + 1,
            ))
            pruned.is_pruned = True
            pruned.pruned_by = frame.cut_by
            self.prune_count += 1
        logger.debug("%s: pruned %d children of %s (cut by %s)", self.name,
                     len(frame.actions) - frame.next, parent.id, frame.cut_by)
        frame.next = len(frame.actions)
        frame.cut_by = None

    def _finish(self) -> Node:
        frame = self.stack.pop()
        frame.node.value = frame.value
        if self.stack:
            self._back_up(self.stack[-1], frame.node)
        else:
            self._complete()
        return frame.node

    def _complete(self) -> None:
        self.status = SearchStatus.COMPLETED
        logger.debug("%s: root value %s after %d visits", self.name, self.root.value, self.nodes_visited)

    def best_child(self) -> Optional[Node]:
        """First root child carrying the backed-up root value."""
        for child in self.root.children:
            if not child.is_pruned and child.value == self.root.value:
                return child
        return None

    def get_attributes(self) -> Dict[str, object]:
        best = self.best_child() if self.status is SearchStatus.COMPLETED else None
        return {
            "steps": self.steps,
            "nodes_visited": self.nodes_visited,
            "prune_count": self.prune_count,
            "cutoff_count": self.cutoff_count,
            "stack_depth": len(self.stack),
            "max_depth": self.max_depth,
            "alpha_beta": self.use_alpha_beta,
            "root_value": self.root.value,
            "best_move": self.problem.node_name(best.state, best.action) if best else None,
        }
