# stepsearch/algorithms/mcts.py
# Monte Carlo tree search, one select/expand/simulate/backpropagate iteration per step().
from __future__ import annotations
import logging
import math
import random
from collections import deque
from typing import Deque, Dict, Optional

from ..core.node import Node, NodeIds
from ..core.problem import Problem
from ..core.status import SearchStatus
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class MonteCarloTreeSearch:
    """
    UCT over a single persistent tree.

    ``value_sum`` of a node is accumulated from the point of view of the side that moved
    into it, so a parent always picks the child with the highest mean. Single-agent problems
    score a rollout 1.0 when it reaches a goal and 0.0 otherwise.
    """

    def __init__(self, problem: Problem, iterations: int = 1000, exploration: float = 1.414,
                 rollout_depth: int = 50, seed: Optional[int] = 0):
        if iterations < 1:
            raise ConfigurationError(f"iterations must be >= 1, got {iterations}")
        if exploration < 0:
            raise ConfigurationError(f"exploration must be >= 0, got {exploration}")
        self.problem = problem
        self.name = "MCTS"
        self.budget = iterations
        self.exploration = exploration
        self.rollout_depth = rollout_depth
        self.rng = random.Random(seed)
        self.status = SearchStatus.READY
        self.iterations = 0
        self.make_id = NodeIds(prefix="mcts-node-")
        s0 = problem.initial_state()
        self.root = Node(self.make_id(s0), s0, heuristic=problem.heuristic(s0))
        self.tree_size = 1
        self._untried: Dict[str, Deque] = {}

    def get_status(self) -> SearchStatus:
        return self.status

    def get_tree(self) -> Optional[Node]:
        return self.root

    def _terminal(self, s) -> bool:
        return self.problem.is_goal(s) or not any(True for _ in self.problem.actions(s))

    def _untried_actions(self, node: Node) -> Deque:
        if node.id not in self._untried:
            s = node.state
            self._untried[node.id] = deque() if self._terminal(s) else deque(self.problem.actions(s))
        return self._untried[node.id]

    def ucb(self, child: Node, parent_visits: int) -> float:
        if child.visit_count == 0:
            return math.inf
        explore = self.exploration * math.sqrt(math.log(parent_visits) / child.visit_count)
        return child.mean_value + explore

    def _select_child(self, node: Node) -> Node:
        best, best_score = node.children[0], -math.inf
        for child in node.children:
            score = self.ucb(child, node.visit_count)
            if score > best_score:  # strict: first child wins ties
                best, best_score = child, score
        return best

    def _expand(self, node: Node) -> Node:
        a = self._untried_actions(node).popleft()
        s2 = self.problem.result(node.state, a)
        child = node.add_child(Node(
            self.make_id(s2), s2, parent=node, action=a,
            path_cost=node.g + self.problem.step_cost(node.state, a, s2),
            heuristic=self.problem.heuristic(s2), depth=node.depth + 1,
        ))
        self.tree_size += 1
        return child

    def rollout(self, s) -> float:
        depth = 0
        while depth < self.rollout_depth and not self._terminal(s):
            s = self.problem.result(s, self.rng.choice(list(self.problem.actions(s))))
            depth += 1
        if not self.problem.is_adversarial:
            return 1.0 if self.problem.is_goal(s) else 0.0
        if self._terminal(s):
            return float(self.problem.utility(s))
        return float(self.problem.heuristic(s))

    def _mover_is_max(self, node: Node) -> bool:
        if node.parent is None:
            return not self.problem.is_maximizing_turn(node.state)
        return self.problem.is_maximizing_turn(node.parent.state)

    def _backpropagate(self, node: Node, outcome: float) -> None:
        cur = node
        while cur is not None:
            cur.visit_count += 1
            if self.problem.is_adversarial and not self._mover_is_max(cur):
                cur.value_sum -= outcome
            else:
                cur.value_sum += outcome
            cur = cur.parent

    def step(self) -> Optional[Node]:
        if self.status.is_terminal:
            return None
        if self.status is SearchStatus.READY:
            self.status = SearchStatus.RUNNING

        node = self.root
        while node.children and not self._untried_actions(node) and not self._terminal(node.state):
            node = self._select_child(node)
        if node.visit_count > 0 and self._untried_actions(node):
            node = self._expand(node)

        self._backpropagate(node, self.rollout(node.state))
        self.iterations += 1
        if self.iterations >= self.budget:
            self.status = SearchStatus.COMPLETED
            logger.debug("MCTS: %d iterations, %d nodes, best action %s",
                         self.iterations, self.tree_size, self.best_action())
        return node

    def best_child(self) -> Optional[Node]:
        """Most visited root child; the first one wins ties."""
        best = None
        for child in self.root.children:
            if best is None or child.visit_count > best.visit_count:
                best = child
        return best

    def best_action(self) -> Optional[str]:
        best = self.best_child()
        return None if best is None else self.problem.node_name(best.state, best.action)

    @property
    def root_value(self) -> float:
        """Mean outcome at the root, from the maximizing side's point of view."""
        mean = self.root.mean_value
        if self.problem.is_adversarial and not self._mover_is_max(self.root):
            return -mean
        return mean

    def get_attributes(self) -> Dict[str, object]:
        return {
            "iterations": self.iterations,
            "budget": self.budget,
            "root_visits": self.root.visit_count,
            "root_value": round(self.root_value, 4),
            "exploration": self.exploration,
            "tree_size": self.tree_size,
            "best_action": self.best_action(),
        }
