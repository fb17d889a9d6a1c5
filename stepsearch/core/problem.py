# Defines the standard interface for any steppable search problem (states, actions, goals, costs, heuristic).
# stepsearch/core/problem.py
from __future__ import annotations
from typing import Any, Hashable, Iterable, List, Optional, Protocol

Action = Hashable
State = Any


class Problem(Protocol):
    """Canonical AI search problem interface (atomic state-space view).

    Adversarial problems set ``is_adversarial = True`` and implement ``utility`` and
    ``is_maximizing_turn``; algorithms check the flag instead of probing for methods.
    """
    is_adversarial: bool = False

    def initial_state(self) -> State: ...
    def is_goal(self, s: State) -> bool: ...
    def actions(self, s: State) -> Iterable[Action]: ...
    def result(self, s: State, a: Action) -> State: ...
    def step_cost(self, s: State, a: Action, s2: State) -> float: ...

    # Optional heuristic for informed search; default 0
    def heuristic(self, s: State) -> float: return 0.0

    def key(self, s: State) -> str:
        """Canonical identity of a state; graph search collapses equal keys into one node."""
        return repr(s)

    def action_label(self, a: Action) -> str:
        return str(a)

    def node_name(self, s: State, a: Action) -> str:
        """Display name of the node reached by action a, landing in state s."""
        return self.action_label(a)

    def board_state(self, s: State) -> Optional[List[Any]]:
        """Interchange ``boardState`` for a state, or None when the domain has no board."""
        return None

    # Adversarial capability, only meaningful when is_adversarial is True.
    def utility(self, s: State) -> float:
        raise NotImplementedError(f"{type(self).__name__} is not an adversarial problem")

    def is_maximizing_turn(self, s: State) -> bool:
        raise NotImplementedError(f"{type(self).__name__} is not an adversarial problem")
