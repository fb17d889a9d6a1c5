# stepsearch/problems/sliding_puzzle.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import DEFAULT_GOAL
from ..core.problem import Problem
from ..errors import ConfigurationError
from .checks import puzzle_inversions, validate_puzzle_board

logger = logging.getLogger(__name__)

# Direction the blank moves, in the fixed order actions are generated.
_MOVES = {
    "Up": (-1, 0),
    "Down": (1, 0),
    "Left": (0, -1),
    "Right": (0, 1),
}


@dataclass(frozen=True)
class PuzzleState:
    tiles: Tuple[int, ...]
    blank: int


class SlidingPuzzle(Problem):
    """
    n x n sliding-tile puzzle (8-puzzle by default) with unit costs.

    - State: PuzzleState(tiles, blank index)
    - ACTIONS(s): subset of {'Up','Down','Left','Right'} the blank can move to
    - RESULT(s,a): blank swapped with the neighbouring tile
    - IS-GOAL(s): tiles == goal
    - c(s,a,s'): 1.0
    - heuristic(s): Manhattan distance sum or misplaced-tile count (both admissible)
    """
    def __init__(self, board: Sequence[int], goal: Optional[Sequence[int]] = None,
                 heuristic: str = "manhattan"):
        tiles = validate_puzzle_board(board)
        if goal is None:
            goal = DEFAULT_GOAL if len(tiles) == len(DEFAULT_GOAL) else tuple(range(1, len(tiles))) + (0,)
        self.goal = validate_puzzle_board(goal, what="goal state")
        if len(self.goal) != len(tiles):
            raise ConfigurationError(
                f"goal state has {len(self.goal)} tiles but the board has {len(tiles)}")
        if heuristic == "default":
            heuristic = "manhattan"
        if heuristic not in ("manhattan", "misplaced"):
            raise ConfigurationError(f"unknown puzzle heuristic {heuristic!r}")
        self.heuristic_name = heuristic
        self.size = int(len(tiles) ** 0.5)
        self._start = PuzzleState(tiles, tiles.index(0))
        self._goal_pos = {t: divmod(i, self.size) for i, t in enumerate(self.goal)}
        if not self.is_solvable():
            logger.warning("Puzzle %s cannot reach goal %s; search will end in FAILED", tiles, self.goal)

    def initial_state(self) -> PuzzleState:
        return self._start

    def is_goal(self, state: PuzzleState) -> bool:
        return state.tiles == self.goal

    def actions(self, state: PuzzleState) -> Iterable[str]:
        r, c = divmod(state.blank, self.size)
        for name, (dr, dc) in _MOVES.items():
            if 0 <= r + dr < self.size and 0 <= c + dc < self.size:
                yield name

    def result(self, state: PuzzleState, action: str) -> PuzzleState:
        r, c = divmod(state.blank, self.size)
        dr, dc = _MOVES[action]
        target = (r + dr) * self.size + (c + dc)
        tiles = list(state.tiles)
        tiles[state.blank], tiles[target] = tiles[target], tiles[state.blank]
        return PuzzleState(tuple(tiles), target)

    def step_cost(self, state, action, next_state) -> float:
        return 1.0

    def heuristic(self, state: PuzzleState) -> float:
        if self.heuristic_name == "misplaced":
            return float(sum(1 for t, g in zip(state.tiles, self.goal) if t != 0 and t != g))
        total = 0
        for i, t in enumerate(state.tiles):
            if t == 0:
                continue
            r, c = divmod(i, self.size)
            gr, gc = self._goal_pos[t]
            total += abs(r - gr) + abs(c - gc)
        return float(total)

    def key(self, state: PuzzleState) -> str:
        return ",".join(map(str, state.tiles))

    def action_label(self, action) -> str:
        return f"Move {action}"

    def board_state(self, state: PuzzleState) -> List[int]:
        return list(state.tiles)

    def is_solvable(self) -> bool:
        """Inversion-parity test between the start board and the goal."""
        start, goal = self._start.tiles, self.goal
        if self.size % 2 == 1:
            return puzzle_inversions(start) % 2 == puzzle_inversions(goal) % 2
        # even width: blank row (from the bottom) flips parity with every vertical move
        start_row = self.size - start.index(0) // self.size
        goal_row = self.size - goal.index(0) // self.size
        return (puzzle_inversions(start) + start_row) % 2 == (puzzle_inversions(goal) + goal_row) % 2
