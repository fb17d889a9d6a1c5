# stepsearch/problems/grid_game.py
# Tic-tac-toe as an adversarial search problem.
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.problem import Problem
from ..errors import ConfigurationError
from .checks import validate_grid_board

Board = Tuple[Optional[str], ...]

WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


def winner(board: Sequence[Optional[str]]) -> Optional[Tuple[str, Tuple[int, int, int]]]:
    """(symbol, line) of the first completed line, or None."""
    for line in WIN_LINES:
        a, b, c = line
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a], line
    return None


@dataclass(frozen=True)
class GridState:
    board: Board
    to_move: str

    @property
    def is_terminal(self) -> bool:
        return winner(self.board) is not None or None not in self.board


class GridGame(Problem):
    """
    - State: GridState(board of 'X'/'O'/None, side to move); X always moves first
    - ACTIONS(s): indices of empty cells, ascending; none once the game is over
    - utility(s): +1 / -1 / 0 from ``max_player``'s point of view
    - IS-GOAL(s): a win line or a full grid (terminal test)
    """
    is_adversarial = True

    def __init__(self, board: Optional[Sequence] = None, max_player: str = "X"):
        if max_player not in ("X", "O"):
            raise ConfigurationError(f"max_player must be 'X' or 'O', got {max_player!r}")
        cells = validate_grid_board(board if board is not None else [None] * 9)
        to_move = "X" if cells.count("X") == cells.count("O") else "O"
        self.max_player = max_player
        self._start = GridState(cells, to_move)

    def initial_state(self) -> GridState:
        return self._start

    def is_goal(self, state: GridState) -> bool:
        return state.is_terminal

    def actions(self, state: GridState) -> Iterable[int]:
        if state.is_terminal:
            return []
        return [i for i, cell in enumerate(state.board) if cell is None]

    def result(self, state: GridState, action: int) -> GridState:
        board = list(state.board)
        board[action] = state.to_move
        return GridState(tuple(board), "O" if state.to_move == "X" else "X")

    def step_cost(self, state, action, next_state) -> float:
        return 1.0

    def utility(self, state: GridState) -> float:
        won = winner(state.board)
        if won is None:
            return 0.0
        return 1.0 if won[0] == self.max_player else -1.0

    def is_maximizing_turn(self, state: GridState) -> bool:
        return state.to_move == self.max_player

    def key(self, state: GridState) -> str:
        return "".join(cell or "-" for cell in state.board)

    def action_label(self, action) -> str:
        return f"Place at {action}"

    def board_state(self, state: GridState) -> List[str]:
        return [cell or "" for cell in state.board]
