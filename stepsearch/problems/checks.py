# stepsearch/problems/checks.py
# Construction-time validation of boardState arrays, plus a walk that checks a problem's transition model.
from __future__ import annotations
import math
from collections import deque
from typing import Any, List, Optional, Sequence, Tuple

from ..errors import ConfigurationError

MARKS = ("X", "O")


def validate_puzzle_board(board: Sequence[Any], what: str = "boardState") -> Tuple[int, ...]:
    """Return the board as a tuple of ints; it must be a permutation of 0..n*n-1 with n >= 2."""
    if board is None or isinstance(board, (str, bytes)):
        raise ConfigurationError(f"{what} must be an array of tile numbers")
    tiles = list(board)
    size = math.isqrt(len(tiles))
    if size < 2 or size * size != len(tiles):
        raise ConfigurationError(f"{what} must hold a square number (>= 4) of tiles, got {len(tiles)}")
    out = []
    for t in tiles:
        # json.loads yields inf/nan for Infinity/NaN
        if isinstance(t, bool) or not isinstance(t, (int, float)) or not math.isfinite(t) or int(t) != t:
            raise ConfigurationError(f"{what} contains a non-integer tile {t!r}")
        out.append(int(t))
    if sorted(out) != list(range(len(out))):
        raise ConfigurationError(f"{what} must be a permutation of 0..{len(out) - 1}, got {out}")
    return tuple(out)


def normalize_mark(cell: Any) -> Optional[str]:
    if cell is None or cell == "":
        return None
    if cell in MARKS:
        return cell
    raise ConfigurationError(f"grid cell must be 'X', 'O' or empty, got {cell!r}")


def validate_grid_board(board: Sequence[Any], what: str = "boardState") -> Tuple[Optional[str], ...]:
    """9 cells of X/O/empty; X moves first, so X count - O count must be 0 or 1."""
    if board is None or isinstance(board, (str, bytes)):
        raise ConfigurationError(f"{what} must be an array of 9 cells")
    cells = [normalize_mark(c) for c in board]
    if len(cells) != 9:
        raise ConfigurationError(f"{what} must have 9 cells, got {len(cells)}")
    diff = cells.count("X") - cells.count("O")
    if diff not in (0, 1):
        raise ConfigurationError(f"{what} has an impossible mark count (X - O = {diff})")
    return tuple(cells)


def puzzle_inversions(tiles: Sequence[int]) -> int:
    seq = [t for t in tiles if t != 0]
    return sum(1 for i in range(len(seq)) for j in range(i + 1, len(seq)) if seq[i] > seq[j])


def sanity_check_problem(problem, max_states: int = 10_000) -> str:
    """Walks states breadth-first and checks step_cost never returns None."""
    seen = set()
    q = deque([problem.initial_state()])
    steps = 0
    while q and steps < max_states:
        s = q.popleft()
        k = problem.key(s)
        if k in seen:
            continue
        seen.add(k)
        for a in problem.actions(s):
            s2 = problem.result(s, a)
            cost = problem.step_cost(s, a, s2)
            if cost is None:
                raise AssertionError(f"step_cost is None for (s={s}, a={a}, s'={s2})")
            if cost < 0:
                raise AssertionError(f"negative step_cost {cost} for (s={s}, a={a})")
            q.append(s2)
        steps += 1
    return f"OK: visited {len(seen)} states; no None costs."


def tiles_grid(tiles: Sequence[int]) -> List[List[int]]:
    size = math.isqrt(len(tiles))
    return [list(tiles[r * size:(r + 1) * size]) for r in range(size)]


def parse_board_text(text: Optional[str]) -> Optional[List[Any]]:
    """'1,2,3,...' or 'X _ O ...' from the command line; '_', '.' and '-' are empty cells."""
    if text is None:
        return None
    toks = [t.strip() for t in text.split(",")] if "," in text else text.split()
    board: List[Any] = []
    for t in toks:
        if t.lstrip("-").isdigit():
            board.append(int(t))
        else:
            board.append("" if t in ("_", ".", "-", "") else t)
    return board
