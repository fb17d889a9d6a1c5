# stepsearch/problems/factory.py
# Builds a Problem from the active configuration or from a board detected in a photo.
from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Sequence, Union

from ..config import DEFAULT_GOAL, SearchSettings
from ..core.interchange import TreeSpec, tree_from_dict
from ..core.problem import Problem
from ..errors import ConfigurationError
from .custom_tree import CustomTreeProblem
from .grid_game import GridGame
from .sliding_puzzle import SlidingPuzzle

logger = logging.getLogger(__name__)

PROBLEM_TYPES = ("8puzzle", "tictactoe", "custom")

DEFAULT_PUZZLE_BOARD = (1, 2, 3, 4, 0, 6, 7, 5, 8)


def build_problem(problem_type: str, settings: Optional[SearchSettings] = None,
                  board: Optional[Sequence[Any]] = None,
                  tree: Union[TreeSpec, Dict[str, Any], None] = None) -> Problem:
    settings = settings or SearchSettings.from_env()
    if problem_type == "8puzzle":
        board = board if board is not None else DEFAULT_PUZZLE_BOARD
        goal = settings.goal_state
        if tuple(goal) == DEFAULT_GOAL and len(board) != len(goal):
            goal = None  # larger boards fall back to their own ordered goal
        return SlidingPuzzle(board, goal=goal, heuristic=settings.heuristic_name)
    if problem_type == "tictactoe":
        return GridGame(board, max_player=settings.max_player)
    if problem_type == "custom":
        if tree is None:
            raise ConfigurationError("the custom problem needs an authored tree")
        spec = tree if isinstance(tree, TreeSpec) else tree_from_dict(tree)
        return CustomTreeProblem(spec)
    raise ConfigurationError(f"unknown problem type {problem_type!r}; expected one of {PROBLEM_TYPES}")


def problem_from_detection(payload: Optional[Dict[str, Any]],
                           settings: Optional[SearchSettings] = None) -> Optional[Problem]:
    """
    Turn the image-recognition output into a problem. The payload is
    ``{"type": "tictactoe" | "8puzzle", "board": [...]}`` or ``{"type": "custom", "tree": {...}}``;
    an empty payload (nothing recognised) gives None.
    """
    if not payload:
        return None
    kind = payload.get("type")
    logger.debug("Detected board of type %r", kind)
    if kind == "custom":
        return build_problem("custom", settings, tree=payload.get("tree"))
    if kind in ("tictactoe", "8puzzle"):
        if "board" not in payload:
            raise ConfigurationError(f"detected {kind} payload has no board")
        return build_problem(kind, settings, board=payload["board"])
    raise ConfigurationError(f"unrecognised detection type {kind!r}")
