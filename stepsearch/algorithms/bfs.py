# stepsearch/algorithms/bfs.py
from __future__ import annotations
from ..core.problem import Problem
from .frontier_search import FIFO, FrontierSearch


def breadth_first_search(problem: Problem) -> FrontierSearch:
    """Shallowest node first; optimal for unit step costs."""
    return FrontierSearch(problem, FIFO, name="BFS")
