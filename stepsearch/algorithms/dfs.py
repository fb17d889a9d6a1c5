# stepsearch/algorithms/dfs.py
# Depth-First Search using a LIFO stack; duplicate states are suppressed like the rest of the family.
from __future__ import annotations
from ..core.problem import Problem
from .frontier_search import LIFO, FrontierSearch


def depth_first_search(problem: Problem) -> FrontierSearch:
    return FrontierSearch(problem, LIFO, name="DFS")
