# stepsearch/algorithms/astar.py
from __future__ import annotations
from .frontier_search import frontier_search


def a_star_search(problem):
    """f = g + h; optimal when the problem's heuristic is admissible."""
    return frontier_search(problem, f=lambda n: n.g, h=lambda n: n.h, name="A*")
