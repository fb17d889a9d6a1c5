# stepsearch/algorithms/greedy.py
from __future__ import annotations
from .frontier_search import frontier_search


def greedy_best_first_search(problem):
    # greedy: f = 0 + h
    return frontier_search(problem, f=lambda n: 0.0, h=lambda n: n.h, name="Greedy")
