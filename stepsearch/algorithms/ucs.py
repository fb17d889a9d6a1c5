# This code implements Uniform Cost Search (UCS) by reusing the generic frontier engine.
# stepsearch/algorithms/ucs.py
from __future__ import annotations
from .frontier_search import frontier_search

def uniform_cost_search(problem):
    return frontier_search(problem, f=lambda n: n.g, name="UCS")
