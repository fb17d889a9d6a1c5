# stepsearch/core/utils.py
# Helpers for walking search trees and reconstructing the solution path from a goal node.
from __future__ import annotations
from typing import Iterator, List, Optional, Tuple
from .node import Node


def reconstruct_path(node: Node) -> Tuple[List, float]:
    actions = []
    cost = float(node.g)
    cur = node
    while cur.parent is not None:
        actions.append(cur.action)
        cur = cur.parent
    actions.reverse()
    return actions, cost


def walk(root: Optional[Node]) -> Iterator[Node]:
    """Pre-order traversal, children in insertion order."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find(root: Optional[Node], node_id: str) -> Optional[Node]:
    for node in walk(root):
        if node.id == node_id:
            return node
    return None


def on_path(node: Node, key: str, problem) -> bool:
    """True if a state with canonical ``key`` already sits on the path root..node."""
    cur = node
    while cur is not None:
        if problem.key(cur.state) == key:
            return True
        cur = cur.parent
    return False


def fmt_number(x: Optional[float]) -> str:
    if x is None:
        return "-"
    if x == float("inf"):
        return "∞"
    if x == float("-inf"):
        return "-∞"
    return f"{x:g}"
