# stepsearch/core/frontiers.py
from __future__ import annotations
import heapq
from collections import deque


class FIFOQueue:
    def __init__(self):
        self.q = deque()
    def push(self, x): self.q.append(x)
    def pop(self): return self.q.popleft()
    def __len__(self): return len(self.q)
    def __iter__(self): return iter(self.q)
    def peek(self): return self.q[0]


class LIFOStack:
    def __init__(self):
        self.q = []
    def push(self, x): self.q.append(x)
    def pop(self): return self.q.pop()
    def __len__(self): return len(self.q)
    def __iter__(self): return reversed(self.q)  # next to pop first
    def peek(self): return self.q[-1]


class PriorityQueue:
    """Min-heap by key(x); equal keys pop in insertion order.

    ``replace(old, new)`` drops ``old`` lazily and pushes ``new`` as a fresh entry, so a
    re-prioritized item queues behind items already waiting at the same key.
    """
    _REMOVED = object()

    def __init__(self, key):
        self.key = key
        self.h = []
        self.counter = 0  # tie-breaker for stability
        self._entries = {}  # id(item) -> heap entry
        self._live = 0

    def push(self, x):
        self.counter += 1
        entry = [self.key(x), self.counter, x]
        self._entries[id(x)] = entry
        heapq.heappush(self.h, entry)
        self._live += 1

    def replace(self, old, new):
        entry = self._entries.pop(id(old))
        entry[2] = self._REMOVED
        self._live -= 1
        self.push(new)

    def _drop_removed(self):
        while self.h and self.h[0][2] is self._REMOVED:
            heapq.heappop(self.h)

    def pop(self):
        self._drop_removed()
        x = heapq.heappop(self.h)[2]
        del self._entries[id(x)]
        self._live -= 1
        return x

    def __len__(self): return self._live

    def __iter__(self):
        return (e[2] for e in sorted(self.h) if e[2] is not self._REMOVED)

    def peek(self):
        self._drop_removed()
        return self.h[0][2]
