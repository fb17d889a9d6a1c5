# stepsearch/core/status.py
# The control contract every steppable algorithm honours.
from __future__ import annotations
from enum import Enum
from typing import Dict, Optional, Protocol

from .node import Node


class SearchStatus(str, Enum):
    READY = "READY"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (SearchStatus.COMPLETED, SearchStatus.FAILED)


class SearchAlgorithm(Protocol):
    """
    READY -> RUNNING on the first step(); RUNNING -> COMPLETED | FAILED.
    Terminal states are sticky: step() then returns None and changes nothing.
    """
    name: str
    status: SearchStatus

    def step(self) -> Optional[Node]: ...

    def get_status(self) -> SearchStatus: ...

    def get_tree(self) -> Optional[Node]:
        """Root of the current search tree."""
        ...

    def get_attributes(self) -> Dict[str, object]: ...
