# stepsearch/core/metrics.py
from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional
import time, tracemalloc


@dataclass
class RunSummary:
    algo: str
    problem: str
    status: str
    steps: int
    cost: Optional[float]
    depth: Optional[int]
    time_s: float
    peak_kb: int
    actions: List[str] = field(default_factory=list)
    attributes: Dict[str, object] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status == "COMPLETED"

    def to_row(self) -> Dict[str, object]:
        row = asdict(self)
        row["success"] = self.success
        # attribute listings (frontier labels etc.) are too noisy for a results table
        row["attributes"] = {k: v for k, v in self.attributes.items()
                             if isinstance(v, (int, float, str, bool)) or v is None}
        return row


class MeasuredRun:
    """
    Context manager for timing and (approximate) peak memory of a burst of steps.
    Safe to query .elapsed and .peak_kb *inside* the with-block.
    """
    def __init__(self) -> None:
        self.t0: Optional[float] = None
        self.t1: Optional[float] = None
        self._peak_kb: int = 0
        self._tracing: bool = False

    def __enter__(self) -> "MeasuredRun":
        # nested runs share the outer tracer
        self._tracing = not tracemalloc.is_tracing()
        if self._tracing:
            tracemalloc.start()
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.t1 = time.perf_counter()
        _, peak = tracemalloc.get_traced_memory()
        if self._tracing:
            tracemalloc.stop()
            self._tracing = False
        self._peak_kb = max(self._peak_kb, peak // 1024)
        return False  # don't suppress exceptions

    @property
    def elapsed(self) -> float:
        """Seconds elapsed. Works before and after __exit__."""
        if self.t0 is None:
            return 0.0
        if self.t1 is None:
            return time.perf_counter() - self.t0
        return self.t1 - self.t0

    @property
    def peak_kb(self) -> int:
        if self._tracing:
            _, peak = tracemalloc.get_traced_memory()
            return max(self._peak_kb, peak // 1024)
        return self._peak_kb
