"""
timing.py - Per-request stage timing
====================================
Diagnostic breakdown returned under ``time_taken`` in every search response.

Usage:
    timing = RequestTiming()
    with timing.stage("lemmatisation"):
        terms = lexicon.normalize(query)
    timing.as_dict(total_request_ms=...)
"""
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

STAGES = (
    "admission",
    "lemmatisation",
    "initial_database_query",
    "tf_idf_calculation",
    "link_fetching",
    "results_formatting",
    "total_search_function",
)


class RequestTiming:
    """Stage durations for one request, in milliseconds."""

    def __init__(self, start: Optional[float] = None):
        self.start = start if start is not None else time.perf_counter()
        self.stages: Dict[str, float] = {}

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under ``name``."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.record(name, (time.perf_counter() - t0) * 1000)

    def record(self, name: str, elapsed_ms: float):
        self.stages[name] = self.stages.get(name, 0.0) + elapsed_ms

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.start) * 1000

    def as_dict(self, total_request_ms: Optional[float] = None) -> Dict[str, float]:
        """Render every known stage (0 when it did not run) plus the totals."""
        total = self.elapsed_ms() if total_request_ms is None else total_request_ms
        report = {"total_request": round(total, 3)}
        for name in STAGES:
            report[name] = round(self.stages.get(name, 0.0), 3)
        accounted = self.stages.get("total_search_function", 0.0) + self.stages.get("admission", 0.0)
        report["other_operations"] = round(max(0.0, total - accounted), 3)
        return report
