from __future__ import annotations

import math
import time
from dataclasses import dataclass, asdict
from typing import Any, Callable

import numpy as np


@dataclass
class BenchmarkStats:
    """Wall-clock timings of one callable over a fixed number of repetitions.

    With zero repetitions nothing runs: ``total`` and ``mean`` are 0.0 and
    ``min``/``max`` keep their sentinels (+inf / -inf).
    """

    total: float
    min: float
    max: float
    mean: float
    repetitions: int

    def to_dict(self) -> dict[str, float | int]:
        return asdict(self)


@dataclass
class BenchmarkResult:
    name: str
    first_label: str
    first: BenchmarkStats
    second_label: str
    second: BenchmarkStats

    @property
    def faster_label(self) -> str:
        # Ties go to the first callable
        if self.second.total < self.first.total:
            return self.second_label
        return self.first_label

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "first_label": self.first_label,
            "first": self.first.to_dict(),
            "second_label": self.second_label,
            "second": self.second.to_dict(),
            "faster": self.faster_label,
        }


def function_time(func: Callable[[], Any]) -> float:
    """Seconds it takes ``func`` to run, on the monotonic high-resolution clock."""
    start = time.perf_counter()
    func()
    return time.perf_counter() - start


def compute_stats(durations: list[float]) -> BenchmarkStats:
    if not durations:
        return BenchmarkStats(
            total=0.0, min=math.inf, max=-math.inf, mean=0.0, repetitions=0
        )

    arr = np.array(durations, dtype=float)
    return BenchmarkStats(
        total=float(np.sum(arr)),
        min=float(np.min(arr)),
        max=float(np.max(arr)),
        mean=float(np.mean(arr)),
        repetitions=len(durations),
    )


def time_repeated(func: Callable[[], Any], repetitions: int) -> BenchmarkStats:
    durations = [function_time(func) for _ in range(max(repetitions, 0))]
    return compute_stats(durations)

