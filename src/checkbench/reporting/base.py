"""Reporter interface consumed by the runner.

Every event has a no-op default, so a reporter only overrides what it shows.
One reporter instance covers one run; ``close`` is called when it ends.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from checkbench.assertions.base import FailureRecord
    from checkbench.benchmark import BenchmarkStats
    from checkbench.registry import FailedUnit


class Reporter:
    def group_started(self, name: str, count: int, kind: str) -> None:
        pass

    def test_started(self, group: str, name: str, index: int, count: int) -> None:
        pass

    def test_passed(self, duration: float) -> None:
        pass

    def test_failed(self, group: str, name: str, duration: float | None = None) -> None:
        pass

    def assertion_failed(self, record: FailureRecord) -> None:
        pass

    def benchmarks_started(self, count: int) -> None:
        pass

    def benchmark_started(self, name: str) -> None:
        pass

    def benchmark_result(self, name: str, label: str, stats: BenchmarkStats) -> None:
        pass

    def benchmark_compared(self, name: str, faster_label: str) -> None:
        pass

    def run_summary(self, total_errors: int, failed_units: list[FailedUnit]) -> None:
        pass

    def run_aborted(self, error: BaseException) -> None:
        pass

    def close(self) -> None:
        pass


class MultiReporter(Reporter):
    """Forward every event to each wrapped reporter, in order."""

    def __init__(self, reporters: list[Reporter]):
        self.reporters = list(reporters)

    def group_started(self, name, count, kind):
        for r in self.reporters:
            r.group_started(name, count, kind)

    def test_started(self, group, name, index, count):
        for r in self.reporters:
            r.test_started(group, name, index, count)

    def test_passed(self, duration):
        for r in self.reporters:
            r.test_passed(duration)

    def test_failed(self, group, name, duration=None):
        for r in self.reporters:
            r.test_failed(group, name, duration)

    def assertion_failed(self, record):
        for r in self.reporters:
            r.assertion_failed(record)

    def benchmarks_started(self, count):
        for r in self.reporters:
            r.benchmarks_started(count)

    def benchmark_started(self, name):
        for r in self.reporters:
            r.benchmark_started(name)

    def benchmark_result(self, name, label, stats):
        for r in self.reporters:
            r.benchmark_result(name, label, stats)

    def benchmark_compared(self, name, faster_label):
        for r in self.reporters:
            r.benchmark_compared(name, faster_label)

    def run_summary(self, total_errors, failed_units):
        for r in self.reporters:
            r.run_summary(total_errors, failed_units)

    def run_aborted(self, error):
        for r in self.reporters:
            r.run_aborted(error)

    def close(self):
        for r in self.reporters:
            r.close()
