from __future__ import annotations

import math
from pathlib import Path
from typing import TYPE_CHECKING

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

from checkbench.reporting.base import Reporter

if TYPE_CHECKING:
    from checkbench.assertions.base import FailureRecord
    from checkbench.benchmark import BenchmarkStats

BENCHMARK_SUITE = "benchmarks"
# Holds the abort marker when a run ends before any group started
RUN_SUITE = "run"


class JUnitReporter(Reporter):
    """Collect run events and write them as ``junit.xml`` when the run closes.

    One suite per group or fixture class, one case per unit. Failure records
    of a unit become the message/text of its ``Failure`` element. Each timed
    callable is one case of the ``benchmarks`` suite; its stats are stored
    as ``bench.<i>.<field>`` properties so names and labels may contain dots.
    An aborted run gets an ``Error`` on the unit in flight and an ``aborted``
    property on every suite.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._suites: dict[str, TestSuite] = {}
        self._current: tuple[str, str] | None = None
        self._records: list[FailureRecord] = []
        self._bench_count = 0
        self._bench_pending: list[tuple[int, str]] = []
        self.written: Path | None = None

    def _suite(self, name: str) -> TestSuite:
        if name not in self._suites:
            self._suites[name] = TestSuite(name)
        return self._suites[name]

    def group_started(self, name, count, kind):
        suite = self._suite(name)
        suite.add_property("kind", kind)

    def test_started(self, group, name, index, count):
        self._current = (group, name)
        self._records = []

    def assertion_failed(self, record):
        self._records.append(record)

    def _close_case(self, duration: float | None, result=None) -> None:
        if self._current is None:
            return
        group, name = self._current
        case = TestCase(name, classname=group, time=duration or 0.0)
        if result is not None:
            case.result = [result]
        self._suite(group).add_testcase(case)
        self._current = None
        self._records = []

    def _failure(self) -> Failure:
        message = self._records[0].message() if self._records else "failed"
        failure = Failure(message)
        failure.text = "\n".join(r.message() for r in self._records)
        return failure

    def test_passed(self, duration):
        self._close_case(duration)

    def test_failed(self, group, name, duration=None):
        self._close_case(duration, self._failure())

    def benchmark_started(self, name):
        self._bench_pending = []

    def benchmark_result(self, name, label, stats: BenchmarkStats):
        suite = self._suite(BENCHMARK_SUITE)
        index = self._bench_count
        self._bench_count += 1
        self._bench_pending.append((index, label))

        suite.add_property(f"bench.{index}.name", name)
        suite.add_property(f"bench.{index}.label", label)
        for stat_name, value in stats.to_dict().items():
            if isinstance(value, float) and math.isinf(value):
                continue
            suite.add_property(f"bench.{index}.{stat_name}", str(value))
        suite.add_testcase(TestCase(label, classname=name, time=stats.total))

    def benchmark_compared(self, name, faster_label):
        suite = self._suite(BENCHMARK_SUITE)
        for index, label in self._bench_pending:
            suite.add_property(
                f"bench.{index}.faster", "true" if label == faster_label else "false"
            )
        self._bench_pending = []

    def run_aborted(self, error):
        reason = f"{type(error).__name__}: {error}"
        if self._current is not None:
            result = Error(reason)
            result.type = type(error).__name__
            if self._records:
                result.text = "\n".join(r.message() for r in self._records)
            self._close_case(None, result)
        if not self._suites:
            self._suite(RUN_SUITE)
        for suite in self._suites.values():
            suite.add_property("aborted", reason)

    def close(self):
        self.write()

    def write(self) -> Path:
        xml = JUnitXml()
        for suite in self._suites.values():
            # add_testcase resets time via update_statistics
            suite.time = sum(case.time or 0.0 for case in suite)
            # append (not +=) keeps properties and time
            xml.append(suite)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        xml.write(str(self.path), pretty=True)
        self.written = self.path
        return self.path
