from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from checkbench.assertions.base import FailureRecord
from checkbench.assertions.engine import AssertionEngine
from checkbench.benchmark import BenchmarkResult, time_repeated
from checkbench.fixture import Fixture, lifecycle
from checkbench.registry import FailedUnit, Registry
from checkbench.reporting.base import Reporter

logger = logging.getLogger("checkbench.runner")


@dataclass
class RunResult:
    errors: int = 0
    failures: list[FailureRecord] = field(default_factory=list)
    failed_units: list[FailedUnit] = field(default_factory=list)
    benchmarks: list[BenchmarkResult] = field(default_factory=list)
    aborted: bool = False

    @property
    def passed(self) -> bool:
        return self.errors == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "errors": self.errors,
            "failures": [f.to_dict() for f in self.failures],
            "failed_units": [
                {"kind": u.kind, "group": u.group, "name": u.name}
                for u in self.failed_units
            ],
            "benchmarks": [b.to_dict() for b in self.benchmarks],
            "aborted": self.aborted,
        }


class Runner:
    """Drains a registry: fixtures, then function tests, then benchmarks.

    A unit passes when the error counter is unchanged after it ran. With
    ``isolate`` on, an exception escaping a unit is recorded as one failure
    and the run moves on to the next unit; with it off the exception ends
    the run at the ``run_all`` boundary.
    """

    def __init__(
        self,
        registry: Registry,
        engine: AssertionEngine,
        reporter: Reporter,
        isolate: bool = True,
    ):
        self.registry = registry
        self.engine = engine
        self.reporter = reporter
        self.isolate = isolate
        self.failed_units: list[FailedUnit] = []
        self.benchmark_results: list[BenchmarkResult] = []
        self.aborted = False

    def _record_exception(self, e: Exception) -> None:
        tb = e.__traceback__
        while tb is not None and tb.tb_next is not None:
            tb = tb.tb_next
        file = tb.tb_frame.f_code.co_filename if tb is not None else "<unknown>"
        line = tb.tb_lineno if tb is not None else 0
        logger.debug(
            f"Exception escaped {self.engine.group}::{self.engine.name}",
            exc_info=e,
        )
        self.engine.record_failure(
            f"{type(e).__name__}: {e}", "no exception", file=file, line=line
        )

    def _guarded(self, action: Callable[[], Any]) -> None:
        if not self.isolate:
            action()
            return
        try:
            action()
        except Exception as e:
            self._record_exception(e)

    def _finish_unit(
        self, kind: str, group: str, name: str, errors_before: int, duration: float
    ) -> None:
        if self.engine.errors == errors_before:
            self.reporter.test_passed(duration)
        else:
            self.failed_units.append(FailedUnit(kind=kind, group=group, name=name))
            self.reporter.test_failed(group, name, duration)

    def _run_fixture(self, fixture: Fixture) -> float:
        """Drive one fixture lifecycle, returning the duration of ``run()`` only."""
        duration = 0.0

        def cycle() -> None:
            nonlocal duration
            with lifecycle(fixture):
                start = time.perf_counter()
                try:
                    fixture.run()
                finally:
                    duration = time.perf_counter() - start

        self._guarded(cycle)
        return duration

    def run_fixtures(self) -> None:
        for class_name, fixtures in self.registry.fixtures.items():
            total = len(fixtures)
            self.reporter.group_started(class_name, total, "fixture")
            for index, fixture in enumerate(fixtures, start=1):
                self.reporter.test_started(
                    fixture.class_name, fixture.test_name, index, total
                )
                errors_before = self.engine.errors
                with self.engine.attribute_to(
                    "fixture", fixture.class_name, fixture.test_name
                ):
                    duration = self._run_fixture(fixture)
                self._finish_unit(
                    "fixture",
                    fixture.class_name,
                    fixture.test_name,
                    errors_before,
                    duration,
                )

    def run_functions(self) -> None:
        for group_name, group in self.registry.tests.items():
            total = len(group)
            self.reporter.group_started(group_name, total, "function")
            for index, case in enumerate(group.values(), start=1):
                self.reporter.test_started(group_name, case.name, index, total)
                errors_before = self.engine.errors
                start = time.perf_counter()
                with self.engine.attribute_to("function", group_name, case.name):
                    try:
                        self._guarded(case.func)
                    finally:
                        duration = time.perf_counter() - start
                self._finish_unit(
                    "function", group_name, case.name, errors_before, duration
                )

    def run_benchmarks(self) -> None:
        if not self.registry.benchmarks:
            return

        self.reporter.benchmarks_started(len(self.registry.benchmarks))
        for spec in self.registry.benchmarks:
            self.reporter.benchmark_started(spec.name)
            first = time_repeated(spec.first, spec.repetitions)
            self.reporter.benchmark_result(spec.name, spec.first_label, first)
            second = time_repeated(spec.second, spec.repetitions)
            self.reporter.benchmark_result(spec.name, spec.second_label, second)

            result = BenchmarkResult(
                name=spec.name,
                first_label=spec.first_label,
                first=first,
                second_label=spec.second_label,
                second=second,
            )
            self.benchmark_results.append(result)
            self.reporter.benchmark_compared(spec.name, result.faster_label)

    def run_all(self) -> int:
        """Run everything and return the error count (0 means every check passed)."""
        if self.registry.is_empty():
            logger.debug("Nothing registered; the run only reports its summary")
        logger.debug(
            f"Running {self.registry.fixture_count()} fixture(s), "
            f"{self.registry.test_count()} function test(s), "
            f"{len(self.registry.benchmarks)} benchmark(s)"
        )
        try:
            self.run_fixtures()
            self.run_functions()
            self.run_benchmarks()
            self.reporter.run_summary(self.engine.errors, list(self.failed_units))
        except Exception as e:
            self.aborted = True
            logger.exception(f"Run aborted: {e}")
            self.reporter.run_aborted(e)
        finally:
            self.reporter.close()

        logger.debug(f"Run finished with {self.engine.errors} error(s)")
        return self.engine.errors

    def result(self) -> RunResult:
        return RunResult(
            errors=self.engine.errors,
            failures=list(self.engine.failures),
            failed_units=list(self.failed_units),
            benchmarks=list(self.benchmark_results),
            aborted=self.aborted,
        )
