"""The harness: one explicit object owning registries, counter and reporter.

Several harnesses can coexist. Module-level declarations go to the *active*
harness, which ``use_harness`` swaps while test modules are imported.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from checkbench.assertions.base import FailureRecord
from checkbench.assertions.comparators import Comparator
from checkbench.assertions.engine import AssertionEngine
from checkbench.config import HarnessConfig
from checkbench.fixture import Fixture, fixture_class_name
from checkbench.registry import BenchmarkSpec, Registry, TestCase
from checkbench.reporting.base import Reporter
from checkbench.reporting.console import ConsoleReporter
from checkbench.runner import RunResult, Runner

F = TypeVar("F", bound=Callable[..., Any])
FixtureT = TypeVar("FixtureT", bound=type[Fixture])


class Harness:
    def __init__(
        self,
        reporter: Reporter | None = None,
        config: HarnessConfig | None = None,
    ):
        self.config = config or HarnessConfig()
        self.registry = Registry()
        self.engine = AssertionEngine()
        self.reporter = (
            reporter if reporter is not None else ConsoleReporter(color=self.config.color)
        )
        self.engine.on_failure = self.reporter.assertion_failed
        self.runner = Runner(
            registry=self.registry,
            engine=self.engine,
            reporter=self.reporter,
            isolate=self.config.isolate,
        )

    @property
    def errors(self) -> int:
        return self.engine.errors

    @property
    def failures(self) -> list[FailureRecord]:
        return self.engine.failures

    # --- registration ---

    def register_test(self, group: str, name: str, func: Callable[[], Any]) -> TestCase:
        return self.registry.register_test(group, name, func)

    def test(self, group: str, name: str | None = None) -> Callable[[F], F]:
        """Register the decorated zero-argument function under ``group``."""

        def decorator(func: F) -> F:
            self.register_test(group, name or func.__name__, func)
            return func

        return decorator

    def register_fixture(
        self, class_name: str, test_name: str, fixture_cls: type[Fixture]
    ) -> Fixture | None:
        return self.registry.register_fixture(class_name, test_name, fixture_cls)

    def fixture(self, test_name: str | None = None) -> Callable[[FixtureT], FixtureT]:
        """Register the decorated ``Fixture`` subclass as one fixture test."""

        def decorator(cls: FixtureT) -> FixtureT:
            self.register_fixture(
                fixture_class_name(cls), test_name or cls.__name__, cls
            )
            return cls

        return decorator

    def register_benchmark(
        self,
        name: str,
        repetitions: int,
        first: Callable[[], Any],
        first_label: str,
        second: Callable[[], Any],
        second_label: str,
    ) -> BenchmarkSpec:
        return self.registry.register_benchmark(
            name, repetitions, first, first_label, second, second_label
        )

    def add_benchmark(
        self,
        name: str,
        first: Callable[[], Any],
        second: Callable[[], Any],
        repetitions: int | None = None,
        first_label: str | None = None,
        second_label: str | None = None,
    ) -> BenchmarkSpec:
        """Keyword-friendly ``register_benchmark``; labels default to function names."""
        return self.register_benchmark(
            name,
            self.config.default_repetitions if repetitions is None else repetitions,
            first,
            first_label or getattr(first, "__name__", "first"),
            second,
            second_label or getattr(second, "__name__", "second"),
        )

    # --- checks ---

    def assert_that(self, actual: Any, comparator: Comparator) -> bool:
        return self.engine.assert_that(actual, comparator)

    def check_throws(
        self, func: Callable[[], Any], exc_type: type[BaseException] = Exception
    ) -> bool:
        return self.engine.check_throws(func, exc_type)

    def check_no_throw(self, func: Callable[[], Any]) -> bool:
        return self.engine.check_no_throw(func)

    # --- running ---

    # Module-level checks inside test bodies must reach this harness, so it is
    # active while it runs

    def run_fixtures(self) -> None:
        with use_harness(self):
            self.runner.run_fixtures()

    def run_functions(self) -> None:
        with use_harness(self):
            self.runner.run_functions()

    def run_benchmarks(self) -> None:
        with use_harness(self):
            self.runner.run_benchmarks()

    def run_all(self) -> int:
        with use_harness(self):
            return self.runner.run_all()

    def result(self) -> RunResult:
        return self.runner.result()


_active: Harness | None = None


def active_harness() -> Harness:
    """The harness module-level declarations target, created on first use."""
    global _active
    if _active is None:
        _active = Harness()
    return _active


@contextmanager
def use_harness(harness: Harness) -> Iterator[Harness]:
    global _active
    previous = _active
    _active = harness
    try:
        yield harness
    finally:
        _active = previous
