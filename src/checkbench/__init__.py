"""checkbench: declare tests, fixtures and benchmarks, run them, report.

Typical test module::

    import checkbench
    from checkbench import assert_that, equals

    @checkbench.test("math")
    def add_ok():
        assert_that(2 + 2, equals(4))

Module-level functions act on the active harness (see ``use_harness``).
"""

from __future__ import annotations

from typing import Any, Callable

from checkbench.assertions import (
    AlmostEquals,
    Comparator,
    Equals,
    FailureRecord,
    NotEquals,
    almost_equals,
    equals,
    not_equals,
)
from checkbench.fixture import Fixture, FixtureState
from checkbench.harness import Harness, active_harness, use_harness
from checkbench.runner import RunResult


def test(group: str, name: str | None = None):
    return active_harness().test(group, name)


test.__test__ = False  # type: ignore[attr-defined]


def fixture(test_name: str | None = None):
    return active_harness().fixture(test_name)


def add_test(group: str, name: str, func: Callable[[], Any]) -> None:
    active_harness().register_test(group, name, func)


def add_benchmark(
    name: str,
    first: Callable[[], Any],
    second: Callable[[], Any],
    repetitions: int | None = None,
    first_label: str | None = None,
    second_label: str | None = None,
) -> None:
    active_harness().add_benchmark(
        name,
        first,
        second,
        repetitions=repetitions,
        first_label=first_label,
        second_label=second_label,
    )


def assert_that(actual: Any, comparator: Comparator) -> bool:
    return active_harness().assert_that(actual, comparator)


def check_throws(
    func: Callable[[], Any], exc_type: type[BaseException] = Exception
) -> bool:
    return active_harness().check_throws(func, exc_type)


def check_no_throw(func: Callable[[], Any]) -> bool:
    return active_harness().check_no_throw(func)


def run_all() -> int:
    return active_harness().run_all()


__all__ = [
    "AlmostEquals",
    "Comparator",
    "Equals",
    "FailureRecord",
    "Fixture",
    "FixtureState",
    "Harness",
    "NotEquals",
    "RunResult",
    "active_harness",
    "add_benchmark",
    "add_test",
    "almost_equals",
    "assert_that",
    "check_no_throw",
    "check_throws",
    "equals",
    "fixture",
    "not_equals",
    "run_all",
    "test",
    "use_harness",
]
