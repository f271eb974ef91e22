from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from checkbench.fixture import Fixture

logger = logging.getLogger("checkbench.registry")

GroupName = str
TestName = str


@dataclass(frozen=True)
class TestCase:
    group: str
    name: str
    func: Callable[[], Any]

    __test__ = False  # keep pytest from collecting this class


@dataclass(frozen=True)
class BenchmarkSpec:
    name: str
    first: Callable[[], Any]
    first_label: str
    second: Callable[[], Any]
    second_label: str
    repetitions: int


@dataclass(frozen=True)
class FailedUnit:
    kind: str
    group: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.group}::{self.name}"


class Registry:
    """Everything declared for one harness, in declaration order.

    Groups and fixture classes are visited in insertion order, and so are
    the units inside each of them.
    """

    def __init__(self) -> None:
        self.tests: dict[GroupName, dict[TestName, TestCase]] = {}
        self.fixtures: dict[GroupName, list[Fixture]] = {}
        self.benchmarks: list[BenchmarkSpec] = []

    def register_test(self, group: str, name: str, func: Callable[[], Any]) -> TestCase:
        case = TestCase(group=group, name=name, func=func)
        self.tests.setdefault(group, {})[name] = case
        return case

    def register_fixture(
        self, class_name: str, test_name: str, fixture_cls: type[Fixture]
    ) -> Fixture | None:
        try:
            instance = fixture_cls()
        except Exception as e:
            logger.error(
                f"Could not construct fixture {class_name}::{test_name}, skipping it: {e}"
            )
            return None
        instance.class_name = class_name
        instance.test_name = test_name
        self.fixtures.setdefault(class_name, []).append(instance)
        return instance

    def register_benchmark(
        self,
        name: str,
        repetitions: int,
        first: Callable[[], Any],
        first_label: str,
        second: Callable[[], Any],
        second_label: str,
    ) -> BenchmarkSpec:
        spec = BenchmarkSpec(
            name=name,
            first=first,
            first_label=first_label,
            second=second,
            second_label=second_label,
            repetitions=repetitions,
        )
        self.benchmarks.append(spec)
        return spec

    def test_count(self) -> int:
        return sum(len(group) for group in self.tests.values())

    def fixture_count(self) -> int:
        return sum(len(group) for group in self.fixtures.values())

    def is_empty(self) -> bool:
        return not (self.tests or self.fixtures or self.benchmarks)
