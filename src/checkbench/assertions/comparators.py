"""Predicate objects used by ``assert_that``."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Comparator(ABC):
    @abstractmethod
    def run(self, actual: Any) -> bool:
        """Return True when ``actual`` satisfies the check."""
        ...

    @abstractmethod
    def describe(self) -> str:
        """Rendered expected value, used in failure records."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()})"


class Equals(Comparator):
    __slots__ = ("expected",)

    def __init__(self, expected: Any):
        object.__setattr__(self, "expected", expected)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def run(self, actual: Any) -> bool:
        return bool(actual == self.expected)

    def describe(self) -> str:
        return str(self.expected)


class NotEquals(Comparator):
    __slots__ = ("expected",)

    def __init__(self, expected: Any):
        object.__setattr__(self, "expected", expected)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def run(self, actual: Any) -> bool:
        return bool(actual != self.expected)

    def describe(self) -> str:
        return f"!= {self.expected}"


class AlmostEquals(Comparator):
    """Passes when ``expected - precision < actual < expected + precision``.

    Both bounds are exclusive: ``AlmostEquals(10, 1)`` rejects 9 and 11.
    """

    __slots__ = ("expected", "precision")

    def __init__(self, expected: Any, precision: Any):
        object.__setattr__(self, "expected", expected)
        object.__setattr__(self, "precision", precision)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def run(self, actual: Any) -> bool:
        return bool(
            self.expected - self.precision < actual < self.expected + self.precision
        )

    def describe(self) -> str:
        return f"{self.expected} +/- {self.precision}"


# Shortcuts so call-sites read ``assert_that(x, equals(4))``
def equals(expected: Any) -> Equals:
    return Equals(expected)


def not_equals(expected: Any) -> NotEquals:
    return NotEquals(expected)


def almost_equals(expected: Any, precision: Any) -> AlmostEquals:
    return AlmostEquals(expected, precision)
