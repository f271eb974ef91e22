"""Assertion system: comparators and the non-fatal check engine."""

from checkbench.assertions.base import FailureRecord
from checkbench.assertions.comparators import (
    AlmostEquals,
    Comparator,
    Equals,
    NotEquals,
    almost_equals,
    equals,
    not_equals,
)
from checkbench.assertions.engine import AssertionEngine

__all__ = [
    "AlmostEquals",
    "AssertionEngine",
    "Comparator",
    "Equals",
    "FailureRecord",
    "NotEquals",
    "almost_equals",
    "equals",
    "not_equals",
]
