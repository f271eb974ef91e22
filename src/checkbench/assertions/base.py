"""Base data structures for the assertion system."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any


@dataclass
class FailureRecord:
    """A single failed check, attributed to the unit that was running.

    Attributes:
        group: Group name for function tests, class name for fixtures.
            Empty when the check ran outside any unit.
        name: Test name within the group.
        file: Source file of the failing call-site.
        line: Source line of the failing call-site.
        actual: ``str()`` of the value that was checked.
        expected: Description of the comparator (e.g. "5", "!= 5", "10 +/- 1").
        actual_source: Literal source text of the actual expression, if found.
        expected_source: Literal source text of the expected expression, if found.
        unit_kind: "function", "fixture", or "" outside a unit.
    """

    group: str
    name: str
    file: str
    line: int
    actual: str
    expected: str
    actual_source: str | None = None
    expected_source: str | None = None
    unit_kind: str = ""

    @property
    def qualified_name(self) -> str:
        return f"{self.group}::{self.name}"

    def message(self) -> str:
        checked = self.actual_source or self.actual
        wanted = self.expected_source or self.expected
        return (
            f"{self.file}:{self.line}: check if \"{checked}\" == \"{wanted}\"; "
            f"expected {self.expected}, value is {self.actual}"
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
