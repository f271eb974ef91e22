"""Non-fatal assertion checks.

A failing check appends a ``FailureRecord``, bumps the error counter by one
and returns False. It never raises, so the test body keeps running.
"""

from __future__ import annotations

import ast
import linecache
import logging
import sys
from contextlib import contextmanager
from types import FrameType
from typing import Any, Callable, Iterator

from checkbench.assertions.base import FailureRecord
from checkbench.assertions.comparators import Comparator

logger = logging.getLogger("checkbench.assertions")

_CHECK_NAMES = {"assert_that", "check_throws", "check_no_throw"}


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == "checkbench" or module.startswith("checkbench.")


def _caller_frame() -> FrameType | None:
    """First frame on the stack outside the checkbench package."""
    frame = sys._getframe(1)
    while frame is not None and _is_internal(frame):
        frame = frame.f_back
    return frame


def _argument_sources(filename: str, lineno: int) -> list[str]:
    """Literal source text of the check call's arguments on ``lineno``.

    Only single-line calls are recognised; anything else yields an empty list
    and the failure record falls back to rendered values.
    """
    source = linecache.getline(filename, lineno).strip()
    if not source:
        return []
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        func = node.func
        name = func.attr if isinstance(func, ast.Attribute) else getattr(func, "id", "")
        if name in _CHECK_NAMES:
            return [ast.get_source_segment(source, arg) or "" for arg in node.args]
    return []


class AssertionEngine:
    """Owns the error counter and the failure list for one harness."""

    def __init__(self) -> None:
        self.errors = 0
        self.failures: list[FailureRecord] = []
        self.unit_kind = ""
        self.group = ""
        self.name = ""
        self.on_failure: Callable[[FailureRecord], None] | None = None

    @contextmanager
    def attribute_to(self, unit_kind: str, group: str, name: str) -> Iterator[None]:
        """Attribute checks made inside the block to the given unit."""
        previous = (self.unit_kind, self.group, self.name)
        self.unit_kind, self.group, self.name = unit_kind, group, name
        try:
            yield
        finally:
            self.unit_kind, self.group, self.name = previous

    def record_failure(
        self,
        actual: str,
        expected: str,
        file: str = "<unknown>",
        line: int = 0,
        actual_source: str | None = None,
        expected_source: str | None = None,
    ) -> FailureRecord:
        record = FailureRecord(
            group=self.group,
            name=self.name,
            file=file,
            line=line,
            actual=actual,
            expected=expected,
            actual_source=actual_source,
            expected_source=expected_source,
            unit_kind=self.unit_kind,
        )
        self.failures.append(record)
        self.errors += 1
        logger.debug(f"Check failed in {record.qualified_name}: {record.message()}")
        if self.on_failure is not None:
            self.on_failure(record)
        return record

    def _record_at_call_site(self, actual: str, expected: str) -> FailureRecord:
        frame = _caller_frame()
        if frame is None:
            return self.record_failure(actual, expected)
        file, line = frame.f_code.co_filename, frame.f_lineno
        sources = _argument_sources(file, line)
        return self.record_failure(
            actual,
            expected,
            file=file,
            line=line,
            actual_source=sources[0] if len(sources) > 0 else None,
            expected_source=sources[1] if len(sources) > 1 else None,
        )

    def assert_that(self, actual: Any, comparator: Comparator) -> bool:
        if comparator.run(actual):
            return True
        self._record_at_call_site(str(actual), comparator.describe())
        return False

    def check_throws(
        self,
        func: Callable[[], Any],
        exc_type: type[BaseException] = Exception,
    ) -> bool:
        """Pass when calling ``func`` raises ``exc_type``."""
        try:
            func()
        except exc_type:
            return True
        except Exception as e:
            self._record_at_call_site(
                f"{type(e).__name__}: {e}", f"raises {exc_type.__name__}"
            )
            return False
        self._record_at_call_site("no exception", f"raises {exc_type.__name__}")
        return False

    def check_no_throw(self, func: Callable[[], Any]) -> bool:
        """Pass when calling ``func`` returns normally."""
        try:
            func()
        except Exception as e:
            self._record_at_call_site(f"{type(e).__name__}: {e}", "no exception")
            return False
        return True
