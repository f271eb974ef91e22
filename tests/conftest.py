"""Pytest configuration and fixtures."""

import logging

import pytest

from checkbench.harness import Harness
from checkbench.reporting.base import Reporter


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Close handlers the CLI attached to checkbench loggers after each test.

    The logger objects themselves stay registered: library modules hold
    references to their children, so deleting them would detach those
    children from any handler configured later.
    """
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("checkbench"):
            continue
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


class RecordingReporter(Reporter):
    """Keeps every runner event as a tuple, in order."""

    def __init__(self):
        self.events: list[tuple] = []

    def names(self) -> list[str]:
        return [e[0] for e in self.events]

    def of(self, name: str) -> list[tuple]:
        return [e for e in self.events if e[0] == name]

    def group_started(self, name, count, kind):
        self.events.append(("group_started", name, count, kind))

    def test_started(self, group, name, index, count):
        self.events.append(("test_started", group, name, index, count))

    def test_passed(self, duration):
        self.events.append(("test_passed", duration))

    def test_failed(self, group, name, duration=None):
        self.events.append(("test_failed", group, name))

    def assertion_failed(self, record):
        self.events.append(("assertion_failed", record))

    def benchmarks_started(self, count):
        self.events.append(("benchmarks_started", count))

    def benchmark_started(self, name):
        self.events.append(("benchmark_started", name))

    def benchmark_result(self, name, label, stats):
        self.events.append(("benchmark_result", name, label, stats))

    def benchmark_compared(self, name, faster_label):
        self.events.append(("benchmark_compared", name, faster_label))

    def run_summary(self, total_errors, failed_units):
        self.events.append(("run_summary", total_errors, failed_units))

    def run_aborted(self, error):
        self.events.append(("run_aborted", error))


@pytest.fixture
def recorder() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def harness(recorder) -> Harness:
    return Harness(reporter=recorder)
