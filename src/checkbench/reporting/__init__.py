"""Reporters: sinks for the events the runner emits."""

from checkbench.reporting.base import MultiReporter, Reporter
from checkbench.reporting.console import ConsoleReporter
from checkbench.reporting.junit import JUnitReporter

__all__ = ["ConsoleReporter", "JUnitReporter", "MultiReporter", "Reporter"]
