"""Colored console output: banners, progress lines and the final summary."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import typer

from checkbench.reporting.base import Reporter

if TYPE_CHECKING:
    from checkbench.assertions.base import FailureRecord
    from checkbench.benchmark import BenchmarkStats
    from checkbench.registry import FailedUnit

MAX_COLUMN = 78


def _ms(seconds: float) -> str:
    return f"{seconds * 1000.0:.3f} ms"


class ConsoleReporter(Reporter):
    def __init__(self, color: bool = True, file: IO[str] | None = None):
        # None lets click decide from the stream (no styling when not a tty)
        self.color = None if color else False
        self.file = file

    def _write(self, text: str, fg: str | None = None, nl: bool = True) -> None:
        typer.secho(text, fg=fg, nl=nl, file=self.file, color=self.color)

    def write_title(self, text: str) -> None:
        """Box ``text`` in a banner ``MAX_COLUMN`` characters wide."""
        border = "+" + "-" * (MAX_COLUMN - 2) + "+"
        padding = " " * max(MAX_COLUMN - 1 - (5 + len(text)), 0)
        self._write(border, fg=typer.colors.GREEN)
        self._write(f"|    {text}{padding}|", fg=typer.colors.GREEN)
        self._write(border, fg=typer.colors.GREEN)

    def group_started(self, name, count, kind):
        self.write_title(f"Running {count} tests grouped in {name}")

    def test_started(self, group, name, index, count):
        self._write("  * Running ", fg=typer.colors.CYAN, nl=False)
        self._write(f"{group}.{name}", fg=typer.colors.YELLOW, nl=False)
        self._write(f" ({index}/{count})", fg=typer.colors.CYAN)

    def test_passed(self, duration):
        self._write(f"       Passed in {_ms(duration)}", fg=typer.colors.GREEN)

    def test_failed(self, group, name, duration=None):
        self._write(f"       Failed {group}.{name}", fg=typer.colors.RED)

    def assertion_failed(self, record: FailureRecord) -> None:
        self._write("\n        ! Error : ", fg=typer.colors.RED)
        self._write("            * file :     ", fg=typer.colors.CYAN, nl=False)
        self._write(record.file, fg=typer.colors.YELLOW)
        self._write("            * line :     ", fg=typer.colors.CYAN, nl=False)
        self._write(str(record.line), fg=typer.colors.MAGENTA)
        if record.actual_source is not None or record.expected_source is not None:
            self._write("            * Check if ", fg=typer.colors.CYAN, nl=False)
            self._write(
                f'"{record.actual_source or record.actual}" ',
                fg=typer.colors.MAGENTA,
                nl=False,
            )
            self._write("== ", fg=typer.colors.MAGENTA, nl=False)
            self._write(
                f'"{record.expected_source or record.expected}"',
                fg=typer.colors.MAGENTA,
            )
        self._write("                * Expected : ", fg=typer.colors.CYAN, nl=False)
        self._write(record.expected, fg=typer.colors.MAGENTA)
        self._write("                * Value is : ", fg=typer.colors.CYAN, nl=False)
        self._write(record.actual, fg=typer.colors.MAGENTA)

    def benchmarks_started(self, count):
        self.write_title("Running benchmarks")

    def benchmark_started(self, name):
        self._write("  * Running ", fg=typer.colors.CYAN, nl=False)
        self._write(name, fg=typer.colors.YELLOW)

    def benchmark_result(self, name, label, stats: BenchmarkStats):
        self._write(f"    * Benchmarking function {label}", fg=typer.colors.GREEN)
        self._write(f"\t* Total Time : {_ms(stats.total)}", fg=typer.colors.MAGENTA)
        self._write(f"\t* Max Time : {_ms(stats.max)}", fg=typer.colors.MAGENTA)
        self._write(f"\t* Min Time : {_ms(stats.min)}", fg=typer.colors.MAGENTA)
        self._write(f"\t* Mean Time : {_ms(stats.mean)}", fg=typer.colors.MAGENTA)

    def benchmark_compared(self, name, faster_label):
        self._write(f"    * {faster_label} was faster", fg=typer.colors.CYAN)

    def run_summary(self, total_errors: int, failed_units: list[FailedUnit]) -> None:
        self.write_title("Results")
        if total_errors == 0:
            self._write("    * Every test passed", fg=typer.colors.GREEN)
            return
        self._write("    Error : Some test failed to pass", fg=typer.colors.RED)
        self._write("    Logging the tests that failed", fg=typer.colors.CYAN)
        for unit in failed_units:
            kind = "Fixture" if unit.kind == "fixture" else "Function"
            self._write(
                f"      * {kind} {unit.qualified_name} failed", fg=typer.colors.RED
            )

    def run_aborted(self, error):
        self._write(
            f"    ! Run aborted: {type(error).__name__}: {error}", fg=typer.colors.RED
        )
