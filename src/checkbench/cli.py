from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="checkbench", help="Run checkbench tests and benchmarks")

# POSIX keeps only the low 8 bits of an exit status
MAX_EXIT_CODE = 255


@app.command()
def run(
    targets: list[str] = typer.Argument(
        None, help="Test files (.py) or dotted module names to load"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to checkbench.yaml"
    ),
    output_dir: str | None = typer.Option(
        None, help="Directory for junit.xml, report.html and debug.log"
    ),
    no_isolate: bool = typer.Option(
        False,
        "--no-isolate",
        help="Let an exception escaping a test end the whole run",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    junit: bool | None = typer.Option(
        None, "--junit/--no-junit", help="Write junit.xml to the output directory"
    ),
    html: bool = typer.Option(False, "--html", help="Render report.html after the run"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
):
    """Load test targets, run every test and benchmark, exit with the error count."""
    from pydantic import ValidationError

    from checkbench.config import DEFAULT_CONFIG_NAME, HarnessConfig, load_config
    from checkbench.errors import TargetLoadError
    from checkbench.harness import Harness
    from checkbench.loader import load_targets
    from checkbench.reporting import ConsoleReporter, JUnitReporter, MultiReporter
    from checkbench.verbose import setup_logger

    config_path = Path(config) if config else Path(DEFAULT_CONFIG_NAME)
    try:
        if config is not None or config_path.exists():
            harness_config = load_config(config_path)
        else:
            harness_config = HarnessConfig()
    except (ValueError, ValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    updates: dict = {}
    if targets:
        updates["targets"] = list(targets)
    if output_dir is not None:
        updates["output_dir"] = output_dir
    if no_isolate:
        updates["isolate"] = False
    if no_color:
        updates["color"] = False
    if junit is not None:
        updates["junit"] = junit
    if html:
        updates["html"] = True
    if verbose:
        updates["verbose"] = True
    harness_config = harness_config.model_copy(update=updates)

    if not harness_config.targets:
        typer.echo("Error: no test targets given", err=True)
        raise typer.Exit(1)

    out_dir = Path(harness_config.output_dir)
    logger = setup_logger(out_dir / "debug.log", verbose=harness_config.verbose)

    reporters = [ConsoleReporter(color=harness_config.color)]
    junit_reporter = None
    if harness_config.junit or harness_config.html:
        junit_reporter = JUnitReporter(out_dir / "junit.xml")
        reporters.append(junit_reporter)

    harness = Harness(reporter=MultiReporter(reporters), config=harness_config)
    try:
        load_targets(harness, harness_config.targets)
    except TargetLoadError as e:
        logger.error(str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    errors = harness.run_all()

    if junit_reporter is not None and junit_reporter.written is not None:
        if harness_config.html:
            from checkbench.reporting.html import generate_report

            report_path = generate_report(junit_reporter.written)
            typer.echo(f"Report: {report_path}")
        if harness_config.junit:
            typer.echo(f"JUnit: {junit_reporter.written}")
    if not harness_config.verbose:
        typer.echo(f"Debug log: {out_dir / 'debug.log'}")

    if errors:
        raise typer.Exit(min(errors, MAX_EXIT_CODE))


@app.command()
def report(
    run_dir: str = typer.Argument(help="Directory holding a previous run's junit.xml"),
):
    """Regenerate report.html from a previous run."""
    from checkbench.reporting.html import generate_report

    run_path = Path(run_dir)
    if not run_path.exists() or not (run_path / "junit.xml").exists():
        typer.echo(f"Error: not a valid run directory: {run_dir}", err=True)
        raise typer.Exit(1)

    report_path = generate_report(run_path / "junit.xml")
    typer.echo(f"Report generated: {report_path}")


@app.command()
def init(
    dir: str = typer.Option(
        "checkbench", "--dir", help="Directory to initialize the test project in"
    ),
):
    """Initialize a test project with an example config and test module."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    config_file = project_dir / "checkbench.yaml"
    if config_file.exists():
        typer.echo(f"checkbench.yaml already exists in {dir}, skipping.")
        return

    config_file.write_text("""\
targets:
  - test_example.py
isolate: true
color: true
junit: true
html: false
default_repetitions: 10
output_dir: ${CHECKBENCH_OUTPUT:-checkbench-results}
""")

    (project_dir / "test_example.py").write_text('''\
import checkbench
from checkbench import Fixture, assert_that, equals


@checkbench.test("math")
def add():
    assert_that(2 + 2, equals(4))


class Numbers(Fixture):
    def set_up(self):
        self.values = [3, 1, 2]

    def tear_down(self):
        self.values = None


@checkbench.fixture("sorts")
class SortNumbers(Numbers):
    def run(self):
        assert_that(sorted(self.values), equals([1, 2, 3]))


def _sort_small():
    sorted(range(10, 0, -1))


def _sort_large():
    sorted(range(100_000, 0, -1))


checkbench.add_benchmark("sorting", _sort_small, _sort_large, repetitions=3)
''')

    typer.echo(f"Initialized test project in {dir}:")
    typer.echo("  checkbench.yaml  - example harness config")
    typer.echo("  test_example.py  - example tests, fixture and benchmark")
