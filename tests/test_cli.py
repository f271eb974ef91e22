import textwrap

from junitparser import JUnitXml
from typer.testing import CliRunner

from checkbench.cli import app

runner = CliRunner()

PASSING = """\
import checkbench
from checkbench import assert_that, equals


@checkbench.test("math")
def add():
    assert_that(1 + 1, equals(2))
"""

FAILING = """\
import checkbench
from checkbench import assert_that, equals, not_equals


@checkbench.test("math")
def add():
    assert_that(1 + 1, equals(3))


@checkbench.test("math")
def sub():
    assert_that(1 - 1, not_equals(0))
"""


def _target(tmp_path, name, source):
    path = tmp_path / name
    path.write_text(textwrap.dedent(source))
    return str(path)


def test_run_passing_target(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _target(tmp_path, "test_pass.py", PASSING)

    result = runner.invoke(app, ["run", target])

    assert result.exit_code == 0, result.output
    assert "Every test passed" in result.output
    assert (tmp_path / "checkbench-results" / "junit.xml").exists()
    assert (tmp_path / "checkbench-results" / "debug.log").exists()


def test_run_exit_code_is_error_count(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _target(tmp_path, "test_fail.py", FAILING)

    result = runner.invoke(app, ["run", target])

    assert result.exit_code == 2
    assert "Some test failed to pass" in result.output
    assert "Function math::add failed" in result.output
    xml = JUnitXml.fromfile(str(tmp_path / "checkbench-results" / "junit.xml"))
    [suite] = list(xml)
    assert suite.failures == 2


def test_run_exit_code_is_clamped(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _target(
        tmp_path,
        "test_many.py",
        """\
        import checkbench


        @checkbench.test("many")
        def fails_a_lot():
            for i in range(300):
                checkbench.assert_that(i, checkbench.equals(-1))
        """,
    )

    result = runner.invoke(app, ["run", target])

    assert result.exit_code == 255


def test_run_with_html_and_custom_output_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _target(tmp_path, "test_pass.py", PASSING)
    out = tmp_path / "out"

    result = runner.invoke(
        app, ["run", target, "--output-dir", str(out), "--html", "--no-junit"]
    )

    assert result.exit_code == 0, result.output
    assert (out / "report.html").exists()
    assert "Report:" in result.output
    assert "JUnit:" not in result.output


def test_run_without_junit_writes_no_xml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _target(tmp_path, "test_pass.py", PASSING)

    result = runner.invoke(app, ["run", target, "--no-junit"])

    assert result.exit_code == 0
    assert not (tmp_path / "checkbench-results" / "junit.xml").exists()


def test_run_without_targets_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["run"])
    assert result.exit_code == 1
    assert "no test targets given" in result.output


def test_run_missing_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["run", "--config", "nonexistent.yaml"])
    assert result.exit_code != 0


def test_run_broken_target(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _target(tmp_path, "test_broken.py", "import does_not_exist_anywhere\n")

    result = runner.invoke(app, ["run", target])

    assert result.exit_code == 1
    assert "Failed to load test target" in result.output


def test_run_picks_up_config_in_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _target(tmp_path, "test_fail.py", FAILING)
    (tmp_path / "checkbench.yaml").write_text(
        "targets:\n  - test_fail.py\noutput_dir: results\n"
    )

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 2
    assert (tmp_path / "results" / "junit.xml").exists()


def test_init_creates_example_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert (tmp_path / "checkbench" / "checkbench.yaml").exists()
    assert (tmp_path / "checkbench" / "test_example.py").exists()


def test_init_skips_existing_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner.invoke(app, ["init", "--dir", "proj"])
    result = runner.invoke(app, ["init", "--dir", "proj"])
    assert result.exit_code == 0
    assert "already exists" in result.output


def test_init_project_runs_clean(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CHECKBENCH_OUTPUT", raising=False)
    runner.invoke(app, ["init"])

    result = runner.invoke(app, ["run", "--config", "checkbench/checkbench.yaml"])

    assert result.exit_code == 0, result.output
    assert "Running benchmarks" in result.output
    assert (tmp_path / "checkbench" / "checkbench-results" / "junit.xml").exists()


def test_report_regenerates_html(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _target(tmp_path, "test_pass.py", PASSING)
    runner.invoke(app, ["run", target])

    result = runner.invoke(app, ["report", "checkbench-results"])

    assert result.exit_code == 0
    assert (tmp_path / "checkbench-results" / "report.html").exists()


def test_report_missing_dir(tmp_path):
    result = runner.invoke(app, ["report", str(tmp_path / "nonexistent-run-dir")])
    assert result.exit_code != 0
