from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from junitparser import JUnitXml

from checkbench.reporting.junit import BENCHMARK_SUITE, RUN_SUITE

_TIMED_STATS = ("total", "min", "max", "mean")


def _ms(seconds: str) -> float:
    return round(float(seconds) * 1000.0, 3)


def _benchmark_rows(properties: dict[str, str]) -> list[dict]:
    """Fold ``bench.<i>.<field>`` properties back into table rows, in order."""
    rows: dict[int, dict] = {}
    for key, value in properties.items():
        parts = key.split(".", 2)
        if len(parts) != 3 or parts[0] != "bench" or not parts[1].isdigit():
            continue
        _, index, field = parts
        row = rows.setdefault(int(index), {})
        if field in _TIMED_STATS:
            row[f"{field}_ms"] = _ms(value)
        elif field == "faster":
            row["faster"] = value == "true"
        else:
            row[field] = value
    return [rows[i] for i in sorted(rows)]


def generate_report(junit_path: Path) -> Path:
    """Render junit.xml → report.html beside it using the Jinja2 template, return path."""
    junit_path = Path(junit_path)
    report_path = junit_path.parent / "report.html"

    xml = JUnitXml.fromfile(str(junit_path))

    suites = []
    benchmarks: list[dict] = []
    aborted = None
    for suite in xml:
        props = {p.name: p.value for p in suite.properties()}
        aborted = aborted or props.get("aborted")
        if suite.name == RUN_SUITE:
            continue
        if suite.name == BENCHMARK_SUITE:
            benchmarks = _benchmark_rows(props)
            continue
        cases = []
        for case in suite:
            result = None
            if case.result:
                result = {
                    "status": type(case.result[0]).__name__,
                    "message": case.result[0].message or "",
                    "text": case.result[0].text or "",
                }
            cases.append(
                {
                    "name": case.name,
                    "classname": case.classname,
                    "time_ms": round((case.time or 0.0) * 1000.0, 3),
                    "result": result,
                }
            )
        suites.append(
            {
                "name": suite.name,
                "kind": props.get("kind", ""),
                "tests": suite.tests,
                "failures": suite.failures,
                "errors": suite.errors,
                "cases": cases,
            }
        )

    total_tests = sum(s["tests"] for s in suites)
    total_failures = sum(s["failures"] + s["errors"] for s in suites)

    tmpl_dir = Path(__file__).parent / "templates"
    env = Environment(loader=FileSystemLoader(str(tmpl_dir)), autoescape=True)
    template = env.get_template("report.html.j2")

    html = template.render(
        suites=suites,
        benchmarks=benchmarks,
        total_tests=total_tests,
        total_failures=total_failures,
        aborted=aborted,
        run_dir=str(junit_path.parent),
    )
    report_path.write_text(html, encoding="utf-8")
    return report_path
