from __future__ import annotations

import json

import pytest

from accname.report import RUN_SCHEMA, format_text_report, gate, run_to_dict, write_report
from accname.runner import run_html
from accname.types import RunError


def _now() -> str:
    return "2024-01-01T00:00:00Z"


@pytest.fixture
def failing_run():
    return run_html('<img src="x.png"><button>Save</button>', now=_now)


@pytest.fixture
def warning_run():
    return run_html("<nav></nav>", now=_now)


def test_gate_modes(failing_run, warning_run) -> None:
    assert gate(failing_run) is False
    assert gate(failing_run, "warn") is False
    assert gate(failing_run, "never") is True
    assert gate(warning_run, "fail") is True
    assert gate(warning_run, "warn") is False
    assert gate(RunError("Document is not available"), "never") is False
    with pytest.raises(ValueError, match="Unsupported gate mode"):
        gate(failing_run, "always")


def test_text_report(failing_run) -> None:
    lines = format_text_report(failing_run).splitlines()
    assert lines[0] == "accname report for <document> at 2024-01-01T00:00:00Z"
    assert lines[1].startswith("[FAIL] img: ")
    assert "name='' markup=<img src=\"x.png\"/>" in lines[1]
    assert lines[2].startswith("[PASS] button: Button has an accessible name")
    assert lines[-1] == "total=2 failed=1 warnings=0 passed=1"


def test_text_report_filters_by_verdict(failing_run) -> None:
    text = format_text_report(failing_run, only="pass")
    assert "[FAIL]" not in text
    assert "[PASS]" in text
    assert text.endswith("total=2 failed=1 warnings=0 passed=1\n")


def test_text_report_truncates_long_markup() -> None:
    run = run_html(f'<img src="x.png" data-long="{"a" * 300}">')
    line = format_text_report(run).splitlines()[1]
    assert line.endswith("...")


def test_run_error_report() -> None:
    error = RunError("Document is not available")
    assert format_text_report(error) == "[error] Document is not available\n"
    assert run_to_dict(error) == {"schema": RUN_SCHEMA, "ok": False, "error": "Document is not available"}


def test_write_report(tmp_path, failing_run) -> None:
    json_path = write_report(failing_run, tmp_path / "out" / "report.json")
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["schema"] == RUN_SCHEMA
    assert payload["ok"] is True
    assert payload["counts"]["failed"] == 1

    text_path = write_report(failing_run, tmp_path / "report.txt", "text")
    assert text_path.read_text(encoding="utf-8").startswith("accname report for")

    with pytest.raises(ValueError, match="Unsupported report format"):
        write_report(failing_run, tmp_path / "report.pdf", "pdf")
