# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .types import RunError, TestRun, Verdict, verdict_rank

RUN_SCHEMA = "accname.run.v1"
_TAGS = {Verdict.FAIL: "[FAIL]", Verdict.WARN: "[WARN]", Verdict.PASS: "[PASS]"}
_SNIPPET_LIMIT = 120


def _json_dumps(payload: Any, indent: int | None = None) -> str:
    return json.dumps(payload, ensure_ascii=True, indent=indent, default=str)


def run_to_dict(run: TestRun | RunError) -> dict[str, Any]:
    if isinstance(run, RunError):
        return {"schema": RUN_SCHEMA, "ok": False, **run.to_dict()}
    return {"schema": RUN_SCHEMA, "ok": True, **run.to_dict()}


def run_to_json(run: TestRun | RunError, *, indent: int | None = 2) -> str:
    return _json_dumps(run_to_dict(run), indent=indent)


def _snippet(text: str) -> str:
    flat = " ".join(text.split())
    if len(flat) <= _SNIPPET_LIMIT:
        return flat
    return flat[: _SNIPPET_LIMIT - 3] + "..."


def format_text_report(run: TestRun | RunError, *, only: str | None = None) -> str:
    """Human-readable report, one line per result and a closing summary line."""
    if isinstance(run, RunError):
        return f"[error] {run.reason}\n"
    lines = [f"accname report for {run.url or '<document>'} at {run.timestamp}"]
    for result in run.results:
        if only and result.verdict != only:
            continue
        tag = _TAGS.get(result.verdict, result.verdict)
        lines.append(
            f"{tag} {result.css_selector}: {result.description}"
            f" name={result.display_name!r} markup={_snippet(result.markup_snapshot)}"
        )
    counts = run.counts
    lines.append(
        f"total={counts.total} failed={counts.failed} warnings={counts.warned} passed={counts.passed}"
    )
    return "\n".join(lines) + "\n"


def write_report(run: TestRun | RunError, path: str | Path, fmt: str = "json") -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "json":
        path.write_text(run_to_json(run), encoding="utf-8")
    elif fmt == "text":
        path.write_text(format_text_report(run), encoding="utf-8")
    else:
        raise ValueError(f"Unsupported report format {fmt!r}")
    return path


def gate(run: TestRun | RunError, fail_on: str = "fail") -> bool:
    """True when the run passes the gate.

    ``fail_on="fail"`` rejects any failure, ``"warn"`` also rejects warnings,
    ``"never"`` accepts every completed run. A :class:`RunError` never passes.
    """
    mode = str(fail_on or "fail").strip().lower()
    if mode not in {"fail", "warn", "never"}:
        raise ValueError(f"Unsupported gate mode {mode!r}")
    if isinstance(run, RunError):
        return False
    if mode == "never":
        return True
    threshold = verdict_rank(Verdict.FAIL if mode == "fail" else Verdict.WARN)
    return all(verdict_rank(result.verdict) < threshold for result in run.results)
