# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


class Verdict:
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


VERDICTS = (Verdict.PASS, Verdict.WARN, Verdict.FAIL)
_VERDICT_LABELS = {Verdict.PASS: "Pass", Verdict.WARN: "Warning", Verdict.FAIL: "Fail"}


def verdict_rank(verdict: str) -> int:
    return {Verdict.PASS: 0, Verdict.WARN: 1, Verdict.FAIL: 2}.get(verdict, 0)


@dataclass(frozen=True)
class Outcome:
    """A category verdict before the visibility downgrade is applied."""

    verdict: str
    description: str
    detail: str | None = None
    title: str | None = None
    clear_name: bool = False


@dataclass(frozen=True)
class RunOptions:
    categories: tuple[str, ...] | None = None
    inline_style_check: bool = True
    locator: str = "css"


@dataclass(frozen=True)
class EvaluationResult:
    tag: str
    css_selector: str
    markup_snapshot: str
    resolved_name: str
    is_visible: bool
    verdict: str
    description: str
    role: str | None = None
    detail: str | None = None
    title: str | None = None
    overridden_name: str | None = None
    element_type: str | None = None
    category: str | None = None
    broken_reference_ids: tuple[str, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def display_name(self) -> str:
        if self.overridden_name is not None:
            return self.overridden_name
        return self.resolved_name

    @property
    def is_failure(self) -> bool:
        return self.verdict == Verdict.FAIL

    @property
    def is_warning(self) -> bool:
        return self.verdict == Verdict.WARN

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "tagName": self.tag,
            "role": self.role,
            "selector": self.css_selector,
            "outerHTML": self.markup_snapshot,
            "accessibleName": self.display_name,
            "resolvedName": self.resolved_name,
            "isVisible": self.is_visible,
            "result": _VERDICT_LABELS.get(self.verdict, self.verdict),
            "verdict": self.verdict,
            "description": self.description,
            "details": self.detail,
            "title": self.title,
            "elementType": self.element_type,
            "category": self.category,
            "brokenReferenceIds": list(self.broken_reference_ids),
        }
        payload.update(self.extra)
        return payload


@dataclass(frozen=True)
class TestCounts:
    total: int = 0
    failed: int = 0
    warned: int = 0
    passed: int = 0

    __test__ = False

    @classmethod
    def from_results(cls, results: tuple[EvaluationResult, ...]) -> "TestCounts":
        failed = sum(1 for r in results if r.verdict == Verdict.FAIL)
        warned = sum(1 for r in results if r.verdict == Verdict.WARN)
        return cls(total=len(results), failed=failed, warned=warned, passed=len(results) - failed - warned)

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "failed": self.failed,
            "warnings": self.warned,
            "passing": self.passed,
        }


@dataclass(frozen=True)
class TestRun:
    url: str
    timestamp: str
    results: tuple[EvaluationResult, ...] = ()
    counts: TestCounts = field(default_factory=TestCounts)

    __test__ = False

    def failures(self) -> list[EvaluationResult]:
        return [r for r in self.results if r.verdict == Verdict.FAIL]

    def warnings(self) -> list[EvaluationResult]:
        return [r for r in self.results if r.verdict == Verdict.WARN]

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "timestamp": self.timestamp,
            "results": [r.to_dict() for r in self.results],
            "counts": self.counts.to_dict(),
        }


@dataclass(frozen=True)
class RunError:
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.reason}
