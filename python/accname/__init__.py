# SPDX-License-Identifier: AGPL-3.0-only
"""Accessible-name computation and per-element pass/warn/fail checks.

The package resolves the accessible name of an element from a static HTML
snapshot (``aria-labelledby``, ``aria-label``, labels, ``alt``, ``title`` and
text content, in that order of precedence), then runs category rule tables
over every matching element of a document and reports one verdict per
element.
"""
from .dom import SoupDocument, SoupElement
from .names import NameResolution, NameSource, ResolutionAnnotations, compute_accessible_name, resolve_accessible_name
from .runner import (
    CATEGORIES,
    CATEGORY_NAMES,
    AccessibleNameWarning,
    debug_element,
    evaluate,
    run_accessibility_test,
    run_file,
    run_html,
)
from .style import StyleWarning
from .tree import find_associated_label, is_hidden, resolve_labelledby_ids, validate_idrefs
from .types import EvaluationResult, RunError, RunOptions, TestCounts, TestRun, Verdict

__all__ = [
    "CATEGORIES",
    "CATEGORY_NAMES",
    "AccessibleNameWarning",
    "EvaluationResult",
    "NameResolution",
    "NameSource",
    "ResolutionAnnotations",
    "RunError",
    "RunOptions",
    "SoupDocument",
    "SoupElement",
    "StyleWarning",
    "TestCounts",
    "TestRun",
    "Verdict",
    "compute_accessible_name",
    "debug_element",
    "evaluate",
    "find_associated_label",
    "is_hidden",
    "resolve_accessible_name",
    "resolve_labelledby_ids",
    "run_accessibility_test",
    "run_file",
    "run_html",
    "validate_idrefs",
]
