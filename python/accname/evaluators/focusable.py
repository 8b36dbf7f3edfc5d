# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..names import role_of
from ..rules import (
    Rule,
    blank_rule,
    broken_refs_rule,
    build_result,
    evaluate_rules,
    name_missing,
    pass_rule,
    prepare,
    resolve_locator,
)
from ..types import EvaluationResult, Verdict

if TYPE_CHECKING:
    from ..dom import Element
    from ..locator import Locator


NATIVE_INTERACTIVE_TAGS = frozenset({"a", "button", "input", "select", "textarea", "iframe"})
INTERACTIVE_ROLES = frozenset(
    {
        "presentation",
        "none",
        "button",
        "link",
        "checkbox",
        "menuitem",
        "tab",
        "menuitemcheckbox",
        "menuitemradio",
        "radio",
        "switch",
        "textbox",
    }
)
TEXT_CONTAINER_TAGS = frozenset(
    {"h1", "h2", "h3", "h4", "h5", "h6", "li", "dt", "dd", "figure", "figcaption", "p", "div", "span"}
)
TEXT_CONTAINER_ROLES = frozenset({"heading", "listitem"})
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _tabindex(element: "Element") -> int | None:
    match = _LEADING_INT_RE.match(element.get("tabindex") or "")
    return int(match.group(1)) if match else None


def is_tabindex_candidate(element: "Element") -> bool:
    """Whether a focusable element is left to the tabindex check.

    Natively interactive elements, interactive roles and negative tabindex
    values are handled elsewhere or are not in the tab order. Text containers
    that already carry text are named by that text.
    """
    if element.tag_name in NATIVE_INTERACTIVE_TAGS:
        return False
    role = role_of(element)
    if role in INTERACTIVE_ROLES:
        return False
    tabindex = _tabindex(element)
    if tabindex is not None and tabindex < 0:
        return False
    if element.tag_name in TEXT_CONTAINER_TAGS or role in TEXT_CONTAINER_ROLES:
        if element.text_content.strip():
            return False
    return True


def _label(element: "Element") -> str:
    return f"Element with tabindex={(element.get('tabindex') or '').strip()}"


_TABINDEX_RULES = [
    broken_refs_rule(),
    Rule(
        name_missing,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} is missing an accessible name - Keyboard users reach it but hear nothing",
        "Focusable elements must have an accessible name. Add aria-label or aria-labelledby, or give the element "
        "an interactive role and visible text.",
    ),
    blank_rule(),
    pass_rule(lambda ctx: f"{ctx.element_type} has an accessible name"),
]


def evaluate_tabindex_element(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult | None:
    if not is_tabindex_candidate(element):
        return None
    ctx = prepare(element, _label(element), inline_style_check=inline_style_check)
    outcome = evaluate_rules(_TABINDEX_RULES, ctx)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="tabindex",
        tabindex=element.get("tabindex"),
    )
