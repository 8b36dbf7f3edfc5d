# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import TYPE_CHECKING

from ..names import role_of
from ..rules import (
    EvalContext,
    Rule,
    blank_rule,
    broken_ids_text,
    broken_refs_rule,
    build_result,
    evaluate_rules,
    name_missing,
    pass_rule,
    prepare,
    punctuation_rule,
    resolve_locator,
)
from ..text import capitalize_first
from ..tree import has_aria_hidden_content, labelledby_targets_info
from ..types import EvaluationResult, Verdict

if TYPE_CHECKING:
    from ..dom import Element
    from ..locator import Locator


WIDGET_ROLES = (
    "checkbox",
    "combobox",
    "listbox",
    "menu",
    "menuitem",
    "radio",
    "radiogroup",
    "slider",
    "switch",
    "tab",
    "tablist",
    "tabpanel",
    "tree",
    "treeitem",
)
WIDGET_SELECTOR = ", ".join(f'[role="{role}"]' for role in WIDGET_ROLES)
DIALOG_SELECTOR = '[role="dialog"], [role="alertdialog"]'

_GUIDANCE = {
    "checkbox": "Add a <label>, aria-label, or aria-labelledby so users know what they are checking",
    "radio": "Add a <label>, aria-label, or aria-labelledby so users know what the option is",
    "switch": "Add aria-label or aria-labelledby so users know what the switch turns on or off",
    "combobox": "Add aria-label or aria-labelledby that describes the value being chosen",
    "textbox": "Add aria-label or aria-labelledby that describes the value being entered",
    "listbox": "Add aria-label or aria-labelledby that describes the list of options",
    "tab": "Add text content or aria-label describing the panel the tab opens",
    "tabpanel": "Reference the controlling tab with aria-labelledby",
    "menu": "Add aria-label or aria-labelledby describing the menu",
    "menuitem": "Add text content or aria-label describing the action",
}
_DEFAULT_GUIDANCE = "Add aria-label or aria-labelledby so screen reader users can identify the widget"


def _role_label(role: str) -> str:
    return capitalize_first(role) if role else "Widget"


_TABPANEL_PROBLEMS = (
    ("empty-name", "Tabpanel references element with empty accessible name"),
    ("aria-hidden-only", "Tabpanel references element with only aria-hidden content"),
    ("no-name", "Tabpanel references element with no accessible name"),
)


def _tabpanel_problem(ctx: EvalContext) -> str | None:
    if ctx.role != "tabpanel":
        return None
    found = {info["problem"] for info in ctx.facts.get("labelledby_targets", [])}
    for problem, message in _TABPANEL_PROBLEMS:
        if problem in found:
            return message
    return None


_WIDGET_RULES = [
    broken_refs_rule(
        lambda ctx: f'{ctx.element_type} widget has aria-labelledby referencing non-existent IDs: "{broken_ids_text(ctx)}"'
    ),
    Rule(
        name_missing,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} widget is missing an accessible name - "
        + _GUIDANCE.get(ctx.role, _DEFAULT_GUIDANCE),
        "Interactive widgets must expose a name so assistive technology can announce them.",
    ),
    blank_rule(lambda ctx: f"{ctx.element_type} widget has empty or whitespace-only accessible name"),
    punctuation_rule(lambda ctx: f"{ctx.element_type} widget has punctuation-only accessible name"),
    Rule(
        lambda ctx: ctx.role == "tab" and has_aria_hidden_content(ctx.element),
        Verdict.FAIL,
        "Icon-only tab without accessible name",
        "The tab's only content is hidden from assistive technology. Add aria-label or visually hidden text.",
    ),
    Rule(
        lambda ctx: _tabpanel_problem(ctx) is not None,
        Verdict.FAIL,
        lambda ctx: _tabpanel_problem(ctx),
        "The tab panel takes its name from the element it references, and that element does not provide "
        "a usable name. Give the controlling tab a text name.",
        clear_name=True,
    ),
    pass_rule(lambda ctx: f"{ctx.element_type} widget has an accessible name"),
]


def evaluate_aria_widget(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    role = role_of(element)
    ctx = prepare(element, _role_label(role), inline_style_check=inline_style_check)
    if role == "tabpanel":
        ctx.facts["labelledby_targets"] = labelledby_targets_info(element)
    outcome = evaluate_rules(_WIDGET_RULES, ctx)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="aria-widget",
        widgetRole=role,
        hasAriaHiddenContent=has_aria_hidden_content(element),
    )


def _heading_texts(element: "Element") -> list[str]:
    return [h.text_content.strip() for h in element.select('h1, h2, h3, h4, h5, h6, [role="heading"]')]


def _duplicates_heading(ctx: EvalContext) -> bool:
    aria_label = (ctx.element.get("aria-label") or "").strip()
    return bool(aria_label) and aria_label in _heading_texts(ctx.element)


_DIALOG_RULES = [
    broken_refs_rule(
        "Dialog has broken aria-labelledby references",
        lambda ctx: f'aria-labelledby references ID(s) that do not exist: "{broken_ids_text(ctx)}".',
    ),
    Rule(
        name_missing,
        Verdict.FAIL,
        "Dialog missing accessible name",
        "Dialogs need a name that is announced when focus moves into them. "
        "Point aria-labelledby at the dialog's heading.",
    ),
    blank_rule("Dialog has empty or whitespace-only accessible name"),
    punctuation_rule("Dialog has punctuation-only accessible name"),
    Rule(
        _duplicates_heading,
        Verdict.WARN,
        "Dialog has redundant accessible name",
        "The aria-label repeats the text of the dialog's heading. Use aria-labelledby pointing at the heading "
        "instead of duplicating it.",
    ),
    pass_rule("Dialog has appropriate accessible name"),
]


def evaluate_dialog(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, "Dialog", inline_style_check=inline_style_check)
    outcome = evaluate_rules(_DIALOG_RULES, ctx, keep_detail=True)
    return build_result(ctx, outcome, resolve_locator(locator), category="dialog")
