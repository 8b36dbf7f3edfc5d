# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import TYPE_CHECKING

from ..names import BUTTON_INPUT_TYPES, input_type_of, role_of
from ..rules import (
    EvalContext,
    Rule,
    broken_refs_rule,
    build_result,
    evaluate_rules,
    name_blank,
    name_is,
    name_missing,
    name_punctuation,
    pass_rule,
    prepare,
    resolve_locator,
)
from ..text import capitalize_first, is_generic_text, is_icon_only_content
from ..types import EvaluationResult, Verdict

if TYPE_CHECKING:
    from ..dom import Element
    from ..locator import Locator


def button_type(element: "Element") -> str:
    if element.tag_name == "input":
        return f"{capitalize_first(input_type_of(element))} input"
    if element.tag_name != "button" and role_of(element) == "button":
        return "ARIA button"
    return "Button"


def _is_input_button(ctx: EvalContext) -> bool:
    return ctx.element.tag_name == "input" and input_type_of(ctx.element) in BUTTON_INPUT_TYPES


def _missing_message(ctx: EvalContext) -> str:
    element = ctx.element
    if element.select_one("img, svg") is not None:
        return (
            f"{ctx.element_type} contains only an image or icon without a text alternative - "
            "add alt text or aria-label"
        )
    if element.text_content and not element.text_content.strip():
        return f"{ctx.element_type} contains only whitespace - add visible text or aria-label"
    return f"{ctx.element_type} is missing an accessible name - Users cannot tell what it does"


def _icon_text(ctx: EvalContext) -> str:
    if _is_input_button(ctx):
        return (ctx.element.get("value") or "").strip()
    return ctx.name.strip() or ctx.element.text_content.strip()


_BUTTON_RULES = [
    broken_refs_rule(),
    Rule(
        lambda ctx: _is_input_button(ctx) and not ctx.element.has("value") and not ctx.name,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} is missing value attribute which provides its accessible name",
        "Button-type inputs are named by their value attribute. Add a value that describes the action.",
    ),
    Rule(
        lambda ctx: ctx.annotations.aria_label_is_empty,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has empty or whitespace-only accessible name - "
        "aria-label is present but contains no text",
        "An empty aria-label overrides the button's content and leaves it unnamed. "
        "Remove the attribute or give it descriptive text.",
    ),
    Rule(
        lambda ctx: ctx.annotations.aria_label_is_punctuation_only,
        Verdict.FAIL,
        lambda ctx: f'{ctx.element_type} has punctuation-only aria-label "{ctx.name}"',
        "Punctuation is not a meaningful name for an action.",
    ),
    Rule(
        name_missing,
        Verdict.FAIL,
        _missing_message,
        "Buttons need an accessible name so screen reader and voice-control users know what they do.",
    ),
    Rule(
        name_blank,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has empty or whitespace-only accessible name",
        "Provide visible text or an aria-label that describes the action.",
    ),
    Rule(
        lambda ctx: bool(ctx.name) and is_icon_only_content(ctx.element, ctx.name),
        Verdict.FAIL,
        lambda ctx: f'{ctx.element_type} has only an icon ("{_icon_text(ctx)}") - add aria-label with descriptive text',
        "Icon glyphs are announced by their character name, if at all. Add an aria-label or visually hidden text.",
    ),
    Rule(
        name_punctuation,
        Verdict.FAIL,
        lambda ctx: f'{ctx.element_type} has punctuation-only accessible name "{ctx.name}"',
        "Punctuation is not a meaningful name for an action.",
    ),
    Rule(
        name_is(is_generic_text),
        Verdict.WARN,
        lambda ctx: f'{ctx.element_type} text "{ctx.name}" is too generic - Describe the specific action',
        "Generic button text such as \"Submit\" or \"Click here\" does not tell users what will happen.",
    ),
    pass_rule(lambda ctx: f"{ctx.element_type} has an accessible name"),
]


def evaluate_button(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, button_type(element), inline_style_check=inline_style_check)
    outcome = evaluate_rules(_BUTTON_RULES, ctx)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="button",
        value=element.get("value") if element.tag_name == "input" else None,
    )
