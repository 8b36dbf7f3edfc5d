# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import TYPE_CHECKING

from ..names import input_type_of, role_of
from ..rules import (
    EvalContext,
    Rule,
    apply_visibility,
    blank_rule,
    broken_refs_rule,
    build_result,
    evaluate_rules,
    first_match,
    name_blank,
    name_is,
    name_missing,
    pass_rule,
    prepare,
    punctuation_rule,
    resolve_locator,
    title_only_rule,
)
from ..text import is_generic_label, is_punctuation_only, looks_like_filename, looks_like_url
from ..tree import has_implicit_label_parent
from ..types import EvaluationResult, Outcome, Verdict

if TYPE_CHECKING:
    from ..dom import Element
    from ..locator import Locator


def form_control_type(element: "Element") -> str:
    role = role_of(element)
    if role == "textbox":
        return "ARIA textbox"
    tag = element.tag_name
    if tag == "textarea":
        return "Textarea"
    if tag == "select":
        return "Select"
    return "Input"


def _has_placeholder(ctx: EvalContext) -> bool:
    return ctx.element.tag_name == "input" and ctx.element.has("placeholder")


_FORM_CONTROL_RULES = [
    broken_refs_rule(),
    Rule(
        lambda ctx: name_missing(ctx) and _has_placeholder(ctx),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has placeholder but no accessible name - "
        "Placeholder text is not a substitute for a label",
        "Placeholder text disappears as soon as the user types and is not reliably announced as a label. "
        "Add a <label> element, aria-label, or aria-labelledby.",
    ),
    Rule(
        name_missing,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} is missing an accessible name - Users cannot identify its purpose",
        "Form fields need a programmatic label so screen reader users know what to enter. "
        "Associate a <label for> with the field's id, or use aria-label / aria-labelledby.",
    ),
    blank_rule(),
    punctuation_rule(),
    Rule(
        name_is(is_generic_label),
        Verdict.FAIL,
        lambda ctx: f'{ctx.element_type} has a generic accessible name "{ctx.name}" - Does not describe the expected input',
        "Labels such as \"text\", \"field\" or \"input\" do not tell users what information is required.",
    ),
    Rule(
        name_is(looks_like_filename),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} uses a filename as its accessible name",
        "A file name does not describe the field. Provide a descriptive label.",
    ),
    Rule(
        name_is(looks_like_url),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} uses a URL as its accessible name",
        "A web address does not describe the field. Provide a descriptive label.",
    ),
    title_only_rule(),
    Rule(
        lambda ctx: has_implicit_label_parent(ctx.element),
        Verdict.WARN,
        lambda ctx: f"{ctx.element_type} uses implicit label (nested within label element) - "
        "Some voice-control software cannot target implicitly labelled fields",
        "Wrapping a field in a <label> works in most screen readers, but an explicit <label for> association "
        "is more robust across voice-control software and older assistive technology.",
    ),
    pass_rule(lambda ctx: f"{ctx.element_type} has an accessible name"),
]


def _form_control_outcome(ctx: EvalContext) -> Outcome:
    return first_match(_FORM_CONTROL_RULES, ctx)


def evaluate_form_control(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, form_control_type(element), inline_style_check=inline_style_check)
    outcome = apply_visibility(_form_control_outcome(ctx), ctx.visible)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="form-control",
        inputType=input_type_of(element) if element.tag_name == "input" else None,
        placeholder=element.get("placeholder"),
    )


_RADIO_GROUP_FAIL = Outcome(
    Verdict.FAIL,
    "Radio button is not contained within a fieldset or role=radiogroup - "
    "Radio buttons need a grouping context so users understand the set of choices",
    "Wrap related radio buttons in a <fieldset> with a <legend>, or in an element with role=\"radiogroup\" "
    "and an accessible name, so the question is announced together with each option.",
)


def evaluate_radio_button(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, "Radio button", inline_style_check=inline_style_check)
    outcome = _form_control_outcome(ctx)
    group = element.closest('fieldset, [role="radiogroup"]')
    if outcome.verdict != Verdict.FAIL and group is None:
        outcome = _RADIO_GROUP_FAIL
    return build_result(
        ctx,
        apply_visibility(outcome, ctx.visible),
        resolve_locator(locator),
        category="radio",
        inGroup=group is not None,
        groupName=element.get("name"),
    )


def _options(element: "Element") -> list["Element"]:
    return element.select("option")


def _first_option_empty(ctx: EvalContext) -> bool:
    options = _options(ctx.element)
    return bool(options) and not options[0].text_content.strip()


def _has_whitespace_option(ctx: EvalContext) -> bool:
    for option in _options(ctx.element):
        text = option.text_content
        if text and not text.strip():
            return True
    return False


_SELECT_OPTION_RULES = [
    Rule(
        _first_option_empty,
        Verdict.FAIL,
        "Select has an empty first option - Screen readers announce a blank choice",
        "Give the first option visible text such as \"Choose a country\" instead of leaving it empty.",
    ),
    Rule(
        _has_whitespace_option,
        Verdict.FAIL,
        "Select has an option with only whitespace characters - Screen readers announce a blank choice",
        "Every option needs text that describes the choice.",
    ),
]


def evaluate_select(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, "Select", inline_style_check=inline_style_check)
    outcome = _form_control_outcome(ctx)
    if outcome.verdict != Verdict.FAIL:
        outcome = first_match(_SELECT_OPTION_RULES, ctx) or outcome
    return build_result(
        ctx,
        apply_visibility(outcome, ctx.visible),
        resolve_locator(locator),
        category="select",
        optionCount=len(_options(element)),
    )


def _legend(element: "Element") -> "Element | None":
    return element.select_one("legend")


def _legend_is_first(ctx: EvalContext) -> bool:
    legend = _legend(ctx.element)
    return legend is not None and legend == ctx.element.first_element_child


def _aria_label_attr(ctx: EvalContext) -> str | None:
    return ctx.element.get("aria-label")


def _group_type(element: "Element") -> str:
    return "Fieldset" if element.tag_name == "fieldset" else "Group"


def _labelledby_resolved_empty(ctx: EvalContext) -> bool:
    return ctx.element.has("aria-labelledby") and not ctx.broken_ids and not ctx.name.strip()


def _redundant_legend_attr(ctx: EvalContext) -> str:
    return "aria-labelledby" if ctx.element.has("aria-labelledby") else "aria-label"


_FIELDSET_RULES = [
    Rule(
        lambda ctx: _legend(ctx.element) is not None and not _legend_is_first(ctx),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has a legend that is not its first child - "
        "The legend will not be used as the group's accessible name",
        "The <legend> must be the first child of the <fieldset> to name the group.",
    ),
    broken_refs_rule(),
    Rule(
        _labelledby_resolved_empty,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has aria-labelledby referencing elements with empty content",
        "The referenced elements exist but contain no text, so the group has no name.",
    ),
    Rule(
        lambda ctx: _legend_is_first(ctx)
        and bool(_legend(ctx.element).text_content.strip())
        and (ctx.element.has("aria-label") or ctx.element.has("aria-labelledby")),
        Verdict.WARN,
        lambda ctx: f"{ctx.element_type} has both legend and {_redundant_legend_attr(ctx)} - "
        "This creates redundant announcements",
        "Use the <legend> alone to name the group. The ARIA attribute is ignored in favour of the legend "
        "by some screen readers and announced twice by others.",
    ),
    Rule(
        lambda ctx: _aria_label_attr(ctx) is not None and not _aria_label_attr(ctx).strip(),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has empty or whitespace-only aria-label",
        "An empty aria-label gives the group no name. Remove it or provide descriptive text.",
    ),
    Rule(
        lambda ctx: is_punctuation_only(_aria_label_attr(ctx)),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has punctuation-only aria-label",
        "Punctuation does not describe the group.",
    ),
    Rule(
        lambda ctx: _legend(ctx.element) is not None and not _legend(ctx.element).text_content.strip(),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has an empty legend",
        "The <legend> contains no text, so the group has no name.",
    ),
    Rule(
        name_missing,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} is missing an accessible name - Add a legend or aria-label",
        "Groups of related controls need a name so users understand the question the controls answer.",
    ),
    blank_rule(),
    punctuation_rule(),
    Rule(
        name_is(looks_like_filename),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} uses a filename as its accessible name",
        "A file name does not describe the group.",
    ),
    Rule(
        name_is(looks_like_url),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} uses a URL as its accessible name",
        "A web address does not describe the group.",
    ),
    title_only_rule(),
    pass_rule(lambda ctx: f"{ctx.element_type} has a proper accessible name"),
]


def evaluate_fieldset(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, _group_type(element), inline_style_check=inline_style_check)
    outcome = evaluate_rules(_FIELDSET_RULES, ctx)
    legend = _legend(element)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="fieldset",
        hasLegend=legend is not None,
        legendIsFirstChild=_legend_is_first(ctx),
    )


_FORM_RULES = [
    broken_refs_rule(),
    Rule(
        _labelledby_resolved_empty,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has aria-labelledby referencing elements with empty content",
        "The referenced elements exist but contain no text, so the form has no name.",
    ),
    Rule(
        lambda ctx: ctx.annotations.aria_label_is_empty,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has empty or whitespace-only aria-label",
        "An empty aria-label gives the form no name. Remove it or provide descriptive text.",
    ),
    Rule(
        lambda ctx: ctx.annotations.aria_label_is_punctuation_only,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} has punctuation-only aria-label",
        "Punctuation does not describe the form.",
    ),
    Rule(
        name_missing,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} is missing an accessible name - "
        "Forms are only exposed as landmarks when they are named",
        "Give the form an aria-label or aria-labelledby that describes its purpose, for example \"Newsletter signup\".",
    ),
    blank_rule(),
    punctuation_rule(),
    Rule(
        name_is(looks_like_filename),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} uses a filename as its accessible name",
        "A file name does not describe the form.",
    ),
    Rule(
        name_is(looks_like_url),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} uses a URL as its accessible name",
        "A web address does not describe the form.",
    ),
    title_only_rule(),
    pass_rule(lambda ctx: f"{ctx.element_type} has an accessible name"),
]


def evaluate_form(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    element_type = "Form" if element.tag_name == "form" else 'Element with role="form"'
    ctx = prepare(element, element_type, inline_style_check=inline_style_check)
    outcome = evaluate_rules(_FORM_RULES, ctx)
    return build_result(ctx, outcome, resolve_locator(locator), category="form")
