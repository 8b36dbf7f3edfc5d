# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..rules import (
    EvalContext,
    Rule,
    blank_rule,
    broken_refs_rule,
    build_result,
    evaluate_rules,
    name_is,
    name_missing,
    pass_rule,
    prepare,
    punctuation_rule,
    resolve_locator,
    title_only_rule,
)
from ..text import is_generic_label
from ..types import EvaluationResult, Verdict

if TYPE_CHECKING:
    from ..dom import Element
    from ..locator import Locator


UNKNOWN_PERCENT = "Unknown"


def _number(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _attr_number(element: "Element", *names: str) -> float | None:
    for name in names:
        value = _number(element.get(name))
        if value is not None:
            return value
    return None


def _percent(ratio: float) -> str:
    # Half-up rounding, so 62.5 reads as 63%.
    return f"{math.floor(ratio * 100 + 0.5)}%"


def progress_percent(element: "Element") -> str:
    value = _attr_number(element, "value", "aria-valuenow")
    if value is None:
        return UNKNOWN_PERCENT
    maximum = _attr_number(element, "max", "aria-valuemax")
    if maximum is None:
        maximum = 100.0
    if maximum <= 0:
        return UNKNOWN_PERCENT
    return _percent(value / maximum)


def meter_percent(element: "Element") -> str:
    value = _attr_number(element, "value", "aria-valuenow")
    if value is None:
        return UNKNOWN_PERCENT
    minimum = _attr_number(element, "min", "aria-valuemin")
    maximum = _attr_number(element, "max", "aria-valuemax")
    minimum = 0.0 if minimum is None else minimum
    maximum = 1.0 if maximum is None else maximum
    if maximum <= minimum:
        return UNKNOWN_PERCENT
    return _percent((value - minimum) / (maximum - minimum))


def _percent_note(ctx: EvalContext) -> str:
    return f"Current value: {ctx.facts['percent']}."


def _range_rules(noun: str) -> list[Rule]:
    return [
        broken_refs_rule(),
        Rule(
            name_missing,
            Verdict.FAIL,
            lambda ctx: f"{ctx.element_type} is missing an accessible name - Users hear a value with no context",
            lambda ctx: f"{_percent_note(ctx)} Screen readers announce the value of a {noun} but not what it "
            "measures. Add a <label>, aria-label, or aria-labelledby.",
        ),
        blank_rule(detail=lambda ctx: f"{_percent_note(ctx)} Provide descriptive text for the {noun} name."),
        punctuation_rule(),
        Rule(
            name_is(is_generic_label),
            Verdict.WARN,
            lambda ctx: f'{ctx.element_type} has a generic accessible name "{ctx.name}"',
            lambda ctx: f"{_percent_note(ctx)} Describe what the {noun} measures.",
        ),
        title_only_rule(),
        Rule(
            lambda ctx: bool(ctx.annotations.name_source_is_wrapping_label),
            Verdict.WARN,
            lambda ctx: f"{ctx.element_type} is labelled by a wrapping label - "
            f"Support for implicit labels on {noun} elements varies between screen readers",
            lambda ctx: f"{_percent_note(ctx)} Use <label for> or aria-labelledby for consistent announcements.",
        ),
        pass_rule(
            lambda ctx: f"{ctx.element_type} has an accessible name",
            _percent_note,
        ),
    ]


_PROGRESS_RULES = _range_rules("progress bar")
_METER_RULES = _range_rules("meter")


def evaluate_progress(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    element_type = "Progress bar" if element.tag_name == "progress" else "ARIA progressbar"
    ctx = prepare(element, element_type, inline_style_check=inline_style_check)
    ctx.facts["percent"] = progress_percent(element)
    outcome = evaluate_rules(_PROGRESS_RULES, ctx)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="progress",
        value=element.get("value") or element.get("aria-valuenow"),
        percentValue=ctx.facts["percent"],
    )


def evaluate_meter(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    element_type = "Meter" if element.tag_name == "meter" else "ARIA meter"
    ctx = prepare(element, element_type, inline_style_check=inline_style_check)
    ctx.facts["percent"] = meter_percent(element)
    outcome = evaluate_rules(_METER_RULES, ctx)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="meter",
        value=element.get("value") or element.get("aria-valuenow"),
        percentValue=ctx.facts["percent"],
    )
