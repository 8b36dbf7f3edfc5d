# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import TYPE_CHECKING

from ..rules import (
    Rule,
    blank_rule,
    broken_refs_rule,
    build_result,
    evaluate_rules,
    name_missing,
    pass_rule,
    prepare,
    punctuation_rule,
    resolve_locator,
)
from ..types import EvaluationResult, Verdict

if TYPE_CHECKING:
    from ..dom import Element
    from ..locator import Locator


_SHORT_IFRAME_NAME = 5
IFRAME_HIDDEN_DETAIL = (
    "This iframe is currently hidden (display: none, visibility: hidden, opacity: 0, or zero width and height). "
    "This is reported as a warning rather than an error because the frame is not visible to users, but would "
    "fail accessibility requirements if it becomes visible."
)


_IFRAME_RULES = [
    broken_refs_rule(),
    Rule(
        name_missing,
        Verdict.FAIL,
        "Iframe is missing an accessible name - Add a title attribute describing the embedded content",
        "Screen readers announce frames by their title. Without one, users cannot tell what the frame contains "
        "before entering it.",
    ),
    blank_rule(),
    punctuation_rule(),
    Rule(
        lambda ctx: len(ctx.name.strip()) < _SHORT_IFRAME_NAME,
        Verdict.WARN,
        lambda ctx: f'Iframe has a very short accessible name "{ctx.name.strip()}" - Consider a more descriptive title',
        "A frame title should describe the embedded content, for example \"Store location map\".",
    ),
    pass_rule("Iframe has an accessible name"),
]


def evaluate_iframe(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, "Iframe", inline_style_check=inline_style_check)
    outcome = evaluate_rules(_IFRAME_RULES, ctx, hidden_detail=IFRAME_HIDDEN_DETAIL)
    return build_result(ctx, outcome, resolve_locator(locator), category="iframe", src=element.get("src"))


def media_type(element: "Element") -> str:
    if element.tag_name == "audio":
        return "Audio player"
    if element.tag_name == "video":
        return "Video player"
    return "ARIA video"


_MEDIA_RULES = [
    broken_refs_rule(),
    Rule(
        name_missing,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} is missing an accessible name - Users cannot tell what the media is",
        "Add aria-label, aria-labelledby, or title describing the media content.",
    ),
    blank_rule(),
    pass_rule(lambda ctx: f"{ctx.element_type} has an accessible name"),
]


def evaluate_media(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, media_type(element), inline_style_check=inline_style_check)
    outcome = evaluate_rules(_MEDIA_RULES, ctx)
    return build_result(ctx, outcome, resolve_locator(locator), category="media")
