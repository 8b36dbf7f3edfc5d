# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import TYPE_CHECKING

from ..names import NameSource
from ..rules import (
    EvalContext,
    Rule,
    blank_rule,
    broken_ids_text,
    broken_refs_rule,
    build_result,
    evaluate_rules,
    name_is,
    name_missing,
    pass_rule,
    prepare,
    punctuation_rule,
    resolve_locator,
)
from ..text import is_generic_link_text, is_icon_only_content, looks_like_url
from ..types import EvaluationResult, Verdict

if TYPE_CHECKING:
    from ..dom import Element
    from ..locator import Locator


def _has_image_without_alt(ctx: EvalContext) -> bool:
    for image in ctx.element.select("img"):
        if not (image.get("alt") or "").strip():
            return True
    return False


def _named_by_image(ctx: EvalContext) -> bool:
    return ctx.resolution.source == NameSource.ALT and ctx.element.select_one("img[alt]") is not None


_LINK_RULES = [
    broken_refs_rule(
        "Broken aria-labelledby attribute",
        lambda ctx: f'aria-labelledby references ID(s) that do not exist: "{broken_ids_text(ctx)}". '
        "The link name cannot be computed from missing elements.",
    ),
    Rule(
        lambda ctx: name_missing(ctx) and _has_image_without_alt(ctx),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} contains an image without alt text - The link has no accessible name",
        "When an image is the only content of a link, its alt text becomes the link name. "
        "Add alt text describing the link destination.",
    ),
    Rule(
        name_missing,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type} is missing an accessible name - Users cannot tell where it leads",
        "Links need text content, an image with alt text, aria-label or aria-labelledby.",
    ),
    blank_rule(),
    punctuation_rule("Punctuation-only accessible name"),
    Rule(
        lambda ctx: bool(ctx.name) and is_icon_only_content(ctx.element, ctx.name),
        Verdict.FAIL,
        "Icon-only link",
        lambda ctx: f'The link content "{ctx.name.strip()}" is an icon glyph. Add aria-label or visually hidden text '
        "describing the destination.",
    ),
    Rule(
        name_is(is_generic_link_text),
        Verdict.WARN,
        "Generic link text",
        lambda ctx: f'"{ctx.name.strip()}" does not describe the destination when read out of context, '
        "for example in a screen reader's list of links.",
    ),
    Rule(
        name_is(looks_like_url),
        Verdict.WARN,
        "URL as text",
        "Screen readers read web addresses character by character. Use descriptive link text instead.",
    ),
    pass_rule(
        lambda ctx: f"{ctx.element_type} has an accessible name from image alt text"
        if _named_by_image(ctx)
        else f"{ctx.element_type} has an accessible name"
    ),
]


def evaluate_link(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    element_type = "Link" if element.tag_name == "a" else "ARIA link"
    ctx = prepare(element, element_type, inline_style_check=inline_style_check)
    outcome = evaluate_rules(_LINK_RULES, ctx, keep_detail=True)
    return build_result(ctx, outcome, resolve_locator(locator), category="link", href=element.get("href"))
