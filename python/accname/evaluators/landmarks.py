# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import TYPE_CHECKING

from ..names import role_of
from ..rules import (
    EvalContext,
    Rule,
    broken_refs_rule,
    build_result,
    evaluate_rules,
    name_is,
    pass_rule,
    prepare,
    resolve_locator,
    title_only_rule,
)
from ..text import capitalize_first, is_punctuation_only, is_whitespace_only, looks_like_filename, looks_like_url
from ..types import EvaluationResult, Verdict

if TYPE_CHECKING:
    from ..dom import Element
    from ..locator import Locator


IMPLICIT_LANDMARKS = {
    "header": "banner",
    "footer": "contentinfo",
    "aside": "complementary",
    "nav": "navigation",
    "main": "main",
    "section": "region",
    "form": "form",
}
LANDMARK_TAGS = {role: tag for tag, role in IMPLICIT_LANDMARKS.items()}
LANDMARK_SELECTOR = ", ".join(
    [
        'form, [role="form"]',
        'header, [role="banner"]',
        'aside, [role="complementary"]',
        'footer, [role="contentinfo"]',
        'main, [role="main"]',
        'nav, [role="navigation"]',
        'section[aria-label], section[aria-labelledby]',
        '[role="region"][aria-label], [role="region"][aria-labelledby]',
        '[role="search"]',
    ]
)
_SINGULAR_OPTIONAL = {"banner", "contentinfo", "main"}
_NAME_REQUIRED = {"region", "form"}


def landmark_type(element: "Element") -> str:
    role = role_of(element)
    if role:
        return role
    return IMPLICIT_LANDMARKS.get(element.tag_name, element.tag_name)


def count_landmarks(element: "Element", kind: str) -> int:
    selector = f'[role="{kind}"]'
    tag = LANDMARK_TAGS.get(kind)
    if tag:
        selector = f"{tag}, {selector}"
    return len(element.document.select(selector))


def _kind(ctx: EvalContext) -> str:
    return ctx.facts["landmark_type"]


def _count(ctx: EvalContext) -> int:
    return ctx.facts["landmark_count"]


def _unnamed(ctx: EvalContext) -> bool:
    return not ctx.name


def _single(ctx: EvalContext, *kinds: str) -> bool:
    return _unnamed(ctx) and _kind(ctx) in kinds and _count(ctx) <= 1


def _is_form(ctx: EvalContext) -> bool:
    return _kind(ctx) == "form"


def _label(ctx: EvalContext) -> str:
    return capitalize_first(_kind(ctx))


def _required_message(ctx: EvalContext) -> str:
    kind = _kind(ctx)
    if kind == "region":
        return "Region landmark needs an accessible name - Sections are only exposed as regions when they are named"
    if kind == "form":
        return "Form landmark needs an accessible name - Forms are only exposed as landmarks when they are named"
    return (
        f"Multiple {kind} landmarks found without an accessible name - "
        "Each one needs a unique name so users can tell them apart"
    )


_LANDMARK_RULES = [
    broken_refs_rule(),
    Rule(
        lambda ctx: _single(ctx, *_SINGULAR_OPTIONAL),
        Verdict.PASS,
        lambda ctx: f"Single {_kind(ctx)} landmark doesn't require an accessible name",
    ),
    Rule(
        lambda ctx: _single(ctx, "navigation"),
        Verdict.WARN,
        "Single navigation landmark should have an accessible name for better user experience",
        "A name such as \"Main\" or \"Primary\" helps screen reader users when more navigation regions are added "
        "later and when landmarks are listed.",
    ),
    Rule(
        lambda ctx: _unnamed(ctx) and (_kind(ctx) in _NAME_REQUIRED or _count(ctx) > 1),
        Verdict.FAIL,
        _required_message,
        "Add aria-label or aria-labelledby that describes the landmark's content.",
    ),
    Rule(
        lambda ctx: is_whitespace_only(ctx.name),
        Verdict.FAIL,
        lambda ctx: f"{_label(ctx)} landmark has empty or whitespace-only accessible name",
        "Provide descriptive text for the landmark name.",
    ),
    Rule(
        _unnamed,
        Verdict.PASS,
        lambda ctx: f"{_label(ctx)} landmark doesn't require an accessible name",
    ),
    Rule(
        lambda ctx: _is_form(ctx) and is_punctuation_only(ctx.name),
        Verdict.FAIL,
        "Form landmark has punctuation-only accessible name",
        "Punctuation does not describe the form.",
    ),
    Rule(
        lambda ctx: _is_form(ctx) and looks_like_filename(ctx.name),
        Verdict.FAIL,
        "Form landmark uses a filename as its accessible name",
        "A file name does not describe the form.",
    ),
    Rule(
        lambda ctx: _is_form(ctx) and looks_like_url(ctx.name),
        Verdict.FAIL,
        "Form landmark uses a URL as its accessible name",
        "A web address does not describe the form.",
    ),
    title_only_rule(lambda ctx: f"{_label(ctx)} landmark uses only the title attribute for its accessible name"),
    pass_rule(lambda ctx: f"{_label(ctx)} landmark has an accessible name"),
]


def evaluate_landmark(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    kind = landmark_type(element)
    ctx = prepare(element, f"{capitalize_first(kind)} landmark", inline_style_check=inline_style_check)
    ctx.facts["landmark_type"] = kind
    ctx.facts["landmark_count"] = count_landmarks(element, kind)
    outcome = evaluate_rules(_LANDMARK_RULES, ctx)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="landmark",
        landmarkType=kind,
        landmarkCount=ctx.facts["landmark_count"],
    )
