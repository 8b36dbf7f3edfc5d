# SPDX-License-Identifier: AGPL-3.0-only
"""Ordered rule tables shared by the category evaluators.

An evaluator is a list of :class:`Rule` objects tried in order against an
:class:`EvalContext`; the first rule whose predicate holds decides the
:class:`~accname.types.Outcome`. :func:`apply_visibility` then turns a
failure on a hidden element into a warning.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Union

from .locator import CssPathLocator
from .names import NameResolution, resolve_accessible_name, role_of
from .text import is_punctuation_only, is_whitespace_only
from .tree import is_hidden
from .types import EvaluationResult, Outcome, Verdict

if TYPE_CHECKING:
    from .dom import Element
    from .locator import Locator


HIDDEN_SUFFIX = " (hidden element)"
HIDDEN_DETAIL = (
    "This element is currently hidden (display: none, visibility: hidden, or opacity: 0). "
    "This is reported as a warning rather than an error because the element is not visible "
    "to users, but would fail accessibility requirements if it becomes visible."
)


@dataclass
class EvalContext:
    element: "Element"
    resolution: NameResolution
    visible: bool
    element_type: str
    facts: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.resolution.name

    @property
    def annotations(self):
        return self.resolution.annotations

    @property
    def broken_ids(self) -> tuple[str, ...]:
        return self.resolution.annotations.broken_reference_ids

    @property
    def role(self) -> str:
        return role_of(self.element)


Message = Union[str, Callable[[EvalContext], str]]
Predicate = Callable[[EvalContext], bool]


def _render(message: Message | None, ctx: EvalContext) -> str | None:
    if message is None:
        return None
    if callable(message):
        return message(ctx)
    return message


@dataclass(frozen=True)
class Rule:
    when: Predicate
    verdict: str
    message: Message
    detail: Message | None = None
    title: str | None = None
    clear_name: bool = False

    def outcome(self, ctx: EvalContext) -> Outcome:
        return Outcome(
            verdict=self.verdict,
            description=_render(self.message, ctx) or "",
            detail=_render(self.detail, ctx),
            title=self.title,
            clear_name=self.clear_name,
        )


def first_match(rules: Iterable[Rule], ctx: EvalContext) -> Outcome | None:
    for rule in rules:
        if rule.when(ctx):
            return rule.outcome(ctx)
    return None


def apply_visibility(
    outcome: Outcome,
    visible: bool,
    *,
    hidden_detail: str = HIDDEN_DETAIL,
    keep_detail: bool = False,
) -> Outcome:
    """Downgrade a failure on a hidden element to a warning; never upgrade."""
    if visible or outcome.verdict != Verdict.FAIL:
        return outcome
    detail = hidden_detail
    if keep_detail and outcome.detail:
        detail = f"{outcome.detail}\n\n{hidden_detail}"
    return replace(
        outcome,
        verdict=Verdict.WARN,
        description=outcome.description + HIDDEN_SUFFIX,
        detail=detail,
    )


def resolve_locator(locator: "Locator | None") -> "Locator":
    return locator if locator is not None else CssPathLocator()


def prepare(element: "Element", element_type: str, *, inline_style_check: bool = True) -> EvalContext:
    return EvalContext(
        element=element,
        resolution=resolve_accessible_name(element),
        visible=not is_hidden(element, inline_style_check=inline_style_check),
        element_type=element_type,
    )


def build_result(
    ctx: EvalContext,
    outcome: Outcome,
    locator: "Locator",
    *,
    category: str | None = None,
    **extra: Any,
) -> EvaluationResult:
    element = ctx.element
    return EvaluationResult(
        tag=element.tag_name,
        role=element.get("role"),
        css_selector=locator(element),
        markup_snapshot=element.outer_html,
        resolved_name=ctx.name,
        is_visible=ctx.visible,
        verdict=outcome.verdict,
        description=outcome.description,
        detail=outcome.detail,
        title=outcome.title,
        overridden_name="" if outcome.clear_name else None,
        element_type=ctx.element_type,
        category=category,
        broken_reference_ids=ctx.broken_ids,
        extra=dict(extra),
    )


# Shared predicates


def has_broken_refs(ctx: EvalContext) -> bool:
    return bool(ctx.broken_ids)


def name_missing(ctx: EvalContext) -> bool:
    return not ctx.name and not ctx.annotations.aria_label_is_empty


def name_blank(ctx: EvalContext) -> bool:
    return ctx.annotations.aria_label_is_empty or is_whitespace_only(ctx.name)


def name_punctuation(ctx: EvalContext) -> bool:
    return is_punctuation_only(ctx.name)


def name_is(check: Callable[[str], bool]) -> Predicate:
    return lambda ctx: bool(ctx.name) and check(ctx.name)


def title_only(ctx: EvalContext) -> bool:
    return ctx.annotations.name_source_is_title_only


def broken_ids_text(ctx: EvalContext) -> str:
    return ", ".join(ctx.broken_ids)


def broken_refs_rule(message: Message | None = None, detail: Message | None = None) -> Rule:
    return Rule(
        has_broken_refs,
        Verdict.FAIL,
        message or (lambda ctx: f'{ctx.element_type} has aria-labelledby referencing non-existent IDs: "{broken_ids_text(ctx)}"'),
        detail
        or (
            lambda ctx: (
                f'The aria-labelledby attribute references ID(s) that do not exist in the document: "{broken_ids_text(ctx)}". '
                "Screen readers cannot build a name from missing elements. Fix the IDs or remove the broken references."
            )
        ),
        title="Broken aria-labelledby references",
    )


def blank_rule(
    message: Message | None = None,
    detail: Message | None = None,
    *,
    clear_name: bool = False,
) -> Rule:
    return Rule(
        name_blank,
        Verdict.FAIL,
        message
        or (
            lambda ctx: f"{ctx.element_type} has empty or whitespace-only accessible name - "
            "Screen readers will announce nothing meaningful"
        ),
        detail
        or "The accessible name is present but contains only whitespace, or aria-label is set to an empty "
        "value. Provide descriptive text.",
        clear_name=clear_name,
    )


def punctuation_rule(message: Message | None = None, detail: Message | None = None) -> Rule:
    return Rule(
        name_punctuation,
        Verdict.FAIL,
        message or (lambda ctx: f"{ctx.element_type} has punctuation-only accessible name - Not meaningful to screen reader users"),
        detail
        or (
            lambda ctx: f'The accessible name "{ctx.name}" contains only punctuation characters, which '
            "screen readers may read as symbol names or skip entirely. Use descriptive words."
        ),
    )


def title_only_rule(message: Message | None = None) -> Rule:
    return Rule(
        title_only,
        Verdict.WARN,
        message
        or (
            lambda ctx: f"{ctx.element_type} uses only the title attribute for its accessible name - "
            "title is not reliably exposed to all users"
        ),
        "The title attribute is only shown as a tooltip on mouse hover and is not available to keyboard, "
        "touch or many screen reader users. Prefer a visible label, aria-label or aria-labelledby.",
    )


def pass_rule(message: Message, detail: Message | None = None) -> Rule:
    return Rule(lambda ctx: True, Verdict.PASS, message, detail)


def evaluate_rules(rules: Iterable[Rule], ctx: EvalContext, **visibility: Any) -> Outcome:
    outcome = first_match(rules, ctx)
    if outcome is None:
        outcome = Outcome(Verdict.PASS, f"{ctx.element_type} has an accessible name")
    return apply_visibility(outcome, ctx.visible, **visibility)
