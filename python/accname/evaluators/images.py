# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import TYPE_CHECKING

from ..rules import (
    EvalContext,
    Rule,
    blank_rule,
    broken_refs_rule,
    build_result,
    evaluate_rules,
    name_blank,
    name_is,
    name_missing,
    name_punctuation,
    pass_rule,
    prepare,
    punctuation_rule,
    resolve_locator,
    title_only_rule,
)
from ..text import (
    contains_markup,
    contains_url,
    has_redundant_image_prefix,
    is_generic_label,
    is_generic_text,
    is_punctuation_only,
    looks_like_filename,
)
from ..tree import has_aria_hidden_content
from ..types import EvaluationResult, Verdict

if TYPE_CHECKING:
    from ..dom import Element
    from ..locator import Locator


_SHORT_IMAGE_MAP_NAME = 10


def _trueish(value: str | None) -> bool:
    return str(value or "").strip().lower() == "true"


def _is_image_map(ctx: EvalContext) -> bool:
    return bool((ctx.element.get("usemap") or "").strip())


def _image_noun(ctx: EvalContext) -> str:
    return "Image map" if _is_image_map(ctx) else "Image"


def _is_decorative(ctx: EvalContext) -> bool:
    element = ctx.element
    if element.get("alt") == "":
        return True
    if _trueish(element.get("aria-hidden")):
        return True
    return ctx.role in {"presentation", "none"}


_IMAGE_RULES = [
    Rule(
        lambda ctx: _is_decorative(ctx) and not ctx.name,
        Verdict.PASS,
        "Decorative image correctly has empty alt text",
        "The image is marked as decorative and is hidden from screen readers.",
    ),
    Rule(
        _is_decorative,
        Verdict.WARN,
        "Decorative image should have empty alt text",
        lambda ctx: f'The image is marked as decorative but still exposes the name "{ctx.name}". '
        "Either remove the decorative marking or remove the accessible name.",
    ),
    broken_refs_rule(lambda ctx: f"{_image_noun(ctx)} has broken aria-labelledby references"),
    Rule(
        name_missing,
        Verdict.FAIL,
        lambda ctx: f"{_image_noun(ctx)} is missing an accessible name (alt text) - Invisible to screen reader users. "
        "Add descriptive alt text that conveys purpose or content",
        "Images must have alternative text. Screen readers announce images without alt text by file name or "
        'not at all. Use alt="" only when the image is purely decorative.',
    ),
    Rule(
        name_blank,
        Verdict.FAIL,
        lambda ctx: f"{_image_noun(ctx)} has whitespace-only alt text - Screen readers treat this inconsistently. "
        'Use alt="" for decorative images or provide descriptive text',
        "Alternative text that contains only spaces is neither a description nor a valid decorative marker.",
        clear_name=True,
    ),
    Rule(
        name_punctuation,
        Verdict.FAIL,
        lambda ctx: f"{_image_noun(ctx)} has punctuation-only alt text - Not meaningful to screen reader users",
        lambda ctx: f'The alt text "{ctx.name}" contains only punctuation. Describe the image content or purpose.',
        clear_name=True,
    ),
    Rule(
        name_is(contains_markup),
        Verdict.FAIL,
        "HTML markup in alt text - Screen readers will read the markup literally",
        "Alternative text is plain text. Remove tags and keep only the description.",
        clear_name=True,
    ),
    Rule(
        name_is(looks_like_filename),
        Verdict.FAIL,
        lambda ctx: f"{_image_noun(ctx)} uses a filename as its accessible name - Not meaningful to users",
        lambda ctx: f'The alt text "{ctx.name}" looks like a file name. Replace it with a description of the image.',
        clear_name=True,
    ),
    Rule(
        name_is(has_redundant_image_prefix),
        Verdict.WARN,
        "Redundant 'image' in alt text - Screen readers already announce the element as an image",
        lambda ctx: f'The alt text "{ctx.name}" starts with or contains "image of". Remove the redundant wording.',
    ),
    Rule(
        name_is(is_generic_label),
        Verdict.WARN,
        lambda ctx: f'Generic alt text "{ctx.name}" - Describe the image content or purpose',
        "Generic words such as image, picture or icon do not tell users what the image shows.",
    ),
    Rule(
        lambda ctx: _is_image_map(ctx) and len(ctx.name.strip()) < _SHORT_IMAGE_MAP_NAME,
        Verdict.WARN,
        lambda ctx: f'Image map has a very short accessible name "{ctx.name}" - Consider a more descriptive name',
        "An image map name should describe the overall purpose of the map, not just one region.",
    ),
    pass_rule(
        lambda ctx: "Image map has an appropriate accessible name" if _is_image_map(ctx) else "Image has a descriptive accessible name"
    ),
]


def evaluate_image(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, "Image", inline_style_check=inline_style_check)
    outcome = evaluate_rules(_IMAGE_RULES, ctx)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="image",
        src=element.get("src"),
        isImageMap=_is_image_map(ctx),
    )


def _svg_title(element: "Element") -> "Element | None":
    for child in element.children:
        if child.tag_name == "title":
            return child
    return None


def _svg_has_empty_title(ctx: EvalContext) -> bool:
    title = _svg_title(ctx.element)
    return title is not None and not title.text_content.strip() and bool(ctx.name.strip())


_SVG_RULES = [
    Rule(
        lambda ctx: _trueish(ctx.element.get("aria-hidden")) or ctx.role in {"presentation", "none"},
        Verdict.PASS,
        "Decorative SVG correctly hidden from assistive technology",
    ),
    broken_refs_rule("Broken aria-labelledby references"),
    Rule(
        name_missing,
        Verdict.FAIL,
        "Missing accessible name",
        "SVG images with role=\"img\" need an accessible name. Add aria-label, or point aria-labelledby at "
        "the id of the SVG's <title> element.",
    ),
    blank_rule("Whitespace-only accessible name", clear_name=True),
    punctuation_rule("Punctuation-only accessible name"),
    Rule(
        name_is(contains_markup),
        Verdict.FAIL,
        "HTML markup in SVG accessible name",
        "The accessible name contains markup that will be read literally. Use plain text.",
        clear_name=True,
    ),
    Rule(
        name_is(looks_like_filename),
        Verdict.FAIL,
        "Filename used as accessible name",
        lambda ctx: f'The accessible name "{ctx.name}" looks like a file name. Describe the graphic instead.',
        clear_name=True,
    ),
    Rule(
        name_is(is_generic_label),
        Verdict.WARN,
        lambda ctx: f'Generic accessible name "{ctx.name}"',
        "Generic words do not describe what the graphic conveys.",
    ),
    Rule(
        _svg_has_empty_title,
        Verdict.WARN,
        "Empty title element with alternative accessible name",
        "The SVG contains an empty <title>. Remove it or give it the same text as the accessible name.",
    ),
    pass_rule("SVG image has an appropriate accessible name"),
]


def evaluate_svg_image(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, "SVG image", inline_style_check=inline_style_check)
    outcome = evaluate_rules(_SVG_RULES, ctx)
    title = _svg_title(element)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="svg-image",
        hasTitleElement=title is not None,
        titleContent=title.text_content.strip() if title is not None else None,
    )


def _role_img_label(element: "Element") -> str:
    return f'{element.tag_name.upper()}[role="img"]'


_ROLE_IMG_RULES = [
    broken_refs_rule(lambda ctx: f"{ctx.element_type}: Broken aria-labelledby references"),
    Rule(
        name_missing,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type}: Missing accessible name",
        "Elements with role=\"img\" must have an accessible name from aria-label or aria-labelledby.",
    ),
    blank_rule(lambda ctx: f"{ctx.element_type}: Whitespace-only accessible name", clear_name=True),
    Rule(
        name_punctuation,
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type}: Punctuation-only accessible name",
        "Punctuation does not describe the image.",
        clear_name=True,
    ),
    Rule(
        name_is(contains_markup),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type}: HTML markup in accessible name",
        "Markup in an accessible name is read literally. Use plain text.",
        clear_name=True,
    ),
    Rule(
        name_is(looks_like_filename),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type}: Filename used as accessible name",
        "A file name does not describe the image. Replace it with a description.",
        clear_name=True,
    ),
    Rule(
        name_is(contains_url),
        Verdict.FAIL,
        lambda ctx: f"{ctx.element_type}: URL used as accessible name",
        "A web address does not describe the image. Replace it with a description.",
        clear_name=True,
    ),
    Rule(
        name_is(has_redundant_image_prefix),
        Verdict.WARN,
        lambda ctx: f"{ctx.element_type}: Redundant 'image' in accessible name",
        "Screen readers already announce the role. Remove the word image from the name.",
    ),
    Rule(
        name_is(is_generic_label),
        Verdict.WARN,
        lambda ctx: f'{ctx.element_type}: Generic accessible name "{ctx.name}"',
        "Generic words do not describe what the image conveys.",
    ),
    pass_rule(lambda ctx: f"{ctx.element_type}: Has appropriate accessible name"),
]


def evaluate_role_img(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, _role_img_label(element), inline_style_check=inline_style_check)
    outcome = evaluate_rules(_ROLE_IMG_RULES, ctx)
    return build_result(
        ctx,
        outcome,
        resolve_locator(locator),
        category="role-img",
        hasAriaHiddenContent=has_aria_hidden_content(element),
    )


def _alt(ctx: EvalContext) -> str | None:
    return ctx.element.get("alt")


_IMAGE_INPUT_RULES = [
    broken_refs_rule(),
    Rule(
        lambda ctx: _alt(ctx) is None,
        Verdict.FAIL,
        "Image input is missing alt attribute - Screen readers cannot announce the button's purpose",
        "An <input type=\"image\"> acts as a submit button; its alt text is the button label.",
    ),
    Rule(
        lambda ctx: _alt(ctx) == "",
        Verdict.FAIL,
        "Image input has empty alt attribute - Image inputs are buttons and cannot be decorative",
        "Provide alt text that describes the action, for example \"Search\" or \"Submit order\".",
    ),
    Rule(
        lambda ctx: not (_alt(ctx) or "").strip(),
        Verdict.FAIL,
        "Image input has whitespace-only alt text",
        "Provide alt text that describes the action.",
    ),
    Rule(
        lambda ctx: is_punctuation_only(_alt(ctx)),
        Verdict.FAIL,
        "Image input has punctuation-only alt text",
        "Punctuation does not describe the button's action.",
    ),
    Rule(
        lambda ctx: looks_like_filename(_alt(ctx)),
        Verdict.FAIL,
        "Image input uses a filename as alt text",
        lambda ctx: f'The alt text "{_alt(ctx)}" looks like a file name. Describe the action instead.',
    ),
    Rule(
        lambda ctx: is_generic_label(_alt(ctx)),
        Verdict.WARN,
        lambda ctx: f'Image input has generic alt text "{_alt(ctx)}"',
        "Describe what the button does rather than what it looks like.",
    ),
    pass_rule("Image input has appropriate alt text"),
]


def evaluate_image_input(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, "Image input", inline_style_check=inline_style_check)
    outcome = evaluate_rules(_IMAGE_INPUT_RULES, ctx)
    return build_result(ctx, outcome, resolve_locator(locator), category="image-input", alt=element.get("alt"))


_AREA_RULES = [
    broken_refs_rule(),
    Rule(
        name_missing,
        Verdict.FAIL,
        "Image map area is missing an accessible name - Add alt text describing the link destination",
        "Each clickable <area> needs alt text so screen reader users know where the region leads.",
    ),
    blank_rule(),
    punctuation_rule(),
    Rule(
        name_is(looks_like_filename),
        Verdict.FAIL,
        "Image map area uses a filename as its accessible name",
        "Describe the destination of the area instead of naming a file.",
    ),
    Rule(
        name_is(is_generic_label),
        Verdict.WARN,
        lambda ctx: f'Image map area has a generic accessible name "{ctx.name}"',
        "Describe the destination of the area.",
    ),
    Rule(
        name_is(is_generic_text),
        Verdict.WARN,
        lambda ctx: f'Image map area text "{ctx.name}" is too generic',
        "Link text should make sense out of context.",
    ),
    title_only_rule(),
    pass_rule("Image map area has an accessible name"),
]


def evaluate_area(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    inline_style_check: bool = True,
) -> EvaluationResult:
    ctx = prepare(element, "Image map area", inline_style_check=inline_style_check)
    outcome = evaluate_rules(_AREA_RULES, ctx)
    return build_result(ctx, outcome, resolve_locator(locator), category="area", href=element.get("href"))
