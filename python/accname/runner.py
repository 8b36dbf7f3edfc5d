# SPDX-License-Identifier: AGPL-3.0-only
"""Run every category evaluator over a document.

Categories are scanned in a fixed order; within a category, elements are
reported in document order. A selector the host cannot evaluate, or an
evaluator that raises on one element, is reported as an
:class:`AccessibleNameWarning` and the run continues.
"""
from __future__ import annotations

import warnings
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

import soupsieve

from .dom import SoupDocument
from .evaluators import (
    evaluate_area,
    evaluate_aria_widget,
    evaluate_button,
    evaluate_dialog,
    evaluate_fieldset,
    evaluate_form,
    evaluate_form_control,
    evaluate_iframe,
    evaluate_image,
    evaluate_image_input,
    evaluate_landmark,
    evaluate_link,
    evaluate_media,
    evaluate_meter,
    evaluate_progress,
    evaluate_radio_button,
    evaluate_role_img,
    evaluate_select,
    evaluate_svg_image,
    evaluate_tabindex_element,
)
from .evaluators.landmarks import LANDMARK_SELECTOR
from .evaluators.widgets import DIALOG_SELECTOR, WIDGET_SELECTOR
from .locator import get_locator
from .names import resolve_accessible_name
from .tree import is_hidden
from .types import EvaluationResult, RunError, RunOptions, TestCounts, TestRun

if TYPE_CHECKING:
    from .dom import Document, Element
    from .locator import Locator


class AccessibleNameWarning(UserWarning):
    """Warning emitted when part of a run could not be evaluated."""


Evaluator = Callable[..., "EvaluationResult | None"]


@dataclass(frozen=True)
class Category:
    name: str
    selector: str
    evaluator: Evaluator
    description: str = ""


FORM_CONTROL_SELECTOR = (
    'input:not([type="hidden"]):not([type="button"]):not([type="submit"])'
    ':not([type="reset"]):not([type="radio"]):not([type="image"])'
)

CATEGORIES: tuple[Category, ...] = (
    Category("image", 'img:not([role="presentation"]):not([role="none"])', evaluate_image, "Images"),
    Category("form-control", FORM_CONTROL_SELECTOR, evaluate_form_control, "Text inputs and other form fields"),
    Category("radio", 'input[type="radio"]', evaluate_radio_button, "Radio buttons"),
    Category("image-input", 'input[type="image"]', evaluate_image_input, "Image inputs"),
    Category("textarea", "textarea", evaluate_form_control, "Text areas"),
    Category("select", "select", evaluate_select, "Select menus"),
    Category("fieldset", 'fieldset, [role="group"]', evaluate_fieldset, "Fieldsets and groups"),
    Category("form", 'form, [role="form"]', evaluate_form, "Forms"),
    Category(
        "button",
        'button, [role="button"], input[type="button"], input[type="submit"], input[type="reset"]',
        evaluate_button,
        "Buttons",
    ),
    Category("link", 'a[href], [role="link"]', evaluate_link, "Links"),
    Category("area", "area[href]", evaluate_area, "Image map areas"),
    Category("landmark", LANDMARK_SELECTOR, evaluate_landmark, "Landmarks"),
    Category("progress", 'progress, [role="progressbar"]', evaluate_progress, "Progress bars"),
    Category("meter", 'meter, [role="meter"]', evaluate_meter, "Meters"),
    Category("svg-image", 'svg[role="img"]', evaluate_svg_image, "SVG images"),
    Category("role-img", '[role="img"]:not(svg)', evaluate_role_img, 'Elements with role="img"'),
    Category("aria-widget", WIDGET_SELECTOR, evaluate_aria_widget, "ARIA widgets"),
    Category("textbox", '[role="textbox"]', evaluate_form_control, "ARIA textboxes"),
    Category("dialog", DIALOG_SELECTOR, evaluate_dialog, "Dialogs"),
    Category("iframe", "iframe", evaluate_iframe, "Inline frames"),
    Category("media", 'audio[controls], video[controls], [role="video"]', evaluate_media, "Audio and video"),
    Category("tabindex", '[tabindex]:not([tabindex="-1"])', evaluate_tabindex_element, "Other focusable elements"),
)

CATEGORY_NAMES = tuple(category.name for category in CATEGORIES)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def select_categories(names: Iterable[str] | None) -> tuple[Category, ...]:
    if names is None:
        return CATEGORIES
    wanted = [str(name).strip().lower() for name in names if str(name).strip()]
    unknown = sorted(set(wanted) - set(CATEGORY_NAMES))
    if unknown:
        raise ValueError(f"Unknown categories: {', '.join(unknown)}")
    return tuple(category for category in CATEGORIES if category.name in wanted)


def _evaluate_category(
    document: "Document",
    category: Category,
    *,
    locator: "Locator",
    inline_style_check: bool,
) -> list[EvaluationResult]:
    try:
        elements = document.select(category.selector)
    except soupsieve.SelectorSyntaxError as exc:
        warnings.warn(
            f"Skipping category {category.name!r}: selector {category.selector!r} is not supported: {exc}",
            AccessibleNameWarning,
            stacklevel=3,
        )
        return []
    results: list[EvaluationResult] = []
    for element in elements:
        try:
            result = category.evaluator(element, locator=locator, inline_style_check=inline_style_check)
        except Exception as exc:
            warnings.warn(
                f"Could not evaluate <{element.tag_name}> in category {category.name!r}: {exc}",
                AccessibleNameWarning,
                stacklevel=3,
            )
            continue
        if result is not None:
            results.append(result)
    return results


def run_accessibility_test(
    document: "Document | None",
    *,
    locator: "Locator | None" = None,
    categories: Iterable[str] | None = None,
    options: RunOptions | None = None,
    now: Callable[[], str] | None = None,
) -> TestRun | RunError:
    """Evaluate every matching element of ``document``.

    Returns a :class:`RunError` when there is no document to inspect.
    """
    if document is None:
        return RunError("Document is not available")
    options = options or RunOptions()
    if categories is None:
        categories = options.categories
    selected = select_categories(categories)
    locator = locator or get_locator(options.locator)

    results: list[EvaluationResult] = []
    for category in selected:
        results.extend(
            _evaluate_category(
                document,
                category,
                locator=locator,
                inline_style_check=options.inline_style_check,
            )
        )
    frozen = tuple(results)
    return TestRun(
        url=getattr(document, "url", "") or "",
        timestamp=(now or _now)(),
        results=frozen,
        counts=TestCounts.from_results(frozen),
    )


def run_html(html: str, *, url: str = "", **kwargs: Any) -> TestRun | RunError:
    try:
        document = SoupDocument.from_html(html, url=url)
    except Exception as exc:
        return RunError(f"Could not parse document: {exc}")
    return run_accessibility_test(document, **kwargs)


def run_file(path: str | Path, **kwargs: Any) -> TestRun | RunError:
    try:
        document = SoupDocument.from_path(path)
    except OSError as exc:
        return RunError(f"Could not read {path}: {exc}")
    except Exception as exc:
        return RunError(f"Could not parse {path}: {exc}")
    return run_accessibility_test(document, **kwargs)


def category_for(element: "Element") -> Category | None:
    for category in CATEGORIES:
        try:
            if element.matches(category.selector):
                return category
        except soupsieve.SelectorSyntaxError:
            continue
    return None


def evaluate(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    options: RunOptions | None = None,
) -> EvaluationResult | None:
    """Evaluate one element with the first category whose selector matches it."""
    options = options or RunOptions()
    category = category_for(element)
    if category is None:
        return None
    return category.evaluator(
        element,
        locator=locator or get_locator(options.locator),
        inline_style_check=options.inline_style_check,
    )


def debug_element(
    element: "Element",
    *,
    locator: "Locator | None" = None,
    options: RunOptions | None = None,
) -> dict[str, Any]:
    """Everything known about one element, as plain data."""
    options = options or RunOptions()
    locator = locator or get_locator(options.locator)
    resolution = resolve_accessible_name(element)
    category = category_for(element)
    result = evaluate(element, locator=locator, options=options)
    return {
        "tagName": element.tag_name,
        "id": element.id or None,
        "classes": element.classes,
        "selector": locator(element),
        "xpath": get_locator("xpath")(element),
        "category": category.name if category is not None else None,
        "accessibleName": resolution.name,
        "nameSource": resolution.source,
        "annotations": resolution.annotations.to_dict(),
        "isVisible": not is_hidden(element, inline_style_check=options.inline_style_check),
        "computedStyle": element.computed_style().to_dict(),
        "sourceFragment": _truncate(element.outer_html, 500),
        "result": result.to_dict() if result is not None else None,
    }


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
