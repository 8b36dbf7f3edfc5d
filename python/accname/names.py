# SPDX-License-Identifier: AGPL-3.0-only
"""Accessible name resolution.

:func:`resolve_accessible_name` walks the name sources in a fixed priority
order and returns the name together with the facts the evaluators need about
how it was produced. Nothing is written back onto the element.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .text import is_punctuation_only
from .tree import LABELABLE_TAGS, LabelKind, find_associated_label, resolve_labelledby_ids

if TYPE_CHECKING:
    from .dom import Element


class NameSource:
    LEGEND = "legend"
    ARIA_LABELLEDBY = "aria-labelledby"
    ARIA_LABEL = "aria-label"
    LABEL = "label"
    ALT = "alt"
    VALUE = "value"
    TITLE = "title"
    CONTENT = "content"
    NONE = "none"


TEXT_BEARING_TAGS = frozenset(
    {"button", "a", "h1", "h2", "h3", "h4", "h5", "h6", "li", "dt", "dd", "figure", "figcaption"}
)
TEXT_BEARING_ROLES = frozenset({"button", "link", "heading", "listitem"})
CONTENT_ROLES = frozenset(
    {"checkbox", "menuitem", "menuitemcheckbox", "menuitemradio", "option", "radio", "tab", "treeitem"}
)
BUTTON_INPUT_TYPES = frozenset({"button", "submit", "reset"})


@dataclass(frozen=True)
class ResolutionAnnotations:
    broken_reference_ids: tuple[str, ...] = ()
    name_source_is_title_only: bool = False
    name_source_is_wrapping_label: bool | None = None
    label_kind: str = LabelKind.NONE
    aria_label_is_empty: bool = False
    aria_label_is_punctuation_only: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "brokenReferenceIds": list(self.broken_reference_ids),
            "nameSourceIsTitleOnly": self.name_source_is_title_only,
            "nameSourceIsWrappingLabel": self.name_source_is_wrapping_label,
            "labelKind": self.label_kind,
            "ariaLabelIsEmpty": self.aria_label_is_empty,
            "ariaLabelIsPunctuationOnly": self.aria_label_is_punctuation_only,
        }


@dataclass(frozen=True)
class NameResolution:
    name: str
    source: str
    annotations: ResolutionAnnotations

    @property
    def has_broken_references(self) -> bool:
        return bool(self.annotations.broken_reference_ids)


def role_of(element: "Element") -> str:
    return (element.get("role") or "").strip()


def input_type_of(element: "Element") -> str:
    return (element.get("type") or "text").strip().lower()


def _legend_text(element: "Element") -> str:
    first = element.first_element_child
    if first is None or first.tag_name != "legend":
        return ""
    return first.text_content.strip()


def _link_image_alt(element: "Element") -> str:
    for image in element.select("img[alt]"):
        alt = image.get("alt") or ""
        if alt.strip():
            return alt
    return ""


def resolve_accessible_name(element: "Element") -> NameResolution:
    tag = element.tag_name
    role = role_of(element)
    broken: tuple[str, ...] = ()

    def done(name: str, source: str, **flags: Any) -> NameResolution:
        return NameResolution(
            name=name,
            source=source,
            annotations=ResolutionAnnotations(broken_reference_ids=broken, **flags),
        )

    if tag == "fieldset":
        legend = _legend_text(element)
        if legend:
            return done(legend, NameSource.LEGEND)

    labelledby = resolve_labelledby_ids(element)
    broken = labelledby.broken_ids
    if labelledby.name:
        return done(labelledby.name, NameSource.ARIA_LABELLEDBY)

    if element.has("aria-label"):
        aria_label = element.get("aria-label") or ""
        if not aria_label.strip():
            return done("", NameSource.NONE, aria_label_is_empty=True)
        return done(
            aria_label,
            NameSource.ARIA_LABEL,
            aria_label_is_punctuation_only=is_punctuation_only(aria_label),
        )

    if tag in LABELABLE_TAGS and element.id:
        label = find_associated_label(element)
        if label.text:
            return done(
                label.text,
                NameSource.LABEL,
                label_kind=label.kind,
                name_source_is_wrapping_label=label.kind == LabelKind.WRAPPED,
            )

    if tag in {"img", "area"} and element.has("alt"):
        return done(element.get("alt") or "", NameSource.ALT)

    if tag == "input" and input_type_of(element) in BUTTON_INPUT_TYPES:
        value = element.get("value") or ""
        if value:
            return done(value, NameSource.VALUE)

    if tag == "iframe":
        title = element.get("title") or ""
        if title:
            return done(title, NameSource.TITLE)

    title = element.get("title") or ""
    if title:
        return done(title, NameSource.TITLE, name_source_is_title_only=True)

    if tag in TEXT_BEARING_TAGS or role in TEXT_BEARING_ROLES:
        if tag == "a":
            alt = _link_image_alt(element)
            if alt:
                return done(alt, NameSource.ALT)
        text = element.text_content.strip()
        if text:
            return done(text, NameSource.CONTENT)

    if role in CONTENT_ROLES:
        text = element.text_content.strip()
        return done(text, NameSource.CONTENT if text else NameSource.NONE)

    return done("", NameSource.NONE)


def compute_accessible_name(element: "Element") -> str:
    return resolve_accessible_name(element).name
