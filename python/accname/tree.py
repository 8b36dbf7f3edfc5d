# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .dom import text_content_excluding
from .style import parse_style_declarations

if TYPE_CHECKING:
    from .dom import Document, Element


LABELABLE_TAGS = frozenset({"input", "textarea", "select", "progress", "meter"})
IDREF_ATTRIBUTES = ("aria-labelledby", "aria-describedby", "aria-controls", "for", "usemap")


class LabelKind:
    EXTERNAL = "external"
    WRAPPED = "wrapped"
    NONE = "none"


@dataclass(frozen=True)
class LabelledbyResolution:
    name: str
    broken_ids: tuple[str, ...] = ()
    present: bool = False


@dataclass(frozen=True)
class AssociatedLabel:
    text: str
    kind: str = LabelKind.NONE
    label: "Element | None" = None


def _trueish(value: str | None) -> bool:
    return str(value or "").strip().lower() == "true"


def _idrefs(value: str | None) -> list[str]:
    return [token for token in str(value or "").split() if token]


def is_hidden(element: "Element", *, inline_style_check: bool = True) -> bool:
    """True when the element is not rendered to sighted users.

    Computed ``display: none``, ``visibility: hidden`` or ``opacity: 0`` hide
    an element, as do ``width="0"`` together with ``height="0"``. With
    ``inline_style_check`` the element's own ``style`` attribute is consulted
    as well, for hosts whose computed style may lag behind the markup.
    """
    style = element.computed_style()
    if style.display.lower() == "none" or style.visibility.lower() == "hidden":
        return True
    if style.opacity_is_zero:
        return True
    if inline_style_check:
        inline = parse_style_declarations(element.get("style"))
        if inline.get("display", "").lower() == "none" or inline.get("visibility", "").lower() == "hidden":
            return True
    width = (element.get("width") or "").strip()
    height = (element.get("height") or "").strip()
    return width == "0" and height == "0"


def _under_aria_hidden(node: "Element") -> bool:
    return _trueish(node.get("aria-hidden"))


def has_aria_hidden_content(element: "Element") -> bool:
    """True when every piece of visible text sits inside ``aria-hidden`` descendants."""
    if element.select_one('[aria-hidden="true"]') is None:
        return False
    exposed = "".join(element.iter_text(skip_subtree=_under_aria_hidden))
    return not exposed.strip()


def resolve_labelledby_ids(element: "Element") -> LabelledbyResolution:
    raw = element.get("aria-labelledby")
    if raw is None:
        return LabelledbyResolution(name="")
    document = element.document
    parts: list[str] = []
    broken: list[str] = []
    for ref in _idrefs(raw):
        target = document.get_element_by_id(ref)
        if target is None:
            broken.append(ref)
            continue
        text = target.text_content.strip()
        if text:
            parts.append(text)
    return LabelledbyResolution(name=" ".join(parts), broken_ids=tuple(broken), present=True)


def _external_label(element: "Element") -> "Element | None":
    element_id = element.id
    if not element_id:
        return None
    for label in element.document.select("label[for]"):
        if label.get("for") == element_id:
            return label
    return None


def _wrapping_label(element: "Element") -> "Element | None":
    for ancestor in element.ancestors():
        if ancestor.tag_name == "label":
            return ancestor
    return None


def find_associated_label(element: "Element") -> AssociatedLabel:
    label = _external_label(element)
    if label is not None:
        return AssociatedLabel(text=label.text_content.strip(), kind=LabelKind.EXTERNAL, label=label)
    label = _wrapping_label(element)
    if label is not None:
        text = text_content_excluding(label, element).strip()
        return AssociatedLabel(text=text, kind=LabelKind.WRAPPED, label=label)
    return AssociatedLabel(text="")


def has_implicit_label_parent(element: "Element") -> bool:
    label = _wrapping_label(element)
    return label is not None and not label.has("for")


def labelledby_targets_info(element: "Element") -> list[dict[str, Any]]:
    """Describe every element referenced by ``aria-labelledby``.

    Each entry carries the referenced id, whether it exists, the name it
    contributes and a ``problem`` classification: ``"empty-name"`` for a blank
    ``aria-label``, ``"aria-hidden-only"`` for a target whose text is all
    ``aria-hidden``, ``"no-name"`` otherwise when nameless. A target without a
    name from an attribute contributes its text outside ``aria-hidden``
    subtrees.
    """
    from .names import NameSource, resolve_accessible_name

    document = element.document
    info: list[dict[str, Any]] = []
    for ref in _idrefs(element.get("aria-labelledby")):
        target = document.get_element_by_id(ref)
        if target is None:
            info.append({"id": ref, "exists": False, "name": "", "problem": None})
            continue
        resolution = resolve_accessible_name(target)
        name = resolution.name.strip()
        from_text = resolution.source in (NameSource.CONTENT, NameSource.NONE)
        if from_text and not resolution.annotations.aria_label_is_empty:
            name = "".join(target.iter_text(skip_subtree=_under_aria_hidden)).strip()
        problem = None
        if resolution.annotations.aria_label_is_empty:
            problem = "empty-name"
        elif not name:
            problem = "aria-hidden-only" if has_aria_hidden_content(target) else "no-name"
        info.append({"id": ref, "exists": True, "name": name, "problem": problem})
    return info


def validate_idrefs(document: "Document") -> list[dict[str, str]]:
    """Every id reference in the document that points at a missing element."""
    missing: list[dict[str, str]] = []
    for attr in IDREF_ATTRIBUTES:
        for element in document.select(f"[{attr}]"):
            value = element.get(attr) or ""
            if attr == "usemap":
                refs = [value.strip().lstrip("#")] if value.strip() else []
            else:
                refs = _idrefs(value)
            for ref in refs:
                if attr == "usemap" and _find_map(document, ref):
                    continue
                if document.get_element_by_id(ref) is None:
                    missing.append({"attribute": attr, "id": ref, "tag": element.tag_name})
    return missing


def _find_map(document: "Document", name: str) -> bool:
    return any(node.get("name") == name for node in document.select("map[name]"))
