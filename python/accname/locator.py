# SPDX-License-Identifier: AGPL-3.0-only
"""Display locators for evaluated elements.

A locator turns an element into a string a person (or a highlighter) can use
to find it again. Locators never influence verdicts.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable

import soupsieve

if TYPE_CHECKING:
    from .dom import Element


Locator = Callable[["Element"], str]

NAMED_FORM_TAGS = frozenset({"input", "select", "textarea", "button"})
_MAX_DEPTH = 5
_LEADING_DIGIT_RE = re.compile(r"^\d")


def _css_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _is_unique(element: "Element", selector: str) -> bool:
    try:
        return len(element.document.select(selector)) == 1
    except soupsieve.SelectorSyntaxError:
        return False


def _useful_classes(element: "Element") -> list[str]:
    out = []
    for cls in element.classes:
        if _LEADING_DIGIT_RE.match(cls) or len(cls) <= 2:
            continue
        if "active" in cls or "selected" in cls:
            continue
        out.append(cls)
    return out


def _same_tag_siblings(element: "Element") -> list["Element"]:
    parent = element.parent
    if parent is None:
        return [element]
    return [child for child in parent.children if child.tag_name == element.tag_name]


class CssPathLocator:
    """Short CSS selector: id, unique ``data-*``, unique form ``name``, then a path."""

    def __call__(self, element: "Element") -> str:
        if element.id:
            return f"#{soupsieve.escape(element.id)}"

        tag = element.tag_name
        for attr in _data_attributes(element):
            value = element.get(attr) or ""
            if not value:
                continue
            selector = f'[{attr}="{_css_string(value)}"]'
            if _is_unique(element, selector):
                return selector

        name = element.get("name")
        if tag in NAMED_FORM_TAGS and name:
            selector = f'{tag}[name="{_css_string(name)}"]'
            if _is_unique(element, selector):
                return selector

        return self._path(element)

    def _path(self, element: "Element") -> str:
        parts: list[str] = []
        truncated = False
        current: Element | None = element
        while current is not None and current.tag_name not in {"body", "html"}:
            if current.id:
                parts.insert(0, f"{current.tag_name}#{soupsieve.escape(current.id)}")
                return " > ".join(parts)
            part = current.tag_name
            classes = _useful_classes(current)
            if classes:
                part += "".join(f".{soupsieve.escape(cls)}" for cls in classes)
            siblings = _same_tag_siblings(current)
            if len(siblings) > 1:
                part += f":nth-of-type({siblings.index(current) + 1})"
            parts.insert(0, part)
            current = current.parent
            if len(parts) > _MAX_DEPTH:
                truncated = current is not None and current.tag_name not in {"body", "html"}
                break
        if truncated:
            return "body " + " > ".join(parts)
        if current is not None and current.tag_name == "body":
            return "body > " + " > ".join(parts)
        return " > ".join(parts)


def _data_attributes(element: "Element") -> list[str]:
    return [name for name in element.attribute_names() if name.startswith("data-") and name != "data-accname-computed"]


class XPathLocator:
    """Absolute XPath with positional indexes where a tag repeats among siblings."""

    def __call__(self, element: "Element") -> str:
        if element.id:
            return f'//*[@id="{element.id}"]'
        steps: list[str] = []
        current: Element | None = element
        while current is not None:
            siblings = _same_tag_siblings(current)
            if len(siblings) > 1:
                steps.insert(0, f"{current.tag_name}[{siblings.index(current) + 1}]")
            else:
                steps.insert(0, current.tag_name)
            current = current.parent
        return "/" + "/".join(steps)


LOCATORS: dict[str, Callable[[], Locator]] = {
    "css": CssPathLocator,
    "xpath": XPathLocator,
}


def get_locator(name: str | None = None) -> Locator:
    key = (name or "css").strip().lower()
    factory = LOCATORS.get(key)
    if factory is None:
        raise ValueError(f"Unknown locator {name!r}; expected one of: {', '.join(sorted(LOCATORS))}")
    return factory()
