# SPDX-License-Identifier: AGPL-3.0-only
"""Read-only element tree consumed by the name resolver and evaluators.

The core only talks to the :class:`Element` / :class:`Document` protocols.
:class:`SoupDocument` is the bundled host: it parses HTML with BeautifulSoup
(standard-library ``html.parser`` backend) and answers CSS selector queries
through soupsieve.
"""
from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

import soupsieve
from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from .style import COMPUTED_STYLE_ATTR, ComputedStyle, parse_style_declarations


class Element(Protocol):
    @property
    def tag_name(self) -> str: ...

    @property
    def id(self) -> str: ...

    @property
    def classes(self) -> list[str]: ...

    @property
    def text_content(self) -> str: ...

    @property
    def children(self) -> list["Element"]: ...

    @property
    def parent(self) -> "Element | None": ...

    @property
    def first_element_child(self) -> "Element | None": ...

    @property
    def outer_html(self) -> str: ...

    @property
    def document(self) -> "Document": ...

    def get(self, name: str, default: str | None = None) -> str | None: ...

    def has(self, name: str) -> bool: ...

    def attribute_names(self) -> list[str]: ...

    def ancestors(self) -> Iterator["Element"]: ...

    def closest(self, selector: str) -> "Element | None": ...

    def matches(self, selector: str) -> bool: ...

    def select(self, selector: str) -> list["Element"]: ...

    def select_one(self, selector: str) -> "Element | None": ...

    def computed_style(self) -> ComputedStyle: ...

    def iter_text(self, *, skip_subtree=None) -> Iterator[str]: ...


class Document(Protocol):
    url: str

    def get_element_by_id(self, element_id: str) -> Element | None: ...

    def select(self, selector: str) -> list[Element]: ...


def _is_text_node(node: object) -> bool:
    # Comments, doctypes, CDATA and processing instructions are not text.
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


class SoupElement:
    __slots__ = ("_tag", "_doc")

    def __init__(self, tag: Tag, document: "SoupDocument"):
        self._tag = tag
        self._doc = document

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupElement) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"<SoupElement {self._tag.name}>"

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def tag_name(self) -> str:
        return (self._tag.name or "").lower()

    @property
    def id(self) -> str:
        return self.get("id") or ""

    @property
    def classes(self) -> list[str]:
        return (self.get("class") or "").split()

    @property
    def document(self) -> "SoupDocument":
        return self._doc

    @property
    def text_content(self) -> str:
        return "".join(self.iter_text())

    @property
    def children(self) -> list[SoupElement]:
        return [self._doc.wrap(child) for child in self._tag.children if isinstance(child, Tag)]

    @property
    def parent(self) -> SoupElement | None:
        parent = self._tag.parent
        if not isinstance(parent, Tag) or isinstance(parent, BeautifulSoup):
            return None
        return self._doc.wrap(parent)

    @property
    def first_element_child(self) -> SoupElement | None:
        for child in self._tag.children:
            if isinstance(child, Tag):
                return self._doc.wrap(child)
        return None

    @property
    def outer_html(self) -> str:
        return str(self._tag)

    def get(self, name: str, default: str | None = None) -> str | None:
        value = self._tag.attrs.get(name.lower())
        if value is None:
            return default
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def has(self, name: str) -> bool:
        return name.lower() in self._tag.attrs

    def attribute_names(self) -> list[str]:
        return list(self._tag.attrs)

    def ancestors(self) -> Iterator[SoupElement]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def closest(self, selector: str) -> SoupElement | None:
        found = soupsieve.closest(selector, self._tag)
        return self._doc.wrap(found) if found is not None else None

    def matches(self, selector: str) -> bool:
        return soupsieve.match(selector, self._tag)

    def select(self, selector: str) -> list[SoupElement]:
        return [self._doc.wrap(tag) for tag in soupsieve.select(selector, self._tag)]

    def select_one(self, selector: str) -> SoupElement | None:
        found = soupsieve.select_one(selector, self._tag)
        return self._doc.wrap(found) if found is not None else None

    def iter_text(self, *, skip_subtree=None) -> Iterator[str]:
        """Yield descendant text nodes in document order.

        ``skip_subtree`` is an optional predicate over elements; text below an
        element for which it returns True is not yielded.
        """
        stack = list(reversed(list(self._tag.children)))
        while stack:
            node = stack.pop()
            if isinstance(node, Tag):
                if skip_subtree is not None and skip_subtree(self._doc.wrap(node)):
                    continue
                stack.extend(reversed(list(node.children)))
            elif _is_text_node(node):
                yield str(node)

    def computed_style(self) -> ComputedStyle:
        return self._doc.computed_style(self)


class SoupDocument:
    """A parsed HTML snapshot."""

    def __init__(self, soup: BeautifulSoup, *, url: str = ""):
        self.soup = soup
        self.url = url
        self._wrapped: dict[int, SoupElement] = {}
        self._ids: dict[str, SoupElement] | None = None
        self._styles: dict[int, ComputedStyle] = {}

    @classmethod
    def from_html(cls, text: str, *, url: str = "") -> "SoupDocument":
        soup = BeautifulSoup(text, "html.parser", multi_valued_attributes=None)
        return cls(soup, url=url)

    @classmethod
    def from_path(cls, path: str | Path) -> "SoupDocument":
        path = Path(path)
        text = path.read_text(encoding="utf-8", errors="replace")
        return cls.from_html(text, url=path.resolve().as_uri())

    def wrap(self, tag: Tag) -> SoupElement:
        key = id(tag)
        element = self._wrapped.get(key)
        if element is None:
            element = SoupElement(tag, self)
            self._wrapped[key] = element
        return element

    @property
    def body(self) -> SoupElement | None:
        tag = self.soup.find("body")
        return self.wrap(tag) if isinstance(tag, Tag) else None

    def get_element_by_id(self, element_id: str) -> SoupElement | None:
        if not element_id:
            return None
        if self._ids is None:
            ids: dict[str, SoupElement] = {}
            for tag in self.soup.find_all(True):
                value = tag.attrs.get("id")
                if value and value not in ids:
                    ids[value] = self.wrap(tag)
            self._ids = ids
        return self._ids.get(element_id)

    def select(self, selector: str) -> list[SoupElement]:
        return [self.wrap(tag) for tag in soupsieve.select(selector, self.soup)]

    def select_one(self, selector: str) -> SoupElement | None:
        found = soupsieve.select_one(selector, self.soup)
        return self.wrap(found) if found is not None else None

    def computed_style(self, element: SoupElement) -> ComputedStyle:
        key = id(element.tag)
        cached = self._styles.get(key)
        if cached is not None:
            return cached

        # Climb to the nearest ancestor whose style is known, then resolve
        # downwards so deep trees never recurse.
        pending: list[SoupElement] = []
        node: SoupElement | None = element
        inherited = "visible"
        while node is not None:
            known = self._styles.get(id(node.tag))
            if known is not None:
                inherited = known.visibility
                break
            pending.append(node)
            if node.has(COMPUTED_STYLE_ATTR):
                break
            node = node.parent

        for node in reversed(pending):
            style = self._own_style(node, inherited)
            self._styles[id(node.tag)] = style
            inherited = style.visibility
        return self._styles[key]

    def _own_style(self, element: SoupElement, inherited_visibility: str) -> ComputedStyle:
        snapshot = element.get(COMPUTED_STYLE_ATTR)
        if snapshot is not None:
            return ComputedStyle.from_declarations(parse_style_declarations(snapshot))
        declarations = parse_style_declarations(element.get("style"))
        if element.has("hidden") and "display" not in declarations:
            declarations["display"] = "none"
        return ComputedStyle.from_declarations(declarations, inherited_visibility=inherited_visibility)


def text_content_excluding(element: Element, excluded: Element) -> str:
    """Text of ``element`` with the subtree rooted at ``excluded`` left out."""
    return "".join(element.iter_text(skip_subtree=lambda node: node == excluded))
