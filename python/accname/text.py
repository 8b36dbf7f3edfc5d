# SPDX-License-Identifier: AGPL-3.0-only
"""Text heuristics applied to resolved accessible names.

All predicates are pure functions of their string input, except
:func:`is_icon_only_content`, which also inspects the element the name was
resolved for.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .dom import Element


_PUNCTUATION_ONLY_RE = re.compile(r"^[.,/#!$%^&*;:{}=\-_`~()\[\]\"']+$")
_FILENAME_RE = re.compile(
    r"\.(jpg|jpeg|png|gif|webp|svg|bmp|pdf|doc|docx|xls|xlsx|txt|csv|zip|rar|mp3|mp4|wav|avi|mov)$",
    re.IGNORECASE,
)
_URL_PREFIXES = ("http://", "https://", "www.")
_DOMAIN_RE = re.compile(r"^([a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}(/.*)?$")
_URL_IN_TEXT_PREFIX_RE = re.compile(r"^(https?://|www\.)", re.IGNORECASE)
_URL_IN_TEXT_TLD_RE = re.compile(r"\.(com|org|net|edu|gov|io|co|us|uk|ca|au|de|fr)(\s|$|/)", re.IGNORECASE)
_REDUNDANT_IMAGE_RE = re.compile(r"^image\s|\bimage of\b", re.IGNORECASE)
_SYMBOL_RE = re.compile(r"[^\w\s]")

GENERIC_LABELS = frozenset(
    {
        "label",
        "field",
        "input",
        "text",
        "textbox",
        "textarea",
        "form field",
        "form input",
        "name",
        "enter text",
        "enter input",
        "image",
        "button",
        "submit",
        "icon",
        "picture",
        "photo",
        "graphic",
    }
)
GENERIC_TEXT = frozenset(
    {
        "button",
        "click",
        "click here",
        "click me",
        "submit",
        "go",
        "next",
        "previous",
        "send",
        "ok",
    }
)
GENERIC_LINK_TEXT = frozenset(
    {
        "click",
        "click here",
        "click me",
        "link",
        "more",
        "read more",
        "details",
        "learn more",
        "go",
        "here",
    }
)

ICON_GLYPHS = frozenset(
    "×✕✖✓✔✗✘☰≡⋮⋯…+-−=<>*«»‹›←→↑↓↔⇦⇨⇧⇩▲▼◀▶►◄★☆♥♡⚙✉☎⌂✎✏⊕⊖↻↺⟳⤢⌕"
)
ICON_CLASS_PREFIXES = (
    "fa-",
    "fas-",
    "far-",
    "fal-",
    "fad-",
    "glyphicon-",
    "material-icons",
    "icon-",
    "ui-icon-",
)
ICON_CHILD_SELECTOR = "i.fa, i.fas, i.far, i.fal, i.fad, span.material-icons, i.icon, .glyphicon"

_EMOJI_RANGES = (
    (0x1F000, 0x1FAFF),
    (0x2600, 0x27BF),
    (0x2B00, 0x2BFF),
    (0x1F900, 0x1F9FF),
)
_BUTTON_INPUT_TYPES = frozenset({"button", "submit", "reset"})


def is_punctuation_only(text: str | None) -> bool:
    stripped = (text or "").strip()
    return bool(stripped) and bool(_PUNCTUATION_ONLY_RE.match(stripped))


def is_whitespace_only(text: str | None) -> bool:
    return bool(text) and not text.strip()


def looks_like_filename(text: str | None) -> bool:
    stripped = (text or "").strip()
    return bool(stripped) and bool(_FILENAME_RE.search(stripped))


def looks_like_url(text: str | None) -> bool:
    stripped = (text or "").strip()
    if not stripped:
        return False
    lowered = stripped.lower()
    if lowered.startswith(_URL_PREFIXES):
        return True
    return bool(_DOMAIN_RE.match(stripped))


def contains_url(text: str | None) -> bool:
    stripped = (text or "").strip()
    if not stripped:
        return False
    return bool(_URL_IN_TEXT_PREFIX_RE.match(stripped) or _URL_IN_TEXT_TLD_RE.search(stripped))


def _normalized(text: str | None) -> str:
    return (text or "").strip().lower()


def is_generic_label(text: str | None) -> bool:
    return _normalized(text) in GENERIC_LABELS


def is_generic_text(text: str | None) -> bool:
    return _normalized(text) in GENERIC_TEXT


def is_generic_link_text(text: str | None) -> bool:
    return _normalized(text) in GENERIC_LINK_TEXT


def has_redundant_image_prefix(text: str | None) -> bool:
    return bool(_REDUNDANT_IMAGE_RE.search((text or "").strip()))


def contains_markup(text: str | None) -> bool:
    value = text or ""
    return "<" in value and ">" in value


def capitalize_first(text: str) -> str:
    if not text:
        return text
    return text[0].upper() + text[1:]


def is_emoji(char: str) -> bool:
    if len(char) != 1:
        return False
    code = ord(char)
    return any(lo <= code <= hi for lo, hi in _EMOJI_RANGES)


def _is_icon_glyph(text: str) -> bool:
    # A single glyph may carry a variation selector (U+FE0F).
    glyph = text.replace("\ufe0f", "")
    return len(glyph) == 1 and (glyph in ICON_GLYPHS or is_emoji(glyph))


def _has_icon_class(element: "Element") -> bool:
    for cls in element.classes:
        if cls.startswith(ICON_CLASS_PREFIXES):
            return True
    return False


def _is_short_symbol(text: str) -> bool:
    return 0 < len(text) <= 2 and bool(_SYMBOL_RE.search(text))


def is_icon_only_content(element: "Element", name: str | None) -> bool:
    """Return True when ``element`` appears to be labelled only by an icon.

    Elements that take their name from ``aria-label``, ``aria-labelledby`` or
    ``title`` are never icon-only.
    """
    for attr in ("aria-label", "aria-labelledby", "title"):
        if (element.get(attr) or "").strip():
            return False

    text = (name or "").strip()
    if element.tag_name == "input" and (element.get("type") or "").strip().lower() in _BUTTON_INPUT_TYPES:
        value = (element.get("value") or "").strip()
        if not value:
            return False
        return _is_icon_glyph(value) or _is_short_symbol(value)

    if text and _is_icon_glyph(text):
        return True
    if _has_icon_class(element):
        return True
    if element.select_one(ICON_CHILD_SELECTOR) is not None and len(element.text_content.strip()) <= 2:
        return True
    return _is_short_symbol(text)
