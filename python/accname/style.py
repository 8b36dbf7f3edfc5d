# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


COMPUTED_STYLE_ATTR = "data-accname-computed"


class StyleWarning(UserWarning):
    """Warning emitted for malformed inline-style declarations."""


def _normalize_prop_name(name: Any) -> str:
    text = str(name).strip()
    if not text:
        return text
    if text.startswith("--"):
        return text
    return text.lower()


def _warn(msg: str) -> None:
    warnings.warn(msg, StyleWarning, stacklevel=3)


def parse_style_declarations(fragment: str | None) -> dict[str, str]:
    """Parse a ``style`` attribute into an ordered property map.

    Later declarations replace earlier ones and move to the end, matching the
    cascade inside a single declaration block. ``!important`` is dropped.
    """
    out: dict[str, str] = {}
    for part in str(fragment or "").split(";"):
        chunk = part.strip()
        if not chunk:
            continue
        name, sep, value = chunk.partition(":")
        if not sep:
            _warn(f"Ignoring malformed inline-style fragment without ':': {chunk!r}")
            continue
        prop = _normalize_prop_name(name)
        if not prop:
            _warn(f"Ignoring inline-style fragment with empty property name: {chunk!r}")
            continue
        css_value = value.strip()
        if css_value.lower().endswith("!important"):
            css_value = css_value[: -len("!important")].strip()
        if not css_value:
            continue
        out.pop(prop, None)
        out[prop] = css_value
    return out


@dataclass(frozen=True)
class ComputedStyle:
    display: str = "inline"
    visibility: str = "visible"
    opacity: str = "1"

    @classmethod
    def from_declarations(
        cls,
        declarations: Mapping[str, str],
        *,
        inherited_visibility: str = "visible",
    ) -> "ComputedStyle":
        visibility = declarations.get("visibility", "").strip().lower()
        if not visibility or visibility in {"inherit", "unset"}:
            visibility = inherited_visibility
        elif visibility in {"initial", "revert"}:
            visibility = "visible"
        return cls(
            display=declarations.get("display", "inline").strip().lower() or "inline",
            visibility=visibility,
            opacity=declarations.get("opacity", "1").strip() or "1",
        )

    @property
    def opacity_is_zero(self) -> bool:
        text = self.opacity.strip()
        try:
            if text.endswith("%"):
                return float(text[:-1]) == 0.0
            return float(text) == 0.0
        except ValueError:
            return False

    def to_dict(self) -> dict[str, str]:
        return {
            "display": self.display,
            "visibility": self.visibility,
            "opacity": self.opacity,
        }
