from __future__ import annotations

import pytest

from accname.style import ComputedStyle, StyleWarning, parse_style_declarations


def test_parse_style_declarations_last_declaration_wins() -> None:
    decls = parse_style_declarations("display: block; color: red; DISPLAY: none !important")
    assert decls == {"color": "red", "display": "none"}
    assert list(decls) == ["color", "display"]


def test_parse_style_declarations_handles_empty_input() -> None:
    assert parse_style_declarations(None) == {}
    assert parse_style_declarations("  ;; ") == {}


def test_parse_style_declarations_warns_on_malformed_fragments() -> None:
    with pytest.warns(StyleWarning, match="without ':'"):
        decls = parse_style_declarations("display none; opacity: 0")
    assert decls == {"opacity": "0"}

    with pytest.warns(StyleWarning, match="empty property name"):
        assert parse_style_declarations(": block") == {}


def test_custom_properties_keep_their_case() -> None:
    assert parse_style_declarations("--Brand-Color: #fff") == {"--Brand-Color": "#fff"}


def test_computed_style_inherits_visibility_only() -> None:
    style = ComputedStyle.from_declarations({}, inherited_visibility="hidden")
    assert style.visibility == "hidden"
    assert style.display == "inline"

    reset = ComputedStyle.from_declarations({"visibility": "initial"}, inherited_visibility="hidden")
    assert reset.visibility == "visible"

    inherited = ComputedStyle.from_declarations({"visibility": "inherit"}, inherited_visibility="hidden")
    assert inherited.visibility == "hidden"


@pytest.mark.parametrize("value,expected", [("0", True), ("0.0", True), ("0%", True), ("0.5", False), ("auto", False)])
def test_opacity_is_zero(value: str, expected: bool) -> None:
    assert ComputedStyle(opacity=value).opacity_is_zero is expected


def test_computed_style_to_dict() -> None:
    assert ComputedStyle(display="block").to_dict() == {"display": "block", "visibility": "visible", "opacity": "1"}
