from __future__ import annotations

from accname.tree import (
    LabelKind,
    find_associated_label,
    has_aria_hidden_content,
    has_implicit_label_parent,
    is_hidden,
    labelledby_targets_info,
    resolve_labelledby_ids,
    validate_idrefs,
)


def test_is_hidden_by_computed_style(element) -> None:
    assert is_hidden(element('<img src="a.png" style="display:none">', "img"))
    assert is_hidden(element('<div style="visibility:hidden"><img src="a.png"></div>', "img"))
    assert is_hidden(element('<img src="a.png" style="opacity: 0">', "img"))
    assert is_hidden(element('<img src="a.png" hidden>', "img"))
    assert not is_hidden(element('<img src="a.png">', "img"))


def test_is_hidden_by_zero_size_attributes(element) -> None:
    assert is_hidden(element('<img src="a.png" width="0" height="0">', "img"))
    assert not is_hidden(element('<img src="a.png" width="0" height="10">', "img"))


def test_inline_style_check_overrides_a_stale_snapshot(element) -> None:
    img = element(
        '<img src="a.png" data-accname-computed="display:inline;visibility:visible;opacity:1" style="display:none">',
        "img",
    )
    assert is_hidden(img)
    assert not is_hidden(img, inline_style_check=False)


def test_aria_hidden_content(element) -> None:
    assert has_aria_hidden_content(element('<span><i aria-hidden="true">x</i></span>', "span"))
    assert not has_aria_hidden_content(element('<span><i aria-hidden="true">x</i> Close</span>', "span"))
    assert not has_aria_hidden_content(element("<span>Close</span>", "span"))


def test_resolve_labelledby_joins_targets_and_records_broken_ids(element) -> None:
    button = element(
        '<span id="a">Delete</span><span id="b">  </span><span id="c">file</span>'
        '<button aria-labelledby="a missing b c">x</button>',
        "button",
    )
    resolution = resolve_labelledby_ids(button)
    assert resolution.present
    assert resolution.name == "Delete file"
    assert resolution.broken_ids == ("missing",)


def test_resolve_labelledby_absent_and_empty(element) -> None:
    assert not resolve_labelledby_ids(element("<button>x</button>", "button")).present
    empty = resolve_labelledby_ids(element('<button aria-labelledby="  ">x</button>', "button"))
    assert empty.present
    assert empty.name == ""
    assert empty.broken_ids == ()


def test_external_label_wins_over_wrapping_label(element) -> None:
    field = element(
        '<label for="q">Search the site</label><label>Wrapper <input id="q"></label>',
        "input",
    )
    label = find_associated_label(field)
    assert label.kind == LabelKind.EXTERNAL
    assert label.text == "Search the site"


def test_wrapping_label_text_excludes_the_control(element) -> None:
    select = element("<label>Country <select><option>France</option></select></label>", "select")
    label = find_associated_label(select)
    assert label.kind == LabelKind.WRAPPED
    assert label.text == "Country"
    assert has_implicit_label_parent(select)


def test_no_label(element) -> None:
    label = find_associated_label(element('<input id="x">', "input"))
    assert label.kind == LabelKind.NONE
    assert label.text == ""


def test_labelledby_targets_info_classifies_problems(element) -> None:
    field = element(
        '<span id="ok">Name</span><span id="blank"></span>'
        '<span id="hid"><i aria-hidden="true">*</i></span>'
        '<span id="empty" aria-label=" ">Shown</span>'
        '<input aria-labelledby="ok blank hid empty gone">',
        "input",
    )
    info = {entry["id"]: entry for entry in labelledby_targets_info(field)}
    assert info["ok"]["problem"] is None
    assert info["ok"]["name"] == "Name"
    assert info["blank"]["problem"] == "no-name"
    assert info["hid"]["problem"] == "aria-hidden-only"
    assert info["empty"]["problem"] == "empty-name"
    assert info["gone"]["exists"] is False


def test_validate_idrefs_lists_dangling_references(doc) -> None:
    document = doc(
        '<label for="nope">A</label>'
        '<input aria-describedby="help gone">'
        '<p id="help">Help</p>'
        '<img usemap="#shapes" src="m.png"><map name="shapes"></map>'
        '<img usemap="#lost" src="n.png">'
    )
    missing = validate_idrefs(document)
    assert {"attribute": "for", "id": "nope", "tag": "label"} in missing
    assert {"attribute": "aria-describedby", "id": "gone", "tag": "input"} in missing
    assert {"attribute": "usemap", "id": "lost", "tag": "img"} in missing
    assert len(missing) == 3
