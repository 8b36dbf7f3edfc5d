from __future__ import annotations

import pytest

from accname.evaluators import (
    evaluate_fieldset,
    evaluate_form,
    evaluate_form_control,
    evaluate_radio_button,
    evaluate_select,
)
from accname.evaluators.forms import form_control_type
from accname.rules import HIDDEN_SUFFIX
from accname.types import Verdict


@pytest.mark.parametrize(
    "markup,selector,verdict,fragment",
    [
        ('<input type="text">', "input", Verdict.FAIL, "Input is missing an accessible name"),
        ('<input type="email" placeholder="you@example.com">', "input", Verdict.FAIL, "has placeholder but no accessible name"),
        ('<label for="e">Email</label><input id="e" type="email">', "input", Verdict.PASS, "Input has an accessible name"),
        ('<label for="n">Name</label><input id="n">', "input", Verdict.FAIL, 'generic accessible name "Name"'),
        ('<input aria-label="www.example.com">', "input", Verdict.FAIL, "uses a URL as its accessible name"),
        ('<input aria-label="avatar.png" type="file">', "input", Verdict.FAIL, "uses a filename"),
        ('<input aria-label="--">', "input", Verdict.FAIL, "punctuation-only accessible name"),
        ('<input title="Search">', "input", Verdict.WARN, "uses only the title attribute"),
        ('<textarea aria-label=" "></textarea>', "textarea", Verdict.FAIL, "Textarea has empty or whitespace-only"),
        ('<div role="textbox"></div>', "div", Verdict.FAIL, "ARIA textbox is missing an accessible name"),
    ],
)
def test_form_control_rules(element, markup: str, selector: str, verdict: str, fragment: str) -> None:
    result = evaluate_form_control(element(markup, selector))
    assert result.verdict == verdict
    assert fragment in result.description


def test_wrapping_label_warns_about_voice_control(element) -> None:
    result = evaluate_form_control(element('<label>Email address <input id="e"></label>', "input"))
    assert result.verdict == Verdict.WARN
    assert "uses implicit label" in result.description
    assert result.resolved_name == "Email address"


def test_hidden_unlabelled_input_is_a_warning(element) -> None:
    result = evaluate_form_control(element('<input type="text" style="visibility: hidden">', "input"))
    assert result.verdict == Verdict.WARN
    assert result.description == "Input is missing an accessible name - Users cannot identify its purpose" + HIDDEN_SUFFIX


def test_form_control_type_labels() -> None:
    from accname.dom import SoupDocument

    document = SoupDocument.from_html('<input><textarea></textarea><select></select><div role="textbox"></div>')
    assert [form_control_type(e) for e in document.select("input, textarea, select, div")] == [
        "Input",
        "Textarea",
        "Select",
        "ARIA textbox",
    ]


def test_radio_outside_a_group_fails_even_with_a_valid_name(element) -> None:
    result = evaluate_radio_button(element('<label for="r1">Option A</label><input type="radio" id="r1">', "input"))
    assert result.verdict == Verdict.FAIL
    assert "not contained within a fieldset or role=radiogroup" in result.description
    assert result.resolved_name == "Option A"
    assert result.extra["inGroup"] is False


def test_radio_inside_fieldset_or_radiogroup_passes(element) -> None:
    in_fieldset = element(
        '<fieldset><legend>Size</legend><label for="s">Small</label><input type="radio" id="s" name="size"></fieldset>',
        "input",
    )
    in_group = element(
        '<div role="radiogroup" aria-label="Size"><input type="radio" aria-label="Large" name="size"></div>',
        "input",
    )
    assert evaluate_radio_button(in_fieldset).verdict == Verdict.PASS
    assert evaluate_radio_button(in_group).verdict == Verdict.PASS


def test_unnamed_radio_reports_the_name_failure_first(element) -> None:
    result = evaluate_radio_button(element('<input type="radio">', "input"))
    assert result.verdict == Verdict.FAIL
    assert "missing an accessible name" in result.description


def test_select_with_empty_first_option_fails(element) -> None:
    select = element(
        '<label for="c">Country</label><select id="c"><option></option><option>France</option></select>',
        "select",
    )
    result = evaluate_select(select)
    assert result.verdict == Verdict.FAIL
    assert "empty first option" in result.description
    assert result.extra["optionCount"] == 2


def test_select_with_whitespace_option_fails(element) -> None:
    select = element('<select aria-label="Country"><option>Choose</option><option>  </option></select>', "select")
    result = evaluate_select(select)
    assert result.verdict == Verdict.FAIL
    assert "only whitespace" in result.description


def test_select_name_failure_short_circuits(element) -> None:
    result = evaluate_select(element("<select><option></option></select>", "select"))
    assert "Select is missing an accessible name" in result.description


def test_named_select_passes(element) -> None:
    result = evaluate_select(element('<select aria-label="Country"><option>France</option></select>', "select"))
    assert result.verdict == Verdict.PASS


def test_fieldset_with_legend_and_aria_label_warns(element) -> None:
    fieldset = element('<fieldset aria-label="Pay"><legend>Payment</legend><input></fieldset>', "fieldset")
    result = evaluate_fieldset(fieldset)
    assert result.resolved_name == "Payment"
    assert result.verdict == Verdict.WARN
    assert "both legend and aria-label" in result.description


def test_fieldset_legend_must_come_first(element) -> None:
    result = evaluate_fieldset(element("<fieldset><input><legend>Payment</legend></fieldset>", "fieldset"))
    assert result.verdict == Verdict.FAIL
    assert "legend that is not its first child" in result.description
    assert result.extra["hasLegend"] is True
    assert result.extra["legendIsFirstChild"] is False


@pytest.mark.parametrize(
    "markup,verdict,fragment",
    [
        ("<fieldset><input></fieldset>", Verdict.FAIL, "Fieldset is missing an accessible name"),
        ("<fieldset><legend> </legend><input></fieldset>", Verdict.FAIL, "Fieldset has an empty legend"),
        ('<fieldset aria-label=" "><input></fieldset>', Verdict.FAIL, "empty or whitespace-only aria-label"),
        ('<fieldset aria-labelledby="gone"><input></fieldset>', Verdict.FAIL, "non-existent IDs"),
        ('<fieldset aria-labelledby="h"><p id="h"></p><input></fieldset>', Verdict.FAIL, "referencing elements with empty content"),
        ('<div role="group" aria-label="Shipping address"><input></div>', Verdict.PASS, "Group has a proper accessible name"),
    ],
)
def test_fieldset_rules(element, markup: str, verdict: str, fragment: str) -> None:
    target = element(markup, 'fieldset, [role="group"]')
    result = evaluate_fieldset(target)
    assert result.verdict == verdict
    assert fragment in result.description


def test_form_rules(element) -> None:
    unnamed = evaluate_form(element("<form><input></form>", "form"))
    assert unnamed.verdict == Verdict.FAIL
    assert unnamed.description.startswith("Form is missing an accessible name")

    named = evaluate_form(element('<form aria-label="Newsletter signup"></form>', "form"))
    assert named.verdict == Verdict.PASS

    empty_ref = evaluate_form(element('<form aria-labelledby="h"><h2 id="h"></h2></form>', "form"))
    assert empty_ref.verdict == Verdict.FAIL
    assert "empty content" in empty_ref.description

    role_form = evaluate_form(element('<div role="form" aria-label="  "></div>', "div"))
    assert role_form.element_type == 'Element with role="form"'
    assert "empty or whitespace-only aria-label" in role_form.description
