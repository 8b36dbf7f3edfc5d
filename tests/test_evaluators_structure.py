from __future__ import annotations

import pytest

from accname.evaluators import (
    evaluate_aria_widget,
    evaluate_dialog,
    evaluate_iframe,
    evaluate_landmark,
    evaluate_media,
    evaluate_meter,
    evaluate_progress,
    evaluate_tabindex_element,
)
from accname.evaluators.embedded import IFRAME_HIDDEN_DETAIL
from accname.evaluators.focusable import is_tabindex_candidate
from accname.evaluators.landmarks import count_landmarks, landmark_type
from accname.evaluators.ranges import meter_percent, progress_percent
from accname.rules import HIDDEN_SUFFIX
from accname.types import Verdict


def test_single_unnamed_nav_warns(element) -> None:
    result = evaluate_landmark(element("<nav></nav>", "nav"))
    assert result.verdict == Verdict.WARN
    assert "should have an accessible name for better user experience" in result.description
    assert result.extra["landmarkType"] == "navigation"


def test_single_banner_needs_no_name(element) -> None:
    result = evaluate_landmark(element("<header></header><main></main>", "header"))
    assert result.verdict == Verdict.PASS
    assert result.description == "Single banner landmark doesn't require an accessible name"


def test_repeated_unnamed_landmarks_fail(doc) -> None:
    document = doc('<nav id="a"></nav><div role="navigation" id="b"></div>')
    first = document.get_element_by_id("a")
    assert count_landmarks(first, "navigation") == 2
    result = evaluate_landmark(first)
    assert result.verdict == Verdict.FAIL
    assert result.description.startswith("Multiple navigation landmarks found without an accessible name")


@pytest.mark.parametrize(
    "markup,selector,verdict,description",
    [
        ('<div role="region" aria-label=""></div>', "div", Verdict.FAIL, "Region landmark needs an accessible name"),
        ("<aside></aside>", "aside", Verdict.PASS, "Complementary landmark doesn't require an accessible name"),
        ('<nav aria-label="Primary"></nav>', "nav", Verdict.PASS, "Navigation landmark has an accessible name"),
        ('<div role="search" title="Site search"></div>', "div", Verdict.WARN, "Search landmark uses only the title"),
        ('<form aria-label="!!"></form>', "form", Verdict.FAIL, "Form landmark has punctuation-only accessible name"),
        ('<section aria-labelledby="gone"></section>', "section", Verdict.FAIL, "Region landmark has aria-labelledby referencing"),
    ],
)
def test_landmark_rules(element, markup: str, selector: str, verdict: str, description: str) -> None:
    result = evaluate_landmark(element(markup, selector))
    assert result.verdict == verdict
    assert result.description.startswith(description)


def test_landmark_type_prefers_explicit_role(element) -> None:
    assert landmark_type(element('<header role="banner"></header>', "header")) == "banner"
    assert landmark_type(element("<footer></footer>", "footer")) == "contentinfo"


def test_hidden_duplicate_landmark_is_downgraded(doc) -> None:
    document = doc('<nav id="a" style="display:none"></nav><nav id="b"></nav>')
    result = evaluate_landmark(document.get_element_by_id("a"))
    assert result.verdict == Verdict.WARN
    assert result.description.endswith(HIDDEN_SUFFIX)


def test_checkbox_widget_without_name(element) -> None:
    result = evaluate_aria_widget(element('<div role="checkbox" aria-checked="false"></div>', "div"))
    assert result.verdict == Verdict.FAIL
    assert result.description.startswith("Checkbox widget is missing an accessible name - Add a <label>")
    assert result.extra["widgetRole"] == "checkbox"


def test_named_slider_passes(element) -> None:
    result = evaluate_aria_widget(element('<div role="slider" aria-label="Volume"></div>', "div"))
    assert result.verdict == Verdict.PASS
    assert result.description == "Slider widget has an accessible name"


def test_icon_only_tab(element) -> None:
    result = evaluate_aria_widget(element('<div role="tab"><i aria-hidden="true">icon-star</i></div>', "div"))
    assert result.verdict == Verdict.FAIL
    assert result.description == "Icon-only tab without accessible name"


def test_tabpanel_referencing_hidden_only_tab_clears_name(doc) -> None:
    document = doc(
        '<div role="tab" id="t1"><i aria-hidden="true">icon-star</i></div>'
        '<div role="tabpanel" id="p1" aria-labelledby="t1">Content</div>'
    )
    result = evaluate_aria_widget(document.get_element_by_id("p1"))
    assert result.verdict == Verdict.FAIL
    assert result.description == "Tabpanel references element with only aria-hidden content"
    assert result.display_name == ""


def test_tabpanel_referencing_named_tab_passes(doc) -> None:
    document = doc(
        '<div role="tab" id="t1">Overview</div>'
        '<div role="tabpanel" id="p1" aria-labelledby="t1">Content</div>'
    )
    result = evaluate_aria_widget(document.get_element_by_id("p1"))
    assert result.verdict == Verdict.PASS
    assert result.resolved_name == "Overview"


@pytest.mark.parametrize(
    "markup,verdict,description",
    [
        ('<div role="dialog"></div>', Verdict.FAIL, "Dialog missing accessible name"),
        ('<div role="dialog" aria-label="Settings"><h2>Settings</h2></div>', Verdict.WARN, "Dialog has redundant accessible name"),
        ('<div role="dialog" aria-labelledby="dh"><h2 id="dh">Settings</h2></div>', Verdict.PASS, "Dialog has appropriate accessible name"),
        ('<div role="alertdialog" aria-labelledby="gone"></div>', Verdict.FAIL, "Dialog has broken aria-labelledby references"),
    ],
)
def test_dialog_rules(element, markup: str, verdict: str, description: str) -> None:
    result = evaluate_dialog(element(markup, '[role="dialog"], [role="alertdialog"]'))
    assert result.verdict == verdict
    assert result.description == description


@pytest.mark.parametrize(
    "markup,expected",
    [
        ('<progress value="0.625" max="1"></progress>', "63%"),
        ('<progress value="30"></progress>', "30%"),
        ("<progress></progress>", "Unknown"),
        ('<progress value="5" max="0"></progress>', "Unknown"),
        ('<div role="progressbar" aria-valuenow="40"></div>', "40%"),
    ],
)
def test_progress_percent(element, markup: str, expected: str) -> None:
    assert progress_percent(element(markup, 'progress, [role="progressbar"]')) == expected


@pytest.mark.parametrize(
    "markup,expected",
    [
        ('<meter value="0.5"></meter>', "50%"),
        ('<meter min="0" max="10" value="3"></meter>', "30%"),
        ('<meter min="5" max="5" value="5"></meter>', "Unknown"),
        ('<meter value="abc"></meter>', "Unknown"),
        ('<meter value="nan"></meter>', "Unknown"),
    ],
)
def test_meter_percent(element, markup: str, expected: str) -> None:
    assert meter_percent(element(markup, "meter")) == expected


def test_progress_rules(element) -> None:
    missing = evaluate_progress(element('<progress value="3" max="10"></progress>', "progress"))
    assert missing.verdict == Verdict.FAIL
    assert missing.detail.startswith("Current value: 30%.")

    labelled = evaluate_progress(
        element('<label for="p">Upload</label><progress id="p" value="30" max="100"></progress>', "progress")
    )
    assert labelled.verdict == Verdict.PASS
    assert labelled.detail == "Current value: 30%."
    assert labelled.extra["percentValue"] == "30%"

    wrapped = evaluate_progress(element('<label>Upload <progress id="p" value="1" max="2"></progress></label>', "progress"))
    assert wrapped.verdict == Verdict.WARN
    assert "wrapping label" in wrapped.description


def test_meter_rules(element) -> None:
    result = evaluate_meter(element('<meter aria-label="Disk usage" value="0.8"></meter>', "meter"))
    assert result.verdict == Verdict.PASS
    assert result.description == "Meter has an accessible name"

    generic = evaluate_meter(element('<meter aria-label="field" value="0.8"></meter>', "meter"))
    assert generic.verdict == Verdict.WARN


@pytest.mark.parametrize(
    "markup,verdict,fragment",
    [
        ('<iframe src="a.html"></iframe>', Verdict.FAIL, "Iframe is missing an accessible name"),
        ('<iframe src="a.html" title="Map"></iframe>', Verdict.WARN, "very short accessible name"),
        ('<iframe src="a.html" title="Store location map"></iframe>', Verdict.PASS, "Iframe has an accessible name"),
    ],
)
def test_iframe_rules(element, markup: str, verdict: str, fragment: str) -> None:
    result = evaluate_iframe(element(markup, "iframe"))
    assert result.verdict == verdict
    assert fragment in result.description


def test_zero_size_iframe_uses_its_own_hidden_detail(element) -> None:
    result = evaluate_iframe(element('<iframe src="t.html" width="0" height="0"></iframe>', "iframe"))
    assert result.verdict == Verdict.WARN
    assert result.detail == IFRAME_HIDDEN_DETAIL


def test_media_rules(element) -> None:
    video = evaluate_media(element("<video controls></video>", "video"))
    assert video.verdict == Verdict.FAIL
    assert video.description.startswith("Video player is missing an accessible name")

    audio = evaluate_media(element('<audio controls aria-label="Podcast episode 12"></audio>', "audio"))
    assert audio.verdict == Verdict.PASS
    assert audio.description == "Audio player has an accessible name"


@pytest.mark.parametrize(
    "markup,selector",
    [
        ('<button tabindex="0">Go</button>', "button"),
        ('<span tabindex="-1"></span>', "span"),
        ('<div role="button" tabindex="0"></div>', "div"),
        ('<div tabindex="0">Some text</div>', "div"),
        ('<h2 tabindex="0">Heading</h2>', "h2"),
    ],
)
def test_tabindex_skips_elements_judged_elsewhere(element, markup: str, selector: str) -> None:
    target = element(markup, selector)
    assert not is_tabindex_candidate(target)
    assert evaluate_tabindex_element(target) is None


def test_tabindex_element_without_name_fails(element) -> None:
    result = evaluate_tabindex_element(element('<div tabindex="0"></div>', "div"))
    assert result.verdict == Verdict.FAIL
    assert result.description.startswith("Element with tabindex=0 is missing an accessible name")
    assert result.extra["tabindex"] == "0"


def test_tabindex_element_rules(element) -> None:
    blank = evaluate_tabindex_element(element('<div tabindex="0" aria-label=" "></div>', "div"))
    assert blank.verdict == Verdict.FAIL
    assert "empty or whitespace-only accessible name" in blank.description

    named = evaluate_tabindex_element(element('<section tabindex="0" aria-label="Summary"></section>', "section"))
    assert named.verdict == Verdict.PASS
