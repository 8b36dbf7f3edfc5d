from __future__ import annotations

import pytest

from accname.evaluators import evaluate_button, evaluate_link
from accname.evaluators.buttons import button_type
from accname.rules import HIDDEN_DETAIL, HIDDEN_SUFFIX
from accname.types import Verdict


def test_button_with_blank_aria_label_is_empty_not_missing(element) -> None:
    result = evaluate_button(element('<button aria-label="   "></button>', "button"))
    assert result.verdict == Verdict.FAIL
    assert "empty or whitespace-only accessible name" in result.description
    assert "missing" not in result.description


@pytest.mark.parametrize(
    "markup,verdict,fragment",
    [
        ("<button></button>", Verdict.FAIL, "Button is missing an accessible name"),
        ('<button><img src="x.png"></button>', Verdict.FAIL, "contains only an image or icon"),
        ("<button>   </button>", Verdict.FAIL, "contains only whitespace"),
        ("<button>×</button>", Verdict.FAIL, 'has only an icon ("×")'),
        ('<button><i class="fa fa-trash"></i></button>', Verdict.FAIL, "is missing an accessible name"),
        ("<button>...</button>", Verdict.FAIL, 'punctuation-only accessible name "..."'),
        ('<button aria-label=",">x</button>', Verdict.FAIL, "punctuation-only aria-label"),
        ("<button>Submit</button>", Verdict.WARN, 'text "Submit" is too generic'),
        ("<button>Save draft</button>", Verdict.PASS, "Button has an accessible name"),
        ('<button aria-label="Delete message"><i class="fa fa-trash"></i></button>', Verdict.PASS, "has an accessible name"),
    ],
)
def test_button_rules(element, markup: str, verdict: str, fragment: str) -> None:
    result = evaluate_button(element(markup, "button"))
    assert result.verdict == verdict
    assert fragment in result.description


@pytest.mark.parametrize(
    "markup,verdict,fragment",
    [
        ('<input type="submit">', Verdict.FAIL, "Submit input is missing value attribute"),
        ('<input type="submit" aria-label="Send order">', Verdict.PASS, "Submit input has an accessible name"),
        ('<input type="button" value="→">', Verdict.FAIL, 'has only an icon ("→")'),
        ('<input type="reset" value="Reset form">', Verdict.PASS, "Reset input has an accessible name"),
        ('<input type="submit" value="Go">', Verdict.WARN, "too generic"),
    ],
)
def test_input_button_rules(element, markup: str, verdict: str, fragment: str) -> None:
    result = evaluate_button(element(markup, "input"))
    assert result.verdict == verdict
    assert fragment in result.description


def test_aria_button(element) -> None:
    target = element('<div role="button">Open menu</div>', "div")
    assert button_type(target) == "ARIA button"
    result = evaluate_button(target)
    assert result.verdict == Verdict.PASS
    assert result.description == "ARIA button has an accessible name"


def test_hidden_icon_button_is_downgraded(element) -> None:
    result = evaluate_button(element('<button style="opacity:0">×</button>', "button"))
    assert result.verdict == Verdict.WARN
    assert result.description.endswith(HIDDEN_SUFFIX)


@pytest.mark.parametrize(
    "markup,verdict,description",
    [
        ('<a href="/"></a>', Verdict.FAIL, "Link is missing an accessible name - Users cannot tell where it leads"),
        ('<a href="/"><img src="logo.png"></a>', Verdict.FAIL, "Link contains an image without alt text - The link has no accessible name"),
        ('<a href="/"><img src="logo.png" alt="Acme home"></a>', Verdict.PASS, "Link has an accessible name from image alt text"),
        ('<a href="/more">Read more</a>', Verdict.WARN, "Generic link text"),
        ('<a href="https://example.com">https://example.com</a>', Verdict.WARN, "URL as text"),
        ('<a href="/next">→</a>', Verdict.FAIL, "Icon-only link"),
        ('<a href="/x">!!</a>', Verdict.FAIL, "Punctuation-only accessible name"),
        ('<a href="/docs">Installation guide</a>', Verdict.PASS, "Link has an accessible name"),
    ],
)
def test_link_rules(element, markup: str, verdict: str, description: str) -> None:
    result = evaluate_link(element(markup, "a"))
    assert result.verdict == verdict
    assert result.description == description


def test_link_with_broken_labelledby(element) -> None:
    result = evaluate_link(element('<a href="/x" aria-labelledby="nope">Docs</a>', "a"))
    assert result.verdict == Verdict.FAIL
    assert result.description == "Broken aria-labelledby attribute"
    assert '"nope"' in result.detail
    assert result.resolved_name == "Docs"


def test_hidden_link_keeps_its_detail(element) -> None:
    result = evaluate_link(element('<a href="/" style="display:none"></a>', "a"))
    assert result.verdict == Verdict.WARN
    assert result.description.endswith(HIDDEN_SUFFIX)
    assert result.detail.startswith("Links need text content")
    assert result.detail.endswith(HIDDEN_DETAIL)


def test_aria_link(element) -> None:
    result = evaluate_link(element('<span role="link">Pricing</span>', "span"))
    assert result.element_type == "ARIA link"
    assert result.verdict == Verdict.PASS
    assert result.extra["href"] is None
