from __future__ import annotations

import pytest

from accname.locator import CssPathLocator, XPathLocator, get_locator


def test_id_wins(element) -> None:
    assert CssPathLocator()(element('<button id="save" data-test="x">Save</button>', "button")) == "#save"


def test_unique_data_attribute(element) -> None:
    target = element('<div><span data-test="price">1</span><span data-test="tax">2</span></div>', "span")
    assert CssPathLocator()(target) == '[data-test="price"]'


def test_computed_style_stamp_is_not_a_locator(element) -> None:
    target = element('<p><b data-accname-computed="display:inline">x</b></p>', "b")
    assert CssPathLocator()(target) == "p > b"


def test_unique_form_name(element) -> None:
    assert CssPathLocator()(element('<form><input name="email"></form>', "input")) == 'input[name="email"]'


def test_duplicate_form_name_falls_back_to_path(doc) -> None:
    document = doc('<form><input name="q"><input name="q"></form>')
    second = document.select("input")[1]
    assert CssPathLocator()(second) == "form > input:nth-of-type(2)"


def test_path_stops_at_identified_ancestor(doc) -> None:
    document = doc('<section id="intro"><p>a</p><p class="lead ab is-active 3col">b</p></section>')
    second = document.select("p")[1]
    assert CssPathLocator()(second) == "section#intro > p.lead:nth-of-type(2)"


def test_path_from_body(doc) -> None:
    document = doc("<html><body><main><ul><li>a</li><li>b</li></ul></main></body></html>")
    item = document.select("li")[0]
    assert CssPathLocator()(item) == "body > main > ul > li:nth-of-type(1)"


def test_xpath(doc) -> None:
    document = doc("<html><body><div><a href='/'>a</a><a href='/b'>b</a></div></body></html>")
    second = document.select("a")[1]
    assert XPathLocator()(second) == "/html/body/div/a[2]"
    assert XPathLocator()(doc('<p id="x"></p>').select_one("p")) == '//*[@id="x"]'


def test_get_locator() -> None:
    assert isinstance(get_locator(), CssPathLocator)
    assert isinstance(get_locator(" XPath "), XPathLocator)
    with pytest.raises(ValueError, match="Unknown locator"):
        get_locator("sizzle")
