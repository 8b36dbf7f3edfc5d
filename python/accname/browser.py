# SPDX-License-Identifier: AGPL-3.0-only
"""Snapshot a live page with Playwright.

The page is loaded in headless Chromium, every element is stamped with its
computed ``display``/``visibility``/``opacity`` under
``data-accname-computed`` and the serialized DOM is parsed into a
:class:`~accname.dom.SoupDocument`. Playwright is an optional extra
(``pip install accname[browser]``).
"""
from __future__ import annotations

from .dom import SoupDocument
from .style import COMPUTED_STYLE_ATTR


class BrowserUnavailableError(RuntimeError):
    """Raised when Playwright or its browser binary is missing."""


_STAMP_SCRIPT = """
(attr) => {
  for (const el of document.querySelectorAll('*')) {
    const cs = window.getComputedStyle(el);
    el.setAttribute(attr,
      'display:' + cs.display + ';visibility:' + cs.visibility + ';opacity:' + cs.opacity);
  }
  return document.querySelectorAll('*').length;
}
"""


def is_url(target: str) -> bool:
    lowered = str(target).strip().lower()
    return lowered.startswith(("http://", "https://", "file://"))


def snapshot_url(url: str, *, timeout_ms: int = 30000) -> SoupDocument:
    """Load ``url`` and return its rendered DOM with computed styles stamped."""
    try:
        from playwright.sync_api import Error as PlaywrightError
        from playwright.sync_api import sync_playwright
    except ImportError as exc:
        raise BrowserUnavailableError(
            "Checking live URLs requires Playwright: pip install 'accname[browser]' "
            "&& playwright install chromium"
        ) from exc

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            try:
                page = browser.new_page()
                page.goto(url, wait_until="load", timeout=timeout_ms)
                page.evaluate(_STAMP_SCRIPT, COMPUTED_STYLE_ATTR)
                content = page.content()
                final_url = page.url
            finally:
                browser.close()
    except PlaywrightError as exc:
        raise BrowserUnavailableError(f"Could not snapshot {url}: {exc}") from exc
    return SoupDocument.from_html(content, url=final_url)
