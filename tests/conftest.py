from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
PYTHON_SRC = ROOT / "python"

if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))
else:
    sys.path.remove(str(PYTHON_SRC))
    sys.path.insert(0, str(PYTHON_SRC))


@pytest.fixture
def doc():
    """Parse an HTML fragment into a document."""
    from accname.dom import SoupDocument

    def _parse(html: str, *, url: str = ""):
        return SoupDocument.from_html(html, url=url)

    return _parse


@pytest.fixture
def element(doc):
    """Parse an HTML fragment and return the element matching ``selector``."""

    def _pick(html: str, selector: str):
        found = doc(html).select_one(selector)
        assert found is not None, f"{selector!r} matched nothing"
        return found

    return _pick
