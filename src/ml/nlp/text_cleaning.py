"""
Text cleaning helpers for fetched résumé content.
"""

import re

from bs4 import BeautifulSoup

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Replace every whitespace run with a single space and trim."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def strip_html(html: str) -> str:
    """
    Visible text of an HTML page.

    Script and style blocks are dropped entirely, every tag becomes a
    separator, and whitespace is collapsed.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style"]):
        element.decompose()

    return collapse_whitespace(soup.get_text(separator=" "))
