"""Main-content extraction: tolerant parse, junk removal, selector heuristics."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, Comment, ParserRejectedMarkup, Tag

logger = logging.getLogger(__name__)

NON_CONTENT_TAGS = ("script", "style", "iframe", "noscript")

# Tried in order; the first non-empty match wins.
MAIN_CONTENT_SELECTORS = (
    "main",
    "article",
    "section",
    ".content",
    ".post",
    ".entry",
    "#main",
    "#content",
)


@dataclass(frozen=True)
class PageMetadata:
    """Document-level values used to build the Markdown header."""

    title: str = ""
    description: str = ""
    heading: str = ""


def _looks_binary(html: str | bytes) -> bool:
    sample = html[:1024]
    return (b"\x00" if isinstance(sample, bytes) else "\x00") in sample


def parse_document(html: str | bytes | None, encoding: str | None = None) -> BeautifulSoup:
    """Parse *html* and drop scripts, styles, frames and comments.

    Malformed markup is recovered by lxml. Byte input is decoded with
    *encoding* when given (usually the HTTP header charset), otherwise by
    BeautifulSoup's own detection. Input that is not text at all yields an
    empty document rather than an error.
    """
    if not html or _looks_binary(html):
        return BeautifulSoup("", "lxml")
    from_encoding = encoding if isinstance(html, bytes) else None
    try:
        soup = BeautifulSoup(html, "lxml", from_encoding=from_encoding)
    except ParserRejectedMarkup:
        logger.warning("parser rejected markup, using empty document", exc_info=True)
        return BeautifulSoup("", "lxml")

    for element in soup(list(NON_CONTENT_TAGS)):
        element.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    return soup


def _has_content(element: Tag) -> bool:
    return bool(element.get_text(strip=True)) or element.find("img") is not None


def select_main(soup: BeautifulSoup) -> Tag:
    """Return the element most likely to hold the page's main content."""
    for selector in MAIN_CONTENT_SELECTORS:
        candidate = soup.select_one(selector)
        if candidate is not None and _has_content(candidate):
            logger.debug("main content selected", extra={"selector": selector})
            return candidate
    return soup.body or soup


def extract_main(html: str | bytes | BeautifulSoup) -> str:
    """Return the inner HTML of the main-content element of *html*."""
    soup = html if isinstance(html, BeautifulSoup) else parse_document(html)
    return select_main(soup).decode_contents()


def extract_metadata(soup: BeautifulSoup) -> PageMetadata:
    """Read title, meta description and first ``<h1>`` from the full document."""
    title_tag = soup.find("title")
    meta = soup.find("meta", attrs={"name": "description"})
    h1 = soup.find("h1")

    description = ""
    if meta is not None:
        content = meta.get("content")
        if isinstance(content, str):
            description = content.strip()

    return PageMetadata(
        title=title_tag.get_text().strip() if title_tag else "",
        description=description,
        heading=h1.get_text().strip() if h1 else "",
    )
