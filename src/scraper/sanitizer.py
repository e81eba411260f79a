"""Structural HTML sanitizer: restricts a fragment to a fixed tag/attribute allow-list."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from bs4.element import PreformattedString

ALLOWED_TAGS = frozenset({
    "h1", "h2", "h3", "h4", "h5", "h6",
    "p", "br",
    "ul", "ol", "li",
    "a", "img",
    "code", "pre", "blockquote",
    "em", "i", "strong", "b", "del", "s",
    "table", "thead", "tbody", "tr", "td", "th",
})

ALLOWED_ATTRIBUTES = frozenset({"href", "src", "alt"})

# Disallowed elements whose text is never page content; removed with their subtree.
# Any other disallowed element is unwrapped and its children kept.
DROP_WITH_CONTENT = frozenset({
    "script", "style", "iframe", "noscript", "template",
    "object", "embed", "applet", "frame", "frameset",
    "svg", "math", "head", "title", "meta", "link",
    "textarea", "select",
})

_URI_ATTRIBUTES = frozenset({"href", "src"})
_UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:")
_LANGUAGE_CLASS = re.compile(r"^language-[\w+#.-]+$")


def _is_safe_uri(attribute: str, value: str) -> bool:
    compact = "".join(value.split()).lower()
    if attribute == "src" and compact.startswith("data:image/"):
        return True
    return not compact.startswith(_UNSAFE_SCHEMES)


def _filter_attributes(tag_name: str, attrs: dict) -> dict:
    kept: dict = {}
    for attribute, value in attrs.items():
        key = attribute.lower()
        if key == "class" and tag_name == "code":
            tokens = value if isinstance(value, list) else str(value).split()
            languages = [token for token in tokens if _LANGUAGE_CLASS.match(token)]
            if languages:
                kept["class"] = languages
            continue
        if key not in ALLOWED_ATTRIBUTES:
            continue
        if isinstance(value, list):
            value = " ".join(value)
        if key in _URI_ATTRIBUTES and not _is_safe_uri(key, value):
            continue
        kept[key] = value
    return kept


def sanitize(fragment_html: str) -> str:
    """Return *fragment_html* reduced to the allowed tags and attributes.

    Comments, event handlers and inline styles never survive. ``code``
    elements keep only ``language-*`` class tokens so fenced code blocks can
    be annotated downstream.
    """
    if not fragment_html or not fragment_html.strip():
        return ""

    soup = BeautifulSoup(fragment_html, "html.parser")

    for node in soup.find_all(string=lambda text: isinstance(text, PreformattedString)):
        node.extract()

    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        name = tag.name.lower()
        if name in DROP_WITH_CONTENT:
            tag.decompose()
        elif name not in ALLOWED_TAGS:
            tag.unwrap()
        else:
            tag.attrs = _filter_attributes(name, tag.attrs)

    return str(soup)
