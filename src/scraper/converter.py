"""HTML → Markdown conversion with the service's formatting rules."""

from __future__ import annotations

from markdownify import ATX, MarkdownConverter, chomp

_LANGUAGE_PREFIX = "language-"


def code_language(el) -> str:
    """Return ``<lang>`` from a ``language-<lang>`` class on a ``pre`` or its ``code``."""
    for node in (el, el.find("code")):
        if node is None:
            continue
        for token in node.get("class") or []:
            if token.startswith(_LANGUAGE_PREFIX) and len(token) > len(_LANGUAGE_PREFIX):
                return token[len(_LANGUAGE_PREFIX):]
    return ""


class PageMarkdownConverter(MarkdownConverter):
    """markdownify converter with overridden link, image, quote and emphasis rules."""

    class Options(MarkdownConverter.DefaultOptions):
        heading_style = ATX
        bullets = "-"
        code_language_callback = staticmethod(code_language)

    def convert_a(self, el, text, parent_tags):
        if "_noformat" in parent_tags:
            return text
        prefix, suffix, text = chomp(text)
        if not text:
            return ""
        href = el.get("href")
        if not href:
            return f"{prefix}{text}{suffix}"
        return f"{prefix}[{text}]({href}){suffix}"

    def convert_img(self, el, text, parent_tags):
        alt = el.get("alt") or ""
        src = el.get("src") or ""
        return f"![{alt}]({src})"

    def convert_blockquote(self, el, text, parent_tags):
        text = (text or "").strip()
        if not text:
            return "\n"
        if "_inline" in parent_tags:
            return f" {text} "
        return "\n\n> " + text.replace("\n", "\n> ") + "\n\n"

    def convert_em(self, el, text, parent_tags):
        if "_noformat" in parent_tags:
            return text
        prefix, suffix, text = chomp(text)
        if not text:
            return ""
        return f"{prefix}_{text}_{suffix}"

    convert_i = convert_em


def to_markdown(sanitized_html: str, converter: MarkdownConverter | None = None) -> str:
    """Convert sanitized HTML to Markdown; blank input gives ``""``."""
    if not sanitized_html or not sanitized_html.strip():
        return ""
    converter = converter or PageMarkdownConverter()
    return converter.convert(sanitized_html).strip()
