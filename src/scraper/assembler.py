"""Final Markdown assembly: header block plus converted body."""

from __future__ import annotations

import re

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def assemble(title: str, meta_description: str, h1: str, markdown_body: str) -> str:
    """Prefix *markdown_body* with the page header and normalise blank lines.

    The description line is omitted when empty, and the ``##`` heading when
    it is empty or repeats the title.
    """
    parts = [f"# {title}\n\n"]
    if meta_description:
        parts.append(f"*{meta_description}*\n\n")
    if h1 and h1 != title:
        parts.append(f"## {h1}\n\n")
    parts.append(markdown_body)
    return _EXCESS_NEWLINES.sub("\n\n", "".join(parts)).strip()
