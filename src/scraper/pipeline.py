"""Fetch → extract → sanitize → convert → assemble."""

from __future__ import annotations

import logging

from .assembler import assemble
from .converter import to_markdown
from .extractor import extract_main, extract_metadata, parse_document
from .fetcher import PageFetcher
from .pool import WorkerPool
from .sanitizer import sanitize

logger = logging.getLogger(__name__)


def render_page(html: str | bytes, encoding: str | None = None) -> str:
    """Turn a raw HTML document into the final Markdown text.

    Module-level and argument-only so it can run in a worker process.
    """
    document = parse_document(html, encoding)
    metadata = extract_metadata(document)
    fragment = extract_main(document)
    body = to_markdown(sanitize(fragment))
    return assemble(metadata.title, metadata.description, metadata.heading, body)


class ScrapePipeline:
    """Fetches a page on the event loop and renders it on the pool's executor."""

    def __init__(self, fetcher: PageFetcher, pool: WorkerPool) -> None:
        self._fetcher = fetcher
        self._pool = pool

    async def run(self, url: str) -> str:
        page = await self._fetcher.fetch(url)
        markdown = await self._pool.run_blocking(render_page, page.body, page.encoding)
        logger.debug(
            "page rendered",
            extra={"url": url, "html_bytes": len(page.body), "markdown_chars": len(markdown)},
        )
        return markdown
