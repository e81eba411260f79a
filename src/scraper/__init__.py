"""Web page → Markdown scraping pipeline."""

from __future__ import annotations

from .assembler import assemble
from .converter import PageMarkdownConverter, to_markdown
from .dispatcher import ScrapeDispatcher, validate_url
from .errors import (
    FetchConnectionError,
    FetchError,
    FetchTimeoutError,
    HttpStatusError,
    InvalidUrlError,
    ParseError,
    PoolSaturatedError,
    ScrapeError,
)
from .extractor import PageMetadata, extract_main, extract_metadata, parse_document
from .fetcher import FetchResult, PageFetcher
from .pipeline import ScrapePipeline, render_page
from .pool import WorkerPool
from .sanitizer import sanitize

__all__ = [
    "FetchConnectionError",
    "FetchError",
    "FetchResult",
    "FetchTimeoutError",
    "HttpStatusError",
    "InvalidUrlError",
    "PageFetcher",
    "PageMarkdownConverter",
    "PageMetadata",
    "ParseError",
    "PoolSaturatedError",
    "ScrapeDispatcher",
    "ScrapeError",
    "ScrapePipeline",
    "WorkerPool",
    "assemble",
    "extract_main",
    "extract_metadata",
    "parse_document",
    "render_page",
    "sanitize",
    "to_markdown",
    "validate_url",
]
