"""Scrape dispatcher: URL validation, cache lookup, pool submission."""

from __future__ import annotations

import ipaddress
import logging
import re
import time
from typing import Any
from urllib.parse import urlparse

from src.api.schemas import ScrapeResult
from src.cache.redis import RedisCache

from .errors import InvalidUrlError, ScrapeError
from .pipeline import ScrapePipeline
from .pool import WorkerPool

logger = logging.getLogger(__name__)

_VALID_SCHEMES = {"http", "https"}

# Characters that can never appear in a hostname.
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20\x7f#%/:<>?@\[\\\]^|\"'`{}]")


def _is_valid_host(parsed) -> bool:
    hostname = parsed.hostname
    if not hostname:
        return False
    if "[" in parsed.netloc:
        try:
            ipaddress.IPv6Address(hostname.split("%", 1)[0])
        except ValueError:
            return False
        return True
    return _FORBIDDEN_HOST_CHARS.search(hostname) is None


def validate_url(url: Any) -> str:
    """Return *url* stripped, or raise :class:`InvalidUrlError`.

    Accepts only absolute http/https URLs with a well-formed host and port.
    """
    if url is None or (isinstance(url, str) and not url.strip()):
        raise InvalidUrlError("URL is required")
    if not isinstance(url, str):
        raise InvalidUrlError("Invalid URL format")

    url = url.strip()
    try:
        parsed = urlparse(url)
        # .port raises ValueError for non-numeric or out-of-range ports
        parsed.port
        valid = parsed.scheme.lower() in _VALID_SCHEMES and _is_valid_host(parsed)
    except ValueError:
        raise InvalidUrlError("Invalid URL format") from None

    if not valid:
        raise InvalidUrlError("Invalid URL format")
    return url


class ScrapeDispatcher:
    """Entry point of the core: serves from cache or runs the pipeline on the pool.

    Concurrent misses for the same URL are not deduplicated; each runs the
    pipeline and the last one to finish wins the cache entry.
    """

    def __init__(
        self,
        cache: RedisCache,
        pool: WorkerPool,
        pipeline: ScrapePipeline,
        ttl: int | None = None,
    ) -> None:
        self._cache = cache
        self._pool = pool
        self._pipeline = pipeline
        self._ttl = ttl

    async def handle_scrape(self, url: Any) -> ScrapeResult:
        url = validate_url(url)

        cached = await self._cache.get(url)
        if cached is not None:
            logger.info("scrape served from cache", extra={"url": url})
            return cached

        started = time.perf_counter()
        try:
            markdown = await self._pool.submit(self._pipeline.run, url)
        except ScrapeError as exc:
            logger.warning(
                "scrape failed",
                extra={"url": url, "error_type": type(exc).__name__, "error": str(exc)},
            )
            raise
        except Exception as exc:
            logger.exception("scrape crashed", extra={"url": url})
            raise ScrapeError(f"Unexpected error while scraping {url}") from exc

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        result = ScrapeResult(markdown=markdown, execution_time_ms=elapsed_ms)
        await self._cache.set(url, result, ttl=self._ttl)
        logger.info(
            "scrape completed",
            extra={"url": url, "execution_time_ms": elapsed_ms, "markdown_chars": len(markdown)},
        )
        return result

    async def clear_cache(self) -> int:
        return await self._cache.clear()
