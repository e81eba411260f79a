"""Async page fetcher: pooled httpx client with a per-attempt deadline and bounded retry."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx

from .errors import FetchConnectionError, FetchError, FetchTimeoutError, HttpStatusError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

_DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate",
}

# Failures worth another attempt with the same parameters.
_TRANSIENT_ERRORS = (FetchTimeoutError, FetchConnectionError)


@dataclass(frozen=True)
class FetchResult:
    """Raw response body of a successful fetch.

    ``encoding`` is the charset declared in the Content-Type header, if any.
    """

    body: bytes
    status_code: int
    content_encoding: str | None = None
    url: str = ""
    content_type: str = ""
    encoding: str | None = None


class PageFetcher:
    """Fetches pages over a shared keep-alive connection pool.

    httpx keeps one pool per origin, so plain-HTTP and HTTPS connections are
    pooled separately and reused across calls. The client is created once at
    startup and released with :meth:`aclose`.
    """

    def __init__(
        self,
        *,
        timeout: float = 8.0,
        max_retries: int = 2,
        retry_backoff: float = 0.25,
        user_agent: str = DEFAULT_USER_AGENT,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
    ) -> None:
        self._timeout = timeout
        self._max_retries = max_retries
        self._retry_backoff = retry_backoff
        self._client = httpx.AsyncClient(
            headers={"User-Agent": user_agent, **_DEFAULT_HEADERS},
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_keepalive_connections,
            ),
            follow_redirects=True,
        )

    async def fetch(
        self,
        url: str,
        *,
        timeout: float | None = None,
        max_retries: int | None = None,
    ) -> FetchResult:
        """GET *url* and return its decoded body.

        Timeouts and connection failures are retried up to *max_retries*
        times. A response status >= 400 raises :class:`HttpStatusError`
        straight away.
        """
        timeout = self._timeout if timeout is None else timeout
        retries = self._max_retries if max_retries is None else max_retries
        attempts = max(retries, 0) + 1

        for attempt in range(1, attempts + 1):
            try:
                return await self._attempt(url, timeout)
            except _TRANSIENT_ERRORS as exc:
                if attempt == attempts:
                    logger.warning(
                        "fetch of %s failed after %d attempts: %s", url, attempts, exc
                    )
                    raise
                logger.warning(
                    "fetch of %s failed (attempt %d/%d), retrying: %s",
                    url, attempt, attempts, exc,
                )
            if self._retry_backoff > 0:
                await asyncio.sleep(self._retry_backoff * attempt)

    async def _attempt(self, url: str, timeout: float) -> FetchResult:
        # wait_for cancels the request on expiry, which tears the connection down
        try:
            response = await asyncio.wait_for(
                self._client.get(url, timeout=timeout), timeout=timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise FetchTimeoutError(url, "Request timed out") from exc
        except (httpx.NetworkError, httpx.RemoteProtocolError, httpx.ProxyError) as exc:
            raise FetchConnectionError(url, f"Connection failed: {exc}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(url, f"Request failed: {exc}") from exc

        if response.status_code >= 400:
            raise HttpStatusError(url, response.status_code)

        logger.debug(
            "page fetched",
            extra={
                "url": url,
                "status_code": response.status_code,
                "bytes": len(response.content),
            },
        )
        return FetchResult(
            body=response.content,
            status_code=response.status_code,
            content_encoding=response.headers.get("content-encoding"),
            url=str(response.url),
            content_type=response.headers.get("content-type", ""),
            encoding=response.charset_encoding,
        )

    async def aclose(self) -> None:
        await self._client.aclose()
