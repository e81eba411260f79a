"""Scrape error taxonomy."""

from __future__ import annotations


class ScrapeError(Exception):
    """Base class for every failure surfaced by the scrape pipeline."""


class InvalidUrlError(ScrapeError):
    """The requested URL is not an absolute http(s) URL."""


class FetchError(ScrapeError):
    """The page could not be fetched."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(message)


class FetchTimeoutError(FetchError, TimeoutError):
    """The fetch did not complete before its deadline."""


class FetchConnectionError(FetchError, ConnectionError):
    """The connection failed or was dropped mid-request."""


class HttpStatusError(FetchError):
    """The remote server answered with a status code >= 400."""

    def __init__(self, url: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(url, f"HTTP error! status: {status_code}")


class PoolSaturatedError(ScrapeError):
    """The worker pool queue is full; the caller should back off."""


class ParseError(ScrapeError):
    """The document could not be parsed at all."""
