"""Exception handlers mapping scrape errors to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded

from src.scraper.errors import InvalidUrlError, ScrapeError

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


async def scrape_error_handler(request: Request, exc: ScrapeError) -> JSONResponse:
    if isinstance(exc, InvalidUrlError):
        return JSONResponse(status_code=400, content={"error": str(exc)})
    logger.error(
        "scrape request failed",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": f"Failed to scrape URL: {exc}"})


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> PlainTextResponse:
    logger.info("rate limit exceeded", extra={"client": request.client.host if request.client else None})
    return PlainTextResponse(RATE_LIMIT_MESSAGE, status_code=429)
