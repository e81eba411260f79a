"""Shared slowapi rate-limiter.

Kept in its own module so route modules can decorate handlers without
importing ``src.main``. ``main.create_app()`` attaches it to ``app.state``.
"""

from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from src.config import get_settings

limiter: Limiter = Limiter(key_func=get_remote_address)


def scrape_rate_limit() -> str:
    """Per-client-IP limit for ``POST /scrape``, e.g. ``"100 per 15 minutes"``."""
    return get_settings().rate_limit
