"""Pydantic Settings — loads configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings

from src.scraper.fetcher import DEFAULT_USER_AGENT


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    redis_url: str = "redis://localhost:6379"
    cache_ttl_seconds: int = 3600
    cache_admin_enabled: bool = False

    # Fetcher
    fetch_timeout_seconds: float = 8.0
    fetch_max_retries: int = 2
    fetch_retry_backoff_seconds: float = 0.25
    fetch_max_connections: int = 100
    fetch_max_keepalive_connections: int = 20
    fetch_user_agent: str = DEFAULT_USER_AGENT

    # Worker pool
    pool_min_workers: int = 2
    pool_max_workers: int = 4
    pool_max_queue_size: int = 1000
    pool_queue_timeout_seconds: float = 30.0
    pool_terminate_timeout_seconds: float = 60.0
    pool_worker_type: Literal["thread", "process"] = "thread"

    rate_limit: str = "100 per 15 minutes"
    cors_allow_origins: str = "*"
    log_level: str = "INFO"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
