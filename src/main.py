"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from src.api.handlers import rate_limit_exceeded_handler, scrape_error_handler
from src.api.limiter import limiter
from src.api.routes import admin_router, router
from src.cache.redis import RedisCache, create_redis_client
from src.config import Settings, get_settings
from src.logging_config import setup_logging
from src.scraper.dispatcher import ScrapeDispatcher
from src.scraper.errors import ScrapeError
from src.scraper.fetcher import PageFetcher
from src.scraper.pipeline import ScrapePipeline
from src.scraper.pool import WorkerPool

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # Initialize logging FIRST so all subsequent operations produce JSON logs
    setup_logging(settings.log_level)
    logger.info("starting scraper service")

    redis_client = await create_redis_client(settings.redis_url)
    cache = RedisCache(redis_client, default_ttl=settings.cache_ttl_seconds)

    fetcher = PageFetcher(
        timeout=settings.fetch_timeout_seconds,
        max_retries=settings.fetch_max_retries,
        retry_backoff=settings.fetch_retry_backoff_seconds,
        user_agent=settings.fetch_user_agent,
        max_connections=settings.fetch_max_connections,
        max_keepalive_connections=settings.fetch_max_keepalive_connections,
    )
    pool = WorkerPool(
        min_workers=settings.pool_min_workers,
        max_workers=settings.pool_max_workers,
        max_queue_size=settings.pool_max_queue_size,
        queue_timeout=settings.pool_queue_timeout_seconds,
        terminate_timeout=settings.pool_terminate_timeout_seconds,
        worker_type=settings.pool_worker_type,
    )
    await pool.start()

    app.state.dispatcher = ScrapeDispatcher(
        cache=cache,
        pool=pool,
        pipeline=ScrapePipeline(fetcher, pool),
        ttl=settings.cache_ttl_seconds,
    )

    logger.info(
        "scraper service ready",
        extra={
            "pool_worker_type": settings.pool_worker_type,
            "pool_max_workers": settings.pool_max_workers,
            "fetch_timeout_seconds": settings.fetch_timeout_seconds,
            "cache_ttl_seconds": settings.cache_ttl_seconds,
        },
    )

    yield

    # Cleanup
    logger.info("shutting down scraper service")
    await pool.close()
    await fetcher.aclose()
    await redis_client.aclose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    application = FastAPI(title="Page Scraper", lifespan=lifespan)
    application.state.settings = settings
    application.state.limiter = limiter

    application.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    application.add_exception_handler(ScrapeError, scrape_error_handler)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(router)
    if settings.cache_admin_enabled:
        application.include_router(admin_router)

    @application.get("/health")
    async def health():
        return {"status": "ok"}

    return application


app = create_app()
