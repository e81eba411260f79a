"""POST /scrape, GET / and DELETE /cache endpoint handlers."""

# No postponed annotations here: slowapi's wrapper would hide them from FastAPI.
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from src.api.limiter import limiter, scrape_rate_limit
from src.api.schemas import CacheClearResponse, ErrorResponse, ScrapeRequest, ScrapeResult
from src.scraper.dispatcher import ScrapeDispatcher

INDEX_PATH = Path(__file__).parent / "static" / "index.html"

router = APIRouter()
admin_router = APIRouter()


def _get_dispatcher(request: Request) -> ScrapeDispatcher:
    return request.app.state.dispatcher


@router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(INDEX_PATH, media_type="text/html")


@router.post(
    "/scrape",
    response_model=ScrapeResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@limiter.limit(scrape_rate_limit)
async def scrape(
    request: Request,
    body: ScrapeRequest | None = None,
    dispatcher: ScrapeDispatcher = Depends(_get_dispatcher),
):
    return await dispatcher.handle_scrape(body.url if body else None)


@admin_router.delete("/cache", response_model=CacheClearResponse)
async def clear_cache(dispatcher: ScrapeDispatcher = Depends(_get_dispatcher)):
    return CacheClearResponse(deleted=await dispatcher.clear_cache())
