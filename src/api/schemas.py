"""Request/response Pydantic models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScrapeRequest(BaseModel):
    # Left untyped so a non-string url reaches validate_url and gets the 400 body
    url: Any = None


class ScrapeResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    markdown: str
    execution_time_ms: float = Field(alias="executionTimeMs")


class ErrorResponse(BaseModel):
    error: str


class CacheClearResponse(BaseModel):
    deleted: int
