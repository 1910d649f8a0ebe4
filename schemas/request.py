"""Request schemas for the Tricheck API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Text submitted for verification, with an optional source URL."""

    text: str = Field(
        ...,
        min_length=1,
        max_length=50_000,
        alias="newsContent",
        description="News content to verify.",
    )
    source_url: str | None = Field(
        default=None,
        alias="sourceUrl",
        description="Source URL of the content, if available.",
    )

    model_config = {"populate_by_name": True}


class NewsSearchRequest(BaseModel):
    """Pass-through query against the configured outlet search."""

    query: str = Field(..., min_length=1, max_length=500)
    sources: str = Field(
        default="bbc-news,cnn",
        description="Comma-separated outlet source ids.",
    )
