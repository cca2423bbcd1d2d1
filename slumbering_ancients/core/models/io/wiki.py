"""
Wiki content, scraping and assistant I/O models.

The function-style endpoints keep the camelCase field names their clients
already send and expect.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class WikiDocumentRead(BaseModel):
    """A stored wiki page, without its embedding."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    url: str
    similarity: Optional[float] = None


class ScrapeWikiRequest(BaseModel):
    incremental: bool = Field(default=False, description="Only consider files changed recently")


class ProcessedFile(BaseModel):
    name: str
    title: str
    url: str


class ScrapeWikiResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    pages_scraped: int = Field(alias="pagesScraped")
    pages_skipped: int = Field(alias="pagesSkipped")
    total_discovered: int = Field(alias="totalDiscovered")
    rate_limit_errors: int = Field(alias="rateLimitErrors")
    incremental: bool
    processed_files: List[ProcessedFile] = Field(alias="processedFiles")
    message: str


class MatchFunctionResponse(BaseModel):
    success: bool = True
    message: str


class AssistantRequest(BaseModel):
    """Body of the assistant chat function."""

    message: str = Field(description="Question for the lore assistant")


class AssistantResponse(BaseModel):
    response: str
