"""
Wiki content entity model.

Scraped wiki pages with their embedding. Rows are unique per source URL and
are only rewritten when the SHA-256 hash of the page changes.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from pgvector.sqlalchemy import Vector
from sqlalchemy import Column
from sqlmodel import Field

from slumbering_ancients.server.core.constant import EMBEDDING_DIMENSIONS

from ..base import Base, utc_now


class WikiContent(Base, table=True):
    """Scraped wiki page.

    Table: wiki_content
    """

    __tablename__ = "wiki_content"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    url: str = Field(unique=True, index=True, description="Source URL, or gdrive://<file id>")
    title: str
    content: str = Field(description="Cleaned page text")
    content_hash: str = Field(description="SHA-256 of the raw page")
    embedding: Optional[List[float]] = Field(
        default=None, sa_column=Column(Vector(EMBEDDING_DIMENSIONS), nullable=True)
    )
    scraped_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"WikiContent(id={self.id}, title={self.title}, url={self.url})"
