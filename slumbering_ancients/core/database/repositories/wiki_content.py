"""
Wiki content repository.

Besides plain CRUD this repository owns the two retrieval queries used by the
assistant: a similarity search through the ``match_documents`` database
function (pgvector) and a keyword search, full-text on PostgreSQL, used
when the vector query is unavailable.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import List, Optional, Sequence
from uuid import UUID

from pgvector.sqlalchemy import Vector
from sqlalchemy import bindparam, delete, func, or_, text, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from slumbering_ancients.server.core.constant import EMBEDDING_DIMENSIONS

from ..base import utc_now
from ..entities.wiki_content import WikiContent
from ..utils import is_postgresql
from .base import AsyncSQLModelRepository, QueryBuilder

MATCH_DOCUMENTS_SQL = text(
    "SELECT id, title, content, url, similarity "
    "FROM match_documents(:query_embedding, :match_threshold, :match_count)"
).bindparams(bindparam("query_embedding", type_=Vector(EMBEDDING_DIMENSIONS)))

CREATE_VECTOR_EXTENSION_SQL = "CREATE EXTENSION IF NOT EXISTS vector"

CREATE_MATCH_DOCUMENTS_SQL = f"""
CREATE OR REPLACE FUNCTION match_documents(
    query_embedding vector({EMBEDDING_DIMENSIONS}),
    match_threshold float,
    match_count int
)
RETURNS TABLE (
    id uuid,
    title text,
    content text,
    url text,
    similarity float
)
LANGUAGE sql STABLE
AS $$
    SELECT
        wiki_content.id,
        wiki_content.title,
        wiki_content.content,
        wiki_content.url,
        (wiki_content.embedding <#> query_embedding) * -1 AS similarity
    FROM wiki_content
    WHERE wiki_content.embedding IS NOT NULL
      AND wiki_content.embedding <#> query_embedding < 1 - match_threshold
    ORDER BY similarity DESC
    LIMIT match_count;
$$
"""

STOP_WORDS = frozenset(
    {
        "about", "after", "all", "also", "and", "any", "are", "been", "but", "can",
        "could", "did", "does", "for", "from", "had", "has", "have", "her", "hers",
        "him", "his", "how", "into", "its", "may", "might", "must", "not", "our",
        "she", "should", "tell", "than", "that", "the", "their", "them", "then",
        "there", "these", "they", "this", "those", "was", "were", "what", "when",
        "where", "which", "who", "whom", "why", "will", "with", "would", "you", "your",
    }
)

MIN_TERM_LENGTH = 3

_TRIM = string.punctuation + "“”‘’"


@dataclass(frozen=True)
class WikiDocument:
    """A retrieved wiki page without its embedding."""

    id: UUID
    title: str
    content: str
    url: str
    similarity: Optional[float] = None


@dataclass(frozen=True)
class StoredPage:
    """Identity and hash of an already stored page."""

    id: UUID
    content_hash: str


def keyword_terms(query: str) -> List[str]:
    """Distinct lowercase whitespace-separated words of ``query``, surrounding punctuation trimmed."""
    seen: List[str] = []
    for word in query.lower().split():
        word = word.strip(_TRIM)
        if word and word not in seen:
            seen.append(word)
    return seen


def significant_terms(terms: Sequence[str]) -> List[str]:
    """``terms`` without stop words and words shorter than ``MIN_TERM_LENGTH``."""
    return [term for term in terms if len(term) >= MIN_TERM_LENGTH and term not in STOP_WORDS]


class WikiContentRepository(AsyncSQLModelRepository[WikiContent]):
    """Repository for scraped wiki pages."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, WikiContent)
        self.order_by = (WikiContent.title,)

    async def get_stored_page(self, url: str) -> Optional[StoredPage]:
        """Id and content hash of the page stored for ``url``."""
        stmt = select(WikiContent.id, WikiContent.content_hash).where(WikiContent.url == url)
        row = (await self.session.execute(stmt)).first()
        return StoredPage(id=row.id, content_hash=row.content_hash) if row else None

    async def upsert_page(
        self,
        *,
        url: str,
        title: str,
        content: str,
        content_hash: str,
        embedding: Optional[Sequence[float]],
    ) -> UUID:
        """Insert the page for ``url`` or overwrite the stored one.

        Returns:
            Id of the stored row.
        """
        now = utc_now()
        stored = await self.get_stored_page(url)
        if stored is None:
            page = WikiContent(
                url=url,
                title=title,
                content=content,
                content_hash=content_hash,
                embedding=list(embedding) if embedding is not None else None,
                scraped_at=now,
                updated_at=now,
            )
            self.session.add(page)
            await self.session.commit()
            return page.id

        stmt = (
            update(WikiContent)
            .where(WikiContent.id == stored.id)
            .values(
                title=title,
                content=content,
                content_hash=content_hash,
                embedding=list(embedding) if embedding is not None else None,
                scraped_at=now,
                updated_at=now,
            )
        )
        await self.session.execute(stmt)
        await self.session.commit()
        return stored.id

    async def list_documents(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[WikiDocument]:
        """Stored pages ordered by title, without embeddings."""
        stmt = select(WikiContent.id, WikiContent.title, WikiContent.content, WikiContent.url).order_by(
            WikiContent.title
        )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        rows = (await self.session.execute(stmt)).all()
        return [WikiDocument(id=r.id, title=r.title, content=r.content, url=r.url) for r in rows]

    async def get_document(self, document_id: UUID) -> Optional[WikiDocument]:
        stmt = select(WikiContent.id, WikiContent.title, WikiContent.content, WikiContent.url).where(
            WikiContent.id == document_id
        )
        row = (await self.session.execute(stmt)).first()
        return WikiDocument(id=row.id, title=row.title, content=row.content, url=row.url) if row else None

    async def delete_document(self, document_id: UUID) -> bool:
        """Delete a page without loading its embedding."""
        if await self.get_document(document_id) is None:
            return False
        stmt = delete(WikiContent).where(WikiContent.id == document_id)
        await self.session.execute(stmt)
        await self.session.commit()
        return True

    async def match_documents(
        self, query_embedding: Sequence[float], match_threshold: float, match_count: int
    ) -> List[WikiDocument]:
        """Similarity search through the ``match_documents`` database function.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: when the function or the vector
                extension is unavailable.
        """
        result = await self.session.execute(
            MATCH_DOCUMENTS_SQL,
            {
                "query_embedding": list(query_embedding),
                "match_threshold": match_threshold,
                "match_count": match_count,
            },
        )
        return [
            WikiDocument(
                id=UUID(str(row.id)),
                title=row.title,
                content=row.content,
                url=row.url,
                similarity=float(row.similarity),
            )
            for row in result.all()
        ]

    async def keyword_search(self, query: str, limit: int) -> List[WikiDocument]:
        """Pages whose content matches any word of ``query``, case-insensitively.

        PostgreSQL matches whole lexemes with English full-text search, which
        also drops stop words, and orders by ``ts_rank``. Other dialects fall
        back to ``ILIKE`` over the significant terms, ordered by title.
        """
        terms = keyword_terms(query)
        if not terms:
            return []
        columns = (WikiContent.id, WikiContent.title, WikiContent.content, WikiContent.url)
        if is_postgresql(self.session):
            document = func.to_tsvector("english", WikiContent.content)
            ts_query = func.websearch_to_tsquery("english", " or ".join(terms))
            stmt = (
                select(*columns)
                .where(document.op("@@")(ts_query))
                .order_by(func.ts_rank(document, ts_query).desc(), WikiContent.title)
                .limit(limit)
            )
        else:
            significant = significant_terms(terms)
            if not significant:
                return []
            stmt = (
                select(*columns)
                .where(or_(*(WikiContent.content.ilike(f"%{term}%") for term in significant)))
                .order_by(WikiContent.title)
                .limit(limit)
            )
        rows = (await self.session.execute(stmt)).all()
        return [WikiDocument(id=r.id, title=r.title, content=r.content, url=r.url) for r in rows]

    async def install_match_function(self) -> None:
        """Create the ``vector`` extension and the ``match_documents`` function (PostgreSQL only)."""
        await self.session.execute(text(CREATE_VECTOR_EXTENSION_SQL))
        await self.session.execute(text(CREATE_MATCH_DOCUMENTS_SQL))
        await self.session.commit()

