"""
Wiki retrieval for the lore assistant.

One similarity query through ``match_documents``; if the database cannot
answer it (no pgvector, function missing, driver error) the transaction is
rolled back and a keyword search over page content is used instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from sqlalchemy.exc import SQLAlchemyError

from slumbering_ancients.core.database.repositories.wiki_content import WikiContentRepository, WikiDocument
from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.monitoring import log_error
from slumbering_ancients.llm.embeddings import EmbeddingsClient

logger = get_logger(__name__)


@dataclass
class RetrievalResult:
    documents: List[WikiDocument] = field(default_factory=list)
    strategy: Literal["vector", "keyword"] = "vector"


class WikiRetriever:
    """Find the wiki pages most relevant to a question."""

    def __init__(
        self,
        repository: WikiContentRepository,
        embeddings: EmbeddingsClient,
        *,
        match_threshold: float = 0.7,
        match_count: int = 5,
    ) -> None:
        self.repository = repository
        self.embeddings = embeddings
        self.match_threshold = match_threshold
        self.match_count = match_count

    async def retrieve(self, query: str) -> RetrievalResult:
        """Vector search for ``query``, falling back to keyword search.

        Raises:
            OpenAIApiError: if the query cannot be embedded.
        """
        query_embedding = await self.embeddings.embed(query)
        try:
            documents = await self.repository.match_documents(
                query_embedding, match_threshold=self.match_threshold, match_count=self.match_count
            )
            strategy = "vector"
        except SQLAlchemyError as e:
            logger.warning(f"Vector search failed, falling back to keyword search: {e}")
            log_error("VectorSearchError", str(e))
            await self.repository.session.rollback()
            documents = await self.repository.keyword_search(query, limit=self.match_count)
            strategy = "keyword"
        logger.info(f"Found {len(documents)} documents using {strategy} search")
        return RetrievalResult(documents=documents, strategy=strategy)
