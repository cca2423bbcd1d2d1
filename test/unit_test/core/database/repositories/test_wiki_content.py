"""Unit tests for the wiki content repository.

SQLite has neither pgvector nor the ``match_documents`` function, so the
vector query is expected to fail there; keyword search and upserts are
exercised for real.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import SQLAlchemyError

from slumbering_ancients.core.database.repositories import WikiContentRepository
from slumbering_ancients.core.database.repositories.wiki_content import (
    CREATE_MATCH_DOCUMENTS_SQL,
    keyword_terms,
    significant_terms,
)


class RecordingSession:
    """Session stand-in that records statements and reports a fixed dialect."""

    def __init__(self, dialect_name: str) -> None:
        self.statements = []
        self._bind = SimpleNamespace(dialect=SimpleNamespace(name=dialect_name))

    def get_bind(self):
        return self._bind

    async def execute(self, statement):
        self.statements.append(statement)
        return SimpleNamespace(all=lambda: [])


async def _store(repo: WikiContentRepository, url: str, title: str, content: str, digest: str = "h1"):
    return await repo.upsert_page(url=url, title=title, content=content, content_hash=digest, embedding=None)


class TestKeywordTerms:
    def test_distinct_lowercase_words_in_order(self):
        assert keyword_terms("Who is the Lich? the LICH king!") == ["who", "is", "the", "lich", "king"]

    def test_splits_on_whitespace_only(self):
        assert keyword_terms("Zarvath's lair, north-east") == ["zarvath's", "lair", "north-east"]

    def test_empty_query(self):
        assert keyword_terms("  ?! ") == []

    def test_significant_terms_drop_stop_words_and_short_words(self):
        assert significant_terms(keyword_terms("Where is the Ox of Zarvath?")) == ["zarvath"]


class TestUpsertPage:
    async def test_insert_then_update_keeps_id(self, in_memory_session):
        repo = WikiContentRepository(in_memory_session)

        first_id = await _store(repo, "gdrive://abc", "Ashen Peaks", "Volcanic range", digest="h1")
        second_id = await _store(repo, "gdrive://abc", "Ashen Peaks (rev)", "Volcanic range, now dormant", digest="h2")

        assert first_id == second_id
        stored = await repo.get_stored_page("gdrive://abc")
        assert stored.content_hash == "h2"
        document = await repo.get_document(first_id)
        assert document.title == "Ashen Peaks (rev)"
        assert len(await repo.list_documents()) == 1

    async def test_get_stored_page_unknown_url(self, in_memory_session):
        assert await WikiContentRepository(in_memory_session).get_stored_page("gdrive://missing") is None


class TestDocuments:
    async def test_list_documents_ordered_by_title_with_pagination(self, in_memory_session):
        repo = WikiContentRepository(in_memory_session)
        for title in ("Cinder Vale", "Ashen Peaks", "Barrow Fields"):
            await _store(repo, f"gdrive://{title}", title, f"About {title}")

        assert [d.title for d in await repo.list_documents()] == ["Ashen Peaks", "Barrow Fields", "Cinder Vale"]
        assert [d.title for d in await repo.list_documents(limit=1, offset=1)] == ["Barrow Fields"]

    async def test_delete_document(self, in_memory_session):
        repo = WikiContentRepository(in_memory_session)
        page_id = await _store(repo, "gdrive://x", "X", "Some content")

        assert await repo.delete_document(page_id) is True
        assert await repo.get_document(page_id) is None
        assert await repo.delete_document(page_id) is False


class TestSearch:
    async def test_keyword_search_matches_any_word_case_insensitively(self, in_memory_session):
        repo = WikiContentRepository(in_memory_session)
        await _store(repo, "gdrive://1", "Lich", "The Lich sleeps beneath the mountain")
        await _store(repo, "gdrive://2", "Dragon", "A red dragon guards the pass")
        await _store(repo, "gdrive://3", "Market", "Bread and ale")

        found = await repo.keyword_search("where does the LICH or DRAGON rest", limit=5)

        assert [d.title for d in found] == ["Dragon", "Lich"]
        assert all(d.similarity is None for d in found)

    async def test_keyword_search_respects_limit(self, in_memory_session):
        repo = WikiContentRepository(in_memory_session)
        for n in range(4):
            await _store(repo, f"gdrive://{n}", f"Page {n}", "ancient ruins")

        assert len(await repo.keyword_search("ruins", limit=2)) == 2

    async def test_keyword_search_without_terms(self, in_memory_session):
        assert await WikiContentRepository(in_memory_session).keyword_search("!!", limit=5) == []

    async def test_keyword_search_ignores_stop_words(self, in_memory_session):
        repo = WikiContentRepository(in_memory_session)
        for title in ("Amber Keep", "Bell Tower", "Crow Hill", "Dusk Road", "Elm Ford"):
            await _store(repo, f"gdrive://{title}", title, "This place is quiet.")
        await _store(repo, "gdrive://zarvath", "Zarvath", "The dragon Zarvath sleeps under the Ashen Peaks.")

        found = await repo.keyword_search("Where is Zarvath?", limit=5)

        assert [d.title for d in found] == ["Zarvath"]

    async def test_keyword_search_only_stop_words(self, in_memory_session):
        repo = WikiContentRepository(in_memory_session)
        await _store(repo, "gdrive://1", "Market", "This is where the bread is sold")

        assert await repo.keyword_search("where is it?", limit=5) == []

    async def test_keyword_search_uses_full_text_on_postgresql(self):
        session = RecordingSession("postgresql")

        assert await WikiContentRepository(session).keyword_search("Where is Zarvath?", limit=5) == []

        sql = str(session.statements[0].compile(dialect=postgresql.dialect()))
        assert "websearch_to_tsquery" in sql
        assert "@@" in sql
        assert "ts_rank" in sql
        assert "ILIKE" not in sql.upper()

    async def test_match_documents_unavailable_on_sqlite(self, in_memory_session):
        repo = WikiContentRepository(in_memory_session)
        with pytest.raises(SQLAlchemyError):
            await repo.match_documents([0.1] * 1536, match_threshold=0.7, match_count=5)


def test_match_function_sql_uses_inner_product_threshold():
    assert "match_documents" in CREATE_MATCH_DOCUMENTS_SQL
    assert "<#>" in CREATE_MATCH_DOCUMENTS_SQL
    assert "1 - match_threshold" in CREATE_MATCH_DOCUMENTS_SQL
    assert "LIMIT match_count" in CREATE_MATCH_DOCUMENTS_SQL
