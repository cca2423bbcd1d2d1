"""Wiki synchronisation from Google Drive.

Walks the configured Drive folder, and for every markdown file decides
whether to skip it or to (re-)embed and store it:

1. download fails -> skipped
2. cleaned text shorter than ``min_content_chars`` -> skipped
3. stored hash for the same URL equals the new hash -> skipped
4. embedding fails -> skipped
5. otherwise the page is upserted by URL with its text truncated to
   ``content_max_chars``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from slumbering_ancients.core.database.repositories.wiki_content import WikiContentRepository
from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.monitoring import log_wiki_sync
from slumbering_ancients.llm.embeddings import EmbeddingsClient
from slumbering_ancients.llm.errors import OpenAIApiError

from .drive_client import DriveFile, GoogleDriveClient
from .errors import DriveApiError
from .markdown import clean_markdown, content_hash, extract_title

logger = get_logger(__name__)

MAX_REPORTED_FILES = 50


@dataclass
class ProcessedPage:
    name: str
    title: str
    url: str


@dataclass
class ScrapeResult:
    """Counters of one synchronisation run."""

    incremental: bool
    total_discovered: int = 0
    pages_scraped: int = 0
    pages_skipped: int = 0
    rate_limit_errors: int = 0
    processed_files: List[ProcessedPage] = field(default_factory=list)

    @property
    def message(self) -> str:
        if self.total_discovered == 0:
            return "No markdown files found in the specified folder or timeframe."
        mode = "Incremental" if self.incremental else "Full"
        return (
            f"{mode} sync complete: {self.pages_scraped} pages stored, {self.pages_skipped} skipped "
            f"out of {self.total_discovered} discovered."
        )


class WikiScraper:
    """Synchronise wiki pages from a Drive folder into ``wiki_content``."""

    def __init__(
        self,
        drive: GoogleDriveClient,
        embeddings: EmbeddingsClient,
        repository: WikiContentRepository,
        *,
        content_max_chars: int = 8000,
        min_content_chars: int = 20,
        incremental_days: int = 7,
    ) -> None:
        self.drive = drive
        self.embeddings = embeddings
        self.repository = repository
        self.content_max_chars = content_max_chars
        self.min_content_chars = min_content_chars
        self.incremental_days = incremental_days

    def incremental_cutoff(self, now: Optional[datetime] = None) -> datetime:
        return (now or datetime.now(timezone.utc)) - timedelta(days=self.incremental_days)

    async def scrape(self, folder_id: str, *, incremental: bool = False) -> ScrapeResult:
        """Run one synchronisation of ``folder_id``."""
        modified_after = self.incremental_cutoff() if incremental else None
        logger.info(f"Wiki sync started: folder={folder_id}, incremental={incremental}")

        files = await self.drive.list_markdown_files(folder_id, modified_after=modified_after)
        result = ScrapeResult(incremental=incremental, total_discovered=len(files))

        for index, drive_file in enumerate(files, start=1):
            logger.debug(f"Processing {index}/{len(files)}: {drive_file.path or drive_file.name}")
            page = await self._process(drive_file, result)
            if page is None:
                result.pages_skipped += 1
                continue
            result.pages_scraped += 1
            if len(result.processed_files) < MAX_REPORTED_FILES:
                result.processed_files.append(page)

        log_wiki_sync(
            scraped=result.pages_scraped,
            skipped=result.pages_skipped,
            discovered=result.total_discovered,
            rate_limit_errors=result.rate_limit_errors,
            incremental=incremental,
        )
        logger.info(result.message)
        return result

    async def _process(self, drive_file: DriveFile, result: ScrapeResult) -> Optional[ProcessedPage]:
        try:
            raw = await self.drive.download(drive_file.id)
        except DriveApiError as e:
            logger.warning(f"Skipping {drive_file.name}: download failed ({e})")
            if self.drive.consecutive_errors > 0:
                result.rate_limit_errors += 1
            return None

        title = extract_title(raw, drive_file.name)
        cleaned = clean_markdown(raw)
        if len(cleaned) < self.min_content_chars:
            logger.debug(f"Skipping {drive_file.name}: content too short after cleaning")
            return None

        digest = content_hash(raw)
        url = drive_file.source_url
        stored = await self.repository.get_stored_page(url)
        if stored is not None and stored.content_hash == digest:
            logger.debug(f"Skipping {drive_file.name}: content unchanged")
            return None

        try:
            embedding = await self.embeddings.embed(cleaned)
        except OpenAIApiError as e:
            logger.warning(f"Skipping {drive_file.name}: embedding failed ({e})")
            return None

        await self.repository.upsert_page(
            url=url,
            title=title,
            content=cleaned[: self.content_max_chars],
            content_hash=digest,
            embedding=embedding,
        )
        logger.info(f"Stored wiki page '{title}' from {drive_file.name}")
        return ProcessedPage(name=drive_file.name, title=title, url=url)
