"""Google Drive v3 client

Overview
--------
Small async HTTP client for the parts of the Drive API the wiki scraper uses:
listing folder children and downloading file contents. Requests are
authenticated with an API key.

Rate limiting
-------------
Drive answers bursts of anonymous requests with ``403`` and a body mentioning
"automated queries". The client waits ``request_delay`` seconds before every
request; a rate-limit answer multiplies the delay by 1.5 (capped at
``max_delay``) and the request is retried after a longer back-off, while each
success shrinks the delay again towards ``initial_delay``.

Errors
------
HTTP errors are raised as ``DriveApiError`` (``DriveRateLimitError`` when the
rate limit persisted through every attempt).
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from slumbering_ancients.core.logging_config import get_logger

from .errors import DriveApiError, DriveRateLimitError

logger = get_logger(__name__)

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
LIST_FIELDS = "nextPageToken, files(id,name,mimeType,parents,webViewLink,modifiedTime)"
RATE_LIMIT_MARKER = "automated queries"
DELAY_MULTIPLIER = 1.5


class DriveFile(BaseModel):
    """A Drive file or folder as returned by ``files.list``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    mime_type: str = Field(default="", alias="mimeType")
    parents: List[str] = Field(default_factory=list)
    web_view_link: Optional[str] = Field(default=None, alias="webViewLink")
    modified_time: Optional[datetime] = Field(default=None, alias="modifiedTime")
    path: str = ""

    @property
    def is_folder(self) -> bool:
        return self.mime_type == FOLDER_MIME_TYPE

    @property
    def is_markdown(self) -> bool:
        return self.name.endswith(".md")

    @property
    def source_url(self) -> str:
        """URL stored with the scraped page."""
        return self.web_view_link or f"gdrive://{self.id}"


class FileListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    files: List[DriveFile] = Field(default_factory=list)
    next_page_token: Optional[str] = Field(default=None, alias="nextPageToken")


class GoogleDriveClient:
    """Async Drive client with request pacing and rate-limit retries."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://www.googleapis.com/drive/v3",
        timeout: float = 30.0,
        max_retries: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Create a Drive client.

        Args:
            api_key: Google API key with Drive read access.
            base_url: Drive API base URL.
            timeout: Default HTTP timeout for the internal client.
            max_retries: Attempts per request.
            initial_delay: Delay before each request, in seconds.
            max_delay: Upper bound for the delay after rate limiting.
            client: Optional preconfigured ``httpx.AsyncClient`` to use.
            sleep: Coroutine used for waiting.
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max(1, max_retries)
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.request_delay = initial_delay
        self.rate_limit_hits = 0
        self.consecutive_errors = 0
        self._api_key = api_key
        self._sleep = sleep
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def _get(self, path: str, params: dict) -> httpx.Response:
        """GET ``path`` with pacing and retries.

        Raises:
            DriveRateLimitError: if every attempt was rate limited.
            DriveApiError: on other HTTP failures after the last attempt.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {**params, "key": self._api_key}
        await self._sleep(self.request_delay)

        last_error: Optional[DriveApiError] = None
        for attempt in range(1, self.max_retries + 1):
            logger.debug(f"Drive request attempt {attempt}/{self.max_retries}: {path}")
            try:
                r = await self._client.get(url, params=query)
            except httpx.HTTPError as e:
                last_error = DriveApiError(f"Drive request failed: {e}")
            else:
                if r.status_code == 403 and RATE_LIMIT_MARKER in r.text:
                    self.rate_limit_hits += 1
                    self.consecutive_errors += 1
                    self.request_delay = min(self.request_delay * DELAY_MULTIPLIER, self.max_delay)
                    last_error = DriveRateLimitError(
                        "Google Drive rate limit reached", upstream_status=403, details={"body": r.text[:200]}
                    )
                    logger.warning(f"Drive rate limit on attempt {attempt}, delay now {self.request_delay:.1f}s")
                    if attempt < self.max_retries:
                        await self._sleep(self.request_delay * attempt * 2)
                        continue
                    raise last_error
                if r.is_success:
                    self.consecutive_errors = 0
                    if self.request_delay > self.initial_delay:
                        self.request_delay = max(self.initial_delay, self.request_delay / DELAY_MULTIPLIER)
                    return r
                last_error = DriveApiError(
                    f"Drive request failed: {r.status_code}",
                    upstream_status=r.status_code,
                    details={"body": r.text[:200]},
                )
            logger.warning(f"Drive request attempt {attempt} failed: {last_error}")
            if attempt < self.max_retries:
                await self._sleep(2.0 * attempt)
        raise last_error or DriveApiError("Drive request failed")

    async def list_children(self, folder_id: str) -> List[DriveFile]:
        """Direct children (files and folders) of a folder, following pagination."""
        children: List[DriveFile] = []
        page_token: Optional[str] = None
        while True:
            params = {"q": f"'{folder_id}' in parents", "fields": LIST_FIELDS, "pageSize": 100}
            if page_token:
                params["pageToken"] = page_token
            r = await self._get("files", params)
            page = FileListResponse.model_validate(r.json())
            children.extend(page.files)
            if not page.next_page_token:
                return children
            page_token = page.next_page_token

    async def list_markdown_files(
        self,
        folder_id: str,
        *,
        modified_after: Optional[datetime] = None,
        path: str = "",
    ) -> List[DriveFile]:
        """All ``.md`` files below a folder, descending into subfolders.

        Folders whose listing fails are logged and contribute no files.

        Args:
            folder_id: Root folder to scan.
            modified_after: Skip files last modified before this time.
            path: Display path of ``folder_id``.
        """
        try:
            children = await self.list_children(folder_id)
        except DriveApiError as e:
            logger.error(f"Failed to scan Drive folder {folder_id} ({path or 'root'}): {e}")
            return []

        found: List[DriveFile] = []
        for child in children:
            child_path = f"{path}/{child.name}" if path else child.name
            if child.is_folder:
                found.extend(await self.list_markdown_files(child.id, modified_after=modified_after, path=child_path))
            elif child.is_markdown:
                if modified_after and child.modified_time and child.modified_time < modified_after:
                    logger.debug(f"Skipping unchanged file {child_path}")
                    continue
                found.append(child.model_copy(update={"path": child_path}))
            else:
                logger.debug(f"Skipping non-markdown file {child_path}")
        return found

    async def download(self, file_id: str) -> str:
        """Text content of a file."""
        r = await self._get(f"files/{file_id}", {"alt": "media"})
        return r.text

    async def aclose(self) -> None:
        """Close the internal HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
