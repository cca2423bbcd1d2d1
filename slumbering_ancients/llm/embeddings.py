"""OpenAI embeddings client

Overview
--------
Thin async HTTP client for the OpenAI ``/embeddings`` endpoint. Wiki pages
and assistant questions are embedded with the same model so they can be
compared by the ``match_documents`` database function.

Errors
------
HTTP failures and malformed payloads are raised as ``OpenAIApiError`` with
the upstream status code and body where available.

Usage
-----
>>> client = EmbeddingsClient("sk-...", model="text-embedding-ada-002")
>>> vector = await client.embed("Who sleeps beneath the Ashen Peaks?")
"""

from __future__ import annotations

import time
from typing import List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.monitoring import log_llm_call

from .errors import OpenAIApiError

logger = get_logger(__name__)


class EmbeddingData(BaseModel):
    embedding: List[float]
    index: int = 0


class EmbeddingUsage(BaseModel):
    prompt_tokens: int = 0
    total_tokens: int = 0


class EmbeddingResponse(BaseModel):
    """Subset of the ``/embeddings`` response this client relies on."""

    data: List[EmbeddingData]
    model: Optional[str] = None
    usage: Optional[EmbeddingUsage] = None


class EmbeddingsClient:
    """Async client producing one embedding vector per input text."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.openai.com/v1",
        model: str = "text-embedding-ada-002",
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Create an embeddings client.

        Args:
            api_key: OpenAI API key.
            base_url: API base URL, e.g. ``https://api.openai.com/v1``.
            model: Embedding model name.
            timeout: Default HTTP timeout for the internal client.
            client: Optional preconfigured ``httpx.AsyncClient`` to use.
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    async def embed(self, text: str) -> List[float]:
        """Embed ``text``.

        Raises:
            OpenAIApiError: on HTTP failures or an unexpected response body.
        """
        started = time.perf_counter()
        try:
            r = await self._client.post(
                f"{self.base_url}/embeddings",
                headers=self._headers(),
                json={"model": self.model, "input": text},
            )
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise OpenAIApiError(
                f"Embedding request failed: {e.response.status_code}",
                upstream_status=e.response.status_code,
                details={"body": e.response.text},
            ) from e
        except httpx.HTTPError as e:
            raise OpenAIApiError(f"Embedding request failed: {e}") from e

        try:
            payload = EmbeddingResponse.model_validate(r.json())
        except (ValueError, ValidationError) as e:
            raise OpenAIApiError("Embedding response could not be parsed", details={"body": r.text}) from e
        if not payload.data:
            raise OpenAIApiError("Embedding response contained no vectors")

        log_llm_call(
            model=payload.model or self.model,
            purpose="embedding",
            tokens_used=payload.usage.total_tokens if payload.usage else None,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        return payload.data[0].embedding

    async def aclose(self) -> None:
        """Close the internal HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
