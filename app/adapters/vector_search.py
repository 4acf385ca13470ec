"""Similarity search against a knowledge base match endpoint over HTTP."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import requests
from pydantic import BaseModel, ValidationError

from app.adapters.base import VectorSearch
from app.config import Settings
from app.exceptions import RetrievalError
from app.infra.logging_config import get_logger
from app.schemas.chat import KnowledgeChunk

logger = get_logger("vector_search")

MATCH_CHUNKS_PATH = "/match-chunks"
TIMEOUT_SECONDS = 30


class MatchChunksResponse(BaseModel):
    chunks: list[KnowledgeChunk] = []


class HttpVectorSearch(VectorSearch):
    """
    POSTs {query, match_count, chatbot_id} to `{base_url}/match-chunks`.

    Expects {"chunks": [{"chunk_text": ..., "similarity": ...}, ...]} ordered by similarity.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: int = TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    async def similarity_search(
        self, query: str, k: int, scope_id: str
    ) -> list[KnowledgeChunk]:
        return await asyncio.to_thread(self._search, query, k, scope_id)

    def _search(self, query: str, k: int, scope_id: str) -> list[KnowledgeChunk]:
        url = f"{self._base_url}{MATCH_CHUNKS_PATH}"
        headers: dict[str, str] = {"Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        body: dict[str, Any] = {
            "query": query,
            "match_count": k,
            "chatbot_id": scope_id,
        }
        logger.debug("Searching %s for chatbot %s (k=%s)", url, scope_id, k)

        try:
            resp = requests.post(url, json=body, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise RetrievalError(str(e)) from e

        if resp.status_code != 200:
            raise RetrievalError(
                f"HTTP {resp.status_code}: {resp.text[:500] if resp.text else 'no body'}"
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise RetrievalError(f"Invalid JSON: {e}") from e

        try:
            parsed = MatchChunksResponse.model_validate(data)
        except ValidationError as e:
            raise RetrievalError(f"Invalid match response: {e}") from e

        return parsed.chunks[:k]


def build_vector_search(settings: Settings) -> Optional[HttpVectorSearch]:
    """Return the configured search client, or None when no endpoint is set."""
    if not settings.vector_search_url:
        logger.warning("VECTOR_SEARCH_URL is not set; knowledge base lookups are disabled.")
        return None
    return HttpVectorSearch(
        base_url=settings.vector_search_url,
        api_key=settings.vector_search_api_key,
        timeout=settings.vector_search_timeout_seconds,
    )
