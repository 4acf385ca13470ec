"""Knowledge base lookup and context assembly for answer generation."""

from __future__ import annotations

from typing import Optional, Sequence

from app.adapters.base import VectorSearch
from app.infra.logging_config import get_logger
from app.schemas.chat import KnowledgeChunk, RetrievedContext

logger = get_logger("knowledge_retriever")


def build_context(chunks: Sequence[KnowledgeChunk]) -> RetrievedContext:
    """Number the chunks as sources: '[Source i]: text' blocks and matching labels."""
    if not chunks:
        return RetrievedContext()
    context = "\n\n".join(
        f"[Source {i}]: {chunk.chunk_text}" for i, chunk in enumerate(chunks, start=1)
    )
    sources = [f"Knowledge Base - Chunk {i}" for i in range(1, len(chunks) + 1)]
    return RetrievedContext(context=context, sources=sources)


class KnowledgeRetriever:
    def __init__(self, search: Optional[VectorSearch]) -> None:
        self._search = search

    async def retrieve(self, query: str, k: int, chatbot_id: str) -> list[KnowledgeChunk]:
        if self._search is None:
            logger.warning("Knowledge base search is not configured; skipping lookup")
            return []
        chunks = await self._search.similarity_search(query, k, chatbot_id)
        if chunks:
            logger.info("Found %s relevant chunks for chatbot %s", len(chunks), chatbot_id)
        else:
            logger.info("No relevant chunks found for chatbot %s", chatbot_id)
        return list(chunks[:k])
