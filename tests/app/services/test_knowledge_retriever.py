"""Tests for KnowledgeRetriever and context assembly."""

from unittest.mock import AsyncMock

import pytest

from app.exceptions import RetrievalError
from app.schemas.chat import KnowledgeChunk
from app.services.knowledge_retriever import KnowledgeRetriever, build_context


def test_build_context_numbers_sources():
    ctx = build_context(
        [KnowledgeChunk(chunk_text="Alpha"), KnowledgeChunk(chunk_text="Beta")]
    )
    assert ctx.context == "[Source 1]: Alpha\n\n[Source 2]: Beta"
    assert ctx.sources == ["Knowledge Base - Chunk 1", "Knowledge Base - Chunk 2"]


def test_build_context_empty():
    ctx = build_context([])
    assert ctx.context == ""
    assert ctx.sources == []


@pytest.mark.asyncio
async def test_retrieve_passes_scope_and_caps_results():
    search = AsyncMock()
    search.similarity_search.return_value = [
        KnowledgeChunk(chunk_text=str(i)) for i in range(7)
    ]

    chunks = await KnowledgeRetriever(search).retrieve("hours", 5, "bot-1")

    assert len(chunks) == 5
    search.similarity_search.assert_awaited_once_with("hours", 5, "bot-1")


@pytest.mark.asyncio
async def test_retrieve_without_search_returns_nothing():
    assert await KnowledgeRetriever(None).retrieve("hours", 5, "bot-1") == []


@pytest.mark.asyncio
async def test_retrieve_propagates_search_errors():
    search = AsyncMock()
    search.similarity_search.side_effect = RetrievalError("HTTP 500")
    with pytest.raises(RetrievalError):
        await KnowledgeRetriever(search).retrieve("hours", 5, "bot-1")
