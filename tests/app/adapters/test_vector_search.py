"""Tests for HttpVectorSearch."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from app.adapters.vector_search import HttpVectorSearch, build_vector_search
from app.config import get_settings
from app.exceptions import RetrievalError


def _response(status_code=200, payload=None, text="", json_error=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


@pytest.mark.asyncio
async def test_similarity_search_posts_query_and_parses_chunks():
    search = HttpVectorSearch("https://kb.example.com/", api_key="secret", timeout=5)
    payload = {
        "chunks": [
            {"chunk_text": "We open at 9am.", "similarity": 0.91},
            {"chunk_text": "We close at 5pm.", "similarity": 0.84},
        ]
    }
    with patch(
        "app.adapters.vector_search.requests.post", return_value=_response(payload=payload)
    ) as mock_post:
        chunks = await search.similarity_search("opening hours", 5, "bot-1")

    assert [c.chunk_text for c in chunks] == ["We open at 9am.", "We close at 5pm."]
    args, kwargs = mock_post.call_args
    assert args[0] == "https://kb.example.com/match-chunks"
    assert kwargs["json"] == {"query": "opening hours", "match_count": 5, "chatbot_id": "bot-1"}
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["timeout"] == 5


@pytest.mark.asyncio
async def test_similarity_search_caps_to_k():
    search = HttpVectorSearch("https://kb.example.com")
    payload = {"chunks": [{"chunk_text": str(i)} for i in range(4)]}
    with patch(
        "app.adapters.vector_search.requests.post", return_value=_response(payload=payload)
    ):
        chunks = await search.similarity_search("q", 2, "bot-1")
    assert len(chunks) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        _response(status_code=500, text="boom"),
        _response(json_error=ValueError("bad json")),
        _response(payload={"chunks": [{"similarity": 0.5}]}),
    ],
)
async def test_similarity_search_raises_retrieval_error(response):
    search = HttpVectorSearch("https://kb.example.com")
    with patch("app.adapters.vector_search.requests.post", return_value=response):
        with pytest.raises(RetrievalError):
            await search.similarity_search("q", 5, "bot-1")


@pytest.mark.asyncio
async def test_similarity_search_wraps_request_exceptions():
    search = HttpVectorSearch("https://kb.example.com")
    with patch(
        "app.adapters.vector_search.requests.post",
        side_effect=requests.ConnectionError("down"),
    ):
        with pytest.raises(RetrievalError):
            await search.similarity_search("q", 5, "bot-1")


def test_build_vector_search_requires_url(monkeypatch):
    monkeypatch.delenv("VECTOR_SEARCH_URL", raising=False)
    assert build_vector_search(get_settings()) is None

    monkeypatch.setenv("VECTOR_SEARCH_URL", "https://kb.example.com")
    assert isinstance(build_vector_search(get_settings()), HttpVectorSearch)
