"""Tests for SentimentAnalyzer."""

from unittest.mock import AsyncMock

import pytest

from app.adapters.base import ClassifierOutcome
from app.services.sentiment_analyzer import SentimentAnalyzer


def _classifier(outcome):
    text_classifier = AsyncMock()
    text_classifier.classify.return_value = outcome
    return text_classifier


@pytest.mark.asyncio
async def test_analyze_sends_window_as_one_input():
    text_classifier = _classifier(
        ClassifierOutcome.success({"sentiment": "unhappy", "shouldEscalate": True})
    )

    result = await SentimentAnalyzer(text_classifier).analyze(
        ["This is broken", "Still broken!"]
    )

    assert result.sentiment == "unhappy"
    assert result.should_escalate is True
    assert result.stored_value == "negative"
    _, text = text_classifier.classify.await_args.args
    assert text == "This is broken\nStill broken!"


@pytest.mark.asyncio
async def test_analyze_happy_maps_to_positive():
    text_classifier = _classifier(
        ClassifierOutcome.success({"sentiment": "happy", "shouldEscalate": False})
    )
    result = await SentimentAnalyzer(text_classifier).analyze(["Thanks, great!"])
    assert result.stored_value == "positive"


@pytest.mark.asyncio
async def test_analyze_fails_closed_on_failure():
    text_classifier = _classifier(ClassifierOutcome.failure("boom"))
    result = await SentimentAnalyzer(text_classifier).analyze(["I am furious"])
    assert result.sentiment == "neutral"
    assert result.should_escalate is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [
        {"sentiment": "angry", "shouldEscalate": True},
        {"sentiment": "unhappy", "shouldEscalate": "yes"},
        {"sentiment": "unhappy"},
    ],
)
async def test_analyze_fails_closed_on_invalid_structure(data):
    text_classifier = _classifier(ClassifierOutcome.success(data))
    result = await SentimentAnalyzer(text_classifier).analyze(["I am furious"])
    assert result.should_escalate is False
    assert result.sentiment == "neutral"


@pytest.mark.asyncio
async def test_analyze_without_classifier_or_text_is_neutral():
    assert (await SentimentAnalyzer(None).analyze(["hi"])).sentiment == "neutral"
    text_classifier = AsyncMock()
    result = await SentimentAnalyzer(text_classifier).analyze(["", "  "])
    assert result.should_escalate is False
    text_classifier.classify.assert_not_awaited()
