"""Sentiment over a short window of user messages, with an escalation flag."""

from __future__ import annotations

from typing import Optional, Sequence

from app.adapters.base import TextClassifier
from app.infra.logging_config import get_logger
from app.schemas.chat import SentimentResult

logger = get_logger("sentiment_analyzer")

SENTIMENTS = ("happy", "neutral", "unhappy")

SENTIMENT_PROMPT = """You analyze the sentiment of a customer talking to a support chatbot.
You receive the customer's most recent messages, oldest first, one per line.

Respond with ONLY a JSON object in this exact format:
{
  "sentiment": "happy" | "neutral" | "unhappy",
  "shouldEscalate": boolean
}

Guidelines:
- sentiment describes the customer's overall mood across all messages, weighted toward the latest
- shouldEscalate: true only if the customer is clearly and persistently frustrated, angry or upset
- shouldEscalate: false for a single mild complaint, neutral questions or positive messages"""


class SentimentAnalyzer:
    def __init__(self, classifier: Optional[TextClassifier]) -> None:
        self._classifier = classifier

    async def analyze(self, recent_user_texts: Sequence[str]) -> SentimentResult:
        """
        Classify the window as a whole. Unavailable or malformed results are
        neutral without escalation, since escalation cannot be undone in a session.
        """
        texts = [t for t in recent_user_texts if t and t.strip()]
        if self._classifier is None or not texts:
            return SentimentResult()

        outcome = await self._classifier.classify(SENTIMENT_PROMPT, "\n".join(texts))
        if not outcome.ok:
            logger.warning("Sentiment analysis failed: %s", outcome.error)
            return SentimentResult()

        data = outcome.data or {}
        sentiment = data.get("sentiment")
        escalate = data.get("shouldEscalate")
        if sentiment not in SENTIMENTS or not isinstance(escalate, bool):
            logger.warning("Invalid sentiment response structure: %s", data)
            return SentimentResult()

        return SentimentResult(sentiment=sentiment, should_escalate=escalate)
