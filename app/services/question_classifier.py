"""Decides whether a message needs the knowledge base and whether it is on-topic."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from app.adapters.base import TextClassifier
from app.infra.logging_config import get_logger
from app.schemas.chat import ClassificationResult

logger = get_logger("question_classifier")

DEFAULT_CHATBOT_CONTEXT = "General purpose chatbot"

CLASSIFIER_PROMPT = """You are a question classifier for a chatbot system. Your job is to determine:
1. Whether a question requires searching the knowledge base
2. Whether the question is relevant to the chatbot's purpose

Context about this chatbot: {context}

Respond with ONLY a JSON object in this exact format:
{{
  "needsKnowledgeBase": boolean,
  "isRelevant": boolean,
  "confidence": 0.0-1.0,
  "reasoning": "brief explanation"
}}

Guidelines:
- needsKnowledgeBase: true if the question asks about specific information, documentation, policies, procedures, or company-specific details
- needsKnowledgeBase: false for general questions, greetings, small talk, or common knowledge
- isRelevant: true if the question relates to the chatbot's purpose or domain
- isRelevant: false for completely off-topic questions
- confidence: how certain you are about the classification (0.0-1.0)

Examples:
- "What are your business hours?" -> needsKnowledgeBase: true, isRelevant: true
- "How do I reset my password?" -> needsKnowledgeBase: true, isRelevant: true
- "Hello, how are you?" -> needsKnowledgeBase: false, isRelevant: true
- "What's the weather like?" -> needsKnowledgeBase: false, isRelevant: false
- "Tell me about your pricing plans" -> needsKnowledgeBase: true, isRelevant: true
- "What's 2+2?" -> needsKnowledgeBase: false, isRelevant: false"""


def build_classifier_prompt(chatbot_context: Optional[str]) -> str:
    return CLASSIFIER_PROMPT.format(context=chatbot_context or DEFAULT_CHATBOT_CONTEXT)


def _to_result(data: dict[str, Any]) -> Optional[ClassificationResult]:
    """Map the model's camelCase object; None when any field has the wrong type."""
    needs_kb = data.get("needsKnowledgeBase")
    relevant = data.get("isRelevant")
    confidence = data.get("confidence")
    reasoning = data.get("reasoning")
    if not isinstance(needs_kb, bool) or not isinstance(relevant, bool):
        return None
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        return None
    if not isinstance(reasoning, str):
        return None
    try:
        return ClassificationResult(
            needs_knowledge_base=needs_kb,
            is_relevant=relevant,
            confidence=min(max(float(confidence), 0.0), 1.0),
            reasoning=reasoning,
        )
    except ValidationError:
        return None


class QuestionClassifier:
    def __init__(self, classifier: Optional[TextClassifier]) -> None:
        self._classifier = classifier

    async def classify(
        self, message: str, chatbot_context: Optional[str] = None
    ) -> ClassificationResult:
        """Classify a message. Any failure falls back to searching and answering."""
        if self._classifier is None:
            return ClassificationResult.fail_open(
                "Classifier not available, defaulting to knowledge base search"
            )

        outcome = await self._classifier.classify(
            build_classifier_prompt(chatbot_context), message
        )
        if not outcome.ok:
            logger.warning("Question classification failed: %s", outcome.error)
            return ClassificationResult.fail_open(
                "Classification failed, defaulting to knowledge base search"
            )

        result = _to_result(outcome.data or {})
        if result is None:
            logger.warning("Invalid classification response structure: %s", outcome.data)
            return ClassificationResult.fail_open(
                "Classification parsing failed, defaulting to knowledge base search"
            )

        logger.debug(
            "Question classification: question=%r needs_kb=%s relevant=%s confidence=%.2f",
            message[:50],
            result.needs_knowledge_base,
            result.is_relevant,
            result.confidence,
        )
        return result
