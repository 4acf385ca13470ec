"""pydantic-ai backed TextClassifier and TextGenerator over a LiteLLM / OpenAI-compatible endpoint."""

from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence

from pydantic_ai import Agent
from pydantic_ai.messages import (
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.litellm import LiteLLMProvider

from app.adapters.base import ClassifierOutcome, TextClassifier, TextGenerator
from app.config import Settings
from app.exceptions import GenerationError
from app.infra.logging_config import get_logger
from app.schemas.chat import GeneratedResponse, HistoryMessage

logger = get_logger("llm")

CLASSIFIER_MAX_TOKENS = 200
CLASSIFIER_TEMPERATURE = 0.1


def _build_agent(
    model_name: str, api_key: Optional[str], api_base: Optional[str]
) -> Agent:
    provider = LiteLLMProvider(api_key=api_key, api_base=api_base)
    model = OpenAIChatModel(model_name, provider=provider)
    logger.info(f"Initializing LLM agent with model {model_name}")
    return Agent(model)


def _history_to_message_list(history: Sequence[HistoryMessage]) -> List[Any]:
    """Convert role/content pairs to pydantic_ai ModelMessage list for message_history."""
    out: List[Any] = []
    for item in history:
        content = (item.content or "").strip()
        if not content:
            continue
        if item.role == "user":
            out.append(ModelRequest(parts=[UserPromptPart(content=content)]))
        elif item.role == "assistant":
            out.append(ModelResponse(parts=[TextPart(content=content)]))
        elif item.role == "system":
            out.append(ModelRequest(parts=[SystemPromptPart(content=content)]))
    return out


def _strip_code_fence(raw: str) -> str:
    text = raw.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    return text.strip()


def parse_json_object(raw: Optional[str]) -> ClassifierOutcome:
    """Parse model output into a JSON object outcome; empty or non-object output fails."""
    if raw is None or not str(raw).strip():
        return ClassifierOutcome.failure("No response from classifier")
    try:
        data = json.loads(_strip_code_fence(str(raw)))
    except ValueError as e:
        return ClassifierOutcome.failure(f"Invalid JSON from classifier: {e}")
    if not isinstance(data, dict):
        return ClassifierOutcome.failure("Classifier response is not a JSON object")
    return ClassifierOutcome.success(data)


class LLMTextClassifier(TextClassifier):
    """Runs a low-temperature completion and parses the reply as JSON."""

    def __init__(
        self,
        model_name: str,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        agent: Optional[Agent] = None,
    ) -> None:
        self._model_name = model_name
        self._api_key = api_key
        self._api_base = api_base
        self._agent = agent

    def _get_agent(self) -> Agent:
        if self._agent is None:
            self._agent = _build_agent(self._model_name, self._api_key, self._api_base)
        return self._agent

    async def classify(self, prompt: str, text: str) -> ClassifierOutcome:
        message_history = [ModelRequest(parts=[SystemPromptPart(content=prompt)])]
        try:
            result = await self._get_agent().run(
                text,
                message_history=message_history,
                model_settings={
                    "temperature": CLASSIFIER_TEMPERATURE,
                    "max_tokens": CLASSIFIER_MAX_TOKENS,
                },
            )
        except Exception as e:
            logger.warning("Classifier call failed: %s", e)
            return ClassifierOutcome.failure(f"Classifier unavailable: {e}")
        return parse_json_object(result.output)


class LLMTextGenerator(TextGenerator):
    """Chat completion: the last user message is the prompt, everything before it is history."""

    def __init__(
        self,
        model_name: str,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        agent: Optional[Agent] = None,
    ) -> None:
        self._model_name = model_name
        self._api_key = api_key
        self._api_base = api_base
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._agent = agent

    def _get_agent(self) -> Agent:
        if self._agent is None:
            self._agent = _build_agent(self._model_name, self._api_key, self._api_base)
        return self._agent

    async def complete(
        self,
        messages: Sequence[HistoryMessage],
        options: Optional[dict[str, Any]] = None,
    ) -> GeneratedResponse:
        if not messages or messages[-1].role != "user":
            raise GenerationError("The last message must be a user message")
        options = options or {}
        prompt = messages[-1].content
        message_history = _history_to_message_list(messages[:-1])
        result = await self._get_agent().run(
            prompt,
            message_history=message_history,
            model_settings={
                "temperature": options.get("temperature", self._temperature),
                "max_tokens": options.get("max_tokens", self._max_tokens),
            },
        )
        reply = str(result.output or "").strip()
        if not reply:
            raise GenerationError("Text generator returned an empty reply")
        return GeneratedResponse(message=reply)


def build_text_classifier(settings: Settings) -> LLMTextClassifier:
    return LLMTextClassifier(
        model_name=settings.classifier_model,
        api_key=settings.litellm_api_key,
        api_base=settings.litellm_api_base,
    )


def build_text_generator(settings: Settings) -> LLMTextGenerator:
    logger.info(
        "LLM generator config: model=%s, api_key=%s, api_base=%s",
        settings.llm_model,
        "set" if settings.litellm_api_key else "not set",
        settings.litellm_api_base or "(default)",
    )
    if not settings.litellm_api_key:
        logger.warning(
            "LITELLM_API_KEY is not set; set it to a valid OpenAI or LiteLLM API key to avoid 401 errors."
        )
    return LLMTextGenerator(
        model_name=settings.llm_model,
        api_key=settings.litellm_api_key,
        api_base=settings.litellm_api_base,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
