"""Builds the generation request (system prompt, persona, context) and calls the model."""

from __future__ import annotations

from typing import Optional, Sequence

from app.adapters.base import TextGenerator
from app.exceptions import GenerationError
from app.schemas.chat import GeneratedResponse, HistoryMessage

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Answer the user's questions clearly and concisely."
)


def build_system_message(
    context: str,
    personality: Optional[str] = None,
    system_prompt: Optional[str] = None,
) -> str:
    parts = [(system_prompt or DEFAULT_SYSTEM_PROMPT).strip()]
    if personality:
        parts.append(f"Personality: {personality.strip()}")
    if context:
        parts.append(
            "Use the following knowledge base excerpts to answer the user's question. "
            "If they do not contain the answer, say so instead of guessing.\n\n"
            f"{context}"
        )
    return "\n\n".join(parts)


class ResponseGenerator:
    def __init__(self, generator: Optional[TextGenerator]) -> None:
        self._generator = generator

    async def generate(
        self,
        history: Sequence[HistoryMessage],
        context: str = "",
        personality: Optional[str] = None,
        system_prompt: Optional[str] = None,
    ) -> GeneratedResponse:
        """One completion, no retry. Failures propagate to the caller."""
        if self._generator is None:
            raise GenerationError("Text generator is not configured")
        system = HistoryMessage(
            role="system",
            content=build_system_message(context, personality, system_prompt),
        )
        return await self._generator.complete([system, *history])
