"""
Turn pipeline for one chat.

Each accepted user message runs, in order: collection interrupt, session
bootstrap, conversation id backfill, trigger-based collection start,
sentiment, classification, optional retrieval, generation and persistence.
Most steps can end the turn early.
"""

from __future__ import annotations

from typing import Optional

from app.adapters.base import ChatPersistence
from app.adapters.llm import build_text_classifier, build_text_generator
from app.adapters.vector_search import build_vector_search
from app.config import Settings
from app.core.conversation_session import ConversationSession
from app.core.session_key import mint_session_id
from app.exceptions import FieldValidationError
from app.infra.logging_config import get_logger
from app.schemas.chat import ChatMessage, ChatState, HistoryMessage, TurnPolicy
from app.schemas.chatbot import ChatbotConfig
from app.services.chat_persistence import SqlChatPersistence
from app.services.data_collection_service import DataCollectionService
from app.services.knowledge_retriever import KnowledgeRetriever, build_context
from app.services.question_classifier import QuestionClassifier
from app.services.response_generator import ResponseGenerator
from app.services.sentiment_analyzer import SentimentAnalyzer

logger = get_logger("conversation_orchestrator")

WELCOME_MESSAGE_ID = "welcome"


class ConversationOrchestrator:
    def __init__(
        self,
        config: ChatbotConfig,
        persistence: ChatPersistence,
        classifier: QuestionClassifier,
        sentiment: SentimentAnalyzer,
        retriever: KnowledgeRetriever,
        generator: ResponseGenerator,
        policy: Optional[TurnPolicy] = None,
        session: Optional[ConversationSession] = None,
    ) -> None:
        self.config = config
        self.persistence = persistence
        self.classifier = classifier
        self.sentiment = sentiment
        self.retriever = retriever
        self.generator = generator
        self.policy = policy or TurnPolicy()
        self.session = session or ConversationSession()
        self.collection = DataCollectionService()

    @property
    def is_generating(self) -> bool:
        return self.session.is_generating

    def initialize_chat(self) -> list[ChatMessage]:
        """Reset the session and seed the transcript with the welcome message."""
        welcome = ChatMessage(
            id=WELCOME_MESSAGE_ID, text=self.config.welcome_message, sender="bot"
        )
        self.session.reset([welcome])
        return list(self.session.messages)

    def clear_chat(self) -> None:
        self.session.reset()

    def state(self, chat_id: str) -> ChatState:
        s = self.session
        return ChatState(
            chat_id=chat_id,
            session_id=s.session_id,
            conversation_id=s.conversation_id,
            is_escalated=s.is_escalated,
            active_collection_field=s.active_collection_field,
            collected_fields=dict(s.collected_fields),
            messages=list(s.messages),
        )

    async def send_message(self, user_text: str) -> list[ChatMessage]:
        """
        Process one user message and return the messages it appended
        (the user message first). Empty input and calls made while another
        turn is in flight return an empty list.
        """
        text = (user_text or "").strip()
        if not text:
            return []
        if self.session.is_generating:
            logger.debug("Rejected message for chatbot %s: turn in flight", self.config.id)
            return []

        self.session.is_generating = True
        start = len(self.session.messages)
        try:
            if self.session.active_collection_field:
                await self._answer_collection_field(text)
            else:
                await self._run_turn(text)
        finally:
            self.session.is_generating = False
        return self.session.messages[start:]

    # -------------------------------------------------------------------------
    # Collection flow
    # -------------------------------------------------------------------------

    async def _answer_collection_field(self, text: str) -> None:
        s = self.session
        field_name = s.active_collection_field
        template = self.config.template_prompt
        self._append(ChatMessage.from_user(text))

        try:
            self.collection.check(template, field_name, text)
        except FieldValidationError as e:
            self._append(ChatMessage.from_bot(e.message, kind="bot-validation"))
            return

        s.collected_fields[field_name] = text
        next_field = self.collection.next_required_missing(template, s.collected_fields)
        if next_field:
            label = self.collection.field_label(template, next_field)
            self._append(
                ChatMessage.from_bot(
                    self.policy.collection_next_message.format(label=label),
                    kind="bot-collect",
                )
            )
            s.active_collection_field = next_field
            return

        self._append(
            ChatMessage.from_bot(self.policy.collection_done_message, kind="bot-thanks")
        )
        s.active_collection_field = None
        await self._store_lead()

    async def _store_lead(self) -> None:
        s = self.session
        try:
            await self.persistence.insert_lead(
                self.config.id,
                dict(s.collected_fields),
                s.latest_sentiment,
                s.transcript(),
                s.conversation_id,
            )
            logger.info("Stored lead for chatbot %s", self.config.id)
        except Exception:
            logger.exception("Failed to store lead for chatbot %s", self.config.id)

    # -------------------------------------------------------------------------
    # Main turn
    # -------------------------------------------------------------------------

    async def _run_turn(self, text: str) -> None:
        s = self.session
        policy = self.policy
        prior = list(s.messages)
        user_message = ChatMessage.from_user(text)
        self._append(user_message)

        try:
            if not s.session_id:
                s.session_id = mint_session_id()
                logger.info("Created new session %s", s.session_id)
            await self.persistence.insert_message(self.config.id, s.session_id, text, "user")

            if not s.conversation_id:
                s.conversation_id = await self.persistence.find_conversation_id(
                    self.config.id, s.session_id
                )
            if s.conversation_id:
                user_message.conversation_id = s.conversation_id

            template = self.config.template_prompt
            field_name = self.collection.match_trigger(text, template, s.collected_fields)
            if field_name:
                label = self.collection.field_label(template, field_name)
                self._append(
                    ChatMessage.from_bot(
                        policy.collection_start_message.format(label=label),
                        kind="bot-request",
                    )
                )
                s.active_collection_field = field_name
                return

            if not s.is_escalated:
                window = prior[-policy.sentiment_window:] if policy.sentiment_window else []
                recent = [m.text for m in window if m.sender == "user"] + [text]
                result = await self.sentiment.analyze(recent)
                s.record_sentiment(result, policy.sentiment_history_limit)
                if result.should_escalate:
                    logger.info("Escalating session %s after negative sentiment", s.session_id)
                    s.is_escalated = True
                    self._append(ChatMessage.from_bot(policy.empathy_message, kind="empathy"))

            classification = await self.classifier.classify(
                text, self.config.classification_context
            )
            if (
                not classification.is_relevant
                and classification.confidence > policy.irrelevance_threshold
            ):
                self._append(
                    ChatMessage.from_bot(policy.irrelevant_message, kind="bot-irrelevant")
                )
                await self._store_reply(policy.irrelevant_message)
                return

            context = ""
            sources: list[str] = []
            if classification.needs_knowledge_base and self.config.has_knowledge_base:
                chunks = await self.retriever.retrieve(
                    text, policy.retrieval_top_k, self.config.id
                )
                retrieved = build_context(chunks)
                context, sources = retrieved.context, retrieved.sources

            window = prior[-policy.history_window:] if policy.history_window else []
            history = [HistoryMessage(role=m.role, content=m.text) for m in window]
            history.append(HistoryMessage(role="user", content=text))
            response = await self.generator.generate(
                history,
                context=context,
                personality=self.config.personality,
                system_prompt=self.config.system_prompt,
            )
            self._append(
                ChatMessage.from_bot(response.message, sources=response.sources or sources)
            )
        except Exception:
            logger.exception("Error generating response for chatbot %s", self.config.id)
            self._append(ChatMessage.from_bot(policy.apology_message, kind="bot-error"))
            return

        await self._store_reply(response.message)

    async def _store_reply(self, text: str) -> None:
        # The reply is already visible; a storage failure is only logged.
        try:
            await self.persistence.insert_message(
                self.config.id, self.session.session_id, text, "assistant"
            )
        except Exception:
            logger.exception("Failed to store assistant message for chatbot %s", self.config.id)

    def _append(self, message: ChatMessage) -> None:
        self.session.messages.append(message)


def build_orchestrator(config: ChatbotConfig, settings: Settings) -> ConversationOrchestrator:
    """Wire an orchestrator with the configured LLM, search and SQL storage."""
    text_classifier = build_text_classifier(settings)
    return ConversationOrchestrator(
        config=config,
        persistence=SqlChatPersistence(),
        classifier=QuestionClassifier(text_classifier),
        sentiment=SentimentAnalyzer(text_classifier),
        retriever=KnowledgeRetriever(build_vector_search(settings)),
        generator=ResponseGenerator(build_text_generator(settings)),
        policy=TurnPolicy.from_settings(settings),
    )
