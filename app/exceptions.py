"""Error taxonomy for the turn pipeline."""

from __future__ import annotations


class ChatPipelineError(Exception):
    """Base class for errors raised inside a turn."""


class FieldValidationError(ChatPipelineError):
    """A collected field value failed validation. Handled inline by re-prompting."""

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.message = message


class ClassifierError(ChatPipelineError):
    """The text-classification collaborator was unavailable or returned unusable output."""


class RetrievalError(ChatPipelineError):
    """Knowledge base similarity search failed."""


class GenerationError(ChatPipelineError):
    """The text generator failed or returned an empty reply."""


class PersistenceError(ChatPipelineError):
    """A conversation, message or lead could not be stored."""
