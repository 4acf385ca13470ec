"""Collaborator contracts for the turn pipeline and their vendor-backed implementations."""

from app.adapters.base import (
    ChatPersistence,
    ClassifierOutcome,
    TextClassifier,
    TextGenerator,
    VectorSearch,
)

__all__ = [
    "ChatPersistence",
    "ClassifierOutcome",
    "TextClassifier",
    "TextGenerator",
    "VectorSearch",
]
