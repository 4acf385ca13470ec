"""Lead-capture field selection and validation for template-driven chatbots."""

from __future__ import annotations

import re
from typing import Mapping, Optional

from app.constants.chat_copy import ChatCopy
from app.constants.templates import TemplatePrompt
from app.exceptions import FieldValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PHONE_DIGITS = 10


class DataCollectionService:
    """
    Stateless helpers for the collection flow. The caller owns the collected
    values and the active field; every method here is a pure function of its inputs.
    """

    @staticmethod
    def match_trigger(
        text: str,
        template: Optional[TemplatePrompt],
        collected: Mapping[str, str],
    ) -> Optional[str]:
        """First uncollected field (declaration order) whose trigger phrase occurs in text."""
        if template is None:
            return None
        lowered = text.lower()
        for field in template.data_collection_fields:
            if collected.get(field.name):
                continue
            if any(phrase.lower() in lowered for phrase in field.trigger_phrases):
                return field.name
        return None

    @staticmethod
    def next_required_missing(
        template: Optional[TemplatePrompt],
        collected: Mapping[str, str],
    ) -> Optional[str]:
        if template is None:
            return None
        for field in template.data_collection_fields:
            if field.required and not collected.get(field.name):
                return field.name
        return None

    @staticmethod
    def validate(field_name: str, value: str) -> bool:
        if field_name == "email":
            return bool(EMAIL_PATTERN.match(value))
        if field_name == "phone":
            digits = re.sub(r"\D", "", value)
            return len(digits) >= MIN_PHONE_DIGITS
        return bool(value.strip())

    @staticmethod
    def field_label(template: Optional[TemplatePrompt], field_name: str) -> str:
        if template is None:
            return field_name
        field = template.get_field(field_name)
        return field.label if field else field_name

    @classmethod
    def check(
        cls, template: Optional[TemplatePrompt], field_name: str, value: str
    ) -> None:
        """Raise FieldValidationError carrying the re-prompt text when value is invalid."""
        if cls.validate(field_name, value):
            return
        if field_name == "email":
            message = ChatCopy.INVALID_EMAIL
        elif field_name == "phone":
            message = ChatCopy.INVALID_PHONE
        else:
            message = ChatCopy.INVALID_VALUE.format(
                label=cls.field_label(template, field_name)
            )
        raise FieldValidationError(field_name, message)
