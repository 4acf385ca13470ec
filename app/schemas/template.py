"""Pydantic schemas for the read-only template catalog."""

from __future__ import annotations

from pydantic import BaseModel

from app.constants.templates import TemplatePrompt


class DataCollectionFieldRead(BaseModel):
    name: str
    label: str
    required: bool
    trigger_phrases: list[str]


class TemplateRead(BaseModel):
    id: str
    name: str
    description: str
    system_prompt: str
    default_personality: str
    data_collection_fields: list[DataCollectionFieldRead]

    @classmethod
    def from_template(cls, template: TemplatePrompt) -> "TemplateRead":
        return cls(
            id=template.id,
            name=template.name,
            description=template.description,
            system_prompt=template.system_prompt,
            default_personality=template.default_personality,
            data_collection_fields=[
                DataCollectionFieldRead(
                    name=f.name,
                    label=f.label,
                    required=f.required,
                    trigger_phrases=list(f.trigger_phrases),
                )
                for f in template.data_collection_fields
            ],
        )
