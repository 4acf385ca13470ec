"""Template catalog API."""

from fastapi import APIRouter, HTTPException

from app.constants.templates import get_all_template_prompts, get_template_prompt
from app.schemas.template import TemplateRead

router = APIRouter(
    prefix="/templates",
    tags=["templates"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=list[TemplateRead])
def list_templates() -> list[TemplateRead]:
    return [TemplateRead.from_template(t) for t in get_all_template_prompts()]


@router.get("/{template_id}", response_model=TemplateRead)
def get_template(template_id: str) -> TemplateRead:
    template = get_template_prompt(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return TemplateRead.from_template(template)
