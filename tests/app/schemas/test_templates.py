"""Tests for the template catalog constants."""

from app.constants.templates import get_all_template_prompts, get_template_prompt


def test_every_template_collects_fields():
    for template in get_all_template_prompts():
        assert template.system_prompt
        assert template.data_collection_fields, template.id
        for field in template.data_collection_fields:
            assert field.trigger_phrases, (template.id, field.name)


def test_unknown_or_empty_template_id():
    assert get_template_prompt("nope") is None
    assert get_template_prompt(None) is None
    assert get_template_prompt("") is None


def test_customer_support_field_order():
    template = get_template_prompt("customer-support")
    assert [f.name for f in template.data_collection_fields] == [
        "email",
        "orderNumber",
        "phone",
    ]
    assert "urgent" in template.get_field("phone").trigger_phrases
