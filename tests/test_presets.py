"""
Tests for the preset templates.
Run with: pytest tests/test_presets.py -v
"""

import pytest

from blockmail.modules.newsletter.presets import (
    LOGO_PLACEHOLDER, NEWSLETTER_TEMPLATES, get_template_by_id, get_default_template,
    clone_template_blocks, apply_logo_to_blocks, list_templates,
)
from blockmail.modules.newsletter.models import load_document, validate_unique_ids
from blockmail.modules.newsletter.renderer import render_document


def test_lookup_and_default():
    assert get_default_template()["id"] == "dmc-classic"
    assert get_template_by_id("minimal")["name"] == "Minimal"
    assert get_template_by_id("nope") is None
    assert [t["id"] for t in list_templates()] == ["dmc-classic", "minimal", "magazine"]


@pytest.mark.parametrize("template", NEWSLETTER_TEMPLATES, ids=lambda t: t["id"])
def test_presets_are_valid_documents(template):
    blocks, settings = load_document({"blocks": template["blocks"], "templateSettings": template["settings"]})
    html = render_document(blocks, settings)
    assert html.count("<tr><td") >= 1


def test_clone_gives_fresh_ids_and_independent_copies():
    template = get_template_by_id("minimal")
    first = clone_template_blocks(template)
    second = clone_template_blocks(template)

    validate_unique_ids(first + second)
    assert not {b["id"] for b in first} & {b["id"] for b in template["blocks"]}

    first[0]["content"]["title"] = "Changed"
    assert template["blocks"][0]["content"]["title"] == "Newsletter"


def test_clone_substitutes_logo_placeholder():
    template = get_default_template()
    blocks = clone_template_blocks(template, logo_url="https://cdn.example.com/logo.png")

    assert blocks[0]["content"]["logoUrl"] == "https://cdn.example.com/logo.png"
    assert template["blocks"][0]["content"]["logoUrl"] == LOGO_PLACEHOLDER


def test_clone_without_logo_keeps_placeholder():
    blocks = clone_template_blocks(get_default_template())
    assert blocks[0]["content"]["logoUrl"] == LOGO_PLACEHOLDER


def test_apply_logo_only_touches_placeholders():
    blocks = [
        {"id": "a", "type": "header", "content": {"logoUrl": LOGO_PLACEHOLDER}, "settings": {}},
        {"id": "b", "type": "header", "content": {"logoUrl": "https://own.example/logo.png"}, "settings": {}},
    ]
    result = apply_logo_to_blocks(blocks, "https://new.example/logo.png")

    assert result[0]["content"]["logoUrl"] == "https://new.example/logo.png"
    assert result[1]["content"]["logoUrl"] == "https://own.example/logo.png"
    assert blocks[0]["content"]["logoUrl"] == LOGO_PLACEHOLDER
