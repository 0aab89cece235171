"""
Tests for the block document model: factory, duplicate, document round trip.
Run with: pytest tests/test_models.py -v
"""

import pytest

from blockmail.modules.newsletter.models import (
    BLOCK_TYPES, DEFAULT_TEMPLATE_SETTINGS, create_block, duplicate_block,
    default_template_settings, serialize_document, load_document,
    validate_unique_ids, find_block_index,
)
from blockmail.modules.newsletter.exceptions import UnknownBlockTypeError, DocumentError


# ---------------------------------------------------------------------------
# Block factory
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("block_type", BLOCK_TYPES)
def test_create_block_has_empty_content_and_sparse_settings(block_type):
    block = create_block(block_type)

    assert block["type"] == block_type
    assert block["id"]
    assert block["settings"] == {}
    assert isinstance(block["content"], dict)


def test_create_block_content_shapes():
    assert create_block("header")["content"] == {"title": "", "subtitle": "", "logoUrl": ""}
    assert create_block("text")["content"] == {"html": ""}
    assert create_block("button")["content"] == {"text": "", "url": ""}
    assert create_block("footer")["content"]["socialLinks"] == []
    assert create_block("divider")["content"] == {}
    assert create_block("columns")["content"] == {"columns": []}


def test_created_ids_are_unique():
    ids = {create_block("text")["id"] for _ in range(200)}
    assert len(ids) == 200


def test_ids_stay_unique_across_creates_and_duplicates():
    blocks = [create_block(t) for t in BLOCK_TYPES]
    for round_ in range(3):
        blocks += [duplicate_block(b) for b in blocks]
        blocks.append(create_block(BLOCK_TYPES[round_]))

    ids = [b["id"] for b in blocks]
    assert len(set(ids)) == len(ids)
    validate_unique_ids(blocks)


def test_created_blocks_do_not_share_lists():
    first = create_block("footer")
    second = create_block("footer")
    first["content"]["socialLinks"].append({"type": "facebook", "url": "https://fb.example"})
    assert second["content"]["socialLinks"] == []


def test_unknown_block_type_fails_fast():
    with pytest.raises(UnknownBlockTypeError) as exc:
        create_block("carousel")
    assert exc.value.block_type == "carousel"
    assert isinstance(exc.value, ValueError)


# ---------------------------------------------------------------------------
# Duplicate
# ---------------------------------------------------------------------------

def test_duplicate_gets_new_id_and_equal_content():
    block = create_block("button")
    block["content"]["text"] = "Book now"
    block["settings"]["padding"] = "large"

    copy = duplicate_block(block)

    assert copy["id"] != block["id"]
    assert copy["type"] == "button"
    assert copy["content"] == block["content"]
    assert copy["settings"] == block["settings"]


def test_duplicate_is_independent_of_source():
    block = create_block("footer")
    block["content"]["socialLinks"].append({"type": "linkedin", "url": "https://li.example"})
    copy = duplicate_block(block)

    copy["content"]["socialLinks"][0]["url"] = "https://changed.example"
    copy["settings"]["padding"] = "none"

    assert block["content"]["socialLinks"][0]["url"] == "https://li.example"
    assert "padding" not in block["settings"]


# ---------------------------------------------------------------------------
# Template settings
# ---------------------------------------------------------------------------

def test_default_template_settings():
    settings = default_template_settings()
    assert settings == {
        "primaryColor": "#c75a3a",
        "secondaryColor": "#1e3a5f",
        "backgroundColor": "#ffffff",
        "fontFamily": "sans-serif",
        "fontSize": "medium",
    }
    settings["primaryColor"] = "#000000"
    assert DEFAULT_TEMPLATE_SETTINGS["primaryColor"] == "#c75a3a"


# ---------------------------------------------------------------------------
# Document round trip
# ---------------------------------------------------------------------------

def test_round_trip_is_lossless():
    header = create_block("header")
    header["content"]["title"] = "Spring offers"
    text = create_block("text")
    text["content"]["html"] = "<p>Hello</p>"
    text["settings"] = {"padding": "large", "textColor": "#111111"}
    unknown = {"id": "legacy-1", "type": "carousel", "content": {"slides": [1, 2]}, "settings": {}}
    settings = dict(default_template_settings(), fontFamily="serif")

    document = serialize_document([header, text, unknown], settings)
    blocks, loaded_settings = load_document(document)

    assert serialize_document(blocks, loaded_settings) == document


def test_serialize_does_not_alias_input():
    block = create_block("text")
    document = serialize_document([block], default_template_settings())
    document["blocks"][0]["content"]["html"] = "<p>changed</p>"
    assert block["content"]["html"] == ""


def test_load_fills_missing_template_settings():
    blocks, settings = load_document({"blocks": [], "templateSettings": {"primaryColor": "#123456"}})
    assert blocks == []
    assert settings["primaryColor"] == "#123456"
    assert settings["fontSize"] == "medium"


def test_load_none_gives_empty_document():
    blocks, settings = load_document(None)
    assert blocks == []
    assert settings == default_template_settings()


def test_load_rejects_duplicate_ids():
    block = create_block("text")
    with pytest.raises(DocumentError):
        load_document({"blocks": [block, dict(block)], "templateSettings": {}})


@pytest.mark.parametrize("data", [
    [],
    "blocks",
    {"blocks": "not-a-list"},
    {"blocks": [{"type": "text"}]},
])
def test_load_rejects_malformed_documents(data):
    with pytest.raises(DocumentError):
        load_document(data)


def test_validate_unique_ids_accepts_distinct_ids():
    validate_unique_ids([create_block("text"), create_block("text")])


def test_find_block_index():
    blocks = [create_block("text"), create_block("image")]
    assert find_block_index(blocks, blocks[1]["id"]) == 1
    assert find_block_index(blocks, "missing") == -1
