"""
Tests for the settings panel: field schema, merge semantics, value checks.
Run with: pytest tests/test_settings_panel.py -v
"""

import pytest

from blockmail.modules.newsletter.settings_panel import (
    get_block_fields, update_block_settings, update_template_settings, render_settings_panel,
)
from blockmail.modules.newsletter.models import create_block, default_template_settings
from blockmail.modules.newsletter.exceptions import SettingsValueError


def _keys(block_type):
    return [field["key"] for field in get_block_fields(block_type)]


# ---------------------------------------------------------------------------
# Field schema
# ---------------------------------------------------------------------------

def test_common_fields():
    assert _keys("divider") == ["backgroundColor", "padding", "alignment"]


@pytest.mark.parametrize("block_type", ["header", "text", "footer"])
def test_text_color_for_text_bearing_blocks(block_type):
    assert _keys(block_type) == ["backgroundColor", "textColor", "padding", "alignment"]


def test_button_fields():
    assert _keys("button") == [
        "backgroundColor", "buttonColor", "buttonTextColor", "buttonBorderRadius",
        "padding", "alignment",
    ]


def test_image_fields():
    keys = _keys("image")
    assert "imageWidth" in keys and "imageBorderRadius" in keys
    assert "textColor" not in keys


# ---------------------------------------------------------------------------
# Merge semantics
# ---------------------------------------------------------------------------

def test_block_settings_merge_keeps_untouched_keys():
    block = create_block("button")
    block["settings"] = {"padding": "large", "buttonColor": "#000000"}

    updated = update_block_settings(block, {"alignment": "left"})

    assert updated["settings"] == {"padding": "large", "buttonColor": "#000000", "alignment": "left"}
    assert block["settings"] == {"padding": "large", "buttonColor": "#000000"}
    assert updated["id"] == block["id"]


def test_block_settings_update_replaces_given_key():
    block = create_block("text")
    block["settings"] = {"padding": "large"}
    assert update_block_settings(block, {"padding": "none"})["settings"] == {"padding": "none"}


def test_template_settings_merge():
    settings = default_template_settings()
    updated = update_template_settings(settings, {"fontFamily": "serif", "primaryColor": "#222222"})

    assert updated["fontFamily"] == "serif"
    assert updated["primaryColor"] == "#222222"
    assert updated["fontSize"] == "medium"
    assert settings["fontFamily"] == "sans-serif"


@pytest.mark.parametrize("updates", [
    {"padding": "huge"},
    {"alignment": "justify"},
    {"buttonBorderRadius": "large"},
    {"backgroundColor": 123},
    {"unknownKey": "x"},
    "padding=large",
])
def test_wrongly_shaped_block_values_raise(updates):
    with pytest.raises(SettingsValueError):
        update_block_settings(create_block("button"), updates)


def test_wrongly_shaped_template_values_raise():
    with pytest.raises(SettingsValueError):
        update_template_settings(default_template_settings(), {"fontSize": "xl"})


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def test_panel_without_selection_shows_hint_and_global_section():
    html = render_settings_panel(None, default_template_settings())
    assert "Select a block" in html
    assert 'data-setting="fontFamily"' in html


def test_panel_shows_resolved_defaults_for_unset_fields():
    html = render_settings_panel(create_block("header"), default_template_settings())
    assert 'value="#1e3a5f"' in html
    assert '<option value="medium" selected>' in html
