"""
Settings Panel
==============

Property sheet for the selected block plus the document-wide template
settings. Updates are merges: only the keys being changed are replaced and
every other stored key survives. Displayed values come from the same
resolver the renderers use, so an unset field shows its effective value.
"""

import copy
import logging

from .models import (
    PADDING_VALUES, ALIGNMENT_VALUES, BUTTON_RADIUS_VALUES, IMAGE_WIDTH_VALUES,
    IMAGE_RADIUS_VALUES, FONT_FAMILY_VALUES, FONT_SIZE_VALUES, BLOCK_TYPES,
)
from .defaults import resolve_settings, resolve_template_settings
from .exceptions import SettingsValueError
from .blocks import block_label
from .blocks.base import attr, text

logger = logging.getLogger(__name__)

TEXT_COLOR_TYPES = ('header', 'text', 'footer')

_OPTION_LABELS = {
    'none': 'None', 'small': 'Small', 'medium': 'Medium', 'large': 'Large',
    'left': 'Left', 'center': 'Center', 'right': 'Right', 'full': 'Full',
    'auto': 'Auto', '50%': '50%', '75%': '75%',
    'sans-serif': 'Sans-serif', 'serif': 'Serif', 'monospace': 'Monospace',
}


def _color(key, label):
    return {'key': key, 'label': label, 'kind': 'color'}


def _select(key, label, options):
    return {'key': key, 'label': label, 'kind': 'select', 'options': list(options)}


TEMPLATE_FIELDS = [
    _color('primaryColor', 'Primary color'),
    _color('secondaryColor', 'Secondary color'),
    _color('backgroundColor', 'Background color'),
    _select('fontFamily', 'Font', FONT_FAMILY_VALUES),
    _select('fontSize', 'Font size', FONT_SIZE_VALUES),
]

_BLOCK_FIELD_SHAPES = {
    'backgroundColor': _color('backgroundColor', 'Background color'),
    'textColor': _color('textColor', 'Text color'),
    'buttonColor': _color('buttonColor', 'Button color'),
    'buttonTextColor': _color('buttonTextColor', 'Button text color'),
    'buttonBorderRadius': _select('buttonBorderRadius', 'Corner radius', BUTTON_RADIUS_VALUES),
    'imageWidth': _select('imageWidth', 'Image width', IMAGE_WIDTH_VALUES),
    'imageBorderRadius': _select('imageBorderRadius', 'Image corners', IMAGE_RADIUS_VALUES),
    'padding': _select('padding', 'Padding', PADDING_VALUES),
    'alignment': _select('alignment', 'Alignment', ALIGNMENT_VALUES),
}

_TEMPLATE_FIELD_SHAPES = {field['key']: field for field in TEMPLATE_FIELDS}


def get_block_fields(block_type):
    """Fields shown for a block type, in display order"""
    keys = ['backgroundColor']
    if block_type in TEXT_COLOR_TYPES:
        keys.append('textColor')
    if block_type == 'button':
        keys.extend(['buttonColor', 'buttonTextColor', 'buttonBorderRadius'])
    if block_type == 'image':
        keys.extend(['imageWidth', 'imageBorderRadius'])
    keys.extend(['padding', 'alignment'])
    return [copy.deepcopy(_BLOCK_FIELD_SHAPES[key]) for key in keys]


def _check(shapes, updates):
    if not isinstance(updates, dict):
        raise SettingsValueError("Settings updates must be an object")

    for key, value in updates.items():
        field = shapes.get(key)
        if field is None:
            raise SettingsValueError(f"Unknown setting: {key}")
        if field['kind'] == 'color':
            if not isinstance(value, str):
                raise SettingsValueError(f"{key} must be a color string")
        elif value not in field['options']:
            raise SettingsValueError(
                f"{key} must be one of {', '.join(field['options'])}, got {value!r}"
            )


def update_block_settings(block, updates):
    """Copy of block with updates merged over its settings"""
    _check(_BLOCK_FIELD_SHAPES, updates)
    updated = copy.deepcopy(block)
    updated['settings'] = {**(block.get('settings') or {}), **updates}
    return updated


def update_template_settings(template_settings, updates):
    """New template settings with updates merged over the current ones"""
    _check(_TEMPLATE_FIELD_SHAPES, updates)
    return {**template_settings, **updates}


def _field_html(scope, field, value):
    name = f'{scope}.{field["key"]}'
    if field['kind'] == 'color':
        control = (
            f'<input type="color" name="{attr(name)}" data-scope="{scope}" '
            f'data-setting="{attr(field["key"])}" value="{attr(value)}" />'
        )
    else:
        options = ''.join(
            f'<option value="{attr(option)}"{" selected" if option == value else ""}>'
            f'{text(_OPTION_LABELS.get(option, option))}</option>'
            for option in field['options']
        )
        control = (
            f'<select name="{attr(name)}" data-scope="{scope}" '
            f'data-setting="{attr(field["key"])}">{options}</select>'
        )
    return f'<label class="nl-setting"><span>{text(field["label"])}</span>{control}</label>'


def render_settings_panel(block, template_settings):
    """Block section (or a hint when nothing is selected) plus the global section"""
    if block is None:
        block_section = '<p class="nl-settings__hint">Select a block to edit its settings</p>'
    elif block.get('type') not in BLOCK_TYPES:
        block_section = '<p class="nl-settings__hint">This block type has no settings</p>'
    else:
        resolved = resolve_settings(block['type'], block.get('settings'))
        rows = ''.join(
            _field_html('block', field, resolved.get(field['key']))
            for field in get_block_fields(block['type'])
        )
        block_section = (
            f'<h4 class="nl-settings__title">{text(block_label(block["type"]))}</h4>'
            f'<div class="nl-settings__fields" data-block-id="{attr(block.get("id"))}">{rows}</div>'
        )

    resolved_template = resolve_template_settings(template_settings)
    template_rows = ''.join(
        _field_html('template', field, resolved_template.get(field['key']))
        for field in TEMPLATE_FIELDS
    )
    return (
        f'<aside class="nl-settings">'
        f'<section class="nl-settings__block">{block_section}</section>'
        f'<section class="nl-settings__template"><h4 class="nl-settings__title">Template</h4>'
        f'{template_rows}</section></aside>'
    )
