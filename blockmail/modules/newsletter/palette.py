"""
Newsletter Palette
==================

The creatable block types, offered as drag sources. A palette drag carries
the id 'palette-<type>' and the data {'type': 'palette-item', 'blockType': <type>}.
Types that are not yet available (columns) are never offered, so they can
never arrive as a drop intent.
"""

from .models import BLOCK_TYPES, UNIMPLEMENTED_BLOCK_TYPES
from .blocks.base import attr, text

PALETTE_PREFIX = 'palette-'
PALETTE_ITEM = 'palette-item'

_DESCRIPTIONS = {
    'header': ('Header', 'Title, subtitle and logo'),
    'text': ('Text', 'Rich text paragraph'),
    'image': ('Image', 'Picture with optional link'),
    'button': ('Button', 'Call to action'),
    'footer': ('Footer', 'Contact details and unsubscribe'),
    'divider': ('Divider', 'Horizontal separator'),
}

_ICONS = {
    'header': 'H',
    'text': 'T',
    'image': 'IMG',
    'button': 'BTN',
    'footer': 'F',
    'divider': '--',
}


def palette_drag_id(block_type):
    return f"{PALETTE_PREFIX}{block_type}"


def palette_drag_data(block_type):
    return {'type': PALETTE_ITEM, 'blockType': block_type}


def get_palette():
    """Palette entries in display order"""
    entries = []
    for block_type in BLOCK_TYPES:
        if block_type in UNIMPLEMENTED_BLOCK_TYPES:
            continue
        label, description = _DESCRIPTIONS[block_type]
        entries.append({
            'type': block_type,
            'label': label,
            'description': description,
            'dragId': palette_drag_id(block_type),
            'data': palette_drag_data(block_type),
        })
    return entries


def get_palette_entry(block_type):
    """Palette entry for a type, or None when it is not creatable"""
    for entry in get_palette():
        if entry['type'] == block_type:
            return entry
    return None


def block_type_from_drag(active_id, data=None):
    """Block type a palette drag would create, or None for a canvas drag.

    The drag data wins over the id when both are present.
    """
    if isinstance(data, dict) and data.get('type') == PALETTE_ITEM:
        block_type = data.get('blockType')
    elif isinstance(active_id, str) and active_id.startswith(PALETTE_PREFIX):
        block_type = active_id[len(PALETTE_PREFIX):]
    else:
        return None

    return block_type if get_palette_entry(block_type) else None


def is_palette_drag(active_id, data=None):
    if isinstance(data, dict) and data.get('type') == PALETTE_ITEM:
        return True
    return isinstance(active_id, str) and active_id.startswith(PALETTE_PREFIX)


def render_palette():
    """Palette sidebar markup with one draggable entry per creatable type"""
    items = ''.join(
        f'<li class="nl-palette__item" draggable="true" data-drag-id="{attr(entry["dragId"])}" '
        f'data-block-type="{attr(entry["type"])}">'
        f'<span class="nl-palette__icon">{text(_ICONS.get(entry["type"], ""))}</span>'
        f'<span class="nl-palette__label">{text(entry["label"])}</span>'
        f'<span class="nl-palette__description">{text(entry["description"])}</span></li>'
        for entry in get_palette()
    )
    return (
        f'<aside class="nl-palette"><h3 class="nl-palette__title">Blocks</h3>'
        f'<ul class="nl-palette__list">{items}</ul></aside>'
    )
