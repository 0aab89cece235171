"""
Newsletter Blocks
=================

Registry of per-block renderer pairs. Every type in BLOCK_TYPES has an entry,
checked at import time, so adding a type without its renderers fails at
startup instead of rendering nothing.
"""

import logging

from ..models import BLOCK_TYPES
from .base import BlockRenderer, text as escape_text
from . import header, text as text_block, image, button, footer, divider, columns

logger = logging.getLogger(__name__)

BLOCK_RENDERERS = {
    'header': BlockRenderer('Header', header.render_edit, header.render_export),
    'text': BlockRenderer('Text', text_block.render_edit, text_block.render_export),
    'image': BlockRenderer('Image', image.render_edit, image.render_export),
    'button': BlockRenderer('Button', button.render_edit, button.render_export),
    'footer': BlockRenderer('Footer', footer.render_edit, footer.render_export),
    'divider': BlockRenderer('Divider', divider.render_edit, divider.render_export),
    'columns': BlockRenderer('Columns', columns.render_edit, columns.render_export),
}

_missing = set(BLOCK_TYPES) - set(BLOCK_RENDERERS)
if _missing:
    raise RuntimeError(f"Block types without renderers: {sorted(_missing)}")


def block_label(block_type):
    entry = BLOCK_RENDERERS.get(block_type)
    return entry.label if entry else str(block_type)


def render_edit_block(block, is_selected, is_editing):
    """Canvas markup for one block; unknown types get a visible placeholder"""
    entry = BLOCK_RENDERERS.get(block.get('type'))
    if entry is None:
        logger.warning(f"No edit renderer for block type '{block.get('type')}' (block {block.get('id')})")
        return (
            f'<div class="nl-block nl-block--unsupported">'
            f'Unsupported block: {escape_text(block.get("type"))}</div>'
        )
    return entry.edit(block, is_selected, is_editing)


def render_export_block(block, template_settings=None):
    """Email markup for one block; unknown types render nothing"""
    entry = BLOCK_RENDERERS.get(block.get('type'))
    if entry is None:
        logger.warning(f"Skipping block {block.get('id')} with unknown type '{block.get('type')}' in export")
        return ''
    return entry.export(block.get('content') or {}, block.get('settings') or {}, template_settings)


__all__ = [
    'BLOCK_RENDERERS', 'BlockRenderer', 'block_label',
    'render_edit_block', 'render_export_block',
]
