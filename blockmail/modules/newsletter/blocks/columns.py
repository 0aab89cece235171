"""Columns block: part of the type set but not yet available.

Kept explicit so dispatch stays total: the canvas shows a notice and the
email export renders nothing.
"""

from ..defaults import resolve_settings
from .base import edit_frame

NOT_AVAILABLE = 'Columns are not yet available'


def render_edit(block, is_selected, is_editing):
    resolved = resolve_settings('columns', block.get('settings'))
    return edit_frame(
        block, resolved,
        f'<p class="nl-placeholder nl-placeholder--columns">{NOT_AVAILABLE}</p>',
        with_text_color=False
    )


def render_export(content, settings, template_settings=None):
    return ''
