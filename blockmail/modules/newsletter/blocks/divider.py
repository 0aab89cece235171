"""Divider block: horizontal rule, shorter when not centered."""

from ..defaults import resolve_settings
from .base import edit_frame, export_cell


def _rule(resolved):
    width = '66%' if resolved['alignment'] == 'center' else '33%'
    return (
        f'<hr style="border: none; border-top: 1px solid #d1d5db; '
        f'width: {width}; margin: {resolved["alignMargin"]};" />'
    )


def render_edit(block, is_selected, is_editing):
    resolved = resolve_settings('divider', block.get('settings'))
    return edit_frame(block, resolved, _rule(resolved), with_text_color=False)


def render_export(content, settings, template_settings=None):
    resolved = resolve_settings('divider', settings)
    return export_cell(resolved, _rule(resolved))
