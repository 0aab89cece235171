"""
Block Renderer Base
===================

Shared pieces for the per-block renderer pairs.

Every block type provides two renderers over the same (content, settings):
- render_edit(block, is_selected, is_editing): canvas markup with inline
  controls. It is a controlled view: every value comes from the block passed
  in, and edits are reported through on_change(updated_block).
- render_export(content, settings, template_settings): email-safe table row
  with inline CSS. Pure function, no event hooks.

Prompt-based edits (URLs, alt text) take a prompter callable:
    prompter(label, current_value) -> str or None   (None = cancelled)
"""

import copy
from collections import namedtuple

from markupsafe import escape

BlockRenderer = namedtuple('BlockRenderer', ['label', 'edit', 'export'])


def attr(value):
    """Escape a value for use inside a double-quoted HTML attribute"""
    return str(escape('' if value is None else value))


def text(value):
    """Escape a value for use as HTML text"""
    return str(escape('' if value is None else value))


def with_content(block, **changes):
    """Copy of block with content keys replaced; the input block is untouched"""
    updated = copy.deepcopy(block)
    updated.setdefault('content', {}).update(changes)
    return updated


def change_content(block, field, value, on_change):
    """Set one content field and emit the updated block immediately"""
    updated = with_content(block, **{field: value})
    on_change(updated)
    return updated


def ask(prompter, label, current):
    """Ask the injected prompter for a string; None when cancelled or no prompter"""
    if prompter is None:
        return None
    value = prompter(label, current or '')
    if value is None:
        return None
    return str(value).strip()


def edit_input(field, value, placeholder, style=''):
    """Inline text input bound to a content field"""
    return (
        f'<input type="text" class="nl-inline-input" data-field="{attr(field)}" '
        f'value="{attr(value)}" placeholder="{attr(placeholder)}" style="{style}" />'
    )


def toolbar(buttons):
    """Toolbar row shown above a selected block.

    buttons are (command, label, current): current is the value a prompt
    should start from, and a non-empty one marks the button active.
    """
    items = ''.join(
        f'<button type="button" class="nl-tool{" is-active" if current else ""}" '
        f'data-command="{attr(command)}" data-current="{attr(current)}">{text(label)}</button>'
        for command, label, current in buttons
    )
    return f'<div class="nl-toolbar">{items}</div>'


def edit_style(resolved, with_text_color=True):
    """Inline style for the canvas view, from the same resolved values the export uses"""
    style = (
        f'background-color: {attr(resolved["backgroundColor"])}; '
        f'padding: {resolved["paddingPx"]}; text-align: {resolved["alignment"]};'
    )
    if with_text_color:
        style += f' color: {attr(resolved["textColor"])};'
    return style


def edit_frame(block, resolved, inner, with_text_color=True):
    """Outer element of every edit renderer"""
    return (
        f'<div class="nl-block nl-block--{attr(block.get("type"))}" '
        f'style="{edit_style(resolved, with_text_color)}">{inner}</div>'
    )


def export_cell(resolved, inner, with_text_color=False):
    """Wrap export markup in the table row every block renders into"""
    color = f' color: {attr(resolved["textColor"])};' if with_text_color else ''
    return (
        f'<tr><td style="background-color: {attr(resolved["backgroundColor"])}; '
        f'padding: {resolved["paddingPx"]}; text-align: {resolved["alignment"]};{color}">'
        f'{inner}</td></tr>'
    )
