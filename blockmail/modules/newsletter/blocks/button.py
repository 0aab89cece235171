"""Button block: call-to-action link rendered as a bulletproof table button."""

from ..defaults import resolve_settings
from .base import attr, text, ask, change_content, edit_frame, edit_input, export_cell, toolbar

DEFAULT_LABEL = 'Button'


def change_text(block, value, on_change):
    return change_content(block, 'text', value, on_change)


def prompt_url(block, prompter, on_change):
    url = ask(prompter, 'Button URL:', block['content'].get('url'))
    if url is None:
        return block
    return change_content(block, 'url', url, on_change)


def _button_style(resolved):
    return (
        f'background-color: {attr(resolved["buttonColor"])}; color: {attr(resolved["buttonTextColor"])}; '
        f'border-radius: {resolved["buttonRadiusPx"]}; padding: 12px 24px; font-weight: 600;'
    )


def render_edit(block, is_selected, is_editing):
    content = block.get('content', {})
    resolved = resolve_settings('button', block.get('settings'))
    url = content.get('url') or ''
    parts = []

    if is_editing and is_selected:
        parts.append(toolbar([('url', 'Edit URL' if url else 'Add URL', url)]))
        if url:
            shown = url if len(url) <= 30 else url[:30] + '...'
            parts.append(f'<div class="nl-link-hint">&rarr; {text(shown)}</div>')
        parts.append(edit_input('text', content.get('text'), 'Button text...',
                                _button_style(resolved) + ' text-align: center;'))
    else:
        label = text(content.get('text')) or DEFAULT_LABEL
        parts.append(f'<span class="nl-button" style="display: inline-block; {_button_style(resolved)}">{label}</span>')
        if not is_editing and url:
            parts.append(f'<div class="nl-link-hint">{text(url)}</div>')

    return edit_frame(block, resolved, ''.join(parts), with_text_color=False)


def render_export(content, settings, template_settings=None):
    resolved = resolve_settings('button', settings)
    button = (
        f'<table role="presentation" cellspacing="0" cellpadding="0" border="0" '
        f'style="margin: {resolved["alignMargin"]};"><tr>'
        f'<td style="background-color: {attr(resolved["buttonColor"])}; border-radius: {resolved["buttonRadiusPx"]};">'
        f'<a href="{attr(content.get("url") or "#")}" target="_blank" '
        f'style="display: inline-block; padding: 14px 28px; color: {attr(resolved["buttonTextColor"])}; '
        f'text-decoration: none; font-weight: 600; font-size: 16px;">'
        f'{text(content.get("text")) or DEFAULT_LABEL}</a></td></tr></table>'
    )
    return export_cell(resolved, button)
