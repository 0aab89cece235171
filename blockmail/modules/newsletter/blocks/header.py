"""Header block: optional logo, title and subtitle."""

from ..defaults import resolve_settings
from .base import attr, text, ask, change_content, edit_frame, edit_input, export_cell, toolbar

TITLE_PLACEHOLDER = 'Newsletter title'
SUBTITLE_PLACEHOLDER = 'Subtitle (optional)'


def prompt_logo_url(block, prompter, on_change):
    url = ask(prompter, 'Logo URL:', block['content'].get('logoUrl'))
    if url is None:
        return block
    return change_content(block, 'logoUrl', url, on_change)


def render_edit(block, is_selected, is_editing):
    content = block.get('content', {})
    resolved = resolve_settings('header', block.get('settings'))
    color = attr(resolved['textColor'])
    parts = []

    if is_editing and is_selected:
        parts.append(toolbar([('logoUrl', 'Logo', content.get('logoUrl'))]))

    if content.get('logoUrl'):
        parts.append(
            f'<img class="nl-header__logo" src="{attr(content["logoUrl"])}" alt="Logo" '
            f'style="display: block; height: 48px; margin: 0 auto 16px;" />'
        )

    if is_editing and is_selected:
        parts.append(edit_input(
            'title', content.get('title'), TITLE_PLACEHOLDER,
            f'font-size: 28px; font-weight: 700; color: {color}; text-align: inherit;'
        ))
        parts.append(edit_input(
            'subtitle', content.get('subtitle'), SUBTITLE_PLACEHOLDER,
            f'font-size: 16px; color: {color}; text-align: inherit;'
        ))
    else:
        title = text(content.get('title')) or f'<span class="nl-placeholder">{TITLE_PLACEHOLDER}</span>'
        parts.append(f'<h1 style="margin: 0 0 8px; font-size: 28px; font-weight: 700;">{title}</h1>')
        if content.get('subtitle'):
            parts.append(f'<p style="margin: 0; opacity: 0.8;">{text(content["subtitle"])}</p>')
        elif is_editing:
            parts.append(f'<p class="nl-placeholder" style="margin: 0;">{SUBTITLE_PLACEHOLDER}</p>')

    return edit_frame(block, resolved, ''.join(parts))


def render_export(content, settings, template_settings=None):
    resolved = resolve_settings('header', settings)
    color = attr(resolved['textColor'])
    logo = ''
    if content.get('logoUrl'):
        logo = (
            f'<img src="{attr(content["logoUrl"])}" alt="Logo" width="150" '
            f'style="display: block; margin: 0 auto 16px;" />'
        )
    subtitle = ''
    if content.get('subtitle'):
        subtitle = (
            f'<p style="margin: 0; font-size: 16px; color: {color}; opacity: 0.8;">'
            f'{text(content["subtitle"])}</p>'
        )
    inner = (
        f'{logo}<h1 style="margin: 0 0 8px; font-size: 28px; color: {color}; font-weight: 700;">'
        f'{text(content.get("title"))}</h1>{subtitle}'
    )
    return export_cell(resolved, inner)
