"""Image block: picture with optional link and caption."""

from ..defaults import resolve_settings
from .base import attr, text, ask, change_content, edit_frame, edit_input, export_cell, toolbar

# Canvas width per imageWidth value
EDIT_WIDTHS = {'auto': 'auto', 'full': '100%', '50%': '50%', '75%': '75%'}


def prompt_image_url(block, prompter, on_change):
    url = ask(prompter, 'Image URL:', block['content'].get('imageUrl'))
    if url is None:
        return block
    return change_content(block, 'imageUrl', url, on_change)


def prompt_link_url(block, prompter, on_change):
    """Empty answer removes the link"""
    url = ask(prompter, 'Link URL (leave empty to remove):', block['content'].get('linkUrl'))
    if url is None:
        return block
    return change_content(block, 'linkUrl', url, on_change)


def prompt_alt_text(block, prompter, on_change):
    alt = ask(prompter, 'Alternative text:', block['content'].get('alt'))
    if alt is None:
        return block
    return change_content(block, 'alt', alt, on_change)


def change_caption(block, caption, on_change):
    return change_content(block, 'caption', caption, on_change)


def render_edit(block, is_selected, is_editing):
    content = block.get('content', {})
    resolved = resolve_settings('image', block.get('settings'))
    parts = []

    if is_editing and is_selected:
        parts.append(toolbar([
            ('imageUrl', 'Image', content.get('imageUrl')),
            ('linkUrl', 'Link', content.get('linkUrl')),
            ('alt', 'Alt text', content.get('alt')),
        ]))

    width = EDIT_WIDTHS[resolved['imageWidth']]
    if content.get('imageUrl'):
        parts.append(
            f'<img src="{attr(content["imageUrl"])}" alt="{attr(content.get("alt"))}" '
            f'style="display: inline-block; width: {width}; max-width: 100%; height: auto; '
            f'border-radius: {resolved["imageRadiusPx"]};" />'
        )
        if content.get('linkUrl'):
            parts.append(f'<div class="nl-link-hint">&rarr; {text(content["linkUrl"])}</div>')
    else:
        parts.append(
            f'<div class="nl-image-empty" data-command="imageUrl" '
            f'style="display: inline-block; width: {width}; border-radius: {resolved["imageRadiusPx"]};">'
            f'Click to add an image</div>'
        )

    if is_editing and is_selected:
        parts.append(edit_input('caption', content.get('caption'), 'Caption (optional)',
                                'font-size: 14px; font-style: italic; text-align: center;'))
    elif content.get('caption'):
        parts.append(
            f'<p style="margin: 8px 0 0; font-size: 14px; color: #666666; font-style: italic;">'
            f'{text(content["caption"])}</p>'
        )

    return edit_frame(block, resolved, ''.join(parts), with_text_color=False)


def render_export(content, settings, template_settings=None):
    if not content.get('imageUrl'):
        return ''

    resolved = resolve_settings('image', settings)
    width = resolved['imageWidthAttr']
    width_attr = '' if width == 'auto' else f' width="{width}"'
    img = (
        f'<img src="{attr(content["imageUrl"])}" alt="{attr(content.get("alt"))}"{width_attr} '
        f'style="display: block; max-width: 100%; height: auto; margin: {resolved["alignMargin"]}; '
        f'border-radius: {resolved["imageRadiusPx"]};" />'
    )
    if content.get('linkUrl'):
        img = f'<a href="{attr(content["linkUrl"])}" target="_blank">{img}</a>'

    caption = ''
    if content.get('caption'):
        caption = (
            f'<p style="margin: 8px 0 0; font-size: 14px; color: #666666; font-style: italic;">'
            f'{text(content["caption"])}</p>'
        )
    return export_cell(resolved, img + caption)
