"""
Text Block
==========

Rich text paragraph block. The stored value is an HTML fragment produced by
the browser-side editor (paragraphs, bold/italic, lists, links).
"""

import re

from ..defaults import resolve_settings, BRAND_COLOR
from .base import attr, ask, change_content, edit_frame, export_cell, toolbar

PLACEHOLDER = 'Start writing...'

_TAG_SPLIT = re.compile(r'(<[^>]+>)')

FORMAT_COMMANDS = (
    ('bold', 'B'),
    ('italic', 'I'),
    ('bulletList', 'List'),
    ('orderedList', '1.'),
    ('link', 'Link'),
)


def change_html(block, html, on_change):
    return change_content(block, 'html', html or '', on_change)


def _current_href(html, link_text):
    match = re.search(
        r'<a\s[^>]*href="([^"]*)"[^>]*>' + re.escape(link_text) + r'</a>', html
    )
    return match.group(1) if match else None


def _unlink(html, link_text):
    return re.sub(
        r'<a\s[^>]*>(' + re.escape(link_text) + r')</a>', r'\1', html, count=1
    )


def _link(html, link_text, url):
    """Wrap the first text occurrence of link_text (never inside a tag) in an anchor"""
    if _current_href(html, link_text) is not None:
        return re.sub(
            r'<a\s[^>]*>(' + re.escape(link_text) + r')</a>',
            lambda m: f'<a href="{attr(url)}">{m.group(1)}</a>',
            html, count=1
        )

    parts = _TAG_SPLIT.split(html)
    for i, part in enumerate(parts):
        if part.startswith('<') or link_text not in part:
            continue
        parts[i] = part.replace(link_text, f'<a href="{attr(url)}">{link_text}</a>', 1)
        break
    return ''.join(parts)


def set_link(block, link_text, prompter, on_change):
    """Prompt for a URL for the selected words.

    Cancel leaves the block alone, an empty answer removes the link.
    """
    html = block['content'].get('html', '')
    if not link_text or link_text not in html:
        return block

    url = ask(prompter, 'Link URL:', _current_href(html, link_text))
    if url is None:
        return block
    if url == '':
        return change_html(block, _unlink(html, link_text), on_change)
    return change_html(block, _link(html, link_text, url), on_change)


def inline_styles(html, text_color):
    """Give bare paragraph, list and link tags the inline CSS mail clients need"""
    return (html
            .replace('<p>', f'<p style="margin: 8px 0; line-height: 1.6; color: {text_color};">')
            .replace('<ul>', '<ul style="margin: 8px 0; padding-left: 24px;">')
            .replace('<ol>', '<ol style="margin: 8px 0; padding-left: 24px;">')
            .replace('<li>', '<li style="margin: 4px 0;">')
            .replace('<a ', f'<a style="color: {BRAND_COLOR}; text-decoration: underline;" '))


def render_edit(block, is_selected, is_editing):
    html = block.get('content', {}).get('html', '')
    resolved = resolve_settings('text', block.get('settings'))
    parts = []

    if is_editing and is_selected:
        parts.append(toolbar([(command, label, None) for command, label in FORMAT_COMMANDS]))

    if is_editing:
        parts.append(
            f'<div class="nl-richtext" contenteditable="true" data-field="html" '
            f'data-placeholder="{PLACEHOLDER}" style="min-height: 60px;">{html}</div>'
        )
    else:
        parts.append(f'<div class="nl-richtext">{inline_styles(html, attr(resolved["textColor"]))}</div>')

    return edit_frame(block, resolved, ''.join(parts))


def render_export(content, settings, template_settings=None):
    resolved = resolve_settings('text', settings)
    html = inline_styles(content.get('html') or '', attr(resolved['textColor']))
    return export_cell(resolved, html, with_text_color=True)
