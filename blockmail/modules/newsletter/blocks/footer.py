"""
Footer Block
============

Company name, address, social links and the unsubscribe link. Each social
network appears at most once. The unsubscribe link always points at the
{{unsubscribe_url}} token, which the mail sender substitutes per recipient.
"""

import copy

from ..defaults import resolve_settings
from ..models import SOCIAL_NETWORKS
from .base import attr, text, ask, change_content, edit_frame, edit_input, export_cell, toolbar

UNSUBSCRIBE_TOKEN = '{{unsubscribe_url}}'
DEFAULT_UNSUBSCRIBE_TEXT = 'Unsubscribe'

SOCIAL_LABELS = {
    'facebook': 'Facebook',
    'instagram': 'Instagram',
    'linkedin': 'LinkedIn',
    'twitter': 'Twitter/X',
}

# Hosted PNG icons; email clients do not load SVG or icon fonts reliably
SOCIAL_ICONS = {
    'facebook': 'https://cdn-icons-png.flaticon.com/32/733/733547.png',
    'instagram': 'https://cdn-icons-png.flaticon.com/32/2111/2111463.png',
    'linkedin': 'https://cdn-icons-png.flaticon.com/32/3536/3536505.png',
    'twitter': 'https://cdn-icons-png.flaticon.com/32/733/733579.png',
}


def _social_links(block):
    return copy.deepcopy(block['content'].get('socialLinks') or [])


def set_social_link(block, network, url, on_change):
    """Add, replace or (with an empty url) remove the link for one network"""
    links = _social_links(block)
    index = next((i for i, link in enumerate(links) if link.get('type') == network), -1)

    if url:
        if index >= 0:
            links[index] = {'type': network, 'url': url}
        else:
            links.append({'type': network, 'url': url})
    elif index >= 0:
        del links[index]
    else:
        return block

    return change_content(block, 'socialLinks', links, on_change)


def add_social_link(block, prompter, on_change):
    """Prompt for the first network that has no link yet"""
    existing = {link.get('type') for link in block['content'].get('socialLinks') or []}
    network = next((n for n in SOCIAL_NETWORKS if n not in existing), None)
    if network is None:
        return block

    url = ask(prompter, f'{SOCIAL_LABELS[network]} URL:', '')
    if not url:
        return block
    return set_social_link(block, network, url, on_change)


def edit_social_link(block, network, prompter, on_change):
    current = next(
        (link.get('url') for link in block['content'].get('socialLinks') or []
         if link.get('type') == network),
        ''
    )
    url = ask(prompter, f'{SOCIAL_LABELS.get(network, network)} URL:', current)
    if url is None:
        return block
    return set_social_link(block, network, url, on_change)


def remove_social_link(block, network, on_change):
    return set_social_link(block, network, '', on_change)


def render_edit(block, is_selected, is_editing):
    content = block.get('content', {})
    resolved = resolve_settings('footer', block.get('settings'))
    links = content.get('socialLinks') or []
    editable = is_editing and is_selected
    parts = []

    if editable:
        parts.append(edit_input('companyName', content.get('companyName'), 'Company name',
                                'font-weight: 600; text-align: inherit;'))
        parts.append(edit_input('address', content.get('address'), 'Address',
                                'font-size: 14px; text-align: inherit;'))
    else:
        parts.append(f'<p style="margin: 0 0 8px; font-weight: 600;">'
                     f'{text(content.get("companyName")) or "Company name"}</p>')
        parts.append(f'<p style="margin: 0 0 16px; font-size: 14px;">'
                     f'{text(content.get("address")) or "Address"}</p>')

    socials = ''.join(
        f'<a class="nl-social" data-network="{attr(link.get("type"))}" href="{attr(link.get("url"))}">'
        f'{text(SOCIAL_LABELS.get(link.get("type"), link.get("type")))}</a>'
        for link in links
    )
    parts.append(f'<div class="nl-socials">{socials}</div>')
    if editable and len(links) < len(SOCIAL_NETWORKS):
        parts.append(toolbar([('addSocialLink', '+ Social link', None)]))

    if editable:
        parts.append(edit_input('unsubscribeText', content.get('unsubscribeText'),
                                'Unsubscribe text', 'font-size: 12px; text-align: inherit;'))
    else:
        label = text(content.get('unsubscribeText')) or DEFAULT_UNSUBSCRIBE_TEXT
        parts.append(f'<p style="margin: 0; font-size: 12px; opacity: 0.7;"><u>{label}</u></p>')

    return edit_frame(block, resolved, ''.join(parts))


def render_export(content, settings, template_settings=None):
    resolved = resolve_settings('footer', settings)
    color = attr(resolved['textColor'])

    socials = ''.join(
        f'<a href="{attr(link.get("url"))}" target="_blank" style="display: inline-block; margin: 0 8px;">'
        f'<img src="{SOCIAL_ICONS[link["type"]]}" alt="{attr(link["type"])}" width="24" height="24" '
        f'style="opacity: 0.7;" /></a>'
        for link in content.get('socialLinks') or []
        if link.get('type') in SOCIAL_ICONS and link.get('url')
    )
    socials_html = f'<div style="margin-bottom: 16px;">{socials}</div>' if socials else ''

    inner = (
        f'<p style="margin: 0 0 8px; font-size: 16px; font-weight: 600;">{text(content.get("companyName"))}</p>'
        f'<p style="margin: 0 0 16px; font-size: 14px;">{text(content.get("address"))}</p>'
        f'{socials_html}'
        f'<p style="margin: 0; font-size: 12px; opacity: 0.7;">'
        f'<a href="{UNSUBSCRIBE_TOKEN}" style="color: {color}; text-decoration: underline;">'
        f'{text(content.get("unsubscribeText")) or DEFAULT_UNSUBSCRIBE_TEXT}</a></p>'
    )
    return export_cell(resolved, inner, with_text_color=True)
