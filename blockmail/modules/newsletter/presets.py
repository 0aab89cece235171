"""
Newsletter Presets
==================

Ready-made documents a new newsletter can start from. Preset blocks carry
fixed ids; clone_template_blocks() gives every block a fresh id so two
newsletters started from the same preset never share one.

Header logos hold LOGO_PLACEHOLDER until a real logo URL is applied.
"""

import copy

from .models import new_block_id

# Replaced with the configured site logo when a preset is cloned
LOGO_PLACEHOLDER = '__SITE_LOGO__'


def _block(block_id, block_type, content, settings):
    return {'id': block_id, 'type': block_type, 'content': content, 'settings': settings}


TEMPLATE_CLASSIC = {
    'id': 'dmc-classic',
    'name': 'Classic',
    'description': 'Signature layout in terracotta and deep blue',
    'isDefault': True,
    'blocks': [
        _block('header-1', 'header', {
            'title': 'Our Newsletter',
            'subtitle': 'The latest news from our network',
            'logoUrl': LOGO_PLACEHOLDER,
        }, {'backgroundColor': '#1e3a5f', 'textColor': '#ffffff', 'padding': 'large', 'alignment': 'center'}),
        _block('text-1', 'text', {
            'html': '<h2>Section title</h2><p>Lorem ipsum dolor sit amet, consectetur adipiscing elit. '
                    'Sed do eiusmod tempor incididunt ut labore et dolore magna aliqua.</p>',
        }, {'backgroundColor': '#ffffff', 'textColor': '#333333', 'padding': 'large', 'alignment': 'left'}),
        _block('image-1', 'image', {
            'imageUrl': '', 'alt': 'Destination picture', 'caption': '', 'linkUrl': '',
        }, {'padding': 'medium', 'alignment': 'center', 'imageWidth': 'full', 'imageBorderRadius': 'medium'}),
        _block('text-2', 'text', {
            'html': '<p>Continue your story here...</p>',
        }, {'backgroundColor': '#ffffff', 'textColor': '#333333', 'padding': 'medium', 'alignment': 'left'}),
        _block('button-1', 'button', {
            'text': 'Discover our tours', 'url': 'https://example.com/tours',
        }, {
            'padding': 'large', 'alignment': 'center', 'buttonColor': '#c75a3a',
            'buttonTextColor': '#ffffff', 'buttonBorderRadius': 'small',
        }),
        _block('divider-1', 'divider', {}, {'padding': 'medium', 'alignment': 'center'}),
        _block('footer-1', 'footer', {
            'companyName': 'Your Company',
            'address': 'Paris, France',
            'unsubscribeText': 'Unsubscribe from this newsletter',
            'socialLinks': [
                {'type': 'linkedin', 'url': 'https://linkedin.com/company/example'},
                {'type': 'instagram', 'url': 'https://instagram.com/example'},
            ],
        }, {'backgroundColor': '#1e3a5f', 'textColor': '#ffffff', 'padding': 'large', 'alignment': 'center'}),
    ],
    'settings': {
        'primaryColor': '#c75a3a',
        'secondaryColor': '#1e3a5f',
        'backgroundColor': '#f5f5f5',
        'fontFamily': 'sans-serif',
        'fontSize': 'medium',
    },
}

TEMPLATE_MINIMAL = {
    'id': 'minimal',
    'name': 'Minimal',
    'description': 'Clean, modern layout for professional announcements',
    'isDefault': False,
    'blocks': [
        _block('header-1', 'header', {
            'title': 'Newsletter', 'subtitle': '', 'logoUrl': LOGO_PLACEHOLDER,
        }, {'backgroundColor': '#ffffff', 'textColor': '#1e3a5f', 'padding': 'large', 'alignment': 'center'}),
        _block('divider-1', 'divider', {}, {'padding': 'small', 'alignment': 'center'}),
        _block('text-1', 'text', {
            'html': '<p>Hello,</p><p>Your content here...</p>',
        }, {'backgroundColor': 'transparent', 'textColor': '#333333', 'padding': 'medium', 'alignment': 'left'}),
        _block('button-1', 'button', {
            'text': 'Learn more', 'url': 'https://example.com',
        }, {
            'padding': 'medium', 'alignment': 'center', 'buttonColor': '#1e3a5f',
            'buttonTextColor': '#ffffff', 'buttonBorderRadius': 'small',
        }),
        _block('footer-1', 'footer', {
            'companyName': 'Your Company',
            'address': 'Paris, France',
            'unsubscribeText': 'Unsubscribe',
            'socialLinks': [{'type': 'linkedin', 'url': 'https://linkedin.com/company/example'}],
        }, {'backgroundColor': '#f8f9fa', 'textColor': '#6c757d', 'padding': 'large', 'alignment': 'center'}),
    ],
    'settings': {
        'primaryColor': '#1e3a5f',
        'secondaryColor': '#6c757d',
        'backgroundColor': '#ffffff',
        'fontFamily': 'sans-serif',
        'fontSize': 'medium',
    },
}

TEMPLATE_MAGAZINE = {
    'id': 'magazine',
    'name': 'Magazine',
    'description': 'Editorial layout inspired by travel magazines',
    'isDefault': False,
    'blocks': [
        _block('image-hero', 'image', {
            'imageUrl': '', 'alt': 'Main picture', 'caption': '', 'linkUrl': '',
        }, {'padding': 'none', 'alignment': 'center', 'imageWidth': 'full', 'imageBorderRadius': 'none'}),
        _block('header-1', 'header', {
            'title': 'A Catchy Title', 'subtitle': 'A descriptive subtitle', 'logoUrl': '',
        }, {'backgroundColor': '#ffffff', 'textColor': '#1a1a1a', 'padding': 'large', 'alignment': 'center'}),
        _block('text-intro', 'text', {
            'html': '<p style="font-size: 1.2em; font-style: italic;">An introduction that makes readers want more...</p>',
        }, {'backgroundColor': '#ffffff', 'textColor': '#555555', 'padding': 'medium', 'alignment': 'center'}),
        _block('divider-1', 'divider', {}, {'padding': 'small', 'alignment': 'center'}),
        _block('text-main', 'text', {
            'html': '<p>Main article content...</p>',
        }, {'backgroundColor': '#ffffff', 'textColor': '#333333', 'padding': 'large', 'alignment': 'left'}),
        _block('button-1', 'button', {
            'text': 'Read the full article', 'url': '#',
        }, {
            'padding': 'large', 'alignment': 'center', 'buttonColor': '#c75a3a',
            'buttonTextColor': '#ffffff', 'buttonBorderRadius': 'full',
        }),
        _block('footer-1', 'footer', {
            'companyName': 'Your Company',
            'address': 'A trusted network of travel experts',
            'unsubscribeText': 'Manage my preferences',
            'socialLinks': [
                {'type': 'instagram', 'url': 'https://instagram.com/example'},
                {'type': 'linkedin', 'url': 'https://linkedin.com/company/example'},
            ],
        }, {'backgroundColor': '#f5f5f5', 'textColor': '#888888', 'padding': 'large', 'alignment': 'center'}),
    ],
    'settings': {
        'primaryColor': '#c75a3a',
        'secondaryColor': '#1a1a1a',
        'backgroundColor': '#ffffff',
        'fontFamily': 'serif',
        'fontSize': 'large',
    },
}

NEWSLETTER_TEMPLATES = [TEMPLATE_CLASSIC, TEMPLATE_MINIMAL, TEMPLATE_MAGAZINE]


def get_template_by_id(template_id):
    for template in NEWSLETTER_TEMPLATES:
        if template['id'] == template_id:
            return template
    return None


def get_default_template():
    return next((t for t in NEWSLETTER_TEMPLATES if t.get('isDefault')), TEMPLATE_CLASSIC)


def list_templates():
    """Summaries for a template picker (no block bodies)"""
    return [
        {
            'id': template['id'],
            'name': template['name'],
            'description': template['description'],
            'isDefault': template['isDefault'],
            'blockCount': len(template['blocks']),
        }
        for template in NEWSLETTER_TEMPLATES
    ]


def apply_logo_to_blocks(blocks, logo_url):
    """Copies of blocks with header logo placeholders replaced by logo_url"""
    result = []
    for block in blocks:
        block = copy.deepcopy(block)
        if block.get('type') == 'header' and block.get('content', {}).get('logoUrl') == LOGO_PLACEHOLDER:
            block['content']['logoUrl'] = logo_url
        result.append(block)
    return result


def clone_template_blocks(template, logo_url=None):
    """Fresh-id deep copies of a template's blocks, with the logo applied when given"""
    blocks = []
    for block in template['blocks']:
        clone = copy.deepcopy(block)
        clone['id'] = new_block_id()
        blocks.append(clone)

    if logo_url is not None:
        blocks = apply_logo_to_blocks(blocks, logo_url)
    return blocks


def clone_template_settings(template):
    return dict(template['settings'])
