"""
Settings Resolution
===================

The single place where sparse block settings are resolved to concrete values.
Both the canvas (edit) renderers and the email (export) renderers call
resolve_settings(), so an unset field can never look different in the editor
than in the sent email. Resolution happens at render time only; nothing here
writes back into a stored block.
"""

from .models import (
    PADDING_VALUES, ALIGNMENT_VALUES, BUTTON_RADIUS_VALUES,
    IMAGE_WIDTH_VALUES, IMAGE_RADIUS_VALUES, FONT_FAMILY_VALUES,
    FONT_SIZE_VALUES, DEFAULT_TEMPLATE_SETTINGS,
)

BRAND_COLOR = '#c75a3a'

COMMON_FALLBACKS = {
    'backgroundColor': 'transparent',
    'textColor': '#333333',
    'padding': 'medium',
    'alignment': 'center',
}

TYPE_FALLBACKS = {
    'header': {'backgroundColor': '#1e3a5f', 'textColor': '#ffffff'},
    'text': {'alignment': 'left'},
    'image': {'imageWidth': 'full', 'imageBorderRadius': 'small'},
    'button': {
        'buttonColor': BRAND_COLOR,
        'buttonTextColor': '#ffffff',
        'buttonBorderRadius': 'small',
    },
    'footer': {'backgroundColor': '#f5f5f5', 'textColor': '#666666'},
    'divider': {},
    'columns': {},
}

# Allowed values for enum-shaped settings; anything else falls back
ENUM_FIELDS = {
    'padding': PADDING_VALUES,
    'alignment': ALIGNMENT_VALUES,
    'buttonBorderRadius': BUTTON_RADIUS_VALUES,
    'imageWidth': IMAGE_WIDTH_VALUES,
    'imageBorderRadius': IMAGE_RADIUS_VALUES,
}

COLOR_FIELDS = ('backgroundColor', 'textColor', 'buttonColor', 'buttonTextColor')

PADDING_PX = {'none': '0', 'small': '12px', 'medium': '20px', 'large': '32px'}

BORDER_RADIUS_PX = {
    'none': '0',
    'small': '8px',
    'medium': '12px',
    'large': '16px',
    'full': '50px',
}

# Pixel width attribute inside the 600px email container
IMAGE_WIDTH_ATTR = {'auto': 'auto', '50%': '300', '75%': '450', 'full': '600'}

# Block-level margin that aligns a table or rule inside its cell
ALIGNMENT_MARGIN = {'left': '0', 'center': '0 auto', 'right': '0 0 0 auto'}

FONT_FAMILY_CSS = {
    'sans-serif': 'Arial, Helvetica, sans-serif',
    'serif': 'Georgia, Times, "Times New Roman", serif',
    'monospace': '"Courier New", Courier, monospace',
}

FONT_SIZE_PX = {'small': '14px', 'medium': '16px', 'large': '18px'}


def fallbacks_for(block_type):
    """Every documented fallback for a block type"""
    fallbacks = dict(COMMON_FALLBACKS)
    fallbacks.update(TYPE_FALLBACKS.get(block_type, {}))
    return fallbacks


def _usable(field, value):
    if value is None or value == '':
        return False
    if field in ENUM_FIELDS:
        return value in ENUM_FIELDS[field]
    if field in COLOR_FIELDS:
        return isinstance(value, str)
    return True


def resolve_settings(block_type, settings):
    """Resolve a sparse settings dict to concrete values for rendering.

    Returns a new dict holding every fallback field plus derived CSS values
    (paddingPx, alignMargin, buttonRadiusPx, imageRadiusPx, imageWidthAttr).
    Malformed values degrade to the fallback instead of raising.
    """
    settings = settings if isinstance(settings, dict) else {}
    resolved = fallbacks_for(block_type)

    for field, value in settings.items():
        if _usable(field, value):
            resolved[field] = value

    resolved['paddingPx'] = PADDING_PX[resolved['padding']]
    resolved['alignMargin'] = ALIGNMENT_MARGIN[resolved['alignment']]
    if 'buttonBorderRadius' in resolved:
        resolved['buttonRadiusPx'] = BORDER_RADIUS_PX[resolved['buttonBorderRadius']]
    if 'imageBorderRadius' in resolved:
        resolved['imageRadiusPx'] = BORDER_RADIUS_PX[resolved['imageBorderRadius']]
    if 'imageWidth' in resolved:
        resolved['imageWidthAttr'] = IMAGE_WIDTH_ATTR[resolved['imageWidth']]
    return resolved


def resolve_template_settings(template_settings):
    """Template settings with defaults filled in and font CSS derived"""
    resolved = dict(DEFAULT_TEMPLATE_SETTINGS)
    for key, value in (template_settings or {}).items():
        if value in (None, ''):
            continue
        resolved[key] = value

    if resolved['fontFamily'] not in FONT_FAMILY_VALUES:
        resolved['fontFamily'] = DEFAULT_TEMPLATE_SETTINGS['fontFamily']
    if resolved['fontSize'] not in FONT_SIZE_VALUES:
        resolved['fontSize'] = DEFAULT_TEMPLATE_SETTINGS['fontSize']

    resolved['fontFamilyCss'] = FONT_FAMILY_CSS[resolved['fontFamily']]
    resolved['fontSizePx'] = FONT_SIZE_PX[resolved['fontSize']]
    return resolved
