"""
Newsletter Models
=================

Block document model for the newsletter editor.

A document is an ordered list of block dicts plus one sibling dict of
template settings:

    {
        'blocks': [{'id': ..., 'type': ..., 'content': {...}, 'settings': {...}}, ...],
        'templateSettings': {'primaryColor': ..., ...}
    }

Array position is the only ordering. Block settings are stored sparse: a
missing key means "use the per-type fallback at render time".
"""

import copy
import uuid
import logging

from .exceptions import UnknownBlockTypeError, DocumentError

logger = logging.getLogger(__name__)

# Closed set of block types, in palette order
BLOCK_TYPES = ('header', 'text', 'image', 'button', 'footer', 'divider', 'columns')

# Declared but not yet available in the palette or on the canvas
UNIMPLEMENTED_BLOCK_TYPES = frozenset({'columns'})

PADDING_VALUES = ('none', 'small', 'medium', 'large')
ALIGNMENT_VALUES = ('left', 'center', 'right')
BUTTON_RADIUS_VALUES = ('none', 'small', 'medium', 'full')
IMAGE_WIDTH_VALUES = ('auto', 'full', '50%', '75%')
IMAGE_RADIUS_VALUES = ('none', 'small', 'medium', 'large')
FONT_FAMILY_VALUES = ('sans-serif', 'serif', 'monospace')
FONT_SIZE_VALUES = ('small', 'medium', 'large')
SOCIAL_NETWORKS = ('facebook', 'instagram', 'linkedin', 'twitter')

# Empty content per type; copied on every create so blocks never share lists
_EMPTY_CONTENT = {
    'header': {'title': '', 'subtitle': '', 'logoUrl': ''},
    'text': {'html': ''},
    'image': {'imageUrl': '', 'alt': '', 'caption': '', 'linkUrl': ''},
    'button': {'text': '', 'url': ''},
    'footer': {'companyName': '', 'address': '', 'socialLinks': [], 'unsubscribeText': ''},
    'divider': {},
    'columns': {'columns': []},
}

DEFAULT_TEMPLATE_SETTINGS = {
    'primaryColor': '#c75a3a',    # terracotta
    'secondaryColor': '#1e3a5f',  # deep blue
    'backgroundColor': '#ffffff',
    'fontFamily': 'sans-serif',
    'fontSize': 'medium',
}


def new_block_id():
    """Fresh opaque block id; uuid4 so ids are never reused"""
    return str(uuid.uuid4())


def create_block(block_type):
    """Create a block of the given type with empty content and sparse settings.

    Raises:
        UnknownBlockTypeError: block_type is not in BLOCK_TYPES
    """
    if block_type not in BLOCK_TYPES:
        raise UnknownBlockTypeError(block_type)

    return {
        'id': new_block_id(),
        'type': block_type,
        'content': copy.deepcopy(_EMPTY_CONTENT[block_type]),
        'settings': {},
    }


def duplicate_block(block):
    """Deep copy of a block under a new id"""
    return {
        'id': new_block_id(),
        'type': block['type'],
        'content': copy.deepcopy(block.get('content', {})),
        'settings': copy.deepcopy(block.get('settings', {})),
    }


def default_template_settings():
    """Fresh copy of the document-wide defaults used for new documents"""
    return dict(DEFAULT_TEMPLATE_SETTINGS)


def find_block_index(blocks, block_id):
    """Index of the block with this id, or -1"""
    for index, block in enumerate(blocks):
        if block.get('id') == block_id:
            return index
    return -1


def find_block(blocks, block_id):
    index = find_block_index(blocks, block_id)
    return blocks[index] if index >= 0 else None


def validate_unique_ids(blocks):
    """Raise DocumentError if two blocks share an id"""
    seen = set()
    for block in blocks:
        block_id = block.get('id')
        if block_id in seen:
            raise DocumentError(f"Duplicate block id in document: {block_id}")
        seen.add(block_id)


def serialize_document(blocks, template_settings):
    """Build the persistence shape. Selection and drag state are never included."""
    return {
        'blocks': copy.deepcopy(list(blocks)),
        'templateSettings': copy.deepcopy(dict(template_settings)),
    }


def load_document(data):
    """Parse a stored document into (blocks, template_settings).

    Blocks are kept exactly as stored, including unknown types, so that
    loading and re-serializing without edits yields an equal document.
    Missing template settings keys are filled from the defaults.
    """
    if data is None:
        return [], default_template_settings()
    if not isinstance(data, dict):
        raise DocumentError("Document must be an object with 'blocks' and 'templateSettings'")

    blocks = data.get('blocks') or []
    if not isinstance(blocks, list):
        raise DocumentError("Document 'blocks' must be a list")

    for block in blocks:
        if not isinstance(block, dict) or 'id' not in block or 'type' not in block:
            raise DocumentError(f"Malformed block in document: {block!r}")
        if block['type'] not in BLOCK_TYPES:
            logger.warning(f"Loaded block {block['id']} has unknown type '{block['type']}'")
    validate_unique_ids(blocks)

    template_settings = default_template_settings()
    template_settings.update(data.get('templateSettings') or {})

    return copy.deepcopy(blocks), template_settings
