"""
Editor Reducer
==============

EditorState holds everything the editor needs between interactions. It is
replaced, never mutated: reduce(state, action) returns a new state and the
previous one stays valid.

Actions are plain dicts with a 'type' key, so they can arrive as JSON:

    {'type': 'drag_start', 'activeId': 'palette-text'}
    {'type': 'drag_end', 'activeId': ..., 'overId': ..., 'data': {...}}
    {'type': 'drag_cancel'}
    {'type': 'select', 'blockId': ... or None}
    {'type': 'change_block', 'block': {...}}
    {'type': 'change_content', 'blockId': ..., 'field': ..., 'value': ...}
    {'type': 'duplicate', 'blockId': ...}
    {'type': 'delete', 'blockId': ...}
    {'type': 'update_block_settings', 'blockId': ..., 'settings': {...}}
    {'type': 'update_template_settings', 'settings': {...}}
    {'type': 'set_editing', 'isEditing': bool}
    {'type': 'load_document', 'blocks': [...], 'templateSettings': {...}}
"""

import copy
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .models import (
    default_template_settings, duplicate_block, find_block_index, load_document,
)
from .exceptions import ActionError
from . import dragdrop
from . import settings_panel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorState:
    """Snapshot of one editor session. Selection and drag ids are never persisted."""
    blocks: List[Dict[str, Any]] = field(default_factory=list)
    template_settings: Dict[str, Any] = field(default_factory=default_template_settings)
    selected_block_id: Optional[str] = None
    active_drag_id: Optional[str] = None
    is_editing: bool = True
    is_saving: bool = False

    @property
    def selected_block(self):
        index = find_block_index(self.blocks, self.selected_block_id)
        return self.blocks[index] if index >= 0 else None

    def summary(self):
        return {
            'blockIds': [block.get('id') for block in self.blocks],
            'selectedBlockId': self.selected_block_id,
            'activeDragId': self.active_drag_id,
            'isEditing': self.is_editing,
            'isSaving': self.is_saving,
        }


def _require(action, key):
    if key not in action:
        raise ActionError(f"Action '{action.get('type')}' requires '{key}'")
    return action[key]


def _replace_block(state, index, block):
    blocks = list(state.blocks)
    blocks[index] = block
    return replace(state, blocks=blocks)


def _drag_start(state, action):
    return dragdrop.drag_start(state, _require(action, 'activeId'))


def _drag_end(state, action):
    return dragdrop.drag_end(
        state, _require(action, 'activeId'), action.get('overId'), action.get('data')
    )


def _drag_cancel(state, action):
    return dragdrop.drag_cancel(state)


def _select(state, action):
    block_id = action.get('blockId')
    if block_id is not None and find_block_index(state.blocks, block_id) < 0:
        logger.debug(f"Select of unknown block '{block_id}' ignored")
        return state
    return replace(state, selected_block_id=block_id)


def _change_block(state, action):
    block = _require(action, 'block')
    if not isinstance(block, dict) or 'id' not in block:
        raise ActionError("change_block needs a block with an id")

    index = find_block_index(state.blocks, block['id'])
    if index < 0:
        logger.debug(f"Change of unknown block '{block['id']}' ignored")
        return state
    if block.get('type') != state.blocks[index].get('type'):
        raise ActionError(f"change_block cannot change the type of block {block['id']}")
    return _replace_block(state, index, copy.deepcopy(block))


def _change_content(state, action):
    block_id = _require(action, 'blockId')
    content_field = _require(action, 'field')
    index = find_block_index(state.blocks, block_id)
    if index < 0:
        logger.debug(f"Content change of unknown block '{block_id}' ignored")
        return state

    block = copy.deepcopy(state.blocks[index])
    block.setdefault('content', {})[content_field] = copy.deepcopy(action.get('value'))
    return _replace_block(state, index, block)


def _duplicate(state, action):
    block_id = _require(action, 'blockId')
    index = find_block_index(state.blocks, block_id)
    if index < 0:
        logger.debug(f"Duplicate of unknown block '{block_id}' ignored")
        return state

    blocks = list(state.blocks)
    blocks.insert(index + 1, duplicate_block(state.blocks[index]))
    return replace(state, blocks=blocks)


def _delete(state, action):
    block_id = _require(action, 'blockId')
    blocks = [block for block in state.blocks if block.get('id') != block_id]
    if len(blocks) == len(state.blocks):
        return state

    selected = None if state.selected_block_id == block_id else state.selected_block_id
    return replace(state, blocks=blocks, selected_block_id=selected)


def _update_block_settings(state, action):
    block_id = _require(action, 'blockId')
    index = find_block_index(state.blocks, block_id)
    if index < 0:
        logger.debug(f"Settings change of unknown block '{block_id}' ignored")
        return state
    updated = settings_panel.update_block_settings(state.blocks[index], _require(action, 'settings'))
    return _replace_block(state, index, updated)


def _update_template_settings(state, action):
    return replace(state, template_settings=settings_panel.update_template_settings(
        state.template_settings, _require(action, 'settings')
    ))


def _set_editing(state, action):
    return replace(state, is_editing=bool(_require(action, 'isEditing')))


def _load_document(state, action):
    blocks, template_settings = load_document({
        'blocks': action.get('blocks') or [],
        'templateSettings': action.get('templateSettings') or {},
    })
    return replace(
        state, blocks=blocks, template_settings=template_settings,
        selected_block_id=None, active_drag_id=None
    )


HANDLERS = {
    'drag_start': _drag_start,
    'drag_end': _drag_end,
    'drag_cancel': _drag_cancel,
    'select': _select,
    'change_block': _change_block,
    'change_content': _change_content,
    'duplicate': _duplicate,
    'delete': _delete,
    'update_block_settings': _update_block_settings,
    'update_template_settings': _update_template_settings,
    'set_editing': _set_editing,
    'load_document': _load_document,
}


def reduce(state, action):
    """Apply one action and return the new state.

    Raises:
        ActionError: malformed action (missing type or required keys)
        SettingsValueError: settings update with a wrongly shaped value
    """
    if not isinstance(action, dict):
        raise ActionError("Action must be an object")
    handler = HANDLERS.get(action.get('type'))
    if handler is None:
        raise ActionError(f"Unknown action type: {action.get('type')}")
    return handler(state, action)
