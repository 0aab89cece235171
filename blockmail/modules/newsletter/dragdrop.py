"""
Drag/Drop & Reorder Controller
==============================

Turns pointer-drag gestures into document mutations. Two gesture kinds:

- Palette drag (id 'palette-<type>'): creates a block. Dropped on the canvas
  zone it is appended, dropped on a block it is inserted immediately before
  that block. The new block becomes the selection.
- Canvas drag (id = block id): reorders. The dragged block is removed from its
  index and reinserted at the target's index. Dropped on the canvas zone it
  moves to the end.

A drop with no target, or on an id that is neither the canvas zone nor a
block, changes nothing. Every drag end clears the active drag id.

Functions take an EditorState and return a new one; nothing is mutated.
"""

import logging
from dataclasses import replace

from .models import create_block, find_block, find_block_index
from .palette import block_type_from_drag, is_palette_drag
from .blocks import block_label
from .blocks.base import attr, text

logger = logging.getLogger(__name__)

# Drop zone id of the canvas background
CANVAS_DROP_ID = 'canvas'


def array_move(items, old_index, new_index):
    """New list with the item at old_index moved to new_index"""
    moved = list(items)
    item = moved.pop(old_index)
    moved.insert(new_index, item)
    return moved


def drag_start(state, active_id):
    """Remember what is being dragged; only the overlay reads it"""
    return replace(state, active_drag_id=active_id)


def drag_cancel(state):
    return replace(state, active_drag_id=None)


def _drop_new_block(state, block_type, over_id):
    if over_id == CANVAS_DROP_ID:
        index = len(state.blocks)
    else:
        index = find_block_index(state.blocks, over_id)
        if index < 0:
            logger.debug(f"Palette drop on unknown target '{over_id}' ignored")
            return drag_cancel(state)

    block = create_block(block_type)
    blocks = list(state.blocks)
    blocks.insert(index, block)
    logger.debug(f"Inserted {block_type} block {block['id']} at index {index}")
    return replace(state, blocks=blocks, selected_block_id=block['id'], active_drag_id=None)


def _reorder(state, active_id, over_id):
    old_index = find_block_index(state.blocks, active_id)
    if old_index < 0:
        logger.debug(f"Drag of unknown block '{active_id}' ignored")
        return drag_cancel(state)

    if over_id == CANVAS_DROP_ID:
        new_index = len(state.blocks) - 1
    else:
        new_index = find_block_index(state.blocks, over_id)
        if new_index < 0:
            logger.debug(f"Reorder drop on unknown target '{over_id}' ignored")
            return drag_cancel(state)

    if old_index == new_index:
        return drag_cancel(state)
    return replace(state, blocks=array_move(state.blocks, old_index, new_index), active_drag_id=None)


def drag_end(state, active_id, over_id, data=None):
    """Apply the drop of active_id onto over_id.

    Args:
        state: current EditorState
        active_id: drag source id ('palette-<type>' or a block id)
        over_id: drop target id (a block id, CANVAS_DROP_ID, or None)
        data: drag payload; {'type': 'palette-item', 'blockType': ...} for palette drags
    """
    if over_id is None:
        return drag_cancel(state)

    if is_palette_drag(active_id, data):
        block_type = block_type_from_drag(active_id, data)
        if block_type is None:
            logger.debug(f"Palette drag '{active_id}' does not name a creatable block type")
            return drag_cancel(state)
        return _drop_new_block(state, block_type, over_id)

    if active_id == over_id:
        return drag_cancel(state)
    return _reorder(state, active_id, over_id)


def render_drag_overlay(state):
    """Floating label that follows the pointer while something is dragged"""
    active_id = state.active_drag_id
    if active_id is None:
        return ''

    if is_palette_drag(active_id):
        block_type = block_type_from_drag(active_id)
    else:
        block = find_block(state.blocks, active_id)
        block_type = block['type'] if block else None

    if block_type is None:
        return ''
    return (
        f'<div class="nl-drag-overlay" data-block-type="{attr(block_type)}">'
        f'{text(block_label(block_type))}</div>'
    )
