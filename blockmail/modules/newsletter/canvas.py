"""
Newsletter Canvas
=================

Renders the ordered blocks inside uniform selectable frames. The canvas owns
no state: selection and drag id come in as arguments and every interaction
is expressed as a data-action hook the page script turns into a reducer
action. Each frame is a drop zone keyed by its block id, and the canvas
itself is the 'canvas' drop zone.
"""

from .blocks import render_edit_block, block_label
from .blocks.base import attr, text
from .dragdrop import CANVAS_DROP_ID

EMPTY_MESSAGE = 'Drag blocks here to build your newsletter'


def _frame(block, is_selected, is_dragging, is_editing):
    block_id = attr(block.get('id'))
    show_buttons = is_editing and (is_selected or is_dragging)
    classes = ['nl-frame']
    if is_selected:
        classes.append('is-selected')
    if is_dragging:
        classes.append('is-dragging')

    # Handle on every frame; duplicate/delete only when selected or dragged
    handle = (
        f'<span class="nl-frame__handle" draggable="true" data-drag-id="{block_id}" title="Drag to move">::</span>'
        if is_editing else ''
    )
    buttons = ''
    if show_buttons:
        buttons = (
            f'<span class="nl-frame__type">{text(block_label(block.get("type")))}</span>'
            f'<button type="button" data-action="duplicate" data-block-id="{block_id}" title="Duplicate">Duplicate</button>'
            f'<button type="button" data-action="delete" data-block-id="{block_id}" title="Delete">Delete</button>'
        )
    controls = f'<div class="nl-frame__controls">{handle}{buttons}</div>' if handle else ''

    return (
        f'<div class="{" ".join(classes)}" data-block-id="{block_id}" data-drop-id="{block_id}" '
        f'data-action="select">{controls}'
        f'{render_edit_block(block, is_selected, is_editing)}</div>'
    )


def render_canvas(blocks, selected_block_id, is_editing=True, active_drag_id=None):
    """Canvas markup for the blocks in array order"""
    if not blocks:
        body = (
            f'<div class="nl-canvas__empty">'
            f'<p>{EMPTY_MESSAGE}</p></div>'
        )
    else:
        body = ''.join(
            _frame(
                block,
                block.get('id') == selected_block_id,
                active_drag_id is not None and block.get('id') == active_drag_id,
                is_editing,
            )
            for block in blocks
        )

    # Clicking the background selects nothing
    return (
        f'<div class="nl-canvas" data-drop-id="{CANVAS_DROP_ID}" data-action="select" '
        f'data-block-id=""><div class="nl-canvas__sheet">{body}</div></div>'
    )
