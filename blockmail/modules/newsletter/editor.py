"""
Newsletter Editor
=================

Top-level editor session. Owns the EditorState and hands it to the palette,
canvas and settings panel for rendering. All changes go through dispatch(),
which replaces the state in one step.

Collaborators are injected:
    on_save(blocks, template_settings) -> awaitable
    on_preview() -> None
    on_language_change(language) -> None
    prompter(label, current_value) -> str or None
"""

import copy
import logging
import threading
from dataclasses import replace

from .reducer import EditorState, reduce
from .models import find_block, serialize_document, load_document
from .palette import render_palette
from .canvas import render_canvas
from .settings_panel import render_settings_panel
from .dragdrop import render_drag_overlay
from .renderer import render_preview
from .exceptions import ActionError, SaveInProgressError
from .blocks import header, text, image, button, footer

logger = logging.getLogger(__name__)


def _link_command(block, prompter, on_change, options):
    return text.set_link(block, options.get('text'), prompter, on_change)


def _edit_social(block, prompter, on_change, options):
    return footer.edit_social_link(block, options.get('network'), prompter, on_change)


def _remove_social(block, prompter, on_change, options):
    return footer.remove_social_link(block, options.get('network'), on_change)


# Toolbar commands per block type: (block, prompter, on_change, options) -> block
BLOCK_COMMANDS = {
    'header': {
        'logoUrl': lambda b, p, c, o: header.prompt_logo_url(b, p, c),
    },
    'text': {
        'link': _link_command,
    },
    'image': {
        'imageUrl': lambda b, p, c, o: image.prompt_image_url(b, p, c),
        'linkUrl': lambda b, p, c, o: image.prompt_link_url(b, p, c),
        'alt': lambda b, p, c, o: image.prompt_alt_text(b, p, c),
    },
    'button': {
        'url': lambda b, p, c, o: button.prompt_url(b, p, c),
    },
    'footer': {
        'addSocialLink': lambda b, p, c, o: footer.add_social_link(b, p, c),
        'editSocialLink': _edit_social,
        'removeSocialLink': _remove_social,
    },
}


class NewsletterEditor:
    """One editing session over one newsletter document"""

    def __init__(self, initial_blocks=None, initial_settings=None, language='fr',
                 on_save=None, on_preview=None, on_language_change=None, prompter=None):
        blocks, template_settings = load_document({
            'blocks': initial_blocks or [],
            'templateSettings': initial_settings or {},
        })
        self._state = EditorState(blocks=blocks, template_settings=template_settings)
        # Guards every read-modify-write of _state, including the saving flag
        self._lock = threading.Lock()
        # Unsaved blocks of the languages not currently shown
        self._drafts = {}
        self.language = language
        self.on_save = on_save
        self.on_preview = on_preview
        self.on_language_change = on_language_change
        self.prompter = prompter

    @property
    def state(self):
        return self._state

    @property
    def blocks(self):
        return self._state.blocks

    @property
    def template_settings(self):
        return self._state.template_settings

    @property
    def is_saving(self):
        return self._state.is_saving

    def dispatch(self, action):
        """Run one action through the reducer and swap in the result"""
        with self._lock:
            self._state = reduce(self._state, action)
            return self._state

    # ---- Structure -------------------------------------------------------

    def drag_start(self, active_id):
        return self.dispatch({'type': 'drag_start', 'activeId': active_id})

    def drag_cancel(self):
        return self.dispatch({'type': 'drag_cancel'})

    def drop(self, active_id, over_id, data=None):
        return self.dispatch({'type': 'drag_end', 'activeId': active_id, 'overId': over_id, 'data': data})

    def select(self, block_id):
        return self.dispatch({'type': 'select', 'blockId': block_id})

    def duplicate(self, block_id):
        return self.dispatch({'type': 'duplicate', 'blockId': block_id})

    def delete(self, block_id):
        return self.dispatch({'type': 'delete', 'blockId': block_id})

    def set_editing(self, is_editing):
        return self.dispatch({'type': 'set_editing', 'isEditing': is_editing})

    # ---- Content and settings -------------------------------------------

    def change_block(self, block):
        """on_change target for the inline edit operations"""
        return self.dispatch({'type': 'change_block', 'block': block})

    def change_content(self, block_id, field, value):
        return self.dispatch({'type': 'change_content', 'blockId': block_id, 'field': field, 'value': value})

    def run_block_command(self, block_id, command, prompter=None, options=None):
        """Run a toolbar command (URL prompts, links, social links) on one block.

        prompter overrides the session prompter for this call, which lets an
        HTTP caller pass the answer it already collected in the browser.
        """
        if options is None:
            options = {}
        if not isinstance(options, dict):
            raise ActionError("Command options must be an object")

        block = find_block(self._state.blocks, block_id)
        if block is None:
            logger.debug(f"Command '{command}' on unknown block '{block_id}' ignored")
            return self._state

        handler = BLOCK_COMMANDS.get(block['type'], {}).get(command)
        if handler is None:
            raise ActionError(f"Block type '{block['type']}' has no command '{command}'")

        handler(block, prompter or self.prompter, self.change_block, options)
        return self._state

    def update_block_settings(self, block_id, updates):
        return self.dispatch({'type': 'update_block_settings', 'blockId': block_id, 'settings': updates})

    def update_template_settings(self, updates):
        return self.dispatch({'type': 'update_template_settings', 'settings': updates})

    def load(self, blocks, template_settings):
        return self.dispatch({'type': 'load_document', 'blocks': blocks, 'templateSettings': template_settings})

    # ---- Collaborators ----------------------------------------------------

    async def save(self):
        """Hand the current document to on_save.

        Raises:
            SaveInProgressError: a previous save has not finished
            Exception: whatever on_save raised; the document is unchanged
        """
        with self._lock:
            if self._state.is_saving:
                raise SaveInProgressError("A save is already in progress")
            self._state = replace(self._state, is_saving=True)
            blocks = copy.deepcopy(self._state.blocks)
            template_settings = copy.deepcopy(self._state.template_settings)

        try:
            if self.on_save is not None:
                await self.on_save(blocks, template_settings)
            logger.info(f"Saved newsletter ({len(blocks)} blocks, language={self.language})")
        finally:
            with self._lock:
                self._state = replace(self._state, is_saving=False)

    def preview(self):
        """Notify on_preview and return the preview HTML of the current document"""
        if self.on_preview is not None:
            self.on_preview()
        return render_preview(self._state.blocks, self._state.template_settings, language=self.language)

    def change_language(self, language, fetch_blocks=None):
        """Show another language's blocks; template settings are shared.

        The current language's blocks are kept in memory, saved or not, and
        come back when switching to it again. A language not seen yet in this
        session gets fetch_blocks(language), or starts empty.
        """
        if language == self.language:
            return self._state

        with self._lock:
            self._drafts[self.language] = self._state.blocks
            blocks = self._drafts.pop(language, None)

        if blocks is None and fetch_blocks is not None:
            blocks = fetch_blocks(language)

        self.language = language
        self.load(blocks or [], self._state.template_settings)
        if self.on_language_change is not None:
            self.on_language_change(language)
        return self._state

    # ---- Output -----------------------------------------------------------

    def render(self):
        """The three editor panes plus the drag overlay"""
        state = self._state
        return {
            'palette': render_palette(),
            'canvas': render_canvas(
                state.blocks, state.selected_block_id, state.is_editing, state.active_drag_id
            ),
            'settings': render_settings_panel(state.selected_block, state.template_settings),
            'overlay': render_drag_overlay(state),
        }

    def document(self):
        """Persistable document; selection and drag state are left out"""
        return serialize_document(self._state.blocks, self._state.template_settings)
