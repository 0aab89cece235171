"""
Newsletter Routes
=================

Admin editor routes plus the public "view in browser" page.
Editor sessions live in memory, one per document id, and are shared across
worker threads behind a lock. All admin routes require an admin session.
"""

import time
import uuid
import inspect
import logging
import threading
from collections import OrderedDict
from functools import wraps

from flask import request, jsonify, render_template, session, Response, redirect, url_for
from flask_cors import cross_origin

from blockmail.core import Config, LoggingService, get_config_value
from . import newsletter_bp, newsletter_public_bp
from .editor import NewsletterEditor
from .exceptions import SaveInProgressError
from .palette import get_palette
from .presets import get_template_by_id, list_templates, clone_template_blocks, clone_template_settings
from .renderer import render_document
from .storage import get_document_store, make_save_callback

logger = logging.getLogger(__name__)

# Origins allowed to fetch the public render
ALLOWED_ORIGINS = Config.NEWSLETTER_CORS_ORIGINS

# document_id -> (editor, last used); least recently used first
_editors = OrderedDict()
_editors_lock = threading.Lock()


def _db_log(level, message, details=None):
    """Log to the persistent DB logger"""
    try:
        from blockmail.core import db_log
        db_log(level, 'newsletter', message, details)
    except Exception:
        pass


def admin_required(f):
    """Require an admin session; JSON 401 otherwise"""
    if inspect.iscoroutinefunction(f):
        @wraps(f)
        async def async_decorated(*args, **kwargs):
            if 'admin_id' not in session:
                return jsonify({'error': 'Authentication required'}), 401
            return await f(*args, **kwargs)
        return async_decorated

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            return jsonify({'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function


def _redirect_to_login():
    """Redirect to admin login page"""
    try:
        return redirect(url_for('admin.login', next=request.path))
    except Exception:
        return redirect('/admin')


def _default_language():
    return get_config_value('NEWSLETTER_DEFAULT_LANGUAGE', Config.NEWSLETTER_DEFAULT_LANGUAGE)


# ===================
# EDITOR SESSIONS
# ===================

def get_editor(document_id):
    with _editors_lock:
        entry = _editors.get(document_id)
        if entry is None:
            return None
        _editors[document_id] = (entry[0], time.monotonic())
        _editors.move_to_end(document_id)
        return entry[0]


def drop_editor(document_id):
    with _editors_lock:
        entry = _editors.pop(document_id, None)
    return entry[0] if entry else None


def _evict_sessions(now):
    """Drop idle sessions, then the least recently used ones over the cap.

    Sessions with a save in flight are kept. Caller holds _editors_lock.
    """
    ttl = int(get_config_value('NEWSLETTER_SESSION_TTL', Config.NEWSLETTER_SESSION_TTL))
    max_sessions = int(get_config_value('NEWSLETTER_MAX_SESSIONS', Config.NEWSLETTER_MAX_SESSIONS))

    evicted = [
        document_id for document_id, (editor, last_used) in _editors.items()
        if now - last_used > ttl and not editor.is_saving
    ]
    overflow = len(_editors) - len(evicted) - max_sessions
    for document_id, (editor, _) in _editors.items():
        if overflow <= 0:
            break
        if document_id not in evicted and not editor.is_saving:
            evicted.append(document_id)
            overflow -= 1

    for document_id in evicted:
        del _editors[document_id]
    if evicted:
        logger.info(f"Evicted {len(evicted)} newsletter editor session(s)")


def open_editor(document_id, language, blocks, template_settings):
    """Create an editor session wired to the configured store and register it"""
    store = get_document_store()

    editor = NewsletterEditor(
        initial_blocks=blocks,
        initial_settings=template_settings,
        language=language,
        on_save=make_save_callback(store, document_id, language),
        on_preview=lambda: logger.debug(f"Preview requested for newsletter {document_id}"),
    )

    def on_language_change(new_language):
        editor.on_save = make_save_callback(store, document_id, new_language)
        logger.info(f"Newsletter {document_id} switched to {new_language}")

    editor.on_language_change = on_language_change

    with _editors_lock:
        # Room for the new session counts against the cap
        now = time.monotonic()
        _editors.pop(document_id, None)
        _editors[document_id] = (editor, now)
        _evict_sessions(now)
    return editor


def _switch_language(editor, document_id, language):
    """Point the session at another language.

    Unsaved blocks of each language stay in the session. The store is read
    only for a language this session has not shown yet.
    """
    store = get_document_store()

    def fetch_blocks(lang):
        stored = store.load(document_id, lang)
        return stored[0] if stored else []

    editor.change_language(language, fetch_blocks)
    return editor


def _panes_response(editor):
    return jsonify({
        'success': True,
        'panes': editor.render(),
        'state': editor.state.summary(),
    })


def _prompt_answer(data):
    """Prompter that returns the answer the browser already collected"""
    if 'value' not in data or data['value'] is None:
        return lambda label, current: None
    answer = str(data['value'])
    return lambda label, current: answer


# ===================
# ADMIN ROUTES
# ===================

@newsletter_bp.route('/editor/new')
def new_document():
    """Start a new newsletter, empty or from a preset"""
    if 'admin_id' not in session:
        return _redirect_to_login()

    template_id = request.args.get('template')
    blocks, template_settings = [], None
    if template_id:
        template = get_template_by_id(template_id)
        if template is None:
            return jsonify({'error': f'Unknown template: {template_id}'}), 404
        logo_url = get_config_value('NEWSLETTER_LOGO_URL', Config.NEWSLETTER_LOGO_URL)
        blocks = clone_template_blocks(template, logo_url=logo_url)
        template_settings = clone_template_settings(template)

    document_id = uuid.uuid4().hex
    language = request.args.get('lang') or _default_language()
    editor = open_editor(document_id, language, blocks, template_settings)
    logger.info(f"New newsletter {document_id} (template={template_id or 'blank'})")

    return render_template(
        'newsletter/editor.html',
        document_id=document_id,
        language=language,
        panes=editor.render(),
        templates=list_templates(),
    )


@newsletter_bp.route('/editor/<document_id>')
def edit_document(document_id):
    """Open a stored newsletter (or the live session for it)"""
    if 'admin_id' not in session:
        return _redirect_to_login()

    language = request.args.get('lang') or _default_language()
    try:
        editor = get_editor(document_id)
        if editor is None:
            stored = get_document_store().load(document_id, language)
            if stored is None:
                return jsonify({'error': 'Newsletter not found'}), 404
            editor = open_editor(document_id, language, *stored)
        elif editor.language != language:
            _switch_language(editor, document_id, language)
    except Exception as e:
        logger.error(f"Error opening newsletter {document_id}: {e}")
        _db_log('error', f"Error opening newsletter {document_id}", {'error': str(e)})
        return jsonify({'error': str(e)}), 500

    return render_template(
        'newsletter/editor.html',
        document_id=document_id,
        language=editor.language,
        panes=editor.render(),
        templates=list_templates(),
    )


@newsletter_bp.route('/editor/<document_id>/actions', methods=['POST'])
@admin_required
def apply_action(document_id):
    """Apply one editor action and return the re-rendered panes"""
    editor = get_editor(document_id)
    if editor is None:
        return jsonify({'error': 'Editor session not found'}), 404

    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({'error': 'No action provided'}), 400

    try:
        if data.get('type') == 'command':
            editor.run_block_command(
                data.get('blockId'), data.get('command'),
                prompter=_prompt_answer(data), options=data.get('options')
            )
        else:
            editor.dispatch(data)
    except ValueError as e:
        logger.debug(f"Rejected action on {document_id}: {e}")
        return jsonify({'error': str(e)}), 400

    return _panes_response(editor)


@newsletter_bp.route('/editor/<document_id>/save', methods=['POST'])
@admin_required
async def save_document(document_id):
    """Persist the current document through the session's on_save"""
    editor = get_editor(document_id)
    if editor is None:
        return jsonify({'error': 'Editor session not found'}), 404

    try:
        await editor.save()
    except SaveInProgressError:
        return jsonify({'error': 'A save is already in progress'}), 409
    except Exception as e:
        logger.error(f"Error saving newsletter {document_id}: {e}")
        _db_log('error', f"Error saving newsletter {document_id}", {'error': str(e)})
        return jsonify({'error': f'Save failed: {e}'}), 500

    return jsonify({'success': True, 'document': editor.document(), 'language': editor.language})


@newsletter_bp.route('/editor/<document_id>/preview', methods=['POST'])
@admin_required
def preview_document(document_id):
    """Full preview HTML of the current document"""
    editor = get_editor(document_id)
    if editor is None:
        return jsonify({'error': 'Editor session not found'}), 404

    return jsonify({'success': True, 'html': editor.preview()})


@newsletter_bp.route('/editor/<document_id>/language', methods=['POST'])
@admin_required
def change_language(document_id):
    """Switch the editing language; the other language's blocks are loaded"""
    editor = get_editor(document_id)
    if editor is None:
        return jsonify({'error': 'Editor session not found'}), 404

    data = request.get_json(silent=True) or {}
    language = data.get('language')
    if not language or not isinstance(language, str):
        return jsonify({'error': 'Language required'}), 400

    try:
        _switch_language(editor, document_id, language)
    except Exception as e:
        logger.error(f"Error switching newsletter {document_id} to {language}: {e}")
        _db_log('error', f"Error switching newsletter language {document_id}", {'error': str(e)})
        return jsonify({'error': str(e)}), 500

    return _panes_response(editor)


@newsletter_bp.route('/palette')
@admin_required
def palette():
    return jsonify({'success': True, 'palette': get_palette()})


@newsletter_bp.route('/presets')
@admin_required
def presets():
    return jsonify({'success': True, 'templates': list_templates()})


@newsletter_bp.route('/logs')
@admin_required
def recent_logs():
    """Recent newsletter audit log entries (saves, failures)"""
    limit = min(request.args.get('limit', 50, type=int), 200)
    try:
        logs = LoggingService.get_recent_logs(source='newsletter', limit=limit)
    except Exception as e:
        logger.error(f"Error reading newsletter logs: {e}")
        return jsonify({'error': str(e)}), 500
    return jsonify({'success': True, 'logs': logs})


# ===================
# PUBLIC ROUTES
# ===================

@newsletter_public_bp.route('/<document_id>.html', methods=['GET', 'OPTIONS'])
@cross_origin(origins=ALLOWED_ORIGINS, supports_credentials=False)
def view_in_browser(document_id):
    """Stored newsletter rendered as the email HTML"""
    language = request.args.get('lang') or _default_language()

    try:
        stored = get_document_store().load(document_id, language)
    except Exception as e:
        logger.error(f"Error loading newsletter {document_id} for public view: {e}")
        return jsonify({'error': 'Newsletter unavailable'}), 500

    if stored is None:
        return jsonify({'error': 'Newsletter not found'}), 404

    blocks, template_settings = stored
    unsubscribe_url = get_config_value('NEWSLETTER_UNSUBSCRIBE_URL') or None
    html = render_document(blocks, template_settings, unsubscribe_url=unsubscribe_url, language=language)
    return Response(html, mimetype='text/html')
