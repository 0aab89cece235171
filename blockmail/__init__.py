"""
Blockmail - Newsletter Block Editor for Flask
=============================================

A drag-and-drop, block-based newsletter editor with:
- An ordered, typed block document model
- Structural editing (insert, reorder, duplicate, delete) through drag gestures
- Per-block settings and document-wide template settings
- Email-client-safe HTML export of the same document
- Preset templates and sqlite or Supabase persistence

Usage:
    from flask import Flask
    from blockmail import Blockmail

    app = Flask(__name__)
    Blockmail(app)

    # or, for app factories
    blockmail = Blockmail()
    blockmail.init_app(app)
"""

import os
import logging

from .core import Config

__version__ = '0.1.0'
__author__ = 'Laurence Stephan'

logger = logging.getLogger(__name__)

# app.config keys seeded from Config when the host app has not set them
CONFIG_KEYS = (
    'DB_DIR', 'NEWSLETTER_DB', 'LOGS_DB', 'NEWSLETTER_STORAGE',
    'SUPABASE_URL', 'SUPABASE_SERVICE_KEY', 'SUPABASE_TABLE',
    'NEWSLETTER_LOGO_URL', 'NEWSLETTER_UNSUBSCRIBE_URL',
    'NEWSLETTER_DEFAULT_LANGUAGE', 'NEWSLETTER_CORS_ORIGINS',
    'NEWSLETTER_SESSION_TTL', 'NEWSLETTER_MAX_SESSIONS',
)


class Blockmail:
    """Flask extension that registers the newsletter editor"""

    def __init__(self, app=None, config=None):
        self.config = dict(config or {})
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key, value in self.config.items():
            app.config[key] = value
        for key in CONFIG_KEYS:
            app.config.setdefault(key, getattr(Config, key))

        db_dir = app.config.get('DB_DIR')
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        from .modules.newsletter import newsletter_bp, newsletter_public_bp
        app.register_blueprint(newsletter_bp)
        app.register_blueprint(newsletter_public_bp)

        app.extensions['blockmail'] = self
        logger.info(f"Blockmail {__version__} registered on {app.name}")


__all__ = ['Blockmail', 'Config']
