import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the Blockmail newsletter editor.
    Projects should provide database paths and storage credentials via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Database paths - use environment variables or fallback to DB_DIR
    NEWSLETTER_DB = os.getenv('NEWSLETTER_DB', os.path.join(DB_DIR, "newsletter.db"))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, "app_logs.db"))

    # Table names
    NEWSLETTER_TABLE = "newsletter_documents"

    # Storage backend for saved documents: 'sqlite' or 'supabase'
    NEWSLETTER_STORAGE = os.getenv('NEWSLETTER_STORAGE', 'sqlite')

    # Supabase (PostgREST) settings
    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_SERVICE_KEY = os.getenv('SUPABASE_SERVICE_KEY') or os.getenv('SUPABASE_KEY')
    SUPABASE_TABLE = os.getenv('SUPABASE_TABLE', 'newsletter_campaigns')

    # Newsletter rendering
    # Logo substituted into preset header blocks
    NEWSLETTER_LOGO_URL = os.getenv('NEWSLETTER_LOGO_URL', '/images/logo-white.svg')
    # Left empty so the {{unsubscribe_url}} token survives for the mail sender
    NEWSLETTER_UNSUBSCRIBE_URL = os.getenv('NEWSLETTER_UNSUBSCRIBE_URL', '')
    NEWSLETTER_DEFAULT_LANGUAGE = os.getenv('NEWSLETTER_DEFAULT_LANGUAGE', 'fr')

    # In-memory editor sessions: idle seconds before eviction, and a hard cap
    NEWSLETTER_SESSION_TTL = int(os.getenv('NEWSLETTER_SESSION_TTL', '3600'))
    NEWSLETTER_MAX_SESSIONS = int(os.getenv('NEWSLETTER_MAX_SESSIONS', '100'))

    # Origins allowed to fetch the public "view in browser" render
    NEWSLETTER_CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv('NEWSLETTER_CORS_ORIGINS', 'http://localhost:3000').split(',')
        if origin.strip()
    ]

    # Port for local server (optional, projects can set this)
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get config value: app.config > Config class > env var."""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val:
            return val
    except RuntimeError:
        pass
    if hasattr(Config, key):
        val = getattr(Config, key)
        if val:
            return val
    return os.getenv(key, default)
