"""
Newsletter Module
=================

Provides:
- Drag-and-drop block editor for newsletters (admin)
- Email-safe HTML export of the same block document
- Preset templates to start from
- Public "view in browser" render with CORS headers
"""

from flask import Blueprint

newsletter_bp = Blueprint(
    'newsletter',
    __name__,
    url_prefix='/admin/newsletter',
    template_folder='templates',
    static_folder='static',
    static_url_path='/newsletter/static'
)

newsletter_public_bp = Blueprint(
    'newsletter_public',
    __name__,
    url_prefix='/newsletter'
)

from . import routes

__all__ = ['newsletter_bp', 'newsletter_public_bp']
