"""
Critical tests for the Blockmail starter template.
Run with: pytest tests/test_starter.py -v
"""

import os
import sys
import pytest

# Add parent directory to path so we can import app
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def app(tmp_path):
    """Create application for testing."""
    from app import app
    app.config['TESTING'] = True
    app.config['NEWSLETTER_DB'] = str(tmp_path / 'newsletter.db')
    app.config['LOGS_DB'] = str(tmp_path / 'app_logs.db')
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def test_app_starts(app):
    """App should start with the editor registered."""
    assert 'blockmail' in app.extensions


def test_health_endpoint(client):
    """Health endpoint should return 200."""
    response = client.get('/health')
    assert response.status_code == 200


def test_homepage_links_editor(client):
    """Homepage should link to the newsletter editor."""
    response = client.get('/')
    assert response.status_code == 200
    assert b'/admin/newsletter/editor/new' in response.data


def test_editor_requires_admin(client):
    """Editor should redirect without an admin session."""
    response = client.get('/admin/newsletter/editor/new')
    assert response.status_code == 302
