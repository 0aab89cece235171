"""
Shared fixtures for the Blockmail test suite.

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile

import pytest
from flask import Flask

from blockmail import Blockmail
from blockmail.core import Config
from blockmail.modules.newsletter import routes


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="blockmail-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_config(tmp_db_dir, monkeypatch):
    """Point every Config-level database path at the temp dir."""
    monkeypatch.setattr(Config, "DB_DIR", tmp_db_dir)
    monkeypatch.setattr(Config, "NEWSLETTER_DB", os.path.join(tmp_db_dir, "newsletter.db"))
    monkeypatch.setattr(Config, "LOGS_DB", os.path.join(tmp_db_dir, "app_logs.db"))
    monkeypatch.setattr(Config, "NEWSLETTER_STORAGE", "sqlite")


@pytest.fixture(autouse=True)
def fresh_editor_sessions():
    """Every test starts with an empty editor session registry."""
    routes._editors.clear()
    yield
    routes._editors.clear()


@pytest.fixture
def app(tmp_db_dir):
    """Flask app with the newsletter editor registered."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    Blockmail(app, {
        "DB_DIR": tmp_db_dir,
        "NEWSLETTER_DB": os.path.join(tmp_db_dir, "newsletter.db"),
        "LOGS_DB": os.path.join(tmp_db_dir, "app_logs.db"),
        "NEWSLETTER_STORAGE": "sqlite",
        "NEWSLETTER_LOGO_URL": "https://cdn.example.com/logo.png",
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client with an admin session."""
    with client.session_transaction() as sess:
        sess["admin_id"] = 1
    return client
