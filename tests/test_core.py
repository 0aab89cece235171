"""
Tests for the core layer: config lookup order, sqlite helper, audit logging.
Run with: pytest tests/test_core.py -v
"""

import os
import sqlite3

from blockmail.core import Config, Database, LoggingService, db_log, get_config_value


# ---------------------------------------------------------------------------
# Config resolution -- app.config > Config > environment
# ---------------------------------------------------------------------------

def test_config_prefers_app_config(app):
    with app.app_context():
        app.config["NEWSLETTER_STORAGE"] = "supabase"
        assert get_config_value("NEWSLETTER_STORAGE") == "supabase"


def test_config_falls_back_to_config_class():
    assert get_config_value("NEWSLETTER_STORAGE") == "sqlite"


def test_config_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("BLOCKMAIL_TEST_ONLY_KEY", "from-env")
    assert get_config_value("BLOCKMAIL_TEST_ONLY_KEY") == "from-env"
    assert get_config_value("BLOCKMAIL_MISSING_KEY", "fallback") == "fallback"


def test_config_paths(app):
    assert app.config["DB_DIR"]
    assert app.config["NEWSLETTER_DB"].endswith("newsletter.db")
    assert app.config["LOGS_DB"].endswith("app_logs.db")


# ---------------------------------------------------------------------------
# Database helper
# ---------------------------------------------------------------------------

def test_execute_schema_creates_parent_dir(tmp_db_dir):
    path = os.path.join(tmp_db_dir, "nested", "schema.db")
    Database.execute_schema(path, ["CREATE TABLE IF NOT EXISTS t (id INTEGER PRIMARY KEY)"])
    Database.execute_schema(path, ["CREATE TABLE IF NOT EXISTS t (id INTEGER PRIMARY KEY)"])

    with sqlite3.connect(path) as conn:
        tables = [row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")]
    assert tables == ["t"]


# ---------------------------------------------------------------------------
# Audit logging
# ---------------------------------------------------------------------------

def test_db_log_persists_and_reads_back():
    db_log("info", "newsletter", "Newsletter saved: doc-1", {"blocks": 3})
    db_log("error", "storage", "Disk full")

    logs = LoggingService.get_recent_logs(source="newsletter")
    assert len(logs) == 1
    assert logs[0]["level"] == "INFO"
    assert '"blocks": 3' in logs[0]["details"]
    assert len(LoggingService.get_recent_logs()) == 2


def test_db_log_never_raises(monkeypatch):
    monkeypatch.setattr(Config, "LOGS_DB", "/proc/definitely/not/writable/logs.db")
    db_log("warning", "newsletter", "Lost message")


def test_logs_endpoint(admin_client, app):
    with app.app_context():
        db_log("info", "newsletter", "Newsletter saved: doc-9")

    response = admin_client.get("/admin/newsletter/logs")
    assert response.status_code == 200
    assert response.get_json()["logs"][0]["message"] == "Newsletter saved: doc-9"
