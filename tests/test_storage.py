"""
Tests for the storage collaborators (sqlite file, mocked Supabase REST).
Run with: pytest tests/test_storage.py -v
"""

import os
import asyncio
from unittest.mock import patch, MagicMock

import pytest

from blockmail.modules.newsletter.storage import (
    SqliteDocumentStore, SupabaseDocumentStore, get_document_store, make_save_callback,
)
from blockmail.modules.newsletter.models import create_block, default_template_settings


@pytest.fixture
def store(tmp_db_dir):
    return SqliteDocumentStore(os.path.join(tmp_db_dir, "newsletter.db"))


def _blocks():
    header = create_block("header")
    header["content"]["title"] = "Autumn news"
    return [header, create_block("divider")]


# ---------------------------------------------------------------------------
# Sqlite
# ---------------------------------------------------------------------------

def test_sqlite_save_and_load(store):
    blocks = _blocks()
    settings = dict(default_template_settings(), fontSize="large")
    store.save("doc-1", "fr", blocks, settings)

    loaded_blocks, loaded_settings = store.load("doc-1", "fr")
    assert loaded_blocks == blocks
    assert loaded_settings == settings


def test_sqlite_missing_document(store):
    assert store.load("ghost", "fr") is None


def test_sqlite_overwrites_and_keeps_languages_apart(store):
    store.save("doc-1", "fr", _blocks(), default_template_settings())
    store.save("doc-1", "fr", [], default_template_settings())
    store.save("doc-1", "en", _blocks(), default_template_settings())

    assert store.load("doc-1", "fr")[0] == []
    assert len(store.load("doc-1", "en")[0]) == 2

    listed = {(d["documentId"], d["language"]): d["blockCount"] for d in store.list_documents()}
    assert listed == {("doc-1", "fr"): 0, ("doc-1", "en"): 2}


def test_sqlite_delete(store):
    store.save("doc-1", "fr", _blocks(), default_template_settings())
    store.save("doc-1", "en", _blocks(), default_template_settings())

    assert store.delete("doc-1", "en") is True
    assert store.load("doc-1", "en") is None
    assert store.delete("doc-1") is True
    assert store.list_documents() == []


# ---------------------------------------------------------------------------
# Supabase (PostgREST)
# ---------------------------------------------------------------------------

def test_supabase_requires_credentials():
    with pytest.raises(ValueError):
        SupabaseDocumentStore(None, None)


@patch("blockmail.modules.newsletter.storage.requests")
def test_supabase_save_upserts(mock_requests):
    store = SupabaseDocumentStore("https://proj.supabase.co/", "service-key", "newsletters")
    store.save("doc-1", "fr", _blocks(), default_template_settings())

    args, kwargs = mock_requests.post.call_args
    assert args[0] == "https://proj.supabase.co/rest/v1/newsletters"
    assert "resolution=merge-duplicates" in kwargs["headers"]["Prefer"]
    assert kwargs["headers"]["apikey"] == "service-key"
    assert kwargs["params"] == {"on_conflict": "document_id,language"}
    mock_requests.post.return_value.raise_for_status.assert_called_once()


@patch("blockmail.modules.newsletter.storage.requests")
def test_supabase_load(mock_requests):
    blocks = _blocks()
    response = MagicMock()
    response.json.return_value = [{"blocks": blocks, "template_settings": {"fontFamily": "serif"}}]
    mock_requests.get.return_value = response

    store = SupabaseDocumentStore("https://proj.supabase.co", "key")
    loaded_blocks, settings = store.load("doc-1", "en")

    assert loaded_blocks == blocks
    assert settings["fontFamily"] == "serif"
    assert settings["primaryColor"] == "#c75a3a"
    assert mock_requests.get.call_args.kwargs["params"]["language"] == "eq.en"


@patch("blockmail.modules.newsletter.storage.requests")
def test_supabase_load_missing(mock_requests):
    mock_requests.get.return_value.json.return_value = []
    assert SupabaseDocumentStore("https://proj.supabase.co", "key").load("ghost", "fr") is None


# ---------------------------------------------------------------------------
# Backend selection and save callback
# ---------------------------------------------------------------------------

def test_backend_selection(app):
    with app.app_context():
        assert isinstance(get_document_store(), SqliteDocumentStore)

        app.config["NEWSLETTER_STORAGE"] = "supabase"
        app.config["SUPABASE_URL"] = "https://proj.supabase.co"
        app.config["SUPABASE_SERVICE_KEY"] = "key"
        assert isinstance(get_document_store(), SupabaseDocumentStore)


def test_save_callback_writes_to_store(store):
    on_save = make_save_callback(store, "doc-2", "en")
    blocks = _blocks()
    asyncio.run(on_save(blocks, default_template_settings()))

    assert store.load("doc-2", "en")[0] == blocks


def test_save_callback_propagates_failure():
    failing = MagicMock()
    failing.save.side_effect = RuntimeError("disk full")
    on_save = make_save_callback(failing, "doc-3", "fr")

    with pytest.raises(RuntimeError, match="disk full"):
        asyncio.run(on_save([], default_template_settings()))
