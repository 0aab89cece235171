"""
Newsletter Storage
==================

Reference persistence for newsletter documents. One row per
(document_id, language), holding the block list and template settings as JSON.

Backends:
- SqliteDocumentStore: local sqlite file (NEWSLETTER_DB)
- SupabaseDocumentStore: Supabase table over its PostgREST API

get_document_store() picks one from the NEWSLETTER_STORAGE setting.
make_save_callback() adapts a store to the editor's async on_save contract.
"""

import json
import asyncio
import logging
from datetime import datetime

import requests

from blockmail.core import Config, Database, get_config_value
from .models import serialize_document, load_document

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ('sqlite', 'supabase')


def _db_log(level, message, details=None):
    """Log to the persistent DB logger"""
    try:
        from blockmail.core import db_log
        db_log(level, 'newsletter', message, details)
    except Exception:
        pass


class SqliteDocumentStore:
    """Newsletter documents in a local sqlite database"""

    def __init__(self, db_path, table=None):
        self.db_path = db_path
        self.table = table or Config.NEWSLETTER_TABLE
        self._initialized = False

    def init_db(self):
        if self._initialized:
            return
        Database.execute_schema(self.db_path, [
            f'''
            CREATE TABLE IF NOT EXISTS {self.table} (
                document_id TEXT NOT NULL,
                language TEXT NOT NULL,
                blocks TEXT NOT NULL DEFAULT '[]',
                template_settings TEXT NOT NULL DEFAULT '{{}}',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (document_id, language)
            )
            ''',
            f"CREATE INDEX IF NOT EXISTS idx_{self.table}_updated ON {self.table}(updated_at DESC)",
        ])
        self._initialized = True

    def save(self, document_id, language, blocks, template_settings):
        self.init_db()
        document = serialize_document(blocks, template_settings)
        now = datetime.now().isoformat()

        with Database.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f'''
                INSERT INTO {self.table} (document_id, language, blocks, template_settings, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(document_id, language) DO UPDATE SET
                    blocks = excluded.blocks,
                    template_settings = excluded.template_settings,
                    updated_at = excluded.updated_at
            ''', (
                document_id, language,
                json.dumps(document['blocks']), json.dumps(document['templateSettings']),
                now, now,
            ))
            conn.commit()

        logger.info(f"Saved newsletter {document_id} ({language}): {len(blocks)} blocks")

    def load(self, document_id, language):
        """Stored document as (blocks, template_settings), or None"""
        self.init_db()
        with Database.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT blocks, template_settings FROM {self.table} WHERE document_id = ? AND language = ?",
                (document_id, language)
            )
            row = cursor.fetchone()

        if not row:
            return None
        return load_document({'blocks': json.loads(row[0]), 'templateSettings': json.loads(row[1])})

    def delete(self, document_id, language=None):
        """Delete one language of a document, or all of them"""
        self.init_db()
        with Database.connect(self.db_path) as conn:
            cursor = conn.cursor()
            if language is None:
                cursor.execute(f"DELETE FROM {self.table} WHERE document_id = ?", (document_id,))
            else:
                cursor.execute(
                    f"DELETE FROM {self.table} WHERE document_id = ? AND language = ?",
                    (document_id, language)
                )
            conn.commit()
            return cursor.rowcount > 0

    def list_documents(self):
        """One entry per stored (document, language), most recently updated first"""
        self.init_db()
        with Database.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f'''
                SELECT document_id, language, blocks, updated_at FROM {self.table}
                ORDER BY updated_at DESC
            ''')
            rows = cursor.fetchall()

        return [
            {
                'documentId': row[0],
                'language': row[1],
                'blockCount': len(json.loads(row[2])),
                'updatedAt': row[3],
            }
            for row in rows
        ]


class SupabaseDocumentStore:
    """Newsletter documents in a Supabase table, through the PostgREST API.

    The table needs columns document_id, language, blocks (jsonb),
    template_settings (jsonb) and updated_at, with a unique constraint on
    (document_id, language).
    """

    def __init__(self, url, key, table=None, timeout=15):
        if not url or not key:
            raise ValueError(
                "Supabase URL and key required. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_KEY environment variables."
            )
        self.base_url = f"{url.rstrip('/')}/rest/v1/{table or Config.SUPABASE_TABLE}"
        self.timeout = timeout
        self.headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def save(self, document_id, language, blocks, template_settings):
        document = serialize_document(blocks, template_settings)
        payload = {
            'document_id': document_id,
            'language': language,
            'blocks': document['blocks'],
            'template_settings': document['templateSettings'],
            'updated_at': datetime.now().isoformat(),
        }
        headers = dict(self.headers)
        headers['Prefer'] = 'resolution=merge-duplicates,return=minimal'

        resp = requests.post(
            self.base_url,
            headers=headers,
            params={'on_conflict': 'document_id,language'},
            data=json.dumps(payload),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        logger.info(f"Saved newsletter {document_id} ({language}) to Supabase: {len(blocks)} blocks")

    def load(self, document_id, language):
        resp = requests.get(
            self.base_url,
            headers=self.headers,
            params={
                'select': 'blocks,template_settings',
                'document_id': f'eq.{document_id}',
                'language': f'eq.{language}',
                'limit': 1,
            },
            timeout=self.timeout,
        )
        resp.raise_for_status()
        rows = resp.json()
        if not rows:
            return None
        return load_document({
            'blocks': rows[0].get('blocks') or [],
            'templateSettings': rows[0].get('template_settings') or {},
        })

    def delete(self, document_id, language=None):
        params = {'document_id': f'eq.{document_id}'}
        if language is not None:
            params['language'] = f'eq.{language}'
        headers = dict(self.headers)
        headers['Prefer'] = 'return=representation'

        resp = requests.delete(self.base_url, headers=headers, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return bool(resp.json())

    def list_documents(self):
        resp = requests.get(
            self.base_url,
            headers=self.headers,
            params={'select': 'document_id,language,blocks,updated_at', 'order': 'updated_at.desc'},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return [
            {
                'documentId': row.get('document_id'),
                'language': row.get('language'),
                'blockCount': len(row.get('blocks') or []),
                'updatedAt': row.get('updated_at'),
            }
            for row in resp.json()
        ]


def get_document_store():
    """Storage backend selected by NEWSLETTER_STORAGE ('sqlite' by default)"""
    backend = (get_config_value('NEWSLETTER_STORAGE', 'sqlite') or 'sqlite').lower()

    if backend == 'supabase':
        return SupabaseDocumentStore(
            get_config_value('SUPABASE_URL'),
            get_config_value('SUPABASE_SERVICE_KEY'),
            get_config_value('SUPABASE_TABLE', Config.SUPABASE_TABLE),
        )
    if backend != 'sqlite':
        logger.warning(f"Unknown NEWSLETTER_STORAGE '{backend}', falling back to sqlite")

    return SqliteDocumentStore(get_config_value('NEWSLETTER_DB', Config.NEWSLETTER_DB))


def make_save_callback(store, document_id, language):
    """Async on_save(blocks, template_settings) that writes to store.

    The blocking store call runs in a worker thread. Failures are logged and
    re-raised so the editor can report them.
    """
    async def on_save(blocks, template_settings):
        try:
            await asyncio.to_thread(store.save, document_id, language, blocks, template_settings)
        except Exception as e:
            logger.error(f"Failed to save newsletter {document_id} ({language}): {e}")
            _db_log('error', f"Newsletter save failed: {document_id}", {
                'language': language,
                'error': str(e),
            })
            raise
        _db_log('info', f"Newsletter saved: {document_id}", {
            'language': language,
            'blocks': len(blocks),
        })

    return on_save
