"""
Centralized logging service for the Blockmail editor.
Provides structured logging with database storage and easy integration.
"""

import json
import logging
from datetime import datetime
from flask import request, has_request_context
from .database import Database
from .config import Config, get_config_value

console = logging.getLogger(__name__)


class LoggingService:
    """Centralized logging service for editor-wide audit logging"""

    @staticmethod
    def _db_path():
        return get_config_value('LOGS_DB', Config.LOGS_DB)

    @staticmethod
    def _ensure_logs_table():
        """Ensure the app_logs table exists"""
        Database.execute_schema(LoggingService._db_path(), [
            """
            CREATE TABLE IF NOT EXISTS app_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                level TEXT NOT NULL,
                source TEXT NOT NULL,
                message TEXT NOT NULL,
                details TEXT,
                ip_address TEXT,
                request_path TEXT
            )
            """,
            "CREATE INDEX IF NOT EXISTS idx_logs_timestamp ON app_logs(timestamp DESC)",
            "CREATE INDEX IF NOT EXISTS idx_logs_source ON app_logs(source)",
        ])

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()
        return ip_address, request.path

    @staticmethod
    def log(level, source, message, details=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (newsletter, storage, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
        """
        try:
            LoggingService._ensure_logs_table()
            ip_address, request_path = LoggingService._get_request_context()

            if isinstance(details, dict):
                details = json.dumps(details, indent=2, default=str)

            timestamp = datetime.now().isoformat()

            with Database.connect(LoggingService._db_path()) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, request_path)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                """, (
                    timestamp, level.upper(), source, message, details,
                    ip_address, request_path
                ))
                conn.commit()

        except Exception as e:
            # Fallback to console logging if database fails
            console.warning(f"[{level.upper()}] [{source}] {message} (logging service error: {e})")

    @staticmethod
    def get_recent_logs(source=None, limit=50):
        """Return the most recent log rows as dicts, newest first"""
        LoggingService._ensure_logs_table()
        with Database.connect(LoggingService._db_path()) as conn:
            cursor = conn.cursor()
            if source:
                cursor.execute(
                    'SELECT timestamp, level, source, message, details FROM app_logs '
                    'WHERE source = ? ORDER BY id DESC LIMIT ?',
                    (source, limit)
                )
            else:
                cursor.execute(
                    'SELECT timestamp, level, source, message, details FROM app_logs '
                    'ORDER BY id DESC LIMIT ?',
                    (limit,)
                )
            columns = ['timestamp', 'level', 'source', 'message', 'details']
            return [dict(zip(columns, row)) for row in cursor.fetchall()]


def db_log(level, source, message, details=None):
    """Shortcut used by modules: persist a log row for the admin log viewer"""
    LoggingService.log(level, source, message, details)
