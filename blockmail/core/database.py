import os
import sqlite3
import threading


class Database:
    # Serialises schema creation across worker threads
    _lock = threading.Lock()

    @staticmethod
    def connect(path):
        return sqlite3.connect(path)

    @staticmethod
    def ensure_dir(path):
        """
        Create the parent directory of a database file if it is missing.
        """
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return path

    @classmethod
    def execute_schema(cls, path, statements):
        """
        Run CREATE TABLE / CREATE INDEX statements once per call, holding the lock
        so two threads never race on the same fresh database file.
        """
        with cls._lock:
            cls.ensure_dir(path)
            with cls.connect(path) as conn:
                cursor = conn.cursor()
                for statement in statements:
                    cursor.execute(statement)
                conn.commit()
