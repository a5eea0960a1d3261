import json
import logging
import sqlite3
from datetime import UTC, datetime
from typing import Any

from site_api.components.site_settings import StoreFailure

logger = logging.getLogger(__name__)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteOptionStore:
    """SQLite adapter for the key/value options table."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    def get(self, key: str) -> Any | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute(
                    "SELECT option_value FROM options WHERE option_name = ?", (key,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to read option %s: %s", key, e)
            raise StoreFailure(key, str(e)) from e

        if not row or row["option_value"] is None:
            return None
        raw = row["option_value"]
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            # Rows written outside this adapter hold plain text
            return raw

    def set(self, key: str, value: Any) -> None:
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO options (option_name, option_value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(option_name) DO UPDATE SET
                        option_value=excluded.option_value,
                        updated_at=excluded.updated_at
                """,
                    (key, json.dumps(value), datetime.now(UTC).isoformat()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to write option %s: %s", key, e)
            raise StoreFailure(key, str(e)) from e

    def ping(self) -> None:
        """Raise if the options table cannot be queried."""
        conn = self._get_conn()
        try:
            conn.execute("SELECT 1 FROM options LIMIT 1").fetchall()
        finally:
            conn.close()
