"""SQLite-backed run history (append-only, newest first on read)."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from core import HistoryError, RunEntry
from application.ports import HistoryRepository
from infrastructure.file_repository import now_iso

logger = logging.getLogger("tuiman.history")

HISTORY_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS runs (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  request_id TEXT NOT NULL,
  request_name TEXT NOT NULL,
  method TEXT NOT NULL,
  url TEXT NOT NULL,
  status_code INTEGER,
  duration_ms INTEGER,
  error TEXT,
  created_at TEXT NOT NULL,
  request_snapshot TEXT,
  response_body TEXT
)
"""

# Databases written before snapshots were stored lack these columns.
_LATE_COLUMNS = ("request_snapshot", "response_body")

_SELECT_SQL = """
SELECT id, request_id, request_name, method, url, status_code, duration_ms,
       error, created_at, request_snapshot, response_body
FROM runs
ORDER BY id DESC
LIMIT ?
"""

_INSERT_SQL = """
INSERT INTO runs
  (request_id, request_name, method, url, status_code, duration_ms, error,
   created_at, request_snapshot, response_body)
VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""


class SqliteHistoryRepository(HistoryRepository):
    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._initialized = False

    @contextmanager
    def get_connection(self) -> Iterator[sqlite3.Connection]:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        except (OSError, sqlite3.Error) as exc:
            raise HistoryError(f"Cannot open history database {self.db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            if not self._initialized:
                self._init_db(conn)
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise HistoryError(f"History database error: {exc}") from exc
        finally:
            conn.close()

    def _init_db(self, conn: sqlite3.Connection) -> None:
        conn.execute(HISTORY_SCHEMA_SQL)
        existing = {row["name"] for row in conn.execute("PRAGMA table_info(runs)")}
        for column in _LATE_COLUMNS:
            if column not in existing:
                conn.execute(f"ALTER TABLE runs ADD COLUMN {column} TEXT")
                logger.info("Added missing history column %s", column)
        self._initialized = True

    def list(self, limit: int = 200) -> List[RunEntry]:
        with self.get_connection() as conn:
            rows = conn.execute(_SELECT_SQL, (max(0, int(limit)),)).fetchall()
        return [RunEntry.from_row(dict(row)) for row in rows]

    def record(self, run: RunEntry) -> int:
        with self.get_connection() as conn:
            cursor = conn.execute(
                _INSERT_SQL,
                (
                    run.request_id,
                    run.request_name,
                    run.method,
                    run.url,
                    run.status_code,
                    run.duration_ms,
                    run.error,
                    run.created_at or now_iso(),
                    run.request_snapshot,
                    run.response_body,
                ),
            )
            run_id = int(cursor.lastrowid or 0)
        logger.debug("Recorded run %s for request %s (status %s)", run_id, run.request_id, run.status_code)
        return run_id


__all__ = ["SqliteHistoryRepository", "HISTORY_SCHEMA_SQL"]
