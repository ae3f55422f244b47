"""SQLite key/value storage for family tree snapshots."""

from datetime import datetime, timezone
import json
import logging
from pathlib import Path
import sqlite3

from models import Person

logger = logging.getLogger("legacytree.database")

DEFAULT_KEY = "family_tree_data"


def create_database(db_path: Path | str) -> sqlite3.Connection:
    """Open (or create) the database and make sure the snapshot table exists."""
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS snapshot (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT
        )
    """)

    conn.commit()
    return conn


def save_snapshot(conn: sqlite3.Connection, people: list[Person], key: str = DEFAULT_KEY):
    """Store the whole person list as one JSON blob under `key`."""
    blob = json.dumps([p.to_dict() for p in people])
    conn.execute(
        """
        INSERT INTO snapshot (key, value, updated_at)
        VALUES (?, ?, ?)
        ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
        """,
        (key, blob, datetime.now(timezone.utc).isoformat()),
    )
    conn.commit()
    logger.debug("Saved %d people under %r", len(people), key)


def load_snapshot(conn: sqlite3.Connection, key: str = DEFAULT_KEY) -> list[Person] | None:
    """Read the blob stored under `key`. Returns None when nothing was saved yet."""
    row = conn.execute("SELECT value FROM snapshot WHERE key = ?", (key,)).fetchone()
    if row is None:
        return None
    return [Person.from_dict(item) for item in json.loads(row[0])]


class SnapshotWriter:
    """Persist hook for FamilyTreeSession that saves every change."""

    def __init__(self, conn: sqlite3.Connection, key: str = DEFAULT_KEY):
        self.conn = conn
        self.key = key

    def __call__(self, people: list[Person]):
        save_snapshot(self.conn, people, self.key)
