"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), running a unit of work inside one transaction
(``transaction``) and applying migrations on application start
(``init_db``).  It uses SQLite as a lightweight embedded database; to
switch to another DBMS you would replace connection logic and adapt
SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS contacts (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            mobile TEXT NOT NULL,
            dob TEXT NOT NULL,
            deleted INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: mobile uniqueness among active contacts
    (
        2,
        """
        -- Partial index: a mobile number may repeat only across deleted rows.
        CREATE UNIQUE INDEX IF NOT EXISTS ux_contacts_active_mobile
            ON contacts(mobile) WHERE deleted = 0;
        CREATE INDEX IF NOT EXISTS idx_contacts_deleted ON contacts(deleted);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parents[3]  # project root
    return str((base_dir / db_url).resolve())


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  A ``casefold(text)`` SQL function is registered for
    case-insensitive matching.  The connection runs in autocommit mode;
    transactions are opened explicitly by :func:`transaction`.
    """
    conn = sqlite3.connect(get_database_path(), isolation_level=None)
    conn.row_factory = sqlite3.Row
    # SQLite's LOWER() folds ASCII only; search needs full Unicode folding.
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


@contextmanager
def transaction(readonly: bool = False) -> Iterator[sqlite3.Connection]:
    """Yield a connection with an open transaction.

    Write transactions start with ``BEGIN IMMEDIATE`` so the write lock
    is held from the first uniqueness check to the last insert.  The
    transaction is committed when the block exits normally and rolled
    back when it raises; the connection is always closed.
    """
    conn = get_connection()
    try:
        conn.execute("BEGIN" if readonly else "BEGIN IMMEDIATE")
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                # executescript commits any pending transaction itself
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                current_version = version
    finally:
        conn.close()
