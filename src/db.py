"""Shared SQLite helpers: WAL mode and row_factory defaults."""

import sqlite3
from pathlib import Path


def wal_connect(
    db_path: str | Path,
    row_factory: bool = False,
    shared: bool = False,
) -> sqlite3.Connection:
    """Open SQLite connection with WAL journal mode.

    Args:
        db_path: Path to database file, or ":memory:".
        row_factory: If True, set conn.row_factory = sqlite3.Row.
        shared: Allow use from threads other than the creator.
            Callers must serialize access themselves.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=not shared)
    conn.execute("PRAGMA journal_mode=WAL")
    if row_factory:
        conn.row_factory = sqlite3.Row
    return conn
