"""Document collections on SQLite: JSON bodies keyed by (collection, id)."""

import json
import re
import sqlite3
import threading
from pathlib import Path
from typing import Any, Optional

from db import wal_connect

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS documents (
        collection TEXT NOT NULL,
        doc_id TEXT NOT NULL,
        body TEXT NOT NULL,
        PRIMARY KEY (collection, doc_id)
    );
"""


class StoreError(Exception):
    """A store operation failed on a live connection."""


def _field_path(name: str) -> str:
    if not _FIELD_RE.match(name):
        raise ValueError(f"Invalid field name: {name!r}")
    return f"$.{name}"


def _sql_value(value: Any) -> Any:
    # json_extract yields 1/0 for JSON booleans
    if isinstance(value, bool):
        return int(value)
    return value


def _where(collection: str, filter: Optional[dict]) -> tuple[str, list]:
    clauses = ["collection = ?"]
    params: list = [collection]
    for key, value in (filter or {}).items():
        if value is None:
            clauses.append("json_extract(body, ?) IS NULL")
            params.append(_field_path(key))
        else:
            clauses.append("json_extract(body, ?) = ?")
            params.extend([_field_path(key), _sql_value(value)])
    return " AND ".join(clauses), params


class Collection:
    """Mongo-style primitives over one named collection."""

    def __init__(self, store: "DocumentStore", name: str):
        self._store = store
        self.name = name

    def find(
        self,
        filter: Optional[dict] = None,
        sort: Optional[tuple[str, int]] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """Documents matching every key in ``filter``.

        Args:
            filter: Field -> exact value.
            sort: (field, 1) ascending or (field, -1) descending.
            limit: Max documents returned.
        """
        where, params = _where(self.name, filter)
        sql = f"SELECT body FROM documents WHERE {where}"
        if sort:
            field, direction = sort
            sql += f" ORDER BY json_extract(body, ?) {'DESC' if direction < 0 else 'ASC'}, rowid"
            params.append(_field_path(field))
        else:
            sql += " ORDER BY rowid"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))
        rows = self._store.query(sql, params)
        return [json.loads(r["body"]) for r in rows]

    def find_one(self, filter: Optional[dict] = None) -> Optional[dict]:
        found = self.find(filter, limit=1)
        return found[0] if found else None

    def insert_one(self, document: dict) -> str:
        """Insert a document carrying a string ``id``. Returns the id."""
        doc_id = document.get("id")
        if not isinstance(doc_id, str) or not doc_id:
            raise ValueError("Document needs a non-empty string 'id'")
        self._store.execute(
            "INSERT INTO documents (collection, doc_id, body) VALUES (?, ?, ?)",
            (self.name, doc_id, json.dumps(document)),
            commit=True,
        )
        return doc_id

    def update_one(self, filter: dict, patch: dict) -> int:
        """Merge ``patch`` into the first match. Returns matched count (0 or 1)."""
        where, params = _where(self.name, filter)
        with self._store.lock:
            row = self._store.execute(
                f"SELECT rowid, body FROM documents WHERE {where} ORDER BY rowid LIMIT 1",
                params,
            ).fetchone()
            if row is None:
                return 0
            body = json.loads(row["body"])
            body.update(patch)
            self._store.execute(
                "UPDATE documents SET body = ? WHERE rowid = ?",
                (json.dumps(body), row["rowid"]),
                commit=True,
            )
            return 1

    def delete_one(self, filter: dict) -> int:
        """Delete the first match. Returns deleted count (0 or 1)."""
        where, params = _where(self.name, filter)
        cur = self._store.execute(
            f"DELETE FROM documents WHERE rowid IN "
            f"(SELECT rowid FROM documents WHERE {where} ORDER BY rowid LIMIT 1)",
            params,
            commit=True,
        )
        return cur.rowcount


class DocumentStore:
    """One shared SQLite connection serving every collection."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn
        self.lock = threading.RLock()

    @classmethod
    def open(cls, db_path: str | Path) -> "DocumentStore":
        """Connect and create the schema. Raises sqlite3.Error/OSError on failure."""
        conn = wal_connect(db_path, row_factory=True, shared=True)
        try:
            conn.executescript(_SCHEMA)
            conn.commit()
        except sqlite3.Error:
            conn.close()
            raise
        return cls(conn)

    def collection(self, name: str) -> Collection:
        return Collection(self, name)

    def execute(self, sql: str, params=(), commit: bool = False) -> sqlite3.Cursor:
        with self.lock:
            try:
                cur = self._conn.execute(sql, params)
                if commit:
                    self._conn.commit()
                return cur
            except sqlite3.Error as e:
                if self._conn.in_transaction:
                    self._conn.rollback()
                raise StoreError(str(e)) from e

    def query(self, sql: str, params=()) -> list[sqlite3.Row]:
        with self.lock:
            cur = self.execute(sql, params)
            try:
                return cur.fetchall()
            except sqlite3.Error as e:
                raise StoreError(str(e)) from e

    def close(self) -> None:
        with self.lock:
            self._conn.close()
