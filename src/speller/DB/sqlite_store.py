# speller/DB/sqlite_store.py
from __future__ import annotations
import os
import sqlite3
from array import array
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from ..models import DeleteOnly, Entry, WordEntry
from .index import DeleteIndex

_SCHEMA = """
CREATE TABLE IF NOT EXISTS meta (
  name TEXT PRIMARY KEY,
  value INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS words (
  idx INTEGER PRIMARY KEY,
  term TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS entries (
  key TEXT PRIMARY KEY,
  kind TEXT NOT NULL CHECK (kind IN ('word', 'delete')),
  count INTEGER NOT NULL,
  suggestions BLOB NOT NULL
);
"""

_KIND_WORD = "word"
_KIND_DELETE = "delete"


def _pack(ids) -> bytes:
    return array("I", ids).tobytes()

def _unpack(blob: bytes) -> list[int]:
    a = array("I")
    a.frombytes(blob)
    return a.tolist()

def _entry_row(key: str, entry: Entry) -> Tuple[str, str, int, bytes]:
    if isinstance(entry, DeleteOnly):
        return (key, _KIND_DELETE, 0, _pack([entry.index]))
    return (key, _KIND_WORD, entry.count, _pack(entry.suggestions))


class SQLiteStore:
    """
    Snapshot of a DeleteIndex in SQLite. `entries.kind` tags the two value
    variants; a 'delete' row carries exactly one index in `suggestions`.
    save() replaces the whole snapshot in one transaction.

    Only save() creates the database file; exists() and load() open an
    existing file read-only and never leave one behind.
    """
    def __init__(self, db_path: str) -> None:
        self.db_path = os.path.abspath(db_path)
        self.conn: Optional[sqlite3.Connection] = None
        self._writable = False

    def _writer(self) -> sqlite3.Connection:
        if self.conn is not None and not self._writable:
            self.conn.close()
            self.conn = None
        if self.conn is None:
            os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
            self.conn = sqlite3.connect(self.db_path)
            self.conn.executescript(_SCHEMA)
            self._writable = True
        return self.conn

    def _reader(self) -> Optional[sqlite3.Connection]:
        if self.conn is None:
            if not os.path.isfile(self.db_path):
                return None
            self.conn = sqlite3.connect(f"{Path(self.db_path).as_uri()}?mode=ro", uri=True)
            self._writable = False
        return self.conn

    # ---- Write ----
    def save(self, index: DeleteIndex) -> None:
        conn = self._writer()
        with conn:
            conn.execute("DELETE FROM meta")
            conn.execute("DELETE FROM words")
            conn.execute("DELETE FROM entries")
            conn.executemany(
                "INSERT INTO meta(name, value) VALUES (?,?)",
                [
                    ("max_edit_distance", index.max_edit_distance),
                    ("keep_all_suggestions", int(index.keep_all_suggestions)),
                    ("longest_word_length", index.longest_word_length),
                ],
            )
            conn.executemany(
                "INSERT INTO words(idx, term) VALUES (?,?)",
                enumerate(index.words),
            )
            conn.executemany(
                "INSERT INTO entries(key, kind, count, suggestions) VALUES (?,?,?,?)",
                (_entry_row(k, e) for k, e in index.iter_entries()),
            )

    # ---- Read ----
    def load(self) -> DeleteIndex:
        if not self.exists():
            raise FileNotFoundError(f"{self.db_path} holds no saved dictionary")
        conn = self._reader()
        meta: Dict[str, int] = dict(conn.execute("SELECT name, value FROM meta"))
        index = DeleteIndex(
            max_edit_distance=meta["max_edit_distance"],
            keep_all_suggestions=bool(meta.get("keep_all_suggestions", 0)),
        )
        index.words = [term for (term,) in conn.execute("SELECT term FROM words ORDER BY idx")]
        index.entries = dict(self._iter_entries(conn))
        index.longest_word_length = meta.get("longest_word_length", 0)
        return index

    def _iter_entries(self, conn: sqlite3.Connection) -> Iterator[Tuple[str, Entry]]:
        cur = conn.execute("SELECT key, kind, count, suggestions FROM entries ORDER BY rowid")
        for key, kind, count, blob in cur:
            ids = _unpack(blob)
            if kind == _KIND_DELETE:
                yield key, DeleteOnly(ids[0])
            else:
                yield key, WordEntry(count=int(count), suggestions=ids)

    def exists(self) -> bool:
        conn = self._reader()
        if conn is None:
            return False
        table = conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type='table' AND name='meta'"
        ).fetchone()
        if table is None:
            return False
        row = conn.execute("SELECT COUNT(*) FROM meta WHERE name='max_edit_distance'").fetchone()
        return bool(row and row[0])

    # ---- lifecycle ----
    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None
