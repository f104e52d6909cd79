# speller/DB/api.py
from __future__ import annotations
from typing import Protocol

from .index import DeleteIndex


class IndexStore(Protocol):
    # Write a full snapshot (vocabulary + every entry)
    def save(self, index: DeleteIndex) -> None: ...
    # Rebuild an equal DeleteIndex from the snapshot
    def load(self) -> DeleteIndex: ...
    def exists(self) -> bool: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str) -> IndexStore:
    """
    Factory:
      - memory://        -> MemoryStore (deep-copy snapshot, in process)
      - pickle:///path   -> PickleStore (whole index, atomic replace)
      - sqlite:///path   -> SQLiteStore (tables words/entries, tagged rows)
    """
    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore()

    if dsn.startswith("pickle:///"):
        from .storage import PickleStore
        return PickleStore(dsn.removeprefix("pickle:///"))

    if dsn.startswith("sqlite:///"):
        # lazy import, sqlite3 is not needed for the other stores
        from .sqlite_store import SQLiteStore
        return SQLiteStore(dsn.removeprefix("sqlite:///"))

    raise ValueError(f"Unsupported store DSN: {dsn}")
