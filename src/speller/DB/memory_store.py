# speller/DB/memory_store.py
from __future__ import annotations
import copy
from typing import Optional

from .index import DeleteIndex

class MemoryStore:
    """
    In-process snapshot (useful for tests or ephemeral runs). save() takes a
    deep copy, so later inserts into the live index do not leak into it;
    load() hands out a fresh copy each time.
    """
    def __init__(self) -> None:
        self._snapshot: Optional[DeleteIndex] = None

    def save(self, index: DeleteIndex) -> None:
        self._snapshot = copy.deepcopy(index)

    def load(self) -> DeleteIndex:
        if self._snapshot is None:
            raise FileNotFoundError("memory:// store holds no snapshot")
        return copy.deepcopy(self._snapshot)

    def exists(self) -> bool:
        return self._snapshot is not None

    def close(self) -> None:
        self._snapshot = None
