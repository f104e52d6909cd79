from __future__ import annotations
import os
import pickle
from typing import Any

from .index import DeleteIndex

def save_index(index: Any, path: str) -> None:
    """Pickle to a temp file, then atomically replace `path`."""
    tmp = f"{path}.tmp"
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(tmp, "wb") as f:
        pickle.dump(index, f, protocol=pickle.HIGHEST_PROTOCOL)
    os.replace(tmp, path)

def load_index(path: str) -> Any:
    with open(path, "rb") as f:
        return pickle.load(f)


class PickleStore:
    """Whole-index pickle snapshot. Only load files you wrote yourself."""
    def __init__(self, path: str) -> None:
        self.path = path

    def save(self, index: DeleteIndex) -> None:
        save_index(index, self.path)

    def load(self) -> DeleteIndex:
        if not self.exists():
            raise FileNotFoundError(self.path)
        index = load_index(self.path)
        if not isinstance(index, DeleteIndex):
            raise ValueError(f"{self.path} does not hold a DeleteIndex")
        return index

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def close(self) -> None:
        pass
