# speller/engine.py
from __future__ import annotations

import os
import logging
import threading
from typing import Iterable, List, Optional, Union

from . import config as CFG
from .DB.api import IndexStore, make_store
from .DB.index import DeleteIndex
from .loader import load_corpus, load_lines
from .models import LoadReport, SuggestItem, Verbosity
from .normalize import normalize_term
from .search import lookup

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the symmetric-delete dictionary (DeleteIndex),
      - corpus loading (loader.load_corpus),
      - the lookup pipeline (search.lookup),
      - snapshot stores (DB.api.make_store).

    Public API (used by CLI/Flask):
      * build(roots, ...):    corpus -> dictionary -> (optional) persist
      * load(dsn):            restore a saved dictionary
      * save(dsn):            persist the current dictionary
      * add_word(word):       self-learning insert between queries
      * lookup(term, ...):    ranked SuggestItems
      * correct(term):        suggested terms only
      * shutdown():           close underlying resources

    One lock serializes mutation and lookups: inserts rewrite suggestion
    lists in place, so a lookup must never run during one.

    Store DSNs (via speller.DB.api.make_store):
      - "sqlite:///path/to/dictionary.sqlite"
      - "pickle:///path/to/dictionary.pkl"
      - "memory://"
    """

    # ------------- lifecycle -------------

    def __init__(self,
                 max_edit_distance: int = CFG.MAX_EDIT_DISTANCE,
                 verbosity: Union[Verbosity, int, str] = CFG.VERBOSITY,
                 language: str = CFG.LANGUAGE_TAG) -> None:
        self.max_edit_distance = int(max_edit_distance)
        self.verbosity = Verbosity.parse(verbosity)
        self.language = language
        self.index: Optional[DeleteIndex] = None
        self._store: Optional[IndexStore] = None
        self._store_dsn: Optional[str] = None
        self._lock = threading.RLock()

    def _new_index(self) -> DeleteIndex:
        # exhaustive lookups need every suggestion, so the proximity rule is off for them
        return DeleteIndex(
            max_edit_distance=self.max_edit_distance,
            keep_all_suggestions=self.verbosity == Verbosity.ALL_WITHIN_MAX,
        )

    # /* ~~~ Build a dictionary from corpus files and optionally persist it ~~~ */
    def build(
        self,
        roots: Iterable[str],
        *,
        db_dsn: Optional[str] = None,          # e.g. "sqlite:///./dictionary.sqlite"; None -> no persistence
        verbose: bool = False,
    ) -> LoadReport:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["SPELLER_VERBOSE"] = "1"

        roots = list(roots)
        if not roots:
            raise ValueError("build(): at least one corpus file or folder is required")

        with self._lock:
            index = self.index if self.index is not None else self._new_index()
            log.info("Loading corpus from %s", roots)
            report = load_corpus(index, roots, language=self.language)
            if report.missing:
                log.warning("Missing corpus sources: %s", report.missing)
            self.index = index
            log.info("Dictionary built: words=%d entries=%d longest=%d",
                     index.word_count, len(index), index.longest_word_length)

            if db_dsn:
                self.save(db_dsn)
        return report

    # /* ~~~ Build from in-memory lines (no files involved) ~~~ */
    def build_from_lines(self, lines: Iterable[str]) -> LoadReport:
        report = LoadReport()
        with self._lock:
            if self.index is None:
                self.index = self._new_index()
            load_lines(self.index, lines, report, self.language)
        return report

    # /* ~~~ Restore a saved dictionary ~~~ */
    def load(self, db_dsn: str, *, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["SPELLER_VERBOSE"] = "1"

        with self._lock:
            store = self._open_store(db_dsn)
            if not store.exists():
                raise FileNotFoundError(f"no saved dictionary at {db_dsn}")
            log.info("Loading dictionary from %s", db_dsn)
            index = store.load()
            self._check_exhaustive(index, self.verbosity)
            self.index = index
            # a snapshot fixes the depth its deletes were generated with
            self.max_edit_distance = index.max_edit_distance
        log.info("Engine load() complete: words=%d entries=%d", index.word_count, len(index))

    def save(self, db_dsn: Optional[str] = None) -> None:
        with self._lock:
            index = self._require_index()
            store = self._open_store(db_dsn or CFG.DEFAULT_DSN)
            log.info("Saving dictionary to %s", db_dsn or CFG.DEFAULT_DSN)
            store.save(index)

    # ------------- update -------------

    def add_word(self, word: str) -> bool:
        """Insert one occurrence of `word` (a phrase is fine). True if it is new."""
        term = normalize_term(word)
        if not term:
            raise ValueError("add_word(): empty word")
        with self._lock:
            if self.index is None:
                self.index = self._new_index()
            return self.index.insert_word(term, self.language)

    # ------------- query -------------

    # /* ~~~ Run a lookup and return ranked suggestions ~~~ */
    def lookup(self,
               term: str,
               *,
               max_distance: Optional[int] = None,
               verbosity: Union[Verbosity, int, str, None] = None) -> List[SuggestItem]:
        mode = self.verbosity if verbosity is None else Verbosity.parse(verbosity)
        q = normalize_term(term)
        with self._lock:
            index = self._require_index()
            if not q:
                return []
            self._check_exhaustive(index, mode)
            return lookup(
                index, q,
                language=self.language,
                max_distance=self.max_edit_distance if max_distance is None else max_distance,
                verbosity=mode,
            )

    def correct(self, term: str, **kwargs) -> List[str]:
        return [s.term for s in self.lookup(term, **kwargs)]

    def stats(self) -> dict:
        with self._lock:
            index = self.index
            if index is None:
                return {"words": 0, "entries": 0, "longest_word_length": 0,
                        "max_edit_distance": self.max_edit_distance}
            return {
                "words": index.word_count,
                "entries": len(index),
                "longest_word_length": index.longest_word_length,
                "max_edit_distance": index.max_edit_distance,
            }

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (DB handles, etc.) ~~~ */
    def shutdown(self) -> None:
        with self._lock:
            try:
                if self._store:
                    self._store.close()
            finally:
                self._store = None
                self._store_dsn = None
                self.index = None
                log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require_index(self) -> DeleteIndex:
        if self.index is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return self.index

    @staticmethod
    def _check_exhaustive(index: DeleteIndex, verbosity: Verbosity) -> None:
        # the proximity rule drops suggestions an exhaustive lookup must reach
        if verbosity == Verbosity.ALL_WITHIN_MAX and not index.keep_all_suggestions:
            raise ValueError(
                "all_within_max needs a dictionary built with verbosity=all_within_max; "
                "this one keeps only the closest suggestions per delete"
            )

    def _open_store(self, dsn: str) -> IndexStore:
        # reuse the open store so a memory:// snapshot survives save() -> load()
        if self._store is not None and self._store_dsn == dsn:
            return self._store
        if self._store is not None:
            self._store.close()
        self._store = make_store(dsn)
        self._store_dsn = dsn
        return self._store
