"""Module-level API for the spelling corrector (one shared Engine)."""
from __future__ import annotations
import time
from speller import config as CFG
from speller.DB.api import make_store
from speller.engine import Engine
from speller.models import SuggestItem

_engine: Engine | None = None

def initialize(paths: list[str],
               db: str | None = None,
               rebuild: bool = False,
               verbose: bool = False,
               max_edit_distance: int = CFG.MAX_EDIT_DISTANCE,
               verbosity: str = CFG.VERBOSITY,
               language: str = CFG.LANGUAGE_TAG) -> Engine:
    """
    Init modes:
      1) Fast start: db names a saved dictionary that exists and rebuild is
         False -> load it.
      2) Otherwise build from the corpus paths, then save to db if given.
    """
    global _engine
    t0 = time.perf_counter()
    eng = Engine(max_edit_distance=max_edit_distance, verbosity=verbosity, language=language)

    if db and not rebuild and _has_snapshot(db):
        if verbose:
            print(f"[load] restoring dictionary from {db}")
        eng.load(db, verbose=verbose)
    else:
        if verbose:
            print(f"[build] reading corpus: {paths}")
        report = eng.build(paths, db_dsn=db, verbose=verbose)
        for path in report.missing:
            print(f"File not found: {path}")

    _engine = eng
    if verbose:
        print(f"[ready] init complete in {time.perf_counter() - t0:.2f}s")
    return eng

def _has_snapshot(dsn: str) -> bool:
    store = make_store(dsn)
    try:
        return store.exists()
    finally:
        store.close()

def correct(term: str) -> list[SuggestItem]:
    """Return ranked suggestions for one term (list[SuggestItem])."""
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call initialize(...) first.")
    return _engine.lookup(term)
