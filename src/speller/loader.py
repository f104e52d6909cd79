from __future__ import annotations
import logging
import os
from typing import Iterable, Iterator, List

from .DB.index import DeleteIndex
from .config import ENCODING, GLOB_SUFFIX, PROGRESS_EVERY_FILES, PROGRESS_EVERY_LINES
from .models import LoadReport
from .normalize import parse_words

log = logging.getLogger(__name__)

# Progress logging (set SPELLER_VERBOSE=1 to enable)
def _verbose() -> bool:
    return os.environ.get("SPELLER_VERBOSE") == "1"

def _iter_corpus_files(roots: Iterable[str], report: LoadReport) -> Iterator[str]:
    """
    Yield corpus files. A root may be a single file (any extension) or a
    folder that is walked recursively for *.txt. Missing roots are logged
    and recorded in the report.
    """
    for root in roots:
        if os.path.isfile(root):
            yield root
            continue
        if not os.path.isdir(root):
            log.warning("File not found: %s", root)
            report.missing.append(root)
            continue
        found: List[str] = []
        for dirpath, _, filenames in os.walk(os.path.abspath(root)):
            for fn in filenames:
                if fn.lower().endswith(GLOB_SUFFIX):
                    found.append(os.path.join(dirpath, fn))
        # stable order for reproducible word indices
        found.sort()
        yield from found

def load_lines(index: DeleteIndex, lines: Iterable[str], report: LoadReport, language: str = "") -> None:
    """Tokenize lines into the index, counting into `report`."""
    verbose = _verbose()
    for line in lines:
        report.lines += 1
        for token in parse_words(line):
            report.tokens += 1
            if index.insert_word(token, language):
                report.new_words += 1
        if verbose and report.lines % PROGRESS_EVERY_LINES == 0:
            print(f"[loaded] lines={report.lines:,} words={index.word_count:,}")

def load_corpus(index: DeleteIndex, roots: Iterable[str], language: str = "") -> LoadReport:
    """
    Read every corpus file under `roots` line by line into `index`.

    Missing sources do not stop the load: they are reported and the index
    keeps whatever it already holds. A read error aborts the rest of that
    file only; its earlier lines stay inserted.
    """
    report = LoadReport()
    verbose = _verbose()
    for path in _iter_corpus_files(list(roots), report):
        log.info("Reading corpus file %s", path)
        try:
            with open(path, "r", encoding=ENCODING, errors="ignore") as f:
                load_lines(index, f, report, language)
        except OSError as exc:
            log.warning("Aborted reading %s: %s", path, exc)
            report.failed.append(path)
            continue
        report.files += 1
        if verbose and report.files % PROGRESS_EVERY_FILES == 0:
            print(f"[scanned] files={report.files:,}")

    if verbose:
        print(f"[done] files={report.files:,} lines={report.lines:,} "
              f"words={index.word_count:,} entries={len(index):,}")
    return report
