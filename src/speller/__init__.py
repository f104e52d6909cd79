"""
Symmetric-delete spelling correction.

A vocabulary is built from a text corpus; for every word, all strings
reachable by deleting up to `max_edit_distance` characters are indexed and
point back to the word. A lookup only has to generate the deletes of the
input term and probe the index, then refine each hit with the true
Damerau-Levenshtein distance. Suggestions are ranked by distance, then by
corpus frequency.

Main entry points:
    Engine: build/load/save a dictionary and run lookups
    DeleteIndex: the dictionary itself (vocabulary + delete entries)
    lookup(index, term, ...): the lookup engine on a bare DeleteIndex
    damerau_levenshtein(a, b): the edit distance used for refinement

Example Usage:
    from speller import Engine

    eng = Engine(max_edit_distance=2)
    eng.build(["/path/to/big.txt"])
    for s in eng.lookup("speling"):
        print(s.term, s.distance, s.count)
"""

# src/speller/__init__.py
from .DB.index import DeleteIndex, generate_deletes
from .distance import damerau_levenshtein
from .engine import Engine
from .models import DeleteOnly, LoadReport, SuggestItem, Verbosity, WordEntry
from .search import lookup, rank

__version__ = "1.0.0"
__all__ = [
    "Engine", "DeleteIndex", "generate_deletes", "damerau_levenshtein",
    "lookup", "rank", "Verbosity", "SuggestItem", "WordEntry", "DeleteOnly",
    "LoadReport",
]
