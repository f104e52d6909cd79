from __future__ import annotations
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Set, Union

from .DB.index import DeleteIndex
from .distance import damerau_levenshtein
from .models import DeleteOnly, SuggestItem, Verbosity, WordEntry


def rank(suggestions: Iterable[SuggestItem]) -> List[SuggestItem]:
    """Ascending distance, then descending frequency (term as a stable last key)."""
    return sorted(suggestions, key=lambda s: (s.distance, -s.count, s.term))


def _trimmed_distance(a: str, b: str) -> int:
    """Damerau-Levenshtein on a and b with their common prefix and suffix cut off."""
    la, lb = len(a), len(b)
    ii = 0
    while ii < la and ii < lb and a[ii] == b[ii]:
        ii += 1
    jj = 0
    while jj < la - ii and jj < lb - ii and a[la - jj - 1] == b[lb - jj - 1]:
        jj += 1
    if ii or jj:
        return damerau_levenshtein(a[ii:la - jj], b[ii:lb - jj])
    return damerau_levenshtein(a, b)


def _distance(term: str, candidate: str, suggestion: str) -> int:
    # candidate is a delete of both term and suggestion
    if suggestion == term:
        return 0
    if len(suggestion) == len(candidate):
        return len(term) - len(candidate)
    if len(term) == len(candidate):
        return len(suggestion) - len(candidate)
    return _trimmed_distance(suggestion, term)


class _Suggestions:
    """Accumulator that keeps only the best distance tier unless exhaustive."""

    def __init__(self, exhaustive: bool) -> None:
        self.exhaustive = exhaustive
        self.items: Dict[str, SuggestItem] = {}
        self.best: Optional[int] = None

    def add(self, term: str, distance: int, count: int) -> None:
        if not self.exhaustive and self.best is not None and distance < self.best:
            self.items = {t: s for t, s in self.items.items() if s.distance <= distance}
        self.items[term] = SuggestItem(term=term, distance=distance, count=count)
        if self.best is None or distance < self.best:
            self.best = distance

    def worse_than_best(self, distance: int) -> bool:
        return not self.exhaustive and self.best is not None and distance > self.best


def lookup(index: DeleteIndex,
           term: str,
           language: str = "",
           max_distance: Optional[int] = None,
           verbosity: Union[Verbosity, int, str] = Verbosity.TOP) -> List[SuggestItem]:
    """
    Find vocabulary terms within `max_distance` edits of `term`.

    Breadth-first search over the deletes of `term`: every candidate is
    probed in the dictionary; a hit is either a corpus word (reachable from
    `term` by deletes only) or a delete key pointing at words that share
    that delete. Those words get their true Damerau-Levenshtein distance.
    Unless verbosity is ALL_WITHIN_MAX, the search stops as soon as no
    shorter candidate can beat the best distance found.

    Returns the ranked suggestions; an empty list when nothing matches.
    """
    verbosity = Verbosity.parse(verbosity)
    if max_distance is None:
        max_distance = index.max_edit_distance
    if max_distance < 0:
        raise ValueError(f"max_distance must be >= 0, got {max_distance}")
    if max_distance > index.max_edit_distance:
        raise ValueError(
            f"max_distance {max_distance} exceeds the dictionary's edit distance "
            f"{index.max_edit_distance}; rebuild with a larger max_edit_distance"
        )

    term_len = len(term)
    if term_len - max_distance > index.longest_word_length:
        return []

    exhaustive = verbosity == Verbosity.ALL_WITHIN_MAX
    found = _Suggestions(exhaustive)
    considered: Set[str] = set()        # suggestion terms already scored
    queued: Set[str] = {term}
    candidates: Deque[str] = deque([term])

    while candidates:
        candidate = candidates.popleft()
        gap = term_len - len(candidate)
        if found.worse_than_best(gap):
            break

        entry = index.get(language + candidate)
        if entry is not None:
            if isinstance(entry, DeleteOnly):
                count, suggestion_ids = 0, (entry.index,)
            else:
                count, suggestion_ids = entry.count, entry.suggestions

            # count > 0: the candidate is a corpus word, not only a delete
            if count > 0 and candidate not in considered:
                considered.add(candidate)
                found.add(candidate, gap, count)
                if gap == 0 and not exhaustive:
                    break

            for word_index in suggestion_ids:
                suggestion = index.term(word_index)
                if suggestion in considered:
                    continue
                considered.add(suggestion)
                distance = _distance(term, candidate, suggestion)
                if distance > max_distance or found.worse_than_best(distance):
                    continue
                word = index.get(language + suggestion)
                if isinstance(word, WordEntry) and word.count > 0:
                    found.add(suggestion, distance, word.count)

        # /* ~~~ expand the frontier by one more delete ~~~ */
        if gap < max_distance:
            if not exhaustive and found.best is not None and gap >= found.best:
                continue
            for i in range(len(candidate)):
                d = candidate[:i] + candidate[i + 1:]
                if d not in queued:
                    queued.add(d)
                    candidates.append(d)

    return select(rank(found.items.values()), verbosity)


def select(ranked: Sequence[SuggestItem], verbosity: Union[Verbosity, int, str]) -> List[SuggestItem]:
    """Cut a ranked list down to what `verbosity` asks for."""
    verbosity = Verbosity.parse(verbosity)
    if not ranked:
        return []
    if verbosity == Verbosity.TOP:
        return [ranked[0]]
    if verbosity == Verbosity.ALL_MIN_DISTANCE:
        best = ranked[0].distance
        return [s for s in ranked if s.distance == best]
    return list(ranked)
