from __future__ import annotations
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..config import MAX_COUNT, MAX_EDIT_DISTANCE, MAX_VOCABULARY
from ..models import DeleteOnly, Entry, WordEntry
from ..normalize import parse_words

log = logging.getLogger(__name__)


def generate_deletes(word: str, max_depth: int) -> Set[str]:
    """
    All distinct strings reachable from `word` by deleting 1..max_depth
    characters (not necessarily contiguous). `word` itself is never included.
    Strings of length <= 1 are not expanded further.

    >>> sorted(generate_deletes("abc", 1))
    ['ab', 'ac', 'bc']
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")
    deletes: Set[str] = set()
    if max_depth > 0:
        _expand(word, 0, max_depth, deletes)
    return deletes


def _expand(word: str, depth: int, max_depth: int, deletes: Set[str]) -> None:
    depth += 1
    if len(word) <= 1:
        return
    for i in range(len(word)):
        d = word[:i] + word[i + 1:]
        if d not in deletes:
            deletes.add(d)
            if depth < max_depth:
                _expand(d, depth, max_depth, deletes)


class DeleteIndex:
    """
    Symmetric-delete dictionary.

    `words` is the vocabulary: append-only, a term's position is its word
    index and is never reused. Terms are stored without their language tag;
    the tag only namespaces the keys. `entries` maps a key (language tag + string)
    to either a WordEntry or a DeleteOnly value. A key can be a corpus word
    and a delete of some longer word at the same time.

    keep_all_suggestions=True disables the proximity rule so that
    exhaustive lookups (Verbosity.ALL_WITHIN_MAX) can reach every word.
    """

    def __init__(self, max_edit_distance: int = MAX_EDIT_DISTANCE,
                 keep_all_suggestions: bool = False) -> None:
        if max_edit_distance < 0:
            raise ValueError(f"max_edit_distance must be >= 0, got {max_edit_distance}")
        self.max_edit_distance = int(max_edit_distance)
        self.keep_all_suggestions = bool(keep_all_suggestions)
        self.words: List[str] = []
        self.entries: Dict[str, Entry] = {}
        self.longest_word_length = 0
        self._full_warned = False

    # ---- Build ----
    def insert_word(self, word: str, language: str = "") -> bool:
        """
        Count one occurrence of `word`. Returns True on its first occurrence,
        which is also the only time its deletes are generated.
        """
        key = language + word
        entry = self.entries.get(key)

        first = entry is None or isinstance(entry, DeleteOnly) or entry.count == 0
        if first and len(self.words) >= MAX_VOCABULARY:
            if not self._full_warned:
                log.warning("Vocabulary full (%d words); new words are ignored", len(self.words))
                self._full_warned = True
            return False

        if entry is None:
            item = WordEntry(count=1)
            self.entries[key] = item
        else:
            if isinstance(entry, DeleteOnly):
                # the delete existed before the word
                item = WordEntry(suggestions=[entry.index])
                self.entries[key] = item
            else:
                item = entry
            if item.count < MAX_COUNT:
                item.count += 1

        if item.count != 1:
            return False

        self.words.append(word)
        word_index = len(self.words) - 1
        if len(word) > self.longest_word_length:
            self.longest_word_length = len(word)

        for d in generate_deletes(word, self.max_edit_distance):
            dkey = language + d
            value = self.entries.get(dkey)
            if value is None:
                self.entries[dkey] = DeleteOnly(word_index)
            elif isinstance(value, DeleteOnly):
                promoted = WordEntry(suggestions=[value.index])
                self.entries[dkey] = promoted
                if word_index not in promoted.suggestions:
                    self._add_lowest_distance(promoted, word, word_index, d)
            elif word_index not in value.suggestions:
                self._add_lowest_distance(value, word, word_index, d)
        return True

    def _add_lowest_distance(self, item: WordEntry, word: str, word_index: int, delete: str) -> None:
        """Keep only the suggestion(s) whose length is closest to the delete's."""
        if self.keep_all_suggestions or not item.suggestions:
            item.suggestions.append(word_index)
            return
        # every kept suggestion has the same length, the first one stands for all
        current_gap = len(self.term(item.suggestions[0])) - len(delete)
        new_gap = len(word) - len(delete)
        if new_gap < current_gap:
            item.suggestions.clear()
            item.suggestions.append(word_index)
        elif new_gap == current_gap:
            item.suggestions.append(word_index)

    def load_corpus(self, lines: Iterable[str], language: str = "") -> int:
        """Tokenize every line and insert each token. Returns the number of tokens."""
        n = 0
        for line in lines:
            for token in parse_words(line):
                self.insert_word(token, language)
                n += 1
        return n

    # ---- Read ----
    def get(self, key: str) -> Optional[Entry]:
        return self.entries.get(key)

    def term(self, word_index: int) -> str:
        """Vocabulary term for a word index, without its language tag."""
        return self.words[word_index]

    def count(self, word: str, language: str = "") -> int:
        entry = self.entries.get(language + word)
        if isinstance(entry, WordEntry):
            return entry.count
        return 0

    @property
    def word_count(self) -> int:
        return len(self.words)

    def iter_entries(self) -> Iterator[Tuple[str, Entry]]:
        return iter(self.entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    # ---- Pickle ----
    def __getstate__(self):
        state = self.__dict__.copy()
        state["_full_warned"] = False
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
