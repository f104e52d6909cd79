from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Union


class Verbosity(IntEnum):
    """How many ranked suggestions a lookup returns."""
    TOP = 0                 # the single best suggestion
    ALL_MIN_DISTANCE = 1    # every suggestion tied at the smallest distance found
    ALL_WITHIN_MAX = 2      # every suggestion within the budget (no early termination)

    @classmethod
    def parse(cls, value: Union["Verbosity", int, str]) -> "Verbosity":
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"unknown verbosity: {value!r}") from None
        key = str(value).strip().lower()
        if key.isdigit():
            return cls.parse(int(key))
        try:
            return _VERBOSITY_NAMES[key]
        except KeyError:
            raise ValueError(f"unknown verbosity: {value!r}") from None


_VERBOSITY_NAMES = {
    "top": Verbosity.TOP,
    "all_min_distance": Verbosity.ALL_MIN_DISTANCE,
    "closest": Verbosity.ALL_MIN_DISTANCE,
    "all_within_max": Verbosity.ALL_WITHIN_MAX,
    "all": Verbosity.ALL_WITHIN_MAX,
}


@dataclass(frozen=True, slots=True)
class DeleteOnly:
    """
    Dictionary value for a delete string produced by exactly one vocabulary
    word (the vast majority of keys). Holds that word's index.
    """
    index: int


@dataclass(slots=True)
class WordEntry:
    """
    Dictionary value for a corpus word, or for a delete string with more
    than one originating word (or both at once).

    Attributes
    ----------
    count : int
        Corpus frequency of the key itself. 0 means the key is only a
        delete of other words; it is never decremented and saturates at
        config.MAX_COUNT.
    suggestions : List[int]
        Word indices of the vocabulary terms that produced this key by
        deletion, filtered by the proximity rule.
    """
    count: int = 0
    suggestions: List[int] = field(default_factory=list)


Entry = Union[DeleteOnly, WordEntry]


@dataclass(frozen=True, slots=True)
class SuggestItem:
    term: str
    distance: int     # Damerau-Levenshtein distance to the input term
    count: int        # corpus frequency of term


@dataclass
class LoadReport:
    """What a corpus load did, including the sources it could not use."""
    files: int = 0
    lines: int = 0
    tokens: int = 0
    new_words: int = 0
    missing: List[str] = field(default_factory=list)   # roots that do not exist
    failed: List[str] = field(default_factory=list)    # files aborted by a read error

    @property
    def ok(self) -> bool:
        return not self.missing and not self.failed
