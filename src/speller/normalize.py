from __future__ import annotations
import re
import unicodedata
from typing import List

# Letters only: \w minus digits and underscore. Unicode-aware, so Cyrillic,
# Greek, Han etc. are tokenized the same way as Latin text.
_WORD_RE = re.compile(r"[^\W\d_]+")

def _nfc(text: str) -> str:
    # composed and decomposed accents must produce the same keys
    return unicodedata.normalize("NFC", text)

def normalize_term(text: str) -> str:
    """
    Lower-case and trim a query term. Inner whitespace runs collapse to one
    space, so phrases stay valid terms.
    """
    return _nfc(" ".join(text.split())).lower()

def parse_words(text: str) -> List[str]:
    """
    Split a line of corpus text into lower-cased words.
    Digits and underscores separate words; so does any punctuation or space.
    """
    return _WORD_RE.findall(_nfc(text).lower())
