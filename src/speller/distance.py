"""
True Damerau-Levenshtein distance.

Unlike the optimal-string-alignment variant, a transposed pair may have
characters between the two halves (each of which is then deleted and
re-inserted), and no substring is edited more than once. This matters for
the lookup engine: the symmetric-delete candidates can collapse edits on
both sides, and only the unrestricted distance tells how many edits really
separate the two terms.
"""
from __future__ import annotations
from typing import Dict, List


def damerau_levenshtein(a: str, b: str) -> int:
    """
    Return the minimum number of insertions, deletions, substitutions and
    transpositions needed to turn `a` into `b`.

    The matrix has two extra guard rows/columns: row/column 0 is filled with
    a sentinel larger than any real distance so that the transposition term
    can never use a position before the start of either string.

    >>> damerau_levenshtein("bank", "bnak")
    1
    >>> damerau_levenshtein("bank", "kanb")
    2
    >>> damerau_levenshtein("ca", "abc")
    2
    """
    la, lb = len(a), len(b)
    inf = la + lb + 1
    H: List[List[int]] = [[0] * (lb + 2) for _ in range(la + 2)]
    H[0][0] = inf
    for i in range(la + 1):
        H[i + 1][1] = i
        H[i + 1][0] = inf
    for j in range(lb + 1):
        H[1][j + 1] = j
        H[0][j + 1] = inf

    # last row (1-based) of `a` in which each character was seen
    last_row: Dict[str, int] = {}

    for i in range(1, la + 1):
        ca = a[i - 1]
        last_match_col = 0
        for j in range(1, lb + 1):
            cb = b[j - 1]
            i1 = last_row.get(cb, 0)
            j1 = last_match_col
            if ca == cb:
                cost = 0
                last_match_col = j
            else:
                cost = 1
            H[i + 1][j + 1] = min(
                H[i][j] + cost,                                 # substitution / match
                H[i + 1][j] + 1,                                # insertion
                H[i][j + 1] + 1,                                # deletion
                H[i1][j1] + (i - i1 - 1) + 1 + (j - j1 - 1),    # transposition
            )
        last_row[ca] = i
    return H[la + 1][lb + 1]
