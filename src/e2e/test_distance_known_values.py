import pytest

from speller.distance import damerau_levenshtein


@pytest.mark.parametrize("a,b,expected", [
    ("bank", "bnak", 1),     # adjacent transposition
    ("bank", "bink", 1),     # substitution
    ("bank", "kanb", 2),
    ("ba", "ab", 1),
    ("ca", "abc", 2),        # transposition with an insertion in between
    ("kitten", "sitting", 3),
    ("", "abc", 3),
    ("abc", "", 3),
    ("", "", 0),
    ("quick", "quikc", 1),
])
def test_known_values(a, b, expected):
    assert damerau_levenshtein(a, b) == expected


@pytest.mark.parametrize("a,b", [
    ("bank", "kanb"), ("ca", "abc"), ("spelling", "speling"),
    ("the", "teh"), ("naïve", "naive"), ("", "x"), ("abcdef", "badcfe"),
])
def test_symmetry(a, b):
    assert damerau_levenshtein(a, b) == damerau_levenshtein(b, a)


@pytest.mark.parametrize("s", ["", "a", "hello", "mississippi", "日本語"])
def test_identity_is_zero(s):
    assert damerau_levenshtein(s, s) == 0


def test_zero_only_for_equal_strings():
    assert damerau_levenshtein("abc", "abd") > 0
    assert damerau_levenshtein("abc", "abcc") > 0
    assert damerau_levenshtein("a", "A") > 0


def test_bounded_by_longer_length():
    for a, b in [("abc", "xyz"), ("short", "muchlonger"), ("", "four")]:
        assert damerau_levenshtein(a, b) <= max(len(a), len(b))
