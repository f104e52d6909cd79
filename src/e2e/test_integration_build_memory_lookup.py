from pathlib import Path
import pytest
from speller.engine import Engine
from speller.models import SuggestItem

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"
    root.mkdir()
    (root / "fox.txt").write_text(
        "The quick brown fox.\n"
        "The lazy dog!\n",
        encoding="utf-8",
    )
    return str(root)

@pytest.mark.e2e
def test_build_and_lookup(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine()
    try:
        report = eng.build(roots=[roots])
        assert report.ok
        assert report.files == 1 and report.lines == 2 and report.tokens == 7
        assert report.new_words == 6
        assert eng.lookup("teh") == [SuggestItem("the", 1, 2)]
        assert eng.correct("quikc") == ["quick"]
        assert eng.correct("  Brown ") == ["brown"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_build_from_lines_and_self_learning():
    eng = Engine(verbosity="all_min_distance")
    try:
        eng.build_from_lines(["the lazy dog"])
        assert eng.correct("dgo") == ["dog"]
        assert eng.add_word("dug") is True
        assert eng.add_word("Dug") is False
        # both one edit away from "dxg"; dug is now more frequent
        assert eng.correct("dxg") == ["dug", "dog"]
        with pytest.raises(ValueError):
            eng.add_word("   ")
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_lookup_before_build_fails():
    eng = Engine()
    with pytest.raises(RuntimeError):
        eng.lookup("anything")

@pytest.mark.e2e
def test_build_requires_roots():
    with pytest.raises(ValueError):
        Engine().build(roots=[])

@pytest.mark.e2e
def test_empty_query_returns_nothing(tmp_path: Path):
    eng = Engine()
    try:
        eng.build(roots=[_seed(tmp_path)])
        assert eng.lookup("") == []
        assert eng.lookup("   ") == []
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_stats(tmp_path: Path):
    eng = Engine(max_edit_distance=1)
    try:
        assert eng.stats()["words"] == 0
        eng.build(roots=[_seed(tmp_path)])
        st = eng.stats()
        assert st["words"] == 6
        assert st["longest_word_length"] == 5
        assert st["max_edit_distance"] == 1
        assert st["entries"] > st["words"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_exhaustive_lookup_reaches_every_word():
    eng = Engine(verbosity="all_within_max")
    try:
        eng.build_from_lines(["abcd abc"])
        assert eng.lookup("ab") == [SuggestItem("abc", 1, 1), SuggestItem("abcd", 2, 1)]
        assert eng.lookup("ab", max_distance=1) == [SuggestItem("abc", 1, 1)]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_exhaustive_override_needs_exhaustive_build():
    eng = Engine()
    try:
        eng.build_from_lines(["abcd abc"])
        # the proximity rule kept only "abc" under "ab"
        with pytest.raises(ValueError):
            eng.lookup("ab", verbosity="all_within_max")
        assert eng.lookup("ab", verbosity="all_min_distance") == [SuggestItem("abc", 1, 1)]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_exhaustive_engine_refuses_pruned_snapshot(tmp_path: Path):
    dsn = f"pickle:///{tmp_path / 'top.pkl'}"
    eng = Engine()
    try:
        eng.build_from_lines(["abcd abc"])
        eng.save(dsn)
    finally:
        eng.shutdown()

    eng = Engine(verbosity="all_within_max")
    try:
        with pytest.raises(ValueError):
            eng.load(dsn)
        with pytest.raises(RuntimeError):
            eng.lookup("ab")
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_shutdown_resets_engine(tmp_path: Path):
    eng = Engine()
    eng.build(roots=[_seed(tmp_path)])
    eng.shutdown()
    assert eng.stats()["words"] == 0
    with pytest.raises(RuntimeError):
        eng.lookup("teh")

@pytest.mark.e2e
def test_concurrent_inserts_and_lookups():
    from concurrent.futures import ThreadPoolExecutor

    eng = Engine()
    try:
        eng.build_from_lines(["the lazy dog"])
        words = [f"wor{c}{d}" for c in "abcdefgh" for d in "ijklmnop"]
        with ThreadPoolExecutor(max_workers=4) as pool:
            adds = [pool.submit(eng.add_word, w) for w in words]
            reads = [pool.submit(eng.lookup, "teh") for _ in range(64)]
            assert all(f.result() is True for f in adds)
            assert all(f.result() == [SuggestItem("the", 1, 1)] for f in reads)
        assert eng.stats()["words"] == 3 + len(words)
        assert eng.correct("woraj") == ["woraj"]
    finally:
        eng.shutdown()
