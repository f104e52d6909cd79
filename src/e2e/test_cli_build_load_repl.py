import io
import json
import sys
from pathlib import Path
import pytest
from speller_frontend.__main__ import main

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "fox.txt").write_text(
        "the quick brown fox jumps over the lazy dog\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_cli_build_and_single_query(tmp_path: Path, capsys):
    assert main(["--build", "--roots", _seed(tmp_path), "--q", "teh"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Creating dictionary ..."
    assert out[1] == "Dictionary created: 8 words"
    assert out[2] == "Suggestion: the"

@pytest.mark.e2e
def test_cli_reports_missing_file(tmp_path: Path, capsys):
    missing = str(tmp_path / "gone.txt")
    assert main(["--build", "--roots", _seed(tmp_path), missing, "--q", "zzzzzz"]) == 0
    out = capsys.readouterr().out
    assert f"File not found: {missing}" in out
    assert "(no suggestions)" in out

@pytest.mark.e2e
def test_cli_repl_stops_on_empty_line(tmp_path: Path, capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("teh\nquikc\n\nbrown\n"))
    assert main(["--build", "--roots", _seed(tmp_path), "--repl"]) == 0
    out = capsys.readouterr().out
    assert "Type a word (empty line to exit)." in out
    assert "Suggestion: the" in out
    assert "Suggestion: quick" in out
    assert "Suggestion: brown" not in out

@pytest.mark.e2e
def test_cli_repl_ends_on_eof(tmp_path: Path, capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("lazzy\n"))
    assert main(["--build", "--roots", _seed(tmp_path), "--repl"]) == 0
    assert "Suggestion: lazy" in capsys.readouterr().out

@pytest.mark.e2e
def test_cli_load_saved_dictionary(tmp_path: Path, capsys):
    dsn = f"sqlite:///{tmp_path / 'dictionary.sqlite'}"
    assert main(["--build", "--roots", _seed(tmp_path), "--db", dsn]) == 0
    capsys.readouterr()

    assert main(["--load", "--db", dsn, "--q", "dgo", "--json"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows == [{"term": "dog", "distance": 1, "count": 1}]

    assert main(["--load", "--db", dsn, "--q", "teh", "--details"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].split() == ["#", "Dist", "Count", "Term"]
    assert out[1].split() == ["1", "1", "2", "the"]

@pytest.mark.e2e
def test_cli_load_missing_dictionary(tmp_path: Path, capsys):
    dsn = f"pickle:///{tmp_path / 'none.pkl'}"
    assert main(["--load", "--db", dsn, "--q", "teh"]) == 1
    assert "error:" in capsys.readouterr().err

def test_cli_argument_errors(tmp_path: Path):
    with pytest.raises(SystemExit):
        main(["--build"])
    with pytest.raises(SystemExit):
        main(["--load"])
    with pytest.raises(SystemExit):
        main(["--build", "--load", "--roots", str(tmp_path)])
    with pytest.raises(SystemExit):
        main(["--build", "--roots", str(tmp_path), "-d", "-1"])

@pytest.mark.e2e
def test_cli_load_pruned_dictionary_as_exhaustive(tmp_path: Path, capsys):
    dsn = f"sqlite:///{tmp_path / 'dictionary.sqlite'}"
    assert main(["--build", "--roots", _seed(tmp_path), "--db", dsn]) == 0
    capsys.readouterr()

    assert main(["--load", "--db", dsn, "--verbosity", "all_within_max", "--q", "teh"]) == 1
    assert "all_within_max" in capsys.readouterr().err

@pytest.mark.e2e
def test_cli_exhaustive_build(tmp_path: Path, capsys):
    assert main(["--build", "--roots", _seed(tmp_path), "--verbosity", "all_within_max",
                 "--q", "dgo", "--json"]) == 0
    out = capsys.readouterr().out
    rows = json.loads(out[out.index("["):])
    assert rows[0] == {"term": "dog", "distance": 1, "count": 1}
    assert all(r["distance"] <= 2 for r in rows)
