import io
import json
from pathlib import Path

import pytest

from light_map.__main__ import main


@pytest.fixture
def pairs_file(tmp_path: Path) -> Path:
    path = tmp_path / "pairs.json"
    _ = path.write_text(json.dumps([["b", 1], ["a", [["x", "banana"]]], ["c", "apple"]]), encoding="utf-8")
    return path


def test_main_prints_compact_json(pairs_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main([str(pairs_file)])
    assert capsys.readouterr().out == '[["b",1],["a",[["x","banana"]]],["c","apple"]]\n'


def test_main_sort_keys(pairs_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main([str(pairs_file), "--sort-keys"])
    assert json.loads(capsys.readouterr().out) == [["a", [["x", "banana"]]], ["b", 1], ["c", "apple"]]


def test_main_index_of(pairs_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main([str(pairs_file), "--index-of", "c"])
    assert capsys.readouterr().out == "2\n"


def test_main_replace_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO('[["{who}", "world"]]'))
    main(["--replace", "hello {who}"])
    assert capsys.readouterr().out == "hello world\n"


def test_main_rejects_non_pair_documents(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "bad.json"
    _ = path.write_text('{"a": 1}', encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        main([str(path)])
    assert exc_info.value.code == 2
    assert "input must be a JSON array of [key, value] pairs" in capsys.readouterr().err


def test_main_rejects_invalid_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "bad.json"
    _ = path.write_text("[", encoding="utf-8")
    with pytest.raises(SystemExit):
        main([str(path)])
    assert "invalid JSON input" in capsys.readouterr().err


def test_main_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip()


def test_main_reports_unreadable_path(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path / "missing.json")])
    assert exc_info.value.code == 2
    assert "cannot read input" in capsys.readouterr().err
