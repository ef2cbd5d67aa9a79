import sys

import pytest

from contextpack import cli


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["contextpack", *args])
    cli.main()


@pytest.fixture
def notes(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("The launch moved to Friday. Marketing needs the deck by Wednesday.")
    return path


def test_ingest_then_context(monkeypatch, capsys, tmp_path, notes):
    db = str(tmp_path / "cli.db")

    with pytest.raises(SystemExit) as exit_info:
        run_cli(monkeypatch, "--db", db, "ingest", str(notes))
    assert exit_info.value.code == 0

    run_cli(monkeypatch, "--db", db, "context", "--max-total-tokens", "8000")
    out = capsys.readouterr().out
    assert '<document name="notes.txt" type="text"' in out
    assert "The launch moved to Friday." in out


def test_list_and_info(monkeypatch, capsys, tmp_path, notes):
    db = str(tmp_path / "cli.db")
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "--db", db, "ingest", str(notes))
    capsys.readouterr()

    run_cli(monkeypatch, "--db", db, "list")
    listing = capsys.readouterr().out
    assert "notes.txt" in listing
    assert "tokens" in listing

    run_cli(monkeypatch, "--db", db, "info")
    summary = capsys.readouterr().out
    assert "Documents: 1" in summary
    assert "Types: text" in summary


def test_ingest_with_only_failures_exits_nonzero(monkeypatch, tmp_path):
    bad = tmp_path / "image.png"
    bad.write_bytes(b"\x89PNG\r\n\x1a\n")

    with pytest.raises(SystemExit) as exit_info:
        run_cli(monkeypatch, "--db", str(tmp_path / "cli.db"), "ingest", str(bad))
    assert exit_info.value.code == 1


def test_missing_store_exits(monkeypatch, tmp_path):
    with pytest.raises(SystemExit) as exit_info:
        run_cli(monkeypatch, "--db", str(tmp_path / "absent.db"), "list")
    assert exit_info.value.code == 1


def test_delete(monkeypatch, capsys, tmp_path, notes):
    db = str(tmp_path / "cli.db")
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "--db", db, "ingest", str(notes))

    run_cli(monkeypatch, "--db", db, "delete", "1")
    capsys.readouterr()
    run_cli(monkeypatch, "--db", db, "list")

    assert "No documents stored" in capsys.readouterr().out
