import json

from catacomb import cli


def test_cli_json_output(capsys, monkeypatch):
    monkeypatch.delenv("CATACOMB_SEED", raising=False)
    monkeypatch.setenv("CATACOMB_LEVEL_SIZE", "120")
    rc = cli.main(["--level", "2", "--seed", "42"])
    assert rc == cli.EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["level"] == 2
    assert len(data["rooms"]) == 3
    assert data["hero"] is not None
    assert data["width"] == 120


def test_cli_ascii_is_reproducible(capsys, monkeypatch):
    monkeypatch.setenv("CATACOMB_LEVEL_SIZE", "120")
    assert cli.main(["--level", "1", "--seed", "abc", "--format", "ascii"]) == 0
    first = capsys.readouterr().out
    assert cli.main(["--level", "1", "--seed", "abc", "--format", "ascii"]) == 0
    second = capsys.readouterr().out
    assert first == second
    assert "@" in first


def test_cli_reports_missing_layout(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("CATACOMB_LEVEL_SIZE", raising=False)
    p = tmp_path / "small.yaml"
    p.write_text("level_size: 20\nlayout:\n  max_attempts: 20\n", encoding="utf-8")
    rc = cli.main(["--level", "9", "--settings", str(p)])
    assert rc == cli.EXIT_NO_LAYOUT
    assert capsys.readouterr().out == ""


def test_cli_rejects_bad_settings(tmp_path, monkeypatch):
    monkeypatch.delenv("CATACOMB_LEVEL_SIZE", raising=False)
    p = tmp_path / "bad.yaml"
    p.write_text("boss_interval: 0\n", encoding="utf-8")
    assert cli.main(["--level", "1", "--settings", str(p)]) == cli.EXIT_ERROR


def test_cli_accepts_negative_seed(capsys, monkeypatch):
    monkeypatch.setenv("CATACOMB_LEVEL_SIZE", "120")
    assert cli.main(["--level", "1", "--seed", "-7", "--format", "ascii"]) == cli.EXIT_OK
    assert "@" in capsys.readouterr().out
