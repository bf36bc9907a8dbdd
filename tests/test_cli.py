import pytest
from flask import Flask

from icstools import cli


def test_parser_defaults():
    args = cli.build_parser().parse_args(["-c", "config.toml"])
    assert args.config_file == "config.toml"
    assert args.address == "127.0.0.1"
    assert args.port == 8000
    assert not args.verbose


def test_parser_requires_config_file():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_bad_config_exits_with_error(tmp_path):
    assert cli.main(["-c", str(tmp_path / "missing.toml")]) == 1


def test_main_runs_server(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text('[calendars]\nwork = "https://example.com/work.ics"\n\n[config]\nmode = "ignore-matching"\nignore_if_summary_is = "x"\n')

    runs = []
    monkeypatch.setattr(Flask, "run", lambda self, host, port: runs.append((host, port)))

    assert cli.main(["-c", str(path), "-a", "0.0.0.0", "-p", "9000"]) == 0
    assert runs == [("0.0.0.0", 9000)]
