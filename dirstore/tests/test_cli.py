"""Tests for the dirstore command line."""

import json

from dirstore.__main__ import main


def test_set_then_get(tmp_path, capsys):
    assert main(["-d", str(tmp_path), "set", "k", "hello"]) == 0
    assert main(["-d", str(tmp_path), "get", "k"]) == 0
    assert capsys.readouterr().out.strip() == "hello"


def test_get_miss_exits_nonzero(tmp_path, capsys):
    assert main(["-d", str(tmp_path), "get", "missing"]) == 1
    assert capsys.readouterr().out == ""


def test_expired_ttl(tmp_path):
    assert main(["-d", str(tmp_path), "set", "k", "v", "--ttl", "-86400000"]) == 0
    assert main(["-d", str(tmp_path), "has", "k"]) == 1


def test_raw_names_and_path(tmp_path, capsys):
    main(["-d", str(tmp_path), "--raw-names", "--prefix", "data/", "path", "foo"])
    assert capsys.readouterr().out.strip() == str(tmp_path / "data" / "foo.json")


def test_delete_and_clear(tmp_path):
    main(["-d", str(tmp_path), "set", "a", "1"])
    main(["-d", str(tmp_path), "set", "b", "2"])
    assert main(["-d", str(tmp_path), "delete", "a"]) == 0
    assert main(["-d", str(tmp_path), "has", "a"]) == 1
    assert main(["-d", str(tmp_path), "clear"]) == 0
    assert main(["-d", str(tmp_path), "has", "b"]) == 1


def test_config_file(tmp_path, capsys):
    config_file = tmp_path / "store.json"
    config_file.write_text(json.dumps({"directory": "cache", "filename": "raw", "suffix": ".txt"}))
    assert main(["--config", str(config_file), "set", "k", "v"]) == 0
    assert (tmp_path / "cache" / "k.txt").read_text() == "v"
