"""Tests for key to path resolution."""

import re

from pathlib import Path

from dirstore.paths import default_name, raw_name, resolve_path, safe_filename


def test_default_name_is_readable_plus_digest():
    assert default_name("a") == "a-70e5bc450953cae1"


def test_default_name_strips_unsafe_characters():
    assert default_name("user:42/profile") == "user42profile-4e96a4f56c2efb93"


def test_default_name_truncates_readable_part():
    name = default_name("abcdefghijklmnopqrstuvwxyz")
    readable, digest = name.rsplit("-", 1)
    assert readable == "abcdefghijklmnop"
    assert re.fullmatch(r"[0-9a-f]{16}", digest)


def test_default_name_is_stable():
    assert default_name("same key") == default_name("same key")


def test_default_name_differs_for_stripped_variants():
    assert default_name("a/b") != default_name("ab")
    assert default_name("a\x00b") != default_name("ab")


def test_raw_name_is_identity():
    assert raw_name("data/foo") == "data/foo"


def test_resolve_path_with_prefix_and_suffix(tmp_path):
    path = resolve_path(tmp_path, "foo", raw_name, prefix="data/", suffix=".json")
    assert path == tmp_path / "data" / "foo.json"


def test_resolve_path_never_sanitizes_prefix(tmp_path):
    path = resolve_path(tmp_path, "k", raw_name, prefix="a/b/c/")
    assert path.relative_to(tmp_path) == Path("a/b/c/k")


def test_resolve_path_sanitizes_name_and_suffix(tmp_path):
    path = resolve_path(tmp_path, "x", raw_name, suffix="/../../y")
    assert path.parent == tmp_path
    assert "/" not in path.name


def test_resolve_path_uses_default_namer(tmp_path):
    path = resolve_path(tmp_path, "a", suffix=".json")
    assert path == tmp_path / "a-70e5bc450953cae1.json"


def test_safe_filename_never_returns_directory_reference():
    for name in ("", ".", "..", "/", "\x00"):
        safe = safe_filename(name)
        assert safe not in ("", ".", "..")
        assert "/" not in safe


def test_safe_filename_drops_separators_and_nul():
    safe = safe_filename("a/b\\c\x00d.txt")
    assert "/" not in safe
    assert "\\" not in safe
    assert "\x00" not in safe
    assert safe.endswith(".txt")


def test_default_name_accepts_lone_surrogates():
    name = default_name("bad\ud800key")
    readable, digest = name.rsplit("-", 1)
    assert readable.startswith("bad")
    assert re.fullmatch(r"[0-9a-f]{16}", digest)
    assert default_name("bad\ud800key") != default_name("bad\udc00key")


def test_safe_filename_accepts_lone_surrogates():
    safe = safe_filename("bad\udcffkey.json")
    safe.encode("utf-8")
    assert safe.startswith("bad")
    assert safe.endswith("key.json")
