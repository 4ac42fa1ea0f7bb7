"""Tests for single-level directory enumeration."""

import argparse
import os
from datetime import datetime

import pytest

from lsgit import core
from lsgit.core import ListingSettings, calculate_dir_size, list_entries
from lsgit.utils import format_size


def names(entries):
    return [e.name for e in entries]


def test_list_entries_directories_first(listing_dir):
    entries = list_entries(listing_dir, show_hidden=False)

    assert names(entries) == ["b", "a.txt"]
    assert entries[0].is_dir
    assert entries[0].size_display == "-"
    assert entries[1].size_display == "10 B"


def test_list_entries_show_hidden(listing_dir):
    entries = list_entries(listing_dir, show_hidden=True)

    assert names(entries) == ["b", ".hidden", "a.txt"]


def test_list_entries_case_sensitive_order(tmp_path):
    for name in ["beta", "Alpha", "alpha", "_under"]:
        (tmp_path / name).write_text("x")
    (tmp_path / "Zdir").mkdir()
    (tmp_path / "adir").mkdir()

    entries = list_entries(tmp_path, show_hidden=False)

    assert names(entries) == ["Zdir", "adir", "Alpha", "_under", "alpha", "beta"]


def test_list_entries_respects_gitignore(tmp_path):
    (tmp_path / ".gitignore").write_text("*.log\nout/\n")
    (tmp_path / "out").mkdir()
    (tmp_path / "run.log").write_text("log")
    (tmp_path / "main.py").write_text("pass")

    assert names(list_entries(tmp_path, show_hidden=False)) == ["main.py"]
    assert names(list_entries(tmp_path, show_hidden=True)) == ["out", ".gitignore", "main.py", "run.log"]


def test_list_entries_absolute_paths_are_unique(listing_dir):
    entries = list_entries(listing_dir, show_hidden=True)
    paths = [e.path for e in entries]

    assert len(paths) == len(set(paths))
    assert all(p.parent == listing_dir for p in paths)


def test_list_entries_missing_directory(tmp_path):
    with pytest.raises(OSError):
        list_entries(tmp_path / "nope", show_hidden=False)


def test_list_entries_drops_unreadable_metadata(tmp_path, monkeypatch):
    """An entry whose metadata cannot be interpreted is omitted, not fatal."""
    good = tmp_path / "good.txt"
    bad = tmp_path / "bad.txt"
    good.write_text("ok")
    bad.write_text("bad")
    os.utime(bad, (12345, 12345))

    class BrokenClock:
        @staticmethod
        def fromtimestamp(ts):
            if int(ts) == 12345:
                raise OverflowError("timestamp out of range")
            return datetime.fromtimestamp(ts)

    monkeypatch.setattr(core, "datetime", BrokenClock)

    assert names(list_entries(tmp_path, show_hidden=False)) == ["good.txt"]


def test_symlinked_directory_is_listed_as_file(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    (tmp_path / "link").symlink_to(real, target_is_directory=True)

    entries = {e.name: e for e in list_entries(tmp_path, show_hidden=False)}

    assert entries["real"].is_dir
    assert not entries["link"].is_dir


def test_calculate_dir_size_applies_policy(tmp_path):
    (tmp_path / "a.txt").write_bytes(b"x" * 100)
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "b.bin").write_bytes(b"x" * 50)
    (nested / ".secret").write_bytes(b"x" * 7)
    (tmp_path / ".gitignore").write_text("*.bin\n")

    rules = core.IgnoreRules(tmp_path)

    assert calculate_dir_size(tmp_path, show_hidden=False, ignore_rules=rules) == 100
    assert calculate_dir_size(tmp_path, show_hidden=True) == 100 + 50 + 7 + len("*.bin\n")


def test_list_entries_calculates_directory_sizes(tmp_path):
    sub = tmp_path / "sub"
    (sub / "deep").mkdir(parents=True)
    (sub / "one.txt").write_bytes(b"x" * 600)
    (sub / "deep" / "two.txt").write_bytes(b"x" * 900)

    entries = list_entries(tmp_path, show_hidden=False, calculate_sizes=True)

    assert entries[0].size_display == "1.5 kB"


@pytest.mark.parametrize("num_bytes,expected", [
    (0, "0 B"),
    (999, "999 B"),
    (1000, "1 kB"),
    (1500, "1.5 kB"),
    (1234567, "1.23 MB"),
    (5 * 10**9, "5 GB"),
])
def test_format_size(num_bytes, expected):
    assert format_size(num_bytes) == expected


def test_settings_from_arguments_prefers_cli(tmp_path):
    args = argparse.Namespace(
        long=True, tree=True, depth=2, all=False, git=True, calculate_sizes=False,
        color=None, no_icons=True, verbose=False,
    )
    config = {"color": "always", "icons": True, "time_format": "%Y", "ignore_patterns": ["*.tmp"]}

    settings = ListingSettings.from_arguments(args, config, tmp_path)

    assert settings.color == "always"
    assert settings.icons is False
    assert settings.max_depth == 2
    assert settings.time_format == "%Y"
    assert settings.ignore_patterns == ["*.tmp"]
