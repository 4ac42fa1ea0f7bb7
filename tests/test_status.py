"""Tests for the git status index."""

import subprocess
from pathlib import Path
from unittest.mock import Mock

import pytest

from lsgit import status as status_module
from lsgit.status import (
    NO_STATUS,
    StatusFlag,
    StatusIndex,
    StatusIndexError,
    StatusRecord,
    iter_porcelain_records,
    parse_status_code,
    status_to_record,
)


def test_status_precedence_staged_wins_over_untracked():
    """A staged modification outranks an untracked working flag."""
    record = status_to_record(StatusFlag.INDEX_MODIFIED | StatusFlag.WT_NEW)
    assert record == StatusRecord("M", "green")


def test_status_precedence_full_order():
    """Each flag beats every flag after it in the precedence list."""
    ordered = [
        (StatusFlag.INDEX_NEW, "A"),
        (StatusFlag.INDEX_MODIFIED, "M"),
        (StatusFlag.INDEX_DELETED, "D"),
        (StatusFlag.INDEX_RENAMED, "R"),
        (StatusFlag.INDEX_TYPECHANGE, "T"),
        (StatusFlag.WT_NEW, "?"),
        (StatusFlag.WT_MODIFIED, "M"),
        (StatusFlag.WT_DELETED, "D"),
        (StatusFlag.WT_RENAMED, "R"),
        (StatusFlag.WT_TYPECHANGE, "T"),
        (StatusFlag.IGNORED, "I"),
        (StatusFlag.CONFLICTED, "C"),
    ]
    for i, (flag, marker) in enumerate(ordered):
        combined = flag
        for lower, _ in ordered[i + 1:]:
            combined |= lower
        assert status_to_record(combined).marker == marker


def test_status_colors_distinguish_staged_and_working():
    assert status_to_record(StatusFlag.INDEX_MODIFIED).color == "green"
    assert status_to_record(StatusFlag.WT_MODIFIED).color == "yellow"
    assert status_to_record(StatusFlag.WT_NEW).color == "cyan"
    assert status_to_record(StatusFlag.WT_DELETED).color == "red"
    assert status_to_record(StatusFlag.IGNORED).color == "bright_black"


def test_status_none_is_blank():
    assert status_to_record(StatusFlag.NONE) is NO_STATUS
    assert NO_STATUS.is_blank


@pytest.mark.parametrize("code,expected", [
    ("??", StatusFlag.WT_NEW),
    ("!!", StatusFlag.IGNORED),
    ("UU", StatusFlag.CONFLICTED),
    ("AA", StatusFlag.CONFLICTED),
    ("A ", StatusFlag.INDEX_NEW),
    (" M", StatusFlag.WT_MODIFIED),
    ("MM", StatusFlag.INDEX_MODIFIED | StatusFlag.WT_MODIFIED),
    ("R ", StatusFlag.INDEX_RENAMED),
    ("AD", StatusFlag.INDEX_NEW | StatusFlag.WT_DELETED),
    (" T", StatusFlag.WT_TYPECHANGE),
])
def test_parse_status_code(code, expected):
    assert parse_status_code(code) == expected


def test_iter_porcelain_records_skips_rename_source():
    """Renames report the destination; the source token is consumed."""
    output = " M src/a.py\0R  new.py\0old.py\0?? notes.txt\0"
    assert list(iter_porcelain_records(output)) == [
        (" M", "src/a.py"),
        ("R ", "new.py"),
        ("??", "notes.txt"),
    ]


def test_from_porcelain_keys_are_canonical(tmp_path):
    (tmp_path / "a.txt").write_text("a")
    index = StatusIndex.from_porcelain(tmp_path, "?? a.txt\0")

    assert len(index) == 1
    assert index.lookup(tmp_path / "a.txt") == StatusRecord("?", "cyan")
    assert index.lookup(tmp_path / "missing.txt") is None


def test_lookup_through_symlinked_directory(tmp_path):
    """A path reached through a symlink resolves to the same key."""
    real_dir = tmp_path / "real"
    real_dir.mkdir()
    target = real_dir / "file.py"
    target.write_text("x")
    link = tmp_path / "link"
    link.symlink_to(real_dir, target_is_directory=True)

    index = StatusIndex()
    index.add(target, StatusFlag.WT_MODIFIED)

    assert index.lookup(link / "file.py") == StatusRecord("M", "yellow")


def test_fallback_key_is_not_matched_on_lookup(tmp_path):
    """Unresolvable paths are stored raw but never found on lookup."""
    deleted = tmp_path / "deleted.txt"
    index = StatusIndex()
    index.add(deleted, StatusFlag.WT_DELETED)

    assert len(index) == 1
    assert index.lookup(deleted) is None


def test_build_outside_working_tree_returns_none(tmp_path):
    assert StatusIndex.build(tmp_path) is None


def test_build_reports_git_states(git_repo):
    """Untracked, staged and modified files get their markers."""
    (git_repo / "untracked.txt").write_text("new")
    (git_repo / "staged.txt").write_text("staged")
    subprocess.run(["git", "add", "staged.txt"], cwd=git_repo, capture_output=True)
    (git_repo / "README.md").write_text("changed")
    nested = git_repo / "pkg" / "deep"
    nested.mkdir(parents=True)
    (nested / "inner.py").write_text("pass")

    index = StatusIndex.build(git_repo)

    assert index is not None
    assert index.lookup(git_repo / "untracked.txt").marker == "?"
    assert index.lookup(git_repo / "staged.txt") == StatusRecord("A", "green")
    assert index.lookup(git_repo / "README.md") == StatusRecord("M", "yellow")
    assert index.lookup(nested / "inner.py").marker == "?"


def test_build_from_subdirectory_uses_repo_root(git_repo):
    sub = git_repo / "sub"
    sub.mkdir()
    (sub / "x.txt").write_text("x")

    index = StatusIndex.build(sub)

    assert index.lookup(sub / "x.txt").marker == "?"


def test_build_without_git_executable(tmp_path, monkeypatch):
    """A missing git binary is reported as a StatusIndexError."""
    monkeypatch.setattr(subprocess, "run", Mock(side_effect=FileNotFoundError("git")))

    with pytest.raises(StatusIndexError):
        StatusIndex.build(tmp_path)


def test_build_status_failure(tmp_path, monkeypatch):
    """A failing status scan raises instead of returning an empty index."""
    results = iter([
        subprocess.CompletedProcess(args=[], returncode=0, stdout=f"{tmp_path}\n", stderr=""),
        subprocess.CompletedProcess(args=[], returncode=128, stdout="", stderr="fatal: broken"),
    ])
    monkeypatch.setattr(status_module, "run_git", lambda cwd, args: next(results))

    with pytest.raises(StatusIndexError, match="broken"):
        StatusIndex.build(tmp_path)


def test_find_repo_root_for_file_path(git_repo):
    assert status_module.find_repo_root(git_repo / "README.md").resolve() == Path(git_repo).resolve()
