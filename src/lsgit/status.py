"""Git working tree status lookup.

Builds a one-shot index from canonical absolute paths to a status marker and
display color. The index is built once per run and is read-only afterwards.
"""

import logging
from dataclasses import dataclass
from enum import Flag, auto
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .utils import run_git

logger = logging.getLogger(__name__)


class StatusIndexError(Exception):
    """Raised when a working tree was found but its status could not be read."""


class StatusFlag(Flag):
    """Status bits reported for a single path."""

    NONE = 0
    INDEX_NEW = auto()
    INDEX_MODIFIED = auto()
    INDEX_DELETED = auto()
    INDEX_RENAMED = auto()
    INDEX_TYPECHANGE = auto()
    WT_NEW = auto()
    WT_MODIFIED = auto()
    WT_DELETED = auto()
    WT_RENAMED = auto()
    WT_TYPECHANGE = auto()
    IGNORED = auto()
    CONFLICTED = auto()


@dataclass(frozen=True)
class StatusRecord:
    """Marker character and color shown for a path.

    Attributes:
        marker: Single-character status code, ``" "`` when there is none.
        color: Rich color name used for the marker and the entry name.
    """
    marker: str
    color: str

    @property
    def is_blank(self) -> bool:
        return self.marker == " "


NO_STATUS = StatusRecord(" ", "default")

# Ordered from most to least significant; the first flag present wins.
STATUS_PRECEDENCE: List[Tuple[StatusFlag, StatusRecord]] = [
    (StatusFlag.INDEX_NEW, StatusRecord("A", "green")),
    (StatusFlag.INDEX_MODIFIED, StatusRecord("M", "green")),
    (StatusFlag.INDEX_DELETED, StatusRecord("D", "red")),
    (StatusFlag.INDEX_RENAMED, StatusRecord("R", "green")),
    (StatusFlag.INDEX_TYPECHANGE, StatusRecord("T", "green")),
    (StatusFlag.WT_NEW, StatusRecord("?", "cyan")),
    (StatusFlag.WT_MODIFIED, StatusRecord("M", "yellow")),
    (StatusFlag.WT_DELETED, StatusRecord("D", "red")),
    (StatusFlag.WT_RENAMED, StatusRecord("R", "yellow")),
    (StatusFlag.WT_TYPECHANGE, StatusRecord("T", "yellow")),
    (StatusFlag.IGNORED, StatusRecord("I", "bright_black")),
    (StatusFlag.CONFLICTED, StatusRecord("C", "red")),
]

_INDEX_CODES = {
    "A": StatusFlag.INDEX_NEW,
    "C": StatusFlag.INDEX_NEW,
    "M": StatusFlag.INDEX_MODIFIED,
    "D": StatusFlag.INDEX_DELETED,
    "R": StatusFlag.INDEX_RENAMED,
    "T": StatusFlag.INDEX_TYPECHANGE,
}

_WORKTREE_CODES = {
    "M": StatusFlag.WT_MODIFIED,
    "D": StatusFlag.WT_DELETED,
    "R": StatusFlag.WT_RENAMED,
    "T": StatusFlag.WT_TYPECHANGE,
}

_UNMERGED_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


def status_to_record(flags: StatusFlag) -> StatusRecord:
    """Resolve a set of status flags to the single record that is displayed.

    Args:
        flags: Combination of :class:`StatusFlag` bits for one path.

    Returns:
        The record of the highest-precedence flag present, or ``NO_STATUS``.
    """
    for flag, record in STATUS_PRECEDENCE:
        if flag in flags:
            return record
    return NO_STATUS


def parse_status_code(code: str) -> StatusFlag:
    """Translate a porcelain v1 ``XY`` code into status flags."""
    if code == "??":
        return StatusFlag.WT_NEW
    if code == "!!":
        return StatusFlag.IGNORED
    if code in _UNMERGED_CODES:
        return StatusFlag.CONFLICTED

    flags = StatusFlag.NONE
    index_code, worktree_code = code[0], code[1]
    flags |= _INDEX_CODES.get(index_code, StatusFlag.NONE)
    flags |= _WORKTREE_CODES.get(worktree_code, StatusFlag.NONE)
    return flags


def iter_porcelain_records(output: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(code, path)`` pairs from ``git status --porcelain=v1 -z`` output."""
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        code = token[:2]
        yield code, token[3:]

        # Renames and copies carry the source path as an extra token.
        if "R" in code or "C" in code:
            index += 1


def _canonical_key(path: Path) -> Path:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return path


def find_repo_root(path: Path) -> Optional[Path]:
    """Return the top of the working tree containing ``path``, if any.

    Raises:
        StatusIndexError: If the git executable cannot be run.
    """
    cwd = path if path.is_dir() else path.parent
    try:
        proc = run_git(cwd, ["rev-parse", "--show-toplevel"])
    except OSError as e:
        raise StatusIndexError(f"could not run git: {e}") from e

    top = proc.stdout.strip()
    if proc.returncode != 0 or not top:
        return None
    return Path(top)


class StatusIndex:
    """Mapping from canonical absolute path to :class:`StatusRecord`."""

    def __init__(self, statuses: Optional[Dict[Path, StatusFlag]] = None) -> None:
        self._statuses: Dict[Path, StatusFlag] = dict(statuses or {})

    def __len__(self) -> int:
        return len(self._statuses)

    @classmethod
    def build(cls, root_path: Path) -> Optional["StatusIndex"]:
        """Scan the working tree enclosing ``root_path``.

        Args:
            root_path: Any path inside the working tree.

        Returns:
            The populated index, or None when ``root_path`` is not inside a
            working tree.

        Raises:
            StatusIndexError: If git is unavailable or the status scan fails.
        """
        repo_root = find_repo_root(root_path)
        if repo_root is None:
            logger.debug(f"No git working tree found for {root_path}")
            return None

        try:
            proc = run_git(
                repo_root,
                ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
            )
        except OSError as e:
            raise StatusIndexError(f"could not run git: {e}") from e

        if proc.returncode != 0:
            message = proc.stderr.strip() or f"exit code {proc.returncode}"
            raise StatusIndexError(f"git status failed: {message}")

        index = cls.from_porcelain(repo_root, proc.stdout)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Indexed {len(index)} git status entries under {repo_root}")
        return index

    @classmethod
    def from_porcelain(cls, repo_root: Path, output: str) -> "StatusIndex":
        """Build an index from raw porcelain output relative to ``repo_root``."""
        index = cls()
        for code, rel_path in iter_porcelain_records(output):
            if rel_path:
                index.add(repo_root / rel_path, parse_status_code(code))
        return index

    def add(self, path: Path, flags: StatusFlag) -> None:
        """Insert ``path`` keyed canonically, or by the raw path if it cannot be resolved."""
        key = _canonical_key(path)
        self._statuses[key] = self._statuses.get(key, StatusFlag.NONE) | flags

    def lookup(self, path: Path) -> Optional[StatusRecord]:
        """Return the status of ``path``.

        The probe path is canonicalized first; a path that cannot be
        resolved is treated as unmatched, with no raw-path fallback.
        """
        try:
            key = path.resolve(strict=True)
        except (OSError, RuntimeError):
            return None

        flags = self._statuses.get(key)
        if flags is None:
            return None
        return status_to_record(flags)
