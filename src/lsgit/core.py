"""Core data types and single-level directory enumeration."""

import logging
import os
import stat
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DEFAULT_CONFIG
from .constants import DIR_SIZE_PLACEHOLDER
from .ignore import IgnoreRules
from .utils import format_size

logger = logging.getLogger(__name__)


@dataclass
class ListingSettings:
    """Container for listing execution parameters.

    Attributes:
        start_path: Path to the directory being listed.
        long_format: Whether to show the multi-column long layout.
        tree: Whether to recurse and draw a tree instead of a flat listing.
        max_depth: Maximum recursion depth for tree mode, None for unlimited.
        show_hidden: Whether to include dotfiles and bypass ignore rules.
        git: Whether to build the git status index and show markers.
        calculate_sizes: Whether to sum directory sizes recursively.
        color: Color mode, one of ``auto``, ``always`` or ``never``.
        icons: Whether to show file type icons.
        time_format: strftime format for the modified time column.
        ignore_patterns: Extra gitignore-syntax patterns relative to start_path.
        verbose: Whether to show debug logs.
    """
    start_path: Path
    long_format: bool = False
    tree: bool = False
    max_depth: Optional[int] = None
    show_hidden: bool = False
    git: bool = False
    calculate_sizes: bool = False
    color: str = "auto"
    icons: bool = True
    time_format: str = "%d-%m-%Y %H:%M"
    ignore_patterns: List[str] = field(default_factory=list)
    verbose: bool = False

    @classmethod
    def from_arguments(cls, args: Any, config: Dict[str, Any], start_path: Path) -> "ListingSettings":
        """Factory to create settings from CLI args and config.

        Args:
            args: Parsed CLI arguments from argparse.
            config: Loaded configuration dictionary.
            start_path: Resolved path to begin listing.

        Returns:
            ListingSettings instance with all parameters resolved.
        """
        return cls(
            start_path=start_path,
            long_format=args.long,
            tree=args.tree,
            max_depth=args.depth,
            show_hidden=args.all,
            git=args.git,
            calculate_sizes=args.calculate_sizes,
            color=args.color or config.get("color", "auto"),
            icons=False if args.no_icons else config.get("icons", True),
            time_format=config.get("time_format", DEFAULT_CONFIG["time_format"]),
            ignore_patterns=list(config.get("ignore_patterns", [])),
            verbose=args.verbose,
        )


@dataclass(frozen=True)
class FileEntry:
    """A directory child with the metadata needed for display.

    Attributes:
        path: Absolute path of the entry.
        is_dir: Whether the entry is a directory (symlinks are never directories).
        size_display: Human-readable size, or a placeholder for directories.
        modified_time: Local modification time.
        stat_result: The ``lstat`` result the entry was built from.
    """
    path: Path
    is_dir: bool
    size_display: str
    modified_time: datetime
    stat_result: os.stat_result

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class DisplayRecord:
    """Renderer-ready strings for one entry, resolved once per listing."""
    permissions: str
    owner: str
    size: str
    time: str
    status_marker: str
    status_color: str
    icon: str
    name: str
    name_color: str
    is_dir: bool


@dataclass
class TreeNode:
    """A display record plus its ordered children (empty for files)."""
    display: DisplayRecord
    children: List["TreeNode"] = field(default_factory=list)


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def is_excluded(
    path: Path,
    is_dir: bool,
    show_hidden: bool,
    ignore_rules: Optional[IgnoreRules]
) -> bool:
    """Check whether an entry is filtered out by the hidden/ignore policy.

    Args:
        path: Absolute path of the entry.
        is_dir: Whether the entry is a directory.
        show_hidden: When True nothing is excluded.
        ignore_rules: Rules to consult; None disables ignore-file filtering.

    Returns:
        True if the entry should be omitted.
    """
    if show_hidden:
        return False
    if is_hidden(path.name):
        return True
    if ignore_rules is not None:
        return ignore_rules.is_ignored(path, is_dir)
    return False


def calculate_dir_size(
    path: Path,
    show_hidden: bool,
    ignore_rules: Optional[IgnoreRules] = None
) -> int:
    """Sum the sizes of all regular files reachable under ``path``.

    Applies the same hidden/ignore policy as :func:`list_entries`. Symlinks
    are not followed and unreadable subdirectories are skipped.

    Args:
        path: Directory to measure.
        show_hidden: Whether hidden and ignored entries are counted.
        ignore_rules: Ignore rules for the listing.

    Returns:
        Total size in bytes.
    """
    total = 0
    pending = [path]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError:
            continue

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError:
                continue

            entry_path = Path(entry.path)
            if is_excluded(entry_path, is_dir, show_hidden, ignore_rules):
                continue

            if is_dir:
                pending.append(entry_path)
            elif is_file:
                try:
                    total += entry.stat(follow_symlinks=False).st_size
                except OSError:
                    continue
    return total


def sort_entries(entries: List[FileEntry]) -> List[FileEntry]:
    """Order directories before files, then by case-sensitive name."""
    return sorted(entries, key=lambda e: (not e.is_dir, e.name))


def list_entries(
    directory: Path,
    show_hidden: bool,
    calculate_sizes: bool = False,
    ignore_rules: Optional[IgnoreRules] = None
) -> List[FileEntry]:
    """List the immediate children of ``directory``.

    Args:
        directory: Directory to enumerate.
        show_hidden: Include dotfiles and bypass ignore rules.
        calculate_sizes: Replace the directory size placeholder with the
            recursive size of the subtree.
        ignore_rules: Rules applied when ``show_hidden`` is False; built for
            ``directory`` when omitted.

    Returns:
        Sorted entries, directories first.

    Raises:
        OSError: If ``directory`` itself cannot be opened.
    """
    if not show_hidden and ignore_rules is None:
        ignore_rules = IgnoreRules(directory)

    with os.scandir(directory) as it:
        dir_entries = list(it)

    results: List[FileEntry] = []
    for dir_entry in dir_entries:
        entry_path = Path(dir_entry.path)
        try:
            st = dir_entry.stat(follow_symlinks=False)
            modified_time = datetime.fromtimestamp(st.st_mtime)
        except (OSError, OverflowError, ValueError) as e:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Skipping {entry_path}: {e}")
            continue

        is_dir = stat.S_ISDIR(st.st_mode)
        if is_excluded(entry_path, is_dir, show_hidden, ignore_rules):
            continue

        if not is_dir:
            size_display = format_size(st.st_size)
        elif calculate_sizes:
            size_display = format_size(calculate_dir_size(entry_path, show_hidden, ignore_rules))
        else:
            size_display = DIR_SIZE_PLACEHOLDER

        results.append(FileEntry(
            path=entry_path,
            is_dir=is_dir,
            size_display=size_display,
            modified_time=modified_time,
            stat_result=st,
        ))

    return sort_entries(results)
