"""Resolve display records and build flat listings and trees."""

import logging
import math
from pathlib import Path
from typing import List, Optional

from .constants import DIRECTORY_COLOR, FILE_COLOR
from .core import DisplayRecord, FileEntry, TreeNode, list_entries
from .icons import get_icon
from .ignore import IgnoreRules
from .platform import format_permissions, get_owner
from .status import NO_STATUS, StatusIndex, StatusRecord

logger = logging.getLogger(__name__)


def name_color_for(is_dir: bool, status: StatusRecord) -> str:
    """Status color wins; otherwise directories are blue and files default."""
    if not status.is_blank:
        return status.color
    return DIRECTORY_COLOR if is_dir else FILE_COLOR


def resolve_display(
    entry: FileEntry,
    status_index: Optional[StatusIndex],
    time_format: str = "%d-%m-%Y %H:%M",
    icons: bool = True
) -> DisplayRecord:
    """Project a file entry onto the strings the renderer prints.

    Args:
        entry: Entry produced by :func:`list_entries`.
        status_index: Git status index, or None when markers are disabled.
        time_format: strftime format for the modified time.
        icons: Whether to resolve a file type icon.

    Returns:
        The resolved DisplayRecord.
    """
    status = NO_STATUS
    if status_index is not None:
        status = status_index.lookup(entry.path) or NO_STATUS

    return DisplayRecord(
        permissions=format_permissions(entry.stat_result),
        owner=get_owner(entry.stat_result),
        size=entry.size_display,
        time=entry.modified_time.strftime(time_format),
        status_marker=status.marker,
        status_color=status.color,
        icon=get_icon(entry.name, entry.is_dir) if icons else "",
        name=entry.name,
        name_color=name_color_for(entry.is_dir, status),
        is_dir=entry.is_dir,
    )


def build_flat(
    directory: Path,
    show_hidden: bool = False,
    calculate_sizes: bool = False,
    status_index: Optional[StatusIndex] = None,
    ignore_rules: Optional[IgnoreRules] = None,
    time_format: str = "%d-%m-%Y %H:%M",
    icons: bool = True
) -> List[DisplayRecord]:
    """List one directory level and resolve a display record per entry.

    Raises:
        OSError: If ``directory`` cannot be opened.
    """
    entries = list_entries(directory, show_hidden, calculate_sizes, ignore_rules)
    return [resolve_display(e, status_index, time_format, icons) for e in entries]


def build_tree(
    root: Path,
    current_depth: int = 0,
    max_depth: Optional[int] = None,
    show_hidden: bool = False,
    calculate_sizes: bool = False,
    status_index: Optional[StatusIndex] = None,
    ignore_rules: Optional[IgnoreRules] = None,
    time_format: str = "%d-%m-%Y %H:%M",
    icons: bool = True
) -> List[TreeNode]:
    """Recursively build annotated tree nodes below ``root``.

    Nodes at ``current_depth >= max_depth`` are not expanded. An unreadable
    subdirectory keeps its own node but has no children.

    Args:
        root: Directory whose children form this level.
        current_depth: Depth of ``root``'s children, 0 for the top level.
        max_depth: Depth bound; None means unlimited.
        show_hidden: Include dotfiles and bypass ignore rules.
        calculate_sizes: Sum directory sizes recursively.
        status_index: Git status index shared by the whole build.
        ignore_rules: Ignore rules shared by the whole build.
        time_format: strftime format for the modified time.
        icons: Whether to resolve file type icons.

    Returns:
        Ordered nodes for this level.

    Raises:
        OSError: If ``root`` cannot be opened.
    """
    limit = math.inf if max_depth is None else max_depth
    if current_depth >= limit:
        return []

    if not show_hidden and ignore_rules is None:
        ignore_rules = IgnoreRules(root)

    nodes: List[TreeNode] = []
    for entry in list_entries(root, show_hidden, calculate_sizes, ignore_rules):
        display = resolve_display(entry, status_index, time_format, icons)

        children: List[TreeNode] = []
        if entry.is_dir:
            try:
                children = build_tree(
                    entry.path,
                    current_depth + 1,
                    max_depth,
                    show_hidden,
                    calculate_sizes,
                    status_index,
                    ignore_rules,
                    time_format,
                    icons,
                )
            except OSError as e:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(f"Skipping contents of {entry.path}: {e}")

        nodes.append(TreeNode(display=display, children=children))

    return nodes
