"""Column width calculation and line rendering for lsgit."""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Union

from rich.text import Text

from .constants import (
    HEADER_COLOR,
    HEADER_DASH,
    HEADER_LINE,
    HEADER_NAME,
    HEADER_OWNER,
    HEADER_PERMISSIONS,
    HEADER_SIZE,
    HEADER_STATUS,
    HEADER_TIME,
    PERMISSIONS_WIDTH,
    PREFIX_EMPTY,
    PREFIX_LAST,
    PREFIX_MIDDLE,
    PREFIX_PASS,
    STATUS_WIDTH,
    TIME_WIDTH,
)
from .core import DisplayRecord, TreeNode

Listing = Sequence[Union[DisplayRecord, TreeNode]]


@dataclass(frozen=True)
class ColumnWidths:
    """Widths of the variable-width long format columns.

    Fields hold the longest value seen; the ``*_column`` properties add the
    minimum needed to fit each column title.
    """
    owner: int = 0
    size: int = 0
    time: int = 0

    @property
    def owner_column(self) -> int:
        return max(self.owner, len(HEADER_OWNER))

    @property
    def size_column(self) -> int:
        return max(self.size, len(HEADER_SIZE))

    @property
    def time_column(self) -> int:
        return max(self.time, TIME_WIDTH)


def iter_records(listing: Iterable[Union[DisplayRecord, TreeNode]]) -> Iterator[DisplayRecord]:
    """Yield every display record in a flat list or a tree, depth-first."""
    for item in listing:
        if isinstance(item, TreeNode):
            yield item.display
            yield from iter_records(item.children)
        else:
            yield item


def compute_widths(listing: Listing) -> ColumnWidths:
    """Compute column widths over a whole listing.

    Trees are measured at every depth, so a deep file aligns with the
    header and with top-level entries.

    Args:
        listing: Display records (flat mode) or tree nodes (tree mode).

    Returns:
        The frozen widths to use for every line of the listing.
    """
    owner = 0
    size = 0
    time = 0
    for record in iter_records(listing):
        owner = max(owner, len(record.owner))
        size = max(size, len(record.size))
        time = max(time, len(record.time))
    return ColumnWidths(owner=owner, size=size, time=time)


def format_name(record: DisplayRecord) -> Text:
    """Render the icon and name in the entry's color, with ``/`` for directories."""
    suffix = "/" if record.is_dir else ""
    return Text(f"{record.icon}{record.name}{suffix}", style=record.name_color)


def format_marker(record: DisplayRecord) -> Text:
    return Text(record.status_marker, style=record.status_color)


def render_header(widths: ColumnWidths) -> List[Text]:
    """Render the column titles and their underline."""
    titles = (
        f"{HEADER_PERMISSIONS:<{PERMISSIONS_WIDTH}} "
        f"{HEADER_OWNER.ljust(widths.owner_column)}  "
        f"{HEADER_SIZE.rjust(widths.size_column)} "
        f"{HEADER_TIME.ljust(widths.time_column)} "
        f"{HEADER_STATUS:<{STATUS_WIDTH}} "
        f"{HEADER_NAME}"
    )
    underline = (
        f"{HEADER_DASH * PERMISSIONS_WIDTH} "
        f"{HEADER_LINE * widths.owner_column}  "
        f"{HEADER_LINE * widths.size_column} "
        f"{HEADER_DASH * widths.time_column} "
        f"{HEADER_DASH * STATUS_WIDTH} "
        f"{HEADER_DASH * len(HEADER_NAME)}"
    )
    return [Text(titles, style=HEADER_COLOR), Text(underline, style=HEADER_COLOR)]


def format_long_fields(record: DisplayRecord, widths: ColumnWidths) -> Text:
    """Render the permission, owner, size, time and status columns."""
    line = Text(
        f"{record.permissions:<{PERMISSIONS_WIDTH}} "
        f"{record.owner.ljust(widths.owner_column)}  "
        f"{record.size.rjust(widths.size_column)} "
        f"{record.time.ljust(widths.time_column)} "
    )
    line.append_text(format_marker(record))
    line.append(" " * (STATUS_WIDTH - len(record.status_marker) + 1))
    return line


def render_flat_simple(records: Sequence[DisplayRecord]) -> List[Text]:
    lines = []
    for record in records:
        line = Text()
        line.append_text(format_marker(record))
        line.append(" ")
        line.append_text(format_name(record))
        lines.append(line)
    return lines


def render_flat_long(records: Sequence[DisplayRecord], widths: ColumnWidths) -> List[Text]:
    """Render a header and one aligned row per record; nothing for an empty listing."""
    if not records:
        return []

    lines = render_header(widths)
    for record in records:
        line = format_long_fields(record, widths)
        line.append_text(format_name(record))
        lines.append(line)
    return lines


def _walk_tree(nodes: Sequence[TreeNode], prefix: str = "") -> Iterator[tuple]:
    """Yield ``(node, connector_prefix)`` in depth-first pre-order."""
    count = len(nodes)
    for i, node in enumerate(nodes):
        is_last = i == count - 1
        pointer = PREFIX_LAST if is_last else PREFIX_MIDDLE
        yield node, prefix + pointer

        if node.children:
            extension = PREFIX_EMPTY if is_last else PREFIX_PASS
            yield from _walk_tree(node.children, prefix + extension)


def render_tree_simple(nodes: Sequence[TreeNode]) -> List[Text]:
    lines = []
    for node, tree_prefix in _walk_tree(nodes):
        line = Text(tree_prefix)
        line.append_text(format_marker(node.display))
        line.append(" ")
        line.append_text(format_name(node.display))
        lines.append(line)
    return lines


def render_tree_long(nodes: Sequence[TreeNode], widths: ColumnWidths) -> List[Text]:
    """Render the header, then each node's columns followed by its tree-prefixed name."""
    lines = render_header(widths)
    for node, tree_prefix in _walk_tree(nodes):
        line = format_long_fields(node.display, widths)
        line.append(tree_prefix)
        line.append_text(format_name(node.display))
        lines.append(line)
    return lines


def render_listing(listing: Listing, long_format: bool, tree: bool) -> List[Text]:
    """Render a listing in one of the four view combinations.

    Widths are computed once over the whole listing before any line is
    produced.

    Args:
        listing: Display records for flat mode, tree nodes for tree mode.
        long_format: Whether to use the long column layout.
        tree: Whether ``listing`` is a tree.

    Returns:
        Styled output lines.
    """
    if not long_format:
        return render_tree_simple(listing) if tree else render_flat_simple(listing)

    widths = compute_widths(listing)
    if tree:
        return render_tree_long(listing, widths)
    return render_flat_long(listing, widths)
