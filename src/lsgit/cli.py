"""Command line interface for lsgit."""

import argparse
from typing import List, Optional

from .constants import COLOR_MODES


def non_negative_int(value: str) -> int:
    """argparse type for depth values."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"depth must be >= 0, got {number}")
    return number


def get_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        The configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="lsgit",
        description="lsgit: directory listing with git status, icons and trees.",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("path", nargs="?", default=".", help="Directory to list")

    view_group = parser.add_argument_group("View Options")
    view_group.add_argument("-l", "--long", action="store_true", help="Long format with columns")
    view_group.add_argument("-t", "--tree", action="store_true", help="Recursive tree view")
    view_group.add_argument(
        "--depth", type=non_negative_int, default=None, help="Max tree depth (requires --tree)"
    )
    view_group.add_argument(
        "--color", choices=COLOR_MODES, default=None, help="Color output (default: auto)"
    )
    view_group.add_argument("--no-icons", action="store_true", help="Hide file type icons")

    filter_group = parser.add_argument_group("Content Options")
    filter_group.add_argument(
        "-a", "--all", action="store_true", help="Show hidden entries and ignore .gitignore"
    )
    filter_group.add_argument("--git", action="store_true", help="Show git status markers")
    filter_group.add_argument(
        "--calculate-sizes",
        action="store_true",
        help="Sum directory sizes recursively (requires --long)"
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logs")
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse and cross-validate command-line arguments.

    Args:
        argv: Argument list, defaults to ``sys.argv[1:]``.

    Returns:
        The parsed argparse Namespace.
    """
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.depth is not None and not args.tree:
        parser.error("--depth requires --tree")
    if args.calculate_sizes and not args.long:
        parser.error("--calculate-sizes requires --long")

    return args
