"""Standardize the public API for the lsgit package."""

from .builder import build_flat, build_tree, resolve_display
from .cli import get_parser, parse_arguments
from .config import DEFAULT_CONFIG, load_config, validate_config
from .constants import CONFIG_FILENAME, PREFIX_EMPTY, PREFIX_LAST, PREFIX_MIDDLE, PREFIX_PASS
from .core import DisplayRecord, FileEntry, ListingSettings, TreeNode, calculate_dir_size, list_entries
from .engine import ListingEngine
from .formatters import ColumnWidths, compute_widths, render_listing
from .ignore import IgnoreRules
from .status import StatusFlag, StatusIndex, StatusIndexError, StatusRecord, status_to_record

__version__ = "0.3.0"

__all__ = [
    "get_parser",
    "parse_arguments",
    "load_config",
    "validate_config",
    "DEFAULT_CONFIG",
    "CONFIG_FILENAME",
    "PREFIX_EMPTY",
    "PREFIX_LAST",
    "PREFIX_MIDDLE",
    "PREFIX_PASS",
    "FileEntry",
    "DisplayRecord",
    "TreeNode",
    "ListingSettings",
    "list_entries",
    "calculate_dir_size",
    "IgnoreRules",
    "StatusFlag",
    "StatusIndex",
    "StatusIndexError",
    "StatusRecord",
    "status_to_record",
    "resolve_display",
    "build_flat",
    "build_tree",
    "ColumnWidths",
    "compute_widths",
    "render_listing",
    "ListingEngine",
]
