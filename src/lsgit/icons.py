"""File type icons (Nerd Font glyphs) keyed by name and extension."""

from pathlib import PurePath

DIRECTORY_ICON = " "
DEFAULT_FILE_ICON = " "
GIT_ICON = " "

NAME_ICONS = {
    "Cargo.lock": " ",
    "Dockerfile": " ",
    "LICENSE": " ",
    "Makefile": " ",
    "poetry.lock": " ",
    "uv.lock": " ",
}

EXTENSION_ICONS = {
    ".c": " ",
    ".cfg": " ",
    ".css": " ",
    ".go": " ",
    ".h": " ",
    ".html": " ",
    ".ini": " ",
    ".java": " ",
    ".js": " ",
    ".json": " ",
    ".lock": " ",
    ".md": " ",
    ".py": " ",
    ".rs": " ",
    ".sh": " ",
    ".toml": " ",
    ".ts": " ",
    ".txt": " ",
    ".yaml": " ",
    ".yml": " ",
}


def get_icon_for_file(file_name: str) -> str:
    """Return the icon for a file, falling back to a generic file glyph."""
    if file_name in NAME_ICONS:
        return NAME_ICONS[file_name]
    if file_name.startswith(".git"):
        return GIT_ICON
    return EXTENSION_ICONS.get(PurePath(file_name).suffix.lower(), DEFAULT_FILE_ICON)


def get_icon(file_name: str, is_dir: bool) -> str:
    if is_dir:
        return DIRECTORY_ICON
    return get_icon_for_file(file_name)
