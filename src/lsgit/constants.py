"""Constants for the lsgit application."""

# --- Tree drawing ---
PREFIX_MIDDLE = "├── "
PREFIX_LAST = "└── "
PREFIX_PASS = "│   "
PREFIX_EMPTY = "    "

# Config file
CONFIG_FILENAME = ".lsgit.json"

# --- Long format columns ---
PERMISSIONS_WIDTH = 11
TIME_WIDTH = 16
STATUS_WIDTH = 3

HEADER_PERMISSIONS = "Permissions"
HEADER_OWNER = "Owner"
HEADER_SIZE = "Size"
HEADER_TIME = "Last Modified"
HEADER_STATUS = "Git"
HEADER_NAME = "Name"

HEADER_DASH = "-"
HEADER_LINE = "─"

# Placeholder size for directories when sizes are not calculated
DIR_SIZE_PLACEHOLDER = "-"

# --- Colors (rich color names) ---
HEADER_COLOR = "green"
DIRECTORY_COLOR = "blue"
FILE_COLOR = "default"
COLOR_MODES = ("auto", "always", "never")
