"""Utility functions for lsgit."""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

SIZE_UNITS = ["kB", "MB", "GB", "TB", "PB", "EB"]


def format_size(num_bytes: int) -> str:
    """Format a byte count using decimal (SI) units.

    Args:
        num_bytes: Size in bytes.

    Returns:
        A human-readable string such as ``"10 B"`` or ``"1.5 kB"``.
    """
    if num_bytes < 1000:
        return f"{num_bytes} B"

    value = float(num_bytes)
    unit = SIZE_UNITS[0]
    for unit in SIZE_UNITS:
        value /= 1000
        if value < 1000:
            break

    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {unit}"


def run_git(cwd: Path, args: List[str]) -> subprocess.CompletedProcess:
    """Run a git subcommand in ``cwd`` and capture its output.

    Args:
        cwd: Directory passed to ``git -C``.
        args: Arguments following ``git -C <cwd>``.

    Returns:
        The completed process; output is decoded as UTF-8 with replacement.

    Raises:
        FileNotFoundError: If the git executable is not installed.
    """
    return subprocess.run(
        ["git", "-C", str(cwd), *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )


def setup_logger(name: str, verbose: bool = False) -> logging.Logger:
    """Set up and return a configured logger instance.
    
    Args:
        name: Logger name.
        verbose: If True, sets log level to DEBUG.

    Returns:
        Configured logging.Logger instance.
    """
    logger = logging.getLogger(name)
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(levelname)s: %(message)s')
    
    if not logger.handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def describe_error(error: Optional[BaseException]) -> str:
    """Return a short one-line description of an exception for log output."""
    if error is None:
        return "unknown error"
    if isinstance(error, OSError) and error.strerror:
        target = f": {error.filename}" if error.filename else ""
        return f"{error.strerror}{target}"
    return str(error) or error.__class__.__name__
